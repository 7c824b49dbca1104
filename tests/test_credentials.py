"""Tests for remote URL parsing and credential resolution"""

from pathlib import Path

import pytest

from gitten.exceptions import AuthError, NoCredentialAvailableError
from gitten.services.git.credentials import (
    CredentialType,
    default_private_key,
    parse_remote_url,
    resolve_credentials,
)


class TestParseRemoteUrl:
    """Test which credential types a remote will ask for."""

    def test_ssh_url(self):
        url = parse_remote_url("ssh://git@example.com/team/project.git")
        assert url.username == "git"
        assert url.requested_types == CredentialType.SSH_KEY

    def test_scp_like_url(self):
        url = parse_remote_url("git@github.com:team/project.git")
        assert url.username == "git"
        assert url.requested_types == CredentialType.SSH_KEY

    def test_scp_like_url_without_user(self):
        url = parse_remote_url("github.com:team/project.git")
        assert url.username is None
        assert url.requested_types == CredentialType.SSH_KEY

    def test_https_url(self):
        url = parse_remote_url("https://github.com/team/project.git")
        assert url.requested_types == CredentialType.USER_PASS_PLAINTEXT

    def test_local_path(self):
        url = parse_remote_url("/srv/git/project.git")
        assert url.username is None
        assert url.requested_types == CredentialType.NONE

    def test_file_url(self):
        assert parse_remote_url("file:///srv/git/project.git").requested_types == CredentialType.NONE


class TestResolveCredentials:
    """Test supplying a key for a transport that asked for one."""

    def test_default_key_for_url_user(self):
        credential = resolve_credentials("git", CredentialType.SSH_KEY)

        assert credential.username == "git"
        assert credential.private_key == default_private_key()
        assert credential.private_key.parts[-2:] == (".ssh", "id_rsa")

    def test_configured_key(self, temp_dir):
        key = temp_dir / "deploy_key"

        credential = resolve_credentials("git", CredentialType.SSH_KEY, str(key))

        assert credential.private_key == Path(key)
        assert str(key) in credential.ssh_command()

    def test_missing_user(self):
        with pytest.raises(NoCredentialAvailableError):
            resolve_credentials(None, CredentialType.SSH_KEY)

    def test_password_only_transport(self):
        with pytest.raises(NoCredentialAvailableError) as exc_info:
            resolve_credentials("alice", CredentialType.USER_PASS_PLAINTEXT)

        assert isinstance(exc_info.value, AuthError)
        assert "No credential option available" in str(exc_info.value)
