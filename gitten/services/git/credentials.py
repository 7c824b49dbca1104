"""Credential resolution for remote transports.

SSH key authentication is the only supported mechanism: when a remote asks
for an SSH key and its URL names a user, the user's default private key is
offered. There is no password or token flow.
"""

import os
import shlex
from dataclasses import dataclass
from enum import Flag, auto
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from gitten.constants import DEFAULT_SSH_KEY
from gitten.exceptions import NoCredentialAvailableError


class CredentialType(Flag):
    """Authentication methods a transport may request."""
    NONE = 0
    SSH_KEY = auto()
    USER_PASS_PLAINTEXT = auto()


@dataclass(frozen=True)
class SshKeyCredential:
    """A username plus the private key file offered to the SSH transport."""
    username: str
    private_key: Path

    def ssh_command(self) -> str:
        """Value for GIT_SSH_COMMAND that makes git use this key."""
        return f"ssh -i {shlex.quote(str(self.private_key))} -o IdentitiesOnly=yes"


@dataclass(frozen=True)
class RemoteUrl:
    """The parts of a remote URL that matter for authentication."""
    url: str
    username: Optional[str]
    requested_types: CredentialType


def default_private_key() -> Path:
    return Path(os.path.expanduser(os.path.join(*DEFAULT_SSH_KEY)))


def parse_remote_url(url: str) -> RemoteUrl:
    """
    Work out which credential types a remote URL will ask for.

    Handles ``ssh://user@host/path``, scp-like ``user@host:path``,
    ``http(s)://`` and local paths or ``file://`` URLs (no credentials).

    Args:
        url: Remote URL as configured in the repository

    Returns:
        RemoteUrl with the URL user and requested credential types
    """
    if "://" in url:
        parsed = urlparse(url)
        scheme = parsed.scheme.lower()
        if "ssh" in scheme:
            return RemoteUrl(url, parsed.username, CredentialType.SSH_KEY)
        if scheme in ("http", "https"):
            return RemoteUrl(url, parsed.username, CredentialType.USER_PASS_PLAINTEXT)
        return RemoteUrl(url, None, CredentialType.NONE)

    # scp-like syntax: [user@]host:path, where the colon comes before any slash
    host_part, sep, _ = url.partition(":")
    if sep and "/" not in host_part and len(host_part) > 1:
        user, at, _ = host_part.rpartition("@")
        return RemoteUrl(url, user if at else None, CredentialType.SSH_KEY)

    return RemoteUrl(url, None, CredentialType.NONE)


def resolve_credentials(
    url_user: Optional[str],
    requested_types: CredentialType,
    key_path: Optional[str] = None,
) -> SshKeyCredential:
    """
    Supply a credential for a transport that asked for one.

    Args:
        url_user: Username embedded in the remote URL, if any
        requested_types: Credential types the transport accepts
        key_path: Private key to offer instead of ~/.ssh/id_rsa

    Returns:
        SshKeyCredential for the URL user

    Raises:
        NoCredentialAvailableError: No username, or SSH keys not accepted
    """
    if not url_user:
        raise NoCredentialAvailableError()

    if requested_types & CredentialType.SSH_KEY:
        private_key = Path(os.path.expanduser(key_path)) if key_path else default_private_key()
        return SshKeyCredential(url_user, private_key)

    raise NoCredentialAvailableError()
