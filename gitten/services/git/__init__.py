"""Git-related services for gitten."""

from .credentials import CredentialType, SshKeyCredential, parse_remote_url, resolve_credentials
from .repository import RepositoryQueries
from .sync import SyncEngine, translate_git_error

__all__ = [
    "CredentialType",
    "SshKeyCredential",
    "parse_remote_url",
    "resolve_credentials",
    "RepositoryQueries",
    "SyncEngine",
    "translate_git_error",
]
