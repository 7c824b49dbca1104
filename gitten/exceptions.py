"""Custom exceptions for gitten"""

from typing import Optional


class GittenError(Exception):
    """Base exception for all gitten errors."""
    pass


class WorkspaceScanError(GittenError):
    """Exception raised when the workspace root cannot be listed."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        self.message = message

        error_msg = f"Could not list workspace '{path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class GitOperationError(GittenError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, ref: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.ref = ref
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if ref:
            error_msg += f" for '{ref}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class NotARepositoryError(GitOperationError):
    """Exception raised when a path is not a git working copy."""

    def __init__(self, path: str):
        super().__init__("open", path, "Not a repository")


class RefNotFoundError(GitOperationError):
    """Exception raised when a remote, branch or tag cannot be resolved."""

    def __init__(self, operation: str, ref: str, message: str = "Reference not found"):
        super().__init__(operation, ref, message)


class NetworkError(GitOperationError):
    """Exception raised when a remote cannot be reached."""
    pass


class AuthError(NetworkError):
    """Exception raised when a remote rejects our credentials."""
    pass


class NoCredentialAvailableError(AuthError):
    """Exception raised when no credential can be offered for a remote."""

    def __init__(self, message: str = "No credential option available"):
        super().__init__("authenticate", message=message)


class InvalidCommandError(GittenError):
    """Exception raised for unknown verbs or missing command arguments."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
