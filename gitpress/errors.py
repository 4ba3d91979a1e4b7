"""
Error taxonomy shared by the GitHub integration, sessions and post submission.

Third-party exceptions (PyGithub, requests) are translated into these types at
the integration boundary.
"""

from typing import Dict, List, Optional


class GitPressError(Exception):
    """Base class for all application errors."""


class ConfigurationError(GitPressError):
    """A required configuration value is missing."""


class ValidationError(GitPressError):
    """A post draft failed validation."""

    def __init__(self, message: str, field_errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.field_errors = field_errors or {}


class AuthenticationError(GitPressError):
    """No session, or a session without a stored access token."""


class NetworkError(GitPressError):
    """Transport-level failure talking to GitHub."""


class RemoteAPIError(GitPressError):
    """GitHub answered with a non-2xx status or a malformed body."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class AuthExchangeError(RemoteAPIError):
    """The OAuth code could not be exchanged for an access token."""


class ProfileFetchError(RemoteAPIError):
    """The authenticated user's profile could not be fetched."""


class ShaLookupError(RemoteAPIError):
    """The current blob SHA of a path could not be determined."""


class CommitError(RemoteAPIError):
    """GitHub rejected the file write."""


class CommitConflictError(CommitError):
    """The write was rejected because the file changed since its SHA was read."""
