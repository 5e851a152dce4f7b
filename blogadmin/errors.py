from typing import Optional


class BlogAdminError(Exception):
    """Base class for every error a post store or the admin controller surfaces."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(BlogAdminError):
    """A required field is empty. Raised before any network call."""


class AuthError(BlogAdminError):
    """The remote API rejected the credential."""


class ConflictError(BlogAdminError):
    """The revision handle is stale, or the file already exists on create."""


class RemoteError(BlogAdminError):
    """Any other non-success response from the remote API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(BlogAdminError):
    """Network-level failure talking to the remote API."""
