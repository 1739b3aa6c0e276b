"""Typed exception hierarchy for version-control client errors.

This module defines the root exception of the backend and the errors raised
by (or on behalf of) the remote version-control API client. Every exception
raised by this library inherits from BackendError so callers can catch
application-level failures in one place.
"""

from typing import Optional


class BackendError(Exception):
    """Base exception for all cms-backend-azure errors."""
    pass


class APIError(BackendError):
    """Raised when a remote API call fails.

    Attributes:
        status_code: HTTP status code reported by the remote, if known
        api_name: Name of the remote API (for messages)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        api_name: str = "Azure DevOps",
    ):
        if status_code is not None:
            full_message = f"{api_name} API error ({status_code}): {message}"
        else:
            full_message = f"{api_name} API error: {message}"
        super().__init__(full_message)
        self.message = message
        self.status_code = status_code
        self.api_name = api_name


class NotFoundError(APIError):
    """Raised when a file, branch or entry does not exist on the remote."""

    def __init__(self, resource: str, api_name: str = "Azure DevOps"):
        super().__init__(f"{resource} not found", status_code=404, api_name=api_name)
        self.resource = resource


class InvalidCredentialsError(BackendError):
    """Raised when an access token is missing or rejected."""

    def __init__(self, endpoint: str):
        super().__init__(f"Access token is missing or invalid (endpoint: {endpoint})")
        self.endpoint = endpoint


class NotAuthenticatedError(BackendError):
    """Raised when a remote operation is attempted before authenticate()."""

    def __init__(self, operation: str):
        super().__init__(
            f"Cannot {operation}: backend is not authenticated. Call authenticate() first."
        )
        self.operation = operation
