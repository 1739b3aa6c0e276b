"""Data models returned by AzureBackend itself."""

from dataclasses import dataclass


@dataclass
class BackendStatus:
    """Connectivity and authentication status of the backend.

    Attributes:
        auth_status: True when the current token identifies a user
        api_status: True when the remote API is considered available
        status_page: URL of the remote's status page, if any
    """

    auth_status: bool
    api_status: bool = True
    status_page: str = ""


@dataclass
class AuthenticatedUser:
    """The signed-in user, as reported back to the editor."""

    id: str
    name: str
    email: str
    token: str
