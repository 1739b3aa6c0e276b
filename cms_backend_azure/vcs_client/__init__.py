"""Version-control API client interface.

This package defines what the backend needs from a remote git hosting API
(the VersionControlAPI protocol and its value types), the error hierarchy of
the library, and token credential loading. An in-memory implementation of
the protocol lives in cms_backend_azure.vcs_client.memory_api.
"""

from .errors import (
    BackendError,
    APIError,
    NotFoundError,
    InvalidCredentialsError,
    NotAuthenticatedError,
)
from .auth import Authenticator, Credentials
from .models import CommitAuthor, FileMetadata, RemoteFile, StatusRecord, User
from .protocol import ApiConfig, VersionControlAPI

__all__ = [
    # Errors
    "BackendError",
    "APIError",
    "NotFoundError",
    "InvalidCredentialsError",
    "NotAuthenticatedError",
    # Auth
    "Authenticator",
    "Credentials",
    # Models
    "CommitAuthor",
    "FileMetadata",
    "RemoteFile",
    "StatusRecord",
    "User",
    # Interface
    "ApiConfig",
    "VersionControlAPI",
]
