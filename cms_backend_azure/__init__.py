"""Azure DevOps git backend with an editorial workflow for content editors.

Example:
    >>> from cms_backend_azure import AzureBackend, Authenticator, ConfigLoader
    >>> backend = AzureBackend(ConfigLoader.load("config.yml"), api_factory=client_factory)
    >>> backend.authenticate(Authenticator().get_credentials())
"""

from cms_backend_azure.backend import API_NAME, AzureBackend
from cms_backend_azure.config import BackendConfig, ConfigError, ConfigLoader
from cms_backend_azure.logging_config import configure_logging
from cms_backend_azure.models import AuthenticatedUser, BackendStatus
from cms_backend_azure.vcs_client import (
    APIError,
    Authenticator,
    BackendError,
    Credentials,
    NotAuthenticatedError,
    NotFoundError,
    VersionControlAPI,
)
from cms_backend_azure.workflow import LockAcquisitionError, MissingEntryIdentifierError

__all__ = [
    "API_NAME",
    "APIError",
    "AuthenticatedUser",
    "Authenticator",
    "AzureBackend",
    "BackendConfig",
    "BackendError",
    "BackendStatus",
    "ConfigError",
    "ConfigLoader",
    "Credentials",
    "LockAcquisitionError",
    "MissingEntryIdentifierError",
    "NotAuthenticatedError",
    "NotFoundError",
    "VersionControlAPI",
    "configure_logging",
]
