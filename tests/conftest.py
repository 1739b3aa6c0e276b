"""Root pytest configuration for all tests.

Shared fixtures build backends on top of the in-memory API or a Mock client.
"""

from unittest.mock import Mock

import pytest

from cms_backend_azure.backend import AzureBackend
from cms_backend_azure.config.models import BackendConfig
from cms_backend_azure.vcs_client.auth import Credentials
from cms_backend_azure.vcs_client.memory_api import InMemoryAPI, memory_api_factory
from cms_backend_azure.vcs_client.models import User


@pytest.fixture
def backend_config():
    """Backend settings pointing at a test repository."""
    return BackendConfig(
        repo="contoso/website/content",
        branch="main",
        media_folder="/static/media/",
        lock_timeout=2.0,
    )


@pytest.fixture
def test_user():
    return User(id="user-1", display_name="Jane Editor", email_address="jane@contoso.com")


@pytest.fixture
def mock_api(test_user):
    """Mock VersionControlAPI client."""
    api = Mock()
    api.user.return_value = test_user
    api.commit_author = None
    return api


@pytest.fixture
def backend(backend_config, mock_api):
    """AzureBackend wired to the mock client."""
    return AzureBackend(backend_config, api=mock_api)


@pytest.fixture
def memory_api(test_user):
    """InMemoryAPI seeded with two posts and two media files."""
    return InMemoryAPI(
        user=test_user,
        branch="main",
        files={
            "content/posts/hello-world.md": "---\ntitle: Hello World\n---\nFirst post",
            "content/posts/second.md": "---\ntitle: Second\n---\nSecond post",
            "content/posts/notes.txt": "not an entry",
            "static/media/logo.png": b"\x89PNG\r\n\x1a\nlogo",
            "static/media/icon.svg": "<svg xmlns='http://www.w3.org/2000/svg'/>",
        },
    )


@pytest.fixture
def memory_backend(backend_config, memory_api):
    """Authenticated AzureBackend running on the in-memory API."""
    backend = AzureBackend(backend_config, api_factory=memory_api_factory(memory_api))
    backend.authenticate(Credentials(token="test-token"))
    return backend
