"""Backend configuration loading."""

from .config_loader import ConfigLoader
from .errors import ConfigError, ConfigFileError
from .models import AzureRepo, BackendConfig

__all__ = [
    "AzureRepo",
    "BackendConfig",
    "ConfigError",
    "ConfigLoader",
    "ConfigFileError",
]
