"""Errors raised while loading backend configuration."""

from typing import Optional

from cms_backend_azure.vcs_client.errors import BackendError


class ConfigError(BackendError):
    """Raised when backend configuration is missing or invalid.

    Attributes:
        reason: What is wrong, without the field prefix
        config_field: Dotted path of the offending setting, if known
    """

    def __init__(self, reason: str, config_field: Optional[str] = None):
        where = f" ({config_field})" if config_field else ""
        super().__init__(f"Invalid backend configuration{where}: {reason}")
        self.reason = reason
        self.config_field = config_field


class ConfigFileError(BackendError):
    """Raised when the configuration file cannot be opened or read."""

    def __init__(self, config_path: str, reason: str):
        super().__init__(f"Cannot read configuration file {config_path}: {reason}")
        self.config_path = config_path
        self.reason = reason
