"""YAML configuration loading and validation.

Backend settings live in the editing application's YAML configuration file,
under the 'backend' key, next to the top-level 'media_folder':

    backend:
      name: azure
      repo: "organisation/project/repo"
      branch: main
      api_root: "https://dev.azure.com"
      squash_merges: true
      preview_context: "deploy/preview"
    media_folder: static/media
"""

import logging
from typing import Any, Dict

import yaml

from .errors import ConfigError, ConfigFileError
from .models import DEFAULT_API_ROOT, DEFAULT_BRANCH, BackendConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and validates backend configuration from YAML."""

    BACKEND_NAME = 'azure'

    STRING_FIELDS = ('repo', 'branch', 'api_root', 'identity_url', 'preview_context')

    @classmethod
    def load(cls, config_path: str) -> BackendConfig:
        """Load and parse configuration from a YAML file.

        Raises:
            ConfigFileError: If the file cannot be read
            ConfigError: If the configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigFileError(config_path, 'Configuration file not found')
        except PermissionError:
            raise ConfigFileError(config_path, 'Permission denied')
        except OSError as e:
            raise ConfigFileError(config_path, str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        config = cls.parse(config_dict)
        logger.debug(f"Loaded backend configuration from {config_path}")
        return config

    @classmethod
    def parse(cls, config_dict: Dict[str, Any]) -> BackendConfig:
        """Build a BackendConfig from an already-parsed configuration mapping.

        Raises:
            ConfigError: If a field is missing or has the wrong type
        """
        backend = config_dict.get('backend')
        if not isinstance(backend, dict):
            raise ConfigError("'backend' must be a mapping", config_field='backend')

        name = backend.get('name')
        if name is not None and name != cls.BACKEND_NAME:
            raise ConfigError(
                f"Expected backend '{cls.BACKEND_NAME}', got '{name}'",
                config_field='backend.name',
            )

        for field_name in cls.STRING_FIELDS:
            value = backend.get(field_name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(
                    f"must be a string, got {type(value).__name__}",
                    config_field=f'backend.{field_name}',
                )

        squash_merges = backend.get('squash_merges', False)
        if not isinstance(squash_merges, bool):
            raise ConfigError(
                f"must be a boolean, got {type(squash_merges).__name__}",
                config_field='backend.squash_merges',
            )

        media_folder = config_dict.get('media_folder')
        if not media_folder or not isinstance(media_folder, str):
            raise ConfigError("must be a non-empty string", config_field='media_folder')

        max_downloads = backend.get('max_concurrent_downloads', 10)
        if isinstance(max_downloads, bool) or not isinstance(max_downloads, int) or max_downloads < 1:
            raise ConfigError(
                f"must be a positive integer, got {max_downloads!r}",
                config_field='backend.max_concurrent_downloads',
            )

        lock_timeout = backend.get('lock_timeout', 15.0)
        if isinstance(lock_timeout, bool) or not isinstance(lock_timeout, (int, float)) or lock_timeout <= 0:
            raise ConfigError(
                f"must be a positive number, got {lock_timeout!r}",
                config_field='backend.lock_timeout',
            )

        return BackendConfig(
            repo=backend.get('repo'),
            branch=backend.get('branch') or DEFAULT_BRANCH,
            api_root=backend.get('api_root') or DEFAULT_API_ROOT,
            identity_url=backend.get('identity_url') or "",
            squash_merges=squash_merges,
            preview_context=backend.get('preview_context') or "",
            media_folder=media_folder,
            max_concurrent_downloads=max_downloads,
            lock_timeout=float(lock_timeout),
        )
