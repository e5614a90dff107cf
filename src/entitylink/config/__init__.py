"""Application configuration helpers."""

from __future__ import annotations

from .env import get_config_path, require_env_vars
from .errors import ConfigurationError, InvalidPropertyError, MissingConfigurationError
from .logging import configure_logging
from .properties import ConfigurationProperties, split_array_value
from .resolution import ResolutionSettings
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "ConfigurationProperties",
    "DatabaseConfig",
    "InvalidPropertyError",
    "MissingConfigurationError",
    "ResolutionSettings",
    "StorageConfig",
    "configure_logging",
    "get_config_path",
    "get_database_config",
    "get_storage_config",
    "require_env_vars",
    "split_array_value",
]
