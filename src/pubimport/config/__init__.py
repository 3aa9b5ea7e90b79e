"""Application configuration helpers."""

from __future__ import annotations

from .env import env_choice, env_float, env_int, optional_env_var
from .errors import ConfigurationError, InvalidSettingError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .publications import PublicationApiConfig, get_publication_config
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_http_cache_path,
    get_storage_config,
)

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "InvalidSettingError",
    "PublicationApiConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_choice",
    "env_float",
    "env_int",
    "get_database_config",
    "get_http_cache_path",
    "get_publication_config",
    "get_storage_config",
    "optional_env_var",
]
