"""Configuration loading and typed models."""

from devscope.config.loader import (
    ConfigError,
    dict_to_config,
    load_config,
    merge_configs,
)
from devscope.config.models import (
    CACHE_KINDS,
    CacheConfig,
    DevscopeConfig,
    GitConfig,
    ScanConfig,
    StorageConfig,
    parse_ttl_setting,
)
from devscope.config.validation import ConfigValidationWarning, validate_config

__all__ = [
    "CACHE_KINDS",
    "CacheConfig",
    "ConfigError",
    "ConfigValidationWarning",
    "DevscopeConfig",
    "GitConfig",
    "ScanConfig",
    "StorageConfig",
    "dict_to_config",
    "load_config",
    "merge_configs",
    "parse_ttl_setting",
    "validate_config",
]
