"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Global config (~/.devscope/config/config.yml)
- A custom config file passed with --config
- Environment variable expansion (${VAR} and ${VAR:-default})
- Config merging with proper precedence
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from devscope.config.models import (
    CACHE_KINDS,
    CacheConfig,
    DevscopeConfig,
    GitConfig,
    ScanConfig,
    StorageConfig,
)
from devscope.config.validation import validate_config
from devscope.core.logging import get_logger
from devscope.core.paths import DevscopePaths

LOGGER = get_logger(__name__)

GLOBAL_CONFIG_NAME = "config.yml"

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """Configuration loading or parsing error."""


def load_config(
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
    paths: Optional[DevscopePaths] = None,
) -> DevscopeConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path)
    3. Global config (~/.devscope/config/config.yml)
    4. Built-in defaults

    Args:
        cli_config_path: Optional path to a custom config file.
        cli_overrides: Dict of CLI flag overrides in config.yml layout.
        paths: Devscope home layout. Defaults to the resolved home.

    Returns:
        Merged DevscopeConfig instance.

    Raises:
        ConfigError: If the custom config file is missing or unparsable.
    """
    paths = paths or DevscopePaths.default()
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    # A broken global config should not block every command
    global_path = find_global_config(paths)
    if global_path is not None:
        try:
            global_dict = load_yaml_file(global_path)
            validate_config(global_dict, source=str(global_path))
            merged = merge_configs(merged, global_dict)
            sources.append(f"global:{global_path}")
            LOGGER.debug(f"Loaded global config from {global_path}")
        except (ConfigError, yaml.YAMLError, OSError) as e:
            LOGGER.warning(f"Failed to load global config: {e}")

    if cli_config_path is not None:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        try:
            custom_dict = load_yaml_file(cli_config_path)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {cli_config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read {cli_config_path}: {e}") from e
        validate_config(custom_dict, source=str(cli_config_path))
        merged = merge_configs(merged, custom_dict)
        sources.append(f"custom:{cli_config_path}")
        LOGGER.debug(f"Loaded custom config from {cli_config_path}")

    if cli_overrides:
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def find_global_config(paths: Optional[DevscopePaths] = None) -> Optional[Path]:
    """Find the global config at ~/.devscope/config/config.yml.

    Returns:
        Path to global config if it exists, None otherwise.
    """
    paths = paths or DevscopePaths.default()
    config_path = paths.config_dir / GLOBAL_CONFIG_NAME
    if config_path.exists():
        return config_path
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file with environment expansion.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in config values."""
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    if isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    return data


def _env_var_replacer(match: re.Match[str]) -> str:
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Dicts merge recursively; scalars and lists from ``overlay`` replace
    those in ``base``.
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def dict_to_config(data: Dict[str, Any]) -> DevscopeConfig:
    """Convert a merged dict to a typed DevscopeConfig.

    Values of the wrong type were already reported by validation and are
    replaced with defaults here.
    """
    cache_data = _section(data, "cache")
    ttl = CacheConfig().ttl
    ttl_data = cache_data.get("ttl")
    if isinstance(ttl_data, dict):
        for kind, secs in ttl_data.items():
            number = _as_number(secs)
            if kind in CACHE_KINDS and number is not None and number >= 0:
                ttl[kind] = number

    scan_data = _section(data, "scan")
    scan = ScanConfig()
    exclude = scan_data.get("exclude")
    if isinstance(exclude, list):
        scan.exclude = [p for p in exclude if isinstance(p, str)]
    max_workers = scan_data.get("max_workers")
    if isinstance(max_workers, int) and not isinstance(max_workers, bool) and max_workers > 0:
        scan.max_workers = max_workers

    git = GitConfig()
    timeout = _as_number(_section(data, "git").get("timeout"))
    if timeout is not None and timeout > 0:
        git.timeout = timeout

    storage = StorageConfig()
    database = _section(data, "storage").get("database")
    if isinstance(database, str):
        storage.database = database

    return DevscopeConfig(
        cache=CacheConfig(ttl=ttl),
        scan=scan,
        git=git,
        storage=storage,
    )


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name)
    return value if isinstance(value, dict) else {}


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)
