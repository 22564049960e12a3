"""Configuration data models for devscope.

Defines typed configuration classes that represent the config.yml structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from devscope.core.git import DEFAULT_GIT_TIMEOUT, DEFAULT_MAX_WORKERS

# Data kinds with their own cache and statistics
CACHE_KINDS = ("projects", "git")

# Default freshness windows, in seconds, per data kind
DEFAULT_TTLS: Dict[str, float] = {
    "projects": 300.0,
    "git": 60.0,
}

# Settings keys of the form ttl_<kind> override cache TTLs
TTL_SETTING_PREFIX = "ttl_"


@dataclass
class CacheConfig:
    """Per-kind cache freshness windows."""

    ttl: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_TTLS))

    def ttl_for(self, kind: str) -> float:
        """Get the TTL for a data kind, falling back to the built-in default."""
        if kind in self.ttl:
            return float(self.ttl[kind])
        return DEFAULT_TTLS.get(kind, 60.0)


@dataclass
class ScanConfig:
    """Workspace scanning configuration.

    ``exclude`` holds gitignore-style patterns, relative to each workspace
    root, for directories that should never be scanned.
    """

    exclude: List[str] = field(default_factory=list)
    max_workers: int = DEFAULT_MAX_WORKERS


@dataclass
class GitConfig:
    """Git subprocess configuration."""

    timeout: float = DEFAULT_GIT_TIMEOUT


@dataclass
class StorageConfig:
    """Persistence configuration.

    An empty ``database`` means ``<devscope home>/devscope.db``.
    """

    database: str = ""

    def database_path(self, default: Path) -> Path:
        """Resolve the database path, expanding ``~``."""
        if self.database:
            return Path(self.database).expanduser()
        return default


@dataclass
class DevscopeConfig:
    """Complete devscope configuration."""

    cache: CacheConfig = field(default_factory=CacheConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    git: GitConfig = field(default_factory=GitConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    # Metadata (not from YAML)
    _config_sources: List[str] = field(default_factory=list, repr=False)

    @property
    def sources(self) -> List[str]:
        """Where this configuration was loaded from, lowest precedence first."""
        return list(self._config_sources)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary in config.yml layout."""
        return {
            "cache": {"ttl": dict(self.cache.ttl)},
            "scan": {
                "exclude": list(self.scan.exclude),
                "max_workers": self.scan.max_workers,
            },
            "git": {"timeout": self.git.timeout},
            "storage": {"database": self.storage.database},
        }


def parse_ttl_setting(key: str) -> Optional[str]:
    """Return the cache kind named by a ``ttl_<kind>`` settings key."""
    if key.startswith(TTL_SETTING_PREFIX):
        kind = key[len(TTL_SETTING_PREFIX):]
        if kind in CACHE_KINDS:
            return kind
    return None
