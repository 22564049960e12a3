"""Application state: workspace roots, cached scans and statistics.

``AppState`` is the single object the CLI talks to. It owns the database,
the list of workspace roots, and one ``ScanCache``/``ScanStats`` pair per
data kind (``projects`` and ``git``).

Locks are held only to read or swap shared values. A rescan after a cache
miss runs outside every lock, so two concurrent misses may both rescan; the
last result stored wins.
"""

from __future__ import annotations

import os
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from devscope.cache import ScanCache, ScanStats, ScanStatsSnapshot
from devscope.cache.ttl import Clock
from devscope.config.models import CACHE_KINDS, DevscopeConfig, parse_ttl_setting
from devscope.core import git
from devscope.core.logging import get_logger
from devscope.core.models import GitStatus, ProjectRecord
from devscope.core.paths import DevscopePaths
from devscope.pipeline.executor import PipelineExecutor
from devscope.storage.database import Database

LOGGER = get_logger(__name__)

STATS_NAMES: Dict[str, str] = {
    "projects": "Projects",
    "git": "Git Status",
}


@dataclass
class AppStatsSnapshot:
    """Statistics for every cached scanner plus process information."""

    scanners: List[ScanStatsSnapshot] = field(default_factory=list)
    pid: int = 0
    uptime_secs: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scanners": [s.to_dict() for s in self.scanners],
            "pid": self.pid,
            "uptime_secs": self.uptime_secs,
        }


class AppState:
    """Shared state behind every devscope command."""

    def __init__(
        self,
        database: Database,
        config: Optional[DevscopeConfig] = None,
        pipeline: Optional[PipelineExecutor] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        """Create the state and hydrate it from the database.

        Args:
            database: Open database holding roots and settings.
            config: Loaded configuration. Defaults to built-in values.
            pipeline: Scan pipeline. Defaults to one built from ``config``.
            clock: Monotonic time source shared by all caches.

        Raises:
            StorageError: If the database cannot be read.
        """
        self._config = config or DevscopeConfig()
        self._db = database
        self._pipeline = pipeline or PipelineExecutor(self._config)
        self._clock = clock
        self._started_at = clock()

        self._workspace_lock = threading.Lock()
        self._workspace_paths: List[str] = database.get_workspaces()

        self._caches: Dict[str, ScanCache] = {
            kind: ScanCache(self._config.cache.ttl_for(kind), clock=clock)
            for kind in CACHE_KINDS
        }
        self._stats: Dict[str, ScanStats] = {kind: ScanStats() for kind in CACHE_KINDS}

        # Persisted ttl_<kind> settings win over config values
        for key, value in database.get_all_settings().items():
            self._apply_ttl_setting(key, value)

    @classmethod
    def open(
        cls,
        config: Optional[DevscopeConfig] = None,
        paths: Optional[DevscopePaths] = None,
    ) -> "AppState":
        """Open the configured database and build the state on top of it."""
        config = config or DevscopeConfig()
        paths = paths or DevscopePaths.default()
        db_path = config.storage.database_path(paths.database_path)
        return cls(Database.open(db_path), config=config)

    @property
    def database(self) -> Database:
        return self._db

    @property
    def config(self) -> DevscopeConfig:
        return self._config

    def close(self) -> None:
        self._db.close()

    # Workspace roots

    def list_workspaces(self) -> List[str]:
        with self._workspace_lock:
            return list(self._workspace_paths)

    def add_workspace(self, path: str) -> List[str]:
        """Add a workspace root, keeping insertion order.

        Adding a root that is already present changes nothing.

        Returns:
            The updated list of roots.
        """
        with self._workspace_lock:
            if path not in self._workspace_paths:
                self._db.add_workspace(path)
                self._workspace_paths.append(path)
                LOGGER.info(f"Added workspace root {path}")
            return list(self._workspace_paths)

    def remove_workspace(self, path: str) -> List[str]:
        """Remove a workspace root and drop cached projects and git statuses.

        Returns:
            The updated list of roots.
        """
        with self._workspace_lock:
            self._workspace_paths = [p for p in self._workspace_paths if p != path]
            remaining = list(self._workspace_paths)
        self._db.remove_workspace(path)
        self._caches["projects"].invalidate()
        self._caches["git"].invalidate()
        LOGGER.info(f"Removed workspace root {path}")
        return remaining

    # Projects

    def get_projects(self) -> List[ProjectRecord]:
        """Return cached projects, rescanning when the cache is stale."""
        cached = self._caches["projects"].get()
        if cached is not None:
            self._stats["projects"].record_hit()
            return cached
        return self.refresh_projects()

    def refresh_projects(self) -> List[ProjectRecord]:
        """Rescan every workspace root regardless of cache state."""
        start = time.monotonic()
        outcome = self._pipeline.execute(self.list_workspaces())
        self._stats["projects"].record_miss(_elapsed_ms(start))
        self._caches["projects"].set(outcome.projects)
        return list(outcome.projects)

    def get_monorepo_packages(self, root: str) -> List[ProjectRecord]:
        """Return the member packages of a monorepo root. Not cached."""
        return self._pipeline.scanner.scan_monorepo_packages(Path(root))

    # Git

    def get_git_statuses(self) -> List[GitStatus]:
        """Return cached git statuses of all projects with a ``.git`` entry."""
        cached = self._caches["git"].get()
        if cached is not None:
            self._stats["git"].record_hit()
            return cached
        return self.refresh_git_statuses()

    def refresh_git_statuses(self) -> List[GitStatus]:
        """Query git for every project with a ``.git`` entry."""
        paths = [p.path for p in self.get_projects() if p.has_git]
        start = time.monotonic()
        statuses = git.get_statuses(
            paths,
            timeout=self._config.git.timeout,
            max_workers=self._config.scan.max_workers,
        )
        self._stats["git"].record_miss(_elapsed_ms(start))
        self._caches["git"].set(statuses)
        return list(statuses)

    def get_git_status(self, path: str) -> Optional[GitStatus]:
        """Query one project directly, bypassing the cache."""
        return git.get_status(path, timeout=self._config.git.timeout)

    # Cache control

    def cache(self, kind: str) -> ScanCache:
        """Return the cache for a data kind.

        Raises:
            KeyError: If ``kind`` is not a cached data kind.
        """
        return self._caches[kind]

    def set_ttl(self, kind: str, secs: float) -> None:
        """Change the TTL of one cache without persisting it."""
        self.cache(kind).set_ttl(secs)
        LOGGER.debug(f"TTL for {kind} set to {secs}s")

    def invalidate(self, kind: str) -> None:
        self.cache(kind).invalidate()

    # Settings

    def get_settings(self) -> Dict[str, str]:
        return self._db.get_all_settings()

    def get_setting(self, key: str) -> Optional[str]:
        return self._db.get_setting(key)

    def set_setting(self, key: str, value: str) -> None:
        """Persist a setting; ``ttl_<kind>`` keys also take effect immediately."""
        self._db.set_setting(key, value)
        self._apply_ttl_setting(key, value)

    def delete_setting(self, key: str) -> None:
        """Delete a setting. A deleted TTL override lasts until restart."""
        self._db.delete_setting(key)

    def _apply_ttl_setting(self, key: str, value: str) -> None:
        kind = parse_ttl_setting(key)
        if kind is None:
            return
        try:
            secs = int(value)
        except ValueError:
            LOGGER.warning(f"Ignoring {key}={value!r}: not a whole number of seconds")
            return
        if secs < 0:
            LOGGER.warning(f"Ignoring {key}={value!r}: must not be negative")
            return
        self.set_ttl(kind, secs)

    # Statistics

    def stats_snapshot(self) -> AppStatsSnapshot:
        """Capture hit/miss counters and cache state for every data kind."""
        scanners = []
        for kind in CACHE_KINDS:
            cache = self._caches[kind]
            scanners.append(
                self._stats[kind].snapshot(
                    name=STATS_NAMES.get(kind, kind),
                    ttl_secs=cache.ttl_secs,
                    is_warm=cache.is_warm(),
                )
            )
        return AppStatsSnapshot(
            scanners=scanners,
            pid=os.getpid(),
            uptime_secs=int(self._clock() - self._started_at),
        )


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
