"""Observational statistics for cached scanners."""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class ScanStatsSnapshot:
    """Point-in-time view of one scanner's statistics."""

    name: str
    cache_hits: int
    cache_misses: int
    total_scans: int
    last_scan_duration_ms: Optional[int]
    ttl_secs: float
    is_warm: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return asdict(self)


class ScanStats:
    """Monotonic hit/miss counters plus the last scan duration.

    Uses its own lock, independent of any cache lock, so recording stats
    never waits on cache access.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._total_scans = 0
        self._last_duration_ms: Optional[int] = None

    def record_hit(self) -> None:
        """Count a cache hit."""
        with self._lock:
            self._hits += 1

    def record_miss(self, duration_ms: int) -> None:
        """Count a miss and the rescan it triggered."""
        with self._lock:
            self._misses += 1
            self._total_scans += 1
            self._last_duration_ms = int(duration_ms)

    @property
    def cache_hits(self) -> int:
        with self._lock:
            return self._hits

    @property
    def cache_misses(self) -> int:
        with self._lock:
            return self._misses

    @property
    def total_scans(self) -> int:
        with self._lock:
            return self._total_scans

    @property
    def last_scan_duration_ms(self) -> Optional[int]:
        with self._lock:
            return self._last_duration_ms

    def snapshot(self, name: str, ttl_secs: float, is_warm: bool) -> ScanStatsSnapshot:
        """Capture the counters together with cache state.

        Args:
            name: Display name of the scanner.
            ttl_secs: TTL of the associated cache.
            is_warm: Whether the associated cache holds a fresh value.
        """
        with self._lock:
            return ScanStatsSnapshot(
                name=name,
                cache_hits=self._hits,
                cache_misses=self._misses,
                total_scans=self._total_scans,
                last_scan_duration_ms=self._last_duration_ms,
                ttl_secs=ttl_secs,
                is_warm=is_warm,
            )
