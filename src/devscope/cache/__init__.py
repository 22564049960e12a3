"""TTL caching and scan statistics."""

from __future__ import annotations

from devscope.cache.stats import ScanStats, ScanStatsSnapshot
from devscope.cache.ttl import ScanCache

__all__ = [
    "ScanCache",
    "ScanStats",
    "ScanStatsSnapshot",
]
