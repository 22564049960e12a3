"""Single-slot expiring cache.

The cache guards its own state with a lock that is held only for the
duration of each call. Callers run the (slow) rescan after a miss outside
the cache, so two concurrent misses may both rescan; the last ``set`` wins.
"""

from __future__ import annotations

import copy
import threading
import time
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

Clock = Callable[[], float]


class ScanCache(Generic[T]):
    """Holds one value together with the instant it was stored.

    A value is fresh while ``clock() - last_set < ttl``. Stale values are not
    purged; they are ignored until overwritten or invalidated.
    """

    def __init__(self, ttl_secs: float, clock: Clock = time.monotonic) -> None:
        """Initialize an empty cache.

        Args:
            ttl_secs: Freshness window in seconds.
            clock: Monotonic time source, injectable for tests.
        """
        self._ttl = float(ttl_secs)
        self._clock = clock
        self._lock = threading.Lock()
        # Value and timestamp are always set and cleared together
        self._entry: Optional[tuple[T, float]] = None

    def _fresh_entry(self) -> Optional[tuple[T, float]]:
        entry = self._entry
        if entry is None:
            return None
        if self._clock() - entry[1] < self._ttl:
            return entry
        return None

    def get(self) -> Optional[T]:
        """Return a deep copy of the cached value if it is still fresh."""
        with self._lock:
            entry = self._fresh_entry()
            if entry is None:
                return None
            return copy.deepcopy(entry[0])

    def set(self, value: T) -> None:
        """Store a deep copy of a value and reset the timestamp."""
        stored = copy.deepcopy(value)
        with self._lock:
            self._entry = (stored, self._clock())

    def invalidate(self) -> None:
        """Drop the value so the next ``get`` misses regardless of ttl."""
        with self._lock:
            self._entry = None

    def is_warm(self) -> bool:
        """Report whether a fresh value is present."""
        with self._lock:
            return self._fresh_entry() is not None

    @property
    def ttl_secs(self) -> float:
        """Current freshness window in seconds."""
        with self._lock:
            return self._ttl

    def set_ttl(self, secs: float) -> None:
        """Change the freshness window without touching the stored value.

        The new window applies retroactively to the stored value.
        """
        with self._lock:
            self._ttl = float(secs)
