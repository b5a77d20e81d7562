"""In-memory response cache with per-entry time-to-live."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any


@dataclass
class CacheEntry:
    """A cached value and when it stops being valid."""

    key: str
    value: Any
    inserted_at: float
    ttl: float  # seconds

    def is_expired(self, now: float) -> bool:
        return now - self.inserted_at >= self.ttl


class TTLCache:
    """Key/value store whose entries expire after their ttl.

    Expired entries are evicted lazily when they are next looked up.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: float | timedelta) -> None:
        """Store value under key for ttl (seconds or timedelta)."""
        if isinstance(ttl, timedelta):
            ttl = ttl.total_seconds()
        with self._lock:
            self._entries[key] = CacheEntry(
                key=key,
                value=value,
                inserted_at=self._clock(),
                ttl=ttl,
            )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for entry in self._entries.values() if not entry.is_expired(now))
