"""Bounded TTL cache for upstream weather payloads."""
from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Dict, Optional, Tuple


def cache_key(location: str) -> str:
    """Lower-case ``location``; no other normalization is applied."""

    return location.lower()


@dataclass
class CacheEntry:
    value: Any
    stored_at: float


class ResponseCache:
    """Thread-safe TTL cache for API responses.

    Stale entries are reported as misses but stay in the store until they are
    overwritten. Once the store grows past ``max_entries`` each insert evicts
    the entry that was inserted first.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: int = 100,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._store: Dict[str, CacheEntry] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[Tuple[Any, float]]:
        """Return ``(payload, age_seconds)`` for a fresh entry, else ``None``."""

        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            age = self._clock() - entry.stored_at
            if age >= self._ttl:
                return None
            return entry.value, age

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._store[key] = CacheEntry(value=value, stored_at=self._clock())
            if len(self._store) > self._max_entries:
                oldest_key = next(iter(self._store))
                del self._store[oldest_key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store
