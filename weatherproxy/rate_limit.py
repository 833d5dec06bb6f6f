"""Simple in-memory client rate limiter."""
from __future__ import annotations

import time
from collections import deque
from threading import Lock
from typing import Callable, Deque, Dict


class RateLimiter:
    """Tracks requests per client identity within a sliding window."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.limit = limit
        self.window = window_seconds
        self._clock = clock
        self._requests: Dict[str, Deque[float]] = {}
        self._lock = Lock()

    def check_and_record(self, identity: str) -> bool:
        """Return ``True`` when ``identity`` is over the limit.

        Attempts rejected this way are not recorded, so a limited client
        regains capacity as soon as its oldest accepted request leaves the
        window.
        """

        now = self._clock()
        with self._lock:
            q = self._requests.setdefault(identity, deque())
            while q and now - q[0] >= self.window:
                q.popleft()
            if len(q) >= self.limit:
                return True
            q.append(now)
            return False

    def recent_requests(self, identity: str) -> int:
        """Number of recorded requests for ``identity``, including stale ones not yet purged."""

        with self._lock:
            return len(self._requests.get(identity, ()))
