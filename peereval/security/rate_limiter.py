"""Per-operation rate limits and the in-process sliding window limiter."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Iterable

CREATE_ACCOUNT = "create-account"
ISSUE_TOKEN = "issue-token"


@dataclass(frozen=True)
class RateLimit:
    """At most ``max_requests`` calls of ``operation`` per key within ``window_seconds``."""

    operation: str
    max_requests: int
    window_seconds: int


class SlidingWindowRateLimiter:
    """Thread-safe limiter tracking request times per (operation, key) pair.

    Keys idle for longer than their window are dropped on a periodic sweep so
    the map does not keep one entry per client forever.
    """

    def __init__(
        self, limits: Iterable[RateLimit], clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._limits = {limit.operation: limit for limit in limits}
        self._clock = clock
        self._events: dict[tuple[str, str], deque[float]] = {}
        self._sweep_interval = max((limit.window_seconds for limit in self._limits.values()), default=0)
        self._last_sweep = clock()
        self._lock = Lock()

    def allow(self, operation: str, key: str) -> bool:
        """Record a call of ``operation`` for ``key`` and report whether it is within its limit."""
        limit = self._limits[operation]
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self._sweep_interval:
                self._sweep(now)
            events = self._events.setdefault((operation, key), deque())
            _expire(events, now, limit.window_seconds)
            if len(events) >= limit.max_requests:
                return False
            events.append(now)
            return True

    def _sweep(self, now: float) -> None:
        for entry, events in list(self._events.items()):
            _expire(events, now, self._limits[entry[0]].window_seconds)
            if not events:
                del self._events[entry]
        self._last_sweep = now


def _expire(events: deque[float], now: float, window_seconds: int) -> None:
    while events and now - events[0] >= window_seconds:
        events.popleft()
