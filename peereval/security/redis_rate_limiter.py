"""Redis-backed per-operation limiter shared by every server process."""

from __future__ import annotations

import time
from typing import Callable, Iterable

from redis import Redis

from .rate_limiter import RateLimit


class RedisFixedWindowRateLimiter:
    """Counts calls per (operation, key) in fixed windows using expiring Redis counters.

    Each window gets its own counter key, e.g.
    ``peereval:rate:create-account:10.0.0.7:28745911``, which Redis expires
    once the window has passed.
    """

    def __init__(
        self,
        client: Redis,
        limits: Iterable[RateLimit],
        *,
        key_prefix: str = "peereval:rate",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self._limits = {limit.operation: limit for limit in limits}
        self._key_prefix = key_prefix
        self._clock = clock

    def allow(self, operation: str, key: str) -> bool:
        """Return ``True`` when ``key`` has calls of ``operation`` left in the current window."""
        limit = self._limits[operation]
        window_index = int(self._clock()) // limit.window_seconds
        counter_key = f"{self._key_prefix}:{operation}:{key}:{window_index}"
        with self._client.pipeline() as pipe:
            pipe.incr(counter_key)
            pipe.expire(counter_key, limit.window_seconds)
            count, _ = pipe.execute()
        return int(count) <= limit.max_requests
