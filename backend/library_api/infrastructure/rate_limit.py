"""Rate Limiter — sliding-window request budget per client address.

Invariants:
    - At most max_requests hits per key inside any window_seconds interval
    - Expired timestamps of the hit key are pruned on every hit
    - Idle keys are dropped once more than _PRUNE_THRESHOLD keys are tracked
    - max_requests <= 0 disables limiting entirely

Design Decisions:
    - In-memory, per-process state: single uvicorn worker, single event loop, so no
      locking is needed (ADR: no shared store for a service this size)
    - Injectable clock: tests drive time without sleeping
"""

import math
import time
from collections import deque
from typing import Callable

_PRUNE_THRESHOLD = 1024


class SlidingWindowRateLimiter:
    """Track request timestamps per key and refuse hits over budget."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}

    @property
    def enabled(self) -> bool:
        return self.max_requests > 0 and self.window_seconds > 0

    def hit(self, key: str) -> int | None:
        """Record a request for key.

        Returns None when the request is allowed, otherwise the number of
        whole seconds until the oldest hit leaves the window.
        """
        if not self.enabled:
            return None
        now = self._clock()
        hits = self._hits.setdefault(key, deque())
        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()
        if len(hits) >= self.max_requests:
            return max(1, math.ceil(hits[0] + self.window_seconds - now))
        hits.append(now)
        if len(self._hits) > _PRUNE_THRESHOLD:
            self._prune(cutoff)
        return None

    def reset(self) -> None:
        self._hits.clear()

    def _prune(self, cutoff: float) -> None:
        idle = [
            key for key, hits in self._hits.items()
            if not hits or hits[-1] <= cutoff
        ]
        for key in idle:
            del self._hits[key]
