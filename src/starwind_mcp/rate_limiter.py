"""Sliding-window rate limiter.

The limiter only counts; it never enforces. Callers check ``can_make_call()``
and raise ``RateLimitedError`` themselves *before* calling ``record_call()``.
Timestamps older than the window are pruned on every query.
"""

from __future__ import annotations

import math
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_WINDOW_SECONDS = 60.0


class RateLimiter:
    """Counts calls within a trailing window of ``window_seconds``."""

    def __init__(
        self,
        max_calls_per_minute: int = 3,
        *,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_calls_per_minute = max_calls_per_minute
        self.window_seconds = window_seconds
        self._clock = clock
        self._calls: list[float] = []

    def _prune(self) -> float:
        now = self._clock()
        cutoff = now - self.window_seconds
        self._calls = [t for t in self._calls if t > cutoff]
        return now

    def can_make_call(self) -> bool:
        self._prune()
        return len(self._calls) < self.max_calls_per_minute

    def record_call(self) -> None:
        now = self._prune()
        self._calls.append(now)

    def remaining_calls(self) -> int:
        self._prune()
        return max(0, self.max_calls_per_minute - len(self._calls))

    def reset_time_seconds(self) -> int:
        """Seconds until the oldest retained call leaves the window; 0 if empty."""
        now = self._prune()
        if not self._calls:
            return 0
        oldest = self._calls[0]
        return max(0, math.ceil(oldest + self.window_seconds - now))

    def reset(self) -> None:
        self._calls.clear()
