from __future__ import annotations

import time


class SystemClock:
    """Wall clock backed by time.time_ns()."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


class FixedClock:
    """Manually driven clock for tests and simulations."""

    def __init__(self, now_ms: int) -> None:
        self._now_ms = int(now_ms)

    def now_ms(self) -> int:
        return self._now_ms

    def set(self, now_ms: int) -> None:
        self._now_ms = int(now_ms)

    def advance(self, delta_ms: int) -> None:
        """Move the clock by delta_ms (negative values roll it back)."""
        self._now_ms += int(delta_ms)
