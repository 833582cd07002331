from __future__ import annotations

from typing import Protocol


class Clock(Protocol):
    """Wall clock with millisecond resolution.

    Rollback detection compares readings of this clock against earlier
    readings of the same clock. It is the clock a user can set back.
    """

    def now_ms(self) -> int:
        """Return the current time in epoch milliseconds."""
