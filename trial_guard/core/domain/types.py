"""Trial resolution result types.

TrialStats is the value handed to the host application and doubles as a
schema definition (see core/schemas/trial_stats.schema.json). The
decision types are internal to the resolver and not part of any schema.
"""

# pylint: disable=missing-function-docstring
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field

from trial_guard.core.domain.timestamps import (
    NOT_AVAILABLE,
    TRIAL_INVALID,
    describe,
)

# ---------------------------------------------------------------------------
# Host-facing result
# ---------------------------------------------------------------------------


class TrialStats(BaseModel):
    """Resolved trial status: whether the trial is over and how much is left."""

    is_trial_over: bool
    time_remaining_ms: int = Field(..., ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def time_remaining(self) -> timedelta:
        return timedelta(milliseconds=self.time_remaining_ms)


def compute_trial_stats(
    *,
    start_ms: int,
    duration_ms: int,
    now_ms: int,
    invalid: bool = False,
) -> TrialStats:
    """Turn an effective start timestamp into TrialStats.

    remaining = max(0, start + duration - now)
    over      = invalid or now >= start + duration

    An invalid decision always yields an expired trial with nothing left,
    whatever start_ms holds.
    """
    if invalid or start_ms == TRIAL_INVALID:
        return TrialStats(is_trial_over=True, time_remaining_ms=0)

    end_ms = start_ms + duration_ms
    return TrialStats(
        is_trial_over=now_ms >= end_ms,
        time_remaining_ms=max(0, end_ms - now_ms),
    )


# ---------------------------------------------------------------------------
# Resolver decision models
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FactorReading:
    """What one factor reported during a resolution pass."""

    factor: str
    timestamp: int

    @property
    def is_not_available(self) -> bool:
        return self.timestamp == NOT_AVAILABLE

    @property
    def is_trial_invalid(self) -> bool:
        return self.timestamp == TRIAL_INVALID

    def __str__(self) -> str:
        return f"{self.factor}={describe(self.timestamp)}"


@dataclass(frozen=True, slots=True)
class TrialDecision:
    """Outcome of folding all factor readings.

    - effective_timestamp: the trial start to use now, or TRIAL_INVALID
    - readings: every factor's reading, in factor order
    - now_ms: the clock value the decision was made against
    """

    effective_timestamp: int
    readings: tuple[FactorReading, ...]
    now_ms: int

    @property
    def is_invalid(self) -> bool:
        return self.effective_timestamp == TRIAL_INVALID

    @property
    def is_first_run(self) -> bool:
        """True when no factor had an opinion and the trial starts now."""
        return not self.is_invalid and all(r.is_not_available for r in self.readings)
