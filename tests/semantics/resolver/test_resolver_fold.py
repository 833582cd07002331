"""
Semantic test: combining factor readings.

Invariant:
TRIAL_INVALID from any factor dominates regardless of order. Otherwise
the earliest literal timestamp wins, NOT_AVAILABLE readings are ignored,
and if nobody has an opinion the trial starts now.
"""

from __future__ import annotations

import itertools
import time

import pytest

from trial_guard.adapters.clock import FixedClock, SystemClock
from trial_guard.adapters.install_records import StaticInstallRecordSource
from trial_guard.adapters.settings import InMemorySettingsStore
from trial_guard.core.domain.timestamps import NOT_AVAILABLE, TRIAL_INVALID
from trial_guard.core.factors.base import TrialFactor
from trial_guard.core.ports.clock import Clock
from trial_guard.core.ports.environment import TrialEnvironment
from trial_guard.core.resolver.trial_config import TrialConfig
from trial_guard.core.resolver.trial_resolver import TrialResolver, fold_readings

NOW_MS = 1_700_000_000_000


class FixedFactor(TrialFactor):
    """Factor with a fixed reading."""

    def __init__(self, timestamp: int) -> None:
        self._timestamp = timestamp

    def read_timestamp(self, env: TrialEnvironment) -> int:
        return self._timestamp


def make_resolver(readings: list[int], clock: Clock | None = None) -> TrialResolver:
    env = TrialEnvironment(
        app_id="demo-app",
        clock=clock if clock is not None else FixedClock(NOW_MS),
        settings=InMemorySettingsStore(),
        install_records=StaticInstallRecordSource(),
    )
    return TrialResolver(
        factors=[FixedFactor(ts) for ts in readings],
        env=env,
        config=TrialConfig.for_days(7, app_id="demo-app"),
    )


@pytest.mark.parametrize(
    "readings",
    [list(p) for p in itertools.permutations([NOT_AVAILABLE, TRIAL_INVALID, 1000])],
)
def test_invalid_dominates_in_any_order(readings: list[int]) -> None:
    decision = make_resolver(readings).resolve()

    assert decision.is_invalid
    assert decision.effective_timestamp == TRIAL_INVALID


def test_earliest_literal_wins() -> None:
    decision = make_resolver([5000, 3000, NOT_AVAILABLE]).resolve()

    assert not decision.is_invalid
    assert decision.effective_timestamp == 3000
    assert not decision.is_first_run


def test_all_not_available_starts_now_with_fixed_clock() -> None:
    decision = make_resolver([NOT_AVAILABLE, NOT_AVAILABLE]).resolve()

    assert decision.effective_timestamp == NOW_MS
    assert decision.is_first_run


def test_all_not_available_starts_now_with_system_clock() -> None:
    before_ms = time.time_ns() // 1_000_000
    decision = make_resolver([NOT_AVAILABLE, NOT_AVAILABLE], clock=SystemClock()).resolve()

    assert abs(decision.effective_timestamp - before_ms) <= 1000


def test_no_factors_starts_now() -> None:
    decision = make_resolver([]).resolve()

    assert decision.effective_timestamp == NOW_MS
    assert decision.readings == ()


def test_readings_are_kept_in_factor_order() -> None:
    decision = make_resolver([5000, NOT_AVAILABLE, 3000]).resolve()

    assert [r.timestamp for r in decision.readings] == [5000, NOT_AVAILABLE, 3000]
    assert all(r.factor == "FixedFactor" for r in decision.readings)


def test_fold_readings_function() -> None:
    assert fold_readings([], NOW_MS) == NOW_MS
    assert fold_readings([NOT_AVAILABLE], NOW_MS) == NOW_MS
    assert fold_readings([7, 3, 9], NOW_MS) == 3
    assert fold_readings([7, TRIAL_INVALID, 3], NOW_MS) == TRIAL_INVALID
