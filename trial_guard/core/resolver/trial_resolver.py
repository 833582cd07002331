"""Trial resolver combining independent factors into one decision.

Resolution pass:
1. read every factor (no factor is skipped, each persist later depends
   on that factor's own prior read)
2. fold the readings:
   - any TRIAL_INVALID dominates everything
   - otherwise the earliest literal timestamp wins
   - if every factor is NOT_AVAILABLE, the trial starts now
3. hand the decision to every factor's persist (best-effort)
4. turn the decision into TrialStats

The trial is deemed to have started the first time any reliable source
observed it, so clearing one source does not restart it while another
still remembers.

Not thread-safe. Callers sharing a settings store across threads must
serialize check() themselves.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from trial_guard.core.domain.errors import FactorPersistError
from trial_guard.core.domain.timestamps import NOT_AVAILABLE, TRIAL_INVALID, describe
from trial_guard.core.domain.types import (
    FactorReading,
    TrialDecision,
    TrialStats,
    compute_trial_stats,
)
from trial_guard.core.events.events import (
    FactorReadEvent,
    PersistFailedEvent,
    TamperDetectedEvent,
    TrialResolvedEvent,
)
from trial_guard.core.events.sinks.null_event_bus import NullEventBus

if TYPE_CHECKING:
    from trial_guard.core.events.event_bus import EventBus
    from trial_guard.core.factors.base import TrialFactor
    from trial_guard.core.ports.environment import TrialEnvironment
    from trial_guard.core.resolver.trial_config import TrialConfig

LOGGER = logging.getLogger(__name__)


def fold_readings(readings: Iterable[int], now_ms: int) -> int:
    """Combine factor readings into the effective trial start timestamp.

    Returns TRIAL_INVALID if any reading is TRIAL_INVALID, else the minimum
    literal reading, else now_ms.
    """
    earliest = NOT_AVAILABLE
    for timestamp in readings:
        if timestamp == TRIAL_INVALID:
            return TRIAL_INVALID
        if timestamp != NOT_AVAILABLE and timestamp < earliest:
            earliest = timestamp

    if earliest == NOT_AVAILABLE:
        return now_ms
    return earliest


class TrialResolver:
    """Determines trial status from an ordered set of factors."""

    def __init__(
        self,
        factors: Iterable[TrialFactor],
        env: TrialEnvironment,
        config: TrialConfig,
        event_bus: EventBus | None = None,
    ) -> None:
        self._factors: tuple[TrialFactor, ...] = tuple(factors)
        self._env = env
        self._config = config
        self._event_bus = event_bus if event_bus is not None else NullEventBus()

    @property
    def factors(self) -> tuple[TrialFactor, ...]:
        return self._factors

    @property
    def config(self) -> TrialConfig:
        return self._config

    # ---------------------------------------------------------------------
    # Read + fold (side-effect free apart from events)
    # ---------------------------------------------------------------------

    def resolve(self) -> TrialDecision:
        """Read every factor and fold the readings. Persists nothing.

        FactorReadError from any factor propagates.
        """
        now_ms = self._env.now_ms()

        readings: list[FactorReading] = []
        for factor in self._factors:
            reading = FactorReading(factor=factor.name, timestamp=factor.read_timestamp(self._env))
            readings.append(reading)

            self._event_bus.emit(
                FactorReadEvent(now_ms=now_ms, factor=reading.factor, timestamp=reading.timestamp)
            )
            if reading.is_trial_invalid:
                self._event_bus.emit(TamperDetectedEvent(now_ms=now_ms, factor=reading.factor))

        effective = fold_readings((r.timestamp for r in readings), now_ms)
        decision = TrialDecision(
            effective_timestamp=effective,
            readings=tuple(readings),
            now_ms=now_ms,
        )

        LOGGER.debug(
            "Trial readings folded",
            extra={
                "readings": [str(r) for r in readings],
                "effective": describe(effective),
            },
        )
        return decision

    # ---------------------------------------------------------------------
    # Full check
    # ---------------------------------------------------------------------

    def check(self) -> TrialStats:
        """Resolve, persist the decision through every factor, return stats."""
        decision = self.resolve()
        self._persist(decision)

        stats = compute_trial_stats(
            start_ms=decision.effective_timestamp,
            duration_ms=self._config.trial_duration_ms,
            now_ms=decision.now_ms,
            invalid=decision.is_invalid,
        )

        self._event_bus.emit(
            TrialResolvedEvent(
                now_ms=decision.now_ms,
                effective_timestamp=decision.effective_timestamp,
                invalid=decision.is_invalid,
                first_run=decision.is_first_run,
                is_trial_over=stats.is_trial_over,
                time_remaining_ms=stats.time_remaining_ms,
            )
        )
        LOGGER.info(
            "Trial resolved",
            extra={
                "app_id": self._env.app_id,
                "effective": describe(decision.effective_timestamp),
                "is_trial_over": stats.is_trial_over,
                "time_remaining_ms": stats.time_remaining_ms,
            },
        )
        return stats

    def _persist(self, decision: TrialDecision) -> None:
        for factor in self._factors:
            try:
                factor.persist_timestamp(decision.effective_timestamp, self._env)
            except FactorPersistError as exc:
                # A failed write only means the next read sees the prior state.
                LOGGER.warning(
                    "Factor persist failed; continuing",
                    extra={"factor": factor.name, "error": str(exc)},
                )
                self._event_bus.emit(
                    PersistFailedEvent(now_ms=decision.now_ms, factor=factor.name, error=str(exc))
                )
