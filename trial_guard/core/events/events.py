"""
Domain event models.

These events represent immutable facts observed while resolving a trial.
They are consumed by loggers, recorders, and host-side monitoring.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class FactorReadEvent:
    now_ms: int
    factor: str
    timestamp: int


@dataclass(slots=True)
class TamperDetectedEvent:
    now_ms: int
    factor: str


@dataclass(slots=True)
class TrialResolvedEvent:
    now_ms: int

    effective_timestamp: int
    invalid: bool
    first_run: bool

    is_trial_over: bool
    time_remaining_ms: int


@dataclass(slots=True)
class PersistFailedEvent:
    now_ms: int
    factor: str
    error: str


TrialEvent = FactorReadEvent | TamperDetectedEvent | TrialResolvedEvent | PersistFailedEvent
