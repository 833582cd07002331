"""
Synchronous fan-out of trial events.

The sink set is fixed when the bus is built, so every event of one trial
check reaches the same sinks in the same order.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from trial_guard.core.events.event_sink import TrialEventSink
    from trial_guard.core.events.events import TrialEvent


class EventBus:
    """Delivers each trial event to every sink, in construction order."""

    def __init__(self, sinks: Iterable[TrialEventSink] = ()) -> None:
        self._sinks: tuple[TrialEventSink, ...] = tuple(sinks)
        self._closed = False

    @property
    def sinks(self) -> tuple[TrialEventSink, ...]:
        return self._sinks

    def emit(self, event: TrialEvent) -> None:
        for sink in self._sinks:
            sink.on_event(event)

    def close(self) -> None:
        """Close sinks holding resources (e.g. FileRecorderSink). Idempotent."""
        if self._closed:
            return
        self._closed = True

        for sink in self._sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()
