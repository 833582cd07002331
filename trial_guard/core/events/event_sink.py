"""
Trial event sink interface.

A sink observes trial checks; it must not influence their outcome.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from trial_guard.core.events.events import TrialEvent


class TrialEventSink(Protocol):
    def on_event(self, event: TrialEvent) -> None:
        """Observe one trial event."""
