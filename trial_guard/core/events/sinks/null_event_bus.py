from __future__ import annotations

from typing import TYPE_CHECKING

from trial_guard.core.events.event_bus import EventBus

if TYPE_CHECKING:
    from trial_guard.core.events.events import TrialEvent


class NullEventBus(EventBus):
    """Bus used when the host injects none; drops every event."""

    def emit(self, event: TrialEvent) -> None:
        return
