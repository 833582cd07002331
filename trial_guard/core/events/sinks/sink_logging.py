"""
Logging event sink.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from trial_guard.core.events.events import PersistFailedEvent, TamperDetectedEvent

if TYPE_CHECKING:
    from trial_guard.core.events.events import TrialEvent


class LoggingEventSink:
    """Logs trial events using the standard logging module.

    Tamper and persist-failure events are logged at WARNING, the rest at INFO.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def on_event(self, event: TrialEvent) -> None:
        level = logging.INFO
        if isinstance(event, (TamperDetectedEvent, PersistFailedEvent)):
            level = logging.WARNING
        self._logger.log(level, type(event).__name__, extra={"event": event})
