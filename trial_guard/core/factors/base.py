"""Trial factor base class.

A factor is an independent source of opinion about when the trial began.
It may be able to read a candidate start timestamp, persist the resolved
decision, or both. The defaults make a bare factor well-formed: it has no
opinion and persists nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from trial_guard.core.domain.timestamps import NOT_AVAILABLE

if TYPE_CHECKING:
    from trial_guard.core.ports.environment import TrialEnvironment


class TrialFactor:
    """Base behavior shared by all factors.

    Factors are immutable after construction; all state lives in the
    backing storage reached through the TrialEnvironment.
    """

    @property
    def name(self) -> str:
        """Identifier used in logs, events and errors."""
        return type(self).__name__

    def read_timestamp(self, env: TrialEnvironment) -> int:
        """Read this factor's candidate trial start timestamp.

        Must return NOT_AVAILABLE if nothing has been recorded yet or the
        record was cleared. Returns TRIAL_INVALID when the factor detects
        tampering.
        """
        return NOT_AVAILABLE

    def persist_timestamp(self, timestamp: int, env: TrialEnvironment) -> None:
        """Persist the resolved timestamp, if this factor has storage.

        The default implementation is a noop.
        """
        return

    def __repr__(self) -> str:
        return f"{self.name}()"
