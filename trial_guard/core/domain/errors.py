"""Exception taxonomy for trial resolution.

Missing records are not errors: factors resolve them to NOT_AVAILABLE
locally. Everything below is either fatal for a read or reported and
tolerated for a persist.
"""

from __future__ import annotations


class TrialGuardError(Exception):
    """Root of all trial_guard errors."""


class TimestampDecodeError(TrialGuardError, ValueError):
    """A persisted timestamp value could not be decoded."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"Cannot decode persisted timestamp {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason


class SettingsStoreError(TrialGuardError, OSError):
    """The key-value settings store failed to read or write."""


class InstallRecordNotFoundError(TrialGuardError, LookupError):
    """The install-time record for an application identity does not exist."""

    def __init__(self, app_id: str) -> None:
        super().__init__(f"No install record for {app_id!r}")
        self.app_id = app_id


class FactorReadError(TrialGuardError):
    """A factor could not read its backing storage.

    Never raised for the missing-record case. Raised for corrupted values
    so that a damaged record cannot silently reset tamper detection.
    """

    def __init__(self, factor: str, message: str) -> None:
        super().__init__(f"{factor}: {message}")
        self.factor = factor


class FactorPersistError(TrialGuardError):
    """A factor could not persist the resolved decision."""

    def __init__(self, factor: str, message: str) -> None:
        super().__init__(f"{factor}: {message}")
        self.factor = factor
