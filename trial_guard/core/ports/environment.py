"""Explicit runtime environment passed to every factor operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from trial_guard.core.ports.clock import Clock
    from trial_guard.core.ports.install_record import InstallRecordSource
    from trial_guard.core.ports.settings_store import SettingsStore

# Fire-and-forget request to replicate the settings store (e.g. to a
# backup that survives reinstall). Its outcome is never observed.
BackupTrigger = Callable[[], None]


def noop_backup_trigger() -> None:
    """Backup trigger for hosts without a sync mechanism."""
    return


@dataclass(frozen=True, slots=True)
class TrialEnvironment:
    """Immutable bundle of the collaborators factors may use.

    One TrialEnvironment == one host application identity.
    """

    app_id: str

    clock: Clock
    settings: SettingsStore
    install_records: InstallRecordSource
    backup_trigger: BackupTrigger = noop_backup_trigger

    def __post_init__(self) -> None:
        if not self.app_id:
            raise ValueError("app_id must be non-empty")

    def now_ms(self) -> int:
        return self.clock.now_ms()
