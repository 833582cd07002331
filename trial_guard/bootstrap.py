"""Default resolver wiring for host applications.

The default factor set is:
- LastCheckedTrialFactor (rollback detection over a settings store)
- InstallRecordTrialFactor (first install time of the host distribution)

Any collaborator can be overridden; tests usually pass an
InMemorySettingsStore, a FixedClock and a StaticInstallRecordSource.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from trial_guard.adapters.clock import SystemClock
from trial_guard.adapters.install_records import PackageInstallRecordSource
from trial_guard.adapters.settings import JsonFileSettingsStore
from trial_guard.core.factors.install_record import InstallRecordTrialFactor
from trial_guard.core.factors.last_checked import LastCheckedTrialFactor
from trial_guard.core.ports.environment import TrialEnvironment, noop_backup_trigger
from trial_guard.core.resolver.trial_resolver import TrialResolver

if TYPE_CHECKING:
    from trial_guard.core.events.event_bus import EventBus
    from trial_guard.core.factors.base import TrialFactor
    from trial_guard.core.ports.clock import Clock
    from trial_guard.core.ports.environment import BackupTrigger
    from trial_guard.core.ports.install_record import InstallRecordSource
    from trial_guard.core.ports.settings_store import SettingsStore
    from trial_guard.core.resolver.trial_config import TrialConfig


def default_settings_dir(app_id: str) -> Path:
    return Path.home() / f".{app_id}"


def default_factors(config: TrialConfig) -> list[TrialFactor]:
    return [
        LastCheckedTrialFactor(config.last_checked),
        InstallRecordTrialFactor(),
    ]


def build_environment(
    config: TrialConfig,
    *,
    clock: Clock | None = None,
    settings: SettingsStore | None = None,
    install_records: InstallRecordSource | None = None,
    backup_trigger: BackupTrigger | None = None,
) -> TrialEnvironment:
    if settings is None:
        settings_dir = config.settings_dir or default_settings_dir(config.app_id)
        settings = JsonFileSettingsStore(settings_dir)

    return TrialEnvironment(
        app_id=config.app_id,
        clock=clock if clock is not None else SystemClock(),
        settings=settings,
        install_records=(
            install_records if install_records is not None else PackageInstallRecordSource()
        ),
        backup_trigger=backup_trigger if backup_trigger is not None else noop_backup_trigger,
    )


def build_resolver(
    config: TrialConfig,
    *,
    factors: list[TrialFactor] | None = None,
    clock: Clock | None = None,
    settings: SettingsStore | None = None,
    install_records: InstallRecordSource | None = None,
    backup_trigger: BackupTrigger | None = None,
    event_bus: EventBus | None = None,
) -> TrialResolver:
    """Build a TrialResolver with the default factors and adapters."""
    env = build_environment(
        config,
        clock=clock,
        settings=settings,
        install_records=install_records,
        backup_trigger=backup_trigger,
    )
    return TrialResolver(
        factors=factors if factors is not None else default_factors(config),
        env=env,
        config=config,
        event_bus=event_bus,
    )
