"""
Semantic test: repeated checks with the default factor set.

Invariant:
The trial start is remembered by the install record across checks,
clearing the settings store does not restart the trial, and setting the
clock back expires the trial for the next check. That expiry lasts for a
single check, after which the install record decides again.
"""

from __future__ import annotations

from trial_guard.adapters.clock import FixedClock
from trial_guard.adapters.install_records import StaticInstallRecordSource
from trial_guard.adapters.settings import InMemorySettingsStore, JsonFileSettingsStore
from trial_guard.bootstrap import build_resolver
from trial_guard.core.domain.timestamps import MS_PER_DAY, TRIAL_INVALID, decode_timestamp
from trial_guard.core.resolver.trial_config import TrialConfig

INSTALL_MS = 1_700_000_000_000


def make_config(**kwargs) -> TrialConfig:
    return TrialConfig.for_days(7, app_id="demo-app", **kwargs)


def test_repeated_checks_count_down_from_install() -> None:
    clock = FixedClock(INSTALL_MS)
    settings = InMemorySettingsStore()
    resolver = build_resolver(
        make_config(),
        clock=clock,
        settings=settings,
        install_records=StaticInstallRecordSource({"demo-app": INSTALL_MS}),
    )

    first = resolver.check()
    assert not first.is_trial_over
    assert first.time_remaining_ms == 7 * MS_PER_DAY

    clock.advance(3 * MS_PER_DAY)
    assert resolver.check().time_remaining_ms == 4 * MS_PER_DAY

    settings.clear()
    clock.advance(4 * MS_PER_DAY)
    assert resolver.check().is_trial_over


def test_clock_rollback_expires_next_check_once() -> None:
    clock = FixedClock(INSTALL_MS + 2 * MS_PER_DAY)
    settings = InMemorySettingsStore()
    resolver = build_resolver(
        make_config(),
        clock=clock,
        settings=settings,
        install_records=StaticInstallRecordSource({"demo-app": INSTALL_MS}),
    )

    assert not resolver.check().is_trial_over

    clock.advance(-MS_PER_DAY)
    rolled_back = resolver.check()
    assert rolled_back.is_trial_over
    assert rolled_back.time_remaining_ms == 0
    assert decode_timestamp(settings.get("simple_trial", "last_check", "")) == TRIAL_INVALID

    after = resolver.check()
    assert not after.is_trial_over
    assert after.time_remaining_ms == 6 * MS_PER_DAY


def test_file_store_survives_new_resolver(tmp_path) -> None:
    clock = FixedClock(INSTALL_MS)
    config = make_config(settings_dir=tmp_path)
    records = StaticInstallRecordSource({"demo-app": INSTALL_MS})
    backups: list[int] = []

    build_resolver(
        config,
        clock=clock,
        install_records=records,
        backup_trigger=lambda: backups.append(clock.now_ms()),
    ).check()
    assert (tmp_path / "simple_trial.json").exists()
    assert backups == [INSTALL_MS]

    clock.advance(-1)
    stats = build_resolver(config, clock=clock, install_records=records).check()
    assert stats.is_trial_over


def test_uninstalled_app_without_history_starts_now() -> None:
    clock = FixedClock(INSTALL_MS)
    resolver = build_resolver(
        make_config(),
        clock=clock,
        settings=InMemorySettingsStore(),
        install_records=StaticInstallRecordSource(),
    )

    decision = resolver.resolve()

    assert decision.is_first_run
    assert decision.effective_timestamp == INSTALL_MS


def test_json_file_store_is_default_settings(tmp_path) -> None:
    resolver = build_resolver(
        make_config(settings_dir=tmp_path),
        clock=FixedClock(INSTALL_MS),
        install_records=StaticInstallRecordSource({"demo-app": INSTALL_MS}),
    )

    resolver.check()

    assert decode_timestamp(
        JsonFileSettingsStore(tmp_path).get("simple_trial", "last_check", "")
    ) == INSTALL_MS
