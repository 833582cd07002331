"""
Semantic test: install record sources.

Invariant:
An unknown application identity raises InstallRecordNotFoundError; an
installed distribution yields a past timestamp in epoch milliseconds.
"""

from __future__ import annotations

import time

import pytest

from trial_guard.adapters.install_records import (
    PackageInstallRecordSource,
    StaticInstallRecordSource,
)
from trial_guard.core.domain.errors import InstallRecordNotFoundError


def test_static_source_lookup() -> None:
    source = StaticInstallRecordSource({"demo-app": 1234})

    assert source.first_install_time_ms("demo-app") == 1234
    with pytest.raises(InstallRecordNotFoundError):
        source.first_install_time_ms("missing-app")


def test_package_source_reads_installed_distribution() -> None:
    install_ms = PackageInstallRecordSource().first_install_time_ms("pytest")

    assert 0 < install_ms <= time.time_ns() // 1_000_000


def test_package_source_unknown_distribution() -> None:
    with pytest.raises(InstallRecordNotFoundError) as excinfo:
        PackageInstallRecordSource().first_install_time_ms("no-such-distribution-xyz")

    assert excinfo.value.app_id == "no-such-distribution-xyz"
