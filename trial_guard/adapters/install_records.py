"""Install record adapters."""

from __future__ import annotations

import logging
import os
from importlib.metadata import PackageNotFoundError, distribution
from typing import Mapping

from trial_guard.core.domain.errors import InstallRecordNotFoundError

LOGGER = logging.getLogger(__name__)

_METADATA_FILES = frozenset({"METADATA", "PKG-INFO"})


class StaticInstallRecordSource:
    """Install times from a fixed mapping of app_id -> epoch ms."""

    def __init__(self, records: Mapping[str, int] | None = None) -> None:
        self._records = dict(records or {})

    def first_install_time_ms(self, app_id: str) -> int:
        if app_id not in self._records:
            raise InstallRecordNotFoundError(app_id)
        return self._records[app_id]


class PackageInstallRecordSource:
    """Install time of an installed Python distribution.

    app_id is the distribution name (as passed to importlib.metadata). The
    record is the modification time of the distribution's metadata file,
    which the installer writes once per install. Unlike an OS package
    manager record, upgrading the distribution rewrites it.
    """

    def first_install_time_ms(self, app_id: str) -> int:
        try:
            dist = distribution(app_id)
        except PackageNotFoundError as exc:
            raise InstallRecordNotFoundError(app_id) from exc

        for file in dist.files or ():
            if file.name not in _METADATA_FILES:
                continue
            try:
                stat = os.stat(file.locate())
            except OSError:
                LOGGER.debug(
                    "Metadata file not accessible",
                    extra={"app_id": app_id, "file": str(file)},
                )
                continue
            return stat.st_mtime_ns // 1_000_000

        raise InstallRecordNotFoundError(app_id)
