"""Immutable install-time record protocol."""

from __future__ import annotations

from typing import Protocol


class InstallRecordSource(Protocol):
    """Read-only source of an application's first install time.

    The record is maintained outside the application and survives updates,
    but may be reset by a reinstall.
    """

    def first_install_time_ms(self, app_id: str) -> int:
        """Return the first install time in epoch milliseconds.

        Raises InstallRecordNotFoundError if no record exists for app_id.
        """
