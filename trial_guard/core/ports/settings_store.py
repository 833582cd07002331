"""Key-value settings store protocol.

Factors persist their state through this boundary. Concrete stores must
survive process restarts; a namespace corresponds to one named settings
file.
"""

from __future__ import annotations

from typing import Protocol


class SettingsStore(Protocol):
    """Namespaced string key-value store.

    Implementations raise SettingsStoreError on I/O faults. A missing key is
    not a fault: get() returns the supplied default.
    """

    def get(self, namespace: str, key: str, default: str) -> str:
        """Return the value stored under (namespace, key), or default."""

    def put(self, namespace: str, key: str, value: str) -> None:
        """Stage a value and commit it before returning."""
