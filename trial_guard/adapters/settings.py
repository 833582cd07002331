"""Settings store adapters.

InMemorySettingsStore is process-local and meant for tests and previews.
JsonFileSettingsStore keeps one JSON object per namespace under a root
directory and survives restarts.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from trial_guard.core.domain.errors import SettingsStoreError

LOGGER = logging.getLogger(__name__)


class InMemorySettingsStore:
    """Dict-backed SettingsStore."""

    def __init__(self, initial: dict[str, dict[str, str]] | None = None) -> None:
        self._data: dict[str, dict[str, str]] = {
            namespace: dict(values) for namespace, values in (initial or {}).items()
        }

    def get(self, namespace: str, key: str, default: str) -> str:
        return self._data.get(namespace, {}).get(key, default)

    def put(self, namespace: str, key: str, value: str) -> None:
        self._data.setdefault(namespace, {})[key] = value

    def clear(self, namespace: str | None = None) -> None:
        """Drop one namespace, or everything (simulates cleared app data)."""
        if namespace is None:
            self._data.clear()
        else:
            self._data.pop(namespace, None)

    def snapshot(self) -> dict[str, dict[str, str]]:
        return {namespace: dict(values) for namespace, values in self._data.items()}


class JsonFileSettingsStore:
    """File-backed SettingsStore.

    Layout:
        <root>/<namespace>.json  ->  {"<key>": "<value>", ...}

    put() commits by writing a temporary file in the same directory and
    atomically replacing the namespace file. Concurrent writers from
    several processes are not coordinated.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).expanduser()

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, namespace: str) -> Path:
        if not namespace or Path(namespace).name != namespace or namespace in {".", ".."}:
            raise ValueError(f"Invalid settings namespace: {namespace!r}")
        return self._root / f"{namespace}.json"

    def get(self, namespace: str, key: str, default: str) -> str:
        value = self._load(self.path_for(namespace)).get(key, default)
        if not isinstance(value, str):
            raise SettingsStoreError(f"Non-string value for {namespace}/{key}")
        return value

    def put(self, namespace: str, key: str, value: str) -> None:
        path = self.path_for(namespace)
        data = self._load(path)
        data[key] = value
        self._commit(path, data)

    @staticmethod
    def _load(path: Path) -> dict[str, object]:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise SettingsStoreError(f"Cannot read {path}: {exc}") from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SettingsStoreError(f"Corrupted settings file {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise SettingsStoreError(f"Settings file {path} does not hold an object")
        return data

    @staticmethod
    def _commit(path: Path, data: dict[str, object]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=".tmp", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2, sort_keys=True)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise SettingsStoreError(f"Cannot write {path}: {exc}") from exc

        LOGGER.debug("Settings committed", extra={"path": str(path)})
