"""
Semantic test: file-backed settings store.

Invariant:
Values survive a new store instance over the same directory, missing keys
return the default, and unreadable or corrupted files surface as
SettingsStoreError.
"""

from __future__ import annotations

import json

import pytest

from trial_guard.adapters.settings import InMemorySettingsStore, JsonFileSettingsStore
from trial_guard.core.domain.errors import SettingsStoreError


def test_values_persist_across_instances(tmp_path) -> None:
    JsonFileSettingsStore(tmp_path).put("simple_trial", "last_check", "MTIz")

    assert JsonFileSettingsStore(tmp_path).get("simple_trial", "last_check", "x") == "MTIz"
    assert json.loads((tmp_path / "simple_trial.json").read_text()) == {"last_check": "MTIz"}


def test_missing_file_and_key_return_default(tmp_path) -> None:
    store = JsonFileSettingsStore(tmp_path / "not-yet-created")

    assert store.get("simple_trial", "last_check", "fallback") == "fallback"

    store.put("simple_trial", "other", "1")
    assert store.get("simple_trial", "last_check", "fallback") == "fallback"


def test_put_keeps_other_keys(tmp_path) -> None:
    store = JsonFileSettingsStore(tmp_path)
    store.put("ns", "a", "1")
    store.put("ns", "b", "2")

    assert store.get("ns", "a", "") == "1"
    assert store.get("ns", "b", "") == "2"
    assert [p.name for p in tmp_path.iterdir()] == ["ns.json"]


def test_corrupted_file_raises(tmp_path) -> None:
    (tmp_path / "ns.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(SettingsStoreError):
        JsonFileSettingsStore(tmp_path).get("ns", "a", "")


def test_write_into_file_path_raises(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(SettingsStoreError):
        JsonFileSettingsStore(blocker).put("ns", "a", "1")


@pytest.mark.parametrize("namespace", ["", "..", "a/b"])
def test_invalid_namespace_rejected(tmp_path, namespace: str) -> None:
    with pytest.raises(ValueError):
        JsonFileSettingsStore(tmp_path).get(namespace, "a", "")


def test_in_memory_clear_simulates_wiped_app_data() -> None:
    store = InMemorySettingsStore({"ns": {"a": "1"}, "other": {"b": "2"}})

    store.clear("ns")
    assert store.get("ns", "a", "gone") == "gone"
    assert store.get("other", "b", "") == "2"

    store.clear()
    assert store.snapshot() == {}
