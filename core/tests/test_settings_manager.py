"""Key-value store typing and persistence."""
from __future__ import annotations

from core.common.db_interface import MEMORY_DB
from core.settings.logic.settings_manager import SettingsManager, StoreKeys


def test_missing_key_returns_fallback() -> None:
    sm = SettingsManager(MEMORY_DB)
    assert sm.get("nope") is None
    assert sm.get("nope", 42) == 42


def test_scalars_keep_their_type() -> None:
    sm = SettingsManager(MEMORY_DB)
    sm.set(StoreKeys.USE_PIN, True)
    sm.set("count", 3)
    sm.set(StoreKeys.USER_PIN_CODE, "1234")
    sm.set("ring", ["a", "b"])

    assert sm.get(StoreKeys.USE_PIN) is True
    assert sm.get("count") == 3
    assert sm.get(StoreKeys.USER_PIN_CODE) == "1234"
    assert sm.get("ring") == ["a", "b"]


def test_bytes_are_stored_raw() -> None:
    sm = SettingsManager(MEMORY_DB)
    blob = b"\x00\x01[not json\xff"
    sm.set(StoreKeys.SAVED_CONTRACTS, blob)
    got = sm.get(StoreKeys.SAVED_CONTRACTS)
    assert isinstance(got, bytes)
    assert got == blob


def test_overwrite_and_delete() -> None:
    sm = SettingsManager(MEMORY_DB)
    sm.set("k", "one")
    sm.set("k", "two")
    assert sm.get("k") == "two"
    assert sm.delete("k") is True
    assert sm.delete("k") is False
    assert sm.get("k") is None


def test_namespaces_are_separate() -> None:
    sm = SettingsManager(MEMORY_DB)
    sm.set("k", 1)
    sm.set("k", 2, namespace="other")
    assert sm.get("k") == 1
    assert sm.get("k", namespace="other") == 2


def test_typed_helpers() -> None:
    sm = SettingsManager(MEMORY_DB)
    assert sm.get_bool(StoreKeys.ONBOARDING_COMPLETE) is False
    assert sm.get_bool(StoreKeys.USE_BIOMETRICS, True) is True
    sm.set(StoreKeys.ONBOARDING_COMPLETE, True)
    assert sm.get_bool(StoreKeys.ONBOARDING_COMPLETE) is True
    assert sm.get_bool("missing", True) is True


def test_values_survive_reopen(tmp_path) -> None:
    path = tmp_path / "store.db"
    sm = SettingsManager(path)
    sm.set(StoreKeys.USER_PIN_CODE, "9999")
    sm.set(StoreKeys.SAVED_CONTRACTS, b"[]")
    sm.close()

    again = SettingsManager(path)
    assert again.get(StoreKeys.USER_PIN_CODE) == "9999"
    assert again.get(StoreKeys.SAVED_CONTRACTS) == b"[]"
    again.close()
