"""
core/settings/logic/settings_manager.py
=======================================

High-level API for the local key-value blob store (the app's "defaults").

Well-known keys live in :class:`StoreKeys`. Unlike the repository, the
manager never lets ``sqlite3`` errors escape from reads: a broken store
reads as "no value".
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

from core.contracts.settings import ISettingsManager
from core.logging.logic.logger import logger
from core.settings.logic.settings_repository import SettingsRepository

DEFAULT_NAMESPACE = "defaults"


class StoreKeys:
    SAVED_CONTRACTS = "SavedContracts"
    USER_PIN_CODE = "UserPINCode"
    IS_FIRST_LAUNCH = "IsFirstLaunch"
    USE_PIN = "UsePIN"
    USE_BIOMETRICS = "UseBiometrics"
    ONBOARDING_COMPLETE = "OnboardingComplete"
    STORE_KEY = "StoreEncryptionKey"
    STORE_KEY_RING = "StoreEncryptionKeyRing"


class SettingsManager(ISettingsManager):

    def __init__(self, db_path: Path | str) -> None:
        self._repo = SettingsRepository(db_path)

    # ------------------------------------------------------------------ #
    #  API                                                               #
    # ------------------------------------------------------------------ #
    def get(self, key: str, fallback: Any | None = None, *,
            namespace: str = DEFAULT_NAMESPACE) -> Any | None:
        try:
            return self._repo.get(namespace, key, fallback)
        except sqlite3.Error as exc:
            logger.log("SettingsManager", "ReadFailed", level="ERROR",
                       reference_id=key, message=str(exc))
            return fallback

    def set(self, key: str, value: Any, *, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._repo.set(namespace, key, value)
        logger.log("SettingsManager", "Set", level="DEBUG", message=f"{namespace}.{key}")

    def delete(self, key: str, *, namespace: str = DEFAULT_NAMESPACE) -> bool:
        return self._repo.delete(namespace, key)

    # ---------- typed helpers ----------------------------------------- #
    def get_bool(self, key: str, fallback: bool = False, *,
                 namespace: str = DEFAULT_NAMESPACE) -> bool:
        val = self.get(key, None, namespace=namespace)
        return fallback if val is None else bool(val)

    def close(self) -> None:
        self._repo.close()
