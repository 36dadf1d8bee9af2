"""
pin_repository.py

Persistence of :class:`AuthConfig` in the key-value store, plus PIN hashing.

PINs are stored as bcrypt hashes. A cleartext value left by an older store
still verifies by plain equality and is flagged for re-hashing.
"""

from __future__ import annotations

import sqlite3
from typing import Tuple

import bcrypt

from authentication.models.auth_state import AuthConfig
from core.contracts.settings import ISettingsManager
from core.logging.logic.logger import logger
from core.settings.logic.settings_manager import StoreKeys

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


class PinRepository:
    """Loads/saves the gate configuration."""

    def __init__(self, settings: ISettingsManager, *, rounds: int = 12) -> None:
        self._sm = settings
        self._rounds = max(4, int(rounds))

    # ------------------------------------------------------------------ #
    # Load / Save                                                        #
    # ------------------------------------------------------------------ #
    def load(self) -> AuthConfig:
        pin = str(self._sm.get(StoreKeys.USER_PIN_CODE, "") or "")
        use_bio = bool(self._sm.get(StoreKeys.USE_BIOMETRICS, True))
        if pin:
            cfg = AuthConfig(pin_code=pin, is_first_launch=False, use_pin=True,
                             use_biometrics=use_bio)
        else:
            cfg = AuthConfig(pin_code="", is_first_launch=True, use_pin=False,
                             use_biometrics=use_bio)
        logger.log("Auth", "ConfigLoaded",
                   message=f"first_launch={cfg.is_first_launch} use_pin={cfg.use_pin}")
        return cfg

    def save(self, cfg: AuthConfig) -> bool:
        """Persist everything except the session flag. False on storage error."""
        try:
            self._sm.set(StoreKeys.USER_PIN_CODE, cfg.pin_code)
            self._sm.set(StoreKeys.IS_FIRST_LAUNCH, cfg.is_first_launch)
            self._sm.set(StoreKeys.USE_PIN, cfg.use_pin)
            self._sm.set(StoreKeys.USE_BIOMETRICS, cfg.use_biometrics)
            return True
        except sqlite3.Error as exc:
            logger.log("Auth", "SaveFailed", level="ERROR", message=str(exc))
            return False

    # ------------------------------------------------------------------ #
    # Hashing                                                            #
    # ------------------------------------------------------------------ #
    def hash_pin(self, pin: str) -> str:
        return bcrypt.hashpw(pin.encode(), bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    @staticmethod
    def is_hashed(stored: str) -> bool:
        return stored.startswith(_BCRYPT_PREFIXES)

    def verify(self, candidate: str, stored: str) -> Tuple[bool, bool]:
        """
        Check *candidate* against *stored*.

        :return: (matches, needs_rehash)
        """
        if not stored:
            return False, False
        if self.is_hashed(stored):
            try:
                return bcrypt.checkpw(candidate.encode(), stored.encode("ascii")), False
            except ValueError:
                logger.log("Auth", "CorruptHash", level="ERROR")
                return False, False
        ok = candidate == stored
        return ok, ok
