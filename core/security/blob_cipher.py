# core/security/blob_cipher.py
from __future__ import annotations

from typing import List
from cryptography.fernet import Fernet, InvalidToken

from core.contracts.settings import ISettingsManager
from core.logging.logic.logger import logger
from core.settings.logic.settings_manager import StoreKeys


def _fernet_or_none(key) -> Fernet | None:
    if not isinstance(key, str) or not key:
        return None
    try:
        return Fernet(key.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        return None


def _load_keyring(sm: ISettingsManager) -> List[Fernet]:
    """
    Create a list of Fernet instances:
    - first entry is the current key (used for ENCRYPT),
    - remaining entries are legacy keys (used only for DECRYPT).
    Keys are stored as base64 strings (Fernet.generate_key()) in the store.
    A missing or malformed current key is replaced by a fresh one.
    """
    cur_key_str = sm.get(StoreKeys.STORE_KEY, None)
    ring_list = sm.get(StoreKeys.STORE_KEY_RING, [])
    if not isinstance(ring_list, list):
        ring_list = []

    current = _fernet_or_none(cur_key_str)
    if current is None:
        if cur_key_str:
            logger.log("BlobCipher", "MalformedKeyReplaced", level="ERROR")
        cur_key_str = Fernet.generate_key().decode("ascii")
        sm.set(StoreKeys.STORE_KEY, cur_key_str)
        sm.set(StoreKeys.STORE_KEY_RING, ring_list)
        logger.log("BlobCipher", "KeyCreated")
        current = Fernet(cur_key_str.encode("ascii"))

    ferns: List[Fernet] = [current]
    for k in ring_list:
        legacy = _fernet_or_none(k)
        if legacy is None:
            logger.log("BlobCipher", "MalformedLegacyKey", level="WARNING")
            continue
        ferns.append(legacy)
    return ferns


class BlobCipher:
    """
    Symmetric at-rest encryption for blobs kept in the key-value store.

    The key lives next to the data; the goal is keeping the blob unreadable
    to casual inspection of the database file, not a hardened vault.
    """

    def __init__(self, settings: ISettingsManager) -> None:
        self._sm = settings

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt *data* using the CURRENT key (first entry in keyring)."""
        return _load_keyring(self._sm)[0].encrypt(data)

    def decrypt(self, token: bytes) -> bytes:
        """
        Try the CURRENT key first, then legacy keys.
        If all fail, accept legacy plaintext JSON arrays as-is.
        Otherwise raise InvalidToken.
        """
        for f in _load_keyring(self._sm):
            try:
                return f.decrypt(token)
            except InvalidToken:
                continue

        if token.lstrip()[:1] == b"[":
            return token
        raise InvalidToken("Unable to decrypt blob")

    def rotate(self) -> None:
        """Make a fresh key current; the old one stays decrypt-only."""
        ring = [f for f in (self._sm.get(StoreKeys.STORE_KEY_RING, []) or [])]
        old = self._sm.get(StoreKeys.STORE_KEY, None)
        if old:
            ring.insert(0, old)
        self._sm.set(StoreKeys.STORE_KEY, Fernet.generate_key().decode("ascii"))
        self._sm.set(StoreKeys.STORE_KEY_RING, ring)
        logger.log("BlobCipher", "KeyRotated", message=f"legacy keys: {len(ring)}")
