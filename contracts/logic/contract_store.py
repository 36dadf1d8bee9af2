"""
contract_store.py

In-memory contract list persisted as one blob under ``SavedContracts``.

Every mutation rewrites the whole list. Lookups are linear scans by id.
Store errors never propagate: load failures yield an empty list, save
failures are logged and reported through :class:`StoreResult`.
"""

from __future__ import annotations

import random
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from cryptography.fernet import InvalidToken

from core.contracts.settings import ISettingsManager
from core.helpers.date_time_helper import utc_now
from core.logging.logic.logger import logger
from core.security.blob_cipher import BlobCipher
from core.settings.logic.settings_manager import StoreKeys

from ..models.contract import Contract
from .contract_codec import ContractDecodeError, decode_contracts, encode_contracts
from .sample_data import SAMPLE_COUNT, sample_contracts

_FEATURE = "Contracts"


@dataclass(frozen=True)
class StoreResult:
    success: bool
    message: str = ""
    persisted: bool = False


class ContractStore:
    """Holds the contract list for the lifetime of the process."""

    # ------------------------------------------------------------------ #
    # Construction                                                       #
    # ------------------------------------------------------------------ #
    def __init__(self, settings: ISettingsManager, *,
                 cipher: Optional[BlobCipher] = None,
                 sample_count: int = SAMPLE_COUNT,
                 rng: Optional[random.Random] = None,
                 now: Callable[[], datetime] = utc_now) -> None:
        self._sm = settings
        self._cipher = cipher
        self._sample_count = sample_count
        self._rng = rng
        self._now = now
        self._contracts: List[Contract] = []

    # ------------------------------------------------------------------ #
    # Load                                                               #
    # ------------------------------------------------------------------ #
    def load(self) -> int:
        """
        Read the persisted list (failure reads as empty); seed samples if
        the result is empty. Returns the number of records held.
        """
        self._contracts = self._read()
        if not self._contracts and self._sample_count > 0:
            self._contracts = sample_contracts(self._sample_count, rng=self._rng, now=self._now)
            logger.log(_FEATURE, "SamplesSeeded", message=f"{len(self._contracts)} sample contracts")
            self._write()
        logger.log(_FEATURE, "Loaded", message=f"{len(self._contracts)} contracts")
        return len(self._contracts)

    def _read(self) -> List[Contract]:
        blob = self._sm.get(StoreKeys.SAVED_CONTRACTS, None)
        if blob is None:
            logger.log(_FEATURE, "NoSavedContracts")
            return []
        if not isinstance(blob, bytes):
            logger.log(_FEATURE, "LoadFailed", level="ERROR", message="unexpected value type")
            return []
        try:
            if self._cipher is not None:
                blob = self._cipher.decrypt(blob)
            return decode_contracts(blob)
        except (InvalidToken, ContractDecodeError, ValueError, sqlite3.Error) as exc:
            logger.log(_FEATURE, "LoadFailed", level="ERROR", message=repr(exc))
            return []

    # ------------------------------------------------------------------ #
    # Save                                                               #
    # ------------------------------------------------------------------ #
    def _write(self) -> bool:
        try:
            blob = encode_contracts(self._contracts)
            if self._cipher is not None:
                blob = self._cipher.encrypt(blob)
            self._sm.set(StoreKeys.SAVED_CONTRACTS, blob)
        except (TypeError, ValueError, sqlite3.Error) as exc:
            logger.log(_FEATURE, "SaveFailed", level="ERROR", message=repr(exc))
            return False
        logger.log(_FEATURE, "Saved", level="DEBUG", message=f"{len(self._contracts)} contracts")
        return True

    # ------------------------------------------------------------------ #
    # CRUD                                                               #
    # ------------------------------------------------------------------ #
    def add(self, contract: Contract) -> StoreResult:
        """Append and persist. The caller guarantees a fresh id."""
        self._contracts.append(contract)
        logger.log(_FEATURE, "Added", reference_id=contract.id, message=contract.title)
        persisted = self._write()
        return StoreResult(True, "Contract added", persisted)

    def update(self, contract: Contract) -> StoreResult:
        idx = self._index_of(contract.id)
        if idx is None:
            logger.log(_FEATURE, "UpdateNotFound", level="WARNING", reference_id=contract.id)
            return StoreResult(False, "Contract not found")
        self._contracts[idx] = contract
        logger.log(_FEATURE, "Updated", reference_id=contract.id, message=contract.title)
        return StoreResult(True, "Contract updated", self._write())

    def delete(self, contract: Contract) -> StoreResult:
        idx = self._index_of(contract.id)
        if idx is None:
            logger.log(_FEATURE, "DeleteNotFound", level="WARNING", reference_id=contract.id)
            return StoreResult(False, "Contract not found")
        removed = self._contracts.pop(idx)
        logger.log(_FEATURE, "Deleted", reference_id=removed.id, message=removed.title)
        return StoreResult(True, "Contract deleted", self._write())

    def clear_all(self) -> StoreResult:
        """Drop every record and the persisted blob."""
        count = len(self._contracts)
        self._contracts = []
        try:
            self._sm.delete(StoreKeys.SAVED_CONTRACTS)
        except sqlite3.Error as exc:
            logger.log(_FEATURE, "ResetFailed", level="ERROR", message=repr(exc))
            return StoreResult(True, "All contracts removed", False)
        logger.log(_FEATURE, "Reset", message=f"{count} contracts removed")
        return StoreResult(True, "All contracts removed", True)

    # ------------------------------------------------------------------ #
    # Query                                                              #
    # ------------------------------------------------------------------ #
    def list(self) -> List[Contract]:
        """Snapshot in insertion order."""
        return list(self._contracts)

    def get(self, contract_id: str) -> Optional[Contract]:
        idx = self._index_of(contract_id)
        return None if idx is None else self._contracts[idx]

    def __len__(self) -> int:
        return len(self._contracts)

    def _index_of(self, contract_id: str) -> Optional[int]:
        for i, c in enumerate(self._contracts):
            if c.id == contract_id:
                return i
        return None
