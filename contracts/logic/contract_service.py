"""
contract_service.py

Save workflow of the contract form and the detail-screen actions.

A draft is save-eligible only with a non-empty title and a signature. The
signature is either PNG bytes already attached to the draft or the lines of
a capture session, rasterized here at full quality.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Optional

from core.logging.logic.logger import logger
from signature.logic.signature_service import SignatureService
from signature.models.stroke import Line

from ..models.contract import Contract
from ..models.contract_enums import ContractStatus, ContractType
from .contract_store import ContractStore, StoreResult

_FEATURE = "ContractForm"

MSG_TITLE_MISSING = "Please enter a contract title"
MSG_SIGNATURE_MISSING = "Please add a signature"
MSG_SIGNATURE_UNAVAILABLE = "Signature unavailable"
MSG_SAVED = "Contract saved successfully!"


@dataclass(frozen=True)
class ContractDraft:
    """Form state before a record exists."""
    title: str
    contract_type: ContractType
    start_date: datetime
    end_date: datetime
    participants: str = ""
    notes: str = ""
    signature_data: Optional[bytes] = None
    attachment_data: Optional[bytes] = None
    attachment_name: Optional[str] = None


@dataclass(frozen=True)
class SaveResult:
    success: bool
    message: str = ""
    contract: Optional[Contract] = None


class ContractService:

    def __init__(self, *, store: ContractStore, signatures: SignatureService) -> None:
        self._store = store
        self._signatures = signatures

    # ------------------------------------------------------------------ #
    # Signature                                                          #
    # ------------------------------------------------------------------ #
    def render_signature(self, lines: Iterable[Line]) -> Optional[bytes]:
        """
        Full-quality PNG for captured *lines*; None if nothing was drawn or
        rendering failed.
        """
        lines = list(lines)
        if not any(l.points for l in lines):
            return None
        png = self._signatures.create_high_quality(lines)
        if png is None:
            logger.log(_FEATURE, "SignatureUnavailable", level="ERROR")
        return png

    # ------------------------------------------------------------------ #
    # Save                                                               #
    # ------------------------------------------------------------------ #
    @staticmethod
    def validate(draft: ContractDraft) -> Optional[str]:
        """Return the first validation message, or None if save-eligible."""
        if not draft.title.strip():
            return MSG_TITLE_MISSING
        if draft.signature_data is None:
            return MSG_SIGNATURE_MISSING
        return None

    def save_draft(self, draft: ContractDraft, *,
                   lines: Optional[Iterable[Line]] = None) -> SaveResult:
        """
        Validate, rasterize pending *lines* if no PNG is attached yet,
        create the record and add it to the store.
        """
        if not draft.title.strip():
            return SaveResult(False, MSG_TITLE_MISSING)

        if draft.signature_data is None and lines is not None:
            lines = list(lines)
            if any(l.points for l in lines):
                png = self.render_signature(lines)
                if png is None:
                    return SaveResult(False, MSG_SIGNATURE_UNAVAILABLE)
                draft = replace(draft, signature_data=png)

        problem = self.validate(draft)
        if problem:
            logger.log(_FEATURE, "ValidationFailed", level="DEBUG", message=problem)
            return SaveResult(False, problem)

        contract = Contract(
            title=draft.title.strip(),
            contract_type=draft.contract_type,
            start_date=draft.start_date,
            end_date=draft.end_date,
            participants=draft.participants,
            notes=draft.notes,
            signature_data=draft.signature_data,
            attachment_data=draft.attachment_data,
            attachment_name=draft.attachment_name,
        )
        self._store.add(contract)
        logger.log(_FEATURE, "Saved", reference_id=contract.id,
                   message=f"signature {len(contract.signature_data or b'')} bytes")
        return SaveResult(True, MSG_SAVED, contract)

    # ------------------------------------------------------------------ #
    # Detail actions                                                     #
    # ------------------------------------------------------------------ #
    def change_status(self, contract: Contract, status: ContractStatus) -> StoreResult:
        return self._store.update(contract.with_status(status))

    def delete(self, contract: Contract) -> StoreResult:
        return self._store.delete(contract)

    def reset_all_data(self) -> StoreResult:
        return self._store.clear_all()
