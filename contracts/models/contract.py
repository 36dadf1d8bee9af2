"""
contract.py

The persisted contract record.

Records are immutable: ``id`` and ``created_at`` are fixed at construction
and edits go through :meth:`Contract.with_changes`, which keeps both.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from core.helpers.date_time_helper import ensure_utc, utc_now
from .contract_enums import ContractStatus, ContractType


def new_contract_id() -> str:
    return str(uuid.uuid4()).upper()


@dataclass(frozen=True)
class Contract:
    title: str
    contract_type: ContractType
    start_date: datetime
    end_date: datetime
    participants: str = ""
    notes: str = ""
    status: ContractStatus = ContractStatus.ACTIVE
    signature_data: Optional[bytes] = None      # PNG from the signature rasterizer
    attachment_data: Optional[bytes] = None
    attachment_name: Optional[str] = None
    id: str = field(default_factory=new_contract_id)
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        # naive values are local time; stored dates are always aware UTC
        for name in ("start_date", "end_date", "created_at"):
            object.__setattr__(self, name, ensure_utc(getattr(self, name)))

    def with_changes(self, **changes) -> "Contract":
        """Copy with edited fields; identity and creation time are kept."""
        for frozen_field in ("id", "created_at"):
            if frozen_field in changes:
                raise ValueError(f"'{frozen_field}' cannot be changed")
        return replace(self, **changes)

    def with_status(self, status: ContractStatus) -> "Contract":
        return self.with_changes(status=status)

    @property
    def has_signature(self) -> bool:
        return self.signature_data is not None

    def __repr__(self) -> str:
        return (f"Contract({self.id}: {self.title!r} [{self.contract_type.value}], "
                f"status={self.status.value}, signed={self.has_signature})")
