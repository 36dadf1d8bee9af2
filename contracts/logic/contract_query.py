"""
contract_query.py

Sorting, filtering and counting used by the list and search screens.
Pure functions over contract snapshots; nothing here touches the store.
"""

from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Iterable, List, Optional

from ..models.contract import Contract
from ..models.contract_enums import ContractStatus, ContractType

ALL = "All"


class SortKey(str, Enum):
    DATE = "Date"        # creation date, newest first
    STATUS = "Status"    # status label A-Z
    TYPE = "Type"        # type label A-Z


def sort_contracts(contracts: Iterable[Contract], key: Optional[SortKey]) -> List[Contract]:
    items = list(contracts)
    if key == SortKey.DATE:
        return sorted(items, key=lambda c: c.created_at, reverse=True)
    if key == SortKey.STATUS:
        return sorted(items, key=lambda c: c.status.value)
    if key == SortKey.TYPE:
        return sorted(items, key=lambda c: c.contract_type.value)
    return items


def matches_text(contract: Contract, text: str) -> bool:
    """Case-insensitive match on title, participants or notes."""
    needle = text.casefold()
    return (needle in contract.title.casefold()
            or needle in contract.participants.casefold()
            or needle in contract.notes.casefold())


def filter_contracts(contracts: Iterable[Contract], *,
                     text: str = "",
                     status: ContractStatus | str = ALL,
                     contract_type: ContractType | str = ALL) -> List[Contract]:
    out = list(contracts)
    if text:
        out = [c for c in out if matches_text(c, text)]
    if status != ALL:
        out = [c for c in out if c.status == ContractStatus(status)]
    if contract_type != ALL:
        out = [c for c in out if c.contract_type == ContractType(contract_type)]
    return out


def count_by_status(contracts: Iterable[Contract]) -> dict[ContractStatus, int]:
    counts = Counter(c.status for c in contracts)
    return {s: counts.get(s, 0) for s in ContractStatus}


def count_by_type(contracts: Iterable[Contract]) -> dict[ContractType, int]:
    counts = Counter(c.contract_type for c in contracts)
    return {t: counts.get(t, 0) for t in ContractType}
