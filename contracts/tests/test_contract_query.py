"""Sorting, search and counts over contract snapshots."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from contracts.logic.contract_query import (
    ALL,
    SortKey,
    count_by_status,
    count_by_type,
    filter_contracts,
    matches_text,
    sort_contracts,
)
from contracts.models.contract import Contract
from contracts.models.contract_enums import ContractStatus, ContractType

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _c(title: str, ctype: ContractType, status: ContractStatus, age_days: int,
       participants: str = "", notes: str = "") -> Contract:
    return Contract(title=title, contract_type=ctype, status=status,
                    start_date=T0, end_date=T0 + timedelta(days=90),
                    participants=participants, notes=notes,
                    created_at=T0 - timedelta(days=age_days))


@pytest.fixture
def contracts() -> list[Contract]:
    return [
        _c("Gym", ContractType.SUBSCRIPTION, ContractStatus.PENDING, 3, notes="Monthly fee"),
        _c("Job", ContractType.EMPLOYMENT, ContractStatus.ACTIVE, 10, participants="Jane Doe"),
        _c("Flat", ContractType.RENTAL, ContractStatus.CANCELLED, 1),
        _c("Car", ContractType.PURCHASE, ContractStatus.ACTIVE, 30, participants="AutoHaus"),
    ]


def test_sort_by_date_newest_first(contracts) -> None:
    assert [c.title for c in sort_contracts(contracts, SortKey.DATE)] == ["Flat", "Gym", "Job", "Car"]


def test_sort_by_status_label(contracts) -> None:
    statuses = [c.status.value for c in sort_contracts(contracts, SortKey.STATUS)]
    assert statuses == ["Active", "Active", "Cancelled", "Pending"]


def test_sort_by_type_label(contracts) -> None:
    types = [c.contract_type.value for c in sort_contracts(contracts, SortKey.TYPE)]
    assert types == ["Employment", "Purchase", "Rental", "Subscription"]


def test_no_sort_keeps_order(contracts) -> None:
    assert sort_contracts(contracts, None) == contracts


def test_text_search_is_case_insensitive(contracts) -> None:
    assert matches_text(contracts[1], "jane")
    assert matches_text(contracts[0], "MONTHLY")
    assert [c.title for c in filter_contracts(contracts, text="auto")] == ["Car"]
    assert filter_contracts(contracts, text="nothing like this") == []


def test_status_and_type_filters(contracts) -> None:
    active = filter_contracts(contracts, status=ContractStatus.ACTIVE)
    assert {c.title for c in active} == {"Job", "Car"}
    assert [c.title for c in filter_contracts(contracts, status="Active", contract_type="Purchase")] == ["Car"]
    assert filter_contracts(contracts, status=ALL, contract_type=ALL) == contracts


def test_counts_include_zero_buckets(contracts) -> None:
    by_status = count_by_status(contracts)
    assert by_status[ContractStatus.ACTIVE] == 2
    assert by_status[ContractStatus.COMPLETED] == 0
    assert sum(by_status.values()) == len(contracts)

    by_type = count_by_type(contracts)
    assert by_type[ContractType.RENTAL] == 1
    assert by_type[ContractType.OTHER] == 0
    assert len(by_type) == len(ContractType)


def test_enum_colors() -> None:
    assert ContractStatus.ACTIVE.color == "#34C759"
    assert ContractType.EMPLOYMENT.color == "#007AFF"
    assert ContractType.LOAN.color == ContractType.OTHER.color
    assert ContractType.parse("Nope") is ContractType.OTHER
