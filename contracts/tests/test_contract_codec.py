"""JSON wire format of the contract list."""
from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from contracts.logic.contract_codec import (
    ContractDecodeError,
    contract_to_dict,
    decode_contracts,
    encode_contracts,
)
from contracts.models.contract import Contract
from contracts.models.contract_enums import ContractStatus, ContractType


def _plain() -> Contract:
    return Contract(
        title="Office lease",
        contract_type=ContractType.LEASE,
        start_date=datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc),
        end_date=datetime(2026, 1, 1, 9, 30, tzinfo=timezone.utc),
        participants="Jane & ACME",
        notes="ünïcode ✓",
        status=ContractStatus.PENDING,
        created_at=datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=timezone.utc),
    )


def _full() -> Contract:
    return Contract(
        title="Signed",
        contract_type=ContractType.EMPLOYMENT,
        start_date=datetime(2025, 3, 1, tzinfo=timezone.utc),
        end_date=datetime(2025, 9, 1, tzinfo=timezone.utc),
        signature_data=b"\x89PNG\r\n\x1a\n\x00\x01",
        attachment_data=b"%PDF-1.7",
        attachment_name="scan.pdf",
    )


def test_round_trip_is_field_for_field() -> None:
    naive = Contract(title="Gym", contract_type=ContractType.SERVICE,
                     start_date=datetime(2024, 1, 1), end_date=datetime(2024, 6, 1))
    contracts = [_plain(), _full(), naive]
    assert decode_contracts(encode_contracts(contracts)) == contracts


def test_empty_list_round_trip() -> None:
    assert decode_contracts(encode_contracts([])) == []


def test_absent_optionals_are_omitted() -> None:
    d = contract_to_dict(_plain())
    assert "signatureData" not in d
    assert "attachmentData" not in d
    assert "attachmentName" not in d
    assert d["contractType"] == "Lease"
    assert d["status"] == "Pending"


def test_binary_fields_are_base64() -> None:
    d = contract_to_dict(_full())
    assert d["signatureData"] == "iVBORw0KGgoAAQ=="
    assert d["attachmentName"] == "scan.pdf"


def test_unknown_type_decodes_to_other() -> None:
    raw = json.loads(encode_contracts([_plain()]))
    raw[0]["contractType"] = "Prenuptial"
    [decoded] = decode_contracts(json.dumps(raw).encode())
    assert decoded.contract_type is ContractType.OTHER


def test_trailing_z_dates_are_accepted() -> None:
    raw = json.loads(encode_contracts([_plain()]))
    raw[0]["startDate"] = "2024-01-01T09:30:00Z"
    [decoded] = decode_contracts(json.dumps(raw).encode())
    assert decoded.start_date == _plain().start_date


@pytest.mark.parametrize("blob", [
    b"not json",
    b'{"id": "A"}',
    b'[{"id": "A"}]',
    b'[{"id": "A", "title": "t", "contractType": "Rental", "startDate": "yesterday",'
    b' "endDate": "2024-01-01T00:00:00+00:00", "status": "Active",'
    b' "createdAt": "2024-01-01T00:00:00+00:00"}]',
    b'[{"id": "A", "title": "t", "contractType": "Rental", "startDate": "2024-01-01T00:00:00+00:00",'
    b' "endDate": "2024-01-01T00:00:00+00:00", "status": "Archived",'
    b' "createdAt": "2024-01-01T00:00:00+00:00"}]',
    b"\xff\xfe",
])
def test_malformed_blobs_raise(blob: bytes) -> None:
    with pytest.raises(ContractDecodeError):
        decode_contracts(blob)


def test_naive_dates_are_stored_as_utc() -> None:
    c = Contract(title="Gym", contract_type=ContractType.SERVICE,
                 start_date=datetime(2024, 1, 1), end_date=datetime(2024, 6, 1))
    assert c.start_date.tzinfo is timezone.utc
    assert c.with_changes(end_date=datetime(2025, 1, 1)).end_date.tzinfo is timezone.utc
