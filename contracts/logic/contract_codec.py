"""
contract_codec.py

JSON (de)serialization of the contract list.

Wire format: a JSON array of objects with camelCase field names, dates as
ISO-8601 strings, binary fields base64-encoded, absent optionals omitted.
"""

from __future__ import annotations

import base64
import json
from typing import Any, Iterable, List

from core.helpers.date_time_helper import from_iso, to_iso
from ..models.contract import Contract
from ..models.contract_enums import ContractStatus, ContractType


class ContractDecodeError(ValueError):
    """Raised when a stored blob is not a valid contract list."""


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def contract_to_dict(c: Contract) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": c.id,
        "title": c.title,
        "contractType": c.contract_type.value,
        "startDate": to_iso(c.start_date),
        "endDate": to_iso(c.end_date),
        "participants": c.participants,
        "notes": c.notes,
        "status": c.status.value,
        "createdAt": to_iso(c.created_at),
    }
    if c.signature_data is not None:
        d["signatureData"] = _b64(c.signature_data)
    if c.attachment_data is not None:
        d["attachmentData"] = _b64(c.attachment_data)
    if c.attachment_name is not None:
        d["attachmentName"] = c.attachment_name
    return d


def contract_from_dict(d: dict[str, Any]) -> Contract:
    try:
        sig = d.get("signatureData")
        att = d.get("attachmentData")
        return Contract(
            id=str(d["id"]),
            title=str(d["title"]),
            contract_type=ContractType.parse(d["contractType"]),
            start_date=from_iso(d["startDate"]),
            end_date=from_iso(d["endDate"]),
            participants=str(d.get("participants", "")),
            notes=str(d.get("notes", "")),
            status=ContractStatus(d["status"]),
            signature_data=base64.b64decode(sig, validate=True) if sig is not None else None,
            attachment_data=base64.b64decode(att, validate=True) if att is not None else None,
            attachment_name=d.get("attachmentName"),
            created_at=from_iso(d["createdAt"]),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ContractDecodeError(f"Malformed contract record: {exc!r}") from exc


def encode_contracts(contracts: Iterable[Contract]) -> bytes:
    return json.dumps([contract_to_dict(c) for c in contracts],
                      ensure_ascii=False).encode("utf-8")


def decode_contracts(blob: bytes) -> List[Contract]:
    """
    :raises ContractDecodeError: if *blob* is not a JSON array of contracts
    """
    try:
        raw = json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise ContractDecodeError(f"Blob is not JSON: {exc!r}") from exc
    if not isinstance(raw, list):
        raise ContractDecodeError("Blob is not a JSON array")
    return [contract_from_dict(item) for item in raw]
