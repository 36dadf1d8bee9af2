"""Save workflow of the contract form and detail actions."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from contracts.logic.contract_service import (
    MSG_SAVED,
    MSG_SIGNATURE_MISSING,
    MSG_SIGNATURE_UNAVAILABLE,
    MSG_TITLE_MISSING,
    ContractDraft,
    ContractService,
)
from contracts.logic.contract_store import ContractStore
from contracts.models.contract import Contract
from contracts.models.contract_enums import ContractStatus, ContractType
from core.common.db_interface import MEMORY_DB
from core.contracts.imaging import IImageCodec
from core.settings.logic.settings_manager import SettingsManager
from signature.logic.image_codec import PngImageCodec
from signature.logic.signature_service import SignatureService
from signature.models.stroke import Line, Point


class _BrokenCodec(IImageCodec):
    def encode(self, image):
        raise OSError("encoder missing")

    def decode(self, data):
        raise OSError("decoder missing")


def _draft(**changes) -> ContractDraft:
    base = dict(
        title="  Consulting gig  ",
        contract_type=ContractType.CONSULTING,
        start_date=datetime(2025, 2, 1, tzinfo=timezone.utc),
        end_date=datetime(2025, 8, 1, tzinfo=timezone.utc),
        participants="Me & Client",
    )
    base.update(changes)
    return ContractDraft(**base)


def _lines() -> list[Line]:
    return [Line(points=[Point(100, 300), Point(500, 200), Point(900, 350)])]


@pytest.fixture
def store() -> ContractStore:
    s = ContractStore(SettingsManager(MEMORY_DB), sample_count=0)
    s.load()
    return s


@pytest.fixture
def service(store: ContractStore) -> ContractService:
    return ContractService(store=store, signatures=SignatureService())


def test_title_is_required(service: ContractService, store: ContractStore) -> None:
    result = service.save_draft(_draft(title="   ", signature_data=b"png"))
    assert not result.success
    assert result.message == MSG_TITLE_MISSING
    assert len(store) == 0


def test_signature_is_required(service: ContractService) -> None:
    assert ContractService.validate(_draft()) == MSG_SIGNATURE_MISSING
    result = service.save_draft(_draft(), lines=[Line()])
    assert not result.success
    assert result.message == MSG_SIGNATURE_MISSING


def test_lines_are_rasterized_at_full_quality(service: ContractService, store: ContractStore) -> None:
    result = service.save_draft(_draft(), lines=_lines())
    assert result.success
    assert result.message == MSG_SAVED
    saved = result.contract
    assert saved.title == "Consulting gig"
    assert saved.status is ContractStatus.ACTIVE
    assert PngImageCodec().decode(saved.signature_data).size == (1000, 600)
    assert store.get(saved.id) == saved


def test_attached_png_wins_over_lines(service: ContractService) -> None:
    result = service.save_draft(_draft(signature_data=b"given"), lines=_lines())
    assert result.contract.signature_data == b"given"


def test_render_failure_is_reported(store: ContractStore) -> None:
    service = ContractService(store=store, signatures=SignatureService(codec=_BrokenCodec()))
    result = service.save_draft(_draft(), lines=_lines())
    assert not result.success
    assert result.message == MSG_SIGNATURE_UNAVAILABLE
    assert len(store) == 0


def test_render_signature(service: ContractService) -> None:
    assert service.render_signature([]) is None
    assert service.render_signature([Line()]) is None
    assert service.render_signature(_lines()).startswith(b"\x89PNG")


def test_change_status_and_delete(service: ContractService, store: ContractStore) -> None:
    saved = service.save_draft(_draft(signature_data=b"png")).contract
    assert service.change_status(saved, ContractStatus.COMPLETED).success
    assert store.get(saved.id).status is ContractStatus.COMPLETED
    assert store.get(saved.id).created_at == saved.created_at

    assert service.delete(saved).success
    assert not service.delete(saved).success


def test_reset_all_data(service: ContractService, store: ContractStore) -> None:
    service.save_draft(_draft(signature_data=b"png"))
    assert service.reset_all_data().success
    assert len(store) == 0


def test_identity_fields_are_frozen() -> None:
    c = Contract(title="x", contract_type=ContractType.OTHER,
                 start_date=datetime(2025, 1, 1, tzinfo=timezone.utc),
                 end_date=datetime(2025, 2, 1, tzinfo=timezone.utc))
    with pytest.raises(ValueError):
        c.with_changes(id="OTHER")
    with pytest.raises(ValueError):
        c.with_changes(created_at=datetime.now(timezone.utc))
    assert c.with_changes(title="y").id == c.id
