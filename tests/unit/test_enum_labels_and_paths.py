# tests/unit/test_enum_labels_and_paths.py
import pytest
from fastapi import HTTPException

from app.api.deps import current_user_id
from app.models.enums import AssetStatus, InventoryStatus, MaintenanceStatus, label, label_of
from app.services.asset_service import qr_payload, read_path_list, write_path_list
from app.services.errors import InvalidStateError
from app.services.maintenance_service import check_transition


def test_label_is_pascal_case():
    assert label(AssetStatus.UNDER_MAINTENANCE) == "UnderMaintenance"
    assert label(AssetStatus.ACTIVE) == "Active"


def test_label_uses_canonical_name_for_aliases():
    assert label(InventoryStatus(0)) == "InStock"
    assert label(InventoryStatus.AVAILABLE) == "InStock"


def test_label_of_raw_values():
    assert label_of(AssetStatus, None) is None
    assert label_of(AssetStatus, 12) == "WriteOff"
    assert label_of(AssetStatus, 42) == "42"


def test_read_path_list_accepts_json_and_legacy_strings():
    assert read_path_list(None) == []
    assert read_path_list("") == []
    assert read_path_list('["a.pdf", "b.pdf"]') == ["a.pdf", "b.pdf"]
    assert read_path_list("a.pdf;b.pdf;") == ["a.pdf", "b.pdf"]
    assert read_path_list('"single.pdf"') == ["single.pdf"]


def test_write_path_list():
    assert write_path_list([]) is None
    assert read_path_list(write_path_list(["x/ü.png"])) == ["x/ü.png"]


def test_qr_payload():
    assert qr_payload("1234567") == "ASSET:1234567"


@pytest.mark.parametrize(
    "current, target",
    [
        (MaintenanceStatus.SCHEDULED, MaintenanceStatus.IN_PROGRESS),
        (MaintenanceStatus.SCHEDULED, MaintenanceStatus.CANCELLED),
        (MaintenanceStatus.IN_PROGRESS, MaintenanceStatus.COMPLETED),
        (MaintenanceStatus.IN_PROGRESS, MaintenanceStatus.FAILED),
    ],
)
def test_maintenance_allowed_transitions(current, target):
    check_transition(int(current), target)


@pytest.mark.parametrize(
    "current, target",
    [
        (MaintenanceStatus.SCHEDULED, MaintenanceStatus.COMPLETED),
        (MaintenanceStatus.COMPLETED, MaintenanceStatus.IN_PROGRESS),
        (MaintenanceStatus.CANCELLED, MaintenanceStatus.IN_PROGRESS),
        (MaintenanceStatus.FAILED, MaintenanceStatus.COMPLETED),
    ],
)
def test_maintenance_refused_transitions(current, target):
    with pytest.raises(InvalidStateError):
        check_transition(int(current), target)


@pytest.mark.asyncio
async def test_current_user_id_requires_header():
    assert await current_user_id(" u-1 ") == "u-1"
    with pytest.raises(HTTPException) as ei:
        await current_user_id(None)
    assert ei.value.status_code == 401
    with pytest.raises(HTTPException):
        await current_user_id("   ")
