# tests/services/test_write_off_service.py
import re
from decimal import Decimal

import pytest

from app.models.enums import AssetStatus, WriteOffReason, WriteOffStatus
from app.services.errors import ConflictError, InvalidStateError, NotFoundError
from app.services.write_off_service import WriteOffService
from tests.factories import ADMIN_ID, TECH_ID, make_asset

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]


async def _submit(session, asset=None, reason=WriteOffReason.END_OF_LIFE):
    asset = asset or await make_asset(session)
    rec = await WriteOffService(session).submit(
        asset.id, reason=reason, description="Unit is 9 years old", user_id=TECH_ID
    )
    return asset, rec


async def test_submit_numbers_and_defaults(session):
    asset, rec = await _submit(session)
    assert re.fullmatch(r"WO-\d{6}-0001", rec.write_off_number)
    assert rec.status == int(WriteOffStatus.PENDING)
    assert rec.estimated_value == asset.purchase_price
    assert rec.justification == "Unit is 9 years old"

    _, second = await _submit(session)
    assert second.write_off_number.endswith("-0002")


async def test_one_open_request_per_asset(session):
    asset, _ = await _submit(session)
    with pytest.raises(ConflictError):
        await _submit(session, asset=asset)


async def test_approve_then_process(session):
    svc = WriteOffService(session)
    asset, rec = await _submit(session)

    await svc.review(rec.id, user_id=ADMIN_ID, notes="checked")
    assert rec.status == int(WriteOffStatus.UNDER_REVIEW)

    await svc.approve(rec.id, user_id=ADMIN_ID)
    assert rec.status == int(WriteOffStatus.APPROVED)
    assert asset.status == int(AssetStatus.DECOMMISSIONED)

    await svc.process(
        rec.id,
        user_id=ADMIN_ID,
        disposal_method="Certified recycling",
        salvage_value=Decimal("15.00"),
    )
    assert rec.status == int(WriteOffStatus.PROCESSED)
    assert rec.disposal_date is not None
    assert asset.status == int(AssetStatus.WRITE_OFF)


async def test_approve_directly_from_pending(session):
    asset, rec = await _submit(session)
    await WriteOffService(session).approve(rec.id, user_id=ADMIN_ID)
    assert rec.status == int(WriteOffStatus.APPROVED)


async def test_process_requires_approval(session):
    _, rec = await _submit(session)
    with pytest.raises(InvalidStateError):
        await WriteOffService(session).process(rec.id, user_id=ADMIN_ID)


async def test_reject_frees_asset_for_new_request(session):
    svc = WriteOffService(session)
    asset, rec = await _submit(session)
    await svc.reject(rec.id, user_id=ADMIN_ID, reason="still serviceable")
    assert rec.status == int(WriteOffStatus.REJECTED)
    assert asset.status == int(AssetStatus.ACTIVE)

    _, again = await _submit(session, asset=asset)
    assert again.id != rec.id


async def test_cancel_only_from_pending(session):
    svc = WriteOffService(session)
    _, rec = await _submit(session)
    await svc.review(rec.id, user_id=ADMIN_ID)
    with pytest.raises(InvalidStateError):
        await svc.cancel(rec.id, user_id=ADMIN_ID)


async def test_delete_pending_or_rejected_only(session):
    svc = WriteOffService(session)
    _, rec = await _submit(session)
    await svc.delete(rec.id, user_id=ADMIN_ID)
    with pytest.raises(NotFoundError):
        await svc.get(rec.id)

    _, rec2 = await _submit(session)
    await svc.approve(rec2.id, user_id=ADMIN_ID)
    with pytest.raises(InvalidStateError):
        await svc.delete(rec2.id, user_id=ADMIN_ID)


async def test_summary_groups_by_status_and_reason(session):
    svc = WriteOffService(session)
    _, a = await _submit(session, reason=WriteOffReason.OBSOLETE)
    _, b = await _submit(session, reason=WriteOffReason.OBSOLETE)
    await _submit(session, reason=WriteOffReason.DAMAGED)
    await svc.reject(b.id, user_id=ADMIN_ID, reason="no")

    s = await svc.summary()
    assert s["total"] == 3
    assert s["estimated_value"] == Decimal("3600.00")
    assert s["by_status"]["Pending"]["count"] == 2
    assert s["by_status"]["Rejected"]["count"] == 1
    assert s["by_reason"]["Obsolete"]["count"] == 2
    assert s["by_reason"]["Damaged"]["estimated_value"] == Decimal("1200.00")
