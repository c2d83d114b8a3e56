# tests/services/test_maintenance_service.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.models.enums import AssetStatus, MaintenanceStatus, WriteOffReason
from app.services.asset_service import AssetService
from app.services.errors import InvalidStateError, NotFoundError
from app.services.maintenance_service import MaintenanceService
from app.services.write_off_service import WriteOffService
from tests.factories import ADMIN_ID, TECH_ID, make_asset

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]

UTC = timezone.utc


async def _scheduled(session, days=7):
    asset = await make_asset(session)
    rec = await MaintenanceService(session).schedule(
        asset.id,
        title="Quarterly check",
        scheduled_date=datetime.now(UTC) + timedelta(days=days),
        user_id=ADMIN_ID,
    )
    return asset, rec


async def test_schedule_marks_asset_pending(session):
    asset, rec = await _scheduled(session)
    assert rec.status == int(MaintenanceStatus.SCHEDULED)
    assert asset.status == int(AssetStatus.MAINTENANCE_PENDING)


async def test_schedule_unknown_asset(session):
    with pytest.raises(NotFoundError):
        await MaintenanceService(session).schedule(
            424242, title="x", scheduled_date=datetime.now(UTC), user_id=ADMIN_ID
        )


async def test_full_cycle_updates_asset(session):
    svc = MaintenanceService(session)
    asset, rec = await _scheduled(session)

    await svc.start(rec.id, user_id=ADMIN_ID, performed_by="Tom Tech")
    assert asset.status == int(AssetStatus.UNDER_MAINTENANCE)
    assert rec.start_date is not None

    await svc.complete(
        rec.id,
        user_id=TECH_ID,
        work_performed="Replaced PSU fan",
        parts_used="Fan 80mm",
        cost=Decimal("35.50"),
    )
    assert rec.status == int(MaintenanceStatus.COMPLETED)
    assert rec.cost == Decimal("35.50")
    assert asset.status == int(AssetStatus.ACTIVE)
    assert asset.last_maintenance_date == rec.completed_date


async def test_complete_requires_start(session):
    _, rec = await _scheduled(session)
    with pytest.raises(InvalidStateError):
        await MaintenanceService(session).complete(rec.id, user_id=ADMIN_ID)


async def test_cancel_restores_active(session):
    svc = MaintenanceService(session)
    asset, rec = await _scheduled(session)
    await svc.cancel(rec.id, user_id=ADMIN_ID, reason="ward closed")
    assert rec.status == int(MaintenanceStatus.CANCELLED)
    assert asset.status == int(AssetStatus.ACTIVE)
    with pytest.raises(InvalidStateError):
        await svc.start(rec.id, user_id=ADMIN_ID)


async def test_failed_job_sends_asset_to_repair(session):
    svc = MaintenanceService(session)
    asset, rec = await _scheduled(session)
    await svc.start(rec.id, user_id=ADMIN_ID)
    await svc.fail(rec.id, user_id=ADMIN_ID, reason="board fault")
    assert rec.status == int(MaintenanceStatus.FAILED)
    assert rec.notes == "board fault"
    assert asset.status == int(AssetStatus.UNDER_REPAIR)


async def test_upcoming_and_history(session):
    svc = MaintenanceService(session)
    asset, soon = await _scheduled(session, days=2)
    later = await svc.schedule(
        asset.id, title="Annual", scheduled_date=datetime.now(UTC) + timedelta(days=300), user_id=ADMIN_ID
    )

    within_month = [r.id for r in await svc.upcoming(until=datetime.now(UTC) + timedelta(days=30))]
    assert within_month == [soon.id]
    assert [r.id for r in await svc.upcoming()] == [soon.id, later.id]
    assert [r.id for r in await svc.for_asset(asset.id)] == [later.id, soon.id]


async def test_written_off_asset_cannot_be_scheduled(session):
    asset = await make_asset(session)
    wo = WriteOffService(session)
    rec = await wo.submit(asset.id, reason=WriteOffReason.OBSOLETE, description="End of life", user_id=TECH_ID)
    await wo.approve(rec.id, user_id=ADMIN_ID)
    await wo.process(rec.id, user_id=ADMIN_ID, disposal_method="Certified recycling")
    assert asset.status == int(AssetStatus.WRITE_OFF)

    with pytest.raises(InvalidStateError):
        await MaintenanceService(session).schedule(
            asset.id, title="Quarterly check", scheduled_date=datetime.now(UTC), user_id=ADMIN_ID
        )
    assert asset.status == int(AssetStatus.WRITE_OFF)


async def test_closing_job_keeps_status_set_elsewhere(session):
    svc = MaintenanceService(session)
    asset, running = await _scheduled(session)
    queued = await svc.schedule(asset.id, title="Annual", scheduled_date=datetime.now(UTC), user_id=ADMIN_ID)
    await svc.start(running.id, user_id=ADMIN_ID)

    await AssetService(session).change_status(
        asset.id, AssetStatus.DECOMMISSIONED, reason="replaced", user_id=ADMIN_ID
    )
    await svc.complete(running.id, user_id=ADMIN_ID)
    assert asset.status == int(AssetStatus.DECOMMISSIONED)

    with pytest.raises(InvalidStateError):
        await svc.start(queued.id, user_id=ADMIN_ID)
    await svc.cancel(queued.id, user_id=ADMIN_ID)
    assert asset.status == int(AssetStatus.DECOMMISSIONED)


async def test_cancel_leaves_other_running_job(session):
    svc = MaintenanceService(session)
    asset, first = await _scheduled(session)
    second = await svc.schedule(asset.id, title="Annual", scheduled_date=datetime.now(UTC), user_id=ADMIN_ID)
    await svc.start(first.id, user_id=ADMIN_ID)

    await svc.cancel(second.id, user_id=ADMIN_ID, reason="duplicate")
    assert asset.status == int(AssetStatus.UNDER_MAINTENANCE)

    await svc.complete(first.id, user_id=ADMIN_ID)
    assert asset.status == int(AssetStatus.ACTIVE)


async def test_complete_leaves_other_scheduled_job_pending(session):
    svc = MaintenanceService(session)
    asset, first = await _scheduled(session)
    await svc.start(first.id, user_id=ADMIN_ID)

    second = await svc.schedule(asset.id, title="Annual", scheduled_date=datetime.now(UTC), user_id=ADMIN_ID)
    assert asset.status == int(AssetStatus.UNDER_MAINTENANCE)

    await svc.complete(first.id, user_id=ADMIN_ID)
    assert asset.status == int(AssetStatus.MAINTENANCE_PENDING)

    await svc.cancel(second.id, user_id=ADMIN_ID)
    assert asset.status == int(AssetStatus.ACTIVE)
