# tests/db/test_schema_contracts.py
from __future__ import annotations

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import RequestType, WriteOffReason
from app.services.automation_service import AutomationService
from app.services.procurement_service import ProcurementService
from app.services.request_service import RequestService
from app.services.write_off_service import WriteOffService
from tests.factories import ADMIN_ID, LOCATION_ID, TECH_ID, make_asset, make_item

pytestmark = [pytest.mark.asyncio, pytest.mark.pg, pytest.mark.contract]

UNIQUE_INDEXES = [
    ("Assets", "IX_Assets_AssetTag"),
    ("Locations", "IX_Locations_Building_Floor_Room"),
    ("InventoryItems", "IX_InventoryItems_ItemCode"),
    ("ITRequests", "IX_ITRequests_RequestNumber"),
    ("ProcurementRequests", "IX_ProcurementRequests_ProcurementNumber"),
    ("WriteOffRecords", "IX_WriteOffRecords_WriteOffNumber"),
    ("RequestTemplates", "IX_RequestTemplates_Name"),
    ("AutomationRules", "IX_AutomationRules_RuleName"),
]

# pg_constraint.confdeltype: c=CASCADE, n=SET NULL, r=RESTRICT, a=NO ACTION
DELETE_ACTIONS = [
    ("FK_Assets_Locations_LocationId", "n"),
    ("FK_AssetMovements_Assets_AssetId", "c"),
    ("FK_AuditLogs_Assets_AssetId", "n"),
    ("FK_AuditLogs_AspNetUsers_UserId", "r"),
    ("FK_MaintenanceRecords_Assets_AssetId", "c"),
    ("FK_WriteOffRecords_Assets_AssetId", "c"),
    ("FK_InventoryItems_Locations_LocationId", "r"),
    ("FK_AssetInventoryMappings_Assets_AssetId", "c"),
    ("FK_ProcurementItems_ProcurementRequests_ProcurementRequestId", "c"),
    ("FK_VendorQuotes_Vendors_VendorId", "r"),
    ("FK_QuoteItems_VendorQuotes_VendorQuoteId", "c"),
    ("FK_ITRequests_Locations_LocationId", "n"),
]


async def test_alembic_single_head(session: AsyncSession):
    result = await session.execute(text("SELECT COUNT(*) FROM alembic_version"))
    assert int(result.scalar_one()) == 1


@pytest.mark.parametrize("table, index_name", UNIQUE_INDEXES)
async def test_unique_indexes(session: AsyncSession, table: str, index_name: str):
    row = (
        await session.execute(
            text("SELECT indexdef FROM pg_indexes WHERE tablename = :t AND indexname = :i"),
            {"t": table, "i": index_name},
        )
    ).first()
    assert row is not None, f"{index_name} missing"
    assert row[0].startswith("CREATE UNIQUE INDEX"), row[0]


@pytest.mark.parametrize("fk_name, action", DELETE_ACTIONS)
async def test_foreign_key_delete_actions(session: AsyncSession, fk_name: str, action: str):
    got = (
        await session.execute(
            text("SELECT confdeltype FROM pg_constraint WHERE contype = 'f' AND conname = :n"),
            {"n": fk_name},
        )
    ).scalar_one_or_none()
    assert got == action, f"{fk_name}: {got!r}"


async def test_deleting_location_detaches_assets(session: AsyncSession):
    spare = (
        await session.execute(
            text(
                'INSERT INTO "Locations" ("Building", "Floor", "Room", "IsActive") '
                "VALUES ('Annex', NULL, 'Store', true) RETURNING \"Id\""
            )
        )
    ).scalar_one()
    asset = await make_asset(session, location_id=spare)

    await session.execute(text('DELETE FROM "Locations" WHERE "Id" = :id'), {"id": spare})
    location_id = (
        await session.execute(text('SELECT "LocationId" FROM "Assets" WHERE "Id" = :id'), {"id": asset.id})
    ).scalar_one()
    assert location_id is None


async def test_deleting_asset_cascades_history(session: AsyncSession):
    asset = await make_asset(session, location_id=LOCATION_ID)
    await session.execute(
        text(
            'INSERT INTO "AssetMovements" ("AssetId", "MovementType", "MovementDate", "PerformedByUserId") '
            "VALUES (:a, 0, NOW(), :u)"
        ),
        {"a": asset.id, "u": ADMIN_ID},
    )
    await session.execute(text('DELETE FROM "Assets" WHERE "Id" = :id'), {"id": asset.id})

    left = (
        await session.execute(text('SELECT COUNT(*) FROM "AssetMovements" WHERE "AssetId" = :id'), {"id": asset.id})
    ).scalar_one()
    assert int(left) == 0
    audit_asset_ids = (
        await session.execute(
            text('SELECT "AssetId" FROM "AuditLogs" WHERE "EntityType" = \'Asset\' AND "EntityId" = :id'),
            {"id": asset.id},
        )
    ).scalars().all()
    assert audit_asset_ids == [None]


async def _violation(session: AsyncSession, sql: str, params: dict) -> tuple[str, str] | None:
    """Run one statement in a savepoint; return (sqlstate, constraint) if it is rejected."""
    try:
        async with session.begin_nested():
            await session.execute(text(sql), params)
    except IntegrityError as e:
        return e.orig.sqlstate, e.orig.diag.constraint_name
    return None


async def test_duplicate_asset_tag_rejected(session: AsyncSession):
    first = await make_asset(session)
    second = await make_asset(session)
    got = await _violation(
        session,
        'UPDATE "Assets" SET "AssetTag" = :tag WHERE "Id" = :id',
        {"tag": first.asset_tag, "id": second.id},
    )
    assert got == ("23505", "IX_Assets_AssetTag")


async def test_duplicate_location_triple_rejected(session: AsyncSession):
    spare = (
        await session.execute(
            text(
                'INSERT INTO "Locations" ("Building", "Floor", "Room", "IsActive") '
                "VALUES ('Main', '2', '101', true) RETURNING \"Id\""
            )
        )
    ).scalar_one()
    got = await _violation(session, 'UPDATE "Locations" SET "Floor" = \'1\' WHERE "Id" = :id', {"id": spare})
    assert got == ("23505", "IX_Locations_Building_Floor_Room")


async def test_asset_pointing_at_missing_location_rejected(session: AsyncSession):
    asset = await make_asset(session)
    got = await _violation(session, 'UPDATE "Assets" SET "LocationId" = 999999 WHERE "Id" = :id', {"id": asset.id})
    assert got == ("23503", "FK_Assets_Locations_LocationId")


async def test_inventory_item_pointing_at_missing_location_rejected(session: AsyncSession):
    item = await make_item(session)
    got = await _violation(
        session, 'UPDATE "InventoryItems" SET "LocationId" = 999999 WHERE "Id" = :id', {"id": item.id}
    )
    assert got == ("23503", "FK_InventoryItems_Locations_LocationId")


async def test_location_with_stock_cannot_be_deleted(session: AsyncSession):
    await make_item(session)
    got = await _violation(session, 'DELETE FROM "Locations" WHERE "Id" = :id', {"id": LOCATION_ID})
    assert got == ("23503", "FK_InventoryItems_Locations_LocationId")


async def _copy_key(session: AsyncSession, table: str, column: str, source_id: int, target_id: int):
    """Give row target_id the business key of row source_id."""
    return await _violation(
        session,
        f'UPDATE "{table}" SET "{column}" = (SELECT "{column}" FROM "{table}" WHERE "Id" = :src) '
        'WHERE "Id" = :dst',
        {"src": source_id, "dst": target_id},
    )


async def test_duplicate_item_code_rejected(session: AsyncSession):
    first = await make_item(session, name="Toner black")
    second = await make_item(session, name="Toner cyan")
    got = await _copy_key(session, "InventoryItems", "ItemCode", first.id, second.id)
    assert got == ("23505", "IX_InventoryItems_ItemCode")


async def test_duplicate_request_number_rejected(session: AsyncSession):
    svc = RequestService(session)
    kw = dict(
        user_id=TECH_ID, description="Paper feed fails", request_type=RequestType.HARDWARE_REPAIR, department="Nursing"
    )
    first = await svc.create(title="Printer jam", **kw)
    second = await svc.create(title="Scanner jam", **kw)
    got = await _copy_key(session, "ITRequests", "RequestNumber", first.id, second.id)
    assert got == ("23505", "IX_ITRequests_RequestNumber")


async def test_duplicate_procurement_number_rejected(session: AsyncSession):
    svc = ProcurementService(session)
    kw = dict(user_id=TECH_ID, description="ward refresh", department="IT")
    first = await svc.create_procurement(title="Monitors", **kw)
    second = await svc.create_procurement(title="Docks", **kw)
    got = await _copy_key(session, "ProcurementRequests", "ProcurementNumber", first.id, second.id)
    assert got == ("23505", "IX_ProcurementRequests_ProcurementNumber")


async def test_duplicate_write_off_number_rejected(session: AsyncSession):
    svc = WriteOffService(session)
    records = []
    for _ in range(2):
        asset = await make_asset(session)
        records.append(
            await svc.submit(asset.id, reason=WriteOffReason.OBSOLETE, description="End of life", user_id=TECH_ID)
        )
    got = await _copy_key(session, "WriteOffRecords", "WriteOffNumber", records[0].id, records[1].id)
    assert got == ("23505", "IX_WriteOffRecords_WriteOffNumber")


async def test_duplicate_rule_name_rejected(session: AsyncSession):
    svc = AutomationService(session)
    first = await svc.create_rule(user_id=ADMIN_ID, rule_name="low-stock", description="x", trigger="StockLow")
    second = await svc.create_rule(user_id=ADMIN_ID, rule_name="warranty", description="x", trigger="Warranty")
    got = await _copy_key(session, "AutomationRules", "RuleName", first.id, second.id)
    assert got == ("23505", "IX_AutomationRules_RuleName")
