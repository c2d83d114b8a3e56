# tests/services/test_inventory_service.py
from decimal import Decimal

import pytest

from app.models.enums import (
    AssetInventoryMappingStatus,
    InventoryCategory,
    InventoryCondition,
    InventoryMovementType,
    InventoryStatus,
)
from app.services.errors import ConflictError, InsufficientStockError, NotFoundError
from app.services.inventory_service import ALERT_LOW, ALERT_OUT_OF_STOCK, InventoryService
from app.services.location_service import LocationService
from tests.factories import ADMIN_ID, make_asset, make_item

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]


async def test_create_generates_item_code_and_value(session):
    item = await make_item(session, category=InventoryCategory.LAPTOP, quantity=4, unit_cost=Decimal("800"))
    assert item.item_code[:2] == "LT" and item.item_code.endswith("0001")
    assert item.total_value == Decimal("3200.00")

    second = await make_item(session, category=InventoryCategory.LAPTOP)
    assert second.item_code.endswith("0002")


async def test_explicit_duplicate_code_is_refused(session):
    await make_item(session, item_code="CS-TONER")
    with pytest.raises(ConflictError):
        await make_item(session, item_code="CS-TONER")


async def test_create_needs_existing_location(session):
    with pytest.raises(NotFoundError):
        await make_item(session, location_id=9999)


async def test_stock_in_averages_cost_and_writes_ledgers(session):
    svc = InventoryService(session)
    item = await make_item(session, quantity=10, unit_cost=Decimal("10.00"))

    await svc.stock_in(item.id, 10, user_id=ADMIN_ID, reason="PO delivery", supplier="ACME", unit_cost=Decimal("20"))
    assert item.quantity == 20
    assert item.unit_cost == Decimal("15.00")
    assert item.total_value == Decimal("300.00")
    assert item.supplier == "ACME"

    moves = await svc.movements(item.id)
    assert moves[0].movement_type == int(InventoryMovementType.STOCK_IN)
    assert moves[0].reason == "PO delivery - Supplier: ACME"
    txs = await svc.transactions(item.id)
    assert len(txs) == 1
    assert txs[0].total_cost == Decimal("200.00")
    assert txs[0].related_inventory_movement_id == moves[0].id


async def test_stock_in_without_price_skips_transaction(session):
    svc = InventoryService(session)
    item = await make_item(session)
    await svc.stock_in(item.id, 1, user_id=ADMIN_ID, reason="found in store")
    assert await svc.transactions(item.id) == []


async def test_quantities_must_be_positive(session):
    svc = InventoryService(session)
    item = await make_item(session)
    with pytest.raises(ValueError):
        await svc.stock_in(item.id, 0, user_id=ADMIN_ID, reason="x")
    with pytest.raises(ValueError):
        await svc.stock_out(item.id, -1, user_id=ADMIN_ID, reason="x")


async def test_stock_out_refuses_overdraw(session):
    svc = InventoryService(session)
    item = await make_item(session, quantity=3)
    with pytest.raises(InsufficientStockError):
        await svc.stock_out(item.id, 4, user_id=ADMIN_ID, reason="ward 7")
    await svc.stock_out(item.id, 3, user_id=ADMIN_ID, reason="ward 7")
    assert item.quantity == 0


async def test_adjust_is_clamped_at_zero(session):
    svc = InventoryService(session)
    item = await make_item(session, quantity=5)
    await svc.adjust_stock(item.id, -8, user_id=ADMIN_ID, reason="count")
    assert item.quantity == 0
    await svc.adjust_stock(item.id, 3, user_id=ADMIN_ID, reason="count")
    assert item.quantity == 3
    assert (await svc.movements(item.id))[0].quantity == 3


async def test_reserve_and_release(session):
    svc = InventoryService(session)
    item = await make_item(session, quantity=5)

    await svc.reserve(item.id, 4, user_id=ADMIN_ID, reason="theatre kit")
    assert item.reserved_quantity == 4
    with pytest.raises(InsufficientStockError):
        await svc.reserve(item.id, 2, user_id=ADMIN_ID, reason="more")

    await svc.release_reservation(item.id, 3, user_id=ADMIN_ID, reason="kit shrunk")
    assert item.reserved_quantity == 1
    with pytest.raises(InsufficientStockError):
        await svc.release_reservation(item.id, 2, user_id=ADMIN_ID, reason="too many")

    # stock out below the reservation pulls it down
    await svc.stock_out(item.id, 5, user_id=ADMIN_ID, reason="used")
    assert item.reserved_quantity == 0


async def test_transfer_moves_item_coordinates(session):
    svc = InventoryService(session)
    item = await make_item(session, quantity=6)
    store = await LocationService(session).get_or_create(building="Annex", floor="B", room="Store")

    mv = await svc.transfer(item.id, 6, to_location_id=store.id, user_id=ADMIN_ID, reason="consolidate", to_zone="A", to_shelf="2")
    assert mv.movement_type == int(InventoryMovementType.TRANSFER)
    assert mv.from_location_id != mv.to_location_id == store.id
    assert item.location_id == store.id
    assert (item.storage_zone, item.storage_shelf, item.storage_bin) == ("A", "2", None)
    assert item.quantity == 6

    with pytest.raises(InsufficientStockError):
        await svc.transfer(item.id, 7, to_location_id=store.id, user_id=ADMIN_ID, reason="x")


async def test_deploy_and_partial_return(session):
    svc = InventoryService(session)
    item = await make_item(session, quantity=8)
    asset = await make_asset(session)

    deployed = await svc.deploy_to_asset(asset.id, item.id, 5, user_id=ADMIN_ID, reason="RAM upgrade")
    assert item.quantity == 3
    assert item.status == int(InventoryStatus.DEPLOYED)
    assert deployed.status == int(AssetInventoryMappingStatus.DEPLOYED)

    returned = await svc.return_from_asset(asset.id, item.id, 2, user_id=ADMIN_ID, reason="spare")
    assert returned.id != deployed.id
    assert returned.status == int(AssetInventoryMappingStatus.RETURNED)
    assert deployed.quantity == 3
    assert item.quantity == 5
    assert item.status == int(InventoryStatus.IN_STOCK)
    assert item.condition == int(InventoryCondition.GOOD)

    full = await svc.return_from_asset(asset.id, item.id, 3, user_id=ADMIN_ID, reason="decommissioned")
    assert full.id == deployed.id
    assert deployed.status == int(AssetInventoryMappingStatus.RETURNED)
    assert len(await svc.mappings_for_asset(asset.id)) == 2

    with pytest.raises(NotFoundError):
        await svc.return_from_asset(asset.id, item.id, 1, user_id=ADMIN_ID, reason="nothing left")


async def test_deploy_refuses_overdraw(session):
    svc = InventoryService(session)
    item = await make_item(session, quantity=1)
    asset = await make_asset(session)
    with pytest.raises(InsufficientStockError):
        await svc.deploy_to_asset(asset.id, item.id, 2, user_id=ADMIN_ID, reason="x")


async def test_quality_assessment_updates_condition(session):
    svc = InventoryService(session)
    item = await make_item(session)
    rec = await svc.record_quality_assessment(
        item.id, user_id=ADMIN_ID, overall_condition=InventoryCondition.FAIR, quality_score=71.5, checklist={"screen": "ok"}
    )
    assert rec.quality_score == 71.5
    assert item.condition == int(InventoryCondition.FAIR)
    with pytest.raises(ValueError):
        await svc.record_quality_assessment(
            item.id, user_id=ADMIN_ID, overall_condition=InventoryCondition.GOOD, quality_score=101
        )


async def test_stock_level_alerts(session):
    svc = InventoryService(session)
    empty = await make_item(session, name="Mouse", quantity=0)
    low = await make_item(session, name="Keyboard", quantity=4)
    await make_item(session, name="Cable", quantity=20)

    alerts = {a.inventory_item_id: a for a in await svc.stock_level_alerts()}
    assert set(alerts) == {empty.id, low.id}
    assert alerts[empty.id].alert_type == ALERT_OUT_OF_STOCK
    assert alerts[low.id].alert_type == ALERT_LOW
    assert alerts[low.id].location_name == "Main - 1 - 101"
