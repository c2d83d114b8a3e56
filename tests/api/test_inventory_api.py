# tests/api/test_inventory_api.py
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

import pytest
from httpx import AsyncClient

from app.models.enums import InventoryCategory, InventoryMovementType
from tests.factories import LOCATION_ID

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]


async def _item(client: AsyncClient, **overrides: Any) -> Dict[str, Any]:
    payload = {
        "name": "USB-C dock",
        "category": int(InventoryCategory.ACCESSORIES),
        "brand": "Dell",
        "model": "WD19",
        "location_id": LOCATION_ID,
        "quantity": 10,
        "unit_cost": "100.00",
        "minimum_stock": 2,
        "reorder_level": 5,
        "maximum_stock": 40,
    }
    payload.update(overrides)
    r = await client.post("/inventory", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


async def test_create_and_lookup(client: AsyncClient):
    item = await _item(client)
    assert item["item_code"]
    assert Decimal(item["total_value"]) == Decimal("1000")
    assert item["available_quantity"] == 10

    r = await client.get(f"/inventory/by-code/{item['item_code']}")
    assert r.status_code == 200
    assert r.json()["id"] == item["id"]

    assert (await client.get("/inventory/by-code/NOPE")).status_code == 404
    assert (await client.get("/inventory/999999")).status_code == 404


async def test_create_with_unknown_location_is_404(client: AsyncClient):
    r = await client.post(
        "/inventory",
        json={"name": "x", "category": 0, "brand": "b", "model": "m", "location_id": 9999},
    )
    assert r.status_code == 404


async def test_stock_in_and_out(client: AsyncClient):
    item = await _item(client)
    url = f"/inventory/{item['id']}"

    r = await client.post(f"{url}/stock-in", json={"quantity": 10, "unit_cost": "120.00", "supplier": "ACME"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["quantity"] == 20
    assert Decimal(body["unit_cost"]) == Decimal("110")

    r = await client.post(f"{url}/stock-out", json={"quantity": 25, "reason": "ward 4"})
    assert r.status_code == 409
    assert (await client.get(url)).json()["quantity"] == 20

    r = await client.post(f"{url}/stock-out", json={"quantity": 5, "reason": "ward 4"})
    assert r.status_code == 200, r.text
    assert r.json()["quantity"] == 15

    moves = (await client.get(f"{url}/movements")).json()
    assert [m["movement_type"] for m in moves] == [
        int(InventoryMovementType.STOCK_OUT),
        int(InventoryMovementType.STOCK_IN),
    ]
    txs = (await client.get(f"{url}/transactions")).json()
    assert len(txs) == 1
    assert Decimal(txs[0]["total_cost"]) == Decimal("1200")


async def test_zero_quantity_is_rejected(client: AsyncClient):
    item = await _item(client)
    r = await client.post(f"/inventory/{item['id']}/stock-out", json={"quantity": 0, "reason": "x"})
    assert r.status_code == 422


async def test_adjust_reserve_release(client: AsyncClient):
    item = await _item(client, quantity=4)
    url = f"/inventory/{item['id']}"

    r = await client.post(f"{url}/adjust", json={"delta": -10, "reason": "stock take"})
    assert r.status_code == 200, r.text
    assert r.json()["quantity"] == 0

    await client.post(f"{url}/adjust", json={"delta": 6, "reason": "found"})
    r = await client.post(f"{url}/reserve", json={"quantity": 4, "reason": "theatre"})
    assert r.status_code == 200, r.text
    assert r.json()["reserved_quantity"] == 4
    assert r.json()["available_quantity"] == 2

    r = await client.post(f"{url}/reserve", json={"quantity": 3, "reason": "more"})
    assert r.status_code == 409

    r = await client.post(f"{url}/release", json={"quantity": 4, "reason": "cancelled"})
    assert r.status_code == 200
    assert r.json()["reserved_quantity"] == 0


async def test_transfer(client: AsyncClient):
    item = await _item(client)
    store = (await client.post("/locations", json={"building": "Annex", "room": "Store"})).json()

    r = await client.post(
        f"/inventory/{item['id']}/transfer",
        json={"quantity": 10, "to_location_id": store["id"], "reason": "consolidate", "to_shelf": "3"},
    )
    assert r.status_code == 201, r.text
    assert r.json()["to_location_id"] == store["id"]
    moved = (await client.get(f"/inventory/{item['id']}")).json()
    assert moved["location_id"] == store["id"]
    assert moved["storage_shelf"] == "3"


async def test_deploy_and_return(client: AsyncClient):
    item = await _item(client, quantity=3)
    asset = (
        await client.post(
            "/assets",
            json={
                "category": 0,
                "brand": "HP",
                "model": "EliteDesk",
                "serial_number": "SN-DEP-1",
                "description": "Reception PC",
                "location_id": LOCATION_ID,
            },
        )
    ).json()

    r = await client.post(
        f"/inventory/{item['id']}/deploy",
        json={"asset_id": asset["id"], "quantity": 2, "reason": "docking"},
    )
    assert r.status_code == 201, r.text
    assert r.json()["quantity"] == 2
    assert (await client.get(f"/inventory/{item['id']}")).json()["quantity"] == 1

    r = await client.post(
        f"/inventory/{item['id']}/return",
        json={"asset_id": asset["id"], "quantity": 2, "reason": "desk removed"},
    )
    assert r.status_code == 200, r.text
    assert r.json()["return_date"] is not None

    r = await client.get("/inventory/mappings", params={"asset_id": asset["id"]})
    assert r.status_code == 200
    assert len(r.json()) == 1


async def test_quality_assessment(client: AsyncClient):
    item = await _item(client)
    r = await client.post(
        f"/inventory/{item['id']}/quality-assessments",
        json={"overall_condition": 3, "quality_score": 64, "checklist": {"ports": "worn"}},
    )
    assert r.status_code == 201, r.text
    assert r.json()["quality_score"] == 64
    assert (await client.get(f"/inventory/{item['id']}")).json()["condition_label"] == "Fair"

    r = await client.post(
        f"/inventory/{item['id']}/quality-assessments",
        json={"overall_condition": 3, "quality_score": 140},
    )
    assert r.status_code == 422


async def test_alerts(client: AsyncClient):
    low = await _item(client, name="Keyboard", quantity=3)
    await _item(client, name="Mouse", quantity=20)

    r = await client.get("/inventory/alerts")
    assert r.status_code == 200
    alerts = r.json()
    assert [a["inventory_item_id"] for a in alerts] == [low["id"]]
    assert alerts[0]["alert_type"] == "Low"
    assert alerts[0]["location_name"] == "Main - 1 - 101"
