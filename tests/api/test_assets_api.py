# tests/api/test_assets_api.py
from __future__ import annotations

from typing import Any, Dict

import pytest
from httpx import AsyncClient

from app.models.enums import AssetCategory, AssetStatus, MovementType
from tests.factories import LOCATION_ID, TECH_ID

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]


async def _register(client: AsyncClient, **overrides: Any) -> Dict[str, Any]:
    payload = {
        "category": int(AssetCategory.LAPTOP),
        "brand": "Lenovo",
        "model": "ThinkPad T14",
        "serial_number": "PF-3XK21",
        "description": "Ward round laptop",
        "location_id": LOCATION_ID,
        "purchase_price": "1450.00",
    }
    payload.update(overrides)
    r = await client.post("/assets", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


async def test_register_and_fetch(client: AsyncClient):
    body = await _register(client, asset_tag="HAT-2001")
    assert body["asset_tag"] == "HAT-2001"
    assert body["qr_code_data"] == "ASSET:HAT-2001"
    assert body["category_label"] == "Laptop"
    assert body["status_label"] == "Active"
    assert body["document_paths"] == [] and body["image_paths"] == []

    r = await client.get(f"/assets/{body['id']}")
    assert r.status_code == 200
    assert r.json()["serial_number"] == "PF-3XK21"

    r = await client.get("/assets/by-tag/HAT-2001")
    assert r.status_code == 200
    assert r.json()["id"] == body["id"]


async def test_generated_tag_and_duplicates(client: AsyncClient):
    body = await _register(client)
    assert body["asset_tag"]

    r = await client.post(
        "/assets",
        json={
            "asset_tag": body["asset_tag"],
            "category": 0,
            "brand": "Dell",
            "model": "OptiPlex",
            "serial_number": "X1",
            "description": "dup",
        },
    )
    assert r.status_code == 409


async def test_missing_asset_is_404(client: AsyncClient):
    assert (await client.get("/assets/999999")).status_code == 404
    assert (await client.get("/assets/by-tag/NOPE-1")).status_code == 404
    r = await client.post("/assets/999999/status", json={"status": 3, "reason": "x"})
    assert r.status_code == 404


async def test_bad_payload_is_422(client: AsyncClient):
    r = await client.post("/assets", json={"category": 0, "brand": "Dell"})
    assert r.status_code == 422
    assert isinstance(r.json()["detail"], list)

    r = await client.post(
        "/assets",
        json={"category": -1, "brand": "a", "model": "b", "serial_number": "c", "description": ""},
    )
    assert r.status_code == 422


async def test_update_refreshes_qr(client: AsyncClient):
    body = await _register(client, asset_tag="HAT-2002")
    r = await client.patch(f"/assets/{body['id']}", json={"asset_tag": "HAT-2099", "notes": "relabelled"})
    assert r.status_code == 200, r.text
    out = r.json()
    assert out["asset_tag"] == "HAT-2099"
    assert out["qr_code_data"] == "ASSET:HAT-2099"
    assert out["notes"] == "relabelled"


async def test_move_and_history(client: AsyncClient):
    body = await _register(client)
    ward = (await client.post("/locations", json={"building": "Main", "floor": "3", "room": "ICU"})).json()

    r = await client.post(
        f"/assets/{body['id']}/move",
        json={"to_location_id": ward["id"], "to_user_id": TECH_ID, "reason": "ICU deployment"},
    )
    assert r.status_code == 201, r.text
    mv = r.json()
    assert mv["movement_type"] == int(MovementType.LOCATION_TRANSFER)
    assert mv["from_location_id"] == LOCATION_ID
    assert mv["to_location_id"] == ward["id"]

    asset = (await client.get(f"/assets/{body['id']}")).json()
    assert asset["location_id"] == ward["id"]
    assert asset["assigned_to_user_id"] == TECH_ID

    r = await client.get(f"/assets/{body['id']}/movements")
    assert r.status_code == 200
    assert [m["id"] for m in r.json()] == [mv["id"]]


async def test_status_change_is_audited(client: AsyncClient):
    body = await _register(client)
    r = await client.post(
        f"/assets/{body['id']}/status",
        json={"status": int(AssetStatus.IN_REPAIR), "reason": "cracked screen"},
    )
    assert r.status_code == 200, r.text
    assert r.json()["status_label"] == "InRepair"

    r = await client.get("/audit-logs", params={"asset_id": body["id"]})
    assert r.status_code == 200
    assert any("from Active to InRepair" in row["description"] for row in r.json())


async def test_unknown_acting_user_is_conflict_and_rolled_back(client: AsyncClient):
    body = await _register(client)
    ghost = {"X-User-Id": "u-nobody"}

    r = await client.post(
        f"/assets/{body['id']}/status",
        json={"status": int(AssetStatus.IN_REPAIR), "reason": "cracked screen"},
        headers=ghost,
    )
    assert r.status_code == 409, r.text
    assert "referenced row missing" in r.json()["detail"]

    r = await client.post(f"/assets/{body['id']}/assignee", json={"assignee_id": TECH_ID}, headers=ghost)
    assert r.status_code == 409, r.text

    asset = (await client.get(f"/assets/{body['id']}")).json()
    assert asset["status"] == int(AssetStatus.ACTIVE)
    assert asset["assigned_to_user_id"] is None


async def test_assign_and_unassign(client: AsyncClient):
    body = await _register(client)
    r = await client.post(f"/assets/{body['id']}/assignee", json={"assignee_id": TECH_ID})
    assert r.status_code == 200, r.text
    assert r.json()["assigned_to_user_id"] == TECH_ID

    r = await client.delete(f"/assets/{body['id']}/assignee")
    assert r.status_code == 200, r.text
    assert r.json()["assigned_to_user_id"] is None


async def test_documents_and_images(client: AsyncClient):
    body = await _register(client)
    url = f"/assets/{body['id']}/documents"

    r = await client.post(url, json={"path": "docs/warranty.pdf"})
    assert r.status_code == 200, r.text
    assert r.json() == ["docs/warranty.pdf"]

    r = await client.post(f"/assets/{body['id']}/images", json={"path": "img/label.jpg"})
    assert r.json() == ["img/label.jpg"]

    r = await client.delete(url, params={"path": "docs/warranty.pdf"})
    assert r.status_code == 200, r.text
    assert r.json() == []

    asset = (await client.get(f"/assets/{body['id']}")).json()
    assert asset["document_paths"] == []
    assert asset["image_paths"] == ["img/label.jpg"]


async def test_decommission(client: AsyncClient):
    body = await _register(client)
    r = await client.post(f"/assets/{body['id']}/decommission", json={"reason": "end of life"})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == int(AssetStatus.DECOMMISSIONED)


async def test_search(client: AsyncClient):
    a = await _register(client, serial_number="ZX-AAA", description="Radiology viewer")
    await _register(client, serial_number="ZX-BBB", description="Pharmacy laptop")

    r = await client.get("/assets", params={"q": "radiology"})
    assert r.status_code == 200
    assert [x["id"] for x in r.json()] == [a["id"]]

    r = await client.get("/assets", params={"location_id": LOCATION_ID})
    assert len(r.json()) == 2
