# tests/api/test_locations_api.py
from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.factories import LOCATION_ID

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]


async def test_create_is_idempotent_per_place(client: AsyncClient):
    payload = {"building": " East Wing ", "floor": "2", "room": "204", "description": "Radiology office"}
    r1 = await client.post("/locations", json=payload)
    assert r1.status_code == 201, r1.text
    body = r1.json()
    assert body["building"] == "East Wing"
    assert body["full_location"] == "East Wing - 2 - 204"
    assert body["is_active"] is True

    r2 = await client.post("/locations", json=payload)
    assert r2.status_code == 201, r2.text
    assert r2.json()["id"] == body["id"]

    r = await client.get("/locations")
    assert r.status_code == 200
    assert {x["id"] for x in r.json()} == {LOCATION_ID, body["id"]}


async def test_location_without_floor(client: AsyncClient):
    r = await client.post("/locations", json={"building": "Annex", "room": "Lobby"})
    assert r.status_code == 201, r.text
    assert r.json()["floor"] is None
    assert r.json()["full_location"] == "Annex - Lobby"


async def test_deactivate_hides_from_active_list(client: AsyncClient):
    r = await client.patch(f"/locations/{LOCATION_ID}/active", json={"is_active": False})
    assert r.status_code == 200, r.text
    assert r.json()["is_active"] is False

    r = await client.get("/locations", params={"active_only": True})
    assert r.status_code == 200
    assert r.json() == []


async def test_delete_unused_and_in_use(client: AsyncClient):
    created = (await client.post("/locations", json={"building": "Store", "room": "B1"})).json()
    r = await client.delete(f"/locations/{created['id']}")
    assert r.status_code == 204
    assert (await client.get(f"/locations/{created['id']}")).status_code == 404

    asset = await client.post(
        "/assets",
        json={
            "category": 0,
            "brand": "Dell",
            "model": "OptiPlex 7010",
            "serial_number": "SN-LOC-1",
            "description": "Nurse station PC",
            "location_id": LOCATION_ID,
        },
    )
    assert asset.status_code == 201, asset.text

    r = await client.delete(f"/locations/{LOCATION_ID}")
    assert r.status_code == 409
    assert "detail" in r.json()


async def test_create_requires_building_and_room(client: AsyncClient):
    r = await client.post("/locations", json={"building": "", "room": "1"})
    assert r.status_code == 422
    r = await client.post("/locations", json={"building": "Main"})
    assert r.status_code == 422


async def test_write_needs_acting_user(client: AsyncClient):
    r = await client.post(
        "/locations",
        json={"building": "Main", "room": "999"},
        headers={"X-User-Id": ""},
    )
    assert r.status_code == 401
