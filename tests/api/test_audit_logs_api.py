# tests/api/test_audit_logs_api.py
from __future__ import annotations

import pytest
from httpx import AsyncClient

from app.models.enums import AuditAction
from tests.factories import ADMIN_ID, LOCATION_ID, TECH_ID

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]


async def _asset(client: AsyncClient, serial: str, user_id: str = ADMIN_ID) -> dict:
    r = await client.post(
        "/assets",
        json={
            "category": 9,
            "brand": "Cisco",
            "model": "C9200",
            "serial_number": serial,
            "description": "Ward 3 access switch",
            "location_id": LOCATION_ID,
        },
        headers={"X-User-Id": user_id},
    )
    assert r.status_code == 201, r.text
    return r.json()


async def test_asset_history(client: AsyncClient):
    a = await _asset(client, "AU-1")
    await _asset(client, "AU-2")
    await client.patch(f"/assets/{a['id']}", json={"notes": "rack 2"})

    r = await client.get("/audit-logs", params={"asset_id": a["id"]})
    assert r.status_code == 200, r.text
    rows = r.json()
    assert {row["action"] for row in rows} == {int(AuditAction.CREATE), int(AuditAction.UPDATE)}
    assert all(row["asset_id"] == a["id"] for row in rows)

    update = next(row for row in rows if row["action"] == int(AuditAction.UPDATE))
    assert update["action_label"] == "Update"
    assert update["new_values"] is not None


async def test_by_user_and_search(client: AsyncClient):
    await _asset(client, "AU-3", user_id=TECH_ID)
    await client.post("/locations", json={"building": "Oncology", "room": "12"})

    r = await client.get("/audit-logs", params={"user_id": TECH_ID})
    assert r.status_code == 200
    assert [row["entity_type"] for row in r.json()] == ["Asset"]

    r = await client.get("/audit-logs", params={"q": "location"})
    assert r.status_code == 200
    assert r.json()
    assert all(row["entity_type"] == "Location" for row in r.json())


async def test_recent_pagination(client: AsyncClient):
    for n in range(3):
        await _asset(client, f"AU-P{n}")

    first = (await client.get("/audit-logs", params={"page": 1, "page_size": 2})).json()
    second = (await client.get("/audit-logs", params={"page": 2, "page_size": 2})).json()
    assert len(first) == 2
    assert len(second) == 1
    assert first[0]["id"] > first[1]["id"] > second[0]["id"]

    r = await client.get("/audit-logs", params={"page": 0})
    assert r.status_code == 422
