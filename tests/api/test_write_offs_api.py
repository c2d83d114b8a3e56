# tests/api/test_write_offs_api.py
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from httpx import AsyncClient

from app.models.enums import AssetStatus, WriteOffReason, WriteOffStatus
from tests.factories import LOCATION_ID

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]


async def _asset_id(client: AsyncClient, serial: str) -> int:
    r = await client.post(
        "/assets",
        json={
            "category": 4,
            "brand": "Philips",
            "model": "243V",
            "serial_number": serial,
            "description": "Nurse station monitor",
            "location_id": LOCATION_ID,
            "purchase_price": "180.00",
        },
    )
    assert r.status_code == 201, r.text
    return r.json()["id"]


async def _submit(client: AsyncClient, asset_id: int, **extra):
    payload = {
        "asset_id": asset_id,
        "reason": int(WriteOffReason.BEYOND_REPAIR),
        "description": "Backlight failed",
    }
    payload.update(extra)
    return await client.post("/write-offs", json=payload)


async def test_full_lifecycle(client: AsyncClient):
    asset_id = await _asset_id(client, "WO-1")

    r = await _submit(client, asset_id)
    assert r.status_code == 201, r.text
    rec = r.json()
    now = datetime.now(timezone.utc)
    assert rec["write_off_number"] == f"WO-{now:%Y%m}-0001"
    assert rec["status_label"] == "Pending"
    assert rec["justification"] == "Backlight failed"
    assert Decimal(rec["estimated_value"]) == Decimal("180")

    r = await _submit(client, asset_id)
    assert r.status_code == 409

    r = await client.post(f"/write-offs/{rec['id']}/review", json={"notes": "checked"})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == int(WriteOffStatus.UNDER_REVIEW)

    r = await client.post(f"/write-offs/{rec['id']}/approve", json={})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == int(WriteOffStatus.APPROVED)
    assert (await client.get(f"/assets/{asset_id}")).json()["status"] == int(AssetStatus.DECOMMISSIONED)

    r = await client.post(
        f"/write-offs/{rec['id']}/process",
        json={"disposal_method": "WEEE recycling", "salvage_value": "5.00"},
    )
    assert r.status_code == 200, r.text
    assert r.json()["status_label"] == "Processed"
    assert r.json()["disposal_date"] is not None
    assert (await client.get(f"/assets/{asset_id}")).json()["status"] == int(AssetStatus.WRITE_OFF)

    assert (await client.delete(f"/write-offs/{rec['id']}")).status_code == 409


async def test_process_before_approval_is_refused(client: AsyncClient):
    rec = (await _submit(client, await _asset_id(client, "WO-2"))).json()
    r = await client.post(f"/write-offs/{rec['id']}/process", json={})
    assert r.status_code == 409


async def test_reject_needs_reason(client: AsyncClient):
    rec = (await _submit(client, await _asset_id(client, "WO-3"))).json()
    r = await client.post(f"/write-offs/{rec['id']}/reject", json={"reason": "  "})
    assert r.status_code == 422

    r = await client.post(f"/write-offs/{rec['id']}/reject", json={"reason": "repairable"})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == int(WriteOffStatus.REJECTED)

    assert (await client.delete(f"/write-offs/{rec['id']}")).status_code == 204
    assert (await client.get(f"/write-offs/{rec['id']}")).status_code == 404


async def test_cancel_only_while_pending(client: AsyncClient):
    rec = (await _submit(client, await _asset_id(client, "WO-4"))).json()
    r = await client.post(f"/write-offs/{rec['id']}/cancel", json={"reason": "duplicate"})
    assert r.status_code == 200, r.text
    assert r.json()["additional_notes"] == "duplicate"

    r = await client.post(f"/write-offs/{rec['id']}/cancel", json={})
    assert r.status_code == 409


async def test_unknown_asset_and_reason(client: AsyncClient):
    assert (await _submit(client, 999999)).status_code == 404
    asset_id = await _asset_id(client, "WO-5")
    assert (await _submit(client, asset_id, reason=42)).status_code == 422


async def test_list_and_summary(client: AsyncClient):
    a = await _asset_id(client, "WO-6")
    b = await _asset_id(client, "WO-7")
    await _submit(client, a)
    await _submit(client, b, reason=int(WriteOffReason.OBSOLETE), estimated_value="20.00")

    r = await client.get("/write-offs", params={"status": int(WriteOffStatus.PENDING)})
    assert r.status_code == 200
    assert len(r.json()) == 2

    r = await client.get("/write-offs", params={"asset_id": b})
    assert [x["asset_id"] for x in r.json()] == [b]

    r = await client.get("/write-offs/summary")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["total"] == 2
    assert Decimal(body["estimated_value"]) == Decimal("200")
    assert body["by_status"]["Pending"]["count"] == 2
    assert body["by_reason"]["Obsolete"]["count"] == 1
    assert Decimal(body["by_reason"]["BeyondRepair"]["estimated_value"]) == Decimal("180")
