# tests/api/test_procurements_api.py
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

import pytest
from httpx import AsyncClient

from app.models.enums import (
    ApprovalLevel,
    ProcurementSource,
    ProcurementStatus,
    VendorStatus,
)
from tests.factories import ADMIN_ID, LOCATION_ID, TECH_ID

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]

TECH = {"X-User-Id": TECH_ID}


async def _vendor(client: AsyncClient, name: str = "MedTech Supplies") -> Dict[str, Any]:
    r = await client.post("/vendors", json={"name": name, "contact_person": "Jane Roe", "email": "sales@medtech.test"})
    assert r.status_code == 201, r.text
    r = await client.post(f"/vendors/{r.json()['id']}/approve")
    assert r.status_code == 200, r.text
    return r.json()


async def _draft(client: AsyncClient, lines: List[Dict[str, Any]], **extra) -> Dict[str, Any]:
    payload = {
        "title": "Ward barcode scanners",
        "description": "Scanners for medication rounds",
        "department": "Pharmacy",
        "items": lines,
    }
    payload.update(extra)
    r = await client.post("/procurements", json=payload, headers=TECH)
    assert r.status_code == 201, r.text
    return r.json()


async def test_vendor_endpoints(client: AsyncClient):
    r = await client.post("/vendors", json={"name": "  Cables R Us ", "contact_person": "Sam"})
    assert r.status_code == 201, r.text
    v = r.json()
    assert v["name"] == "Cables R Us"
    assert v["status"] == int(VendorStatus.PENDING_APPROVAL)
    assert v["is_approved"] is False

    r = await client.post("/vendors", json={"name": "Cables R Us", "contact_person": "Sam"})
    assert r.status_code == 409

    assert (await client.get("/vendors", params={"approved_only": True})).json() == []
    await client.post(f"/vendors/{v['id']}/approve")
    assert [x["id"] for x in (await client.get("/vendors", params={"approved_only": True})).json()] == [v["id"]]

    r = await client.post(f"/vendors/{v['id']}/status", json={"status": int(VendorStatus.BLACKLISTED)})
    assert r.status_code == 200, r.text
    assert r.json()["is_active"] is False
    assert (await client.post(f"/vendors/{v['id']}/approve")).status_code == 409
    assert (await client.get("/vendors/999999")).status_code == 404


async def test_create_computes_budget_and_number(client: AsyncClient):
    body = await _draft(
        client,
        [
            {"item_name": "Scanner", "quantity": 2, "estimated_unit_price": "150"},
            {"item_name": "Cradle", "quantity": 2, "estimated_unit_price": "24.995"},
        ],
    )
    assert body["procurement_number"] == f"PR-{datetime.now(timezone.utc).year}-000001"
    assert body["status_label"] == "Draft"
    assert Decimal(body["estimated_budget"]) == Decimal("349.99")
    assert [it["item_name"] for it in body["items"]] == ["Scanner", "Cradle"]

    r = await client.get(f"/procurements/{body['id']}/activities")
    assert r.status_code == 200
    assert len(r.json()) == 1


async def test_bad_lines_are_422(client: AsyncClient):
    r = await client.post(
        "/procurements",
        json={
            "title": "x",
            "description": "y",
            "department": "IT",
            "items": [{"item_name": "z", "quantity": 0, "estimated_unit_price": "1"}],
        },
    )
    assert r.status_code == 422


async def test_approval_chain(client: AsyncClient):
    body = await _draft(client, [{"item_name": "Workstation", "quantity": 5, "estimated_unit_price": "5000"}])
    url = f"/procurements/{body['id']}"

    r = await client.post(f"{url}/submit", json={"approvers": [{"level": 1, "approver_id": ADMIN_ID}]}, headers=TECH)
    assert r.status_code == 422

    r = await client.post(
        f"{url}/submit",
        json={
            "approvers": [
                {"level": int(ApprovalLevel.SUPERVISOR), "approver_id": ADMIN_ID},
                {"level": int(ApprovalLevel.DEPARTMENT_HEAD), "approver_id": TECH_ID},
            ]
        },
        headers=TECH,
    )
    assert r.status_code == 200, r.text
    assert r.json()["status"] == int(ProcurementStatus.PENDING_APPROVAL)
    assert r.json()["current_approval_level"] == int(ApprovalLevel.SUPERVISOR)

    r = await client.post(f"{url}/decision", json={"approve": True}, headers=TECH)
    assert r.status_code == 409
    assert "another approver" in r.json()["detail"]

    r = await client.post(f"{url}/decision", json={"approve": True})
    assert r.json()["current_approval_level"] == int(ApprovalLevel.DEPARTMENT_HEAD)

    r = await client.post(f"{url}/decision", json={"approve": True, "approved_amount": "24000"}, headers=TECH)
    assert r.status_code == 200, r.text
    out = r.json()
    assert out["status"] == int(ProcurementStatus.APPROVED)
    assert Decimal(out["approved_budget"]) == Decimal("24000")


async def test_quote_order_receive_complete(client: AsyncClient):
    stock = (
        await client.post(
            "/inventory",
            json={
                "name": "Barcode scanner",
                "category": 6,
                "brand": "Zebra",
                "model": "DS2208",
                "location_id": LOCATION_ID,
                "quantity": 1,
                "unit_cost": "140.00",
            },
        )
    ).json()
    vendor = await _vendor(client)
    body = await _draft(
        client,
        [
            {
                "item_name": "Barcode scanner",
                "quantity": 4,
                "estimated_unit_price": "150",
                "expected_inventory_item_id": stock["id"],
            }
        ],
    )
    url = f"/procurements/{body['id']}"
    line_id = body["items"][0]["id"]

    r = await client.post(f"{url}/submit", json={}, headers=TECH)
    assert r.json()["status"] == int(ProcurementStatus.APPROVED)

    r = await client.post(
        f"{url}/quotes",
        json={
            "vendor_id": vendor["id"],
            "lines": [{"procurement_item_id": line_id, "unit_price": "130", "quantity": 4}],
            "tax_amount": "20",
            "discount_amount": "10",
            "delivery_days": 5,
        },
    )
    assert r.status_code == 201, r.text
    quote = r.json()
    assert Decimal(quote["total_amount"]) == Decimal("530")
    assert [q["id"] for q in (await client.get(f"{url}/quotes")).json()] == [quote["id"]]

    r = await client.post(f"{url}/order", json={"purchase_order_number": "PO-1"})
    assert r.status_code == 409

    r = await client.post(f"{url}/select-quote", json={"quote_id": quote["id"]})
    assert r.status_code == 200, r.text
    assert r.json()["selected_vendor_id"] == vendor["id"]

    r = await client.post(f"{url}/order", json={"purchase_order_number": "PO-7781"})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == int(ProcurementStatus.ORDER_PLACED)

    r = await client.post(f"{url}/receive", json={"lines": [{"procurement_item_id": line_id, "quantity": 4}]})
    assert r.status_code == 200, r.text
    assert r.json()["fully_delivered"] is True
    assert r.json()["stocked_items"] == [stock["id"]]
    assert (await client.get(f"/inventory/{stock['id']}")).json()["quantity"] == 5

    r = await client.post(f"{url}/complete", json={})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == int(ProcurementStatus.COMPLETED)
    assert Decimal(r.json()["final_cost"]) == Decimal("520")

    v = (await client.get(f"/vendors/{vendor['id']}")).json()
    assert v["total_orders"] == 1


async def test_cancel(client: AsyncClient):
    body = await _draft(client, [{"item_name": "UPS", "quantity": 1, "estimated_unit_price": "3000"}])
    url = f"/procurements/{body['id']}"
    r = await client.post(f"{url}/cancel", json={"reason": "budget frozen"})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == int(ProcurementStatus.CANCELLED)
    assert (await client.post(f"{url}/cancel", json={"reason": "again"})).status_code == 409
    assert (await client.post(f"{url}/cancel", json={"reason": ""})).status_code == 422


async def test_creation_paths(client: AsyncClient):
    req = (
        await client.post(
            "/requests",
            json={
                "title": "Replacement monitor",
                "description": "Flickering monitor in radiology",
                "request_type": 1,
                "department": "Radiology",
            },
        )
    ).json()
    r = await client.post("/procurements/from-request", json={"request_id": req["id"]})
    assert r.status_code == 201, r.text
    assert r.json()["source"] == int(ProcurementSource.REQUEST_MODULE)
    assert r.json()["originating_request_id"] == req["id"]

    item = (
        await client.post(
            "/inventory",
            json={
                "name": "Toner",
                "category": 14,
                "brand": "HP",
                "model": "CF259A",
                "location_id": LOCATION_ID,
                "quantity": 10,
                "maximum_stock": 50,
                "unit_cost": "25.00",
            },
        )
    ).json()
    r = await client.post("/procurements/from-inventory", json={"inventory_item_id": item["id"]})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["source"] == int(ProcurementSource.INVENTORY_THRESHOLD)
    assert body["items"][0]["quantity"] == 40
    assert Decimal(body["estimated_budget"]) == Decimal("1000")

    asset = (
        await client.post(
            "/assets",
            json={
                "category": 0,
                "brand": "Dell",
                "model": "OptiPlex",
                "serial_number": "SN-PR-1",
                "description": "Cardiology PC",
                "department": "Cardiology",
                "purchase_price": "1200.00",
            },
        )
    ).json()
    r = await client.post("/procurements/from-asset", json={"asset_id": asset["id"]})
    assert r.status_code == 201, r.text
    assert r.json()["replacement_for_asset_id"] == asset["id"]
    assert r.json()["department"] == "Cardiology"

    assert (await client.post("/procurements/from-asset", json={"asset_id": 999999})).status_code == 404


async def test_documents(client: AsyncClient):
    body = await _draft(client, [{"item_name": "Scanner", "quantity": 1, "estimated_unit_price": "150"}])
    r = await client.post(
        f"/procurements/{body['id']}/documents",
        json={"document_name": "spec.pdf", "file_path": "docs/spec.pdf", "file_size": 1000},
    )
    assert r.status_code == 201, r.text
    assert r.json()["procurement_request_id"] == body["id"]
