# tests/services/test_procurement_service.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.models.enums import (
    ApprovalLevel,
    ApprovalStatus,
    ProcurementSource,
    ProcurementStatus,
    RequestType,
    VendorStatus,
)
from app.services.errors import ConflictError, InvalidStateError
from app.services.procurement_service import ItemLine, ProcurementService, QuoteLine
from app.services.request_service import RequestService
from tests.factories import ADMIN_ID, TECH_ID, make_approved_vendor, make_asset, make_item

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]

UTC = timezone.utc


async def _draft(session, *lines, **kw):
    lines = lines or (ItemLine(item_name="Barcode scanner", quantity=2, estimated_unit_price=Decimal("150")),)
    return await ProcurementService(session).create_procurement(
        user_id=TECH_ID,
        title=kw.pop("title", "Ward scanners"),
        description="Scanners for medication rounds",
        department="Pharmacy",
        items=list(lines),
        **kw,
    )


async def _approved(session, *lines):
    obj = await _draft(session, *lines)
    return await ProcurementService(session).submit_for_approval(obj.id, user_id=TECH_ID)


async def _activity_statuses(session, obj):
    return [(a.from_status, a.to_status) for a in await ProcurementService(session).activities(obj.id)]


async def test_create_computes_budget_and_number(session):
    obj = await _draft(
        session,
        ItemLine(item_name="Scanner", quantity=2, estimated_unit_price=Decimal("150")),
        ItemLine(item_name="Cradle", quantity=2, estimated_unit_price=Decimal("24.995")),
    )
    assert obj.procurement_number == f"PR-{datetime.now(UTC).year}-000001"
    assert obj.status == int(ProcurementStatus.DRAFT)
    assert obj.estimated_budget == Decimal("349.99")
    assert [it.item_name for it in obj.items] == ["Scanner", "Cradle"]
    assert await _activity_statuses(session, obj) == [(None, int(ProcurementStatus.DRAFT))]


async def test_create_validates_lines(session):
    with pytest.raises(ValueError):
        await _draft(session, ItemLine(item_name="x", quantity=0, estimated_unit_price=Decimal("1")))
    with pytest.raises(ValueError):
        await _draft(session, ItemLine(item_name="x", quantity=1, estimated_unit_price=Decimal("-1")))


async def test_small_budget_is_auto_approved(session):
    obj = await _approved(session)
    assert obj.status == int(ProcurementStatus.APPROVED)
    assert obj.approved_budget == obj.estimated_budget
    assert obj.approvals == []


async def test_budget_needs_approvers_for_each_level(session):
    svc = ProcurementService(session)
    obj = await _draft(session, ItemLine(item_name="Workstation", quantity=5, estimated_unit_price=Decimal("5000")))

    with pytest.raises(ValueError):
        await svc.submit_for_approval(obj.id, user_id=TECH_ID, approvers={ApprovalLevel.SUPERVISOR: ADMIN_ID})

    await svc.submit_for_approval(
        obj.id,
        user_id=TECH_ID,
        approvers={ApprovalLevel.SUPERVISOR: ADMIN_ID, ApprovalLevel.DEPARTMENT_HEAD: TECH_ID},
    )
    assert obj.status == int(ProcurementStatus.PENDING_APPROVAL)
    assert [a.approval_level for a in obj.approvals] == [
        int(ApprovalLevel.SUPERVISOR),
        int(ApprovalLevel.DEPARTMENT_HEAD),
    ]
    assert obj.current_approval_level == int(ApprovalLevel.SUPERVISOR)

    await svc.decide_approval(obj.id, approve=True, user_id=ADMIN_ID)
    assert obj.status == int(ProcurementStatus.PENDING_APPROVAL)
    assert obj.current_approval_level == int(ApprovalLevel.DEPARTMENT_HEAD)

    await svc.decide_approval(obj.id, approve=True, user_id=TECH_ID, approved_amount=Decimal("24000"))
    assert obj.status == int(ProcurementStatus.APPROVED)
    assert obj.approved_budget == Decimal("24000.00")
    assert obj.current_approval_level is None


async def test_only_assigned_approver_can_decide(session):
    svc = ProcurementService(session)
    obj = await _draft(session, ItemLine(item_name="Switch", quantity=1, estimated_unit_price=Decimal("4000")))
    await svc.submit_for_approval(obj.id, user_id=TECH_ID, approvers={ApprovalLevel.SUPERVISOR: ADMIN_ID})

    with pytest.raises(InvalidStateError):
        await svc.decide_approval(obj.id, approve=True, user_id=TECH_ID)
    assert obj.status == int(ProcurementStatus.PENDING_APPROVAL)
    assert obj.approvals[0].status == int(ApprovalStatus.PENDING)

    await svc.decide_approval(obj.id, approve=True, user_id=ADMIN_ID)
    assert obj.status == int(ProcurementStatus.APPROVED)


async def test_rejection_at_any_level(session):
    svc = ProcurementService(session)
    obj = await _draft(session, ItemLine(item_name="Switch", quantity=1, estimated_unit_price=Decimal("4000")))
    await svc.submit_for_approval(obj.id, user_id=TECH_ID, approvers={ApprovalLevel.SUPERVISOR: ADMIN_ID})
    await svc.decide_approval(obj.id, approve=False, user_id=ADMIN_ID, comments="reuse stock")
    assert obj.status == int(ProcurementStatus.REJECTED)
    assert obj.approvals[0].status == int(ApprovalStatus.REJECTED)

    with pytest.raises(InvalidStateError):
        await svc.submit_for_approval(obj.id, user_id=TECH_ID)


async def test_quote_order_receive_complete(session):
    svc = ProcurementService(session)
    stock = await make_item(session, name="Barcode scanner", quantity=1, unit_cost=Decimal("140"))
    vendor = await make_approved_vendor(session)
    obj = await _approved(
        session,
        ItemLine(
            item_name="Barcode scanner",
            quantity=4,
            estimated_unit_price=Decimal("150"),
            expected_inventory_item_id=stock.id,
        ),
    )
    line = obj.items[0]

    quote = await svc.add_vendor_quote(
        obj.id,
        vendor.id,
        user_id=TECH_ID,
        lines=[QuoteLine(procurement_item_id=line.id, unit_price=Decimal("130"), quantity=4)],
        tax_amount=Decimal("20"),
        discount_amount=Decimal("10"),
        delivery_days=5,
    )
    assert quote.total_amount == Decimal("530.00")

    await svc.select_quote(obj.id, quote.id, user_id=TECH_ID)
    assert obj.status == int(ProcurementStatus.IN_PROCUREMENT)
    assert obj.selected_vendor_id == vendor.id
    assert quote.is_selected is True
    assert line.actual_unit_price == Decimal("130.00")

    await svc.place_order(obj.id, user_id=TECH_ID, purchase_order_number=" PO-7781 ")
    assert obj.status == int(ProcurementStatus.ORDER_PLACED)
    assert obj.purchase_order_number == "PO-7781"
    assert obj.expected_delivery_date is not None

    first = await svc.receive_items(obj.id, {line.id: 1}, user_id=ADMIN_ID)
    assert first.fully_delivered is False
    assert obj.status == int(ProcurementStatus.PARTIALLY_DELIVERED)
    assert stock.quantity == 2

    with pytest.raises(ValueError):
        await svc.receive_items(obj.id, {line.id: 4}, user_id=ADMIN_ID)

    rest = await svc.receive_items(obj.id, {line.id: 3}, user_id=ADMIN_ID)
    assert rest.fully_delivered is True
    assert rest.stocked_items == [stock.id]
    assert obj.status == int(ProcurementStatus.DELIVERED)
    assert obj.inventory_updated is True
    assert stock.quantity == 5

    await svc.complete(obj.id, user_id=ADMIN_ID)
    assert obj.status == int(ProcurementStatus.COMPLETED)
    assert obj.final_cost == Decimal("520.00")
    assert vendor.total_orders == 1
    assert vendor.on_time_deliveries == 1

    transitions = [to for _, to in await _activity_statuses(session, obj) if to is not None]
    assert transitions[-1] == int(ProcurementStatus.COMPLETED)


async def test_quote_rules(session):
    svc = ProcurementService(session)
    vendor = await make_approved_vendor(session)
    pending_vendor = await svc.create_vendor(user_id=ADMIN_ID, name="Unvetted Ltd", contact_person="A. N. Other")
    obj = await _approved(session)
    line_id = obj.items[0].id

    with pytest.raises(InvalidStateError):
        await svc.add_vendor_quote(
            obj.id, pending_vendor.id, user_id=TECH_ID,
            lines=[QuoteLine(procurement_item_id=line_id, unit_price=Decimal("1"), quantity=1)],
        )
    with pytest.raises(ValueError):
        await svc.add_vendor_quote(
            obj.id, vendor.id, user_id=TECH_ID,
            lines=[QuoteLine(procurement_item_id=line_id + 1000, unit_price=Decimal("1"), quantity=1)],
        )

    expired = await svc.add_vendor_quote(
        obj.id, vendor.id, user_id=TECH_ID,
        lines=[QuoteLine(procurement_item_id=line_id, unit_price=Decimal("1"), quantity=1)],
        valid_until_date=datetime.now(UTC) - timedelta(days=1),
    )
    with pytest.raises(InvalidStateError):
        await svc.select_quote(obj.id, expired.id, user_id=TECH_ID)


async def test_draft_quotes_are_refused(session):
    vendor = await make_approved_vendor(session)
    obj = await _draft(session)
    with pytest.raises(InvalidStateError):
        await ProcurementService(session).add_vendor_quote(
            obj.id, vendor.id, user_id=TECH_ID,
            lines=[QuoteLine(procurement_item_id=obj.items[0].id, unit_price=Decimal("1"), quantity=1)],
        )


async def test_order_needs_selected_vendor(session):
    obj = await _approved(session)
    with pytest.raises(InvalidStateError):
        await ProcurementService(session).place_order(obj.id, user_id=TECH_ID, purchase_order_number="PO-1")


async def test_cancel_rejects_pending_steps(session):
    svc = ProcurementService(session)
    obj = await _draft(session, ItemLine(item_name="UPS", quantity=1, estimated_unit_price=Decimal("3000")))
    await svc.submit_for_approval(obj.id, user_id=TECH_ID, approvers={ApprovalLevel.SUPERVISOR: ADMIN_ID})
    await svc.cancel(obj.id, user_id=TECH_ID, reason="budget frozen")
    assert obj.status == int(ProcurementStatus.CANCELLED)
    assert obj.approvals[0].status == int(ApprovalStatus.REJECTED)
    assert obj.approvals[0].comments == "Cancelled: budget frozen"
    with pytest.raises(InvalidStateError):
        await svc.cancel(obj.id, user_id=TECH_ID, reason="again")


async def test_create_from_request(session):
    req = await RequestService(session).create(
        user_id=TECH_ID,
        title="Replacement monitor",
        description="Flickering monitor in radiology",
        request_type=RequestType.HARDWARE_REPLACEMENT,
        department="Radiology",
        estimated_cost=Decimal("240"),
    )
    obj = await ProcurementService(session).create_from_request(req.id, user_id=TECH_ID)
    assert obj.source == int(ProcurementSource.REQUEST_MODULE)
    assert obj.originating_request_id == req.id
    assert obj.department == "Radiology"
    assert obj.estimated_budget == Decimal("240.00")


async def test_create_from_inventory_trigger_restocks_to_maximum(session):
    item = await make_item(session, quantity=10, maximum_stock=50, unit_cost=Decimal("25"))
    obj = await ProcurementService(session).create_from_inventory_trigger(item.id, user_id=ADMIN_ID)
    assert obj.source == int(ProcurementSource.INVENTORY_THRESHOLD)
    assert obj.items[0].quantity == 40
    assert obj.items[0].expected_inventory_item_id == item.id
    assert obj.estimated_budget == Decimal("1000.00")


async def test_create_from_inventory_trigger_without_maximum(session):
    item = await make_item(session, quantity=10, maximum_stock=0)
    obj = await ProcurementService(session).create_from_inventory_trigger(item.id, user_id=ADMIN_ID)
    assert obj.items[0].quantity == 1


async def test_create_from_asset_replacement(session):
    asset = await make_asset(session, department="Cardiology")
    obj = await ProcurementService(session).create_from_asset_replacement(asset.id, user_id=ADMIN_ID)
    assert obj.source == int(ProcurementSource.ASSET_LIFECYCLE)
    assert obj.replacement_for_asset_id == asset.id
    assert obj.department == "Cardiology"
    assert obj.estimated_budget == Decimal("1200.00")


async def test_documents(session):
    svc = ProcurementService(session)
    obj = await _draft(session)
    doc = await svc.add_document(
        obj.id, document_name="quote.pdf", file_path="docs/quote.pdf", file_size=1000, user_id=TECH_ID
    )
    assert doc.procurement_request_id == obj.id


async def test_vendor_lifecycle(session):
    svc = ProcurementService(session)
    v = await svc.create_vendor(user_id=ADMIN_ID, name="  Cables R Us ", contact_person="Sam")
    assert v.name == "Cables R Us"
    assert v.status == int(VendorStatus.PENDING_APPROVAL)
    assert [x.id for x in await svc.list_vendors(approved_only=True)] == []

    with pytest.raises(ConflictError):
        await svc.create_vendor(user_id=ADMIN_ID, name="Cables R Us", contact_person="Sam")

    await svc.approve_vendor(v.id, user_id=ADMIN_ID)
    assert [x.id for x in await svc.list_vendors(approved_only=True)] == [v.id]

    await svc.set_vendor_status(v.id, VendorStatus.BLACKLISTED, user_id=ADMIN_ID)
    assert v.is_approved is False and v.is_active is False
    with pytest.raises(InvalidStateError):
        await svc.approve_vendor(v.id, user_id=ADMIN_ID)
