# app/services/procurement_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Mapping, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.models.asset import Asset
from app.models.enums import (
    ApprovalLevel,
    ApprovalStatus,
    AuditAction,
    ProcurementActivityType,
    ProcurementCategory,
    ProcurementDocumentType,
    ProcurementMethod,
    ProcurementPriority,
    ProcurementSource,
    ProcurementStatus,
    ProcurementType,
    VendorStatus,
    label,
)
from app.models.inventory import InventoryItem
from app.models.procurement import (
    ProcurementActivity,
    ProcurementApproval,
    ProcurementDocument,
    ProcurementItem,
    ProcurementRequest,
    QuoteItem,
    Vendor,
    VendorQuote,
)
from app.models.request import ITRequest
from app.services.audit_service import AuditService
from app.services.errors import ConflictError, InvalidStateError, NotFoundError, flush_or_conflict
from app.services.inventory_service import InventoryService, money
from app.services.numbering import next_procurement_number

logger = logging.getLogger("hat.procurement")

UTC = timezone.utc

QUOTABLE = (ProcurementStatus.APPROVED, ProcurementStatus.IN_PROCUREMENT)
RECEIVABLE = (ProcurementStatus.ORDER_PLACED, ProcurementStatus.PARTIALLY_DELIVERED)
COMPLETABLE = (ProcurementStatus.DELIVERED, ProcurementStatus.RECEIVED)
CANCELLABLE = (
    ProcurementStatus.DRAFT,
    ProcurementStatus.PENDING_APPROVAL,
    ProcurementStatus.APPROVED,
    ProcurementStatus.IN_PROCUREMENT,
    ProcurementStatus.ORDER_PLACED,
)


# ---------------------------------------------------------------------------
# approval chain
# ---------------------------------------------------------------------------


def required_approval_levels(budget: Decimal) -> List[ApprovalLevel]:
    """
    Approval levels an estimated budget needs, in sequence order.

    An empty list means the request is approved on submit.
    """
    s = get_settings()
    amount = Decimal(budget or 0)
    if amount <= s.AUTO_APPROVE_LIMIT:
        return []
    if amount <= s.SUPERVISOR_LIMIT:
        return [ApprovalLevel.SUPERVISOR]
    if amount <= s.DEPARTMENT_HEAD_LIMIT:
        return [ApprovalLevel.SUPERVISOR, ApprovalLevel.DEPARTMENT_HEAD]
    return [
        ApprovalLevel.SUPERVISOR,
        ApprovalLevel.DEPARTMENT_HEAD,
        ApprovalLevel.FINANCE,
        ApprovalLevel.EXECUTIVE,
    ]


@dataclass
class ItemLine:
    """One requested line on a procurement."""

    item_name: str
    quantity: int
    estimated_unit_price: Decimal
    description: Optional[str] = None
    unit: Optional[str] = "each"
    technical_specifications: Optional[str] = None
    expected_inventory_item_id: Optional[int] = None


@dataclass
class QuoteLine:
    procurement_item_id: int
    unit_price: Decimal
    quantity: int
    brand: Optional[str] = None
    model: Optional[str] = None
    item_description: Optional[str] = None
    specifications: Optional[str] = None


@dataclass
class ReceiveResult:
    procurement: ProcurementRequest
    fully_delivered: bool
    stocked_items: List[int] = field(default_factory=list)


def lines_total(lines: Sequence[ItemLine]) -> Decimal:
    return sum((Decimal(ln.estimated_unit_price) * int(ln.quantity) for ln in lines), Decimal("0"))


class ProcurementService:
    """
    Procurement lifecycle and vendors.

    Draft -> PendingApproval -> Approved -> InProcurement -> OrderPlaced
    -> (PartiallyDelivered) -> Delivered -> Completed, with Rejected and
    Cancelled as exits. Each transition appends a ProcurementActivities row
    carrying from/to status.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.audit = AuditService(session)

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    async def get(self, procurement_id: int) -> ProcurementRequest:
        obj = await self.session.get(ProcurementRequest, int(procurement_id))
        if obj is None:
            raise NotFoundError(f"procurement {procurement_id} not found")
        return obj

    async def list_procurements(
        self, *, status: Optional[int] = None, limit: int = 100, offset: int = 0
    ) -> List[ProcurementRequest]:
        stmt = select(ProcurementRequest)
        if status is not None:
            stmt = stmt.where(ProcurementRequest.status == int(status))
        stmt = (
            stmt.order_by(ProcurementRequest.request_date.desc(), ProcurementRequest.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list((await self.session.execute(stmt)).scalars())

    async def activities(self, procurement_id: int) -> List[ProcurementActivity]:
        stmt = (
            select(ProcurementActivity)
            .where(ProcurementActivity.procurement_request_id == procurement_id)
            .order_by(ProcurementActivity.action_date, ProcurementActivity.id)
        )
        return list((await self.session.execute(stmt)).scalars())

    async def quotes(self, procurement_id: int) -> List[VendorQuote]:
        stmt = (
            select(VendorQuote)
            .where(VendorQuote.procurement_request_id == procurement_id)
            .order_by(VendorQuote.total_amount, VendorQuote.id)
        )
        return list((await self.session.execute(stmt)).scalars())

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _activity(
        self,
        obj: ProcurementRequest,
        activity_type: ProcurementActivityType,
        user_id: str,
        details: str,
        *,
        from_status: Optional[int] = None,
        to_status: Optional[int] = None,
    ) -> None:
        self.session.add(
            ProcurementActivity(
                procurement_request_id=obj.id,
                action_by_user_id=user_id,
                action_date=datetime.now(UTC),
                activity_type=int(activity_type),
                activity_details=details[:1000],
                from_status=from_status,
                to_status=to_status,
            )
        )

    async def _move(
        self,
        obj: ProcurementRequest,
        new_status: ProcurementStatus,
        activity_type: ProcurementActivityType,
        user_id: str,
        details: str,
    ) -> ProcurementRequest:
        old = int(obj.status)
        obj.status = int(new_status)
        obj.last_updated_by_user_id = user_id
        obj.last_updated_date = datetime.now(UTC)
        self._activity(obj, activity_type, user_id, details, from_status=old, to_status=int(new_status))
        await flush_or_conflict(self.session)
        logger.info(
            "procurement %s %s -> %s",
            obj.procurement_number,
            label(ProcurementStatus(old)),
            label(new_status),
        )
        return obj

    @staticmethod
    def _require(obj: ProcurementRequest, allowed, action: str) -> None:
        if ProcurementStatus(obj.status) not in allowed:
            raise InvalidStateError(
                f"procurement {obj.procurement_number} is {label(ProcurementStatus(obj.status))}; cannot {action}"
            )

    # ------------------------------------------------------------------
    # creation
    # ------------------------------------------------------------------

    async def create_procurement(
        self,
        *,
        user_id: str,
        title: str,
        description: str,
        department: str,
        items: Sequence[ItemLine] = (),
        procurement_type: int = ProcurementType.HARDWARE,
        category: int = ProcurementCategory.IT_EQUIPMENT,
        method: int = ProcurementMethod.DIRECT_PURCHASE,
        source: int = ProcurementSource.MANUAL,
        priority: int = ProcurementPriority.MEDIUM,
        estimated_budget: Optional[Decimal] = None,
        required_by_date: Optional[datetime] = None,
        business_justification: Optional[str] = None,
        budget_code: Optional[str] = None,
        is_urgent: bool = False,
        originating_request_id: Optional[int] = None,
        triggered_by_inventory_item_id: Optional[int] = None,
        replacement_for_asset_id: Optional[int] = None,
    ) -> ProcurementRequest:
        if not (title or "").strip():
            raise ValueError("title is required")
        for ln in items:
            if int(ln.quantity) <= 0:
                raise ValueError(f"quantity for {ln.item_name} must be positive")
            if Decimal(ln.estimated_unit_price) < 0:
                raise ValueError(f"estimated price for {ln.item_name} cannot be negative")

        now = datetime.now(UTC)
        budget = money(estimated_budget if estimated_budget is not None else lines_total(items))
        obj = ProcurementRequest(
            procurement_number=await next_procurement_number(self.session, now),
            title=title.strip(),
            description=description,
            procurement_type=int(procurement_type),
            category=int(category),
            status=int(ProcurementStatus.DRAFT),
            method=int(method),
            source=int(source),
            priority=int(priority),
            requested_by_user_id=user_id,
            department=department,
            request_date=now,
            required_by_date=required_by_date,
            estimated_budget=budget,
            fiscal_year=str(now.year),
            budget_code=budget_code,
            business_justification=business_justification,
            is_urgent=bool(is_urgent),
            originating_request_id=originating_request_id,
            triggered_by_inventory_item_id=triggered_by_inventory_item_id,
            replacement_for_asset_id=replacement_for_asset_id,
            items=[
                ProcurementItem(
                    item_name=ln.item_name,
                    description=ln.description,
                    technical_specifications=ln.technical_specifications,
                    quantity=int(ln.quantity),
                    unit=ln.unit,
                    estimated_unit_price=money(ln.estimated_unit_price),
                    expected_inventory_item_id=ln.expected_inventory_item_id,
                    quantity_received=0,
                )
                for ln in items
            ],
            approvals=[],
        )
        self.session.add(obj)
        await flush_or_conflict(self.session)

        self._activity(
            obj,
            ProcurementActivityType.CREATED,
            user_id,
            f"Procurement {obj.procurement_number} created ({label(ProcurementSource(obj.source))})",
            to_status=obj.status,
        )
        await self.audit.log(
            AuditAction.CREATE,
            "ProcurementRequest",
            obj.id,
            user_id,
            f"Procurement {obj.procurement_number} created",
            asset_id=replacement_for_asset_id,
        )
        logger.info("procurement created %s budget=%s", obj.procurement_number, obj.estimated_budget)
        return obj

    async def create_from_request(self, request_id: int, *, user_id: str) -> ProcurementRequest:
        req = await self.session.get(ITRequest, int(request_id))
        if req is None:
            raise NotFoundError(f"request {request_id} not found")

        price = req.estimated_cost or Decimal("0")
        return await self.create_procurement(
            user_id=user_id,
            title=req.title,
            description=req.description or "",
            department=req.department or "",
            items=[
                ItemLine(
                    item_name=req.title,
                    description=req.requested_item_specifications or req.description,
                    quantity=1,
                    estimated_unit_price=price,
                    expected_inventory_item_id=req.required_inventory_item_id,
                )
            ],
            procurement_type=ProcurementType.EQUIPMENT,
            source=ProcurementSource.REQUEST_MODULE,
            required_by_date=req.required_by_date,
            business_justification=req.business_justification,
            originating_request_id=req.id,
        )

    async def create_from_inventory_trigger(
        self, item_id: int, *, user_id: str, department: str = "IT"
    ) -> ProcurementRequest:
        """Restock an item up to its MaximumStock (or one unit when no maximum is set)."""
        item = await self.session.get(InventoryItem, int(item_id))
        if item is None:
            raise NotFoundError(f"inventory item {item_id} not found")

        qty = max(item.maximum_stock - item.quantity, 1)
        return await self.create_procurement(
            user_id=user_id,
            title=f"Restock {item.name}",
            description=f"Automatic restock trigger for {item.name} ({item.item_code})",
            department=department,
            items=[
                ItemLine(
                    item_name=item.name,
                    description=f"{item.brand} {item.model}",
                    quantity=qty,
                    unit=item.unit or "each",
                    estimated_unit_price=item.unit_cost or Decimal("0"),
                    expected_inventory_item_id=item.id,
                )
            ],
            procurement_type=ProcurementType.CONSUMABLES,
            source=ProcurementSource.INVENTORY_THRESHOLD,
            triggered_by_inventory_item_id=item.id,
        )

    async def create_from_asset_replacement(
        self, asset_id: int, *, user_id: str, department: Optional[str] = None
    ) -> ProcurementRequest:
        asset = await self.session.get(Asset, int(asset_id))
        if asset is None:
            raise NotFoundError(f"asset {asset_id} not found")

        return await self.create_procurement(
            user_id=user_id,
            title=f"Replace {asset.brand} {asset.model}",
            description=f"Replacement procurement for asset {asset.asset_tag}",
            department=department or asset.department or "IT",
            items=[
                ItemLine(
                    item_name=f"{asset.brand} {asset.model}",
                    description=asset.description,
                    quantity=1,
                    estimated_unit_price=asset.purchase_price or Decimal("0"),
                )
            ],
            procurement_type=ProcurementType.REPLACEMENT,
            source=ProcurementSource.ASSET_LIFECYCLE,
            replacement_for_asset_id=asset.id,
        )

    # ------------------------------------------------------------------
    # approval
    # ------------------------------------------------------------------

    async def submit_for_approval(
        self,
        procurement_id: int,
        *,
        user_id: str,
        approvers: Optional[Mapping[int, str]] = None,
    ) -> ProcurementRequest:
        """
        Build the approval chain for the estimated budget.

        approvers maps ApprovalLevel -> user id and must cover every level the
        budget requires. Budgets within the auto-approve limit skip the chain.
        """
        obj = await self.get(procurement_id)
        self._require(obj, (ProcurementStatus.DRAFT,), "submit")

        levels = required_approval_levels(obj.estimated_budget)
        if not levels:
            obj.approved_budget = obj.estimated_budget
            obj.approval_date = datetime.now(UTC)
            obj.approved_by_user_id = user_id
            obj.current_approval_level = None
            return await self._move(
                obj, ProcurementStatus.APPROVED, ProcurementActivityType.APPROVED, user_id, "Auto-approved on submit"
            )

        approvers = {int(k): v for k, v in (approvers or {}).items()}
        missing = [label(lv) for lv in levels if int(lv) not in approvers]
        if missing:
            raise ValueError(f"approvers missing for levels: {', '.join(missing)}")

        for seq, lv in enumerate(levels, start=1):
            obj.approvals.append(
                ProcurementApproval(
                    approval_level=int(lv),
                    approver_id=approvers[int(lv)],
                    status=int(ApprovalStatus.PENDING),
                    sequence=seq,
                )
            )
        obj.current_approval_level = int(levels[0])
        chain = " -> ".join(label(lv) for lv in levels)
        return await self._move(
            obj,
            ProcurementStatus.PENDING_APPROVAL,
            ProcurementActivityType.SUBMITTED,
            user_id,
            f"Submitted for approval: {chain}",
        )

    async def decide_approval(
        self,
        procurement_id: int,
        *,
        approve: bool,
        user_id: str,
        comments: Optional[str] = None,
        approved_amount: Optional[Decimal] = None,
    ) -> ProcurementRequest:
        obj = await self.get(procurement_id)
        self._require(obj, (ProcurementStatus.PENDING_APPROVAL,), "decide approval")

        pending = sorted(
            (a for a in obj.approvals if a.status == int(ApprovalStatus.PENDING)), key=lambda a: a.sequence
        )
        if not pending:
            raise InvalidStateError(f"procurement {obj.procurement_number} has no pending approval step")

        step = pending[0]
        if step.approver_id != user_id:
            raise InvalidStateError(
                f"{label(ApprovalLevel(step.approval_level))} step of {obj.procurement_number} "
                "is assigned to another approver"
            )
        now = datetime.now(UTC)
        step.status = int(ApprovalStatus.APPROVED if approve else ApprovalStatus.REJECTED)
        step.approved_by_user_id = user_id
        step.decision_date = now
        step.comments = comments
        step.approved_amount = money(approved_amount) if approve else None
        step_label = label(ApprovalLevel(step.approval_level))

        if not approve:
            obj.current_approval_level = None
            return await self._move(
                obj,
                ProcurementStatus.REJECTED,
                ProcurementActivityType.REJECTED,
                user_id,
                f"Rejected at {step_label}" + (f": {comments}" if comments else ""),
            )

        if len(pending) > 1:
            obj.current_approval_level = pending[1].approval_level
            self._activity(obj, ProcurementActivityType.APPROVED, user_id, f"Approved at {step_label}")
            await flush_or_conflict(self.session)
            return obj

        obj.current_approval_level = None
        obj.approved_by_user_id = user_id
        obj.approval_date = now
        obj.approved_budget = money(approved_amount) if approved_amount is not None else obj.estimated_budget
        return await self._move(
            obj, ProcurementStatus.APPROVED, ProcurementActivityType.APPROVED, user_id, f"Approved at {step_label}"
        )

    # ------------------------------------------------------------------
    # quotes / ordering
    # ------------------------------------------------------------------

    async def add_vendor_quote(
        self,
        procurement_id: int,
        vendor_id: int,
        *,
        user_id: str,
        lines: Sequence[QuoteLine],
        quote_number: Optional[str] = None,
        tax_amount: Optional[Decimal] = None,
        discount_amount: Optional[Decimal] = None,
        delivery_days: int = 0,
        valid_until_date: Optional[datetime] = None,
        payment_terms: Optional[str] = None,
        warranty_terms: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> VendorQuote:
        obj = await self.get(procurement_id)
        self._require(obj, QUOTABLE, "accept quotes")
        vendor = await self.get_vendor(vendor_id)
        if not vendor.is_approved or not vendor.is_active:
            raise InvalidStateError(f"vendor {vendor.name} is not approved")
        if not lines:
            raise ValueError("a quote needs at least one line")

        item_ids = {it.id for it in obj.items}
        for ln in lines:
            if ln.procurement_item_id not in item_ids:
                raise ValueError(f"item {ln.procurement_item_id} is not part of {obj.procurement_number}")

        subtotal = sum((Decimal(ln.unit_price) * int(ln.quantity) for ln in lines), Decimal("0"))
        total = subtotal + Decimal(tax_amount or 0) - Decimal(discount_amount or 0)

        quote = VendorQuote(
            procurement_request_id=obj.id,
            vendor_id=vendor.id,
            quote_number=quote_number,
            total_amount=money(total),
            tax_amount=money(tax_amount),
            discount_amount=money(discount_amount),
            quote_date=datetime.now(UTC),
            valid_until_date=valid_until_date,
            delivery_days=int(delivery_days),
            payment_terms=payment_terms,
            warranty_terms=warranty_terms,
            notes=notes,
            is_selected=False,
        )
        for ln in lines:
            quote.items.append(
                QuoteItem(
                    procurement_item_id=ln.procurement_item_id,
                    unit_price=money(ln.unit_price),
                    quantity=int(ln.quantity),
                    item_description=ln.item_description,
                    brand=ln.brand,
                    model=ln.model,
                    specifications=ln.specifications,
                )
            )
        self.session.add(quote)
        self._activity(
            obj, ProcurementActivityType.QUOTE_RECEIVED, user_id, f"Quote from {vendor.name}: {quote.total_amount}"
        )
        await flush_or_conflict(self.session)
        return quote

    async def select_quote(self, procurement_id: int, quote_id: int, *, user_id: str) -> ProcurementRequest:
        obj = await self.get(procurement_id)
        self._require(obj, QUOTABLE, "select a quote")

        quotes = await self.quotes(obj.id)
        chosen = next((q for q in quotes if q.id == int(quote_id)), None)
        if chosen is None:
            raise NotFoundError(f"quote {quote_id} not found on {obj.procurement_number}")
        if chosen.valid_until_date is not None and chosen.valid_until_date < datetime.now(UTC):
            raise InvalidStateError(f"quote {quote_id} expired on {chosen.valid_until_date:%Y-%m-%d}")

        for q in quotes:
            q.is_selected = q.id == chosen.id

        obj.selected_vendor_id = chosen.vendor_id
        obj.approved_budget = chosen.total_amount
        price_by_item = {qi.procurement_item_id: qi.unit_price for qi in chosen.items}
        for it in obj.items:
            if it.id in price_by_item:
                it.actual_unit_price = price_by_item[it.id]
        if obj.procurement_start_date is None:
            obj.procurement_start_date = datetime.now(UTC)

        self._activity(
            obj, ProcurementActivityType.VENDOR_SELECTED, user_id, f"Selected quote {chosen.quote_number or chosen.id}"
        )
        vendor = await self.get_vendor(chosen.vendor_id)
        return await self._move(
            obj,
            ProcurementStatus.IN_PROCUREMENT,
            ProcurementActivityType.UPDATED,
            user_id,
            f"Procurement started with vendor {vendor.name}",
        )

    async def place_order(
        self,
        procurement_id: int,
        *,
        user_id: str,
        purchase_order_number: str,
        expected_delivery_date: Optional[datetime] = None,
        contract_number: Optional[str] = None,
    ) -> ProcurementRequest:
        obj = await self.get(procurement_id)
        self._require(obj, (ProcurementStatus.IN_PROCUREMENT,), "place an order")
        if obj.selected_vendor_id is None:
            raise InvalidStateError(f"procurement {obj.procurement_number} has no selected vendor")
        if not (purchase_order_number or "").strip():
            raise ValueError("purchase order number is required")

        if expected_delivery_date is None:
            selected = next((q for q in await self.quotes(obj.id) if q.is_selected), None)
            if selected is not None and selected.delivery_days:
                expected_delivery_date = datetime.now(UTC) + timedelta(days=selected.delivery_days)

        obj.purchase_order_number = purchase_order_number.strip()
        obj.contract_number = contract_number
        obj.expected_delivery_date = expected_delivery_date
        return await self._move(
            obj,
            ProcurementStatus.ORDER_PLACED,
            ProcurementActivityType.ORDER_PLACED,
            user_id,
            f"Order {obj.purchase_order_number} placed",
        )

    async def receive_items(
        self,
        procurement_id: int,
        received: Mapping[int, int],
        *,
        user_id: str,
        stock_in: bool = True,
        notes: Optional[str] = None,
    ) -> ReceiveResult:
        """
        Record delivered quantities per ProcurementItem id.

        Lines linked to an inventory item are stocked in at the actual (or
        estimated) unit price when stock_in is set. The procurement becomes
        Delivered once every line is complete, PartiallyDelivered otherwise.
        """
        obj = await self.get(procurement_id)
        self._require(obj, RECEIVABLE, "receive items")
        if not received:
            raise ValueError("nothing to receive")

        items = {it.id: it for it in obj.items}
        now = datetime.now(UTC)
        stocked: List[int] = []
        inventory = InventoryService(self.session)
        supplier = None
        if obj.selected_vendor_id is not None:
            supplier = (await self.get_vendor(obj.selected_vendor_id)).name

        for item_id, qty in received.items():
            it = items.get(int(item_id))
            if it is None:
                raise ValueError(f"item {item_id} is not part of {obj.procurement_number}")
            q = int(qty)
            if q <= 0:
                raise ValueError("received quantity must be positive")
            if it.quantity_received + q > it.quantity:
                raise ValueError(
                    f"cannot receive {q} of {it.item_name}: {it.quantity - it.quantity_received} outstanding"
                )

            it.quantity_received += q
            if it.first_delivery_date is None:
                it.first_delivery_date = now
            it.last_delivery_date = now

            if stock_in and it.expected_inventory_item_id is not None:
                await inventory.stock_in(
                    it.expected_inventory_item_id,
                    q,
                    user_id=user_id,
                    reason=f"Received on {obj.procurement_number}",
                    supplier=supplier,
                    unit_cost=it.actual_unit_price or it.estimated_unit_price,
                    purchase_order_number=obj.purchase_order_number,
                )
                it.received_inventory_item_id = it.expected_inventory_item_id
                stocked.append(it.expected_inventory_item_id)

        if stocked:
            obj.inventory_updated = True
        if notes:
            obj.delivery_notes = notes
        obj.received_by_user_id = user_id
        obj.received_date = now

        full = all(it.quantity_received >= it.quantity for it in obj.items)
        if full:
            obj.actual_delivery_date = now
            target = ProcurementStatus.DELIVERED
        else:
            target = ProcurementStatus.PARTIALLY_DELIVERED

        detail = ", ".join(f"{items[int(k)].item_name} x{int(v)}" for k, v in received.items())
        await self._move(obj, target, ProcurementActivityType.RECEIVED, user_id, f"Received {detail}")
        return ReceiveResult(procurement=obj, fully_delivered=full, stocked_items=stocked)

    async def complete(
        self, procurement_id: int, *, user_id: str, final_cost: Optional[Decimal] = None
    ) -> ProcurementRequest:
        obj = await self.get(procurement_id)
        self._require(obj, COMPLETABLE, "complete")

        if final_cost is None:
            priced = [it for it in obj.items if it.actual_unit_price is not None]
            if priced:
                final_cost = sum(
                    (Decimal(it.actual_unit_price) * it.quantity_received for it in priced), Decimal("0")
                )
            else:
                final_cost = obj.approved_budget or obj.estimated_budget
        obj.final_cost = money(final_cost)
        obj.actual_cost = obj.final_cost

        if obj.selected_vendor_id is not None:
            vendor = await self.get_vendor(obj.selected_vendor_id)
            vendor.total_orders += 1
            if (
                obj.expected_delivery_date is not None
                and obj.actual_delivery_date is not None
                and obj.actual_delivery_date <= obj.expected_delivery_date
            ):
                vendor.on_time_deliveries += 1
            vendor.last_updated_date = datetime.now(UTC)

        await self._move(
            obj,
            ProcurementStatus.COMPLETED,
            ProcurementActivityType.COMPLETED,
            user_id,
            f"Completed, final cost {obj.final_cost}",
        )
        await self.audit.log(
            AuditAction.UPDATE,
            "ProcurementRequest",
            obj.id,
            user_id,
            f"Procurement {obj.procurement_number} completed",
            new_values={"final_cost": obj.final_cost},
        )
        return obj

    async def cancel(self, procurement_id: int, *, user_id: str, reason: str) -> ProcurementRequest:
        obj = await self.get(procurement_id)
        self._require(obj, CANCELLABLE, "cancel")

        for a in obj.approvals:
            if a.status == int(ApprovalStatus.PENDING):
                a.status = int(ApprovalStatus.REJECTED)
                a.comments = f"Cancelled: {reason}"
        obj.current_approval_level = None

        await self._move(obj, ProcurementStatus.CANCELLED, ProcurementActivityType.CANCELLED, user_id, reason)
        await self.audit.log(
            AuditAction.UPDATE,
            "ProcurementRequest",
            obj.id,
            user_id,
            f"Procurement {obj.procurement_number} cancelled. Reason: {reason}",
        )
        return obj

    async def add_document(
        self,
        procurement_id: int,
        *,
        document_name: str,
        file_path: str,
        file_size: int,
        user_id: str,
        document_type: int = ProcurementDocumentType.OTHER,
        content_type: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ProcurementDocument:
        obj = await self.get(procurement_id)
        doc = ProcurementDocument(
            procurement_request_id=obj.id,
            document_name=document_name,
            document_type=int(ProcurementDocumentType(document_type)),
            file_path=file_path,
            content_type=content_type,
            file_size=int(file_size),
            uploaded_by_user_id=user_id,
            uploaded_date=datetime.now(UTC),
            description=description,
        )
        self.session.add(doc)
        self._activity(obj, ProcurementActivityType.UPDATED, user_id, f"Document {document_name} attached")
        await flush_or_conflict(self.session)
        return doc

    # ------------------------------------------------------------------
    # vendors
    # ------------------------------------------------------------------

    async def get_vendor(self, vendor_id: int) -> Vendor:
        v = await self.session.get(Vendor, int(vendor_id))
        if v is None:
            raise NotFoundError(f"vendor {vendor_id} not found")
        return v

    async def list_vendors(self, *, approved_only: bool = False) -> List[Vendor]:
        stmt = select(Vendor)
        if approved_only:
            stmt = stmt.where(Vendor.is_approved.is_(True), Vendor.is_active.is_(True))
        stmt = stmt.order_by(Vendor.name)
        return list((await self.session.execute(stmt)).scalars())

    async def create_vendor(
        self,
        *,
        user_id: str,
        name: str,
        contact_person: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        tax_number: Optional[str] = None,
        registration_number: Optional[str] = None,
        country: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Vendor:
        n = (name or "").strip()
        if not n:
            raise ValueError("vendor name is required")
        dup = await self.session.execute(select(Vendor.id).where(Vendor.name == n).limit(1))
        if dup.first() is not None:
            raise ConflictError(f"vendor {n} already exists")

        v = Vendor(
            name=n,
            contact_person=contact_person,
            email=email,
            phone=phone,
            address=address,
            tax_number=tax_number,
            registration_number=registration_number,
            country=country,
            notes=notes,
            is_active=True,
            is_approved=False,
            status=int(VendorStatus.PENDING_APPROVAL),
        )
        self.session.add(v)
        await flush_or_conflict(self.session)
        await self.audit.log(AuditAction.CREATE, "Vendor", v.id, user_id, f"Vendor {v.name} created")
        return v

    async def approve_vendor(self, vendor_id: int, *, user_id: str) -> Vendor:
        v = await self.get_vendor(vendor_id)
        if VendorStatus(v.status) == VendorStatus.BLACKLISTED:
            raise InvalidStateError(f"vendor {v.name} is blacklisted")
        v.is_approved = True
        v.is_active = True
        v.status = int(VendorStatus.ACTIVE)
        v.last_updated_date = datetime.now(UTC)
        await flush_or_conflict(self.session)
        await self.audit.log(AuditAction.UPDATE, "Vendor", v.id, user_id, f"Vendor {v.name} approved")
        return v

    async def set_vendor_status(self, vendor_id: int, status: int, *, user_id: str) -> Vendor:
        v = await self.get_vendor(vendor_id)
        new = VendorStatus(status)
        v.status = int(new)
        v.is_active = new == VendorStatus.ACTIVE
        if new in (VendorStatus.BLACKLISTED, VendorStatus.SUSPENDED):
            v.is_approved = False
        v.last_updated_date = datetime.now(UTC)
        await flush_or_conflict(self.session)
        await self.audit.log(AuditAction.UPDATE, "Vendor", v.id, user_id, f"Vendor {v.name} set to {label(new)}")
        return v

