# app/services/inventory_service.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.asset import Asset
from app.models.enums import (
    AssetInventoryMappingStatus,
    AuditAction,
    InventoryCondition,
    InventoryItemType,
    InventoryMovementType,
    InventoryStatus,
    InventoryTransactionType,
)
from app.models.inventory import (
    AssetInventoryMapping,
    InventoryItem,
    InventoryMovement,
    InventoryTransaction,
    QualityAssessmentRecord,
)
from app.models.location import Location
from app.services.audit_service import AuditService
from app.services.errors import (
    ConflictError,
    InsufficientStockError,
    NotFoundError,
    flush_or_conflict,
)
from app.services.numbering import next_item_code

logger = logging.getLogger("hat.inventory")

UTC = timezone.utc
CENT = Decimal("0.01")

ALERT_OUT_OF_STOCK = "OutOfStock"
ALERT_CRITICAL = "Critical"
ALERT_LOW = "Low"
ALERT_OVERSTOCK = "Overstock"


def money(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def total_value(unit_cost: Optional[Decimal], quantity: int) -> Optional[Decimal]:
    if unit_cost is None:
        return None
    return money(Decimal(unit_cost) * int(quantity))


def weighted_unit_cost(
    current_cost: Optional[Decimal], current_qty: int, incoming_cost: Decimal, incoming_qty: int
) -> Optional[Decimal]:
    """
    Weighted average after receiving incoming_qty at incoming_cost.

    An unknown current cost counts as zero for the units already on hand.
    """
    total_qty = int(current_qty) + int(incoming_qty)
    if total_qty <= 0:
        return money(current_cost)
    current_value = Decimal(current_cost or 0) * int(current_qty)
    incoming_value = Decimal(incoming_cost) * int(incoming_qty)
    return money((current_value + incoming_value) / total_qty)


def classify_stock(quantity: int, minimum: int, reorder: int, maximum: int) -> Optional[str]:
    """
    Stock level alert for one item, or None.

    Checked in order: OutOfStock, Critical, Low, Overstock; the first match
    wins so an item appears at most once.
    """
    if quantity == 0:
        return ALERT_OUT_OF_STOCK
    if minimum > 0 and quantity <= minimum:
        return ALERT_CRITICAL
    if minimum < quantity <= reorder:
        return ALERT_LOW
    if maximum > 0 and quantity > maximum:
        return ALERT_OVERSTOCK
    return None


@dataclass
class StockLevelAlert:
    inventory_item_id: int
    item_code: str
    item_name: str
    category: int
    current_stock: int
    minimum_stock: int
    reorder_level: int
    maximum_stock: int
    alert_type: str
    location_name: str


def _positive(qty: int) -> int:
    q = int(qty)
    if q <= 0:
        raise ValueError("quantity must be positive")
    return q


class InventoryService:
    """
    Stock records and their ledgers.

    - quantities change only through the methods here; each writes an
      InventoryMovement (and, for priced receipts, an InventoryTransaction)
    - ledger rows are insert-only
    - every write emits an AuditLog on the InventoryItem
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.audit = AuditService(session)

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    async def get(self, item_id: int) -> InventoryItem:
        obj = await self.session.get(InventoryItem, int(item_id))
        if obj is None:
            raise NotFoundError(f"inventory item {item_id} not found")
        return obj

    async def get_by_code(self, item_code: str) -> Optional[InventoryItem]:
        stmt = select(InventoryItem).where(InventoryItem.item_code == item_code)
        return (await self.session.execute(stmt)).scalars().first()

    async def search(
        self,
        term: Optional[str] = None,
        *,
        category: Optional[int] = None,
        location_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[InventoryItem]:
        stmt = select(InventoryItem)
        if term and term.strip():
            like = f"%{term.strip()}%"
            stmt = stmt.where(
                or_(
                    InventoryItem.item_code.ilike(like),
                    InventoryItem.name.ilike(like),
                    InventoryItem.brand.ilike(like),
                    InventoryItem.model.ilike(like),
                    InventoryItem.part_number.ilike(like),
                )
            )
        if category is not None:
            stmt = stmt.where(InventoryItem.category == int(category))
        if location_id is not None:
            stmt = stmt.where(InventoryItem.location_id == int(location_id))
        stmt = stmt.order_by(InventoryItem.item_code).offset(offset).limit(limit)
        return list((await self.session.execute(stmt)).scalars())

    async def movements(self, item_id: int) -> List[InventoryMovement]:
        stmt = (
            select(InventoryMovement)
            .where(InventoryMovement.inventory_item_id == item_id)
            .order_by(InventoryMovement.movement_date.desc(), InventoryMovement.id.desc())
        )
        return list((await self.session.execute(stmt)).scalars())

    async def transactions(self, item_id: int) -> List[InventoryTransaction]:
        stmt = (
            select(InventoryTransaction)
            .where(InventoryTransaction.inventory_item_id == item_id)
            .order_by(InventoryTransaction.transaction_date.desc(), InventoryTransaction.id.desc())
        )
        return list((await self.session.execute(stmt)).scalars())

    async def mappings_for_asset(self, asset_id: int) -> List[AssetInventoryMapping]:
        stmt = (
            select(AssetInventoryMapping)
            .where(AssetInventoryMapping.asset_id == asset_id)
            .order_by(AssetInventoryMapping.deployment_date.desc(), AssetInventoryMapping.id.desc())
        )
        return list((await self.session.execute(stmt)).scalars())

    async def stock_level_alerts(self) -> List[StockLevelAlert]:
        stmt = (
            select(InventoryItem, Location)
            .outerjoin(Location, Location.id == InventoryItem.location_id)
            .order_by(InventoryItem.quantity, InventoryItem.name)
        )
        out: List[StockLevelAlert] = []
        for it, loc in (await self.session.execute(stmt)).all():
            kind = classify_stock(it.quantity, it.minimum_stock, it.reorder_level, it.maximum_stock)
            if kind is None:
                continue
            out.append(
                StockLevelAlert(
                    inventory_item_id=it.id,
                    item_code=it.item_code,
                    item_name=it.name,
                    category=it.category,
                    current_stock=it.quantity,
                    minimum_stock=it.minimum_stock,
                    reorder_level=it.reorder_level,
                    maximum_stock=it.maximum_stock,
                    alert_type=kind,
                    location_name=loc.full_location if loc is not None else "Unknown",
                )
            )
        return out

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _touch(self, item: InventoryItem, user_id: str) -> None:
        item.last_updated_by_user_id = user_id
        item.total_value = total_value(item.unit_cost, item.quantity)

    def _movement(
        self,
        item: InventoryItem,
        movement_type: InventoryMovementType,
        quantity: int,
        reason: str,
        user_id: str,
        **extra: Any,
    ) -> InventoryMovement:
        mv = InventoryMovement(
            inventory_item_id=item.id,
            movement_type=int(movement_type),
            quantity=int(quantity),
            movement_date=datetime.now(UTC),
            reason=reason,
            performed_by_user_id=user_id,
            **extra,
        )
        self.session.add(mv)
        return mv

    async def _audit(
        self,
        item: InventoryItem,
        user_id: str,
        description: str,
        *,
        action: AuditAction = AuditAction.UPDATE,
        old_values: Any = None,
        new_values: Any = None,
        asset_id: Optional[int] = None,
    ) -> None:
        await self.audit.log(
            action,
            "InventoryItem",
            item.id,
            user_id,
            description,
            old_values=old_values,
            new_values=new_values,
            asset_id=asset_id,
        )

    # ------------------------------------------------------------------
    # writes
    # ------------------------------------------------------------------

    async def create_item(
        self,
        *,
        user_id: str,
        name: str,
        category: int,
        brand: str,
        model: str,
        location_id: int,
        item_code: Optional[str] = None,
        item_type: int = InventoryItemType.NEW,
        status: int = InventoryStatus.IN_STOCK,
        condition: int = InventoryCondition.NEW,
        quantity: int = 0,
        minimum_stock: int = 0,
        maximum_stock: int = 0,
        reorder_level: int = 0,
        unit_cost: Optional[Decimal] = None,
        **fields: Any,
    ) -> InventoryItem:
        if int(quantity) < 0:
            raise ValueError("quantity cannot be negative")
        if await self.session.get(Location, int(location_id)) is None:
            raise NotFoundError(f"location {location_id} not found")

        code = (item_code or "").strip()
        if code:
            if await self.get_by_code(code) is not None:
                raise ConflictError(f"item code {code} already exists")
        else:
            code = await next_item_code(self.session, category)

        cost = money(unit_cost)
        obj = InventoryItem(
            item_code=code,
            name=name,
            category=int(category),
            item_type=int(item_type),
            brand=brand,
            model=model,
            status=int(status),
            condition=int(condition),
            quantity=int(quantity),
            reserved_quantity=0,
            minimum_stock=int(minimum_stock),
            maximum_stock=int(maximum_stock),
            reorder_level=int(reorder_level),
            unit_cost=cost,
            total_value=total_value(cost, quantity),
            location_id=int(location_id),
            created_by_user_id=user_id,
            **fields,
        )
        self.session.add(obj)
        await flush_or_conflict(self.session)

        await self._audit(
            obj,
            user_id,
            f"Created inventory item {obj.item_code}",
            action=AuditAction.CREATE,
            new_values={"item_code": obj.item_code, "name": obj.name, "quantity": obj.quantity},
        )
        logger.info("inventory item created id=%s code=%s", obj.id, obj.item_code)
        return obj

    async def stock_in(
        self,
        item_id: int,
        quantity: int,
        *,
        user_id: str,
        reason: str,
        supplier: Optional[str] = None,
        unit_cost: Optional[Decimal] = None,
        purchase_order_number: Optional[str] = None,
        invoice_number: Optional[str] = None,
        batch_number: Optional[str] = None,
        expiry_date: Optional[datetime] = None,
    ) -> InventoryItem:
        qty = _positive(quantity)
        item = await self.get(item_id)

        old_qty = item.quantity
        if unit_cost is not None:
            item.unit_cost = weighted_unit_cost(item.unit_cost, old_qty, unit_cost, qty)
        item.quantity = old_qty + qty
        item.status = int(InventoryStatus.IN_STOCK)
        if supplier:
            item.supplier = supplier
        self._touch(item, user_id)

        mv = self._movement(
            item,
            InventoryMovementType.STOCK_IN,
            qty,
            f"{reason} - Supplier: {supplier}" if supplier else reason,
            user_id,
            to_location_id=item.location_id,
            reference_number=purchase_order_number,
        )
        await flush_or_conflict(self.session)

        if unit_cost is not None:
            self.session.add(
                InventoryTransaction(
                    inventory_item_id=item.id,
                    transaction_type=int(InventoryTransactionType.PURCHASE),
                    quantity=qty,
                    unit_cost=money(unit_cost),
                    total_cost=money(Decimal(unit_cost) * qty),
                    supplier=supplier,
                    purchase_order_number=purchase_order_number,
                    invoice_number=invoice_number,
                    batch_number=batch_number,
                    expiry_date=expiry_date,
                    transaction_date=datetime.now(UTC),
                    description=reason,
                    related_inventory_movement_id=mv.id,
                    created_by_user_id=user_id,
                )
            )
            await flush_or_conflict(self.session)

        await self._audit(
            item,
            user_id,
            f"Stock in: {qty} units added",
            old_values={"quantity": old_qty},
            new_values={"quantity": item.quantity, "unit_cost": unit_cost, "supplier": supplier, "reason": reason},
        )
        return item

    async def stock_out(self, item_id: int, quantity: int, *, user_id: str, reason: str) -> InventoryItem:
        qty = _positive(quantity)
        item = await self.get(item_id)
        if item.quantity < qty:
            raise InsufficientStockError(
                f"insufficient stock for {item.item_code}: available {item.quantity}, required {qty}"
            )

        old_qty = item.quantity
        item.quantity = old_qty - qty
        if item.reserved_quantity > item.quantity:
            item.reserved_quantity = item.quantity
        self._touch(item, user_id)

        self._movement(
            item, InventoryMovementType.STOCK_OUT, qty, reason, user_id, from_location_id=item.location_id
        )
        await flush_or_conflict(self.session)

        await self._audit(
            item,
            user_id,
            f"Stock out: {qty} units removed",
            old_values={"quantity": old_qty},
            new_values={"quantity": item.quantity, "reason": reason},
        )
        return item

    async def adjust_stock(self, item_id: int, delta: int, *, user_id: str, reason: str) -> InventoryItem:
        """Add delta (may be negative); the result is clamped at zero."""
        item = await self.get(item_id)
        d = int(delta)

        old_qty = item.quantity
        item.quantity = max(0, old_qty + d)
        if item.reserved_quantity > item.quantity:
            item.reserved_quantity = item.quantity
        self._touch(item, user_id)

        self._movement(item, InventoryMovementType.ADJUSTMENT, abs(d), reason, user_id)
        await flush_or_conflict(self.session)

        await self._audit(
            item,
            user_id,
            f"Stock adjustment: {old_qty} -> {item.quantity} (change: {d:+d}). Reason: {reason}",
            old_values={"quantity": old_qty},
            new_values={"quantity": item.quantity},
        )
        return item

    async def transfer(
        self,
        item_id: int,
        quantity: int,
        *,
        to_location_id: int,
        user_id: str,
        reason: str,
        to_zone: Optional[str] = None,
        to_shelf: Optional[str] = None,
        to_bin: Optional[str] = None,
    ) -> InventoryMovement:
        """
        Record a transfer and move the item record to the new coordinates.

        The item keeps a single location; transferring fewer units than are on
        hand is refused only when the quantity is larger than the stock.
        """
        qty = _positive(quantity)
        item = await self.get(item_id)
        if item.quantity < qty:
            raise InsufficientStockError(
                f"insufficient stock for {item.item_code}: available {item.quantity}, required {qty}"
            )
        if await self.session.get(Location, int(to_location_id)) is None:
            raise NotFoundError(f"location {to_location_id} not found")

        mv = self._movement(
            item,
            InventoryMovementType.TRANSFER,
            qty,
            reason,
            user_id,
            from_location_id=item.location_id,
            to_location_id=int(to_location_id),
            from_zone=item.storage_zone,
            to_zone=to_zone,
            from_shelf=item.storage_shelf,
            to_shelf=to_shelf,
            from_bin=item.storage_bin,
            to_bin=to_bin,
        )
        old = {
            "location_id": item.location_id,
            "storage_zone": item.storage_zone,
            "storage_shelf": item.storage_shelf,
            "storage_bin": item.storage_bin,
        }
        item.location_id = int(to_location_id)
        item.storage_zone = to_zone
        item.storage_shelf = to_shelf
        item.storage_bin = to_bin
        self._touch(item, user_id)
        await flush_or_conflict(self.session)

        await self._audit(
            item,
            user_id,
            f"Transferred {qty} units of {item.item_code}. Reason: {reason}",
            old_values=old,
            new_values={
                "location_id": item.location_id,
                "storage_zone": to_zone,
                "storage_shelf": to_shelf,
                "storage_bin": to_bin,
            },
        )
        return mv

    async def reserve(
        self, item_id: int, quantity: int, *, user_id: str, reason: str, reference: Optional[str] = None
    ) -> InventoryItem:
        qty = _positive(quantity)
        item = await self.get(item_id)
        available = item.quantity - item.reserved_quantity
        if qty > available:
            raise InsufficientStockError(
                f"cannot reserve {qty} of {item.item_code}: {available} available"
            )

        item.reserved_quantity += qty
        self._touch(item, user_id)
        self._movement(item, InventoryMovementType.RESERVATION, qty, reason, user_id, reference_number=reference)
        await flush_or_conflict(self.session)

        await self._audit(
            item, user_id, f"Reserved {qty} units", new_values={"reserved_quantity": item.reserved_quantity}
        )
        return item

    async def release_reservation(
        self, item_id: int, quantity: int, *, user_id: str, reason: str, reference: Optional[str] = None
    ) -> InventoryItem:
        qty = _positive(quantity)
        item = await self.get(item_id)
        if qty > item.reserved_quantity:
            raise InsufficientStockError(
                f"cannot release {qty} of {item.item_code}: only {item.reserved_quantity} reserved"
            )

        item.reserved_quantity -= qty
        self._touch(item, user_id)
        self._movement(
            item, InventoryMovementType.RESERVATION, qty, f"Released: {reason}", user_id, reference_number=reference
        )
        await flush_or_conflict(self.session)

        await self._audit(
            item, user_id, f"Released {qty} reserved units", new_values={"reserved_quantity": item.reserved_quantity}
        )
        return item

    # ---- asset deployment ----

    async def deploy_to_asset(
        self,
        asset_id: int,
        item_id: int,
        quantity: int,
        *,
        user_id: str,
        reason: str,
        serial_number: Optional[str] = None,
    ) -> AssetInventoryMapping:
        qty = _positive(quantity)
        item = await self.get(item_id)
        asset = await self.session.get(Asset, int(asset_id))
        if asset is None:
            raise NotFoundError(f"asset {asset_id} not found")
        if item.quantity < qty:
            raise InsufficientStockError(
                f"insufficient stock for {item.item_code}: available {item.quantity}, required {qty}"
            )

        now = datetime.now(UTC)
        item.quantity -= qty
        if item.reserved_quantity > item.quantity:
            item.reserved_quantity = item.quantity
        item.status = int(InventoryStatus.DEPLOYED)
        self._touch(item, user_id)

        mapping = AssetInventoryMapping(
            asset_id=asset.id,
            inventory_item_id=item.id,
            quantity=qty,
            serial_number=serial_number,
            status=int(AssetInventoryMappingStatus.DEPLOYED),
            deployment_date=now,
            mapping_date=now,
            deployment_reason=reason,
            deployed_by_user_id=user_id,
            created_by_user_id=user_id,
        )
        self.session.add(mapping)
        self._movement(
            item,
            InventoryMovementType.ASSET_DEPLOYMENT,
            qty,
            f"Deployed to Asset {asset.asset_tag}: {reason}",
            user_id,
            related_asset_id=asset.id,
        )
        await flush_or_conflict(self.session)

        await self._audit(
            item,
            user_id,
            f"Deployed {qty} units to Asset {asset.asset_tag}",
            new_values={"asset_id": asset.id, "quantity": qty, "reason": reason},
            asset_id=asset.id,
        )
        return mapping

    async def return_from_asset(
        self, asset_id: int, item_id: int, quantity: int, *, user_id: str, reason: str
    ) -> AssetInventoryMapping:
        """
        Return units from an asset to stock.

        A full return closes the deployed mapping. A partial return shrinks it
        and records the returned units as a separate Returned mapping, which is
        what this method returns in both cases.
        """
        qty = _positive(quantity)
        item = await self.get(item_id)
        asset = await self.session.get(Asset, int(asset_id))
        if asset is None:
            raise NotFoundError(f"asset {asset_id} not found")

        stmt = (
            select(AssetInventoryMapping)
            .where(
                AssetInventoryMapping.asset_id == asset.id,
                AssetInventoryMapping.inventory_item_id == item.id,
                AssetInventoryMapping.status == int(AssetInventoryMappingStatus.DEPLOYED),
            )
            .order_by(AssetInventoryMapping.deployment_date, AssetInventoryMapping.id)
        )
        mapping = (await self.session.execute(stmt)).scalars().first()
        if mapping is None:
            raise NotFoundError(f"no active deployment of {item.item_code} on asset {asset.asset_tag}")
        if mapping.quantity < qty:
            raise InsufficientStockError(f"cannot return {qty}: only {mapping.quantity} deployed")

        now = datetime.now(UTC)
        item.quantity += qty
        item.status = int(InventoryStatus.IN_STOCK)
        if item.condition == int(InventoryCondition.NEW):
            item.condition = int(InventoryCondition.GOOD)
        self._touch(item, user_id)

        if mapping.quantity == qty:
            mapping.status = int(AssetInventoryMappingStatus.RETURNED)
            mapping.return_date = now
            mapping.return_reason = reason
            mapping.returned_by_user_id = user_id
            mapping.last_updated_by_user_id = user_id
            returned = mapping
        else:
            mapping.quantity -= qty
            mapping.last_updated_by_user_id = user_id
            returned = AssetInventoryMapping(
                asset_id=asset.id,
                inventory_item_id=item.id,
                quantity=qty,
                serial_number=mapping.serial_number,
                status=int(AssetInventoryMappingStatus.RETURNED),
                deployment_date=mapping.deployment_date,
                mapping_date=now,
                return_date=now,
                deployment_reason=mapping.deployment_reason,
                return_reason=reason,
                deployed_by_user_id=mapping.deployed_by_user_id,
                returned_by_user_id=user_id,
                created_by_user_id=user_id,
            )
            self.session.add(returned)

        self._movement(
            item,
            InventoryMovementType.ASSET_RETURN,
            qty,
            f"Returned from Asset {asset.asset_tag}: {reason}",
            user_id,
            related_asset_id=asset.id,
        )
        await flush_or_conflict(self.session)

        await self._audit(
            item,
            user_id,
            f"Returned {qty} units from Asset {asset.asset_tag}",
            new_values={"asset_id": asset.id, "quantity": qty, "reason": reason},
            asset_id=asset.id,
        )
        return returned

    # ---- quality ----

    async def record_quality_assessment(
        self,
        item_id: int,
        *,
        user_id: str,
        overall_condition: int,
        quality_score: float,
        checklist: Optional[Dict[str, Any]] = None,
        action_required: str = "",
        notes: Optional[str] = None,
        asset_id: Optional[int] = None,
        update_item_condition: bool = True,
    ) -> QualityAssessmentRecord:
        item = await self.get(item_id)
        score = float(quality_score)
        if not 0.0 <= score <= 100.0:
            raise ValueError("quality_score must be between 0 and 100")

        rec = QualityAssessmentRecord(
            inventory_item_id=item.id,
            asset_id=asset_id,
            assessment_date=datetime.now(UTC),
            inspector_user_id=user_id,
            inspector_id=user_id,
            performed_by_user_id=user_id,
            overall_condition=int(InventoryCondition(overall_condition)),
            quality_score=score,
            checklist_json=json.dumps(checklist or {}, ensure_ascii=False, sort_keys=True),
            action_required=action_required,
            notes=notes,
        )
        self.session.add(rec)
        if update_item_condition:
            item.condition = int(overall_condition)
            self._touch(item, user_id)
        await flush_or_conflict(self.session)

        await self._audit(
            item,
            user_id,
            f"Quality assessment recorded for {item.item_code} (score {score:g})",
            new_values={"overall_condition": int(overall_condition), "quality_score": score},
            asset_id=asset_id,
        )
        return rec
