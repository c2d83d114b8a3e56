# tests/factories.py
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.asset import Asset
from app.models.enums import AssetCategory, InventoryCategory
from app.models.inventory import InventoryItem
from app.models.procurement import Vendor
from app.services.asset_service import AssetService
from app.services.inventory_service import InventoryService
from app.services.procurement_service import ProcurementService

# ids seeded by the seeded_db fixture
ADMIN_ID = "u-admin"
TECH_ID = "u-tech"
LOCATION_ID = 1


async def make_asset(
    session: AsyncSession,
    *,
    asset_tag: Optional[str] = None,
    category: int = AssetCategory.DESKTOP,
    purchase_price: Optional[Decimal] = Decimal("1200.00"),
    location_id: Optional[int] = LOCATION_ID,
    **fields,
) -> Asset:
    return await AssetService(session).register_asset(
        user_id=ADMIN_ID,
        category=category,
        brand=fields.pop("brand", "Dell"),
        model=fields.pop("model", "OptiPlex 7010"),
        serial_number=fields.pop("serial_number", f"SN-{uuid.uuid4().hex[:8]}"),
        description=fields.pop("description", "Ward desktop"),
        asset_tag=asset_tag,
        location_id=location_id,
        purchase_price=purchase_price,
        **fields,
    )


async def make_item(
    session: AsyncSession,
    *,
    name: str = "Toner cartridge",
    category: int = InventoryCategory.CONSUMABLES,
    quantity: int = 10,
    unit_cost: Optional[Decimal] = Decimal("25.00"),
    minimum_stock: int = 2,
    reorder_level: int = 5,
    maximum_stock: int = 50,
    **fields,
) -> InventoryItem:
    return await InventoryService(session).create_item(
        user_id=ADMIN_ID,
        name=name,
        category=category,
        brand=fields.pop("brand", "HP"),
        model=fields.pop("model", "CF259A"),
        location_id=fields.pop("location_id", LOCATION_ID),
        quantity=quantity,
        unit_cost=unit_cost,
        minimum_stock=minimum_stock,
        reorder_level=reorder_level,
        maximum_stock=maximum_stock,
        **fields,
    )


async def make_approved_vendor(session: AsyncSession, name: str = "MedTech Supplies") -> Vendor:
    svc = ProcurementService(session)
    vendor = await svc.create_vendor(user_id=ADMIN_ID, name=name, contact_person="Jane Roe")
    return await svc.approve_vendor(vendor.id, user_id=ADMIN_ID)
