# app/api/routers/inventory_helpers.py
from __future__ import annotations

from app.models.enums import InventoryCategory, InventoryCondition, InventoryStatus, label_of
from app.models.inventory import InventoryItem

from app.api.routers.inventory_schemas import InventoryItemOut


def item_out(obj: InventoryItem) -> InventoryItemOut:
    return InventoryItemOut(
        id=obj.id,
        item_code=obj.item_code,
        name=obj.name,
        description=obj.description,
        category=obj.category,
        category_label=label_of(InventoryCategory, obj.category),
        item_type=obj.item_type,
        status=obj.status,
        status_label=label_of(InventoryStatus, obj.status),
        condition=obj.condition,
        condition_label=label_of(InventoryCondition, obj.condition),
        brand=obj.brand,
        model=obj.model,
        serial_number=obj.serial_number,
        part_number=obj.part_number,
        quantity=obj.quantity,
        reserved_quantity=obj.reserved_quantity,
        available_quantity=obj.quantity - obj.reserved_quantity,
        minimum_stock=obj.minimum_stock,
        maximum_stock=obj.maximum_stock,
        reorder_level=obj.reorder_level,
        unit_cost=obj.unit_cost,
        total_value=obj.total_value,
        supplier=obj.supplier,
        location_id=obj.location_id,
        storage_zone=obj.storage_zone,
        storage_shelf=obj.storage_shelf,
        storage_bin=obj.storage_bin,
        unit=obj.unit,
        notes=obj.notes,
        is_consumable=bool(obj.is_consumable),
        created_date=obj.created_date,
        last_updated_date=obj.last_updated_date,
    )
