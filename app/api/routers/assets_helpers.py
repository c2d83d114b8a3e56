# app/api/routers/assets_helpers.py
from __future__ import annotations

from app.models.asset import Asset, AssetMovement
from app.models.enums import AssetCategory, AssetStatus, MovementType, label_of
from app.services.asset_service import read_path_list

from app.api.routers.assets_schemas import AssetMovementOut, AssetOut


def asset_out(obj: Asset) -> AssetOut:
    return AssetOut(
        id=obj.id,
        asset_tag=obj.asset_tag,
        category=obj.category,
        category_label=label_of(AssetCategory, obj.category),
        brand=obj.brand,
        model=obj.model,
        serial_number=obj.serial_number,
        internal_serial_number=obj.internal_serial_number,
        qr_code_data=obj.qr_code_data,
        description=obj.description,
        status=obj.status,
        status_label=label_of(AssetStatus, obj.status),
        location_id=obj.location_id,
        assigned_to_user_id=obj.assigned_to_user_id,
        responsible_person=obj.responsible_person,
        department=obj.department,
        installation_date=obj.installation_date,
        acquisition_date=obj.acquisition_date,
        warranty_expiry=obj.warranty_expiry,
        supplier=obj.supplier,
        purchase_price=obj.purchase_price,
        last_maintenance_date=obj.last_maintenance_date,
        notes=obj.notes,
        document_paths=read_path_list(obj.document_paths),
        image_paths=read_path_list(obj.image_paths),
        created_date=obj.created_date,
        last_updated=obj.last_updated,
    )


def movement_out(m: AssetMovement) -> AssetMovementOut:
    return AssetMovementOut(
        id=m.id,
        asset_id=m.asset_id,
        movement_type=m.movement_type,
        movement_type_label=label_of(MovementType, m.movement_type),
        movement_date=m.movement_date,
        from_location_id=m.from_location_id,
        to_location_id=m.to_location_id,
        from_user_id=m.from_user_id,
        to_user_id=m.to_user_id,
        reason=m.reason,
        notes=m.notes,
        performed_by_user_id=m.performed_by_user_id,
    )
