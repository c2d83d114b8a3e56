# app/api/routers/maintenance_helpers.py
from __future__ import annotations

from app.models.enums import MaintenanceStatus, MaintenanceType, label_of
from app.models.maintenance import MaintenanceRecord

from app.api.routers.maintenance_schemas import MaintenanceOut


def maintenance_out(obj: MaintenanceRecord) -> MaintenanceOut:
    return MaintenanceOut(
        id=obj.id,
        asset_id=obj.asset_id,
        maintenance_type=obj.maintenance_type,
        maintenance_type_label=label_of(MaintenanceType, obj.maintenance_type),
        status=obj.status,
        status_label=label_of(MaintenanceStatus, obj.status),
        title=obj.title,
        description=obj.description,
        scheduled_date=obj.scheduled_date,
        maintenance_date=obj.maintenance_date,
        start_date=obj.start_date,
        completed_date=obj.completed_date,
        performed_by=obj.performed_by,
        service_provider=obj.service_provider,
        cost=obj.cost,
        work_performed=obj.work_performed,
        parts_used=obj.parts_used,
        notes=obj.notes,
        next_maintenance_date=obj.next_maintenance_date,
        created_by_user_id=obj.created_by_user_id,
        created_date=obj.created_date,
        last_updated=obj.last_updated,
    )
