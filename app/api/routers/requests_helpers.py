# app/api/routers/requests_helpers.py
from __future__ import annotations

from app.models.enums import RequestPriority, RequestStatus, RequestType, label_of
from app.models.request import ITRequest

from app.api.routers.requests_schemas import ITRequestOut


def request_out(obj: ITRequest) -> ITRequestOut:
    return ITRequestOut(
        id=obj.id,
        request_number=obj.request_number,
        title=obj.title,
        description=obj.description,
        request_type=obj.request_type,
        request_type_label=label_of(RequestType, obj.request_type),
        priority=obj.priority,
        priority_label=label_of(RequestPriority, obj.priority),
        status=obj.status,
        status_label=label_of(RequestStatus, obj.status),
        department=obj.department,
        requested_by_user_id=obj.requested_by_user_id,
        assigned_to_user_id=obj.assigned_to_user_id,
        request_date=obj.request_date,
        required_by_date=obj.required_by_date,
        related_asset_id=obj.related_asset_id,
        location_id=obj.location_id,
        estimated_cost=obj.estimated_cost,
        business_justification=obj.business_justification,
        requested_item_category=obj.requested_item_category,
        required_inventory_item_id=obj.required_inventory_item_id,
        provided_inventory_item_id=obj.provided_inventory_item_id,
        completed_date=obj.completed_date,
        completed_by_user_id=obj.completed_by_user_id,
        completion_notes=obj.completion_notes,
        resolution_details=obj.resolution_details,
    )
