# app/api/routers/procurements_helpers.py
from __future__ import annotations

from app.models.enums import ProcurementCategory, ProcurementSource, ProcurementStatus, label_of
from app.models.procurement import ProcurementRequest

from app.api.routers.procurements_schemas import (
    ProcurementApprovalOut,
    ProcurementItemOut,
    ProcurementOut,
)


def procurement_out(obj: ProcurementRequest) -> ProcurementOut:
    return ProcurementOut(
        id=obj.id,
        procurement_number=obj.procurement_number,
        title=obj.title,
        description=obj.description,
        procurement_type=obj.procurement_type,
        category=obj.category,
        category_label=label_of(ProcurementCategory, obj.category),
        status=obj.status,
        status_label=label_of(ProcurementStatus, obj.status),
        method=obj.method,
        source=obj.source,
        source_label=label_of(ProcurementSource, obj.source),
        priority=obj.priority,
        department=obj.department,
        requested_by_user_id=obj.requested_by_user_id,
        request_date=obj.request_date,
        required_by_date=obj.required_by_date,
        estimated_budget=obj.estimated_budget,
        approved_budget=obj.approved_budget,
        actual_cost=obj.actual_cost,
        final_cost=obj.final_cost,
        current_approval_level=obj.current_approval_level,
        selected_vendor_id=obj.selected_vendor_id,
        purchase_order_number=obj.purchase_order_number,
        expected_delivery_date=obj.expected_delivery_date,
        actual_delivery_date=obj.actual_delivery_date,
        originating_request_id=obj.originating_request_id,
        triggered_by_inventory_item_id=obj.triggered_by_inventory_item_id,
        replacement_for_asset_id=obj.replacement_for_asset_id,
        is_urgent=bool(obj.is_urgent),
        items=[ProcurementItemOut.model_validate(it) for it in obj.items],
        approvals=[ProcurementApprovalOut.model_validate(a) for a in obj.approvals],
    )
