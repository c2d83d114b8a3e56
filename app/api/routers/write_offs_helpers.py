# app/api/routers/write_offs_helpers.py
from __future__ import annotations

from app.models.enums import WriteOffMethod, WriteOffReason, WriteOffStatus, label_of
from app.models.write_off import WriteOffRecord

from app.api.routers.write_offs_schemas import WriteOffOut


def write_off_out(obj: WriteOffRecord) -> WriteOffOut:
    return WriteOffOut(
        id=obj.id,
        write_off_number=obj.write_off_number,
        asset_id=obj.asset_id,
        reason=obj.reason,
        reason_label=label_of(WriteOffReason, obj.reason),
        method=obj.method,
        method_label=label_of(WriteOffMethod, obj.method),
        status=obj.status,
        status_label=label_of(WriteOffStatus, obj.status),
        description=obj.description,
        justification=obj.justification,
        notes=obj.notes,
        additional_notes=obj.additional_notes,
        estimated_value=obj.estimated_value,
        salvage_value=obj.salvage_value,
        disposal_method=obj.disposal_method,
        disposal_vendor=obj.disposal_vendor,
        disposal_date=obj.disposal_date,
        certificate_of_destruction=obj.certificate_of_destruction,
        requested_by_user_id=obj.requested_by_user_id,
        request_date=obj.request_date,
        reviewed_by_user_id=obj.reviewed_by_user_id,
        review_date=obj.review_date,
        review_notes=obj.review_notes,
        approved_by_user_id=obj.approved_by_user_id,
        approval_date=obj.approval_date,
        approval_notes=obj.approval_notes,
        processed_by_user_id=obj.processed_by_user_id,
        processing_date=obj.processing_date,
        processing_notes=obj.processing_notes,
        last_updated=obj.last_updated,
    )
