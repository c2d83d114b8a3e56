# app/api/routers/vendors_helpers.py
from __future__ import annotations

from app.models.enums import VendorStatus, label_of
from app.models.procurement import Vendor

from app.api.routers.vendors_schemas import VendorOut


def vendor_out(v: Vendor) -> VendorOut:
    return VendorOut(
        id=v.id,
        name=v.name,
        contact_person=v.contact_person,
        email=v.email,
        phone=v.phone,
        address=v.address,
        tax_number=v.tax_number,
        registration_number=v.registration_number,
        country=v.country,
        is_active=bool(v.is_active),
        is_approved=bool(v.is_approved),
        status=v.status,
        status_label=label_of(VendorStatus, v.status),
        performance_rating=v.performance_rating,
        total_orders=v.total_orders,
        on_time_deliveries=v.on_time_deliveries,
        quality_issues=v.quality_issues,
        notes=v.notes,
        created_date=v.created_date,
    )
