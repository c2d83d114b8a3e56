# app/api/routers/vendors_schemas.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VendorOut(BaseModel):
    id: int
    name: str
    contact_person: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    tax_number: Optional[str] = None
    registration_number: Optional[str] = None
    country: Optional[str] = None
    is_active: bool
    is_approved: bool
    status: int
    status_label: Optional[str] = None
    performance_rating: Decimal
    total_orders: int
    on_time_deliveries: int
    quality_issues: int
    notes: Optional[str] = None
    created_date: datetime


class VendorCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    contact_person: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    tax_number: Optional[str] = Field(None, max_length=50)
    registration_number: Optional[str] = Field(None, max_length=50)
    country: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class VendorStatusIn(BaseModel):
    status: int = Field(..., ge=0)
