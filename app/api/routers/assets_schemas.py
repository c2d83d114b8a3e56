# app/api/routers/assets_schemas.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AssetOut(BaseModel):
    id: int
    asset_tag: str
    category: int
    category_label: str
    brand: str
    model: str
    serial_number: str
    internal_serial_number: str
    qr_code_data: str
    description: str
    status: int
    status_label: str
    location_id: Optional[int] = None
    assigned_to_user_id: Optional[str] = None
    responsible_person: Optional[str] = None
    department: Optional[str] = None
    installation_date: datetime
    acquisition_date: Optional[datetime] = None
    warranty_expiry: Optional[datetime] = None
    supplier: Optional[str] = None
    purchase_price: Optional[Decimal] = None
    last_maintenance_date: Optional[datetime] = None
    notes: Optional[str] = None
    document_paths: List[str] = Field(default_factory=list)
    image_paths: List[str] = Field(default_factory=list)
    created_date: datetime
    last_updated: datetime


class AssetCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    asset_tag: Optional[str] = Field(None, max_length=50, description="generated when omitted")
    category: int = Field(..., ge=0)
    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    serial_number: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., max_length=500)
    status: int = Field(0, ge=0)
    location_id: Optional[int] = None
    assigned_to_user_id: Optional[str] = None
    installation_date: Optional[datetime] = None
    warranty_expiry: Optional[datetime] = None
    supplier: Optional[str] = Field(None, max_length=100)
    purchase_price: Optional[Decimal] = Field(None, ge=0)
    department: Optional[str] = Field(None, max_length=100)
    responsible_person: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    acquisition_date: Optional[datetime] = None


class AssetUpdateIn(BaseModel):
    """Only the fields sent are changed."""

    model_config = ConfigDict(str_strip_whitespace=True)

    asset_tag: Optional[str] = Field(None, max_length=50)
    category: Optional[int] = Field(None, ge=0)
    brand: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    installation_date: Optional[datetime] = None
    location_id: Optional[int] = None
    responsible_person: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    warranty_expiry: Optional[datetime] = None
    supplier: Optional[str] = Field(None, max_length=100)
    purchase_price: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None
    acquisition_date: Optional[datetime] = None


class AssetMoveIn(BaseModel):
    to_location_id: Optional[int] = None
    to_user_id: Optional[str] = None
    reason: str = Field(..., min_length=1, max_length=200)
    notes: Optional[str] = Field(None, max_length=500)


class AssetStatusIn(BaseModel):
    status: int = Field(..., ge=0)
    reason: str = Field(..., min_length=1)


class AssetAssignIn(BaseModel):
    assignee_id: str = Field(..., min_length=1)


class AssetPathIn(BaseModel):
    path: str = Field(..., min_length=1)


class AssetDecommissionIn(BaseModel):
    reason: str = Field(..., min_length=1)


class AssetMovementOut(BaseModel):
    id: int
    asset_id: int
    movement_type: int
    movement_type_label: str
    movement_date: datetime
    from_location_id: Optional[int] = None
    to_location_id: Optional[int] = None
    from_user_id: Optional[str] = None
    to_user_id: Optional[str] = None
    reason: Optional[str] = None
    notes: Optional[str] = None
    performed_by_user_id: str
