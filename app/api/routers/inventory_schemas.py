# app/api/routers/inventory_schemas.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class InventoryItemOut(BaseModel):
    id: int
    item_code: str
    name: str
    description: Optional[str] = None
    category: int
    category_label: Optional[str] = None
    item_type: int
    status: int
    status_label: Optional[str] = None
    condition: int
    condition_label: Optional[str] = None
    brand: str
    model: str
    serial_number: Optional[str] = None
    part_number: Optional[str] = None
    quantity: int
    reserved_quantity: int
    available_quantity: int
    minimum_stock: int
    maximum_stock: int
    reorder_level: int
    unit_cost: Optional[Decimal] = None
    total_value: Optional[Decimal] = None
    supplier: Optional[str] = None
    location_id: int
    storage_zone: Optional[str] = None
    storage_shelf: Optional[str] = None
    storage_bin: Optional[str] = None
    unit: Optional[str] = None
    notes: Optional[str] = None
    is_consumable: bool
    created_date: datetime
    last_updated_date: Optional[datetime] = None


class InventoryItemCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    category: int = Field(..., ge=0)
    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    location_id: int = Field(..., ge=1)
    item_code: Optional[str] = Field(None, max_length=50, description="generated when omitted")
    item_type: int = Field(0, ge=0)
    status: int = Field(0, ge=0)
    condition: int = Field(0, ge=0)
    quantity: int = Field(0, ge=0)
    minimum_stock: int = Field(0, ge=0)
    maximum_stock: int = Field(0, ge=0)
    reorder_level: int = Field(0, ge=0)
    unit_cost: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=1000)
    serial_number: Optional[str] = Field(None, max_length=100)
    part_number: Optional[str] = Field(None, max_length=100)
    supplier: Optional[str] = Field(None, max_length=200)
    storage_zone: Optional[str] = Field(None, max_length=50)
    storage_shelf: Optional[str] = Field(None, max_length=50)
    storage_bin: Optional[str] = Field(None, max_length=50)
    unit: Optional[str] = Field(None, max_length=20)
    notes: Optional[str] = None
    is_consumable: bool = False
    requires_calibration: bool = False


class StockInIn(BaseModel):
    quantity: int = Field(..., ge=1)
    reason: str = Field("Stock received", min_length=1)
    supplier: Optional[str] = None
    unit_cost: Optional[Decimal] = Field(None, ge=0)
    purchase_order_number: Optional[str] = None
    invoice_number: Optional[str] = None
    batch_number: Optional[str] = None
    expiry_date: Optional[datetime] = None


class StockQtyIn(BaseModel):
    quantity: int = Field(..., ge=1)
    reason: str = Field(..., min_length=1)


class StockAdjustIn(BaseModel):
    delta: int = Field(..., description="signed change; stock never goes below zero")
    reason: str = Field(..., min_length=1)


class StockTransferIn(BaseModel):
    quantity: int = Field(..., ge=1)
    to_location_id: int = Field(..., ge=1)
    reason: str = Field(..., min_length=1)
    to_zone: Optional[str] = None
    to_shelf: Optional[str] = None
    to_bin: Optional[str] = None


class ReservationIn(BaseModel):
    quantity: int = Field(..., ge=1)
    reason: str = Field(..., min_length=1)
    reference: Optional[str] = None


class DeployIn(BaseModel):
    asset_id: int = Field(..., ge=1)
    quantity: int = Field(..., ge=1)
    reason: str = Field(..., min_length=1)
    serial_number: Optional[str] = None


class ReturnIn(BaseModel):
    asset_id: int = Field(..., ge=1)
    quantity: int = Field(..., ge=1)
    reason: str = Field(..., min_length=1)


class QualityAssessmentIn(BaseModel):
    overall_condition: int = Field(..., ge=0)
    quality_score: float = Field(..., ge=0, le=100)
    checklist: Optional[Dict[str, Any]] = None
    action_required: str = ""
    notes: Optional[str] = None
    asset_id: Optional[int] = None
    update_item_condition: bool = True


class InventoryMovementOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    inventory_item_id: int
    movement_type: int
    quantity: int
    from_location_id: Optional[int] = None
    to_location_id: Optional[int] = None
    related_asset_id: Optional[int] = None
    movement_date: datetime
    reason: str
    reference_number: Optional[str] = None
    performed_by_user_id: str


class InventoryTransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    inventory_item_id: int
    transaction_type: int
    quantity: int
    unit_cost: Optional[Decimal] = None
    total_cost: Optional[Decimal] = None
    supplier: Optional[str] = None
    purchase_order_number: Optional[str] = None
    invoice_number: Optional[str] = None
    batch_number: Optional[str] = None
    transaction_date: datetime
    related_inventory_movement_id: Optional[int] = None
    created_by_user_id: str


class AssetMappingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_id: int
    inventory_item_id: int
    quantity: int
    serial_number: Optional[str] = None
    status: int
    deployment_date: datetime
    return_date: Optional[datetime] = None
    deployment_reason: Optional[str] = None
    return_reason: Optional[str] = None


class QualityAssessmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    inventory_item_id: int
    asset_id: Optional[int] = None
    assessment_date: datetime
    overall_condition: int
    quality_score: float
    action_required: str
    notes: Optional[str] = None


class StockAlertOut(BaseModel):
    inventory_item_id: int
    item_code: str
    item_name: str
    category: int
    current_stock: int
    minimum_stock: int
    reorder_level: int
    maximum_stock: int
    alert_type: str
    location_name: str
