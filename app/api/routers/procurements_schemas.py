# app/api/routers/procurements_schemas.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import (
    ProcurementCategory,
    ProcurementDocumentType,
    ProcurementMethod,
    ProcurementPriority,
    ProcurementType,
)


class ProcurementItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    item_name: str
    description: Optional[str] = None
    quantity: int
    unit: Optional[str] = None
    estimated_unit_price: Decimal
    actual_unit_price: Optional[Decimal] = None
    expected_inventory_item_id: Optional[int] = None
    received_inventory_item_id: Optional[int] = None
    quantity_received: int


class ProcurementApprovalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    approval_level: int
    approver_id: str
    status: int
    sequence: int
    comments: Optional[str] = None
    decision_date: Optional[datetime] = None
    approved_amount: Optional[Decimal] = None


class ProcurementOut(BaseModel):
    id: int
    procurement_number: str
    title: str
    description: str
    procurement_type: int
    category: int
    category_label: Optional[str] = None
    status: int
    status_label: Optional[str] = None
    method: int
    source: int
    source_label: Optional[str] = None
    priority: int
    department: str
    requested_by_user_id: str
    request_date: datetime
    required_by_date: Optional[datetime] = None
    estimated_budget: Decimal
    approved_budget: Optional[Decimal] = None
    actual_cost: Optional[Decimal] = None
    final_cost: Optional[Decimal] = None
    current_approval_level: Optional[int] = None
    selected_vendor_id: Optional[int] = None
    purchase_order_number: Optional[str] = None
    expected_delivery_date: Optional[datetime] = None
    actual_delivery_date: Optional[datetime] = None
    originating_request_id: Optional[int] = None
    triggered_by_inventory_item_id: Optional[int] = None
    replacement_for_asset_id: Optional[int] = None
    is_urgent: bool
    items: List[ProcurementItemOut] = Field(default_factory=list)
    approvals: List[ProcurementApprovalOut] = Field(default_factory=list)


class ItemLineIn(BaseModel):
    item_name: str = Field(..., min_length=1, max_length=200)
    quantity: int = Field(..., ge=1)
    estimated_unit_price: Decimal = Field(..., ge=0)
    description: Optional[str] = None
    unit: Optional[str] = "each"
    technical_specifications: Optional[str] = None
    expected_inventory_item_id: Optional[int] = None


class ProcurementCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., max_length=2000)
    department: str = Field(..., min_length=1, max_length=100)
    items: List[ItemLineIn] = Field(default_factory=list)
    procurement_type: int = Field(int(ProcurementType.HARDWARE), ge=0)
    category: int = Field(int(ProcurementCategory.IT_EQUIPMENT), ge=0)
    method: int = Field(int(ProcurementMethod.DIRECT_PURCHASE), ge=0)
    priority: int = Field(int(ProcurementPriority.MEDIUM), ge=1)
    estimated_budget: Optional[Decimal] = Field(None, ge=0, description="sum of item lines when omitted")
    required_by_date: Optional[datetime] = None
    business_justification: Optional[str] = None
    budget_code: Optional[str] = None
    is_urgent: bool = False


class FromRequestIn(BaseModel):
    request_id: int = Field(..., ge=1)


class FromInventoryIn(BaseModel):
    inventory_item_id: int = Field(..., ge=1)
    department: str = "IT"


class FromAssetIn(BaseModel):
    asset_id: int = Field(..., ge=1)
    department: Optional[str] = None


class ApproverIn(BaseModel):
    level: int = Field(..., ge=1)
    approver_id: str = Field(..., min_length=1)


class SubmitIn(BaseModel):
    approvers: List[ApproverIn] = Field(default_factory=list)


class DecisionIn(BaseModel):
    approve: bool
    comments: Optional[str] = None
    approved_amount: Optional[Decimal] = Field(None, ge=0)


class QuoteLineIn(BaseModel):
    procurement_item_id: int = Field(..., ge=1)
    unit_price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    brand: Optional[str] = None
    model: Optional[str] = None
    item_description: Optional[str] = None
    specifications: Optional[str] = None


class QuoteCreateIn(BaseModel):
    vendor_id: int = Field(..., ge=1)
    lines: List[QuoteLineIn] = Field(..., min_length=1)
    quote_number: Optional[str] = None
    tax_amount: Optional[Decimal] = Field(None, ge=0)
    discount_amount: Optional[Decimal] = Field(None, ge=0)
    delivery_days: int = Field(0, ge=0)
    valid_until_date: Optional[datetime] = None
    payment_terms: Optional[str] = None
    warranty_terms: Optional[str] = None
    notes: Optional[str] = None


class QuoteItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    procurement_item_id: int
    unit_price: Decimal
    quantity: int
    brand: Optional[str] = None
    model: Optional[str] = None


class QuoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    procurement_request_id: int
    vendor_id: int
    quote_number: Optional[str] = None
    total_amount: Decimal
    tax_amount: Optional[Decimal] = None
    discount_amount: Optional[Decimal] = None
    quote_date: datetime
    valid_until_date: Optional[datetime] = None
    delivery_days: int
    is_selected: bool
    items: List[QuoteItemOut] = Field(default_factory=list)


class SelectQuoteIn(BaseModel):
    quote_id: int = Field(..., ge=1)


class PlaceOrderIn(BaseModel):
    purchase_order_number: str = Field(..., min_length=1, max_length=100)
    expected_delivery_date: Optional[datetime] = None
    contract_number: Optional[str] = None


class ReceivedLineIn(BaseModel):
    procurement_item_id: int = Field(..., ge=1)
    quantity: int = Field(..., ge=1)


class ReceiveIn(BaseModel):
    lines: List[ReceivedLineIn] = Field(..., min_length=1)
    stock_in: bool = True
    notes: Optional[str] = None


class ReceiveOut(BaseModel):
    procurement: ProcurementOut
    fully_delivered: bool
    stocked_items: List[int]


class CompleteIn(BaseModel):
    final_cost: Optional[Decimal] = Field(None, ge=0)


class CancelIn(BaseModel):
    reason: str = Field(..., min_length=1)


class DocumentIn(BaseModel):
    document_name: str = Field(..., min_length=1, max_length=255)
    file_path: str = Field(..., min_length=1, max_length=500)
    file_size: int = Field(..., ge=0)
    document_type: int = Field(int(ProcurementDocumentType.OTHER), ge=0)
    content_type: Optional[str] = None
    description: Optional[str] = None


class DocumentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    procurement_request_id: int
    document_name: str
    document_type: int
    file_path: str
    file_size: int
    uploaded_by_user_id: str
    uploaded_date: datetime


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    activity_type: int
    action_by_user_id: str
    action_date: datetime
    activity_details: Optional[str] = None
    from_status: Optional[int] = None
    to_status: Optional[int] = None
