# app/api/routers/write_offs_schemas.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, Field

from app.models.enums import WriteOffMethod


class WriteOffOut(BaseModel):
    id: int
    write_off_number: str
    asset_id: int
    reason: int
    reason_label: Optional[str] = None
    method: int
    method_label: Optional[str] = None
    status: int
    status_label: Optional[str] = None
    description: str
    justification: str
    notes: Optional[str] = None
    additional_notes: Optional[str] = None
    estimated_value: Optional[Decimal] = None
    salvage_value: Optional[Decimal] = None
    disposal_method: Optional[str] = None
    disposal_vendor: Optional[str] = None
    disposal_date: Optional[datetime] = None
    certificate_of_destruction: Optional[str] = None
    requested_by_user_id: str
    request_date: datetime
    reviewed_by_user_id: Optional[str] = None
    review_date: Optional[datetime] = None
    review_notes: Optional[str] = None
    approved_by_user_id: Optional[str] = None
    approval_date: Optional[datetime] = None
    approval_notes: Optional[str] = None
    processed_by_user_id: Optional[str] = None
    processing_date: Optional[datetime] = None
    processing_notes: Optional[str] = None
    last_updated: datetime


class WriteOffSubmitIn(BaseModel):
    asset_id: int = Field(..., ge=1)
    reason: int = Field(..., ge=0)
    description: str = Field(..., min_length=1, max_length=1000)
    justification: Optional[str] = Field(None, max_length=2000)
    method: int = Field(int(WriteOffMethod.OTHER), ge=0)
    estimated_value: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None


class WriteOffNotesIn(BaseModel):
    notes: Optional[str] = None


class WriteOffReasonIn(BaseModel):
    reason: Optional[str] = None


class WriteOffProcessIn(BaseModel):
    notes: Optional[str] = None
    disposal_method: Optional[str] = Field(None, max_length=200)
    disposal_vendor: Optional[str] = Field(None, max_length=200)
    salvage_value: Optional[Decimal] = Field(None, ge=0)
    certificate_of_destruction: Optional[str] = Field(None, max_length=500)


class WriteOffBucketOut(BaseModel):
    count: int
    estimated_value: Decimal


class WriteOffSummaryOut(BaseModel):
    total: int
    estimated_value: Decimal
    by_status: Dict[str, WriteOffBucketOut]
    by_reason: Dict[str, WriteOffBucketOut]
