# app/api/routers/maintenance_schemas.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class MaintenanceOut(BaseModel):
    id: int
    asset_id: int
    maintenance_type: int
    maintenance_type_label: Optional[str] = None
    status: int
    status_label: Optional[str] = None
    title: str
    description: Optional[str] = None
    scheduled_date: datetime
    maintenance_date: datetime
    start_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    performed_by: Optional[str] = None
    service_provider: Optional[str] = None
    cost: Optional[Decimal] = None
    work_performed: Optional[str] = None
    parts_used: Optional[str] = None
    notes: Optional[str] = None
    next_maintenance_date: Optional[datetime] = None
    created_by_user_id: str
    created_date: datetime
    last_updated: datetime


class MaintenanceScheduleIn(BaseModel):
    asset_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=200)
    scheduled_date: datetime
    maintenance_type: int = Field(0, ge=0)
    description: Optional[str] = None
    service_provider: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = None


class MaintenanceStartIn(BaseModel):
    performed_by: Optional[str] = Field(None, max_length=100)


class MaintenanceCompleteIn(BaseModel):
    work_performed: Optional[str] = None
    parts_used: Optional[str] = None
    cost: Optional[Decimal] = Field(None, ge=0)
    performed_by: Optional[str] = Field(None, max_length=100)
    next_maintenance_date: Optional[datetime] = None
    notes: Optional[str] = None


class MaintenanceReasonIn(BaseModel):
    reason: Optional[str] = None
