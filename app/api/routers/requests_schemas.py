# app/api/routers/requests_schemas.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import CommentType, RequestPriority


class ITRequestOut(BaseModel):
    id: int
    request_number: str
    title: str
    description: str
    request_type: int
    request_type_label: Optional[str] = None
    priority: int
    priority_label: Optional[str] = None
    status: int
    status_label: Optional[str] = None
    department: str
    requested_by_user_id: str
    assigned_to_user_id: Optional[str] = None
    request_date: datetime
    required_by_date: Optional[datetime] = None
    related_asset_id: Optional[int] = None
    location_id: Optional[int] = None
    estimated_cost: Optional[Decimal] = None
    business_justification: Optional[str] = None
    requested_item_category: Optional[str] = None
    required_inventory_item_id: Optional[int] = None
    provided_inventory_item_id: Optional[int] = None
    completed_date: Optional[datetime] = None
    completed_by_user_id: Optional[str] = None
    completion_notes: Optional[str] = None
    resolution_details: Optional[str] = None


class ITRequestCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., max_length=2000)
    request_type: int = Field(..., ge=0)
    department: str = Field(..., min_length=1, max_length=100)
    priority: int = Field(int(RequestPriority.MEDIUM), ge=1)
    required_by_date: Optional[datetime] = None
    related_asset_id: Optional[int] = None
    location_id: Optional[int] = None
    estimated_cost: Optional[Decimal] = Field(None, ge=0)
    business_justification: Optional[str] = None
    requested_item_category: Optional[str] = None
    requested_item_specifications: Optional[str] = None
    required_inventory_item_id: Optional[int] = None


class FromTemplateIn(BaseModel):
    template_id: int = Field(..., ge=1)
    description: Optional[str] = None
    department: Optional[str] = None


class AssignIn(BaseModel):
    assignee_id: str = Field(..., min_length=1)
    notes: Optional[str] = None


class ApproverIn(BaseModel):
    level: int = Field(..., ge=1)
    approver_id: str = Field(..., min_length=1)


class RequestApprovalIn(BaseModel):
    approvers: List[ApproverIn] = Field(..., min_length=1)


class DecisionIn(BaseModel):
    approve: bool
    comments: Optional[str] = None


class ReasonIn(BaseModel):
    reason: Optional[str] = None


class CompleteIn(BaseModel):
    completion_notes: Optional[str] = None
    resolution_details: Optional[str] = None
    provided_inventory_item_id: Optional[int] = None


class EscalateIn(BaseModel):
    escalated_to: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1)


class CommentIn(BaseModel):
    comment: str = Field(..., min_length=1, max_length=2000)
    is_internal: bool = False
    comment_type: int = Field(int(CommentType.GENERAL), ge=0)


class AttachmentIn(BaseModel):
    file_name: str = Field(..., min_length=1, max_length=255)
    file_path: str = Field(..., min_length=1, max_length=500)
    file_size: int = Field(..., ge=0)
    content_type: Optional[str] = None
    description: Optional[str] = None


class RequestActionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    action_type: int
    description: Optional[str] = None
    action_date: datetime
    user_id: str
    notes: Optional[str] = None


class RequestApprovalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    approval_level: int
    approver_id: str
    status: int
    sequence: int
    comments: Optional[str] = None
    decision_date: Optional[datetime] = None


class RequestCommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    it_request_id: int
    commented_by_user_id: str
    comment: str
    is_internal: bool
    comment_type: int
    created_date: datetime


class RequestAttachmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    it_request_id: int
    file_name: str
    file_path: str
    file_size: int
    content_type: Optional[str] = None
    uploaded_by_user_id: str
    uploaded_date: datetime


class RequestEscalationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    request_id: int
    escalation_level: int
    escalated_date: datetime
    escalated_to: str
    reason: str
    auto_escalated: bool
