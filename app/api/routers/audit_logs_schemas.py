# app/api/routers/audit_logs_schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class AuditLogOut(BaseModel):
    id: int
    action: int
    action_label: Optional[str] = None
    entity_type: str
    entity_id: Optional[int] = None
    user_id: str
    timestamp: datetime
    description: Optional[str] = None
    old_values: Optional[str] = None
    new_values: Optional[str] = None
    asset_id: Optional[int] = None
