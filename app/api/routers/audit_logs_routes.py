# app/api/routers/audit_logs_routes.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_session
from app.api.routers.audit_logs_schemas import AuditLogOut
from app.models.audit_log import AuditLog
from app.models.enums import AuditAction, label_of
from app.services.audit_service import AuditService


def _out(row: AuditLog) -> AuditLogOut:
    return AuditLogOut(
        id=row.id,
        action=row.action,
        action_label=label_of(AuditAction, row.action),
        entity_type=row.entity_type,
        entity_id=row.entity_id,
        user_id=row.user_id,
        timestamp=row.timestamp,
        description=row.description,
        old_values=row.old_values,
        new_values=row.new_values,
        asset_id=row.asset_id,
    )


def register(router: APIRouter) -> None:
    @router.get("", response_model=List[AuditLogOut])
    async def list_audit_logs(
        asset_id: Optional[int] = Query(None, ge=1, description="history of one asset"),
        user_id: Optional[str] = Query(None, description="entries written by one user"),
        q: Optional[str] = Query(None, description="description / entity type"),
        date_from: Optional[datetime] = Query(None),
        date_to: Optional[datetime] = Query(None),
        page: int = Query(1, ge=1),
        page_size: int = Query(50, ge=1, le=500),
        session: AsyncSession = Depends(get_session),
    ):
        svc = AuditService(session)
        if asset_id is not None:
            rows = await svc.for_asset(asset_id)
        elif user_id:
            rows = await svc.for_user(user_id)
        elif q or date_from is not None or date_to is not None:
            rows = await svc.search(q, date_from=date_from, date_to=date_to, limit=page_size)
        else:
            rows = await svc.recent(page=page, page_size=page_size)
        return [_out(r) for r in rows]
