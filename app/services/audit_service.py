# app/services/audit_service.py
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.audit_log import AuditLog
from app.models.enums import AuditAction
from app.services.errors import flush_or_conflict

logger = logging.getLogger("hat.audit")

UTC = timezone.utc


def _to_json(values: Any) -> Optional[str]:
    if values is None:
        return None
    return json.dumps(values, ensure_ascii=False, default=str, sort_keys=True)


class AuditService:
    """
    AuditLogs writer / reader.

    - log() only adds a row and flushes; the caller's transaction decides
      whether it is kept.
    - old/new values are serialised to JSON (Decimal / datetime via str).
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def log(
        self,
        action: AuditAction,
        entity_type: str,
        entity_id: Optional[int],
        user_id: str,
        description: str,
        *,
        old_values: Any = None,
        new_values: Any = None,
        asset_id: Optional[int] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AuditLog:
        row = AuditLog(
            action=int(action),
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=user_id,
            timestamp=datetime.now(UTC),
            description=(description or "")[:500],
            old_values=_to_json(old_values),
            new_values=_to_json(new_values),
            ip_address=ip_address,
            user_agent=user_agent[:500] if user_agent else None,
            asset_id=asset_id,
        )
        self.session.add(row)
        await flush_or_conflict(self.session)
        logger.debug("audit %s %s#%s by %s", AuditAction(action).name, entity_type, entity_id, user_id)
        return row

    async def recent(self, *, page: int = 1, page_size: int = 50) -> List[AuditLog]:
        page = max(1, int(page))
        stmt = (
            select(AuditLog)
            .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return list((await self.session.execute(stmt)).scalars())

    async def for_asset(self, asset_id: int) -> List[AuditLog]:
        stmt = (
            select(AuditLog)
            .where(
                or_(
                    AuditLog.asset_id == asset_id,
                    (AuditLog.entity_type == "Asset") & (AuditLog.entity_id == asset_id),
                )
            )
            .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        )
        return list((await self.session.execute(stmt)).scalars())

    async def for_user(self, user_id: str) -> List[AuditLog]:
        stmt = (
            select(AuditLog)
            .where(AuditLog.user_id == user_id)
            .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        )
        return list((await self.session.execute(stmt)).scalars())

    async def search(
        self,
        term: Optional[str] = None,
        *,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        limit: int = 200,
    ) -> List[AuditLog]:
        stmt = select(AuditLog)
        if term and term.strip():
            like = f"%{term.strip()}%"
            stmt = stmt.where(
                or_(
                    AuditLog.description.ilike(like),
                    AuditLog.entity_type.ilike(like),
                )
            )
        if date_from is not None:
            stmt = stmt.where(AuditLog.timestamp >= date_from)
        if date_to is not None:
            stmt = stmt.where(AuditLog.timestamp <= date_to)
        stmt = stmt.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit)
        return list((await self.session.execute(stmt)).scalars())
