# app/models/audit_log.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Identity, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class AuditLog(Base):
    """
    AuditLogs: cross-cutting audit trail.

    OldValues / NewValues hold JSON snapshots. AssetId is a convenience link
    for asset-scoped history and is nulled (not deleted) with the asset.
    """

    __tablename__ = "AuditLogs"
    __table_args__ = (
        Index("IX_AuditLogs_AssetId", "AssetId"),
        Index("IX_AuditLogs_EntityType_EntityId", "EntityType", "EntityId"),
        Index("IX_AuditLogs_Timestamp", "Timestamp"),
        Index("IX_AuditLogs_UserId", "UserId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    action: Mapped[int] = mapped_column("Action", Integer, nullable=False)
    entity_type: Mapped[str] = mapped_column("EntityType", String(100), nullable=False)
    entity_id: Mapped[Optional[int]] = mapped_column("EntityId", Integer, nullable=True)
    user_id: Mapped[str] = mapped_column(
        "UserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_AuditLogs_AspNetUsers_UserId"),
        nullable=False,
    )
    timestamp: Mapped[datetime] = mapped_column(
        "Timestamp", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    description: Mapped[Optional[str]] = mapped_column("Description", String(500), nullable=True)
    old_values: Mapped[Optional[str]] = mapped_column("OldValues", Text, nullable=True)
    new_values: Mapped[Optional[str]] = mapped_column("NewValues", Text, nullable=True)
    ip_address: Mapped[Optional[str]] = mapped_column("IpAddress", String(45), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column("UserAgent", String(500), nullable=True)
    asset_id: Mapped[Optional[int]] = mapped_column(
        "AssetId",
        Integer,
        ForeignKey("Assets.Id", ondelete="SET NULL", name="FK_AuditLogs_Assets_AssetId"),
        nullable=True,
    )
