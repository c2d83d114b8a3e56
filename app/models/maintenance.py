# app/models/maintenance.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Identity, Index, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.asset import Asset


class MaintenanceRecord(Base):
    """
    MaintenanceRecords: Scheduled -> InProgress -> Completed (or Cancelled / Failed).
    """

    __tablename__ = "MaintenanceRecords"
    __table_args__ = (
        Index("IX_MaintenanceRecords_AssetId", "AssetId"),
        Index("IX_MaintenanceRecords_CreatedByUserId", "CreatedByUserId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    asset_id: Mapped[int] = mapped_column(
        "AssetId",
        Integer,
        ForeignKey("Assets.Id", ondelete="CASCADE", name="FK_MaintenanceRecords_Assets_AssetId"),
        nullable=False,
    )
    maintenance_type: Mapped[int] = mapped_column("MaintenanceType", Integer, nullable=False)
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)
    title: Mapped[str] = mapped_column("Title", String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column("Description", String(1000), nullable=True)

    scheduled_date: Mapped[datetime] = mapped_column("ScheduledDate", DateTime(timezone=True), nullable=False)
    maintenance_date: Mapped[datetime] = mapped_column("MaintenanceDate", DateTime(timezone=True), nullable=False)
    start_date: Mapped[Optional[datetime]] = mapped_column("StartDate", DateTime(timezone=True), nullable=True)
    completed_date: Mapped[Optional[datetime]] = mapped_column("CompletedDate", DateTime(timezone=True), nullable=True)

    performed_by: Mapped[Optional[str]] = mapped_column("PerformedBy", String(100), nullable=True)
    service_provider: Mapped[Optional[str]] = mapped_column("ServiceProvider", String(100), nullable=True)
    cost: Mapped[Optional[Decimal]] = mapped_column("Cost", Numeric(18, 2), nullable=True)
    work_performed: Mapped[Optional[str]] = mapped_column("WorkPerformed", String(1000), nullable=True)
    parts_used: Mapped[Optional[str]] = mapped_column("PartsUsed", String(1000), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column("Notes", String(1000), nullable=True)
    next_maintenance_date: Mapped[Optional[datetime]] = mapped_column(
        "NextMaintenanceDate", DateTime(timezone=True), nullable=True
    )

    created_by_user_id: Mapped[str] = mapped_column(
        "CreatedByUserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_MaintenanceRecords_AspNetUsers_CreatedByUserId"),
        nullable=False,
    )
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    last_updated: Mapped[datetime] = mapped_column(
        "LastUpdated", DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    asset: Mapped[Asset] = relationship("Asset", lazy="selectin")
