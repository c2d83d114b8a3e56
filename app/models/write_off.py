# app/models/write_off.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Identity, Index, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.asset import Asset


class WriteOffRecord(Base):
    """
    WriteOffRecords: formal disposal of an asset.

    Status progression (WriteOffStatus):
      Pending -> UnderReview -> Approved -> Processed
      Pending / UnderReview -> Rejected, Pending -> Cancelled

    Each stage keeps its own (user, date, notes) triple. Requester and
    approver restrict user deletion; reviewer and processor use the database
    default (NO ACTION).
    """

    __tablename__ = "WriteOffRecords"
    __table_args__ = (
        Index("IX_WriteOffRecords_ApprovedByUserId", "ApprovedByUserId"),
        Index("IX_WriteOffRecords_AssetId", "AssetId"),
        Index("IX_WriteOffRecords_ProcessedByUserId", "ProcessedByUserId"),
        Index("IX_WriteOffRecords_RequestedByUserId", "RequestedByUserId"),
        Index("IX_WriteOffRecords_ReviewedByUserId", "ReviewedByUserId"),
        Index("IX_WriteOffRecords_WriteOffNumber", "WriteOffNumber", unique=True),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    asset_id: Mapped[int] = mapped_column(
        "AssetId",
        Integer,
        ForeignKey("Assets.Id", ondelete="CASCADE", name="FK_WriteOffRecords_Assets_AssetId"),
        nullable=False,
    )
    reason: Mapped[int] = mapped_column("Reason", Integer, nullable=False)
    method: Mapped[int] = mapped_column("Method", Integer, nullable=False)
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)

    description: Mapped[str] = mapped_column("Description", String(1000), nullable=False)
    justification: Mapped[str] = mapped_column("Justification", String(2000), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column("Notes", String(1000), nullable=True)
    disposal_method: Mapped[Optional[str]] = mapped_column("DisposalMethod", String(500), nullable=True)
    disposal_date: Mapped[Optional[datetime]] = mapped_column("DisposalDate", DateTime(timezone=True), nullable=True)
    write_off_number: Mapped[str] = mapped_column("WriteOffNumber", String(50), nullable=False)
    additional_notes: Mapped[Optional[str]] = mapped_column("AdditionalNotes", String(1000), nullable=True)

    estimated_value: Mapped[Optional[Decimal]] = mapped_column("EstimatedValue", Numeric(18, 2), nullable=True)
    salvage_value: Mapped[Optional[Decimal]] = mapped_column("SalvageValue", Numeric(18, 2), nullable=True)
    disposal_vendor: Mapped[Optional[str]] = mapped_column("DisposalVendor", String(100), nullable=True)
    certificate_of_destruction: Mapped[Optional[str]] = mapped_column(
        "CertificateOfDestruction", String(500), nullable=True
    )

    # request
    requested_by_user_id: Mapped[str] = mapped_column(
        "RequestedByUserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_WriteOffRecords_AspNetUsers_RequestedByUserId"),
        nullable=False,
    )
    request_date: Mapped[datetime] = mapped_column("RequestDate", DateTime(timezone=True), nullable=False)

    # review
    reviewed_by_user_id: Mapped[Optional[str]] = mapped_column(
        "ReviewedByUserId",
        Text,
        ForeignKey("AspNetUsers.Id", name="FK_WriteOffRecords_AspNetUsers_ReviewedByUserId"),
        nullable=True,
    )
    review_date: Mapped[Optional[datetime]] = mapped_column("ReviewDate", DateTime(timezone=True), nullable=True)
    review_notes: Mapped[Optional[str]] = mapped_column("ReviewNotes", String(1000), nullable=True)

    # approval
    approved_by_user_id: Mapped[Optional[str]] = mapped_column(
        "ApprovedByUserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_WriteOffRecords_AspNetUsers_ApprovedByUserId"),
        nullable=True,
    )
    approval_date: Mapped[Optional[datetime]] = mapped_column("ApprovalDate", DateTime(timezone=True), nullable=True)
    approval_notes: Mapped[Optional[str]] = mapped_column("ApprovalNotes", String(1000), nullable=True)

    # processing
    processed_by_user_id: Mapped[Optional[str]] = mapped_column(
        "ProcessedByUserId",
        Text,
        ForeignKey("AspNetUsers.Id", name="FK_WriteOffRecords_AspNetUsers_ProcessedByUserId"),
        nullable=True,
    )
    processing_date: Mapped[Optional[datetime]] = mapped_column("ProcessingDate", DateTime(timezone=True), nullable=True)
    processing_notes: Mapped[Optional[str]] = mapped_column("ProcessingNotes", String(1000), nullable=True)

    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    last_updated: Mapped[datetime] = mapped_column(
        "LastUpdated", DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    asset: Mapped[Asset] = relationship("Asset", lazy="selectin")
