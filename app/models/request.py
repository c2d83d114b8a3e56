# app/models/request.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Identity,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.asset import Asset
    from app.models.identity import User


class ITRequest(Base):
    """
    ITRequests: user-raised request / ticket.

    RequestNumber is REQ-<yyyy>-<nnnn> and unique. Date columns are always
    written as UTC (see app.db.timestamps). Inventory links:
      - RequiredInventoryItemId  what the requester needs
      - ProvidedInventoryItemId  what was handed out
      - DamagedAssetId           asset being replaced (no delete action)
    """

    __tablename__ = "ITRequests"
    __table_args__ = (
        Index("IX_ITRequests_AssignedToUserId", "AssignedToUserId"),
        Index("IX_ITRequests_CompletedByUserId", "CompletedByUserId"),
        Index("IX_ITRequests_DamagedAssetId", "DamagedAssetId"),
        Index("IX_ITRequests_Department_RequestDate", "Department", "RequestDate"),
        Index("IX_ITRequests_LastUpdatedByUserId", "LastUpdatedByUserId"),
        Index("IX_ITRequests_LocationId", "LocationId"),
        Index("IX_ITRequests_ProvidedInventoryItemId", "ProvidedInventoryItemId"),
        Index("IX_ITRequests_RelatedAssetId", "RelatedAssetId"),
        Index("IX_ITRequests_RequestDate", "RequestDate"),
        Index("IX_ITRequests_RequestedByUserId", "RequestedByUserId"),
        Index("IX_ITRequests_RequestNumber", "RequestNumber", unique=True),
        Index("IX_ITRequests_RequestType_Status", "RequestType", "Status"),
        Index("IX_ITRequests_RequiredInventoryItemId", "RequiredInventoryItemId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    request_number: Mapped[str] = mapped_column("RequestNumber", String(100), nullable=False)
    title: Mapped[str] = mapped_column("Title", String(200), nullable=False)
    description: Mapped[str] = mapped_column("Description", String(2000), nullable=False)
    request_type: Mapped[int] = mapped_column("RequestType", Integer, nullable=False)
    priority: Mapped[int] = mapped_column("Priority", Integer, nullable=False)
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)

    requested_by_user_id: Mapped[str] = mapped_column(
        "RequestedByUserId",
        String(450),
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_ITRequests_AspNetUsers_RequestedByUserId"),
        nullable=False,
    )
    department: Mapped[str] = mapped_column("Department", String(100), nullable=False)
    request_date: Mapped[datetime] = mapped_column("RequestDate", DateTime(timezone=True), nullable=False)
    required_by_date: Mapped[Optional[datetime]] = mapped_column(
        "RequiredByDate", DateTime(timezone=True), nullable=True
    )

    related_asset_id: Mapped[Optional[int]] = mapped_column(
        "RelatedAssetId",
        Integer,
        ForeignKey("Assets.Id", ondelete="SET NULL", name="FK_ITRequests_Assets_RelatedAssetId"),
        nullable=True,
    )
    requested_item_category: Mapped[Optional[str]] = mapped_column(
        "RequestedItemCategory", String(200), nullable=True
    )
    requested_item_specifications: Mapped[Optional[str]] = mapped_column(
        "RequestedItemSpecifications", String(2000), nullable=True
    )
    location_id: Mapped[Optional[int]] = mapped_column(
        "LocationId",
        Integer,
        ForeignKey("Locations.Id", ondelete="SET NULL", name="FK_ITRequests_Locations_LocationId"),
        nullable=True,
    )
    assigned_to_user_id: Mapped[Optional[str]] = mapped_column(
        "AssignedToUserId",
        String(450),
        ForeignKey("AspNetUsers.Id", ondelete="SET NULL", name="FK_ITRequests_AspNetUsers_AssignedToUserId"),
        nullable=True,
    )
    completed_date: Mapped[Optional[datetime]] = mapped_column("CompletedDate", DateTime(timezone=True), nullable=True)
    completed_by_user_id: Mapped[Optional[str]] = mapped_column(
        "CompletedByUserId",
        String(450),
        ForeignKey("AspNetUsers.Id", ondelete="SET NULL", name="FK_ITRequests_AspNetUsers_CompletedByUserId"),
        nullable=True,
    )

    business_justification: Mapped[Optional[str]] = mapped_column(
        "BusinessJustification", String(1000), nullable=True
    )
    justification: Mapped[Optional[str]] = mapped_column("Justification", String(1000), nullable=True)
    modified_at: Mapped[Optional[datetime]] = mapped_column("ModifiedAt", DateTime(timezone=True), nullable=True)
    modified_by: Mapped[Optional[str]] = mapped_column("ModifiedBy", Text, nullable=True)
    assignment_notes: Mapped[Optional[str]] = mapped_column("AssignmentNotes", String(2000), nullable=True)
    estimated_cost: Mapped[Optional[Decimal]] = mapped_column("EstimatedCost", Numeric(18, 2), nullable=True)
    completion_notes: Mapped[Optional[str]] = mapped_column("CompletionNotes", String(2000), nullable=True)
    resolution_date: Mapped[Optional[datetime]] = mapped_column(
        "ResolutionDate", DateTime(timezone=True), nullable=True
    )
    resolution_details: Mapped[Optional[str]] = mapped_column("ResolutionDetails", String(2000), nullable=True)

    required_inventory_item_id: Mapped[Optional[int]] = mapped_column(
        "RequiredInventoryItemId",
        Integer,
        ForeignKey(
            "InventoryItems.Id",
            ondelete="SET NULL",
            name="FK_ITRequests_InventoryItems_RequiredInventoryItemId",
        ),
        nullable=True,
    )
    provided_inventory_item_id: Mapped[Optional[int]] = mapped_column(
        "ProvidedInventoryItemId",
        Integer,
        ForeignKey(
            "InventoryItems.Id",
            ondelete="SET NULL",
            name="FK_ITRequests_InventoryItems_ProvidedInventoryItemId",
        ),
        nullable=True,
    )
    damaged_asset_id: Mapped[Optional[int]] = mapped_column(
        "DamagedAssetId",
        Integer,
        ForeignKey("Assets.Id", name="FK_ITRequests_Assets_DamagedAssetId"),
        nullable=True,
    )
    disposal_notes_for_unmanaged_asset: Mapped[Optional[str]] = mapped_column(
        "DisposalNotesForUnmanagedAsset", String(1000), nullable=True
    )

    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    last_updated_by_user_id: Mapped[Optional[str]] = mapped_column(
        "LastUpdatedByUserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="SET NULL", name="FK_ITRequests_AspNetUsers_LastUpdatedByUserId"),
        nullable=True,
    )

    requested_by: Mapped[User] = relationship("User", foreign_keys=[requested_by_user_id], lazy="selectin")
    related_asset: Mapped[Optional[Asset]] = relationship("Asset", foreign_keys=[related_asset_id], lazy="selectin")

    comments: Mapped[List["RequestComment"]] = relationship(
        "RequestComment",
        back_populates="request",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RequestComment.created_date",
    )
    activities: Mapped[List["RequestActivity"]] = relationship(
        "RequestActivity",
        back_populates="request",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RequestActivity.activity_date",
    )
    approvals: Mapped[List["RequestApproval"]] = relationship(
        "RequestApproval",
        back_populates="request",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RequestApproval.sequence",
    )


class RequestAction(Base):
    __tablename__ = "RequestActions"
    __table_args__ = (
        Index("IX_RequestActions_RequestId", "RequestId"),
        Index("IX_RequestActions_UserId", "UserId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    request_id: Mapped[int] = mapped_column(
        "RequestId",
        Integer,
        ForeignKey("ITRequests.Id", ondelete="CASCADE", name="FK_RequestActions_ITRequests_RequestId"),
        nullable=False,
    )
    action_type: Mapped[int] = mapped_column("ActionType", Integer, nullable=False)
    description: Mapped[Optional[str]] = mapped_column("Description", String(1000), nullable=True)
    action_date: Mapped[datetime] = mapped_column("ActionDate", DateTime(timezone=True), nullable=False)
    user_id: Mapped[str] = mapped_column(
        "UserId",
        String(450),
        ForeignKey("AspNetUsers.Id", ondelete="CASCADE", name="FK_RequestActions_AspNetUsers_UserId"),
        nullable=False,
    )
    notes: Mapped[Optional[str]] = mapped_column("Notes", String(2000), nullable=True)


class RequestActivity(Base):
    """Timeline entry shown on a request (created / assigned / status change ...)"""

    __tablename__ = "RequestActivities"
    __table_args__ = (
        Index("IX_RequestActivities_ITRequestId_ActivityDate", "ITRequestId", "ActivityDate"),
        Index("IX_RequestActivities_UserId", "UserId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    it_request_id: Mapped[int] = mapped_column(
        "ITRequestId",
        Integer,
        ForeignKey("ITRequests.Id", ondelete="CASCADE", name="FK_RequestActivities_ITRequests_ITRequestId"),
        nullable=False,
    )
    activity_date: Mapped[datetime] = mapped_column("ActivityDate", DateTime(timezone=True), nullable=False)
    description: Mapped[str] = mapped_column("Description", String(1000), nullable=False)
    user_id: Mapped[str] = mapped_column(
        "UserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_RequestActivities_AspNetUsers_UserId"),
        nullable=False,
    )
    activity_type: Mapped[int] = mapped_column("ActivityType", Integer, nullable=False)

    request: Mapped[ITRequest] = relationship("ITRequest", back_populates="activities")


class RequestApproval(Base):
    __tablename__ = "RequestApprovals"
    __table_args__ = (
        Index("IX_RequestApprovals_ApproverId", "ApproverId"),
        Index("IX_RequestApprovals_ITRequestId_Sequence", "ITRequestId", "Sequence"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    it_request_id: Mapped[int] = mapped_column(
        "ITRequestId",
        Integer,
        ForeignKey("ITRequests.Id", ondelete="CASCADE", name="FK_RequestApprovals_ITRequests_ITRequestId"),
        nullable=False,
    )
    approval_level: Mapped[int] = mapped_column("ApprovalLevel", Integer, nullable=False)
    approver_id: Mapped[str] = mapped_column(
        "ApproverId",
        String(450),
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_RequestApprovals_AspNetUsers_ApproverId"),
        nullable=False,
    )
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)
    comments: Mapped[Optional[str]] = mapped_column("Comments", String(1000), nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    decision_date: Mapped[Optional[datetime]] = mapped_column("DecisionDate", DateTime(timezone=True), nullable=True)
    sequence: Mapped[int] = mapped_column("Sequence", Integer, nullable=False)

    request: Mapped[ITRequest] = relationship("ITRequest", back_populates="approvals")


class RequestAttachment(Base):
    __tablename__ = "RequestAttachments"
    __table_args__ = (
        Index("IX_RequestAttachments_ITRequestId", "ITRequestId"),
        Index("IX_RequestAttachments_UploadedByUserId", "UploadedByUserId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    it_request_id: Mapped[int] = mapped_column(
        "ITRequestId",
        Integer,
        ForeignKey("ITRequests.Id", ondelete="CASCADE", name="FK_RequestAttachments_ITRequests_ITRequestId"),
        nullable=False,
    )
    file_name: Mapped[str] = mapped_column("FileName", String(255), nullable=False)
    file_path: Mapped[str] = mapped_column("FilePath", String(500), nullable=False)
    content_type: Mapped[Optional[str]] = mapped_column("ContentType", String(100), nullable=True)
    file_size: Mapped[int] = mapped_column("FileSize", BigInteger, nullable=False)
    uploaded_by_user_id: Mapped[str] = mapped_column(
        "UploadedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_RequestAttachments_AspNetUsers_UploadedByUserId",
        ),
        nullable=False,
    )
    uploaded_date: Mapped[datetime] = mapped_column(
        "UploadedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    description: Mapped[Optional[str]] = mapped_column("Description", String(500), nullable=True)


class RequestComment(Base):
    __tablename__ = "RequestComments"
    __table_args__ = (
        Index("IX_RequestComments_CommentedByUserId", "CommentedByUserId"),
        Index("IX_RequestComments_ITRequestId_CreatedDate", "ITRequestId", "CreatedDate"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    it_request_id: Mapped[int] = mapped_column(
        "ITRequestId",
        Integer,
        ForeignKey("ITRequests.Id", ondelete="CASCADE", name="FK_RequestComments_ITRequests_ITRequestId"),
        nullable=False,
    )
    commented_by_user_id: Mapped[str] = mapped_column(
        "CommentedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_RequestComments_AspNetUsers_CommentedByUserId",
        ),
        nullable=False,
    )
    comment: Mapped[str] = mapped_column("Comment", String(2000), nullable=False)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    is_internal: Mapped[bool] = mapped_column("IsInternal", Boolean, nullable=False, default=False)
    comment_type: Mapped[int] = mapped_column("CommentType", Integer, nullable=False)

    request: Mapped[ITRequest] = relationship("ITRequest", back_populates="comments")


class RequestEscalation(Base):
    __tablename__ = "RequestEscalations"
    __table_args__ = (Index("IX_RequestEscalations_RequestId", "RequestId"),)

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    request_id: Mapped[int] = mapped_column(
        "RequestId",
        Integer,
        ForeignKey("ITRequests.Id", ondelete="CASCADE", name="FK_RequestEscalations_ITRequests_RequestId"),
        nullable=False,
    )
    escalation_level: Mapped[int] = mapped_column("EscalationLevel", Integer, nullable=False)
    escalated_date: Mapped[datetime] = mapped_column("EscalatedDate", DateTime(timezone=True), nullable=False)
    # free text: a user id or a role name
    escalated_to: Mapped[str] = mapped_column("EscalatedTo", Text, nullable=False)
    reason: Mapped[str] = mapped_column("Reason", Text, nullable=False)
    auto_escalated: Mapped[bool] = mapped_column("AutoEscalated", Boolean, nullable=False, default=False)


class RequestTemplate(Base):
    """Reusable request blueprint; Name is unique, IsActive defaults to true"""

    __tablename__ = "RequestTemplates"
    __table_args__ = (Index("IX_RequestTemplates_Name", "Name", unique=True),)

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    name: Mapped[str] = mapped_column("Name", Text, nullable=False)
    description: Mapped[str] = mapped_column("Description", Text, nullable=False)
    request_type: Mapped[int] = mapped_column("RequestType", Integer, nullable=False)
    default_priority: Mapped[int] = mapped_column("DefaultPriority", Integer, nullable=False)
    subject: Mapped[str] = mapped_column("Subject", Text, nullable=False)
    item_category: Mapped[Optional[str]] = mapped_column("ItemCategory", Text, nullable=True)
    department: Mapped[Optional[str]] = mapped_column("Department", Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        "IsActive", Boolean, nullable=False, default=True, server_default=text("true")
    )
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    created_by: Mapped[str] = mapped_column("CreatedBy", Text, nullable=False)
