# app/models/workflow.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Identity,
    Index,
    Integer,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class WorkflowInstance(Base):
    """
    WorkflowInstances: one run of a multi-step workflow (uuid id).

    Configuration / CompensationData are JSON text. Steps and events
    cascade with the instance.
    """

    __tablename__ = "WorkflowInstances"
    __table_args__ = (Index("IX_WorkflowInstances_InitiatedByUserId", "InitiatedByUserId"),)

    id: Mapped[uuid.UUID] = mapped_column("Id", UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    workflow_type: Mapped[str] = mapped_column("WorkflowType", Text, nullable=False)
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)
    initiated_by_user_id: Mapped[str] = mapped_column(
        "InitiatedByUserId",
        Text,
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="CASCADE",
            name="FK_WorkflowInstances_AspNetUsers_InitiatedByUserId",
        ),
        nullable=False,
    )
    start_time: Mapped[datetime] = mapped_column("StartTime", DateTime(timezone=True), nullable=False)
    end_time: Mapped[Optional[datetime]] = mapped_column("EndTime", DateTime(timezone=True), nullable=True)
    last_updated: Mapped[datetime] = mapped_column("LastUpdated", DateTime(timezone=True), nullable=False)
    configuration: Mapped[str] = mapped_column("Configuration", Text, nullable=False)
    current_step: Mapped[int] = mapped_column("CurrentStep", Integer, nullable=False, default=0)
    total_steps: Mapped[int] = mapped_column("TotalSteps", Integer, nullable=False, default=0)
    error_message: Mapped[Optional[str]] = mapped_column("ErrorMessage", Text, nullable=True)
    compensation_data: Mapped[Optional[str]] = mapped_column("CompensationData", Text, nullable=True)

    steps: Mapped[List["WorkflowStepInstance"]] = relationship(
        "WorkflowStepInstance",
        back_populates="workflow",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WorkflowStepInstance.step_order",
    )
    events: Mapped[List["WorkflowEvent"]] = relationship(
        "WorkflowEvent",
        back_populates="workflow",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class WorkflowStepInstance(Base):
    __tablename__ = "WorkflowStepInstances"
    __table_args__ = (
        Index("IX_WorkflowStepInstances_ExecutedByUserId", "ExecutedByUserId"),
        Index("IX_WorkflowStepInstances_WorkflowInstanceId", "WorkflowInstanceId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    workflow_instance_id: Mapped[uuid.UUID] = mapped_column(
        "WorkflowInstanceId",
        UUID(as_uuid=True),
        ForeignKey(
            "WorkflowInstances.Id",
            ondelete="CASCADE",
            name="FK_WorkflowStepInstances_WorkflowInstances_WorkflowInstanceId",
        ),
        nullable=False,
    )
    step_name: Mapped[str] = mapped_column("StepName", Text, nullable=False)
    step_type: Mapped[str] = mapped_column("StepType", Text, nullable=False)
    step_order: Mapped[int] = mapped_column("StepOrder", Integer, nullable=False)
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)
    start_time: Mapped[Optional[datetime]] = mapped_column("StartTime", DateTime(timezone=True), nullable=True)
    end_time: Mapped[Optional[datetime]] = mapped_column("EndTime", DateTime(timezone=True), nullable=True)
    input: Mapped[Optional[str]] = mapped_column("Input", Text, nullable=True)
    output: Mapped[Optional[str]] = mapped_column("Output", Text, nullable=True)
    error_message: Mapped[Optional[str]] = mapped_column("ErrorMessage", Text, nullable=True)
    compensation_action: Mapped[Optional[str]] = mapped_column("CompensationAction", Text, nullable=True)
    executed_by_user_id: Mapped[str] = mapped_column(
        "ExecutedByUserId",
        Text,
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="CASCADE",
            name="FK_WorkflowStepInstances_AspNetUsers_ExecutedByUserId",
        ),
        nullable=False,
    )

    workflow: Mapped[WorkflowInstance] = relationship("WorkflowInstance", back_populates="steps")


class WorkflowEvent(Base):
    __tablename__ = "WorkflowEvents"
    __table_args__ = (
        Index("IX_WorkflowEvents_UserId", "UserId"),
        Index("IX_WorkflowEvents_WorkflowId", "WorkflowId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    workflow_id: Mapped[uuid.UUID] = mapped_column(
        "WorkflowId",
        UUID(as_uuid=True),
        ForeignKey(
            "WorkflowInstances.Id",
            ondelete="CASCADE",
            name="FK_WorkflowEvents_WorkflowInstances_WorkflowId",
        ),
        nullable=False,
    )
    event_type: Mapped[int] = mapped_column("EventType", Integer, nullable=False)
    event_data: Mapped[str] = mapped_column("EventData", Text, nullable=False)
    data: Mapped[str] = mapped_column("Data", Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column("Timestamp", DateTime(timezone=True), nullable=False)
    user_id: Mapped[str] = mapped_column(
        "UserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="CASCADE", name="FK_WorkflowEvents_AspNetUsers_UserId"),
        nullable=False,
    )
    step_name: Mapped[Optional[str]] = mapped_column("StepName", Text, nullable=True)
    is_processed: Mapped[bool] = mapped_column("IsProcessed", Boolean, nullable=False, default=False)
    processed_at: Mapped[Optional[datetime]] = mapped_column("ProcessedAt", DateTime(timezone=True), nullable=True)
    processing_result: Mapped[Optional[str]] = mapped_column("ProcessingResult", Text, nullable=True)

    workflow: Mapped[WorkflowInstance] = relationship("WorkflowInstance", back_populates="events")


class EventSubscription(Base):
    __tablename__ = "EventSubscriptions"
    __table_args__ = (Index("IX_EventSubscriptions_CreatedByUserId", "CreatedByUserId"),)

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    name: Mapped[str] = mapped_column("Name", Text, nullable=False)
    description: Mapped[str] = mapped_column("Description", Text, nullable=False)
    event_type: Mapped[str] = mapped_column("EventType", Text, nullable=False)
    filters: Mapped[str] = mapped_column("Filters", Text, nullable=False)
    notification_config: Mapped[str] = mapped_column("NotificationConfig", Text, nullable=False)
    is_active: Mapped[bool] = mapped_column("IsActive", Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column("CreatedAt", DateTime(timezone=True), nullable=False)
    last_modified: Mapped[Optional[datetime]] = mapped_column("LastModified", DateTime(timezone=True), nullable=True)
    created_by_user_id: Mapped[str] = mapped_column(
        "CreatedByUserId",
        Text,
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="CASCADE",
            name="FK_EventSubscriptions_AspNetUsers_CreatedByUserId",
        ),
        nullable=False,
    )


class Notification(Base):
    """
    Notifications: per-user message (uuid id).

    RecipientId carries the FK; RecipientUserId and Type duplicate
    RecipientId / NotificationType and are written alongside them.
    """

    __tablename__ = "Notifications"
    __table_args__ = (Index("IX_Notifications_RecipientId", "RecipientId"),)

    id: Mapped[uuid.UUID] = mapped_column("Id", UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    recipient_id: Mapped[str] = mapped_column(
        "RecipientId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="CASCADE", name="FK_Notifications_AspNetUsers_RecipientId"),
        nullable=False,
    )
    recipient_user_id: Mapped[str] = mapped_column("RecipientUserId", Text, nullable=False)
    notification_type: Mapped[int] = mapped_column("NotificationType", Integer, nullable=False)
    type: Mapped[int] = mapped_column("Type", Integer, nullable=False)
    subject: Mapped[str] = mapped_column("Subject", Text, nullable=False)
    title: Mapped[str] = mapped_column("Title", Text, nullable=False)
    message: Mapped[str] = mapped_column("Message", Text, nullable=False)
    data: Mapped[str] = mapped_column("Data", Text, nullable=False)
    related_entity_type: Mapped[Optional[str]] = mapped_column("RelatedEntityType", Text, nullable=True)
    related_entity_id: Mapped[Optional[int]] = mapped_column("RelatedEntityId", Integer, nullable=True)
    action_url: Mapped[Optional[str]] = mapped_column("ActionUrl", Text, nullable=True)
    # "metadata" is reserved on declarative classes
    metadata_json: Mapped[Optional[str]] = mapped_column("Metadata", Text, nullable=True)
    priority: Mapped[int] = mapped_column("Priority", Integer, nullable=False, default=0)
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column("CreatedAt", DateTime(timezone=True), nullable=False)
    sent_at: Mapped[Optional[datetime]] = mapped_column("SentAt", DateTime(timezone=True), nullable=True)
    delivered_at: Mapped[Optional[datetime]] = mapped_column("DeliveredAt", DateTime(timezone=True), nullable=True)
    read_at: Mapped[Optional[datetime]] = mapped_column("ReadAt", DateTime(timezone=True), nullable=True)
