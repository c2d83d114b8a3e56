# app/models/automation.py
from __future__ import annotations

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
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class AutomationRule(Base):
    """
    AutomationRules: named trigger -> conditions -> actions rule.

    ConditionsJson / ActionsJson are opaque JSON documents. Execution
    counters are maintained by AutomationService.record_execution.
    """

    __tablename__ = "AutomationRules"
    __table_args__ = (
        Index("IX_AutomationRules_CreatedByUserId", "CreatedByUserId"),
        Index("IX_AutomationRules_RuleName", "RuleName", unique=True),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    rule_name: Mapped[str] = mapped_column("RuleName", Text, nullable=False)
    description: Mapped[str] = mapped_column("Description", Text, nullable=False)
    is_active: Mapped[bool] = mapped_column("IsActive", Boolean, nullable=False, default=True)
    trigger: Mapped[str] = mapped_column("Trigger", Text, nullable=False)
    conditions_json: Mapped[str] = mapped_column("ConditionsJson", Text, nullable=False)
    actions_json: Mapped[str] = mapped_column("ActionsJson", Text, nullable=False)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    created_by_user_id: Mapped[str] = mapped_column(
        "CreatedByUserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_AutomationRules_AspNetUsers_CreatedByUserId"),
        nullable=False,
    )
    last_modified_date: Mapped[Optional[datetime]] = mapped_column(
        "LastModifiedDate", DateTime(timezone=True), nullable=True
    )
    trigger_count: Mapped[int] = mapped_column("TriggerCount", Integer, nullable=False, default=0)
    last_modified: Mapped[datetime] = mapped_column("LastModified", DateTime(timezone=True), nullable=False)
    name: Mapped[str] = mapped_column("Name", Text, nullable=False)
    priority: Mapped[int] = mapped_column("Priority", Integer, nullable=False, default=0)
    execution_count: Mapped[int] = mapped_column("ExecutionCount", Integer, nullable=False, default=0)
    category: Mapped[int] = mapped_column("Category", Integer, nullable=False)
    has_execution_errors: Mapped[bool] = mapped_column("HasExecutionErrors", Boolean, nullable=False, default=False)
    last_executed_date: Mapped[Optional[datetime]] = mapped_column(
        "LastExecutedDate", DateTime(timezone=True), nullable=True
    )
    last_execution_error: Mapped[Optional[str]] = mapped_column("LastExecutionError", Text, nullable=True)
    trigger_type: Mapped[str] = mapped_column("TriggerType", Text, nullable=False)

    logs: Mapped[List["AutomationLog"]] = relationship(
        "AutomationLog",
        back_populates="rule",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class AutomationLog(Base):
    """
    AutomationLogs: one row per rule execution.

    RuleId carries the FK (CASCADE); AutomationRuleId is a duplicate plain
    column that is always written with the same value.
    """

    __tablename__ = "AutomationLogs"
    __table_args__ = (
        Index("IX_AutomationLogs_ExecutedByUserId", "ExecutedByUserId"),
        Index("IX_AutomationLogs_RuleId_Action", "RuleId", "Action"),
        Index("IX_AutomationLogs_Timestamp", "Timestamp"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    automation_rule_id: Mapped[int] = mapped_column("AutomationRuleId", Integer, nullable=False)
    executed_at: Mapped[datetime] = mapped_column("ExecutedAt", DateTime(timezone=True), nullable=False)
    success: Mapped[bool] = mapped_column("Success", Boolean, nullable=False)
    error_message: Mapped[Optional[str]] = mapped_column("ErrorMessage", Text, nullable=True)
    executed_by_user_id: Mapped[Optional[str]] = mapped_column(
        "ExecutedByUserId",
        Text,
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_AutomationLogs_AspNetUsers_ExecutedByUserId",
        ),
        nullable=True,
    )
    action: Mapped[str] = mapped_column("Action", Text, nullable=False)
    execution_details_json: Mapped[str] = mapped_column("ExecutionDetailsJson", Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        "Timestamp", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    rule_id: Mapped[int] = mapped_column(
        "RuleId",
        Integer,
        ForeignKey("AutomationRules.Id", ondelete="CASCADE", name="FK_AutomationLogs_AutomationRules_RuleId"),
        nullable=False,
    )

    rule: Mapped[AutomationRule] = relationship("AutomationRule", back_populates="logs")
