"""workflow orchestration, event subscriptions and notifications

Revision ID: 20240601_0006
Revises: 20240601_0005
Create Date: 2024-06-01 10:20:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "20240601_0006"
down_revision: Union[str, Sequence[str], None] = "20240601_0005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _ts(name: str, nullable: bool = True) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def _user_fk(table: str, column: str) -> sa.ForeignKeyConstraint:
    # every user link in this module cascades
    return sa.ForeignKeyConstraint(
        [column],
        ["AspNetUsers.Id"],
        name=f"FK_{table}_AspNetUsers_{column}",
        ondelete="CASCADE",
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "WorkflowInstances",
        sa.Column("Id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("WorkflowType", sa.Text(), nullable=False),
        sa.Column("Status", sa.Integer(), nullable=False),
        sa.Column("InitiatedByUserId", sa.Text(), nullable=False),
        _ts("StartTime", nullable=False),
        _ts("EndTime"),
        _ts("LastUpdated", nullable=False),
        sa.Column("Configuration", sa.Text(), nullable=False),
        sa.Column("CurrentStep", sa.Integer(), nullable=False),
        sa.Column("TotalSteps", sa.Integer(), nullable=False),
        sa.Column("ErrorMessage", sa.Text(), nullable=True),
        sa.Column("CompensationData", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_WorkflowInstances"),
        _user_fk("WorkflowInstances", "InitiatedByUserId"),
    )
    op.create_index("IX_WorkflowInstances_InitiatedByUserId", "WorkflowInstances", ["InitiatedByUserId"])

    op.create_table(
        "WorkflowStepInstances",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("WorkflowInstanceId", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("StepName", sa.Text(), nullable=False),
        sa.Column("StepType", sa.Text(), nullable=False),
        sa.Column("StepOrder", sa.Integer(), nullable=False),
        sa.Column("Status", sa.Integer(), nullable=False),
        _ts("StartTime"),
        _ts("EndTime"),
        sa.Column("Input", sa.Text(), nullable=True),
        sa.Column("Output", sa.Text(), nullable=True),
        sa.Column("ErrorMessage", sa.Text(), nullable=True),
        sa.Column("CompensationAction", sa.Text(), nullable=True),
        sa.Column("ExecutedByUserId", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_WorkflowStepInstances"),
        _user_fk("WorkflowStepInstances", "ExecutedByUserId"),
        sa.ForeignKeyConstraint(
            ["WorkflowInstanceId"],
            ["WorkflowInstances.Id"],
            name="FK_WorkflowStepInstances_WorkflowInstances_WorkflowInstanceId",
            ondelete="CASCADE",
        ),
    )
    op.create_index("IX_WorkflowStepInstances_ExecutedByUserId", "WorkflowStepInstances", ["ExecutedByUserId"])
    op.create_index("IX_WorkflowStepInstances_WorkflowInstanceId", "WorkflowStepInstances", ["WorkflowInstanceId"])

    op.create_table(
        "WorkflowEvents",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("WorkflowId", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("EventType", sa.Integer(), nullable=False),
        sa.Column("EventData", sa.Text(), nullable=False),
        sa.Column("Data", sa.Text(), nullable=False),
        _ts("Timestamp", nullable=False),
        sa.Column("UserId", sa.Text(), nullable=False),
        sa.Column("StepName", sa.Text(), nullable=True),
        sa.Column("IsProcessed", sa.Boolean(), nullable=False),
        _ts("ProcessedAt"),
        sa.Column("ProcessingResult", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_WorkflowEvents"),
        _user_fk("WorkflowEvents", "UserId"),
        sa.ForeignKeyConstraint(
            ["WorkflowId"],
            ["WorkflowInstances.Id"],
            name="FK_WorkflowEvents_WorkflowInstances_WorkflowId",
            ondelete="CASCADE",
        ),
    )
    op.create_index("IX_WorkflowEvents_UserId", "WorkflowEvents", ["UserId"])
    op.create_index("IX_WorkflowEvents_WorkflowId", "WorkflowEvents", ["WorkflowId"])

    op.create_table(
        "EventSubscriptions",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("Name", sa.Text(), nullable=False),
        sa.Column("Description", sa.Text(), nullable=False),
        sa.Column("EventType", sa.Text(), nullable=False),
        sa.Column("Filters", sa.Text(), nullable=False),
        sa.Column("NotificationConfig", sa.Text(), nullable=False),
        sa.Column("IsActive", sa.Boolean(), nullable=False),
        _ts("CreatedAt", nullable=False),
        _ts("LastModified"),
        sa.Column("CreatedByUserId", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_EventSubscriptions"),
        _user_fk("EventSubscriptions", "CreatedByUserId"),
    )
    op.create_index("IX_EventSubscriptions_CreatedByUserId", "EventSubscriptions", ["CreatedByUserId"])

    op.create_table(
        "Notifications",
        sa.Column("Id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("RecipientId", sa.Text(), nullable=False),
        sa.Column("RecipientUserId", sa.Text(), nullable=False),
        sa.Column("NotificationType", sa.Integer(), nullable=False),
        sa.Column("Type", sa.Integer(), nullable=False),
        sa.Column("Subject", sa.Text(), nullable=False),
        sa.Column("Title", sa.Text(), nullable=False),
        sa.Column("Message", sa.Text(), nullable=False),
        sa.Column("Data", sa.Text(), nullable=False),
        sa.Column("RelatedEntityType", sa.Text(), nullable=True),
        sa.Column("RelatedEntityId", sa.Integer(), nullable=True),
        sa.Column("ActionUrl", sa.Text(), nullable=True),
        sa.Column("Metadata", sa.Text(), nullable=True),
        sa.Column("Priority", sa.Integer(), nullable=False),
        sa.Column("Status", sa.Integer(), nullable=False),
        _ts("CreatedAt", nullable=False),
        _ts("SentAt"),
        _ts("DeliveredAt"),
        _ts("ReadAt"),
        sa.PrimaryKeyConstraint("Id", name="PK_Notifications"),
        _user_fk("Notifications", "RecipientId"),
    )
    op.create_index("IX_Notifications_RecipientId", "Notifications", ["RecipientId"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("IX_Notifications_RecipientId", table_name="Notifications")
    op.drop_table("Notifications")

    op.drop_index("IX_EventSubscriptions_CreatedByUserId", table_name="EventSubscriptions")
    op.drop_table("EventSubscriptions")

    op.drop_index("IX_WorkflowEvents_WorkflowId", table_name="WorkflowEvents")
    op.drop_index("IX_WorkflowEvents_UserId", table_name="WorkflowEvents")
    op.drop_table("WorkflowEvents")

    op.drop_index("IX_WorkflowStepInstances_WorkflowInstanceId", table_name="WorkflowStepInstances")
    op.drop_index("IX_WorkflowStepInstances_ExecutedByUserId", table_name="WorkflowStepInstances")
    op.drop_table("WorkflowStepInstances")

    op.drop_index("IX_WorkflowInstances_InitiatedByUserId", table_name="WorkflowInstances")
    op.drop_table("WorkflowInstances")
