"""request templates, automation rules, spend analytics, bug tracking

Revision ID: 20240601_0005
Revises: 20240601_0004
Create Date: 2024-06-01 10:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20240601_0005"
down_revision: Union[str, Sequence[str], None] = "20240601_0004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False)


def _ts(name: str, nullable: bool = True, now: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=nullable,
        server_default=sa.text("NOW()") if now else None,
    )


def _budget_analysis(table: str, label: str) -> None:
    op.create_table(
        table,
        _id(),
        sa.Column(label, sa.Text(), nullable=True),
        sa.Column("Budget", sa.Numeric(), nullable=False),
        sa.Column("Spent", sa.Numeric(), nullable=False),
        sa.Column("Remaining", sa.Numeric(), nullable=False),
        sa.Column("AllocatedBudget", sa.Numeric(), nullable=False),
        sa.Column("ActualSpend", sa.Numeric(), nullable=False),
        sa.Column("RemainingBudget", sa.Numeric(), nullable=False),
        sa.Column("SpendRate", sa.Numeric(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name=f"PK_{table}"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "RequestTemplates",
        _id(),
        sa.Column("Name", sa.Text(), nullable=False),
        sa.Column("Description", sa.Text(), nullable=False),
        sa.Column("RequestType", sa.Integer(), nullable=False),
        sa.Column("DefaultPriority", sa.Integer(), nullable=False),
        sa.Column("Subject", sa.Text(), nullable=False),
        sa.Column("ItemCategory", sa.Text(), nullable=True),
        sa.Column("Department", sa.Text(), nullable=True),
        sa.Column("IsActive", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        _ts("CreatedDate", nullable=False, now=True),
        sa.Column("CreatedBy", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_RequestTemplates"),
    )
    op.create_index("IX_RequestTemplates_Name", "RequestTemplates", ["Name"], unique=True)

    # ---------------- automation ----------------
    op.create_table(
        "AutomationRules",
        _id(),
        sa.Column("RuleName", sa.Text(), nullable=False),
        sa.Column("Description", sa.Text(), nullable=False),
        sa.Column("IsActive", sa.Boolean(), nullable=False),
        sa.Column("Trigger", sa.Text(), nullable=False),
        sa.Column("ConditionsJson", sa.Text(), nullable=False),
        sa.Column("ActionsJson", sa.Text(), nullable=False),
        _ts("CreatedDate", nullable=False, now=True),
        sa.Column("CreatedByUserId", sa.Text(), nullable=False),
        _ts("LastModifiedDate"),
        sa.Column("TriggerCount", sa.Integer(), nullable=False),
        _ts("LastModified", nullable=False),
        sa.Column("Name", sa.Text(), nullable=False),
        sa.Column("Priority", sa.Integer(), nullable=False),
        sa.Column("ExecutionCount", sa.Integer(), nullable=False),
        sa.Column("Category", sa.Integer(), nullable=False),
        sa.Column("HasExecutionErrors", sa.Boolean(), nullable=False),
        _ts("LastExecutedDate"),
        sa.Column("LastExecutionError", sa.Text(), nullable=True),
        sa.Column("TriggerType", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_AutomationRules"),
        sa.ForeignKeyConstraint(
            ["CreatedByUserId"],
            ["AspNetUsers.Id"],
            name="FK_AutomationRules_AspNetUsers_CreatedByUserId",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("IX_AutomationRules_CreatedByUserId", "AutomationRules", ["CreatedByUserId"])
    op.create_index("IX_AutomationRules_RuleName", "AutomationRules", ["RuleName"], unique=True)

    op.create_table(
        "AutomationLogs",
        _id(),
        sa.Column("AutomationRuleId", sa.Integer(), nullable=False),
        _ts("ExecutedAt", nullable=False),
        sa.Column("Success", sa.Boolean(), nullable=False),
        sa.Column("ErrorMessage", sa.Text(), nullable=True),
        sa.Column("ExecutedByUserId", sa.Text(), nullable=True),
        sa.Column("Action", sa.Text(), nullable=False),
        sa.Column("ExecutionDetailsJson", sa.Text(), nullable=False),
        _ts("Timestamp", nullable=False, now=True),
        sa.Column("RuleId", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_AutomationLogs"),
        sa.ForeignKeyConstraint(
            ["ExecutedByUserId"],
            ["AspNetUsers.Id"],
            name="FK_AutomationLogs_AspNetUsers_ExecutedByUserId",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["RuleId"],
            ["AutomationRules.Id"],
            name="FK_AutomationLogs_AutomationRules_RuleId",
            ondelete="CASCADE",
        ),
    )
    op.create_index("IX_AutomationLogs_ExecutedByUserId", "AutomationLogs", ["ExecutedByUserId"])
    op.create_index("IX_AutomationLogs_RuleId_Action", "AutomationLogs", ["RuleId", "Action"])
    op.create_index("IX_AutomationLogs_Timestamp", "AutomationLogs", ["Timestamp"])

    # ---------------- analytics (derived, no FKs) ----------------
    _budget_analysis("BudgetCategoryAnalyses", "Category")
    _budget_analysis("BudgetDepartmentAnalyses", "Department")

    op.create_table(
        "CategoryForecasts",
        _id(),
        sa.Column("Category", sa.Text(), nullable=True),
        sa.Column("ForecastAmount", sa.Numeric(), nullable=False),
        _ts("PeriodStart", nullable=False),
        _ts("PeriodEnd", nullable=False),
        sa.Column("ForecastedValue", sa.Numeric(), nullable=False),
        sa.Column("PredictedSpend", sa.Numeric(), nullable=False),
        sa.Column("Confidence", sa.Float(), nullable=False),
        sa.Column("TrendDirection", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_CategoryForecasts"),
    )

    op.create_table(
        "SpendAnomalies",
        _id(),
        _ts("Date", nullable=False),
        sa.Column("Amount", sa.Numeric(), nullable=False),
        sa.Column("Description", sa.Text(), nullable=True),
        sa.Column("Type", sa.Text(), nullable=True),
        sa.Column("RequestId", sa.Integer(), nullable=False),
        sa.Column("AnomalyType", sa.Text(), nullable=True),
        sa.Column("Severity", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_SpendAnomalies"),
    )

    op.create_table(
        "SpendTrends",
        _id(),
        _ts("Date", nullable=False),
        sa.Column("Amount", sa.Numeric(), nullable=False),
        sa.Column("Category", sa.Text(), nullable=True),
        sa.Column("Period", sa.Text(), nullable=True),
        sa.Column("RequestCount", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_SpendTrends"),
    )

    # ---------------- bug tracking / versions ----------------
    op.create_table(
        "BugTrackings",
        _id(),
        sa.Column("Title", sa.Text(), nullable=True),
        sa.Column("Description", sa.Text(), nullable=True),
        _ts("ReportedDate", nullable=False),
        sa.Column("Status", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_BugTrackings"),
    )

    op.create_table(
        "BugFixHistories",
        _id(),
        sa.Column("BugTrackingId", sa.Integer(), nullable=False),
        sa.Column("FixDescription", sa.Text(), nullable=True),
        _ts("FixDate", nullable=False),
        sa.Column("FixedBy", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_BugFixHistories"),
    )

    op.create_table(
        "SystemVersions",
        _id(),
        sa.Column("Version", sa.Text(), nullable=True),
        _ts("ReleaseDate", nullable=False),
        sa.Column("Notes", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_SystemVersions"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("SystemVersions")
    op.drop_table("BugFixHistories")
    op.drop_table("BugTrackings")
    op.drop_table("SpendTrends")
    op.drop_table("SpendAnomalies")
    op.drop_table("CategoryForecasts")
    op.drop_table("BudgetDepartmentAnalyses")
    op.drop_table("BudgetCategoryAnalyses")

    op.drop_index("IX_AutomationLogs_Timestamp", table_name="AutomationLogs")
    op.drop_index("IX_AutomationLogs_RuleId_Action", table_name="AutomationLogs")
    op.drop_index("IX_AutomationLogs_ExecutedByUserId", table_name="AutomationLogs")
    op.drop_table("AutomationLogs")

    op.drop_index("IX_AutomationRules_RuleName", table_name="AutomationRules")
    op.drop_index("IX_AutomationRules_CreatedByUserId", table_name="AutomationRules")
    op.drop_table("AutomationRules")

    op.drop_index("IX_RequestTemplates_Name", table_name="RequestTemplates")
    op.drop_table("RequestTemplates")
