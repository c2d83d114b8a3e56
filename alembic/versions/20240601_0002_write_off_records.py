"""add WriteOffRecords

Revision ID: 20240601_0002
Revises: 20240601_0001
Create Date: 2024-06-01 09:10:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20240601_0002"
down_revision: Union[str, Sequence[str], None] = "20240601_0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema: create WriteOffRecords (number uniqueness comes later)."""
    op.create_table(
        "WriteOffRecords",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("AssetId", sa.Integer(), nullable=False),
        sa.Column("Reason", sa.Integer(), nullable=False),
        sa.Column("Method", sa.Integer(), nullable=False),
        sa.Column("Status", sa.Integer(), nullable=False),
        sa.Column("Description", sa.String(length=1000), nullable=False),
        sa.Column("Justification", sa.String(length=2000), nullable=False),
        sa.Column("Notes", sa.String(length=1000), nullable=True),
        sa.Column("DisposalMethod", sa.String(length=500), nullable=True),
        sa.Column("DisposalDate", sa.DateTime(timezone=True), nullable=True),
        sa.Column("WriteOffNumber", sa.String(length=50), nullable=False),
        sa.Column("AdditionalNotes", sa.String(length=1000), nullable=True),
        sa.Column("EstimatedValue", sa.Numeric(18, 2), nullable=True),
        sa.Column("SalvageValue", sa.Numeric(18, 2), nullable=True),
        sa.Column("DisposalVendor", sa.String(length=100), nullable=True),
        sa.Column("CertificateOfDestruction", sa.String(length=500), nullable=True),
        sa.Column("RequestedByUserId", sa.Text(), nullable=False),
        sa.Column("RequestDate", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ReviewedByUserId", sa.Text(), nullable=True),
        sa.Column("ReviewDate", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ReviewNotes", sa.String(length=1000), nullable=True),
        sa.Column("ApprovedByUserId", sa.Text(), nullable=True),
        sa.Column("ApprovalDate", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ApprovalNotes", sa.String(length=1000), nullable=True),
        sa.Column("ProcessedByUserId", sa.Text(), nullable=True),
        sa.Column("ProcessingDate", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ProcessingNotes", sa.String(length=1000), nullable=True),
        sa.Column("CreatedDate", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("LastUpdated", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
        sa.PrimaryKeyConstraint("Id", name="PK_WriteOffRecords"),
        sa.ForeignKeyConstraint(
            ["ApprovedByUserId"],
            ["AspNetUsers.Id"],
            name="FK_WriteOffRecords_AspNetUsers_ApprovedByUserId",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["AssetId"], ["Assets.Id"], name="FK_WriteOffRecords_Assets_AssetId", ondelete="CASCADE"
        ),
        # reviewer / processor: NO ACTION
        sa.ForeignKeyConstraint(
            ["ProcessedByUserId"],
            ["AspNetUsers.Id"],
            name="FK_WriteOffRecords_AspNetUsers_ProcessedByUserId",
        ),
        sa.ForeignKeyConstraint(
            ["RequestedByUserId"],
            ["AspNetUsers.Id"],
            name="FK_WriteOffRecords_AspNetUsers_RequestedByUserId",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["ReviewedByUserId"],
            ["AspNetUsers.Id"],
            name="FK_WriteOffRecords_AspNetUsers_ReviewedByUserId",
        ),
    )
    op.create_index("IX_WriteOffRecords_ApprovedByUserId", "WriteOffRecords", ["ApprovedByUserId"])
    op.create_index("IX_WriteOffRecords_AssetId", "WriteOffRecords", ["AssetId"])
    op.create_index("IX_WriteOffRecords_ProcessedByUserId", "WriteOffRecords", ["ProcessedByUserId"])
    op.create_index("IX_WriteOffRecords_RequestedByUserId", "WriteOffRecords", ["RequestedByUserId"])
    op.create_index("IX_WriteOffRecords_ReviewedByUserId", "WriteOffRecords", ["ReviewedByUserId"])


def downgrade() -> None:
    """Downgrade schema: drop WriteOffRecords."""
    op.drop_index("IX_WriteOffRecords_ReviewedByUserId", table_name="WriteOffRecords")
    op.drop_index("IX_WriteOffRecords_RequestedByUserId", table_name="WriteOffRecords")
    op.drop_index("IX_WriteOffRecords_ProcessedByUserId", table_name="WriteOffRecords")
    op.drop_index("IX_WriteOffRecords_AssetId", table_name="WriteOffRecords")
    op.drop_index("IX_WriteOffRecords_ApprovedByUserId", table_name="WriteOffRecords")
    op.drop_table("WriteOffRecords")
