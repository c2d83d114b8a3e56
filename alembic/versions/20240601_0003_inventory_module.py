"""inventory module: items, deployments, movements, transactions, quality assessments

Revision ID: 20240601_0003
Revises: 20240601_0002
Create Date: 2024-06-01 09:20:00.000000
"""
from typing import Optional, Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20240601_0003"
down_revision: Union[str, Sequence[str], None] = "20240601_0002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# (index name, table, columns, unique)
INDEXES = [
    ("IX_InventoryItems_Brand_Model", "InventoryItems", ["Brand", "Model"], False),
    ("IX_InventoryItems_Category_Status", "InventoryItems", ["Category", "Status"], False),
    ("IX_InventoryItems_CreatedByUserId", "InventoryItems", ["CreatedByUserId"], False),
    ("IX_InventoryItems_ItemCode", "InventoryItems", ["ItemCode"], True),
    ("IX_InventoryItems_LastUpdatedByUserId", "InventoryItems", ["LastUpdatedByUserId"], False),
    ("IX_InventoryItems_LocationId", "InventoryItems", ["LocationId"], False),
    ("IX_InventoryItems_PartNumber", "InventoryItems", ["PartNumber"], False),
    ("IX_InventoryItems_SerialNumber", "InventoryItems", ["SerialNumber"], False),
    (
        "IX_AssetInventoryMappings_AssetId_InventoryItemId_Status",
        "AssetInventoryMappings",
        ["AssetId", "InventoryItemId", "Status"],
        False,
    ),
    ("IX_AssetInventoryMappings_DeployedByUserId", "AssetInventoryMappings", ["DeployedByUserId"], False),
    ("IX_AssetInventoryMappings_DeploymentDate", "AssetInventoryMappings", ["DeploymentDate"], False),
    ("IX_AssetInventoryMappings_InventoryItemId", "AssetInventoryMappings", ["InventoryItemId"], False),
    ("IX_AssetInventoryMappings_LastUpdatedByUserId", "AssetInventoryMappings", ["LastUpdatedByUserId"], False),
    ("IX_AssetInventoryMappings_ReturnedByUserId", "AssetInventoryMappings", ["ReturnedByUserId"], False),
    ("IX_InventoryMovements_ApprovedByUserId", "InventoryMovements", ["ApprovedByUserId"], False),
    ("IX_InventoryMovements_FromLocationId", "InventoryMovements", ["FromLocationId"], False),
    (
        "IX_InventoryMovements_InventoryItemId_MovementDate",
        "InventoryMovements",
        ["InventoryItemId", "MovementDate"],
        False,
    ),
    ("IX_InventoryMovements_MovementDate", "InventoryMovements", ["MovementDate"], False),
    ("IX_InventoryMovements_PerformedByUserId", "InventoryMovements", ["PerformedByUserId"], False),
    ("IX_InventoryMovements_RelatedAssetId", "InventoryMovements", ["RelatedAssetId"], False),
    ("IX_InventoryMovements_ToLocationId", "InventoryMovements", ["ToLocationId"], False),
    ("IX_InventoryTransactions_ApprovedByUserId", "InventoryTransactions", ["ApprovedByUserId"], False),
    ("IX_InventoryTransactions_CreatedByUserId", "InventoryTransactions", ["CreatedByUserId"], False),
    (
        "IX_InventoryTransactions_InventoryItemId_TransactionDate",
        "InventoryTransactions",
        ["InventoryItemId", "TransactionDate"],
        False,
    ),
    ("IX_InventoryTransactions_InvoiceNumber", "InventoryTransactions", ["InvoiceNumber"], False),
    ("IX_InventoryTransactions_PurchaseOrderNumber", "InventoryTransactions", ["PurchaseOrderNumber"], False),
    ("IX_InventoryTransactions_QualityCheckedByUserId", "InventoryTransactions", ["QualityCheckedByUserId"], False),
    ("IX_InventoryTransactions_RelatedAssetId", "InventoryTransactions", ["RelatedAssetId"], False),
    (
        "IX_InventoryTransactions_RelatedInventoryMovementId",
        "InventoryTransactions",
        ["RelatedInventoryMovementId"],
        False,
    ),
    ("IX_InventoryTransactions_TransactionDate", "InventoryTransactions", ["TransactionDate"], False),
    ("IX_QualityAssessmentRecords_AssessmentDate", "QualityAssessmentRecords", ["AssessmentDate"], False),
    (
        "IX_QualityAssessmentRecords_AssetId_AssessmentDate",
        "QualityAssessmentRecords",
        ["AssetId", "AssessmentDate"],
        False,
    ),
    ("IX_QualityAssessmentRecords_InspectorId", "QualityAssessmentRecords", ["InspectorId"], False),
    ("IX_QualityAssessmentRecords_InventoryItemId", "QualityAssessmentRecords", ["InventoryItemId"], False),
    ("IX_QualityAssessmentRecords_PerformedByUserId", "QualityAssessmentRecords", ["PerformedByUserId"], False),
]


def _ts(name: str, nullable: bool = True, now: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=nullable,
        server_default=sa.text("NOW()") if now else None,
    )


def _user_fk(table: str, column: str, ondelete: Optional[str] = "RESTRICT") -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        [column], ["AspNetUsers.Id"], name=f"FK_{table}_AspNetUsers_{column}", ondelete=ondelete
    )


def upgrade() -> None:
    """Upgrade schema: create the inventory tables."""
    op.create_table(
        "InventoryItems",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("ItemCode", sa.String(length=100), nullable=False),
        sa.Column("Name", sa.String(length=200), nullable=False),
        sa.Column("Description", sa.String(length=1000), nullable=True),
        sa.Column("Category", sa.Integer(), nullable=False),
        sa.Column("ItemType", sa.Integer(), nullable=False),
        sa.Column("Brand", sa.String(length=100), nullable=False),
        sa.Column("Model", sa.String(length=100), nullable=False),
        sa.Column("SerialNumber", sa.String(length=100), nullable=True),
        sa.Column("PartNumber", sa.String(length=100), nullable=True),
        sa.Column("Status", sa.Integer(), nullable=False),
        sa.Column("Condition", sa.Integer(), nullable=False),
        sa.Column("Quantity", sa.Integer(), nullable=False),
        sa.Column("ReservedQuantity", sa.Integer(), nullable=False),
        sa.Column("MinimumStock", sa.Integer(), nullable=False),
        sa.Column("MaximumStock", sa.Integer(), nullable=False),
        sa.Column("ReorderLevel", sa.Integer(), nullable=False),
        sa.Column("UnitCost", sa.Numeric(10, 2), nullable=True),
        sa.Column("TotalValue", sa.Numeric(10, 2), nullable=True),
        sa.Column("Supplier", sa.String(length=100), nullable=True),
        sa.Column("SupplierPartNumber", sa.String(length=50), nullable=True),
        _ts("PurchaseDate"),
        _ts("WarrantyExpiry"),
        sa.Column("WarrantyPeriodMonths", sa.Integer(), nullable=True),
        sa.Column("LocationId", sa.Integer(), nullable=False),
        sa.Column("StorageZone", sa.String(length=100), nullable=True),
        sa.Column("StorageShelf", sa.String(length=100), nullable=True),
        sa.Column("StorageBin", sa.String(length=100), nullable=True),
        sa.Column("BinLocation", sa.String(length=50), nullable=True),
        sa.Column("AbcClassification", sa.String(length=20), nullable=True),
        sa.Column("Specifications", sa.String(length=1000), nullable=True),
        sa.Column("CompatibleWith", sa.String(length=500), nullable=True),
        sa.Column("Notes", sa.String(length=2000), nullable=True),
        sa.Column("IsConsumable", sa.Boolean(), nullable=False),
        sa.Column("RequiresCalibration", sa.Boolean(), nullable=False),
        _ts("LastCalibrationDate"),
        _ts("NextCalibrationDate"),
        sa.Column("CalibrationCertificate", sa.String(length=100), nullable=True),
        sa.Column("Unit", sa.String(length=50), nullable=True),
        sa.Column("SKU", sa.String(length=100), nullable=True),
        _ts("CreatedDate", nullable=False, now=True),
        sa.Column("CreatedByUserId", sa.String(length=450), nullable=False),
        _ts("LastUpdatedDate"),
        sa.Column("LastUpdatedByUserId", sa.String(length=450), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_InventoryItems"),
        _user_fk("InventoryItems", "CreatedByUserId"),
        _user_fk("InventoryItems", "LastUpdatedByUserId"),
        sa.ForeignKeyConstraint(
            ["LocationId"], ["Locations.Id"], name="FK_InventoryItems_Locations_LocationId", ondelete="RESTRICT"
        ),
    )

    op.create_table(
        "AssetInventoryMappings",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("AssetId", sa.Integer(), nullable=False),
        sa.Column("InventoryItemId", sa.Integer(), nullable=False),
        sa.Column("Quantity", sa.Integer(), nullable=False),
        sa.Column("SerialNumber", sa.String(length=100), nullable=True),
        sa.Column("Status", sa.Integer(), nullable=False),
        _ts("DeploymentDate", nullable=False),
        _ts("MappingDate", nullable=False),
        _ts("ReturnDate"),
        sa.Column("DeploymentReason", sa.String(length=500), nullable=True),
        sa.Column("ReturnReason", sa.String(length=500), nullable=True),
        sa.Column("Notes", sa.String(length=1000), nullable=True),
        sa.Column("DeployedByUserId", sa.String(length=450), nullable=False),
        sa.Column("CreatedByUserId", sa.Text(), nullable=False),
        sa.Column("ReturnedByUserId", sa.String(length=450), nullable=True),
        _ts("CreatedDate", nullable=False, now=True),
        _ts("LastUpdatedDate"),
        sa.Column("LastUpdatedByUserId", sa.String(length=450), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_AssetInventoryMappings"),
        _user_fk("AssetInventoryMappings", "DeployedByUserId"),
        _user_fk("AssetInventoryMappings", "LastUpdatedByUserId"),
        _user_fk("AssetInventoryMappings", "ReturnedByUserId"),
        sa.ForeignKeyConstraint(
            ["AssetId"], ["Assets.Id"], name="FK_AssetInventoryMappings_Assets_AssetId", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["InventoryItemId"],
            ["InventoryItems.Id"],
            name="FK_AssetInventoryMappings_InventoryItems_InventoryItemId",
            ondelete="CASCADE",
        ),
    )

    op.create_table(
        "InventoryMovements",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("InventoryItemId", sa.Integer(), nullable=False),
        sa.Column("MovementType", sa.Integer(), nullable=False),
        sa.Column("Quantity", sa.Integer(), nullable=False),
        sa.Column("FromLocationId", sa.Integer(), nullable=True),
        sa.Column("ToLocationId", sa.Integer(), nullable=True),
        sa.Column("FromZone", sa.String(length=100), nullable=True),
        sa.Column("ToZone", sa.String(length=100), nullable=True),
        sa.Column("FromShelf", sa.String(length=100), nullable=True),
        sa.Column("ToShelf", sa.String(length=100), nullable=True),
        sa.Column("FromBin", sa.String(length=100), nullable=True),
        sa.Column("ToBin", sa.String(length=100), nullable=True),
        sa.Column("RelatedAssetId", sa.Integer(), nullable=True),
        _ts("MovementDate", nullable=False),
        sa.Column("Reason", sa.String(length=500), nullable=False),
        sa.Column("ReferenceNumber", sa.String(length=100), nullable=True),
        sa.Column("Notes", sa.String(length=1000), nullable=True),
        sa.Column("PerformedByUserId", sa.String(length=450), nullable=False),
        sa.Column("ApprovedByUserId", sa.String(length=450), nullable=True),
        _ts("ApprovalDate"),
        _ts("CreatedDate", nullable=False, now=True),
        sa.PrimaryKeyConstraint("Id", name="PK_InventoryMovements"),
        _user_fk("InventoryMovements", "ApprovedByUserId"),
        _user_fk("InventoryMovements", "PerformedByUserId"),
        sa.ForeignKeyConstraint(
            ["RelatedAssetId"], ["Assets.Id"], name="FK_InventoryMovements_Assets_RelatedAssetId", ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(
            ["InventoryItemId"],
            ["InventoryItems.Id"],
            name="FK_InventoryMovements_InventoryItems_InventoryItemId",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["FromLocationId"],
            ["Locations.Id"],
            name="FK_InventoryMovements_Locations_FromLocationId",
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["ToLocationId"],
            ["Locations.Id"],
            name="FK_InventoryMovements_Locations_ToLocationId",
            ondelete="SET NULL",
        ),
    )

    op.create_table(
        "QualityAssessmentRecords",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("InventoryItemId", sa.Integer(), nullable=False),
        sa.Column("AssetId", sa.Integer(), nullable=True),
        _ts("AssessmentDate", nullable=False),
        sa.Column("InspectorUserId", sa.Text(), nullable=False),
        sa.Column("InspectorId", sa.Text(), nullable=True),
        sa.Column("PerformedByUserId", sa.Text(), nullable=False),
        sa.Column("OverallCondition", sa.Integer(), nullable=False),
        sa.Column("QualityScore", sa.Float(), nullable=False),
        sa.Column("ChecklistJson", sa.Text(), nullable=False),
        sa.Column("ActionRequired", sa.Text(), nullable=False),
        sa.Column("Notes", sa.Text(), nullable=True),
        _ts("CreatedDate", nullable=False, now=True),
        sa.PrimaryKeyConstraint("Id", name="PK_QualityAssessmentRecords"),
        _user_fk("QualityAssessmentRecords", "InspectorId", ondelete=None),
        _user_fk("QualityAssessmentRecords", "PerformedByUserId"),
        sa.ForeignKeyConstraint(
            ["AssetId"], ["Assets.Id"], name="FK_QualityAssessmentRecords_Assets_AssetId", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["InventoryItemId"],
            ["InventoryItems.Id"],
            name="FK_QualityAssessmentRecords_InventoryItems_InventoryItemId",
            ondelete="CASCADE",
        ),
    )

    op.create_table(
        "InventoryTransactions",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("InventoryItemId", sa.Integer(), nullable=False),
        sa.Column("TransactionType", sa.Integer(), nullable=False),
        sa.Column("Quantity", sa.Integer(), nullable=False),
        sa.Column("UnitCost", sa.Numeric(10, 2), nullable=True),
        sa.Column("TotalCost", sa.Numeric(10, 2), nullable=True),
        sa.Column("Supplier", sa.String(length=100), nullable=True),
        sa.Column("PurchaseOrderNumber", sa.String(length=100), nullable=True),
        sa.Column("InvoiceNumber", sa.String(length=100), nullable=True),
        sa.Column("DeliveryNote", sa.String(length=100), nullable=True),
        _ts("PurchaseDate"),
        _ts("DeliveryDate"),
        _ts("ExpiryDate"),
        sa.Column("BatchNumber", sa.String(length=100), nullable=True),
        sa.Column("LotNumber", sa.String(length=100), nullable=True),
        _ts("TransactionDate", nullable=False),
        sa.Column("Description", sa.String(length=500), nullable=True),
        sa.Column("Notes", sa.String(length=1000), nullable=True),
        sa.Column("RelatedAssetId", sa.Integer(), nullable=True),
        sa.Column("RelatedInventoryMovementId", sa.Integer(), nullable=True),
        sa.Column("CreatedByUserId", sa.String(length=450), nullable=False),
        sa.Column("ApprovedByUserId", sa.String(length=450), nullable=True),
        _ts("ApprovalDate"),
        _ts("CreatedDate", nullable=False, now=True),
        sa.Column("TaxAmount", sa.Numeric(10, 2), nullable=True),
        sa.Column("DiscountAmount", sa.Numeric(10, 2), nullable=True),
        sa.Column("ShippingCost", sa.Numeric(10, 2), nullable=True),
        sa.Column("Currency", sa.String(length=20), nullable=True),
        sa.Column("QualityChecked", sa.Boolean(), nullable=False),
        sa.Column("QualityCheckedByUserId", sa.String(length=450), nullable=True),
        _ts("QualityCheckDate"),
        sa.Column("QualityNotes", sa.String(length=1000), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_InventoryTransactions"),
        _user_fk("InventoryTransactions", "ApprovedByUserId"),
        _user_fk("InventoryTransactions", "CreatedByUserId"),
        _user_fk("InventoryTransactions", "QualityCheckedByUserId"),
        sa.ForeignKeyConstraint(
            ["RelatedAssetId"],
            ["Assets.Id"],
            name="FK_InventoryTransactions_Assets_RelatedAssetId",
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["InventoryItemId"],
            ["InventoryItems.Id"],
            name="FK_InventoryTransactions_InventoryItems_InventoryItemId",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["RelatedInventoryMovementId"],
            ["InventoryMovements.Id"],
            name="FK_InventoryTransactions_InventoryMovements_RelatedInventoryMo~",
            ondelete="SET NULL",
        ),
    )

    for name, table, cols, unique in INDEXES:
        op.create_index(name, table, cols, unique=unique)


def downgrade() -> None:
    """Downgrade schema: drop the inventory tables."""
    for name, table, _cols, _unique in reversed(INDEXES):
        op.drop_index(name, table_name=table)

    op.drop_table("InventoryTransactions")
    op.drop_table("QualityAssessmentRecords")
    op.drop_table("InventoryMovements")
    op.drop_table("AssetInventoryMappings")
    op.drop_table("InventoryItems")
