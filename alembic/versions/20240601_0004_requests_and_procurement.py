"""vendors, IT requests and the procurement module

Revision ID: 20240601_0004
Revises: 20240601_0003
Create Date: 2024-06-01 09:30:00.000000
"""
from typing import Optional, Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20240601_0004"
down_revision: Union[str, Sequence[str], None] = "20240601_0003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# (index name, table, columns, unique)
INDEXES = [
    ("IX_Vendors_Name", "Vendors", ["Name"], False),
    ("IX_Vendors_TaxNumber", "Vendors", ["TaxNumber"], False),
    ("IX_ITRequests_AssignedToUserId", "ITRequests", ["AssignedToUserId"], False),
    ("IX_ITRequests_CompletedByUserId", "ITRequests", ["CompletedByUserId"], False),
    ("IX_ITRequests_DamagedAssetId", "ITRequests", ["DamagedAssetId"], False),
    ("IX_ITRequests_Department_RequestDate", "ITRequests", ["Department", "RequestDate"], False),
    ("IX_ITRequests_LastUpdatedByUserId", "ITRequests", ["LastUpdatedByUserId"], False),
    ("IX_ITRequests_LocationId", "ITRequests", ["LocationId"], False),
    ("IX_ITRequests_ProvidedInventoryItemId", "ITRequests", ["ProvidedInventoryItemId"], False),
    ("IX_ITRequests_RelatedAssetId", "ITRequests", ["RelatedAssetId"], False),
    ("IX_ITRequests_RequestDate", "ITRequests", ["RequestDate"], False),
    ("IX_ITRequests_RequestedByUserId", "ITRequests", ["RequestedByUserId"], False),
    ("IX_ITRequests_RequestNumber", "ITRequests", ["RequestNumber"], True),
    ("IX_ITRequests_RequestType_Status", "ITRequests", ["RequestType", "Status"], False),
    ("IX_ITRequests_RequiredInventoryItemId", "ITRequests", ["RequiredInventoryItemId"], False),
    ("IX_RequestActions_RequestId", "RequestActions", ["RequestId"], False),
    ("IX_RequestActions_UserId", "RequestActions", ["UserId"], False),
    ("IX_RequestActivities_ITRequestId_ActivityDate", "RequestActivities", ["ITRequestId", "ActivityDate"], False),
    ("IX_RequestActivities_UserId", "RequestActivities", ["UserId"], False),
    ("IX_RequestApprovals_ApproverId", "RequestApprovals", ["ApproverId"], False),
    ("IX_RequestApprovals_ITRequestId_Sequence", "RequestApprovals", ["ITRequestId", "Sequence"], False),
    ("IX_RequestAttachments_ITRequestId", "RequestAttachments", ["ITRequestId"], False),
    ("IX_RequestAttachments_UploadedByUserId", "RequestAttachments", ["UploadedByUserId"], False),
    ("IX_RequestComments_CommentedByUserId", "RequestComments", ["CommentedByUserId"], False),
    ("IX_RequestComments_ITRequestId_CreatedDate", "RequestComments", ["ITRequestId", "CreatedDate"], False),
    ("IX_RequestEscalations_RequestId", "RequestEscalations", ["RequestId"], False),
    ("IX_ProcurementRequests_ApprovedByUserId", "ProcurementRequests", ["ApprovedByUserId"], False),
    (
        "IX_ProcurementRequests_AssignedToProcurementOfficerId",
        "ProcurementRequests",
        ["AssignedToProcurementOfficerId"],
        False,
    ),
    ("IX_ProcurementRequests_Department_RequestDate", "ProcurementRequests", ["Department", "RequestDate"], False),
    ("IX_ProcurementRequests_LastUpdatedByUserId", "ProcurementRequests", ["LastUpdatedByUserId"], False),
    ("IX_ProcurementRequests_OriginatingRequestId", "ProcurementRequests", ["OriginatingRequestId"], False),
    ("IX_ProcurementRequests_ProcurementNumber", "ProcurementRequests", ["ProcurementNumber"], True),
    ("IX_ProcurementRequests_ProcurementType_Status", "ProcurementRequests", ["ProcurementType", "Status"], False),
    ("IX_ProcurementRequests_QualityApprovedByUserId", "ProcurementRequests", ["QualityApprovedByUserId"], False),
    ("IX_ProcurementRequests_ReceivedByUserId", "ProcurementRequests", ["ReceivedByUserId"], False),
    ("IX_ProcurementRequests_ReplacementForAssetId", "ProcurementRequests", ["ReplacementForAssetId"], False),
    ("IX_ProcurementRequests_RequestDate", "ProcurementRequests", ["RequestDate"], False),
    ("IX_ProcurementRequests_RequestedByUserId", "ProcurementRequests", ["RequestedByUserId"], False),
    ("IX_ProcurementRequests_SelectedVendorId", "ProcurementRequests", ["SelectedVendorId"], False),
    ("IX_ProcurementRequests_Source", "ProcurementRequests", ["Source"], False),
    (
        "IX_ProcurementRequests_TriggeredByInventoryItemId",
        "ProcurementRequests",
        ["TriggeredByInventoryItemId"],
        False,
    ),
    ("IX_ProcurementItems_ExpectedInventoryItemId", "ProcurementItems", ["ExpectedInventoryItemId"], False),
    ("IX_ProcurementItems_ProcurementRequestId", "ProcurementItems", ["ProcurementRequestId"], False),
    ("IX_ProcurementItems_ReceivedInventoryItemId", "ProcurementItems", ["ReceivedInventoryItemId"], False),
    ("IX_ProcurementApprovals_ApprovedByUserId", "ProcurementApprovals", ["ApprovedByUserId"], False),
    ("IX_ProcurementApprovals_ApproverId", "ProcurementApprovals", ["ApproverId"], False),
    (
        "IX_ProcurementApprovals_ProcurementRequestId_Sequence",
        "ProcurementApprovals",
        ["ProcurementRequestId", "Sequence"],
        False,
    ),
    ("IX_ProcurementActivities_ActionByUserId", "ProcurementActivities", ["ActionByUserId"], False),
    (
        "IX_ProcurementActivities_ProcurementRequestId_ActionDate",
        "ProcurementActivities",
        ["ProcurementRequestId", "ActionDate"],
        False,
    ),
    ("IX_ProcurementDocuments_ProcurementRequestId", "ProcurementDocuments", ["ProcurementRequestId"], False),
    ("IX_ProcurementDocuments_UploadedByUserId", "ProcurementDocuments", ["UploadedByUserId"], False),
    (
        "IX_VendorQuotes_ProcurementRequestId_VendorId",
        "VendorQuotes",
        ["ProcurementRequestId", "VendorId"],
        False,
    ),
    ("IX_VendorQuotes_QuoteDate", "VendorQuotes", ["QuoteDate"], False),
    ("IX_VendorQuotes_VendorId", "VendorQuotes", ["VendorId"], False),
    ("IX_QuoteItems_ProcurementItemId", "QuoteItems", ["ProcurementItemId"], False),
    ("IX_QuoteItems_VendorQuoteId", "QuoteItems", ["VendorQuoteId"], False),
]

# children first
TABLES_DROP_ORDER = [
    "QuoteItems",
    "VendorQuotes",
    "ProcurementDocuments",
    "ProcurementActivities",
    "ProcurementApprovals",
    "ProcurementItems",
    "ProcurementRequests",
    "RequestEscalations",
    "RequestComments",
    "RequestAttachments",
    "RequestApprovals",
    "RequestActivities",
    "RequestActions",
    "ITRequests",
    "Vendors",
]


def _ts(name: str, nullable: bool = True, now: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=nullable,
        server_default=sa.text("NOW()") if now else None,
    )


def _fk(
    table: str,
    column: str,
    target: str,
    ondelete: Optional[str],
    name: Optional[str] = None,
) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        [column],
        [f"{target}.Id"],
        name=name or f"FK_{table}_{target}_{column}",
        ondelete=ondelete,
    )


def upgrade() -> None:
    """Upgrade schema: create vendor, request and procurement tables."""
    op.create_table(
        "Vendors",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("Name", sa.String(length=200), nullable=False),
        sa.Column("ContactPerson", sa.String(length=100), nullable=False),
        sa.Column("Email", sa.String(length=100), nullable=True),
        sa.Column("Phone", sa.String(length=50), nullable=True),
        sa.Column("Address", sa.String(length=500), nullable=True),
        sa.Column("TaxNumber", sa.String(length=50), nullable=True),
        sa.Column("RegistrationNumber", sa.String(length=50), nullable=True),
        sa.Column("IsActive", sa.Boolean(), nullable=False),
        sa.Column("IsApproved", sa.Boolean(), nullable=False),
        sa.Column("Status", sa.Integer(), nullable=False),
        sa.Column("PerformanceRating", sa.Numeric(), nullable=False),
        sa.Column("TotalOrders", sa.Integer(), nullable=False),
        sa.Column("OnTimeDeliveries", sa.Integer(), nullable=False),
        sa.Column("QualityIssues", sa.Integer(), nullable=False),
        sa.Column("ReliabilityRating", sa.Numeric(), nullable=False),
        sa.Column("DeliveryRating", sa.Numeric(), nullable=False),
        sa.Column("QualityRating", sa.Numeric(), nullable=False),
        sa.Column("ComplianceRating", sa.Numeric(), nullable=False),
        sa.Column("FinancialStability", sa.Numeric(), nullable=False),
        sa.Column("Country", sa.String(length=100), nullable=True),
        sa.Column("Notes", sa.String(length=2000), nullable=True),
        _ts("CreatedDate", nullable=False, now=True),
        _ts("LastUpdatedDate"),
        sa.PrimaryKeyConstraint("Id", name="PK_Vendors"),
    )

    # ---------------- IT requests ----------------
    op.create_table(
        "ITRequests",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("RequestNumber", sa.String(length=100), nullable=False),
        sa.Column("Title", sa.String(length=200), nullable=False),
        sa.Column("Description", sa.String(length=2000), nullable=False),
        sa.Column("RequestType", sa.Integer(), nullable=False),
        sa.Column("Priority", sa.Integer(), nullable=False),
        sa.Column("Status", sa.Integer(), nullable=False),
        sa.Column("RequestedByUserId", sa.String(length=450), nullable=False),
        sa.Column("Department", sa.String(length=100), nullable=False),
        _ts("RequestDate", nullable=False),
        _ts("RequiredByDate"),
        sa.Column("RelatedAssetId", sa.Integer(), nullable=True),
        sa.Column("RequestedItemCategory", sa.String(length=200), nullable=True),
        sa.Column("RequestedItemSpecifications", sa.String(length=2000), nullable=True),
        sa.Column("LocationId", sa.Integer(), nullable=True),
        sa.Column("AssignedToUserId", sa.String(length=450), nullable=True),
        _ts("CompletedDate"),
        sa.Column("CompletedByUserId", sa.String(length=450), nullable=True),
        sa.Column("BusinessJustification", sa.String(length=1000), nullable=True),
        sa.Column("Justification", sa.String(length=1000), nullable=True),
        _ts("ModifiedAt"),
        sa.Column("ModifiedBy", sa.Text(), nullable=True),
        sa.Column("AssignmentNotes", sa.String(length=2000), nullable=True),
        sa.Column("EstimatedCost", sa.Numeric(18, 2), nullable=True),
        sa.Column("CompletionNotes", sa.String(length=2000), nullable=True),
        _ts("ResolutionDate"),
        sa.Column("ResolutionDetails", sa.String(length=2000), nullable=True),
        sa.Column("RequiredInventoryItemId", sa.Integer(), nullable=True),
        sa.Column("ProvidedInventoryItemId", sa.Integer(), nullable=True),
        sa.Column("DamagedAssetId", sa.Integer(), nullable=True),
        sa.Column("DisposalNotesForUnmanagedAsset", sa.String(length=1000), nullable=True),
        _ts("CreatedDate", nullable=False, now=True),
        sa.Column("LastUpdatedByUserId", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_ITRequests"),
        _fk("ITRequests", "AssignedToUserId", "AspNetUsers", "SET NULL"),
        _fk("ITRequests", "CompletedByUserId", "AspNetUsers", "SET NULL"),
        _fk("ITRequests", "LastUpdatedByUserId", "AspNetUsers", "SET NULL"),
        _fk("ITRequests", "RequestedByUserId", "AspNetUsers", "RESTRICT"),
        _fk("ITRequests", "DamagedAssetId", "Assets", None),
        _fk("ITRequests", "RelatedAssetId", "Assets", "SET NULL"),
        _fk("ITRequests", "ProvidedInventoryItemId", "InventoryItems", "SET NULL"),
        _fk("ITRequests", "RequiredInventoryItemId", "InventoryItems", "SET NULL"),
        _fk("ITRequests", "LocationId", "Locations", "SET NULL"),
    )

    op.create_table(
        "RequestActions",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("RequestId", sa.Integer(), nullable=False),
        sa.Column("ActionType", sa.Integer(), nullable=False),
        sa.Column("Description", sa.String(length=1000), nullable=True),
        _ts("ActionDate", nullable=False),
        sa.Column("UserId", sa.String(length=450), nullable=False),
        sa.Column("Notes", sa.String(length=2000), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_RequestActions"),
        _fk("RequestActions", "UserId", "AspNetUsers", "CASCADE"),
        _fk("RequestActions", "RequestId", "ITRequests", "CASCADE"),
    )

    op.create_table(
        "RequestActivities",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("ITRequestId", sa.Integer(), nullable=False),
        _ts("ActivityDate", nullable=False),
        sa.Column("Description", sa.String(length=1000), nullable=False),
        sa.Column("UserId", sa.Text(), nullable=False),
        sa.Column("ActivityType", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_RequestActivities"),
        _fk("RequestActivities", "UserId", "AspNetUsers", "RESTRICT"),
        _fk("RequestActivities", "ITRequestId", "ITRequests", "CASCADE"),
    )

    op.create_table(
        "RequestApprovals",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("ITRequestId", sa.Integer(), nullable=False),
        sa.Column("ApprovalLevel", sa.Integer(), nullable=False),
        sa.Column("ApproverId", sa.String(length=450), nullable=False),
        sa.Column("Status", sa.Integer(), nullable=False),
        sa.Column("Comments", sa.String(length=1000), nullable=True),
        _ts("CreatedDate", nullable=False, now=True),
        _ts("DecisionDate"),
        sa.Column("Sequence", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_RequestApprovals"),
        _fk("RequestApprovals", "ApproverId", "AspNetUsers", "RESTRICT"),
        _fk("RequestApprovals", "ITRequestId", "ITRequests", "CASCADE"),
    )

    op.create_table(
        "RequestAttachments",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("ITRequestId", sa.Integer(), nullable=False),
        sa.Column("FileName", sa.String(length=255), nullable=False),
        sa.Column("FilePath", sa.String(length=500), nullable=False),
        sa.Column("ContentType", sa.String(length=100), nullable=True),
        sa.Column("FileSize", sa.BigInteger(), nullable=False),
        sa.Column("UploadedByUserId", sa.String(length=450), nullable=False),
        _ts("UploadedDate", nullable=False, now=True),
        sa.Column("Description", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_RequestAttachments"),
        _fk("RequestAttachments", "UploadedByUserId", "AspNetUsers", "RESTRICT"),
        _fk("RequestAttachments", "ITRequestId", "ITRequests", "CASCADE"),
    )

    op.create_table(
        "RequestComments",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("ITRequestId", sa.Integer(), nullable=False),
        sa.Column("CommentedByUserId", sa.String(length=450), nullable=False),
        sa.Column("Comment", sa.String(length=2000), nullable=False),
        _ts("CreatedDate", nullable=False, now=True),
        sa.Column("IsInternal", sa.Boolean(), nullable=False),
        sa.Column("CommentType", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_RequestComments"),
        _fk("RequestComments", "CommentedByUserId", "AspNetUsers", "RESTRICT"),
        _fk("RequestComments", "ITRequestId", "ITRequests", "CASCADE"),
    )

    op.create_table(
        "RequestEscalations",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("RequestId", sa.Integer(), nullable=False),
        sa.Column("EscalationLevel", sa.Integer(), nullable=False),
        _ts("EscalatedDate", nullable=False),
        sa.Column("EscalatedTo", sa.Text(), nullable=False),
        sa.Column("Reason", sa.Text(), nullable=False),
        sa.Column("AutoEscalated", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_RequestEscalations"),
        _fk("RequestEscalations", "RequestId", "ITRequests", "CASCADE"),
    )

    # ---------------- procurement ----------------
    op.create_table(
        "ProcurementRequests",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("ProcurementNumber", sa.String(length=100), nullable=False),
        sa.Column("Title", sa.String(length=200), nullable=False),
        sa.Column("Description", sa.String(length=2000), nullable=False),
        sa.Column("ProcurementType", sa.Integer(), nullable=False),
        sa.Column("Category", sa.Integer(), nullable=False),
        sa.Column("Status", sa.Integer(), nullable=False),
        sa.Column("Method", sa.Integer(), nullable=False),
        sa.Column("Source", sa.Integer(), nullable=False),
        sa.Column("OriginatingRequestId", sa.Integer(), nullable=True),
        sa.Column("TriggeredByInventoryItemId", sa.Integer(), nullable=True),
        sa.Column("ReplacementForAssetId", sa.Integer(), nullable=True),
        sa.Column("RequestedByUserId", sa.String(length=450), nullable=False),
        sa.Column("Department", sa.String(length=100), nullable=False),
        _ts("RequestDate", nullable=False),
        _ts("RequiredByDate"),
        sa.Column("EstimatedBudget", sa.Numeric(12, 2), nullable=False),
        sa.Column("ApprovedBudget", sa.Numeric(12, 2), nullable=True),
        sa.Column("ActualCost", sa.Numeric(12, 2), nullable=True),
        sa.Column("BudgetCode", sa.String(length=50), nullable=True),
        sa.Column("FiscalYear", sa.String(length=20), nullable=True),
        sa.Column("ApprovedByUserId", sa.String(length=450), nullable=True),
        _ts("ApprovalDate"),
        sa.Column("AssignedToProcurementOfficerId", sa.String(length=450), nullable=True),
        _ts("ProcurementStartDate"),
        _ts("ExpectedDeliveryDate"),
        _ts("ActualDeliveryDate"),
        sa.Column("SelectedVendorId", sa.Integer(), nullable=True),
        sa.Column("PurchaseOrderNumber", sa.String(length=100), nullable=True),
        sa.Column("ContractNumber", sa.String(length=100), nullable=True),
        sa.Column("ReceivedByUserId", sa.String(length=450), nullable=True),
        _ts("ReceivedDate"),
        sa.Column("QualityApproved", sa.Boolean(), nullable=False),
        sa.Column("QualityApprovedByUserId", sa.String(length=450), nullable=True),
        _ts("QualityApprovalDate"),
        sa.Column("AssetRegistered", sa.Boolean(), nullable=False),
        sa.Column("InventoryUpdated", sa.Boolean(), nullable=False),
        sa.Column("RequestFulfilled", sa.Boolean(), nullable=False),
        _ts("WarrantyStartDate"),
        _ts("WarrantyEndDate"),
        sa.Column("WarrantyReference", sa.String(length=100), nullable=True),
        sa.Column("SupportDetails", sa.String(length=1000), nullable=True),
        sa.Column("SpecificationNotes", sa.String(length=2000), nullable=True),
        sa.Column("ProcurementNotes", sa.String(length=2000), nullable=True),
        sa.Column("DeliveryNotes", sa.String(length=2000), nullable=True),
        _ts("CreatedDate", nullable=False, now=True),
        _ts("LastUpdatedDate"),
        sa.Column("LastUpdatedByUserId", sa.String(length=450), nullable=True),
        sa.Column("CurrentApprovalLevel", sa.Integer(), nullable=True),
        sa.Column("FinalCost", sa.Numeric(12, 2), nullable=True),
        sa.Column("BusinessJustification", sa.String(length=2000), nullable=True),
        sa.Column("IsUrgent", sa.Boolean(), nullable=False),
        sa.Column("Priority", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_ProcurementRequests"),
        _fk("ProcurementRequests", "ApprovedByUserId", "AspNetUsers", "SET NULL"),
        _fk(
            "ProcurementRequests",
            "AssignedToProcurementOfficerId",
            "AspNetUsers",
            "SET NULL",
            name="FK_ProcurementRequests_AspNetUsers_AssignedToProcurementOffice~",
        ),
        _fk("ProcurementRequests", "LastUpdatedByUserId", "AspNetUsers", "SET NULL"),
        _fk("ProcurementRequests", "QualityApprovedByUserId", "AspNetUsers", "SET NULL"),
        _fk("ProcurementRequests", "ReceivedByUserId", "AspNetUsers", "SET NULL"),
        _fk("ProcurementRequests", "RequestedByUserId", "AspNetUsers", "RESTRICT"),
        _fk("ProcurementRequests", "ReplacementForAssetId", "Assets", "SET NULL"),
        _fk("ProcurementRequests", "OriginatingRequestId", "ITRequests", "SET NULL"),
        _fk(
            "ProcurementRequests",
            "TriggeredByInventoryItemId",
            "InventoryItems",
            "SET NULL",
            name="FK_ProcurementRequests_InventoryItems_TriggeredByInventoryItem~",
        ),
        _fk("ProcurementRequests", "SelectedVendorId", "Vendors", "SET NULL"),
    )

    op.create_table(
        "ProcurementItems",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("ProcurementRequestId", sa.Integer(), nullable=False),
        sa.Column("ItemName", sa.String(length=200), nullable=False),
        sa.Column("Description", sa.String(length=1000), nullable=True),
        sa.Column("TechnicalSpecifications", sa.String(length=2000), nullable=True),
        sa.Column("Quantity", sa.Integer(), nullable=False),
        sa.Column("Unit", sa.String(length=50), nullable=True),
        sa.Column("EstimatedUnitPrice", sa.Numeric(10, 2), nullable=False),
        sa.Column("ActualUnitPrice", sa.Numeric(10, 2), nullable=True),
        sa.Column("ExpectedInventoryItemId", sa.Integer(), nullable=True),
        sa.Column("ReceivedInventoryItemId", sa.Integer(), nullable=True),
        sa.Column("QuantityReceived", sa.Integer(), nullable=False),
        _ts("FirstDeliveryDate"),
        _ts("LastDeliveryDate"),
        sa.PrimaryKeyConstraint("Id", name="PK_ProcurementItems"),
        _fk("ProcurementItems", "ExpectedInventoryItemId", "InventoryItems", "SET NULL"),
        _fk("ProcurementItems", "ReceivedInventoryItemId", "InventoryItems", "SET NULL"),
        _fk("ProcurementItems", "ProcurementRequestId", "ProcurementRequests", "CASCADE"),
    )

    op.create_table(
        "ProcurementApprovals",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("ProcurementRequestId", sa.Integer(), nullable=False),
        sa.Column("ApprovalLevel", sa.Integer(), nullable=False),
        sa.Column("ApproverId", sa.String(length=450), nullable=False),
        sa.Column("ApprovedByUserId", sa.Text(), nullable=True),
        sa.Column("Status", sa.Integer(), nullable=False),
        sa.Column("Comments", sa.String(length=1000), nullable=True),
        _ts("CreatedDate", nullable=False, now=True),
        _ts("DecisionDate"),
        sa.Column("Sequence", sa.Integer(), nullable=False),
        sa.Column("ApprovedAmount", sa.Numeric(12, 2), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_ProcurementApprovals"),
        _fk("ProcurementApprovals", "ApprovedByUserId", "AspNetUsers", None),
        _fk("ProcurementApprovals", "ApproverId", "AspNetUsers", "RESTRICT"),
        _fk(
            "ProcurementApprovals",
            "ProcurementRequestId",
            "ProcurementRequests",
            "CASCADE",
            name="FK_ProcurementApprovals_ProcurementRequests_ProcurementRequest~",
        ),
    )

    op.create_table(
        "ProcurementActivities",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("ProcurementRequestId", sa.Integer(), nullable=False),
        sa.Column("ActionByUserId", sa.String(length=450), nullable=False),
        _ts("ActionDate", nullable=False, now=True),
        sa.Column("ActivityType", sa.Integer(), nullable=False),
        sa.Column("ActivityDetails", sa.String(length=1000), nullable=True),
        sa.Column("FromStatus", sa.Integer(), nullable=True),
        sa.Column("ToStatus", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_ProcurementActivities"),
        _fk("ProcurementActivities", "ActionByUserId", "AspNetUsers", "RESTRICT"),
        _fk(
            "ProcurementActivities",
            "ProcurementRequestId",
            "ProcurementRequests",
            "CASCADE",
            name="FK_ProcurementActivities_ProcurementRequests_ProcurementReques~",
        ),
    )

    op.create_table(
        "ProcurementDocuments",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("ProcurementRequestId", sa.Integer(), nullable=False),
        sa.Column("DocumentName", sa.String(length=200), nullable=False),
        sa.Column("DocumentType", sa.Integer(), nullable=False),
        sa.Column("FilePath", sa.String(length=500), nullable=False),
        sa.Column("ContentType", sa.String(length=100), nullable=True),
        sa.Column("FileSize", sa.BigInteger(), nullable=False),
        sa.Column("UploadedByUserId", sa.String(length=450), nullable=False),
        _ts("UploadedDate", nullable=False, now=True),
        sa.Column("Description", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_ProcurementDocuments"),
        _fk("ProcurementDocuments", "UploadedByUserId", "AspNetUsers", "RESTRICT"),
        _fk(
            "ProcurementDocuments",
            "ProcurementRequestId",
            "ProcurementRequests",
            "CASCADE",
            name="FK_ProcurementDocuments_ProcurementRequests_ProcurementRequest~",
        ),
    )

    op.create_table(
        "VendorQuotes",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("ProcurementRequestId", sa.Integer(), nullable=False),
        sa.Column("VendorId", sa.Integer(), nullable=False),
        sa.Column("QuoteNumber", sa.String(length=100), nullable=True),
        sa.Column("TotalAmount", sa.Numeric(12, 2), nullable=False),
        sa.Column("TaxAmount", sa.Numeric(12, 2), nullable=True),
        sa.Column("DiscountAmount", sa.Numeric(12, 2), nullable=True),
        _ts("QuoteDate", nullable=False),
        _ts("ValidUntilDate"),
        sa.Column("DeliveryDays", sa.Integer(), nullable=False),
        sa.Column("PaymentTerms", sa.String(length=100), nullable=True),
        sa.Column("WarrantyTerms", sa.String(length=100), nullable=True),
        sa.Column("Notes", sa.String(length=2000), nullable=True),
        sa.Column("IsSelected", sa.Boolean(), nullable=False),
        sa.Column("DocumentPath", sa.String(length=500), nullable=True),
        _ts("CreatedDate", nullable=False, now=True),
        sa.PrimaryKeyConstraint("Id", name="PK_VendorQuotes"),
        _fk("VendorQuotes", "ProcurementRequestId", "ProcurementRequests", "CASCADE"),
        _fk("VendorQuotes", "VendorId", "Vendors", "RESTRICT"),
    )

    op.create_table(
        "QuoteItems",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("VendorQuoteId", sa.Integer(), nullable=False),
        sa.Column("ProcurementItemId", sa.Integer(), nullable=False),
        sa.Column("UnitPrice", sa.Numeric(10, 2), nullable=False),
        sa.Column("Quantity", sa.Integer(), nullable=False),
        sa.Column("ItemDescription", sa.String(length=500), nullable=True),
        sa.Column("Brand", sa.String(length=100), nullable=True),
        sa.Column("Model", sa.String(length=100), nullable=True),
        sa.Column("Specifications", sa.String(length=1000), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_QuoteItems"),
        _fk("QuoteItems", "ProcurementItemId", "ProcurementItems", "RESTRICT"),
        _fk("QuoteItems", "VendorQuoteId", "VendorQuotes", "CASCADE"),
    )

    for name, table, cols, unique in INDEXES:
        op.create_index(name, table, cols, unique=unique)


def downgrade() -> None:
    """Downgrade schema: drop vendor, request and procurement tables."""
    for name, table, _cols, _unique in reversed(INDEXES):
        op.drop_index(name, table_name=table)

    for table in TABLES_DROP_ORDER:
        op.drop_table(table)
