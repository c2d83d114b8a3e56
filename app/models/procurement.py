# app/models/procurement.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

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
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


# ---------------------------------------------------------------------------
# Vendors
# ---------------------------------------------------------------------------


class Vendor(Base):
    """
    Vendors: supplier master data plus running performance figures.

    Ratings are unconstrained numerics; TotalOrders / OnTimeDeliveries /
    QualityIssues are counters bumped on delivery.
    """

    __tablename__ = "Vendors"
    __table_args__ = (
        Index("IX_Vendors_Name", "Name"),
        Index("IX_Vendors_TaxNumber", "TaxNumber"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    name: Mapped[str] = mapped_column("Name", String(200), nullable=False)
    contact_person: Mapped[str] = mapped_column("ContactPerson", String(100), nullable=False)
    email: Mapped[Optional[str]] = mapped_column("Email", String(100), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column("Phone", String(50), nullable=True)
    address: Mapped[Optional[str]] = mapped_column("Address", String(500), nullable=True)
    tax_number: Mapped[Optional[str]] = mapped_column("TaxNumber", String(50), nullable=True)
    registration_number: Mapped[Optional[str]] = mapped_column("RegistrationNumber", String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column("IsActive", Boolean, nullable=False, default=True)
    is_approved: Mapped[bool] = mapped_column("IsApproved", Boolean, nullable=False, default=False)
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)

    performance_rating: Mapped[Decimal] = mapped_column(
        "PerformanceRating", Numeric, nullable=False, default=Decimal("0")
    )
    total_orders: Mapped[int] = mapped_column("TotalOrders", Integer, nullable=False, default=0)
    on_time_deliveries: Mapped[int] = mapped_column("OnTimeDeliveries", Integer, nullable=False, default=0)
    quality_issues: Mapped[int] = mapped_column("QualityIssues", Integer, nullable=False, default=0)
    reliability_rating: Mapped[Decimal] = mapped_column(
        "ReliabilityRating", Numeric, nullable=False, default=Decimal("0")
    )
    delivery_rating: Mapped[Decimal] = mapped_column("DeliveryRating", Numeric, nullable=False, default=Decimal("0"))
    quality_rating: Mapped[Decimal] = mapped_column("QualityRating", Numeric, nullable=False, default=Decimal("0"))
    compliance_rating: Mapped[Decimal] = mapped_column(
        "ComplianceRating", Numeric, nullable=False, default=Decimal("0")
    )
    financial_stability: Mapped[Decimal] = mapped_column(
        "FinancialStability", Numeric, nullable=False, default=Decimal("0")
    )

    country: Mapped[Optional[str]] = mapped_column("Country", String(100), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column("Notes", String(2000), nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    last_updated_date: Mapped[Optional[datetime]] = mapped_column(
        "LastUpdatedDate", DateTime(timezone=True), nullable=True
    )

    @property
    def on_time_rate(self) -> float:
        if not self.total_orders:
            return 0.0
        return self.on_time_deliveries / self.total_orders


# ---------------------------------------------------------------------------
# ProcurementRequests
# ---------------------------------------------------------------------------


class ProcurementRequest(Base):
    """
    ProcurementRequests: purchase case, from draft to closed.

    Origin links (all SET NULL on delete):
      - OriginatingRequestId        the IT request that asked for it
      - TriggeredByInventoryItemId  the low-stock item that triggered it
      - ReplacementForAssetId       the asset being replaced

    ProcurementNumber is PR-<yyyy>-<nnnnnn> (year of RequestDate) and unique.
    """

    __tablename__ = "ProcurementRequests"
    __table_args__ = (
        Index("IX_ProcurementRequests_ApprovedByUserId", "ApprovedByUserId"),
        Index("IX_ProcurementRequests_AssignedToProcurementOfficerId", "AssignedToProcurementOfficerId"),
        Index("IX_ProcurementRequests_Department_RequestDate", "Department", "RequestDate"),
        Index("IX_ProcurementRequests_LastUpdatedByUserId", "LastUpdatedByUserId"),
        Index("IX_ProcurementRequests_OriginatingRequestId", "OriginatingRequestId"),
        Index("IX_ProcurementRequests_ProcurementNumber", "ProcurementNumber", unique=True),
        Index("IX_ProcurementRequests_ProcurementType_Status", "ProcurementType", "Status"),
        Index("IX_ProcurementRequests_QualityApprovedByUserId", "QualityApprovedByUserId"),
        Index("IX_ProcurementRequests_ReceivedByUserId", "ReceivedByUserId"),
        Index("IX_ProcurementRequests_ReplacementForAssetId", "ReplacementForAssetId"),
        Index("IX_ProcurementRequests_RequestDate", "RequestDate"),
        Index("IX_ProcurementRequests_RequestedByUserId", "RequestedByUserId"),
        Index("IX_ProcurementRequests_SelectedVendorId", "SelectedVendorId"),
        Index("IX_ProcurementRequests_Source", "Source"),
        Index("IX_ProcurementRequests_TriggeredByInventoryItemId", "TriggeredByInventoryItemId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    procurement_number: Mapped[str] = mapped_column("ProcurementNumber", String(100), nullable=False)
    title: Mapped[str] = mapped_column("Title", String(200), nullable=False)
    description: Mapped[str] = mapped_column("Description", String(2000), nullable=False)
    procurement_type: Mapped[int] = mapped_column("ProcurementType", Integer, nullable=False)
    category: Mapped[int] = mapped_column("Category", Integer, nullable=False)
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)
    method: Mapped[int] = mapped_column("Method", Integer, nullable=False)
    source: Mapped[int] = mapped_column("Source", Integer, nullable=False)

    originating_request_id: Mapped[Optional[int]] = mapped_column(
        "OriginatingRequestId",
        Integer,
        ForeignKey(
            "ITRequests.Id",
            ondelete="SET NULL",
            name="FK_ProcurementRequests_ITRequests_OriginatingRequestId",
        ),
        nullable=True,
    )
    triggered_by_inventory_item_id: Mapped[Optional[int]] = mapped_column(
        "TriggeredByInventoryItemId",
        Integer,
        ForeignKey(
            "InventoryItems.Id",
            ondelete="SET NULL",
            name="FK_ProcurementRequests_InventoryItems_TriggeredByInventoryItem~",
        ),
        nullable=True,
    )
    replacement_for_asset_id: Mapped[Optional[int]] = mapped_column(
        "ReplacementForAssetId",
        Integer,
        ForeignKey(
            "Assets.Id",
            ondelete="SET NULL",
            name="FK_ProcurementRequests_Assets_ReplacementForAssetId",
        ),
        nullable=True,
    )

    requested_by_user_id: Mapped[str] = mapped_column(
        "RequestedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_ProcurementRequests_AspNetUsers_RequestedByUserId",
        ),
        nullable=False,
    )
    department: Mapped[str] = mapped_column("Department", String(100), nullable=False)
    request_date: Mapped[datetime] = mapped_column("RequestDate", DateTime(timezone=True), nullable=False)
    required_by_date: Mapped[Optional[datetime]] = mapped_column(
        "RequiredByDate", DateTime(timezone=True), nullable=True
    )

    estimated_budget: Mapped[Decimal] = mapped_column("EstimatedBudget", Numeric(12, 2), nullable=False)
    approved_budget: Mapped[Optional[Decimal]] = mapped_column("ApprovedBudget", Numeric(12, 2), nullable=True)
    actual_cost: Mapped[Optional[Decimal]] = mapped_column("ActualCost", Numeric(12, 2), nullable=True)
    budget_code: Mapped[Optional[str]] = mapped_column("BudgetCode", String(50), nullable=True)
    fiscal_year: Mapped[Optional[str]] = mapped_column("FiscalYear", String(20), nullable=True)

    approved_by_user_id: Mapped[Optional[str]] = mapped_column(
        "ApprovedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="SET NULL",
            name="FK_ProcurementRequests_AspNetUsers_ApprovedByUserId",
        ),
        nullable=True,
    )
    approval_date: Mapped[Optional[datetime]] = mapped_column("ApprovalDate", DateTime(timezone=True), nullable=True)
    assigned_to_procurement_officer_id: Mapped[Optional[str]] = mapped_column(
        "AssignedToProcurementOfficerId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="SET NULL",
            name="FK_ProcurementRequests_AspNetUsers_AssignedToProcurementOffice~",
        ),
        nullable=True,
    )
    procurement_start_date: Mapped[Optional[datetime]] = mapped_column(
        "ProcurementStartDate", DateTime(timezone=True), nullable=True
    )
    expected_delivery_date: Mapped[Optional[datetime]] = mapped_column(
        "ExpectedDeliveryDate", DateTime(timezone=True), nullable=True
    )
    actual_delivery_date: Mapped[Optional[datetime]] = mapped_column(
        "ActualDeliveryDate", DateTime(timezone=True), nullable=True
    )

    selected_vendor_id: Mapped[Optional[int]] = mapped_column(
        "SelectedVendorId",
        Integer,
        ForeignKey("Vendors.Id", ondelete="SET NULL", name="FK_ProcurementRequests_Vendors_SelectedVendorId"),
        nullable=True,
    )
    purchase_order_number: Mapped[Optional[str]] = mapped_column("PurchaseOrderNumber", String(100), nullable=True)
    contract_number: Mapped[Optional[str]] = mapped_column("ContractNumber", String(100), nullable=True)

    received_by_user_id: Mapped[Optional[str]] = mapped_column(
        "ReceivedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="SET NULL",
            name="FK_ProcurementRequests_AspNetUsers_ReceivedByUserId",
        ),
        nullable=True,
    )
    received_date: Mapped[Optional[datetime]] = mapped_column("ReceivedDate", DateTime(timezone=True), nullable=True)
    quality_approved: Mapped[bool] = mapped_column("QualityApproved", Boolean, nullable=False, default=False)
    quality_approved_by_user_id: Mapped[Optional[str]] = mapped_column(
        "QualityApprovedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="SET NULL",
            name="FK_ProcurementRequests_AspNetUsers_QualityApprovedByUserId",
        ),
        nullable=True,
    )
    quality_approval_date: Mapped[Optional[datetime]] = mapped_column(
        "QualityApprovalDate", DateTime(timezone=True), nullable=True
    )

    asset_registered: Mapped[bool] = mapped_column("AssetRegistered", Boolean, nullable=False, default=False)
    inventory_updated: Mapped[bool] = mapped_column("InventoryUpdated", Boolean, nullable=False, default=False)
    request_fulfilled: Mapped[bool] = mapped_column("RequestFulfilled", Boolean, nullable=False, default=False)

    warranty_start_date: Mapped[Optional[datetime]] = mapped_column(
        "WarrantyStartDate", DateTime(timezone=True), nullable=True
    )
    warranty_end_date: Mapped[Optional[datetime]] = mapped_column(
        "WarrantyEndDate", DateTime(timezone=True), nullable=True
    )
    warranty_reference: Mapped[Optional[str]] = mapped_column("WarrantyReference", String(100), nullable=True)
    support_details: Mapped[Optional[str]] = mapped_column("SupportDetails", String(1000), nullable=True)
    specification_notes: Mapped[Optional[str]] = mapped_column("SpecificationNotes", String(2000), nullable=True)
    procurement_notes: Mapped[Optional[str]] = mapped_column("ProcurementNotes", String(2000), nullable=True)
    delivery_notes: Mapped[Optional[str]] = mapped_column("DeliveryNotes", String(2000), nullable=True)

    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    last_updated_date: Mapped[Optional[datetime]] = mapped_column(
        "LastUpdatedDate", DateTime(timezone=True), nullable=True
    )
    last_updated_by_user_id: Mapped[Optional[str]] = mapped_column(
        "LastUpdatedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="SET NULL",
            name="FK_ProcurementRequests_AspNetUsers_LastUpdatedByUserId",
        ),
        nullable=True,
    )
    current_approval_level: Mapped[Optional[int]] = mapped_column("CurrentApprovalLevel", Integer, nullable=True)
    final_cost: Mapped[Optional[Decimal]] = mapped_column("FinalCost", Numeric(12, 2), nullable=True)
    business_justification: Mapped[Optional[str]] = mapped_column(
        "BusinessJustification", String(2000), nullable=True
    )
    is_urgent: Mapped[bool] = mapped_column("IsUrgent", Boolean, nullable=False, default=False)
    priority: Mapped[int] = mapped_column("Priority", Integer, nullable=False)

    selected_vendor: Mapped[Optional[Vendor]] = relationship("Vendor", lazy="selectin")
    items: Mapped[List["ProcurementItem"]] = relationship(
        "ProcurementItem",
        back_populates="procurement_request",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProcurementItem.id",
        lazy="selectin",
    )
    approvals: Mapped[List["ProcurementApproval"]] = relationship(
        "ProcurementApproval",
        back_populates="procurement_request",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProcurementApproval.sequence",
        lazy="selectin",
    )
    quotes: Mapped[List["VendorQuote"]] = relationship(
        "VendorQuote",
        back_populates="procurement_request",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="VendorQuote.id",
    )


# ---------------------------------------------------------------------------
# ProcurementItems
# ---------------------------------------------------------------------------


class ProcurementItem(Base):
    """Line of a procurement; QuantityReceived grows with partial deliveries"""

    __tablename__ = "ProcurementItems"
    __table_args__ = (
        Index("IX_ProcurementItems_ExpectedInventoryItemId", "ExpectedInventoryItemId"),
        Index("IX_ProcurementItems_ProcurementRequestId", "ProcurementRequestId"),
        Index("IX_ProcurementItems_ReceivedInventoryItemId", "ReceivedInventoryItemId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    procurement_request_id: Mapped[int] = mapped_column(
        "ProcurementRequestId",
        Integer,
        ForeignKey(
            "ProcurementRequests.Id",
            ondelete="CASCADE",
            name="FK_ProcurementItems_ProcurementRequests_ProcurementRequestId",
        ),
        nullable=False,
    )
    item_name: Mapped[str] = mapped_column("ItemName", String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column("Description", String(1000), nullable=True)
    technical_specifications: Mapped[Optional[str]] = mapped_column(
        "TechnicalSpecifications", String(2000), nullable=True
    )
    quantity: Mapped[int] = mapped_column("Quantity", Integer, nullable=False)
    unit: Mapped[Optional[str]] = mapped_column("Unit", String(50), nullable=True)
    estimated_unit_price: Mapped[Decimal] = mapped_column("EstimatedUnitPrice", Numeric(10, 2), nullable=False)
    actual_unit_price: Mapped[Optional[Decimal]] = mapped_column("ActualUnitPrice", Numeric(10, 2), nullable=True)
    expected_inventory_item_id: Mapped[Optional[int]] = mapped_column(
        "ExpectedInventoryItemId",
        Integer,
        ForeignKey(
            "InventoryItems.Id",
            ondelete="SET NULL",
            name="FK_ProcurementItems_InventoryItems_ExpectedInventoryItemId",
        ),
        nullable=True,
    )
    received_inventory_item_id: Mapped[Optional[int]] = mapped_column(
        "ReceivedInventoryItemId",
        Integer,
        ForeignKey(
            "InventoryItems.Id",
            ondelete="SET NULL",
            name="FK_ProcurementItems_InventoryItems_ReceivedInventoryItemId",
        ),
        nullable=True,
    )
    quantity_received: Mapped[int] = mapped_column("QuantityReceived", Integer, nullable=False, default=0)
    first_delivery_date: Mapped[Optional[datetime]] = mapped_column(
        "FirstDeliveryDate", DateTime(timezone=True), nullable=True
    )
    last_delivery_date: Mapped[Optional[datetime]] = mapped_column(
        "LastDeliveryDate", DateTime(timezone=True), nullable=True
    )

    procurement_request: Mapped[ProcurementRequest] = relationship("ProcurementRequest", back_populates="items")

    @property
    def estimated_total(self) -> Decimal:
        return Decimal(self.quantity or 0) * Decimal(self.estimated_unit_price or 0)

    @property
    def is_fully_received(self) -> bool:
        return int(self.quantity_received or 0) >= int(self.quantity or 0)


# ---------------------------------------------------------------------------
# ProcurementApprovals / Activities / Documents
# ---------------------------------------------------------------------------


class ProcurementApproval(Base):
    __tablename__ = "ProcurementApprovals"
    __table_args__ = (
        Index("IX_ProcurementApprovals_ApprovedByUserId", "ApprovedByUserId"),
        Index("IX_ProcurementApprovals_ApproverId", "ApproverId"),
        Index("IX_ProcurementApprovals_ProcurementRequestId_Sequence", "ProcurementRequestId", "Sequence"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    procurement_request_id: Mapped[int] = mapped_column(
        "ProcurementRequestId",
        Integer,
        ForeignKey(
            "ProcurementRequests.Id",
            ondelete="CASCADE",
            name="FK_ProcurementApprovals_ProcurementRequests_ProcurementRequest~",
        ),
        nullable=False,
    )
    approval_level: Mapped[int] = mapped_column("ApprovalLevel", Integer, nullable=False)
    approver_id: Mapped[str] = mapped_column(
        "ApproverId",
        String(450),
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_ProcurementApprovals_AspNetUsers_ApproverId"),
        nullable=False,
    )
    approved_by_user_id: Mapped[Optional[str]] = mapped_column(
        "ApprovedByUserId",
        Text,
        ForeignKey("AspNetUsers.Id", name="FK_ProcurementApprovals_AspNetUsers_ApprovedByUserId"),
        nullable=True,
    )
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)
    comments: Mapped[Optional[str]] = mapped_column("Comments", String(1000), nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    decision_date: Mapped[Optional[datetime]] = mapped_column("DecisionDate", DateTime(timezone=True), nullable=True)
    sequence: Mapped[int] = mapped_column("Sequence", Integer, nullable=False)
    approved_amount: Mapped[Optional[Decimal]] = mapped_column("ApprovedAmount", Numeric(12, 2), nullable=True)

    procurement_request: Mapped[ProcurementRequest] = relationship("ProcurementRequest", back_populates="approvals")


class ProcurementActivity(Base):
    """Status-change / action timeline; ActionDate defaults to NOW()"""

    __tablename__ = "ProcurementActivities"
    __table_args__ = (
        Index("IX_ProcurementActivities_ActionByUserId", "ActionByUserId"),
        Index(
            "IX_ProcurementActivities_ProcurementRequestId_ActionDate",
            "ProcurementRequestId",
            "ActionDate",
        ),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    procurement_request_id: Mapped[int] = mapped_column(
        "ProcurementRequestId",
        Integer,
        ForeignKey(
            "ProcurementRequests.Id",
            ondelete="CASCADE",
            name="FK_ProcurementActivities_ProcurementRequests_ProcurementReques~",
        ),
        nullable=False,
    )
    action_by_user_id: Mapped[str] = mapped_column(
        "ActionByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_ProcurementActivities_AspNetUsers_ActionByUserId",
        ),
        nullable=False,
    )
    action_date: Mapped[datetime] = mapped_column(
        "ActionDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    activity_type: Mapped[int] = mapped_column("ActivityType", Integer, nullable=False)
    activity_details: Mapped[Optional[str]] = mapped_column("ActivityDetails", String(1000), nullable=True)
    from_status: Mapped[Optional[int]] = mapped_column("FromStatus", Integer, nullable=True)
    to_status: Mapped[Optional[int]] = mapped_column("ToStatus", Integer, nullable=True)


class ProcurementDocument(Base):
    __tablename__ = "ProcurementDocuments"
    __table_args__ = (
        Index("IX_ProcurementDocuments_ProcurementRequestId", "ProcurementRequestId"),
        Index("IX_ProcurementDocuments_UploadedByUserId", "UploadedByUserId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    procurement_request_id: Mapped[int] = mapped_column(
        "ProcurementRequestId",
        Integer,
        ForeignKey(
            "ProcurementRequests.Id",
            ondelete="CASCADE",
            name="FK_ProcurementDocuments_ProcurementRequests_ProcurementRequest~",
        ),
        nullable=False,
    )
    document_name: Mapped[str] = mapped_column("DocumentName", String(200), nullable=False)
    document_type: Mapped[int] = mapped_column("DocumentType", Integer, nullable=False)
    file_path: Mapped[str] = mapped_column("FilePath", String(500), nullable=False)
    content_type: Mapped[Optional[str]] = mapped_column("ContentType", String(100), nullable=True)
    file_size: Mapped[int] = mapped_column("FileSize", BigInteger, nullable=False)
    uploaded_by_user_id: Mapped[str] = mapped_column(
        "UploadedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_ProcurementDocuments_AspNetUsers_UploadedByUserId",
        ),
        nullable=False,
    )
    uploaded_date: Mapped[datetime] = mapped_column(
        "UploadedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    description: Mapped[Optional[str]] = mapped_column("Description", String(500), nullable=True)


# ---------------------------------------------------------------------------
# VendorQuotes / QuoteItems
# ---------------------------------------------------------------------------


class VendorQuote(Base):
    """
    A vendor's offer against a procurement. At most one quote per
    procurement carries IsSelected; selection also sets
    ProcurementRequests.SelectedVendorId.
    """

    __tablename__ = "VendorQuotes"
    __table_args__ = (
        Index("IX_VendorQuotes_ProcurementRequestId_VendorId", "ProcurementRequestId", "VendorId"),
        Index("IX_VendorQuotes_QuoteDate", "QuoteDate"),
        Index("IX_VendorQuotes_VendorId", "VendorId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    procurement_request_id: Mapped[int] = mapped_column(
        "ProcurementRequestId",
        Integer,
        ForeignKey(
            "ProcurementRequests.Id",
            ondelete="CASCADE",
            name="FK_VendorQuotes_ProcurementRequests_ProcurementRequestId",
        ),
        nullable=False,
    )
    vendor_id: Mapped[int] = mapped_column(
        "VendorId",
        Integer,
        ForeignKey("Vendors.Id", ondelete="RESTRICT", name="FK_VendorQuotes_Vendors_VendorId"),
        nullable=False,
    )
    quote_number: Mapped[Optional[str]] = mapped_column("QuoteNumber", String(100), nullable=True)
    total_amount: Mapped[Decimal] = mapped_column("TotalAmount", Numeric(12, 2), nullable=False)
    tax_amount: Mapped[Optional[Decimal]] = mapped_column("TaxAmount", Numeric(12, 2), nullable=True)
    discount_amount: Mapped[Optional[Decimal]] = mapped_column("DiscountAmount", Numeric(12, 2), nullable=True)
    quote_date: Mapped[datetime] = mapped_column("QuoteDate", DateTime(timezone=True), nullable=False)
    valid_until_date: Mapped[Optional[datetime]] = mapped_column(
        "ValidUntilDate", DateTime(timezone=True), nullable=True
    )
    delivery_days: Mapped[int] = mapped_column("DeliveryDays", Integer, nullable=False, default=0)
    payment_terms: Mapped[Optional[str]] = mapped_column("PaymentTerms", String(100), nullable=True)
    warranty_terms: Mapped[Optional[str]] = mapped_column("WarrantyTerms", String(100), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column("Notes", String(2000), nullable=True)
    is_selected: Mapped[bool] = mapped_column("IsSelected", Boolean, nullable=False, default=False)
    document_path: Mapped[Optional[str]] = mapped_column("DocumentPath", String(500), nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    vendor: Mapped[Vendor] = relationship("Vendor", lazy="selectin")
    procurement_request: Mapped[ProcurementRequest] = relationship("ProcurementRequest", back_populates="quotes")
    items: Mapped[List["QuoteItem"]] = relationship(
        "QuoteItem",
        back_populates="vendor_quote",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )


class QuoteItem(Base):
    __tablename__ = "QuoteItems"
    __table_args__ = (
        Index("IX_QuoteItems_ProcurementItemId", "ProcurementItemId"),
        Index("IX_QuoteItems_VendorQuoteId", "VendorQuoteId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    vendor_quote_id: Mapped[int] = mapped_column(
        "VendorQuoteId",
        Integer,
        ForeignKey("VendorQuotes.Id", ondelete="CASCADE", name="FK_QuoteItems_VendorQuotes_VendorQuoteId"),
        nullable=False,
    )
    procurement_item_id: Mapped[int] = mapped_column(
        "ProcurementItemId",
        Integer,
        ForeignKey(
            "ProcurementItems.Id",
            ondelete="RESTRICT",
            name="FK_QuoteItems_ProcurementItems_ProcurementItemId",
        ),
        nullable=False,
    )
    unit_price: Mapped[Decimal] = mapped_column("UnitPrice", Numeric(10, 2), nullable=False)
    quantity: Mapped[int] = mapped_column("Quantity", Integer, nullable=False)
    item_description: Mapped[Optional[str]] = mapped_column("ItemDescription", String(500), nullable=True)
    brand: Mapped[Optional[str]] = mapped_column("Brand", String(100), nullable=True)
    model: Mapped[Optional[str]] = mapped_column("Model", String(100), nullable=True)
    specifications: Mapped[Optional[str]] = mapped_column("Specifications", String(1000), nullable=True)

    vendor_quote: Mapped[VendorQuote] = relationship("VendorQuote", back_populates="items")
