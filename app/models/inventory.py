# app/models/inventory.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
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

if TYPE_CHECKING:
    from app.models.asset import Asset
    from app.models.location import Location


# ---------------------------------------------------------------------------
# InventoryItems
# ---------------------------------------------------------------------------


class InventoryItem(Base):
    """
    InventoryItems: stock-keeping record (distinct from a registered Asset).

    Quantities:
      - Quantity          on hand
      - ReservedQuantity  held for requests, never above Quantity
      - MinimumStock / ReorderLevel / MaximumStock drive stock alerts

    Cost: UnitCost is a weighted average maintained on stock-in;
    TotalValue = UnitCost * Quantity.
    """

    __tablename__ = "InventoryItems"
    __table_args__ = (
        Index("IX_InventoryItems_Brand_Model", "Brand", "Model"),
        Index("IX_InventoryItems_Category_Status", "Category", "Status"),
        Index("IX_InventoryItems_CreatedByUserId", "CreatedByUserId"),
        Index("IX_InventoryItems_ItemCode", "ItemCode", unique=True),
        Index("IX_InventoryItems_LastUpdatedByUserId", "LastUpdatedByUserId"),
        Index("IX_InventoryItems_LocationId", "LocationId"),
        Index("IX_InventoryItems_PartNumber", "PartNumber"),
        Index("IX_InventoryItems_SerialNumber", "SerialNumber"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)

    item_code: Mapped[str] = mapped_column("ItemCode", String(100), nullable=False)
    name: Mapped[str] = mapped_column("Name", String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column("Description", String(1000), nullable=True)
    category: Mapped[int] = mapped_column("Category", Integer, nullable=False)
    item_type: Mapped[int] = mapped_column("ItemType", Integer, nullable=False)
    brand: Mapped[str] = mapped_column("Brand", String(100), nullable=False)
    model: Mapped[str] = mapped_column("Model", String(100), nullable=False)
    serial_number: Mapped[Optional[str]] = mapped_column("SerialNumber", String(100), nullable=True)
    part_number: Mapped[Optional[str]] = mapped_column("PartNumber", String(100), nullable=True)
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)
    condition: Mapped[int] = mapped_column("Condition", Integer, nullable=False)

    quantity: Mapped[int] = mapped_column("Quantity", Integer, nullable=False, default=0)
    reserved_quantity: Mapped[int] = mapped_column("ReservedQuantity", Integer, nullable=False, default=0)
    minimum_stock: Mapped[int] = mapped_column("MinimumStock", Integer, nullable=False, default=0)
    maximum_stock: Mapped[int] = mapped_column("MaximumStock", Integer, nullable=False, default=0)
    reorder_level: Mapped[int] = mapped_column("ReorderLevel", Integer, nullable=False, default=0)

    unit_cost: Mapped[Optional[Decimal]] = mapped_column("UnitCost", Numeric(10, 2), nullable=True)
    total_value: Mapped[Optional[Decimal]] = mapped_column("TotalValue", Numeric(10, 2), nullable=True)
    supplier: Mapped[Optional[str]] = mapped_column("Supplier", String(100), nullable=True)
    supplier_part_number: Mapped[Optional[str]] = mapped_column("SupplierPartNumber", String(50), nullable=True)
    purchase_date: Mapped[Optional[datetime]] = mapped_column("PurchaseDate", DateTime(timezone=True), nullable=True)
    warranty_expiry: Mapped[Optional[datetime]] = mapped_column("WarrantyExpiry", DateTime(timezone=True), nullable=True)
    warranty_period_months: Mapped[Optional[int]] = mapped_column("WarrantyPeriodMonths", Integer, nullable=True)

    location_id: Mapped[int] = mapped_column(
        "LocationId",
        Integer,
        ForeignKey("Locations.Id", ondelete="RESTRICT", name="FK_InventoryItems_Locations_LocationId"),
        nullable=False,
    )
    storage_zone: Mapped[Optional[str]] = mapped_column("StorageZone", String(100), nullable=True)
    storage_shelf: Mapped[Optional[str]] = mapped_column("StorageShelf", String(100), nullable=True)
    storage_bin: Mapped[Optional[str]] = mapped_column("StorageBin", String(100), nullable=True)
    bin_location: Mapped[Optional[str]] = mapped_column("BinLocation", String(50), nullable=True)
    abc_classification: Mapped[Optional[str]] = mapped_column("AbcClassification", String(20), nullable=True)

    specifications: Mapped[Optional[str]] = mapped_column("Specifications", String(1000), nullable=True)
    compatible_with: Mapped[Optional[str]] = mapped_column("CompatibleWith", String(500), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column("Notes", String(2000), nullable=True)

    is_consumable: Mapped[bool] = mapped_column("IsConsumable", Boolean, nullable=False, default=False)
    requires_calibration: Mapped[bool] = mapped_column("RequiresCalibration", Boolean, nullable=False, default=False)
    last_calibration_date: Mapped[Optional[datetime]] = mapped_column(
        "LastCalibrationDate", DateTime(timezone=True), nullable=True
    )
    next_calibration_date: Mapped[Optional[datetime]] = mapped_column(
        "NextCalibrationDate", DateTime(timezone=True), nullable=True
    )
    calibration_certificate: Mapped[Optional[str]] = mapped_column("CalibrationCertificate", String(100), nullable=True)
    unit: Mapped[Optional[str]] = mapped_column("Unit", String(50), nullable=True)
    sku: Mapped[Optional[str]] = mapped_column("SKU", String(100), nullable=True)

    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    created_by_user_id: Mapped[str] = mapped_column(
        "CreatedByUserId",
        String(450),
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_InventoryItems_AspNetUsers_CreatedByUserId"),
        nullable=False,
    )
    last_updated_date: Mapped[Optional[datetime]] = mapped_column(
        "LastUpdatedDate", DateTime(timezone=True), nullable=True
    )
    last_updated_by_user_id: Mapped[Optional[str]] = mapped_column(
        "LastUpdatedByUserId",
        String(450),
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_InventoryItems_AspNetUsers_LastUpdatedByUserId"),
        nullable=True,
    )

    location: Mapped[Location] = relationship("Location", lazy="selectin")

    @property
    def available_quantity(self) -> int:
        return max(int(self.quantity or 0) - int(self.reserved_quantity or 0), 0)


# ---------------------------------------------------------------------------
# AssetInventoryMappings
# ---------------------------------------------------------------------------


class AssetInventoryMapping(Base):
    """
    AssetInventoryMappings: N units of an inventory item deployed onto an asset.

    Deployed -> Returned. A partial return shrinks the deployed row and adds
    a separate Returned row for the returned units.
    """

    __tablename__ = "AssetInventoryMappings"
    __table_args__ = (
        Index(
            "IX_AssetInventoryMappings_AssetId_InventoryItemId_Status",
            "AssetId",
            "InventoryItemId",
            "Status",
        ),
        Index("IX_AssetInventoryMappings_DeployedByUserId", "DeployedByUserId"),
        Index("IX_AssetInventoryMappings_DeploymentDate", "DeploymentDate"),
        Index("IX_AssetInventoryMappings_InventoryItemId", "InventoryItemId"),
        Index("IX_AssetInventoryMappings_LastUpdatedByUserId", "LastUpdatedByUserId"),
        Index("IX_AssetInventoryMappings_ReturnedByUserId", "ReturnedByUserId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    asset_id: Mapped[int] = mapped_column(
        "AssetId",
        Integer,
        ForeignKey("Assets.Id", ondelete="CASCADE", name="FK_AssetInventoryMappings_Assets_AssetId"),
        nullable=False,
    )
    inventory_item_id: Mapped[int] = mapped_column(
        "InventoryItemId",
        Integer,
        ForeignKey(
            "InventoryItems.Id",
            ondelete="CASCADE",
            name="FK_AssetInventoryMappings_InventoryItems_InventoryItemId",
        ),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column("Quantity", Integer, nullable=False)
    serial_number: Mapped[Optional[str]] = mapped_column("SerialNumber", String(100), nullable=True)
    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)

    deployment_date: Mapped[datetime] = mapped_column("DeploymentDate", DateTime(timezone=True), nullable=False)
    mapping_date: Mapped[datetime] = mapped_column("MappingDate", DateTime(timezone=True), nullable=False)
    return_date: Mapped[Optional[datetime]] = mapped_column("ReturnDate", DateTime(timezone=True), nullable=True)
    deployment_reason: Mapped[Optional[str]] = mapped_column("DeploymentReason", String(500), nullable=True)
    return_reason: Mapped[Optional[str]] = mapped_column("ReturnReason", String(500), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column("Notes", String(1000), nullable=True)

    deployed_by_user_id: Mapped[str] = mapped_column(
        "DeployedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_AssetInventoryMappings_AspNetUsers_DeployedByUserId",
        ),
        nullable=False,
    )
    # plain text, no FK
    created_by_user_id: Mapped[str] = mapped_column("CreatedByUserId", Text, nullable=False)
    returned_by_user_id: Mapped[Optional[str]] = mapped_column(
        "ReturnedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_AssetInventoryMappings_AspNetUsers_ReturnedByUserId",
        ),
        nullable=True,
    )
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
            ondelete="RESTRICT",
            name="FK_AssetInventoryMappings_AspNetUsers_LastUpdatedByUserId",
        ),
        nullable=True,
    )

    asset: Mapped[Asset] = relationship("Asset", lazy="selectin")
    inventory_item: Mapped[InventoryItem] = relationship("InventoryItem", lazy="selectin")


# ---------------------------------------------------------------------------
# InventoryMovements (append-only)
# ---------------------------------------------------------------------------


class InventoryMovement(Base):
    """
    InventoryMovements: physical stock ledger.

    Quantity is always positive; the direction is carried by MovementType.
    From/To coordinates are optional and only filled for transfers.
    """

    __tablename__ = "InventoryMovements"
    __table_args__ = (
        Index("IX_InventoryMovements_ApprovedByUserId", "ApprovedByUserId"),
        Index("IX_InventoryMovements_FromLocationId", "FromLocationId"),
        Index("IX_InventoryMovements_InventoryItemId_MovementDate", "InventoryItemId", "MovementDate"),
        Index("IX_InventoryMovements_MovementDate", "MovementDate"),
        Index("IX_InventoryMovements_PerformedByUserId", "PerformedByUserId"),
        Index("IX_InventoryMovements_RelatedAssetId", "RelatedAssetId"),
        Index("IX_InventoryMovements_ToLocationId", "ToLocationId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    inventory_item_id: Mapped[int] = mapped_column(
        "InventoryItemId",
        Integer,
        ForeignKey(
            "InventoryItems.Id",
            ondelete="CASCADE",
            name="FK_InventoryMovements_InventoryItems_InventoryItemId",
        ),
        nullable=False,
    )
    movement_type: Mapped[int] = mapped_column("MovementType", Integer, nullable=False)
    quantity: Mapped[int] = mapped_column("Quantity", Integer, nullable=False)

    from_location_id: Mapped[Optional[int]] = mapped_column(
        "FromLocationId",
        Integer,
        ForeignKey("Locations.Id", ondelete="SET NULL", name="FK_InventoryMovements_Locations_FromLocationId"),
        nullable=True,
    )
    to_location_id: Mapped[Optional[int]] = mapped_column(
        "ToLocationId",
        Integer,
        ForeignKey("Locations.Id", ondelete="SET NULL", name="FK_InventoryMovements_Locations_ToLocationId"),
        nullable=True,
    )
    from_zone: Mapped[Optional[str]] = mapped_column("FromZone", String(100), nullable=True)
    to_zone: Mapped[Optional[str]] = mapped_column("ToZone", String(100), nullable=True)
    from_shelf: Mapped[Optional[str]] = mapped_column("FromShelf", String(100), nullable=True)
    to_shelf: Mapped[Optional[str]] = mapped_column("ToShelf", String(100), nullable=True)
    from_bin: Mapped[Optional[str]] = mapped_column("FromBin", String(100), nullable=True)
    to_bin: Mapped[Optional[str]] = mapped_column("ToBin", String(100), nullable=True)

    related_asset_id: Mapped[Optional[int]] = mapped_column(
        "RelatedAssetId",
        Integer,
        ForeignKey("Assets.Id", ondelete="SET NULL", name="FK_InventoryMovements_Assets_RelatedAssetId"),
        nullable=True,
    )
    movement_date: Mapped[datetime] = mapped_column("MovementDate", DateTime(timezone=True), nullable=False)
    reason: Mapped[str] = mapped_column("Reason", String(500), nullable=False)
    reference_number: Mapped[Optional[str]] = mapped_column("ReferenceNumber", String(100), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column("Notes", String(1000), nullable=True)

    performed_by_user_id: Mapped[str] = mapped_column(
        "PerformedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_InventoryMovements_AspNetUsers_PerformedByUserId",
        ),
        nullable=False,
    )
    approved_by_user_id: Mapped[Optional[str]] = mapped_column(
        "ApprovedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_InventoryMovements_AspNetUsers_ApprovedByUserId",
        ),
        nullable=True,
    )
    approval_date: Mapped[Optional[datetime]] = mapped_column("ApprovalDate", DateTime(timezone=True), nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )


# ---------------------------------------------------------------------------
# InventoryTransactions (append-only)
# ---------------------------------------------------------------------------


class InventoryTransaction(Base):
    """
    InventoryTransactions: financial ledger (purchase / disposal / write-off ...).

    A transaction may point back at the InventoryMovement that moved the goods.
    """

    __tablename__ = "InventoryTransactions"
    __table_args__ = (
        Index("IX_InventoryTransactions_ApprovedByUserId", "ApprovedByUserId"),
        Index("IX_InventoryTransactions_CreatedByUserId", "CreatedByUserId"),
        Index(
            "IX_InventoryTransactions_InventoryItemId_TransactionDate",
            "InventoryItemId",
            "TransactionDate",
        ),
        Index("IX_InventoryTransactions_InvoiceNumber", "InvoiceNumber"),
        Index("IX_InventoryTransactions_PurchaseOrderNumber", "PurchaseOrderNumber"),
        Index("IX_InventoryTransactions_QualityCheckedByUserId", "QualityCheckedByUserId"),
        Index("IX_InventoryTransactions_RelatedAssetId", "RelatedAssetId"),
        Index("IX_InventoryTransactions_RelatedInventoryMovementId", "RelatedInventoryMovementId"),
        Index("IX_InventoryTransactions_TransactionDate", "TransactionDate"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    inventory_item_id: Mapped[int] = mapped_column(
        "InventoryItemId",
        Integer,
        ForeignKey(
            "InventoryItems.Id",
            ondelete="CASCADE",
            name="FK_InventoryTransactions_InventoryItems_InventoryItemId",
        ),
        nullable=False,
    )
    transaction_type: Mapped[int] = mapped_column("TransactionType", Integer, nullable=False)
    quantity: Mapped[int] = mapped_column("Quantity", Integer, nullable=False)
    unit_cost: Mapped[Optional[Decimal]] = mapped_column("UnitCost", Numeric(10, 2), nullable=True)
    total_cost: Mapped[Optional[Decimal]] = mapped_column("TotalCost", Numeric(10, 2), nullable=True)

    supplier: Mapped[Optional[str]] = mapped_column("Supplier", String(100), nullable=True)
    purchase_order_number: Mapped[Optional[str]] = mapped_column("PurchaseOrderNumber", String(100), nullable=True)
    invoice_number: Mapped[Optional[str]] = mapped_column("InvoiceNumber", String(100), nullable=True)
    delivery_note: Mapped[Optional[str]] = mapped_column("DeliveryNote", String(100), nullable=True)
    purchase_date: Mapped[Optional[datetime]] = mapped_column("PurchaseDate", DateTime(timezone=True), nullable=True)
    delivery_date: Mapped[Optional[datetime]] = mapped_column("DeliveryDate", DateTime(timezone=True), nullable=True)
    expiry_date: Mapped[Optional[datetime]] = mapped_column("ExpiryDate", DateTime(timezone=True), nullable=True)
    batch_number: Mapped[Optional[str]] = mapped_column("BatchNumber", String(100), nullable=True)
    lot_number: Mapped[Optional[str]] = mapped_column("LotNumber", String(100), nullable=True)

    transaction_date: Mapped[datetime] = mapped_column("TransactionDate", DateTime(timezone=True), nullable=False)
    description: Mapped[Optional[str]] = mapped_column("Description", String(500), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column("Notes", String(1000), nullable=True)

    related_asset_id: Mapped[Optional[int]] = mapped_column(
        "RelatedAssetId",
        Integer,
        ForeignKey("Assets.Id", ondelete="SET NULL", name="FK_InventoryTransactions_Assets_RelatedAssetId"),
        nullable=True,
    )
    related_inventory_movement_id: Mapped[Optional[int]] = mapped_column(
        "RelatedInventoryMovementId",
        Integer,
        ForeignKey(
            "InventoryMovements.Id",
            ondelete="SET NULL",
            name="FK_InventoryTransactions_InventoryMovements_RelatedInventoryMo~",
        ),
        nullable=True,
    )

    created_by_user_id: Mapped[str] = mapped_column(
        "CreatedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_InventoryTransactions_AspNetUsers_CreatedByUserId",
        ),
        nullable=False,
    )
    approved_by_user_id: Mapped[Optional[str]] = mapped_column(
        "ApprovedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_InventoryTransactions_AspNetUsers_ApprovedByUserId",
        ),
        nullable=True,
    )
    approval_date: Mapped[Optional[datetime]] = mapped_column("ApprovalDate", DateTime(timezone=True), nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    tax_amount: Mapped[Optional[Decimal]] = mapped_column("TaxAmount", Numeric(10, 2), nullable=True)
    discount_amount: Mapped[Optional[Decimal]] = mapped_column("DiscountAmount", Numeric(10, 2), nullable=True)
    shipping_cost: Mapped[Optional[Decimal]] = mapped_column("ShippingCost", Numeric(10, 2), nullable=True)
    currency: Mapped[Optional[str]] = mapped_column("Currency", String(20), nullable=True)

    quality_checked: Mapped[bool] = mapped_column("QualityChecked", Boolean, nullable=False, default=False)
    quality_checked_by_user_id: Mapped[Optional[str]] = mapped_column(
        "QualityCheckedByUserId",
        String(450),
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_InventoryTransactions_AspNetUsers_QualityCheckedByUserId",
        ),
        nullable=True,
    )
    quality_check_date: Mapped[Optional[datetime]] = mapped_column(
        "QualityCheckDate", DateTime(timezone=True), nullable=True
    )
    quality_notes: Mapped[Optional[str]] = mapped_column("QualityNotes", String(1000), nullable=True)


# ---------------------------------------------------------------------------
# QualityAssessmentRecords
# ---------------------------------------------------------------------------


class QualityAssessmentRecord(Base):
    """Inspection result for an inventory item (optionally the asset it sits in)"""

    __tablename__ = "QualityAssessmentRecords"
    __table_args__ = (
        Index("IX_QualityAssessmentRecords_AssessmentDate", "AssessmentDate"),
        Index("IX_QualityAssessmentRecords_AssetId_AssessmentDate", "AssetId", "AssessmentDate"),
        Index("IX_QualityAssessmentRecords_InspectorId", "InspectorId"),
        Index("IX_QualityAssessmentRecords_InventoryItemId", "InventoryItemId"),
        Index("IX_QualityAssessmentRecords_PerformedByUserId", "PerformedByUserId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    inventory_item_id: Mapped[int] = mapped_column(
        "InventoryItemId",
        Integer,
        ForeignKey(
            "InventoryItems.Id",
            ondelete="CASCADE",
            name="FK_QualityAssessmentRecords_InventoryItems_InventoryItemId",
        ),
        nullable=False,
    )
    asset_id: Mapped[Optional[int]] = mapped_column(
        "AssetId",
        Integer,
        ForeignKey("Assets.Id", ondelete="CASCADE", name="FK_QualityAssessmentRecords_Assets_AssetId"),
        nullable=True,
    )
    assessment_date: Mapped[datetime] = mapped_column("AssessmentDate", DateTime(timezone=True), nullable=False)
    inspector_user_id: Mapped[str] = mapped_column("InspectorUserId", Text, nullable=False)
    inspector_id: Mapped[Optional[str]] = mapped_column(
        "InspectorId",
        Text,
        ForeignKey("AspNetUsers.Id", name="FK_QualityAssessmentRecords_AspNetUsers_InspectorId"),
        nullable=True,
    )
    performed_by_user_id: Mapped[str] = mapped_column(
        "PerformedByUserId",
        Text,
        ForeignKey(
            "AspNetUsers.Id",
            ondelete="RESTRICT",
            name="FK_QualityAssessmentRecords_AspNetUsers_PerformedByUserId",
        ),
        nullable=False,
    )
    overall_condition: Mapped[int] = mapped_column("OverallCondition", Integer, nullable=False)
    quality_score: Mapped[float] = mapped_column("QualityScore", Float, nullable=False)
    checklist_json: Mapped[str] = mapped_column("ChecklistJson", Text, nullable=False)
    action_required: Mapped[str] = mapped_column("ActionRequired", Text, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column("Notes", Text, nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
