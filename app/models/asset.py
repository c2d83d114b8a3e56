# app/models/asset.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Identity,
    Index,
    Integer,
    LargeBinary,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.identity import User
    from app.models.location import Location


class Asset(Base):
    """
    Assets: a tagged physical IT item.

    - AssetTag is the business key (unique)
    - Category / Status are integer enums (AssetCategory / AssetStatus)
    - DocumentPaths / ImagePaths hold a JSON list of stored file paths
    - RowVersion is reserved for optimistic concurrency checks
    - rows are never deleted by the application; retirement is a Status value
    """

    __tablename__ = "Assets"
    __table_args__ = (
        Index("IX_Assets_AssetTag", "AssetTag", unique=True),
        Index("IX_Assets_AssignedToUserId", "AssignedToUserId"),
        Index("IX_Assets_LocationId", "LocationId"),
        Index("IX_Assets_SerialNumber", "SerialNumber"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)

    asset_tag: Mapped[str] = mapped_column("AssetTag", String(100), nullable=False)
    category: Mapped[int] = mapped_column("Category", Integer, nullable=False)
    brand: Mapped[str] = mapped_column("Brand", String(100), nullable=False)
    model: Mapped[str] = mapped_column("Model", String(100), nullable=False)
    serial_number: Mapped[str] = mapped_column("SerialNumber", String(100), nullable=False)
    internal_serial_number: Mapped[str] = mapped_column("InternalSerialNumber", String(50), nullable=False)
    qr_code_data: Mapped[str] = mapped_column("QRCodeData", String(200), nullable=False)
    document_paths: Mapped[Optional[str]] = mapped_column("DocumentPaths", String(2000), nullable=True)
    image_paths: Mapped[Optional[str]] = mapped_column("ImagePaths", String(2000), nullable=True)
    description: Mapped[str] = mapped_column("Description", String(500), nullable=False)

    installation_date: Mapped[datetime] = mapped_column(
        "InstallationDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    last_updated: Mapped[datetime] = mapped_column(
        "LastUpdated", DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    status: Mapped[int] = mapped_column("Status", Integer, nullable=False)

    location_id: Mapped[Optional[int]] = mapped_column(
        "LocationId",
        Integer,
        ForeignKey("Locations.Id", ondelete="SET NULL", name="FK_Assets_Locations_LocationId"),
        nullable=True,
    )
    assigned_to_user_id: Mapped[Optional[str]] = mapped_column(
        "AssignedToUserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="SET NULL", name="FK_Assets_AspNetUsers_AssignedToUserId"),
        nullable=True,
    )
    responsible_person: Mapped[Optional[str]] = mapped_column("ResponsiblePerson", String(100), nullable=True)
    department: Mapped[Optional[str]] = mapped_column("Department", String(100), nullable=True)

    warranty_expiry: Mapped[Optional[datetime]] = mapped_column("WarrantyExpiry", DateTime(timezone=True), nullable=True)
    supplier: Mapped[Optional[str]] = mapped_column("Supplier", String(100), nullable=True)
    purchase_price: Mapped[Optional[Decimal]] = mapped_column("PurchasePrice", Numeric(18, 2), nullable=True)
    last_maintenance_date: Mapped[Optional[datetime]] = mapped_column(
        "LastMaintenanceDate", DateTime(timezone=True), nullable=True
    )
    notes: Mapped[Optional[str]] = mapped_column("Notes", String(1000), nullable=True)
    acquisition_date: Mapped[Optional[datetime]] = mapped_column("AcquisitionDate", DateTime(timezone=True), nullable=True)

    row_version: Mapped[Optional[bytes]] = mapped_column("RowVersion", LargeBinary, nullable=True)

    location: Mapped[Optional[Location]] = relationship("Location", lazy="selectin")
    assigned_to: Mapped[Optional[User]] = relationship("User", lazy="selectin")


class AssetMovement(Base):
    """
    AssetMovements: append-only history of location / custodian changes.

    Location and user references restrict deletion so history is never
    orphaned; deleting the asset itself cascades.
    """

    __tablename__ = "AssetMovements"
    __table_args__ = (
        Index("IX_AssetMovements_AssetId", "AssetId"),
        Index("IX_AssetMovements_FromLocationId", "FromLocationId"),
        Index("IX_AssetMovements_FromUserId", "FromUserId"),
        Index("IX_AssetMovements_PerformedByUserId", "PerformedByUserId"),
        Index("IX_AssetMovements_ToLocationId", "ToLocationId"),
        Index("IX_AssetMovements_ToUserId", "ToUserId"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    asset_id: Mapped[int] = mapped_column(
        "AssetId",
        Integer,
        ForeignKey("Assets.Id", ondelete="CASCADE", name="FK_AssetMovements_Assets_AssetId"),
        nullable=False,
    )
    movement_type: Mapped[int] = mapped_column("MovementType", Integer, nullable=False)
    movement_date: Mapped[datetime] = mapped_column(
        "MovementDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    from_location_id: Mapped[Optional[int]] = mapped_column(
        "FromLocationId",
        Integer,
        ForeignKey("Locations.Id", ondelete="RESTRICT", name="FK_AssetMovements_Locations_FromLocationId"),
        nullable=True,
    )
    from_user_id: Mapped[Optional[str]] = mapped_column(
        "FromUserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_AssetMovements_AspNetUsers_FromUserId"),
        nullable=True,
    )
    to_location_id: Mapped[Optional[int]] = mapped_column(
        "ToLocationId",
        Integer,
        ForeignKey("Locations.Id", ondelete="RESTRICT", name="FK_AssetMovements_Locations_ToLocationId"),
        nullable=True,
    )
    to_user_id: Mapped[Optional[str]] = mapped_column(
        "ToUserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_AssetMovements_AspNetUsers_ToUserId"),
        nullable=True,
    )

    reason: Mapped[Optional[str]] = mapped_column("Reason", String(500), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column("Notes", String(1000), nullable=True)
    performed_by_user_id: Mapped[str] = mapped_column(
        "PerformedByUserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="RESTRICT", name="FK_AssetMovements_AspNetUsers_PerformedByUserId"),
        nullable=False,
    )
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
