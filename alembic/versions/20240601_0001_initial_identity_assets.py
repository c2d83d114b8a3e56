"""initial: identity, locations, assets, asset movements, audit logs, maintenance

Revision ID: 20240601_0001
Revises:
Create Date: 2024-06-01 09:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20240601_0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _ts(name: str, nullable: bool = True, now: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=nullable,
        server_default=sa.text("NOW()") if now else None,
    )


def upgrade() -> None:
    """Upgrade schema: identity tables, Locations, Assets and their history tables."""
    # ---------------- identity ----------------
    op.create_table(
        "AspNetRoles",
        sa.Column("Id", sa.Text(), nullable=False),
        sa.Column("Name", sa.String(length=256), nullable=True),
        sa.Column("NormalizedName", sa.String(length=256), nullable=True),
        sa.Column("ConcurrencyStamp", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_AspNetRoles"),
    )
    op.create_index("RoleNameIndex", "AspNetRoles", ["NormalizedName"], unique=True)

    op.create_table(
        "AspNetUsers",
        sa.Column("Id", sa.Text(), nullable=False),
        sa.Column("FirstName", sa.String(length=100), nullable=False),
        sa.Column("LastName", sa.String(length=100), nullable=False),
        sa.Column("Department", sa.String(length=100), nullable=True),
        sa.Column("JobTitle", sa.String(length=100), nullable=True),
        sa.Column("PhoneNumber", sa.String(length=20), nullable=True),
        sa.Column("IsActive", sa.Boolean(), nullable=False),
        _ts("CreatedDate", nullable=False, now=True),
        sa.Column("UserName", sa.String(length=256), nullable=True),
        sa.Column("NormalizedUserName", sa.String(length=256), nullable=True),
        sa.Column("Email", sa.String(length=256), nullable=True),
        sa.Column("NormalizedEmail", sa.String(length=256), nullable=True),
        sa.Column("EmailConfirmed", sa.Boolean(), nullable=False),
        sa.Column("PasswordHash", sa.Text(), nullable=True),
        sa.Column("SecurityStamp", sa.Text(), nullable=True),
        sa.Column("ConcurrencyStamp", sa.Text(), nullable=True),
        sa.Column("PhoneNumberConfirmed", sa.Boolean(), nullable=False),
        sa.Column("TwoFactorEnabled", sa.Boolean(), nullable=False),
        _ts("LockoutEnd"),
        sa.Column("LockoutEnabled", sa.Boolean(), nullable=False),
        sa.Column("AccessFailedCount", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_AspNetUsers"),
    )
    op.create_index("EmailIndex", "AspNetUsers", ["NormalizedEmail"])
    op.create_index("UserNameIndex", "AspNetUsers", ["NormalizedUserName"], unique=True)

    op.create_table(
        "AspNetRoleClaims",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("RoleId", sa.Text(), nullable=False),
        sa.Column("ClaimType", sa.Text(), nullable=True),
        sa.Column("ClaimValue", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_AspNetRoleClaims"),
        sa.ForeignKeyConstraint(
            ["RoleId"], ["AspNetRoles.Id"], name="FK_AspNetRoleClaims_AspNetRoles_RoleId", ondelete="CASCADE"
        ),
    )
    op.create_index("IX_AspNetRoleClaims_RoleId", "AspNetRoleClaims", ["RoleId"])

    op.create_table(
        "AspNetUserClaims",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("UserId", sa.Text(), nullable=False),
        sa.Column("ClaimType", sa.Text(), nullable=True),
        sa.Column("ClaimValue", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_AspNetUserClaims"),
        sa.ForeignKeyConstraint(
            ["UserId"], ["AspNetUsers.Id"], name="FK_AspNetUserClaims_AspNetUsers_UserId", ondelete="CASCADE"
        ),
    )
    op.create_index("IX_AspNetUserClaims_UserId", "AspNetUserClaims", ["UserId"])

    op.create_table(
        "AspNetUserLogins",
        sa.Column("LoginProvider", sa.Text(), nullable=False),
        sa.Column("ProviderKey", sa.Text(), nullable=False),
        sa.Column("ProviderDisplayName", sa.Text(), nullable=True),
        sa.Column("UserId", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("LoginProvider", "ProviderKey", name="PK_AspNetUserLogins"),
        sa.ForeignKeyConstraint(
            ["UserId"], ["AspNetUsers.Id"], name="FK_AspNetUserLogins_AspNetUsers_UserId", ondelete="CASCADE"
        ),
    )
    op.create_index("IX_AspNetUserLogins_UserId", "AspNetUserLogins", ["UserId"])

    op.create_table(
        "AspNetUserRoles",
        sa.Column("UserId", sa.Text(), nullable=False),
        sa.Column("RoleId", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("UserId", "RoleId", name="PK_AspNetUserRoles"),
        sa.ForeignKeyConstraint(
            ["RoleId"], ["AspNetRoles.Id"], name="FK_AspNetUserRoles_AspNetRoles_RoleId", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["UserId"], ["AspNetUsers.Id"], name="FK_AspNetUserRoles_AspNetUsers_UserId", ondelete="CASCADE"
        ),
    )
    op.create_index("IX_AspNetUserRoles_RoleId", "AspNetUserRoles", ["RoleId"])

    op.create_table(
        "AspNetUserTokens",
        sa.Column("UserId", sa.Text(), nullable=False),
        sa.Column("LoginProvider", sa.Text(), nullable=False),
        sa.Column("Name", sa.Text(), nullable=False),
        sa.Column("Value", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("UserId", "LoginProvider", "Name", name="PK_AspNetUserTokens"),
        sa.ForeignKeyConstraint(
            ["UserId"], ["AspNetUsers.Id"], name="FK_AspNetUserTokens_AspNetUsers_UserId", ondelete="CASCADE"
        ),
    )

    # ---------------- locations ----------------
    op.create_table(
        "Locations",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("Building", sa.String(length=100), nullable=False),
        sa.Column("Floor", sa.String(length=50), nullable=True),
        sa.Column("Room", sa.String(length=100), nullable=False),
        sa.Column("Description", sa.String(length=500), nullable=True),
        sa.Column("IsActive", sa.Boolean(), nullable=False),
        _ts("CreatedDate", nullable=False, now=True),
        sa.PrimaryKeyConstraint("Id", name="PK_Locations"),
    )
    op.create_index(
        "IX_Locations_Building_Floor_Room", "Locations", ["Building", "Floor", "Room"], unique=True
    )

    # ---------------- assets ----------------
    # RowVersion is added in a later revision
    op.create_table(
        "Assets",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("AssetTag", sa.String(length=100), nullable=False),
        sa.Column("Category", sa.Integer(), nullable=False),
        sa.Column("Brand", sa.String(length=100), nullable=False),
        sa.Column("Model", sa.String(length=100), nullable=False),
        sa.Column("SerialNumber", sa.String(length=100), nullable=False),
        sa.Column("InternalSerialNumber", sa.String(length=50), nullable=False),
        sa.Column("QRCodeData", sa.String(length=200), nullable=False),
        sa.Column("DocumentPaths", sa.String(length=2000), nullable=True),
        sa.Column("ImagePaths", sa.String(length=2000), nullable=True),
        sa.Column("Description", sa.String(length=500), nullable=False),
        _ts("InstallationDate", nullable=False, now=True),
        _ts("CreatedDate", nullable=False, now=True),
        _ts("LastUpdated", nullable=False, now=True),
        sa.Column("Status", sa.Integer(), nullable=False),
        sa.Column("LocationId", sa.Integer(), nullable=True),
        sa.Column("AssignedToUserId", sa.Text(), nullable=True),
        sa.Column("ResponsiblePerson", sa.String(length=100), nullable=True),
        sa.Column("Department", sa.String(length=100), nullable=True),
        _ts("WarrantyExpiry"),
        sa.Column("Supplier", sa.String(length=100), nullable=True),
        sa.Column("PurchasePrice", sa.Numeric(18, 2), nullable=True),
        _ts("LastMaintenanceDate"),
        sa.Column("Notes", sa.String(length=1000), nullable=True),
        _ts("AcquisitionDate"),
        sa.PrimaryKeyConstraint("Id", name="PK_Assets"),
        sa.ForeignKeyConstraint(
            ["AssignedToUserId"],
            ["AspNetUsers.Id"],
            name="FK_Assets_AspNetUsers_AssignedToUserId",
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["LocationId"], ["Locations.Id"], name="FK_Assets_Locations_LocationId", ondelete="SET NULL"
        ),
    )
    op.create_index("IX_Assets_AssetTag", "Assets", ["AssetTag"], unique=True)
    op.create_index("IX_Assets_AssignedToUserId", "Assets", ["AssignedToUserId"])
    op.create_index("IX_Assets_LocationId", "Assets", ["LocationId"])
    op.create_index("IX_Assets_SerialNumber", "Assets", ["SerialNumber"])

    op.create_table(
        "AssetMovements",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("AssetId", sa.Integer(), nullable=False),
        sa.Column("MovementType", sa.Integer(), nullable=False),
        _ts("MovementDate", nullable=False, now=True),
        sa.Column("FromLocationId", sa.Integer(), nullable=True),
        sa.Column("FromUserId", sa.Text(), nullable=True),
        sa.Column("ToLocationId", sa.Integer(), nullable=True),
        sa.Column("ToUserId", sa.Text(), nullable=True),
        sa.Column("Reason", sa.String(length=500), nullable=True),
        sa.Column("Notes", sa.String(length=1000), nullable=True),
        sa.Column("PerformedByUserId", sa.Text(), nullable=False),
        _ts("CreatedDate", nullable=False, now=True),
        sa.PrimaryKeyConstraint("Id", name="PK_AssetMovements"),
        sa.ForeignKeyConstraint(
            ["AssetId"], ["Assets.Id"], name="FK_AssetMovements_Assets_AssetId", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["FromLocationId"],
            ["Locations.Id"],
            name="FK_AssetMovements_Locations_FromLocationId",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["FromUserId"], ["AspNetUsers.Id"], name="FK_AssetMovements_AspNetUsers_FromUserId", ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(
            ["PerformedByUserId"],
            ["AspNetUsers.Id"],
            name="FK_AssetMovements_AspNetUsers_PerformedByUserId",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["ToLocationId"],
            ["Locations.Id"],
            name="FK_AssetMovements_Locations_ToLocationId",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["ToUserId"], ["AspNetUsers.Id"], name="FK_AssetMovements_AspNetUsers_ToUserId", ondelete="RESTRICT"
        ),
    )
    op.create_index("IX_AssetMovements_AssetId", "AssetMovements", ["AssetId"])
    op.create_index("IX_AssetMovements_FromLocationId", "AssetMovements", ["FromLocationId"])
    op.create_index("IX_AssetMovements_FromUserId", "AssetMovements", ["FromUserId"])
    op.create_index("IX_AssetMovements_PerformedByUserId", "AssetMovements", ["PerformedByUserId"])
    op.create_index("IX_AssetMovements_ToLocationId", "AssetMovements", ["ToLocationId"])
    op.create_index("IX_AssetMovements_ToUserId", "AssetMovements", ["ToUserId"])

    # ---------------- audit ----------------
    op.create_table(
        "AuditLogs",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("Action", sa.Integer(), nullable=False),
        sa.Column("EntityType", sa.String(length=100), nullable=False),
        sa.Column("EntityId", sa.Integer(), nullable=True),
        sa.Column("UserId", sa.Text(), nullable=False),
        _ts("Timestamp", nullable=False, now=True),
        sa.Column("Description", sa.String(length=500), nullable=True),
        sa.Column("OldValues", sa.Text(), nullable=True),
        sa.Column("NewValues", sa.Text(), nullable=True),
        sa.Column("IpAddress", sa.String(length=45), nullable=True),
        sa.Column("UserAgent", sa.String(length=500), nullable=True),
        sa.Column("AssetId", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("Id", name="PK_AuditLogs"),
        sa.ForeignKeyConstraint(
            ["AssetId"], ["Assets.Id"], name="FK_AuditLogs_Assets_AssetId", ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(
            ["UserId"], ["AspNetUsers.Id"], name="FK_AuditLogs_AspNetUsers_UserId", ondelete="RESTRICT"
        ),
    )
    op.create_index("IX_AuditLogs_AssetId", "AuditLogs", ["AssetId"])
    op.create_index("IX_AuditLogs_EntityType_EntityId", "AuditLogs", ["EntityType", "EntityId"])
    op.create_index("IX_AuditLogs_Timestamp", "AuditLogs", ["Timestamp"])
    op.create_index("IX_AuditLogs_UserId", "AuditLogs", ["UserId"])

    # ---------------- maintenance ----------------
    op.create_table(
        "MaintenanceRecords",
        sa.Column("Id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("AssetId", sa.Integer(), nullable=False),
        sa.Column("MaintenanceType", sa.Integer(), nullable=False),
        sa.Column("Status", sa.Integer(), nullable=False),
        sa.Column("Title", sa.String(length=200), nullable=False),
        sa.Column("Description", sa.String(length=1000), nullable=True),
        _ts("ScheduledDate", nullable=False),
        _ts("MaintenanceDate", nullable=False),
        _ts("StartDate"),
        _ts("CompletedDate"),
        sa.Column("PerformedBy", sa.String(length=100), nullable=True),
        sa.Column("ServiceProvider", sa.String(length=100), nullable=True),
        sa.Column("Cost", sa.Numeric(18, 2), nullable=True),
        sa.Column("WorkPerformed", sa.String(length=1000), nullable=True),
        sa.Column("PartsUsed", sa.String(length=1000), nullable=True),
        sa.Column("Notes", sa.String(length=1000), nullable=True),
        _ts("NextMaintenanceDate"),
        sa.Column("CreatedByUserId", sa.Text(), nullable=False),
        _ts("CreatedDate", nullable=False, now=True),
        _ts("LastUpdated", nullable=False, now=True),
        sa.PrimaryKeyConstraint("Id", name="PK_MaintenanceRecords"),
        sa.ForeignKeyConstraint(
            ["AssetId"], ["Assets.Id"], name="FK_MaintenanceRecords_Assets_AssetId", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["CreatedByUserId"],
            ["AspNetUsers.Id"],
            name="FK_MaintenanceRecords_AspNetUsers_CreatedByUserId",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("IX_MaintenanceRecords_AssetId", "MaintenanceRecords", ["AssetId"])
    op.create_index("IX_MaintenanceRecords_CreatedByUserId", "MaintenanceRecords", ["CreatedByUserId"])


def downgrade() -> None:
    """Downgrade schema: drop everything created above, children first."""
    op.drop_index("IX_MaintenanceRecords_CreatedByUserId", table_name="MaintenanceRecords")
    op.drop_index("IX_MaintenanceRecords_AssetId", table_name="MaintenanceRecords")
    op.drop_table("MaintenanceRecords")

    op.drop_index("IX_AuditLogs_UserId", table_name="AuditLogs")
    op.drop_index("IX_AuditLogs_Timestamp", table_name="AuditLogs")
    op.drop_index("IX_AuditLogs_EntityType_EntityId", table_name="AuditLogs")
    op.drop_index("IX_AuditLogs_AssetId", table_name="AuditLogs")
    op.drop_table("AuditLogs")

    op.drop_index("IX_AssetMovements_ToUserId", table_name="AssetMovements")
    op.drop_index("IX_AssetMovements_ToLocationId", table_name="AssetMovements")
    op.drop_index("IX_AssetMovements_PerformedByUserId", table_name="AssetMovements")
    op.drop_index("IX_AssetMovements_FromUserId", table_name="AssetMovements")
    op.drop_index("IX_AssetMovements_FromLocationId", table_name="AssetMovements")
    op.drop_index("IX_AssetMovements_AssetId", table_name="AssetMovements")
    op.drop_table("AssetMovements")

    op.drop_index("IX_Assets_SerialNumber", table_name="Assets")
    op.drop_index("IX_Assets_LocationId", table_name="Assets")
    op.drop_index("IX_Assets_AssignedToUserId", table_name="Assets")
    op.drop_index("IX_Assets_AssetTag", table_name="Assets")
    op.drop_table("Assets")

    op.drop_index("IX_Locations_Building_Floor_Room", table_name="Locations")
    op.drop_table("Locations")

    op.drop_table("AspNetUserTokens")
    op.drop_index("IX_AspNetUserRoles_RoleId", table_name="AspNetUserRoles")
    op.drop_table("AspNetUserRoles")
    op.drop_index("IX_AspNetUserLogins_UserId", table_name="AspNetUserLogins")
    op.drop_table("AspNetUserLogins")
    op.drop_index("IX_AspNetUserClaims_UserId", table_name="AspNetUserClaims")
    op.drop_table("AspNetUserClaims")
    op.drop_index("IX_AspNetRoleClaims_RoleId", table_name="AspNetRoleClaims")
    op.drop_table("AspNetRoleClaims")

    op.drop_index("UserNameIndex", table_name="AspNetUsers")
    op.drop_index("EmailIndex", table_name="AspNetUsers")
    op.drop_table("AspNetUsers")
    op.drop_index("RoleNameIndex", table_name="AspNetRoles")
    op.drop_table("AspNetRoles")
