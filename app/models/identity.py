# app/models/identity.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Identity,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Role(Base):
    """AspNetRoles: text ids, normalized name is unique (RoleNameIndex)"""

    __tablename__ = "AspNetRoles"
    __table_args__ = (Index("RoleNameIndex", "NormalizedName", unique=True),)

    id: Mapped[str] = mapped_column("Id", Text, primary_key=True)
    name: Mapped[Optional[str]] = mapped_column("Name", String(256), nullable=True)
    normalized_name: Mapped[Optional[str]] = mapped_column("NormalizedName", String(256), nullable=True)
    concurrency_stamp: Mapped[Optional[str]] = mapped_column("ConcurrencyStamp", Text, nullable=True)


class User(Base):
    """
    AspNetUsers: framework identity columns plus the hospital profile
    (FirstName / LastName / Department / JobTitle / IsActive).
    """

    __tablename__ = "AspNetUsers"
    __table_args__ = (
        Index("EmailIndex", "NormalizedEmail"),
        Index("UserNameIndex", "NormalizedUserName", unique=True),
    )

    id: Mapped[str] = mapped_column("Id", Text, primary_key=True)

    first_name: Mapped[str] = mapped_column("FirstName", String(100), nullable=False)
    last_name: Mapped[str] = mapped_column("LastName", String(100), nullable=False)
    department: Mapped[Optional[str]] = mapped_column("Department", String(100), nullable=True)
    job_title: Mapped[Optional[str]] = mapped_column("JobTitle", String(100), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column("PhoneNumber", String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column("IsActive", Boolean, nullable=False, default=True)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    user_name: Mapped[Optional[str]] = mapped_column("UserName", String(256), nullable=True)
    normalized_user_name: Mapped[Optional[str]] = mapped_column("NormalizedUserName", String(256), nullable=True)
    email: Mapped[Optional[str]] = mapped_column("Email", String(256), nullable=True)
    normalized_email: Mapped[Optional[str]] = mapped_column("NormalizedEmail", String(256), nullable=True)
    email_confirmed: Mapped[bool] = mapped_column("EmailConfirmed", Boolean, nullable=False, default=False)
    password_hash: Mapped[Optional[str]] = mapped_column("PasswordHash", Text, nullable=True)
    security_stamp: Mapped[Optional[str]] = mapped_column("SecurityStamp", Text, nullable=True)
    concurrency_stamp: Mapped[Optional[str]] = mapped_column("ConcurrencyStamp", Text, nullable=True)
    phone_number_confirmed: Mapped[bool] = mapped_column(
        "PhoneNumberConfirmed", Boolean, nullable=False, default=False
    )
    two_factor_enabled: Mapped[bool] = mapped_column("TwoFactorEnabled", Boolean, nullable=False, default=False)
    lockout_end: Mapped[Optional[datetime]] = mapped_column("LockoutEnd", DateTime(timezone=True), nullable=True)
    lockout_enabled: Mapped[bool] = mapped_column("LockoutEnabled", Boolean, nullable=False, default=False)
    access_failed_count: Mapped[int] = mapped_column("AccessFailedCount", Integer, nullable=False, default=0)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class RoleClaim(Base):
    __tablename__ = "AspNetRoleClaims"
    __table_args__ = (Index("IX_AspNetRoleClaims_RoleId", "RoleId"),)

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    role_id: Mapped[str] = mapped_column(
        "RoleId",
        Text,
        ForeignKey("AspNetRoles.Id", ondelete="CASCADE", name="FK_AspNetRoleClaims_AspNetRoles_RoleId"),
        nullable=False,
    )
    claim_type: Mapped[Optional[str]] = mapped_column("ClaimType", Text, nullable=True)
    claim_value: Mapped[Optional[str]] = mapped_column("ClaimValue", Text, nullable=True)


class UserClaim(Base):
    __tablename__ = "AspNetUserClaims"
    __table_args__ = (Index("IX_AspNetUserClaims_UserId", "UserId"),)

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        "UserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="CASCADE", name="FK_AspNetUserClaims_AspNetUsers_UserId"),
        nullable=False,
    )
    claim_type: Mapped[Optional[str]] = mapped_column("ClaimType", Text, nullable=True)
    claim_value: Mapped[Optional[str]] = mapped_column("ClaimValue", Text, nullable=True)


class UserLogin(Base):
    __tablename__ = "AspNetUserLogins"
    __table_args__ = (Index("IX_AspNetUserLogins_UserId", "UserId"),)

    login_provider: Mapped[str] = mapped_column("LoginProvider", Text, primary_key=True)
    provider_key: Mapped[str] = mapped_column("ProviderKey", Text, primary_key=True)
    provider_display_name: Mapped[Optional[str]] = mapped_column("ProviderDisplayName", Text, nullable=True)
    user_id: Mapped[str] = mapped_column(
        "UserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="CASCADE", name="FK_AspNetUserLogins_AspNetUsers_UserId"),
        nullable=False,
    )


class UserRole(Base):
    __tablename__ = "AspNetUserRoles"
    __table_args__ = (Index("IX_AspNetUserRoles_RoleId", "RoleId"),)

    user_id: Mapped[str] = mapped_column(
        "UserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="CASCADE", name="FK_AspNetUserRoles_AspNetUsers_UserId"),
        primary_key=True,
    )
    role_id: Mapped[str] = mapped_column(
        "RoleId",
        Text,
        ForeignKey("AspNetRoles.Id", ondelete="CASCADE", name="FK_AspNetUserRoles_AspNetRoles_RoleId"),
        primary_key=True,
    )

    role: Mapped[Role] = relationship("Role", lazy="selectin")


class UserToken(Base):
    __tablename__ = "AspNetUserTokens"

    user_id: Mapped[str] = mapped_column(
        "UserId",
        Text,
        ForeignKey("AspNetUsers.Id", ondelete="CASCADE", name="FK_AspNetUserTokens_AspNetUsers_UserId"),
        primary_key=True,
    )
    login_provider: Mapped[str] = mapped_column("LoginProvider", Text, primary_key=True)
    name: Mapped[str] = mapped_column("Name", Text, primary_key=True)
    value: Mapped[Optional[str]] = mapped_column("Value", Text, nullable=True)
