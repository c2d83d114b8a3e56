# app/models/location.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Identity, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Location(Base):
    """
    Locations: building / floor / room.

    The (Building, Floor, Room) triple is unique; Floor is optional.
    """

    __tablename__ = "Locations"
    __table_args__ = (
        Index("IX_Locations_Building_Floor_Room", "Building", "Floor", "Room", unique=True),
    )

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)

    building: Mapped[str] = mapped_column("Building", String(100), nullable=False)
    floor: Mapped[Optional[str]] = mapped_column("Floor", String(50), nullable=True)
    room: Mapped[str] = mapped_column("Room", String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column("Description", String(500), nullable=True)

    is_active: Mapped[bool] = mapped_column("IsActive", Boolean, nullable=False, default=True)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    @property
    def full_location(self) -> str:
        parts = [self.building, self.floor, self.room]
        return " - ".join(p for p in parts if p)
