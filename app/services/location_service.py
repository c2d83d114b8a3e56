# app/services/location_service.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.asset import Asset
from app.models.enums import AuditAction
from app.models.inventory import InventoryItem
from app.models.location import Location
from app.services.audit_service import AuditService
from app.services.errors import ConflictError, NotFoundError, flush_or_conflict

logger = logging.getLogger("hat.locations")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    v = value.strip()
    return v or None


class LocationService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.audit = AuditService(session)

    async def get(self, location_id: int) -> Location:
        obj = await self.session.get(Location, int(location_id))
        if obj is None:
            raise NotFoundError(f"location {location_id} not found")
        return obj

    async def list_locations(self, *, active_only: bool = False) -> List[Location]:
        stmt = select(Location)
        if active_only:
            stmt = stmt.where(Location.is_active.is_(True))
        stmt = stmt.order_by(Location.building, Location.floor, Location.room)
        return list((await self.session.execute(stmt)).scalars())

    async def find(self, building: str, floor: Optional[str], room: str) -> Optional[Location]:
        stmt = select(Location).where(
            Location.building == building,
            Location.room == room,
            Location.floor.is_(None) if floor is None else Location.floor == floor,
        )
        return (await self.session.execute(stmt)).scalars().first()

    async def get_or_create(
        self,
        *,
        building: str,
        room: str,
        floor: Optional[str] = None,
        description: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Location:
        """
        Find the (building, floor, room) triple or create it.

        Calling twice with the same triple returns the same row.
        """
        b = _clean(building)
        r = _clean(room)
        if not b or not r:
            raise ValueError("building and room are required")
        f = _clean(floor)

        existing = await self.find(b, f, r)
        if existing is not None:
            return existing

        obj = Location(building=b, floor=f, room=r, description=_clean(description), is_active=True)
        self.session.add(obj)
        await flush_or_conflict(self.session)

        if user_id:
            await self.audit.log(
                AuditAction.CREATE, "Location", obj.id, user_id, f"Created location {obj.full_location}"
            )
        logger.info("location created id=%s %s", obj.id, obj.full_location)
        return obj

    async def set_active(self, location_id: int, active: bool, *, user_id: Optional[str] = None) -> Location:
        obj = await self.get(location_id)
        if obj.is_active != bool(active):
            obj.is_active = bool(active)
            await flush_or_conflict(self.session)
            if user_id:
                verb = "Activated" if active else "Deactivated"
                await self.audit.log(
                    AuditAction.UPDATE, "Location", obj.id, user_id, f"{verb} location {obj.full_location}"
                )
        return obj

    async def is_in_use(self, location_id: int) -> bool:
        asset_hit = await self.session.execute(
            select(Asset.id).where(Asset.location_id == location_id).limit(1)
        )
        if asset_hit.first() is not None:
            return True
        item_hit = await self.session.execute(
            select(InventoryItem.id).where(InventoryItem.location_id == location_id).limit(1)
        )
        return item_hit.first() is not None

    async def delete(self, location_id: int, *, user_id: Optional[str] = None) -> None:
        obj = await self.get(location_id)
        if await self.is_in_use(obj.id):
            raise ConflictError(f"location {obj.full_location} is in use")
        label = obj.full_location
        await self.session.delete(obj)
        await flush_or_conflict(self.session)
        if user_id:
            await self.audit.log(AuditAction.DELETE, "Location", location_id, user_id, f"Deleted location {label}")
