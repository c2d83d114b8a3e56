# app/api/routers/locations_routes.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import current_user_id, get_session
from app.api.routers.locations_schemas import LocationActiveIn, LocationCreateIn, LocationOut
from app.services.location_service import LocationService


def register(router: APIRouter) -> None:
    @router.get("", response_model=List[LocationOut])
    async def list_locations(
        active_only: bool = Query(False, description="only locations still in use for new assets"),
        session: AsyncSession = Depends(get_session),
    ):
        rows = await LocationService(session).list_locations(active_only=active_only)
        return [LocationOut.model_validate(r) for r in rows]

    @router.post("", response_model=LocationOut, status_code=status.HTTP_201_CREATED)
    async def create_location(
        payload: LocationCreateIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        # same (building, floor, room) returns the existing row
        obj = await LocationService(session).get_or_create(
            building=payload.building,
            floor=payload.floor,
            room=payload.room,
            description=payload.description,
            user_id=user_id,
        )
        return LocationOut.model_validate(obj)

    @router.get("/{location_id}", response_model=LocationOut)
    async def get_location(
        location_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        return LocationOut.model_validate(await LocationService(session).get(location_id))

    @router.patch("/{location_id}/active", response_model=LocationOut)
    async def set_location_active(
        payload: LocationActiveIn,
        location_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await LocationService(session).set_active(location_id, payload.is_active, user_id=user_id)
        return LocationOut.model_validate(obj)

    @router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_location(
        location_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        await LocationService(session).delete(location_id, user_id=user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
