# app/api/routers/maintenance_routes.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import current_user_id, get_session
from app.api.routers.maintenance_helpers import maintenance_out
from app.api.routers.maintenance_schemas import (
    MaintenanceCompleteIn,
    MaintenanceOut,
    MaintenanceReasonIn,
    MaintenanceScheduleIn,
    MaintenanceStartIn,
)
from app.services.maintenance_service import MaintenanceService


def register(router: APIRouter) -> None:
    @router.get("", response_model=List[MaintenanceOut])
    async def list_maintenance(
        asset_id: Optional[int] = Query(None, ge=1, description="history of one asset"),
        until: Optional[datetime] = Query(None, description="scheduled jobs due on or before"),
        session: AsyncSession = Depends(get_session),
    ):
        svc = MaintenanceService(session)
        if asset_id is not None:
            rows = await svc.for_asset(asset_id)
        else:
            rows = await svc.upcoming(until=until)
        return [maintenance_out(r) for r in rows]

    @router.get("/{record_id}", response_model=MaintenanceOut)
    async def get_maintenance(
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        return maintenance_out(await MaintenanceService(session).get(record_id))

    @router.post("", response_model=MaintenanceOut, status_code=status.HTTP_201_CREATED)
    async def schedule_maintenance(
        payload: MaintenanceScheduleIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        data = payload.model_dump()
        asset_id = data.pop("asset_id")
        obj = await MaintenanceService(session).schedule(asset_id, user_id=user_id, **data)
        return maintenance_out(obj)

    @router.post("/{record_id}/start", response_model=MaintenanceOut)
    async def start_maintenance(
        payload: MaintenanceStartIn,
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await MaintenanceService(session).start(record_id, user_id=user_id, performed_by=payload.performed_by)
        return maintenance_out(obj)

    @router.post("/{record_id}/complete", response_model=MaintenanceOut)
    async def complete_maintenance(
        payload: MaintenanceCompleteIn,
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await MaintenanceService(session).complete(record_id, user_id=user_id, **payload.model_dump())
        return maintenance_out(obj)

    @router.post("/{record_id}/cancel", response_model=MaintenanceOut)
    async def cancel_maintenance(
        payload: MaintenanceReasonIn,
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await MaintenanceService(session).cancel(record_id, user_id=user_id, reason=payload.reason)
        return maintenance_out(obj)

    @router.post("/{record_id}/fail", response_model=MaintenanceOut)
    async def fail_maintenance(
        payload: MaintenanceReasonIn,
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        if not (payload.reason or "").strip():
            raise HTTPException(status_code=422, detail="reason is required")
        obj = await MaintenanceService(session).fail(record_id, user_id=user_id, reason=payload.reason)
        return maintenance_out(obj)
