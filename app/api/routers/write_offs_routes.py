# app/api/routers/write_offs_routes.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import current_user_id, get_session
from app.api.routers.write_offs_helpers import write_off_out
from app.api.routers.write_offs_schemas import (
    WriteOffNotesIn,
    WriteOffOut,
    WriteOffProcessIn,
    WriteOffReasonIn,
    WriteOffSubmitIn,
    WriteOffSummaryOut,
)
from app.services.write_off_service import WriteOffService


def register(router: APIRouter) -> None:
    @router.get("", response_model=List[WriteOffOut])
    async def list_write_offs(
        status_: Optional[int] = Query(None, alias="status", ge=0),
        asset_id: Optional[int] = Query(None, ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        svc = WriteOffService(session)
        if asset_id is not None:
            rows = await svc.for_asset(asset_id)
        else:
            rows = await svc.list_records(status=status_)
        return [write_off_out(r) for r in rows]

    @router.get("/summary", response_model=WriteOffSummaryOut)
    async def write_off_summary(
        date_from: Optional[datetime] = Query(None),
        date_to: Optional[datetime] = Query(None),
        session: AsyncSession = Depends(get_session),
    ):
        data = await WriteOffService(session).summary(date_from=date_from, date_to=date_to)
        return WriteOffSummaryOut(**data)

    @router.get("/{record_id}", response_model=WriteOffOut)
    async def get_write_off(
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        return write_off_out(await WriteOffService(session).get(record_id))

    @router.post("", response_model=WriteOffOut, status_code=status.HTTP_201_CREATED)
    async def submit_write_off(
        payload: WriteOffSubmitIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        data = payload.model_dump()
        asset_id = data.pop("asset_id")
        obj = await WriteOffService(session).submit(asset_id, user_id=user_id, **data)
        return write_off_out(obj)

    @router.post("/{record_id}/review", response_model=WriteOffOut)
    async def review_write_off(
        payload: WriteOffNotesIn,
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await WriteOffService(session).review(record_id, user_id=user_id, notes=payload.notes)
        return write_off_out(obj)

    @router.post("/{record_id}/approve", response_model=WriteOffOut)
    async def approve_write_off(
        payload: WriteOffNotesIn,
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await WriteOffService(session).approve(record_id, user_id=user_id, notes=payload.notes)
        return write_off_out(obj)

    @router.post("/{record_id}/reject", response_model=WriteOffOut)
    async def reject_write_off(
        payload: WriteOffReasonIn,
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        if not (payload.reason or "").strip():
            raise HTTPException(status_code=422, detail="reason is required")
        obj = await WriteOffService(session).reject(record_id, user_id=user_id, reason=payload.reason)
        return write_off_out(obj)

    @router.post("/{record_id}/process", response_model=WriteOffOut)
    async def process_write_off(
        payload: WriteOffProcessIn,
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await WriteOffService(session).process(record_id, user_id=user_id, **payload.model_dump())
        return write_off_out(obj)

    @router.post("/{record_id}/cancel", response_model=WriteOffOut)
    async def cancel_write_off(
        payload: WriteOffReasonIn,
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await WriteOffService(session).cancel(record_id, user_id=user_id, reason=payload.reason)
        return write_off_out(obj)

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_write_off(
        record_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        await WriteOffService(session).delete(record_id, user_id=user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
