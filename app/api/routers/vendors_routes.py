# app/api/routers/vendors_routes.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import current_user_id, get_session
from app.api.routers.vendors_helpers import vendor_out
from app.api.routers.vendors_schemas import VendorCreateIn, VendorOut, VendorStatusIn
from app.services.procurement_service import ProcurementService


def register(router: APIRouter) -> None:
    @router.get("", response_model=List[VendorOut])
    async def list_vendors(
        approved_only: bool = Query(False, description="only vendors that can receive quotes"),
        session: AsyncSession = Depends(get_session),
    ):
        rows = await ProcurementService(session).list_vendors(approved_only=approved_only)
        return [vendor_out(v) for v in rows]

    @router.get("/{vendor_id}", response_model=VendorOut)
    async def get_vendor(
        vendor_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        return vendor_out(await ProcurementService(session).get_vendor(vendor_id))

    @router.post("", response_model=VendorOut, status_code=status.HTTP_201_CREATED)
    async def create_vendor(
        payload: VendorCreateIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        v = await ProcurementService(session).create_vendor(user_id=user_id, **payload.model_dump())
        return vendor_out(v)

    @router.post("/{vendor_id}/approve", response_model=VendorOut)
    async def approve_vendor(
        vendor_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        return vendor_out(await ProcurementService(session).approve_vendor(vendor_id, user_id=user_id))

    @router.post("/{vendor_id}/status", response_model=VendorOut)
    async def set_vendor_status(
        payload: VendorStatusIn,
        vendor_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        v = await ProcurementService(session).set_vendor_status(vendor_id, payload.status, user_id=user_id)
        return vendor_out(v)
