# app/api/routers/assets_routes.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import current_user_id, get_session
from app.api.routers.assets_helpers import asset_out, movement_out
from app.api.routers.assets_schemas import (
    AssetAssignIn,
    AssetCreateIn,
    AssetDecommissionIn,
    AssetMoveIn,
    AssetMovementOut,
    AssetOut,
    AssetPathIn,
    AssetStatusIn,
    AssetUpdateIn,
)
from app.services.asset_service import AssetService
from app.services.errors import NotFoundError


def register(router: APIRouter) -> None:
    # ---------------------------
    # queries
    # ---------------------------

    @router.get("", response_model=List[AssetOut])
    async def list_assets(
        q: Optional[str] = Query(None, description="tag / brand / model / serial / description"),
        status_: Optional[int] = Query(None, alias="status", ge=0),
        category: Optional[int] = Query(None, ge=0),
        location_id: Optional[int] = Query(None, ge=1),
        limit: int = Query(100, ge=1, le=500),
        offset: int = Query(0, ge=0),
        session: AsyncSession = Depends(get_session),
    ):
        rows = await AssetService(session).search(
            q, status=status_, category=category, location_id=location_id, limit=limit, offset=offset
        )
        return [asset_out(a) for a in rows]

    @router.get("/maintenance-due", response_model=List[AssetOut])
    async def assets_maintenance_due(session: AsyncSession = Depends(get_session)):
        return [asset_out(a) for a in await AssetService(session).assets_needing_maintenance()]

    @router.get("/warranty-expired", response_model=List[AssetOut])
    async def assets_warranty_expired(session: AsyncSession = Depends(get_session)):
        return [asset_out(a) for a in await AssetService(session).expired_warranty_assets()]

    @router.get("/by-tag/{asset_tag}", response_model=AssetOut)
    async def get_asset_by_tag(
        asset_tag: str = Path(..., min_length=1),
        session: AsyncSession = Depends(get_session),
    ):
        obj = await AssetService(session).get_by_tag(asset_tag)
        if obj is None:
            raise NotFoundError(f"asset {asset_tag} not found")
        return asset_out(obj)

    @router.get("/{asset_id}", response_model=AssetOut)
    async def get_asset(
        asset_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        return asset_out(await AssetService(session).get(asset_id))

    @router.get("/{asset_id}/movements", response_model=List[AssetMovementOut])
    async def list_asset_movements(
        asset_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        svc = AssetService(session)
        await svc.get(asset_id)
        return [movement_out(m) for m in await svc.movements(asset_id)]

    # ---------------------------
    # writes
    # ---------------------------

    @router.post("", response_model=AssetOut, status_code=status.HTTP_201_CREATED)
    async def register_asset(
        payload: AssetCreateIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await AssetService(session).register_asset(user_id=user_id, **payload.model_dump())
        return asset_out(obj)

    @router.patch("/{asset_id}", response_model=AssetOut)
    async def update_asset(
        payload: AssetUpdateIn,
        asset_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        changes = payload.model_dump(exclude_unset=True)
        obj = await AssetService(session).update_asset(asset_id, changes, user_id=user_id)
        return asset_out(obj)

    @router.post("/{asset_id}/move", response_model=AssetMovementOut, status_code=status.HTTP_201_CREATED)
    async def move_asset(
        payload: AssetMoveIn,
        asset_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        mv = await AssetService(session).move_asset(
            asset_id,
            to_location_id=payload.to_location_id,
            to_user_id=payload.to_user_id,
            reason=payload.reason,
            performed_by=user_id,
            notes=payload.notes,
        )
        return movement_out(mv)

    @router.post("/{asset_id}/status", response_model=AssetOut)
    async def change_asset_status(
        payload: AssetStatusIn,
        asset_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await AssetService(session).change_status(
            asset_id, payload.status, reason=payload.reason, user_id=user_id
        )
        return asset_out(obj)

    @router.post("/{asset_id}/assignee", response_model=AssetOut)
    async def assign_asset(
        payload: AssetAssignIn,
        asset_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await AssetService(session).assign(asset_id, payload.assignee_id, user_id=user_id)
        return asset_out(obj)

    @router.delete("/{asset_id}/assignee", response_model=AssetOut)
    async def unassign_asset(
        asset_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        return asset_out(await AssetService(session).unassign(asset_id, user_id=user_id))

    @router.post("/{asset_id}/decommission", response_model=AssetOut)
    async def decommission_asset(
        payload: AssetDecommissionIn,
        asset_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await AssetService(session).decommission_asset(asset_id, reason=payload.reason, user_id=user_id)
        return asset_out(obj)

    # ---------------------------
    # documents / images
    # ---------------------------

    @router.post("/{asset_id}/documents", response_model=List[str])
    async def attach_asset_document(
        payload: AssetPathIn,
        asset_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        return await AssetService(session).attach_document(asset_id, payload.path, user_id=user_id)

    @router.delete("/{asset_id}/documents", response_model=List[str])
    async def remove_asset_document(
        asset_id: int = Path(..., ge=1),
        path: str = Query(..., min_length=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        return await AssetService(session).remove_document(asset_id, path, user_id=user_id)

    @router.post("/{asset_id}/images", response_model=List[str])
    async def attach_asset_image(
        payload: AssetPathIn,
        asset_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        return await AssetService(session).attach_image(asset_id, payload.path, user_id=user_id)

    @router.delete("/{asset_id}/images", response_model=List[str])
    async def remove_asset_image(
        asset_id: int = Path(..., ge=1),
        path: str = Query(..., min_length=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        return await AssetService(session).remove_image(asset_id, path, user_id=user_id)
