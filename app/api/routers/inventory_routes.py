# app/api/routers/inventory_routes.py
from __future__ import annotations

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import current_user_id, get_session
from app.api.routers.inventory_helpers import item_out
from app.api.routers.inventory_schemas import (
    AssetMappingOut,
    DeployIn,
    InventoryItemCreateIn,
    InventoryItemOut,
    InventoryMovementOut,
    InventoryTransactionOut,
    QualityAssessmentIn,
    QualityAssessmentOut,
    ReservationIn,
    ReturnIn,
    StockAdjustIn,
    StockAlertOut,
    StockInIn,
    StockQtyIn,
    StockTransferIn,
)
from app.services.errors import NotFoundError
from app.services.inventory_service import InventoryService


def register(router: APIRouter) -> None:
    # ---------------------------
    # queries
    # ---------------------------

    @router.get("", response_model=List[InventoryItemOut])
    async def list_items(
        q: Optional[str] = Query(None, description="code / name / brand / model / part number"),
        category: Optional[int] = Query(None, ge=0),
        location_id: Optional[int] = Query(None, ge=1),
        limit: int = Query(100, ge=1, le=500),
        offset: int = Query(0, ge=0),
        session: AsyncSession = Depends(get_session),
    ):
        rows = await InventoryService(session).search(
            q, category=category, location_id=location_id, limit=limit, offset=offset
        )
        return [item_out(r) for r in rows]

    @router.get("/alerts", response_model=List[StockAlertOut])
    async def stock_alerts(session: AsyncSession = Depends(get_session)):
        return [StockAlertOut(**asdict(a)) for a in await InventoryService(session).stock_level_alerts()]

    @router.get("/mappings", response_model=List[AssetMappingOut])
    async def asset_mappings(
        asset_id: int = Query(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        rows = await InventoryService(session).mappings_for_asset(asset_id)
        return [AssetMappingOut.model_validate(r) for r in rows]

    @router.get("/by-code/{item_code}", response_model=InventoryItemOut)
    async def get_item_by_code(
        item_code: str = Path(..., min_length=1),
        session: AsyncSession = Depends(get_session),
    ):
        obj = await InventoryService(session).get_by_code(item_code)
        if obj is None:
            raise NotFoundError(f"inventory item {item_code} not found")
        return item_out(obj)

    @router.get("/{item_id}", response_model=InventoryItemOut)
    async def get_item(
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        return item_out(await InventoryService(session).get(item_id))

    @router.get("/{item_id}/movements", response_model=List[InventoryMovementOut])
    async def item_movements(
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        svc = InventoryService(session)
        await svc.get(item_id)
        return [InventoryMovementOut.model_validate(m) for m in await svc.movements(item_id)]

    @router.get("/{item_id}/transactions", response_model=List[InventoryTransactionOut])
    async def item_transactions(
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        svc = InventoryService(session)
        await svc.get(item_id)
        return [InventoryTransactionOut.model_validate(t) for t in await svc.transactions(item_id)]

    # ---------------------------
    # stock operations
    # ---------------------------

    @router.post("", response_model=InventoryItemOut, status_code=status.HTTP_201_CREATED)
    async def create_item(
        payload: InventoryItemCreateIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await InventoryService(session).create_item(user_id=user_id, **payload.model_dump())
        return item_out(obj)

    @router.post("/{item_id}/stock-in", response_model=InventoryItemOut)
    async def stock_in(
        payload: StockInIn,
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        data = payload.model_dump()
        quantity = data.pop("quantity")
        obj = await InventoryService(session).stock_in(item_id, quantity, user_id=user_id, **data)
        return item_out(obj)

    @router.post("/{item_id}/stock-out", response_model=InventoryItemOut)
    async def stock_out(
        payload: StockQtyIn,
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await InventoryService(session).stock_out(
            item_id, payload.quantity, user_id=user_id, reason=payload.reason
        )
        return item_out(obj)

    @router.post("/{item_id}/adjust", response_model=InventoryItemOut)
    async def adjust_stock(
        payload: StockAdjustIn,
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await InventoryService(session).adjust_stock(
            item_id, payload.delta, user_id=user_id, reason=payload.reason
        )
        return item_out(obj)

    @router.post("/{item_id}/transfer", response_model=InventoryMovementOut, status_code=status.HTTP_201_CREATED)
    async def transfer_stock(
        payload: StockTransferIn,
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        data = payload.model_dump()
        quantity = data.pop("quantity")
        mv = await InventoryService(session).transfer(item_id, quantity, user_id=user_id, **data)
        return InventoryMovementOut.model_validate(mv)

    @router.post("/{item_id}/reserve", response_model=InventoryItemOut)
    async def reserve_stock(
        payload: ReservationIn,
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await InventoryService(session).reserve(
            item_id, payload.quantity, user_id=user_id, reason=payload.reason, reference=payload.reference
        )
        return item_out(obj)

    @router.post("/{item_id}/release", response_model=InventoryItemOut)
    async def release_stock(
        payload: ReservationIn,
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await InventoryService(session).release_reservation(
            item_id, payload.quantity, user_id=user_id, reason=payload.reason, reference=payload.reference
        )
        return item_out(obj)

    # ---------------------------
    # asset deployment / quality
    # ---------------------------

    @router.post("/{item_id}/deploy", response_model=AssetMappingOut, status_code=status.HTTP_201_CREATED)
    async def deploy_to_asset(
        payload: DeployIn,
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        mapping = await InventoryService(session).deploy_to_asset(
            payload.asset_id,
            item_id,
            payload.quantity,
            user_id=user_id,
            reason=payload.reason,
            serial_number=payload.serial_number,
        )
        return AssetMappingOut.model_validate(mapping)

    @router.post("/{item_id}/return", response_model=AssetMappingOut)
    async def return_from_asset(
        payload: ReturnIn,
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        mapping = await InventoryService(session).return_from_asset(
            payload.asset_id, item_id, payload.quantity, user_id=user_id, reason=payload.reason
        )
        return AssetMappingOut.model_validate(mapping)

    @router.post(
        "/{item_id}/quality-assessments",
        response_model=QualityAssessmentOut,
        status_code=status.HTTP_201_CREATED,
    )
    async def record_quality_assessment(
        payload: QualityAssessmentIn,
        item_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        rec = await InventoryService(session).record_quality_assessment(
            item_id, user_id=user_id, **payload.model_dump()
        )
        return QualityAssessmentOut.model_validate(rec)
