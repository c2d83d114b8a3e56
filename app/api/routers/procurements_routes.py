# app/api/routers/procurements_routes.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import current_user_id, get_session
from app.api.routers.procurements_helpers import procurement_out
from app.api.routers.procurements_schemas import (
    ActivityOut,
    CancelIn,
    CompleteIn,
    DecisionIn,
    DocumentIn,
    DocumentOut,
    FromAssetIn,
    FromInventoryIn,
    FromRequestIn,
    PlaceOrderIn,
    ProcurementCreateIn,
    ProcurementOut,
    QuoteCreateIn,
    QuoteOut,
    ReceiveIn,
    ReceiveOut,
    SelectQuoteIn,
    SubmitIn,
)
from app.services.procurement_service import ItemLine, ProcurementService, QuoteLine


def register(router: APIRouter) -> None:
    # ---------------------------
    # queries
    # ---------------------------

    @router.get("", response_model=List[ProcurementOut])
    async def list_procurements(
        status_: Optional[int] = Query(None, alias="status", ge=0),
        limit: int = Query(100, ge=1, le=500),
        offset: int = Query(0, ge=0),
        session: AsyncSession = Depends(get_session),
    ):
        rows = await ProcurementService(session).list_procurements(status=status_, limit=limit, offset=offset)
        return [procurement_out(p) for p in rows]

    @router.get("/{procurement_id}", response_model=ProcurementOut)
    async def get_procurement(
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        return procurement_out(await ProcurementService(session).get(procurement_id))

    @router.get("/{procurement_id}/activities", response_model=List[ActivityOut])
    async def procurement_activities(
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        svc = ProcurementService(session)
        await svc.get(procurement_id)
        return [ActivityOut.model_validate(a) for a in await svc.activities(procurement_id)]

    @router.get("/{procurement_id}/quotes", response_model=List[QuoteOut])
    async def procurement_quotes(
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        svc = ProcurementService(session)
        await svc.get(procurement_id)
        return [QuoteOut.model_validate(q) for q in await svc.quotes(procurement_id)]

    # ---------------------------
    # creation
    # ---------------------------

    @router.post("", response_model=ProcurementOut, status_code=status.HTTP_201_CREATED)
    async def create_procurement(
        payload: ProcurementCreateIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        data = payload.model_dump(exclude={"items"})
        items = [ItemLine(**ln.model_dump()) for ln in payload.items]
        obj = await ProcurementService(session).create_procurement(user_id=user_id, items=items, **data)
        return procurement_out(obj)

    @router.post("/from-request", response_model=ProcurementOut, status_code=status.HTTP_201_CREATED)
    async def create_from_request(
        payload: FromRequestIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await ProcurementService(session).create_from_request(payload.request_id, user_id=user_id)
        return procurement_out(obj)

    @router.post("/from-inventory", response_model=ProcurementOut, status_code=status.HTTP_201_CREATED)
    async def create_from_inventory(
        payload: FromInventoryIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await ProcurementService(session).create_from_inventory_trigger(
            payload.inventory_item_id, user_id=user_id, department=payload.department
        )
        return procurement_out(obj)

    @router.post("/from-asset", response_model=ProcurementOut, status_code=status.HTTP_201_CREATED)
    async def create_from_asset(
        payload: FromAssetIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await ProcurementService(session).create_from_asset_replacement(
            payload.asset_id, user_id=user_id, department=payload.department
        )
        return procurement_out(obj)

    # ---------------------------
    # approval
    # ---------------------------

    @router.post("/{procurement_id}/submit", response_model=ProcurementOut)
    async def submit_procurement(
        payload: SubmitIn,
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        approvers = {a.level: a.approver_id for a in payload.approvers}
        obj = await ProcurementService(session).submit_for_approval(
            procurement_id, user_id=user_id, approvers=approvers
        )
        return procurement_out(obj)

    @router.post("/{procurement_id}/decision", response_model=ProcurementOut)
    async def decide_procurement(
        payload: DecisionIn,
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await ProcurementService(session).decide_approval(
            procurement_id,
            approve=payload.approve,
            user_id=user_id,
            comments=payload.comments,
            approved_amount=payload.approved_amount,
        )
        return procurement_out(obj)

    # ---------------------------
    # quotes / order / delivery
    # ---------------------------

    @router.post("/{procurement_id}/quotes", response_model=QuoteOut, status_code=status.HTTP_201_CREATED)
    async def add_quote(
        payload: QuoteCreateIn,
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        data = payload.model_dump(exclude={"vendor_id", "lines"})
        lines = [QuoteLine(**ln.model_dump()) for ln in payload.lines]
        quote = await ProcurementService(session).add_vendor_quote(
            procurement_id, payload.vendor_id, user_id=user_id, lines=lines, **data
        )
        return QuoteOut.model_validate(quote)

    @router.post("/{procurement_id}/select-quote", response_model=ProcurementOut)
    async def select_quote(
        payload: SelectQuoteIn,
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await ProcurementService(session).select_quote(procurement_id, payload.quote_id, user_id=user_id)
        return procurement_out(obj)

    @router.post("/{procurement_id}/order", response_model=ProcurementOut)
    async def place_order(
        payload: PlaceOrderIn,
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await ProcurementService(session).place_order(procurement_id, user_id=user_id, **payload.model_dump())
        return procurement_out(obj)

    @router.post("/{procurement_id}/receive", response_model=ReceiveOut)
    async def receive_items(
        payload: ReceiveIn,
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        received = {ln.procurement_item_id: ln.quantity for ln in payload.lines}
        res = await ProcurementService(session).receive_items(
            procurement_id, received, user_id=user_id, stock_in=payload.stock_in, notes=payload.notes
        )
        return ReceiveOut(
            procurement=procurement_out(res.procurement),
            fully_delivered=res.fully_delivered,
            stocked_items=res.stocked_items,
        )

    @router.post("/{procurement_id}/complete", response_model=ProcurementOut)
    async def complete_procurement(
        payload: CompleteIn,
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await ProcurementService(session).complete(
            procurement_id, user_id=user_id, final_cost=payload.final_cost
        )
        return procurement_out(obj)

    @router.post("/{procurement_id}/cancel", response_model=ProcurementOut)
    async def cancel_procurement(
        payload: CancelIn,
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await ProcurementService(session).cancel(procurement_id, user_id=user_id, reason=payload.reason)
        return procurement_out(obj)

    @router.post("/{procurement_id}/documents", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
    async def add_document(
        payload: DocumentIn,
        procurement_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        doc = await ProcurementService(session).add_document(procurement_id, user_id=user_id, **payload.model_dump())
        return DocumentOut.model_validate(doc)
