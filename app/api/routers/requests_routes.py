# app/api/routers/requests_routes.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import current_user_id, get_session
from app.api.routers.requests_helpers import request_out
from app.api.routers.requests_schemas import (
    AssignIn,
    AttachmentIn,
    CommentIn,
    CompleteIn,
    DecisionIn,
    EscalateIn,
    FromTemplateIn,
    ITRequestCreateIn,
    ITRequestOut,
    ReasonIn,
    RequestActionOut,
    RequestApprovalIn,
    RequestApprovalOut,
    RequestAttachmentOut,
    RequestCommentOut,
    RequestEscalationOut,
)
from app.services.errors import NotFoundError
from app.services.request_service import RequestService


def register(router: APIRouter) -> None:
    # ---------------------------
    # queries
    # ---------------------------

    @router.get("", response_model=List[ITRequestOut])
    async def list_requests(
        status_: Optional[int] = Query(None, alias="status", ge=0),
        assigned_to: Optional[str] = Query(None),
        requested_by: Optional[str] = Query(None),
        limit: int = Query(100, ge=1, le=500),
        offset: int = Query(0, ge=0),
        session: AsyncSession = Depends(get_session),
    ):
        rows = await RequestService(session).list_requests(
            status=status_, assigned_to=assigned_to, requested_by=requested_by, limit=limit, offset=offset
        )
        return [request_out(r) for r in rows]

    @router.get("/overdue", response_model=List[ITRequestOut])
    async def overdue_requests(session: AsyncSession = Depends(get_session)):
        return [request_out(r) for r in await RequestService(session).overdue_requests()]

    @router.get("/by-number/{request_number}", response_model=ITRequestOut)
    async def get_request_by_number(
        request_number: str = Path(..., min_length=1),
        session: AsyncSession = Depends(get_session),
    ):
        obj = await RequestService(session).get_by_number(request_number)
        if obj is None:
            raise NotFoundError(f"request {request_number} not found")
        return request_out(obj)

    @router.get("/{request_id}", response_model=ITRequestOut)
    async def get_request(
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        return request_out(await RequestService(session).get(request_id))

    @router.get("/{request_id}/actions", response_model=List[RequestActionOut])
    async def request_actions(
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        svc = RequestService(session)
        await svc.get(request_id)
        return [RequestActionOut.model_validate(a) for a in await svc.actions(request_id)]

    @router.get("/{request_id}/approvals", response_model=List[RequestApprovalOut])
    async def request_approvals(
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
    ):
        svc = RequestService(session)
        await svc.get(request_id)
        return [RequestApprovalOut.model_validate(a) for a in await svc.approvals(request_id)]

    # ---------------------------
    # creation
    # ---------------------------

    @router.post("", response_model=ITRequestOut, status_code=status.HTTP_201_CREATED)
    async def create_request(
        payload: ITRequestCreateIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await RequestService(session).create(user_id=user_id, **payload.model_dump())
        return request_out(obj)

    @router.post("/from-template", response_model=ITRequestOut, status_code=status.HTTP_201_CREATED)
    async def create_request_from_template(
        payload: FromTemplateIn,
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await RequestService(session).create_from_template(
            payload.template_id,
            user_id=user_id,
            description=payload.description,
            department=payload.department,
        )
        return request_out(obj)

    # ---------------------------
    # workflow
    # ---------------------------

    @router.post("/{request_id}/submit", response_model=ITRequestOut)
    async def submit_request(
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        return request_out(await RequestService(session).submit(request_id, user_id=user_id))

    @router.post("/{request_id}/assign", response_model=ITRequestOut)
    async def assign_request(
        payload: AssignIn,
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await RequestService(session).assign(
            request_id, payload.assignee_id, user_id=user_id, notes=payload.notes
        )
        return request_out(obj)

    @router.post(
        "/{request_id}/approvals",
        response_model=List[RequestApprovalOut],
        status_code=status.HTTP_201_CREATED,
    )
    async def request_approval(
        payload: RequestApprovalIn,
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        steps = [(a.level, a.approver_id) for a in payload.approvers]
        rows = await RequestService(session).request_approval(request_id, steps, user_id=user_id)
        return [RequestApprovalOut.model_validate(r) for r in rows]

    @router.post("/{request_id}/decision", response_model=ITRequestOut)
    async def decide_request_approval(
        payload: DecisionIn,
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await RequestService(session).decide_approval(
            request_id, approve=payload.approve, user_id=user_id, comments=payload.comments
        )
        return request_out(obj)

    @router.post("/{request_id}/hold", response_model=ITRequestOut)
    async def hold_request(
        payload: ReasonIn,
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await RequestService(session).place_on_hold(request_id, user_id=user_id, reason=payload.reason or "")
        return request_out(obj)

    @router.post("/{request_id}/resume", response_model=ITRequestOut)
    async def resume_request(
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        return request_out(await RequestService(session).resume(request_id, user_id=user_id))

    @router.post("/{request_id}/complete", response_model=ITRequestOut)
    async def complete_request(
        payload: CompleteIn,
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await RequestService(session).complete(request_id, user_id=user_id, **payload.model_dump())
        return request_out(obj)

    @router.post("/{request_id}/cancel", response_model=ITRequestOut)
    async def cancel_request(
        payload: ReasonIn,
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        obj = await RequestService(session).cancel(request_id, user_id=user_id, reason=payload.reason)
        return request_out(obj)

    @router.post(
        "/{request_id}/escalations",
        response_model=RequestEscalationOut,
        status_code=status.HTTP_201_CREATED,
    )
    async def escalate_request(
        payload: EscalateIn,
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        esc = await RequestService(session).escalate(
            request_id, escalated_to=payload.escalated_to, reason=payload.reason, user_id=user_id
        )
        return RequestEscalationOut.model_validate(esc)

    # ---------------------------
    # comments / attachments
    # ---------------------------

    @router.post(
        "/{request_id}/comments",
        response_model=RequestCommentOut,
        status_code=status.HTTP_201_CREATED,
    )
    async def add_request_comment(
        payload: CommentIn,
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        c = await RequestService(session).add_comment(
            request_id,
            payload.comment,
            user_id=user_id,
            is_internal=payload.is_internal,
            comment_type=payload.comment_type,
        )
        return RequestCommentOut.model_validate(c)

    @router.post(
        "/{request_id}/attachments",
        response_model=RequestAttachmentOut,
        status_code=status.HTTP_201_CREATED,
    )
    async def add_request_attachment(
        payload: AttachmentIn,
        request_id: int = Path(..., ge=1),
        session: AsyncSession = Depends(get_session),
        user_id: str = Depends(current_user_id),
    ):
        att = await RequestService(session).add_attachment(request_id, user_id=user_id, **payload.model_dump())
        return RequestAttachmentOut.model_validate(att)
