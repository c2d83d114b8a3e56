# app/services/request_service.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import (
    CLOSED_REQUEST_STATUSES,
    ApprovalLevel,
    ApprovalStatus,
    CommentType,
    RequestActionType,
    RequestActivityType,
    RequestPriority,
    RequestStatus,
    label,
)
from app.models.request import (
    ITRequest,
    RequestAction,
    RequestActivity,
    RequestApproval,
    RequestAttachment,
    RequestComment,
    RequestEscalation,
    RequestTemplate,
)
from app.services.errors import InvalidStateError, NotFoundError, flush_or_conflict
from app.services.numbering import next_request_number

logger = logging.getLogger("hat.requests")

UTC = timezone.utc

# statuses from which assign() moves the request into InProgress
ASSIGN_STARTS_WORK = (RequestStatus.PENDING, RequestStatus.SUBMITTED, RequestStatus.APPROVED)

HOLDABLE = (
    RequestStatus.PENDING,
    RequestStatus.SUBMITTED,
    RequestStatus.UNDER_REVIEW,
    RequestStatus.APPROVED,
    RequestStatus.IN_PROGRESS,
    RequestStatus.READY_FOR_COMPLETION,
)


def _status(obj: ITRequest) -> RequestStatus:
    return RequestStatus(obj.status)


def _refuse_closed(obj: ITRequest, action: str) -> None:
    if _status(obj) in CLOSED_REQUEST_STATUSES:
        raise InvalidStateError(f"request {obj.request_number} is {label(_status(obj))}; cannot {action}")


class RequestService:
    """
    IT request lifecycle.

    Every transition appends a RequestActions row (what happened) and a
    RequestActivities row (the timeline entry shown on the request).
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    async def get(self, request_id: int) -> ITRequest:
        obj = await self.session.get(ITRequest, int(request_id))
        if obj is None:
            raise NotFoundError(f"request {request_id} not found")
        return obj

    async def get_by_number(self, number: str) -> Optional[ITRequest]:
        stmt = select(ITRequest).where(ITRequest.request_number == number)
        return (await self.session.execute(stmt)).scalars().first()

    async def list_requests(
        self,
        *,
        status: Optional[int] = None,
        assigned_to: Optional[str] = None,
        requested_by: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[ITRequest]:
        stmt = select(ITRequest)
        if status is not None:
            stmt = stmt.where(ITRequest.status == int(status))
        if assigned_to:
            stmt = stmt.where(ITRequest.assigned_to_user_id == assigned_to)
        if requested_by:
            stmt = stmt.where(ITRequest.requested_by_user_id == requested_by)
        stmt = stmt.order_by(ITRequest.request_date.desc(), ITRequest.id.desc()).offset(offset).limit(limit)
        return list((await self.session.execute(stmt)).scalars())

    async def overdue_requests(self, now: Optional[datetime] = None) -> List[ITRequest]:
        now = now or datetime.now(UTC)
        stmt = (
            select(ITRequest)
            .where(
                ITRequest.required_by_date.is_not(None),
                ITRequest.required_by_date < now,
                ITRequest.status.not_in([int(s) for s in CLOSED_REQUEST_STATUSES]),
            )
            .order_by(ITRequest.required_by_date)
        )
        return list((await self.session.execute(stmt)).scalars())

    async def actions(self, request_id: int) -> List[RequestAction]:
        stmt = (
            select(RequestAction)
            .where(RequestAction.request_id == request_id)
            .order_by(RequestAction.action_date, RequestAction.id)
        )
        return list((await self.session.execute(stmt)).scalars())

    async def approvals(self, request_id: int) -> List[RequestApproval]:
        stmt = (
            select(RequestApproval)
            .where(RequestApproval.it_request_id == request_id)
            .order_by(RequestApproval.sequence)
        )
        return list((await self.session.execute(stmt)).scalars())

    # ------------------------------------------------------------------
    # history
    # ------------------------------------------------------------------

    def _record(
        self,
        obj: ITRequest,
        action: RequestActionType,
        activity: RequestActivityType,
        description: str,
        user_id: str,
        notes: Optional[str] = None,
    ) -> None:
        now = datetime.now(UTC)
        self.session.add(
            RequestAction(
                request_id=obj.id,
                action_type=int(action),
                description=description[:1000],
                action_date=now,
                user_id=user_id,
                notes=notes,
            )
        )
        self.session.add(
            RequestActivity(
                it_request_id=obj.id,
                activity_date=now,
                description=description[:1000],
                user_id=user_id,
                activity_type=int(activity),
            )
        )

    def _touch(self, obj: ITRequest, user_id: str) -> None:
        obj.modified_at = datetime.now(UTC)
        obj.modified_by = user_id
        obj.last_updated_by_user_id = user_id

    async def _transition(
        self,
        obj: ITRequest,
        new_status: RequestStatus,
        action: RequestActionType,
        user_id: str,
        notes: Optional[str] = None,
    ) -> ITRequest:
        old = _status(obj)
        obj.status = int(new_status)
        self._touch(obj, user_id)
        self._record(
            obj,
            action,
            RequestActivityType.STATUS_CHANGE,
            f"Status changed from {label(old)} to {label(new_status)}",
            user_id,
            notes,
        )
        await flush_or_conflict(self.session)
        logger.info("request %s %s -> %s", obj.request_number, label(old), label(new_status))
        return obj

    # ------------------------------------------------------------------
    # create
    # ------------------------------------------------------------------

    async def create(
        self,
        *,
        user_id: str,
        title: str,
        description: str,
        request_type: int,
        department: str,
        priority: int = RequestPriority.MEDIUM,
        required_by_date: Optional[datetime] = None,
        related_asset_id: Optional[int] = None,
        location_id: Optional[int] = None,
        estimated_cost: Optional[Decimal] = None,
        business_justification: Optional[str] = None,
        requested_item_category: Optional[str] = None,
        requested_item_specifications: Optional[str] = None,
        required_inventory_item_id: Optional[int] = None,
    ) -> ITRequest:
        if not (title or "").strip():
            raise ValueError("title is required")

        now = datetime.now(UTC)
        obj = ITRequest(
            request_number=await next_request_number(self.session, now),
            title=title.strip(),
            description=description,
            request_type=int(request_type),
            priority=int(priority),
            status=int(RequestStatus.PENDING),
            requested_by_user_id=user_id,
            department=department,
            request_date=now,
            required_by_date=required_by_date,
            related_asset_id=related_asset_id,
            location_id=location_id,
            estimated_cost=estimated_cost,
            business_justification=business_justification,
            requested_item_category=requested_item_category,
            requested_item_specifications=requested_item_specifications,
            required_inventory_item_id=required_inventory_item_id,
        )
        self.session.add(obj)
        await flush_or_conflict(self.session)

        self._record(
            obj, RequestActionType.CREATED, RequestActivityType.SYSTEM, f"Request {obj.request_number} created", user_id
        )
        await flush_or_conflict(self.session)
        logger.info("request created %s by %s", obj.request_number, user_id)
        return obj

    async def create_from_template(
        self,
        template_id: int,
        *,
        user_id: str,
        description: Optional[str] = None,
        department: Optional[str] = None,
        **overrides,
    ) -> ITRequest:
        tpl = await self.session.get(RequestTemplate, int(template_id))
        if tpl is None:
            raise NotFoundError(f"request template {template_id} not found")
        if not tpl.is_active:
            raise InvalidStateError(f"request template {tpl.name} is inactive")

        dept = department or tpl.department
        if not dept:
            raise ValueError("department is required")
        return await self.create(
            user_id=user_id,
            title=overrides.pop("title", tpl.subject),
            description=description or tpl.description,
            request_type=tpl.request_type,
            priority=overrides.pop("priority", tpl.default_priority),
            department=dept,
            requested_item_category=overrides.pop("requested_item_category", tpl.item_category),
            **overrides,
        )

    # ------------------------------------------------------------------
    # transitions
    # ------------------------------------------------------------------

    async def submit(self, request_id: int, *, user_id: str) -> ITRequest:
        obj = await self.get(request_id)
        if _status(obj) != RequestStatus.PENDING:
            raise InvalidStateError(f"request {obj.request_number} was already submitted")
        return await self._transition(obj, RequestStatus.SUBMITTED, RequestActionType.SUBMITTED, user_id)

    async def assign(
        self, request_id: int, assignee_id: str, *, user_id: str, notes: Optional[str] = None
    ) -> ITRequest:
        obj = await self.get(request_id)
        _refuse_closed(obj, "assign")

        obj.assigned_to_user_id = assignee_id
        if notes:
            obj.assignment_notes = notes
        self._record(
            obj,
            RequestActionType.ASSIGNED,
            RequestActivityType.ASSIGNMENT,
            f"Assigned to user {assignee_id}",
            user_id,
            notes,
        )
        if _status(obj) in ASSIGN_STARTS_WORK:
            return await self._transition(obj, RequestStatus.IN_PROGRESS, RequestActionType.STARTED, user_id)
        self._touch(obj, user_id)
        await flush_or_conflict(self.session)
        return obj

    async def request_approval(
        self,
        request_id: int,
        approvers: Sequence[Tuple[int, str]],
        *,
        user_id: str,
    ) -> List[RequestApproval]:
        """
        Append approval steps, one per (ApprovalLevel, approver id), in order.

        Sequence numbers continue after any existing steps.
        """
        obj = await self.get(request_id)
        _refuse_closed(obj, "request approval")
        if not approvers:
            raise ValueError("at least one approver is required")

        res = await self.session.execute(
            select(func.max(RequestApproval.sequence)).where(RequestApproval.it_request_id == obj.id)
        )
        seq = int(res.scalar() or 0)

        rows: List[RequestApproval] = []
        for level, approver_id in approvers:
            seq += 1
            row = RequestApproval(
                it_request_id=obj.id,
                approval_level=int(ApprovalLevel(level)),
                approver_id=approver_id,
                status=int(ApprovalStatus.PENDING),
                sequence=seq,
            )
            self.session.add(row)
            rows.append(row)

        await self._transition(obj, RequestStatus.PENDING_APPROVAL, RequestActionType.UPDATED, user_id)
        return rows

    async def decide_approval(
        self,
        request_id: int,
        *,
        approve: bool,
        user_id: str,
        comments: Optional[str] = None,
    ) -> ITRequest:
        """Decide the lowest pending step; the last approval or any rejection settles the request."""
        obj = await self.get(request_id)
        if _status(obj) != RequestStatus.PENDING_APPROVAL:
            raise InvalidStateError(f"request {obj.request_number} is not awaiting approval")

        steps = await self.approvals(obj.id)
        pending = [s for s in steps if s.status == int(ApprovalStatus.PENDING)]
        if not pending:
            raise InvalidStateError(f"request {obj.request_number} has no pending approval step")

        step = pending[0]
        if step.approver_id != user_id:
            raise InvalidStateError(f"approval step {step.sequence} of {obj.request_number} is assigned to another approver")
        step.status = int(ApprovalStatus.APPROVED if approve else ApprovalStatus.REJECTED)
        step.decision_date = datetime.now(UTC)
        step.comments = comments

        verb = "approved" if approve else "rejected"
        self._record(
            obj,
            RequestActionType.APPROVED if approve else RequestActionType.REJECTED,
            RequestActivityType.APPROVAL,
            f"Approval step {step.sequence} ({label(ApprovalLevel(step.approval_level))}) {verb}",
            user_id,
            comments,
        )

        if not approve:
            return await self._transition(obj, RequestStatus.REJECTED, RequestActionType.REJECTED, user_id, comments)
        if len(pending) == 1:
            return await self._transition(obj, RequestStatus.APPROVED, RequestActionType.APPROVED, user_id, comments)
        self._touch(obj, user_id)
        await flush_or_conflict(self.session)
        return obj

    async def place_on_hold(self, request_id: int, *, user_id: str, reason: str) -> ITRequest:
        obj = await self.get(request_id)
        if _status(obj) not in HOLDABLE:
            raise InvalidStateError(f"request {obj.request_number} cannot be put on hold")
        return await self._transition(obj, RequestStatus.ON_HOLD, RequestActionType.UPDATED, user_id, reason)

    async def resume(self, request_id: int, *, user_id: str) -> ITRequest:
        obj = await self.get(request_id)
        if _status(obj) != RequestStatus.ON_HOLD:
            raise InvalidStateError(f"request {obj.request_number} is not on hold")
        target = RequestStatus.IN_PROGRESS if obj.assigned_to_user_id else RequestStatus.SUBMITTED
        return await self._transition(obj, target, RequestActionType.UPDATED, user_id)

    async def complete(
        self,
        request_id: int,
        *,
        user_id: str,
        completion_notes: Optional[str] = None,
        resolution_details: Optional[str] = None,
        provided_inventory_item_id: Optional[int] = None,
    ) -> ITRequest:
        obj = await self.get(request_id)
        _refuse_closed(obj, "complete")

        now = datetime.now(UTC)
        obj.completed_date = now
        obj.completed_by_user_id = user_id
        obj.completion_notes = completion_notes
        obj.resolution_date = now
        obj.resolution_details = resolution_details
        if provided_inventory_item_id is not None:
            obj.provided_inventory_item_id = provided_inventory_item_id
        return await self._transition(
            obj, RequestStatus.COMPLETED, RequestActionType.COMPLETED, user_id, completion_notes
        )

    async def cancel(self, request_id: int, *, user_id: str, reason: Optional[str] = None) -> ITRequest:
        obj = await self.get(request_id)
        _refuse_closed(obj, "cancel")
        return await self._transition(obj, RequestStatus.CANCELLED, RequestActionType.CANCELLED, user_id, reason)

    async def escalate(
        self,
        request_id: int,
        *,
        escalated_to: str,
        reason: str,
        user_id: str,
        auto: bool = False,
    ) -> RequestEscalation:
        obj = await self.get(request_id)
        _refuse_closed(obj, "escalate")

        res = await self.session.execute(
            select(func.max(RequestEscalation.escalation_level)).where(RequestEscalation.request_id == obj.id)
        )
        level = int(res.scalar() or 0) + 1

        row = RequestEscalation(
            request_id=obj.id,
            escalation_level=level,
            escalated_date=datetime.now(UTC),
            escalated_to=escalated_to,
            reason=reason,
            auto_escalated=bool(auto),
        )
        self.session.add(row)
        self._touch(obj, user_id)
        self._record(
            obj,
            RequestActionType.UPDATED,
            RequestActivityType.SYSTEM,
            f"Escalated to {escalated_to} (level {level})",
            user_id,
            reason,
        )
        await flush_or_conflict(self.session)
        logger.warning("request %s escalated to level %s", obj.request_number, level)
        return row

    # ------------------------------------------------------------------
    # comments / attachments
    # ------------------------------------------------------------------

    async def add_comment(
        self,
        request_id: int,
        comment: str,
        *,
        user_id: str,
        is_internal: bool = False,
        comment_type: int = CommentType.GENERAL,
    ) -> RequestComment:
        obj = await self.get(request_id)
        if not (comment or "").strip():
            raise ValueError("comment is empty")

        row = RequestComment(
            it_request_id=obj.id,
            commented_by_user_id=user_id,
            comment=comment.strip(),
            is_internal=bool(is_internal),
            comment_type=int(CommentType(comment_type)),
        )
        self.session.add(row)
        self._record(
            obj,
            RequestActionType.COMMENT_ADDED,
            RequestActivityType.COMMENT,
            "Internal comment added" if is_internal else "Comment added",
            user_id,
        )
        await flush_or_conflict(self.session)
        return row

    async def add_attachment(
        self,
        request_id: int,
        *,
        file_name: str,
        file_path: str,
        file_size: int,
        user_id: str,
        content_type: Optional[str] = None,
        description: Optional[str] = None,
    ) -> RequestAttachment:
        obj = await self.get(request_id)
        if int(file_size) < 0:
            raise ValueError("file_size cannot be negative")

        row = RequestAttachment(
            it_request_id=obj.id,
            file_name=file_name,
            file_path=file_path,
            content_type=content_type,
            file_size=int(file_size),
            uploaded_by_user_id=user_id,
            uploaded_date=datetime.now(UTC),
            description=description,
        )
        self.session.add(row)
        self._record(
            obj,
            RequestActionType.UPDATED,
            RequestActivityType.ATTACHMENT,
            f"Attachment {file_name} added",
            user_id,
        )
        await flush_or_conflict(self.session)
        return row


