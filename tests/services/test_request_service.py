# tests/services/test_request_service.py
import re
from datetime import datetime, timedelta, timezone

import pytest

from app.models.enums import (
    ApprovalLevel,
    ApprovalStatus,
    RequestActionType,
    RequestPriority,
    RequestStatus,
    RequestType,
)
from app.models.request import RequestTemplate
from app.services.errors import InvalidStateError, NotFoundError
from app.services.request_service import RequestService
from tests.factories import ADMIN_ID, TECH_ID

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]

UTC = timezone.utc


async def _new(session, **kw):
    return await RequestService(session).create(
        user_id=kw.pop("user_id", TECH_ID),
        title=kw.pop("title", "Printer jam on ward 5"),
        description=kw.pop("description", "Paper feed fails"),
        request_type=kw.pop("request_type", RequestType.HARDWARE_REPAIR),
        department=kw.pop("department", "Nursing"),
        **kw,
    )


async def _action_types(session, request_id):
    return [a.action_type for a in await RequestService(session).actions(request_id)]


async def test_create_numbers_per_year(session):
    first = await _new(session)
    second = await _new(session)
    year = datetime.now(UTC).year
    assert first.request_number == f"REQ-{year}-0001"
    assert re.fullmatch(rf"REQ-{year}-0002", second.request_number)
    assert first.status == int(RequestStatus.PENDING)
    assert first.priority == int(RequestPriority.MEDIUM)
    assert await _action_types(session, first.id) == [int(RequestActionType.CREATED)]


async def test_title_is_required(session):
    with pytest.raises(ValueError):
        await _new(session, title="   ")


async def test_submit_once(session):
    svc = RequestService(session)
    req = await _new(session)
    await svc.submit(req.id, user_id=TECH_ID)
    assert req.status == int(RequestStatus.SUBMITTED)
    with pytest.raises(InvalidStateError):
        await svc.submit(req.id, user_id=TECH_ID)


async def test_assign_starts_work(session):
    svc = RequestService(session)
    req = await _new(session)
    await svc.submit(req.id, user_id=TECH_ID)
    await svc.assign(req.id, TECH_ID, user_id=ADMIN_ID, notes="on call")

    assert req.status == int(RequestStatus.IN_PROGRESS)
    assert req.assigned_to_user_id == TECH_ID
    assert req.assignment_notes == "on call"
    assert await _action_types(session, req.id) == [
        int(RequestActionType.CREATED),
        int(RequestActionType.SUBMITTED),
        int(RequestActionType.ASSIGNED),
        int(RequestActionType.STARTED),
    ]


async def test_multi_step_approval(session):
    svc = RequestService(session)
    req = await _new(session)
    steps = await svc.request_approval(
        req.id,
        [(ApprovalLevel.SUPERVISOR, TECH_ID), (ApprovalLevel.DEPARTMENT_HEAD, ADMIN_ID)],
        user_id=TECH_ID,
    )
    assert [s.sequence for s in steps] == [1, 2]
    assert req.status == int(RequestStatus.PENDING_APPROVAL)

    await svc.decide_approval(req.id, approve=True, user_id=TECH_ID)
    assert req.status == int(RequestStatus.PENDING_APPROVAL)
    await svc.decide_approval(req.id, approve=True, user_id=ADMIN_ID, comments="ok")
    assert req.status == int(RequestStatus.APPROVED)

    statuses = [s.status for s in await svc.approvals(req.id)]
    assert statuses == [int(ApprovalStatus.APPROVED)] * 2


async def test_decision_by_other_user_refused(session):
    svc = RequestService(session)
    req = await _new(session)
    await svc.request_approval(req.id, [(ApprovalLevel.SUPERVISOR, ADMIN_ID)], user_id=TECH_ID)

    with pytest.raises(InvalidStateError):
        await svc.decide_approval(req.id, approve=False, user_id=TECH_ID)
    assert req.status == int(RequestStatus.PENDING_APPROVAL)
    assert [s.status for s in await svc.approvals(req.id)] == [int(ApprovalStatus.PENDING)]


async def test_rejection_closes_request(session):
    svc = RequestService(session)
    req = await _new(session)
    await svc.request_approval(req.id, [(ApprovalLevel.SUPERVISOR, ADMIN_ID)], user_id=TECH_ID)
    await svc.decide_approval(req.id, approve=False, user_id=ADMIN_ID, comments="not budgeted")
    assert req.status == int(RequestStatus.REJECTED)

    with pytest.raises(InvalidStateError):
        await svc.cancel(req.id, user_id=TECH_ID)
    with pytest.raises(InvalidStateError):
        await svc.decide_approval(req.id, approve=True, user_id=ADMIN_ID)


async def test_request_approval_needs_approvers(session):
    req = await _new(session)
    with pytest.raises(ValueError):
        await RequestService(session).request_approval(req.id, [], user_id=TECH_ID)


async def test_hold_and_resume(session):
    svc = RequestService(session)
    unassigned = await _new(session)
    await svc.submit(unassigned.id, user_id=TECH_ID)
    await svc.place_on_hold(unassigned.id, user_id=ADMIN_ID, reason="waiting for parts")
    assert unassigned.status == int(RequestStatus.ON_HOLD)
    await svc.resume(unassigned.id, user_id=ADMIN_ID)
    assert unassigned.status == int(RequestStatus.SUBMITTED)

    assigned = await _new(session)
    await svc.assign(assigned.id, TECH_ID, user_id=ADMIN_ID)
    await svc.place_on_hold(assigned.id, user_id=ADMIN_ID, reason="vendor")
    await svc.resume(assigned.id, user_id=ADMIN_ID)
    assert assigned.status == int(RequestStatus.IN_PROGRESS)

    with pytest.raises(InvalidStateError):
        await svc.resume(assigned.id, user_id=ADMIN_ID)


async def test_complete_and_cancel(session):
    svc = RequestService(session)
    req = await _new(session)
    await svc.complete(req.id, user_id=TECH_ID, completion_notes="fixed", resolution_details="new roller")
    assert req.status == int(RequestStatus.COMPLETED)
    assert req.completed_by_user_id == TECH_ID
    assert req.resolution_date is not None
    with pytest.raises(InvalidStateError):
        await svc.complete(req.id, user_id=TECH_ID)

    other = await _new(session)
    await svc.cancel(other.id, user_id=TECH_ID, reason="duplicate")
    assert other.status == int(RequestStatus.CANCELLED)


async def test_overdue_skips_closed_requests(session):
    svc = RequestService(session)
    past = datetime.now(UTC) - timedelta(days=1)
    late = await _new(session, required_by_date=past)
    done = await _new(session, required_by_date=past)
    await _new(session, required_by_date=datetime.now(UTC) + timedelta(days=3))
    await svc.complete(done.id, user_id=TECH_ID)

    assert [r.id for r in await svc.overdue_requests()] == [late.id]


async def test_escalation_levels_increase(session):
    svc = RequestService(session)
    req = await _new(session)
    first = await svc.escalate(req.id, escalated_to=ADMIN_ID, reason="SLA breach", user_id=TECH_ID)
    second = await svc.escalate(req.id, escalated_to=ADMIN_ID, reason="still open", user_id=TECH_ID, auto=True)
    assert (first.escalation_level, second.escalation_level) == (1, 2)
    assert second.auto_escalated is True


async def test_comments_and_attachments(session):
    svc = RequestService(session)
    req = await _new(session)

    c = await svc.add_comment(req.id, "  called the ward  ", user_id=TECH_ID, is_internal=True)
    assert c.comment == "called the ward"
    with pytest.raises(ValueError):
        await svc.add_comment(req.id, "", user_id=TECH_ID)

    att = await svc.add_attachment(
        req.id, file_name="photo.jpg", file_path="uploads/photo.jpg", file_size=2048, user_id=TECH_ID
    )
    assert att.file_size == 2048
    with pytest.raises(ValueError):
        await svc.add_attachment(req.id, file_name="x", file_path="x", file_size=-1, user_id=TECH_ID)
    assert int(RequestActionType.COMMENT_ADDED) in await _action_types(session, req.id)


async def test_create_from_template(session):
    svc = RequestService(session)
    tpl = RequestTemplate(
        name="New starter laptop",
        description="Laptop for a new member of staff",
        request_type=int(RequestType.NEW_EQUIPMENT),
        default_priority=int(RequestPriority.HIGH),
        subject="New laptop",
        item_category="Laptop",
        department="HR",
        is_active=True,
        created_by=ADMIN_ID,
    )
    session.add(tpl)
    await session.flush()

    req = await svc.create_from_template(tpl.id, user_id=TECH_ID)
    assert req.title == "New laptop"
    assert req.priority == int(RequestPriority.HIGH)
    assert req.department == "HR"
    assert req.requested_item_category == "Laptop"

    tpl.is_active = False
    await session.flush()
    with pytest.raises(InvalidStateError):
        await svc.create_from_template(tpl.id, user_id=TECH_ID)
    with pytest.raises(NotFoundError):
        await svc.create_from_template(9999, user_id=TECH_ID)


async def test_lookup_by_number(session):
    svc = RequestService(session)
    req = await _new(session)
    assert (await svc.get_by_number(req.request_number)).id == req.id
    assert await svc.get_by_number("REQ-1999-0001") is None
    assert [r.id for r in await svc.list_requests(requested_by=TECH_ID)] == [req.id]
