# tests/services/test_audit_automation_analytics.py
import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.models.enums import AuditAction, ProcurementCategory, ProcurementStatus
from app.services.analytics_service import AnalyticsService
from app.services.audit_service import AuditService
from app.services.automation_service import AutomationService
from app.services.errors import ConflictError
from app.services.procurement_service import ItemLine, ProcurementService
from tests.factories import ADMIN_ID, TECH_ID, make_asset

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]

UTC = timezone.utc


# ---------------- audit ----------------


async def test_audit_log_serialises_values(session):
    svc = AuditService(session)
    row = await svc.log(
        AuditAction.UPDATE,
        "InventoryItem",
        7,
        ADMIN_ID,
        "Price corrected",
        old_values={"unit_cost": Decimal("1.50")},
        new_values={"unit_cost": Decimal("1.75"), "when": datetime(2024, 5, 1, tzinfo=UTC)},
    )
    assert json.loads(row.old_values) == {"unit_cost": "1.50"}
    assert json.loads(row.new_values)["when"].startswith("2024-05-01")


async def test_audit_log_unknown_user_is_conflict(session):
    with pytest.raises(ConflictError):
        await AuditService(session).log(AuditAction.UPDATE, "Asset", 1, "u-nobody", "Edited asset")


async def test_audit_queries(session):
    svc = AuditService(session)
    asset = await make_asset(session)
    await svc.log(AuditAction.LOGIN, "User", None, TECH_ID, "Signed in")

    assert [r.entity_type for r in await svc.for_asset(asset.id)] == ["Asset"]
    assert [r.description for r in await svc.for_user(TECH_ID)] == ["Signed in"]
    assert len(await svc.search("signed")) == 1
    assert await svc.search(date_from=datetime.now(UTC) + timedelta(hours=1)) == []
    assert len(await svc.recent(page=1, page_size=1)) == 1
    assert len(await svc.recent(page=2, page_size=1)) == 1
    assert await svc.recent(page=3, page_size=1) == []


# ---------------- automation ----------------


async def test_rule_names_are_unique(session):
    svc = AutomationService(session)
    await svc.create_rule(user_id=ADMIN_ID, rule_name="low-stock", description="Restock", trigger="StockLow")
    with pytest.raises(ConflictError):
        await svc.create_rule(user_id=ADMIN_ID, rule_name="low-stock", description="again", trigger="StockLow")
    with pytest.raises(ValueError):
        await svc.create_rule(user_id=ADMIN_ID, rule_name=" ", description="x", trigger="x")


async def test_execution_counters_and_errors(session):
    svc = AutomationService(session)
    rule = await svc.create_rule(
        user_id=ADMIN_ID,
        rule_name="warranty-alert",
        description="Notify on warranty expiry",
        trigger="WarrantyExpired",
        conditions={"days": 30},
        actions=[{"notify": "it-team"}],
        priority=5,
    )
    assert json.loads(rule.conditions_json) == {"days": 30}

    await svc.record_execution(rule.id, action="notify", success=True, details={"sent": 3})
    await svc.record_execution(rule.id, action="notify", success=False, error="SMTP down")
    await svc.record_execution(rule.id, action="notify", success=True)

    assert rule.execution_count == 3
    assert rule.has_execution_errors is True
    assert rule.last_execution_error == "SMTP down"
    assert [log.success for log in await svc.logs(rule.id)] == [True, False, True]

    assert [r.id for r in await svc.active_rules("WarrantyExpired")] == [rule.id]
    await svc.set_active(rule.id, False)
    assert await svc.active_rules("WarrantyExpired") == []


# ---------------- analytics ----------------


async def _completed(session, price, category=ProcurementCategory.LAPTOP):
    obj = await ProcurementService(session).create_procurement(
        user_id=TECH_ID,
        title="Laptops",
        description="x",
        department="IT",
        category=category,
        items=[ItemLine(item_name="Laptop", quantity=1, estimated_unit_price=price)],
    )
    obj.status = int(ProcurementStatus.COMPLETED)
    obj.final_cost = price
    await session.flush()
    return obj


async def test_rebuild_spend_trends(session):
    await _completed(session, Decimal("900"))
    await _completed(session, Decimal("100"))
    await _completed(session, Decimal("50"), category=ProcurementCategory.CABLES)
    await ProcurementService(session).create_procurement(
        user_id=TECH_ID, title="Draft", description="x", department="IT"
    )

    svc = AnalyticsService(session)
    rows = await svc.rebuild_spend_trends()
    by_cat = {r.category: r for r in rows}
    assert set(by_cat) == {"Laptop", "Cables"}
    assert by_cat["Laptop"].amount == Decimal("1000")
    assert by_cat["Laptop"].request_count == 2
    now = datetime.now(UTC)
    assert by_cat["Cables"].period == f"{now.year:04d}-{now.month:02d}"

    # rebuilding replaces, it does not append
    await svc.rebuild_spend_trends()
    assert len(await svc.spend_trends()) == 2
