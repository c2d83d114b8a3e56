# tests/unit/test_approval_levels.py
from decimal import Decimal

from app.models.enums import ApprovalLevel
from app.services.procurement_service import ItemLine, lines_total, required_approval_levels


def test_small_budget_needs_no_approval():
    assert required_approval_levels(Decimal("0")) == []
    assert required_approval_levels(Decimal("1000")) == []
    assert required_approval_levels(None) == []


def test_supervisor_band():
    assert required_approval_levels(Decimal("1000.01")) == [ApprovalLevel.SUPERVISOR]
    assert required_approval_levels(Decimal("10000")) == [ApprovalLevel.SUPERVISOR]


def test_department_head_band():
    assert required_approval_levels(Decimal("25000")) == [
        ApprovalLevel.SUPERVISOR,
        ApprovalLevel.DEPARTMENT_HEAD,
    ]


def test_large_budget_goes_to_finance_and_executive():
    assert required_approval_levels(Decimal("50000.01")) == [
        ApprovalLevel.SUPERVISOR,
        ApprovalLevel.DEPARTMENT_HEAD,
        ApprovalLevel.FINANCE,
        ApprovalLevel.EXECUTIVE,
    ]


def test_lines_total():
    lines = [
        ItemLine(item_name="Laptop", quantity=3, estimated_unit_price=Decimal("899.99")),
        ItemLine(item_name="Dock", quantity=3, estimated_unit_price=Decimal("120")),
    ]
    assert lines_total(lines) == Decimal("3059.97")
    assert lines_total([]) == Decimal("0")
