# tests/unit/test_stock_math.py
from decimal import Decimal

import pytest

from app.services.inventory_service import (
    ALERT_CRITICAL,
    ALERT_LOW,
    ALERT_OUT_OF_STOCK,
    ALERT_OVERSTOCK,
    classify_stock,
    money,
    total_value,
    weighted_unit_cost,
)


@pytest.mark.parametrize(
    "qty, expected",
    [
        (0, ALERT_OUT_OF_STOCK),
        (3, ALERT_CRITICAL),
        (5, ALERT_CRITICAL),
        (6, ALERT_LOW),
        (10, ALERT_LOW),
        (50, None),
        (100, None),
        (101, ALERT_OVERSTOCK),
    ],
)
def test_classify_stock_thresholds(qty, expected):
    # minimum 5, reorder 10, maximum 100
    assert classify_stock(qty, 5, 10, 100) == expected


def test_classify_stock_without_minimum_or_maximum():
    assert classify_stock(0, 0, 5, 0) == ALERT_OUT_OF_STOCK
    assert classify_stock(3, 0, 5, 0) == ALERT_LOW
    # no maximum means no overstock
    assert classify_stock(10_000, 0, 5, 0) is None


def test_money_rounds_half_up_to_cents():
    assert money(None) is None
    assert money(Decimal("1.005")) == Decimal("1.01")
    assert money(Decimal("2")) == Decimal("2.00")


def test_total_value():
    assert total_value(None, 3) is None
    assert total_value(Decimal("2.50"), 4) == Decimal("10.00")
    assert total_value(Decimal("2.50"), 0) == Decimal("0.00")


def test_weighted_unit_cost_averages_by_quantity():
    assert weighted_unit_cost(Decimal("10.00"), 10, Decimal("20.00"), 10) == Decimal("15.00")
    assert weighted_unit_cost(Decimal("10.00"), 30, Decimal("30.00"), 10) == Decimal("15.00")


def test_weighted_unit_cost_unknown_current_cost_counts_as_zero():
    assert weighted_unit_cost(None, 0, Decimal("12.345"), 4) == Decimal("12.35")
    assert weighted_unit_cost(None, 5, Decimal("10"), 5) == Decimal("5.00")


def test_weighted_unit_cost_with_nothing_on_hand_keeps_current():
    assert weighted_unit_cost(Decimal("7.10"), 0, Decimal("9"), 0) == Decimal("7.10")
