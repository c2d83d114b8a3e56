# tests/unit/test_numbering_formats.py
from datetime import datetime, timezone

from app.models.enums import InventoryCategory
from app.services.numbering import (
    dotnet_ticks,
    format_item_code,
    format_procurement_number,
    format_request_number,
    format_write_off_number,
    internal_serial_number,
    item_code_prefix,
)

UTC = timezone.utc


def test_request_number_is_zero_padded_per_year():
    assert format_request_number(2024, 1) == "REQ-2024-0001"
    assert format_request_number(2024, 12345) == "REQ-2024-12345"


def test_write_off_number_carries_year_and_month():
    assert format_write_off_number(2024, 3, 7) == "WO-202403-0007"
    assert format_write_off_number(2024, 11, 120) == "WO-202411-0120"


def test_procurement_number_has_six_digit_sequence():
    assert format_procurement_number(2025, 42) == "PR-2025-000042"


def test_item_code_prefix_by_category():
    assert item_code_prefix(InventoryCategory.LAPTOP) == "LT"
    assert item_code_prefix(InventoryCategory.CONSUMABLES) == "CS"
    # COMPUTER and DESKTOP share value 0
    assert item_code_prefix(InventoryCategory.COMPUTER) == "DT"
    # Other and unknown values fall back to the generic prefix
    assert item_code_prefix(InventoryCategory.OTHER) == "IT"
    assert item_code_prefix(555) == "IT"


def test_item_code_uses_two_digit_year():
    assert format_item_code(InventoryCategory.LAPTOP, 2024, 7) == "LT240007"
    assert format_item_code(InventoryCategory.OTHER, 2031, 12) == "IT310012"


def test_ticks_are_counted_from_year_one():
    assert dotnet_ticks(datetime(1, 1, 1, tzinfo=UTC)) == 0
    assert dotnet_ticks(datetime(2024, 1, 1, tzinfo=UTC)) == 638_396_640_000_000_000


def test_ticks_keep_sub_second_precision():
    base = datetime(2024, 1, 1, tzinfo=UTC)
    later = datetime(2024, 1, 1, 0, 0, 0, 1, tzinfo=UTC)
    assert dotnet_ticks(later) - dotnet_ticks(base) == 10


def test_internal_serial_number_format():
    sn = internal_serial_number(datetime(2024, 1, 1, tzinfo=UTC))
    assert sn == "INT-638396640000000000"
