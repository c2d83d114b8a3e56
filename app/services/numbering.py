# app/services/numbering.py
"""
Business number generators.

  - RequestNumber      REQ-<yyyy>-<nnnn>        sequence per year
  - WriteOffNumber     WO-<yyyy><mm>-<nnnn>     sequence per month
  - ProcurementNumber  PR-<yyyy>-<nnnnnn>       count of the year's procurements + 1
  - AssetTag           7 random digits, retried until unused
  - InternalSerial     INT-<ticks>              100ns ticks since 0001-01-01 UTC
  - ItemCode           <prefix><yy><nnnn>       sequence per prefix and year

Generators read the current maximum inside the caller's transaction; two
concurrent writers can compute the same value, and the unique index on the
column turns the second insert into a ConflictError.
"""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Integer, cast, extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.asset import Asset
from app.models.enums import InventoryCategory
from app.models.inventory import InventoryItem
from app.models.procurement import ProcurementRequest
from app.models.request import ITRequest
from app.models.write_off import WriteOffRecord

UTC = timezone.utc

_TICKS_EPOCH = datetime(1, 1, 1, tzinfo=UTC)

ITEM_CODE_PREFIXES = {
    InventoryCategory.DESKTOP: "DT",
    InventoryCategory.LAPTOP: "LT",
    InventoryCategory.SERVER: "SV",
    InventoryCategory.NETWORK_DEVICE: "ND",
    InventoryCategory.PRINTER: "PR",
    InventoryCategory.MONITOR: "MN",
    InventoryCategory.PERIPHERALS: "PE",
    InventoryCategory.COMPONENTS: "CP",
    InventoryCategory.STORAGE: "ST",
    InventoryCategory.MEMORY: "MM",
    InventoryCategory.POWER_SUPPLY: "PS",
    InventoryCategory.CABLES: "CB",
    InventoryCategory.SOFTWARE: "SW",
    InventoryCategory.ACCESSORIES: "AC",
    InventoryCategory.CONSUMABLES: "CS",
    InventoryCategory.MEDICAL_DEVICE: "MD",
    InventoryCategory.TELEPHONE: "TL",
    InventoryCategory.AUDIO: "AD",
    InventoryCategory.VIDEO: "VD",
    InventoryCategory.SECURITY: "SC",
    InventoryCategory.BACKUP: "BK",
}
DEFAULT_ITEM_CODE_PREFIX = "IT"


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(UTC)


# ---------------------------------------------------------------------------
# pure formatting
# ---------------------------------------------------------------------------


def format_request_number(year: int, seq: int) -> str:
    return f"REQ-{year}-{seq:04d}"


def format_write_off_number(year: int, month: int, seq: int) -> str:
    return f"WO-{year:04d}{month:02d}-{seq:04d}"


def format_procurement_number(year: int, seq: int) -> str:
    return f"PR-{year}-{seq:06d}"


def item_code_prefix(category: int) -> str:
    try:
        return ITEM_CODE_PREFIXES.get(InventoryCategory(category), DEFAULT_ITEM_CODE_PREFIX)
    except ValueError:
        return DEFAULT_ITEM_CODE_PREFIX


def format_item_code(category: int, year: int, seq: int) -> str:
    return f"{item_code_prefix(category)}{year % 100:02d}{seq:04d}"


def dotnet_ticks(now: Optional[datetime] = None) -> int:
    delta = _now(now) - _TICKS_EPOCH
    return (delta.days * 86_400 + delta.seconds) * 10_000_000 + delta.microseconds * 10


def internal_serial_number(now: Optional[datetime] = None) -> str:
    return f"INT-{dotnet_ticks(now)}"


# ---------------------------------------------------------------------------
# database-backed generators
# ---------------------------------------------------------------------------


async def _max_sequence(session: AsyncSession, column, prefix: str) -> int:
    # numeric max so that sequences past the padding width still sort correctly
    tail = func.substr(column, len(prefix) + 1)
    stmt = select(func.max(cast(tail, Integer))).where(
        column.op("~")(f"^{prefix}[0-9]+$")
    )
    res = await session.execute(stmt)
    return int(res.scalar() or 0)


async def next_request_number(session: AsyncSession, now: Optional[datetime] = None) -> str:
    year = _now(now).year
    prefix = f"REQ-{year}-"
    seq = await _max_sequence(session, ITRequest.request_number, prefix)
    return format_request_number(year, seq + 1)


async def next_write_off_number(session: AsyncSession, now: Optional[datetime] = None) -> str:
    ts = _now(now)
    prefix = f"WO-{ts.year:04d}{ts.month:02d}-"
    seq = await _max_sequence(session, WriteOffRecord.write_off_number, prefix)
    return format_write_off_number(ts.year, ts.month, seq + 1)


async def next_procurement_number(session: AsyncSession, request_date: Optional[datetime] = None) -> str:
    year = _now(request_date).year
    stmt = select(func.count()).select_from(ProcurementRequest).where(
        extract("year", ProcurementRequest.request_date) == year
    )
    count = int((await session.execute(stmt)).scalar() or 0)
    return format_procurement_number(year, count + 1)


async def next_item_code(session: AsyncSession, category: int, now: Optional[datetime] = None) -> str:
    year = _now(now).year
    prefix = f"{item_code_prefix(category)}{year % 100:02d}"
    seq = await _max_sequence(session, InventoryItem.item_code, prefix)
    return format_item_code(category, year, seq + 1)


async def generate_asset_tag(session: AsyncSession, rng: Optional[random.Random] = None) -> str:
    rng = rng or random.SystemRandom()
    while True:
        tag = str(rng.randint(1_000_000, 9_999_999))
        exists = await session.execute(select(Asset.id).where(Asset.asset_tag == tag).limit(1))
        if exists.first() is None:
            return tag


async def asset_tag_exists(session: AsyncSession, tag: str, exclude_id: Optional[int] = None) -> bool:
    stmt = select(Asset.id).where(Asset.asset_tag == tag)
    if exclude_id is not None:
        stmt = stmt.where(Asset.id != exclude_id)
    return (await session.execute(stmt.limit(1))).first() is not None
