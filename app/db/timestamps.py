# app/db/timestamps.py
"""
Flush-time timestamp maintenance.

Modified (not newly added) rows get their "last updated" column stamped:

  - Asset / MaintenanceRecord / WriteOffRecord   -> LastUpdated
  - InventoryItem / AssetInventoryMapping        -> LastUpdatedDate

ITRequest date columns are converted to UTC before they are written; naive
datetimes are taken to already be UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from sqlalchemy import event
from sqlalchemy.orm import Session

UTC = timezone.utc

_LAST_UPDATED_ATTR = {
    "Asset": "last_updated",
    "MaintenanceRecord": "last_updated",
    "WriteOffRecord": "last_updated",
    "InventoryItem": "last_updated_date",
    "AssetInventoryMapping": "last_updated_date",
}

_REQUEST_DATE_ATTRS = (
    "request_date",
    "required_by_date",
    "completed_date",
    "resolution_date",
    "modified_at",
    "created_date",
)


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _normalize_request_dates(obj: Any) -> None:
    for attr in _REQUEST_DATE_ATTRS:
        val = getattr(obj, attr, None)
        if isinstance(val, datetime):
            setattr(obj, attr, to_utc(val))


def _stamp(objs: Iterable[Any], session: Session, now: datetime) -> None:
    for obj in objs:
        name = type(obj).__name__
        attr = _LAST_UPDATED_ATTR.get(name)
        if attr is not None and session.is_modified(obj, include_collections=False):
            setattr(obj, attr, now)
        if name == "ITRequest":
            _normalize_request_dates(obj)


@event.listens_for(Session, "before_flush")
def _before_flush(session: Session, _flush_context, _instances) -> None:
    now = datetime.now(UTC)
    _stamp(list(session.dirty), session, now)
    for obj in session.new:
        if type(obj).__name__ == "ITRequest":
            _normalize_request_dates(obj)
