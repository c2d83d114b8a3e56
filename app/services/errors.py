# app/services/errors.py
from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession


class NotFoundError(Exception):
    """Entity does not exist"""


class ConflictError(Exception):
    """Duplicate business key or other integrity violation"""


class InvalidStateError(Exception):
    """Operation not allowed in the entity's current status"""


class InsufficientStockError(Exception):
    """Requested quantity exceeds what is on hand / available"""


# unique index -> readable business key
_UNIQUE_KEYS = {
    "IX_Assets_AssetTag": "asset tag",
    "IX_InventoryItems_ItemCode": "item code",
    "IX_ITRequests_RequestNumber": "request number",
    "IX_ProcurementRequests_ProcurementNumber": "procurement number",
    "IX_WriteOffRecords_WriteOffNumber": "write-off number",
    "IX_Locations_Building_Floor_Room": "location",
    "IX_AutomationRules_RuleName": "rule name",
    "IX_RequestTemplates_Name": "template name",
    "RoleNameIndex": "role name",
    "UserNameIndex": "user name",
}


def conflict_from_integrity(exc: IntegrityError) -> ConflictError:
    """Map an IntegrityError to a ConflictError naming the violated key."""
    raw = str(getattr(exc, "orig", exc))
    for index_name, label in _UNIQUE_KEYS.items():
        if index_name in raw:
            return ConflictError(f"duplicate {label}")
    if "foreign key" in raw.lower():
        return ConflictError(f"referenced row missing or still in use: {raw.splitlines()[0]}")
    return ConflictError(f"integrity error: {raw.splitlines()[0] if raw else exc}")


async def flush_or_conflict(session: AsyncSession) -> None:
    """
    Flush pending changes; integrity violations surface as ConflictError.

    The session is left for the caller to roll back.
    """
    try:
        await session.flush()
    except IntegrityError as e:
        raise conflict_from_integrity(e) from e
