# app/services/asset_service.py
from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.models.asset import Asset, AssetMovement
from app.models.enums import AssetStatus, AuditAction, MovementType, label
from app.services.audit_service import AuditService
from app.services.errors import ConflictError, NotFoundError, flush_or_conflict
from app.services.numbering import asset_tag_exists, generate_asset_tag, internal_serial_number

logger = logging.getLogger("hat.assets")

UTC = timezone.utc

# fields update_asset() may change
UPDATABLE_FIELDS = (
    "asset_tag",
    "category",
    "brand",
    "model",
    "serial_number",
    "description",
    "installation_date",
    "status",
    "location_id",
    "assigned_to_user_id",
    "responsible_person",
    "department",
    "warranty_expiry",
    "supplier",
    "purchase_price",
    "notes",
    "acquisition_date",
)


def read_path_list(raw: Optional[str]) -> List[str]:
    """
    DocumentPaths / ImagePaths -> list.

    Stored as a JSON list; older rows hold a ';'-separated string.
    """
    if not raw:
        return []
    try:
        val = json.loads(raw)
    except ValueError:
        return [p for p in raw.split(";") if p]
    if isinstance(val, list):
        return [str(p) for p in val if p]
    return [str(val)]


def write_path_list(paths: List[str]) -> Optional[str]:
    return json.dumps(paths, ensure_ascii=False) if paths else None


def snapshot(asset: Asset) -> Dict[str, Any]:
    return {f: getattr(asset, f) for f in UPDATABLE_FIELDS}


def qr_payload(asset_tag: str) -> str:
    return f"ASSET:{asset_tag}"


class AssetService:
    """
    Asset write paths.

    Every write goes through the session passed in and emits an AuditLog row;
    nothing here commits. Assets are never deleted: decommission and write-off
    are status changes.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.audit = AuditService(session)

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    async def get(self, asset_id: int) -> Asset:
        obj = await self.session.get(Asset, int(asset_id))
        if obj is None:
            raise NotFoundError(f"asset {asset_id} not found")
        return obj

    async def get_by_tag(self, asset_tag: str) -> Optional[Asset]:
        stmt = select(Asset).where(Asset.asset_tag == asset_tag)
        return (await self.session.execute(stmt)).scalars().first()

    async def search(
        self,
        term: Optional[str] = None,
        *,
        status: Optional[int] = None,
        category: Optional[int] = None,
        location_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Asset]:
        stmt = select(Asset)
        if term and term.strip():
            like = f"%{term.strip()}%"
            stmt = stmt.where(
                or_(
                    Asset.asset_tag.ilike(like),
                    Asset.brand.ilike(like),
                    Asset.model.ilike(like),
                    Asset.serial_number.ilike(like),
                    Asset.description.ilike(like),
                )
            )
        if status is not None:
            stmt = stmt.where(Asset.status == int(status))
        if category is not None:
            stmt = stmt.where(Asset.category == int(category))
        if location_id is not None:
            stmt = stmt.where(Asset.location_id == int(location_id))
        stmt = stmt.order_by(Asset.asset_tag).offset(offset).limit(limit)
        return list((await self.session.execute(stmt)).scalars())

    async def movements(self, asset_id: int) -> List[AssetMovement]:
        stmt = (
            select(AssetMovement)
            .where(AssetMovement.asset_id == asset_id)
            .order_by(AssetMovement.movement_date.desc(), AssetMovement.id.desc())
        )
        return list((await self.session.execute(stmt)).scalars())

    async def assets_needing_maintenance(self, now: Optional[datetime] = None) -> List[Asset]:
        """Active assets never maintained, or last maintained before the interval."""
        now = now or datetime.now(UTC)
        cutoff = now - timedelta(days=get_settings().MAINTENANCE_INTERVAL_DAYS)
        stmt = (
            select(Asset)
            .where(
                Asset.status == int(AssetStatus.ACTIVE),
                or_(Asset.last_maintenance_date.is_(None), Asset.last_maintenance_date < cutoff),
            )
            .order_by(Asset.last_maintenance_date.asc().nulls_first(), Asset.asset_tag)
        )
        return list((await self.session.execute(stmt)).scalars())

    async def expired_warranty_assets(self, now: Optional[datetime] = None) -> List[Asset]:
        now = now or datetime.now(UTC)
        stmt = (
            select(Asset)
            .where(Asset.warranty_expiry.is_not(None), Asset.warranty_expiry < now)
            .order_by(Asset.warranty_expiry)
        )
        return list((await self.session.execute(stmt)).scalars())

    # ------------------------------------------------------------------
    # writes
    # ------------------------------------------------------------------

    async def register_asset(
        self,
        *,
        user_id: str,
        category: int,
        brand: str,
        model: str,
        serial_number: str,
        description: str,
        asset_tag: Optional[str] = None,
        status: int = AssetStatus.ACTIVE,
        location_id: Optional[int] = None,
        assigned_to_user_id: Optional[str] = None,
        installation_date: Optional[datetime] = None,
        warranty_expiry: Optional[datetime] = None,
        supplier: Optional[str] = None,
        purchase_price: Optional[Decimal] = None,
        department: Optional[str] = None,
        responsible_person: Optional[str] = None,
        notes: Optional[str] = None,
        acquisition_date: Optional[datetime] = None,
    ) -> Asset:
        tag = (asset_tag or "").strip()
        if tag:
            if await asset_tag_exists(self.session, tag):
                raise ConflictError(f"asset tag {tag} already exists")
        else:
            tag = await generate_asset_tag(self.session)

        now = datetime.now(UTC)
        obj = Asset(
            asset_tag=tag,
            category=int(category),
            brand=brand,
            model=model,
            serial_number=serial_number,
            internal_serial_number=internal_serial_number(now),
            qr_code_data=qr_payload(tag),
            description=description,
            installation_date=installation_date or now,
            created_date=now,
            last_updated=now,
            status=int(status),
            location_id=location_id,
            assigned_to_user_id=assigned_to_user_id,
            warranty_expiry=warranty_expiry,
            supplier=supplier,
            purchase_price=purchase_price,
            department=department,
            responsible_person=responsible_person,
            notes=notes,
            acquisition_date=acquisition_date,
        )
        self.session.add(obj)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.CREATE,
            "Asset",
            obj.id,
            user_id,
            f"Created asset {obj.asset_tag}",
            new_values=snapshot(obj),
            asset_id=obj.id,
        )
        logger.info("asset registered id=%s tag=%s", obj.id, obj.asset_tag)
        return obj

    async def update_asset(self, asset_id: int, changes: Dict[str, Any], *, user_id: str) -> Asset:
        obj = await self.get(asset_id)

        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"unknown asset fields: {', '.join(sorted(unknown))}")

        new_tag = changes.get("asset_tag")
        if new_tag is not None and new_tag != obj.asset_tag:
            if await asset_tag_exists(self.session, new_tag, exclude_id=obj.id):
                raise ConflictError(f"asset tag {new_tag} already exists")

        before = snapshot(obj)
        for field, value in changes.items():
            setattr(obj, field, value)
        if new_tag is not None:
            obj.qr_code_data = qr_payload(obj.asset_tag)
        obj.last_updated = datetime.now(UTC)

        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.UPDATE,
            "Asset",
            obj.id,
            user_id,
            f"Updated asset {obj.asset_tag}",
            old_values=before,
            new_values=snapshot(obj),
            asset_id=obj.id,
        )
        return obj

    async def move_asset(
        self,
        asset_id: int,
        *,
        to_location_id: Optional[int],
        to_user_id: Optional[str],
        reason: str,
        performed_by: str,
        notes: Optional[str] = None,
    ) -> AssetMovement:
        """
        Move to a location and/or custodian.

        from_* is taken from the asset's current state; the movement type is
        LocationTransfer when the location changes, PersonTransfer otherwise.
        """
        obj = await self.get(asset_id)

        from_location = obj.location_id
        from_user = obj.assigned_to_user_id
        movement_type = (
            MovementType.LOCATION_TRANSFER if from_location != to_location_id else MovementType.PERSON_TRANSFER
        )

        obj.location_id = to_location_id
        obj.assigned_to_user_id = to_user_id

        mv = AssetMovement(
            asset_id=obj.id,
            movement_type=int(movement_type),
            movement_date=datetime.now(UTC),
            from_location_id=from_location,
            to_location_id=to_location_id,
            from_user_id=from_user,
            to_user_id=to_user_id,
            reason=reason,
            notes=notes,
            performed_by_user_id=performed_by,
        )
        self.session.add(mv)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.MOVE,
            "Asset",
            obj.id,
            performed_by,
            f"Moved asset {obj.asset_tag}. Reason: {reason}",
            old_values={"location_id": from_location, "assigned_to_user_id": from_user},
            new_values={"location_id": to_location_id, "assigned_to_user_id": to_user_id},
            asset_id=obj.id,
        )
        return mv

    async def change_status(self, asset_id: int, new_status: int, *, reason: str, user_id: str) -> Asset:
        obj = await self.get(asset_id)
        old = AssetStatus(obj.status)
        new = AssetStatus(new_status)
        obj.status = int(new)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.STATUS_CHANGE,
            "Asset",
            obj.id,
            user_id,
            f"Changed status from {label(old)} to {label(new)}. Reason: {reason}",
            asset_id=obj.id,
        )
        return obj

    async def assign(self, asset_id: int, assignee_id: str, *, user_id: str) -> Asset:
        obj = await self.get(asset_id)
        previous = obj.assigned_to_user_id
        obj.assigned_to_user_id = assignee_id
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.ASSIGNMENT,
            "Asset",
            obj.id,
            user_id,
            f"Assigned asset {obj.asset_tag} to user {assignee_id}",
            old_values={"assigned_to_user_id": previous},
            new_values={"assigned_to_user_id": assignee_id},
            asset_id=obj.id,
        )
        return obj

    async def unassign(self, asset_id: int, *, user_id: str) -> Asset:
        obj = await self.get(asset_id)
        previous = obj.assigned_to_user_id
        obj.assigned_to_user_id = None
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.ASSIGNMENT,
            "Asset",
            obj.id,
            user_id,
            f"Unassigned asset {obj.asset_tag}",
            old_values={"assigned_to_user_id": previous},
            new_values={"assigned_to_user_id": None},
            asset_id=obj.id,
        )
        return obj

    # ---- documents / images ----

    async def _edit_paths(self, asset_id: int, attr: str, path: str, *, add: bool, user_id: str) -> List[str]:
        obj = await self.get(asset_id)
        paths = read_path_list(getattr(obj, attr))
        if add:
            if path not in paths:
                paths.append(path)
        else:
            if path not in paths:
                raise NotFoundError(f"{path} is not attached to asset {obj.asset_tag}")
            paths.remove(path)

        setattr(obj, attr, write_path_list(paths))
        await flush_or_conflict(self.session)

        kind = "document" if attr == "document_paths" else "image"
        verb = "Attached" if add else "Removed"
        await self.audit.log(
            AuditAction.UPDATE,
            "Asset",
            obj.id,
            user_id,
            f"{verb} {kind} {path}",
            asset_id=obj.id,
        )
        return paths

    async def attach_document(self, asset_id: int, path: str, *, user_id: str) -> List[str]:
        return await self._edit_paths(asset_id, "document_paths", path, add=True, user_id=user_id)

    async def remove_document(self, asset_id: int, path: str, *, user_id: str) -> List[str]:
        return await self._edit_paths(asset_id, "document_paths", path, add=False, user_id=user_id)

    async def attach_image(self, asset_id: int, path: str, *, user_id: str) -> List[str]:
        return await self._edit_paths(asset_id, "image_paths", path, add=True, user_id=user_id)

    async def remove_image(self, asset_id: int, path: str, *, user_id: str) -> List[str]:
        return await self._edit_paths(asset_id, "image_paths", path, add=False, user_id=user_id)

    # ---- retirement ----

    async def decommission_asset(self, asset_id: int, *, reason: str, user_id: str) -> Asset:
        obj = await self.get(asset_id)
        old = AssetStatus(obj.status)
        obj.status = int(AssetStatus.DECOMMISSIONED)

        self.session.add(
            AssetMovement(
                asset_id=obj.id,
                movement_type=int(MovementType.DECOMMISSION),
                movement_date=datetime.now(UTC),
                from_location_id=obj.location_id,
                to_location_id=obj.location_id,
                from_user_id=obj.assigned_to_user_id,
                to_user_id=obj.assigned_to_user_id,
                reason=reason,
                performed_by_user_id=user_id,
            )
        )
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.STATUS_CHANGE,
            "Asset",
            obj.id,
            user_id,
            f"Changed status from {label(old)} to {label(AssetStatus.DECOMMISSIONED)}. Reason: {reason}",
            asset_id=obj.id,
        )
        logger.info("asset decommissioned id=%s tag=%s", obj.id, obj.asset_tag)
        return obj
