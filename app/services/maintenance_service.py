# app/services/maintenance_service.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.asset import Asset
from app.models.enums import AssetStatus, AuditAction, MaintenanceStatus, MaintenanceType, label
from app.models.maintenance import MaintenanceRecord
from app.services.audit_service import AuditService
from app.services.errors import InvalidStateError, NotFoundError, flush_or_conflict

logger = logging.getLogger("hat.maintenance")

UTC = timezone.utc

# status -> statuses it may move to
TRANSITIONS = {
    MaintenanceStatus.SCHEDULED: {MaintenanceStatus.IN_PROGRESS, MaintenanceStatus.CANCELLED},
    MaintenanceStatus.IN_PROGRESS: {
        MaintenanceStatus.COMPLETED,
        MaintenanceStatus.CANCELLED,
        MaintenanceStatus.FAILED,
    },
    MaintenanceStatus.COMPLETED: set(),
    MaintenanceStatus.CANCELLED: set(),
    MaintenanceStatus.FAILED: set(),
}

OPEN_STATUSES = (int(MaintenanceStatus.SCHEDULED), int(MaintenanceStatus.IN_PROGRESS))

# asset statuses maintenance jobs set; anything else on the asset is left alone
MAINTENANCE_ASSET_STATUSES = (int(AssetStatus.MAINTENANCE_PENDING), int(AssetStatus.UNDER_MAINTENANCE))

# assets out of service for good
RETIRED_ASSET_STATUSES = (
    int(AssetStatus.DECOMMISSIONED),
    int(AssetStatus.RETIRED),
    int(AssetStatus.WRITE_OFF),
    int(AssetStatus.LOST),
    int(AssetStatus.STOLEN),
)


def check_transition(current: int, target: MaintenanceStatus) -> None:
    cur = MaintenanceStatus(current)
    if target not in TRANSITIONS[cur]:
        raise InvalidStateError(f"maintenance cannot move from {label(cur)} to {label(target)}")


class MaintenanceService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.audit = AuditService(session)

    async def get(self, record_id: int) -> MaintenanceRecord:
        obj = await self.session.get(MaintenanceRecord, int(record_id))
        if obj is None:
            raise NotFoundError(f"maintenance record {record_id} not found")
        return obj

    async def _asset(self, asset_id: int) -> Asset:
        asset = await self.session.get(Asset, int(asset_id))
        if asset is None:
            raise NotFoundError(f"asset {asset_id} not found")
        return asset

    @staticmethod
    def _require_serviceable(asset: Asset) -> None:
        if asset.status in RETIRED_ASSET_STATUSES:
            raise InvalidStateError(
                f"asset {asset.asset_tag} is {label(AssetStatus(asset.status))} and cannot be maintained"
            )

    async def _settle_asset(self, asset: Asset, closed_id: int) -> None:
        """
        Re-derive the asset status after a job closes.

        Only a status set by maintenance is replaced: another running job keeps
        the asset UnderMaintenance, another scheduled one MaintenancePending,
        otherwise it is Active again.
        """
        if asset.status not in MAINTENANCE_ASSET_STATUSES:
            return
        stmt = select(MaintenanceRecord.status).where(
            MaintenanceRecord.asset_id == asset.id,
            MaintenanceRecord.id != closed_id,
            MaintenanceRecord.status.in_(OPEN_STATUSES),
        )
        remaining = set((await self.session.execute(stmt)).scalars())
        if int(MaintenanceStatus.IN_PROGRESS) in remaining:
            asset.status = int(AssetStatus.UNDER_MAINTENANCE)
        elif remaining:
            asset.status = int(AssetStatus.MAINTENANCE_PENDING)
        else:
            asset.status = int(AssetStatus.ACTIVE)

    async def for_asset(self, asset_id: int) -> List[MaintenanceRecord]:
        stmt = (
            select(MaintenanceRecord)
            .where(MaintenanceRecord.asset_id == asset_id)
            .order_by(MaintenanceRecord.scheduled_date.desc(), MaintenanceRecord.id.desc())
        )
        return list((await self.session.execute(stmt)).scalars())

    async def upcoming(self, *, until: Optional[datetime] = None) -> List[MaintenanceRecord]:
        stmt = select(MaintenanceRecord).where(MaintenanceRecord.status == int(MaintenanceStatus.SCHEDULED))
        if until is not None:
            stmt = stmt.where(MaintenanceRecord.scheduled_date <= until)
        stmt = stmt.order_by(MaintenanceRecord.scheduled_date)
        return list((await self.session.execute(stmt)).scalars())

    async def schedule(
        self,
        asset_id: int,
        *,
        title: str,
        scheduled_date: datetime,
        user_id: str,
        maintenance_type: int = MaintenanceType.PREVENTIVE_MAINTENANCE,
        description: Optional[str] = None,
        service_provider: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> MaintenanceRecord:
        asset = await self._asset(asset_id)
        if not (title or "").strip():
            raise ValueError("title is required")
        self._require_serviceable(asset)

        obj = MaintenanceRecord(
            asset_id=asset.id,
            maintenance_type=int(maintenance_type),
            status=int(MaintenanceStatus.SCHEDULED),
            title=title.strip(),
            description=description,
            scheduled_date=scheduled_date,
            maintenance_date=scheduled_date,
            service_provider=service_provider,
            notes=notes,
            created_by_user_id=user_id,
        )
        self.session.add(obj)
        if asset.status != int(AssetStatus.UNDER_MAINTENANCE):
            asset.status = int(AssetStatus.MAINTENANCE_PENDING)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.MAINTENANCE,
            "MaintenanceRecord",
            obj.id,
            user_id,
            f"Scheduled maintenance '{obj.title}' for asset {asset.asset_tag}",
            asset_id=asset.id,
        )
        logger.info("maintenance scheduled id=%s asset=%s", obj.id, asset.id)
        return obj

    async def start(self, record_id: int, *, user_id: str, performed_by: Optional[str] = None) -> MaintenanceRecord:
        obj = await self.get(record_id)
        check_transition(obj.status, MaintenanceStatus.IN_PROGRESS)

        asset = await self._asset(obj.asset_id)
        self._require_serviceable(asset)
        obj.status = int(MaintenanceStatus.IN_PROGRESS)
        obj.start_date = datetime.now(UTC)
        if performed_by:
            obj.performed_by = performed_by
        asset.status = int(AssetStatus.UNDER_MAINTENANCE)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.MAINTENANCE,
            "MaintenanceRecord",
            obj.id,
            user_id,
            f"Started maintenance '{obj.title}'",
            asset_id=asset.id,
        )
        return obj

    async def complete(
        self,
        record_id: int,
        *,
        user_id: str,
        work_performed: Optional[str] = None,
        parts_used: Optional[str] = None,
        cost: Optional[Decimal] = None,
        performed_by: Optional[str] = None,
        next_maintenance_date: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> MaintenanceRecord:
        obj = await self.get(record_id)
        check_transition(obj.status, MaintenanceStatus.COMPLETED)

        asset = await self._asset(obj.asset_id)
        now = datetime.now(UTC)
        obj.status = int(MaintenanceStatus.COMPLETED)
        obj.completed_date = now
        obj.maintenance_date = now
        obj.work_performed = work_performed
        obj.parts_used = parts_used
        obj.cost = cost
        obj.next_maintenance_date = next_maintenance_date
        if performed_by:
            obj.performed_by = performed_by
        if notes:
            obj.notes = notes

        asset.last_maintenance_date = now
        await self._settle_asset(asset, obj.id)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.MAINTENANCE,
            "MaintenanceRecord",
            obj.id,
            user_id,
            f"Completed maintenance '{obj.title}'",
            new_values={"cost": cost, "work_performed": work_performed, "parts_used": parts_used},
            asset_id=asset.id,
        )
        logger.info("maintenance completed id=%s asset=%s", obj.id, asset.id)
        return obj

    async def cancel(self, record_id: int, *, user_id: str, reason: Optional[str] = None) -> MaintenanceRecord:
        """
        Cancel a scheduled or running job.

        The asset status is re-derived from the jobs still open on it.
        """
        obj = await self.get(record_id)
        check_transition(obj.status, MaintenanceStatus.CANCELLED)

        asset = await self._asset(obj.asset_id)
        obj.status = int(MaintenanceStatus.CANCELLED)
        if reason:
            obj.notes = reason
        await self._settle_asset(asset, obj.id)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.MAINTENANCE,
            "MaintenanceRecord",
            obj.id,
            user_id,
            f"Cancelled maintenance '{obj.title}'" + (f". Reason: {reason}" if reason else ""),
            asset_id=asset.id,
        )
        return obj

    async def fail(self, record_id: int, *, user_id: str, reason: str) -> MaintenanceRecord:
        obj = await self.get(record_id)
        check_transition(obj.status, MaintenanceStatus.FAILED)

        asset = await self._asset(obj.asset_id)
        obj.status = int(MaintenanceStatus.FAILED)
        obj.notes = reason
        if asset.status in MAINTENANCE_ASSET_STATUSES:
            asset.status = int(AssetStatus.UNDER_REPAIR)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.MAINTENANCE,
            "MaintenanceRecord",
            obj.id,
            user_id,
            f"Maintenance '{obj.title}' failed. Reason: {reason}",
            asset_id=asset.id,
        )
        return obj
