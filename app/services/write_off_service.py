# app/services/write_off_service.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.asset import Asset
from app.models.enums import (
    AssetStatus,
    AuditAction,
    WriteOffMethod,
    WriteOffReason,
    WriteOffStatus,
    label,
)
from app.models.write_off import WriteOffRecord
from app.services.audit_service import AuditService
from app.services.errors import ConflictError, InvalidStateError, NotFoundError, flush_or_conflict
from app.services.numbering import next_write_off_number

logger = logging.getLogger("hat.write_offs")

UTC = timezone.utc

OPEN_STATUSES = (WriteOffStatus.PENDING, WriteOffStatus.UNDER_REVIEW)
DELETABLE_STATUSES = (WriteOffStatus.PENDING, WriteOffStatus.REJECTED)


def _require(obj: WriteOffRecord, allowed, action: str) -> None:
    if WriteOffStatus(obj.status) not in allowed:
        raise InvalidStateError(
            f"write-off {obj.write_off_number} is {label(WriteOffStatus(obj.status))}; cannot {action}"
        )


class WriteOffService:
    """
    Asset disposal workflow.

    Pending -> UnderReview -> Approved -> Processed; Rejected from either open
    status, Cancelled from Pending. Approval decommissions the asset and
    processing writes it off.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.audit = AuditService(session)

    async def get(self, record_id: int) -> WriteOffRecord:
        obj = await self.session.get(WriteOffRecord, int(record_id))
        if obj is None:
            raise NotFoundError(f"write-off {record_id} not found")
        return obj

    async def list_records(self, *, status: Optional[int] = None) -> List[WriteOffRecord]:
        stmt = select(WriteOffRecord)
        if status is not None:
            stmt = stmt.where(WriteOffRecord.status == int(status))
        stmt = stmt.order_by(WriteOffRecord.request_date.desc(), WriteOffRecord.id.desc())
        return list((await self.session.execute(stmt)).scalars())

    async def for_asset(self, asset_id: int) -> List[WriteOffRecord]:
        stmt = (
            select(WriteOffRecord)
            .where(WriteOffRecord.asset_id == asset_id)
            .order_by(WriteOffRecord.request_date.desc(), WriteOffRecord.id.desc())
        )
        return list((await self.session.execute(stmt)).scalars())

    async def has_open_request(self, asset_id: int) -> bool:
        stmt = (
            select(WriteOffRecord.id)
            .where(
                WriteOffRecord.asset_id == asset_id,
                WriteOffRecord.status.in_([int(s) for s in OPEN_STATUSES]),
            )
            .limit(1)
        )
        return (await self.session.execute(stmt)).first() is not None

    # ------------------------------------------------------------------

    async def submit(
        self,
        asset_id: int,
        *,
        reason: int,
        description: str,
        user_id: str,
        justification: Optional[str] = None,
        method: int = WriteOffMethod.OTHER,
        estimated_value: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> WriteOffRecord:
        asset = await self.session.get(Asset, int(asset_id))
        if asset is None:
            raise NotFoundError(f"asset {asset_id} not found")
        if await self.has_open_request(asset.id):
            raise ConflictError(f"asset {asset.asset_tag} already has an open write-off request")

        now = datetime.now(UTC)
        obj = WriteOffRecord(
            asset_id=asset.id,
            reason=int(WriteOffReason(reason)),
            method=int(WriteOffMethod(method)),
            status=int(WriteOffStatus.PENDING),
            description=description,
            justification=justification or description,
            notes=notes,
            estimated_value=estimated_value if estimated_value is not None else asset.purchase_price,
            requested_by_user_id=user_id,
            request_date=now,
            write_off_number=await next_write_off_number(self.session, now),
        )
        self.session.add(obj)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.CREATE,
            "WriteOffRecord",
            obj.id,
            user_id,
            f"Write-off request {obj.write_off_number} submitted for asset {asset.asset_tag}",
            asset_id=asset.id,
        )
        logger.info("write-off submitted no=%s asset=%s", obj.write_off_number, asset.id)
        return obj

    async def review(self, record_id: int, *, user_id: str, notes: Optional[str] = None) -> WriteOffRecord:
        obj = await self.get(record_id)
        _require(obj, (WriteOffStatus.PENDING,), "review")

        obj.status = int(WriteOffStatus.UNDER_REVIEW)
        obj.reviewed_by_user_id = user_id
        obj.review_date = datetime.now(UTC)
        obj.review_notes = notes
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.UPDATE,
            "WriteOffRecord",
            obj.id,
            user_id,
            f"Write-off {obj.write_off_number} under review",
            asset_id=obj.asset_id,
        )
        return obj

    async def approve(self, record_id: int, *, user_id: str, notes: Optional[str] = None) -> WriteOffRecord:
        obj = await self.get(record_id)
        _require(obj, OPEN_STATUSES, "approve")

        obj.status = int(WriteOffStatus.APPROVED)
        obj.approved_by_user_id = user_id
        obj.approval_date = datetime.now(UTC)
        obj.approval_notes = notes

        asset = await self.session.get(Asset, obj.asset_id)
        if asset is not None:
            asset.status = int(AssetStatus.DECOMMISSIONED)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.UPDATE,
            "WriteOffRecord",
            obj.id,
            user_id,
            f"Write-off approved for asset {asset.asset_tag if asset else obj.asset_id}",
            asset_id=obj.asset_id,
        )
        return obj

    async def reject(self, record_id: int, *, user_id: str, reason: str) -> WriteOffRecord:
        obj = await self.get(record_id)
        _require(obj, OPEN_STATUSES, "reject")

        obj.status = int(WriteOffStatus.REJECTED)
        obj.reviewed_by_user_id = user_id
        obj.review_date = datetime.now(UTC)
        obj.review_notes = reason
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.UPDATE,
            "WriteOffRecord",
            obj.id,
            user_id,
            f"Write-off {obj.write_off_number} rejected. Reason: {reason}",
            asset_id=obj.asset_id,
        )
        return obj

    async def process(
        self,
        record_id: int,
        *,
        user_id: str,
        notes: Optional[str] = None,
        disposal_method: Optional[str] = None,
        disposal_vendor: Optional[str] = None,
        salvage_value: Optional[Decimal] = None,
        certificate_of_destruction: Optional[str] = None,
    ) -> WriteOffRecord:
        obj = await self.get(record_id)
        _require(obj, (WriteOffStatus.APPROVED,), "process")

        now = datetime.now(UTC)
        obj.status = int(WriteOffStatus.PROCESSED)
        obj.processed_by_user_id = user_id
        obj.processing_date = now
        obj.processing_notes = notes
        obj.disposal_date = now
        obj.disposal_method = disposal_method
        obj.disposal_vendor = disposal_vendor
        obj.salvage_value = salvage_value
        obj.certificate_of_destruction = certificate_of_destruction

        asset = await self.session.get(Asset, obj.asset_id)
        if asset is not None:
            asset.status = int(AssetStatus.WRITE_OFF)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.UPDATE,
            "WriteOffRecord",
            obj.id,
            user_id,
            f"Write-off processed for asset {asset.asset_tag if asset else obj.asset_id}",
            asset_id=obj.asset_id,
        )
        logger.info("write-off processed no=%s asset=%s", obj.write_off_number, obj.asset_id)
        return obj

    async def cancel(self, record_id: int, *, user_id: str, reason: Optional[str] = None) -> WriteOffRecord:
        obj = await self.get(record_id)
        _require(obj, (WriteOffStatus.PENDING,), "cancel")

        obj.status = int(WriteOffStatus.CANCELLED)
        if reason:
            obj.additional_notes = reason
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.UPDATE,
            "WriteOffRecord",
            obj.id,
            user_id,
            f"Write-off {obj.write_off_number} cancelled",
            asset_id=obj.asset_id,
        )
        return obj

    async def delete(self, record_id: int, *, user_id: str) -> None:
        obj = await self.get(record_id)
        _require(obj, DELETABLE_STATUSES, "delete")

        number, asset_id = obj.write_off_number, obj.asset_id
        await self.session.delete(obj)
        await flush_or_conflict(self.session)

        await self.audit.log(
            AuditAction.DELETE,
            "WriteOffRecord",
            record_id,
            user_id,
            f"Write-off record {number} deleted",
            asset_id=asset_id,
        )

    async def summary(
        self,
        *,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Counts and estimated value grouped by status and by reason.

        Keys of by_status / by_reason are the PascalCase enum labels.
        """
        conds = []
        if date_from is not None:
            conds.append(WriteOffRecord.request_date >= date_from)
        if date_to is not None:
            conds.append(WriteOffRecord.request_date <= date_to)

        value = func.coalesce(func.sum(WriteOffRecord.estimated_value), 0)

        by_status: Dict[str, Dict[str, Any]] = {}
        stmt = select(WriteOffRecord.status, func.count(), value).where(*conds).group_by(WriteOffRecord.status)
        for status, count, total in (await self.session.execute(stmt)).all():
            by_status[label(WriteOffStatus(status))] = {"count": int(count), "estimated_value": Decimal(total)}

        by_reason: Dict[str, Dict[str, Any]] = {}
        stmt = select(WriteOffRecord.reason, func.count(), value).where(*conds).group_by(WriteOffRecord.reason)
        for reason, count, total in (await self.session.execute(stmt)).all():
            by_reason[label(WriteOffReason(reason))] = {"count": int(count), "estimated_value": Decimal(total)}

        return {
            "total": sum(v["count"] for v in by_status.values()),
            "estimated_value": sum((v["estimated_value"] for v in by_status.values()), Decimal("0")),
            "by_status": by_status,
            "by_reason": by_reason,
        }
