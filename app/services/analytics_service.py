# app/services/analytics_service.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.analytics import SpendTrend
from app.models.enums import ProcurementCategory, ProcurementStatus, label
from app.models.procurement import ProcurementRequest

logger = logging.getLogger("hat.analytics")

UTC = timezone.utc


class AnalyticsService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def rebuild_spend_trends(self, *, year: Optional[int] = None) -> List[SpendTrend]:
        """
        Replace SpendTrends with monthly totals of completed procurements.

        One row per (month, category); Amount is FinalCost, falling back to
        ActualCost and then EstimatedBudget. Period is 'YYYY-MM' and Date the
        first day of that month. With year set only that year is rebuilt.
        """
        month = func.date_trunc("month", ProcurementRequest.request_date)
        amount = func.coalesce(
            ProcurementRequest.final_cost, ProcurementRequest.actual_cost, ProcurementRequest.estimated_budget
        )
        stmt = (
            select(month.label("month"), ProcurementRequest.category, func.sum(amount), func.count())
            .where(ProcurementRequest.status == int(ProcurementStatus.COMPLETED))
            .group_by(month, ProcurementRequest.category)
            .order_by(month, ProcurementRequest.category)
        )

        clear = delete(SpendTrend)
        if year is not None:
            start = datetime(year, 1, 1, tzinfo=UTC)
            end = datetime(year + 1, 1, 1, tzinfo=UTC)
            stmt = stmt.where(ProcurementRequest.request_date >= start, ProcurementRequest.request_date < end)
            clear = clear.where(SpendTrend.date >= start, SpendTrend.date < end)

        rows = (await self.session.execute(stmt)).all()
        await self.session.execute(clear)

        out: List[SpendTrend] = []
        for first_day, category, total, count in rows:
            first_day = first_day if first_day.tzinfo else first_day.replace(tzinfo=UTC)
            try:
                cat = label(ProcurementCategory(category))
            except ValueError:
                cat = str(category)
            trend = SpendTrend(
                date=first_day,
                amount=Decimal(total or 0),
                category=cat,
                period=f"{first_day.year:04d}-{first_day.month:02d}",
                request_count=int(count),
            )
            self.session.add(trend)
            out.append(trend)

        await self.session.flush()
        logger.info("spend trends rebuilt: %d rows", len(out))
        return out

    async def spend_trends(self, *, period_from: Optional[str] = None) -> List[SpendTrend]:
        stmt = select(SpendTrend)
        if period_from:
            stmt = stmt.where(SpendTrend.period >= period_from)
        stmt = stmt.order_by(SpendTrend.date, SpendTrend.category)
        return list((await self.session.execute(stmt)).scalars())
