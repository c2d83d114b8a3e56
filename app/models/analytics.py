# app/models/analytics.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Float, Identity, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


# ---------------------------------------------------------------------------
# Budget / spend analytics (derived tables, no FKs)
# ---------------------------------------------------------------------------


class BudgetCategoryAnalysis(Base):
    __tablename__ = "BudgetCategoryAnalyses"

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    category: Mapped[Optional[str]] = mapped_column("Category", Text, nullable=True)
    budget: Mapped[Decimal] = mapped_column("Budget", Numeric, nullable=False)
    spent: Mapped[Decimal] = mapped_column("Spent", Numeric, nullable=False)
    remaining: Mapped[Decimal] = mapped_column("Remaining", Numeric, nullable=False)
    allocated_budget: Mapped[Decimal] = mapped_column("AllocatedBudget", Numeric, nullable=False)
    actual_spend: Mapped[Decimal] = mapped_column("ActualSpend", Numeric, nullable=False)
    remaining_budget: Mapped[Decimal] = mapped_column("RemainingBudget", Numeric, nullable=False)
    spend_rate: Mapped[Decimal] = mapped_column("SpendRate", Numeric, nullable=False)


class BudgetDepartmentAnalysis(Base):
    __tablename__ = "BudgetDepartmentAnalyses"

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    department: Mapped[Optional[str]] = mapped_column("Department", Text, nullable=True)
    budget: Mapped[Decimal] = mapped_column("Budget", Numeric, nullable=False)
    spent: Mapped[Decimal] = mapped_column("Spent", Numeric, nullable=False)
    remaining: Mapped[Decimal] = mapped_column("Remaining", Numeric, nullable=False)
    allocated_budget: Mapped[Decimal] = mapped_column("AllocatedBudget", Numeric, nullable=False)
    actual_spend: Mapped[Decimal] = mapped_column("ActualSpend", Numeric, nullable=False)
    remaining_budget: Mapped[Decimal] = mapped_column("RemainingBudget", Numeric, nullable=False)
    spend_rate: Mapped[Decimal] = mapped_column("SpendRate", Numeric, nullable=False)


class CategoryForecast(Base):
    __tablename__ = "CategoryForecasts"

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    category: Mapped[Optional[str]] = mapped_column("Category", Text, nullable=True)
    forecast_amount: Mapped[Decimal] = mapped_column("ForecastAmount", Numeric, nullable=False)
    period_start: Mapped[datetime] = mapped_column("PeriodStart", DateTime(timezone=True), nullable=False)
    period_end: Mapped[datetime] = mapped_column("PeriodEnd", DateTime(timezone=True), nullable=False)
    forecasted_value: Mapped[Decimal] = mapped_column("ForecastedValue", Numeric, nullable=False)
    predicted_spend: Mapped[Decimal] = mapped_column("PredictedSpend", Numeric, nullable=False)
    confidence: Mapped[float] = mapped_column("Confidence", Float, nullable=False)
    trend_direction: Mapped[Optional[str]] = mapped_column("TrendDirection", Text, nullable=True)


class SpendAnomaly(Base):
    __tablename__ = "SpendAnomalies"

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    date: Mapped[datetime] = mapped_column("Date", DateTime(timezone=True), nullable=False)
    amount: Mapped[Decimal] = mapped_column("Amount", Numeric, nullable=False)
    description: Mapped[Optional[str]] = mapped_column("Description", Text, nullable=True)
    type: Mapped[Optional[str]] = mapped_column("Type", Text, nullable=True)
    # procurement id, no FK
    request_id: Mapped[int] = mapped_column("RequestId", Integer, nullable=False)
    anomaly_type: Mapped[Optional[str]] = mapped_column("AnomalyType", Text, nullable=True)
    severity: Mapped[Optional[str]] = mapped_column("Severity", Text, nullable=True)


class SpendTrend(Base):
    """Monthly spend per procurement category; Period is 'YYYY-MM'"""

    __tablename__ = "SpendTrends"

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    date: Mapped[datetime] = mapped_column("Date", DateTime(timezone=True), nullable=False)
    amount: Mapped[Decimal] = mapped_column("Amount", Numeric, nullable=False)
    category: Mapped[Optional[str]] = mapped_column("Category", Text, nullable=True)
    period: Mapped[Optional[str]] = mapped_column("Period", Text, nullable=True)
    request_count: Mapped[int] = mapped_column("RequestCount", Integer, nullable=False)


# ---------------------------------------------------------------------------
# Bug tracking / versions
# ---------------------------------------------------------------------------


class BugTracking(Base):
    __tablename__ = "BugTrackings"

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    title: Mapped[Optional[str]] = mapped_column("Title", Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column("Description", Text, nullable=True)
    reported_date: Mapped[datetime] = mapped_column("ReportedDate", DateTime(timezone=True), nullable=False)
    status: Mapped[Optional[str]] = mapped_column("Status", Text, nullable=True)


class BugFixHistory(Base):
    __tablename__ = "BugFixHistories"

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    # plain integer, no FK to BugTrackings
    bug_tracking_id: Mapped[int] = mapped_column("BugTrackingId", Integer, nullable=False)
    fix_description: Mapped[Optional[str]] = mapped_column("FixDescription", Text, nullable=True)
    fix_date: Mapped[datetime] = mapped_column("FixDate", DateTime(timezone=True), nullable=False)
    fixed_by: Mapped[Optional[str]] = mapped_column("FixedBy", Text, nullable=True)


class SystemVersion(Base):
    __tablename__ = "SystemVersions"

    id: Mapped[int] = mapped_column("Id", Integer, Identity(), primary_key=True)
    version: Mapped[Optional[str]] = mapped_column("Version", Text, nullable=True)
    release_date: Mapped[datetime] = mapped_column("ReleaseDate", DateTime(timezone=True), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column("Notes", Text, nullable=True)
