# tests/conftest.py
from __future__ import annotations

import os
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.api.deps import get_session
from app.db.session import normalize_pg_url
from app.main import app
from tests.factories import ADMIN_ID, LOCATION_ID, TECH_ID

# ==========================
# DSN: explicit only, database tests skip without it
# ==========================

_RAW_URL = os.getenv("HAT_TEST_DATABASE_URL") or os.getenv("HAT_DATABASE_URL")
DATABASE_URL = normalize_pg_url(_RAW_URL) if _RAW_URL else None

# every application table, children first
APP_TABLES = (
    "AutomationLogs",
    "AutomationRules",
    "Notifications",
    "EventSubscriptions",
    "WorkflowEvents",
    "WorkflowStepInstances",
    "WorkflowInstances",
    "BugFixHistories",
    "BugTrackings",
    "SystemVersions",
    "SpendTrends",
    "SpendAnomalies",
    "CategoryForecasts",
    "BudgetDepartmentAnalyses",
    "BudgetCategoryAnalyses",
    "QuoteItems",
    "VendorQuotes",
    "ProcurementDocuments",
    "ProcurementActivities",
    "ProcurementApprovals",
    "ProcurementItems",
    "ProcurementRequests",
    "Vendors",
    "RequestTemplates",
    "RequestEscalations",
    "RequestComments",
    "RequestAttachments",
    "RequestApprovals",
    "RequestActivities",
    "RequestActions",
    "ITRequests",
    "QualityAssessmentRecords",
    "InventoryTransactions",
    "InventoryMovements",
    "AssetInventoryMappings",
    "InventoryItems",
    "WriteOffRecords",
    "MaintenanceRecords",
    "AuditLogs",
    "AssetMovements",
    "Assets",
    "Locations",
    "AspNetUserTokens",
    "AspNetUserRoles",
    "AspNetUserLogins",
    "AspNetUserClaims",
    "AspNetRoleClaims",
    "AspNetUsers",
    "AspNetRoles",
)


# =========================================
# per-test engine (NullPool, no connections shared across event loops)
# =========================================
@pytest_asyncio.fixture(scope="function")
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    if not DATABASE_URL:
        pytest.skip("HAT_TEST_DATABASE_URL is not set")
    engine = create_async_engine(DATABASE_URL, poolclass=NullPool, future=True)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
def async_session_maker(async_engine: AsyncEngine):
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


# =========================================
# clean database + minimal seed (two users, one location)
#   assumes `alembic upgrade head` has been run against the test database
# =========================================
@pytest_asyncio.fixture(scope="function")
async def seeded_db(async_engine: AsyncEngine) -> AsyncEngine:
    tables = ", ".join(f'"{t}"' for t in APP_TABLES)
    async with async_engine.begin() as conn:
        await conn.execute(text(f"TRUNCATE TABLE {tables} RESTART IDENTITY CASCADE"))

        await conn.execute(
            text(
                """
                INSERT INTO "AspNetUsers" (
                    "Id", "FirstName", "LastName", "Department", "IsActive",
                    "UserName", "NormalizedUserName", "Email", "NormalizedEmail",
                    "EmailConfirmed", "PhoneNumberConfirmed", "TwoFactorEnabled",
                    "LockoutEnabled", "AccessFailedCount"
                )
                VALUES
                  (:admin, 'Ada', 'Admin', 'IT', true,
                   'admin', 'ADMIN', 'admin@hospital.test', 'ADMIN@HOSPITAL.TEST',
                   true, false, false, false, 0),
                  (:tech, 'Tom', 'Tech', 'IT', true,
                   'tech', 'TECH', 'tech@hospital.test', 'TECH@HOSPITAL.TEST',
                   true, false, false, false, 0)
                """
            ),
            {"admin": ADMIN_ID, "tech": TECH_ID},
        )

        await conn.execute(
            text(
                """
                INSERT INTO "Locations" ("Building", "Floor", "Room", "Description", "IsActive")
                VALUES ('Main', '1', '101', 'IT store room', true)
                """
            )
        )
    return async_engine


@pytest_asyncio.fixture(scope="function")
async def session(async_session_maker, seeded_db) -> AsyncGenerator[AsyncSession, None]:
    """
    Session for service tests; rolled back at teardown (seeded_db truncates anyway).
    """
    async with async_session_maker() as sess:
        try:
            yield sess
        finally:
            if sess.in_transaction():
                await sess.rollback()


# =========================================
# FastAPI / httpx AsyncClient bound to the test engine
# =========================================
@pytest_asyncio.fixture(scope="function")
async def client(async_session_maker, seeded_db) -> AsyncGenerator[httpx.AsyncClient, None]:
    async def _session_override() -> AsyncGenerator[AsyncSession, None]:
        async with async_session_maker() as sess:
            try:
                yield sess
                if sess.in_transaction():
                    await sess.commit()
            except Exception:
                if sess.in_transaction():
                    await sess.rollback()
                raise

    app.dependency_overrides[get_session] = _session_override
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(
            transport=transport,
            base_url="http://testserver",
            headers={"X-User-Id": ADMIN_ID},
            timeout=httpx.Timeout(10.0, connect=5.0, read=10.0, write=5.0, pool=5.0),
        ) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_session, None)
