# app/api/routers/audit_logs.py
from __future__ import annotations

from fastapi import APIRouter

from app.api.routers import audit_logs_routes
from app.api.routers.audit_logs_schemas import AuditLogOut

router = APIRouter(prefix="/audit-logs", tags=["audit-logs"])


def _register_all_routes() -> None:
    audit_logs_routes.register(router)


_register_all_routes()

__all__ = [
    "router",
    "AuditLogOut",
]
