# app/api/routers/maintenance.py
from __future__ import annotations

from fastapi import APIRouter

from app.api.routers import maintenance_routes
from app.api.routers.maintenance_schemas import MaintenanceOut, MaintenanceScheduleIn

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


def _register_all_routes() -> None:
    maintenance_routes.register(router)


_register_all_routes()

__all__ = [
    "router",
    "MaintenanceOut",
    "MaintenanceScheduleIn",
]
