# app/api/routers/locations.py
from __future__ import annotations

from fastapi import APIRouter

from app.api.routers import locations_routes
from app.api.routers.locations_schemas import LocationActiveIn, LocationCreateIn, LocationOut

router = APIRouter(prefix="/locations", tags=["locations"])


def _register_all_routes() -> None:
    locations_routes.register(router)


_register_all_routes()

__all__ = [
    "router",
    "LocationOut",
    "LocationCreateIn",
    "LocationActiveIn",
]
