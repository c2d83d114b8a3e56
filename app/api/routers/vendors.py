# app/api/routers/vendors.py
from __future__ import annotations

from fastapi import APIRouter

from app.api.routers import vendors_routes
from app.api.routers.vendors_schemas import VendorCreateIn, VendorOut

router = APIRouter(prefix="/vendors", tags=["vendors"])


def _register_all_routes() -> None:
    vendors_routes.register(router)


_register_all_routes()

__all__ = [
    "router",
    "VendorOut",
    "VendorCreateIn",
]
