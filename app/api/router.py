# app/api/router.py
from __future__ import annotations

from fastapi import APIRouter

from app.api.routers import (
    assets,
    audit_logs,
    inventory,
    locations,
    maintenance,
    procurements,
    requests,
    vendors,
    write_offs,
)

api_router = APIRouter()

# ---- locations / assets ----
api_router.include_router(locations.router)
api_router.include_router(assets.router)
api_router.include_router(maintenance.router)
api_router.include_router(write_offs.router)

# ---- stock ----
api_router.include_router(inventory.router)

# ---- requests / procurement ----
api_router.include_router(requests.router)
api_router.include_router(procurements.router)
api_router.include_router(vendors.router)

# ---- audit ----
api_router.include_router(audit_logs.router)
