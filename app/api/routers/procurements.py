# app/api/routers/procurements.py
from __future__ import annotations

from fastapi import APIRouter

from app.api.routers import procurements_routes
from app.api.routers.procurements_helpers import procurement_out as _procurement_out
from app.api.routers.procurements_schemas import ProcurementCreateIn, ProcurementOut, QuoteOut

router = APIRouter(prefix="/procurements", tags=["procurements"])


def _register_all_routes() -> None:
    procurements_routes.register(router)


_register_all_routes()

__all__ = [
    "router",
    "ProcurementOut",
    "ProcurementCreateIn",
    "QuoteOut",
    "_procurement_out",
]
