# app/api/routers/write_offs.py
from __future__ import annotations

from fastapi import APIRouter

from app.api.routers import write_offs_routes
from app.api.routers.write_offs_schemas import WriteOffOut, WriteOffSubmitIn, WriteOffSummaryOut

router = APIRouter(prefix="/write-offs", tags=["write-offs"])


def _register_all_routes() -> None:
    write_offs_routes.register(router)


_register_all_routes()

__all__ = [
    "router",
    "WriteOffOut",
    "WriteOffSubmitIn",
    "WriteOffSummaryOut",
]
