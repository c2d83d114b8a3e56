# app/api/routers/requests.py
from __future__ import annotations

from fastapi import APIRouter

from app.api.routers import requests_routes
from app.api.routers.requests_helpers import request_out as _request_out
from app.api.routers.requests_schemas import ITRequestCreateIn, ITRequestOut

router = APIRouter(prefix="/requests", tags=["requests"])


def _register_all_routes() -> None:
    requests_routes.register(router)


_register_all_routes()

__all__ = [
    "router",
    "ITRequestOut",
    "ITRequestCreateIn",
    "_request_out",
]
