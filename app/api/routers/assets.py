# app/api/routers/assets.py
from __future__ import annotations

from fastapi import APIRouter

from app.api.routers import assets_routes
from app.api.routers.assets_helpers import asset_out as _asset_out
from app.api.routers.assets_schemas import AssetCreateIn, AssetMovementOut, AssetOut, AssetUpdateIn

router = APIRouter(prefix="/assets", tags=["assets"])


def _register_all_routes() -> None:
    assets_routes.register(router)


_register_all_routes()

__all__ = [
    "router",
    "AssetOut",
    "AssetCreateIn",
    "AssetUpdateIn",
    "AssetMovementOut",
    "_asset_out",
]
