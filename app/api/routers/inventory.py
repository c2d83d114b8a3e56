# app/api/routers/inventory.py
from __future__ import annotations

from fastapi import APIRouter

from app.api.routers import inventory_routes
from app.api.routers.inventory_helpers import item_out as _item_out
from app.api.routers.inventory_schemas import InventoryItemCreateIn, InventoryItemOut, StockAlertOut

router = APIRouter(prefix="/inventory", tags=["inventory"])


def _register_all_routes() -> None:
    inventory_routes.register(router)


_register_all_routes()

__all__ = [
    "router",
    "InventoryItemOut",
    "InventoryItemCreateIn",
    "StockAlertOut",
    "_item_out",
]
