# app/api/errors.py
from __future__ import annotations

import logging
from typing import Dict, Type

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.services.errors import (
    ConflictError,
    InsufficientStockError,
    InvalidStateError,
    NotFoundError,
)

logger = logging.getLogger("hat.api")

# domain error -> HTTP status
ERROR_STATUS: Dict[Type[Exception], int] = {
    NotFoundError: 404,
    ConflictError: 409,
    InvalidStateError: 409,
    InsufficientStockError: 409,
    ValueError: 422,
}


def _domain_error_handler(status_code: int):
    async def handler(_req: Request, exc: Exception) -> JSONResponse:
        logger.info("%s -> %s: %s", type(exc).__name__, status_code, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


async def _unhandled_error(_req: Request, exc: Exception) -> JSONResponse:
    logger.exception("UNHANDLED_EXC: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "INTERNAL_ERROR"})


def install_error_handlers(app: FastAPI) -> None:
    for exc_type, status_code in ERROR_STATUS.items():
        app.add_exception_handler(exc_type, _domain_error_handler(status_code))
    app.add_exception_handler(Exception, _unhandled_error)
