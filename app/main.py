# app/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.errors import install_error_handlers
from app.api.router import api_router
from app.core.config import get_settings
from app.core.logging import setup_logging
from app.db.base import init_models
from app.db.session import close_engines

settings = get_settings()
logger = logging.getLogger("hat")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging(settings.LOG_LEVEL, json=settings.JSON_LOG)
    init_models()
    logger.info("hospital asset tracker starting (env=%s)", settings.ENV)
    try:
        yield
    finally:
        await close_engines()


app = FastAPI(
    title="Hospital Asset Tracker",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)


@app.exception_handler(RequestValidationError)
async def _validation_exc(_req: Request, exc: RequestValidationError):
    safe = jsonable_encoder(exc.errors())
    return JSONResponse(status_code=422, content={"detail": safe})


@app.exception_handler(HTTPException)
async def _http_exc(_req: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.get("/healthz", tags=["meta"])
async def healthz():
    return {"status": "ok"}


app.include_router(api_router)
