# tests/api/test_app_meta.py
from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from app.main import app

_INTERNAL_PATH_PREFIXES = ("/openapi.json", "/docs", "/redoc")


def _iter_routes(app: FastAPI):
    for r in app.routes:
        methods = getattr(r, "methods", None) or []
        path = getattr(r, "path", None)
        yield methods, path, getattr(r, "endpoint", None)


def test_no_conflicting_method_path_pairs():
    mapping: dict[tuple[str, str], set[int]] = {}
    for methods, path, endpoint in _iter_routes(app):
        if not path or path.startswith(_INTERNAL_PATH_PREFIXES):
            continue
        for m in methods:
            mapping.setdefault((m.upper(), path), set()).add(id(endpoint))

    conflicts = sorted(key for key, ids in mapping.items() if len(ids) > 1)
    assert not conflicts, f"Conflicting (METHOD, PATH) routes: {conflicts}"


def test_openapi_lists_every_area():
    paths = app.openapi()["paths"]
    for prefix in (
        "/assets",
        "/audit-logs",
        "/inventory",
        "/locations",
        "/maintenance",
        "/procurements",
        "/requests",
        "/vendors",
        "/write-offs",
    ):
        assert prefix in paths, prefix


@pytest.mark.asyncio
async def test_healthz_needs_no_database():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        r = await c.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_writes_without_acting_user_are_401():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        r = await c.post("/locations", json={"building": "Main", "room": "1"})
    assert r.status_code == 401
    assert r.json() == {"detail": "X-User-Id header is required"}
