# app/db/__init__.py
from __future__ import annotations

# registers the flush-time timestamp hooks for every Session
from app.db import timestamps as _timestamps  # noqa: F401
