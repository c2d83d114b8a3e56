# app/api/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Header, HTTPException, status

from app.db.session import get_session

# ---------------------------
# acting user
# ---------------------------


async def current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """
    Acting user for audit columns, taken from the X-User-Id header.

    Missing or blank header -> 401.
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header is required",
        )
    return user_id


__all__ = (
    "get_session",
    "current_user_id",
)
