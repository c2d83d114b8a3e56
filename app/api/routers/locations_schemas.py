# app/api/routers/locations_schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LocationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    building: str
    floor: Optional[str] = None
    room: str
    description: Optional[str] = None
    is_active: bool
    full_location: str
    created_date: datetime


class LocationCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    building: str = Field(..., min_length=1, max_length=100)
    floor: Optional[str] = Field(None, max_length=50)
    room: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class LocationActiveIn(BaseModel):
    is_active: bool
