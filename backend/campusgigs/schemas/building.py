"""Campus building schemas."""
from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field


class BuildingBase(BaseModel):
    """Shared building fields."""

    code: str = Field(min_length=1, max_length=32)
    name: str = Field(min_length=1, max_length=255)
    lat: float | None = Field(default=None, ge=-90, le=90)
    lng: float | None = Field(default=None, ge=-180, le=180)


class BuildingCreate(BuildingBase):
    """Payload for creating a building."""


class BuildingUpdate(BaseModel):
    """Mutable building fields."""

    code: str | None = Field(default=None, min_length=1, max_length=32)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    lat: float | None = Field(default=None, ge=-90, le=90)
    lng: float | None = Field(default=None, ge=-180, le=180)


class BuildingRead(BuildingBase):
    """Serialized building."""

    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class WalkingTimeRead(BaseModel):
    """Walking time between two buildings."""

    from_building: BuildingRead
    to_building: BuildingRead
    distance_km: float
    walking_time_minutes: int
    walking_time_formatted: str
