"""Schemas for provider availability."""

from __future__ import annotations

import uuid
from datetime import time

from pydantic import BaseModel, ConfigDict, Field


class AvailabilitySlotCreate(BaseModel):
    day_of_week: int = Field(ge=0, le=6)
    start_time: time
    end_time: time


class AvailabilitySlotRead(AvailabilitySlotCreate):
    id: uuid.UUID
    provider_id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)
