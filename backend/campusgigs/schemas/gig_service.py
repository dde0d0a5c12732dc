"""Pydantic schemas for marketplace services."""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from campusgigs.schemas.availability import AvailabilitySlotRead
from campusgigs.schemas.user import UserSummary


class GigServiceBase(BaseModel):
    """Shared service fields."""

    title: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=120)
    description: str | None = None
    duration_minutes: int = Field(gt=0, le=24 * 60)
    base_price: Decimal = Field(ge=Decimal("0"), max_digits=10, decimal_places=2)


class GigServiceCreate(GigServiceBase):
    """Payload for publishing a service."""


class GigServiceUpdate(BaseModel):
    """Mutable service fields."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None
    duration_minutes: int | None = Field(default=None, gt=0, le=24 * 60)
    base_price: Decimal | None = Field(
        default=None, ge=Decimal("0"), max_digits=10, decimal_places=2
    )
    active: bool | None = None


class GigServiceRead(GigServiceBase):
    """Serialized service."""

    id: uuid.UUID
    provider_id: uuid.UUID
    active: bool
    created_at: datetime
    provider: UserSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class GigServiceListing(GigServiceRead):
    """Service with its review statistics."""

    average_rating: float = 0.0
    total_reviews: int = 0


class GigServiceDetail(GigServiceListing):
    """Service detail including the provider's weekly availability."""

    availability: list[AvailabilitySlotRead] = Field(default_factory=list)


class CategoryCount(BaseModel):
    category: str
    count: int
