"""Review schemas."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from campusgigs.schemas.user import UserSummary


class ReviewCreate(BaseModel):
    """Payload for reviewing a completed booking."""

    booking_id: uuid.UUID
    rating: int = Field(ge=1, le=5)
    comment: str | None = Field(default=None, max_length=4000)


class ReviewRead(BaseModel):
    """Serialized review."""

    id: uuid.UUID
    booking_id: uuid.UUID
    reviewer_id: uuid.UUID
    rating: int
    comment: str | None = None
    created_at: datetime
    reviewer: UserSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class ServiceReviewsRead(BaseModel):
    """Reviews for one service with aggregate rating."""

    service_id: uuid.UUID
    reviews: list[ReviewRead]
    average_rating: float
    total_reviews: int
