"""Pydantic schemas for bookings and scheduling decisions."""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from campusgigs.scheduling.conflicts import BookingStatus, ConflictType
from campusgigs.schemas.building import BuildingRead
from campusgigs.schemas.user import UserSummary


class BookingRequest(BaseModel):
    """Requested slot for a service at a building."""

    service_id: uuid.UUID
    building_id: uuid.UUID
    start_at: datetime
    end_at: datetime


class BookingCreate(BookingRequest):
    """Payload for creating a booking."""

    notes: str | None = Field(default=None, max_length=1024)


class BookingStatusUpdate(BaseModel):
    """Payload for booking status changes."""

    status: BookingStatus


class BookingRead(BaseModel):
    """Serialized booking."""

    id: uuid.UUID
    service_id: uuid.UUID
    provider_id: uuid.UUID
    customer_id: uuid.UUID
    building_id: uuid.UUID
    start_at: datetime
    end_at: datetime
    status: BookingStatus
    price: Decimal
    notes: str | None = None
    created_at: datetime
    building: BuildingRead | None = None
    provider: UserSummary | None = None
    customer: UserSummary | None = None
    has_review: bool = False

    model_config = ConfigDict(from_attributes=True)


class BookingSummaryRead(BaseModel):
    """A booking as referenced from a conflict decision."""

    booking_id: uuid.UUID | None = None
    start_at: datetime
    end_at: datetime
    location_id: uuid.UUID | None = None
    location_name: str
    location_code: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ConflictDetailsRead(BaseModel):
    """Structured explanation attached to a rejection."""

    booking: BookingSummaryRead
    candidate: BookingSummaryRead
    walking_minutes: int | None = None
    buffer_minutes: int | None = None
    required_minutes: int | None = None
    available_minutes: int | None = None

    model_config = ConfigDict(from_attributes=True)


class ConflictDecisionRead(BaseModel):
    """Serialized scheduling decision."""

    can_book: bool
    message: str
    conflict_type: ConflictType | None = None
    details: ConflictDetailsRead | None = None

    model_config = ConfigDict(from_attributes=True)
