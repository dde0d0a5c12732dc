"""Booking-conflict resolution for a single provider's schedule.

The resolver works on an in-memory snapshot handed over by the caller: the
candidate interval plus the provider's existing bookings around it. It never
performs I/O and keeps no state between calls, so one instance can be shared
freely across requests.

Checks run in a fixed order and the first violation wins:

1. direct time overlap with any active booking (half-open intervals);
2. walking time from the nearest booking that ends before the candidate;
3. walking time to the nearest booking that starts after the candidate.

Travel time is rounded up to whole minutes *before* the safety buffer is
added, and a gap exactly equal to the requirement is accepted.
"""

from __future__ import annotations

import enum
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final

from campusgigs.scheduling.walking_time import DistanceEngine, Location

DEFAULT_BUFFER_MINUTES: Final = 5


class BookingStatus(str, enum.Enum):
    """Lifecycle states for bookings."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ACTIVE_BOOKING_STATUSES: Final = frozenset(
    {BookingStatus.PENDING, BookingStatus.CONFIRMED}
)


class ConflictType(str, enum.Enum):
    """Why a candidate booking was rejected."""

    TIME_OVERLAP = "time_overlap"
    WALKING_TIME_BEFORE = "walking_time_before"
    WALKING_TIME_AFTER = "walking_time_after"


class BookingInputError(ValueError):
    """The request itself is malformed; distinct from a scheduling conflict."""


@dataclass(slots=True, frozen=True)
class BookingInterval:
    """One committed or candidate booking slot for a provider."""

    provider_id: uuid.UUID
    location: Location
    start_at: datetime
    end_at: datetime
    status: BookingStatus = BookingStatus.PENDING
    booking_id: uuid.UUID | None = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_BOOKING_STATUSES


@dataclass(slots=True, frozen=True)
class BookingSummary:
    """Identity, place and time of a booking as reported in a decision."""

    booking_id: uuid.UUID | None
    start_at: datetime
    end_at: datetime
    location_id: uuid.UUID | None
    location_name: str
    location_code: str | None

    @classmethod
    def from_interval(cls, interval: BookingInterval) -> "BookingSummary":
        return cls(
            booking_id=interval.booking_id,
            start_at=interval.start_at,
            end_at=interval.end_at,
            location_id=interval.location.location_id,
            location_name=interval.location.name,
            location_code=interval.location.code,
        )


@dataclass(slots=True, frozen=True)
class ConflictDetails:
    """Structured explanation of a rejection."""

    booking: BookingSummary
    candidate: BookingSummary
    walking_minutes: int | None = None
    buffer_minutes: int | None = None
    required_minutes: int | None = None
    available_minutes: int | None = None


@dataclass(slots=True, frozen=True)
class ConflictDecision:
    """Outcome of evaluating a candidate booking."""

    can_book: bool
    message: str
    conflict_type: ConflictType | None = None
    details: ConflictDetails | None = None

    @classmethod
    def accepted(cls) -> "ConflictDecision":
        return cls(can_book=True, message="No scheduling conflicts")


def as_utc(moment: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def _label(location: Location) -> str:
    if location.code:
        return f"{location.name} ({location.code})"
    return location.name


def _whole_minutes_between(earlier: datetime, later: datetime) -> int:
    return int((later - earlier).total_seconds() // 60)


def _sort_key(interval: BookingInterval) -> tuple[datetime, datetime, str]:
    return (interval.start_at, interval.end_at, str(interval.booking_id or ""))


class ConflictResolver:
    """Decide whether a candidate booking fits a provider's schedule."""

    def __init__(
        self,
        distance_engine: DistanceEngine | None = None,
        *,
        buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
    ) -> None:
        if buffer_minutes < 0:
            raise ValueError("Travel buffer cannot be negative")
        self.distance_engine = distance_engine or DistanceEngine()
        self.buffer_minutes = buffer_minutes

    def evaluate(
        self,
        candidate: BookingInterval,
        existing: Iterable[BookingInterval],
    ) -> ConflictDecision:
        """Return the decision for ``candidate`` against ``existing`` bookings.

        Raises :class:`BookingInputError` when the candidate (or a booking
        whose travel time must be checked) cannot be evaluated at all.
        """
        candidate = self._normalize(candidate)
        if candidate.location.coordinate is None:
            raise BookingInputError(
                f"Location {_label(candidate.location)} not found or has no coordinates"
            )

        schedule = sorted(
            (
                self._normalize(booking)
                for booking in existing
                if booking.provider_id == candidate.provider_id and booking.is_active
            ),
            key=_sort_key,
        )

        for booking in schedule:
            if booking.start_at < candidate.end_at and candidate.start_at < booking.end_at:
                return self._overlap(candidate, booking)

        before = [b for b in schedule if b.end_at <= candidate.start_at]
        if before:
            latest_end = max(b.end_at for b in before)
            for predecessor in (b for b in before if b.end_at == latest_end):
                decision = self._check_gap(
                    origin=predecessor,
                    destination=candidate,
                    candidate=candidate,
                    neighbor=predecessor,
                    conflict_type=ConflictType.WALKING_TIME_AFTER,
                )
                if decision is not None:
                    return decision

        after = [b for b in schedule if b.start_at >= candidate.end_at]
        if after:
            earliest_start = min(b.start_at for b in after)
            for successor in (b for b in after if b.start_at == earliest_start):
                decision = self._check_gap(
                    origin=candidate,
                    destination=successor,
                    candidate=candidate,
                    neighbor=successor,
                    conflict_type=ConflictType.WALKING_TIME_BEFORE,
                )
                if decision is not None:
                    return decision

        return ConflictDecision.accepted()

    def required_minutes(self, origin: Location, destination: Location) -> int:
        """Walking minutes (rounded up) plus the fixed buffer."""
        return self._walking_minutes(origin, destination) + self.buffer_minutes

    def _walking_minutes(self, origin: Location, destination: Location) -> int:
        if origin.coordinate is None or destination.coordinate is None:
            missing = origin if origin.coordinate is None else destination
            raise BookingInputError(
                f"Walking time from {_label(origin)} to {_label(destination)} "
                f"cannot be determined: {_label(missing)} has no coordinates"
            )
        return self.distance_engine.estimate_travel_minutes(
            origin.coordinate, destination.coordinate
        )

    @staticmethod
    def _normalize(interval: BookingInterval) -> BookingInterval:
        start_at = as_utc(interval.start_at)
        end_at = as_utc(interval.end_at)
        if end_at <= start_at:
            raise BookingInputError("Booking end time must be after start time")
        if start_at is interval.start_at and end_at is interval.end_at:
            return interval
        return BookingInterval(
            provider_id=interval.provider_id,
            location=interval.location,
            start_at=start_at,
            end_at=end_at,
            status=interval.status,
            booking_id=interval.booking_id,
        )

    @staticmethod
    def _overlap(candidate: BookingInterval, booking: BookingInterval) -> ConflictDecision:
        return ConflictDecision(
            can_book=False,
            message=(
                "Time conflict: provider already has a booking from "
                f"{booking.start_at:%H:%M} to {booking.end_at:%H:%M} "
                f"at {_label(booking.location)}"
            ),
            conflict_type=ConflictType.TIME_OVERLAP,
            details=ConflictDetails(
                booking=BookingSummary.from_interval(booking),
                candidate=BookingSummary.from_interval(candidate),
            ),
        )

    def _check_gap(
        self,
        *,
        origin: BookingInterval,
        destination: BookingInterval,
        candidate: BookingInterval,
        neighbor: BookingInterval,
        conflict_type: ConflictType,
    ) -> ConflictDecision | None:
        walking = self._walking_minutes(origin.location, destination.location)
        required = walking + self.buffer_minutes
        available = _whole_minutes_between(origin.end_at, destination.start_at)
        if available >= required:
            return None
        return ConflictDecision(
            can_book=False,
            message=(
                f"Cannot make booking: walking from {_label(origin.location)} to "
                f"{_label(destination.location)} takes {walking} minutes plus a "
                f"{self.buffer_minutes} minute buffer, but only {available} minutes "
                "are available between bookings."
            ),
            conflict_type=conflict_type,
            details=ConflictDetails(
                booking=BookingSummary.from_interval(neighbor),
                candidate=BookingSummary.from_interval(candidate),
                walking_minutes=walking,
                buffer_minutes=self.buffer_minutes,
                required_minutes=required,
                available_minutes=available,
            ),
        )


def evaluate(
    candidate: BookingInterval,
    existing: Sequence[BookingInterval],
) -> ConflictDecision:
    """Evaluate with the default campus pace and buffer."""
    return _default_resolver.evaluate(candidate, existing)


_default_resolver = ConflictResolver()


__all__ = [
    "ACTIVE_BOOKING_STATUSES",
    "BookingInputError",
    "BookingInterval",
    "BookingStatus",
    "BookingSummary",
    "ConflictDecision",
    "ConflictDetails",
    "ConflictResolver",
    "ConflictType",
    "as_utc",
    "evaluate",
]
