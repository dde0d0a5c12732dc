"""Pure scheduling core: walking-time estimates and booking-conflict checks."""

from campusgigs.scheduling.conflicts import (
    ACTIVE_BOOKING_STATUSES,
    BookingInputError,
    BookingInterval,
    BookingStatus,
    BookingSummary,
    ConflictDecision,
    ConflictDetails,
    ConflictResolver,
    ConflictType,
)
from campusgigs.scheduling.walking_time import (
    Coordinate,
    DistanceEngine,
    Location,
    estimate_travel_minutes,
    haversine_distance_km,
)

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
    "Coordinate",
    "DistanceEngine",
    "Location",
    "estimate_travel_minutes",
    "haversine_distance_km",
]
