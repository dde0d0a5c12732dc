"""Service layer exports."""
from campusgigs.services import (
    auth_service,
    availability_service,
    booking_service,
    building_service,
    gig_service,
    review_service,
    user_service,
)

__all__ = [
    "auth_service",
    "availability_service",
    "booking_service",
    "building_service",
    "gig_service",
    "review_service",
    "user_service",
]
