"""ORM models package export."""

from campusgigs.models.availability import AvailabilitySlot
from campusgigs.models.booking import Booking
from campusgigs.models.building import CampusBuilding
from campusgigs.models.gig_service import GigService
from campusgigs.models.review import Review
from campusgigs.models.user import User, UserRole
from campusgigs.scheduling.conflicts import BookingStatus

__all__ = [
    "AvailabilitySlot",
    "Booking",
    "BookingStatus",
    "CampusBuilding",
    "GigService",
    "Review",
    "User",
    "UserRole",
]
