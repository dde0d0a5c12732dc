"""Schema exports."""

from campusgigs.schemas.auth import RegistrationRequest, RegistrationResponse, Token
from campusgigs.schemas.availability import AvailabilitySlotCreate, AvailabilitySlotRead
from campusgigs.schemas.booking import (
    BookingCreate,
    BookingRead,
    BookingRequest,
    BookingStatusUpdate,
    ConflictDecisionRead,
)
from campusgigs.schemas.building import (
    BuildingCreate,
    BuildingRead,
    BuildingUpdate,
    WalkingTimeRead,
)
from campusgigs.schemas.gig_service import (
    CategoryCount,
    GigServiceCreate,
    GigServiceDetail,
    GigServiceListing,
    GigServiceRead,
    GigServiceUpdate,
)
from campusgigs.schemas.review import ReviewCreate, ReviewRead, ServiceReviewsRead
from campusgigs.schemas.user import UserCreate, UserRead, UserSummary

__all__ = [
    "AvailabilitySlotCreate",
    "AvailabilitySlotRead",
    "BookingCreate",
    "BookingRead",
    "BookingRequest",
    "BookingStatusUpdate",
    "BuildingCreate",
    "BuildingRead",
    "BuildingUpdate",
    "CategoryCount",
    "ConflictDecisionRead",
    "GigServiceCreate",
    "GigServiceDetail",
    "GigServiceListing",
    "GigServiceRead",
    "GigServiceUpdate",
    "RegistrationRequest",
    "RegistrationResponse",
    "ReviewCreate",
    "ReviewRead",
    "ServiceReviewsRead",
    "Token",
    "UserCreate",
    "UserRead",
    "UserSummary",
]
