"""Versioned API router."""

from fastapi import APIRouter

from . import auth, bookings, buildings, health, reviews, services, users, walking_time

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(buildings.router, prefix="/buildings", tags=["buildings"])
router.include_router(
    walking_time.router, prefix="/walking-time", tags=["walking-time"]
)
router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])

__all__ = ["router"]
