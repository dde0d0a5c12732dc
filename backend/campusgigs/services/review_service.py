"""Reviews of completed bookings."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from campusgigs.models.booking import Booking
from campusgigs.models.gig_service import GigService
from campusgigs.models.review import Review
from campusgigs.scheduling.conflicts import BookingStatus
from campusgigs.schemas.review import ReviewCreate
from campusgigs.services.errors import NotFoundError, PermissionDeniedError


@dataclass(slots=True)
class ServiceReviews:
    service_id: uuid.UUID
    reviews: list[Review]
    average_rating: float
    total_reviews: int


async def create_review(
    session: AsyncSession,
    *,
    reviewer_id: uuid.UUID,
    payload: ReviewCreate,
) -> Review:
    """Record the customer's review of a completed booking."""
    booking = await session.get(
        Booking, payload.booking_id, options=[selectinload(Booking.review)]
    )
    if booking is None:
        raise NotFoundError("Booking not found")
    if booking.customer_id != reviewer_id:
        raise PermissionDeniedError("Only the customer can review this booking")
    if booking.status != BookingStatus.COMPLETED:
        raise ValueError("Can only review completed bookings")
    if booking.review is not None:
        raise ValueError("Booking already reviewed")

    review = Review(
        booking_id=booking.id,
        reviewer_id=reviewer_id,
        rating=payload.rating,
        comment=payload.comment,
    )
    session.add(review)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ValueError("Booking already reviewed") from exc
    await session.refresh(review, attribute_names=["reviewer"])
    return review


async def list_reviews_for_service(
    session: AsyncSession, service_id: uuid.UUID
) -> ServiceReviews:
    if await session.get(GigService, service_id) is None:
        raise NotFoundError("Service not found")
    result = await session.execute(
        select(Review)
        .join(Booking, Review.booking_id == Booking.id)
        .where(Booking.service_id == service_id)
        .options(selectinload(Review.reviewer))
        .order_by(Review.created_at.desc())
    )
    reviews = list(result.scalars().all())
    stats = await session.execute(
        select(func.avg(Review.rating), func.count(Review.id))
        .join(Booking, Review.booking_id == Booking.id)
        .where(Booking.service_id == service_id)
    )
    average, total = stats.one()
    return ServiceReviews(
        service_id=service_id,
        reviews=reviews,
        average_rating=round(float(average or 0), 1),
        total_reviews=int(total or 0),
    )
