"""Marketplace service (gig offering) management."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from campusgigs.models.booking import Booking
from campusgigs.models.gig_service import GigService
from campusgigs.models.review import Review
from campusgigs.schemas.gig_service import GigServiceCreate, GigServiceUpdate
from campusgigs.services.errors import NotFoundError, PermissionDeniedError


@dataclass(slots=True)
class RatedService:
    """A service with its aggregate review statistics."""

    service: GigService
    average_rating: float
    total_reviews: int


def _rated_query() -> Select:
    return (
        select(
            GigService,
            func.coalesce(func.avg(Review.rating), 0),
            func.count(Review.id),
        )
        .options(selectinload(GigService.provider))
        .outerjoin(Booking, Booking.service_id == GigService.id)
        .outerjoin(Review, Review.booking_id == Booking.id)
        .group_by(GigService.id)
    )


def _to_rated(row) -> RatedService:
    service, average, total = row
    return RatedService(
        service=service,
        average_rating=round(float(average or 0), 1),
        total_reviews=int(total or 0),
    )


async def list_services(
    session: AsyncSession,
    *,
    category: str | None = None,
    search: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    provider_id: uuid.UUID | None = None,
    active: bool | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[RatedService]:
    """Return services matching the filters, newest first."""
    stmt = _rated_query()
    if active is not None:
        stmt = stmt.where(GigService.active.is_(active))
    if category:
        stmt = stmt.where(GigService.category == category)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(
            or_(
                GigService.title.ilike(pattern),
                GigService.description.ilike(pattern),
                GigService.category.ilike(pattern),
            )
        )
    if min_price is not None:
        stmt = stmt.where(GigService.base_price >= min_price)
    if max_price is not None:
        stmt = stmt.where(GigService.base_price <= max_price)
    if provider_id is not None:
        stmt = stmt.where(GigService.provider_id == provider_id)
    stmt = stmt.order_by(GigService.created_at.desc()).offset(skip).limit(min(limit, 100))
    result = await session.execute(stmt)
    return [_to_rated(row) for row in result.all()]


async def get_rated_service(
    session: AsyncSession, service_id: uuid.UUID
) -> RatedService | None:
    result = await session.execute(_rated_query().where(GigService.id == service_id))
    row = result.first()
    return _to_rated(row) if row is not None else None


async def get_service(
    session: AsyncSession,
    service_id: uuid.UUID,
    *,
    active_only: bool = False,
) -> GigService | None:
    service = await session.get(
        GigService, service_id, options=[selectinload(GigService.provider)]
    )
    if service is None or (active_only and not service.active):
        return None
    return service


async def create_service(
    session: AsyncSession,
    *,
    provider_id: uuid.UUID,
    payload: GigServiceCreate,
) -> GigService:
    """Publish a new service for ``provider_id``."""
    service = GigService(provider_id=provider_id, **payload.model_dump())
    session.add(service)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(service, attribute_names=["provider"])
    return service


def _ensure_owner(service: GigService, actor_id: uuid.UUID) -> None:
    if service.provider_id != actor_id:
        raise PermissionDeniedError("Not authorized to modify this service")


async def update_service(
    session: AsyncSession,
    *,
    service_id: uuid.UUID,
    actor_id: uuid.UUID,
    payload: GigServiceUpdate,
) -> GigService:
    service = await get_service(session, service_id)
    if service is None:
        raise NotFoundError("Service not found")
    _ensure_owner(service, actor_id)
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field == "description"
    }
    if not changes:
        raise ValueError("No valid fields to update")
    for field, value in changes.items():
        setattr(service, field, value)
    await session.commit()
    await session.refresh(service, attribute_names=["provider"])
    return service


async def deactivate_service(
    session: AsyncSession,
    *,
    service_id: uuid.UUID,
    actor_id: uuid.UUID,
) -> GigService:
    """Hide a service from new bookings; existing bookings are kept."""
    service = await get_service(session, service_id)
    if service is None:
        raise NotFoundError("Service not found")
    _ensure_owner(service, actor_id)
    service.active = False
    await session.commit()
    return service


async def list_categories(session: AsyncSession) -> list[tuple[str, int]]:
    """Categories of active services with how many services each holds."""
    stmt = (
        select(GigService.category, func.count(GigService.id))
        .where(GigService.active.is_(True))
        .group_by(GigService.category)
        .order_by(GigService.category)
    )
    result = await session.execute(stmt)
    return [(category, int(count)) for category, count in result.all()]
