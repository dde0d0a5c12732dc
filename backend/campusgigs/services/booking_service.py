"""Booking intake and lifecycle management.

Creating a booking is a check-then-act sequence: load the provider's nearby
schedule, ask the conflict resolver, insert on acceptance. Two requests for
the same provider evaluated against the same stale snapshot could both pass,
so the whole sequence runs inside a per-provider critical section: an
in-process lock for concurrent tasks of this worker plus a row lock on the
provider (effective on PostgreSQL) for other workers.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import Literal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from campusgigs.core.config import get_settings
from campusgigs.models.booking import Booking
from campusgigs.models.building import CampusBuilding
from campusgigs.models.gig_service import GigService
from campusgigs.models.user import User
from campusgigs.scheduling.conflicts import (
    ACTIVE_BOOKING_STATUSES,
    BookingInputError,
    BookingInterval,
    BookingStatus,
    ConflictDecision,
    ConflictResolver,
    as_utc,
)
from campusgigs.services.building_service import distance_engine_from_settings
from campusgigs.services.errors import (
    BookingConflictError,
    NotFoundError,
    PermissionDeniedError,
    ScheduleUnavailableError,
)

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.COMPLETED: set(),
    BookingStatus.CANCELLED: set(),
}

_PROVIDER_ONLY_STATUSES = {BookingStatus.CONFIRMED, BookingStatus.COMPLETED}


class ProviderLocks:
    """Per-provider asyncio locks, dropped once nobody holds or awaits them."""

    def __init__(self) -> None:
        self._locks: dict[uuid.UUID, asyncio.Lock] = {}
        self._users: dict[uuid.UUID, int] = {}

    @asynccontextmanager
    async def hold(self, provider_id: uuid.UUID) -> AsyncIterator[None]:
        lock = self._locks.setdefault(provider_id, asyncio.Lock())
        self._users[provider_id] = self._users.get(provider_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[provider_id] -= 1
            if self._users[provider_id] == 0:
                del self._users[provider_id]
                del self._locks[provider_id]

    def __len__(self) -> int:
        return len(self._locks)


_provider_locks = ProviderLocks()


def resolver_from_settings() -> ConflictResolver:
    settings = get_settings()
    return ConflictResolver(
        distance_engine_from_settings(),
        buffer_minutes=settings.travel_buffer_minutes,
    )


def _booking_query():
    return select(Booking).options(
        selectinload(Booking.building),
        selectinload(Booking.provider),
        selectinload(Booking.customer),
        selectinload(Booking.review),
    )


async def _load_snapshot(
    session: AsyncSession,
    *,
    provider_id: uuid.UUID,
    start_at: datetime,
    end_at: datetime,
    lock_provider: bool = False,
) -> list[BookingInterval]:
    """Active bookings of ``provider_id`` within the conflict window."""
    window = timedelta(minutes=get_settings().conflict_window_minutes)
    stmt = (
        select(Booking)
        .options(selectinload(Booking.building))
        .where(
            Booking.provider_id == provider_id,
            Booking.status.in_(list(ACTIVE_BOOKING_STATUSES)),
            Booking.end_at > start_at - window,
            Booking.start_at < end_at + window,
        )
        .order_by(Booking.start_at)
    )
    try:
        if lock_provider:
            await session.execute(
                select(User.id).where(User.id == provider_id).with_for_update()
            )
        result = await session.execute(stmt)
        bookings = result.scalars().all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to load schedule for provider %s", provider_id)
        raise ScheduleUnavailableError(
            "Unable to load the provider's schedule; booking refused"
        ) from exc
    logger.debug("Found %d existing bookings in window for %s", len(bookings), provider_id)
    return [booking.to_interval() for booking in bookings]


async def _prepare_candidate(
    session: AsyncSession,
    *,
    service_id: uuid.UUID,
    building_id: uuid.UUID,
    start_at: datetime,
    end_at: datetime,
) -> tuple[GigService, BookingInterval]:
    start_at = as_utc(start_at)
    end_at = as_utc(end_at)
    if end_at <= start_at:
        raise BookingInputError("Booking end time must be after start time")

    try:
        service = await session.get(GigService, service_id)
        building = await session.get(CampusBuilding, building_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to load booking references for service %s", service_id)
        raise ScheduleUnavailableError(
            "Unable to load the requested service; booking refused"
        ) from exc
    if service is None or not service.active:
        raise NotFoundError("Service not found or inactive")
    if building is None:
        raise BookingInputError("Building not found")

    candidate = BookingInterval(
        provider_id=service.provider_id,
        location=building.to_location(),
        start_at=start_at,
        end_at=end_at,
    )
    return service, candidate


async def check_booking(
    session: AsyncSession,
    *,
    service_id: uuid.UUID,
    building_id: uuid.UUID,
    start_at: datetime,
    end_at: datetime,
    resolver: ConflictResolver | None = None,
) -> ConflictDecision:
    """Evaluate a prospective booking without persisting anything."""
    service, candidate = await _prepare_candidate(
        session,
        service_id=service_id,
        building_id=building_id,
        start_at=start_at,
        end_at=end_at,
    )
    snapshot = await _load_snapshot(
        session,
        provider_id=service.provider_id,
        start_at=candidate.start_at,
        end_at=candidate.end_at,
    )
    resolver = resolver or resolver_from_settings()
    return resolver.evaluate(candidate, snapshot)


async def create_booking(
    session: AsyncSession,
    *,
    customer_id: uuid.UUID,
    service_id: uuid.UUID,
    building_id: uuid.UUID,
    start_at: datetime,
    end_at: datetime,
    notes: str | None = None,
    resolver: ConflictResolver | None = None,
) -> Booking:
    """Create a pending booking if the provider's schedule allows it.

    Raises :class:`BookingConflictError` on a scheduling conflict,
    :class:`BookingInputError` for malformed requests and
    :class:`ScheduleUnavailableError` when the schedule cannot be loaded.
    """
    service, candidate = await _prepare_candidate(
        session,
        service_id=service_id,
        building_id=building_id,
        start_at=start_at,
        end_at=end_at,
    )
    if service.provider_id == customer_id:
        raise ValueError("Cannot book your own service")
    resolver = resolver or resolver_from_settings()

    async with _provider_locks.hold(service.provider_id):
        try:
            snapshot = await _load_snapshot(
                session,
                provider_id=service.provider_id,
                start_at=candidate.start_at,
                end_at=candidate.end_at,
                lock_provider=True,
            )
            decision = resolver.evaluate(candidate, snapshot)
            if not decision.can_book:
                logger.info(
                    "Booking rejected for provider %s: %s",
                    service.provider_id,
                    decision.conflict_type.value if decision.conflict_type else "unknown",
                )
                raise BookingConflictError(decision)

            booking = Booking(
                service_id=service.id,
                provider_id=service.provider_id,
                customer_id=customer_id,
                building_id=building_id,
                start_at=candidate.start_at,
                end_at=candidate.end_at,
                status=BookingStatus.PENDING,
                price=service.base_price,
                notes=notes,
            )
            session.add(booking)
            await session.commit()
        except Exception:
            await session.rollback()
            raise

    logger.info("Booking %s accepted for provider %s", booking.id, service.provider_id)
    created = await get_booking(session, booking_id=booking.id)
    if created is None:
        raise NotFoundError("Booking not found")
    return created


async def get_booking(session: AsyncSession, *, booking_id: uuid.UUID) -> Booking | None:
    result = await session.execute(
        _booking_query()
        .where(Booking.id == booking_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().unique().one_or_none()


async def get_booking_for_user(
    session: AsyncSession,
    *,
    booking_id: uuid.UUID,
    user_id: uuid.UUID,
) -> Booking:
    """Fetch a booking the user takes part in, as provider or customer."""
    booking = await get_booking(session, booking_id=booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    if user_id not in (booking.provider_id, booking.customer_id):
        raise PermissionDeniedError("Not authorized to view this booking")
    return booking


async def list_bookings(
    session: AsyncSession,
    *,
    user_id: uuid.UUID,
    role: Literal["customer", "provider"] | None = None,
    status: BookingStatus | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Booking]:
    """Bookings the user takes part in, newest start first."""
    stmt = _booking_query()
    if role == "customer":
        stmt = stmt.where(Booking.customer_id == user_id)
    elif role == "provider":
        stmt = stmt.where(Booking.provider_id == user_id)
    else:
        stmt = stmt.where(
            (Booking.customer_id == user_id) | (Booking.provider_id == user_id)
        )
    if status is not None:
        stmt = stmt.where(Booking.status == status)
    stmt = stmt.order_by(Booking.start_at.desc()).offset(skip).limit(min(limit, 100))
    result = await session.execute(stmt)
    return result.scalars().unique().all()


def _validate_status_change(
    booking: Booking, actor_id: uuid.UUID, target: BookingStatus
) -> None:
    if target in _PROVIDER_ONLY_STATUSES and actor_id != booking.provider_id:
        raise PermissionDeniedError("Only the provider can confirm or complete bookings")
    if actor_id not in (booking.provider_id, booking.customer_id):
        raise PermissionDeniedError("Not authorized to update this booking")
    allowed = _ALLOWED_STATUS_TRANSITIONS.get(booking.status, set())
    if target not in allowed:
        raise ValueError(
            f"Invalid status transition from {booking.status.value} to {target.value}"
        )


async def update_booking_status(
    session: AsyncSession,
    *,
    booking_id: uuid.UUID,
    actor_id: uuid.UUID,
    status: BookingStatus,
) -> Booking:
    booking = await get_booking(session, booking_id=booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    if actor_id not in (booking.provider_id, booking.customer_id):
        raise PermissionDeniedError("Not authorized to update this booking")
    if booking.status == status:
        return booking
    _validate_status_change(booking, actor_id, status)
    booking.status = status
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    logger.info("Booking %s moved to %s by %s", booking.id, status.value, actor_id)
    return booking


async def cancel_booking(
    session: AsyncSession,
    *,
    booking_id: uuid.UUID,
    actor_id: uuid.UUID,
) -> Booking:
    """Cancel instead of deleting so the history stays intact."""
    return await update_booking_status(
        session,
        booking_id=booking_id,
        actor_id=actor_id,
        status=BookingStatus.CANCELLED,
    )
