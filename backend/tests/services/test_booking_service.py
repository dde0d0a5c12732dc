"""Booking intake orchestration against a real database."""

from __future__ import annotations

import asyncio
import os
import uuid
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from campusgigs.db.session import get_sessionmaker
from campusgigs.models import Booking, BookingStatus, GigService
from campusgigs.scheduling.conflicts import BookingInputError, ConflictType
from campusgigs.services import booking_service
from campusgigs.services.errors import (
    BookingConflictError,
    NotFoundError,
    PermissionDeniedError,
    ScheduleUnavailableError,
)

pytestmark = pytest.mark.asyncio


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2030, 1, 15, hour, minute, tzinfo=UTC)


def _sessionmaker():
    return get_sessionmaker(os.environ["DATABASE_URL"])


async def _book(
    data: dict[str, Any],
    start: datetime,
    end: datetime,
    *,
    building: str = "library_id",
) -> Booking:
    async with _sessionmaker()() as session:
        return await booking_service.create_booking(
            session,
            customer_id=data["customer_id"],
            service_id=data["service_id"],
            building_id=data[building],
            start_at=start,
            end_at=end,
        )


async def _count_bookings() -> int:
    async with _sessionmaker()() as session:
        result = await session.execute(select(func.count(Booking.id)))
        return result.scalar_one()


async def test_accepted_booking_is_persisted_as_pending(marketplace: dict[str, Any]) -> None:
    booking = await _book(marketplace, at(10), at(11))
    assert booking.status == BookingStatus.PENDING
    assert booking.provider_id == marketplace["provider_id"]
    assert booking.price == Decimal("25.00")
    assert booking.building.code == "LIB"
    assert booking.has_review is False
    assert await _count_bookings() == 1


async def test_walking_conflict_is_rejected_and_not_persisted(
    marketplace: dict[str, Any],
) -> None:
    await _book(marketplace, at(10), at(11))
    with pytest.raises(BookingConflictError) as excinfo:
        await _book(marketplace, at(11, 10), at(12), building="science_id")
    decision = excinfo.value.decision
    assert decision.conflict_type is ConflictType.WALKING_TIME_AFTER
    assert decision.details is not None
    assert decision.details.required_minutes == 13
    assert decision.details.available_minutes == 10
    assert await _count_bookings() == 1


async def test_sufficient_gap_is_accepted(marketplace: dict[str, Any]) -> None:
    await _book(marketplace, at(10), at(11))
    await _book(marketplace, at(11, 15), at(12), building="science_id")
    assert await _count_bookings() == 2


async def test_long_predecessor_inside_window_is_seen(marketplace: dict[str, Any]) -> None:
    await _book(marketplace, at(6), at(9, 58))
    with pytest.raises(BookingConflictError) as excinfo:
        await _book(marketplace, at(10), at(11), building="science_id")
    assert excinfo.value.decision.conflict_type is ConflictType.WALKING_TIME_AFTER


async def test_check_booking_does_not_persist(marketplace: dict[str, Any]) -> None:
    await _book(marketplace, at(10), at(11))
    async with _sessionmaker()() as session:
        decision = await booking_service.check_booking(
            session,
            service_id=marketplace["service_id"],
            building_id=marketplace["library_id"],
            start_at=at(10, 30),
            end_at=at(11, 30),
        )
    assert decision.can_book is False
    assert decision.conflict_type is ConflictType.TIME_OVERLAP
    assert await _count_bookings() == 1


async def test_concurrent_requests_for_one_provider_book_once(
    marketplace: dict[str, Any],
) -> None:
    results = await asyncio.gather(
        _book(marketplace, at(14), at(15)),
        _book(marketplace, at(14, 30), at(15, 30), building="science_id"),
        return_exceptions=True,
    )
    accepted = [r for r in results if isinstance(r, Booking)]
    rejected = [r for r in results if isinstance(r, BookingConflictError)]
    assert len(accepted) == 1
    assert len(rejected) == 1
    assert rejected[0].decision.conflict_type is ConflictType.TIME_OVERLAP
    assert await _count_bookings() == 1
    assert len(booking_service._provider_locks) == 0


async def test_storage_failure_refuses_booking(
    marketplace: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    async def _broken_execute(*args: Any, **kwargs: Any) -> Any:
        raise OperationalError("SELECT", {}, Exception("database is down"))

    async with _sessionmaker()() as session:
        with monkeypatch.context() as patched:
            patched.setattr(AsyncSession, "execute", _broken_execute)
            with pytest.raises(ScheduleUnavailableError):
                await booking_service.create_booking(
                    session,
                    customer_id=marketplace["customer_id"],
                    service_id=marketplace["service_id"],
                    building_id=marketplace["library_id"],
                    start_at=at(10),
                    end_at=at(11),
                )
    assert await _count_bookings() == 0


async def test_reference_lookup_failure_refuses_booking(
    marketplace: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    async def _broken_get(*args: Any, **kwargs: Any) -> Any:
        raise OperationalError("SELECT", {}, Exception("database is down"))

    async with _sessionmaker()() as session:
        with monkeypatch.context() as patched:
            patched.setattr(AsyncSession, "get", _broken_get)
            with pytest.raises(ScheduleUnavailableError):
                await booking_service.create_booking(
                    session,
                    customer_id=marketplace["customer_id"],
                    service_id=marketplace["service_id"],
                    building_id=marketplace["library_id"],
                    start_at=at(10),
                    end_at=at(11),
                )
            with pytest.raises(ScheduleUnavailableError):
                await booking_service.check_booking(
                    session,
                    service_id=marketplace["service_id"],
                    building_id=marketplace["library_id"],
                    start_at=at(10),
                    end_at=at(11),
                )
    assert await _count_bookings() == 0


async def test_vanished_booking_after_commit_is_not_found(
    marketplace: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    async def _missing(*args: Any, **kwargs: Any) -> None:
        return None

    monkeypatch.setattr(booking_service, "get_booking", _missing)
    with pytest.raises(NotFoundError):
        await _book(marketplace, at(10), at(11))


async def test_cannot_book_own_service(marketplace: dict[str, Any]) -> None:
    async with _sessionmaker()() as session:
        with pytest.raises(ValueError, match="own service"):
            await booking_service.create_booking(
                session,
                customer_id=marketplace["provider_id"],
                service_id=marketplace["service_id"],
                building_id=marketplace["library_id"],
                start_at=at(10),
                end_at=at(11),
            )


async def test_input_faults(marketplace: dict[str, Any]) -> None:
    with pytest.raises(BookingInputError):
        await _book(marketplace, at(11), at(10))
    with pytest.raises(BookingInputError):
        await _book(marketplace, at(10), at(11), building="annex_id")
    marketplace = {**marketplace, "missing_id": uuid.uuid4()}
    with pytest.raises(BookingInputError, match="Building not found"):
        await _book(marketplace, at(10), at(11), building="missing_id")


async def test_inactive_service_cannot_be_booked(marketplace: dict[str, Any]) -> None:
    async with _sessionmaker()() as session:
        service = await session.get(GigService, marketplace["service_id"])
        assert service is not None
        service.active = False
        await session.commit()
    with pytest.raises(NotFoundError):
        await _book(marketplace, at(10), at(11))


async def test_status_lifecycle(marketplace: dict[str, Any]) -> None:
    booking = await _book(marketplace, at(10), at(11))
    async with _sessionmaker()() as session:
        with pytest.raises(PermissionDeniedError):
            await booking_service.update_booking_status(
                session,
                booking_id=booking.id,
                actor_id=marketplace["customer_id"],
                status=BookingStatus.CONFIRMED,
            )
        confirmed = await booking_service.update_booking_status(
            session,
            booking_id=booking.id,
            actor_id=marketplace["provider_id"],
            status=BookingStatus.CONFIRMED,
        )
        assert confirmed.status == BookingStatus.CONFIRMED
        completed = await booking_service.update_booking_status(
            session,
            booking_id=booking.id,
            actor_id=marketplace["provider_id"],
            status=BookingStatus.COMPLETED,
        )
        assert completed.status == BookingStatus.COMPLETED
        with pytest.raises(ValueError, match="Invalid status transition"):
            await booking_service.cancel_booking(
                session, booking_id=booking.id, actor_id=marketplace["customer_id"]
            )


async def test_outsider_cannot_touch_booking(marketplace: dict[str, Any]) -> None:
    booking = await _book(marketplace, at(10), at(11))
    async with _sessionmaker()() as session:
        with pytest.raises(PermissionDeniedError):
            await booking_service.update_booking_status(
                session,
                booking_id=booking.id,
                actor_id=uuid.uuid4(),
                status=BookingStatus.PENDING,
            )


async def test_cancelled_booking_frees_the_slot(marketplace: dict[str, Any]) -> None:
    booking = await _book(marketplace, at(10), at(11))
    async with _sessionmaker()() as session:
        cancelled = await booking_service.cancel_booking(
            session, booking_id=booking.id, actor_id=marketplace["customer_id"]
        )
        assert cancelled.status == BookingStatus.CANCELLED
    rebooked = await _book(marketplace, at(10), at(11), building="science_id")
    assert rebooked.status == BookingStatus.PENDING


async def test_list_bookings_by_role(marketplace: dict[str, Any]) -> None:
    await _book(marketplace, at(9), at(10))
    await _book(marketplace, at(13), at(14))
    async with _sessionmaker()() as session:
        as_customer = await booking_service.list_bookings(
            session, user_id=marketplace["customer_id"], role="customer"
        )
        as_provider = await booking_service.list_bookings(
            session, user_id=marketplace["provider_id"], role="provider"
        )
        provider_as_customer = await booking_service.list_bookings(
            session, user_id=marketplace["provider_id"], role="customer"
        )
        confirmed_only = await booking_service.list_bookings(
            session,
            user_id=marketplace["customer_id"],
            status=BookingStatus.CONFIRMED,
        )
    assert [b.start_at.hour for b in as_customer] == [13, 9]
    assert len(as_provider) == 2
    assert provider_as_customer == []
    assert confirmed_only == []
