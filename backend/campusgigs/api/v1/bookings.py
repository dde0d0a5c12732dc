"""Booking endpoints.

Conflicts come back as HTTP 409 with the full scheduling decision as the
``detail`` so clients can explain why a slot is unavailable.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campusgigs.api import deps
from campusgigs.models.user import User
from campusgigs.scheduling.conflicts import BookingInputError, BookingStatus
from campusgigs.schemas.booking import (
    BookingCreate,
    BookingRead,
    BookingRequest,
    BookingStatusUpdate,
    ConflictDecisionRead,
)
from campusgigs.services import booking_service
from campusgigs.services.errors import (
    BookingConflictError,
    NotFoundError,
    PermissionDeniedError,
    ScheduleUnavailableError,
)

router = APIRouter()


@contextmanager
def _booking_errors() -> Iterator[None]:
    """Translate service-layer failures into HTTP errors."""
    try:
        yield
    except BookingConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=ConflictDecisionRead.model_validate(exc.decision).model_dump(
                mode="json"
            ),
        ) from exc
    except BookingInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except PermissionDeniedError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)
        ) from exc
    except ScheduleUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Unable to save booking"
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


@router.get("", response_model=list[BookingRead], summary="List my bookings")
async def list_bookings(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
    role: Literal["customer", "provider"] | None = None,
    status_filter: Annotated[BookingStatus | None, Query(alias="status")] = None,
    skip: int = 0,
    limit: int = 50,
) -> list[BookingRead]:
    bookings = await booking_service.list_bookings(
        session,
        user_id=current_user.id,
        role=role,
        status=status_filter,
        skip=skip,
        limit=limit,
    )
    return [BookingRead.model_validate(obj) for obj in bookings]


@router.post(
    "",
    response_model=BookingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Book a service",
)
async def create_booking(
    payload: BookingCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> BookingRead:
    with _booking_errors():
        booking = await booking_service.create_booking(
            session,
            customer_id=current_user.id,
            **payload.model_dump(),
        )
    return BookingRead.model_validate(booking)


@router.post(
    "/check",
    response_model=ConflictDecisionRead,
    summary="Check whether a slot can be booked",
)
async def check_booking(
    payload: BookingRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[User, Depends(deps.get_current_active_user)],
) -> ConflictDecisionRead:
    with _booking_errors():
        decision = await booking_service.check_booking(session, **payload.model_dump())
    return ConflictDecisionRead.model_validate(decision)


@router.get("/{booking_id}", response_model=BookingRead, summary="Get booking")
async def get_booking(
    booking_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> BookingRead:
    with _booking_errors():
        booking = await booking_service.get_booking_for_user(
            session, booking_id=booking_id, user_id=current_user.id
        )
    return BookingRead.model_validate(booking)


@router.patch(
    "/{booking_id}", response_model=BookingRead, summary="Update booking status"
)
async def update_booking_status(
    booking_id: uuid.UUID,
    payload: BookingStatusUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> BookingRead:
    with _booking_errors():
        booking = await booking_service.update_booking_status(
            session,
            booking_id=booking_id,
            actor_id=current_user.id,
            status=payload.status,
        )
    return BookingRead.model_validate(booking)


@router.delete("/{booking_id}", response_model=BookingRead, summary="Cancel booking")
async def cancel_booking(
    booking_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> BookingRead:
    with _booking_errors():
        booking = await booking_service.cancel_booking(
            session, booking_id=booking_id, actor_id=current_user.id
        )
    return BookingRead.model_validate(booking)
