"""User endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campusgigs.api import deps
from campusgigs.models.user import User
from campusgigs.schemas.availability import AvailabilitySlotCreate, AvailabilitySlotRead
from campusgigs.schemas.user import UserRead
from campusgigs.services import availability_service
from campusgigs.services.errors import NotFoundError, PermissionDeniedError

router = APIRouter()


@router.get("/me", response_model=UserRead, summary="Current user profile")
async def read_current_user(
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> UserRead:
    """Return the authenticated user's profile."""
    return UserRead.model_validate(current_user)


@router.get(
    "/me/availability",
    response_model=list[AvailabilitySlotRead],
    summary="List my weekly availability",
)
async def list_my_availability(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> list[AvailabilitySlotRead]:
    slots = await availability_service.list_for_provider(session, current_user.id)
    return [AvailabilitySlotRead.model_validate(slot) for slot in slots]


@router.post(
    "/me/availability",
    response_model=AvailabilitySlotRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a weekly availability window",
)
async def add_my_availability(
    payload: AvailabilitySlotCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> AvailabilitySlotRead:
    try:
        slot = await availability_service.add_slot(
            session, provider_id=current_user.id, payload=payload
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to save availability",
        ) from exc
    return AvailabilitySlotRead.model_validate(slot)


@router.delete(
    "/me/availability/{slot_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a weekly availability window",
)
async def remove_my_availability(
    slot_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> None:
    try:
        await availability_service.remove_slot(
            session, slot_id=slot_id, actor_id=current_user.id
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except PermissionDeniedError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)
        ) from exc
    return None
