"""Manage the weekly windows in which providers take bookings."""
from __future__ import annotations

import uuid

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campusgigs.models.availability import AvailabilitySlot
from campusgigs.schemas.availability import AvailabilitySlotCreate
from campusgigs.services.errors import NotFoundError, PermissionDeniedError


async def list_for_provider(
    session: AsyncSession, provider_id: uuid.UUID
) -> list[AvailabilitySlot]:
    stmt: Select[tuple[AvailabilitySlot]] = (
        select(AvailabilitySlot)
        .where(AvailabilitySlot.provider_id == provider_id)
        .order_by(AvailabilitySlot.day_of_week.asc(), AvailabilitySlot.start_time.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def add_slot(
    session: AsyncSession,
    *,
    provider_id: uuid.UUID,
    payload: AvailabilitySlotCreate,
) -> AvailabilitySlot:
    """Publish a weekly window; overlapping windows on one day are allowed."""
    if payload.end_time <= payload.start_time:
        raise ValueError("Availability end time must be after start time")
    slot = AvailabilitySlot(provider_id=provider_id, **payload.model_dump())
    session.add(slot)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(slot)
    return slot


async def remove_slot(
    session: AsyncSession,
    *,
    slot_id: uuid.UUID,
    actor_id: uuid.UUID,
) -> None:
    slot = await session.get(AvailabilitySlot, slot_id)
    if slot is None:
        raise NotFoundError("Availability slot not found")
    if slot.provider_id != actor_id:
        raise PermissionDeniedError("Not authorized to modify this availability")
    await session.delete(slot)
    await session.commit()
