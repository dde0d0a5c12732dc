"""Campus building management and walking-time lookups."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campusgigs.core.config import get_settings
from campusgigs.models.building import CampusBuilding
from campusgigs.scheduling.conflicts import BookingInputError
from campusgigs.scheduling.walking_time import DistanceEngine, haversine_distance_km
from campusgigs.schemas.building import BuildingCreate, BuildingUpdate
from campusgigs.services.errors import NotFoundError


@dataclass(slots=True, frozen=True)
class WalkingTime:
    """Walking estimate between two buildings."""

    origin: CampusBuilding
    destination: CampusBuilding
    distance_km: float
    minutes: int


def distance_engine_from_settings() -> DistanceEngine:
    settings = get_settings()
    return DistanceEngine(
        walking_speed_kmh=settings.walking_speed_kmh,
        friction_factor=settings.campus_friction_factor,
    )


async def list_buildings(session: AsyncSession) -> list[CampusBuilding]:
    """Return every building ordered by name."""
    stmt: Select[tuple[CampusBuilding]] = select(CampusBuilding).order_by(
        CampusBuilding.name
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_building(
    session: AsyncSession, building_id: uuid.UUID
) -> CampusBuilding | None:
    return await session.get(CampusBuilding, building_id)


async def get_building_by_code(session: AsyncSession, code: str) -> CampusBuilding | None:
    result = await session.execute(
        select(CampusBuilding).where(CampusBuilding.code == code.upper())
    )
    return result.scalar_one_or_none()


async def create_building(session: AsyncSession, payload: BuildingCreate) -> CampusBuilding:
    """Create a new building."""
    data = payload.model_dump()
    data["code"] = data["code"].upper()
    building = CampusBuilding(**data)
    session.add(building)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(building)
    return building


async def update_building(
    session: AsyncSession,
    building: CampusBuilding,
    payload: BuildingUpdate,
) -> CampusBuilding:
    """Update mutable fields on a building."""
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "code" and value is not None:
            value = value.upper()
        setattr(building, field, value)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(building)
    return building


async def walking_time_between(
    session: AsyncSession,
    *,
    from_building_id: uuid.UUID,
    to_building_id: uuid.UUID,
    engine: DistanceEngine | None = None,
) -> WalkingTime:
    """Estimate the walk between two buildings.

    Raises :class:`NotFoundError` for unknown buildings and
    :class:`BookingInputError` when either building lacks coordinates.
    """
    origin = await get_building(session, from_building_id)
    destination = await get_building(session, to_building_id)
    if origin is None or destination is None:
        raise NotFoundError("One or both buildings not found")
    if origin.coordinate is None or destination.coordinate is None:
        raise BookingInputError("Building coordinates not available")

    engine = engine or distance_engine_from_settings()
    return WalkingTime(
        origin=origin,
        destination=destination,
        distance_km=haversine_distance_km(origin.coordinate, destination.coordinate),
        minutes=engine.estimate_travel_minutes(origin.coordinate, destination.coordinate),
    )
