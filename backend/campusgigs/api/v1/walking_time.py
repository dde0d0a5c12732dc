"""Walking-time lookup between campus buildings."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campusgigs.api import deps
from campusgigs.scheduling.conflicts import BookingInputError
from campusgigs.scheduling.walking_time import format_minutes
from campusgigs.schemas.building import BuildingRead, WalkingTimeRead
from campusgigs.services import building_service
from campusgigs.services.errors import NotFoundError

router = APIRouter()


@router.get(
    "/calculate", response_model=WalkingTimeRead, summary="Walking time between buildings"
)
async def calculate_walking_time(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    from_building_id: Annotated[uuid.UUID, Query()],
    to_building_id: Annotated[uuid.UUID, Query()],
) -> WalkingTimeRead:
    try:
        estimate = await building_service.walking_time_between(
            session,
            from_building_id=from_building_id,
            to_building_id=to_building_id,
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except BookingInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return WalkingTimeRead(
        from_building=BuildingRead.model_validate(estimate.origin),
        to_building=BuildingRead.model_validate(estimate.destination),
        distance_km=round(estimate.distance_km, 3),
        walking_time_minutes=estimate.minutes,
        walking_time_formatted=format_minutes(estimate.minutes),
    )
