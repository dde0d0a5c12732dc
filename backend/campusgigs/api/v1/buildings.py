"""Campus building endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campusgigs.api import deps
from campusgigs.models.user import User
from campusgigs.schemas.building import BuildingCreate, BuildingRead, BuildingUpdate
from campusgigs.services import building_service

router = APIRouter()


@router.get("", response_model=list[BuildingRead], summary="List campus buildings")
async def list_buildings(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[BuildingRead]:
    buildings = await building_service.list_buildings(session)
    return [BuildingRead.model_validate(obj) for obj in buildings]


@router.post(
    "",
    response_model=BuildingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create building",
)
async def create_building(
    payload: BuildingCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[User, Depends(deps.get_current_admin)],
) -> BuildingRead:
    try:
        building = await building_service.create_building(session, payload)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Building code already exists",
        ) from exc
    return BuildingRead.model_validate(building)


@router.get("/{building_id}", response_model=BuildingRead, summary="Get building")
async def get_building(
    building_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> BuildingRead:
    building = await building_service.get_building(session, building_id)
    if building is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Building not found"
        )
    return BuildingRead.model_validate(building)


@router.patch("/{building_id}", response_model=BuildingRead, summary="Update building")
async def update_building(
    building_id: uuid.UUID,
    payload: BuildingUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[User, Depends(deps.get_current_admin)],
) -> BuildingRead:
    building = await building_service.get_building(session, building_id)
    if building is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Building not found"
        )
    try:
        updated = await building_service.update_building(session, building, payload)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to update building",
        ) from exc
    return BuildingRead.model_validate(updated)
