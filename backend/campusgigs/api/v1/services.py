"""Marketplace service (gig) endpoints."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campusgigs.api import deps
from campusgigs.models.user import User
from campusgigs.schemas.availability import AvailabilitySlotRead
from campusgigs.schemas.gig_service import (
    CategoryCount,
    GigServiceCreate,
    GigServiceDetail,
    GigServiceListing,
    GigServiceRead,
    GigServiceUpdate,
)
from campusgigs.schemas.review import ReviewRead, ServiceReviewsRead
from campusgigs.services import availability_service, gig_service, review_service
from campusgigs.services.errors import NotFoundError, PermissionDeniedError

router = APIRouter()


def _listing(rated: gig_service.RatedService) -> GigServiceListing:
    base = GigServiceRead.model_validate(rated.service)
    return GigServiceListing(
        **base.model_dump(),
        average_rating=rated.average_rating,
        total_reviews=rated.total_reviews,
    )


@router.get("", response_model=list[GigServiceListing], summary="Browse services")
async def list_services(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    category: str | None = None,
    search: str | None = None,
    min_price: Annotated[Decimal | None, Query(ge=0)] = None,
    max_price: Annotated[Decimal | None, Query(ge=0)] = None,
    provider_id: uuid.UUID | None = None,
    active: bool | None = True,
    skip: int = 0,
    limit: int = 50,
) -> list[GigServiceListing]:
    services = await gig_service.list_services(
        session,
        category=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        provider_id=provider_id,
        active=active,
        skip=skip,
        limit=limit,
    )
    return [_listing(rated) for rated in services]


@router.post(
    "",
    response_model=GigServiceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Publish service",
)
async def create_service(
    payload: GigServiceCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> GigServiceRead:
    try:
        service = await gig_service.create_service(
            session, provider_id=current_user.id, payload=payload
        )
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to create service",
        ) from exc
    return GigServiceRead.model_validate(service)


@router.get(
    "/categories", response_model=list[CategoryCount], summary="Service categories"
)
async def list_categories(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[CategoryCount]:
    categories = await gig_service.list_categories(session)
    return [CategoryCount(category=name, count=count) for name, count in categories]


@router.get("/{service_id}", response_model=GigServiceDetail, summary="Get service")
async def get_service(
    service_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> GigServiceDetail:
    rated = await gig_service.get_rated_service(session, service_id)
    if rated is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Service not found"
        )
    slots = await availability_service.list_for_provider(
        session, rated.service.provider_id
    )
    return GigServiceDetail(
        **_listing(rated).model_dump(),
        availability=[AvailabilitySlotRead.model_validate(slot) for slot in slots],
    )


@router.patch("/{service_id}", response_model=GigServiceRead, summary="Update service")
async def update_service(
    service_id: uuid.UUID,
    payload: GigServiceUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> GigServiceRead:
    try:
        service = await gig_service.update_service(
            session,
            service_id=service_id,
            actor_id=current_user.id,
            payload=payload,
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except PermissionDeniedError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return GigServiceRead.model_validate(service)


@router.delete(
    "/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate service",
)
async def delete_service(
    service_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> None:
    try:
        await gig_service.deactivate_service(
            session, service_id=service_id, actor_id=current_user.id
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


@router.get(
    "/{service_id}/reviews",
    response_model=ServiceReviewsRead,
    summary="Reviews for a service",
)
async def list_service_reviews(
    service_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ServiceReviewsRead:
    try:
        summary = await review_service.list_reviews_for_service(session, service_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return ServiceReviewsRead(
        service_id=summary.service_id,
        reviews=[ReviewRead.model_validate(obj) for obj in summary.reviews],
        average_rating=summary.average_rating,
        total_reviews=summary.total_reviews,
    )
