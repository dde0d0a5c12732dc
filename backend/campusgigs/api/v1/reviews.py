"""Review endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from campusgigs.api import deps
from campusgigs.models.user import User
from campusgigs.schemas.review import ReviewCreate, ReviewRead
from campusgigs.services import review_service
from campusgigs.services.errors import NotFoundError, PermissionDeniedError

router = APIRouter()


@router.post(
    "",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Review a completed booking",
)
async def create_review(
    payload: ReviewCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> ReviewRead:
    try:
        review = await review_service.create_review(
            session, reviewer_id=current_user.id, payload=payload
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
    return ReviewRead.model_validate(review)
