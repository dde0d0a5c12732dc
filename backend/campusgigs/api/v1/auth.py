"""Authentication endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campusgigs.api.deps import get_db_session
from campusgigs.core.config import get_settings
from campusgigs.schemas.auth import RegistrationRequest, RegistrationResponse, Token
from campusgigs.schemas.user import UserRead
from campusgigs.services import user_service
from campusgigs.services.auth_service import authenticate_user, create_access_token_for_user

logger = logging.getLogger(__name__)

router = APIRouter()

_settings = get_settings()

_SECONDS_PER_UNIT = {
    "second": 1,
    "seconds": 1,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


def _parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    """Turn ``"10/minute"`` into ``(10, 60)``."""
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except ValueError:
        return fallback
    return count, _SECONDS_PER_UNIT.get(window_str.strip().lower(), fallback[1])


def _rate_dependency(limit: tuple[int, int]):
    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        limiter = RateLimiter(times=limit[0], seconds=limit[1])
        await limiter(request, response)

    return Depends(_dependency)


_LOGIN_RATE_DEP = _rate_dependency(
    _parse_rate(_settings.rate_limit_login, fallback=(10, 60))
)
_DEFAULT_RATE_DEP = _rate_dependency(
    _parse_rate(_settings.rate_limit_default, fallback=(100, 60))
)


@router.post(
    "/token",
    response_model=Token,
    summary="Obtain access token",
    dependencies=[_LOGIN_RATE_DEP],
)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> Token:
    """Validate credentials and issue a bearer token."""
    user = await authenticate_user(
        session, email=form_data.username, password=form_data.password
    )
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=create_access_token_for_user(user))


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register student",
    dependencies=[_DEFAULT_RATE_DEP],
)
async def register_student(
    payload: RegistrationRequest,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> RegistrationResponse:
    try:
        user = await user_service.register_student(
            session,
            name=payload.name,
            email=payload.email,
            password=payload.password,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email already exists",
        ) from exc
    logger.info("Registered student %s", user.id)
    return RegistrationResponse(
        token=Token(access_token=create_access_token_for_user(user)),
        user=UserRead.model_validate(user),
    )
