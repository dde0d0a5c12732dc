"""User data access helpers."""
from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campusgigs.core.config import get_settings
from campusgigs.core.security import get_password_hash
from campusgigs.models.user import User
from campusgigs.schemas.user import UserCreate


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Return a user by email address."""
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    """Return a user by ID."""
    return await session.get(User, user_id)


def is_campus_email(email: str) -> bool:
    domain = get_settings().campus_email_domain
    return email.lower().endswith(f"@{domain}")


async def create_user(session: AsyncSession, payload: UserCreate) -> User:
    """Persist a new user with hashed password."""
    user = User(
        email=payload.email.lower(),
        hashed_password=get_password_hash(payload.password),
        name=payload.name,
        role=payload.role,
        campus_verified=payload.campus_verified,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(user)
    return user


async def register_student(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
) -> User:
    """Self-service registration restricted to the campus e-mail domain."""
    if not is_campus_email(email):
        domain = get_settings().campus_email_domain
        raise ValueError(f"Please use a valid @{domain} email address")
    if await get_user_by_email(session, email) is not None:
        raise ValueError("User with this email already exists")
    payload = UserCreate(
        name=name,
        email=email,
        password=password,
        campus_verified=True,
    )
    return await create_user(session, payload)
