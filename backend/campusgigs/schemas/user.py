"""User-related schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from campusgigs.models.user import UserRole


class UserBase(BaseModel):
    """Shared user fields."""

    email: EmailStr
    name: str = Field(min_length=1, max_length=255)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserCreate(UserBase):
    """Payload for creating a user."""

    password: str = Field(min_length=8)
    role: UserRole = UserRole.STUDENT
    campus_verified: bool = False


class UserRead(UserBase):
    """Serialized user response."""

    id: uuid.UUID
    role: UserRole
    campus_verified: bool
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    """Public view of a user embedded in other payloads."""

    id: uuid.UUID
    name: str

    model_config = ConfigDict(from_attributes=True)
