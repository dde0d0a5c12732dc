"""User model for campus marketplace members."""
from __future__ import annotations

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campusgigs.db.base import Base
from campusgigs.models.mixins import TimestampMixin


if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from campusgigs.models.availability import AvailabilitySlot
    from campusgigs.models.gig_service import GigService


class UserRole(str, enum.Enum):
    """Role enumeration for platform permissions."""

    ADMIN = "admin"
    STUDENT = "student"


class User(TimestampMixin, Base):
    """A student (or administrator) who can offer and book services."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole), default=UserRole.STUDENT, nullable=False
    )
    campus_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    services: Mapped[list["GigService"]] = relationship(
        "GigService", back_populates="provider"
    )
    availability: Mapped[list["AvailabilitySlot"]] = relationship(
        "AvailabilitySlot", back_populates="provider"
    )
