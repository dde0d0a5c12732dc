"""Services offered by students on the marketplace."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campusgigs.db.base import Base
from campusgigs.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from campusgigs.models.booking import Booking
    from campusgigs.models.user import User


class GigService(TimestampMixin, Base):
    """A bookable offering published by a provider."""

    __tablename__ = "gig_services"
    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="ck_gig_services_duration_positive"),
        CheckConstraint("base_price >= 0", name="ck_gig_services_price_nonnegative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    provider_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    provider: Mapped["User"] = relationship("User", back_populates="services")
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="service")
