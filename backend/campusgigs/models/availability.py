"""Weekly availability windows published by providers."""
from __future__ import annotations

import uuid
from datetime import time
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campusgigs.db.base import Base
from campusgigs.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from campusgigs.models.user import User


class AvailabilitySlot(TimestampMixin, Base):
    """A recurring weekly window in which a provider takes bookings.

    ``day_of_week`` follows :meth:`datetime.date.weekday` (Monday is 0).
    """

    __tablename__ = "availability_slots"
    __table_args__ = (
        CheckConstraint(
            "day_of_week BETWEEN 0 AND 6", name="ck_availability_slots_day_range"
        ),
        CheckConstraint("end_time > start_time", name="ck_availability_slots_order"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    provider_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    start_time: Mapped[time] = mapped_column(Time(), nullable=False)
    end_time: Mapped[time] = mapped_column(Time(), nullable=False)

    provider: Mapped["User"] = relationship("User", back_populates="availability")
