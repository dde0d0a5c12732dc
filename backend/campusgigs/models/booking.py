"""Booking models."""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campusgigs.db.base import Base
from campusgigs.models.mixins import TimestampMixin
from campusgigs.scheduling.conflicts import BookingInterval, BookingStatus, as_utc

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from campusgigs.models.building import CampusBuilding
    from campusgigs.models.gig_service import GigService
    from campusgigs.models.review import Review
    from campusgigs.models.user import User


class Booking(TimestampMixin, Base):
    """A customer's booking of a provider's service at a campus building."""

    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_provider_window", "provider_id", "status", "start_at", "end_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    service_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("gig_services.id", ondelete="CASCADE"), nullable=False
    )
    provider_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    building_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("campus_buildings.id", ondelete="RESTRICT"), nullable=False
    )
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus), default=BookingStatus.PENDING, nullable=False
    )
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    notes: Mapped[str | None] = mapped_column(String(1024))

    service: Mapped["GigService"] = relationship("GigService", back_populates="bookings")
    provider: Mapped["User"] = relationship("User", foreign_keys=[provider_id])
    customer: Mapped["User"] = relationship("User", foreign_keys=[customer_id])
    building: Mapped["CampusBuilding"] = relationship("CampusBuilding")
    review: Mapped["Review | None"] = relationship(
        "Review", back_populates="booking", uselist=False
    )

    @property
    def has_review(self) -> bool:
        return self.review is not None

    def to_interval(self) -> BookingInterval:
        """Detached scheduling view; requires ``building`` to be loaded."""
        return BookingInterval(
            booking_id=self.id,
            provider_id=self.provider_id,
            location=self.building.to_location(),
            start_at=as_utc(self.start_at),
            end_at=as_utc(self.end_at),
            status=self.status,
        )
