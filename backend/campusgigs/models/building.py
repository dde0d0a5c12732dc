"""Campus buildings where bookings take place."""

from __future__ import annotations

import uuid

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from campusgigs.db.base import Base
from campusgigs.models.mixins import TimestampMixin
from campusgigs.scheduling.walking_time import Coordinate, Location


class CampusBuilding(TimestampMixin, Base):
    """A physical campus building; coordinates may be unknown."""

    __tablename__ = "campus_buildings"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    code: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    lat: Mapped[float | None] = mapped_column(Float)
    lng: Mapped[float | None] = mapped_column(Float)

    @property
    def coordinate(self) -> Coordinate | None:
        if self.lat is None or self.lng is None:
            return None
        return Coordinate(lat=self.lat, lng=self.lng)

    def to_location(self) -> Location:
        """Detached scheduling view of this building."""
        return Location(
            location_id=self.id,
            name=self.name,
            code=self.code,
            coordinate=self.coordinate,
        )
