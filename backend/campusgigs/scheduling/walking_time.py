"""Walking-time estimates between campus coordinates."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from typing import Final

EARTH_RADIUS_KM: Final = 6371.0
DEFAULT_WALKING_SPEED_KMH: Final = 5.0
DEFAULT_CAMPUS_FRICTION_FACTOR: Final = 1.3


@dataclass(slots=True, frozen=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


@dataclass(slots=True, frozen=True)
class Location:
    """A bookable campus place; ``coordinate`` is ``None`` when unknown."""

    location_id: uuid.UUID | None
    name: str
    code: str | None = None
    coordinate: Coordinate | None = None


def haversine_distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in kilometers."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng) - math.radians(a.lng)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    h = min(1.0, h)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


class DistanceEngine:
    """Convert coordinate pairs into whole walking minutes, rounded up."""

    def __init__(
        self,
        *,
        walking_speed_kmh: float = DEFAULT_WALKING_SPEED_KMH,
        friction_factor: float = DEFAULT_CAMPUS_FRICTION_FACTOR,
    ) -> None:
        if walking_speed_kmh <= 0:
            raise ValueError("Walking speed must be positive")
        if friction_factor < 1:
            raise ValueError("Friction factor cannot shorten a walk")
        self.walking_speed_kmh = walking_speed_kmh
        self.friction_factor = friction_factor

    def estimate_travel_minutes(self, a: Coordinate, b: Coordinate) -> int:
        if a == b:
            return 0
        distance_km = haversine_distance_km(a, b)
        minutes = distance_km / self.walking_speed_kmh * 60 * self.friction_factor
        return math.ceil(minutes)


_default_engine = DistanceEngine()


def estimate_travel_minutes(a: Coordinate, b: Coordinate) -> int:
    """Walking minutes between ``a`` and ``b`` using the default campus pace."""
    return _default_engine.estimate_travel_minutes(a, b)


def format_minutes(minutes: int) -> str:
    """Render a minute count for display, e.g. ``"1 minute"`` or ``"8 minutes"``."""
    return f"{minutes} minute{'' if minutes == 1 else 's'}"


__all__ = [
    "Coordinate",
    "DistanceEngine",
    "Location",
    "estimate_travel_minutes",
    "format_minutes",
    "haversine_distance_km",
]
