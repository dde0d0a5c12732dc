"""Walking-time estimation tests."""

from __future__ import annotations

import pytest

from campusgigs.scheduling.walking_time import (
    Coordinate,
    DistanceEngine,
    estimate_travel_minutes,
    format_minutes,
    haversine_distance_km,
)

LIBRARY = Coordinate(lat=33.7530, lng=-84.3860)
SCIENCE = Coordinate(lat=33.7573, lng=-84.3860)
FARTHER = Coordinate(lat=33.7616, lng=-84.3860)


def test_zero_distance_takes_no_time() -> None:
    assert estimate_travel_minutes(LIBRARY, LIBRARY) == 0
    assert haversine_distance_km(LIBRARY, LIBRARY) == 0


def test_estimate_is_symmetric() -> None:
    assert estimate_travel_minutes(LIBRARY, SCIENCE) == estimate_travel_minutes(
        SCIENCE, LIBRARY
    )


def test_known_pair_rounds_up_to_whole_minutes() -> None:
    # ~0.478 km at 5 km/h with 1.3 friction is ~7.46 minutes
    assert haversine_distance_km(LIBRARY, SCIENCE) == pytest.approx(0.478, abs=0.001)
    assert estimate_travel_minutes(LIBRARY, SCIENCE) == 8


NORTHWARD_OFFSETS = [0.0001, 0.0005, 0.001, 0.0043, 0.0044, 0.0086, 0.02, 0.05]


def _north_of_library(offset: float) -> Coordinate:
    return Coordinate(lat=LIBRARY.lat + offset, lng=LIBRARY.lng)


@pytest.mark.parametrize(
    ("near", "far"), list(zip(NORTHWARD_OFFSETS, NORTHWARD_OFFSETS[1:]))
)
def test_farther_destination_never_takes_less_time(near: float, far: float) -> None:
    near_point = _north_of_library(near)
    far_point = _north_of_library(far)
    assert haversine_distance_km(LIBRARY, far_point) > haversine_distance_km(
        LIBRARY, near_point
    )
    assert estimate_travel_minutes(LIBRARY, far_point) >= estimate_travel_minutes(
        LIBRARY, near_point
    )


def test_twice_the_distance_rounds_up_again() -> None:
    assert estimate_travel_minutes(LIBRARY, FARTHER) == 15


def test_engine_applies_configured_pace() -> None:
    brisk = DistanceEngine(walking_speed_kmh=5.0, friction_factor=1.0)
    assert brisk.estimate_travel_minutes(LIBRARY, SCIENCE) == 6


@pytest.mark.parametrize(
    "kwargs",
    [{"walking_speed_kmh": 0}, {"walking_speed_kmh": -1}, {"friction_factor": 0.5}],
)
def test_engine_rejects_invalid_pace(kwargs: dict[str, float]) -> None:
    with pytest.raises(ValueError):
        DistanceEngine(**kwargs)


def test_format_minutes_pluralizes() -> None:
    assert format_minutes(1) == "1 minute"
    assert format_minutes(8) == "8 minutes"
    assert format_minutes(0) == "0 minutes"
