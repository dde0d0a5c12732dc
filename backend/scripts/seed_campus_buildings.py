"""Seed campus buildings with their coordinates (idempotent by code)."""

from __future__ import annotations

import asyncio
import logging

from campusgigs.core.config import get_settings
from campusgigs.db.session import get_sessionmaker
from campusgigs.schemas.building import BuildingCreate
from campusgigs.services import building_service

logger = logging.getLogger(__name__)

BUILDINGS: list[dict[str, object]] = [
    {"code": "LIB", "name": "University Library", "lat": 33.7530, "lng": -84.3860},
    {"code": "SC", "name": "Student Center East", "lat": 33.7525, "lng": -84.3848},
    {"code": "AH", "name": "Aderhold Learning Center", "lat": 33.7555, "lng": -84.3896},
    {"code": "CLSO", "name": "Classroom South", "lat": 33.7519, "lng": -84.3857},
    {"code": "LANGDALE", "name": "Langdale Hall", "lat": 33.7536, "lng": -84.3871},
    {"code": "PSC", "name": "Petit Science Center", "lat": 33.7573, "lng": -84.3860},
    {"code": "REC", "name": "Recreation Center", "lat": 33.7522, "lng": -84.3833},
]


async def main() -> None:
    sessionmaker = get_sessionmaker(get_settings().database_url)
    created = 0
    async with sessionmaker() as session:
        for entry in BUILDINGS:
            payload = BuildingCreate.model_validate(entry)
            if await building_service.get_building_by_code(session, payload.code):
                continue
            await building_service.create_building(session, payload)
            created += 1
    logger.info("Seeded %d new campus buildings", created)
    print(f"Seeded {created} new campus buildings ({len(BUILDINGS)} known)")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
