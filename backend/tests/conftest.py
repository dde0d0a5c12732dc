"""Test fixtures for the Campus Gigs backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from campusgigs.core.config import get_settings
from campusgigs.core.security import get_password_hash
from campusgigs.db.base import Base
from campusgigs.db.session import dispose_engine, get_sessionmaker
from campusgigs.main import app
from campusgigs.models import CampusBuilding, GigService, User, UserRole


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def marketplace(reset_database: None, db_url: str) -> dict[str, object]:
    """Seed a provider with one service, a customer, an admin and three buildings.

    The library and the science center are 8 walking minutes apart; the annex
    has no coordinates.
    """
    sessionmaker = get_sessionmaker(db_url)
    password = "Passw0rd!"
    async with sessionmaker() as session:
        provider = User(
            email="provider@gsu.edu",
            hashed_password=get_password_hash(password),
            name="Pat Provider",
            role=UserRole.STUDENT,
            campus_verified=True,
        )
        customer = User(
            email="customer@gsu.edu",
            hashed_password=get_password_hash(password),
            name="Casey Customer",
            role=UserRole.STUDENT,
            campus_verified=True,
        )
        admin = User(
            email="admin@gsu.edu",
            hashed_password=get_password_hash(password),
            name="Ada Admin",
            role=UserRole.ADMIN,
            campus_verified=True,
        )
        library = CampusBuilding(
            code="LIB", name="University Library", lat=33.7530, lng=-84.3860
        )
        science = CampusBuilding(
            code="PSC", name="Petit Science Center", lat=33.7573, lng=-84.3860
        )
        annex = CampusBuilding(code="ANNEX", name="Temporary Annex")
        session.add_all([provider, customer, admin, library, science, annex])
        await session.flush()

        service = GigService(
            provider_id=provider.id,
            title="Calculus tutoring",
            category="tutoring",
            description="One hour of Calc I help",
            duration_minutes=60,
            base_price=Decimal("25.00"),
        )
        session.add(service)
        await session.commit()

        return {
            "password": password,
            "provider_id": provider.id,
            "provider_email": provider.email,
            "customer_id": customer.id,
            "customer_email": customer.email,
            "admin_email": admin.email,
            "library_id": library.id,
            "science_id": science.id,
            "annex_id": annex.id,
            "service_id": service.id,
        }


@pytest_asyncio.fixture()
async def app_context(marketplace: dict[str, object]) -> AsyncIterator[dict[str, object]]:
    """Yield an async client alongside the seeded marketplace data."""
    context = dict(marketplace)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
