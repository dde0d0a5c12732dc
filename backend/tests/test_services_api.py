"""Marketplace service endpoints."""

from __future__ import annotations

import uuid
from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _authenticate(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def test_browse_services(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/services")
    assert response.status_code == 200
    [listing] = response.json()
    assert listing["id"] == str(app_context["service_id"])
    assert listing["provider"]["name"] == "Pat Provider"
    assert listing["base_price"] == "25.00"
    assert listing["average_rating"] == 0
    assert listing["total_reviews"] == 0


async def test_publish_and_filter_services(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _authenticate(
        client, app_context["customer_email"], app_context["password"]
    )
    created = await client.post(
        "/api/v1/services",
        json={
            "title": "Bike repair",
            "category": "repairs",
            "description": "Flat tires and brake tuning",
            "duration_minutes": 30,
            "base_price": "15.50",
        },
        headers=headers,
    )
    assert created.status_code == 201, created.text
    assert created.json()["provider_id"] == str(app_context["customer_id"])

    by_category = await client.get("/api/v1/services", params={"category": "repairs"})
    assert [s["title"] for s in by_category.json()] == ["Bike repair"]

    by_search = await client.get("/api/v1/services", params={"search": "calc"})
    assert [s["title"] for s in by_search.json()] == ["Calculus tutoring"]

    cheap = await client.get("/api/v1/services", params={"max_price": "20"})
    assert [s["title"] for s in cheap.json()] == ["Bike repair"]

    by_provider = await client.get(
        "/api/v1/services", params={"provider_id": str(app_context["provider_id"])}
    )
    assert [s["title"] for s in by_provider.json()] == ["Calculus tutoring"]


async def test_only_owner_updates_service(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    service_url = f"/api/v1/services/{app_context['service_id']}"

    stranger = await _authenticate(
        client, app_context["customer_email"], app_context["password"]
    )
    denied = await client.patch(service_url, json={"title": "Hijacked"}, headers=stranger)
    assert denied.status_code == 403

    owner = await _authenticate(
        client, app_context["provider_email"], app_context["password"]
    )
    updated = await client.patch(
        service_url, json={"title": "Calc II tutoring", "base_price": "30.00"}, headers=owner
    )
    assert updated.status_code == 200
    assert updated.json()["title"] == "Calc II tutoring"
    assert updated.json()["base_price"] == "30.00"

    empty = await client.patch(service_url, json={}, headers=owner)
    assert empty.status_code == 400

    missing = await client.patch(
        f"/api/v1/services/{uuid.uuid4()}", json={"title": "x"}, headers=owner
    )
    assert missing.status_code == 404


async def test_delete_deactivates_service(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    service_url = f"/api/v1/services/{app_context['service_id']}"
    owner = await _authenticate(
        client, app_context["provider_email"], app_context["password"]
    )
    response = await client.delete(service_url, headers=owner)
    assert response.status_code == 204

    assert (await client.get("/api/v1/services")).json() == []
    detail = await client.get(service_url)
    assert detail.status_code == 200
    assert detail.json()["active"] is False


async def test_unknown_service(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    assert (await client.get(f"/api/v1/services/{uuid.uuid4()}")).status_code == 404
    reviews = await client.get(f"/api/v1/services/{uuid.uuid4()}/reviews")
    assert reviews.status_code == 404


async def test_categories_count_active_services(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    owner = await _authenticate(
        client, app_context["provider_email"], app_context["password"]
    )
    for title, category in [("Essay review", "writing"), ("Stats help", "tutoring")]:
        created = await client.post(
            "/api/v1/services",
            json={
                "title": title,
                "category": category,
                "duration_minutes": 45,
                "base_price": "20.00",
            },
            headers=owner,
        )
        assert created.status_code == 201
    hidden = await client.post(
        "/api/v1/services",
        json={
            "title": "Old gig",
            "category": "archived",
            "duration_minutes": 30,
            "base_price": "5.00",
        },
        headers=owner,
    )
    await client.delete(f"/api/v1/services/{hidden.json()['id']}", headers=owner)

    response = await client.get("/api/v1/services/categories")
    assert response.status_code == 200
    assert response.json() == [
        {"category": "tutoring", "count": 2},
        {"category": "writing", "count": 1},
    ]


async def test_service_detail_lists_provider_availability(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    service_url = f"/api/v1/services/{app_context['service_id']}"
    assert (await client.get(service_url)).json()["availability"] == []

    owner = await _authenticate(
        client, app_context["provider_email"], app_context["password"]
    )
    for slot in [
        {"day_of_week": 2, "start_time": "13:00:00", "end_time": "16:00:00"},
        {"day_of_week": 0, "start_time": "09:00:00", "end_time": "11:30:00"},
    ]:
        created = await client.post("/api/v1/users/me/availability", json=slot, headers=owner)
        assert created.status_code == 201, created.text

    detail = await client.get(service_url)
    assert detail.status_code == 200
    assert [
        (slot["day_of_week"], slot["start_time"], slot["end_time"])
        for slot in detail.json()["availability"]
    ] == [(0, "09:00:00", "11:30:00"), (2, "13:00:00", "16:00:00")]
    assert all(
        slot["provider_id"] == str(app_context["provider_id"])
        for slot in detail.json()["availability"]
    )
    assert "availability" not in (await client.get("/api/v1/services")).json()[0]
