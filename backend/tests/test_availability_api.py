"""Provider weekly availability endpoints."""

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


async def test_manage_own_availability(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _authenticate(
        client, app_context["provider_email"], app_context["password"]
    )
    assert (await client.get("/api/v1/users/me/availability")).status_code == 401

    created = await client.post(
        "/api/v1/users/me/availability",
        json={"day_of_week": 4, "start_time": "10:00:00", "end_time": "12:00:00"},
        headers=headers,
    )
    assert created.status_code == 201
    slot_id = created.json()["id"]

    listed = await client.get("/api/v1/users/me/availability", headers=headers)
    assert [slot["id"] for slot in listed.json()] == [slot_id]

    removed = await client.delete(
        f"/api/v1/users/me/availability/{slot_id}", headers=headers
    )
    assert removed.status_code == 204
    assert (await client.get("/api/v1/users/me/availability", headers=headers)).json() == []


async def test_availability_validation(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _authenticate(
        client, app_context["provider_email"], app_context["password"]
    )
    inverted = await client.post(
        "/api/v1/users/me/availability",
        json={"day_of_week": 1, "start_time": "15:00:00", "end_time": "09:00:00"},
        headers=headers,
    )
    assert inverted.status_code == 400

    bad_day = await client.post(
        "/api/v1/users/me/availability",
        json={"day_of_week": 7, "start_time": "09:00:00", "end_time": "10:00:00"},
        headers=headers,
    )
    assert bad_day.status_code == 422


async def test_cannot_remove_someone_elses_slot(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    provider = await _authenticate(
        client, app_context["provider_email"], app_context["password"]
    )
    customer = await _authenticate(
        client, app_context["customer_email"], app_context["password"]
    )
    created = await client.post(
        "/api/v1/users/me/availability",
        json={"day_of_week": 3, "start_time": "08:00:00", "end_time": "09:00:00"},
        headers=provider,
    )
    slot_url = f"/api/v1/users/me/availability/{created.json()['id']}"

    assert (await client.delete(slot_url, headers=customer)).status_code == 403
    missing = await client.delete(
        f"/api/v1/users/me/availability/{uuid.uuid4()}", headers=provider
    )
    assert missing.status_code == 404
