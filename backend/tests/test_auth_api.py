"""Registration, login and current-user endpoints."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _authenticate(client: AsyncClient, email: str, password: str) -> str:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return response.json()["access_token"]


async def test_register_campus_student(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "Sam Student", "email": "Sam.Student@GSU.edu", "password": "longenough"},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["user"]["email"] == "sam.student@gsu.edu"
    assert body["user"]["campus_verified"] is True
    assert body["user"]["role"] == "student"
    assert "hashed_password" not in body["user"]

    me = await client.get(
        "/api/v1/users/me",
        headers={"Authorization": f"Bearer {body['token']['access_token']}"},
    )
    assert me.status_code == 200
    assert me.json()["name"] == "Sam Student"


async def test_register_requires_campus_domain(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "Outsider", "email": "someone@example.com", "password": "longenough"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Please use a valid @gsu.edu email address"


async def test_register_rejects_duplicates(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "name": "Copycat",
            "email": app_context["customer_email"],
            "password": "longenough",
        },
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User with this email already exists"


async def test_register_validates_password_length(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "Shorty", "email": "shorty@gsu.edu", "password": "short"},
    )
    assert response.status_code == 422


async def test_login_and_me(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    token = await _authenticate(
        client, app_context["provider_email"], app_context["password"]
    )
    response = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200
    assert response.json()["id"] == str(app_context["provider_id"])


async def test_login_with_wrong_password_fails(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": app_context["provider_email"], "password": "wrong-password"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 401


async def test_me_requires_token(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    assert (await client.get("/api/v1/users/me")).status_code == 401
    bogus = await client.get(
        "/api/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert bogus.status_code == 401
