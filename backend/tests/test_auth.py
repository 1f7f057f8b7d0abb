"""
Tests for account endpoints: signup, login and demo account seeding.
"""

import pytest
from httpx import AsyncClient

from unibook.core.errors import UnauthorizedError
from unibook.core.security import create_access_token


@pytest.mark.asyncio
async def test_signup(client: AsyncClient, api, store, notifier):
    """Successful signup stores a user account and sends a welcome message."""
    response = await client.post(f"{api}/signup", json={
        "email": "new@university.edu",
        "password": "securepassword123",
        "name": "New Student",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user_id"]

    record = await store.get("user:new@university.edu")
    assert record["role"] == "user"
    assert record["hashed_password"] != "securepassword123"

    assert notifier.messages[0]["subject"] == "Welcome to UniBook - Account Created"


@pytest.mark.asyncio
async def test_signup_missing_name(client: AsyncClient, api):
    response = await client.post(f"{api}/signup", json={
        "email": "new@university.edu",
        "password": "securepassword123",
    })
    assert response.status_code == 400
    assert response.json()["error"] == "Email, password, and name are required"


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient, api):
    payload = {"email": "dup@university.edu", "password": "securepassword123", "name": "Dup"}
    await client.post(f"{api}/signup", json=payload)
    response = await client.post(f"{api}/signup", json=payload)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, api, provider):
    await provider.create_user("test@university.edu", "testpassword123", "Test User")
    response = await client.post(f"{api}/auth/login", json={
        "email": "test@university.edu",
        "password": "testpassword123",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"

    identity = await provider.verify_token(data["access_token"])
    assert identity.email == "test@university.edu"
    assert identity.role == "user"


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, api, provider):
    await provider.create_user("test@university.edu", "testpassword123", "Test User")
    response = await client.post(f"{api}/auth/login", json={
        "email": "test@university.edu",
        "password": "wrongpassword",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_nonexistent_email(client: AsyncClient, api):
    response = await client.post(f"{api}/auth/login", json={
        "email": "nobody@university.edu",
        "password": "anypassword123",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_signed_up_user_can_book(client: AsyncClient, api, booking_payload):
    """Signup -> login -> book, end to end through the identity provider."""
    await client.post(f"{api}/signup", json={
        "email": "flow@university.edu", "password": "flowpassword1", "name": "Flow",
    })
    login = await client.post(f"{api}/auth/login", json={
        "email": "flow@university.edu", "password": "flowpassword1",
    })
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    response = await client.post(f"{api}/bookings", json=booking_payload, headers=headers)
    assert response.status_code == 201

    mine = await client.get(f"{api}/user-bookings", headers=headers)
    assert mine.json()["bookings"][0]["user_email"] == "flow@university.edu"


@pytest.mark.asyncio
async def test_init_demo_is_idempotent(client: AsyncClient, api, provider):
    first = await client.post(f"{api}/init-demo")
    assert first.status_code == 200
    assert all(r["success"] for r in first.json()["results"])
    assert all(r.get("note") is None for r in first.json()["results"])

    second = await client.post(f"{api}/init-demo")
    assert [r["note"] for r in second.json()["results"]] == ["already exists", "already exists"]

    token = await provider.authenticate("admin@university.edu", "admin123")
    identity = await provider.verify_token(token)
    assert identity.role == "admin"


@pytest.mark.asyncio
async def test_demo_admin_can_review(client: AsyncClient, api):
    await client.post(f"{api}/init-demo")
    login = await client.post(f"{api}/auth/login", json={
        "email": "admin@university.edu", "password": "admin123",
    })
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
    response = await client.get(f"{api}/admin/bookings", headers=headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_verify_token_rejects_missing_claims(provider):
    token = create_access_token(data={"sub": "user-1"})
    with pytest.raises(UnauthorizedError):
        await provider.verify_token(token)


@pytest.mark.asyncio
async def test_verify_token_rejects_expired(provider):
    from datetime import timedelta

    token = create_access_token(
        data={"sub": "user-1", "email": "a@university.edu"},
        expires_delta=timedelta(minutes=-5),
    )
    with pytest.raises(UnauthorizedError):
        await provider.verify_token(token)


@pytest.mark.asyncio
async def test_signup_malformed_email(client: AsyncClient, api):
    response = await client.post(f"{api}/signup", json={
        "email": "not-an-email", "password": "securepassword123", "name": "Someone",
    })
    assert response.status_code == 400
    assert response.json()["error"].startswith("email")


@pytest.mark.asyncio
async def test_signup_password_too_long(client: AsyncClient, api, store):
    response = await client.post(f"{api}/signup", json={
        "email": "long@university.edu", "password": "a" * 100, "name": "Long",
    })
    assert response.status_code == 400
    assert await store.get("user:long@university.edu") is None


@pytest.mark.asyncio
async def test_signup_password_over_72_bytes_of_multibyte_text(client: AsyncClient, api, store):
    """40 characters but 80 UTF-8 bytes: within the schema limit, beyond bcrypt's."""
    response = await client.post(f"{api}/signup", json={
        "email": "accent@university.edu", "password": "é" * 40, "name": "Accent",
    })
    assert response.status_code == 400
    assert response.json()["error"] == "Password must be at most 72 bytes"
    assert await store.get("user:accent@university.edu") is None


@pytest.mark.asyncio
async def test_create_user_accepts_exactly_72_bytes(provider):
    identity = await provider.create_user("edge@university.edu", "p" * 72, "Edge")
    assert await provider.authenticate("edge@university.edu", "p" * 72)
    assert identity.email == "edge@university.edu"
