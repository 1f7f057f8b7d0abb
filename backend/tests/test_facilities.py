"""
Tests for the facility catalog, slot availability and health endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_facilities(client: AsyncClient, api):
    response = await client.get(f"{api}/facilities")
    assert response.status_code == 200
    capacities = {f["id"]: f["capacity"] for f in response.json()["facilities"]}
    assert capacities == {
        "university-playground": 500,
        "auditorium": 800,
        "indoor-stadium": 300,
        "mini-auditorium": 150,
        "student-center": 1000,
    }


@pytest.mark.asyncio
async def test_get_facility(client: AsyncClient, api):
    response = await client.get(f"{api}/facilities/mini-auditorium")
    assert response.status_code == 200
    assert response.json()["name"] == "Mini Auditorium"


@pytest.mark.asyncio
async def test_get_facility_not_found(client: AsyncClient, api):
    response = await client.get(f"{api}/facilities/moon-base")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_availability_after_booking(client: AsyncClient, api, auth_headers, booking_payload):
    """Booking 10:00-11:00 blocks the 10:00 slot and leaves 11:00 free."""
    await client.post(f"{api}/bookings", json=booking_payload, headers=auth_headers)

    response = await client.get(
        f"{api}/facilities/indoor-stadium/availability", params={"date": "2024-06-01"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["date"] == "2024-06-01"
    slots = {s["time"]: s["booked"] for s in data["slots"]}
    assert len(slots) == 15
    assert slots["10:00"] is True
    assert slots["11:00"] is False


@pytest.mark.asyncio
async def test_availability_requires_valid_date(client: AsyncClient, api):
    response = await client.get(f"{api}/facilities/indoor-stadium/availability")
    assert response.status_code == 400

    response = await client.get(
        f"{api}/facilities/indoor-stadium/availability", params={"date": "June 1st"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_availability_unknown_facility(client: AsyncClient, api):
    response = await client.get(f"{api}/facilities/moon-base/availability", params={"date": "2024-06-01"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["store"] == "connected"
    assert data["timestamp"]


@pytest.mark.asyncio
async def test_metrics(client: AsyncClient):
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "unibook_booking_submissions_total" in response.text


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert response.headers["X-Response-Time"].endswith("ms")
