"""
Pytest fixtures for the store, notifier, client, and authentication.

Every test gets a fresh in-memory key-value store and a recording
notification sink, wired into the app through dependency overrides.
"""

import os

os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from unibook.main import app
from unibook.core.config import get_settings
from unibook.core.security import create_access_token
from unibook.infrastructure import InMemoryKeyValueStore, get_store
from unibook.models.booking import Booking, BookingStatus
from unibook.models.identity import Identity
from unibook.services.identity_service import TokenIdentityProvider
from unibook.services.interfaces.notification import NotificationSink
from unibook.services.notification_service import get_notifier


class RecordingNotificationSink(NotificationSink):
    """Keeps every message instead of delivering it."""

    def __init__(self):
        self.messages: list[dict] = []

    def send(self, recipient: str, subject: str, body: str) -> None:
        self.messages.append({"recipient": recipient, "subject": subject, "body": body})


class BrokenNotificationSink(NotificationSink):
    def send(self, recipient: str, subject: str, body: str) -> None:
        raise ConnectionError("mail relay unreachable")


def token_for(identity: Identity) -> str:
    return create_access_token(data={
        "sub": identity.id,
        "email": identity.email,
        "name": identity.name,
        "role": identity.role,
    })


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def notifier() -> RecordingNotificationSink:
    return RecordingNotificationSink()


@pytest.fixture
def provider(store) -> TokenIdentityProvider:
    return TokenIdentityProvider(store)


@pytest_asyncio.fixture
async def client(store, notifier) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the store and notifier replaced by test doubles."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def api(settings) -> str:
    return settings.API_PREFIX


@pytest.fixture
def user_identity() -> Identity:
    return Identity(id="user-1", email="student@university.edu", role="user", name="Jane Student")


@pytest.fixture
def other_identity() -> Identity:
    return Identity(id="user-2", email="other@university.edu", role="user", name="Other Student")


@pytest.fixture
def admin_identity() -> Identity:
    return Identity(id="admin-1", email="admin@university.edu", role="admin", name="Admin User")


@pytest.fixture
def auth_headers(user_identity) -> dict:
    return {"Authorization": f"Bearer {token_for(user_identity)}"}


@pytest.fixture
def other_headers(other_identity) -> dict:
    return {"Authorization": f"Bearer {token_for(other_identity)}"}


@pytest.fixture
def admin_headers(admin_identity) -> dict:
    return {"Authorization": f"Bearer {token_for(admin_identity)}"}


@pytest.fixture
def booking_payload() -> dict:
    return {
        "location_id": "indoor-stadium",
        "location_name": "Indoor Stadium",
        "date": "2024-06-01",
        "start_time": "10:00",
        "end_time": "11:00",
        "purpose": "Inter-faculty volleyball final",
        "organizer_name": "Jane Student",
        "organizer_contact": "+1 555 0100",
        "expected_attendees": 120,
        "user_email": "student@university.edu",
    }


@pytest.fixture
def make_booking():
    """Factory for stored booking records."""

    def _make(
        booking_id: str = "BK-20240601-AAAAA",
        location_id: str = "indoor-stadium",
        date: str = "2024-06-01",
        start_time: str = "10:00",
        end_time: str = "11:00",
        status: BookingStatus = BookingStatus.PENDING,
        user_id: str = "user-1",
        created_at: datetime = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc),
    ) -> Booking:
        return Booking(
            booking_id=booking_id,
            user_id=user_id,
            user_email=f"{user_id}@university.edu",
            location_id=location_id,
            location_name="Indoor Stadium",
            date=date,
            start_time=start_time,
            end_time=end_time,
            purpose="Practice session",
            organizer_name="Jane Student",
            organizer_contact="+1 555 0100",
            expected_attendees=20,
            status=status,
            created_at=created_at,
        )

    return _make


@pytest_asyncio.fixture
async def stored_booking(store, settings, make_booking) -> Booking:
    booking = make_booking()
    await store.set(f"{settings.BOOKING_KEY_PREFIX}{booking.booking_id}", booking.to_record())
    return booking


@pytest.fixture
def broken_notifier() -> BrokenNotificationSink:
    return BrokenNotificationSink()
