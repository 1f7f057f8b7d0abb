"""
Booking record as persisted in the key-value store.

Key design decisions:
- Stored as a JSON document at `booking:<booking_id>`; there are no
  secondary indexes, every query is a prefix scan plus in-memory filter
- Status changes overwrite the record in place, bookings are never deleted
- user_id / user_email come from the verified identity, never the request body
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class BookingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


DECISION_STATUSES = (BookingStatus.APPROVED, BookingStatus.REJECTED)


class Booking(BaseModel):
    booking_id: str
    user_id: str
    user_email: str
    location_id: str
    location_name: str
    date: str
    start_time: str
    end_time: str
    purpose: str
    organizer_name: str
    organizer_contact: str
    expected_attendees: int
    status: BookingStatus = BookingStatus.PENDING
    admin_notes: str = ""
    created_at: datetime
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None

    def to_record(self) -> dict:
        """JSON-safe dict for the key-value store."""
        return self.model_dump(mode="json")

    @classmethod
    def from_record(cls, record: dict) -> "Booking":
        return cls.model_validate(record)

    def __repr__(self) -> str:
        return f"<Booking(id={self.booking_id}, location={self.location_id}, date={self.date}, status={self.status.value})>"
