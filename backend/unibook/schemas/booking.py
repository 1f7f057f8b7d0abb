"""
Pydantic schemas for booking-related request/response validation.

Request fields are deliberately optional: the booking engine owns the
required-field rules so clients get its messages with a 400, not a 422.
"""

from typing import Optional, Union
from pydantic import BaseModel

from unibook.models.booking import Booking


class BookingCreate(BaseModel):
    location_id: Optional[str] = None
    location_name: Optional[str] = None
    date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    purpose: Optional[str] = None
    organizer_name: Optional[str] = None
    organizer_contact: Optional[str] = None
    expected_attendees: Optional[Union[int, str]] = None
    # Accepted for client compatibility; the stored email comes from the token
    user_email: Optional[str] = None


class BookingCreatedResponse(BaseModel):
    success: bool = True
    booking_id: str
    message: str = "Booking created successfully"


class PublicBooking(BaseModel):
    id: str
    location_id: str
    date: str
    start_time: str
    end_time: str
    status: str


class PublicBookingListResponse(BaseModel):
    bookings: list[PublicBooking]


class BookingListResponse(BaseModel):
    bookings: list[Booking]


class BookingStatsResponse(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int


class StatusUpdate(BaseModel):
    status: Optional[str] = None
    admin_notes: Optional[str] = None


class StatusUpdateResponse(BaseModel):
    success: bool = True
    message: str
    booking: Booking
