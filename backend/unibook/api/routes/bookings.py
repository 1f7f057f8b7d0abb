"""
Booking endpoints for requesters and the public schedule.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from unibook.api.deps import get_current_identity, get_notifier, get_store
from unibook.models.identity import Identity
from unibook.schemas.booking import (
    BookingCreate,
    BookingCreatedResponse,
    BookingListResponse,
    PublicBookingListResponse,
)
from unibook.services.booking_service import (
    list_location_bookings,
    list_user_bookings,
    submit_booking,
)
from unibook.services.interfaces.kv_store import KeyValueStore
from unibook.services.interfaces.notification import NotificationSink

router = APIRouter(tags=["Bookings"])


@router.get("/bookings", response_model=PublicBookingListResponse)
async def list_bookings(
    location_id: Optional[str] = Query(None),
    date: Optional[str] = Query(None),
    store: KeyValueStore = Depends(get_store),
):
    """Occupied time ranges of one facility-day. Rejected bookings are omitted."""
    bookings = await list_location_bookings(store, location_id, date)
    return PublicBookingListResponse(bookings=bookings)


@router.post("/bookings", response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    identity: Optional[Identity] = Depends(get_current_identity),
    store: KeyValueStore = Depends(get_store),
    notifier: NotificationSink = Depends(get_notifier),
):
    """
    Submit a booking request. It is stored as pending until an administrator
    decides on it. Overlapping an existing booking is allowed unless strict
    conflict mode is enabled.
    """
    booking = await submit_booking(store, identity, notifier, data.model_dump())
    return BookingCreatedResponse(booking_id=booking.booking_id)


@router.get("/user-bookings", response_model=BookingListResponse)
async def my_bookings(
    identity: Optional[Identity] = Depends(get_current_identity),
    store: KeyValueStore = Depends(get_store),
):
    """The caller's bookings, newest first."""
    bookings = await list_user_bookings(store, identity)
    return BookingListResponse(bookings=bookings)
