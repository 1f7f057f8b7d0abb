"""
Administrator endpoints: review queue and approve/reject decisions.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from unibook.api.deps import get_current_identity, get_notifier, get_store
from unibook.models.identity import Identity
from unibook.schemas.booking import (
    BookingListResponse,
    BookingStatsResponse,
    StatusUpdate,
    StatusUpdateResponse,
)
from unibook.services.booking_service import (
    booking_stats,
    change_booking_status,
    list_all_bookings,
)
from unibook.services.interfaces.kv_store import KeyValueStore
from unibook.services.interfaces.notification import NotificationSink

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/bookings", response_model=BookingListResponse)
async def all_bookings(
    status: Optional[str] = Query(None, description="pending, approved, rejected or all"),
    location_id: Optional[str] = Query(None),
    identity: Optional[Identity] = Depends(get_current_identity),
    store: KeyValueStore = Depends(get_store),
):
    """Every booking, newest first."""
    bookings = await list_all_bookings(store, identity, status=status, location_id=location_id)
    return BookingListResponse(bookings=bookings)


@router.get("/bookings/stats", response_model=BookingStatsResponse)
async def stats(
    identity: Optional[Identity] = Depends(get_current_identity),
    store: KeyValueStore = Depends(get_store),
):
    return await booking_stats(store, identity)


@router.patch("/bookings/{booking_id}", response_model=StatusUpdateResponse)
async def update_status(
    booking_id: str,
    data: StatusUpdate,
    identity: Optional[Identity] = Depends(get_current_identity),
    store: KeyValueStore = Depends(get_store),
    notifier: NotificationSink = Depends(get_notifier),
):
    """Approve or reject a booking. Rejections require admin notes."""
    booking = await change_booking_status(
        store, identity, notifier, booking_id, data.status, data.admin_notes
    )
    return StatusUpdateResponse(message=f"Booking {booking.status.value} successfully", booking=booking)
