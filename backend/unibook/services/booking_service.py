"""
Booking request handlers.

Thin orchestration over the booking engine:
  authenticate (identity passed in) -> fetch records -> engine decision
  -> persist -> notify

All reads are a prefix scan of the booking namespace followed by in-memory
filtering. There are no transactions: a status change is read-then-write,
so two administrators deciding the same booking concurrently race and the
later write wins.
"""

import re
from datetime import date as date_type
from typing import Optional

from unibook.core.config import get_settings
from unibook.core.errors import ConflictError, NotFoundError, ValidationError, BookingError
from unibook.core.logging import get_logger
from unibook.core.metrics import (
    booking_submission_latency,
    record_booking_submission,
    record_status_transition,
)
from unibook.models.booking import Booking, BookingStatus
from unibook.models.facility import get_facility
from unibook.models.identity import Identity, ROLE_ADMIN
from unibook.services import booking_engine as engine
from unibook.services.interfaces.kv_store import KeyValueStore
from unibook.services.interfaces.notification import NotificationSink
from unibook.services.notification_service import DeferredNotificationSink

logger = get_logger(__name__)

PUBLIC_FIELDS = ("location_id", "date", "start_time", "end_time", "status")


def _booking_key(booking_id: str) -> str:
    return f"{get_settings().BOOKING_KEY_PREFIX}{booking_id}"


async def _load_bookings(store: KeyValueStore) -> list[Booking]:
    records = await store.get_by_prefix(get_settings().BOOKING_KEY_PREFIX)
    return [Booking.from_record(r) for r in records]


def _newest_first(bookings: list[Booking]) -> list[Booking]:
    return sorted(bookings, key=lambda b: b.created_at, reverse=True)


def _require_date(date: Optional[str]) -> str:
    if not date or not re.fullmatch(r"\d{4}-\d{2}-\d{2}", date):
        raise ValidationError("invalid date")
    try:
        date_type.fromisoformat(date)
    except ValueError:
        raise ValidationError("invalid date")
    return date


def public_view(booking: Booking) -> dict:
    view = {"id": booking.booking_id}
    for name in PUBLIC_FIELDS:
        view[name] = getattr(booking, name)
    view["status"] = booking.status.value
    return view


async def list_location_bookings(
    store: KeyValueStore,
    location_id: Optional[str],
    date: Optional[str],
) -> list[dict]:
    """Public: non-rejected bookings for one facility-day, projected to public fields."""
    if not location_id or not date:
        raise ValidationError("location_id and date are required")

    bookings = await _load_bookings(store)
    return [
        public_view(b) for b in bookings
        if b.location_id == location_id
        and b.date == date
        and b.status != BookingStatus.REJECTED
    ]


async def facility_availability(store: KeyValueStore, location_id: str, date: Optional[str]) -> list[dict]:
    """Public: booked flag for every catalog slot of a facility-day."""
    if get_facility(location_id) is None:
        raise NotFoundError(f"Facility {location_id} not found")
    date = _require_date(date)

    bookings = await _load_bookings(store)
    return [
        {"time": slot, "booked": booked}
        for slot, booked in engine.list_available_slots(location_id, date, bookings)
    ]


async def submit_booking(
    store: KeyValueStore,
    identity: Optional[Identity],
    notifier: NotificationSink,
    data: dict,
    strict_conflicts: Optional[bool] = None,
) -> Booking:
    """
    Validate and store a new pending booking for the caller.

    The store write is the only mutation, so a failure anywhere before it
    leaves nothing behind. The confirmation message goes out only after
    the write.
    """
    engine.authorize(identity)
    if strict_conflicts is None:
        strict_conflicts = get_settings().STRICT_SLOT_CONFLICTS

    with booking_submission_latency.time():
        try:
            engine.check_required_fields(data)
            facility = get_facility(str(data["location_id"]).strip())
            if facility is None:
                raise ValidationError("unknown facility")
            request = engine.validate_booking_request(data, facility.capacity)
            if not request.get("location_name"):
                request["location_name"] = facility.name

            if strict_conflicts:
                conflicts = engine.find_conflicts(request, await _load_bookings(store))
                if conflicts:
                    logger.warning(
                        "booking_conflict",
                        location_id=request["location_id"],
                        date=request["date"],
                        conflicting=[c.booking_id for c in conflicts],
                    )
                    raise ConflictError("Requested time overlaps an existing booking")

            outbox = DeferredNotificationSink(notifier)
            booking = engine.create_booking(request, identity, outbox)
            await store.set(_booking_key(booking.booking_id), booking.to_record())
        except ValidationError as e:
            record_booking_submission("invalid")
            logger.info("booking_rejected_invalid", user_id=identity.id, reason=e.message)
            raise
        except ConflictError:
            record_booking_submission("conflict")
            raise
        except BookingError:
            record_booking_submission("error")
            raise

    outbox.flush()
    record_booking_submission("created")
    logger.info(
        "booking_created",
        booking_id=booking.booking_id,
        user_id=identity.id,
        location_id=booking.location_id,
        date=booking.date,
        start_time=booking.start_time,
        end_time=booking.end_time,
    )
    return booking


async def list_user_bookings(store: KeyValueStore, identity: Optional[Identity]) -> list[Booking]:
    """All bookings owned by the caller, newest first."""
    engine.authorize(identity)
    bookings = await _load_bookings(store)
    return _newest_first([b for b in bookings if b.user_id == identity.id])


async def list_all_bookings(
    store: KeyValueStore,
    identity: Optional[Identity],
    status: Optional[str] = None,
    location_id: Optional[str] = None,
) -> list[Booking]:
    """
    Admin: every booking, newest first.
    status / location_id narrow the list; "all" or None means no filter.
    """
    engine.authorize(identity, ROLE_ADMIN)

    if status and status != "all":
        try:
            status = BookingStatus(status)
        except ValueError:
            raise ValidationError("invalid status")

    bookings = await _load_bookings(store)
    if status and status != "all":
        bookings = [b for b in bookings if b.status == status]
    if location_id and location_id != "all":
        bookings = [b for b in bookings if b.location_id == location_id]
    return _newest_first(bookings)


async def booking_stats(store: KeyValueStore, identity: Optional[Identity]) -> dict:
    """Admin: booking counts per status."""
    engine.authorize(identity, ROLE_ADMIN)
    bookings = await _load_bookings(store)
    stats = {"total": len(bookings)}
    for status in BookingStatus:
        stats[status.value] = sum(1 for b in bookings if b.status == status)
    return stats


async def change_booking_status(
    store: KeyValueStore,
    identity: Optional[Identity],
    notifier: NotificationSink,
    booking_id: str,
    new_status: Optional[str],
    admin_notes: Optional[str] = None,
) -> Booking:
    """
    Admin: approve or reject a booking.

    Rejections must carry a reason when REQUIRE_REJECTION_NOTES is set;
    transition_status itself accepts empty notes.
    """
    engine.authorize(identity, ROLE_ADMIN)
    settings = get_settings()

    if new_status not in (BookingStatus.APPROVED.value, BookingStatus.REJECTED.value):
        raise ValidationError('Invalid status. Must be "approved" or "rejected"')

    if (
        settings.REQUIRE_REJECTION_NOTES
        and new_status == BookingStatus.REJECTED.value
        and not (admin_notes or "").strip()
    ):
        raise ValidationError("Admin notes are required when rejecting a booking")

    key = _booking_key(booking_id)
    record = await store.get(key)
    if record is None:
        raise NotFoundError("Booking not found")

    existing = Booking.from_record(record)
    outbox = DeferredNotificationSink(notifier)
    updated = engine.transition_status(
        existing,
        new_status,
        admin_notes,
        identity,
        outbox,
        require_pending=settings.STRICT_STATUS_TRANSITIONS,
    )
    await store.set(key, updated.to_record())
    outbox.flush()

    record_status_transition(updated.status.value)
    logger.info(
        "booking_status_changed",
        booking_id=booking_id,
        previous_status=existing.status.value,
        status=updated.status.value,
        admin_id=identity.id,
    )
    return updated
