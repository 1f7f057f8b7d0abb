"""
Booking engine: slot allocation and the approval state machine.

Everything here is pure apart from the notification side effect, which
goes through an injected NotificationSink. The engine never reads or
writes the key-value store; request handlers fetch records, pass them in
and persist whatever the engine returns.

SLOT MODEL
==========

Bookings snap to a fixed hourly catalog, 08:00 through 22:00. Times are
compared as integers with the colon removed ("09:00" -> 900), so a
booking covers the half-open range [start_time, end_time).

CONFLICTS ARE ADVISORY
======================

validate_booking_request does not look at other bookings. Two pending or
approved bookings may overlap in the store; clients grey out busy slots
using list_available_slots. find_conflicts exists for the optional strict
mode and is only called when STRICT_SLOT_CONFLICTS is enabled.
"""

import random
import re
import string
from datetime import date as date_type, datetime, timezone
from typing import Any, Iterable, Optional

from unibook.core.config import get_settings
from unibook.core.errors import (
    ConflictError,
    ForbiddenError,
    UnauthorizedError,
    ValidationError,
)
from unibook.models.booking import Booking, BookingStatus, DECISION_STATUSES
from unibook.models.identity import Identity
from unibook.services.interfaces.notification import NotificationSink


TIME_SLOTS = [
    "08:00", "09:00", "10:00", "11:00", "12:00",
    "13:00", "14:00", "15:00", "16:00", "17:00",
    "18:00", "19:00", "20:00", "21:00", "22:00",
]

REQUIRED_FIELDS = (
    "location_id",
    "date",
    "start_time",
    "end_time",
    "purpose",
    "organizer_name",
    "organizer_contact",
    "expected_attendees",
)

BOOKING_ID_ALPHABET = string.digits + string.ascii_uppercase
BOOKING_ID_SUFFIX_LENGTH = 5

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def _signature() -> str:
    return f"Best regards,\n{get_settings().NOTIFICATION_SENDER}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def slot_value(time_str: str) -> int:
    """'09:00' -> 900. Raises ValidationError on anything but HH:MM."""
    if not isinstance(time_str, str) or not _TIME_RE.match(time_str):
        raise ValidationError("invalid time")
    return int(time_str.replace(":", ""))


def generate_booking_id(now: Optional[datetime] = None) -> str:
    """
    BK-<YYYYMMDD>-<5 base36 chars>, dated in UTC.
    Uniqueness is probabilistic (36^5 per day); collisions are not checked.
    """
    now = now or _utcnow()
    suffix = "".join(random.choices(BOOKING_ID_ALPHABET, k=BOOKING_ID_SUFFIX_LENGTH))
    return f"BK-{now.astimezone(timezone.utc):%Y%m%d}-{suffix}"


def _field(booking: Any, name: str) -> Any:
    if isinstance(booking, dict):
        return booking.get(name)
    return getattr(booking, name, None)


def _status_value(booking: Any) -> Optional[str]:
    value = _field(booking, "status")
    return value.value if isinstance(value, BookingStatus) else value


def _occupying(bookings: Iterable[Any], location_id: str, date: str) -> list[Any]:
    """Bookings that hold time on the facility-day. Rejected ones never do."""
    return [
        b for b in bookings
        if _field(b, "location_id") == location_id
        and _field(b, "date") == date
        and _status_value(b) != BookingStatus.REJECTED.value
    ]


def list_available_slots(location_id: str, date: str, all_bookings: Iterable[Any]) -> list[tuple[str, bool]]:
    """
    Return (slot, booked) for every catalog slot.

    A slot is booked when it falls inside [start_time, end_time) of any
    non-rejected booking for the same location and date. Accepts Booking
    models or raw store records.
    """
    ranges = [
        (slot_value(_field(b, "start_time")), slot_value(_field(b, "end_time")))
        for b in _occupying(all_bookings, location_id, date)
    ]
    slots = []
    for slot in TIME_SLOTS:
        value = slot_value(slot)
        slots.append((slot, any(start <= value < end for start, end in ranges)))
    return slots


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _parse_attendees(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        value = value.strip()
        if re.fullmatch(r"[+-]?\d+", value):
            try:
                return int(value)
            except ValueError:
                # Beyond the interpreter's int-string conversion limit
                return None
    return None


def check_required_fields(data: dict) -> None:
    """Raise ValidationError("missing field") unless every required field is present and non-blank."""
    for name in REQUIRED_FIELDS:
        if _is_blank(data.get(name)):
            raise ValidationError("missing field")


def validate_booking_request(data: dict, capacity: int) -> dict:
    """
    Validate a creation request and return a normalized copy.

    Checks run in order and the first failure wins:
      1. every required field present and non-blank, date well formed,
         start_time and end_time taken from TIME_SLOTS
      2. end_time strictly after start_time
      3. expected_attendees is a positive integer
      4. expected_attendees within the facility capacity
    """
    check_required_fields(data)

    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", str(data["date"]).strip()):
        raise ValidationError("invalid date")
    try:
        date_type.fromisoformat(str(data["date"]).strip())
    except ValueError:
        raise ValidationError("invalid date")

    for name in ("start_time", "end_time"):
        if data[name] not in TIME_SLOTS:
            raise ValidationError("invalid time")
    start = slot_value(data["start_time"])
    end = slot_value(data["end_time"])
    if end <= start:
        raise ValidationError("end before start")

    attendees = _parse_attendees(data["expected_attendees"])
    if attendees is None or attendees <= 0:
        raise ValidationError("invalid attendee count")

    if attendees > capacity:
        raise ValidationError("exceeds capacity")

    normalized = dict(data)
    normalized["expected_attendees"] = attendees
    for name in ("location_id", "date", "purpose", "organizer_name", "organizer_contact"):
        normalized[name] = str(normalized[name]).strip()
    return normalized


def find_conflicts(request: dict, all_bookings: Iterable[Any]) -> list[Any]:
    """Non-rejected bookings on the same facility-day whose range overlaps the request."""
    start = slot_value(request["start_time"])
    end = slot_value(request["end_time"])
    return [
        b for b in _occupying(all_bookings, request["location_id"], request["date"])
        if slot_value(_field(b, "start_time")) < end and start < slot_value(_field(b, "end_time"))
    ]


def _notify(notifier: NotificationSink, kind: str, recipient: str, subject: str, body: str) -> None:
    """Hand a message to the sink. Failures are logged and counted by the sink, never raised."""
    notifier.deliver(kind, recipient, subject, body)


def submission_message(booking: Booking) -> tuple[str, str]:
    subject = f"Booking Request Submitted - {booking.booking_id}"
    body = (
        f"Hi {booking.organizer_name},\n\n"
        "Your booking request has been submitted successfully!\n\n"
        "Booking Details:\n"
        f"- Booking ID: {booking.booking_id}\n"
        f"- Location: {booking.location_name}\n"
        f"- Date: {booking.date}\n"
        f"- Time: {booking.start_time} - {booking.end_time}\n"
        f"- Purpose: {booking.purpose}\n"
        f"- Expected Attendees: {booking.expected_attendees}\n\n"
        "Status: PENDING REVIEW\n\n"
        "Your booking is currently being reviewed by our administrators. "
        "You will receive another email once your booking has been approved "
        "or if any changes are needed.\n\n"
        + _signature()
    )
    return subject, body


def decision_message(booking: Booking) -> tuple[str, str]:
    status_text = booking.status.value.upper()
    mark = "✓" if booking.status == BookingStatus.APPROVED else "✗"
    body = (
        f"Hi {booking.organizer_name},\n\n"
        f"Your booking request has been {status_text.lower()}!\n\n"
        f"{mark} Booking Details:\n"
        f"- Booking ID: {booking.booking_id}\n"
        f"- Location: {booking.location_name}\n"
        f"- Date: {booking.date}\n"
        f"- Time: {booking.start_time} - {booking.end_time}\n"
        f"- Status: {status_text}\n\n"
    )
    if booking.admin_notes:
        body += f"Admin Notes:\n{booking.admin_notes}\n\n"
    if booking.status == BookingStatus.APPROVED:
        body += (
            "Please arrive at least 15 minutes before your scheduled time. "
            "If you need to cancel or make changes, please contact us immediately.\n\n"
        )
    else:
        body += "If you have any questions about this decision, please contact our administrative office.\n\n"
    body += _signature()
    return f"Booking {status_text} - {booking.booking_id}", body


def create_booking(
    data: dict,
    identity: Identity,
    notifier: NotificationSink,
    now: Optional[datetime] = None,
) -> Booking:
    """
    Build a new pending booking from a validated request and notify the requester.
    The caller persists the returned record.
    """
    now = now or _utcnow()
    booking = Booking(
        booking_id=generate_booking_id(now),
        user_id=identity.id,
        user_email=identity.email,
        location_id=data["location_id"],
        location_name=data.get("location_name") or data["location_id"],
        date=data["date"],
        start_time=data["start_time"],
        end_time=data["end_time"],
        purpose=data["purpose"],
        organizer_name=data["organizer_name"],
        organizer_contact=data["organizer_contact"],
        expected_attendees=data["expected_attendees"],
        status=BookingStatus.PENDING,
        admin_notes="",
        created_at=now,
    )
    subject, body = submission_message(booking)
    _notify(notifier, "submission", booking.user_email, subject, body)
    return booking


def transition_status(
    booking: Booking,
    new_status: Any,
    admin_notes: Optional[str],
    admin_identity: Identity,
    notifier: NotificationSink,
    now: Optional[datetime] = None,
    require_pending: bool = False,
) -> Booking:
    """
    Apply an administrator decision and notify the booking owner.

    By default a booking may be decided repeatedly; every call overwrites the
    decision and sends another notification. With require_pending the booking
    must still be pending.
    """
    try:
        status = BookingStatus(new_status)
    except ValueError:
        raise ValidationError("invalid status")
    if status not in DECISION_STATUSES:
        raise ValidationError("invalid status")

    if require_pending and booking.status != BookingStatus.PENDING:
        raise ConflictError(f"Booking is already {booking.status.value}")

    updated = booking.model_copy(update={
        "status": status,
        "admin_notes": admin_notes or "",
        "updated_at": now or _utcnow(),
        "updated_by": admin_identity.id,
    })
    subject, body = decision_message(updated)
    _notify(notifier, "decision", updated.user_email, subject, body)
    return updated


def authorize(identity: Optional[Identity], required_role: Optional[str] = None) -> bool:
    """
    Per-request authorization against an already-verified identity.
    No identity -> UnauthorizedError; wrong role -> ForbiddenError.
    """
    if identity is None:
        raise UnauthorizedError("Unauthorized - No valid access token provided")
    if required_role is not None and identity.role != required_role:
        raise ForbiddenError(f"Forbidden - {required_role.capitalize()} access required")
    return True
