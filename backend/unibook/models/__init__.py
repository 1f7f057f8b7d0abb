from unibook.models.booking import Booking, BookingStatus
from unibook.models.identity import Identity
from unibook.models.facility import Facility

__all__ = ["Booking", "BookingStatus", "Identity", "Facility"]
