from unibook.schemas.user import SignupRequest, SignupResponse, UserLogin, Token, DemoInitResponse
from unibook.schemas.booking import (
    BookingCreate,
    BookingCreatedResponse,
    BookingListResponse,
    BookingStatsResponse,
    PublicBookingListResponse,
    StatusUpdate,
    StatusUpdateResponse,
)
from unibook.schemas.facility import AvailabilityResponse, FacilityListResponse

__all__ = [
    "SignupRequest", "SignupResponse", "UserLogin", "Token", "DemoInitResponse",
    "BookingCreate", "BookingCreatedResponse", "BookingListResponse", "BookingStatsResponse",
    "PublicBookingListResponse", "StatusUpdate", "StatusUpdateResponse",
    "AvailabilityResponse", "FacilityListResponse",
]
