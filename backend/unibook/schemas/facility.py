"""
Pydantic schemas for the facility catalog and slot availability.
"""

from pydantic import BaseModel

from unibook.models.facility import Facility


class FacilityListResponse(BaseModel):
    facilities: list[Facility]


class SlotAvailability(BaseModel):
    time: str
    booked: bool


class AvailabilityResponse(BaseModel):
    location_id: str
    date: str
    slots: list[SlotAvailability]
