"""
Facility catalog and slot availability endpoints. Public.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from unibook.api.deps import get_store
from unibook.core.errors import NotFoundError
from unibook.models.facility import FACILITIES, Facility, get_facility
from unibook.schemas.facility import AvailabilityResponse, FacilityListResponse
from unibook.services.booking_service import facility_availability
from unibook.services.interfaces.kv_store import KeyValueStore

router = APIRouter(prefix="/facilities", tags=["Facilities"])


@router.get("", response_model=FacilityListResponse)
async def list_facilities():
    return FacilityListResponse(facilities=FACILITIES)


@router.get("/{location_id}", response_model=Facility)
async def get_facility_endpoint(location_id: str):
    facility = get_facility(location_id)
    if facility is None:
        raise NotFoundError(f"Facility {location_id} not found")
    return facility


@router.get("/{location_id}/availability", response_model=AvailabilityResponse)
async def availability(
    location_id: str,
    date: Optional[str] = Query(None),
    store: KeyValueStore = Depends(get_store),
):
    """
    Booked flag for every hourly slot of the facility-day.
    Advisory only: booking submission does not consult it.
    """
    slots = await facility_availability(store, location_id, date)
    return AvailabilityResponse(location_id=location_id, date=date, slots=slots)
