"""
Static catalog of bookable university facilities.

The catalog is reference data owned outside the booking engine; the engine
only needs a facility's capacity and display name.
"""

from typing import Optional

from pydantic import BaseModel


class Facility(BaseModel):
    id: str
    name: str
    description: str
    capacity: int
    rules: list[str] = []
    amenities: list[str] = []


FACILITIES: list[Facility] = [
    Facility(
        id="university-playground",
        name="University Playground",
        description=(
            "A spacious outdoor facility for sports events, team practices and "
            "recreational activities, with grass fields, running tracks and spectator seating."
        ),
        capacity=500,
        rules=[
            "All participants must sign a liability waiver",
            "Proper athletic attire and footwear required",
            "No glass containers allowed",
            "Events must end by 10:00 PM",
            "Organizer responsible for cleanup",
            "Emergency contact must be provided",
        ],
        amenities=["Changing Rooms", "Restrooms", "Water Fountains", "First Aid Station", "Parking"],
    ),
    Facility(
        id="auditorium",
        name="Auditorium",
        description=(
            "The premier venue for large-scale events, conferences and performances, "
            "with a full sound system, professional lighting and seating for hundreds."
        ),
        capacity=800,
        rules=[
            "Professional event coordination required for events over 300 people",
            "Technical rehearsal must be scheduled 24 hours in advance",
            "No food or beverages in seating area",
            "All decorations must be approved by facility manager",
            "Sound levels must not exceed 95 decibels",
            "Security personnel required for events over 500 attendees",
        ],
        amenities=["Stage", "Sound System", "Projector & Screen", "Green Room", "Backstage Area", "Air Conditioning"],
    ),
    Facility(
        id="indoor-stadium",
        name="Indoor Stadium",
        description="A climate-controlled indoor arena for basketball, volleyball, badminton and indoor tournaments.",
        capacity=300,
        rules=[
            "Non-marking indoor shoes required",
            "No food on the playing court",
            "Equipment must be returned after use",
            "Organizer responsible for cleanup",
        ],
        amenities=["Scoreboard", "Spectator Stands", "Changing Rooms", "Air Conditioning"],
    ),
    Facility(
        id="mini-auditorium",
        name="Mini Auditorium",
        description="An intimate venue for seminars, workshops, guest lectures and small performances.",
        capacity=150,
        rules=[
            "No food or beverages in seating area",
            "Audio-visual equipment must be tested before the event",
            "Room must be restored to its original layout",
        ],
        amenities=["Projector & Screen", "Sound System", "Podium", "Air Conditioning"],
    ),
    Facility(
        id="student-center",
        name="Student Center",
        description="A multi-purpose hall for fairs, exhibitions, club events and large student gatherings.",
        capacity=1000,
        rules=[
            "Events must be registered by a recognized student organization",
            "Security personnel required for events over 500 attendees",
            "Organizer responsible for cleanup",
        ],
        amenities=["Open Floor", "Stage", "Sound System", "Restrooms", "Parking"],
    ),
]

_BY_ID = {facility.id: facility for facility in FACILITIES}


def get_facility(location_id: str) -> Optional[Facility]:
    return _BY_ID.get(location_id)
