"""Occupant schemas: a reservation or a waitlist entry assigned to seats"""

import enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from hostdesk.schemas.reservation import Reservation, WaitlistEntry


class OccupantType(str, enum.Enum):
    """Kinds of occupant"""
    RESERVATION = "reservation"
    WAITLIST = "waitlist"


class OccupantRef(BaseModel):
    """Identifies an occupant on the wire"""
    occupant_type: OccupantType
    occupant_id: int


class ReservationOccupant(BaseModel):
    occupant_type: Literal["reservation"] = "reservation"
    record: Reservation


class WaitlistOccupant(BaseModel):
    occupant_type: Literal["waitlist"] = "waitlist"
    record: WaitlistEntry


Occupant = Annotated[
    Union[ReservationOccupant, WaitlistOccupant],
    Field(discriminator="occupant_type"),
]


def occupant_record(occupant: Occupant) -> Union[Reservation, WaitlistEntry]:
    if isinstance(occupant, ReservationOccupant):
        return occupant.record
    if isinstance(occupant, WaitlistOccupant):
        return occupant.record
    raise TypeError(f"Unknown occupant: {occupant!r}")


def occupant_ref(occupant: Occupant) -> OccupantRef:
    if isinstance(occupant, ReservationOccupant):
        return OccupantRef(occupant_type=OccupantType.RESERVATION, occupant_id=occupant.record.id)
    if isinstance(occupant, WaitlistOccupant):
        return OccupantRef(occupant_type=OccupantType.WAITLIST, occupant_id=occupant.record.id)
    raise TypeError(f"Unknown occupant: {occupant!r}")


def occupant_party_size(occupant: Occupant) -> int:
    """Party size, 1 when the record has none"""
    return occupant_record(occupant).party_size or 1


def occupant_display_name(occupant: Occupant) -> str:
    """First word of the contact name, "Guest" when there is none"""
    name = (occupant_record(occupant).contact_name or "").strip()
    if not name:
        return "Guest"
    return name.split()[0]
