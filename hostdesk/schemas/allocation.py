"""Seat allocation schemas"""

import enum
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from hostdesk.schemas.occupant import OccupantRef, OccupantType


class AllocationCommand(str, enum.Enum):
    """State transitions an occupant and its seats may undergo"""
    SEAT_NOW = "seat_now"
    RESERVE = "reserve"
    ARRIVE = "arrive"
    FINISH = "finish"
    NO_SHOW = "no_show"
    CANCEL = "cancel"


class SeatAllocation(BaseModel):
    """A seat bound to an occupant for a time interval"""
    id: Optional[int] = None
    seat_id: int
    seat_label: Optional[str] = None
    occupant_type: OccupantType
    occupant_id: int
    occupant_name: Optional[str] = None
    occupant_party_size: Optional[int] = None
    occupant_status: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    released_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _legacy_occupant(cls, data):
        # Older payloads reference the occupant through its own foreign key
        if not isinstance(data, dict) or data.get("occupant_type"):
            return data
        data = dict(data)
        if data.get("reservation_id") is not None:
            data["occupant_type"] = OccupantType.RESERVATION.value
            data["occupant_id"] = data["reservation_id"]
        elif data.get("waitlist_entry_id") is not None:
            data["occupant_type"] = OccupantType.WAITLIST.value
            data["occupant_id"] = data["waitlist_entry_id"]
        return data

    @field_validator("occupant_status")
    @classmethod
    def _canonical_status(cls, value: Optional[str]) -> Optional[str]:
        if value == "occupied":
            return "seated"
        return value

    @property
    def is_active(self) -> bool:
        return self.released_at is None


class OccupantInfo(BaseModel):
    """Who currently holds a seat, from an allocation's denormalized fields"""
    occupant_type: OccupantType
    occupant_id: int
    name: Optional[str] = None
    party_size: Optional[int] = None
    status: Optional[str] = None


class TimeWindow(BaseModel):
    """Allocation interval [start_time, end_time)"""
    start_time: datetime
    end_time: datetime


class AllocationCreate(BaseModel):
    """Body for seat-now and reserve requests"""
    occupant_type: OccupantType
    occupant_id: int
    seat_ids: List[int] = Field(min_length=1)
    start_time: datetime
    end_time: datetime

    @classmethod
    def build(cls, ref: OccupantRef, seat_ids: List[int], window: TimeWindow) -> "AllocationCreate":
        return cls(
            occupant_type=ref.occupant_type,
            occupant_id=ref.occupant_id,
            seat_ids=list(seat_ids),
            start_time=window.start_time,
            end_time=window.end_time,
        )

    def to_payload(self) -> dict:
        return {"seat_allocation": self.model_dump(mode="json")}
