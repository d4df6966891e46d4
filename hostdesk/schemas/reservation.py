"""Reservation and waitlist schemas"""

import enum
from datetime import date as date_type, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle"""
    BOOKED = "booked"
    RESERVED = "reserved"
    SEATED = "seated"
    FINISHED = "finished"
    CANCELED = "canceled"
    NO_SHOW = "no_show"


class WaitlistStatus(str, enum.Enum):
    """Waitlist entry lifecycle"""
    WAITING = "waiting"
    SEATED = "seated"
    REMOVED = "removed"
    NO_SHOW = "no_show"


class Reservation(BaseModel):
    """Reservation as returned by the restaurant API"""
    id: int
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    party_size: Optional[int] = None
    status: Optional[str] = None  # a ReservationStatus value, custom values pass through
    start_time: Optional[datetime] = None


class WaitlistEntry(BaseModel):
    """Waitlist entry as returned by the restaurant API"""
    id: int
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    party_size: Optional[int] = None
    status: Optional[str] = None
    check_in_time: Optional[datetime] = None


class ReservationRow(Reservation):
    """Reservation plus the seats it currently holds"""
    seat_labels: List[str] = []


class WaitlistRow(WaitlistEntry):
    """Waitlist entry plus the seats it currently holds"""
    seat_labels: List[str] = []


class ReservationCreate(BaseModel):
    """Create reservation request"""
    date: date_type
    time: str = Field(pattern=r"^\d{2}:\d{2}$")
    party_size: int = Field(ge=1)
    contact_name: str = Field(min_length=1)
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None

    def to_payload(self, restaurant_id: int) -> dict:
        return {
            "restaurant_id": restaurant_id,
            "start_time": f"{self.date.isoformat()}T{self.time}:00",
            "party_size": self.party_size,
            "contact_name": self.contact_name,
            "contact_phone": self.contact_phone,
            "contact_email": self.contact_email,
            "status": ReservationStatus.BOOKED.value,
        }


class ReservationUpdate(BaseModel):
    """Update reservation request"""
    party_size: Optional[int] = Field(default=None, ge=1)
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    status: Optional[ReservationStatus] = None


class WaitlistEntryCreate(BaseModel):
    """Create waitlist entry request"""
    contact_name: str = Field(min_length=1)
    party_size: int = Field(default=1, ge=1)
    contact_phone: Optional[str] = None
    check_in_time: Optional[datetime] = None

    def to_payload(self, restaurant_id: int) -> dict:
        payload = self.model_dump(mode="json", exclude_none=True)
        payload["restaurant_id"] = restaurant_id
        payload["status"] = WaitlistStatus.WAITING.value
        return payload


class AvailabilityResponse(BaseModel):
    """Open time slots for a date and party size"""
    date: str
    party_size: int
    slots: List[str] = []
