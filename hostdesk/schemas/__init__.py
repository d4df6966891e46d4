"""Pydantic schemas for the restaurant API and the floor console"""

from hostdesk.schemas.auth import (
    LoginRequest,
    AuthUser,
    LoginResponse,
    SessionResponse,
)
from hostdesk.schemas.layout import (
    Layout,
    Section,
    Seat,
    SectionType,
    Orientation,
    Restaurant,
)
from hostdesk.schemas.reservation import (
    Reservation,
    ReservationStatus,
    ReservationCreate,
    ReservationUpdate,
    ReservationRow,
    WaitlistEntry,
    WaitlistStatus,
    WaitlistEntryCreate,
    WaitlistRow,
    AvailabilityResponse,
)
from hostdesk.schemas.occupant import (
    Occupant,
    OccupantRef,
    OccupantType,
    ReservationOccupant,
    WaitlistOccupant,
)
from hostdesk.schemas.allocation import (
    AllocationCommand,
    AllocationCreate,
    OccupantInfo,
    SeatAllocation,
    TimeWindow,
)
from hostdesk.schemas.floor import (
    CanvasSize,
    FloorResponse,
    LayoutSize,
    SeatBox,
    SeatDialog,
    SeatStatus,
    SubmitAction,
    WizardState,
    WizardView,
)

__all__ = [
    "LoginRequest",
    "AuthUser",
    "LoginResponse",
    "SessionResponse",
    "Layout",
    "Section",
    "Seat",
    "SectionType",
    "Orientation",
    "Restaurant",
    "Reservation",
    "ReservationStatus",
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationRow",
    "WaitlistEntry",
    "WaitlistStatus",
    "WaitlistEntryCreate",
    "WaitlistRow",
    "AvailabilityResponse",
    "Occupant",
    "OccupantRef",
    "OccupantType",
    "ReservationOccupant",
    "WaitlistOccupant",
    "AllocationCommand",
    "AllocationCreate",
    "OccupantInfo",
    "SeatAllocation",
    "TimeWindow",
    "CanvasSize",
    "FloorResponse",
    "LayoutSize",
    "SeatBox",
    "SeatDialog",
    "SeatStatus",
    "SubmitAction",
    "WizardState",
    "WizardView",
]
