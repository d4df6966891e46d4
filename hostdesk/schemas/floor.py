"""Floor render model and floor request schemas"""

import enum
from datetime import date as date_type
from typing import List, Literal, Optional

from pydantic import BaseModel

from hostdesk.schemas.allocation import AllocationCommand, OccupantInfo
from hostdesk.schemas.layout import Layout, Orientation, SectionType
from hostdesk.schemas.occupant import OccupantType
from hostdesk.schemas.reservation import ReservationRow, WaitlistRow


class SeatStatus(str, enum.Enum):
    """Derived per-date seat status"""
    FREE = "free"
    RESERVED = "reserved"
    OCCUPIED = "occupied"


class LayoutSize(str, enum.Enum):
    """Canvas sizing modes"""
    AUTO = "auto"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class SubmitAction(str, enum.Enum):
    """Ways to complete a wizard session"""
    SEAT_NOW = "seat_now"
    RESERVE = "reserve"


class WizardState(str, enum.Enum):
    IDLE = "idle"
    PICKING_OCCUPANT = "picking_occupant"
    ACTIVE = "active"


class CanvasSize(BaseModel):
    width: float
    height: float
    seat_scale: float = 1.0


class SeatBox(BaseModel):
    """Top-left corner and diameter of a seat circle in canvas units"""
    left: float
    top: float
    diameter: float


class SeatView(BaseModel):
    id: Optional[int]
    label: Optional[str]
    x: float
    y: float
    box: SeatBox
    status: SeatStatus
    occupant: Optional[OccupantInfo] = None
    selected: bool = False


class SectionView(BaseModel):
    id: str
    name: str
    type: SectionType
    orientation: Orientation
    offset_x: float
    offset_y: float
    seats: List[SeatView] = []


class WizardView(BaseModel):
    """Snapshot of the seat wizard session"""
    state: WizardState
    occupant_type: Optional[OccupantType] = None
    occupant_id: Optional[int] = None
    display_name: Optional[str] = None
    party_size: Optional[int] = None
    selected_seat_ids: List[int] = []
    seed_seat_id: Optional[int] = None
    picker_open: bool = False
    actions: List[SubmitAction] = []


class SeatDialog(BaseModel):
    """Detail dialog for a seat clicked while no wizard session is active"""
    seat_id: int
    seat_label: Optional[str] = None
    status: SeatStatus
    occupant: Optional[OccupantInfo] = None
    actions: List[str] = []


class SeatClickResponse(BaseModel):
    kind: Literal["dialog", "wizard"]
    dialog: Optional[SeatDialog] = None
    wizard: Optional[WizardView] = None


class FloorResponse(BaseModel):
    """Everything needed to draw the floor for one date"""
    date: date_type
    today: date_type
    time_zone: str
    layout_id: Optional[int] = None
    layout_name: Optional[str] = None
    size: LayoutSize
    canvas: CanvasSize
    zoom: float
    sections: List[SectionView] = []
    wizard: WizardView
    reservations: List[ReservationRow] = []
    waitlist: List[WaitlistRow] = []


class DateRequest(BaseModel):
    date: date_type


class ShiftDateRequest(BaseModel):
    days: int = 1


class OccupantChoice(BaseModel):
    occupant_type: OccupantType
    occupant_id: int


class SubmitRequest(BaseModel):
    action: SubmitAction


class CommandRequest(BaseModel):
    occupant_type: OccupantType
    occupant_id: int


class CommandResult(BaseModel):
    command: AllocationCommand
    occupant_type: OccupantType
    occupant_id: int
    message: str
    refreshed: bool = True


class ViewRequest(BaseModel):
    """Canvas sizing mode and zoom, either may be left out"""
    size: Optional[LayoutSize] = None
    zoom: Optional[float] = None


class LayoutDetail(BaseModel):
    """A layout together with its canvas for a sizing mode"""
    layout: Layout
    size: LayoutSize
    canvas: CanvasSize


class SectionMove(BaseModel):
    offset_x: float
    offset_y: float
