"""Floor view API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from hostdesk.api.auth import get_current_staff
from hostdesk.api.deps import get_console
from hostdesk.floor.view import FloorConsole
from hostdesk.schemas.allocation import AllocationCommand
from hostdesk.schemas.auth import AuthUser
from hostdesk.schemas.floor import (
    CommandRequest,
    CommandResult,
    DateRequest,
    FloorResponse,
    LayoutSize,
    OccupantChoice,
    SeatClickResponse,
    ShiftDateRequest,
    SubmitRequest,
    ViewRequest,
    WizardView,
)

router = APIRouter()


@router.get("", response_model=FloorResponse)
async def get_floor(
    size: Optional[LayoutSize] = None,
    zoom: Optional[float] = Query(None, gt=0),
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Render the floor for the current date"""
    console.set_view(size=size, zoom=zoom)
    return console.render()


@router.post("/view", response_model=FloorResponse)
async def set_view(
    request: ViewRequest,
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    console.set_view(size=request.size, zoom=request.zoom)
    return console.render()


@router.post("/zoom/in", response_model=FloorResponse)
async def zoom_in(
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    console.zoom_in()
    return console.render()


@router.post("/zoom/out", response_model=FloorResponse)
async def zoom_out(
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    console.zoom_out()
    return console.render()


@router.post("/date", response_model=FloorResponse)
async def set_date(
    request: DateRequest,
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Switch the floor to another date"""
    await console.set_date(request.date)
    return console.render()


@router.post("/date/shift", response_model=FloorResponse)
async def shift_date(
    request: ShiftDateRequest,
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Move the floor date by a number of days (negative for earlier)"""
    await console.shift_date(request.days)
    return console.render()


@router.post("/refresh", response_model=FloorResponse)
async def refresh_floor(
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    await console.refresh()
    return console.render()


# ------------- Seats -------------

@router.post("/seats/{seat_id}/click", response_model=SeatClickResponse)
async def click_seat(
    seat_id: int,
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Seat click: toggles the seat in an active wizard session, else opens its dialog"""
    return console.click_seat(seat_id)


@router.post("/seats/{seat_id}/start", response_model=WizardView)
async def start_from_seat(
    seat_id: int,
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Start a wizard session seeded with a free seat"""
    return console.start_wizard_from_seat(seat_id)


# ------------- Wizard -------------

@router.post("/wizard/open", response_model=WizardView)
async def open_picker(
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    return console.open_picker()


@router.post("/wizard/occupant", response_model=WizardView)
async def choose_occupant(
    request: OccupantChoice,
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    return console.choose_occupant(request.occupant_type, request.occupant_id)


@router.post("/wizard/seats/{seat_id}", response_model=WizardView)
async def toggle_seat(
    seat_id: int,
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    return console.toggle_seat(seat_id)


@router.post("/wizard/submit", response_model=WizardView)
async def submit_wizard(
    request: SubmitRequest,
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Seat now or reserve the selected seats for the chosen party"""
    return await console.submit(request.action)


@router.post("/wizard/cancel", response_model=WizardView)
async def cancel_wizard(
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    return console.cancel_wizard()


# ------------- Commands -------------

@router.post("/commands/{command}", response_model=CommandResult)
async def run_command(
    command: AllocationCommand,
    request: CommandRequest,
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """arrive, finish, no_show or cancel for one reservation or waitlist entry"""
    return await console.run_command(command, request.occupant_type, request.occupant_id)
