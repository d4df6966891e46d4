"""Reservation management API endpoints"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
import structlog

from hostdesk.api.auth import get_current_staff
from hostdesk.api.deps import get_client, get_console
from hostdesk.client.api import RestaurantApiClient
from hostdesk.floor.roster import reservation_rows, search_reservations
from hostdesk.floor.view import FloorConsole
from hostdesk.schemas.auth import AuthUser
from hostdesk.schemas.reservation import (
    AvailabilityResponse,
    Reservation,
    ReservationCreate,
    ReservationRow,
    ReservationUpdate,
)

router = APIRouter()
logger = structlog.get_logger()


@router.get("", response_model=List[ReservationRow])
async def list_reservations(
    q: Optional[str] = None,
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Reservations for the floor date, earliest first, with the seats they hold"""
    rows = reservation_rows(console.reservations, console.occupancy)
    if q:
        rows = search_reservations(rows, q)
    return rows


@router.post("", response_model=Reservation, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    client: RestaurantApiClient = Depends(get_client),
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Create a new reservation"""
    reservation = await client.create_reservation(
        reservation_data.to_payload(console.settings.restaurant_id)
    )
    logger.info("Reservation created", reservation_id=reservation.id, party_size=reservation.party_size)
    await console.refresh()
    return reservation


@router.get("/availability/check", response_model=AvailabilityResponse)
async def check_availability(
    day: date = Query(..., alias="date"),
    party_size: int = Query(..., ge=1),
    client: RestaurantApiClient = Depends(get_client),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Open time slots for a date and party size"""
    slots = await client.fetch_availability(day, party_size)
    return AvailabilityResponse(date=day.isoformat(), party_size=party_size, slots=slots)


@router.patch("/{reservation_id}", response_model=Reservation)
async def update_reservation(
    reservation_id: int,
    update_data: ReservationUpdate,
    client: RestaurantApiClient = Depends(get_client),
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Update a reservation"""
    reservation = await client.update_reservation(
        reservation_id, update_data.model_dump(mode="json", exclude_unset=True)
    )
    await console.refresh()
    return reservation


@router.delete("/{reservation_id}")
async def delete_reservation(
    reservation_id: int,
    client: RestaurantApiClient = Depends(get_client),
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Delete a reservation"""
    await client.delete_reservation(reservation_id)
    logger.info("Reservation deleted", reservation_id=reservation_id)
    await console.refresh()
    return {"message": "Reservation deleted"}
