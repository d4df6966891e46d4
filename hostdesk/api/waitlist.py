"""Waitlist API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends
import structlog

from hostdesk.api.auth import get_current_staff
from hostdesk.api.deps import get_client, get_console
from hostdesk.client.api import RestaurantApiClient
from hostdesk.floor.roster import search_waitlist, waitlist_rows
from hostdesk.floor.view import FloorConsole
from hostdesk.schemas.auth import AuthUser
from hostdesk.schemas.reservation import WaitlistEntry, WaitlistEntryCreate, WaitlistRow

router = APIRouter()
logger = structlog.get_logger()


@router.get("", response_model=List[WaitlistRow])
async def list_waitlist(
    q: Optional[str] = None,
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Waitlist for the floor date with the seats each entry holds"""
    rows = waitlist_rows(console.waitlist, console.occupancy)
    if q:
        rows = search_waitlist(rows, q)
    return rows


@router.post("", response_model=WaitlistEntry, status_code=201)
async def create_waitlist_entry(
    entry_data: WaitlistEntryCreate,
    client: RestaurantApiClient = Depends(get_client),
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Add a walk-in party to the waitlist"""
    entry = await client.create_waitlist_entry(
        entry_data.to_payload(console.settings.restaurant_id)
    )
    logger.info("Waitlist entry created", waitlist_entry_id=entry.id, party_size=entry.party_size)
    await console.refresh()
    return entry
