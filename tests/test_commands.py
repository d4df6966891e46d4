"""Tests for allocation commands and their preconditions"""

import json
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from hostdesk.errors import ApiError, SelectionError
from hostdesk.floor.commands import AllocationCommands, check_precondition
from hostdesk.floor.occupancy import OccupancyIndex
from hostdesk.schemas.allocation import AllocationCommand, SeatAllocation, TimeWindow
from hostdesk.schemas.occupant import OccupantRef, OccupantType

GUAM = ZoneInfo("Pacific/Guam")
WINDOW = TimeWindow(
    start_time=datetime(2025, 6, 1, 19, 0, tzinfo=GUAM),
    end_time=datetime(2025, 6, 1, 20, 0, tzinfo=GUAM),
)
GRACE = OccupantRef(occupant_type=OccupantType.RESERVATION, occupant_id=7)
DAN = OccupantRef(occupant_type=OccupantType.WAITLIST, occupant_id=20)


@pytest.fixture
def commands(api_client):
    return AllocationCommands(api_client)


@pytest.fixture
def occupancy():
    return OccupancyIndex(
        [SeatAllocation(seat_id=1, occupant_type="reservation", occupant_id=11, occupant_status="reserved")]
    )


@pytest.mark.parametrize(
    "command,status",
    [
        (AllocationCommand.ARRIVE, "reserved"),
        (AllocationCommand.FINISH, "seated"),
        (AllocationCommand.FINISH, "occupied"),
        (AllocationCommand.NO_SHOW, "reserved"),
        (AllocationCommand.CANCEL, "reserved"),
        (AllocationCommand.CANCEL, "booked"),
    ],
)
def test_allowed_transitions(command, status):
    """Test statuses each command may start from"""
    check_precondition(command, status)


@pytest.mark.parametrize(
    "command,status",
    [
        (AllocationCommand.ARRIVE, "seated"),
        (AllocationCommand.ARRIVE, "booked"),
        (AllocationCommand.FINISH, "reserved"),
        (AllocationCommand.NO_SHOW, "seated"),
        (AllocationCommand.CANCEL, "seated"),
        (AllocationCommand.CANCEL, None),
    ],
)
def test_rejected_transitions(command, status):
    """Test statuses each command may not start from"""
    with pytest.raises(SelectionError):
        check_precondition(command, status)


@pytest.mark.asyncio
async def test_seat_now_posts_multi_create(commands, occupancy, fake_api):
    """Test seat-now sends one multi-create with every seat"""
    await commands.seat_now(GRACE, [3, 4], 2, WINDOW, occupancy)

    calls = fake_api.calls("POST", "/seat_allocations/multi_create")
    assert len(calls) == 1
    body = json.loads(calls[0].content)["seat_allocation"]
    assert body["occupant_type"] == "reservation"
    assert body["occupant_id"] == 7
    assert body["seat_ids"] == [3, 4]
    assert body["start_time"].startswith("2025-06-01T19:00:00")
    assert body["end_time"].startswith("2025-06-01T20:00:00")


@pytest.mark.asyncio
async def test_seat_now_wrong_count_sends_nothing(commands, occupancy, fake_api):
    """Test a seat count that does not match the party is rejected locally"""
    with pytest.raises(SelectionError, match="exactly 2"):
        await commands.seat_now(GRACE, [3], 2, WINDOW, occupancy)

    assert fake_api.calls("POST", "/seat_allocations/multi_create") == []


@pytest.mark.asyncio
async def test_seat_now_held_seat_sends_nothing(commands, occupancy, fake_api):
    """Test a seat held by someone else is rejected locally"""
    with pytest.raises(SelectionError, match="no longer free"):
        await commands.seat_now(GRACE, [1, 3], 2, WINDOW, occupancy)

    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_seat_held_by_same_party_sends_nothing(commands, occupancy, fake_api):
    """Test a seat the party already holds is not free for a new allocation"""
    bob = OccupantRef(occupant_type=OccupantType.RESERVATION, occupant_id=11)

    with pytest.raises(SelectionError, match="Seat 1 is no longer free"):
        await commands.reserve(bob, [1], 1, WINDOW, occupancy)

    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_reserve_waitlist_rejected(commands, occupancy, fake_api):
    """Test waitlist parties cannot reserve seats"""
    with pytest.raises(SelectionError, match="Only reservations"):
        await commands.reserve(DAN, [3], 1, WINDOW, occupancy)

    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_reserve_posts_reserve(commands, occupancy, fake_api):
    """Test reserve goes to the reserve endpoint"""
    await commands.reserve(GRACE, [7, 8], 2, WINDOW, occupancy)

    assert len(fake_api.calls("POST", "/seat_allocations/reserve")) == 1
    assert {a["seat_id"] for a in fake_api.active_allocations() if a["occupant_id"] == 7} == {7, 8}


@pytest.mark.asyncio
async def test_transition_posts_occupant(commands, fake_api):
    """Test status commands send the occupant reference"""
    await commands.arrive(OccupantRef(occupant_type="reservation", occupant_id=11), "reserved")

    calls = fake_api.calls("POST", "/seat_allocations/arrive")
    assert json.loads(calls[0].content) == {"occupant_type": "reservation", "occupant_id": 11}


@pytest.mark.asyncio
async def test_transition_precondition_sends_nothing(commands, fake_api):
    """Test a failed precondition never reaches the API"""
    with pytest.raises(SelectionError, match="Cannot finish"):
        await commands.finish(GRACE, "booked")

    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_transition_refuses_seat_commands(commands):
    """Test seat-now and reserve are not status transitions"""
    with pytest.raises(SelectionError, match="seat wizard"):
        await commands.transition(AllocationCommand.SEAT_NOW, GRACE, "booked")


@pytest.mark.asyncio
async def test_server_rejection_raises_api_error(commands, occupancy, fake_api):
    """Test a server-side conflict surfaces as ApiError with the server's reason"""
    fake_api._allocate(3, "reservation", 12, "seated", "2025-06-01T11:00:00+10:00")

    with pytest.raises(ApiError) as exc:
        await commands.seat_now(GRACE, [3, 4], 2, WINDOW, occupancy)

    assert exc.value.status_code == 422
    assert "Seat 3 is already taken" in str(exc.value)
