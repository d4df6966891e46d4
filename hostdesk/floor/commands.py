"""Allocation commands sent to the restaurant API"""

from typing import Dict, FrozenSet, List, Optional, Sequence

import structlog

from hostdesk.client.api import RestaurantApiClient
from hostdesk.errors import SelectionError
from hostdesk.floor.occupancy import OccupancyIndex
from hostdesk.schemas.allocation import AllocationCommand, AllocationCreate, TimeWindow
from hostdesk.schemas.occupant import OccupantRef, OccupantType

logger = structlog.get_logger()

# Occupant statuses each status-driven command may start from
COMMAND_PRECONDITIONS: Dict[AllocationCommand, FrozenSet[str]] = {
    AllocationCommand.ARRIVE: frozenset({"reserved"}),
    AllocationCommand.FINISH: frozenset({"seated"}),
    AllocationCommand.NO_SHOW: frozenset({"reserved"}),
    AllocationCommand.CANCEL: frozenset({"reserved", "booked"}),
}

COMMAND_LABELS: Dict[AllocationCommand, str] = {
    AllocationCommand.SEAT_NOW: "seat",
    AllocationCommand.RESERVE: "reserve seats for",
    AllocationCommand.ARRIVE: "mark arrived",
    AllocationCommand.FINISH: "finish",
    AllocationCommand.NO_SHOW: "mark as no-show",
    AllocationCommand.CANCEL: "cancel",
}


def check_precondition(command: AllocationCommand, status: Optional[str]) -> None:
    """Raise SelectionError when the occupant's status does not allow `command`"""
    allowed = COMMAND_PRECONDITIONS.get(command)
    if allowed is None:
        return
    current = "seated" if status == "occupied" else status
    if current not in allowed:
        raise SelectionError(
            f"Cannot {COMMAND_LABELS[command]} a party whose status is {status or 'unknown'}."
        )


def check_seats(seat_ids: Sequence[int], party_size: int, occupancy: OccupancyIndex) -> None:
    if len(seat_ids) != party_size:
        raise SelectionError(f"Select exactly {party_size} seat(s) for this party.")
    if len(set(seat_ids)) != len(seat_ids):
        raise SelectionError("A seat was selected twice.")
    for seat_id in seat_ids:
        if occupancy.occupant_for(seat_id) is not None:
            raise SelectionError(f"Seat {seat_id} is no longer free. Refresh and choose again.")


class AllocationCommands:
    """
    One method per allocation command.

    Preconditions are checked locally and raise SelectionError before any
    request is made. Nothing here touches local floor state; callers re-fetch
    after a command succeeds.
    """

    def __init__(self, client: RestaurantApiClient):
        self.client = client

    async def seat_now(
        self,
        ref: OccupantRef,
        seat_ids: List[int],
        party_size: int,
        window: TimeWindow,
        occupancy: OccupancyIndex,
    ) -> None:
        check_seats(seat_ids, party_size, occupancy)
        body = AllocationCreate.build(ref, seat_ids, window)
        logger.info(
            "Seating party",
            occupant_type=ref.occupant_type.value,
            occupant_id=ref.occupant_id,
            seat_ids=seat_ids,
            start_time=window.start_time.isoformat(),
        )
        await self.client.create_allocations(body)

    async def reserve(
        self,
        ref: OccupantRef,
        seat_ids: List[int],
        party_size: int,
        window: TimeWindow,
        occupancy: OccupancyIndex,
    ) -> None:
        if ref.occupant_type != OccupantType.RESERVATION:
            raise SelectionError("Only reservations can reserve seats; seat waitlist parties now.")
        check_seats(seat_ids, party_size, occupancy)
        body = AllocationCreate.build(ref, seat_ids, window)
        logger.info(
            "Reserving seats",
            occupant_id=ref.occupant_id,
            seat_ids=seat_ids,
            start_time=window.start_time.isoformat(),
        )
        await self.client.reserve_allocations(body)

    async def transition(self, command: AllocationCommand, ref: OccupantRef, status: Optional[str]) -> None:
        """arrive, finish, no-show or cancel an occupant in `status`"""
        if command not in COMMAND_PRECONDITIONS:
            raise SelectionError(f"{command.value} needs seats; use the seat wizard.")
        check_precondition(command, status)
        logger.info(
            "Allocation command",
            command=command.value,
            occupant_type=ref.occupant_type.value,
            occupant_id=ref.occupant_id,
            status=status,
        )
        await self.client.allocation_action(command.value, ref)

    async def arrive(self, ref: OccupantRef, status: Optional[str]) -> None:
        await self.transition(AllocationCommand.ARRIVE, ref, status)

    async def finish(self, ref: OccupantRef, status: Optional[str]) -> None:
        await self.transition(AllocationCommand.FINISH, ref, status)

    async def no_show(self, ref: OccupantRef, status: Optional[str]) -> None:
        await self.transition(AllocationCommand.NO_SHOW, ref, status)

    async def cancel(self, ref: OccupantRef, status: Optional[str]) -> None:
        await self.transition(AllocationCommand.CANCEL, ref, status)
