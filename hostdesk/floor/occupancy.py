"""Per-seat occupant lookup for one floor date"""

from typing import Dict, List, Optional, Sequence

from hostdesk.schemas.allocation import OccupantInfo, SeatAllocation
from hostdesk.schemas.floor import SeatStatus
from hostdesk.schemas.occupant import OccupantType
from hostdesk.schemas.reservation import ReservationStatus


def occupant_for(seat_id: int, allocations: Sequence[SeatAllocation]) -> Optional[OccupantInfo]:
    """
    Occupant of a seat, or None when the seat is free.

    `allocations` must already be scoped to the floor date. Released
    allocations are skipped; if several active allocations name the same
    seat the first one wins.
    """
    for allocation in allocations:
        if allocation.seat_id == seat_id and allocation.released_at is None:
            return OccupantInfo(
                occupant_type=allocation.occupant_type,
                occupant_id=allocation.occupant_id,
                name=allocation.occupant_name,
                party_size=allocation.occupant_party_size,
                status=allocation.occupant_status,
            )
    return None


def status_for(occupant: Optional[OccupantInfo]) -> SeatStatus:
    if occupant is None:
        return SeatStatus.FREE
    if occupant.status == ReservationStatus.RESERVED.value:
        return SeatStatus.RESERVED
    return SeatStatus.OCCUPIED


class OccupancyIndex:
    """
    Occupants of every seat for one date.

    Built from scratch from a full allocation list; never patched in place.
    Rebuild it whenever the allocations or the date change.
    """

    def __init__(self, allocations: Sequence[SeatAllocation] = ()):
        self.allocations: List[SeatAllocation] = list(allocations)
        self._by_seat: Dict[int, Optional[OccupantInfo]] = {}

    def occupant_for(self, seat_id: int) -> Optional[OccupantInfo]:
        if seat_id not in self._by_seat:
            self._by_seat[seat_id] = occupant_for(seat_id, self.allocations)
        return self._by_seat[seat_id]

    def status_for(self, seat_id: int) -> SeatStatus:
        return status_for(self.occupant_for(seat_id))

    def is_free(self, seat_id: int) -> bool:
        return self.occupant_for(seat_id) is None

    def seat_labels_by_occupant(self) -> Dict[tuple, List[str]]:
        """Labels of seats held by active allocations, keyed by (occupant_type, occupant_id)"""
        labels: Dict[tuple, List[str]] = {}
        for allocation in self.allocations:
            if not allocation.is_active:
                continue
            key = (allocation.occupant_type, allocation.occupant_id)
            label = allocation.seat_label or f"Seat {allocation.seat_id}"
            labels.setdefault(key, []).append(label)
        return labels

    def seat_labels_for(self, occupant_type: OccupantType, occupant_id: int) -> List[str]:
        return self.seat_labels_by_occupant().get((occupant_type, occupant_id), [])
