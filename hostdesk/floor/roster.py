"""Read-only reservation and waitlist lists shown next to the floor"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from hostdesk.floor.occupancy import OccupancyIndex
from hostdesk.schemas.occupant import OccupantType
from hostdesk.schemas.reservation import Reservation, ReservationRow, WaitlistEntry, WaitlistRow

_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


def _sort_key(moment: Optional[datetime]) -> datetime:
    if moment is None:
        return _FAR_FUTURE
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def reservation_rows(reservations: Iterable[Reservation], occupancy: OccupancyIndex) -> List[ReservationRow]:
    """Reservations earliest first, each with the labels of the seats it holds"""
    labels = occupancy.seat_labels_by_occupant()
    rows = [
        ReservationRow(
            **reservation.model_dump(),
            seat_labels=labels.get((OccupantType.RESERVATION, reservation.id), []),
        )
        for reservation in reservations
    ]
    rows.sort(key=lambda row: _sort_key(row.start_time))
    return rows


def waitlist_rows(entries: Iterable[WaitlistEntry], occupancy: OccupancyIndex) -> List[WaitlistRow]:
    """Waitlist entries in the order the API returned them"""
    labels = occupancy.seat_labels_by_occupant()
    return [
        WaitlistRow(
            **entry.model_dump(),
            seat_labels=labels.get((OccupantType.WAITLIST, entry.id), []),
        )
        for entry in entries
    ]


def matches_search(term: str, name: Optional[str], phone: Optional[str], email: Optional[str] = None) -> bool:
    """Case-insensitive match on name and email, literal match on phone"""
    if not term:
        return True
    lowered = term.lower()
    return (
        lowered in (name or "").lower()
        or term in (phone or "")
        or lowered in (email or "").lower()
    )


def search_reservations(rows: Sequence[ReservationRow], term: str) -> List[ReservationRow]:
    return [
        row for row in rows
        if matches_search(term, row.contact_name, row.contact_phone, row.contact_email)
    ]


def search_waitlist(rows: Sequence[WaitlistRow], term: str) -> List[WaitlistRow]:
    return [row for row in rows if matches_search(term, row.contact_name, row.contact_phone)]
