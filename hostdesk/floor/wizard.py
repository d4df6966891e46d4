"""Seat wizard: picks the seats for one party before seating or reserving it"""

from typing import List, Optional

import structlog

from hostdesk.errors import SelectionError
from hostdesk.floor.occupancy import OccupancyIndex
from hostdesk.schemas.floor import SubmitAction, WizardState, WizardView
from hostdesk.schemas.occupant import (
    Occupant,
    ReservationOccupant,
    occupant_display_name,
    occupant_party_size,
    occupant_ref,
)

logger = structlog.get_logger()


def _seats(count: int) -> str:
    return f"{count} seat" if count == 1 else f"{count} seats"


class SeatWizard:
    """
    Selection state for seating one occupant.

    IDLE --open_picker--> PICKING_OCCUPANT --choose_occupant--> ACTIVE
    IDLE --click_free_seat--> ACTIVE (seat first, party chosen afterwards)
    ACTIVE --cancel / complete--> IDLE

    Validation failures raise SelectionError and leave the session as it was.
    """

    def __init__(self):
        self._reset()

    def _reset(self) -> None:
        self.state = WizardState.IDLE
        self.occupant: Optional[Occupant] = None
        self.selected_seat_ids: List[int] = []
        self.seed_seat_id: Optional[int] = None
        self.picker_open = False

    @property
    def is_active(self) -> bool:
        return self.state == WizardState.ACTIVE

    @property
    def party_size(self) -> Optional[int]:
        if self.occupant is None:
            return None
        return occupant_party_size(self.occupant)

    def open_picker(self) -> None:
        if self.state != WizardState.IDLE:
            raise SelectionError("A seating session is already open.")
        self.state = WizardState.PICKING_OCCUPANT
        self.picker_open = True
        logger.debug("Wizard picker opened")

    def click_free_seat(self, seat_id: int, occupancy: OccupancyIndex) -> None:
        """Start a session from a free seat; the party is picked next"""
        if self.state != WizardState.IDLE:
            raise SelectionError("A seating session is already open.")
        if not occupancy.is_free(seat_id):
            raise SelectionError("That seat is not free on this date.")
        self.state = WizardState.ACTIVE
        self.selected_seat_ids = [seat_id]
        self.seed_seat_id = seat_id
        self.picker_open = True
        logger.debug("Wizard started from seat", seat_id=seat_id)

    def choose_occupant(self, occupant: Occupant) -> None:
        if self.state == WizardState.PICKING_OCCUPANT:
            self.selected_seat_ids = []
        elif not (self.state == WizardState.ACTIVE and self.picker_open):
            raise SelectionError("Open the party picker first.")

        self.occupant = occupant
        self.state = WizardState.ACTIVE
        self.picker_open = False

        ref = occupant_ref(occupant)
        logger.debug(
            "Wizard occupant chosen",
            occupant_type=ref.occupant_type.value,
            occupant_id=ref.occupant_id,
            party_size=self.party_size,
        )

    def toggle_seat(self, seat_id: int, occupancy: OccupancyIndex) -> bool:
        """Select or deselect a seat. Returns True when the seat was added."""
        if self.state != WizardState.ACTIVE:
            raise SelectionError("Choose a party before selecting seats.")

        if seat_id in self.selected_seat_ids:
            self.selected_seat_ids.remove(seat_id)
            return False

        if seat_id != self.seed_seat_id and not occupancy.is_free(seat_id):
            raise SelectionError("That seat is not free on this date.")

        if self.occupant is None:
            # Party size unknown until the picker is answered
            if self.selected_seat_ids:
                raise SelectionError("Choose a party before adding more seats.")
        elif len(self.selected_seat_ids) >= self.party_size:
            raise SelectionError(
                f"This party needs only {_seats(self.party_size)}. Deselect a seat first."
            )

        self.selected_seat_ids.append(seat_id)
        return True

    def available_actions(self) -> List[SubmitAction]:
        if self.state != WizardState.ACTIVE or self.occupant is None:
            return []
        actions = [SubmitAction.SEAT_NOW]
        if isinstance(self.occupant, ReservationOccupant):
            actions.append(SubmitAction.RESERVE)
        return actions

    def validate_submission(self, action: SubmitAction) -> None:
        if self.state != WizardState.ACTIVE:
            raise SelectionError("No seating session is open.")
        if self.occupant is None:
            raise SelectionError("Choose a party to seat first.")
        if action == SubmitAction.RESERVE and not isinstance(self.occupant, ReservationOccupant):
            raise SelectionError("Only reservations can reserve seats; seat waitlist parties now.")

        required = self.party_size
        if len(self.selected_seat_ids) != required:
            raise SelectionError(
                f"Select exactly {_seats(required)} for this party "
                f"({len(self.selected_seat_ids)} selected)."
            )

    def cancel(self) -> None:
        """Discard the session without contacting the restaurant API"""
        if self.state != WizardState.IDLE:
            logger.debug("Wizard canceled", selected=len(self.selected_seat_ids))
        self._reset()

    def complete(self) -> None:
        """End the session after a successful submission"""
        self._reset()

    def snapshot(self) -> WizardView:
        view = WizardView(
            state=self.state,
            selected_seat_ids=list(self.selected_seat_ids),
            seed_seat_id=self.seed_seat_id,
            picker_open=self.picker_open,
            actions=self.available_actions(),
        )
        if self.occupant is not None:
            ref = occupant_ref(self.occupant)
            view.occupant_type = ref.occupant_type
            view.occupant_id = ref.occupant_id
            view.display_name = occupant_display_name(self.occupant)
            view.party_size = self.party_size
        return view
