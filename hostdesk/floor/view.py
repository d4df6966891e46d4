"""Floor console: the staff-facing floor view and its seat dialog layer"""

from datetime import date, datetime
from typing import Awaitable, Callable, List, Optional, TypeVar
from zoneinfo import ZoneInfo

import structlog

from hostdesk.client.api import RestaurantApiClient
from hostdesk.config import Settings
from hostdesk.errors import ApiError, CommandInProgressError, ResponseFormatError, SelectionError
from hostdesk.floor.commands import AllocationCommands
from hostdesk.floor.dates import allocation_window, shift_day, today_in
from hostdesk.floor.geometry import ZOOM_DEFAULT, clamp_zoom, compute_canvas, seat_box, seat_global_position
from hostdesk.floor.geometry import zoom_in as step_zoom_in
from hostdesk.floor.geometry import zoom_out as step_zoom_out
from hostdesk.floor.occupancy import OccupancyIndex, status_for
from hostdesk.floor.roster import reservation_rows, waitlist_rows
from hostdesk.floor.wizard import SeatWizard
from hostdesk.schemas.allocation import AllocationCommand
from hostdesk.schemas.floor import (
    CommandResult,
    FloorResponse,
    LayoutSize,
    SeatClickResponse,
    SeatDialog,
    SeatStatus,
    SeatView,
    SectionView,
    SubmitAction,
    WizardState,
    WizardView,
)
from hostdesk.schemas.layout import Layout, Restaurant, Seat
from hostdesk.schemas.occupant import (
    Occupant,
    OccupantRef,
    OccupantType,
    ReservationOccupant,
    WaitlistOccupant,
    occupant_ref,
)
from hostdesk.schemas.reservation import Reservation, WaitlistEntry

logger = structlog.get_logger()

T = TypeVar("T")

DIALOG_ACTIONS = {
    SeatStatus.RESERVED: [
        AllocationCommand.ARRIVE.value,
        AllocationCommand.NO_SHOW.value,
        AllocationCommand.CANCEL.value,
    ],
    SeatStatus.OCCUPIED: [AllocationCommand.FINISH.value],
    SeatStatus.FREE: ["start_wizard"],
}


class FloorConsole:
    """
    One staff member's view of the floor for one date.

    Holds the last fetched restaurant, layout, reservations, waitlist and
    allocations, plus the seat wizard. Nothing is mutated optimistically:
    every successful command is followed by a full refresh.
    """

    def __init__(
        self,
        client: RestaurantApiClient,
        settings: Settings,
        commands: Optional[AllocationCommands] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.client = client
        self.settings = settings
        self.commands = commands or AllocationCommands(client)
        self.wizard = SeatWizard()
        self._clock = clock

        self.restaurant: Optional[Restaurant] = None
        self.layout: Optional[Layout] = None
        self.reservations: List[Reservation] = []
        self.waitlist: List[WaitlistEntry] = []
        self.occupancy = OccupancyIndex()

        self.size = LayoutSize(settings.default_layout_size)
        self.zoom = ZOOM_DEFAULT
        self.floor_date: date = self.today
        self._in_flight = False

    # ------------- Clock -------------

    @property
    def time_zone(self) -> str:
        if self.restaurant is not None and self.restaurant.time_zone:
            return self.restaurant.time_zone
        return self.settings.default_time_zone

    def now(self) -> datetime:
        if self._clock is not None:
            return self._clock()
        return datetime.now(ZoneInfo(self.time_zone))

    @property
    def today(self) -> date:
        return today_in(self.time_zone, self.now())

    # ------------- Fetching -------------

    async def _tolerant(self, call: Awaitable[T], resource: str, default: T) -> T:
        """Await `call`; a malformed payload counts as no data"""
        try:
            return await call
        except ResponseFormatError as e:
            logger.warning("Discarding malformed data", resource=resource, error=str(e))
            return default

    async def _load_layout(self, restaurant: Optional[Restaurant]) -> Optional[Layout]:
        if restaurant is not None and restaurant.current_layout_id is not None:
            return await self._tolerant(
                self.client.fetch_layout(restaurant.current_layout_id), "layout", None
            )
        layouts = await self._tolerant(self.client.list_layouts(), "layouts", [])
        return layouts[0] if layouts else None

    async def refresh(self) -> None:
        """
        Re-fetch restaurant, layout and everything scoped to the floor date.

        State is replaced only once every request has succeeded, so a failed
        refresh leaves the previous floor in place. Results fetched for a date
        the console has since moved away from are dropped.
        """
        day = self.floor_date
        restaurant = await self._tolerant(
            self.client.fetch_restaurant(self.settings.restaurant_id), "restaurant", None
        )
        layout = await self._load_layout(restaurant)
        reservations = await self._tolerant(self.client.list_reservations(day), "reservations", [])
        waitlist = await self._tolerant(self.client.list_waitlist(day), "waitlist", [])
        allocations = await self._tolerant(
            self.client.list_seat_allocations(day), "seat allocations", []
        )

        if day != self.floor_date:
            logger.info(
                "Discarding stale floor refresh",
                date=day.isoformat(),
                floor_date=self.floor_date.isoformat(),
            )
            return

        self.restaurant = restaurant
        self.layout = layout
        self.reservations = reservations
        self.waitlist = waitlist
        self.occupancy = OccupancyIndex(allocations)

        logger.info(
            "Floor refreshed",
            date=day.isoformat(),
            layout_id=layout.id if layout else None,
            reservations=len(reservations),
            waitlist=len(waitlist),
            allocations=len(allocations),
        )

    async def set_date(self, day: date) -> None:
        """Switch the floor date; an open wizard session is discarded"""
        self.wizard.cancel()
        self.floor_date = day
        await self.refresh()

    async def shift_date(self, days: int) -> None:
        await self.set_date(shift_day(self.floor_date, days))

    # ------------- View settings -------------

    def set_view(self, size: Optional[LayoutSize] = None, zoom: Optional[float] = None) -> None:
        if size is not None:
            self.size = size
        if zoom is not None:
            self.zoom = clamp_zoom(zoom)

    def zoom_in(self) -> float:
        self.zoom = step_zoom_in(self.zoom)
        return self.zoom

    def zoom_out(self) -> float:
        self.zoom = step_zoom_out(self.zoom)
        return self.zoom

    # ------------- Rendering -------------

    def render(self) -> FloorResponse:
        layout = self.layout or Layout()
        canvas = compute_canvas(layout, self.size)
        selected = set(self.wizard.selected_seat_ids)

        sections = []
        for section in layout.sections:
            seats = []
            for seat in section.seats:
                occupant = self.occupancy.occupant_for(seat.id) if seat.id is not None else None
                x, y = seat_global_position(section, seat)
                seats.append(
                    SeatView(
                        id=seat.id,
                        label=seat.label,
                        x=x,
                        y=y,
                        box=seat_box(section, seat, canvas.seat_scale),
                        status=status_for(occupant),
                        occupant=occupant,
                        selected=seat.id in selected,
                    )
                )
            sections.append(
                SectionView(
                    id=section.id,
                    name=section.name,
                    type=section.type,
                    orientation=section.orientation,
                    offset_x=section.offset_x,
                    offset_y=section.offset_y,
                    seats=seats,
                )
            )

        return FloorResponse(
            date=self.floor_date,
            today=self.today,
            time_zone=self.time_zone,
            layout_id=self.layout.id if self.layout else None,
            layout_name=self.layout.name if self.layout else None,
            size=self.size,
            canvas=canvas,
            zoom=self.zoom,
            sections=sections,
            wizard=self.wizard.snapshot(),
            reservations=reservation_rows(self.reservations, self.occupancy),
            waitlist=waitlist_rows(self.waitlist, self.occupancy),
        )

    # ------------- Seat clicks -------------

    def _require_seat(self, seat_id: int) -> Seat:
        found = self.layout.find_seat(seat_id) if self.layout else None
        if found is None:
            raise SelectionError(f"Seat {seat_id} is not on the current layout.")
        return found[1]

    def seat_dialog(self, seat_id: int) -> SeatDialog:
        seat = self._require_seat(seat_id)
        occupant = self.occupancy.occupant_for(seat_id)
        status = status_for(occupant)
        return SeatDialog(
            seat_id=seat_id,
            seat_label=seat.label,
            status=status,
            occupant=occupant,
            actions=list(DIALOG_ACTIONS[status]),
        )

    def click_seat(self, seat_id: int) -> SeatClickResponse:
        """Route a seat click to the wizard when a session is active, else open the seat dialog"""
        self._require_seat(seat_id)
        if self.wizard.is_active:
            self.wizard.toggle_seat(seat_id, self.occupancy)
            return SeatClickResponse(kind="wizard", wizard=self.wizard.snapshot())
        if self.wizard.state == WizardState.PICKING_OCCUPANT:
            raise SelectionError("Choose a party or cancel the picker first.")
        return SeatClickResponse(kind="dialog", dialog=self.seat_dialog(seat_id))

    # ------------- Wizard -------------

    def start_wizard_from_seat(self, seat_id: int) -> WizardView:
        self._require_seat(seat_id)
        self.wizard.click_free_seat(seat_id, self.occupancy)
        return self.wizard.snapshot()

    def open_picker(self) -> WizardView:
        self.wizard.open_picker()
        return self.wizard.snapshot()

    def find_occupant(self, occupant_type: OccupantType, occupant_id: int) -> Occupant:
        if occupant_type == OccupantType.RESERVATION:
            for reservation in self.reservations:
                if reservation.id == occupant_id:
                    return ReservationOccupant(record=reservation)
        elif occupant_type == OccupantType.WAITLIST:
            for entry in self.waitlist:
                if entry.id == occupant_id:
                    return WaitlistOccupant(record=entry)
        raise SelectionError(f"No {occupant_type.value} #{occupant_id} on the list for this date.")

    def choose_occupant(self, occupant_type: OccupantType, occupant_id: int) -> WizardView:
        self.wizard.choose_occupant(self.find_occupant(occupant_type, occupant_id))
        return self.wizard.snapshot()

    def toggle_seat(self, seat_id: int) -> WizardView:
        self._require_seat(seat_id)
        self.wizard.toggle_seat(seat_id, self.occupancy)
        return self.wizard.snapshot()

    def cancel_wizard(self) -> WizardView:
        self.wizard.cancel()
        return self.wizard.snapshot()

    async def _refresh_after_command(self) -> bool:
        """Refresh once a command went through; a failure here leaves the floor stale"""
        try:
            await self.refresh()
        except ApiError as e:
            logger.warning(
                "Floor refresh after command failed",
                status_code=e.status_code,
                error=str(e),
            )
            return False
        return True

    def _begin_command(self) -> None:
        if self._in_flight:
            raise CommandInProgressError("Another request is still in progress.")
        self._in_flight = True

    async def submit(self, action: SubmitAction) -> WizardView:
        """
        Seat or reserve the wizard's party on the selected seats.

        On failure the session stays open so the user can retry or cancel.
        """
        self.wizard.validate_submission(action)
        self._begin_command()
        try:
            ref = occupant_ref(self.wizard.occupant)
            window = allocation_window(
                self.floor_date,
                self.time_zone,
                service_start_hour=self.settings.service_start_hour,
                duration_minutes=self.settings.default_allocation_minutes,
                now=self.now(),
            )
            seat_ids = list(self.wizard.selected_seat_ids)
            party_size = self.wizard.party_size
            if action == SubmitAction.RESERVE:
                await self.commands.reserve(ref, seat_ids, party_size, window, self.occupancy)
            else:
                await self.commands.seat_now(ref, seat_ids, party_size, window, self.occupancy)
        finally:
            self._in_flight = False

        self.wizard.complete()
        await self._refresh_after_command()
        return self.wizard.snapshot()

    # ------------- Dialog commands -------------

    def occupant_status(self, ref: OccupantRef) -> Optional[str]:
        """Status from the occupant's active allocation, else from its own record"""
        for allocation in self.occupancy.allocations:
            if (
                allocation.is_active
                and allocation.occupant_type == ref.occupant_type
                and allocation.occupant_id == ref.occupant_id
                and allocation.occupant_status is not None
            ):
                return allocation.occupant_status
        try:
            occupant = self.find_occupant(ref.occupant_type, ref.occupant_id)
        except SelectionError:
            return None
        if isinstance(occupant, ReservationOccupant):
            return occupant.record.status
        if isinstance(occupant, WaitlistOccupant):
            return occupant.record.status
        raise TypeError(f"Unknown occupant: {occupant!r}")

    async def run_command(
        self,
        command: AllocationCommand,
        occupant_type: OccupantType,
        occupant_id: int,
    ) -> CommandResult:
        """arrive, finish, no-show or cancel from the seat dialog or the lists"""
        ref = OccupantRef(occupant_type=occupant_type, occupant_id=occupant_id)
        status = self.occupant_status(ref)
        self._begin_command()
        try:
            await self.commands.transition(command, ref, status)
        finally:
            self._in_flight = False

        refreshed = await self._refresh_after_command()
        return CommandResult(
            command=command,
            occupant_type=occupant_type,
            occupant_id=occupant_id,
            message=f"{command.value.replace('_', '-')} recorded for {occupant_type.value} #{occupant_id}",
            refreshed=refreshed,
        )
