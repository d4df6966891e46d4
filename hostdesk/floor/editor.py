"""Layout editor operations: building, resizing and removing seat sections"""

import re
from typing import List, Optional

import structlog
from pydantic import BaseModel, Field

from hostdesk.errors import SelectionError
from hostdesk.schemas.layout import Layout, Orientation, Seat, Section, SectionType

logger = structlog.get_logger()

SEAT_SPACING = 70
MIN_GAP = 5
NEW_SECTION_OFFSET = 100

_LABEL_NUMBER = re.compile(r"#(\d+)")


class SectionConfig(BaseModel):
    """Add/edit section form"""
    name: str = Field(min_length=1)
    seat_count: int = Field(default=4, ge=0)
    type: SectionType = SectionType.COUNTER
    orientation: Orientation = Orientation.VERTICAL
    capacity: int = Field(default=1, ge=1)


def seat_label_number(label: Optional[str]) -> int:
    """Number in a label like "Seat #12", 0 when there is none"""
    if not label:
        return 0
    match = _LABEL_NUMBER.search(label)
    return int(match.group(1)) if match else 0


def measure_gap(seats_ascending: List[Seat], orientation: Orientation, default: float = SEAT_SPACING) -> float:
    """Spacing between the last two seats along the section's axis"""
    if len(seats_ascending) < 2:
        return default
    second_last, last = seats_ascending[-2], seats_ascending[-1]
    if orientation == Orientation.VERTICAL:
        diff = last.position_y - second_last.position_y
    else:
        diff = last.position_x - second_last.position_x
    return default if diff <= MIN_GAP else diff


def _grid_position(index: int, config: SectionConfig) -> tuple:
    if config.type == SectionType.COUNTER:
        if config.orientation == Orientation.VERTICAL:
            return 0, index * SEAT_SPACING
        return index * SEAT_SPACING, 0

    # Tables are two seats deep
    if config.orientation == Orientation.VERTICAL:
        col, row = index % 2, index // 2
    else:
        row, col = index % 2, index // 2
    return col * SEAT_SPACING, row * SEAT_SPACING


def build_section(section_id: str, config: SectionConfig) -> Section:
    seats = []
    for i in range(config.seat_count):
        x, y = _grid_position(i, config)
        seats.append(
            Seat(label=f"Seat #{i + 1}", position_x=x, position_y=y, capacity=config.capacity)
        )
    return Section(
        id=section_id,
        name=config.name,
        type=config.type,
        orientation=config.orientation,
        offset_x=NEW_SECTION_OFFSET,
        offset_y=NEW_SECTION_OFFSET,
        seats=seats,
    )


def resize_section(section: Section, config: SectionConfig) -> Section:
    """
    Apply an edit: rename, retag and grow or shrink the seat count.

    New seats continue the line after the highest-numbered seat at the
    measured gap; removed seats are taken from the highest numbers down.
    """
    seats = list(section.seats)
    ascending = sorted(seats, key=lambda s: seat_label_number(s.label))

    if config.seat_count > len(seats):
        last_number = seat_label_number(ascending[-1].label) if ascending else 0
        anchor_x = ascending[-1].position_x if ascending else 0
        anchor_y = ascending[-1].position_y if ascending else 0
        gap = measure_gap(ascending, config.orientation)
        for i in range(1, config.seat_count - len(section.seats) + 1):
            x, y = anchor_x, anchor_y
            if config.orientation == Orientation.VERTICAL:
                y += gap * i
            else:
                x += gap * i
            seats.append(
                Seat(
                    label=f"Seat #{last_number + i}",
                    position_x=x,
                    position_y=y,
                    capacity=config.capacity,
                )
            )
    elif config.seat_count < len(seats):
        drop = {id(seat) for seat in ascending[config.seat_count:]}
        seats = [seat for seat in seats if id(seat) not in drop]

    return section.model_copy(
        update={
            "name": config.name,
            "type": config.type,
            "orientation": config.orientation,
            "seats": seats,
        }
    )


def next_section_id(layout: Layout) -> str:
    taken = {section.id for section in layout.sections}
    n = len(layout.sections) + 1
    while f"section-{n}" in taken:
        n += 1
    return f"section-{n}"


def add_section(layout: Layout, config: SectionConfig) -> Layout:
    section = build_section(next_section_id(layout), config)
    logger.debug("Section added", section_id=section.id, seats=len(section.seats))
    return layout.model_copy(update={"sections": [*layout.sections, section]})


def edit_section(layout: Layout, section_id: str, config: SectionConfig) -> Layout:
    section = layout.find_section(section_id)
    if section is None:
        raise SelectionError(f"Section {section_id} is not on this layout.")
    updated = resize_section(section, config)
    return layout.model_copy(
        update={"sections": [updated if s.id == section_id else s for s in layout.sections]}
    )


def move_section(layout: Layout, section_id: str, offset_x: float, offset_y: float) -> Layout:
    section = layout.find_section(section_id)
    if section is None:
        raise SelectionError(f"Section {section_id} is not on this layout.")
    moved = section.model_copy(update={"offset_x": offset_x, "offset_y": offset_y})
    return layout.model_copy(
        update={"sections": [moved if s.id == section_id else s for s in layout.sections]}
    )


def remove_section(layout: Layout, section_id: str) -> Layout:
    if layout.find_section(section_id) is None:
        raise SelectionError(f"Section {section_id} is not on this layout.")
    return layout.model_copy(
        update={"sections": [s for s in layout.sections if s.id != section_id]}
    )
