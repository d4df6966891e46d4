"""Layout, section and seat schemas"""

import enum
from typing import Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SectionType(str, enum.Enum):
    """How seats inside a section are arranged"""
    COUNTER = "counter"
    TABLE = "table"


class Orientation(str, enum.Enum):
    """Section orientation"""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class Seat(BaseModel):
    """A seat positioned relative to its section's offset"""
    id: Optional[int] = None
    label: Optional[str] = None
    position_x: float = 0
    position_y: float = 0
    capacity: int = 1

    @model_validator(mode="before")
    @classmethod
    def _flatten_position(cls, data):
        # Older layouts nest the position and number the seat instead of labelling it
        if not isinstance(data, dict):
            return data
        data = dict(data)
        position = data.pop("position", None)
        if isinstance(position, dict):
            data.setdefault("position_x", position.get("x") or 0)
            data.setdefault("position_y", position.get("y") or 0)
        if data.get("label") is None and data.get("number") is not None:
            data["label"] = str(data["number"])
        for key in ("position_x", "position_y"):
            if data.get(key) is None:
                data[key] = 0
        if data.get("capacity") is None:
            data["capacity"] = 1
        return data


class Section(BaseModel):
    """A named group of seats drawn at an offset in layout space"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    db_id: Optional[int] = Field(default=None, alias="dbId")
    name: str = ""
    type: SectionType = SectionType.COUNTER
    orientation: Orientation = Orientation.VERTICAL
    offset_x: float = Field(default=0, alias="offsetX")
    offset_y: float = Field(default=0, alias="offsetY")
    seats: List[Seat] = []

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return str(value)

    @field_validator("offset_x", "offset_y", mode="before")
    @classmethod
    def _missing_offset(cls, value):
        return 0 if value is None else value

    @field_validator("seats", mode="before")
    @classmethod
    def _missing_seats(cls, value):
        return value if isinstance(value, list) else []


class Layout(BaseModel):
    """A named floor plan"""
    id: Optional[int] = None
    name: str = "Untitled Layout"
    restaurant_id: Optional[int] = None
    sections: List[Section] = []

    @model_validator(mode="before")
    @classmethod
    def _unwrap_sections_data(cls, data):
        """Accept `sections`, `sections_data: [...]` or `sections_data: {"sections": [...]}`"""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("name") is None:
            data.pop("name", None)
        if "sections" not in data:
            raw = data.pop("sections_data", None)
            if isinstance(raw, list):
                data["sections"] = raw
            elif isinstance(raw, dict) and isinstance(raw.get("sections"), list):
                data["sections"] = raw["sections"]
            else:
                data["sections"] = []
        return data

    def iter_seats(self) -> Iterator[Tuple[Section, Seat]]:
        for section in self.sections:
            for seat in section.seats:
                yield section, seat

    def find_seat(self, seat_id: int) -> Optional[Tuple[Section, Seat]]:
        for section, seat in self.iter_seats():
            if seat.id is not None and seat.id == seat_id:
                return section, seat
        return None

    def find_section(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def to_payload(self) -> dict:
        """Body for creating or updating the layout on the restaurant API"""
        return {
            "name": self.name,
            "sections_data": {
                "sections": [
                    section.model_dump(mode="json", by_alias=True, exclude_none=True)
                    for section in self.sections
                ],
            },
        }


class Restaurant(BaseModel):
    """The restaurant record, read to learn its active layout and time zone"""
    id: int
    name: Optional[str] = None
    time_zone: Optional[str] = None
    current_layout_id: Optional[int] = None
