"""Canvas sizing and seat placement for floor layouts"""

from typing import Dict, Tuple

from hostdesk.schemas.floor import CanvasSize, LayoutSize, SeatBox
from hostdesk.schemas.layout import Layout, Seat, Section

LAYOUT_PRESETS: Dict[LayoutSize, CanvasSize] = {
    LayoutSize.SMALL: CanvasSize(width=1200, height=800, seat_scale=1.0),
    LayoutSize.MEDIUM: CanvasSize(width=2000, height=1200, seat_scale=1.0),
    LayoutSize.LARGE: CanvasSize(width=3000, height=1800, seat_scale=1.0),
}

AUTO_MARGIN = 200
AUTO_MIN_WIDTH = 800
AUTO_MIN_HEIGHT = 600
EMPTY_CANVAS = CanvasSize(width=1200, height=800, seat_scale=1.0)

SEAT_DIAMETER = 60

ZOOM_MIN = 0.2
ZOOM_MAX = 5.0
ZOOM_STEP = 0.25
ZOOM_DEFAULT = 1.0


def seat_global_position(section: Section, seat: Seat) -> Tuple[float, float]:
    """Section offset plus the seat's relative position"""
    return section.offset_x + seat.position_x, section.offset_y + seat.position_y


def compute_auto_bounds(layout: Layout) -> CanvasSize:
    """
    Smallest canvas that encloses every seat plus a margin.

    The bounding box is taken over global seat coordinates; the margin is
    added once per axis and the result is floored at 800x600. A layout
    without seats gets the small preset size.
    """
    xs = []
    ys = []
    for section, seat in layout.iter_seats():
        x, y = seat_global_position(section, seat)
        xs.append(x)
        ys.append(y)

    if not xs:
        return EMPTY_CANVAS.model_copy()

    width = max(xs) - min(xs) + AUTO_MARGIN
    height = max(ys) - min(ys) + AUTO_MARGIN
    return CanvasSize(
        width=max(width, AUTO_MIN_WIDTH),
        height=max(height, AUTO_MIN_HEIGHT),
        seat_scale=1.0,
    )


def compute_canvas(layout: Layout, size: LayoutSize) -> CanvasSize:
    """Canvas size and seat scale for a sizing mode"""
    if size == LayoutSize.AUTO:
        return compute_auto_bounds(layout)
    return LAYOUT_PRESETS[size].model_copy()


def seat_box(section: Section, seat: Seat, seat_scale: float = 1.0) -> SeatBox:
    """Circle of fixed diameter centered on the seat's global position"""
    diameter = SEAT_DIAMETER * seat_scale
    radius = diameter / 2
    x, y = seat_global_position(section, seat)
    return SeatBox(left=x - radius, top=y - radius, diameter=diameter)


def clamp_zoom(zoom: float) -> float:
    return min(max(zoom, ZOOM_MIN), ZOOM_MAX)


def zoom_in(zoom: float) -> float:
    return clamp_zoom(zoom + ZOOM_STEP)


def zoom_out(zoom: float) -> float:
    return clamp_zoom(zoom - ZOOM_STEP)
