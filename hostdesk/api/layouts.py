"""Seat layout editor API endpoints"""

from typing import List

from fastapi import APIRouter, Depends
import structlog

from hostdesk.api.auth import get_current_staff
from hostdesk.api.deps import get_client, get_console
from hostdesk.client.api import RestaurantApiClient
from hostdesk.floor import editor
from hostdesk.floor.geometry import compute_canvas
from hostdesk.floor.view import FloorConsole
from hostdesk.schemas.auth import AuthUser
from hostdesk.schemas.floor import LayoutDetail, LayoutSize, SectionMove
from hostdesk.schemas.layout import Layout

router = APIRouter()
logger = structlog.get_logger()


def _detail(layout: Layout, size: LayoutSize = LayoutSize.AUTO) -> LayoutDetail:
    return LayoutDetail(layout=layout, size=size, canvas=compute_canvas(layout, size))


async def _save(
    layout_id: int,
    layout: Layout,
    client: RestaurantApiClient,
    console: FloorConsole,
) -> LayoutDetail:
    saved = await client.update_layout(layout_id, layout)
    if console.layout is not None and console.layout.id == layout_id:
        await console.refresh()
    return _detail(saved)


@router.get("", response_model=List[Layout])
async def list_layouts(
    client: RestaurantApiClient = Depends(get_client),
    current_user: AuthUser = Depends(get_current_staff),
):
    return await client.list_layouts()


@router.post("", response_model=LayoutDetail, status_code=201)
async def create_layout(
    layout: Layout,
    client: RestaurantApiClient = Depends(get_client),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Save a new layout"""
    created = await client.create_layout(layout)
    logger.info("Layout created", layout_id=created.id, sections=len(created.sections))
    return _detail(created)


@router.get("/{layout_id}", response_model=LayoutDetail)
async def get_layout(
    layout_id: int,
    size: LayoutSize = LayoutSize.AUTO,
    client: RestaurantApiClient = Depends(get_client),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Layout with the canvas it needs in the given sizing mode"""
    layout = await client.fetch_layout(layout_id)
    return _detail(layout, size)


@router.put("/{layout_id}", response_model=LayoutDetail)
async def update_layout(
    layout_id: int,
    layout: Layout,
    client: RestaurantApiClient = Depends(get_client),
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Overwrite a layout's name and sections"""
    return await _save(layout_id, layout, client, console)


@router.post("/{layout_id}/activate")
async def activate_layout(
    layout_id: int,
    client: RestaurantApiClient = Depends(get_client),
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Make this the layout the floor shows"""
    await client.activate_layout(layout_id)
    logger.info("Layout activated", layout_id=layout_id)
    await console.refresh()
    return {"message": "Layout activated", "layout_id": layout_id}


# ------------- Sections -------------

@router.post("/{layout_id}/sections", response_model=LayoutDetail, status_code=201)
async def add_section(
    layout_id: int,
    config: editor.SectionConfig,
    client: RestaurantApiClient = Depends(get_client),
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    layout = await client.fetch_layout(layout_id)
    return await _save(layout_id, editor.add_section(layout, config), client, console)


@router.put("/{layout_id}/sections/{section_id}", response_model=LayoutDetail)
async def edit_section(
    layout_id: int,
    section_id: str,
    config: editor.SectionConfig,
    client: RestaurantApiClient = Depends(get_client),
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    """Rename a section or change its type, orientation or seat count"""
    layout = await client.fetch_layout(layout_id)
    return await _save(layout_id, editor.edit_section(layout, section_id, config), client, console)


@router.put("/{layout_id}/sections/{section_id}/position", response_model=LayoutDetail)
async def move_section(
    layout_id: int,
    section_id: str,
    move: SectionMove,
    client: RestaurantApiClient = Depends(get_client),
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    layout = await client.fetch_layout(layout_id)
    moved = editor.move_section(layout, section_id, move.offset_x, move.offset_y)
    return await _save(layout_id, moved, client, console)


@router.delete("/{layout_id}/sections/{section_id}", response_model=LayoutDetail)
async def delete_section(
    layout_id: int,
    section_id: str,
    client: RestaurantApiClient = Depends(get_client),
    console: FloorConsole = Depends(get_console),
    current_user: AuthUser = Depends(get_current_staff),
):
    layout = await client.fetch_layout(layout_id)
    return await _save(layout_id, editor.remove_section(layout, section_id), client, console)
