"""Tests for the restaurant API client"""

from datetime import date

import httpx
import pytest

from hostdesk.client.api import RestaurantApiClient
from hostdesk.errors import ApiError, ResponseFormatError

FLOOR_DAY = date(2025, 6, 1)


@pytest.mark.asyncio
async def test_fetches_are_date_scoped(api_client, fake_api):
    """Test date-scoped lists send the date as a query parameter"""
    reservations = await api_client.list_reservations(FLOOR_DAY)
    allocations = await api_client.list_seat_allocations(FLOOR_DAY)

    assert [r.id for r in reservations] == [7, 11, 12]
    assert len(allocations) == 4
    assert fake_api.calls("GET", "/reservations")[0].url.params["date"] == "2025-06-01"

    assert await api_client.list_reservations(date(2025, 6, 2)) == []


@pytest.mark.asyncio
async def test_layout_sections_data_is_unwrapped(api_client):
    """Test layouts nest their sections under sections_data"""
    layout = await api_client.fetch_layout(1)

    assert layout.name == "Main Floor"
    assert [s.id for s in layout.sections] == ["section-1", "section-2"]
    assert layout.sections[1].offset_x == 400
    assert layout.find_seat(7)[1].label == "T3"


@pytest.mark.asyncio
async def test_legacy_seat_shape(api_client, fake_api):
    """Test nested positions and numbered seats are accepted"""
    fake_api.serve_raw(
        "/layouts/1",
        {
            "id": 1,
            "name": None,
            "sections_data": [
                {"id": 3, "name": "Patio", "offsetX": None, "seats": [{"id": 1, "number": 4, "position": {"x": 10, "y": 20}}]}
            ],
        },
    )

    layout = await api_client.fetch_layout(1)

    section = layout.sections[0]
    assert layout.name == "Untitled Layout"
    assert section.id == "3"
    assert section.offset_x == 0
    assert (section.seats[0].position_x, section.seats[0].position_y) == (10, 20)
    assert section.seats[0].label == "4"


@pytest.mark.asyncio
async def test_error_status_raises_api_error(api_client, fake_api):
    """Test non-2xx answers raise ApiError with the server's reason"""
    fake_api.fail("/reservations", 500)

    with pytest.raises(ApiError) as exc:
        await api_client.list_reservations(FLOOR_DAY)

    assert exc.value.status_code == 500
    assert exc.value.detail == "Simulated failure"


@pytest.mark.asyncio
async def test_malformed_payload_raises_format_error(api_client, fake_api):
    """Test payloads of the wrong shape raise ResponseFormatError"""
    fake_api.serve_raw("/seat_allocations", {"unexpected": True})

    with pytest.raises(ResponseFormatError):
        await api_client.list_seat_allocations(FLOOR_DAY)


@pytest.mark.asyncio
async def test_transport_failure_raises_api_error():
    """Test connection failures raise ApiError without a status code"""
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = RestaurantApiClient("http://restaurant.test", transport=httpx.MockTransport(refuse))
    try:
        with pytest.raises(ApiError) as exc:
            await client.fetch_restaurant(1)
    finally:
        await client.close()

    assert exc.value.status_code is None
    assert "Could not reach" in str(exc.value)


@pytest.mark.asyncio
async def test_token_header(api_client, fake_api):
    """Test the bearer token is sent once set and dropped once cleared"""
    api_client.set_token("abc")
    await api_client.fetch_restaurant(1)
    api_client.clear_token()
    await api_client.fetch_restaurant(1)

    first, second = fake_api.calls("GET", "/restaurants/1")
    assert first.headers["Authorization"] == "Bearer abc"
    assert "Authorization" not in second.headers
    assert not api_client.has_token


@pytest.mark.asyncio
async def test_availability(api_client):
    """Test availability slots are unwrapped"""
    slots = await api_client.fetch_availability(FLOOR_DAY, 4)

    assert slots == ["17:00", "17:30", "18:00"]


@pytest.mark.asyncio
async def test_delete_returns_none(api_client, fake_api):
    """Test an empty 204 answer is not parsed"""
    assert await api_client.delete_reservation(7) is None
    assert [r["id"] for r in fake_api.reservations] == [11, 12]
