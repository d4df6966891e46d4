"""HTTP client for the restaurant REST API"""

from datetime import date
from typing import Any, Dict, List, Optional

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from hostdesk.errors import ApiError, ResponseFormatError
from hostdesk.schemas.allocation import AllocationCreate, SeatAllocation
from hostdesk.schemas.auth import LoginResponse
from hostdesk.schemas.layout import Layout, Restaurant
from hostdesk.schemas.occupant import OccupantRef
from hostdesk.schemas.reservation import Reservation, WaitlistEntry

logger = structlog.get_logger()


def _error_detail(response: httpx.Response) -> str:
    """Best-effort human readable reason from an error response"""
    try:
        data = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase

    if isinstance(data, dict):
        for key in ("error", "errors", "detail", "message"):
            value = data.get(key)
            if isinstance(value, list):
                return "; ".join(str(v) for v in value)
            if value:
                return str(value)
    return str(data)[:200]


class RestaurantApiClient:
    """
    Thin async wrapper over the restaurant API.

    Every call is a single round trip: no retries and no caching. Transport
    failures and non-2xx answers raise ApiError; payloads that do not match
    the expected schema raise ResponseFormatError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    def set_token(self, token: str) -> None:
        self._client.headers["Authorization"] = f"Bearer {token}"

    def clear_token(self) -> None:
        self._client.headers.pop("Authorization", None)

    @property
    def has_token(self) -> bool:
        return "Authorization" in self._client.headers

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        logger.debug("API request", method=method, path=path, params=params)

        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error("API request failed", method=method, path=path, error=str(e))
            raise ApiError(f"Could not reach the restaurant API: {e}") from e

        if response.is_error:
            detail = _error_detail(response)
            logger.warning(
                "API request rejected",
                method=method,
                path=path,
                status_code=response.status_code,
                detail=detail,
            )
            raise ApiError(
                f"The restaurant API rejected the request: {detail}",
                status_code=response.status_code,
                detail=detail,
            )

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.warning("API response is not JSON", method=method, path=path)
            raise ResponseFormatError(f"{method} {path} did not return JSON") from e

    @staticmethod
    def _parse(schema: Any, data: Any, resource: str) -> Any:
        try:
            return TypeAdapter(schema).validate_python(data)
        except ValidationError as e:
            logger.warning(
                "Malformed API payload",
                resource=resource,
                error_count=e.error_count(),
                error=str(e),
            )
            raise ResponseFormatError(f"Unexpected {resource} payload") from e

    # ------------- Restaurant -------------

    async def fetch_restaurant(self, restaurant_id: int) -> Restaurant:
        data = await self._request("GET", f"/restaurants/{restaurant_id}")
        return self._parse(Restaurant, data, "restaurant")

    # ------------- Layouts -------------

    async def list_layouts(self) -> List[Layout]:
        data = await self._request("GET", "/layouts")
        return self._parse(List[Layout], data, "layouts")

    async def fetch_layout(self, layout_id: int) -> Layout:
        data = await self._request("GET", f"/layouts/{layout_id}")
        return self._parse(Layout, data, "layout")

    async def create_layout(self, layout: Layout) -> Layout:
        data = await self._request("POST", "/layouts", json={"layout": layout.to_payload()})
        return self._parse(Layout, data, "layout")

    async def update_layout(self, layout_id: int, layout: Layout) -> Layout:
        data = await self._request(
            "PATCH", f"/layouts/{layout_id}", json={"layout": layout.to_payload()}
        )
        return self._parse(Layout, data, "layout")

    async def activate_layout(self, layout_id: int) -> Any:
        return await self._request("POST", f"/layouts/{layout_id}/activate")

    # ------------- Reservations -------------

    async def list_reservations(self, day: date) -> List[Reservation]:
        data = await self._request("GET", "/reservations", params={"date": day.isoformat()})
        return self._parse(List[Reservation], data, "reservations")

    async def create_reservation(self, payload: Dict[str, Any]) -> Reservation:
        data = await self._request("POST", "/reservations", json=payload)
        return self._parse(Reservation, data, "reservation")

    async def update_reservation(self, reservation_id: int, payload: Dict[str, Any]) -> Reservation:
        data = await self._request("PATCH", f"/reservations/{reservation_id}", json=payload)
        return self._parse(Reservation, data, "reservation")

    async def delete_reservation(self, reservation_id: int) -> None:
        await self._request("DELETE", f"/reservations/{reservation_id}")

    # ------------- Waitlist -------------

    async def list_waitlist(self, day: date) -> List[WaitlistEntry]:
        data = await self._request("GET", "/waitlist_entries", params={"date": day.isoformat()})
        return self._parse(List[WaitlistEntry], data, "waitlist entries")

    async def create_waitlist_entry(self, payload: Dict[str, Any]) -> WaitlistEntry:
        data = await self._request("POST", "/waitlist_entries", json=payload)
        return self._parse(WaitlistEntry, data, "waitlist entry")

    # ------------- Seat Allocations -------------

    async def list_seat_allocations(self, day: date) -> List[SeatAllocation]:
        data = await self._request("GET", "/seat_allocations", params={"date": day.isoformat()})
        return self._parse(List[SeatAllocation], data, "seat allocations")

    async def create_allocations(self, allocation: AllocationCreate) -> Any:
        return await self._request(
            "POST", "/seat_allocations/multi_create", json=allocation.to_payload()
        )

    async def reserve_allocations(self, allocation: AllocationCreate) -> Any:
        return await self._request(
            "POST", "/seat_allocations/reserve", json=allocation.to_payload()
        )

    async def allocation_action(self, action: str, ref: OccupantRef) -> Any:
        """arrive, finish, no_show or cancel for one occupant"""
        return await self._request(
            "POST", f"/seat_allocations/{action}", json=ref.model_dump(mode="json")
        )

    # ------------- Availability -------------

    async def fetch_availability(self, day: date, party_size: int) -> List[str]:
        data = await self._request(
            "GET",
            "/availability",
            params={"date": day.isoformat(), "party_size": party_size},
        )
        if isinstance(data, dict):
            data = data.get("slots", [])
        return self._parse(List[str], data, "availability")

    # ------------- Auth -------------

    async def login(self, email: str, password: str) -> LoginResponse:
        data = await self._request("POST", "/login", json={"email": email, "password": password})
        return self._parse(LoginResponse, data, "login")
