"""Test configuration and fixtures"""

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

import httpx
import pytest
from httpx import AsyncClient
from jose import jwt

from hostdesk.api.deps import get_client, get_console, get_session
from hostdesk.auth.session import StaffSession
from hostdesk.client.api import RestaurantApiClient
from hostdesk.config import Settings
from hostdesk.floor.view import FloorConsole
from hostdesk.main import app

GUAM = ZoneInfo("Pacific/Guam")
FLOOR_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=GUAM)
FLOOR_DAY = "2025-06-01"

STAFF_EMAIL = "host@example.com"
STAFF_PASSWORD = "hostpass123"


def make_token(exp: Optional[datetime] = None, sub: str = "1") -> str:
    exp = exp or datetime.now(timezone.utc) + timedelta(hours=8)
    return jwt.encode({"sub": sub, "exp": int(exp.timestamp())}, "test-secret", algorithm="HS256")


def sample_layout() -> Dict[str, Any]:
    """
    Bar: counter, vertical, offset (100, 100), seats 1-4 one above the other.
    Tables: table, horizontal, offset (400, 100), seats 5-8 in a 2x2 block.
    """
    return {
        "id": 1,
        "name": "Main Floor",
        "restaurant_id": 1,
        "sections_data": {
            "sections": [
                {
                    "id": "section-1",
                    "name": "Bar",
                    "type": "counter",
                    "orientation": "vertical",
                    "offsetX": 100,
                    "offsetY": 100,
                    "seats": [
                        {"id": 1, "label": "Seat #1", "position_x": 0, "position_y": 0},
                        {"id": 2, "label": "Seat #2", "position_x": 0, "position_y": 70},
                        {"id": 3, "label": "Seat #3", "position_x": 0, "position_y": 140},
                        {"id": 4, "label": "Seat #4", "position_x": 0, "position_y": 210},
                    ],
                },
                {
                    "id": "section-2",
                    "name": "Tables",
                    "type": "table",
                    "orientation": "horizontal",
                    "offsetX": 400,
                    "offsetY": 100,
                    "seats": [
                        {"id": 5, "label": "T1", "position_x": 0, "position_y": 0},
                        {"id": 6, "label": "T2", "position_x": 0, "position_y": 70},
                        {"id": 7, "label": "T3", "position_x": 70, "position_y": 0},
                        {"id": 8, "label": "T4", "position_x": 70, "position_y": 70},
                    ],
                },
            ]
        },
    }


class FakeRestaurantApi:
    """
    In-memory stand-in for the restaurant REST API, served through
    httpx.MockTransport. Seed data for 2025-06-01:

    - reservation 7 (Grace Hopper, 2, booked) holds no seats
    - reservation 11 (Bob Jones, 1) has seat 1 reserved
    - reservation 12 (Carol White, 2) is seated on seats 5 and 6
    - waitlist 20 (Dan Brown, 3) is waiting
    - waitlist 21 (Eve, 1) was seated on seat 2, since released

    Free seats: 2, 3, 4, 7, 8.
    """

    def __init__(self):
        self.restaurant = {"id": 1, "name": "Test Bistro", "time_zone": "Pacific/Guam", "current_layout_id": 1}
        self.layouts: Dict[int, Dict[str, Any]] = {1: sample_layout()}
        self.reservations: List[Dict[str, Any]] = [
            self._reservation(7, "Grace Hopper", 2, "booked", "19:00", "671-555-0107", "grace@example.com"),
            self._reservation(11, "Bob Jones", 1, "reserved", "18:00", "671-555-0111", "bob@example.com"),
            self._reservation(12, "Carol White", 2, "seated", "11:00", "671-555-0112", None),
        ]
        self.waitlist: List[Dict[str, Any]] = [
            {"id": 20, "contact_name": "Dan Brown", "contact_phone": "671-555-0120", "party_size": 3,
             "status": "waiting", "check_in_time": f"{FLOOR_DAY}T11:30:00+10:00"},
            {"id": 21, "contact_name": "Eve", "contact_phone": "671-555-0121", "party_size": 1,
             "status": "waiting", "check_in_time": f"{FLOOR_DAY}T11:45:00+10:00"},
        ]
        self.allocations: List[Dict[str, Any]] = []
        self._next_id = 100
        self._allocate(1, "reservation", 11, "reserved", f"{FLOOR_DAY}T18:00:00+10:00")
        self._allocate(5, "reservation", 12, "seated", f"{FLOOR_DAY}T11:00:00+10:00")
        self._allocate(6, "reservation", 12, "seated", f"{FLOOR_DAY}T11:00:00+10:00")
        released = self._allocate(2, "waitlist", 21, "seated", f"{FLOOR_DAY}T10:00:00+10:00")
        released["released_at"] = f"{FLOOR_DAY}T11:00:00+10:00"

        self.users = {
            STAFF_EMAIL: (STAFF_PASSWORD, {"id": 1, "email": STAFF_EMAIL, "name": "Hannah Host", "role": "staff"}),
            "diner@example.com": ("dinerpass", {"id": 2, "email": "diner@example.com", "name": "Dee", "role": "customer"}),
        }
        self.requests: List[httpx.Request] = []
        self.failures: Dict[str, int] = {}
        self.raw_payloads: Dict[str, Any] = {}

    # ------------- Seeding helpers -------------

    @staticmethod
    def _reservation(id_, name, party_size, status, at, phone, email):
        return {
            "id": id_,
            "contact_name": name,
            "contact_phone": phone,
            "contact_email": email,
            "party_size": party_size,
            "status": status,
            "start_time": f"{FLOOR_DAY}T{at}:00+10:00",
        }

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def _seat_label(self, seat_id: int) -> Optional[str]:
        for layout in self.layouts.values():
            for section in layout["sections_data"]["sections"]:
                for seat in section["seats"]:
                    if seat.get("id") == seat_id:
                        return seat.get("label")
        return None

    def _record(self, occupant_type: str, occupant_id: int) -> Optional[Dict[str, Any]]:
        records = self.reservations if occupant_type == "reservation" else self.waitlist
        for record in records:
            if record["id"] == occupant_id:
                return record
        return None

    def _allocate(self, seat_id, occupant_type, occupant_id, status, start_time, end_time=None):
        record = self._record(occupant_type, occupant_id)
        allocation = {
            "id": self._new_id(),
            "seat_id": seat_id,
            "seat_label": self._seat_label(seat_id),
            "occupant_type": occupant_type,
            "occupant_id": occupant_id,
            "occupant_name": record["contact_name"],
            "occupant_party_size": record["party_size"],
            "occupant_status": status,
            "start_time": start_time,
            "end_time": end_time,
            "released_at": None,
        }
        self.allocations.append(allocation)
        return allocation

    def active_allocations(self, seat_id: Optional[int] = None) -> List[Dict[str, Any]]:
        return [
            a for a in self.allocations
            if a["released_at"] is None and (seat_id is None or a["seat_id"] == seat_id)
        ]

    def fail(self, path: str, status_code: int = 500) -> None:
        """Answer the next request to `path` with an error"""
        self.failures[path] = status_code

    def serve_raw(self, path: str, payload: Any) -> None:
        """Answer GET `path` with `payload` as-is"""
        self.raw_payloads[path] = payload

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    # ------------- Transport -------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        method = request.method

        if path in self.failures:
            status_code = self.failures.pop(path)
            return httpx.Response(status_code, json={"error": "Simulated failure"})
        if method == "GET" and path in self.raw_payloads:
            return httpx.Response(200, json=self.raw_payloads[path])

        body = json.loads(request.content) if request.content else {}
        day = request.url.params.get("date")
        parts = path.strip("/").split("/")

        if path == "/login" and method == "POST":
            return self._login(body)

        if parts[0] == "restaurants" and method == "GET":
            return httpx.Response(200, json=self.restaurant)

        if parts[0] == "layouts":
            return self._layouts(method, parts, body)

        if path == "/reservations":
            if method == "GET":
                return httpx.Response(200, json=[r for r in self.reservations if r["start_time"][:10] == day])
            created = dict(body, id=self._new_id())
            self.reservations.append(created)
            return httpx.Response(201, json=created)

        if parts[0] == "reservations" and len(parts) == 2:
            record = self._record("reservation", int(parts[1]))
            if record is None:
                return httpx.Response(404, json={"error": "Reservation not found"})
            if method == "PATCH":
                record.update(body)
                return httpx.Response(200, json=record)
            self.reservations.remove(record)
            return httpx.Response(204)

        if path == "/waitlist_entries":
            if method == "GET":
                return httpx.Response(200, json=[w for w in self.waitlist if (w["check_in_time"] or "")[:10] == day])
            created = dict(body, id=self._new_id())
            created.setdefault("check_in_time", f"{FLOOR_DAY}T12:00:00+10:00")
            self.waitlist.append(created)
            return httpx.Response(201, json=created)

        if path == "/seat_allocations" and method == "GET":
            return httpx.Response(200, json=[a for a in self.allocations if a["start_time"][:10] == day])

        if parts[0] == "seat_allocations" and method == "POST":
            return self._allocation_command(parts[1], body)

        if path == "/availability":
            return httpx.Response(200, json={"slots": ["17:00", "17:30", "18:00"]})

        return httpx.Response(404, json={"error": f"No route for {method} {path}"})

    def _login(self, body):
        known = self.users.get(body.get("email"))
        if known is None or known[0] != body.get("password"):
            return httpx.Response(401, json={"error": "Invalid email or password"})
        return httpx.Response(200, json={"jwt": make_token(sub=str(known[1]["id"])), "user": known[1]})

    def _layouts(self, method, parts, body):
        if len(parts) == 1:
            if method == "GET":
                return httpx.Response(200, json=list(self.layouts.values()))
            layout = dict(body["layout"], id=self._new_id(), restaurant_id=1)
            self.layouts[layout["id"]] = layout
            return httpx.Response(201, json=layout)

        layout_id = int(parts[1])
        if layout_id not in self.layouts:
            return httpx.Response(404, json={"error": "Layout not found"})
        if len(parts) == 3 and parts[2] == "activate":
            self.restaurant["current_layout_id"] = layout_id
            return httpx.Response(200, json={"message": "activated"})
        if method == "PATCH":
            self.layouts[layout_id].update(body["layout"])
        return httpx.Response(200, json=self.layouts[layout_id])

    def _allocation_command(self, action, body):
        if action in ("multi_create", "reserve"):
            data = body["seat_allocation"]
            for seat_id in data["seat_ids"]:
                if self.active_allocations(seat_id):
                    return httpx.Response(422, json={"errors": [f"Seat {seat_id} is already taken"]})
            status = "seated" if action == "multi_create" else "reserved"
            created = [
                self._allocate(seat_id, data["occupant_type"], data["occupant_id"], status,
                               data["start_time"], data["end_time"])
                for seat_id in data["seat_ids"]
            ]
            self._record(data["occupant_type"], data["occupant_id"])["status"] = status
            return httpx.Response(201, json=created)

        occupant_type, occupant_id = body["occupant_type"], body["occupant_id"]
        held = [
            a for a in self.active_allocations()
            if a["occupant_type"] == occupant_type and a["occupant_id"] == occupant_id
        ]
        record = self._record(occupant_type, occupant_id)
        if action == "arrive":
            for allocation in held:
                allocation["occupant_status"] = "seated"
            record["status"] = "seated"
        else:
            for allocation in held:
                allocation["released_at"] = FLOOR_NOW.isoformat()
            record["status"] = {"finish": "finished", "no_show": "no_show", "cancel": "canceled"}[action]
        return httpx.Response(200, json={"message": f"{action} ok"})


@pytest.fixture
def fake_api():
    """In-memory restaurant API"""
    return FakeRestaurantApi()


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        api_base_url="http://restaurant.test",
        session_file=str(tmp_path / "session.json"),
        default_time_zone="Pacific/Guam",
    )


@pytest.fixture
async def api_client(fake_api, test_settings):
    """RestaurantApiClient wired to the fake API"""
    client = RestaurantApiClient(
        test_settings.api_base_url,
        transport=httpx.MockTransport(fake_api.handler),
    )
    yield client
    await client.close()


@pytest.fixture
def console(api_client, test_settings):
    """Floor console with its clock fixed at noon on 2025-06-01 in Guam"""
    return FloorConsole(api_client, test_settings, clock=lambda: FLOOR_NOW)


@pytest.fixture
async def loaded_console(console):
    """Console after its first refresh"""
    await console.refresh()
    return console


@pytest.fixture
def staff_session(api_client, test_settings):
    return StaffSession(test_settings.session_file, api_client)


@pytest.fixture
async def client(api_client, loaded_console, staff_session):
    """Create test client with the console objects overridden"""
    app.dependency_overrides[get_client] = lambda: api_client
    app.dependency_overrides[get_console] = lambda: loaded_console
    app.dependency_overrides[get_session] = lambda: staff_session

    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(client, staff_session):
    """Create test client with a logged-in staff session"""
    await staff_session.login(STAFF_EMAIL, STAFF_PASSWORD)
    return client


@pytest.fixture
def layout_data():
    """Raw sample layout payload"""
    return sample_layout()


@pytest.fixture
def token_factory():
    """Build JWTs with a chosen expiry"""
    return make_token
