"""Request dependencies: the console objects built at startup"""

from fastapi import Request

from hostdesk.auth.session import StaffSession
from hostdesk.client.api import RestaurantApiClient
from hostdesk.floor.view import FloorConsole


def get_client(request: Request) -> RestaurantApiClient:
    return request.app.state.client


def get_session(request: Request) -> StaffSession:
    return request.app.state.session


def get_console(request: Request) -> FloorConsole:
    return request.app.state.console
