"""Console error hierarchy"""

from typing import Optional


class HostDeskError(Exception):
    """Base class for console errors"""
    pass


class SelectionError(HostDeskError):
    """
    A request was rejected locally before any call to the restaurant API.
    Covers wrong seat counts, seats that are not free, a missing occupant,
    wizard transitions that are not valid from the current state, and
    command preconditions.
    """
    pass


class CommandInProgressError(SelectionError):
    """Another command is still waiting for the restaurant API"""
    pass


class ApiError(HostDeskError):
    """The restaurant API could not be reached or rejected the request"""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class ResponseFormatError(HostDeskError):
    """The restaurant API answered with a payload we cannot parse"""
    pass
