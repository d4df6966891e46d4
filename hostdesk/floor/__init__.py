"""Floor plan: geometry, occupancy, the seat wizard and allocation commands"""

from hostdesk.floor.commands import AllocationCommands
from hostdesk.floor.occupancy import OccupancyIndex, occupant_for
from hostdesk.floor.view import FloorConsole
from hostdesk.floor.wizard import SeatWizard

__all__ = ["AllocationCommands", "OccupancyIndex", "occupant_for", "FloorConsole", "SeatWizard"]
