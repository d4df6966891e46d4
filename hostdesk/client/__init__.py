"""Restaurant API client"""

from hostdesk.client.api import RestaurantApiClient

__all__ = ["RestaurantApiClient"]
