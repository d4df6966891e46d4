"""HostDesk - front-of-house floor console for restaurant staff"""

__version__ = "1.0.0"
