"""
Repository layer.

    from taxi_api.repositories import PassengerRepository, DriverRepository
"""

from .base_repository import BaseRepository
from .passenger_repository import PassengerRepository
from .driver_repository import DriverRepository

__all__ = [
    "BaseRepository",
    "PassengerRepository",
    "DriverRepository"
]
