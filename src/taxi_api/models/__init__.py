"""
Single import point for the ORM models, so every model is registered on
`Base.metadata` as soon as any of them is imported.

    from taxi_api.models import Passenger, Driver, Ride, RideStatus
"""

from .passenger import Passenger
from .driver import Driver
from .ride import Ride, RideStatus

__all__ = [
    "Passenger",
    "Driver",
    "Ride",
    "RideStatus"
]
