from .base_service import RecordService
from .passenger_service import PassengerService
from .driver_service import DriverService

__all__ = [
    "RecordService",
    "PassengerService",
    "DriverService"
]
