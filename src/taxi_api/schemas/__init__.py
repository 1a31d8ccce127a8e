from .passenger import PassengerRequest, PassengerResponse
from .driver import DriverRequest, DriverResponse

__all__ = [
    "PassengerRequest",
    "PassengerResponse",
    "DriverRequest",
    "DriverResponse"
]
