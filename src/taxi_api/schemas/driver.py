from pydantic import Field

from .base import APIModel


class DriverRequest(APIModel):
    """
    Body of POST/PUT /api/drivers.

    `available` is not part of the request: a client-sent value is dropped, the
    service sets it on create and leaves it alone on update.
    """
    name: str = Field(..., min_length=3, max_length=100)
    license_number: str = Field(..., min_length=1, max_length=9)
    address: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=11)
    vehicle_plate: str = Field(..., min_length=7, max_length=7)


class DriverResponse(APIModel):
    id: int
    name: str
    license_number: str
    address: str
    phone: str
    vehicle_plate: str
    available: bool
