"""
Pure conversions between Driver wire shapes and the ORM entity. No I/O.
"""
from taxi_api.models.driver import Driver
from taxi_api.schemas.driver import DriverRequest, DriverResponse

# `available` is not client-writable
MUTABLE_FIELDS = ("name", "license_number", "address", "phone", "vehicle_plate")


def to_entity(dto: DriverRequest) -> Driver:
    """New drivers always start out available."""
    return Driver(**dto.model_dump(include=set(MUTABLE_FIELDS)), available=True)


def to_response(entity: Driver) -> DriverResponse:
    return DriverResponse.model_validate(entity)


def update_entity(entity: Driver, dto: DriverRequest) -> Driver:
    for field, value in dto.model_dump(include=set(MUTABLE_FIELDS)).items():
        setattr(entity, field, value)
    return entity
