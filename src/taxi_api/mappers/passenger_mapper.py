"""
Pure conversions between Passenger wire shapes and the ORM entity. No I/O.
"""
from taxi_api.models.passenger import Passenger
from taxi_api.schemas.passenger import PassengerRequest, PassengerResponse

# Fields a client may set; id and created_at belong to the store
MUTABLE_FIELDS = ("name", "username", "address", "phone", "email")


def to_entity(dto: PassengerRequest) -> Passenger:
    return Passenger(**dto.model_dump(include=set(MUTABLE_FIELDS)))


def to_response(entity: Passenger) -> PassengerResponse:
    return PassengerResponse.model_validate(entity)


def update_entity(entity: Passenger, dto: PassengerRequest) -> Passenger:
    """Overwrite every mutable field of `entity` with the request values."""
    for field, value in dto.model_dump(include=set(MUTABLE_FIELDS)).items():
        setattr(entity, field, value)
    return entity
