from sqlalchemy.ext.asyncio import AsyncSession

from taxi_api.mappers import passenger_mapper
from taxi_api.models.passenger import Passenger
from taxi_api.repositories.passenger_repository import PassengerRepository
from taxi_api.schemas.passenger import PassengerRequest, PassengerResponse
from .base_service import RecordService


class PassengerService(RecordService[Passenger, PassengerRequest, PassengerResponse]):
    """Passenger CRUD. username and email must be unique; phone is not checked."""

    repository: PassengerRepository

    def __init__(self, db: AsyncSession):
        super().__init__(
            PassengerRepository(db),
            to_entity=passenger_mapper.to_entity,
            to_response=passenger_mapper.to_response,
            update_entity=passenger_mapper.update_entity,
        )

    async def get_by_username(self, username: str) -> PassengerResponse | None:
        return self._optional_response(await self.repository.get_by_username(username))

    async def get_by_email(self, email: str) -> PassengerResponse | None:
        return self._optional_response(await self.repository.get_by_email(email))

    async def get_by_phone(self, phone: str) -> PassengerResponse | None:
        return self._optional_response(await self.repository.get_by_phone(phone))
