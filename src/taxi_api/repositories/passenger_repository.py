"""
Passenger repository: typed lookups on top of the generic CRUD in BaseRepository.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from taxi_api.models.passenger import Passenger
from .base_repository import BaseRepository


class PassengerRepository(BaseRepository[Passenger]):
    """Repository for Passenger entity operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Passenger, db)

    async def get_by_username(self, username: str) -> Passenger | None:
        return await self.find_by_field("username", username)

    async def get_by_email(self, email: str) -> Passenger | None:
        return await self.find_by_field("email", email)

    async def get_by_phone(self, phone: str) -> Passenger | None:
        # phone is not unique; the oldest matching passenger wins
        return await self.find_by_field("phone", phone)
