"""
Driver repository: typed lookups on top of the generic CRUD in BaseRepository.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from taxi_api.models.driver import Driver
from .base_repository import BaseRepository


class DriverRepository(BaseRepository[Driver]):
    """Repository for Driver entity operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Driver, db)

    async def get_by_license_number(self, license_number: str) -> Driver | None:
        return await self.find_by_field("license_number", license_number)

    async def get_by_vehicle_plate(self, vehicle_plate: str) -> Driver | None:
        return await self.find_by_field("vehicle_plate", vehicle_plate)
