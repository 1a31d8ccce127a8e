from sqlalchemy.ext.asyncio import AsyncSession

from taxi_api.mappers import driver_mapper
from taxi_api.models.driver import Driver
from taxi_api.repositories.driver_repository import DriverRepository
from taxi_api.schemas.driver import DriverRequest, DriverResponse
from .base_service import RecordService


class DriverService(RecordService[Driver, DriverRequest, DriverResponse]):
    """Driver CRUD. license_number and vehicle_plate must be unique."""

    repository: DriverRepository

    def __init__(self, db: AsyncSession):
        super().__init__(
            DriverRepository(db),
            to_entity=driver_mapper.to_entity,
            to_response=driver_mapper.to_response,
            update_entity=driver_mapper.update_entity,
        )

    async def get_by_license_number(self, license_number: str) -> DriverResponse | None:
        return self._optional_response(await self.repository.get_by_license_number(license_number))

    async def get_by_vehicle_plate(self, vehicle_plate: str) -> DriverResponse | None:
        return self._optional_response(await self.repository.get_by_vehicle_plate(vehicle_plate))
