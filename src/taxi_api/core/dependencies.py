from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taxi_api.database.session import get_async_session
from taxi_api.services.driver_service import DriverService
from taxi_api.services.passenger_service import PassengerService


# One service per request, bound to the request's session

async def get_passenger_service(db: AsyncSession = Depends(get_async_session)) -> PassengerService:
    return PassengerService(db)


async def get_driver_service(db: AsyncSession = Depends(get_async_session)) -> DriverService:
    return DriverService(db)
