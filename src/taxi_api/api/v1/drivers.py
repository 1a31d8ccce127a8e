from fastapi import APIRouter, Depends, Response, status

from taxi_api.core.dependencies import get_driver_service
from taxi_api.exceptions.base import NotFoundError
from taxi_api.schemas.driver import DriverRequest, DriverResponse
from taxi_api.services.driver_service import DriverService

router = APIRouter(prefix="/api/drivers", tags=["drivers"])


def _or_404(driver: DriverResponse | None, field: str, value) -> DriverResponse:
    if driver is None:
        raise NotFoundError(f"Driver with {field} '{value}' not found.", fields=[field])
    return driver


@router.post("", response_model=DriverResponse, status_code=status.HTTP_201_CREATED)
async def create_driver(
    payload: DriverRequest,
    response: Response,
    service: DriverService = Depends(get_driver_service),
):
    driver = await service.create(payload)
    response.headers["Location"] = f"{router.prefix}/{driver.id}"
    return driver


@router.get("", response_model=list[DriverResponse])
async def list_drivers(service: DriverService = Depends(get_driver_service)):
    return await service.list_all()


@router.get("/{driver_id}", response_model=DriverResponse)
async def get_driver(driver_id: int, service: DriverService = Depends(get_driver_service)):
    driver = await service.get_by_id(driver_id)
    if driver is None:
        raise NotFoundError.for_id("Driver", driver_id)
    return driver


@router.put("/{driver_id}", response_model=DriverResponse)
async def update_driver(
    driver_id: int,
    payload: DriverRequest,
    service: DriverService = Depends(get_driver_service),
):
    return await service.update(driver_id, payload)


@router.delete("/{driver_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_driver(driver_id: int, service: DriverService = Depends(get_driver_service)):
    await service.delete(driver_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/by-license/{license_number}", response_model=DriverResponse)
async def get_driver_by_license(license_number: str, service: DriverService = Depends(get_driver_service)):
    return _or_404(await service.get_by_license_number(license_number), "licenseNumber", license_number)


@router.get("/by-plate/{vehicle_plate}", response_model=DriverResponse)
async def get_driver_by_plate(vehicle_plate: str, service: DriverService = Depends(get_driver_service)):
    return _or_404(await service.get_by_vehicle_plate(vehicle_plate), "vehiclePlate", vehicle_plate)
