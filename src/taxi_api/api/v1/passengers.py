from fastapi import APIRouter, Depends, Response, status

from taxi_api.core.dependencies import get_passenger_service
from taxi_api.exceptions.base import NotFoundError
from taxi_api.schemas.passenger import PassengerRequest, PassengerResponse
from taxi_api.services.passenger_service import PassengerService

router = APIRouter(prefix="/api/passengers", tags=["passengers"])


def _or_404(passenger: PassengerResponse | None, field: str, value) -> PassengerResponse:
    if passenger is None:
        raise NotFoundError(f"Passenger with {field} '{value}' not found.", fields=[field])
    return passenger


@router.post("", response_model=PassengerResponse, status_code=status.HTTP_201_CREATED)
async def create_passenger(
    payload: PassengerRequest,
    response: Response,
    service: PassengerService = Depends(get_passenger_service),
):
    passenger = await service.create(payload)
    response.headers["Location"] = f"{router.prefix}/{passenger.id}"
    return passenger


@router.get("", response_model=list[PassengerResponse])
async def list_passengers(service: PassengerService = Depends(get_passenger_service)):
    return await service.list_all()


@router.get("/{passenger_id}", response_model=PassengerResponse)
async def get_passenger(passenger_id: int, service: PassengerService = Depends(get_passenger_service)):
    passenger = await service.get_by_id(passenger_id)
    if passenger is None:
        raise NotFoundError.for_id("Passenger", passenger_id)
    return passenger


@router.put("/{passenger_id}", response_model=PassengerResponse)
async def update_passenger(
    passenger_id: int,
    payload: PassengerRequest,
    service: PassengerService = Depends(get_passenger_service),
):
    return await service.update(passenger_id, payload)


@router.delete("/{passenger_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_passenger(passenger_id: int, service: PassengerService = Depends(get_passenger_service)):
    await service.delete(passenger_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Lookups by unique (or indexed) field ---

@router.get("/by-username/{username}", response_model=PassengerResponse)
async def get_passenger_by_username(username: str, service: PassengerService = Depends(get_passenger_service)):
    return _or_404(await service.get_by_username(username), "username", username)


@router.get("/by-email/{email}", response_model=PassengerResponse)
async def get_passenger_by_email(email: str, service: PassengerService = Depends(get_passenger_service)):
    return _or_404(await service.get_by_email(email), "email", email)


@router.get("/by-phone/{phone}", response_model=PassengerResponse)
async def get_passenger_by_phone(phone: str, service: PassengerService = Depends(get_passenger_service)):
    return _or_404(await service.get_by_phone(phone), "phone", phone)
