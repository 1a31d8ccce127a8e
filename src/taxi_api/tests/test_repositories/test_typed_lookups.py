import pytest

from taxi_api.models import Driver, Passenger


@pytest.mark.asyncio
class TestPassengerRepositoryLookups:
    """
    Typed lookups of PassengerRepository.

    Fixtures used:
      - passenger_repository: PassengerRepository bound to the per-test session.
      - passenger_payload: Faker-backed field values.

    Rationale:
      - username and email identify at most one passenger.
      - phone is shared between passengers; the oldest one is returned.
    """

    async def _create(self, passenger_repository, payload: dict) -> Passenger:
        return await passenger_repository.create(
            name=payload["name"],
            username=payload["username"],
            address=payload["address"],
            phone=payload["phone"],
            email=payload["email"],
        )

    async def test_get_by_username_and_email(self, passenger_repository, passenger_payload):
        """
        Behavior:
          - Store one passenger, look it up by username and by email.
        Importance:
          - These back the by-username and by-email routes.
        """
        passenger = await self._create(passenger_repository, passenger_payload())

        assert (await passenger_repository.get_by_username(passenger.username)).id == passenger.id
        assert (await passenger_repository.get_by_email(passenger.email)).id == passenger.id
        assert await passenger_repository.get_by_username("ghost_user") is None

    async def test_get_by_phone_returns_oldest(self, passenger_repository, passenger_payload):
        first = await self._create(passenger_repository, passenger_payload(phone="11988887777"))
        await self._create(passenger_repository, passenger_payload(phone="11988887777"))

        found = await passenger_repository.get_by_phone("11988887777")

        assert found.id == first.id


@pytest.mark.asyncio
class TestDriverRepositoryLookups:
    """
    Typed lookups of DriverRepository.

    Fixtures used:
      - driver_repository: DriverRepository bound to the per-test session.

    Rationale:
      - license_number and vehicle_plate are unique, so each lookup yields one driver or None.
    """

    async def test_get_by_license_number_and_plate(self, driver_repository):
        driver = await driver_repository.create(
            name="Carlos Lima",
            license_number="123456789",
            address="Rua A, 10",
            phone="11911112222",
            vehicle_plate="ABC1D23",
            available=True,
        )

        assert isinstance(await driver_repository.get_by_license_number("123456789"), Driver)
        assert (await driver_repository.get_by_vehicle_plate("ABC1D23")).id == driver.id
        assert await driver_repository.get_by_vehicle_plate("ZZZ9999") is None
