import pytest

from taxi_api.exceptions.base import DuplicateError
from taxi_api.models import Driver, Passenger
from taxi_api.schemas.passenger import PassengerRequest
from taxi_api.validators.uniqueness import UniquenessValidator, get_unique_columns


class TestUniqueColumns:
    """
    Which columns the validator treats as unique by default.

    Rationale:
      - The unique set is read from the model's unique=True columns, in column order.
      - Column order decides which field a duplicate message names first.
    """

    def test_passenger_unique_columns_in_column_order(self):
        """username and email are unique; phone is only indexed."""
        assert get_unique_columns(Passenger) == ("username", "email")

    def test_driver_unique_columns_in_column_order(self):
        assert get_unique_columns(Driver) == ("license_number", "vehicle_plate")

    async def test_explicit_fields_override_model_defaults(self, passenger_repository):
        validator = UniquenessValidator(passenger_repository, unique_fields=("email",))
        assert validator.unique_fields == ("email",)


@pytest.mark.asyncio
class TestCheckUniqueOnCreate:
    """
    Conflict checks before an insert.

    Fixtures used:
      - passenger_repository / driver_repository: repositories bound to the per-test session.
      - created_passenger / created_driver: one persisted record to collide with.
      - passenger_payload: Faker-backed request body factory.

    Rationale:
      - Any stored record holding a unique value is a conflict.
      - DuplicateError names every colliding field and its value.
    """

    async def test_no_conflict_on_empty_store(self, passenger_repository, passenger_payload):
        validator = UniquenessValidator(passenger_repository)

        # Act / Assert: nothing stored yet, so nothing can collide
        await validator.check_unique_on_create(passenger_payload())

    async def test_duplicate_email_names_the_field(self, passenger_repository, created_passenger, passenger_payload):
        """
        Behavior:
            - A new payload reuses an existing passenger's email.
        Importance:
            - The first collision must be reported by name so the client knows what to change.
        """
        validator = UniquenessValidator(passenger_repository)

        with pytest.raises(DuplicateError) as exc_info:
            await validator.check_unique_on_create(passenger_payload(email=created_passenger.email))

        err = exc_info.value
        assert err.fields == ["email"]
        assert err.values == {"email": created_passenger.email}
        assert "email" in err.message
        assert err.message.startswith("Passenger with email")
        assert err.http_status() == 409

    async def test_every_colliding_field_is_reported(self, passenger_repository, created_passenger, passenger_payload):
        validator = UniquenessValidator(passenger_repository)
        payload = passenger_payload(username=created_passenger.username, email=created_passenger.email)

        with pytest.raises(DuplicateError) as exc_info:
            await validator.check_unique_on_create(payload)

        # column order decides which field leads
        assert exc_info.value.fields == ["username", "email"]
        assert exc_info.value.message.startswith("Passenger with username")

    async def test_shared_phone_is_not_a_conflict(self, passenger_repository, created_passenger, passenger_payload):
        validator = UniquenessValidator(passenger_repository)

        await validator.check_unique_on_create(passenger_payload(phone=created_passenger.phone))

    async def test_driver_plate_collision(self, driver_repository, created_driver, driver_payload):
        validator = UniquenessValidator(driver_repository)
        fields = {
            "license_number": "999999999",
            "vehicle_plate": created_driver.vehicle_plate,
        }

        with pytest.raises(DuplicateError) as exc_info:
            await validator.check_unique_on_create(fields)

        assert exc_info.value.fields == ["vehicle_plate"]
        assert exc_info.value.message.startswith("Driver with vehicle_plate")


@pytest.mark.asyncio
class TestCheckUniqueOnUpdate:
    """
    Conflict checks before an update.

    Fixtures used:
      - passenger_repository, passenger_service, passenger_payload, created_passenger

    Rationale:
      - A record may keep its own unique values.
      - A value held by a different record is a conflict.
    """

    async def test_record_may_keep_its_own_values(self, passenger_repository, created_passenger):
        """
        Behavior:
          - Check a record's own username and email against itself.
        Importance:
          - Without exclude_id every unchanged PUT would be a false duplicate.
        """
        validator = UniquenessValidator(passenger_repository)
        own_values = {"username": created_passenger.username, "email": created_passenger.email}

        await validator.check_unique_on_update(created_passenger.id, own_values)

    async def test_value_of_another_record_conflicts(self, passenger_repository, passenger_service, passenger_payload, created_passenger):
        other = await passenger_service.create(PassengerRequest(**passenger_payload()))
        validator = UniquenessValidator(passenger_repository)

        with pytest.raises(DuplicateError) as exc_info:
            await validator.check_unique_on_update(created_passenger.id, {"email": other.email})

        assert exc_info.value.fields == ["email"]


@pytest.mark.asyncio
class TestFindConflicts:
    """
    The non-raising conflict lookup the checks are built on.

    Fixtures used:
      - passenger_repository, created_passenger

    Rationale:
      - Returns {field: value}; exclude_id, absent fields and None values never conflict.
    """

    async def test_returns_mapping_without_raising(self, passenger_repository, created_passenger):
        validator = UniquenessValidator(passenger_repository)

        conflicts = await validator.find_conflicts({"email": created_passenger.email, "username": "someone_else"})

        assert conflicts == {"email": created_passenger.email}

    async def test_excluded_id_is_ignored(self, passenger_repository, created_passenger):
        validator = UniquenessValidator(passenger_repository)

        conflicts = await validator.find_conflicts(
            {"email": created_passenger.email}, exclude_id=created_passenger.id
        )

        assert conflicts == {}

    async def test_absent_and_none_fields_are_skipped(self, passenger_repository, created_passenger):
        validator = UniquenessValidator(passenger_repository)

        assert await validator.find_conflicts({"username": None, "name": created_passenger.name}) == {}
