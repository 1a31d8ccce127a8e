"""Faker-backed request payloads. Values fit the request validation rules."""

import pytest
from faker import Faker


@pytest.fixture
def fake() -> Faker:
    """A Faker per test; `fake.unique` values never repeat within the test."""
    faker = Faker()
    faker.unique.clear()
    return faker


@pytest.fixture
def passenger_payload(fake: Faker):
    """
    Factory for camelCase-ready passenger request bodies.

    Usage:
        body = passenger_payload(email="ana@example.com")
    """
    def _build(**overrides) -> dict:
        data = {
            "name": fake.name(),
            "username": fake.unique.bothify("user_########"),
            "address": fake.street_address(),
            "phone": fake.numerify("###########"),
            "email": fake.unique.email(),
        }
        data.update(overrides)
        return data

    return _build


@pytest.fixture
def driver_payload(fake: Faker):
    """
    Factory for driver request bodies (snake_case keys are accepted too).

    Usage:
        body = driver_payload(vehiclePlate="ABC1234")
    """
    def _build(**overrides) -> dict:
        data = {
            "name": fake.name(),
            "licenseNumber": fake.unique.numerify("#########"),
            "address": fake.street_address(),
            "phone": fake.numerify("###########"),
            "vehiclePlate": fake.unique.bothify("???####").upper(),
        }
        data.update(overrides)
        return data

    return _build
