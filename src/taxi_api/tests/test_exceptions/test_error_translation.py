from datetime import datetime, timezone

import pytest
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taxi_api.api.v1.error_handlers import (
    INTERNAL_ERROR_MESSAGE,
    build_error_body,
    translate_exception,
)
from taxi_api.exceptions.base import (
    DuplicateError,
    IntegrityViolationError,
    InvalidFieldError,
    NotFoundError,
    RepositoryError,
)


class TestTranslateException:

    @pytest.mark.parametrize(
        "exc, expected_status",
        [
            (NotFoundError.for_id("Passenger", 7), 404),
            (DuplicateError.for_conflicts("Driver", {"license_number": "123"}), 409),
            (InvalidFieldError("Passenger has no field 'x'", fields=["x"]), 400),
            (IntegrityViolationError(), 409),
            (RepositoryError("Failed to operate on Passenger"), 500),
            (ValueError("boom"), 500),
        ],
    )
    def test_status_mapping(self, exc, expected_status):
        status, _, validation_errors = translate_exception(exc)

        assert status == expected_status
        assert validation_errors is None

    def test_client_errors_keep_their_message(self):
        status, message, _ = translate_exception(NotFoundError.for_id("Passenger", 7))

        assert status == 404
        assert message == "Passenger with ID 7 not found."

    def test_server_errors_get_a_generic_message(self):
        for exc in (RepositoryError("db host 10.0.0.5 unreachable"), RuntimeError("token=abc")):
            status, message, _ = translate_exception(exc)
            assert status == 500
            assert message == INTERNAL_ERROR_MESSAGE

    def test_raw_integrity_error_maps_to_conflict(self):
        raw = IntegrityError("INSERT ...", {}, Exception("duplicate key value violates unique constraint"))

        status, message, _ = translate_exception(raw)

        assert status == 409
        assert "duplicate key" not in message

    def test_request_validation_error_lists_fields_by_wire_name(self):
        exc = RequestValidationError([
            {"loc": ("body", "licenseNumber"), "msg": "String should have at most 9 characters", "type": "string_too_long"},
            {"loc": ("body", "vehiclePlate"), "msg": "String should have at least 7 characters", "type": "string_too_short"},
            {"loc": ("body", "vehiclePlate"), "msg": "second problem", "type": "value_error"},
        ])

        status, _, validation_errors = translate_exception(exc)

        assert status == 400
        assert validation_errors == {
            "licenseNumber": "String should have at most 9 characters",
            "vehiclePlate": "String should have at least 7 characters; second problem",
        }

    def test_framework_http_exception_keeps_status(self):
        status, message, _ = translate_exception(StarletteHTTPException(status_code=404, detail="Not Found"))

        assert (status, message) == (404, "Not Found")


class TestBuildErrorBody:

    def test_body_fields(self):
        body = build_error_body(409, "Passenger with email 'a@x.com' already exists.")

        assert body["status"] == 409
        assert body["error"] == "Conflict"
        assert body["message"] == "Passenger with email 'a@x.com' already exists."
        assert "validationErrors" not in body
        ts = datetime.fromisoformat(body["timestamp"])
        assert ts.tzinfo is not None and ts.utcoffset() == timezone.utc.utcoffset(None)

    def test_validation_errors_included_when_present(self):
        body = build_error_body(400, "Request validation failed.", {"name": "Field required"})

        assert body["validationErrors"] == {"name": "Field required"}


class TestRepositoryErrorPayload:

    def test_payload_never_carries_constraint(self):
        err = DuplicateError("Passenger already exists", fields=["email"], constraint="uq_passengers_email")

        assert err.to_payload() == {"message": "Passenger already exists", "code": "duplicate", "fields": ["email"]}
        assert "uq_passengers_email" in str(err)

    def test_duplicate_message_leads_with_first_field(self):
        err = DuplicateError.for_conflicts("Passenger", {"username": "ana", "email": "ana@x.com"})

        assert err.message == "Passenger with username 'ana', email 'ana@x.com' already exists."
        assert err.fields == ["username", "email"]
        assert err.values == {"username": "ana", "email": "ana@x.com"}
