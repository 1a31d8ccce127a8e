"""
Application-level exceptions raised by repositories, validators and services.

Every exception carries a canonical `error_code` that decides its HTTP status, so
the API layer never has to inspect messages to choose a response.
"""

from typing import Any, Iterable, Mapping


class RepositoryError(Exception):
    """
    Base exception for repository/service errors.

    - message: human-friendly message (safe to show to clients when the status is < 500)
    - fields: optional list of field names related to the error (e.g., ['email'])
    - constraint: optional DB constraint name (for logs only, never sent to clients)
    - error_code: canonical short code (e.g., 'duplicate', 'not_found')

    A RepositoryError without an error_code means the store failed in a way we did
    not anticipate; it maps to 500.
    """

    ERROR_CODE_TO_STATUS = {
        "not_found": 404,
        "duplicate": 409,
        "integrity": 409,
        "invalid_field": 400,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Structured, client-safe view of the error:
            {"message": "...", "code": "duplicate", "fields": ["email"]}
        The constraint name is deliberately left out.
        """
        payload: dict[str, Any] = {"message": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)
        return 500


class NotFoundError(RepositoryError):
    """The referenced id does not exist."""

    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")

    @classmethod
    def for_id(cls, model_name: str, entity_id: Any) -> "NotFoundError":
        return cls(f"{model_name} with ID {entity_id} not found.")


class DuplicateError(RepositoryError):
    """A must-be-unique field already belongs to a different record."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 values: Mapping[str, Any] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="duplicate")
        self.values = dict(values) if values else {}

    @classmethod
    def for_conflicts(cls, model_name: str, conflicts: Mapping[str, Any]) -> "DuplicateError":
        """
        Build the error from an ordered {field: value} mapping of collisions.
        The first colliding field always leads the message.
        """
        described = ", ".join(f"{field} '{value}'" for field, value in conflicts.items())
        return cls(
            f"{model_name} with {described} already exists.",
            fields=list(conflicts),
            values=conflicts,
        )


class InvalidFieldError(RepositoryError):
    """Raised when a caller references a field the model does not have."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


class IntegrityViolationError(RepositoryError):
    """
    The store rejected a write that passed the application-level checks
    (a unique-index race or a foreign key still referencing the row).
    """

    def __init__(self, message: str = "The operation conflicts with existing data.", *,
                 fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="integrity")


__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "InvalidFieldError",
    "IntegrityViolationError",
]
