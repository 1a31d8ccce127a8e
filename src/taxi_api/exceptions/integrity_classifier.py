"""
Classify a SQLAlchemy IntegrityError into the constraint kind that was violated.

The result is an internal label only. Callers turn it into an app-level
`IntegrityViolationError` (see mapper.py); clients never see these classes.

PostgreSQL exposes a SQLSTATE (`pgcode` on psycopg2, `sqlstate` on psycopg 3) and
the violated constraint name in `diag`; other backends (SQLite in tests) only give
us the message text, so we fall back to keyword matching.
"""
import logging
from enum import Enum
from typing import Type
from sqlalchemy.exc import IntegrityError
from .base import RepositoryError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Constraint-specific exceptions (internal labels)
# =================================================================================================================


class ConstraintViolationError(RepositoryError):
    """Base for integrity/constraint violations."""
    pass


class UniqueConstraintError(ConstraintViolationError):
    pass


class NotNullConstraintError(ConstraintViolationError):
    pass


class ForeignKeyConstraintError(ConstraintViolationError):
    pass


class CheckConstraintError(ConstraintViolationError):
    pass


class UnknownIntegrityError(ConstraintViolationError):
    pass


# =================================================================================================================
# Postgres error code mapping
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_EXCEPTION_MAP: dict[str, Type[ConstraintViolationError]] = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: NotNullConstraintError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ForeignKeyConstraintError,
    PostgresErrorCodes.CHECK_VIOLATION.value: CheckConstraintError,
}

# Message keywords, checked in order (first match wins)
MESSAGE_KEYWORDS: tuple[tuple[Type[ConstraintViolationError], tuple[str, ...]], ...] = (
    (UniqueConstraintError, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (NotNullConstraintError, ("not null constraint", "not null", "null value in column")),
    (ForeignKeyConstraintError, ("foreign key constraint", "foreign key", "is not present in table")),
    (CheckConstraintError, ("check constraint", "check failed")),
)


# =================================================================================================================
# Classifiers
# =================================================================================================================

def _sqlstate_of(orig) -> str | None:
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _classify_from_sqlstate(orig) -> tuple[Type[ConstraintViolationError] | None, str | None]:
    sqlstate = _sqlstate_of(orig)
    if not sqlstate:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None

    exception_class = PGCODE_EXCEPTION_MAP.get(str(sqlstate))
    if exception_class:
        logger.debug("Postgres integrity diagnostic",
                     extra={"sqlstate": sqlstate, "constraint_name": constraint_name})
        return exception_class, constraint_name

    logger.warning(
        "Unknown Postgres integrity error code encountered",
        extra={"sqlstate": sqlstate, "constraint_name": constraint_name},
    )
    return UnknownIntegrityError, constraint_name


def _classify_from_message(msg: str) -> Type[ConstraintViolationError]:
    normalized = (msg or "").lower()
    for exception_class, keywords in MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return exception_class

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": normalized[:200]})
    return UnknownIntegrityError


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Return (ConstraintViolationError subclass, constraint name if the driver reported one).
    """
    orig = exc.orig

    exception_class, constraint_name = _classify_from_sqlstate(orig)
    if exception_class is not None:
        return exception_class, constraint_name

    return _classify_from_message(str(orig) if orig is not None else str(exc)), None
