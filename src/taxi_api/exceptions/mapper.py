import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    ForeignKeyConstraintError,
)
from .base import IntegrityViolationError, RepositoryError

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_postgres(msg: str) -> list[str] | None:
    """
    Pull column names out of Postgres messages such as:
      - 'DETAIL:  Key (email)=(a@b.com) already exists.'
      - 'null value in column "username" violates not-null constraint'
    """
    if not msg:
        return None

    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # 'UNIQUE constraint failed: passengers.email' / 'NOT NULL constraint failed: drivers.name'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', msg or "", flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]
    return None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the DB message (Postgres, SQLite).
    """
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)
    return _extract_columns_postgres(msg) or _extract_columns_sqlite(msg)


# -----------------------
# Mapper
# -----------------------

_GENERIC_MESSAGES = {
    UniqueConstraintError: "{model} conflicts with an existing record.",
    ForeignKeyConstraintError: "{model} is still referenced by other records.",
}


def map_integrity_error(exc: IntegrityError, model_name: str | None = None) -> IntegrityViolationError:
    """
    Translate a SQLAlchemy IntegrityError into an IntegrityViolationError.

    The returned message is generic; the raw DB text only ever goes to DEBUG logs.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"

    logger.info(
        "mapper.integrity_violation",
        extra={
            "model": model_part,
            "kind": exc_cls.__name__,
            "fields": columns,
            "constraint": constraint_name,
        },
    )
    logger.debug("mapper.integrity_raw", extra={"model": model_part, "raw": str(exc.orig)})

    template = _GENERIC_MESSAGES.get(exc_cls, "{model} violates a data integrity rule.")
    return IntegrityViolationError(
        template.format(model=model_part),
        fields=columns if exc_cls is UniqueConstraintError else None,
        constraint=constraint_name,
    )


# -----------------------
# Async context manager for write paths
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ... flush / commit ...
    Rolls back on error and raises an app-level exception instead.
    """
    try:
        yield
    except IntegrityError as exc:
        try:
            await db.rollback()
        except Exception:
            logger.exception("Failed to rollback session after IntegrityError", extra={"model": model_name})
        raise map_integrity_error(exc, model_name) from exc
    except RepositoryError:
        await db.rollback()
        raise
    except Exception as exc:
        try:
            await db.rollback()
        except Exception:
            logger.exception("Failed to rollback session after unexpected error", extra={"model": model_name})

        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc
