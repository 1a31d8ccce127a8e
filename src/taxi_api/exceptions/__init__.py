from .base import (
    RepositoryError,
    NotFoundError,
    DuplicateError,
    InvalidFieldError,
    IntegrityViolationError,
)
from .mapper import db_error_handler, map_integrity_error

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "InvalidFieldError",
    "IntegrityViolationError",
    "db_error_handler",
    "map_integrity_error",
]
