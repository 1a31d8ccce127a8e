"""
Check-then-act uniqueness checks run by the services before every write.

The store's unique indexes remain the backstop for the race between the
check and the insert (see exceptions.mapper.db_error_handler).
"""
import logging
from typing import Any, Iterable, Mapping

from taxi_api.exceptions.base import DuplicateError
from taxi_api.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)


def get_unique_columns(model) -> tuple[str, ...]:
    """
    Names of the single-column `unique=True` columns of a model, in column order.
    """
    return tuple(col.key for col in model.__table__.columns if col.unique)


class UniquenessValidator:
    """
    Read-only validator bound to one repository.

    Args:
        repository: repository of the entity being written
        unique_fields: field names to check; defaults to the model's unique columns
    """

    def __init__(self, repository: BaseRepository, unique_fields: Iterable[str] | None = None):
        self.repository = repository
        self.unique_fields = (
            tuple(unique_fields) if unique_fields is not None else get_unique_columns(repository.model)
        )

    @property
    def model_name(self) -> str:
        return self.repository.model.__name__

    async def find_conflicts(self, fields: Mapping[str, Any], exclude_id: int | None = None) -> dict[str, Any]:
        """
        Return {field: value} for every unique field whose value is already held
        by a record other than `exclude_id`. Order follows `unique_fields`.
        """
        conflicts: dict[str, Any] = {}
        for field in self.unique_fields:
            if field not in fields or fields[field] is None:
                continue
            existing = await self.repository.find_by_field(field, fields[field])
            if existing is not None and existing.id != exclude_id:
                conflicts[field] = fields[field]
        return conflicts

    async def check_unique_on_create(self, fields: Mapping[str, Any]) -> None:
        """
        Raises:
            DuplicateError: if any unique field value already exists.
        """
        conflicts = await self.find_conflicts(fields)
        if conflicts:
            self._raise(conflicts, operation="create")

    async def check_unique_on_update(self, target_id: int, fields: Mapping[str, Any]) -> None:
        """
        Like check_unique_on_create, but the record being updated may keep its own values.

        Raises:
            DuplicateError: if a unique field value belongs to a different record.
        """
        conflicts = await self.find_conflicts(fields, exclude_id=target_id)
        if conflicts:
            self._raise(conflicts, operation="update")

    def _raise(self, conflicts: dict[str, Any], operation: str) -> None:
        logger.info(
            f"service.{operation}.duplicate",
            extra={"model": self.model_name, "operation": operation, "conflict_fields": list(conflicts)},
        )
        raise DuplicateError.for_conflicts(self.model_name, conflicts)
