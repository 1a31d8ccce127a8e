"""
Generic record service: the CRUD workflow shared by passengers and drivers.

Each write goes validate -> map -> persist -> commit -> map back. Repositories only
flush; the service owns the transaction and commits once per operation.
"""
import logging
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel

from taxi_api.exceptions.base import NotFoundError
from taxi_api.exceptions.mapper import db_error_handler
from taxi_api.repositories.base_repository import BaseRepository, ModelType
from taxi_api.validators.uniqueness import UniquenessValidator

RequestType = TypeVar("RequestType", bound=BaseModel)
ResponseType = TypeVar("ResponseType", bound=BaseModel)

logger = logging.getLogger(__name__)


class RecordService(Generic[ModelType, RequestType, ResponseType]):
    """
    Args:
        repository: repository bound to the request's session
        to_entity: builds a new (transient) entity from a request
        to_response: builds the response shape from a persisted entity
        update_entity: overwrites the mutable fields of an entity from a request
        validator: uniqueness validator; defaults to one over the model's unique columns
    """

    def __init__(
        self,
        repository: BaseRepository[ModelType],
        *,
        to_entity: Callable[[RequestType], ModelType],
        to_response: Callable[[ModelType], ResponseType],
        update_entity: Callable[[ModelType, RequestType], ModelType],
        validator: UniquenessValidator | None = None,
    ):
        self.repository = repository
        self.db = repository.db
        self.to_entity = to_entity
        self.to_response = to_response
        self.update_entity = update_entity
        self.validator = validator or UniquenessValidator(repository)

    @property
    def model_name(self) -> str:
        return self.repository.model_name

    async def _commit(self) -> None:
        async with db_error_handler(self.db, self.model_name):
            await self.db.commit()

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, dto: RequestType) -> ResponseType:
        """
        Raises:
            DuplicateError: if a unique field value is already taken.
            IntegrityViolationError: if the store rejects the insert (e.g. a concurrent duplicate).
        """
        await self.validator.check_unique_on_create(dto.model_dump())

        entity = await self.repository.save(self.to_entity(dto))
        await self._commit()
        await self.db.refresh(entity)

        logger.info("service.create.success", extra={"model": self.model_name, "id": entity.id})
        return self.to_response(entity)

    # =================================================================================================================
    # Read
    # =================================================================================================================

    def _optional_response(self, entity: ModelType | None) -> ResponseType | None:
        return self.to_response(entity) if entity is not None else None

    async def get_by_id(self, entity_id: int) -> ResponseType | None:
        return self._optional_response(await self.repository.get_by_id(entity_id))

    async def get_by_field(self, field: str, value: Any) -> ResponseType | None:
        """
        Raises:
            InvalidFieldError: if `field` is not a column of the model.
        """
        return self._optional_response(await self.repository.find_by_field(field, value))

    async def list_all(self) -> list[ResponseType]:
        return [self.to_response(entity) for entity in await self.repository.get_all()]

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, entity_id: int, dto: RequestType) -> ResponseType:
        """
        Replace every mutable field of the record. id, created_at and server-managed
        flags are left as they are.

        Raises:
            NotFoundError: if no record has `entity_id`.
            DuplicateError: if a unique value belongs to another record.
        """
        entity = await self.repository.get_by_id(entity_id)
        if entity is None:
            logger.info("service.update.not_found", extra={"model": self.model_name, "id": entity_id})
            raise NotFoundError.for_id(self.model_name, entity_id)

        await self.validator.check_unique_on_update(entity_id, dto.model_dump())

        entity = await self.repository.save(self.update_entity(entity, dto))
        await self._commit()
        await self.db.refresh(entity)

        logger.info("service.update.success", extra={"model": self.model_name, "id": entity_id})
        return self.to_response(entity)

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete(self, entity_id: int) -> None:
        """
        Raises:
            NotFoundError: if no record has `entity_id`.
            IntegrityViolationError: if other records (rides) still reference it.
        """
        if not await self.repository.exists(entity_id):
            logger.info("service.delete.not_found", extra={"model": self.model_name, "id": entity_id})
            raise NotFoundError.for_id(self.model_name, entity_id)

        await self.repository.delete(entity_id)
        await self._commit()

        logger.info("service.delete.success", extra={"model": self.model_name, "id": entity_id})
