"""
Base repository class providing common database operations.

Model-specific repositories inherit from `BaseRepository` to reuse the generic
CRUD logic and add their own typed lookups on top.

Repositories never commit: they flush so ids and server defaults are available,
and leave transaction boundaries to the service layer.
"""
import time
import logging
from typing import TypeVar, Generic, Type, Any

from sqlalchemy import select, delete, func
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taxi_api.database.base import Base
from taxi_api.exceptions.base import RepositoryError, InvalidFieldError
from taxi_api.exceptions.mapper import db_error_handler

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)

# Integer primary keys are signed 64-bit in every supported store
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def get_column_names(model) -> list[str]:
    """Mapped column attribute names of a model, in declaration order (relationships excluded)."""
    return [attr.key for attr in sa_inspect(model).column_attrs]


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """
    Return the kwarg keys that are not mapped columns of the model.
    - model: the SQLAlchemy model class (not instance)
    """
    allowed = set(get_column_names(model))
    return [k for k in kwargs if k not in allowed]


def is_storable_id(entity_id: int) -> bool:
    """False for ids outside the key range; no row can hold them."""
    return MIN_ID <= entity_id <= MAX_ID


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (e.g. Passenger, not Passenger())
            db: The async database session, one per request
        """
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Create / Save Operations
    # =================================================================================================================

    async def create(self, **kwargs) -> ModelType:
        """
        Insert a new entity built from `kwargs` and flush it.

        Raises:
            InvalidFieldError: If a key is not a column of the model.
            IntegrityViolationError: If the store rejects the row.
        """
        logger.debug(
            "repo.create.start",
            extra={"model": self.model_name, "operation": "create", "provided_keys": sorted(kwargs)},
        )

        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            logger.info(
                "repo.create.invalid_fields",
                extra={"model": self.model_name, "operation": "create", "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown)

        return await self.save(self.model(**kwargs))

    async def save(self, entity: ModelType) -> ModelType:
        """
        Add (or re-add) an entity to the session, flush, and reload server-generated fields.
        Used for both inserts and updates of already-loaded entities.
        """
        start = time.perf_counter()

        async with db_error_handler(self.db, self.model_name):
            self.db.add(entity)
            await self.db.flush()
            await self.db.refresh(entity)

        logger.info(
            "repo.save.success",
            extra={
                "model": self.model_name,
                "operation": "save",
                "id": getattr(entity, "id", None),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """
        Get an entity by its ID, or None when absent.

        Raises:
            RepositoryError: If the query fails.
        """
        if not is_storable_id(entity_id):
            logger.debug(f"{self.model_name} ID {entity_id} is out of range")
            return None

        try:
            result = await self.db.execute(select(self.model).where(self.model.id == entity_id))
            entity = result.scalar_one_or_none()
            logger.debug(f"Retrieved {self.model_name} by ID: {entity_id}")
            return entity
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_name} by ID {entity_id}: {e}")
            raise RepositoryError(f"Failed to retrieve {self.model_name}") from e

    async def find_by_field(self, field: str, value: Any) -> ModelType | None:
        """
        Find a single entity by any column. Meant for unique columns: if several
        rows match, the one with the lowest id is returned.

        Raises:
            InvalidFieldError: If the field is not a column of the model.
            RepositoryError: If the query fails.
        """
        if field not in get_column_names(self.model):
            raise InvalidFieldError(f"{self.model_name} has no field '{field}'", fields=[field])

        try:
            query = (
                select(self.model)
                .where(getattr(self.model, field) == value)
                .order_by(self.model.id)
                .limit(1)
            )
            result = await self.db.execute(query)
            entity = result.scalars().first()
            # value is left out: lookups run on PII such as email and phone
            logger.debug(f"Looked up {self.model_name} by {field}", extra={"found": entity is not None})
            return entity
        except SQLAlchemyError as e:
            logger.error(f"Error finding {self.model_name} by {field}: {e}")
            raise RepositoryError(f"Failed to find {self.model_name}") from e

    async def get_all(
        self,
        offset: int = 0,
        limit: int | None = None,
        order_by: str | None = None
    ) -> list[ModelType]:
        """
        Get all entities, ordered by `order_by` when it names a column, otherwise by id.

        Args:
            offset: Number of entities to skip.
            limit: Maximum number of entities to return; None means no limit.
            order_by: Column name to order by (ascending).
        """
        try:
            query = select(self.model)

            if order_by and order_by in get_column_names(self.model):
                query = query.order_by(getattr(self.model, order_by))
            else:
                if order_by:
                    logger.warning(
                        f"Ignored invalid 'order_by' field: '{order_by}' does not exist on {self.model_name}")
                query = query.order_by(self.model.id)

            query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)

            result = await self.db.execute(query)
            entities = list(result.scalars().all())
            logger.debug(f"Retrieved {len(entities)} {self.model_name} entities")
            return entities

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving all {self.model_name}: {e}")
            raise RepositoryError(f"Failed to retrieve {self.model_name} entities") from e

    # =================================================================================================================
    # Delete Operations
    # =================================================================================================================

    async def delete(self, entity_id: int) -> bool:
        """
        Delete an entity by its ID and flush.

        Returns:
            True if a row was deleted, False if none matched.

        Raises:
            IntegrityViolationError: If other rows still reference the entity.
        """
        if not is_storable_id(entity_id):
            logger.warning(f"{self.model_name} ID {entity_id} is out of range for deletion")
            return False

        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(delete(self.model).where(self.model.id == entity_id))
            await self.db.flush()

        if result.rowcount > 0:
            logger.debug(f"Deleted {self.model_name} with ID: {entity_id}")
            return True

        logger.warning(f"{self.model_name} with ID {entity_id} not found for deletion")
        return False

    # =================================================================================================================
    # Existence / Count
    # =================================================================================================================

    async def exists(self, entity_id: int) -> bool:
        """Check if an entity exists by its ID (selects the id column only)."""
        if not is_storable_id(entity_id):
            return False

        try:
            result = await self.db.execute(select(self.model.id).where(self.model.id == entity_id))
            exists = result.scalar() is not None
            logger.debug(f"{self.model_name} with ID {entity_id} exists: {exists}")
            return exists
        except SQLAlchemyError as e:
            logger.error(f"Error checking existence of {self.model_name} {entity_id}: {e}")
            raise RepositoryError(f"Failed to check {self.model_name} existence") from e

    async def count(self, **filters: Any) -> int:
        """
        Count entities matching equality filters. Unknown fields and None values are skipped.
        """
        try:
            query = select(func.count(self.model.id))
            columns = get_column_names(self.model)
            for field, value in filters.items():
                if field in columns and value is not None:
                    query = query.where(getattr(self.model, field) == value)

            result = await self.db.execute(query)
            return result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model_name}: {e}")
            raise RepositoryError(f"Failed to count {self.model_name} entities") from e
