"""
Base repository providing the store operations shared by all models.

Repositories run inside a session scope opened by the caller (see
database/transaction.py). They flush but never commit or roll back: the scope
owns the transaction boundary, and it also maps SQLAlchemy errors to
app-level exceptions, so the methods here let those errors propagate.
"""
from fruit_api.exceptions.base import ValidationError, DuplicateError
from fruit_api.validators.model_validators import (
    get_required_columns,
    find_unique_conflicts,
)

import time
from typing import TypeVar, Generic, Type, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
import logging

from fruit_api.database.base import Base

ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository for a model class with an `id` primary key.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: the model class itself (not an instance), used to build queries
            db: the session of the enclosing scope
        """
        self.model = model
        self.db = db

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, **kwargs) -> ModelType:
        """
        Validate, insert and flush a new entity so store-assigned fields (id) are populated.

        Raises:
            ValidationError: NOT NULL columns missing or None
            DuplicateError: a unique column value is already taken
        """
        model_name = self.model.__name__
        logger.debug(
            "repo.create.start",
            extra={"model": model_name, "operation": "create", "provided_keys": sorted(kwargs)},
        )

        missing = [c for c in get_required_columns(self.model) if kwargs.get(c) is None]
        if missing:
            logger.info(
                "repo.create.missing_required",
                extra={"model": model_name, "operation": "create", "missing_fields": sorted(missing)},
            )
            raise ValidationError(f"Missing required field(s): {', '.join(missing)} for {model_name}", fields=missing)

        conflicts = await find_unique_conflicts(self.db, self.model, kwargs)
        if conflicts:
            logger.info(
                "repo.create.duplicate_precheck",
                extra={"model": model_name, "operation": "create", "conflict_fields": sorted(conflicts)},
            )
            raise DuplicateError(
                f"{model_name} already exists for field(s): {', '.join(sorted(conflicts))}",
                fields=sorted(conflicts),
            )

        start = time.perf_counter()
        entity = self.model(**kwargs)
        self.db.add(entity)
        # flush, not commit: sends the INSERT so the id exists, the scope decides when it becomes durable
        await self.db.flush()
        await self.db.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                "model": model_name,
                "operation": "create",
                "id": getattr(entity, "id", None),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def get_by_id(self, entity_id: Any) -> ModelType | None:
        """
        The entity with this primary key, or None. The returned instance is
        attached to the session, so attribute changes are flushed on commit.
        """
        result = await self.db.execute(select(self.model).where(self.model.id == entity_id))
        entity = result.scalar_one_or_none()
        logger.debug(f"Retrieved {self.model.__name__} by ID: {entity_id} (found={entity is not None})")
        return entity

    async def get_all(self, order_by: str | None = None) -> list[ModelType]:
        """
        All entities, ascending by `order_by` when given. An unknown field is
        ignored with a warning rather than failing the read.
        """
        query = select(self.model)

        if order_by:
            if hasattr(self.model, order_by):
                query = query.order_by(getattr(self.model, order_by))
            else:
                logger.warning(
                    f"Ignored invalid 'order_by' field: '{order_by}' does not exist on {self.model.__name__}")

        result = await self.db.execute(query)
        entities = list(result.scalars().all())
        logger.debug(f"Retrieved {len(entities)} {self.model.__name__} entities")
        return entities

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete(self, entity_id: Any) -> bool:
        """
        Delete by primary key.

        Returns:
            True if a row was removed, False if none matched. Deleting something
            that is not there is a normal outcome, not an error.
        """
        result = await self.db.execute(delete(self.model).where(self.model.id == entity_id))

        if result.rowcount > 0:
            logger.debug(f"Deleted {self.model.__name__} with ID: {entity_id}")
            return True

        logger.info(f"{self.model.__name__} with ID {entity_id} not found for deletion")
        return False
