"""
Base Data Access Object (DAO) class.

WHAT: Generic CRUD over one SQLAlchemy model with every database failure
converted to StorageError.

WHY: Callers above the DAO layer only ever see StorageError, so
driver exceptions and SQL text never leak into API responses.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Generic, TypeVar, Type, Optional, List, Any

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from songlib.core.exceptions import StorageError
from songlib.models.base import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseDAO(Generic[ModelType]):
    """
    Base Data Access Object providing CRUD operations for all models.

    WHY: Shared query building and error wrapping, so model DAOs only add
    what is specific to their table.

    Type Parameters:
        ModelType: The SQLAlchemy model class this DAO manages
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize DAO with model class and database session.

        Args:
            model: The SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    @asynccontextmanager
    async def _storage_errors(self, operation: str) -> AsyncIterator[None]:
        """
        Re-raise any SQLAlchemy error inside the block as StorageError.

        The original error stays attached as __cause__.
        """
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(f"{self.model.__name__} {operation} failed: {e}")
            raise StorageError(
                message=f"Failed to {operation} {self.model.__tablename__}",
                operation=operation,
            ) from e

    async def add(self, instance: ModelType) -> ModelType:
        """
        Persist an already-built instance and load generated fields.

        Raises:
            StorageError: If the insert fails
        """
        async with self._storage_errors("insert"):
            self.session.add(instance)
            await self.session.flush()
            await self.session.refresh(instance)
        return instance

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        Retrieve a single record by primary key.

        Args:
            id: Primary key value

        Returns:
            The model instance if found, None otherwise
        """
        async with self._storage_errors("get"):
            result = await self.session.execute(select(self.model).where(self.model.id == id))
            return result.scalar_one_or_none()

    async def get_all(self, skip: int = 0, limit: int = 100, **filters: Any) -> List[ModelType]:
        """
        Retrieve multiple records with pagination and equality filtering.

        Results are ordered by primary key so pages are stable.

        Args:
            skip: Number of records to skip (for pagination)
            limit: Maximum number of records to return
            **filters: Field name to value filters (e.g., title="Intro")

        Returns:
            List of model instances matching the filters
        """
        query = select(self.model)

        for field, value in filters.items():
            if not hasattr(self.model, field):
                raise AttributeError(f"{self.model.__name__} has no field '{field}'")
            query = query.where(getattr(self.model, field) == value)

        query = query.order_by(self.model.id.asc()).offset(skip).limit(limit)

        async with self._storage_errors("list"):
            result = await self.session.execute(query)
            return list(result.scalars().all())

    async def delete(self, id: int) -> bool:
        """
        Delete a record by primary key.

        Args:
            id: Primary key of the record to delete

        Returns:
            True if a record was deleted, False if not found
        """
        async with self._storage_errors("delete"):
            result = await self.session.execute(delete(self.model).where(self.model.id == id))
            return result.rowcount > 0
