"""Base repository implementation for the URL shortener service.

This module provides a generic BaseRepository class that follows the Repository pattern
for database operations, serving as a foundation for more specific repositories.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar, Union
import logging

from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel

# Type variable for model types
T = TypeVar("T", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class DuplicateEntityError(RepositoryError):
    """Exception raised when a unique constraint is violated."""

    def __init__(self, model_type: Type[SQLModel], field_name: str, value: Any):
        self.model_type = model_type
        self.field_name = field_name
        self.value = value
        model_name = getattr(model_type, "__name__", "Entity")
        super().__init__(f"{model_name} with {field_name}={value} already exists")


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell whether an IntegrityError comes from a unique constraint.

    Matches both the PostgreSQL ("duplicate key value violates unique
    constraint") and the SQLite ("UNIQUE constraint failed") wording.
    """
    message = str(error.orig if error.orig is not None else error).lower()
    return "unique constraint" in message or "duplicate key" in message


class BaseRepository(Generic[T, CreateSchemaType]):
    """
    Base repository implementing common CRUD operations for SQLModel entities.

    Type parameters:
        T: The SQLModel type this repository manages
        CreateSchemaType: The Pydantic model type for creation operations

    Subclasses list their unique columns in ``unique_fields`` so that an
    IntegrityError can be reported as a DuplicateEntityError naming the
    offending field.
    """

    unique_fields: Sequence[str] = ()

    def __init__(self, model_type: Type[T]):
        """
        Initialize the repository with a specific model type.

        Args:
            model_type: The SQLModel class this repository will work with
        """
        self.model_type = model_type

    def _duplicate_error(self, error: IntegrityError, data: Dict[str, Any]) -> RepositoryError:
        """Translate an IntegrityError into the matching repository error."""
        if not is_unique_violation(error):
            return RepositoryError(f"Database integrity error: {error}")

        message = str(error.orig if error.orig is not None else error).lower()
        for field in self.unique_fields:
            if field in message:
                return DuplicateEntityError(self.model_type, field, data.get(field))
        return DuplicateEntityError(self.model_type, "unknown", None)

    async def get_by_id(self, db: AsyncSession, id: Any) -> Optional[T]:
        """
        Get an entity by its ID.

        Args:
            db: Database session
            id: Entity ID

        Returns:
            The entity if found, None otherwise
        """
        try:
            return await db.get(self.model_type, id)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_type.__name__} with id {id}: {e}")
            raise RepositoryError(f"Database error retrieving entity: {e}") from e

    async def get_all(
        self,
        db: AsyncSession,
        skip: int = 0,
        limit: Optional[int] = None,
        order_by: Optional[Any] = None
    ) -> List[T]:
        """
        Get all entities with pagination support.

        Args:
            db: Database session
            skip: Number of records to skip (for pagination)
            limit: Maximum number of records to return, None for all
            order_by: SQLAlchemy column to order by

        Returns:
            List of entities
        """
        try:
            query = select(self.model_type)
            if order_by is not None:
                query = query.order_by(order_by)
            query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)

            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_type.__name__} list: {e}")
            raise RepositoryError(f"Database error retrieving entities: {e}") from e

    async def create(self, db: AsyncSession, data: Union[CreateSchemaType, Dict[str, Any]]) -> T:
        """
        Create a new entity.

        The row is flushed, not committed; committing is left to the caller.

        Args:
            db: Database session
            data: Entity data (either as a Pydantic model or dictionary)

        Returns:
            The created entity

        Raises:
            DuplicateEntityError: If a unique constraint is violated
            RepositoryError: On other database errors
        """
        if isinstance(data, BaseModel):
            data_dict = data.model_dump(exclude_unset=True)
        else:
            data_dict = dict(data)

        try:
            entity = self.model_type(**data_dict)
            db.add(entity)
            await db.flush()  # Flush to surface constraint violations now

            await db.refresh(entity)
            return entity
        except IntegrityError as e:
            await db.rollback()
            error = self._duplicate_error(e, data_dict)
            logger.warning(f"Integrity error creating {self.model_type.__name__}: {error}")
            raise error from e
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model_type.__name__}: {e}")
            await db.rollback()
            raise RepositoryError(f"Database error creating entity: {e}") from e

    async def update(
        self,
        db: AsyncSession,
        id: Any,
        data: Dict[str, Any]
    ) -> Optional[T]:
        """
        Update an existing entity.

        Args:
            db: Database session
            id: Entity ID
            data: Field=value pairs to update

        Returns:
            The updated entity, or None if not found

        Raises:
            DuplicateEntityError: If a unique constraint is violated
            RepositoryError: On other database errors
        """
        entity = await self.get_by_id(db, id)
        if entity is None:
            return None

        try:
            for key, value in data.items():
                setattr(entity, key, value)

            await db.flush()
            await db.refresh(entity)
            return entity
        except IntegrityError as e:
            await db.rollback()
            raise self._duplicate_error(e, data) from e
        except SQLAlchemyError as e:
            logger.error(f"Error updating {self.model_type.__name__} with id {id}: {e}")
            await db.rollback()
            raise RepositoryError(f"Database error updating entity: {e}") from e

    async def count(self, db: AsyncSession) -> int:
        """
        Count the total number of entities.

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(func.count()).select_from(self.model_type)
            result = await db.execute(query)
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model_type.__name__} records: {e}")
            raise RepositoryError(f"Database error counting entities: {e}") from e
