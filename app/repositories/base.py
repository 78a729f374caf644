"""Base repository implementation for the URL shortener application.

This module provides a generic BaseRepository class that follows the Repository pattern
for database operations, serving as a foundation for more specific repositories.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
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


def describe_error(error: SQLAlchemyError) -> str:
    """Driver message of a database error, without the SQL statement and parameters."""
    orig = getattr(error, "orig", None)
    if orig is not None:
        return str(orig)
    return str(error).split("\n[SQL:", 1)[0]


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


class BaseRepository(Generic[T, CreateSchemaType]):
    """
    Base repository implementing the CRUD operations shared by SQLModel entities.

    Entities are created and deleted, never updated in place.

    Type parameters:
        T: The SQLModel type this repository manages
        CreateSchemaType: The Pydantic model type for creation operations
    """

    def __init__(self, model_type: Type[T]):
        """
        Initialize the repository with a specific model type.

        Args:
            model_type: The SQLModel class this repository will work with
        """
        self.model_type = model_type

    def _conditions(self, filters: Dict[str, Any]) -> list:
        if not filters:
            raise ValueError("No conditions provided")
        return [getattr(self.model_type, field) == value for field, value in filters.items()]

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
            raise RepositoryError(f"Database error retrieving entity: {describe_error(e)}") from e

    async def find_one_by(self, db: AsyncSession, **filters) -> Optional[T]:
        """
        Get the single entity matching the given field=value filters.

        Returns:
            The entity if found, None otherwise
        """
        try:
            query = select(self.model_type).where(*self._conditions(filters))
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_type.__name__} by {filters}: {e}")
            raise RepositoryError(f"Database error retrieving entity: {describe_error(e)}") from e

    async def find_all_by(
        self,
        db: AsyncSession,
        order_by: Optional[Any] = None,
        **filters
    ) -> List[T]:
        """
        Get every entity matching the given field=value filters.

        Args:
            db: Database session
            order_by: SQLAlchemy column to order by, primary key when omitted
            **filters: Field=value pairs to filter by

        Returns:
            List of entities
        """
        try:
            if order_by is None:
                order_by = self.model_type.id
            query = select(self.model_type).where(*self._conditions(filters)).order_by(order_by)
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_type.__name__} list: {e}")
            raise RepositoryError(f"Database error retrieving entities: {describe_error(e)}") from e

    async def create(self, db: AsyncSession, data: Union[CreateSchemaType, Dict[str, Any]]) -> T:
        """
        Create a new entity.

        Args:
            db: Database session
            data: Entity data (either as a Pydantic model or dictionary)

        Returns:
            The created entity

        Raises:
            IntegrityError: When a database constraint rejects the row, after rollback
            RepositoryError: On other database errors
        """
        try:
            if isinstance(data, BaseModel):
                data_dict = data.model_dump(exclude_unset=True)
            else:
                data_dict = data

            entity = self.model_type(**data_dict)
            db.add(entity)
            await db.flush()  # Flush to generate ID but don't commit yet

            # Refresh to get any default values or generated columns
            await db.refresh(entity)
            return entity
        except IntegrityError:
            await db.rollback()
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model_type.__name__}: {e}")
            await db.rollback()
            raise RepositoryError(f"Database error creating entity: {describe_error(e)}") from e

    async def delete(self, db: AsyncSession, id: Any) -> bool:
        """
        Delete an entity by ID.

        Args:
            db: Database session
            id: Entity ID

        Returns:
            True if entity was deleted, False if not found

        Raises:
            RepositoryError: On database errors
        """
        try:
            entity = await self.get_by_id(db, id)
            if entity is None:
                return False

            await db.delete(entity)
            await db.flush()
            return True
        except SQLAlchemyError as e:
            logger.error(f"Error deleting {self.model_type.__name__} with id {id}: {e}")
            raise RepositoryError(f"Database error deleting entity: {describe_error(e)}") from e

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
            raise RepositoryError(f"Database error counting entities: {describe_error(e)}") from e

    async def exists(self, db: AsyncSession, **kwargs) -> bool:
        """
        Check if an entity exists with the given filters.

        Args:
            db: Database session
            **kwargs: Field=value pairs to filter by

        Returns:
            True if entity exists, False otherwise

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(func.count()).select_from(self.model_type).where(*self._conditions(kwargs))
            result = await db.execute(query)
            return result.scalar_one() > 0
        except SQLAlchemyError as e:
            logger.error(f"Error checking existence of {self.model_type.__name__}: {e}")
            raise RepositoryError(f"Database error checking entity existence: {describe_error(e)}") from e
