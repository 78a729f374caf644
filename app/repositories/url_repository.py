"""URL Repository for the URL shortener application.

This module provides the URLRepository class for database operations related to ShortURL models.
Following the Repository pattern, it abstracts database interactions for URL shortening operations.
"""

from typing import List, Optional, Union, Dict, Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from app.models.url import ShortURL, ShortURLCreate
from app.repositories.base import BaseRepository, RepositoryError, DuplicateEntityError, describe_error


def _is_unique_violation(error: IntegrityError) -> bool:
    message = str(error).lower()
    return "unique constraint" in message or "duplicate key" in message


class URLRepository(BaseRepository[ShortURL, ShortURLCreate]):
    """
    Repository for ShortURL model database operations.

    Exposes creation, lookup by id, short code and owner, and deletion.
    """

    def __init__(self):
        """Initialize the repository with the ShortURL model type."""
        super().__init__(ShortURL)

    async def create_short_url(
        self,
        db: AsyncSession,
        data: Union[ShortURLCreate, Dict[str, Any]]
    ) -> ShortURL:
        """
        Create a new shortened URL entry.

        The existence pre-check only catches codes that are already committed;
        a concurrent insert of the same code is caught by the unique constraint
        on ``short_code`` and reported the same way.

        Args:
            db: Database session
            data: Short URL data (either as a ShortURLCreate model or dictionary)

        Returns:
            The created ShortURL entity

        Raises:
            DuplicateEntityError: If the short code already exists
            RepositoryError: On other database errors
        """
        if isinstance(data, ShortURLCreate):
            short_code = data.short_code
        else:
            short_code = data.get("short_code")

        if short_code and await self.check_short_code_exists(db, short_code):
            raise DuplicateEntityError(self.model_type, "short_code", short_code)

        try:
            return await self.create(db, data)
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise DuplicateEntityError(self.model_type, "short_code", short_code) from e
            raise RepositoryError(f"Database error creating short URL: {describe_error(e)}") from e

    async def get_by_short_code(self, db: AsyncSession, short_code: str) -> Optional[ShortURL]:
        """
        Find a URL by its short code.

        Args:
            db: Database session
            short_code: The unique short code to look up

        Returns:
            The ShortURL if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        return await self.find_one_by(db, short_code=short_code)

    async def get_by_user_id(self, db: AsyncSession, user_id: int) -> List[ShortURL]:
        """
        List every URL owned by a user in insertion order.

        Raises:
            RepositoryError: On database errors
        """
        return await self.find_all_by(db, order_by=self.model_type.id, user_id=user_id)

    async def check_short_code_exists(self, db: AsyncSession, short_code: str) -> bool:
        """
        Check if a short code is already taken.

        Args:
            db: Database session
            short_code: The short code to check

        Returns:
            True if the short code exists, False otherwise

        Raises:
            RepositoryError: On database errors
        """
        return await self.exists(db, short_code=short_code)
