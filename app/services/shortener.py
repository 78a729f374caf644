"""URL shortening service for the URL shortener application.

This module contains the ShortenedURLService class which implements business logic
for URL shortening, listing, redirection and deletion.
"""

import logging
from typing import List, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.session import db_transaction
from app.models.url import ShortURL, ShortURLCreate
from app.repositories.base import DuplicateEntityError, RepositoryError
from app.repositories.url_repository import URLRepository
from app.services.codes import ShortCodeGenerator
from app.services.exceptions import (
    InvalidURLError,
    ShortCodeConflictError,
    URLCreationError,
    URLDeletionError,
    URLNotFoundError,
    URLOwnershipError,
)

logger = logging.getLogger(__name__)

_url_adapter = TypeAdapter(AnyUrl)


class ShortenedURLService:
    """
    Service for URL shortening business logic.

    Every operation receives the database session and, where ownership
    matters, the id of the calling user.
    """

    def __init__(
        self,
        url_repository: URLRepository,
        code_generator: Optional[ShortCodeGenerator] = None,
        base_url: Optional[str] = None,
        max_create_attempts: Optional[int] = None,
    ):
        """
        Initialize the URL shortening service.

        Args:
            url_repository: Repository for URL data access
            code_generator: Short code source, a default generator when omitted
            base_url: Public address short codes are appended to, defaults to BASE_URL
            max_create_attempts: Inserts tried before giving up on code races,
                defaults to URL_CREATE_MAX_ATTEMPTS
        """
        self.url_repository = url_repository
        self.code_generator = code_generator or ShortCodeGenerator()
        self.base_url = (base_url or settings.BASE_URL).rstrip("/")
        self.max_create_attempts = max_create_attempts or settings.URL_CREATE_MAX_ATTEMPTS

    def build_short_url(self, short_code: str) -> str:
        """Fully qualified short URL for a code."""
        return f"{self.base_url}/{short_code}"

    @db_transaction(db_param_name="db")
    async def create_short_url(
        self,
        db: AsyncSession,
        original_url: str,
        owner_id: Optional[int]
    ) -> ShortURL:
        """
        Create a shortened URL owned by ``owner_id``.

        Args:
            db: Database session
            original_url: The original URL to shorten
            owner_id: Id of the calling user

        Returns:
            ShortURL: The created shortened URL

        Raises:
            InvalidURLError: If URL format is invalid
            ShortCodeGenerationError: If no free short code could be drawn
            ShortCodeConflictError: If every insert lost a race for its code
            URLCreationError: If URL creation fails for other reasons
        """
        original_url = str(original_url)
        if not self._is_valid_url(original_url):
            raise InvalidURLError(f"Invalid URL format: {original_url}")

        async def code_exists(code: str) -> bool:
            return await self.url_repository.check_short_code_exists(db, code)

        for attempt in range(1, self.max_create_attempts + 1):
            try:
                short_code = await self.code_generator.generate(code_exists)
                url = await self.url_repository.create_short_url(
                    db,
                    ShortURLCreate(original_url=original_url, short_code=short_code, user_id=owner_id)
                )
            except DuplicateEntityError as e:
                logger.warning(f"Lost short code race on attempt {attempt}: {e}")
                continue
            except RepositoryError as e:
                logger.error(f"Error creating short URL: {e}")
                raise URLCreationError(f"Failed to create short URL: {e}") from e

            logger.info(f"Created short URL {url.short_code} (id={url.id}) for user {owner_id}")
            return url

        raise ShortCodeConflictError(
            f"Could not store a unique short code after {self.max_create_attempts} attempts"
        )

    async def shorten(self, db: AsyncSession, original_url: str, owner_id: Optional[int]) -> str:
        """
        Shorten a URL and return the fully qualified short URL.

        Raises:
            Same as :meth:`create_short_url`
        """
        url = await self.create_short_url(db, original_url, owner_id)
        return self.build_short_url(url.short_code)

    async def list_urls_for_owner(self, db: AsyncSession, owner_id: int) -> List[ShortURL]:
        """
        Get every shortened URL owned by a user, oldest first.

        Args:
            db: Database session
            owner_id: Id of the calling user

        Returns:
            List[ShortURL]: The user's URLs
        """
        return await self.url_repository.get_by_user_id(db, owner_id)

    async def resolve(self, db: AsyncSession, short_code: str) -> str:
        """
        Look up the original URL behind a short code.

        Args:
            db: Database session
            short_code: The short code to look up

        Returns:
            str: The original URL

        Raises:
            URLNotFoundError: If no URL with this code exists
            RepositoryError: If the lookup itself fails
        """
        url = await self.url_repository.get_by_short_code(db, short_code)
        if url is None:
            raise URLNotFoundError("Short URL not found")
        return url.original_url

    @db_transaction(db_param_name="db")
    async def delete_url(self, db: AsyncSession, url_id: int, requester_id: int) -> bool:
        """
        Delete a shortened URL on behalf of its owner.

        Args:
            db: Database session
            url_id: Id of the URL to delete
            requester_id: Id of the calling user

        Returns:
            bool: True once the URL is deleted

        Raises:
            URLNotFoundError: If no URL with this id exists
            URLOwnershipError: If the URL belongs to someone else
            URLDeletionError: If the delete operation fails
        """
        try:
            url = await self.url_repository.get_by_id(db, url_id)
            if url is None:
                raise URLNotFoundError("URL not found")

            if not url.is_owned_by(requester_id):
                logger.warning(f"User {requester_id} tried to delete URL {url_id} owned by {url.user_id}")
                raise URLOwnershipError("Unauthorized")

            if not await self.url_repository.delete(db, url.id):
                raise URLNotFoundError("URL not found")
        except RepositoryError as e:
            logger.error(f"Error deleting URL {url_id}: {e}")
            raise URLDeletionError(str(e)) from e

        logger.info(f"Deleted short URL {url.short_code} (id={url_id})")
        return True

    def _is_valid_url(self, url: str) -> bool:
        """
        Check that a URL is absolute, with both a scheme and a host.

        Args:
            url: URL to validate

        Returns:
            bool: True if the URL is valid, False otherwise
        """
        if not url or url != url.strip():
            return False
        try:
            parsed = _url_adapter.validate_python(url)
        except ValidationError:
            return False
        return bool(parsed.scheme and parsed.host)
