"""URL shortening service for the URL shortener.

This module contains the ShortenedURLService class which implements the
lookup-or-create flow for serial short identifiers and the redirect lookup.
"""

import asyncio
import logging
import random
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from shorturl.core.config import settings
from shorturl.repositories.url_repository import URLRepository
from shorturl.repositories.base import RepositoryError, DuplicateEntityError
from shorturl.services.exceptions import (
    URLCreationError,
    ShortUrlGenerationError,
    URLNotFoundError,
    URLLookupError,
)

logger = logging.getLogger(__name__)


class ShortenedURLService:
    """
    Service for URL shortening business logic.

    Identifiers are derived from the current maximum rather than stored in a
    counter. Two concurrent requests can therefore pick the same candidate;
    the unique constraint rejects one of them and that request starts over.
    """

    def __init__(
        self,
        url_repository: URLRepository,
        max_attempts: Optional[int] = None,
        retry_backoff: Optional[float] = None,
    ):
        """
        Initialize the URL shortening service.

        Args:
            url_repository: Repository for URL data access
            max_attempts: Insert attempts before giving up, defaults to
                SHORT_URL_MAX_ATTEMPTS
            retry_backoff: Upper bound in seconds of the jittered pause after
                the first conflict, defaults to SHORT_URL_RETRY_BACKOFF
        """
        self.url_repository = url_repository
        self.max_attempts = max_attempts or settings.SHORT_URL_MAX_ATTEMPTS
        self.retry_backoff = (
            settings.SHORT_URL_RETRY_BACKOFF if retry_backoff is None else retry_backoff
        )

    async def get_or_create_short_url(self, db: AsyncSession, original_url: str) -> int:
        """
        Return the short identifier of a URL, assigning the next one if needed.

        Submitting the same URL string twice always yields the same identifier.

        Args:
            db: Database session
            original_url: The URL exactly as submitted

        Returns:
            int: The short identifier

        Raises:
            ShortUrlGenerationError: If every attempt lost a uniqueness race
            URLCreationError: If the store fails for any other reason
        """
        original_url = str(original_url)

        for attempt in range(1, self.max_attempts + 1):
            try:
                existing = await self.url_repository.get_by_original_url(db, original_url)
                if existing is not None:
                    return existing.short_url

                current_max = await self.url_repository.get_max_short_url(db)
                candidate = (current_max or 0) + 1

                record = await self.url_repository.create_url_record(
                    db, {"original_url": original_url, "short_url": candidate}
                )
                await db.commit()
            except DuplicateEntityError as e:
                # The repository has already rolled the session back
                logger.warning(
                    f"Conflict on attempt {attempt}/{self.max_attempts} "
                    f"while shortening {original_url!r}: {e}"
                )
                await self._backoff(attempt)
                continue
            except RepositoryError as e:
                logger.error(f"Error creating short URL for {original_url!r}: {e}")
                raise URLCreationError(f"Failed to create short URL: {e}") from e
            except SQLAlchemyError as e:
                logger.error(f"Error committing short URL for {original_url!r}: {e}")
                await db.rollback()
                raise URLCreationError(f"Failed to create short URL: {e}") from e

            logger.info(f"Assigned short URL {record.short_url} to {original_url!r}")
            return record.short_url

        raise ShortUrlGenerationError(
            f"Failed to assign a short URL to {original_url!r} "
            f"after {self.max_attempts} attempts"
        )

    async def get_original_url(self, db: AsyncSession, short_url: int) -> str:
        """
        Resolve a short identifier to the URL it was assigned to.

        Args:
            db: Database session
            short_url: The identifier to look up

        Returns:
            str: The original URL, byte-for-byte as submitted

        Raises:
            URLNotFoundError: If no record holds this identifier
            URLLookupError: If the store fails
        """
        try:
            record = await self.url_repository.get_by_short_url(db, short_url)
        except RepositoryError as e:
            logger.error(f"Error retrieving URL for short URL {short_url}: {e}")
            raise URLLookupError(f"Failed to retrieve short URL {short_url}: {e}") from e

        if record is None:
            raise URLNotFoundError(f"Short URL {short_url} not found")
        return record.original_url

    async def _backoff(self, attempt: int) -> None:
        """Sleep a random share of a window growing with the attempt number."""
        if attempt >= self.max_attempts or self.retry_backoff <= 0:
            return
        await asyncio.sleep(random.uniform(0, self.retry_backoff * attempt))
