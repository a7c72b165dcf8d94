"""URL Repository for the URL shortener service.

This module provides the URLRepository class for database operations related to
UrlRecord models. It is the single place that reads and writes the
``url_records`` table.
"""

from typing import Any, Dict, List, Optional, Union

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import or_

from shorturl.models.url import UrlRecord, UrlRecordCreate
from shorturl.repositories.base import BaseRepository, RepositoryError


class URLRepository(BaseRepository[UrlRecord, UrlRecordCreate]):
    """
    Repository for UrlRecord model database operations.

    Lookups by either unique column, the current maximum identifier, and
    conflict-aware inserts and rewrites.
    """

    # original_url first: PostgreSQL constraint names embed the column name
    unique_fields = ("original_url", "short_url")

    def __init__(self):
        """Initialize the repository with the UrlRecord model type."""
        super().__init__(UrlRecord)

    async def create_url_record(
        self,
        db: AsyncSession,
        data: Union[UrlRecordCreate, Dict[str, Any]]
    ) -> UrlRecord:
        """
        Insert a new record.

        Args:
            db: Database session
            data: Record data (either as a UrlRecordCreate model or dictionary)

        Returns:
            The created UrlRecord entity

        Raises:
            DuplicateEntityError: If original_url or short_url already exists
            RepositoryError: On other database errors
        """
        return await self.create(db, data)

    async def get_by_original_url(self, db: AsyncSession, original_url: str) -> Optional[UrlRecord]:
        """
        Find a record by its exact, unnormalized original URL.

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(self.model_type).where(self.model_type.original_url == original_url)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            raise RepositoryError(f"Error retrieving URL by original URL: {e}") from e

    async def get_by_short_url(self, db: AsyncSession, short_url: int) -> Optional[UrlRecord]:
        """
        Find a record by its short identifier.

        Args:
            db: Database session
            short_url: The serial identifier to look up

        Returns:
            The UrlRecord if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(self.model_type).where(self.model_type.short_url == short_url)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            raise RepositoryError(f"Error retrieving URL by short URL: {e}") from e

    async def get_max_short_url(self, db: AsyncSession) -> Optional[int]:
        """
        Return the highest assigned identifier, or None for an empty table.

        Raises:
            RepositoryError: On database errors
        """
        try:
            result = await db.execute(select(func.max(self.model_type.short_url)))
            return result.scalar_one_or_none()
        except Exception as e:
            raise RepositoryError(f"Error retrieving max short URL: {e}") from e

    async def list_records(
        self,
        db: AsyncSession,
        skip: int = 0,
        limit: Optional[int] = None
    ) -> List[UrlRecord]:
        """List records in identifier order."""
        return await self.get_all(
            db, skip=skip, limit=limit, order_by=self.model_type.short_url
        )

    async def find_prefixed_records(self, db: AsyncSession) -> List[UrlRecord]:
        """
        Find records whose original URL still starts with an http(s) scheme.

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = (
                select(self.model_type)
                .where(
                    or_(
                        self.model_type.original_url.ilike("http://%"),
                        self.model_type.original_url.ilike("https://%"),
                    )
                )
                .order_by(self.model_type.short_url)
            )
            result = await db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            raise RepositoryError(f"Error retrieving scheme-prefixed URLs: {e}") from e

    async def update_original_url(
        self,
        db: AsyncSession,
        record_id: int,
        original_url: str
    ) -> Optional[UrlRecord]:
        """
        Rewrite the original URL of a record.

        Returns:
            The updated record, or None if it no longer exists

        Raises:
            DuplicateEntityError: If another record already holds original_url
            RepositoryError: On other database errors
        """
        return await self.update(db, record_id, {"original_url": original_url})
