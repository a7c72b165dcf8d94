"""Maintenance service for the URL shortener.

Operator tasks run outside the request path: dumping the collection and
stripping the scheme from stored URLs.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from shorturl.models.url import UrlRecord
from shorturl.repositories.url_repository import URLRepository
from shorturl.repositories.base import RepositoryError, DuplicateEntityError
from shorturl.services.exceptions import MaintenanceError
from shorturl.services.normalizer import strip_scheme

logger = logging.getLogger(__name__)


class MaintenanceService:
    """
    Service for out-of-band maintenance of the URL collection.

    Rewrites go record by record, each in its own transaction, so a rewrite
    that would collide with an existing URL is skipped without undoing the
    others.
    """

    def __init__(self, url_repository: URLRepository):
        self.url_repository = url_repository

    async def list_records(self, db: AsyncSession) -> List[UrlRecord]:
        """
        Return every record ordered by short identifier.

        Raises:
            MaintenanceError: If the store fails
        """
        try:
            return await self.url_repository.list_records(db)
        except RepositoryError as e:
            logger.error(f"Error listing URL records: {e}")
            raise MaintenanceError(f"Failed to list URL records: {e}") from e

    async def normalize_stored_urls(
        self,
        db: AsyncSession,
        dry_run: bool = False
    ) -> Dict[str, Any]:
        """
        Strip the http(s) scheme from every stored original URL.

        Args:
            db: Database session
            dry_run: Report what would change without writing

        Returns:
            Dict with statistics about the run

        Raises:
            MaintenanceError: If the store fails for a reason other than a
                uniqueness conflict
        """
        start_time = datetime.now(timezone.utc)
        updated = 0
        skipped: List[str] = []

        try:
            records = await self.url_repository.find_prefixed_records(db)
        except RepositoryError as e:
            logger.error(f"Error finding URLs to normalize: {e}")
            raise MaintenanceError(f"Failed to find URLs to normalize: {e}") from e

        # Detach the values up front: a rollback expires loaded instances
        candidates = [
            (record.id, record.original_url, strip_scheme(record.original_url))
            for record in records
        ]

        for record_id, original_url, normalized_url in candidates:
            logger.info(f"URL to normalize: {original_url} -> {normalized_url}")
            if dry_run or not normalized_url or normalized_url == original_url:
                continue

            try:
                await self.url_repository.update_original_url(db, record_id, normalized_url)
                await db.commit()
                updated += 1
            except DuplicateEntityError:
                logger.warning(
                    f"Skipping update for duplicate normalized URL: {normalized_url}"
                )
                skipped.append(original_url)
            except (RepositoryError, SQLAlchemyError) as e:
                await db.rollback()
                logger.error(f"Error normalizing {original_url!r}: {e}")
                raise MaintenanceError(f"Failed to normalize {original_url!r}: {e}") from e

        execution_time = (datetime.now(timezone.utc) - start_time).total_seconds()
        logger.info(
            f"Normalization completed: {updated} updated, {len(skipped)} skipped "
            f"of {len(candidates)} candidates in {execution_time:.2f}s"
        )
        return {
            "candidates": len(candidates),
            "updated": updated,
            "skipped": skipped,
            "dry_run": dry_run,
            "execution_time": execution_time,
        }
