"""Tests for the URL repository."""

import pytest
from sqlalchemy import select

from shorturl.models.url import UrlRecord, UrlRecordCreate
from shorturl.repositories.base import DuplicateEntityError
from tests.utils import create_test_url, random_url


@pytest.mark.repository
class TestURLRepository:
    """Test suite for URL repository."""

    @pytest.mark.asyncio
    async def test_create_url_record(self, test_db, url_repository):
        """Test record creation from a create schema."""
        test_url = random_url()

        record = await url_repository.create_url_record(
            test_db, UrlRecordCreate(original_url=test_url, short_url=1)
        )
        await test_db.commit()

        assert record.id is not None
        assert record.original_url == test_url
        assert record.short_url == 1

        db_record = await url_repository.get_by_short_url(test_db, 1)
        assert db_record is not None
        assert db_record.original_url == test_url

    @pytest.mark.asyncio
    async def test_create_duplicate_short_url(self, test_db, url_repository):
        """Reusing a short_url is reported as a duplicate of that field."""
        await create_test_url(test_db, short_url=7)

        with pytest.raises(DuplicateEntityError) as excinfo:
            await url_repository.create_url_record(
                test_db, {"original_url": random_url(), "short_url": 7}
            )

        assert excinfo.value.field_name == "short_url"
        assert excinfo.value.value == 7

    @pytest.mark.asyncio
    async def test_create_duplicate_original_url(self, test_db, url_repository):
        """Reusing an original_url is reported as a duplicate of that field."""
        test_url = random_url()
        await create_test_url(test_db, original_url=test_url, short_url=1)

        with pytest.raises(DuplicateEntityError) as excinfo:
            await url_repository.create_url_record(
                test_db, {"original_url": test_url, "short_url": 2}
            )

        assert excinfo.value.field_name == "original_url"

    @pytest.mark.asyncio
    async def test_get_by_original_url_is_exact(self, test_db, url_repository):
        """Lookups compare the raw string, without any normalization."""
        await create_test_url(test_db, original_url="https://www.example.org/", short_url=1)

        found = await url_repository.get_by_original_url(test_db, "https://www.example.org/")
        assert found is not None
        assert found.short_url == 1

        assert await url_repository.get_by_original_url(test_db, "https://www.example.org") is None
        assert await url_repository.get_by_original_url(test_db, "www.example.org/") is None

    @pytest.mark.asyncio
    async def test_get_by_short_url_nonexistent(self, test_db, url_repository):
        """Test retrieving nonexistent record."""
        assert await url_repository.get_by_short_url(test_db, 99) is None

    @pytest.mark.asyncio
    async def test_get_max_short_url(self, test_db, url_repository):
        """The maximum is None for an empty table, then the highest identifier."""
        assert await url_repository.get_max_short_url(test_db) is None

        await create_test_url(test_db, short_url=3)
        await create_test_url(test_db, short_url=12)
        await create_test_url(test_db, short_url=5)

        assert await url_repository.get_max_short_url(test_db) == 12

    @pytest.mark.asyncio
    async def test_list_records_ordered(self, test_db, url_repository):
        """Records come back in identifier order."""
        for short_url in (3, 1, 2):
            await create_test_url(test_db, short_url=short_url)

        records = await url_repository.list_records(test_db)
        assert [r.short_url for r in records] == [1, 2, 3]

        page = await url_repository.list_records(test_db, skip=1, limit=1)
        assert [r.short_url for r in page] == [2]

    @pytest.mark.asyncio
    async def test_find_prefixed_records(self, test_db, url_repository):
        """Only URLs starting with http:// or https:// are returned."""
        await create_test_url(test_db, original_url="https://example.com/a", short_url=1)
        await create_test_url(test_db, original_url="example.com/b", short_url=2)
        await create_test_url(test_db, original_url="http://example.net", short_url=3)
        await create_test_url(test_db, original_url="ftp://example.org", short_url=4)

        records = await url_repository.find_prefixed_records(test_db)
        assert [r.short_url for r in records] == [1, 3]

    @pytest.mark.asyncio
    async def test_update_original_url(self, test_db, url_repository):
        """Rewriting the original URL persists the new value."""
        record = await create_test_url(test_db, original_url="https://example.com", short_url=1)

        updated = await url_repository.update_original_url(test_db, record.id, "example.com")
        await test_db.commit()

        assert updated.original_url == "example.com"
        result = await test_db.execute(select(UrlRecord).where(UrlRecord.id == record.id))
        assert result.scalar_one().original_url == "example.com"

    @pytest.mark.asyncio
    async def test_update_original_url_conflict(self, test_db, url_repository):
        """A rewrite onto an existing URL is rejected and leaves both rows intact."""
        await create_test_url(test_db, original_url="example.com", short_url=1)
        record = await create_test_url(test_db, original_url="https://example.com", short_url=2)

        with pytest.raises(DuplicateEntityError):
            await url_repository.update_original_url(test_db, record.id, "example.com")

        assert await url_repository.count(test_db) == 2
        kept = await url_repository.get_by_short_url(test_db, 2)
        assert kept.original_url == "https://example.com"

    @pytest.mark.asyncio
    async def test_update_missing_record(self, test_db, url_repository):
        """Updating a record that does not exist returns None."""
        assert await url_repository.update_original_url(test_db, 999, "example.com") is None
