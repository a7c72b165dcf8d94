"""Tests for the maintenance service."""

from unittest.mock import patch

import pytest

from shorturl.repositories.base import RepositoryError
from shorturl.services.exceptions import MaintenanceError
from shorturl.services.maintenance import MaintenanceService
from tests.utils import create_test_url


@pytest.fixture
def maintenance_service(url_repository):
    return MaintenanceService(url_repository=url_repository)


@pytest.mark.service
@pytest.mark.asyncio
async def test_list_records(test_db, maintenance_service):
    await create_test_url(test_db, original_url="https://b.example", short_url=2)
    await create_test_url(test_db, original_url="https://a.example", short_url=1)

    records = await maintenance_service.list_records(test_db)

    assert [(r.short_url, r.original_url) for r in records] == [
        (1, "https://a.example"),
        (2, "https://b.example"),
    ]


@pytest.mark.service
@pytest.mark.asyncio
async def test_list_records_storage_failure(test_db, maintenance_service, url_repository):
    with patch.object(url_repository, "list_records", side_effect=RepositoryError("boom")):
        with pytest.raises(MaintenanceError):
            await maintenance_service.list_records(test_db)


@pytest.mark.service
@pytest.mark.asyncio
async def test_normalize_strips_scheme(test_db, maintenance_service, url_repository):
    await create_test_url(test_db, original_url="https://www.example.org/docs", short_url=1)
    await create_test_url(test_db, original_url="HTTP://example.net", short_url=2)
    await create_test_url(test_db, original_url="example.com", short_url=3)

    result = await maintenance_service.normalize_stored_urls(test_db)

    assert result["candidates"] == 2
    assert result["updated"] == 2
    assert result["skipped"] == []
    assert result["dry_run"] is False

    stored = {r.short_url: r.original_url for r in await url_repository.list_records(test_db)}
    assert stored == {1: "www.example.org/docs", 2: "example.net", 3: "example.com"}


@pytest.mark.service
@pytest.mark.asyncio
async def test_normalize_skips_duplicates(test_db, maintenance_service, url_repository):
    await create_test_url(test_db, original_url="example.org", short_url=1)
    await create_test_url(test_db, original_url="https://example.org", short_url=2)
    await create_test_url(test_db, original_url="http://example.net", short_url=3)

    result = await maintenance_service.normalize_stored_urls(test_db)

    assert result["updated"] == 1
    assert result["skipped"] == ["https://example.org"]

    stored = {r.short_url: r.original_url for r in await url_repository.list_records(test_db)}
    assert stored == {1: "example.org", 2: "https://example.org", 3: "example.net"}


@pytest.mark.service
@pytest.mark.asyncio
async def test_normalize_dry_run_writes_nothing(test_db, maintenance_service, url_repository):
    await create_test_url(test_db, original_url="https://example.org", short_url=1)

    result = await maintenance_service.normalize_stored_urls(test_db, dry_run=True)

    assert result["candidates"] == 1
    assert result["updated"] == 0
    assert result["dry_run"] is True
    record = await url_repository.get_by_short_url(test_db, 1)
    assert record.original_url == "https://example.org"


@pytest.mark.service
@pytest.mark.asyncio
async def test_normalize_storage_failure(test_db, maintenance_service, url_repository):
    await create_test_url(test_db, original_url="https://example.org", short_url=1)

    with patch.object(
        url_repository, "update_original_url", side_effect=RepositoryError("disk full")
    ):
        with pytest.raises(MaintenanceError):
            await maintenance_service.normalize_stored_urls(test_db)
