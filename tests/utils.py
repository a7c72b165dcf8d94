"""Test utilities for URL shortener tests."""

import random
import string
from typing import Any, Dict, Optional

from shorturl.models.url import UrlRecord


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8).lower()}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


def create_test_url_data(
    original_url: Optional[str] = None,
    short_url: int = 1,
) -> Dict[str, Any]:
    """Create test data dict for a UrlRecord."""
    return {
        "original_url": original_url or random_url(),
        "short_url": short_url,
    }


async def create_test_url(
    db,
    original_url: Optional[str] = None,
    short_url: int = 1,
) -> UrlRecord:
    """Create and persist a test UrlRecord in the database."""
    record = UrlRecord(**create_test_url_data(original_url=original_url, short_url=short_url))
    db.add(record)
    await db.commit()
    await db.refresh(record)
    return record
