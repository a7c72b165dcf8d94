"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access repositories, services and the hostname validator.
"""

from fastapi import Depends

from shorturl.repositories.url_repository import URLRepository
from shorturl.services.shortener import ShortenedURLService
from shorturl.services.validator import HostnameValidator


async def get_url_repository():
    """Get an instance of the URL repository."""
    return URLRepository()


async def get_shortener_service(
    url_repo: URLRepository = Depends(get_url_repository),
) -> ShortenedURLService:
    """Get an instance of the URL shortening service."""
    return ShortenedURLService(url_repository=url_repo)


async def get_hostname_validator() -> HostnameValidator:
    """Get the DNS-backed hostname validator."""
    return HostnameValidator()
