"""Service layer for the URL shortener.

This package contains service classes implementing the business logic of the application.
Services orchestrate interactions between repositories and provide domain-specific operations.
"""

from shorturl.services.shortener import ShortenedURLService
from shorturl.services.maintenance import MaintenanceService
from shorturl.services.validator import HostnameValidator
from shorturl.services.normalizer import normalize_url, strip_scheme

__all__ = [
    "ShortenedURLService",
    "MaintenanceService",
    "HostnameValidator",
    "normalize_url",
    "strip_scheme",
]
