"""
Data models for the URL shortener service.

This module imports and exports all SQLModel models used in the application.
"""

from shorturl.models.url import (
    UrlRecord,
    UrlRecordBase,
    UrlRecordCreate,
    UrlRecordRead,
)

__all__ = [
    "UrlRecord",
    "UrlRecordBase",
    "UrlRecordCreate",
    "UrlRecordRead",
]
