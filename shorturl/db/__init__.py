"""Database module for the URL shortener service."""
from shorturl.db.base import (
    engine,
    get_engine,
    get_session,
    create_tables,
    dispose_engine,
    DatabaseHealthCheck,
)
from shorturl.db.session import get_db

__all__ = [
    "engine",
    "get_engine",
    "get_session",
    "create_tables",
    "dispose_engine",
    "DatabaseHealthCheck",
    "get_db",
]
