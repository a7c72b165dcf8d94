"""Database base configuration for SQLAlchemy with SQLModel.

This module provides base database configuration for async SQLAlchemy with SQLModel.
It includes:
- Engine configuration
- Session factory
- Schema creation
- Health check functionality
"""

from typing import AsyncGenerator, Dict
import asyncio
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from shorturl.core.config import settings

logger = logging.getLogger(__name__)

_POOL_CONFIG: Dict = {
    "pool_size": settings.DB_POOL_SIZE,
    "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
    "pool_timeout": settings.DB_POOL_TIMEOUT,
    "pool_recycle": settings.DB_POOL_RECYCLE,
    "pool_pre_ping": True,
}

# Mapping of environment to SQLAlchemy engine configurations
ENGINE_CONFIGS: Dict[str, Dict] = {
    "development": {"echo": settings.DB_ECHO, **_POOL_CONFIG},
    "staging": {"echo": False, **_POOL_CONFIG},
    "production": {"echo": False, **_POOL_CONFIG},
    "testing": {
        "echo": False,
        "poolclass": NullPool,
    },
}


def get_engine_config() -> Dict:
    """Get the appropriate engine configuration based on the environment.

    SQLite URLs never get pool sizing options, since aiosqlite does not
    use a queue pool.

    Returns:
        Dict: Engine configuration parameters for the current environment.
    """
    env = settings.ENVIRONMENT.value
    config = ENGINE_CONFIGS.get(env, ENGINE_CONFIGS["development"])
    if settings.is_sqlite:
        return {"echo": config.get("echo", False), "poolclass": NullPool}
    return config


def get_engine() -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    engine_config = get_engine_config()

    logger.info(f"Creating database engine for environment: {settings.ENVIRONMENT.value}")

    return create_async_engine(
        settings.DATABASE_URL,
        **engine_config,
    )


# Shared async engine instance
engine = get_engine()

# Async session factory
async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async session with proper cleanup.

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    session = async_session_factory()
    try:
        yield session
    finally:
        await session.close()


async def create_tables(bind: AsyncEngine = None) -> None:
    """Create every table registered on the SQLModel metadata."""
    # Registers UrlRecord on the metadata
    from shorturl.models import UrlRecord  # noqa: F401

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables are in place")


async def dispose_engine() -> None:
    """Close every pooled connection."""
    await engine.dispose()


class DatabaseHealthCheck:
    """Health check functionality for the database connection."""

    @staticmethod
    async def check_connection(session: AsyncSession) -> Dict:
        """Check database connectivity and return status.

        Args:
            session: Session used to run the probe query

        Returns:
            Dict: Health check result containing status and latency information
        """
        start_time = asyncio.get_running_loop().time()
        status = "healthy"
        error_message = None
        latency_ms = 0

        try:
            await session.execute(text("SELECT 1"))
            latency_ms = int((asyncio.get_running_loop().time() - start_time) * 1000)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
