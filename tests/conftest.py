"""Test fixtures for the URL shortener service."""

import os
import tempfile

# Settings are read at import time, so the environment must be ready first
os.environ["ENVIRONMENT"] = "testing"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["SHORT_URL_RETRY_BACKOFF"] = "0"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="shorturl-test-logs-")

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from shorturl.api.dependencies import get_hostname_validator
from shorturl.db.session import get_db
from shorturl.main import app as main_app
# Import models to ensure they're registered with SQLModel metadata
from shorturl.models.url import UrlRecord  # noqa: F401
from shorturl.repositories.url_repository import URLRepository
from tests.fakes import FakeHostnameValidator


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory SQLite database for each test."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Services commit, so isolation comes from the per-test engine rather
    than from an outer rolled-back transaction.
    """
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def file_engine(tmp_path):
    """SQLite database on disk, shared by concurrent sessions."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'shorturl.db'}",
        connect_args={"timeout": 30},
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def url_repository():
    """Return URL repository instance."""
    return URLRepository()


@pytest.fixture
def fake_validator():
    """Hostname validator that needs no network."""
    return FakeHostnameValidator()


@pytest.fixture
def override_get_db(test_db):
    """Override the get_db dependency for testing."""
    async def _override_get_db():
        yield test_db

    return _override_get_db


@pytest.fixture
def test_app(override_get_db, fake_validator) -> FastAPI:
    """FastAPI app wired to the test database and the fake validator."""
    app = main_app
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_hostname_validator] = lambda: fake_validator
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Return an HTTP client talking to the app in-process."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client
