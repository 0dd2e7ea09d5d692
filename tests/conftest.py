"""Test fixtures for the URL service."""

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from url_service.core.background import DetachedTaskRunner
from url_service.core.config import EnvironmentType, Settings
from url_service.db.base import create_session_factory
from url_service.db.session import SessionManager
from url_service.main import create_app
# Import models to ensure they're registered with SQLModel metadata
from url_service.models.url import URLRecord  # noqa: F401
from url_service.repositories.memory import InMemoryURLRepository
from url_service.repositories.url_repository import URLRepository
from url_service.services.listing import ListingService
from url_service.services.resolver import ResolutionService
from url_service.services.shortener import ShorteningService

# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for the application under test."""
    return Settings(
        ENVIRONMENT=EnvironmentType.TESTING,
        DEBUG=True,
        DATABASE_URL=TEST_SQLALCHEMY_DATABASE_URL,
        LOG_LEVEL="WARNING",
        LOG_TO_FILE=False,
        SHUTDOWN_TIMEOUT_SECONDS=5.0,
    )


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory SQLite database for each test."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_manager(test_engine) -> SessionManager:
    """Session manager bound to the test database."""
    return SessionManager(create_session_factory(test_engine))


@pytest.fixture
def url_repository(session_manager) -> URLRepository:
    """Database-backed URL repository."""
    return URLRepository(session_manager)


@pytest.fixture
def memory_store() -> InMemoryURLRepository:
    """Dictionary-backed URL store."""
    return InMemoryURLRepository()


@pytest_asyncio.fixture
async def task_runner() -> AsyncGenerator[DetachedTaskRunner, None]:
    """Task runner that cancels leftovers when the test ends."""
    runner = DetachedTaskRunner()
    yield runner
    await runner.cancel_all()


@pytest.fixture
def shortening_service(memory_store) -> ShorteningService:
    return ShorteningService(memory_store)


@pytest.fixture
def resolution_service(memory_store, task_runner) -> ResolutionService:
    return ResolutionService(memory_store, task_runner)


@pytest.fixture
def listing_service(memory_store) -> ListingService:
    return ListingService(memory_store)


@pytest.fixture
def test_app(test_settings, memory_store) -> FastAPI:
    """FastAPI app wired to the in-memory store."""
    return create_app(test_settings, store=memory_store)


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance."""
    with TestClient(test_app) as test_client:
        yield test_client
