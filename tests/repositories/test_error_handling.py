"""Tests for repository error translation."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from url_service.db.base import DatabaseHealthCheck, create_session_factory
from url_service.db.session import SessionManager
from url_service.repositories.base import DuplicateEntityError, RepositoryError
from url_service.repositories.url_repository import URLRepository
from tests.utils import make_record

# SQLite cannot create a file inside a directory that does not exist
UNREACHABLE_DATABASE_URL = "sqlite+aiosqlite:////nonexistent-dir/url_service/urls.db"


@pytest_asyncio.fixture
async def broken_session_factory():
    engine = create_async_engine(UNREACHABLE_DATABASE_URL, poolclass=NullPool)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def broken_repository(broken_session_factory) -> URLRepository:
    return URLRepository(SessionManager(broken_session_factory))


@pytest.mark.repository
class TestRepositoryErrorHandling:
    """Database failures surface as RepositoryError."""

    @pytest.mark.asyncio
    async def test_save_failure(self, broken_repository):
        with pytest.raises(RepositoryError) as exc_info:
            await broken_repository.save(make_record())

        assert not isinstance(exc_info.value, DuplicateEntityError)

    @pytest.mark.asyncio
    async def test_find_failures(self, broken_repository):
        with pytest.raises(RepositoryError):
            await broken_repository.find_by_short_code("abcdefghij")

        with pytest.raises(RepositoryError):
            await broken_repository.find_by_long_url("https://example.com")

    @pytest.mark.asyncio
    async def test_increment_failure(self, broken_repository):
        with pytest.raises(RepositoryError):
            await broken_repository.increment_click("abcdefghij")

    @pytest.mark.asyncio
    async def test_list_failure(self, broken_repository):
        with pytest.raises(RepositoryError):
            await broken_repository.list(0, 10)

    @pytest.mark.asyncio
    async def test_health_check_reports_unhealthy(self, broken_session_factory):
        result = await DatabaseHealthCheck(broken_session_factory).check_connection()

        assert result["status"] == "unhealthy"
        assert result["error"]

    @pytest.mark.asyncio
    async def test_health_check_reports_healthy(self, test_engine):
        result = await DatabaseHealthCheck(create_session_factory(test_engine)).check_connection()

        assert result["status"] == "healthy"
        assert result["error"] is None
