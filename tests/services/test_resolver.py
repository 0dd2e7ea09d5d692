"""Tests for the short code resolution service."""

import pytest

from url_service.repositories.base import RepositoryError
from url_service.repositories.memory import InMemoryURLRepository
from url_service.services.exceptions import (
    InvalidInputError,
    StoreUnavailableError,
    URLNotFoundError,
)
from url_service.services.resolver import ResolutionService
from tests.utils import make_record


class BrokenCounterStore(InMemoryURLRepository):
    """Store whose click updates always fail."""

    def __init__(self):
        super().__init__()
        self.increment_attempts = 0

    async def increment_click(self, short_code):
        self.increment_attempts += 1
        raise RepositoryError("write failed")


class UnreachableStore(InMemoryURLRepository):
    async def find_by_short_code(self, short_code):
        raise RepositoryError("connection reset")


@pytest.mark.service
class TestResolutionService:
    """Test suite for ResolutionService."""

    @pytest.mark.asyncio
    async def test_expand_returns_count_before_increment(
        self, resolution_service, memory_store, task_runner
    ):
        record = make_record(click_count=5)
        await memory_store.save(record)

        result = await resolution_service.expand(record.short_code)

        assert result.long_url == record.long_url
        assert result.click_count == 5
        assert result.created_at == record.created_at

        assert await task_runner.drain(timeout=5) == 0
        stored = await memory_store.find_by_short_code(record.short_code)
        assert stored.click_count == 6
        assert stored.last_accessed_at is not None

    @pytest.mark.asyncio
    async def test_second_expand_sees_first_click(
        self, resolution_service, memory_store, task_runner
    ):
        record = make_record()
        await memory_store.save(record)

        first = await resolution_service.expand(record.short_code)
        await task_runner.drain(timeout=5)
        second = await resolution_service.expand(record.short_code)

        assert first.click_count == 0
        assert second.click_count == 1

    @pytest.mark.asyncio
    async def test_unknown_code(self, resolution_service, task_runner):
        with pytest.raises(URLNotFoundError):
            await resolution_service.expand("unknown123")

        assert task_runner.pending == 0

    @pytest.mark.asyncio
    async def test_empty_code(self, resolution_service):
        with pytest.raises(InvalidInputError):
            await resolution_service.expand("")

    @pytest.mark.asyncio
    async def test_lookup_failure_is_store_unavailable(self, task_runner):
        service = ResolutionService(UnreachableStore(), task_runner)

        with pytest.raises(StoreUnavailableError):
            await service.expand("abcdefghij")

    @pytest.mark.asyncio
    async def test_failed_increment_does_not_affect_caller(self, task_runner):
        store = BrokenCounterStore()
        record = make_record(click_count=3)
        await store.save(record)
        service = ResolutionService(store, task_runner)

        result = await service.expand(record.short_code)
        await task_runner.drain(timeout=5)

        assert result.click_count == 3
        assert store.increment_attempts == 1
        stored = await store.find_by_short_code(record.short_code)
        assert stored.click_count == 3
