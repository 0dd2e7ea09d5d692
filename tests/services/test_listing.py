"""Tests for the URL listing service."""

import pytest

from url_service.repositories.base import RepositoryError
from url_service.repositories.memory import InMemoryURLRepository
from url_service.services.exceptions import StoreUnavailableError
from url_service.services.listing import MAX_PAGE, ListingService
from tests.utils import seed_records


class UnreachableStore(InMemoryURLRepository):
    async def list(self, offset, limit):
        raise RepositoryError("timeout")


@pytest.mark.service
class TestListingService:
    """Test suite for ListingService."""

    @pytest.mark.parametrize(
        "page, page_size, expected",
        [
            (0, 0, (1, 10)),
            (-3, -1, (1, 10)),
            (2, 25, (2, 25)),
            (1, 500, (1, 100)),
            (1, 100, (1, 100)),
            (10 ** 17, 10, (MAX_PAGE, 10)),
        ],
    )
    def test_normalize(self, listing_service, page, page_size, expected):
        assert listing_service.normalize(page, page_size) == expected

    @pytest.mark.asyncio
    async def test_empty_store(self, listing_service):
        result = await listing_service.list_urls(1, 10)

        assert result.records == []
        assert result.total_count == 0
        assert result.page == 1
        assert result.page_size == 10

    @pytest.mark.asyncio
    async def test_pages_are_newest_first_and_disjoint(self, listing_service, memory_store):
        records = await seed_records(memory_store, 25)
        newest_first = [r.id for r in reversed(records)]

        pages = [await listing_service.list_urls(page, 10) for page in (1, 2, 3)]

        assert [len(p.records) for p in pages] == [10, 10, 5]
        assert all(p.total_count == 25 for p in pages)
        listed = [r.id for p in pages for r in p.records]
        assert listed == newest_first

    @pytest.mark.asyncio
    async def test_out_of_range_parameters_are_normalized(self, listing_service, memory_store):
        await seed_records(memory_store, 3)

        result = await listing_service.list_urls(0, 0)

        assert result.page == 1
        assert result.page_size == 10
        assert len(result.records) == 3

    @pytest.mark.asyncio
    async def test_page_past_end_is_empty(self, listing_service, memory_store):
        await seed_records(memory_store, 3)

        result = await listing_service.list_urls(5, 10)

        assert result.records == []
        assert result.total_count == 3

    @pytest.mark.asyncio
    async def test_custom_limits(self, memory_store):
        await seed_records(memory_store, 8)
        service = ListingService(memory_store, default_page_size=3, max_page_size=5)

        default_page = await service.list_urls(1, 0)
        clamped_page = await service.list_urls(1, 50)

        assert len(default_page.records) == 3
        assert clamped_page.page_size == 5
        assert len(clamped_page.records) == 5

    @pytest.mark.asyncio
    async def test_store_failure(self):
        service = ListingService(UnreachableStore())

        with pytest.raises(StoreUnavailableError):
            await service.list_urls(1, 10)

    @pytest.mark.asyncio
    async def test_huge_page_against_database(self, url_repository):
        await seed_records(url_repository, 2)
        service = ListingService(url_repository)

        result = await service.list_urls(10 ** 17, 100)

        assert result.page == MAX_PAGE
        assert result.records == []
        assert result.total_count == 2
