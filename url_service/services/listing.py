"""Listing service for the URL service.

This module contains the ListingService class which pages through stored
URL records, newest first.
"""

import logging

from url_service.models.url import URLPage, URLRecordRead
from url_service.repositories.base import RepositoryError, URLStore
from url_service.services.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Keeps the row offset within the range of a 64-bit integer
MAX_PAGE = 1_000_000


class ListingService:
    """Service for paginated, read-only enumeration of URL records."""

    def __init__(
        self,
        url_repository: URLStore,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        self.url_repository = url_repository
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def normalize(self, page: int, page_size: int):
        """
        Clamp pagination parameters into their accepted range.

        Returns:
            Tuple of (page, page_size)
        """
        if page < 1:
            page = 1
        if page > MAX_PAGE:
            page = MAX_PAGE
        if page_size < 1:
            page_size = self.default_page_size
        if page_size > self.max_page_size:
            page_size = self.max_page_size
        return page, page_size

    async def list_urls(self, page: int, page_size: int) -> URLPage:
        """
        Get one page of URL records.

        Args:
            page: 1-based page number; values below 1 mean the first page,
                values above MAX_PAGE mean MAX_PAGE
            page_size: Records per page; out-of-range values are clamped

        Returns:
            URLPage: The records plus the normalized page parameters

        Raises:
            StoreUnavailableError: If the records cannot be read
        """
        page, page_size = self.normalize(page, page_size)
        offset = (page - 1) * page_size

        try:
            records, total_count = await self.url_repository.list(offset, page_size)
        except RepositoryError as e:
            logger.error(f"Error listing URLs (page={page}, page_size={page_size}): {e}")
            raise StoreUnavailableError("Failed to list URLs") from e

        return URLPage(
            records=[URLRecordRead.model_validate(record) for record in records],
            total_count=total_count,
            page=page,
            page_size=page_size,
        )
