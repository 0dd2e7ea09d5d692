"""Resolution service for the URL service.

This module contains the ResolutionService class which looks up the long URL
behind a short code and counts the access in the background.
"""

import logging

from url_service.core.background import DetachedTaskRunner
from url_service.models.url import ExpandResult
from url_service.repositories.base import RepositoryError, URLStore
from url_service.services.exceptions import (
    InvalidInputError,
    StoreUnavailableError,
    URLNotFoundError,
)

logger = logging.getLogger(__name__)


class ResolutionService:
    """
    Service for resolving short codes.

    The click counter is updated by a detached task after the lookup, so the
    response carries the count as it was read and resolution latency never
    includes the write. A failed update is logged and dropped.
    """

    def __init__(self, url_repository: URLStore, task_runner: DetachedTaskRunner):
        """
        Initialize the resolution service.

        Args:
            url_repository: Storage for URL records
            task_runner: Runs the click updates outside the request
        """
        self.url_repository = url_repository
        self.task_runner = task_runner

    async def expand(self, short_code: str) -> ExpandResult:
        """
        Resolve a short code to its long URL.

        Args:
            short_code: The code to look up

        Returns:
            ExpandResult: Long URL, click count and creation time as read

        Raises:
            InvalidInputError: If the short code is empty
            URLNotFoundError: If no record has this code
            StoreUnavailableError: If the lookup fails
        """
        if not short_code:
            logger.error("Empty short code provided")
            raise InvalidInputError("short URL cannot be empty")

        try:
            record = await self.url_repository.find_by_short_code(short_code)
        except RepositoryError as e:
            logger.error(f"Error fetching URL by short code {short_code}: {e}")
            raise StoreUnavailableError("Failed to fetch URL") from e

        if record is None:
            logger.info(f"Short code not found: {short_code}")
            raise URLNotFoundError(f"URL with code '{short_code}' not found")

        result = ExpandResult(
            long_url=record.long_url,
            click_count=record.click_count,
            created_at=record.created_at,
        )

        self.task_runner.spawn(
            self.url_repository.increment_click(short_code),
            name=f"increment-click:{short_code}",
            on_failure=lambda exc: logger.error(
                f"Failed to update click count for {short_code}: {exc}"
            ),
        )

        return result
