"""URL shortening service for the URL service.

This module contains the ShorteningService class which implements business
logic for validating long URLs and creating their short codes exactly once.
"""

import logging
import uuid

from url_service.models.url import ShortenResult, URLRecord, utcnow
from url_service.repositories.base import DuplicateEntityError, RepositoryError, URLStore
from url_service.services.codes import SHORT_CODE_LENGTH, generate_short_code
from url_service.services.exceptions import (
    StoreUnavailableError,
    URLCreationError,
    URLValidationError,
)
from url_service.services.validation import MAX_URL_LENGTH, validate_url

logger = logging.getLogger(__name__)


def new_url_id() -> str:
    """Mint an opaque, unique record id."""
    return f"url_{uuid.uuid4().hex}"


class ShorteningService:
    """
    Service for URL shortening business logic.

    Shortening is idempotent: a long URL that already has a record gets that
    record's id and short code back, and no second record is ever created.
    """

    def __init__(
        self,
        url_repository: URLStore,
        max_url_length: int = MAX_URL_LENGTH,
        code_length: int = SHORT_CODE_LENGTH,
    ):
        """
        Initialize the URL shortening service.

        Args:
            url_repository: Storage for URL records
            max_url_length: Longest accepted long URL, in characters
            code_length: Number of characters in generated short codes
        """
        self.url_repository = url_repository
        self.max_url_length = max_url_length
        self.code_length = code_length

    async def shorten(self, long_url: str) -> ShortenResult:
        """
        Return the short code for a long URL, creating the record on first use.

        Args:
            long_url: The URL to shorten

        Returns:
            ShortenResult: The record id and short code

        Raises:
            URLValidationError: If the URL is rejected (an InvalidInputError)
            StoreUnavailableError: If the existing record cannot be looked up
            URLCreationError: If the new record cannot be saved
        """
        try:
            validate_url(long_url, max_length=self.max_url_length)
        except URLValidationError as e:
            logger.error(f"Invalid URL provided ({e.kind.value}): {long_url!r}")
            raise

        existing = await self._find_existing(long_url)
        if existing is not None:
            return ShortenResult(id=existing.id, short_code=existing.short_code)

        record = URLRecord(
            id=new_url_id(),
            long_url=long_url,
            short_code=generate_short_code(long_url, self.code_length),
            created_at=utcnow(),
            click_count=0,
            last_accessed_at=None,
        )

        try:
            await self.url_repository.save(record)
        except DuplicateEntityError as e:
            return await self._resolve_conflict(record, e)
        except RepositoryError as e:
            logger.error(f"Error saving URL {record.id}: {e}")
            raise URLCreationError("Failed to save URL") from e

        logger.info(f"Created short code {record.short_code} for URL {record.id}")
        return ShortenResult(id=record.id, short_code=record.short_code)

    async def _find_existing(self, long_url: str):
        try:
            return await self.url_repository.find_by_long_url(long_url)
        except RepositoryError as e:
            logger.error(f"Error checking for existing URL {long_url!r}: {e}")
            raise StoreUnavailableError("Failed to check existing URL") from e

    async def _resolve_conflict(
        self,
        record: URLRecord,
        error: DuplicateEntityError,
    ) -> ShortenResult:
        """
        Handle a save that lost to a concurrent insert.

        If the winner stored the same long URL, its record is the answer.
        Anything else is a genuine short code collision between two different
        URLs, which a deterministic code cannot resolve.
        """
        try:
            winner = await self.url_repository.find_by_long_url(record.long_url)
        except RepositoryError as e:
            logger.error(f"Error re-reading URL after conflict on {error.field_name}: {e}")
            raise URLCreationError("Failed to save URL") from e

        if winner is not None:
            logger.info(
                f"Concurrent shorten of the same URL, returning existing record {winner.id}"
            )
            return ShortenResult(id=winner.id, short_code=winner.short_code)

        logger.error(
            f"Short code collision: {record.short_code} is taken by a different URL "
            f"({error.field_name}={error.value})"
        )
        raise URLCreationError(
            f"Short code '{record.short_code}' is already in use by another URL"
        ) from error
