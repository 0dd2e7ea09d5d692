"""URL Repository for the URL service.

This module provides the URLRepository class for database operations related to
URLRecord models. Following the Repository pattern, it abstracts database
interactions behind the URLStore contract.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import desc, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from url_service.db.session import SessionManager
from url_service.models.url import URLRecord, utcnow
from url_service.repositories.base import DuplicateEntityError, RepositoryError

logger = logging.getLogger(__name__)


class URLRepository:
    """
    Repository for URLRecord database operations.

    Each method runs in its own transaction obtained from the session
    manager, so a committed ``save`` is durable when it returns.
    """

    model_type = URLRecord

    def __init__(self, session_manager: SessionManager):
        """
        Initialize the repository.

        Args:
            session_manager: Source of transactional sessions
        """
        self.session_manager = session_manager

    async def save(self, record: URLRecord) -> None:
        """
        Insert a new URL record.

        Args:
            record: The record to persist

        Raises:
            DuplicateEntityError: If the id or short code already exists
            RepositoryError: On other database errors
        """
        try:
            async with self.session_manager.transaction() as db:
                db.add(record.copy_record())
                await db.flush()
        except IntegrityError as e:
            message = str(e.orig if e.orig is not None else e).lower()
            if "short_code" in message:
                raise DuplicateEntityError(self.model_type, "short_code", record.short_code) from e
            if "unique" in message or "duplicate" in message:
                raise DuplicateEntityError(self.model_type, "id", record.id) from e
            logger.error(f"Integrity error saving URL {record.id}: {e}")
            raise RepositoryError(f"Database error creating URL record: {e}") from e
        except (SQLAlchemyError, OSError, OverflowError) as e:
            logger.error(f"Error saving URL {record.id}: {e}")
            raise RepositoryError(f"Database error creating URL record: {e}") from e

    async def find_by_long_url(self, long_url: str) -> Optional[URLRecord]:
        """
        Find a record by its original URL.

        Raises:
            RepositoryError: On database errors
        """
        query = select(self.model_type).where(self.model_type.long_url == long_url).limit(1)
        return await self._find_one(query, f"long URL {long_url}")

    async def find_by_short_code(self, short_code: str) -> Optional[URLRecord]:
        """
        Find a record by its short code.

        Raises:
            RepositoryError: On database errors
        """
        query = select(self.model_type).where(self.model_type.short_code == short_code)
        return await self._find_one(query, f"short code {short_code}")

    async def increment_click(self, short_code: str) -> None:
        """
        Increment the click count for a short code.

        Uses a single UPDATE so concurrent increments never lose each other.
        A short code with no record is silently ignored.

        Raises:
            RepositoryError: On database errors
        """
        stmt = (
            update(self.model_type)
            .where(self.model_type.short_code == short_code)
            .values(
                click_count=self.model_type.click_count + 1,
                last_accessed_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            async with self.session_manager.transaction() as db:
                result = await db.execute(stmt)
        except (SQLAlchemyError, OSError, OverflowError) as e:
            logger.error(f"Error incrementing click count for {short_code}: {e}")
            raise RepositoryError(f"Error incrementing click count: {e}") from e

        if result.rowcount == 0:
            logger.warning(f"No URL record to count a click for short code {short_code}")

    async def list(self, offset: int, limit: int) -> Tuple[Sequence[URLRecord], int]:
        """
        Get a window of records ordered by creation date, newest first.

        Args:
            offset: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            The records in the window and the total number of records

        Raises:
            RepositoryError: On database errors
        """
        count_query = select(func.count()).select_from(self.model_type)
        page_query = (
            select(self.model_type)
            .order_by(desc(self.model_type.created_at), desc(self.model_type.id))
            .offset(offset)
            .limit(limit)
        )
        try:
            async with self.session_manager.transaction() as db:
                total_count = (await db.execute(count_query)).scalar_one()
                records: List[URLRecord] = list((await db.execute(page_query)).scalars().all())
        except (SQLAlchemyError, OSError, OverflowError) as e:
            logger.error(f"Error listing URLs (offset={offset}, limit={limit}): {e}")
            raise RepositoryError(f"Error listing URL records: {e}") from e

        return records, total_count

    async def _find_one(self, query, description: str) -> Optional[URLRecord]:
        try:
            async with self.session_manager.transaction() as db:
                result = await db.execute(query)
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError, OverflowError) as e:
            logger.error(f"Error retrieving URL by {description}: {e}")
            raise RepositoryError(f"Error retrieving URL by {description}: {e}") from e
