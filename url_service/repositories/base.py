"""Persistence contract for the URL service.

This module defines the repository exceptions and the ``URLStore`` protocol,
the only channel through which services touch storage. Any object with these
coroutine methods can back the services; no base class is required.
"""

from typing import Any, Optional, Protocol, Sequence, Tuple, Type, runtime_checkable

from url_service.models.url import URLRecord


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class DuplicateEntityError(RepositoryError):
    """Exception raised when a unique constraint is violated."""

    def __init__(self, model_type: Type[Any], field_name: str, value: Any):
        self.model_type = model_type
        self.field_name = field_name
        self.value = value
        model_name = getattr(model_type, "__name__", "Entity")
        super().__init__(f"{model_name} with {field_name}={value} already exists")


@runtime_checkable
class URLStore(Protocol):
    """Storage operations the URL services rely on."""

    async def save(self, record: URLRecord) -> None:
        """
        Persist a new record.

        Raises:
            DuplicateEntityError: If the id or short code already exists
            RepositoryError: On other storage errors
        """
        ...

    async def find_by_long_url(self, long_url: str) -> Optional[URLRecord]:
        """Return the record for a long URL, or None."""
        ...

    async def find_by_short_code(self, short_code: str) -> Optional[URLRecord]:
        """Return the record for a short code, or None."""
        ...

    async def increment_click(self, short_code: str) -> None:
        """
        Atomically add one to the click count and stamp the access time.

        Does nothing when no record has this short code.
        """
        ...

    async def list(self, offset: int, limit: int) -> Tuple[Sequence[URLRecord], int]:
        """Return a newest-first window of records and the total record count."""
        ...
