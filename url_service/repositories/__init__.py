"""Repository layer for the URL service.

This module provides the storage contract used by the services and its
two implementations: SQL-backed and in-memory.
"""

from url_service.repositories.base import (
    DuplicateEntityError,
    RepositoryError,
    URLStore,
)
from url_service.repositories.memory import InMemoryURLRepository
from url_service.repositories.url_repository import URLRepository

__all__ = [
    # Contract and exceptions
    "URLStore",
    "RepositoryError",
    "DuplicateEntityError",

    # Implementations
    "URLRepository",
    "InMemoryURLRepository",
]
