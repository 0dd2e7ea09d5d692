"""
Data models for the URL service.

This module imports and exports all SQLModel models used in the application.
"""

from url_service.models.url import (
    ExpandResult,
    ShortenResult,
    URLPage,
    URLRecord,
    URLRecordBase,
    URLRecordRead,
    utcnow,
)

__all__ = [
    "ExpandResult",
    "ShortenResult",
    "URLPage",
    "URLRecord",
    "URLRecordBase",
    "URLRecordRead",
    "utcnow",
]
