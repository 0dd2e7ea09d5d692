"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from url_service.models.url import ExpandResult, ShortenResult, URLPage, URLRecordRead


def format_timestamp(value: Optional[datetime]) -> str:
    """Render a stored UTC timestamp as RFC 3339, or "" for never."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


class ShortenRequest(BaseModel):
    """Request schema for shortening a URL."""
    # Checked by validate_url in the shortening service
    url: str = Field(description="The long URL to shorten")


class ShortenResponse(BaseModel):
    """Response schema for a shortened URL."""
    url_id: str
    short_url: str

    @classmethod
    def from_result(cls, result: ShortenResult) -> "ShortenResponse":
        return cls(url_id=result.id, short_url=result.short_code)


class ExpandResponse(BaseModel):
    """Response schema for a resolved short code."""
    original_url: str
    click_count: int
    created_at: str

    @classmethod
    def from_result(cls, result: ExpandResult) -> "ExpandResponse":
        return cls(
            original_url=result.long_url,
            click_count=result.click_count,
            created_at=format_timestamp(result.created_at),
        )


class UrlInfo(BaseModel):
    """One entry in a URL listing."""
    url_id: str
    original_url: str
    short_url: str
    click_count: int
    created_at: str
    last_accessed_at: str

    @classmethod
    def from_record(cls, record: URLRecordRead) -> "UrlInfo":
        return cls(
            url_id=record.id,
            original_url=record.long_url,
            short_url=record.short_code,
            click_count=record.click_count,
            created_at=format_timestamp(record.created_at),
            last_accessed_at=format_timestamp(record.last_accessed_at),
        )


class URLListResponse(BaseModel):
    """Response schema for listing URLs."""
    urls: List[UrlInfo]
    total_count: int
    page: int
    page_size: int

    @classmethod
    def from_page(cls, page: URLPage) -> "URLListResponse":
        return cls(
            urls=[UrlInfo.from_record(record) for record in page.records],
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
        )


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
    error_code: Optional[str] = None  # Machine-readable error code
