"""URL record data models.

This module defines the URLRecord table model and the schemas the
services return to their callers.
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import DateTime, Index
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class URLRecordBase(SQLModel):
    """Fields shared by the table model and its read schema."""

    long_url: str = Field(
        description="The original (long) URL"
    )
    short_code: str = Field(
        max_length=10,
        unique=True,
        description="Deterministic code derived from the long URL",
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        description="Timestamp when this record was created"
    )
    click_count: int = Field(
        default=0,
        ge=0,
        description="Number of successful resolutions"
    )
    last_accessed_at: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),
        description="Time of the most recent resolution (null means never)"
    )


class URLRecord(URLRecordBase, table=True):
    """
    URL record stored in the database.

    One row exists per distinct long URL. The short code is unique across
    all rows, and the click counter only ever moves up.
    """

    __tablename__ = "urls"

    id: str = Field(primary_key=True, max_length=50)

    __table_args__ = (
        Index("ix_urls_long_url", "long_url"),
        Index("ix_urls_created_at", "created_at"),
    )

    def copy_record(self) -> "URLRecord":
        """Return a detached copy with the same field values."""
        return URLRecord(**self.model_dump())


class URLRecordRead(URLRecordBase):
    """Schema for reading a URL record."""
    id: str


class ShortenResult(SQLModel):
    """Outcome of shortening a URL."""
    id: str
    short_code: str


class ExpandResult(SQLModel):
    """Outcome of resolving a short code, as read before the click is counted."""
    long_url: str
    click_count: int
    created_at: datetime


class URLPage(SQLModel):
    """One page of URL records, newest first."""
    records: List[URLRecordRead]
    total_count: int
    page: int
    page_size: int
