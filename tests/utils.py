"""Test utilities for URL service tests."""

import random
import string
from datetime import datetime, timedelta
from typing import Optional

from url_service.models.url import URLRecord, utcnow
from url_service.services.codes import generate_short_code
from url_service.services.shortener import new_url_id


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8).lower()}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


def make_record(
    long_url: Optional[str] = None,
    short_code: Optional[str] = None,
    created_at: Optional[datetime] = None,
    click_count: int = 0,
    last_accessed_at: Optional[datetime] = None,
) -> URLRecord:
    """Build an unsaved URLRecord with sensible defaults."""
    long_url = long_url or random_url()
    return URLRecord(
        id=new_url_id(),
        long_url=long_url,
        short_code=short_code or generate_short_code(long_url),
        created_at=created_at or utcnow(),
        click_count=click_count,
        last_accessed_at=last_accessed_at,
    )


async def seed_records(store, count: int, start: Optional[datetime] = None):
    """
    Save ``count`` records with strictly increasing creation times.

    Returns the saved records, oldest first.
    """
    start = start or utcnow() - timedelta(hours=1)
    records = []
    for i in range(count):
        record = make_record(created_at=start + timedelta(seconds=i))
        await store.save(record)
        records.append(record)
    return records
