"""In-memory URL store.

Keeps records in dictionaries on the event loop. Each operation completes
without yielding, so it is atomic with respect to other coroutines. Used by
the service and API tests and for running the application without a database.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from url_service.models.url import URLRecord, utcnow
from url_service.repositories.base import DuplicateEntityError


class InMemoryURLRepository:
    """URLStore implementation backed by dictionaries."""

    def __init__(self):
        self._by_id: Dict[str, URLRecord] = {}
        self._id_by_code: Dict[str, str] = {}

    async def save(self, record: URLRecord) -> None:
        if record.id in self._by_id:
            raise DuplicateEntityError(URLRecord, "id", record.id)
        if record.short_code in self._id_by_code:
            raise DuplicateEntityError(URLRecord, "short_code", record.short_code)

        stored = record.copy_record()
        self._by_id[stored.id] = stored
        self._id_by_code[stored.short_code] = stored.id

    async def find_by_long_url(self, long_url: str) -> Optional[URLRecord]:
        for record in self._by_id.values():
            if record.long_url == long_url:
                return record.copy_record()
        return None

    async def find_by_short_code(self, short_code: str) -> Optional[URLRecord]:
        record_id = self._id_by_code.get(short_code)
        if record_id is None:
            return None
        return self._by_id[record_id].copy_record()

    async def increment_click(self, short_code: str) -> None:
        record_id = self._id_by_code.get(short_code)
        if record_id is None:
            return
        record = self._by_id[record_id]
        record.click_count += 1
        record.last_accessed_at = utcnow()

    async def list(self, offset: int, limit: int) -> Tuple[Sequence[URLRecord], int]:
        ordered: List[URLRecord] = sorted(
            self._by_id.values(),
            key=lambda r: (r.created_at, r.id),
            reverse=True,
        )
        window = ordered[offset:offset + limit]
        return [record.copy_record() for record in window], len(ordered)

    def __len__(self) -> int:
        return len(self._by_id)
