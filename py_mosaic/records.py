"""
Check-in record storage.

Durable storage belongs to the host application; sessions only talk to the
``CheckinRepository`` protocol. The in-memory implementation backs the API
and the tests.
"""

from typing import Dict, Optional, Protocol

import structlog

from .models import CheckinRecord

logger = structlog.get_logger()


class CheckinRepository(Protocol):
    def load(self, date: str) -> Optional[CheckinRecord]: ...

    def save(self, record: CheckinRecord) -> None: ...


class InMemoryCheckinRepository:
    """Keeps one record per date in a dict."""

    def __init__(self):
        self._records: Dict[str, CheckinRecord] = {}

    def load(self, date: str) -> Optional[CheckinRecord]:
        record = self._records.get(date)
        return record.model_copy(deep=True) if record is not None else None

    def save(self, record: CheckinRecord) -> None:
        self._records[record.date] = record.model_copy(deep=True)
        logger.debug("Check-in record saved", date=record.date,
                     revealed=len(record.revealed_region_ids), score=record.score_total)

    def __len__(self) -> int:
        return len(self._records)
