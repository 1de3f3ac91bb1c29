"""
Diary operations exposed to the HTTP layer.

Inputs are validated and catalog references checked before any write, so a
rejected request never leaves a partial change behind.
"""

from typing import Dict, List, Optional, Tuple

from pymongo.database import Database

import stats
from catalog import CatalogGateway
from config import settings
from dates import parse_day
from diary_store import DiaryStore
from errors import InvalidReferenceError
from logger import logger
from periods import CALENDAR_PERIODS, COUNT_PERIODS, EMOTION_PERIODS, check_sort, parse_period, resolve
from schemas import DiaryEntry, WriteDiary


class DiaryService:
    def __init__(self, store: DiaryStore, catalog: CatalogGateway):
        self.store = store
        self.catalog = catalog

    @classmethod
    def from_database(cls, db: Database, timeout: Optional[float] = settings.operation_timeout) -> "DiaryService":
        return cls(DiaryStore(db, timeout), CatalogGateway(db, timeout))

    def list_entries(self, owner: str, sort: int, search: Optional[str] = None) -> List[DiaryEntry]:
        check_sort(sort)
        if search:
            return self.store.search_by_content(owner, search, sort)
        return self.store.list_by_owner(owner, sort)

    def list_calendar(self, owner: str, period: str, day: str, sort: int) -> List[DiaryEntry]:
        period_type = parse_period(period, CALENDAR_PERIODS)
        anchor = parse_day(day)
        check_sort(sort)
        span = resolve(period_type, anchor)
        return self.store.list_by_range(owner, span.start, span.end, sort)

    def get_entry(self, owner: str, day: str) -> DiaryEntry:
        return self.store.get_by_day(owner, parse_day(day))

    def write_entry(self, owner: str, request: WriteDiary) -> DiaryEntry:
        entry = request.to_entry(owner)
        if not self.catalog.theme_exists(entry.theme):
            logger.warning(f"Rejected diary for {owner}: unknown theme {entry.theme!r}")
            raise InvalidReferenceError(f"theme {entry.theme!r} does not exist")
        for emotion in entry.emotions:
            if not self.catalog.emotion_exists(emotion):
                logger.warning(f"Rejected diary for {owner}: unknown emotion {emotion!r}")
                raise InvalidReferenceError(f"emotion {emotion!r} does not exist")
        self.store.upsert(entry)
        return entry

    def delete_entry(self, owner: str, day: str) -> None:
        self.store.delete_by_day(owner, parse_day(day))

    def count_entries(self, owner: str, period: str, day: str) -> Tuple[int, int]:
        period_type = parse_period(period, COUNT_PERIODS)
        return stats.count_for_period(self.store, owner, period_type, parse_day(day))

    def count_emotions(self, owner: str, period: str, day: str) -> Dict[str, int]:
        period_type = parse_period(period, EMOTION_PERIODS)
        return stats.emotion_frequency(self.store, self.catalog, owner, period_type, parse_day(day))
