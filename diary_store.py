"""
MongoDB persistence for diary entries.

Entries are keyed by ``(user_id, date)``. Every lookup by day matches the
whole 24 hour span of that day rather than an exact timestamp, so documents
written with a time-of-day still resolve to their calendar day.
"""

import re
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Union

import pymongo
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

import dates
from config import settings
from database import DIARIES, get_collection
from errors import NotFoundError, OperationCancelled, StorageError
from logger import logger
from periods import check_sort
from schemas import DiaryEntry

Day = Union[date, datetime]


@contextmanager
def store_call(what: str, timeout: Optional[float]) -> Iterator[None]:
    """
    Run a store round-trip under ``timeout`` seconds.

    Driver errors become :class:`StorageError`; an expired deadline becomes
    :class:`OperationCancelled`.
    """
    try:
        with pymongo.timeout(timeout):
            yield
    except PyMongoError as e:
        if e.timeout:
            logger.warning(f"{what} cancelled after {timeout}s: {e}")
            raise OperationCancelled(f"{what} timed out") from e
        logger.error(f"{what} failed: {e}")
        raise StorageError(f"{what} failed") from e


def _day_filter(owner: str, day: Day) -> Dict[str, Any]:
    start, end = dates.day_range(day)
    return {"user_id": owner, "date": {"$gte": start, "$lt": end}}


class DiaryStore:
    """CRUD and range queries over the ``diaries`` collection."""

    def __init__(self, db: Database, timeout: Optional[float] = settings.operation_timeout):
        self.collection: Collection = get_collection(db, DIARIES)
        self.timeout = timeout

    def _find(self, what: str, query: Dict[str, Any], sort: int) -> List[DiaryEntry]:
        check_sort(sort)
        with store_call(what, self.timeout):
            cursor = self.collection.find(query).sort("date", sort)
            return [DiaryEntry.from_document(doc) for doc in cursor]

    def get_by_day(self, owner: str, day: Day) -> DiaryEntry:
        with store_call("get diary", self.timeout):
            doc = self.collection.find_one(_day_filter(owner, day))
        if doc is None:
            raise NotFoundError(f"no diary on {dates.format_day(day)}")
        return DiaryEntry.from_document(doc)

    def list_by_owner(self, owner: str, sort: int) -> List[DiaryEntry]:
        return self._find("list diaries", {"user_id": owner}, sort)

    def list_by_range(self, owner: str, start: datetime, end: datetime, sort: int) -> List[DiaryEntry]:
        query = {"user_id": owner, "date": {"$gte": start, "$lt": end}}
        return self._find("list diaries in range", query, sort)

    def search_by_content(self, owner: str, substring: str, sort: int) -> List[DiaryEntry]:
        # literal, unanchored substring match
        query = {"user_id": owner, "content": {"$regex": re.escape(substring)}}
        return self._find("search diaries", query, sort)

    def upsert(self, entry: DiaryEntry) -> None:
        """
        Insert the entry for its day, or replace the existing one in place.

        A single ``update_one(upsert=True)`` keeps concurrent writers for the
        same day from both inserting; the one that loses the race on the
        unique day index falls back to updating the winner's document. The
        day itself is only written on insert, so later writes never move an
        entry to another day.
        """
        now = datetime.now(timezone.utc)
        update = {
            "$set": {
                "content": entry.content,
                "image": entry.image,
                "emotions": list(entry.emotions),
                "theme": entry.theme,
                "updated_at": now,
            },
            "$setOnInsert": {
                "date": dates.normalize(entry.day),
                "created_at": now,
            },
        }
        query = _day_filter(entry.owner, entry.day)
        with store_call("write diary", self.timeout):
            try:
                result = self.collection.update_one(query, update, upsert=True)
            except DuplicateKeyError:
                # a concurrent first write for this day inserted it first
                logger.info(f"Diary for {entry.owner} on {dates.format_day(entry.day)} created concurrently, updating")
                result = self.collection.update_one(query, {"$set": update["$set"]})
        action = "created" if result.upserted_id is not None else "updated"
        logger.info(f"Diary {action}: user={entry.owner} date={dates.format_day(entry.day)}")

    def delete_by_day(self, owner: str, day: Day) -> bool:
        with store_call("delete diary", self.timeout):
            result = self.collection.delete_one(_day_filter(owner, day))
        deleted = result.deleted_count > 0
        if deleted:
            logger.info(f"Diary deleted: user={owner} date={dates.format_day(day)}")
        else:
            logger.info(f"No diary to delete: user={owner} date={dates.format_day(day)}")
        return deleted

    def count_in_range(self, owner: str, start: datetime, end: datetime) -> int:
        query = {"user_id": owner, "date": {"$gte": start, "$lt": end}}
        with store_call("count diaries", self.timeout):
            return self.collection.count_documents(query)
