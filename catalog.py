"""Read-only lookups against the theme and emotion catalogs."""

from typing import Optional, Set

from pymongo.database import Database

from config import settings
from database import EMOTIONS, THEMES, get_collection
from diary_store import store_call


class CatalogGateway:
    def __init__(self, db: Database, timeout: Optional[float] = settings.operation_timeout):
        self.themes = get_collection(db, THEMES)
        self.emotions = get_collection(db, EMOTIONS)
        self.timeout = timeout

    def theme_exists(self, name: str) -> bool:
        with store_call("theme lookup", self.timeout):
            return self.themes.find_one({"name": name}, {"_id": 1}) is not None

    def emotion_exists(self, name: str) -> bool:
        with store_call("emotion lookup", self.timeout):
            return self.emotions.find_one({"name": name}, {"_id": 1}) is not None

    def all_emotion_names(self) -> Set[str]:
        with store_call("emotion listing", self.timeout):
            return set(self.emotions.distinct("name"))
