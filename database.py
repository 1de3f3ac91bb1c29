from functools import lru_cache
from typing import Any, Dict

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from config import settings
from logger import logger

DIARIES = "diaries"
THEMES = "themes"
EMOTIONS = "emotions"


@lru_cache()
def get_client() -> MongoClient:
    # MongoClient is thread-safe and connects lazily; one per process
    return MongoClient(settings.database_url)


def get_database() -> Database:
    return get_client()[settings.database_name]


def get_collection(db: Database, name: str) -> Collection:
    return db[name]


def ensure_indexes(db: Database, unique_day: bool = settings.enforce_unique_day) -> None:
    db[DIARIES].create_index(
        [("user_id", ASCENDING), ("date", ASCENDING)],
        name="user_day",
        unique=unique_day,
    )
    db[THEMES].create_index("name", name="theme_name")
    db[EMOTIONS].create_index("name", name="emotion_name")
    logger.info(f"Indexes ensured on {db.name} (unique day: {unique_day})")


def describe(db: Database) -> Dict[str, Any]:
    """Connectivity report served by ``/test``."""
    response: Dict[str, Any] = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_name": db.name,
        "connection_status": "Not Connected",
        "collections": [],
    }
    try:
        collections = db.list_collection_names()
        response["collections"] = collections[:10]
        response["database"] = "✅ Connected & Working"
        response["connection_status"] = "Connected"
    except Exception as e:
        logger.error(f"Database check failed: {e}")
        response["database"] = f"⚠️  Connected but Error: {str(e)[:50]}"
    return response
