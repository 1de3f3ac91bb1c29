from __future__ import annotations

import mongomock
import pytest
from fastapi.testclient import TestClient
from jose import jwt

from config import settings
from catalog import CatalogGateway
from database import get_database
from diary_service import DiaryService
from diary_store import DiaryStore
from main import app

THEMES = ["sunny", "rainy"]
EMOTIONS = ["joy", "calm", "anger"]


@pytest.fixture
def db():
    database = mongomock.MongoClient()["diary_test"]
    database["themes"].insert_many([{"name": name} for name in THEMES])
    database["emotions"].insert_many([{"name": name} for name in EMOTIONS])
    return database


@pytest.fixture
def store(db) -> DiaryStore:
    return DiaryStore(db)


@pytest.fixture
def catalog(db) -> CatalogGateway:
    return CatalogGateway(db)


@pytest.fixture
def service(store: DiaryStore, catalog: CatalogGateway) -> DiaryService:
    return DiaryService(store, catalog)


def make_token(owner: str) -> str:
    return jwt.encode({"id": owner}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


@pytest.fixture
def client(db):
    app.dependency_overrides[get_database] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def headers_for():
    def build(owner: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(owner)}"}

    return build


@pytest.fixture
def auth_headers(headers_for) -> dict[str, str]:
    return headers_for("u1")
