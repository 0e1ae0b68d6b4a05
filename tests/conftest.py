from __future__ import annotations

from typing import Iterator

import mongomock
import pytest
from fastapi.testclient import TestClient

from blog_api.app.core.config import Settings
from blog_api.app.core.db import MongoStore
from blog_api.app.main import create_app


@pytest.fixture()
def store() -> MongoStore:
    return MongoStore(mongomock.MongoClient(), "blog_api_tests")


@pytest.fixture()
def settings() -> Settings:
    return Settings(environment="development", enable_seed=True)


@pytest.fixture()
def client(store: MongoStore, settings: Settings) -> Iterator[TestClient]:
    app = create_app(settings=settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_user(client: TestClient):
    def _make_user(**fields) -> dict:
        payload = {"name": "Ann", "email": "ann@x.com"}
        payload.update(fields)
        response = client.post("/api/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make_user
