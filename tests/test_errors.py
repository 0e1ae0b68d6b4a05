from __future__ import annotations

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from blog_api.app.core.config import Settings
from blog_api.app.core.db import MongoStore
from blog_api.app.main import create_app
from blog_api.app.services.user_service import UserService


class UnavailableCollection:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ServerSelectionTimeoutError("connection refused")

        return fail


def _client_for(environment: str, store: MongoStore) -> TestClient:
    app = create_app(settings=Settings(environment=environment), store=store)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def broken_users(monkeypatch) -> None:
    monkeypatch.setattr(MongoStore, "users", property(lambda self: UnavailableCollection()))
    monkeypatch.setattr(MongoStore, "ensure_indexes", lambda self: None)


def test_store_failure_echoes_detail_in_development(store, broken_users) -> None:
    with _client_for("development", store) as client:
        response = client.get("/api/users")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Failed to fetch users",
        "error": "connection refused",
    }


def test_store_failure_hides_detail_outside_development(store, broken_users) -> None:
    with _client_for("production", store) as client:
        response = client.post("/api/users", json={"name": "Ann", "email": "ann@x.com"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Failed to create user"}


def test_unexpected_error_detail_depends_on_environment(store, monkeypatch) -> None:
    def explode(self):
        raise RuntimeError("boom")

    monkeypatch.setattr(UserService, "list_users", explode)

    with _client_for("development", store) as client:
        development = client.get("/api/users")
    with _client_for("production", store) as client:
        production = client.get("/api/users")

    assert development.status_code == 500
    assert development.json() == {"success": False, "message": "Internal server error", "error": "boom"}
    assert production.json() == {
        "success": False,
        "message": "Internal server error",
        "error": "Something went wrong",
    }


def test_startup_fails_when_store_is_unreachable(monkeypatch) -> None:
    def refuse(*args, **kwargs):
        raise ServerSelectionTimeoutError("no servers available")

    monkeypatch.setattr(MongoStore, "connect", refuse)
    app = create_app(settings=Settings(environment="test"))

    with pytest.raises(ServerSelectionTimeoutError):
        with TestClient(app):
            pass


def test_owned_store_is_connected_at_startup_and_closed_at_shutdown(monkeypatch) -> None:
    closed = []
    connected = MongoStore(mongomock.MongoClient(), "lifecycle")
    monkeypatch.setattr(MongoStore, "connect", lambda *args, **kwargs: connected)
    monkeypatch.setattr(connected, "close", lambda: closed.append(True))
    app = create_app(settings=Settings(environment="test"))

    with TestClient(app) as client:
        assert app.state.store is connected
        assert client.get("/api/users").json()["count"] == 0

    assert closed == [True]
    assert app.state.store is None
