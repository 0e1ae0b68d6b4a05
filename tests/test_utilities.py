from __future__ import annotations

from datetime import datetime

from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from blog_api.app.core.config import Settings
from blog_api.app.main import create_app


def test_health_reports_connected_store(client, store, monkeypatch) -> None:
    monkeypatch.setattr(store, "ping", lambda timeout_ms=None: None)

    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["message"] == "Server is running!"
    assert body["environment"] == "development"
    assert body["database"] == "Connected"
    datetime.fromisoformat(body["timestamp"])


def test_health_reports_disconnected_store(client, store, monkeypatch) -> None:
    def unreachable(timeout_ms=None) -> None:
        raise ServerSelectionTimeoutError("no servers available")

    monkeypatch.setattr(store, "ping", unreachable)

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["database"] == "Disconnected"


def test_health_ping_uses_short_timeout(store, monkeypatch) -> None:
    seen = []
    monkeypatch.setattr(store, "ping", lambda timeout_ms=None: seen.append(timeout_ms))
    app = create_app(settings=Settings(environment="development", health_timeout_ms=250), store=store)

    with TestClient(app) as client:
        response = client.get("/api/health")

    assert response.json()["database"] == "Connected"
    assert seen == [250]


def test_health_timeout_defaults_to_one_second(monkeypatch) -> None:
    monkeypatch.delenv("HEALTH_TIMEOUT_MS", raising=False)

    assert Settings().health_timeout_ms == 1000


def test_api_index_lists_routes(client) -> None:
    body = client.get("/api").json()

    assert body["message"] == "Blog API"
    assert body["version"] == "1.0.0"
    assert body["endpoints"]["health"] == "GET /api/health"
    assert body["endpoints"]["users"]["delete"] == "DELETE /api/users/:id"
    assert body["endpoints"]["posts"] == {"getAll": "GET /api/posts", "create": "POST /api/posts"}
    assert body["endpoints"]["utilities"] == {"seed": "POST /api/seed"}


def test_seed_twice_leaves_three_users_and_three_posts(client, make_user) -> None:
    make_user(email="extra@x.com")

    first = client.post("/api/seed")
    second = client.post("/api/seed")

    assert first.status_code == 200
    assert second.json() == {
        "success": True,
        "message": "Database seeded successfully",
        "data": {"users": 3, "posts": 3},
    }
    users = client.get("/api/users").json()
    posts = client.get("/api/posts").json()
    assert users["count"] == 3
    assert posts["count"] == 3
    assert "extra@x.com" not in {user["email"] for user in users["data"]}
    assert {post["author"]["email"] for post in posts["data"]} == {"john@example.com", "jane@example.com"}


def test_seed_route_is_absent_when_disabled(store) -> None:
    app = create_app(settings=Settings(environment="production"), store=store)

    with TestClient(app) as client:
        response = client.post("/api/seed")
        index = client.get("/api").json()

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Route not found"}
    assert "utilities" not in index["endpoints"]


def test_unknown_route_is_not_found(client) -> None:
    response = client.get("/api/comments")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Route not found"}
