from __future__ import annotations

from bson import ObjectId


def test_create_post_expands_author(client, make_user) -> None:
    author = make_user()

    response = client.post("/api/posts", json={"title": " T ", "content": "C", "author": author["id"]})

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Post created successfully"
    post = body["data"]
    assert ObjectId.is_valid(post["id"])
    assert post["title"] == "T"
    assert post["content"] == "C"
    assert post["author"] == {"id": author["id"], "name": "Ann", "email": "ann@x.com"}


def test_list_posts_newest_first_with_authors(client, make_user) -> None:
    ann = make_user()
    bob = make_user(name="Bob", email="bob@x.com")
    older = client.post("/api/posts", json={"title": "Old", "content": "C", "author": ann["id"]}).json()["data"]
    newer = client.post("/api/posts", json={"title": "New", "content": "C", "author": bob["id"]}).json()["data"]

    body = client.get("/api/posts").json()

    assert body["success"] is True
    assert body["count"] == 2
    assert [post["id"] for post in body["data"]] == [newer["id"], older["id"]]
    assert body["data"][0]["author"] == {"id": bob["id"], "name": "Bob", "email": "bob@x.com"}
    assert body["data"][1]["author"]["name"] == "Ann"


def test_create_post_requires_all_fields(client, make_user) -> None:
    author = make_user()

    response = client.post("/api/posts", json={"title": "T", "author": author["id"]})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Title, content, and author are required"}


def test_non_object_post_body_is_rejected(client, store) -> None:
    response = client.post("/api/posts", json=["T", "C"])

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert store.posts.count_documents({}) == 0


def test_unknown_author_is_rejected_and_nothing_is_stored(client, store) -> None:
    response = client.post("/api/posts", json={"title": "T", "content": "C", "author": str(ObjectId())})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Author not found"}
    assert client.get("/api/posts").json()["count"] == 0
    assert store.posts.count_documents({}) == 0


def test_malformed_author_id_is_reported_as_missing_author(client) -> None:
    response = client.post("/api/posts", json={"title": "T", "content": "C", "author": "nope"})

    assert response.status_code == 400
    assert response.json()["message"] == "Author not found"


def test_posts_keep_dangling_author_after_user_delete(client, make_user, store) -> None:
    author = make_user()
    client.post("/api/posts", json={"title": "T", "content": "C", "author": author["id"]})

    assert client.delete(f"/api/users/{author['id']}").status_code == 200

    body = client.get("/api/posts").json()
    assert body["count"] == 1
    assert body["data"][0]["author"] is None
    assert store.posts.find_one()["author"] == ObjectId(author["id"])


def test_posts_have_no_update_or_delete_routes(client, make_user) -> None:
    author = make_user()
    post = client.post("/api/posts", json={"title": "T", "content": "C", "author": author["id"]}).json()["data"]

    assert client.put(f"/api/posts/{post['id']}", json={"title": "X"}).status_code == 404
    assert client.delete(f"/api/posts/{post['id']}").status_code == 404
    assert client.delete("/api/posts").json() == {"success": False, "message": "Route not found"}
