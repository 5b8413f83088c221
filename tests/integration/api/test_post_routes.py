"""Integration tests for the authoring routes."""

from uuid import uuid4


def create(client, headers, **body):
    return client.post("/api/posts", json=body, headers=headers)


def test_requires_authentication(client):
    assert client.get("/api/posts").status_code == 401
    resp = client.post("/api/posts", json={"title": "Nope"})
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"
    assert client.delete(f"/api/posts/{uuid4()}").status_code == 401


def test_invalid_token_is_unauthenticated(client):
    resp = client.get("/api/posts", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_create_and_read_back(client, auth_headers, author):
    resp = create(
        client,
        auth_headers,
        title="Hello, World! 2024",
        content="Body",
        tags=["intro"],
        author_id=str(uuid4()),
    )
    assert resp.status_code == 201
    post = resp.json()
    assert post["slug"] == "hello-world-2024"
    assert post["status"] == "draft"
    assert post["category"] == "general"
    assert post["published_at"] is None
    assert post["author_id"] == str(author.id)
    assert post["author_display_name"] == "Ada"

    fetched = client.get(f"/api/posts/{post['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json() == post


def test_create_validation_errors(client, auth_headers):
    resp = create(client, auth_headers, title="   ")
    assert resp.status_code == 422
    body = resp.json()
    assert body["errors"][0]["code"] == "title_required"
    assert body["errors"][0]["field"] == "title"


def test_create_slug_conflict(client, auth_headers, other_headers):
    assert create(client, auth_headers, title="Same").status_code == 201
    resp = create(client, other_headers, title="same")
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Slug 'same' already exists"


def test_list_mine(client, auth_headers, other_headers, clock):
    create(client, auth_headers, title="Older")
    clock.advance(minutes=1)
    create(client, auth_headers, title="Newer", status="published")
    create(client, other_headers, title="Theirs")

    resp = client.get("/api/posts", headers=auth_headers)
    assert resp.status_code == 200
    assert [p["title"] for p in resp.json()] == ["Newer", "Older"]


def test_patch_applies_present_fields(client, auth_headers, clock):
    post = create(client, auth_headers, title="Draft", excerpt="Keep me").json()
    clock.advance(minutes=10)

    resp = client.patch(
        f"/api/posts/{post['id']}", json={"status": "published"}, headers=auth_headers
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["status"] == "published"
    assert updated["excerpt"] == "Keep me"
    assert updated["title"] == "Draft"
    assert updated["published_at"] is not None
    assert updated["updated_at"] > post["updated_at"]


def test_patch_by_non_owner_is_not_found(client, auth_headers, other_headers):
    post = create(client, auth_headers, title="Mine").json()

    resp = client.patch(
        f"/api/posts/{post['id']}", json={"title": "Theirs"}, headers=other_headers
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Post not found"
    assert client.get(f"/api/posts/{post['id']}", headers=other_headers).status_code == 404


def test_patch_missing_post_is_not_found(client, auth_headers):
    resp = client.patch(f"/api/posts/{uuid4()}", json={"title": "x"}, headers=auth_headers)
    assert resp.status_code == 404


def test_delete_is_idempotent(client, auth_headers, other_headers):
    post = create(client, auth_headers, title="Short Lived").json()

    assert client.delete(f"/api/posts/{post['id']}", headers=other_headers).status_code == 204
    assert client.get(f"/api/posts/{post['id']}", headers=auth_headers).status_code == 200

    assert client.delete(f"/api/posts/{post['id']}", headers=auth_headers).status_code == 204
    assert client.delete(f"/api/posts/{post['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/api/posts/{post['id']}", headers=auth_headers).status_code == 404
