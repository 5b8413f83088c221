import sqlite3
from datetime import timedelta

import pytest

from src.api.auth_utils import create_access_token, get_password_hash
from src.domain.entities import Author


@pytest.fixture
def writer(author_repo):
    return author_repo.save(
        Author(
            email="writer@example.com",
            display_name="Writer",
            password_hash=get_password_hash("secret123"),
        )
    )


def login(client, email, password):
    return client.post("/api/auth/login", data={"username": email, "password": password})


def test_login_sets_cookie_and_returns_token(client, writer):
    resp = login(client, "Writer@Example.com", "secret123")
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert "access_token" in resp.cookies

    # Bearer header
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json() == {
        "id": str(writer.id),
        "email": "writer@example.com",
        "display_name": "Writer",
    }


def test_cookie_session_can_author_posts(client, writer):
    login(client, "writer@example.com", "secret123")

    resp = client.post("/api/posts", json={"title": "Via Cookie"})
    assert resp.status_code == 201
    assert resp.json()["author_id"] == str(writer.id)

    client.post("/api/auth/logout")
    client.cookies.clear()
    assert client.get("/api/auth/me").status_code == 401


def test_wrong_password(client, writer):
    resp = login(client, "writer@example.com", "wrong")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Incorrect username or password"


def test_unknown_email(client):
    assert login(client, "nobody@example.com", "secret123").status_code == 401


def test_me_requires_authentication(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_expired_token_is_rejected(client, author, api_settings):
    token = create_access_token(
        author.id, api_settings.secret_key, expires_delta=timedelta(minutes=-1)
    )
    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_token_signed_with_other_key_is_rejected(client, author):
    token = create_access_token(author.id, "someone-else")
    resp = client.get("/api/posts", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_token_for_deleted_author_is_rejected(client, author, db_path, make_headers):
    headers = make_headers(author)
    conn = sqlite3.connect(db_path)
    conn.execute("DELETE FROM authors WHERE id = ?", (str(author.id),))
    conn.commit()
    conn.close()

    assert client.get("/api/posts", headers=headers).status_code == 401
