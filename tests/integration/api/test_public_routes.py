"""Integration tests for the public reading routes."""

import pytest

from src.domain.entities import PostInput


@pytest.fixture
def seeded(repository, author, clock):
    """Three published posts across two categories, plus a draft and a scheduled post."""
    posts = {}
    for title, category in [
        ("Logo Design Basics", "design"),
        ("Brand Voice", "branding"),
        ("Colour Theory", "design"),
    ]:
        posts[title] = repository.create(
            author.id, PostInput(title=title, category=category, status="published")
        )
        clock.advance(minutes=1)
    posts["Secret Draft"] = repository.create(author.id, PostInput(title="Secret Draft"))
    posts["Coming Soon"] = repository.create(
        author.id, PostInput(title="Coming Soon", status="scheduled")
    )
    return posts


def test_list_published_newest_first(client, seeded):
    resp = client.get("/api/public/posts")
    assert resp.status_code == 200
    assert [p["title"] for p in resp.json()] == [
        "Colour Theory",
        "Brand Voice",
        "Logo Design Basics",
    ]


def test_list_published_by_category(client, seeded):
    titles = [p["title"] for p in client.get("/api/public/posts?category=design").json()]
    assert titles == ["Colour Theory", "Logo Design Basics"]

    everything = client.get("/api/public/posts?category=all").json()
    assert len(everything) == 3


def test_list_published_search(client, seeded):
    resp = client.get("/api/public/posts", params={"q": "  LOGO "})
    assert [p["title"] for p in resp.json()] == ["Logo Design Basics"]

    assert client.get("/api/public/posts", params={"q": "secret"}).json() == []


def test_empty_listing_is_not_an_error(client):
    resp = client.get("/api/public/posts")
    assert resp.status_code == 200
    assert resp.json() == []


def test_get_by_slug(client, seeded):
    resp = client.get("/api/public/posts/brand-voice")
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Brand Voice"
    assert body["author_display_name"] == "Ada"


@pytest.mark.parametrize("slug", ["secret-draft", "coming-soon", "no-such-post"])
def test_unpublished_and_missing_slugs_are_not_found(client, seeded, slug):
    resp = client.get(f"/api/public/posts/{slug}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Post not found"


def test_categories(client, seeded):
    assert client.get("/api/public/categories").json() == ["branding", "design"]


def test_category_suggestions_come_from_rules(client, rules):
    resp = client.get("/api/public/categories/suggestions")
    assert resp.status_code == 200
    assert resp.json() == rules.content.categories
    assert "web-development" in resp.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "service": "api"}
