"""
Posts component internals: query composition and row parsing.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import ValidationError

from src.domain.entities import Post
from src.domain.errors import MalformedRowError, MultipleResultsError
from src.ports.gateway import INSERTION_ORDER, Order, PostQuery

from .models import PostRow, PublishedFilter

# --- Query composition ---


def published_query(flt: PublishedFilter) -> PostQuery:
    """Published posts, newest publication first, ties in insertion order."""
    equals: dict[str, Any] = {"status": "published"}
    if flt.category is not None:
        equals["category"] = flt.category
    return PostQuery(
        equals=equals,
        search=flt.search,
        order_by=(Order("published_at", descending=True), Order(INSERTION_ORDER)),
    )


def mine_query(author_id: UUID) -> PostQuery:
    """Every post of one author, most recently created first."""
    return PostQuery(
        equals={"author_id": author_id},
        order_by=(
            Order("created_at", descending=True),
            Order(INSERTION_ORDER, descending=True),
        ),
    )


def owned_query(author_id: UUID, post_id: UUID) -> PostQuery:
    return PostQuery(equals={"id": post_id, "author_id": author_id}, limit=1)


def published_slug_query(slug: str) -> PostQuery:
    # Limit 2 is enough to detect a uniqueness violation
    return PostQuery(equals={"slug": slug, "status": "published"}, limit=2)


# --- Row parsing ---


def parse_post_row(row: dict[str, Any]) -> Post:
    """
    Parse one raw gateway row into a Post.

    Raises:
        MalformedRowError: if the row does not have the expected shape.
    """
    try:
        parsed = PostRow.model_validate(row)
    except ValidationError as e:
        raise MalformedRowError(f"Unexpected post row shape: {e}") from e
    return Post(**parsed.model_dump())


def parse_rows(rows: list[dict[str, Any]]) -> list[Post]:
    return [parse_post_row(r) for r in rows]


def single_row(rows: list[dict[str, Any]]) -> dict[str, Any] | None:
    """Return the only row, None for no rows, or raise on several."""
    if not rows:
        return None
    if len(rows) > 1:
        raise MultipleResultsError(f"Expected one row, got {len(rows)}")
    return rows[0]
