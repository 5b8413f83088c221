"""
Posts component - typed access to blog posts.

Mediates every read and write of Post entities against the persistence
gateway, returning normalized Post models regardless of the raw row shape.

Authorization is row-filter based: writes are predicated on id AND author_id,
so a post owned by someone else is indistinguishable from a missing one
(NotFoundError, never a "forbidden").

Visibility:
- public reads (list_published, get_by_slug, list_categories) only ever see
  status = "published"
- list_mine/get_mine see every status, for the owning author only
"""

from __future__ import annotations

import logging
from uuid import UUID

from src.domain.entities import Post, PostInput
from src.domain.errors import MultipleResultsError, NotFoundError, UnauthenticatedError
from src.domain.state import DEFAULT_CONFIG, LifecycleConfig, prepare_create, prepare_update
from src.ports.clock import ClockPort
from src.ports.gateway import PostGatewayPort

from ._impl import (
    mine_query,
    owned_query,
    parse_post_row,
    parse_rows,
    published_query,
    published_slug_query,
    single_row,
)
from .models import PublishedFilter

logger = logging.getLogger(__name__)


def _require_identity(author_id: UUID | None) -> UUID:
    if author_id is None:
        raise UnauthenticatedError()
    return author_id


class PostRepository:
    """Repository for blog posts, parameterized by an explicit caller identity."""

    def __init__(
        self,
        gateway: PostGatewayPort,
        clock: ClockPort,
        config: LifecycleConfig = DEFAULT_CONFIG,
    ) -> None:
        self._gateway = gateway
        self._clock = clock
        self._config = config

    # --- Public reads ---

    def list_published(
        self,
        search_query: str | None = None,
        category: str | None = None,
    ) -> list[Post]:
        """
        List published posts, most recently published first.

        Args:
            search_query: Case-insensitive substring matched against title,
                content or excerpt (any one field is enough).
            category: Exact category match; None, "" and "all" mean no filter.
        """
        flt = PublishedFilter.build(search_query, category)
        posts = parse_rows(self._gateway.select_posts(published_query(flt)))
        logger.debug(
            "Listed %d published posts (search=%r, category=%r)",
            len(posts),
            flt.search,
            flt.category,
        )
        return posts

    def list_categories(self) -> list[str]:
        """Distinct categories of published posts, sorted."""
        posts = parse_rows(self._gateway.select_posts(published_query(PublishedFilter())))
        return sorted({p.category for p in posts})

    def get_by_slug(self, slug: str) -> Post | None:
        """
        Get a published post by slug.

        Drafts and scheduled posts are reported as not found so they cannot
        leak through guessable URLs.
        """
        if not slug:
            return None

        rows = self._gateway.select_posts(published_slug_query(slug))
        try:
            row = single_row(rows)
        except MultipleResultsError:
            logger.warning("Slug %r matched %d published posts", slug, len(rows))
            return None
        return parse_post_row(row) if row is not None else None

    # --- Author reads ---

    def list_mine(self, author_id: UUID | None) -> list[Post]:
        """List every post owned by author_id, newest first."""
        owner = _require_identity(author_id)
        posts = parse_rows(self._gateway.select_posts(mine_query(owner)))
        logger.debug("Listed %d posts for author %s", len(posts), owner)
        return posts

    def get_mine(self, author_id: UUID | None, post_id: UUID) -> Post:
        """Get one post owned by author_id, in any status."""
        owner = _require_identity(author_id)
        return self._get_owned(owner, post_id)

    def _get_owned(self, owner: UUID, post_id: UUID) -> Post:
        row = single_row(self._gateway.select_posts(owned_query(owner, post_id)))
        if row is None:
            raise NotFoundError()
        return parse_post_row(row)

    # --- Writes ---

    def create(self, author_id: UUID | None, data: PostInput) -> Post:
        """
        Create a post owned by author_id.

        The slug is derived from the title unless supplied. author_id always
        comes from the caller identity, never from the input.

        Raises:
            UnauthenticatedError: no caller identity.
            ValidationFailedError: empty title or unusable slug.
            ConflictError: the slug is already taken.
        """
        owner = _require_identity(author_id)
        record = prepare_create(data, self._clock.now_utc(), self._config)
        record["author_id"] = owner

        post = parse_post_row(self._gateway.insert_post(record))
        logger.info(
            "Created post %s (slug=%s, status=%s) for author %s",
            post.id,
            post.slug,
            post.status,
            owner,
        )
        return post

    def update(self, author_id: UUID | None, post_id: UUID, patch: PostInput) -> Post:
        """
        Apply the fields present in patch to a post owned by author_id.

        Raises:
            UnauthenticatedError: no caller identity.
            NotFoundError: no such post, or not owned by the caller.
            ValidationFailedError: a present field is invalid.
            ConflictError: a new slug is already taken.
        """
        owner = _require_identity(author_id)
        current = self._get_owned(owner, post_id)

        changes = prepare_update(current, patch, self._clock.now_utc(), self._config)
        if not changes:
            return current

        rows = self._gateway.update_posts({"id": post_id, "author_id": owner}, changes)
        row = single_row(rows)
        if row is None:
            # Deleted between the read and the write
            raise NotFoundError()

        post = parse_post_row(row)
        logger.info(
            "Updated post %s fields=%s (status=%s) for author %s",
            post_id,
            sorted(changes),
            post.status,
            owner,
        )
        return post

    def delete(self, author_id: UUID | None, post_id: UUID) -> None:
        """
        Delete a post owned by author_id.

        Idempotent: deleting a missing or foreign post is a no-op.
        """
        owner = _require_identity(author_id)
        affected = self._gateway.delete_posts({"id": post_id, "author_id": owner})
        if affected == 0:
            logger.warning("Delete of post %s by author %s matched no rows", post_id, owner)
        else:
            logger.info("Deleted post %s for author %s", post_id, owner)
