"""Posts component models - raw gateway row shape and list filters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.domain.entities import PostStatus

# Category filter value meaning "no category filter"
ALL_CATEGORIES = "all"


class PostRow(BaseModel):
    """
    Raw row as returned by the gateway.

    Every stored column is required (nullable ones may be None) so a row
    with a missing or mistyped column fails validation instead of silently
    picking up a default.
    """

    model_config = ConfigDict(extra="ignore")

    id: UUID
    title: str
    slug: str
    excerpt: str | None
    content: str
    thumbnail_url: str | None
    author_id: UUID
    category: str
    tags: list[str] | None
    status: PostStatus
    scheduled_at: datetime | None
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime
    author_display_name: str | None = None


@dataclass(frozen=True)
class PublishedFilter:
    """Normalized public listing filter."""

    search: str | None = None
    category: str | None = None

    @classmethod
    def build(cls, search_query: str | None, category: str | None) -> PublishedFilter:
        search = search_query.strip() if search_query else None
        if not category or category == ALL_CATEGORIES:
            category = None
        return cls(search=search or None, category=category)
