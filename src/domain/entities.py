from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
PostStatus = Literal["draft", "published", "scheduled"]

DEFAULT_CATEGORY = "general"
DEFAULT_STATUS: PostStatus = "draft"


def utc_now() -> datetime:
    return datetime.now(UTC)


# --- Authors ---

class Author(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    email: str
    display_name: str | None = None
    password_hash: str
    created_at: datetime = Field(default_factory=utc_now)


# --- Posts ---

class Post(BaseModel):
    id: UUID
    title: str
    slug: str
    excerpt: str | None = None
    content: str = ""
    thumbnail_url: str | None = None

    author_id: UUID
    category: str = DEFAULT_CATEGORY
    tags: list[str] | None = None
    status: PostStatus = DEFAULT_STATUS

    scheduled_at: datetime | None = None
    published_at: datetime | None = None

    created_at: datetime
    updated_at: datetime

    # Read-only join from the authors relation
    author_display_name: str | None = None


class PostInput(BaseModel):
    """
    Mutable post fields for create and patch operations.

    Only fields explicitly set by the caller are applied on update; an
    explicit ``None`` is kept apart from an absent field via
    ``model_fields_set``. Unknown keys (author_id, id, timestamps,
    profiles) are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    slug: str | None = None
    excerpt: str | None = None
    content: str | None = None
    thumbnail_url: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    status: PostStatus | None = None
    scheduled_at: datetime | None = None
    published_at: datetime | None = None

    def present_fields(self) -> dict[str, object]:
        """Return only the fields the caller actually supplied."""
        return {name: getattr(self, name) for name in self.model_fields_set}
