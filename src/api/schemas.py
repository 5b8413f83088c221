from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.domain.entities import PostStatus


# --- Posts ---
class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str
    excerpt: str | None = None
    content: str
    thumbnail_url: str | None = None
    author_id: UUID
    author_display_name: str | None = None
    category: str
    tags: list[str] | None = None
    status: PostStatus
    scheduled_at: datetime | None = None
    published_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


# --- Images ---
class ImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    url: str
    size_bytes: int
    content_type: str


# --- Authors ---
class AuthorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    display_name: str | None = None


class Token(BaseModel):
    access_token: str
    token_type: str
