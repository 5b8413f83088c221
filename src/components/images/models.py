"""Images component models - frozen dataclass inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UploadImageInput:
    """Input for uploading a post image."""

    author_id: UUID | None
    data: bytes
    filename: str
    content_type: str
    post_slug: str | None = None


@dataclass(frozen=True)
class UploadedImage:
    """A stored image and the public URL it resolves at."""

    key: str
    url: str
    size_bytes: int
    content_type: str
