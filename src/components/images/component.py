"""
Images component - post image upload to object storage.

Objects are keyed "{owner_scope}/{timestamp_ms}.{extension}" where owner_scope
is the post's slug, or "general" while the post has none yet. Collisions are
avoided by the millisecond timestamp, not by content hashing.

Invariants:
- only allowlisted image/* MIME types are stored
- payload size never exceeds the configured limit
- the returned URL is publicly resolvable
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import PurePosixPath

from src.domain.errors import (
    FieldError,
    GatewayUnavailableError,
    UnauthenticatedError,
    ValidationFailedError,
)
from src.domain.slug import is_valid_slug
from src.ports.clock import ClockPort
from src.ports.filestore import ObjectStorePort

from .models import UploadedImage, UploadImageInput
from .ports import UploadRulesPort

logger = logging.getLogger(__name__)

PLACEHOLDER_SCOPE = "general"

_MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
    "image/svg+xml": "svg",
    "image/avif": "avif",
}
_EXTENSION = re.compile(r"^[a-z0-9]{1,10}$")


# --- Helper Functions ---


def guess_extension(filename: str, content_type: str) -> str:
    """Extension from the filename, else from the MIME type."""
    suffix = PurePosixPath(filename).suffix.lower().lstrip(".")
    if _EXTENSION.match(suffix):
        return suffix
    return _MIME_EXTENSIONS.get(content_type, "bin")


def generate_storage_key(owner_scope: str | None, uploaded_at: datetime, extension: str) -> str:
    """
    Generate the object key for an upload.

    Format: {owner_scope}/{timestamp_ms}.{ext}
    """
    scope = owner_scope or PLACEHOLDER_SCOPE
    timestamp_ms = int(uploaded_at.timestamp() * 1000)
    return f"{scope}/{timestamp_ms}.{extension}"


# --- Validation Functions ---


def _validate(inp: UploadImageInput, rules: UploadRulesPort) -> list[FieldError]:
    errors: list[FieldError] = []

    allowed = rules.get_allowed_mime_types()
    if not inp.content_type.startswith("image/") or inp.content_type not in allowed:
        errors.append(
            FieldError(
                code="invalid_mime_type",
                message=(
                    f"MIME type '{inp.content_type}' is not allowed. "
                    f"Allowed types: {', '.join(sorted(allowed))}"
                ),
                field="content_type",
            )
        )

    size = len(inp.data)
    if size == 0:
        errors.append(FieldError(code="empty_file", message="File is empty", field="file"))
    elif size > rules.get_max_upload_bytes():
        errors.append(
            FieldError(
                code="file_too_large",
                message=(
                    f"File size {size} bytes exceeds maximum of "
                    f"{rules.get_max_upload_bytes()} bytes"
                ),
                field="file",
            )
        )

    if inp.post_slug and not is_valid_slug(inp.post_slug):
        errors.append(
            FieldError(code="slug_invalid", message="Invalid post slug", field="post_slug")
        )

    return errors


# --- Component ---


class ImageUploader:
    """Stores post images and hands back their public URLs."""

    def __init__(
        self,
        storage: ObjectStorePort,
        rules: UploadRulesPort,
        clock: ClockPort,
    ) -> None:
        self._storage = storage
        self._rules = rules
        self._clock = clock

    def upload(self, inp: UploadImageInput) -> UploadedImage:
        """
        Validate and store an image.

        Raises:
            UnauthenticatedError: no caller identity.
            ValidationFailedError: wrong type, empty or oversized payload.
            GatewayUnavailableError: the object store failed.
        """
        if inp.author_id is None:
            raise UnauthenticatedError()

        errors = _validate(inp, self._rules)
        if errors:
            raise ValidationFailedError(errors)

        extension = guess_extension(inp.filename, inp.content_type)
        key = generate_storage_key(inp.post_slug, self._clock.now_utc(), extension)

        try:
            url = self._storage.put(key, inp.data, inp.content_type)
        except OSError as e:
            raise GatewayUnavailableError(f"Image storage failed: {e}") from e

        logger.info("Stored image %s (%d bytes) for author %s", key, len(inp.data), inp.author_id)
        return UploadedImage(
            key=key,
            url=url,
            size_bytes=len(inp.data),
            content_type=inp.content_type,
        )
