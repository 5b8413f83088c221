"""
Post lifecycle rules.

Pure logic, no I/O. Applied before every create and update:

- title is required; other fields fall back to their defaults
- whenever the resulting status is "published" and the record carries no
  published_at, published_at is stamped with the write time
- moving away from "published" never clears published_at; only an explicit
  published_at supplied by the caller replaces it

Promoting scheduled posts at their scheduled time is not done here; see
src.services.publish.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.domain.entities import DEFAULT_CATEGORY, DEFAULT_STATUS, Post, PostInput
from src.domain.errors import FieldError, ValidationFailedError
from src.domain.slug import SLUG_PATTERN, derive_slug, is_valid_slug


@dataclass(frozen=True)
class LifecycleConfig:
    """Field limits and defaults, normally built from rules.yaml."""

    title_min: int = 1
    title_max: int = 200
    excerpt_min: int = 0
    excerpt_max: int = 500
    slug_pattern: str = SLUG_PATTERN
    default_category: str = DEFAULT_CATEGORY


DEFAULT_CONFIG = LifecycleConfig()


# --- Validation ---


def _validate_title(title: str | None, config: LifecycleConfig) -> list[FieldError]:
    if title is None or not title.strip():
        return [FieldError(code="title_required", message="Title is required", field="title")]
    if len(title.strip()) < config.title_min:
        return [
            FieldError(
                code="title_too_short",
                message=f"Title must be at least {config.title_min} characters",
                field="title",
            )
        ]
    if len(title) > config.title_max:
        return [
            FieldError(
                code="title_too_long",
                message=f"Title must be at most {config.title_max} characters",
                field="title",
            )
        ]
    return []


def _validate_slug(slug: str | None, config: LifecycleConfig) -> list[FieldError]:
    if not slug:
        return [FieldError(code="slug_required", message="Slug is required", field="slug")]
    if not is_valid_slug(slug, config.slug_pattern):
        return [
            FieldError(
                code="slug_invalid",
                message="Slug must contain only lowercase letters, numbers, and hyphens",
                field="slug",
            )
        ]
    return []


def _validate_excerpt(excerpt: str | None, config: LifecycleConfig) -> list[FieldError]:
    if excerpt and len(excerpt) < config.excerpt_min:
        return [
            FieldError(
                code="excerpt_too_short",
                message=f"Excerpt must be at least {config.excerpt_min} characters",
                field="excerpt",
            )
        ]
    if excerpt and len(excerpt) > config.excerpt_max:
        return [
            FieldError(
                code="excerpt_too_long",
                message=f"Excerpt must be at most {config.excerpt_max} characters",
                field="excerpt",
            )
        ]
    return []


# --- Publish timestamp rule ---


def stamp_published_at(
    status: str,
    existing: datetime | None,
    now: datetime,
) -> datetime | None:
    """
    Return the published_at a record should carry after a write.

    One-way ratchet: an existing value is always kept, and a missing value is
    only filled in when the status is "published".
    """
    if existing is not None:
        return existing
    if status == "published":
        return now
    return None


# --- Entry points ---


def prepare_create(
    data: PostInput,
    now: datetime,
    config: LifecycleConfig = DEFAULT_CONFIG,
) -> dict[str, Any]:
    """
    Validate a new post and build its insert record.

    The record holds every mutable column. id, author_id and the
    created/updated timestamps are left to the caller and the gateway.

    Raises:
        ValidationFailedError: if the title is empty or the slug is unusable.
    """
    errors = _validate_title(data.title, config)
    title = data.title or ""

    if data.slug:
        slug = data.slug
        errors.extend(_validate_slug(slug, config))
    else:
        slug = derive_slug(title)
        if not errors and not slug:
            errors.append(
                FieldError(
                    code="slug_required",
                    message="Title must contain at least one letter or digit",
                    field="slug",
                )
            )

    errors.extend(_validate_excerpt(data.excerpt, config))
    if errors:
        raise ValidationFailedError(errors)

    status = data.status or DEFAULT_STATUS
    supplied_published_at = data.published_at if status == "published" else None

    return {
        "title": title,
        "slug": slug,
        "excerpt": data.excerpt or None,
        "content": data.content or "",
        "thumbnail_url": data.thumbnail_url or None,
        "category": data.category or config.default_category,
        "tags": data.tags,
        "status": status,
        "scheduled_at": data.scheduled_at,
        "published_at": stamp_published_at(status, supplied_published_at, now),
    }


def prepare_update(
    current: Post,
    patch: PostInput,
    now: datetime,
    config: LifecycleConfig = DEFAULT_CONFIG,
) -> dict[str, Any]:
    """
    Validate a patch against the current post and return the columns to write.

    Only fields present in the patch are returned, plus published_at when the
    publish rule stamps it. The slug is never re-derived from a new title.

    Raises:
        ValidationFailedError: if a present field is invalid.
    """
    changes = patch.present_fields()
    errors: list[FieldError] = []

    if "title" in changes:
        errors.extend(_validate_title(changes["title"], config))
    if "slug" in changes:
        errors.extend(_validate_slug(changes["slug"], config))
    if "excerpt" in changes:
        errors.extend(_validate_excerpt(changes["excerpt"], config))
    if "status" in changes and changes["status"] is None:
        errors.append(
            FieldError(code="status_required", message="Status cannot be empty", field="status")
        )
    if errors:
        raise ValidationFailedError(errors)

    # Non-nullable columns fall back to their defaults
    if "content" in changes and changes["content"] is None:
        changes["content"] = ""
    if "category" in changes and not changes["category"]:
        changes["category"] = config.default_category

    status = changes.get("status", current.status)
    if "published_at" in changes:
        # An explicit null clears the stamp unless the post ends up published
        changes["published_at"] = stamp_published_at(status, changes["published_at"], now)
    else:
        stamped = stamp_published_at(status, current.published_at, now)
        if stamped != current.published_at:
            changes["published_at"] = stamped

    return changes
