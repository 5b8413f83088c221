"""
Error taxonomy for post operations.

Every failure surfaced by the post repository, the lifecycle rules and the
image uploader is one of these. Nothing here is retried internally; callers
decide whether to retry.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    code: str
    message: str
    field: str | None = None


class PostError(Exception):
    """Base class for all post-layer errors."""


class UnauthenticatedError(PostError):
    """Raised when an operation needs a caller identity and none is present."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class NotFoundError(PostError):
    """
    Raised when no matching post exists.

    Also raised when the post exists but is not owned by the caller, so that
    ownership never leaks through a distinct error kind.
    """

    def __init__(self, message: str = "Post not found") -> None:
        super().__init__(message)


class ConflictError(PostError):
    """Raised when a unique value (a post slug, an author email) is already taken."""

    def __init__(self, value: str, field: str = "slug") -> None:
        self.value = value
        self.field = field
        super().__init__(f"{field.capitalize()} '{value}' already exists")


class ValidationFailedError(PostError):
    """Raised before any gateway call when input fails validation."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        messages = [e.message for e in errors]
        super().__init__(f"Validation failed: {'; '.join(messages)}")


class GatewayUnavailableError(PostError):
    """Raised when the persistence gateway or object store fails."""


class MalformedRowError(PostError):
    """Raised when a gateway row does not match the expected post shape."""


class MultipleResultsError(PostError):
    """Raised when a lookup expected to be unique matched several rows."""
