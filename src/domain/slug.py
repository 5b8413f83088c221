import re

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_SEPARATORS = re.compile(r"[\s-]+")


def derive_slug(title: str) -> str:
    """
    Derive a URL-safe slug from a post title.

    "Hello, World! 2024" -> "hello-world-2024". Returns an empty string when
    the title has no ASCII letters or digits; callers must reject that
    before persisting.
    """
    lowered = title.lower()
    stripped = _DISALLOWED.sub("", lowered)
    hyphenated = _SEPARATORS.sub("-", stripped)
    return hyphenated.strip("-")


def is_valid_slug(slug: str, pattern: str = SLUG_PATTERN) -> bool:
    """Check if slug is valid (lowercase alphanumeric + hyphens)."""
    return re.fullmatch(pattern, slug) is not None
