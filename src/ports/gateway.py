"""
Persistence gateway port.

The gateway owns durability, id assignment, the created/updated timestamps
and the global slug uniqueness constraint. Rows cross this seam as plain
dicts keyed by column name; the post repository parses them into Post
models.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

SEARCH_COLUMNS = ("title", "content", "excerpt")

# Pseudo-column ordering rows by insertion
INSERTION_ORDER = "insertion_order"


@dataclass(frozen=True)
class Order:
    column: str
    descending: bool = False


@dataclass(frozen=True)
class PostQuery:
    """
    Filter/sort/search description for a posts select.

    equals: column == value for every entry (AND).
    at_most: column <= value for every entry (AND).
    search: case-insensitive substring match against any of search_columns (OR).
    """

    equals: dict[str, Any] = field(default_factory=dict)
    at_most: dict[str, Any] = field(default_factory=dict)
    search: str | None = None
    search_columns: tuple[str, ...] = SEARCH_COLUMNS
    order_by: tuple[Order, ...] = ()
    limit: int | None = None


class PostGatewayPort(Protocol):
    def select_posts(self, query: PostQuery) -> list[dict[str, Any]]:
        """Rows matching query, joined with the author's display_name."""
        ...

    def insert_post(self, values: dict[str, Any]) -> dict[str, Any]:
        """Insert a row and return it. Raises ConflictError on slug collision."""
        ...

    def update_posts(self, match: dict[str, Any], values: dict[str, Any]) -> list[dict[str, Any]]:
        """Update rows matching every match column atomically; return the updated rows."""
        ...

    def delete_posts(self, match: dict[str, Any]) -> int:
        """Delete rows matching every match column; return the affected count."""
        ...
