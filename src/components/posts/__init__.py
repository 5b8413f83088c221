"""
Posts component - blog post repository, lifecycle and slug addressing.
"""

from ._impl import parse_post_row, parse_rows
from .component import PostRepository
from .models import ALL_CATEGORIES, PostRow, PublishedFilter

__all__ = [
    # Component
    "PostRepository",
    # Row parsing
    "parse_post_row",
    "parse_rows",
    # Models
    "ALL_CATEGORIES",
    "PostRow",
    "PublishedFilter",
]
