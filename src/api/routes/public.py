"""
Public blog reading routes.

Only published posts are ever returned; drafts and scheduled posts answer
404 exactly like missing slugs.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from src.api.deps import get_post_repository, get_rules
from src.api.schemas import PostResponse
from src.components.posts import PostRepository
from src.domain.entities import Post
from src.rules.models import Rules

router = APIRouter()


@router.get("/posts", response_model=list[PostResponse])
def list_published_posts(
    q: str | None = Query(default=None, description="Search title, content and excerpt"),
    category: str | None = Query(default=None, description='Exact category, or "all"'),
    repo: PostRepository = Depends(get_post_repository),
) -> list[Post]:
    """List published posts, most recently published first."""
    return repo.list_published(search_query=q, category=category)


@router.get("/posts/{slug}", response_model=PostResponse)
def get_published_post(
    slug: str,
    repo: PostRepository = Depends(get_post_repository),
) -> Post:
    """Get a published post by slug."""
    post = repo.get_by_slug(slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.get("/categories", response_model=list[str])
def list_categories(
    repo: PostRepository = Depends(get_post_repository),
) -> list[str]:
    """Categories that have at least one published post."""
    return repo.list_categories()


@router.get("/categories/suggestions", response_model=list[str])
def list_category_suggestions(rules: Rules = Depends(get_rules)) -> list[str]:
    """Configured categories offered to authors; any other value is still accepted."""
    return rules.content.categories
