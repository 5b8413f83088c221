"""
Authoring routes for the signed-in author's own posts.

The caller identity comes from the bearer token; author fields in request
bodies are ignored.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response

from src.api.deps import get_current_author_id, get_post_repository
from src.api.schemas import PostResponse
from src.components.posts import PostRepository
from src.domain.entities import Post, PostInput

router = APIRouter()


@router.get("", response_model=list[PostResponse])
def list_my_posts(
    author_id: UUID | None = Depends(get_current_author_id),
    repo: PostRepository = Depends(get_post_repository),
) -> list[Post]:
    """List every post of the current author, newest first."""
    return repo.list_mine(author_id)


@router.get("/{post_id}", response_model=PostResponse)
def get_my_post(
    post_id: UUID,
    author_id: UUID | None = Depends(get_current_author_id),
    repo: PostRepository = Depends(get_post_repository),
) -> Post:
    return repo.get_mine(author_id, post_id)


@router.post("", response_model=PostResponse, status_code=201)
def create_post(
    req: PostInput,
    author_id: UUID | None = Depends(get_current_author_id),
    repo: PostRepository = Depends(get_post_repository),
) -> Post:
    """Create a post; the slug is derived from the title when omitted."""
    return repo.create(author_id, req)


@router.patch("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: UUID,
    req: PostInput,
    author_id: UUID | None = Depends(get_current_author_id),
    repo: PostRepository = Depends(get_post_repository),
) -> Post:
    """Apply the fields present in the body."""
    return repo.update(author_id, post_id, req)


@router.delete("/{post_id}", status_code=204)
def delete_post(
    post_id: UUID,
    author_id: UUID | None = Depends(get_current_author_id),
    repo: PostRepository = Depends(get_post_repository),
) -> Response:
    """Delete a post. Succeeds even if nothing matched."""
    repo.delete(author_id, post_id)
    return Response(status_code=204)
