from datetime import timedelta
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from src.api.auth_utils import create_access_token, verify_password
from src.api.deps import Settings, get_author_repo, get_current_author_id, get_rules, get_settings
from src.api.schemas import AuthorResponse, Token
from src.domain.entities import Author
from src.domain.errors import UnauthenticatedError
from src.ports.repo import AuthorRepoPort
from src.rules.models import Rules

router = APIRouter()


@router.post("/login", response_model=Token)
def login_for_access_token(
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    author_repo: AuthorRepoPort = Depends(get_author_repo),
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> Token:
    """Authenticate an author and return an access token."""
    author = author_repo.get_by_email(form_data.username)
    if not author or not verify_password(form_data.password, author.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    ttl_minutes = rules.auth.token_ttl_minutes
    access_token = create_access_token(
        author.id, settings.secret_key, expires_delta=timedelta(minutes=ttl_minutes)
    )

    # Set HttpOnly Cookie
    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=ttl_minutes * 60,
        expires=ttl_minutes * 60,
        samesite="lax",
        secure=False,  # Set to True for HTTPS prod
    )

    return Token(access_token=access_token, token_type="bearer")


@router.post("/logout")
def logout(response: Response) -> dict[str, str]:
    """Log out by clearing the cookie."""
    response.delete_cookie(key="access_token")
    return {"status": "success"}


@router.get("/me", response_model=AuthorResponse)
def read_current_author(
    author_id: UUID | None = Depends(get_current_author_id),
    author_repo: AuthorRepoPort = Depends(get_author_repo),
) -> Author:
    """Get the signed-in author."""
    author = author_repo.get_by_id(author_id) if author_id else None
    if author is None:
        raise UnauthenticatedError()
    return author
