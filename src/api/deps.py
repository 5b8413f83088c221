import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from src.adapters.clock import SystemClock
from src.adapters.fs.filestore import FileSystemObjectStore
from src.adapters.sqlite.gateway import SQLitePostGateway
from src.adapters.sqlite.repos import SQLiteAuthorRepo
from src.api.auth_utils import author_id_from_token
from src.components.images import ImageUploader
from src.components.posts import PostRepository
from src.ports.repo import AuthorRepoPort
from src.rules.loader import lifecycle_config, load_rules
from src.rules.models import Rules

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = PROJECT_ROOT
        self.data_dir = Path(os.environ.get("BLOG_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "blog.db")
        self.media_dir = self.data_dir / "media"
        self.migrations_dir = Path(
            os.environ.get("BLOG_MIGRATIONS_DIR", self.base_dir / "migrations")
        )
        self.rules_path = Path(os.environ.get("BLOG_RULES_PATH", self.base_dir / "rules.yaml"))
        self.public_base_url = os.environ.get(
            "BLOG_PUBLIC_BASE_URL", "http://localhost:8000/media"
        )
        self.secret_key = os.environ.get("BLOG_SECRET_KEY", "dev-secret-unsafe")


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return _load_rules_cached(settings.rules_path)


@lru_cache
def _load_rules_cached(path: Path) -> Rules:
    return load_rules(path)


# --- Adapters ---
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


def get_gateway(
    settings: Settings = Depends(get_settings),
    clock: SystemClock = Depends(get_clock),
) -> SQLitePostGateway:
    return SQLitePostGateway(settings.db_path, clock)


def get_author_repo(settings: Settings = Depends(get_settings)) -> SQLiteAuthorRepo:
    return SQLiteAuthorRepo(settings.db_path)


def get_object_store(settings: Settings = Depends(get_settings)) -> FileSystemObjectStore:
    return FileSystemObjectStore(
        base_path=str(settings.media_dir), public_base_url=settings.public_base_url
    )


# --- Components ---
def get_post_repository(
    gateway: SQLitePostGateway = Depends(get_gateway),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> PostRepository:
    return PostRepository(gateway, clock, lifecycle_config(rules))


class UploadRulesAdapter:
    """Adapter to map generic Rules to the images component UploadRulesPort."""

    def __init__(self, rules: Rules):
        self._rules = rules.uploads

    def get_max_upload_bytes(self) -> int:
        return self._rules.max_upload_bytes

    def get_allowed_mime_types(self) -> list[str]:
        return self._rules.allowlist_mime_types


def get_image_uploader(
    storage: FileSystemObjectStore = Depends(get_object_store),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> ImageUploader:
    return ImageUploader(storage, UploadRulesAdapter(rules), clock)


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_author_id(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    settings: Settings = Depends(get_settings),
    author_repo: AuthorRepoPort = Depends(get_author_repo),
) -> UUID | None:
    """
    Resolve the caller identity, or None when there is none.

    A missing, invalid or expired token and a token for an unknown author all
    yield None; the post layer turns that into UnauthenticatedError.
    """
    # 1. Try Cookie first (HttpOnly)
    cookie_token = request.cookies.get("access_token")
    if cookie_token and cookie_token.startswith("Bearer "):
        token = cookie_token.split(" ", 1)[1]

    if not token:
        return None

    author_id = author_id_from_token(token, settings.secret_key)
    if author_id is None:
        return None

    if author_repo.get_by_id(author_id) is None:
        logger.info("Token for unknown author %s rejected", author_id)
        return None
    return author_id
