from datetime import UTC, datetime
from pathlib import Path
from uuid import UUID

import pytest

from src.adapters.clock import FixedClock
from src.adapters.sqlite.gateway import SQLitePostGateway
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteAuthorRepo
from src.components.posts import PostRepository
from src.domain.entities import Author
from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).resolve().parents[1]
MIGRATIONS_DIR = str(PROJECT_ROOT / "migrations")

T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def rules() -> Rules:
    """The real rules file from the project root."""
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(T0)


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """A freshly migrated SQLite database."""
    path = str(tmp_path / "blog.db")
    SQLiteMigrator(path, MIGRATIONS_DIR).run_migrations()
    return path


@pytest.fixture
def author_repo(db_path: str) -> SQLiteAuthorRepo:
    return SQLiteAuthorRepo(db_path)


@pytest.fixture
def author(author_repo: SQLiteAuthorRepo) -> Author:
    return author_repo.save(
        Author(email="ada@example.com", display_name="Ada", password_hash="hash", created_at=T0)
    )


@pytest.fixture
def other_author(author_repo: SQLiteAuthorRepo) -> Author:
    return author_repo.save(
        Author(email="bob@example.com", display_name="Bob", password_hash="hash", created_at=T0)
    )


@pytest.fixture
def author_id(author: Author) -> UUID:
    return author.id


@pytest.fixture
def gateway(db_path: str, clock: FixedClock) -> SQLitePostGateway:
    return SQLitePostGateway(db_path, clock)


@pytest.fixture
def repository(gateway: SQLitePostGateway, clock: FixedClock) -> PostRepository:
    return PostRepository(gateway, clock)
