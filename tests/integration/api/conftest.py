from collections.abc import Callable, Iterator
from datetime import timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.adapters.clock import FixedClock
from src.api.auth_utils import create_access_token
from src.api.deps import Settings, get_clock, get_settings
from src.api.main import app
from src.domain.entities import Author

TEST_SECRET = "test-secret"


@pytest.fixture
def api_settings(tmp_path: Path, db_path: str) -> Settings:
    s = Settings()
    s.data_dir = tmp_path
    s.db_path = db_path
    s.media_dir = tmp_path / "media"
    s.public_base_url = "http://testserver/media"
    s.secret_key = TEST_SECRET
    return s


@pytest.fixture
def client(api_settings: Settings, clock: FixedClock) -> Iterator[TestClient]:
    app.dependency_overrides[get_settings] = lambda: api_settings
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


def bearer(author: Author, secret_key: str = TEST_SECRET) -> dict[str, str]:
    token = create_access_token(author.id, secret_key, expires_delta=timedelta(minutes=5))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_headers() -> Callable[..., dict[str, str]]:
    return bearer


@pytest.fixture
def auth_headers(author: Author) -> dict[str, str]:
    return bearer(author)


@pytest.fixture
def other_headers(other_author: Author) -> dict[str, str]:
    return bearer(other_author)
