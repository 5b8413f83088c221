import pytest

from src.adapters.fs.filestore import FileSystemObjectStore


@pytest.fixture
def store(tmp_path):
    return FileSystemObjectStore(str(tmp_path / "store"), "https://cdn.example.com/media/")


def test_put_returns_public_url(store):
    url = store.put("hello-world/1700000000000.png", b"png-bytes", "image/png")
    assert url == "https://cdn.example.com/media/hello-world/1700000000000.png"
    assert store.get("hello-world/1700000000000.png") == b"png-bytes"


def test_overwrite(store):
    store.put("overwrite.txt", b"v1", "text/plain")
    store.put("overwrite.txt", b"v2", "text/plain")
    assert store.get("overwrite.txt") == b"v2"


def test_path_traversal(store):
    with pytest.raises(ValueError):
        store.put("../hack.txt", b"bad", "text/plain")

    with pytest.raises(ValueError):
        store.get("/etc/passwd")


def test_get_directory_is_not_found(store):
    store.put("general/1.png", b"x", "image/png")
    with pytest.raises(FileNotFoundError):
        store.get("general")
