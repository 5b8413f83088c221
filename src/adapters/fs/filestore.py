import os
from pathlib import Path


class FileSystemObjectStore:
    """Object store on local disk; objects are served back under public_base_url."""

    def __init__(self, base_path: str, public_base_url: str):
        self.base_path = Path(base_path).resolve()
        self.public_base_url = public_base_url.rstrip("/")
        if not self.base_path.exists():
            os.makedirs(self.base_path, exist_ok=True)

    def _safe_path(self, key: str) -> Path:
        # Prevent traversal
        target = (self.base_path / key).resolve()
        if not target.is_relative_to(self.base_path):
            raise ValueError(f"Path traversal attempt detected: {key}")
        return target

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Save bytes under key and return the public URL."""
        target = self._safe_path(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            f.write(data)
        return self.public_url(key)

    def get(self, key: str) -> bytes:
        """Retrieve bytes by key. Raises FileNotFoundError."""
        target = self._safe_path(key)
        if not target.is_file():
            raise FileNotFoundError(f"File not found: {key}")
        with open(target, "rb") as f:
            return f.read()
