from typing import Protocol


class ObjectStorePort(Protocol):
    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under key and return a publicly resolvable URL."""
        ...

    def get(self, key: str) -> bytes:
        """Retrieve bytes by key. Raises FileNotFoundError."""
        ...
