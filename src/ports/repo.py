from typing import Protocol
from uuid import UUID

from src.domain.entities import Author


class AuthorRepoPort(Protocol):
    def get_by_email(self, email: str) -> Author | None:
        ...

    def get_by_id(self, author_id: UUID) -> Author | None:
        ...

    def save(self, author: Author) -> Author:
        ...
