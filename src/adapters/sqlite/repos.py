import sqlite3
from datetime import datetime
from typing import Any
from uuid import UUID

from src.adapters.sqlite.gateway import dict_factory, encode_value
from src.domain.entities import Author
from src.domain.errors import ConflictError


class SQLiteAuthorRepo:
    """Accounts behind the authors relation (login + display name join)."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def save(self, author: Author) -> Author:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO authors (id, email, display_name, password_hash, created_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    email=excluded.email,
                    display_name=excluded.display_name,
                    password_hash=excluded.password_hash
            """,
                (
                    str(author.id),
                    author.email.lower(),
                    author.display_name,
                    author.password_hash,
                    encode_value("created_at", author.created_at),
                ),
            )
            conn.commit()
            return author
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise ConflictError(author.email, field="email") from e
        finally:
            conn.close()

    def get_by_email(self, email: str) -> Author | None:
        return self._get_one("SELECT * FROM authors WHERE email = ?", (email.lower(),))

    def get_by_id(self, author_id: UUID) -> Author | None:
        return self._get_one("SELECT * FROM authors WHERE id = ?", (str(author_id),))

    def _get_one(self, query: str, params: tuple[Any, ...]) -> Author | None:
        conn = self._get_conn()
        try:
            row = conn.execute(query, params).fetchone()
            return self._map_row(row) if row else None
        finally:
            conn.close()

    def _map_row(self, row: dict[str, Any]) -> Author:
        return Author(
            id=UUID(row["id"]),
            email=row["email"],
            display_name=row["display_name"],
            password_hash=row["password_hash"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
