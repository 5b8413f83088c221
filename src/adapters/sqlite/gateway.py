"""
SQLite implementation of the post persistence gateway.

Stands in for the managed backend: assigns ids, stamps created_at/updated_at,
enforces slug uniqueness and evaluates ownership filters inside the same
statement as the write. Rows are returned in their raw stored shape
(ISO-8601 strings for timestamps) and parsed by the post repository.
"""

import json
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from src.domain.errors import ConflictError, GatewayUnavailableError
from src.ports.clock import ClockPort
from src.ports.gateway import INSERTION_ORDER, PostQuery

logger = logging.getLogger(__name__)

COLUMNS = (
    "id",
    "title",
    "slug",
    "excerpt",
    "content",
    "thumbnail_url",
    "author_id",
    "category",
    "tags",
    "status",
    "scheduled_at",
    "published_at",
    "created_at",
    "updated_at",
)
UPDATABLE_COLUMNS = frozenset(COLUMNS) - {"id", "author_id", "created_at", "updated_at"}

_ORDERABLE = {c: f"p.{c}" for c in COLUMNS} | {INSERTION_ORDER: "p.seq"}

_SELECT = """
    SELECT p.*, a.display_name AS author_display_name
    FROM blog_posts p
    LEFT JOIN authors a ON a.id = p.author_id
"""


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def encode_value(column: str, value: Any) -> Any:
    """Convert a domain value into its stored representation."""
    if value is None:
        return None
    if column == "tags":
        return json.dumps(list(value))
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).isoformat(timespec="microseconds")
    if isinstance(value, UUID):
        return str(value)
    return value


def _decode_row(row: dict[str, Any]) -> dict[str, Any]:
    row.pop("seq", None)
    if row.get("tags") is not None:
        row["tags"] = json.loads(row["tags"])
    return row


def _check_columns(columns: Any, allowed: Any) -> None:
    unknown = set(columns) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown post columns: {sorted(unknown)}")


class SQLitePostGateway:
    def __init__(self, db_path: str, clock: ClockPort):
        self.db_path = db_path
        self.clock = clock

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        return conn

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise GatewayUnavailableError(f"Cannot open database: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise GatewayUnavailableError(f"Database error: {e}") from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # --- Reads ---

    def _where(self, query: PostQuery) -> tuple[str, list[Any]]:
        _check_columns(query.equals, COLUMNS)
        _check_columns(query.at_most, COLUMNS)
        _check_columns(query.search_columns, COLUMNS)

        clauses: list[str] = []
        params: list[Any] = []
        for column, value in query.equals.items():
            clauses.append(f"p.{column} = ?")
            params.append(encode_value(column, value))
        for column, value in query.at_most.items():
            clauses.append(f"p.{column} <= ?")
            params.append(encode_value(column, value))

        if query.search:
            pattern = f"%{_escape_like(query.search.casefold())}%"
            ors = [f"casefold(p.{c}) LIKE ? ESCAPE '\\'" for c in query.search_columns]
            clauses.append("(" + " OR ".join(ors) + ")")
            params.extend([pattern] * len(ors))

        where = " WHERE " + " AND ".join(clauses) if clauses else ""
        return where, params

    def select_posts(self, query: PostQuery) -> list[dict[str, Any]]:
        where, params = self._where(query)
        sql = _SELECT + where

        order_terms = []
        for order in query.order_by:
            if order.column not in _ORDERABLE:
                raise ValueError(f"Cannot order by {order.column!r}")
            direction = "DESC" if order.descending else "ASC"
            order_terms.append(f"{_ORDERABLE[order.column]} {direction}")
        if order_terms:
            sql += " ORDER BY " + ", ".join(order_terms)
        if query.limit is not None:
            sql += " LIMIT ?"
            params.append(query.limit)

        with self._connection() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [_decode_row(r) for r in rows]

    def _select_matching(
        self, conn: sqlite3.Connection, match: dict[str, Any]
    ) -> list[dict[str, Any]]:
        where, params = self._where(PostQuery(equals=match))
        rows = conn.execute(_SELECT + where, params).fetchall()
        return [_decode_row(r) for r in rows]

    # --- Writes ---

    def insert_post(self, values: dict[str, Any]) -> dict[str, Any]:
        _check_columns(values, COLUMNS)
        now = self.clock.now_utc()
        row = {c: values.get(c) for c in COLUMNS}
        row["id"] = values.get("id") or uuid4()
        row["created_at"] = now
        row["updated_at"] = now

        placeholders = ", ".join("?" for _ in COLUMNS)
        params = [encode_value(c, row[c]) for c in COLUMNS]
        with self._connection() as conn:
            try:
                conn.execute(
                    f"INSERT INTO blog_posts ({', '.join(COLUMNS)}) VALUES ({placeholders})",
                    params,
                )
            except sqlite3.IntegrityError as e:
                raise self._translate_integrity(e, values) from e
            inserted = self._select_matching(conn, {"id": row["id"]})

        logger.debug("Inserted post row %s", row["id"])
        return inserted[0]

    def update_posts(self, match: dict[str, Any], values: dict[str, Any]) -> list[dict[str, Any]]:
        _check_columns(match, COLUMNS)
        _check_columns(values, UPDATABLE_COLUMNS)
        if not match:
            raise ValueError("Refusing to update without a match filter")

        sets = dict(values)
        sets["updated_at"] = self.clock.now_utc()
        assignments = ", ".join(f"{c} = ?" for c in sets)
        set_params = [encode_value(c, v) for c, v in sets.items()]
        where = " AND ".join(f"{c} = ?" for c in match)
        where_params = [encode_value(c, v) for c, v in match.items()]

        with self._connection() as conn:
            try:
                cursor = conn.execute(
                    f"UPDATE blog_posts SET {assignments} WHERE {where}",
                    set_params + where_params,
                )
            except sqlite3.IntegrityError as e:
                raise self._translate_integrity(e, values) from e
            if cursor.rowcount == 0:
                return []
            return self._select_matching(conn, match)

    def delete_posts(self, match: dict[str, Any]) -> int:
        _check_columns(match, COLUMNS)
        if not match:
            raise ValueError("Refusing to delete without a match filter")

        where = " AND ".join(f"{c} = ?" for c in match)
        params = [encode_value(c, v) for c, v in match.items()]
        with self._connection() as conn:
            cursor = conn.execute(f"DELETE FROM blog_posts WHERE {where}", params)
            return cursor.rowcount

    def _translate_integrity(
        self, error: sqlite3.IntegrityError, values: dict[str, Any]
    ) -> Exception:
        if "blog_posts.slug" in str(error):
            return ConflictError(values.get("slug", ""))
        return GatewayUnavailableError(f"Constraint violated: {error}")
