"""
Author credentials and bearer tokens.

Tokens are HS256 JWTs whose "sub" claim is the author id. The signing key
comes from Settings.secret_key.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast
from uuid import UUID

from jose import jwt
from passlib.context import CryptContext

ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(minutes=15)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    result: bool = pwd_context.verify(plain_password, hashed_password)
    return result


def get_password_hash(password: str) -> str:
    result: str = pwd_context.hash(password)
    return result


def create_access_token(
    author_id: UUID,
    secret_key: str,
    expires_delta: timedelta = DEFAULT_TTL,
    now_utc: datetime | None = None,
) -> str:
    """
    Create a signed token for an author.

    Args:
        author_id: Becomes the "sub" claim
        secret_key: Signing key
        expires_delta: Lifetime of the token
        now_utc: Current UTC time (for testing/determinism). Defaults to datetime.now(UTC).
    """
    current_time = now_utc if now_utc is not None else datetime.now(UTC)
    claims = {"sub": str(author_id), "iat": current_time, "exp": current_time + expires_delta}
    encoded_jwt: str = jwt.encode(claims, secret_key, algorithm=ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str, secret_key: str) -> dict[str, Any] | None:
    """Verified claims, or None for a malformed, forged or expired token."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
        return cast(dict[str, Any], payload)
    except jwt.JWTError:
        return None


def author_id_from_token(token: str, secret_key: str) -> UUID | None:
    payload = decode_access_token(token, secret_key)
    if not payload:
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str):
        return None
    try:
        return UUID(subject)
    except ValueError:
        return None
