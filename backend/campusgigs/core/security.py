"""Password hashing and access-token handling."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from campusgigs.core.config import get_settings

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
_BCRYPT_MAX_BYTES = 72
_ACCESS_TOKEN_TYPE = "access"


def _password_bytes(password: str) -> bytes:
    return password.encode()[:_BCRYPT_MAX_BYTES]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode())
    except (ValueError, TypeError):  # malformed hash
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storage using bcrypt."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode()


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Validated contents of an access token."""

    user_id: uuid.UUID
    role: str | None
    expires_at: datetime


def create_access_token(
    user_id: uuid.UUID,
    *,
    role: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a signed access token for ``user_id``."""
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    issued_at = datetime.now(UTC)
    claims = {
        "sub": str(user_id),
        "type": _ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    if role is not None:
        claims["role"] = role
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenClaims:
    """Verify ``token`` and return its claims, raising JWTError when invalid."""
    settings = get_settings()
    payload = jwt.decode(
        token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
    )
    if payload.get("type") != _ACCESS_TOKEN_TYPE:
        raise JWTError("Not an access token")
    try:
        user_id = uuid.UUID(str(payload["sub"]))
    except (KeyError, ValueError) as exc:
        raise JWTError("Token subject is not a user id") from exc
    return TokenClaims(
        user_id=user_id,
        role=payload.get("role"),
        expires_at=datetime.fromtimestamp(payload["exp"], UTC),
    )
