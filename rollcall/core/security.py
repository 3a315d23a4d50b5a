"""Credentials for Rollcall: bcrypt password hashes and the signed session token."""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from rollcall.core.config import settings

# Work factor for new hashes. Tests lower it.
BCRYPT_ROUNDS = 12
# bcrypt ignores input past this many bytes.
BCRYPT_MAX_BYTES = 72

# Form and CLI limits for usernames and passwords.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _signing_key() -> str:
    return settings.JWT_SECRET.get_secret_value()


def hash_password(plain_password: str) -> str:
    """bcrypt hash stored in users.password_hash."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """False for a wrong password and for a stored value that is not a bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(sub: str | int, roles: Iterable[str]) -> str:
    """
    Token issued at login and set as the session cookie (or sent as a Bearer header).

    Claims: sub (user id as a string), roles (sorted role names), iat, exp.
    The roles claim is informational; requests re-read roles from the store.
    """
    issued = datetime.now(UTC)
    claims: dict[str, Any] = {
        "sub": str(sub),
        "roles": sorted(roles),
        "iat": issued,
        "exp": issued + timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    }
    return jwt.encode(claims, _signing_key(), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """Verified claims of a session token. Raises jwt.PyJWTError if it is forged or expired."""
    return jwt.decode(token, _signing_key(), algorithms=[settings.JWT_ALGORITHM])


def token_user_id(claims: dict[str, Any]) -> int | None:
    """User id named by the sub claim, or None when it is absent or not a stored id."""
    try:
        user_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        return None
    if user_id < 1 or user_id > 2**63 - 1:
        return None
    return user_id
