"""
security/auth.py
-----------------
Password hashing and signed session tokens.

Passwords are hashed with bcrypt through passlib. Session tokens are HS256
JWTs carrying the user id in the `uid` claim and an `exp` expiry.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt
from passlib.context import CryptContext

ALGORITHM = "HS256"
DEFAULT_TTL_SECONDS = 60 * 60 * 24 * 7


class AuthConfigError(RuntimeError):
    """The token signing key is not configured."""


class InvalidTokenError(ValueError):
    """A session token is malformed, tampered with or expired."""


@lru_cache(maxsize=None)
def _pwd_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a plaintext password securely."""
    return _pwd_context(rounds).hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against its hash. Unrecognized hashes never match."""
    try:
        return _pwd_context(12).verify(password, hashed)
    except ValueError:
        return False


def _require_key(key: Optional[str]) -> str:
    if not key:
        raise AuthConfigError("No provided JWT_KEY")
    return key


def create_token(user_id: str, key: str, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> str:
    """
    Issue a signed session token for a user.

    Args:
        user_id: Stored in the `uid` claim.
        key: HMAC signing key.
        ttl_seconds: Lifetime of the token.

    Raises:
        AuthConfigError: If ``key`` is empty.
    """
    payload = {
        "uid": str(user_id),
        "exp": datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds),
    }
    return jwt.encode(payload, _require_key(key), algorithm=ALGORITHM)


def decode_token(token: str, key: str) -> dict:
    """
    Validate a session token and return its claims.

    Raises:
        AuthConfigError: If ``key`` is empty.
        InvalidTokenError: On a bad signature, expiry, or a missing `uid`.
    """
    try:
        claims = jwt.decode(token, _require_key(key), algorithms=[ALGORITHM],
                            options={"require": ["exp"]})
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(str(e)) from e
    if not claims.get("uid"):
        raise InvalidTokenError("Token has no uid claim")
    return claims


def parse_bearer(header: Optional[str]) -> Optional[str]:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header.

    Returns:
        The token, or None when no header was sent.

    Raises:
        InvalidTokenError: If a header was sent without a token part.
    """
    if not header:
        return None
    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise InvalidTokenError("Please provide a bearer token.")
    return parts[1]
