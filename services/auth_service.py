"""
services/auth_service.py
-------------------------
Registration, login and session lookup for users.
"""

import re
import uuid
from typing import Optional

from config import AuthConfig
from db.errors import DatabaseError
from models.user import User
from repositories.user_repo import UserRepository
from security.auth import (
    AuthConfigError,
    InvalidTokenError,
    create_token,
    decode_token,
    hash_password,
    parse_bearer,
    verify_password,
)
from security.rate_limiter import LoginRateLimiter
from services.result import Err, ErrorKind, Ok, Result
from utils.logger import get_logger

logger = get_logger(__name__)

EMAIL_RE = re.compile(
    r'^(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))@'
    r'((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$'
)

_MISSING_CREDENTIALS = "Please enter an email and password."
_BAD_CREDENTIALS = "Invalid email or password."


class AuthService:
    """
    Email/password authentication issuing signed session tokens.

    Args:
        users: Repository over the users table.
        config: Signing key, token lifetime and bcrypt cost.
        rate_limiter: Optional failed-login throttle.
    """

    def __init__(self, users: UserRepository, config: AuthConfig,
                 rate_limiter: Optional[LoginRateLimiter] = None):
        self.users = users
        self.config = config
        self.rate_limiter = rate_limiter

    def _session(self, user: User) -> dict:
        token = create_token(user.id, self.config.jwt_key, self.config.token_ttl_seconds)
        return {"user": user.public(), "token": token}

    def register(self, email: Optional[str], password: Optional[str]) -> Result:
        """Create an account and open a session for it."""
        if not email or not password:
            return Err(ErrorKind.INVALID_INPUT, _MISSING_CREDENTIALS)
        if not EMAIL_RE.match(str(email).lower()):
            return Err(ErrorKind.INVALID_INPUT, "Please enter a valid email.")

        try:
            if self.users.email_exists(email):
                return Err(ErrorKind.CONFLICT, "User with this email already exists.")
            user = User(
                id=str(uuid.uuid4()),
                email=email,
                password=hash_password(password, self.config.bcrypt_rounds),
            )
            self.users.add(user)
            return Ok(self._session(user))
        except (DatabaseError, AuthConfigError) as e:
            logger.error(f"Registration failed: {e}")
            return Err(ErrorKind.INTERNAL, str(e))

    def login(self, email: Optional[str], password: Optional[str]) -> Result:
        """Check credentials and open a session."""
        if not email or not password:
            return Err(ErrorKind.INVALID_INPUT, _MISSING_CREDENTIALS)
        if self.rate_limiter and self.rate_limiter.is_blocked(email):
            return Err(ErrorKind.RATE_LIMITED, "Too many failed logins. Try again later.")

        try:
            user = self.users.get_by_email(email)
            if not user or not verify_password(password, user.password):
                logger.warning(f"Failed login for {email}")
                if self.rate_limiter:
                    self.rate_limiter.record_failure(email)
                return Err(ErrorKind.UNAUTHORIZED, _BAD_CREDENTIALS)

            if self.rate_limiter:
                self.rate_limiter.reset(email)
            return Ok(self._session(user))
        except (DatabaseError, AuthConfigError) as e:
            logger.error(f"Login failed: {e}")
            return Err(ErrorKind.INTERNAL, str(e))

    def current_user(self, authorization: Optional[str]) -> Result:
        """
        Resolve the user behind an ``Authorization`` header.

        Returns:
            Ok(None) when no header was sent, Ok(public user dict) for a valid
            token, or an Err for a malformed or invalid token.
        """
        try:
            token = parse_bearer(authorization)
        except InvalidTokenError as e:
            return Err(ErrorKind.INVALID_INPUT, str(e))
        if token is None:
            return Ok(None)

        try:
            claims = decode_token(token, self.config.jwt_key)
            user = self.users.get_by_id(claims["uid"])
        except InvalidTokenError:
            return Err(ErrorKind.UNAUTHORIZED, "Invalid token.")
        except (DatabaseError, AuthConfigError) as e:
            logger.error(f"Session lookup failed: {e}")
            return Err(ErrorKind.INTERNAL, str(e))
        return Ok(user.public() if user else None)
