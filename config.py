"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.

The database and auth settings are also grouped into explicit config
objects, built once at startup and passed to the layers that need them.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DATABASE", "recruiters")
DB_USER: str = os.getenv("DB_USER", "postgres")
DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")

DB_CONNECT_TIMEOUT: int = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))
DB_STATEMENT_TIMEOUT_MS: int = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "30000"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "0"))

# ── Security ──────────────────────────────────────────────
JWT_KEY: str = os.getenv("JWT_KEY", "")
JWT_TTL_SECONDS: int = int(os.getenv("JWT_TTL_SECONDS", str(60 * 60 * 24 * 7)))
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

# ── Rate Limiting ─────────────────────────────────────────
LOGIN_MAX_ATTEMPTS: int = int(os.getenv("LOGIN_MAX_ATTEMPTS", "5"))
LOGIN_WINDOW_SECONDS: int = int(os.getenv("LOGIN_WINDOW_SECONDS", "300"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Connection parameters for the PostgreSQL server.

    Attributes:
        user: Database role.
        database: Database name.
        password: Role password.
        hostname: Server host.
        port: Server port.
        connect_timeout: Seconds to wait for a connection (0 disables).
        statement_timeout_ms: Per-statement deadline in milliseconds (0 disables).
        pool_max: Size of the connection pool; 0 opens a fresh connection per call.
    """
    user: str
    database: str
    password: str = field(default="", repr=False)
    hostname: str = "localhost"
    port: int = 5432
    connect_timeout: int = 10
    statement_timeout_ms: int = 30000
    pool_max: int = 0

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Build the config from the values loaded above."""
        return cls(
            user=DB_USER,
            database=DB_NAME,
            password=DB_PASSWORD,
            hostname=DB_HOST,
            port=DB_PORT,
            connect_timeout=DB_CONNECT_TIMEOUT,
            statement_timeout_ms=DB_STATEMENT_TIMEOUT_MS,
            pool_max=DB_POOL_MAX,
        )

    def connect_kwargs(self) -> dict:
        """Keyword arguments understood by ``psycopg2.connect``."""
        kwargs = {
            "user": self.user,
            "dbname": self.database,
            "password": self.password,
            "host": self.hostname,
            "port": self.port,
        }
        if self.connect_timeout:
            kwargs["connect_timeout"] = self.connect_timeout
        if self.statement_timeout_ms:
            kwargs["options"] = f"-c statement_timeout={self.statement_timeout_ms}"
        return kwargs


@dataclass(frozen=True)
class AuthConfig:
    """Settings for password hashing, session tokens and login throttling."""
    jwt_key: str = field(default="", repr=False)
    token_ttl_seconds: int = 60 * 60 * 24 * 7
    bcrypt_rounds: int = 12
    login_max_attempts: int = 5
    login_window_seconds: int = 300

    @classmethod
    def from_env(cls) -> "AuthConfig":
        return cls(
            jwt_key=JWT_KEY,
            token_ttl_seconds=JWT_TTL_SECONDS,
            bcrypt_rounds=BCRYPT_ROUNDS,
            login_max_attempts=LOGIN_MAX_ATTEMPTS,
            login_window_seconds=LOGIN_WINDOW_SECONDS,
        )
