"""
main.py
-------
Entry point for the recruiters service core.

Responsibilities:
    - Build the database and auth configuration from the environment.
    - Ensure the schema exists before anything else touches the database.
    - Wire repositories and services for the HTTP layer to call into.
"""

from dataclasses import dataclass

from config import AuthConfig, DatabaseConfig
from db.access import DataAccess
from repositories.recruiter_repo import RecruiterRepository
from repositories.user_repo import UserRepository
from security.rate_limiter import LoginRateLimiter
from services.auth_service import AuthService
from services.recruiter_service import RecruiterService
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Services:
    """Everything the HTTP layer needs, built once at startup."""
    access: DataAccess
    recruiters: RecruiterService
    auth: AuthService

    def close(self) -> None:
        self.access.close()


def build_services(db_config: DatabaseConfig, auth_config: AuthConfig,
                   access: DataAccess | None = None) -> Services:
    """Initialize the schema and wire the services on top of one DataAccess."""
    access = access or DataAccess(db_config)
    access.init()

    if not auth_config.jwt_key:
        logger.warning("JWT_KEY is not set; login and registration will fail.")

    limiter = LoginRateLimiter(auth_config.login_max_attempts, auth_config.login_window_seconds)
    return Services(
        access=access,
        recruiters=RecruiterService(RecruiterRepository(access)),
        auth=AuthService(UserRepository(access), auth_config, limiter),
    )


def main() -> None:
    """Initialize the database and report readiness."""
    db_config = DatabaseConfig.from_env()
    logger.info(f"Initializing database {db_config.database} on {db_config.hostname}:{db_config.port}...")
    services = build_services(db_config, AuthConfig.from_env())
    logger.info("Recruiters service core is ready.")
    services.close()


if __name__ == "__main__":
    main()
