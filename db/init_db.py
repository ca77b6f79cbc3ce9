"""
db/init_db.py
-------------
Creates the database schema if it does not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db

The `users` table is managed outside this service and must already exist
with at least `id, email, password, alias`.
"""

from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = (
    "CREATE TABLE IF NOT EXISTS recruiters ("
    "id uuid PRIMARY KEY, "
    "name varchar(255), "
    "company varchar(255), "
    "city varchar(255), "
    "state varchar(255), "
    "country varchar(255));"
)


if __name__ == "__main__":
    from config import DatabaseConfig
    from db.access import DataAccess

    access = DataAccess(DatabaseConfig.from_env())
    try:
        access.init()
    finally:
        access.close()
    logger.info("Database schema created successfully.")
