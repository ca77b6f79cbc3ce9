"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from db.access import DataAccess
from models.user import User
from utils.logger import get_logger
from utils.validators import is_uuid

logger = get_logger(__name__)

TABLE = "users"


class UserRepository:
    """Repository for the users table."""

    def __init__(self, access: DataAccess):
        self.access = access

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by email.

        Returns:
            User or None.
        """
        record = self.access.find_one(TABLE, {"email": email})
        return User.from_record(record) if record else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        if not is_uuid(user_id):
            return None
        record = self.access.find_one(TABLE, {"id": user_id})
        return User.from_record(record) if record else None

    def email_exists(self, email: str) -> bool:
        return self.access.find_one(TABLE, {"email": email}, {"fields": ["id"]}) is not None

    def add(self, user: User) -> User:
        self.access.create(TABLE, user.to_record())
        logger.info(f"Registered user {user.id}")
        return user
