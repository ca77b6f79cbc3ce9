"""
repositories/recruiter_repo.py
------------------------------
Data access for the `recruiters` table.
"""

from typing import Optional

from db.access import DataAccess
from models.recruiter import Recruiter
from utils.logger import get_logger
from utils.validators import is_uuid

logger = get_logger(__name__)

TABLE = "recruiters"


class RecruiterRepository:
    """Repository for CRUD operations on the recruiters table."""

    def __init__(self, access: DataAccess):
        self.access = access

    def get_all(self) -> list[Recruiter]:
        return [Recruiter.from_record(r) for r in self.access.find_all(TABLE)]

    def get_by_id(self, recruiter_id: str) -> Optional[Recruiter]:
        """Ids that are not UUIDs cannot match a row and never reach the database."""
        if not is_uuid(recruiter_id):
            return None
        record = self.access.find_one(TABLE, {"id": recruiter_id})
        return Recruiter.from_record(record) if record else None

    def add(self, recruiter: Recruiter) -> Recruiter:
        """
        Insert a new recruiter.

        Args:
            recruiter: The Recruiter to persist; its `id` must already be set.
        """
        self.access.create(TABLE, recruiter.to_record())
        logger.info(f"Added recruiter {recruiter.id}")
        return recruiter

    def update(self, recruiter_id: str, changes: dict) -> None:
        if not is_uuid(recruiter_id):
            return
        self.access.update(TABLE, {"id": recruiter_id}, changes)
        logger.info(f"Updated recruiter {recruiter_id}")

    def delete(self, recruiter_id: str) -> None:
        if not is_uuid(recruiter_id):
            return
        self.access.destroy(TABLE, {"id": recruiter_id})
        logger.info(f"Deleted recruiter {recruiter_id}")
