"""
services/recruiter_service.py
------------------------------
Use cases for managing recruiter contacts.
"""

import uuid

from db.errors import DatabaseError
from db.query_builder import is_scalar
from models.recruiter import COLUMNS, Recruiter
from repositories.recruiter_repo import RecruiterRepository
from services.result import Err, ErrorKind, Ok, Result
from utils.logger import get_logger

logger = get_logger(__name__)

_EDITABLE = frozenset(COLUMNS) - {"id"}


def _check_payload(payload) -> Err | None:
    """Reject empty payloads, unknown columns and values that are not scalars."""
    if not payload or not isinstance(payload, dict):
        return Err(ErrorKind.INVALID_INPUT, "No data")
    unknown = sorted(set(payload) - _EDITABLE)
    if unknown:
        return Err(ErrorKind.INVALID_INPUT, f"Unknown fields: {', '.join(unknown)}")
    invalid = sorted(k for k, v in payload.items() if not is_scalar(v, nullable=True))
    if invalid:
        return Err(ErrorKind.INVALID_INPUT, f"Invalid values for: {', '.join(invalid)}")
    return None


class RecruiterService:
    """CRUD over recruiters, reporting failures as `Err` values."""

    def __init__(self, repo: RecruiterRepository):
        self.repo = repo

    def list_recruiters(self) -> Result:
        try:
            return Ok(self.repo.get_all())
        except DatabaseError as e:
            logger.error(f"Failed to list recruiters: {e}")
            return Err(ErrorKind.INTERNAL, str(e))

    def get_recruiter(self, recruiter_id: str) -> Result:
        """A missing recruiter is `Ok(None)`, not an error."""
        try:
            return Ok(self.repo.get_by_id(recruiter_id))
        except DatabaseError as e:
            logger.error(f"Failed to fetch recruiter {recruiter_id}: {e}")
            return Err(ErrorKind.INTERNAL, str(e))

    def add_recruiter(self, payload: dict) -> Result:
        """
        Create a recruiter from a request payload.

        Args:
            payload: Any of name, company, city, state, country.

        Returns:
            Ok(Recruiter) with its freshly generated id.
        """
        invalid = _check_payload(payload)
        if invalid:
            return invalid
        recruiter = Recruiter(id=str(uuid.uuid4()), **payload)
        try:
            return Ok(self.repo.add(recruiter))
        except DatabaseError as e:
            logger.error(f"Failed to add recruiter: {e}")
            return Err(ErrorKind.INTERNAL, str(e))

    def update_recruiter(self, recruiter_id: str, payload: dict) -> Result:
        invalid = _check_payload(payload)
        if invalid:
            return invalid
        try:
            self.repo.update(recruiter_id, payload)
            return Ok(payload)
        except DatabaseError as e:
            logger.error(f"Failed to update recruiter {recruiter_id}: {e}")
            return Err(ErrorKind.INTERNAL, str(e))

    def delete_recruiter(self, recruiter_id: str) -> Result:
        try:
            self.repo.delete(recruiter_id)
            return Ok({"message": "Recruiter deleted"})
        except DatabaseError as e:
            logger.error(f"Failed to delete recruiter {recruiter_id}: {e}")
            return Err(ErrorKind.INTERNAL, str(e))
