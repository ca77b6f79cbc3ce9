"""
models/recruiter.py
-------------------
Domain model for recruiter contacts.
"""

from dataclasses import asdict, dataclass, fields
from typing import Optional

COLUMNS = ("id", "name", "company", "city", "state", "country")


@dataclass
class Recruiter:
    """
    A recruiter contact.

    Attributes:
        id: UUID primary key, as text (None until the record is created).
        name: Recruiter's full name.
        company: Agency or employer.
        city, state, country: Location.
    """
    id: Optional[str] = None
    name: Optional[str] = None
    company: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict) -> "Recruiter":
        """Build from a database record, ignoring unknown columns."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in record.items() if k in known}
        if values.get("id") is not None:
            values["id"] = str(values["id"])
        return cls(**values)

    def to_record(self) -> dict:
        return asdict(self)

    def __str__(self) -> str:
        location = ", ".join(p for p in (self.city, self.state, self.country) if p)
        return f"{self.name} @ {self.company} ({location})"
