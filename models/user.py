"""
models/user.py
--------------
Domain model for registered users.
"""

from dataclasses import dataclass


@dataclass
class User:
    """
    A registered account.

    Attributes:
        id: UUID primary key, as text.
        email: Login email, unique per account.
        password: bcrypt hash of the password (never the plaintext).
        alias: Display name; "Anonymous" on registration.
    """
    id: str
    email: str
    password: str
    alias: str = "Anonymous"

    @classmethod
    def from_record(cls, record: dict) -> "User":
        return cls(
            id=str(record["id"]),
            email=record["email"],
            password=record["password"],
            alias=record.get("alias") or "Anonymous",
        )

    def to_record(self) -> dict:
        return {"id": self.id, "email": self.email, "password": self.password, "alias": self.alias}

    def public(self) -> dict:
        """The user as it may be shown to clients, without the password hash."""
        return {"id": self.id, "email": self.email, "alias": self.alias}
