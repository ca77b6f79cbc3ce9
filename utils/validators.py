"""
utils/validators.py
-------------------
Small input checks shared by repositories and services.
"""

import uuid


def is_uuid(value) -> bool:
    """True if ``value`` is a UUID or parses as one."""
    if isinstance(value, uuid.UUID):
        return True
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True
