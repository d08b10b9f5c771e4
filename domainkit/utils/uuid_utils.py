"""UUID helpers for locally generated identity tokens."""

import re
from uuid import uuid4

_UUID_V4_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def generate_uuid() -> str:
    """
    Generate a random version 4 UUID string.

    Format is ``xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx`` where ``y`` is one of
    8, 9, a or b. Backed by ``os.urandom`` via :func:`uuid.uuid4`.
    """
    return str(uuid4())


def is_valid_uuid(value: str) -> bool:
    """Check whether a string is a well-formed version 4 UUID (any case)."""
    return bool(_UUID_V4_PATTERN.fullmatch(value))
