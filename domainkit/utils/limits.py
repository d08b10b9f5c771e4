"""Nesting limit shared by the structural operations."""

from domainkit.config import get_settings


class StructureTooDeepError(ValueError):
    """Raised when a value graph nests deeper than ``MAX_STRUCTURE_DEPTH``."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Structure exceeds the maximum nesting depth of {limit}")
        self.limit = limit


def max_structure_depth() -> int:
    return get_settings().MAX_STRUCTURE_DEPTH


def ensure_depth(depth: int, limit: int) -> None:
    if depth > limit:
        raise StructureTooDeepError(limit)
