"""
Structural utilities.

Contains the structural value engine used by value objects:
- deep_clone: Copies a value graph with no shared mutable substructure
- deep_equals: Compares value graphs by content
- deep_freeze: Produces the immutable counterpart of a value graph

Plus UUID, type-guard, mapping and JSON helpers.
"""

from .deep_clone import deep_clone
from .deep_equals import deep_equals
from .deep_freeze import deep_freeze
from .frozen import FrozenDict, frozen_type, is_frozen
from .limits import StructureTooDeepError
from .objects import merge, omit, pick
from .safe_stringify import safe_stringify
from .type_guards import (
    Shape,
    classify,
    is_array,
    is_boolean,
    is_date,
    is_function,
    is_map,
    is_nil,
    is_number,
    is_plain_object,
    is_set,
    is_string,
)
from .uuid_utils import generate_uuid, is_valid_uuid

__all__ = [
    "FrozenDict",
    "Shape",
    "StructureTooDeepError",
    "classify",
    "deep_clone",
    "deep_equals",
    "deep_freeze",
    "frozen_type",
    "generate_uuid",
    "is_array",
    "is_boolean",
    "is_date",
    "is_frozen",
    "is_function",
    "is_map",
    "is_nil",
    "is_number",
    "is_plain_object",
    "is_set",
    "is_string",
    "is_valid_uuid",
    "merge",
    "omit",
    "pick",
    "safe_stringify",
]
