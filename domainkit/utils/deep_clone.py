"""Deep cloning of arbitrary value graphs.

Complexity is O(n) in the number of reachable nodes. Cyclic structures are
reproduced rather than followed forever: each mutable container or record
is registered in a per-call memo before its children are visited, so a
reference back to it resolves to the in-progress clone.

Example:
    >>> original = {"a": {"b": 1}, "items": [1, 2, 3]}
    >>> cloned = deep_clone(original)
    >>> cloned["a"]["b"] = 2
    >>> original["a"]["b"]
    1
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from domainkit.utils.frozen import FrozenDict, is_frozen
from domainkit.utils.limits import ensure_depth, max_structure_depth
from domainkit.utils.type_guards import Shape, classify, own_fields

T = TypeVar("T")


def deep_clone(value: T) -> T:
    """Return a copy of ``value`` that shares no mutable substructure with it.

    Primitives, already-frozen objects and opaque values (functions, classes,
    modules) are returned as-is. Container and record types are preserved.

    Raises:
        StructureTooDeepError: If nesting exceeds ``MAX_STRUCTURE_DEPTH``.
    """
    return _clone(value, {}, 0, max_structure_depth())  # type: ignore[no-any-return]


def _clone(value: Any, memo: dict[int, Any], depth: int, limit: int) -> Any:
    shape = classify(value)
    if shape is Shape.PRIMITIVE or shape is Shape.OPAQUE:
        return value

    key = id(value)
    if key in memo:
        return memo[key]

    ensure_depth(depth, limit)

    if shape is Shape.DATE:
        return value.replace()
    if shape is Shape.SEQUENCE:
        return _clone_sequence(value, memo, depth, limit)
    if shape is Shape.MAPPING:
        return _clone_mapping(value, memo, depth, limit)
    if shape is Shape.SET:
        return _clone_set(value, memo, depth, limit)
    return _clone_record(value, memo, depth, limit)


def _clone_sequence(value: Any, memo: dict[int, Any], depth: int, limit: int) -> Any:
    if isinstance(value, list):
        result = [] if type(value) is list else _emptied_copy(value)
        memo[id(value)] = result
        result.extend(_clone(item, memo, depth + 1, limit) for item in value)
        return result

    items = [_clone(item, memo, depth + 1, limit) for item in value]
    if id(value) in memo:
        # A cycle through this tuple already produced its copy; reuse it so the cycle closes.
        return memo[id(value)]
    if hasattr(value, "_make"):
        cloned = type(value)._make(items)
    elif type(value) is tuple:
        cloned = tuple(items)
    else:
        cloned = type(value)(items)
    memo[id(value)] = cloned
    return cloned


def _clone_mapping(value: Mapping[Any, Any], memo: dict[int, Any], depth: int, limit: int) -> Any:
    if isinstance(value, dict):
        result: Any = {} if type(value) is dict else _emptied_copy(value)
        memo[id(value)] = result
        target = result
    elif isinstance(value, FrozenDict):
        result = type(value)._placeholder()
        memo[id(value)] = result
        target = None
    elif isinstance(value, MappingProxyType):
        target = {}
        result = MappingProxyType(target)
        memo[id(value)] = result
    else:
        target = {}
        result = None

    items = [
        (_clone(k, memo, depth + 1, limit), _clone(v, memo, depth + 1, limit))
        for k, v in value.items()
    ]

    if target is not None:
        target.update(items)
    if isinstance(result, FrozenDict):
        result._fill(items)
    if result is None:
        result = type(value)(target)
        memo[id(value)] = result
    return result


def _clone_set(value: Any, memo: dict[int, Any], depth: int, limit: int) -> Any:
    if isinstance(value, set):
        result = set() if type(value) is set else _emptied_copy(value)
        memo[id(value)] = result
        result.update(_clone(item, memo, depth + 1, limit) for item in value)
        return result

    members = [_clone(item, memo, depth + 1, limit) for item in value]
    if id(value) in memo:
        return memo[id(value)]
    cloned = frozenset(members) if type(value) is frozenset else type(value)(members)
    memo[id(value)] = cloned
    return cloned


def _clone_record(value: Any, memo: dict[int, Any], depth: int, limit: int) -> Any:
    if is_frozen(value):
        return value
    cls = type(value)
    result = cls.__new__(cls)
    memo[id(value)] = result
    for name, field in own_fields(value).items():
        object.__setattr__(result, name, _clone(field, memo, depth + 1, limit))
    return result


def _emptied_copy(value: Any) -> Any:
    # Keeps subclass configuration such as a defaultdict's default_factory.
    result = copy.copy(value)
    result.clear()
    return result
