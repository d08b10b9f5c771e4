"""Structural equality over arbitrary value graphs.

Examples:
    >>> deep_equals({"a": {"b": 1}}, {"a": {"b": 1}})
    True
    >>> deep_equals([1, 2, 3], (1, 2, 3))
    True
    >>> deep_equals(float("nan"), float("nan"))
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from domainkit.utils.frozen import origin_type
from domainkit.utils.limits import ensure_depth, max_structure_depth
from domainkit.utils.type_guards import Shape, classify, is_nan, own_fields


def deep_equals(a: object, b: object) -> bool:
    """Compare two values by content rather than by reference.

    Primitives use ``==``, except that two NaN values are equal. Positive
    and negative zero are equal, as they are for ``==``. Sequences compare
    position by position, mappings and sets by membership, dates by instant
    and records by class and fields. A list equals the tuple it was frozen
    into, and a dict equals its ``FrozenDict``. Mapping keys and set members
    without an exact hash match are paired one-to-one by structure, so the
    relation is symmetric.

    Raises:
        StructureTooDeepError: If nesting exceeds ``MAX_STRUCTURE_DEPTH``.
    """
    return _equals(a, b, set(), 0, max_structure_depth())


def _equals(a: Any, b: Any, active: set[tuple[int, int]], depth: int, limit: int) -> bool:
    if a is b:
        return True

    shape = classify(a)
    if classify(b) is not shape:
        return False

    if shape is Shape.PRIMITIVE:
        if is_nan(a) and is_nan(b):
            return True
        return bool(a == b)
    if shape is Shape.OPAQUE:
        return False
    if shape is Shape.DATE:
        return type(a) is type(b) and bool(a == b)

    # A pair already under comparison further up the stack is assumed equal;
    # any real difference is reported by the outer comparison.
    pair = (id(a), id(b))
    if pair in active:
        return True

    ensure_depth(depth, limit)
    active.add(pair)
    try:
        if shape is Shape.SEQUENCE:
            return _sequences_equal(a, b, active, depth, limit)
        if shape is Shape.MAPPING:
            return _mappings_equal(a, b, active, depth, limit)
        if shape is Shape.SET:
            return _sets_equal(a, b, active, depth, limit)
        return _records_equal(a, b, active, depth, limit)
    finally:
        active.discard(pair)


def _sequences_equal(
    a: Any, b: Any, active: set[tuple[int, int]], depth: int, limit: int
) -> bool:
    if len(a) != len(b):
        return False
    return all(_equals(x, y, active, depth + 1, limit) for x, y in zip(a, b, strict=True))


def _mappings_equal(
    a: Mapping[Any, Any], b: Mapping[Any, Any], active: set[tuple[int, int]], depth: int, limit: int
) -> bool:
    if len(a) != len(b):
        return False

    leftover: list[Any] = []
    for key, value in a.items():
        if key in b:
            if not _equals(value, b[key], active, depth + 1, limit):
                return False
        else:
            leftover.append(key)
    if not leftover:
        return True

    # Keys without a hash match pair one-to-one with the keys of b that had none.
    unmatched = [key for key in b if key not in a]
    if len(leftover) != len(unmatched):
        return False
    for key in leftover:
        for index, candidate in enumerate(unmatched):
            if _equals(key, candidate, active, depth + 1, limit) and _equals(
                a[key], b[candidate], active, depth + 1, limit
            ):
                del unmatched[index]
                break
        else:
            return False
    return True


def _sets_equal(a: Any, b: Any, active: set[tuple[int, int]], depth: int, limit: int) -> bool:
    if len(a) != len(b):
        return False
    leftover = [member for member in a if not _is_exact_member(member, b)]
    unmatched = [member for member in b if not _is_exact_member(member, a)]
    if len(leftover) != len(unmatched):
        return False
    for member in leftover:
        for index, candidate in enumerate(unmatched):
            if _equals(member, candidate, active, depth + 1, limit):
                del unmatched[index]
                break
        else:
            return False
    return True


def _records_equal(a: Any, b: Any, active: set[tuple[int, int]], depth: int, limit: int) -> bool:
    if origin_type(a) is not origin_type(b):
        return False
    return _mappings_equal(own_fields(a), own_fields(b), active, depth, limit)


def _is_plain_primitive(value: Any) -> bool:
    return classify(value) is Shape.PRIMITIVE and not is_nan(value)


def _is_exact_member(value: Any, container: Any) -> bool:
    return _is_plain_primitive(value) and value in container
