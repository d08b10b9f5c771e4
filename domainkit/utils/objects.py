"""Mapping helpers: deep merge, pick and omit."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from domainkit.utils.deep_clone import deep_clone
from domainkit.utils.type_guards import Shape, classify

K = TypeVar("K")
V = TypeVar("V")


def merge(*sources: Mapping[Any, Any] | None) -> dict[Any, Any]:
    """
    Deep-merge mappings into a new ``dict``; later sources win.

    Nested mappings present on both sides are merged recursively. Every
    other value is deep-cloned, so the result shares nothing mutable with
    the inputs. ``None`` sources and ``None`` values are skipped.

    Example:
        >>> merge({"a": {"x": 1}, "b": 1}, {"a": {"y": 2}, "b": None})
        {'a': {'x': 1, 'y': 2}, 'b': 1}
    """
    result: dict[Any, Any] = {}
    seen: dict[int, dict[Any, Any]] = {}
    for source in sources:
        if source is not None:
            _merge_into(result, source, seen)
    return result


def _merge_into(
    result: dict[Any, Any], source: Mapping[Any, Any], seen: dict[int, dict[Any, Any]]
) -> None:
    for key, value in source.items():
        if value is None:
            continue
        current = result.get(key)
        if _is_mergeable(value) and _is_mergeable(current):
            if id(value) in seen:
                result[key] = seen[id(value)]
                continue
            merged: dict[Any, Any] = {}
            seen[id(value)] = merged
            _merge_into(merged, current, seen)
            _merge_into(merged, value, seen)
            result[key] = merged
        else:
            result[key] = deep_clone(value)


def _is_mergeable(value: object) -> bool:
    return value is not None and classify(value) is Shape.MAPPING


def pick(obj: Mapping[K, V], keys: Iterable[K]) -> dict[K, V]:
    """Return a new ``dict`` with only the listed keys that exist in ``obj``."""
    return {key: obj[key] for key in keys if key in obj}


def omit(obj: Mapping[K, V], keys: Iterable[K]) -> dict[K, V]:
    """Return a new ``dict`` without the listed keys."""
    excluded = set(keys)
    return {key: value for key, value in obj.items() if key not in excluded}
