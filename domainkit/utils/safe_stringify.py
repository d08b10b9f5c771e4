"""JSON rendering that never raises, for logs and debugging output."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from datetime import timedelta
from enum import Enum
from typing import Any

from domainkit.utils.frozen import is_frozen
from domainkit.utils.type_guards import Shape, classify, own_fields

CIRCULAR = "[Circular ~]"
UNSTRINGIFIABLE = "[Unable to stringify]"

_JSON_KEY_TYPES = (str, int, float, bool, type(None))


def safe_stringify(
    value: object,
    *,
    default: Callable[[Any], Any] | None = None,
    indent: int | str | None = None,
    sort_keys: bool = False,
) -> str:
    """
    Render ``value`` as JSON text without raising.

    - Cycles become ``"[Circular ~]"``
    - Sets become ``{"_type": "Set", "values": [...]}``
    - Mappings with non-scalar keys become ``{"_type": "Map", "entries": [...]}``
    - Dates become ISO strings; UUIDs, Decimals and other scalars become strings
    - Objects with ``to_primitive()`` use it; other records render their fields

    Args:
        value: Anything
        default: Optional converter tried for objects with no built-in rendering
        indent: Passed through to :func:`json.dumps`
        sort_keys: Passed through to :func:`json.dumps`

    Returns:
        JSON text, or ``"[Unable to stringify]"`` if rendering failed
    """
    try:
        primitive = _to_primitive(value, set(), default)
        return json.dumps(primitive, indent=indent, sort_keys=sort_keys)
    except (TypeError, ValueError, RecursionError):
        return UNSTRINGIFIABLE


def _to_primitive(value: Any, path: set[int], default: Callable[[Any], Any] | None) -> Any:
    shape = classify(value)

    if shape is Shape.PRIMITIVE:
        return _scalar(value, path, default)
    if shape is Shape.DATE:
        return value.isoformat()
    if shape is Shape.OPAQUE:
        return None

    if id(value) in path:
        return CIRCULAR
    path.add(id(value))
    try:
        if shape is Shape.SEQUENCE:
            return [_to_primitive(item, path, default) for item in value]
        if shape is Shape.SET:
            return {"_type": "Set", "values": [_to_primitive(v, path, default) for v in value]}
        if shape is Shape.MAPPING:
            return _mapping(value, path, default)
        if hasattr(value, "to_primitive"):
            return _to_primitive(value.to_primitive(), path, default)
        if default is not None:
            return _to_primitive(default(value), path, default)
        return _mapping(own_fields(value), path, default)
    finally:
        path.discard(id(value))


def _scalar(value: Any, path: set[int], default: Callable[[Any], Any] | None) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return _to_primitive(value.value, path, default)
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if hasattr(value, "to_primitive"):
        return _to_primitive(value.to_primitive(), path, default)
    if is_frozen(value):
        if id(value) in path:
            return CIRCULAR
        path.add(id(value))
        try:
            return _mapping(own_fields(value), path, default)
        finally:
            path.discard(id(value))
    return str(value)


def _mapping(value: Mapping[Any, Any], path: set[int], default: Callable[[Any], Any] | None) -> Any:
    if all(isinstance(key, _JSON_KEY_TYPES) for key in value):
        return {key: _to_primitive(item, path, default) for key, item in value.items()}
    return {
        "_type": "Map",
        "entries": [
            [_to_primitive(key, path, default), _to_primitive(item, path, default)]
            for key, item in value.items()
        ],
    }
