"""Type guards and shape classification for the structural engine.

Every structural operation (clone, equality, freeze) dispatches on the small
closed set of shapes returned by :func:`classify`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum, auto
from fractions import Fraction
from types import BuiltinFunctionType, FunctionType, MethodType, ModuleType
from typing import Any, TypeGuard
from uuid import UUID

from domainkit.utils.frozen import is_frozen, origin_type

_SCALAR_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    UUID,
    Enum,
    timedelta,
    range,
)

_OPAQUE_TYPES: tuple[type, ...] = (
    type,
    ModuleType,
    FunctionType,
    BuiltinFunctionType,
    MethodType,
)


class Shape(Enum):
    """Recognized value shapes."""

    PRIMITIVE = auto()
    DATE = auto()
    SEQUENCE = auto()
    MAPPING = auto()
    SET = auto()
    RECORD = auto()
    OPAQUE = auto()


def classify(value: object) -> Shape:
    """Return the shape the structural engine uses for ``value``."""
    if value is None or isinstance(value, _SCALAR_TYPES):
        return Shape.PRIMITIVE
    if isinstance(value, (datetime, date, time)):
        return Shape.DATE
    if isinstance(value, (list, tuple)):
        return Shape.SEQUENCE
    if isinstance(value, Mapping):
        return Shape.MAPPING
    if isinstance(value, (set, frozenset)):
        return Shape.SET
    if is_frozen(value):
        # Frozen records keep their shape; other frozen objects compare with ==.
        return Shape.RECORD if origin_type(value) is not type(value) else Shape.PRIMITIVE
    if isinstance(value, _OPAQUE_TYPES) or callable(value):
        return Shape.OPAQUE
    if hasattr(value, "__dict__") or _slot_names(type(value)):
        return Shape.RECORD
    return Shape.OPAQUE


def own_fields(value: object) -> dict[str, Any]:
    """Return the instance attributes of a record, ``__slots__`` included."""
    fields: dict[str, Any] = {}
    for name in _slot_names(type(value)):
        try:
            fields[name] = object.__getattribute__(value, name)
        except AttributeError:
            continue
    instance_dict = getattr(value, "__dict__", None)
    if instance_dict is not None:
        fields.update(instance_dict)
    return fields


def _slot_names(cls: type) -> tuple[str, ...]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or name in names:
                continue
            names.append(name)
    return tuple(names)


def is_nan(value: object) -> bool:
    """True for float and Decimal not-a-number values."""
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False


def is_plain_object(value: object) -> TypeGuard[dict[str, Any]]:
    """True only for instances of exactly ``dict``."""
    return type(value) is dict


def is_function(value: object) -> bool:
    return callable(value) and not isinstance(value, type)


def is_string(value: object) -> TypeGuard[str]:
    return isinstance(value, str)


def is_number(value: object) -> bool:
    """True for real numbers, excluding bools and NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, Fraction)):
        return False
    return not is_nan(value)


def is_boolean(value: object) -> TypeGuard[bool]:
    return isinstance(value, bool)


def is_nil(value: object) -> TypeGuard[None]:
    return value is None


def is_date(value: object) -> bool:
    return classify(value) is Shape.DATE


def is_array(value: object) -> TypeGuard[list[Any] | tuple[Any, ...]]:
    return isinstance(value, (list, tuple))


def is_map(value: object) -> TypeGuard[Mapping[Any, Any]]:
    return isinstance(value, Mapping)


def is_set(value: object) -> TypeGuard[set[Any] | frozenset[Any]]:
    return isinstance(value, (set, frozenset))
