"""Deep freezing of value graphs.

Builtin containers cannot be locked in place, so freezing yields their
immutable counterparts: mappings become :class:`FrozenDict`, lists become
tuples, sets become frozensets and mutable records become instances of a
frozen subclass of their own class. Leaves are shared, not copied; callers
that also need independence from the input must clone first and then freeze.

Example:
    >>> frozen = deep_freeze({"a": {"b": 1}, "items": [1, 2, 3]})
    >>> frozen["items"]
    (1, 2, 3)
    >>> frozen["a"]["b"] = 2
    Traceback (most recent call last):
    ...
    TypeError: 'FrozenDict' object does not support item assignment
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import partial
from typing import Any, TypeVar

from domainkit.utils.frozen import FrozenDict, frozen_type, is_frozen
from domainkit.utils.limits import ensure_depth, max_structure_depth
from domainkit.utils.type_guards import Shape, classify, own_fields

T = TypeVar("T")


def deep_freeze(value: T) -> T:
    """Return an immutable counterpart of ``value``.

    Freezing is idempotent: already-frozen values come back unchanged, and a
    tuple or ``FrozenDict`` whose contents are already frozen is returned as
    the same object. Dates and primitives are immutable and returned as-is.

    Raises:
        ValueError: If a list or set reaches itself only through sequences or
            sets, which no tuple or frozenset can represent.
        StructureTooDeepError: If nesting exceeds ``MAX_STRUCTURE_DEPTH``.
    """
    freezer = _Freezer(max_structure_depth())
    return freezer.freeze(value, 0)  # type: ignore[no-any-return]


_PENDING: Any = object()


class _Deferred(Exception):
    """A value leads back to a sequence or set that is still being frozen."""

    def __init__(self, target: int) -> None:
        super().__init__(target)
        self.target = target


class _Freezer:
    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.memo: dict[int, Any] = {}
        self.pending: set[int] = set()
        # Slots of mappings and records waiting for a pending sequence or set.
        self.deferred: dict[int, list[tuple[Callable[[Any], None], Any, int]]] = {}

    def freeze(self, value: Any, depth: int) -> Any:
        shape = classify(value)
        if shape in (Shape.PRIMITIVE, Shape.OPAQUE, Shape.DATE):
            return value

        key = id(value)
        if key in self.memo:
            return self.memo[key]
        if key in self.pending:
            raise _Deferred(key)

        ensure_depth(depth, self.limit)

        if shape is Shape.SEQUENCE:
            result = self._freeze_sequence(value, depth)
        elif shape is Shape.SET:
            result = self._freeze_set(value, depth)
        elif shape is Shape.MAPPING:
            result = self._freeze_mapping(value, depth)
        else:
            result = self._freeze_record(value, depth)

        self.memo[key] = result
        for assign, original, slot_depth in self.deferred.pop(key, ()):
            frozen = self._freeze_slot(original, slot_depth, assign)
            if frozen is not _PENDING:
                assign(frozen)
        return result

    def _freeze_slot(self, value: Any, depth: int, assign: Callable[[Any], None]) -> Any:
        """
        Freeze a mapping value or record field.

        If the value leads back to a sequence or set that is still pending,
        ``_PENDING`` is returned for now and ``assign`` receives the frozen value
        once that sequence or set is done.
        """
        try:
            return self.freeze(value, depth)
        except _Deferred as err:
            self.deferred.setdefault(err.target, []).append((assign, value, depth))
            return _PENDING

    def _freeze_members(self, value: Any, depth: int) -> list[Any]:
        self.pending.add(id(value))
        try:
            return [self.freeze(item, depth + 1) for item in value]
        except _Deferred as err:
            if err.target != id(value):
                raise
            raise ValueError(
                f"Cannot freeze self-referential {type(value).__name__}: "
                "it reaches itself only through sequences or sets"
            ) from None
        finally:
            self.pending.discard(id(value))

    def _freeze_sequence(self, value: Any, depth: int) -> Any:
        items = self._freeze_members(value, depth)
        if isinstance(value, tuple):
            if all(new is old for new, old in zip(items, value, strict=True)):
                return value
            if hasattr(value, "_make"):
                return type(value)._make(items)
        return tuple(items)

    def _freeze_set(self, value: Any, depth: int) -> Any:
        members = self._freeze_members(value, depth)
        if isinstance(value, frozenset) and all(
            new is old for new, old in zip(members, value, strict=True)
        ):
            return value
        return frozenset(members)

    def _freeze_mapping(self, value: Mapping[Any, Any], depth: int) -> Any:
        # Keys are hashable and therefore left as they are.
        placeholder: FrozenDict[Any, Any] = FrozenDict._placeholder()
        self.memo[id(value)] = placeholder
        items = [
            (k, self._freeze_slot(v, depth + 1, partial(_fill_item, placeholder, k)))
            for k, v in value.items()
        ]

        if isinstance(value, FrozenDict) and all(new is value[k] for k, new in items):
            return value
        placeholder._fill(items)
        return placeholder

    def _freeze_record(self, value: Any, depth: int) -> Any:
        if is_frozen(value):
            return value
        cls = frozen_type(type(value))
        result = cls.__new__(cls)
        self.memo[id(value)] = result
        for name, field in own_fields(value).items():
            assign = partial(object.__setattr__, result, name)
            object.__setattr__(result, name, self._freeze_slot(field, depth + 1, assign))
        return result


def _fill_item(target: FrozenDict[Any, Any], key: Any, value: Any) -> None:
    target._fill([(key, value)])
