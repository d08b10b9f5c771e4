"""Immutable counterparts of the mutable containers handled by ``deep_freeze``."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import FrozenInstanceError
from functools import lru_cache
from typing import Any, TypeVar

K = TypeVar("K")
V = TypeVar("V")

FROZEN_MARKER = "__deep_frozen__"


def is_frozen(value: object) -> bool:
    """True for objects whose class declares them deeply immutable."""
    return bool(getattr(type(value), FROZEN_MARKER, False))


class FrozenDict(Mapping[K, V]):
    """Read-only, hashable mapping.

    Item assignment and deletion raise ``TypeError`` like any other
    immutable container. Hashing requires hashable values.
    """

    __slots__ = ("_data", "_hash")

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self._data: dict[K, V] = dict(*args, **kwargs)
        self._hash: int | None = None

    def __getitem__(self, key: K) -> V:
        return self._data[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._data.items()))
        return self._hash

    def __or__(self, other: Mapping[K, V]) -> FrozenDict[K, V]:
        if not isinstance(other, Mapping):
            return NotImplemented
        return FrozenDict({**self._data, **other})

    def __repr__(self) -> str:
        return f"FrozenDict({self._data!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._data,))

    def copy(self) -> dict[K, V]:
        """Return a shallow, mutable ``dict`` copy."""
        return dict(self._data)

    @classmethod
    def _placeholder(cls) -> FrozenDict[Any, Any]:
        # Registered before its items exist so cyclic references resolve to it.
        return cls()

    def _fill(self, items: Mapping[K, V] | list[tuple[K, V]]) -> None:
        self._data.update(items)


def _refuse_setattr(self: object, name: str, value: object) -> None:
    raise FrozenInstanceError(f"cannot assign to field {name!r}")


def _refuse_delattr(self: object, name: str) -> None:
    raise FrozenInstanceError(f"cannot delete field {name!r}")


@lru_cache(maxsize=None)
def frozen_type(cls: type) -> type:
    """Return a cached subclass of ``cls`` whose instances reject mutation."""
    if is_frozen_type(cls):
        return cls
    namespace = {
        "__slots__": (),
        "__module__": cls.__module__,
        "__qualname__": cls.__qualname__,
        "__setattr__": _refuse_setattr,
        "__delattr__": _refuse_delattr,
        FROZEN_MARKER: True,
        "__frozen_origin__": cls,
    }
    return type(cls.__name__, (cls,), namespace)


def is_frozen_type(cls: type) -> bool:
    return bool(getattr(cls, FROZEN_MARKER, False))


def origin_type(value: object) -> type:
    """Class of ``value``, seen through the frozen subclass if it has one."""
    cls = type(value)
    return cls.__dict__.get("__frozen_origin__", cls)
