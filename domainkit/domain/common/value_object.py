"""
Base class for Value Objects.

Value Objects are immutable objects that are defined by their attributes
rather than by identity. Two value objects are equal if they are of the same
class and their properties are structurally equal.

Construction always runs the same protocol:

1. ``validate(props)`` sees the caller's original input and raises
   ValidationError (or ValueError) if it is invalid
2. the stored props are ``deep_freeze(deep_clone(props))``, so no reference to
   the caller's mutable input survives and nothing can be changed afterwards

Example:
    class Email(ValueObject):
        def validate(self, props: Mapping[str, Any]) -> None:
            if "@" not in props.get("value", ""):
                raise ValidationError("Invalid email format", field="value")

        @property
        def value(self) -> str:
            return self.props["value"]

        @classmethod
        def create(cls, value: str) -> "Email":
            return cls({"value": value.strip().lower()})

    email = Email.create("Ada@Example.com")
    other = email.replace(value="grace@example.com")
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import FrozenInstanceError
from typing import Any, ClassVar, Self

from domainkit.domain.common.exceptions import DomainError
from domainkit.domain.common.result import Result
from domainkit.utils.deep_clone import deep_clone
from domainkit.utils.deep_equals import deep_equals
from domainkit.utils.deep_freeze import deep_freeze
from domainkit.utils.frozen import FrozenDict
from domainkit.utils.safe_stringify import safe_stringify

# Failures a validating constructor may raise; anything else is a bug and propagates.
CONSTRUCTION_ERRORS: tuple[type[Exception], ...] = (DomainError, ValueError)


class ValueObject(ABC):
    """
    Base class for Value Objects in the domain model.

    Value Objects are:
    - Immutable (props are deeply frozen, attribute assignment is refused)
    - Compared by value (same class and structurally equal props)
    - Self-validating (``validate`` runs before anything is stored)

    Subclasses take a props mapping in ``__init__`` and implement
    ``validate``; convenience factories belong in classmethods.
    """

    __slots__ = ("_props",)
    __deep_frozen__: ClassVar[bool] = True

    def __init__(self, props: Mapping[str, Any]) -> None:
        self.validate(props)
        object.__setattr__(self, "_props", deep_freeze(deep_clone(props)))

    @abstractmethod
    def validate(self, props: Mapping[str, Any]) -> None:
        """
        Check the properties.

        Raises:
            ValidationError: If the properties violate an invariant
        """

    @property
    def props(self) -> FrozenDict[str, Any]:
        """The frozen properties."""
        return self._props  # type: ignore[no-any-return]

    def get(self, key: str, default: Any = None) -> Any:
        return self._props.get(key, default)

    def has(self, key: str, value: Any) -> bool:
        """True if the property ``key`` is structurally equal to ``value``."""
        return key in self._props and deep_equals(self._props[key], value)

    def replace(self, changes: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Self:
        """
        Return a new instance with some properties changed.

        The changes are shallow-merged onto the current props and the result
        goes through the full validate, clone and freeze sequence again.
        ``self`` is never modified.

        Raises:
            ValidationError: If the merged properties are invalid
        """
        merged = {**self._props, **(changes or {}), **kwargs}
        return type(self)(merged)

    def equals(self, other: object) -> bool:
        if other is None:
            return False
        if other is self:
            return True
        if type(other) is not type(self):
            return False
        return deep_equals(self._props, other._props)  # type: ignore[attr-defined]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueObject):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        # Equal value objects share a class and prop names.
        return hash((type(self), tuple(sorted(self._props))))

    def __setattr__(self, name: str, value: object) -> None:
        raise FrozenInstanceError(f"cannot assign to field {name!r}")

    def __delattr__(self, name: str) -> None:
        raise FrozenInstanceError(f"cannot delete field {name!r}")

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._props.copy(),))

    def clone(self) -> Self:
        """Value objects are immutable, so the clone is the instance itself."""
        return self

    def is_empty(self) -> bool:
        """True if every property is None or an empty string."""
        return all(value is None or value == "" for value in self._props.values())

    def is_valid(self) -> bool:
        """Re-run validation on the stored props and report the outcome."""
        try:
            self.validate(self._props)
        except CONSTRUCTION_ERRORS:
            return False
        return True

    def to_dict(self) -> dict[str, Any]:
        """Shallow ``dict`` of the frozen props."""
        return self._props.copy()

    def to_primitive(self) -> object:
        """
        Convert to primitive Python type for serialization.

        Single-property value objects return that property's value.
        """
        if len(self._props) == 1:
            return next(iter(self._props.values()))
        return self.to_dict()

    def to_json(self) -> str:
        return safe_stringify(self._props)

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in self._props.items())
        return f"{self.__class__.__name__}({attrs})"

    @staticmethod
    def is_value_object(value: object) -> bool:
        return isinstance(value, ValueObject)

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> Result[Self, str]:
        """Build an instance, reporting validation failures as a failed Result."""
        try:
            return Result.ok(cls(props))
        except CONSTRUCTION_ERRORS as err:
            return Result.fail(_describe(err))

    @classmethod
    def create_many(cls, props_list: Iterable[Mapping[str, Any]]) -> Result[list[Self], str]:
        """
        Build one instance per props mapping.

        Fails with every item's error, as ``"Item i: message"`` joined by
        ``"; "``, if any item is invalid.
        """
        instances: list[Self] = []
        errors: list[str] = []
        for index, props in enumerate(props_list):
            try:
                instances.append(cls(props))
            except CONSTRUCTION_ERRORS as err:
                errors.append(f"Item {index}: {_describe(err)}")
        if errors:
            return Result.fail("; ".join(errors))
        return Result.ok(instances)


def _describe(err: Exception) -> str:
    if isinstance(err, DomainError):
        return err.message
    return str(err) or "Invalid value object properties"
