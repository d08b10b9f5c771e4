"""
Fluent builders for Value Objects.

A builder accumulates partial properties, reports every problem it can see
up front, and only then calls the validating constructor.

Example:
    builder = GenericValueObjectBuilder.create(
        factory=Money,
        validator=lambda p: [] if "amount" in p else ["amount is required"],
    )
    result = builder.set("amount", 100).set("currency", "EUR").build()
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, Generic, Self, TypeVar

import structlog

from domainkit.domain.common.result import Result
from domainkit.domain.common.value_object import CONSTRUCTION_ERRORS, ValueObject

logger = structlog.get_logger(__name__)

VO = TypeVar("VO", bound=ValueObject)
R = TypeVar("R")


class ValueObjectBuilder(ABC, Generic[VO]):
    """
    Base class for value object builders.

    Subclasses implement ``validate`` (returning a list of error messages)
    and ``create_value_object``.
    """

    def __init__(self, initial_props: Mapping[str, Any] | None = None) -> None:
        self._props: dict[str, Any] = dict(initial_props or {})

    @abstractmethod
    def validate(self) -> list[str]:
        """Return error messages for the accumulated props; empty when buildable."""

    @abstractmethod
    def create_value_object(self) -> VO:
        """Construct the value object from the accumulated props."""

    def update(self, props: Mapping[str, Any]) -> Self:
        """Copy every entry of ``props`` into the builder."""
        self._props.update(props)
        return self

    def set(self, key: str, value: Any) -> Self:
        self._props[key] = value
        return self

    def get(self, key: str, default: Any = None) -> Any:
        return self._props.get(key, default)

    def has(self, key: str) -> bool:
        return self._props.get(key) is not None

    def clear(self, key: str) -> Self:
        self._props.pop(key, None)
        return self

    def clear_all(self) -> Self:
        self._props = {}
        return self

    @property
    def props(self) -> dict[str, Any]:
        """Copy of the accumulated props."""
        return dict(self._props)

    def build(self) -> Result[VO, list[str]]:
        """
        Validate and construct.

        Returns:
            The value object, or every validation message; an exception from
            the validating constructor becomes a single message
        """
        errors = self.validate()
        if errors:
            logger.debug(
                "value_object_build_failed", builder=type(self).__name__, errors=errors
            )
            return Result.fail(errors)

        try:
            return Result.ok(self.create_value_object())
        except CONSTRUCTION_ERRORS as err:
            message = getattr(err, "message", None) or str(err) or "Unknown error"
            logger.debug(
                "value_object_build_failed", builder=type(self).__name__, errors=[message]
            )
            return Result.fail([message])

    def try_build(self) -> Result[VO, str]:
        """Like ``build`` with the messages joined by ``"; "``."""
        return self.build().map_error("; ".join)

    def is_valid(self) -> bool:
        return not self.validate()

    @property
    def errors(self) -> list[str]:
        return self.validate()

    def clone(self) -> Self:
        """Independent builder with a copy of the accumulated props."""
        cloned = self.__class__.__new__(self.__class__)
        cloned.__dict__.update(self.__dict__)
        cloned._props = dict(self._props)
        return cloned

    def when(self, condition: bool, fn: Callable[[Self], object]) -> Self:
        """Apply ``fn`` only if ``condition`` holds."""
        if condition:
            fn(self)
        return self

    def pipe(self, fn: Callable[[Self], R]) -> R:
        return fn(self)

    def apply(self, *setters: Callable[[Self], object]) -> Self:
        for setter in setters:
            setter(self)
        return self


class GenericValueObjectBuilder(ValueObjectBuilder[VO]):
    """Builder assembled from a factory and a validator function."""

    def __init__(
        self,
        factory: Callable[[dict[str, Any]], VO],
        validator: Callable[[dict[str, Any]], list[str]],
        initial_props: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(initial_props)
        self._factory = factory
        self._validator = validator

    def validate(self) -> list[str]:
        return self._validator(dict(self._props))

    def create_value_object(self) -> VO:
        return self._factory(dict(self._props))

    @classmethod
    def create(
        cls,
        factory: Callable[[dict[str, Any]], VO],
        validator: Callable[[dict[str, Any]], list[str]],
        initial_props: Mapping[str, Any] | None = None,
    ) -> "GenericValueObjectBuilder[VO]":
        return cls(factory, validator, initial_props)
