"""
Result type for error-as-value returns.

Used where a failure is an expected outcome the caller should branch on
(building value objects from untrusted input) rather than an exception.

Example:
    result = Email.from_props({"value": raw})
    if result.is_failure:
        return render_error(result.error)
    email = result.value

    label = result.map(lambda e: e.domain).value_or("unknown")
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from domainkit.domain.common.exceptions import ResultAccessError

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")
R = TypeVar("R")

_NOTHING: Any = object()


@dataclass(frozen=True, slots=True)
class Result(Generic[T, E]):
    """Outcome that is either a success carrying a value or a failure carrying an error."""

    _value: T = _NOTHING
    _error: E = _NOTHING
    _ok: bool = True

    @classmethod
    def ok(cls, value: T) -> "Result[T, Any]":
        return cls(_value=value, _ok=True)

    @classmethod
    def fail(cls, error: E) -> "Result[Any, E]":
        return cls(_error=error, _ok=False)

    @classmethod
    def from_condition(cls, condition: bool, value: T, error: E) -> "Result[T, E]":
        return cls.ok(value) if condition else cls.fail(error)

    @classmethod
    def from_optional(cls, value: T | None, error: E) -> "Result[T, E]":
        """Success for anything but None."""
        return cls.ok(value) if value is not None else cls.fail(error)

    @classmethod
    def from_callable(
        cls,
        fn: Callable[[], T],
        *exceptions: type[BaseException],
    ) -> "Result[T, BaseException]":
        """
        Call ``fn`` and capture the listed exception types as a failure.

        Exceptions not listed propagate. With no types listed, any
        ``Exception`` is captured.
        """
        caught = exceptions or (Exception,)
        try:
            return cls.ok(fn())
        except caught as err:
            return cls.fail(err)  # type: ignore[arg-type]

    @property
    def is_success(self) -> bool:
        return self._ok

    @property
    def is_failure(self) -> bool:
        return not self._ok

    @property
    def value(self) -> T:
        """The success value; raises ResultAccessError on a failure."""
        if not self._ok:
            raise ResultAccessError("Cannot get value from a failed Result", {"error": self._error})
        return self._value

    @property
    def error(self) -> E:
        """The failure error; raises ResultAccessError on a success."""
        if self._ok:
            raise ResultAccessError("Cannot get error from a successful Result")
        return self._error

    def value_or(self, default: T) -> T:
        return self._value if self._ok else default

    def value_or_none(self) -> T | None:
        return self._value if self._ok else None

    def error_or_none(self) -> E | None:
        return None if self._ok else self._error

    def unwrap_or_raise(self, exc_factory: Callable[[E], BaseException] | None = None) -> T:
        """Return the value or raise the error (or ``exc_factory(error)``)."""
        if self._ok:
            return self._value
        if exc_factory is not None:
            raise exc_factory(self._error)
        if isinstance(self._error, BaseException):
            raise self._error
        raise ResultAccessError(str(self._error), {"error": self._error})

    def map(self, fn: Callable[[T], U]) -> "Result[U, E]":
        if self._ok:
            return Result.ok(fn(self._value))
        return Result.fail(self._error)

    def map_error(self, fn: Callable[[E], F]) -> "Result[T, F]":
        if not self._ok:
            return Result.fail(fn(self._error))
        return Result.ok(self._value)

    def and_then(self, fn: "Callable[[T], Result[U, F]]") -> "Result[U, E | F]":
        """Chain a step that itself returns a Result."""
        if self._ok:
            return fn(self._value)  # type: ignore[return-value]
        return Result.fail(self._error)

    def match(self, ok: Callable[[T], R], fail: Callable[[E], R]) -> R:
        if self._ok:
            return ok(self._value)
        return fail(self._error)

    def tap(self, fn: Callable[[T], object]) -> "Result[T, E]":
        if self._ok:
            fn(self._value)
        return self

    def tap_error(self, fn: Callable[[E], object]) -> "Result[T, E]":
        if not self._ok:
            fn(self._error)
        return self

    @staticmethod
    def combine(results: "Iterable[Result[T, E]]") -> "Result[list[T], E]":
        """All values if every result succeeded, else the first failure."""
        values: list[T] = []
        for result in results:
            if result.is_failure:
                return Result.fail(result.error)
            values.append(result.value)
        return Result.ok(values)

    def __repr__(self) -> str:
        if self._ok:
            return f"Result.ok({self._value!r})"
        return f"Result.fail({self._error!r})"


def combine_results(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    return Result.combine(results)


def sequence(*steps: Callable[[], Result[T, E]]) -> Result[list[T], E]:
    """Run steps in order, stopping at the first failure."""
    values: list[T] = []
    for step in steps:
        result = step()
        if result.is_failure:
            return Result.fail(result.error)
        values.append(result.value)
    return Result.ok(values)
