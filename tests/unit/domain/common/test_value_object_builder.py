"""Tests for value object builders."""

from collections.abc import Mapping
from typing import Any

from domainkit.domain.common import (
    GenericValueObjectBuilder,
    ValidationError,
    ValueObject,
    ValueObjectBuilder,
)


class Money(ValueObject):
    def validate(self, props: Mapping[str, Any]) -> None:
        if props.get("amount", 0) < 0:
            raise ValidationError("Amount cannot be negative", field="amount")

    @property
    def amount(self) -> int:
        return self.props["amount"]  # type: ignore[no-any-return]


class MoneyBuilder(ValueObjectBuilder[Money]):
    def validate(self) -> list[str]:
        errors = []
        if not self.has("amount"):
            errors.append("amount is required")
        if not self.has("currency"):
            errors.append("currency is required")
        return errors

    def create_value_object(self) -> Money:
        return Money(self.props)

    def with_euro(self) -> "MoneyBuilder":
        return self.set("currency", "EUR")


def require_amount(props: dict[str, Any]) -> list[str]:
    return [] if "amount" in props else ["amount is required"]


class TestValueObjectBuilder:
    """Test suite for ValueObjectBuilder."""

    def test_build_success(self) -> None:
        result = MoneyBuilder().set("amount", 100).set("currency", "EUR").build()
        assert result.is_success
        assert result.value.amount == 100

    def test_build_reports_every_error(self) -> None:
        result = MoneyBuilder().build()
        assert result.error == ["amount is required", "currency is required"]

    def test_constructor_failure_becomes_error(self) -> None:
        result = MoneyBuilder({"amount": -1, "currency": "EUR"}).build()
        assert result.error == ["Amount cannot be negative"]

    def test_try_build_joins_errors(self) -> None:
        result = MoneyBuilder().try_build()
        assert result.error == "amount is required; currency is required"

    def test_accessors(self) -> None:
        builder = MoneyBuilder().update({"amount": 1, "currency": "EUR"})
        assert builder.get("amount") == 1
        assert builder.has("currency")
        assert builder.is_valid()
        assert builder.errors == []

        builder.clear("currency")
        assert not builder.has("currency")
        assert builder.errors == ["currency is required"]

        builder.clear_all()
        assert builder.props == {}

    def test_props_is_a_copy(self) -> None:
        builder = MoneyBuilder({"amount": 1})
        builder.props["amount"] = 2
        assert builder.get("amount") == 1

    def test_clone_is_independent(self) -> None:
        builder = MoneyBuilder({"amount": 1})
        cloned = builder.clone()
        cloned.set("amount", 2)
        assert builder.get("amount") == 1
        assert isinstance(cloned, MoneyBuilder)

    def test_when(self) -> None:
        builder = MoneyBuilder({"amount": 1})
        builder.when(False, lambda b: b.set("currency", "USD"))
        assert not builder.has("currency")
        builder.when(True, lambda b: b.set("currency", "USD"))
        assert builder.get("currency") == "USD"

    def test_apply_and_pipe(self) -> None:
        builder = MoneyBuilder().apply(
            lambda b: b.set("amount", 5), lambda b: b.with_euro()
        )
        assert builder.pipe(lambda b: b.build().value.amount) == 5


class TestGenericValueObjectBuilder:
    """Test suite for GenericValueObjectBuilder."""

    def test_build(self) -> None:
        builder = GenericValueObjectBuilder.create(factory=Money, validator=require_amount)
        assert builder.set("amount", 3).build().value.amount == 3

    def test_validator_errors(self) -> None:
        builder = GenericValueObjectBuilder(Money, require_amount)
        assert builder.build().error == ["amount is required"]

    def test_initial_props(self) -> None:
        builder = GenericValueObjectBuilder(Money, require_amount, {"amount": 7})
        assert builder.build().value.amount == 7

    def test_factory_failure(self) -> None:
        builder = GenericValueObjectBuilder(Money, require_amount, {"amount": -7})
        assert builder.build().error == ["Amount cannot be negative"]
