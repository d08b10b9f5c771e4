"""Tests for shape classification and type guards."""

from collections import OrderedDict
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from decimal import Decimal
from enum import Enum
from uuid import uuid4

import pytest

from domainkit.utils import (
    FrozenDict,
    Shape,
    classify,
    deep_freeze,
    is_array,
    is_boolean,
    is_date,
    is_function,
    is_map,
    is_nil,
    is_number,
    is_plain_object,
    is_set,
    is_string,
)
from domainkit.utils.type_guards import own_fields


class Color(Enum):
    RED = "red"


@dataclass
class Point:
    x: int
    y: int


class Slotted:
    __slots__ = ("a", "b")

    def __init__(self) -> None:
        self.a = 1


class TestClassify:
    """Test suite for classify."""

    @pytest.mark.parametrize(
        "value",
        [None, True, 1, 1.5, "s", b"b", Decimal("1.1"), uuid4(), Color.RED],
    )
    def test_primitives(self, value: object) -> None:
        assert classify(value) is Shape.PRIMITIVE

    @pytest.mark.parametrize("value", [datetime.now(UTC), date(2024, 1, 1), time(12, 0)])
    def test_dates(self, value: object) -> None:
        assert classify(value) is Shape.DATE

    def test_containers(self) -> None:
        assert classify([1]) is Shape.SEQUENCE
        assert classify((1,)) is Shape.SEQUENCE
        assert classify({"a": 1}) is Shape.MAPPING
        assert classify(OrderedDict()) is Shape.MAPPING
        assert classify(FrozenDict()) is Shape.MAPPING
        assert classify({1}) is Shape.SET
        assert classify(frozenset()) is Shape.SET

    def test_records(self) -> None:
        assert classify(Point(1, 2)) is Shape.RECORD
        assert classify(Slotted()) is Shape.RECORD

    def test_frozen_record_keeps_record_shape(self) -> None:
        assert classify(deep_freeze(Point(1, 2))) is Shape.RECORD

    def test_opaque(self) -> None:
        assert classify(len) is Shape.OPAQUE
        assert classify(lambda: None) is Shape.OPAQUE
        assert classify(Point) is Shape.OPAQUE
        assert classify(object()) is Shape.OPAQUE


class TestOwnFields:
    """Test suite for own_fields."""

    def test_instance_dict(self) -> None:
        assert own_fields(Point(1, 2)) == {"x": 1, "y": 2}

    def test_unset_slots_are_skipped(self) -> None:
        assert own_fields(Slotted()) == {"a": 1}


class TestTypeGuards:
    """Test suite for the is_* predicates."""

    def test_is_plain_object(self) -> None:
        assert is_plain_object({})
        assert not is_plain_object(OrderedDict())
        assert not is_plain_object(Point(1, 2))

    def test_is_function(self) -> None:
        assert is_function(len)
        assert is_function(lambda: None)
        assert not is_function(Point)
        assert not is_function("len")

    def test_is_number(self) -> None:
        assert is_number(1)
        assert is_number(1.5)
        assert is_number(Decimal("2"))
        assert not is_number(True)
        assert not is_number(float("nan"))
        assert not is_number("1")

    def test_simple_predicates(self) -> None:
        assert is_string("a") and not is_string(b"a")
        assert is_boolean(False) and not is_boolean(0)
        assert is_nil(None) and not is_nil(0)
        assert is_date(date(2024, 1, 1)) and not is_date("2024-01-01")
        assert is_array([]) and is_array(()) and not is_array("ab")
        assert is_map({}) and not is_map([])
        assert is_set(set()) and is_set(frozenset()) and not is_set([])
