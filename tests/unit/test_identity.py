"""Tests for type identities, destinations and width tags."""

import dataclasses
import datetime
import enum
from typing import Optional

import pytest

from parse_register import (
    Float32,
    Int8,
    Int64,
    Ref,
    RefView,
    Uint,
    Uint8,
    Uint64,
    destination_type,
    is_settable,
    type_identity,
)
from tests.records import Endpoint, FrozenEndpoint


def _make_local_class():
    class Config:
        pass

    return Config


class TestTypeIdentity:
    """Test type_identity key derivation."""

    def test_builtin_has_empty_namespace(self):
        identity = type_identity(str)

        assert identity.namespace == ""
        assert identity.name == "str"
        assert str(identity) == ".str"

    def test_namespaced_type(self):
        identity = type_identity(Int8)

        assert identity.namespace == "parse_register.widths"
        assert str(identity) == "parse_register.widths.Int8"

    def test_same_type_same_key(self):
        assert type_identity(Endpoint) == type_identity(Endpoint)
        assert hash(type_identity(Endpoint)) == hash(type_identity(Endpoint))

    def test_distinct_primitive_kinds_differ(self):
        keys = {type_identity(tp) for tp in (int, bool, float, str, Int8, Int64, Uint, Uint8, Uint64)}

        assert len(keys) == 9

    def test_same_name_distinct_classes_differ(self):
        """Classes sharing module and qualname still get distinct keys."""
        first, second = _make_local_class(), _make_local_class()
        a, b = type_identity(first), type_identity(second)

        assert (a.namespace, a.name) == (b.namespace, b.name)
        assert a != b

    def test_non_type_rejected(self):
        with pytest.raises(TypeError, match="expected a type"):
            type_identity(42)


class TestDestinationType:
    """The same type is found by value and by indirection."""

    def test_ref_declared_type(self):
        assert destination_type(Ref(Int8)) is Int8

    def test_view_declared_type(self):
        assert destination_type(Ref(Int8).view()) is Int8

    def test_plain_object(self):
        assert destination_type(Endpoint()) is Endpoint
        assert destination_type("x") is str

    def test_ref_and_value_share_identity(self):
        assert type_identity(destination_type(Ref(str))) == type_identity(destination_type("sample"))


class TestRef:
    """Test Ref / RefView cells."""

    def test_get_set(self):
        cell = Ref(int)
        assert cell.get() is None

        cell.set(3)
        assert cell.value == 3
        assert cell.get() == 3

    def test_view_follows_cell(self):
        cell = Ref(str, "a")
        view = cell.view()

        cell.value = "b"

        assert isinstance(view, RefView)
        assert view.value == "b"
        assert view.get() == "b"
        assert view.type is str

    def test_view_is_read_only(self):
        view = Ref(str, "a").view()

        with pytest.raises(AttributeError):
            view.value = "b"

    @pytest.mark.parametrize("declared", [list[int], Optional[int], 42, "int", None])
    def test_declared_type_must_be_class(self, declared):
        with pytest.raises(TypeError, match="Ref type must be a class"):
            Ref(declared)


class TestIsSettable:

    class Color(enum.Enum):
        RED = 1

    @pytest.mark.parametrize("destination", [
        None, 1, 1.5, "s", b"b", True, (1,), frozenset(),
        datetime.timedelta(1), datetime.date(2024, 1, 1),
        Color.RED, FrozenEndpoint(), Ref(str).view(), str,
        Ref(Endpoint, Endpoint()),
    ])
    def test_not_settable(self, destination):
        assert not is_settable(destination)

    @pytest.mark.parametrize("destination", [
        Ref(str), Ref(FrozenEndpoint), Endpoint(), [1], {"a": 1}, type("Box", (), {})(),
    ])
    def test_settable(self, destination):
        assert is_settable(destination)

    def test_dataclass_type_not_settable(self):
        """The class itself is not an instance to write into."""
        assert dataclasses.is_dataclass(Endpoint)
        assert not is_settable(Endpoint)


class TestWidths:
    """Test the fixed-width tags."""

    def test_bounds(self):
        assert (Int8.min(), Int8.max()) == (-128, 127)
        assert (Uint8.min(), Uint8.max()) == (0, 255)
        assert Uint64.max() == 2 ** 64 - 1
        assert Int64.min() == -(2 ** 63)

    def test_narrow_wraps(self):
        assert Int8.narrow(300) == 44
        assert Uint8.narrow(-1) == 255
        assert isinstance(Int8.narrow(1), Int8)

    def test_in_range(self):
        assert Int8.in_range(127)
        assert not Int8.in_range(128)
        assert not Uint8.in_range(-1)

    def test_float32_rounding(self):
        assert Float32.narrow(0.5) == 0.5
        assert Float32.narrow(0.1) != 0.1
        assert Float32.in_range(float("inf"))
        assert not Float32.in_range(1e39)

    def test_tags_are_numbers(self):
        value = Int8(5)

        assert value + 1 == 6
        assert repr(value) == "Int8(5)"
        assert repr(Float32(0.5)) == "Float32(0.5)"
