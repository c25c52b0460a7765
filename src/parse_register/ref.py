"""Mutable cells used as ``set_value`` destinations.

Python has no pointers, so scalar destinations are wrapped in a ``Ref``: a
cell that knows its declared type and holds the current value.  Mutable
objects (a dataclass instance, a plain object) may be passed directly instead
(the object *is* the reference).

Each type has one destination shape, so a converter never has to check what
it was handed: a mutable dataclass is always passed as itself, and a ``Ref``
declaring one is not settable.  ``Ref`` only accepts a class as its declared
type; aliases such as ``list[int]`` or ``Optional[int]`` are rejected when the
cell is built.

Exports
-------
Ref
    Generic mutable cell of ``T``.

RefView
    Read-only view onto a ``Ref``; accepted by ``is_supported`` only.

is_settable
    Writability check applied by ``ConverterRegistry.set_value``.
"""

from __future__ import annotations

import dataclasses
import datetime
import enum
from decimal import Decimal
from fractions import Fraction
from types import GenericAlias
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

# Values of these types are immutable: passing one is passing a copy, not a
# reference to storage.
_IMMUTABLE = (
    int, float, complex, str, bytes, bool, tuple, frozenset, range,
    Decimal, Fraction, enum.Enum,
    datetime.date, datetime.time, datetime.timedelta, datetime.timezone,
)


class Ref(Generic[T]):
    """A mutable cell of declared type ``T``.

    ::

        port = Ref(Uint16)
        registry.set_value(port, "8080")
        port.value   # → 8080

    ``value`` starts as *value* (``None`` by default); it is not checked
    against ``type``; converters registered for ``type`` are trusted to store
    a sensible value.

    Raises ``TypeError`` when *type_* is not a class.
    """

    __slots__ = ("type", "value")

    def __init__(self, type_: type[T], value: Optional[T] = None) -> None:
        # list[int] passes isinstance(..., type) before 3.11
        if not isinstance(type_, type) or isinstance(type_, GenericAlias):
            raise TypeError(f"Ref type must be a class, got {type_!r}")
        self.type = type_
        self.value = value

    def get(self) -> Optional[T]:
        return self.value

    def set(self, value: T) -> None:
        self.value = value

    def view(self) -> RefView[T]:
        """Return a read-only view sharing this cell's storage."""
        return RefView(self)

    def __repr__(self) -> str:
        return f"Ref({self.type.__qualname__}, {self.value!r})"


class RefView(Generic[T]):
    """Read-only window onto a ``Ref``.

    Reads follow the underlying cell; writes raise ``AttributeError``.
    """

    __slots__ = ("_ref",)

    def __init__(self, ref: Ref[T]) -> None:
        self._ref = ref

    @property
    def type(self) -> type[T]:
        return self._ref.type

    @property
    def value(self) -> Optional[T]:
        return self._ref.value

    def get(self) -> Optional[T]:
        return self._ref.value

    def __repr__(self) -> str:
        return f"RefView({self.type.__qualname__}, {self.value!r})"


def is_settable(destination: Any) -> bool:
    """Whether *destination* can be written through.

    * ``None``, ``RefView``             → False
    * ``Ref`` of a mutable dataclass    → False (pass the instance itself)
    * any other ``Ref``                 → True
    * immutable values / frozen dataclasses → False
    * any other object                  → True (mutated in place by its converter)
    """
    if destination is None or isinstance(destination, RefView):
        return False
    if isinstance(destination, Ref):
        return isinstance(destination.type, type) and not _is_mutable_record(destination.type)
    if isinstance(destination, _IMMUTABLE) or isinstance(destination, type):
        return False
    if dataclasses.is_dataclass(destination):
        return _is_mutable_record(type(destination))
    return True


def _is_mutable_record(tp: type) -> bool:
    return dataclasses.is_dataclass(tp) and not tp.__dataclass_params__.frozen
