"""Fixed-width numeric type tags.

Python's ``int`` is unbounded and ``float`` is always IEEE double, so the
distinct widths a converter registry must tell apart are modelled as thin
``int`` / ``float`` subclasses.  They exist to be *registry keys* and to
carry the narrowing rule for their width::

    Int8.narrow(300)        → Int8(44)      # two's-complement wrap
    Uint8.narrow(-1)        → Uint8(255)
    Float32.narrow(0.1)     → Float32(0.10000000149011612)
    Int8.in_range(300)      → False

Builtin ``int`` is the native signed width; builtin ``float`` is 64-bit.

Exports
-------
Int8, Int16, Int32, Int64, Uint, Uint8, Uint16, Uint32, Uint64
    Integer tags (``FixedInt`` subclasses).
Float32, Float64
    Float tags (``FixedFloat`` subclasses).
SIGNED_TYPES, UNSIGNED_TYPES, FLOAT_TYPES
    Tuples of every key the primitive set installs per family.
"""

from __future__ import annotations

import ctypes
import math
from typing import Any, ClassVar, Tuple


class FixedInt(int):
    """Base for fixed-width integer tags."""

    __slots__ = ()

    _ctype: ClassVar[Any]
    bits: ClassVar[int]
    signed: ClassVar[bool]

    @classmethod
    def min(cls) -> int:
        return -(1 << (cls.bits - 1)) if cls.signed else 0

    @classmethod
    def max(cls) -> int:
        return (1 << (cls.bits - 1)) - 1 if cls.signed else (1 << cls.bits) - 1

    @classmethod
    def in_range(cls, value: int) -> bool:
        return cls.min() <= value <= cls.max()

    @classmethod
    def narrow(cls, value: int):
        """Truncate *value* to this width (no range check)."""
        return cls(cls._ctype(value).value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class FixedFloat(float):
    """Base for fixed-width float tags."""

    __slots__ = ()

    _ctype: ClassVar[Any]
    bits: ClassVar[int]

    @classmethod
    def in_range(cls, value: float) -> bool:
        # inf / nan have a representation at every width.
        if not math.isfinite(value):
            return True
        return math.isfinite(cls._ctype(value).value)

    @classmethod
    def narrow(cls, value: float):
        """Round *value* to this width; overflow becomes ±inf."""
        return cls(cls._ctype(value).value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({float(self)!r})"


# ─────────────────────────────────────────────────────────────────────────────
# Signed
# ─────────────────────────────────────────────────────────────────────────────


class Int8(FixedInt):
    __slots__ = ()
    _ctype = ctypes.c_int8
    bits = 8
    signed = True


class Int16(FixedInt):
    __slots__ = ()
    _ctype = ctypes.c_int16
    bits = 16
    signed = True


class Int32(FixedInt):
    __slots__ = ()
    _ctype = ctypes.c_int32
    bits = 32
    signed = True


class Int64(FixedInt):
    __slots__ = ()
    _ctype = ctypes.c_int64
    bits = 64
    signed = True


# ─────────────────────────────────────────────────────────────────────────────
# Unsigned
# ─────────────────────────────────────────────────────────────────────────────


class Uint(FixedInt):
    """Native-width unsigned integer (``size_t``)."""

    __slots__ = ()
    _ctype = ctypes.c_size_t
    bits = ctypes.sizeof(ctypes.c_size_t) * 8
    signed = False


class Uint8(FixedInt):
    __slots__ = ()
    _ctype = ctypes.c_uint8
    bits = 8
    signed = False


class Uint16(FixedInt):
    __slots__ = ()
    _ctype = ctypes.c_uint16
    bits = 16
    signed = False


class Uint32(FixedInt):
    __slots__ = ()
    _ctype = ctypes.c_uint32
    bits = 32
    signed = False


class Uint64(FixedInt):
    __slots__ = ()
    _ctype = ctypes.c_uint64
    bits = 64
    signed = False


# ─────────────────────────────────────────────────────────────────────────────
# Floating point
# ─────────────────────────────────────────────────────────────────────────────


class Float32(FixedFloat):
    __slots__ = ()
    _ctype = ctypes.c_float
    bits = 32


class Float64(FixedFloat):
    __slots__ = ()
    _ctype = ctypes.c_double
    bits = 64


# Native signed width: builtin int, narrowed like ssize_t.
NATIVE_INT_CTYPE = ctypes.c_ssize_t

SIGNED_TYPES: Tuple[type, ...] = (int, Int8, Int16, Int32, Int64)
UNSIGNED_TYPES: Tuple[type, ...] = (Uint, Uint8, Uint16, Uint32, Uint64)
FLOAT_TYPES: Tuple[type, ...] = (float, Float32, Float64)
