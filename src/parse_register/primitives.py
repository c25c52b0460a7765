"""Built-in converters for the common scalar types.

Exports
-------
BUILTIN_CONVERTERS
    Read-only mapping ``type → converter`` for every primitive key:
    ``str``, ``bool``, ``int``, ``Int8``…``Int64``, ``Uint``, ``Uint8``…``Uint64``,
    ``float``, ``Float32``, ``Float64`` and ``datetime.timedelta``.

register_primitives / register_primitives_fluent
    Install the set into an existing registry (replacing those keys only).

primitives
    Return a *new* registry holding only the primitive set.

parse_int / parse_uint / parse_float / parse_bool / parse_duration
    The text parsers the converters are built from.

Parsing rules
-------------
* integers: base 10 only, optional sign for signed types, parsed with a 64-bit
  intermediate and then narrowed to the destination width *without* a range
  check (wraps like a C cast).  Pass ``strict=True`` to get a
  ``value out of range`` error instead.
* floats: decimal, exponent or hex-float text, plus ``inf`` / ``infinity`` /
  ``nan`` in any case; parsed as double then narrowed.
* bool: exact, case-sensitive tokens (see ``TRUE_TOKENS`` / ``FALSE_TOKENS``).
* durations: ``[-+]?([0-9]*(\\.[0-9]*)?[a-z]+)+`` e.g. ``"300ms"``, ``"1h30m"``.
  Parsed as a signed 64-bit nanosecond count but stored as a
  ``datetime.timedelta``, which has microsecond resolution: the sub-microsecond
  part is truncated toward zero (``"1ns"`` gives ``timedelta(0)``).

Every converter leaves the destination untouched when it raises.
"""

from __future__ import annotations

import ctypes
import datetime
import math
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, TypeVar

import regex

from .errors import ERR_RANGE, ERR_SYNTAX, ConversionError, DurationError, ParseError
from .registry import Converter, ConverterRegistry, Registerer
from .widths import (
    FLOAT_TYPES,
    NATIVE_INT_CTYPE,
    SIGNED_TYPES,
    UNSIGNED_TYPES,
    FixedFloat,
    FixedInt,
)


# ─────────────────────────────────────────────────────────────────────────────
# Text parsers
# ─────────────────────────────────────────────────────────────────────────────

_INT_RE = regex.compile(r"[+-]?[0-9]+")
_UINT_RE = regex.compile(r"[0-9]+")
_FLOAT_RE = regex.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = regex.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT_RE = regex.compile(r"[+-]?inf(?:inity)?|nan", flags=regex.IGNORECASE)

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

TRUE_TOKENS = frozenset({"t", "true", "yes"})
FALSE_TOKENS = frozenset({"", "f", "false", "no"})


def parse_int(text: str) -> int:
    """Parse a base-10 signed integer within the 64-bit range."""
    if not _INT_RE.fullmatch(text):
        raise ParseError("ParseInt", text, ERR_SYNTAX)
    value = int(text, 10)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ParseError("ParseInt", text, ERR_RANGE)
    return value


def parse_uint(text: str) -> int:
    """Parse a base-10 unsigned integer within the 64-bit range.

    No sign is accepted, not even ``+``.
    """
    if not _UINT_RE.fullmatch(text):
        raise ParseError("ParseUint", text, ERR_SYNTAX)
    value = int(text, 10)
    if value > UINT64_MAX:
        raise ParseError("ParseUint", text, ERR_RANGE)
    return value


def parse_float(text: str) -> float:
    """Parse a double.  Finite text that overflows is a range error."""
    if _SPECIAL_FLOAT_RE.fullmatch(text):
        return float(text)
    if _FLOAT_RE.fullmatch(text):
        value = float(text)
    elif _HEX_FLOAT_RE.fullmatch(text):
        try:
            value = float.fromhex(text)
        except OverflowError:
            raise ParseError("ParseFloat", text, ERR_RANGE) from None
    else:
        raise ParseError("ParseFloat", text, ERR_SYNTAX)
    if math.isinf(value):
        raise ParseError("ParseFloat", text, ERR_RANGE)
    return value


def parse_bool(text: str) -> bool:
    if text in TRUE_TOKENS:
        return True
    if text in FALSE_TOKENS:
        return False
    raise ConversionError("unable to convert string to boolean value")


# Nanoseconds per duration unit.
_DURATION_UNITS: Dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}

_DURATION_PART_RE = regex.compile(r"(?P<whole>[0-9]*)(?:\.(?P<frac>[0-9]*))?(?P<unit>[^0-9.]*)")


def _invalid_duration(text: str) -> DurationError:
    return DurationError(f'time: invalid duration "{text}"', text)


def parse_duration(text: str) -> datetime.timedelta:
    """Parse a duration literal such as ``"1h30m"``, ``"-1.5s"`` or ``"300ms"``.

    The value is accumulated as a signed 64-bit nanosecond count (overflow is
    an invalid duration) and returned as a ``timedelta``; precision below one
    microsecond is truncated toward zero.
    """
    rest = text
    negative = False
    if rest[:1] in ("-", "+"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return datetime.timedelta(0)
    if not rest:
        raise _invalid_duration(text)

    limit = (1 << 63) if negative else INT64_MAX
    total = 0
    pos = 0
    while pos < len(rest):
        if not (rest[pos] == "." or "0" <= rest[pos] <= "9"):
            raise _invalid_duration(text)
        match = _DURATION_PART_RE.match(rest, pos)
        whole, frac, unit = match.group("whole"), match.group("frac") or "", match.group("unit")
        if not whole and not frac:
            raise _invalid_duration(text)
        if not unit:
            raise DurationError(f'time: missing unit in duration "{text}"', text)
        scale = _DURATION_UNITS.get(unit)
        if scale is None:
            raise DurationError(f'time: unknown unit "{unit}" in duration "{text}"', text)
        total += int(whole or "0") * scale
        if frac:
            total += int(frac) * scale // 10 ** len(frac)
        if total > limit:
            raise _invalid_duration(text)
        pos = match.end()

    delta = datetime.timedelta(microseconds=total // 1_000)
    return -delta if negative else delta


# ─────────────────────────────────────────────────────────────────────────────
# Converter builders
# ─────────────────────────────────────────────────────────────────────────────


def _narrow_native_int(value: int) -> int:
    return NATIVE_INT_CTYPE(value).value


def _native_int_in_range(value: int) -> bool:
    bits = ctypes.sizeof(NATIVE_INT_CTYPE) * 8
    return -(1 << (bits - 1)) <= value <= (1 << (bits - 1)) - 1


def _set_text(dst: Any, src: str) -> None:
    dst.value = src


def _set_bool(dst: Any, src: str) -> None:
    dst.value = parse_bool(src)


def _set_duration(dst: Any, src: str) -> None:
    dst.value = parse_duration(src)


def _integer_converter(tp: type, parse: Callable[[str], int], func: str, strict: bool) -> Converter:
    if issubclass(tp, FixedInt):
        narrow, in_range = tp.narrow, tp.in_range
    else:
        narrow, in_range = _narrow_native_int, _native_int_in_range

    def convert(dst: Any, src: str) -> None:
        value = parse(src)
        if strict and not in_range(value):
            raise ParseError(func, src, ERR_RANGE)
        dst.value = narrow(value)

    convert.__qualname__ = f"convert_{tp.__name__.lower()}"
    return convert


def _float_converter(tp: type, strict: bool) -> Converter:
    if issubclass(tp, FixedFloat):
        narrow, in_range = tp.narrow, tp.in_range
    else:
        narrow, in_range = float, (lambda v: True)

    def convert(dst: Any, src: str) -> None:
        value = parse_float(src)
        if strict and not in_range(value):
            raise ParseError("ParseFloat", src, ERR_RANGE)
        dst.value = narrow(value)

    convert.__qualname__ = f"convert_{tp.__name__.lower()}"
    return convert


def build_converters(*, strict: bool = False) -> Dict[type, Converter]:
    """Return a fresh ``type → converter`` dict for the primitive set.

    Args:
        strict: Range-check narrowing into fixed widths instead of wrapping.
    """
    converters: Dict[type, Converter] = {
        str: _set_text,
        bool: _set_bool,
        datetime.timedelta: _set_duration,
    }
    for tp in SIGNED_TYPES:
        converters[tp] = _integer_converter(tp, parse_int, "ParseInt", strict)
    for tp in UNSIGNED_TYPES:
        converters[tp] = _integer_converter(tp, parse_uint, "ParseUint", strict)
    for tp in FLOAT_TYPES:
        converters[tp] = _float_converter(tp, strict)
    return converters


BUILTIN_CONVERTERS: Mapping[type, Converter] = MappingProxyType(build_converters())

R = TypeVar("R", bound=Registerer)


# ─────────────────────────────────────────────────────────────────────────────
# Installers
# ─────────────────────────────────────────────────────────────────────────────


def register_primitives(registry: Registerer, *, strict: bool = False) -> None:
    """Register every primitive converter into *registry*.

    Existing entries for exactly these types are replaced; other entries are
    left alone.  Any of them can be overridden afterwards with
    ``registry.register``.
    """
    converters = BUILTIN_CONVERTERS if not strict else build_converters(strict=True)
    for tp, convert in converters.items():
        registry.register(tp, convert)


def register_primitives_fluent(registry: R, *, strict: bool = False) -> R:
    """Like ``register_primitives`` but returns *registry* for chaining::

        reg = register_primitives_fluent(ConverterRegistry()).register(Point, parse_point)
    """
    register_primitives(registry, strict=strict)
    return registry


def primitives(*, strict: bool = False) -> ConverterRegistry:
    """Return a new, independent registry holding the primitive set.

    Each call builds a new registry; keep the result around if you want to
    avoid rebuilding it.
    """
    return register_primitives_fluent(ConverterRegistry(), strict=strict)
