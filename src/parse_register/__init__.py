import logging

from .errors import (
    ConversionError,
    DurationError,
    ParseError,
    ParseRegisterError,
    SettableDestinationError,
)
from .factory import build_default_registry
from .identity import TypeIdentity, destination_type, type_identity
from .primitives import (
    BUILTIN_CONVERTERS,
    parse_bool,
    parse_duration,
    parse_float,
    parse_int,
    parse_uint,
    primitives,
    register_primitives,
    register_primitives_fluent,
)
from .ref import Ref, RefView, is_settable
from .registry import Converter, ConverterRegistry, Registerer
from .widths import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # registry
    "Converter",
    "ConverterRegistry",
    "Registerer",
    "build_default_registry",
    # identity / destinations
    "TypeIdentity",
    "type_identity",
    "destination_type",
    "Ref",
    "RefView",
    "is_settable",
    # primitives
    "BUILTIN_CONVERTERS",
    "primitives",
    "register_primitives",
    "register_primitives_fluent",
    "parse_bool",
    "parse_duration",
    "parse_float",
    "parse_int",
    "parse_uint",
    # widths
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "Float32",
    "Float64",
    # errors
    "ParseRegisterError",
    "SettableDestinationError",
    "ConversionError",
    "ParseError",
    "DurationError",
]
