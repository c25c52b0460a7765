"""Exception taxonomy.

Exports
-------
ParseRegisterError
    Base class for everything raised by this package.

SettableDestinationError
    Configuration error: the destination handed to ``set_value`` cannot be
    written through.  Raised before any converter is looked up.

ConversionError
    Malformed source text for the destination type.

ParseError
    Numeric syntax / range failure (``ConversionError`` subclass).

DurationError
    Duration grammar failure (``ConversionError`` subclass).

Errors raised by caller-defined converters are *not* required to derive from
any of these; the registry propagates them unchanged.
"""

from __future__ import annotations

from typing import Any


class ParseRegisterError(Exception):
    """Base error for the parse_register package."""
    pass


class SettableDestinationError(ParseRegisterError, TypeError):
    """Destination is ``None`` or otherwise not writable.

    Indicates a programming mistake (a plain value or a read-only view was
    passed where a mutable reference was expected), never bad input.
    """

    def __init__(self, destination: Any = None, hint: str = "") -> None:
        self.destination = destination
        message = f"destination must be a settable reference, got {type(destination).__name__}"
        super().__init__(f"{message}; {hint}" if hint else message)


class ConversionError(ParseRegisterError, ValueError):
    """Source text could not be converted into the destination type."""
    pass


# Reasons carried by ParseError, worded like the upstream numeric parser.
ERR_SYNTAX = "invalid syntax"
ERR_RANGE = "value out of range"


class ParseError(ConversionError):
    """Numeric parse failure.

    Attributes:
        func:   Name of the parse routine (``ParseInt``, ``ParseUint``, ``ParseFloat``).
        text:   The offending source text.
        reason: ``ERR_SYNTAX`` or ``ERR_RANGE``.
    """

    def __init__(self, func: str, text: str, reason: str) -> None:
        self.func = func
        self.text = text
        self.reason = reason
        super().__init__(f'strconv.{func}: parsing "{text}": {reason}')


class DurationError(ConversionError):
    """Invalid duration literal.

    Attributes:
        text: The offending source text (quoted in the message).
    """

    def __init__(self, message: str, text: str) -> None:
        self.text = text
        super().__init__(message)
