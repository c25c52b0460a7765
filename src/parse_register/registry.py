"""Type-keyed converter registry.

Execution flow (``ConverterRegistry.set_value`` entry point)::

    set_value(destination, text)
      │
      ├─ is_settable(destination)?  no → raise SettableDestinationError
      │
      ├─ type_identity(destination_type(destination))
      │
      ├─ converter registered?      no → return False   (unsupported ≠ error)
      │
      └─ converter(destination, text)   → return True
                                          (exceptions propagate unchanged)

The registry holds no default state: an empty ``ConverterRegistry()``
recognises nothing.  ``primitives()`` / ``build_default_registry()`` build
pre-populated ones.

No internal locking: registration writes the mapping, dispatch only reads it
and writes the caller's destination.  Serialise registration against
concurrent dispatch yourself.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from .errors import SettableDestinationError
from .identity import TypeIdentity, destination_type, type_identity
from .ref import Ref, is_settable

logger = logging.getLogger(__name__)

Converter = Callable[[Any, str], None]
"""``(destination, text) -> None``.

Writes the value parsed from *text* into *destination* or raises.  Only ever
called with a destination of the type it was registered under, so it never
needs to re-check the type.
"""


class Registerer(Protocol):
    """Anything primitives can be installed into.

    ``ConverterRegistry`` is one; a wrapper that records or filters
    registrations only needs ``register``.
    """

    def register(self, tp: type, converter: Converter) -> Any:
        ...


class ConverterRegistry:
    """Mapping from ``TypeIdentity`` to ``Converter``.

    ::

        registry = ConverterRegistry()
        registry.register(Point, parse_point).register(Color, parse_color)

        p = Point()
        registry.set_value(p, "3,4")    # → True, p mutated in place
        registry.set_value(Ref(complex), "1j")  # → False, nothing registered

    Re-registering a type replaces its converter.
    """

    def __init__(self, converters: Optional[Mapping[type, Converter]] = None) -> None:
        self._converters: Dict[TypeIdentity, Converter] = {}
        for tp, convert in (converters or {}).items():
            self.register(tp, convert)

    # -- registration -------------------------------------------------------

    def register(self, tp: type, converter: Converter) -> ConverterRegistry:
        """Store *converter* for *tp*, replacing any previous one.

        Returns ``self`` so registrations can be chained.
        """
        key = type_identity(tp)
        if key in self._converters:
            logger.debug("replacing converter for %s", key)
        else:
            logger.debug("registering converter for %s", key)
        self._converters[key] = converter
        return self

    def converter(self, tp: type) -> Callable[[Converter], Converter]:
        """Decorator form of ``register``.

        ::

            @registry.converter(Point)
            def parse_point(dst, src):
                dst.x, dst.y = (int(v) for v in src.split(","))
        """

        def decorator(func: Converter) -> Converter:
            self.register(tp, func)
            return func

        return decorator

    # -- dispatch -----------------------------------------------------------

    def set_value(self, destination: Any, text: str) -> bool:
        """Parse *text* into *destination* with the converter for its type.

        Returns ``True`` when a converter ran and succeeded, ``False`` when no
        converter is registered (destination untouched).

        Raises:
            SettableDestinationError: *destination* is ``None`` or cannot be
                written through (including a ``Ref`` wrapping a mutable
                dataclass, which must be passed as itself); checked before
                lookup, so it is raised even by an empty registry.
            Exception: whatever the converter raised, unchanged.  The
                destination's contents are then defined by that converter.
        """
        if not is_settable(destination):
            if isinstance(destination, Ref) and isinstance(destination.type, type):
                raise SettableDestinationError(
                    destination, f"pass the {destination.type.__qualname__} instance itself, not a Ref"
                )
            raise SettableDestinationError(destination)

        key = type_identity(destination_type(destination))
        convert = self._converters.get(key)
        if convert is None:
            logger.debug("no converter registered for %s", key)
            return False

        convert(destination, text)
        return True

    def is_supported(self, destination: Any) -> bool:
        """Whether a converter is registered for *destination*'s type.

        Does not require *destination* to be writable; read-only views and
        plain sample values may be queried.  Never raises.
        """
        if destination is None:
            return False
        tp = destination_type(destination)
        if not isinstance(tp, type):
            return False
        return type_identity(tp) in self._converters

    def lookup(self, tp: type) -> Optional[Converter]:
        """Return the converter registered for *tp*, or ``None``."""
        return self._converters.get(type_identity(tp))

    # -- introspection ------------------------------------------------------

    def types(self) -> List[TypeIdentity]:
        """Return the identities of all registered types."""
        return list(self._converters)

    def copy(self) -> ConverterRegistry:
        """Return an independent registry with the same entries."""
        clone = ConverterRegistry()
        clone._converters = dict(self._converters)
        return clone

    def __contains__(self, tp: object) -> bool:
        return isinstance(tp, type) and type_identity(tp) in self._converters

    def __len__(self) -> int:
        return len(self._converters)

    def __repr__(self) -> str:
        return f"ConverterRegistry({', '.join(str(k) for k in self._converters)})"
