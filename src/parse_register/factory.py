"""Registry factory — the single place where a ready-to-use registry is assembled.

``build_default_registry`` is the recommended entry point for callers who want
the primitive set plus their own converters without wiring each one.

Customisation points:

* **converters**         – ``type → converter`` mapping applied last, so it can
                           both add types and override primitives.
* **strict**             – range-check narrowing into fixed widths instead of
                           wrapping.
* **include_primitives** – start from an empty registry instead.
"""

from __future__ import annotations

from typing import Mapping, Optional

from .primitives import register_primitives
from .registry import Converter, ConverterRegistry


def build_default_registry(
        *,
        converters: Optional[Mapping[type, Converter]] = None,
        strict: bool = False,
        include_primitives: bool = True,
) -> ConverterRegistry:
    """Assemble a ``ConverterRegistry``.

    What gets wired
    ---------------
    primitives (unless ``include_primitives=False``)
        ``str``, ``bool``, ``int`` / ``Int8``…``Int64``, ``Uint`` /
        ``Uint8``…``Uint64``, ``float`` / ``Float32`` / ``Float64``,
        ``datetime.timedelta``.

    converters
        Caller entries, registered after the primitives.

    Args:
        converters:         Extra or overriding converters.
        strict:             Passed to ``register_primitives``.
        include_primitives: Skip the primitive set when ``False``.

    Returns:
        A new registry; nothing is shared between calls.

    Example::

        registry = build_default_registry(converters={Point: parse_point})
        port = Ref(Uint16)
        registry.set_value(port, "8080")   # → True, port.value == 8080
    """
    registry = ConverterRegistry()
    if include_primitives:
        register_primitives(registry, strict=strict)
    for tp, convert in (converters or {}).items():
        registry.register(tp, convert)
    return registry
