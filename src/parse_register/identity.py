"""Type identities — the keys of ``ConverterRegistry``.

A ``TypeIdentity`` is derived from a type's defining module and qualified
name.  The type object itself rides along as the discriminating token, so two
classes that happen to share module *and* qualified name (e.g. both defined as
``Config`` inside different calls of one factory function) still get distinct
keys, while the same class always maps to an equal key.

::

    type_identity(str)            → TypeIdentity(namespace="", name="str")
    type_identity(Int8)           → TypeIdentity(namespace="parse_register.widths", name="Int8")
    destination_type(Ref(Int8))   → Int8
    destination_type(my_record)   → type(my_record)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .ref import Ref, RefView


@dataclass(frozen=True)
class TypeIdentity:
    """Stable, hashable registry key for one type.

    Attributes:
        namespace: Defining module; empty for builtins.
        name:      ``__qualname__`` of the type.
        origin:    The type object itself (compared, not shown).
    """

    namespace: str
    name: str
    origin: type = field(repr=False)

    def __str__(self) -> str:
        return f"{self.namespace}.{self.name}"


def type_identity(tp: type) -> TypeIdentity:
    """Return the identity of *tp*.

    Raises ``TypeError`` when *tp* is not a class; registering an instance
    by mistake would otherwise create a key that nothing can ever match.
    """
    if not isinstance(tp, type):
        raise TypeError(f"expected a type, got {tp!r}")
    module = tp.__module__
    namespace = "" if module == "builtins" else module
    return TypeIdentity(namespace=namespace, name=tp.__qualname__, origin=tp)


def destination_type(destination: Any) -> type:
    """Type carried by *destination*: the declared type of a ``Ref`` (or
    read-only view), otherwise the destination's own class."""
    if isinstance(destination, (Ref, RefView)):
        return destination.type
    return type(destination)
