from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class BeanwireError(Exception):
    """Represent a base class for all beanwire-specific failures.

    Catch this type when you want to handle any registry error path without
    matching each concrete exception class individually.
    """


class InvalidBeanError(BeanwireError):
    """Signal a registration argument that is not a bean at all.

    Raised by ``Registry.register_instance`` when the bean is ``None`` and by
    ``Registry.register_class`` when the argument is not a runtime class.
    """


class DuplicateBeanError(BeanwireError):
    """Signal a second registration of the same bean or bean type.

    The registry keeps at most one bean per concrete runtime type. Registering
    the same object twice, or two objects of the same concrete class, raises
    this error.

    Typical fix is registering a subclass or a different implementation, or
    dropping the duplicated registration from the bootstrap code.
    """


class UnsupportedOperationError(BeanwireError):
    """Signal an injection directive the registry does not support.

    Raised for name-based ``Resource(name=...)`` bindings, post-construct
    hooks that require parameters, abstract classes or protocols passed to
    ``Registry.register_class``, and constructor parameters that cannot be
    wired by type.
    """


class AmbiguousConstructorError(UnsupportedOperationError):
    """Signal that a class marks more than one constructor.

    ``Registry.register_class`` needs a single construction candidate to wire
    deterministically. Keep ``@constructor`` on one classmethod only.
    """


class FrozenRegistryError(BeanwireError):
    """Signal a registration attempted after ``Registry.freeze``.

    Freezing is a one-way latch. Register every bean before freezing.
    """


class BeanNotFoundError(BeanwireError):
    """Signal that no registered bean satisfies the requested capability.

    Raised by ``Registry.resolve_one`` and by field or constructor injection.

    Typical fix is registering an implementation of the capability before it is
    resolved.
    """

    def __init__(self, capability: Any) -> None:
        self.capability = capability
        msg = f"The requested bean of class {_type_name(capability)} has not been found."
        super().__init__(msg)


class AmbiguousBeanError(BeanwireError):
    """Signal that several registered beans satisfy the requested capability.

    Raised by ``Registry.resolve_one``. ``candidates`` holds the conflicting
    concrete types in registration order. ``Registry.resolve_many`` accepts
    such capabilities.

    Typical fixes include requesting a more specific type or registering only
    one implementation.
    """

    def __init__(self, capability: Any, candidates: Sequence[type[Any]]) -> None:
        self.capability = capability
        self.candidates = tuple(candidates)
        conflicting = ", ".join(_type_name(candidate) for candidate in self.candidates)
        msg = (
            f"Ambiguous definition for class {_type_name(capability)}, "
            f"conflicting definitions are: {conflicting}."
        )
        super().__init__(msg)


def _type_name(value: Any) -> str:
    qualname = getattr(value, "__qualname__", None)
    if qualname is None:
        return repr(value)
    return f"{value.__module__}.{qualname}"
