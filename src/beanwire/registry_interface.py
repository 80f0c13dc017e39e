from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TypeVar

T = TypeVar("T")
C = TypeVar("C", bound=type[Any])


class IRegistry(ABC):
    """Interface for singleton bean registries.

    All beans are singletons within one registry. Fields marked with
    ``Inject[...]`` are populated and ``@post_construct`` hooks invoked when a
    bean is first resolved.

    Implementations are not thread safe unless otherwise specified.
    """

    @abstractmethod
    def register_instance(self, bean: object) -> None:
        """Put a bean instance into the registry."""

    @abstractmethod
    def register_class(self, cls: C) -> C:
        """Construct a bean of the given non-abstract class and register it."""

    @abstractmethod
    def resolve_one(self, capability: type[T]) -> T:
        """Return the single bean satisfying the capability.

        Requesting ``IRegistry`` returns the registry itself.
        """

    @abstractmethod
    def resolve_many(self, capability: type[T]) -> tuple[T, ...]:
        """Return every bean satisfying the capability, possibly none."""

    @abstractmethod
    def freeze(self) -> None:
        """Forbid further registrations."""

    @abstractmethod
    def is_frozen(self) -> bool:
        """Return True once ``freeze`` has been called."""
