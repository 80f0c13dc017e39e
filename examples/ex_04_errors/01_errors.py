"""Errors raised by the registry.

Every failure derives from ``BeanwireError`` and leaves the registry usable.
"""

from __future__ import annotations

from abc import ABC

from beanwire import (
    AmbiguousBeanError,
    BeanNotFoundError,
    DuplicateBeanError,
    FrozenRegistryError,
    Registry,
)


class Cloneable(ABC):  # noqa: B024
    pass


class Bean1(Cloneable):
    pass


class Bean2(Cloneable):
    pass


class Missing:
    pass


def main() -> None:
    registry = Registry()
    registry.register_class(Bean1)
    registry.register_class(Bean2)

    try:
        registry.register_instance(Bean1())
    except DuplicateBeanError as error:
        print(f"duplicate={type(error).__name__}")  # => duplicate=DuplicateBeanError

    try:
        registry.resolve_one(Cloneable)
    except AmbiguousBeanError as error:
        names = [candidate.__name__ for candidate in error.candidates]
        print(f"ambiguous={names}")  # => ambiguous=['Bean1', 'Bean2']

    try:
        registry.resolve_one(Missing)
    except BeanNotFoundError as error:
        print(f"missing={error.capability.__name__}")  # => missing=Missing

    registry.freeze()
    try:
        registry.register_class(Missing)
    except FrozenRegistryError:
        print(f"frozen={registry.is_frozen()}")  # => frozen=True


if __name__ == "__main__":
    main()
