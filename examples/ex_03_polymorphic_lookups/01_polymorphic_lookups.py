"""Polymorphic lookups with ``resolve_many``.

Several beans may share a base class. ``resolve_many`` returns all of them,
while ``resolve_one`` still works for capabilities with a single implementer.
"""

from __future__ import annotations

from abc import ABC

from beanwire import Registry


class Bar(ABC):  # noqa: B024
    pass


class Baz(ABC):  # noqa: B024
    pass


class BarBaz(Bar, Baz):
    pass


class BarImpl(Bar):
    pass


class BazImpl(Baz):
    pass


class BarBazImpl(BarBaz):
    pass


class Unrelated:
    pass


def main() -> None:
    registry = Registry()
    registry.register_class(BarImpl)
    registry.register_class(BazImpl)
    registry.register_class(BarBazImpl)
    registry.freeze()

    bars = [type(bean).__name__ for bean in registry.resolve_many(Bar)]
    print(f"bars={bars}")  # => bars=['BarImpl', 'BarBazImpl']

    print(f"baz_count={len(registry.resolve_many(Baz))}")  # => baz_count=2
    print(f"unrelated={registry.resolve_many(Unrelated)}")  # => unrelated=()

    only = type(registry.resolve_one(BarBaz)).__name__
    print(f"bar_baz={only}")  # => bar_baz=BarBazImpl


if __name__ == "__main__":
    main()
