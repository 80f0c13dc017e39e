"""Quickstart: field injection and post-construct hooks.

Register ready-made instances, resolve the top-level bean by its base class,
and see its ``Inject[...]`` fields wired on first lookup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from beanwire import Inject, Registry, post_construct


class Inferior(ABC):
    @abstractmethod
    def foo(self) -> int: ...


class Superior(ABC):
    @abstractmethod
    def bar(self) -> int: ...


class InferiorImpl(Inferior):
    def foo(self) -> int:
        return 1


class SuperiorImpl(Superior):
    inferior: Inject[Inferior]

    def bar(self) -> int:
        return 10 + self.inferior.foo()

    @post_construct
    def announce(self) -> None:
        print(f"wired={type(self.inferior).__name__}")  # => wired=InferiorImpl


def main() -> None:
    registry = Registry()
    registry.register_instance(SuperiorImpl())
    registry.register_instance(InferiorImpl())
    registry.freeze()

    superior = registry.resolve_one(Superior)
    print(f"bar={superior.bar()}")  # => bar=11

    same = registry.resolve_one(SuperiorImpl) is superior
    print(f"singleton={same}")  # => singleton=True


if __name__ == "__main__":
    main()
