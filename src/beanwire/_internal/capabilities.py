from __future__ import annotations

import abc
import typing
from typing import Any, Final

from beanwire._internal.holders import BeanHolder
from beanwire._internal.type_checks import is_runtime_class

_UNIVERSAL_BASES: Final[frozenset[type[Any]]] = frozenset(
    {object, typing.Generic, typing.Protocol, abc.ABC},  # type: ignore[arg-type]
)


class _Ambiguous:
    """Index entry for capabilities implemented by two or more beans."""

    _instance: _Ambiguous | None = None

    def __new__(cls) -> _Ambiguous:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "AMBIGUOUS"


AMBIGUOUS: Final = _Ambiguous()

IndexEntry = BeanHolder | _Ambiguous


def collect_capabilities(concrete_type: type[Any]) -> frozenset[type[Any]]:
    """Return the concrete type and every base class it can be looked up by.

    Args:
        concrete_type: Runtime type of a registered bean.

    """
    return frozenset(klass for klass in concrete_type.__mro__ if klass not in _UNIVERSAL_BASES)


def satisfies(concrete_type: type[Any], capability: Any) -> bool:
    """Return true when a bean of ``concrete_type`` can be served for ``capability``.

    Covers ABC virtual subclasses and runtime-checkable protocols in addition
    to plain inheritance.

    Args:
        concrete_type: Runtime type of a registered bean.
        capability: Requested lookup key.

    """
    if not is_runtime_class(capability):
        return False
    try:
        return issubclass(concrete_type, capability)
    except TypeError:
        # non runtime-checkable protocols and protocols with data members
        return capability in concrete_type.__mro__


def is_nominal(capability: Any) -> bool:
    """Return true when only classes inheriting ``capability`` can satisfy it.

    ABCs and protocols override ``__subclasscheck__``, so virtual subclasses and
    structural implementers satisfy them without appearing in any MRO.

    Args:
        capability: Requested lookup key.

    """
    if not is_runtime_class(capability):
        return False
    owner = next(klass for klass in type(capability).__mro__ if "__subclasscheck__" in vars(klass))
    return owner is type


class CapabilityIndex:
    """Map each capability to its unique holder or to ``AMBIGUOUS``.

    The index is maintained incrementally: the first holder implementing a
    capability is stored, the second one turns the entry into ``AMBIGUOUS``,
    and further holders leave it ambiguous.
    """

    def __init__(self) -> None:
        self._entries: dict[type[Any], IndexEntry] = {}

    def add(self, holder: BeanHolder) -> None:
        for capability in holder.capabilities:
            entry = self._entries.get(capability)
            if entry is None:
                self._entries[capability] = holder
            elif entry is not AMBIGUOUS:
                self._entries[capability] = AMBIGUOUS

    def lookup(self, capability: Any) -> IndexEntry | None:
        try:
            return self._entries.get(capability)
        except TypeError:
            # unhashable lookup keys are never indexed
            return None

    def __len__(self) -> int:
        return len(self._entries)
