from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False, slots=True)
class BeanHolder:
    """Pair a registered bean with its initialization state.

    Holders compare by identity so two holders never collide in the index,
    even when their beans define ``__eq__``.
    """

    bean: Any
    capabilities: frozenset[type[Any]] = field(default_factory=frozenset)
    initialized: bool = False

    @property
    def concrete_type(self) -> type[Any]:
        return type(self.bean)
