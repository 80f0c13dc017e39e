from __future__ import annotations

import inspect
import types
from typing import Any, TypeGuard

from typing_extensions import is_protocol


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_instantiable_class(candidate: type[Any]) -> bool:
    """Return true when the class is neither abstract nor a protocol definition.

    Args:
        candidate: Class passed for construction by the registry.

    """
    return not inspect.isabstract(candidate) and not is_protocol(candidate)


__all__ = ["is_instantiable_class", "is_runtime_class"]
