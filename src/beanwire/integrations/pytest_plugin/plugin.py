from __future__ import annotations

import pytest

from beanwire.registry import Registry


@pytest.fixture()
def beanwire_registry() -> Registry:
    """Create a per-test bean registry.

    The fixture is function-scoped, so registrations are isolated between
    tests. Override it in a ``conftest.py`` to preload shared beans.

    Returns:
        A new, unfrozen ``Registry`` instance.

    """
    return Registry()
