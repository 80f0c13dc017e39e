"""Shared pytest fixtures for beanwire tests."""

import pytest

from beanwire.registry import Registry


@pytest.fixture()
def registry() -> Registry:
    """Empty, unfrozen registry."""
    return Registry()


@pytest.fixture()
def registry_without_self() -> Registry:
    """Registry that does not serve itself for IRegistry lookups."""
    return Registry(expose_self=False)
