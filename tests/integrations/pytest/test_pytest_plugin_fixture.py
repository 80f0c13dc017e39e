from __future__ import annotations

import pytest

from beanwire import Registry

pytest_plugins = ["beanwire.integrations.pytest_plugin.plugin"]


class _Service:
    pass


@pytest.fixture()
def value() -> int:
    return 42


def test_beanwire_registry_fixture_is_fresh_and_open(beanwire_registry: Registry) -> None:
    assert isinstance(beanwire_registry, Registry)
    assert len(beanwire_registry) == 0
    assert not beanwire_registry.is_frozen()


def test_registrations_do_not_leak_between_tests_first(beanwire_registry: Registry) -> None:
    beanwire_registry.register_class(_Service)
    beanwire_registry.freeze()

    assert isinstance(beanwire_registry.resolve_one(_Service), _Service)


def test_registrations_do_not_leak_between_tests_second(beanwire_registry: Registry) -> None:
    assert _Service not in beanwire_registry
    beanwire_registry.register_class(_Service)


def test_regular_fixtures_still_work(value: int, beanwire_registry: Registry) -> None:
    assert value == 42
    assert beanwire_registry.resolve_one(Registry) is beanwire_registry
