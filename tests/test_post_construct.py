from __future__ import annotations

import pytest

from beanwire import Inject, Registry, UnsupportedOperationError, post_construct
from tests.beans import Inferior, InferiorImpl, InitializingSuperiorImpl, Superior


class EventLog:
    def __init__(self) -> None:
        self.events: list[str] = []


class FirstStage:
    log: Inject[EventLog]

    @post_construct
    def ready(self) -> None:
        self.log.events.append("first")


class SecondStage:
    log: Inject[EventLog]
    first: Inject[FirstStage]

    @post_construct
    def ready(self) -> None:
        self.log.events.append("second")


class BaseHooks:
    def __init__(self) -> None:
        self.calls: list[str] = []

    @post_construct
    def base_hook(self) -> None:
        self.calls.append("base")

    @post_construct
    def overridden_hook(self) -> None:
        self.calls.append("base-overridden")


class DerivedHooks(BaseHooks):
    @post_construct
    def overridden_hook(self) -> None:
        self.calls.append("derived-overridden")

    @post_construct
    def derived_hook(self) -> None:
        self.calls.append("derived")


class UnmarkedOverride(BaseHooks):
    def overridden_hook(self) -> None:
        self.calls.append("never")


class PrivateHook:
    def __init__(self) -> None:
        self.called = False

    @post_construct
    def _hidden(self) -> None:
        self.called = True


class HookWithParameters:
    @post_construct
    def configure(self, value: int) -> None:
        self.value = value


class HookWithOptionalParameter:
    @post_construct
    def configure(self, value: int = 5) -> None:
        self.value = value


class HookBeforeInvalidHook:
    def __init__(self) -> None:
        self.calls = 0

    @post_construct
    def a_valid(self) -> None:
        self.calls += 1

    @post_construct
    def b_invalid(self, value: int) -> None:
        self.calls += value


def test_post_construct_runs_after_fields_are_injected(registry: Registry) -> None:
    inferior = InferiorImpl()
    registry.register_instance(InitializingSuperiorImpl())
    registry.register_instance(inferior)

    superior = registry.resolve_one(Superior)

    assert isinstance(superior, InitializingSuperiorImpl)
    assert superior.bar() == 11
    assert superior.inferior_seen_by_hook is inferior
    assert superior.post_construct_calls == 1


def test_post_construct_runs_exactly_once(registry: Registry) -> None:
    registry.register_instance(InitializingSuperiorImpl())
    registry.register_instance(InferiorImpl())

    registry.resolve_one(Superior)
    registry.resolve_one(InitializingSuperiorImpl)
    registry.resolve_many(Superior)

    assert registry.resolve_one(InitializingSuperiorImpl).post_construct_calls == 1


def test_post_construct_does_not_run_for_unresolved_bean(registry: Registry) -> None:
    superior = InitializingSuperiorImpl()
    registry.register_instance(superior)
    registry.register_instance(InferiorImpl())

    registry.resolve_one(Inferior)

    assert superior.post_construct_calls == 0


def test_dependencies_are_initialized_before_dependents(registry: Registry) -> None:
    log = EventLog()
    registry.register_instance(SecondStage())
    registry.register_instance(FirstStage())
    registry.register_instance(log)

    registry.resolve_one(SecondStage)

    assert log.events == ["first", "second"]


def test_base_class_hooks_run_first_and_overrides_replace_them(registry: Registry) -> None:
    registry.register_class(DerivedHooks)

    bean = registry.resolve_one(DerivedHooks)

    assert bean.calls == ["base", "derived-overridden", "derived"]


def test_unmarked_override_disables_base_hook(registry: Registry) -> None:
    registry.register_class(UnmarkedOverride)

    bean = registry.resolve_one(UnmarkedOverride)

    assert bean.calls == ["base"]


def test_private_methods_are_not_hooks(registry: Registry) -> None:
    registry.register_class(PrivateHook)

    assert registry.resolve_one(PrivateHook).called is False


def test_hook_with_required_parameters_is_rejected(registry: Registry) -> None:
    registry.register_class(HookWithParameters)

    with pytest.raises(UnsupportedOperationError, match="takes parameters"):
        registry.resolve_one(HookWithParameters)


def test_hook_with_optional_parameters_is_called(registry: Registry) -> None:
    registry.register_class(HookWithOptionalParameter)

    assert registry.resolve_one(HookWithOptionalParameter).value == 5


def test_invalid_hook_prevents_every_hook_from_running(registry: Registry) -> None:
    bean = HookBeforeInvalidHook()
    registry.register_instance(bean)

    with pytest.raises(UnsupportedOperationError):
        registry.resolve_one(HookBeforeInvalidHook)

    assert bean.calls == 0


def test_hook_errors_propagate_unchanged(registry: Registry) -> None:
    class Failing:
        @post_construct
        def explode(self) -> None:
            msg = "boom"
            raise RuntimeError(msg)

    registry.register_class(Failing)

    with pytest.raises(RuntimeError, match="boom"):
        registry.resolve_one(Failing)


def test_failed_initialization_reruns_earlier_hooks_on_retry(registry: Registry) -> None:
    class FailsOnce:
        def __init__(self) -> None:
            self.prepared = 0
            self.attempts = 0

        @post_construct
        def prepare(self) -> None:
            self.prepared += 1

        @post_construct
        def connect(self) -> None:
            self.attempts += 1
            if self.attempts == 1:
                msg = "connection refused"
                raise RuntimeError(msg)

    registry.register_class(FailsOnce)

    with pytest.raises(RuntimeError, match="connection refused"):
        registry.resolve_one(FailsOnce)
    bean = registry.resolve_one(FailsOnce)
    registry.resolve_one(FailsOnce)

    assert bean.prepared == 2
    assert bean.attempts == 2
