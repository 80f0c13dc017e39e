from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, get_type_hints

from beanwire.exceptions import AmbiguousConstructorError, UnsupportedOperationError
from beanwire.markers import extract_resource_marker, is_constructor, is_post_construct, strip_annotated


@dataclass(frozen=True, slots=True)
class InjectableField:
    """Field declared with a ``Resource`` marker on one class of a bean's MRO."""

    owner: type[Any]
    name: str
    capability: Any


@dataclass(frozen=True, slots=True)
class ParameterDependency:
    """Constructor parameter that must be resolved from the registry."""

    name: str
    capability: Any
    positional_only: bool


class BeanIntrospector:
    """Discover injection points declared on bean classes.

    Results are cached per class, so repeated registrations of related types
    do not re-evaluate annotations.
    """

    def __init__(self) -> None:
        self._fields_cache: dict[type[Any], tuple[InjectableField, ...]] = {}
        self._hooks_cache: dict[type[Any], tuple[str, ...]] = {}

    def injectable_fields(self, concrete_type: type[Any]) -> tuple[InjectableField, ...]:
        """Return marked fields from the most-derived class upward.

        A field redeclared by a subclass is reported once, for the subclass.

        Args:
            concrete_type: Runtime type of the bean being initialized.

        """
        cached = self._fields_cache.get(concrete_type)
        if cached is not None:
            return cached

        seen: set[str] = set()
        fields: list[InjectableField] = []
        for klass in concrete_type.__mro__:
            if klass is object:
                continue
            own_names = inspect.get_annotations(klass)
            if not own_names:
                continue
            hints = self._type_hints(klass)
            for name in own_names:
                if name in seen:
                    continue
                seen.add(name)
                annotation = hints.get(name)
                marker = extract_resource_marker(annotation)
                if marker is None:
                    continue
                if marker.name is not None:
                    msg = (
                        f"Beans with a resource name are not supported, class: "
                        f"{concrete_type.__qualname__}, field: {name}, name: {marker.name!r}."
                    )
                    raise UnsupportedOperationError(msg)
                fields.append(
                    InjectableField(owner=klass, name=name, capability=strip_annotated(annotation)),
                )

        result = tuple(fields)
        self._fields_cache[concrete_type] = result
        return result

    def post_construct_hooks(self, concrete_type: type[Any]) -> tuple[str, ...]:
        """Return names of public ``@post_construct`` methods, base-class hooks first.

        Args:
            concrete_type: Runtime type of the bean being initialized.

        """
        cached = self._hooks_cache.get(concrete_type)
        if cached is not None:
            return cached

        names: dict[str, None] = {}
        for klass in reversed(concrete_type.__mro__):
            for name in vars(klass):
                names.setdefault(name, None)

        result = tuple(
            name
            for name in names
            if not name.startswith("_")
            and is_post_construct(inspect.getattr_static(concrete_type, name, None))
        )
        self._hooks_cache[concrete_type] = result
        return result

    def validate_hook(self, concrete_type: type[Any], hook: Callable[..., Any]) -> None:
        """Reject hooks that cannot be called without arguments.

        Args:
            concrete_type: Runtime type of the bean owning the hook.
            hook: Bound hook method.

        """
        required = [
            parameter.name
            for parameter in inspect.signature(hook).parameters.values()
            if parameter.default is inspect.Parameter.empty
            and parameter.kind
            not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        ]
        if required:
            msg = (
                f"Method {concrete_type.__qualname__}.{hook.__name__} is declared as post "
                f"construct, but it takes parameters which is not supported: {', '.join(required)}."
            )
            raise UnsupportedOperationError(msg)

    def select_constructor(self, cls: type[Any]) -> Callable[..., Any]:
        """Return the callable used to build a bean of ``cls``.

        That is the single ``@constructor`` classmethod when one is declared, or
        the class itself otherwise.

        Args:
            cls: Class passed to ``Registry.register_class``.

        """
        names: dict[str, None] = {}
        for klass in cls.__mro__:
            for name, value in vars(klass).items():
                if is_constructor(value):
                    names.setdefault(name, None)

        candidates = [
            name for name in names if is_constructor(inspect.getattr_static(cls, name, None))
        ]
        if len(candidates) > 1:
            msg = f"Bean {cls.__qualname__} defines multiple constructors: {', '.join(candidates)}."
            raise AmbiguousConstructorError(msg)
        if candidates:
            return getattr(cls, candidates[0])
        return cls

    def constructor_dependencies(
        self,
        cls: type[Any],
        factory: Callable[..., Any],
    ) -> list[ParameterDependency]:
        """Return the parameters of ``factory`` that must be resolved by type.

        Parameters with a default value are left alone unless they carry a
        ``Resource`` marker.

        Args:
            cls: Class being constructed, used for error messages.
            factory: The class itself or a bound ``@constructor`` classmethod.

        """
        if factory is cls:
            if cls.__init__ is object.__init__:
                return []
            function: Any = cls.__init__
        else:
            function = getattr(factory, "__func__", factory)

        try:
            signature = inspect.signature(factory)
        except (TypeError, ValueError) as e:
            msg = f"Cannot inspect constructor of {cls.__qualname__}: {e}"
            raise UnsupportedOperationError(msg) from e
        hints = self._type_hints(function)

        dependencies: list[ParameterDependency] = []
        for name, parameter in signature.parameters.items():
            if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            annotation = hints.get(name)
            marker = extract_resource_marker(annotation)
            if marker is not None and marker.name is not None:
                msg = (
                    f"Beans with a resource name are not supported, class: {cls.__qualname__}, "
                    f"parameter: {name}, name: {marker.name!r}."
                )
                raise UnsupportedOperationError(msg)
            if marker is None and parameter.default is not inspect.Parameter.empty:
                continue
            if annotation is None:
                msg = (
                    f"Constructor parameter '{name}' of {cls.__qualname__} has no type "
                    "annotation and cannot be injected."
                )
                raise UnsupportedOperationError(msg)
            dependencies.append(
                ParameterDependency(
                    name=name,
                    capability=strip_annotated(annotation),
                    positional_only=parameter.kind is inspect.Parameter.POSITIONAL_ONLY,
                ),
            )
        return dependencies

    def _type_hints(self, target: Any) -> dict[str, Any]:
        try:
            return get_type_hints(target, include_extras=True)
        except (NameError, TypeError) as e:
            name = getattr(target, "__qualname__", repr(target))
            msg = f"Cannot evaluate type annotations of {name}: {e}"
            raise UnsupportedOperationError(msg) from e
