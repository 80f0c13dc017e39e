from __future__ import annotations

import logging
from typing import Any, TypeVar, cast

from beanwire._internal.capabilities import (
    CapabilityIndex,
    collect_capabilities,
    is_nominal,
    satisfies,
)
from beanwire._internal.holders import BeanHolder
from beanwire._internal.introspection import BeanIntrospector
from beanwire._internal.type_checks import is_instantiable_class, is_runtime_class
from beanwire.exceptions import (
    AmbiguousBeanError,
    BeanNotFoundError,
    DuplicateBeanError,
    FrozenRegistryError,
    InvalidBeanError,
    UnsupportedOperationError,
)
from beanwire.registry_interface import IRegistry

T = TypeVar("T")
C = TypeVar("C", bound=type[Any])

logger = logging.getLogger(__name__)


class Registry(IRegistry):
    """Hold singleton beans and wire their dependencies on first lookup.

    Beans are registered either as ready instances or as classes that the
    registry constructs, resolving constructor parameters by type. Fields
    annotated with ``Inject[T]`` (``Annotated[T, Resource()]``) are populated
    lazily, the first time a bean is resolved, and ``@post_construct`` hooks
    run right after. Dependencies are always initialized before the beans that
    depend on them.

    Lookups are type based. A bean is found by its concrete class or by any of
    its base classes, including ABCs it was registered on and runtime-checkable
    protocols it satisfies. ``resolve_one`` requires exactly one match while
    ``resolve_many`` returns every match.

    Cyclic field dependencies are not detected and end in ``RecursionError``.
    The registry is not thread safe.
    """

    def __init__(self, *, expose_self: bool = True) -> None:
        """Create an empty, unfrozen registry.

        Args:
            expose_self: Serve the registry itself for ``IRegistry`` lookups.
                Disable to look ``IRegistry`` up among registered beans like
                any other capability.

        Examples:
            .. code-block:: python

                registry = Registry()
                registry.register_instance(InferiorImpl())
                registry.register_class(SuperiorImpl)
                registry.freeze()

                assert registry.resolve_one(Superior).bar() == 11

        """
        self._expose_self = expose_self
        self._holders: list[BeanHolder] = []
        self._index = CapabilityIndex()
        self._introspector = BeanIntrospector()
        self._frozen = False

    def register_instance(self, bean: object) -> None:
        """Put a bean instance into the registry.

        The bean is not initialized until it is first resolved.

        Args:
            bean: Instance to register. Its concrete type must not be
                registered yet.

        Raises:
            FrozenRegistryError: The registry has been frozen.
            InvalidBeanError: ``bean`` is ``None``.
            DuplicateBeanError: The same object or another object of the same
                concrete type is already registered.

        """
        self._ensure_not_frozen()
        self._add_uninitialized_bean(bean)

    def register_class(self, cls: C) -> C:
        """Construct a bean of ``cls`` and register it.

        The bean is built through the single ``@constructor`` classmethod of
        ``cls`` when it declares one, or by calling ``cls`` otherwise. Every
        parameter without a default is resolved with ``resolve_one`` using its
        annotation. Returns ``cls`` so the method can be used as a class
        decorator.

        Args:
            cls: Concrete, non-abstract class.

        Raises:
            FrozenRegistryError: The registry has been frozen.
            InvalidBeanError: ``cls`` is not a class.
            UnsupportedOperationError: ``cls`` is abstract or a protocol, or a
                constructor parameter cannot be wired by type.
            AmbiguousConstructorError: ``cls`` marks several constructors.
            DuplicateBeanError: A bean of ``cls`` is already registered.

        Examples:
            .. code-block:: python

                @registry.register_class
                class SuperiorWithCtor:
                    def __init__(self, inferior: Inferior) -> None:
                        self.saved_foo = inferior.foo()

        """
        self._ensure_not_frozen()
        self._add_uninitialized_bean(self._construct_bean(cls))
        return cls

    def resolve_one(self, capability: type[T]) -> T:
        """Return the single bean satisfying ``capability``, initializing it if needed.

        Requesting ``IRegistry`` returns this registry.

        Args:
            capability: Concrete class, base class, ABC or protocol to look up.

        Raises:
            BeanNotFoundError: No registered bean satisfies ``capability``.
            AmbiguousBeanError: Two or more registered beans satisfy it.

        """
        if self._expose_self and self._is_self_capability(capability):
            return cast("T", self)

        holder = self._find_holder(capability)
        self._ensure_initialized(holder)
        return cast("T", holder.bean)

    def resolve_many(self, capability: type[T]) -> tuple[T, ...]:
        """Return every bean satisfying ``capability`` in registration order.

        Each returned bean is initialized. An empty tuple is returned when
        nothing matches.

        Args:
            capability: Concrete class, base class, ABC or protocol to look up.

        """
        matching = self._matching_holders(capability)
        for holder in matching:
            self._ensure_initialized(holder)
        return tuple(cast("T", holder.bean) for holder in matching)

    def freeze(self) -> None:
        """Forbid further registrations. Calling it again has no effect."""
        if not self._frozen:
            logger.debug("Registry frozen with %d bean(s)", len(self._holders))
        self._frozen = True

    def is_frozen(self) -> bool:
        """Return True once ``freeze`` has been called."""
        return self._frozen

    def __len__(self) -> int:
        return len(self._holders)

    def __contains__(self, capability: object) -> bool:
        return bool(self._matching_holders(capability))

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"{type(self).__name__}(beans={len(self._holders)}, {state})"

    def _ensure_not_frozen(self) -> None:
        if self._frozen:
            msg = "Modifications are not allowed for a frozen registry."
            raise FrozenRegistryError(msg)

    def _is_self_capability(self, capability: object) -> bool:
        return (
            is_runtime_class(capability)
            and issubclass(capability, IRegistry)
            and isinstance(self, capability)
        )

    def _add_uninitialized_bean(self, bean: object) -> None:
        if bean is None:
            msg = "Bean instance is None."
            raise InvalidBeanError(msg)

        concrete_type = type(bean)
        if any(holder.bean is bean for holder in self._holders):
            msg = f"Duplicate declaration of bean {bean!r}."
            raise DuplicateBeanError(msg)
        self._ensure_type_not_registered(concrete_type)

        holder = BeanHolder(bean=bean, capabilities=collect_capabilities(concrete_type))
        self._holders.append(holder)
        self._index.add(holder)
        logger.debug(
            "Registered bean %s with %d capabilities",
            concrete_type.__qualname__,
            len(holder.capabilities),
        )

    def _ensure_type_not_registered(self, concrete_type: type[Any]) -> None:
        if any(holder.concrete_type is concrete_type for holder in self._holders):
            msg = (
                "The registry already has a definition of bean with class "
                f"{concrete_type.__module__}.{concrete_type.__qualname__}."
            )
            raise DuplicateBeanError(msg)

    def _construct_bean(self, cls: type[Any]) -> Any:
        if not is_runtime_class(cls):
            msg = f"Bean class must be a class, got {cls!r}."
            raise InvalidBeanError(msg)
        if not is_instantiable_class(cls):
            msg = f"The given class is abstract or a protocol: {cls.__qualname__}."
            raise UnsupportedOperationError(msg)
        self._ensure_type_not_registered(cls)

        factory = self._introspector.select_constructor(cls)
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for dependency in self._introspector.constructor_dependencies(cls, factory):
            value = self.resolve_one(dependency.capability)
            if dependency.positional_only:
                args.append(value)
            else:
                kwargs[dependency.name] = value

        bean = factory(*args, **kwargs)
        if not isinstance(bean, cls):
            msg = (
                f"Constructor of {cls.__qualname__} returned {type(bean).__qualname__}, "
                f"not an instance of {cls.__qualname__}."
            )
            raise UnsupportedOperationError(msg)
        return bean

    def _find_holder(self, capability: Any) -> BeanHolder:
        matching = self._matching_holders(capability)
        if not matching:
            raise BeanNotFoundError(capability)
        if len(matching) > 1:
            raise AmbiguousBeanError(capability, [holder.concrete_type for holder in matching])
        return matching[0]

    def _matching_holders(self, capability: Any) -> list[BeanHolder]:
        # a unique entry is authoritative only when issubclass() means MRO membership
        entry = self._index.lookup(capability)
        if isinstance(entry, BeanHolder) and is_nominal(capability):
            return [entry]
        return self._scan(capability)

    def _scan(self, capability: Any) -> list[BeanHolder]:
        return [holder for holder in self._holders if satisfies(holder.concrete_type, capability)]

    def _ensure_initialized(self, holder: BeanHolder) -> None:
        if holder.initialized:
            return

        bean = holder.bean
        concrete_type = holder.concrete_type
        fields = self._introspector.injectable_fields(concrete_type)
        for injectable in fields:
            setattr(bean, injectable.name, self.resolve_one(injectable.capability))

        hooks = self._introspector.post_construct_hooks(concrete_type)
        bound_hooks = [getattr(bean, name) for name in hooks]
        for hook in bound_hooks:
            self._introspector.validate_hook(concrete_type, hook)
        for hook in bound_hooks:
            hook()

        holder.initialized = True
        logger.debug(
            "Initialized bean %s: fields=%s hooks=%s",
            concrete_type.__qualname__,
            [injectable.name for injectable in fields],
            list(hooks),
        )
