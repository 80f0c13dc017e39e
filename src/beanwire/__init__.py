from beanwire.exceptions import (
    AmbiguousBeanError,
    AmbiguousConstructorError,
    BeanNotFoundError,
    BeanwireError,
    DuplicateBeanError,
    FrozenRegistryError,
    InvalidBeanError,
    UnsupportedOperationError,
)
from beanwire.markers import Inject, Resource, constructor, post_construct
from beanwire.registry import Registry
from beanwire.registry_interface import IRegistry

__all__ = [
    "AmbiguousBeanError",
    "AmbiguousConstructorError",
    "BeanNotFoundError",
    "BeanwireError",
    "DuplicateBeanError",
    "FrozenRegistryError",
    "IRegistry",
    "Inject",
    "InvalidBeanError",
    "Registry",
    "Resource",
    "UnsupportedOperationError",
    "constructor",
    "post_construct",
]
