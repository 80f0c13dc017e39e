from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Annotated, Any, NamedTuple, TypeVar, Union, get_args, get_origin

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])
_ANNOTATED_MARKER_MIN_ARGS = 2

POST_CONSTRUCT_ATTR = "__beanwire_post_construct__"
CONSTRUCTOR_ATTR = "__beanwire_constructor__"


class Resource(NamedTuple):
    """Mark a field or constructor parameter for injection from the registry.

    Attach ``Resource`` metadata to ``typing.Annotated`` so the registry wires
    the annotated type when the bean is initialized. ``Inject[T]`` is a
    shorthand for ``Annotated[T, Resource()]``.

    Name-based binding is not supported. ``name`` exists so that such a
    request fails loudly with ``UnsupportedOperationError`` instead of being
    silently resolved by type.

    Examples:
        .. code-block:: python

            from typing import Annotated


            class Superior:
                inferior: Annotated[Inferior, Resource()]

    """

    name: str | None = None


if TYPE_CHECKING:
    Inject = Union[T, T]  # noqa: UP007,PYI016
    """Mark a field or parameter for registry-driven injection.

    At runtime ``Inject[T]`` becomes ``Annotated[T, Resource()]``.

    Examples:
        .. code-block:: python

            class Superior:
                inferior: Inject[Inferior]

                def bar(self) -> int:
                    return 10 + self.inferior.foo()
    """

else:

    class Inject:
        """Mark a field or parameter for registry-driven injection.

        At runtime ``Inject[T]`` resolves to ``Annotated[T, Resource()]``.

        Examples:
            .. code-block:: python

                class Superior:
                    inferior: Inject[Inferior]

        """

        def __class_getitem__(cls, item: T) -> Annotated[T, Resource]:
            if get_origin(item) is Annotated:
                args = get_args(item)
                inner = args[0]
                metadata = args[1:]
                return _build_annotated((inner, *metadata, Resource()))
            return _build_annotated((item, Resource()))


def post_construct(method: F) -> F:
    """Mark a method to run once the bean's injected fields are populated.

    Hooks must be public and take no arguments besides ``self``. They run on the
    first resolution that initializes the bean. If a later hook or a field
    fails, the bean stays uninitialized and the next resolution runs every
    hook again.

    Examples:
        .. code-block:: python

            class Service:
                repository: Inject[Repository]

                @post_construct
                def warm_up(self) -> None:
                    self.cache = self.repository.load_all()

    """
    setattr(method, POST_CONSTRUCT_ATTR, True)
    return method


def constructor(method: Any) -> Any:
    """Mark an alternate constructor used by ``Registry.register_class``.

    Apply on top of ``@classmethod``. Every parameter of the marked method is
    resolved from the registry. A class may mark at most one constructor.

    Examples:
        .. code-block:: python

            class Client:
                def __init__(self, url: str) -> None:
                    self.url = url

                @constructor
                @classmethod
                def from_settings(cls, settings: Settings) -> Client:
                    return cls(settings.url)

    """
    target = method.__func__ if isinstance(method, (classmethod, staticmethod)) else method
    setattr(target, CONSTRUCTOR_ATTR, True)
    return method


def is_post_construct(candidate: object) -> bool:
    """Return True when candidate was decorated with ``post_construct``."""
    return getattr(candidate, POST_CONSTRUCT_ATTR, False) is True


def is_constructor(candidate: object) -> bool:
    """Return True when candidate (or the function it wraps) was decorated with ``constructor``."""
    if isinstance(candidate, (classmethod, staticmethod)):
        candidate = candidate.__func__
    return getattr(candidate, CONSTRUCTOR_ATTR, False) is True


def extract_resource_marker(annotation: Any) -> Resource | None:
    """Return the ``Resource`` metadata of an annotation, or None when unmarked."""
    if get_origin(annotation) is not Annotated:
        return None
    annotation_args = get_args(annotation)
    if len(annotation_args) < _ANNOTATED_MARKER_MIN_ARGS:
        return None
    metadata = annotation_args[1:]
    return next(
        (item for item in metadata if isinstance(item, Resource)),
        None,
    )


def strip_annotated(annotation: Any) -> Any:
    """Return the bare type of an ``Annotated[...]`` annotation."""
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def _build_annotated(params: tuple[object, ...]) -> Any:
    """Return Annotated[...] with a pre-built params tuple (Py 3.10+ compatible)."""
    try:
        return Annotated.__class_getitem__(params)  # type: ignore[attr-defined]
    except AttributeError:
        return Annotated.__getitem__(params)  # type: ignore[attr-defined]
