"""Process-wide registry for applications that do not pass one around.

The registry held here is created once, when this module is first imported,
and lives for the rest of the process. ``start`` loads modules into it and
``restart`` empties it again, typically between test cases.

Code that can accept a :class:`~typelocator.registry.Registry` argument should
take ``get_registry()`` at the top of its call graph and pass it down instead
of calling ``resolve`` from deep inside.

Example:
    >>> from typelocator import facade
    >>>
    >>> facade.start([facade.make_module(lambda r: r.register_singleton(Database))])
    >>> db = facade.resolve(Database)
"""

from typing import Iterable, Optional, TypeVar

from typelocator.module import Module, make_module
from typelocator.registry import Registry

__all__ = [
    "get_registry",
    "make_module",
    "resolve",
    "resolve_optional",
    "restart",
    "start",
]

T = TypeVar("T")

_registry = Registry(name="global")


def get_registry() -> Registry:
    """Return the process-wide registry."""
    return _registry


def start(modules: Iterable[Module]) -> None:
    """Load ``modules`` into the process-wide registry, in order."""
    _registry.load_modules(modules)


def resolve(type_: type[T]) -> T:
    """Resolve ``type_`` from the process-wide registry.

    Raises:
        UnresolvedDependencyError: If nothing is registered for the type.
    """
    return _registry.get(type_)


def resolve_optional(type_: type[T]) -> Optional[T]:
    """Resolve ``type_`` from the process-wide registry, or ``None`` if nothing is registered."""
    return _registry.get_optional(type_)


def restart() -> None:
    """Clear every registration from the process-wide registry."""
    _registry.reset()
