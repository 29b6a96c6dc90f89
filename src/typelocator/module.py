"""Deferred bundles of registrations that are loaded into a registry.

A module wraps registration instructions so that application setup can
declare them up front and hand them to a :class:`~typelocator.registry.Registry`
later, in a chosen order. Loading a module simply runs its instructions
against the registry; modules hold no other state.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from typelocator.registry import Registry

__all__ = ["Module", "CallbackModule", "make_module"]

RegistrationCallback = Callable[["Registry"], None]


class Module(ABC):
    """Something that can register dependencies into a registry when loaded."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def load(self, registry: "Registry") -> None:
        """Register this module's dependencies into ``registry``."""
        ...


class CallbackModule(Module):
    """A module whose registrations are performed by a plain callback."""

    def __init__(self, callback: RegistrationCallback, name: Optional[str] = None):
        self._callback = callback
        self._name = name or inferred_name(callback)

    @property
    def name(self) -> str:
        return self._name

    def load(self, registry: "Registry") -> None:
        self._callback(registry)

    def __repr__(self) -> str:
        return f"CallbackModule(name={self._name!r})"


def make_module(
    callback: Optional[RegistrationCallback] = None, name: Optional[str] = None
):
    """Create a :class:`CallbackModule`, directly or as a decorator.

    Args:
        callback: Function receiving the registry to register into. If omitted,
            a decorator is returned that builds the module from the decorated
            function.
        name: Optional module name; defaults to the callback's name with any
            ``make_`` prefix removed.

    Returns:
        The module, or a decorator producing it.

    Example:
        >>> storage = make_module(
        ...     lambda registry: registry.register_singleton(Database), name="storage"
        ... )
        >>>
        >>> @make_module()
        >>> def make_services(registry):
        ...     registry.register_factory(Session)
        >>>
        >>> make_services.name   # "services"
    """
    if callback is not None:
        return CallbackModule(callback, name)

    def decorator(func: RegistrationCallback) -> CallbackModule:
        return CallbackModule(func, name)

    return decorator


def inferred_name(target: Callable) -> str:
    """Derive a module name from a callback, removing a 'make_' prefix if present."""
    target_name = getattr(target, "__name__", type(target).__name__)
    if target_name.startswith("make_"):
        return target_name[5:]
    return target_name
