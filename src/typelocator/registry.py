"""Type-keyed storage and resolution of singletons and factories."""

import inspect
import threading
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, TypeVar, get_type_hints

from loguru import logger

from typelocator.domain import FactoryEntry, SingletonEntry, TypeKey
from typelocator.errors import DependencyError, UnresolvedDependencyError

if TYPE_CHECKING:
    from typelocator.module import Module

__all__ = ["Registry"]

T = TypeVar("T")

_MISSING = object()


class Registry:
    """Registry of shared instances and per-call factories, keyed by type.

    A type may be registered as a singleton, whose factory is invoked once at
    registration, or as a factory, invoked on every resolution. When both
    exist for the same type the singleton always wins.

    Every operation takes the same re-entrant lock, so the registry can be
    shared between threads without external synchronisation. Factories run
    while the lock is held and may themselves resolve other types.

    Example:
        >>> registry = Registry()
        >>> registry.register_singleton(Database)
        >>>
        >>> @registry.factory()
        >>> def make_session() -> Session:
        ...     return Session(registry.get(Database))
        >>>
        >>> registry.get(Session) is registry.get(Session)   # False
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self._lock = threading.RLock()
        self._singletons: dict[TypeKey, SingletonEntry] = {}
        self._factories: dict[TypeKey, FactoryEntry] = {}

    def __repr__(self) -> str:
        return f"Registry(name={self.name!r})"

    def register_singleton(
        self, factory: Callable[[], T], type_: Optional[type] = None
    ) -> None:
        """Register a shared instance built by ``factory``.

        The factory is invoked immediately, but only if no singleton is
        registered for the type yet; later registrations are ignored.

        Args:
            factory: Zero-argument callable producing the instance.
            type_: The type to register under. Inferred from ``factory`` if
                omitted.

        Raises:
            DependencyError: If the type cannot be inferred.
        """
        key = TypeKey.of(type_ if type_ is not None else inferred_type(factory))
        with self._lock:
            if key in self._singletons:
                logger.debug("Ignoring duplicate singleton {} in {}", key.name, self.name)
                return
            self._singletons[key] = SingletonEntry(key, factory())
        logger.debug("Registered singleton {} in {}", key.name, self.name)

    def register_factory(
        self, factory: Callable[[], T], type_: Optional[type] = None
    ) -> None:
        """Register ``factory`` to build a new instance on every resolution.

        Any factory previously registered for the type is replaced.

        Args:
            factory: Zero-argument callable producing a fresh instance.
            type_: The type to register under. Inferred from ``factory`` if
                omitted.

        Raises:
            DependencyError: If the type cannot be inferred.
        """
        key = TypeKey.of(type_ if type_ is not None else inferred_type(factory))
        with self._lock:
            self._factories[key] = FactoryEntry(key, factory)
        logger.debug("Registered factory {} in {}", key.name, self.name)

    def singleton(self, type_: Optional[type] = None) -> Callable:
        """Decorator to register a function or class as a singleton factory.

        Example:
            @registry.singleton()
            def make_config() -> Config:
                return Config.from_defaults()
        """

        def decorator(obj):
            self.register_singleton(obj, type_)
            return obj

        return decorator

    def factory(self, type_: Optional[type] = None) -> Callable:
        """Decorator to register a function or class as a per-call factory."""

        def decorator(obj):
            self.register_factory(obj, type_)
            return obj

        return decorator

    def get(self, type_: type[T]) -> T:
        """Resolve an instance of ``type_``.

        Raises:
            UnresolvedDependencyError: If nothing is registered for the type.
                This indicates a wiring defect and should not be caught.
        """
        key = TypeKey.of(type_)
        instance = self._lookup(key)
        if instance is _MISSING:
            raise UnresolvedDependencyError(key)
        return instance

    def get_optional(self, type_: type[T]) -> Optional[T]:
        """Resolve an instance of ``type_``, or ``None`` if nothing is registered."""
        instance = self._lookup(TypeKey.of(type_))
        return None if instance is _MISSING else instance

    def is_registered(self, type_: type) -> bool:
        key = TypeKey.of(type_)
        with self._lock:
            return key in self._singletons or key in self._factories

    def __contains__(self, type_: type) -> bool:
        return self.is_registered(type_)

    def registered_types(self) -> list[Any]:
        """Return the types currently registered, singletons first."""
        with self._lock:
            keys = list(self._singletons) + [
                key for key in self._factories if key not in self._singletons
            ]
        return [key.type_ for key in keys]

    def load_modules(self, modules: Iterable["Module"]) -> None:
        """Load each module into this registry, in order."""
        for module in modules:
            logger.debug("Loading module {} into {}", module.name, self.name)
            module.load(self)

    def reset(self) -> None:
        """Remove every singleton and factory."""
        with self._lock:
            self._singletons.clear()
            self._factories.clear()
        logger.debug("Reset registry {}", self.name)

    def _lookup(self, key: TypeKey) -> Any:
        with self._lock:
            singleton = self._singletons.get(key)
            if singleton is not None and singleton.matches():
                return singleton.instance

            factory = self._factories.get(key)
            if factory is None:
                return _MISSING
            instance = factory.produce()
        return instance if key.accepts(instance) else _MISSING


def inferred_type(target: Any) -> Any:
    """Derive the registered type from a class or a function's return annotation.

    Args:
        target: The class or function passed as a factory.

    Returns:
        The class itself, or the function's annotated return type.

    Raises:
        DependencyError: If ``target`` is a function without a return annotation,
            or its return annotation cannot be evaluated.

    Example:
        >>> inferred_type(Database)        # Database
        >>> def make_cache() -> Cache: ...
        >>> inferred_type(make_cache)      # Cache
    """
    if inspect.isclass(target):
        return target

    if inspect.isfunction(target) or inspect.ismethod(target):
        try:
            return_type = get_type_hints(target).get("return", None)
        except (NameError, TypeError) as e:
            raise DependencyError(
                f"Cannot evaluate the return annotation of {target.__name__!r}: {e}"
            ) from e
        if return_type is not None:
            return return_type
    raise DependencyError(
        f"Cannot infer a type for {getattr(target, '__name__', target)!r}: "
        "pass type_ explicitly or annotate the return type"
    )

