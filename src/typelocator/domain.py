"""Domain models used throughout the registry."""

import inspect
import types
from dataclasses import dataclass
from typing import Annotated, Any, Callable, Hashable, Optional, Union, get_args, get_origin

from typelocator.errors import DependencyError

__all__ = ["TypeKey", "SingletonEntry", "FactoryEntry"]


@dataclass(frozen=True)
class TypeKey:
    """Identifies an abstract type in the registry's stores.

    Attributes:
        type_: The type descriptor supplied by the caller. Either a class or a
            hashable typing construct such as ``Callable[[str], str]``.

    Example:
        >>> TypeKey.of(Database) == TypeKey.of(Database)   # True
        >>> TypeKey.of(Database).name                      # "app.db.Database"
    """

    type_: Hashable

    @staticmethod
    def of(type_: Any) -> "TypeKey":
        if not _is_type_descriptor(type_):
            raise DependencyError(f"{type_!r} is not a type and cannot be used as a key")
        return TypeKey(type_)

    @property
    def name(self) -> str:
        if inspect.isclass(self.type_) and get_origin(self.type_) is None:
            return f"{self.type_.__module__}.{self.type_.__qualname__}"
        return repr(self.type_)

    def accepts(self, instance: Any) -> bool:
        """Check that ``instance`` is compatible with the keyed type.

        Typing constructs are checked against their origin class. Constructs
        with no runtime class to check against (``Any``, ``Union``) accept
        everything.
        """
        runtime_class = _runtime_class(self.type_)
        if runtime_class is None:
            return True
        try:
            return isinstance(instance, runtime_class)
        except TypeError:
            # protocols not marked runtime_checkable refuse isinstance
            return True


@dataclass(frozen=True)
class SingletonEntry:
    """A materialised instance stored under its type key."""

    key: TypeKey
    instance: Any

    def matches(self) -> bool:
        return self.key.accepts(self.instance)


@dataclass(frozen=True)
class FactoryEntry:
    """A zero-argument constructor stored under its type key."""

    key: TypeKey
    factory: Callable[[], Any]

    def produce(self) -> Any:
        return self.factory()


def _is_type_descriptor(candidate: Any) -> bool:
    if inspect.isclass(candidate):
        return True
    if get_origin(candidate) is not None or candidate is Any:
        try:
            hash(candidate)
        except TypeError:
            return False
        return True
    return False


def _runtime_class(type_: Any) -> Optional[type]:
    origin = get_origin(type_)
    if origin is None:
        return type_ if inspect.isclass(type_) else None
    if origin is Annotated:
        return _runtime_class(get_args(type_)[0])
    if origin is Union or origin is types.UnionType:
        return None
    if inspect.isclass(origin):
        return origin
    return None
