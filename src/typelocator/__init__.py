"""Typelocator: a type-keyed dependency registry.

Typelocator maps abstract types to either a single shared instance or a factory
producing a fresh instance per request. Registrations are grouped into modules
that are loaded at startup; afterwards any call site can resolve a type without
knowing how it is built.

Key Features:
    - Singletons materialised once at registration, first registration wins
    - Factories invoked on every resolution, last registration wins
    - Singletons take precedence over factories for the same type
    - Required resolution fails loudly; optional resolution returns None
    - Safe to share between threads

Basic Usage:
    >>> from typelocator import Registry, make_module
    >>>
    >>> registry = Registry()
    >>> registry.load_modules([
    ...     make_module(lambda r: r.register_singleton(Database)),
    ... ])
    >>> db = registry.get(Database)

The package consists of:
    - registry: Registration and resolution
    - module: Deferred registration bundles
    - facade: The process-wide registry and its convenience functions
    - domain: Type keys and stored entries
    - errors: Library exceptions
"""

from typelocator.errors import DependencyError, UnresolvedDependencyError
from typelocator.module import CallbackModule, Module, make_module
from typelocator.registry import Registry

__all__ = [
    "CallbackModule",
    "DependencyError",
    "Module",
    "Registry",
    "UnresolvedDependencyError",
    "make_module",
]
