from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import pytest

from typelocator import facade
from typelocator.errors import UnresolvedDependencyError
from typelocator.registry import Registry


class PrintsSomething(ABC):
    @abstractmethod
    def print_something(self) -> str:
        ...


class A:
    def do_something(self) -> str:
        return "Doing something"


class B(PrintsSomething):
    def print_something(self) -> str:
        return "Something"


class C:
    def __init__(self, a: Optional[A], b: Optional[PrintsSomething]):
        self.a = a
        self.b = b


@pytest.fixture(autouse=True)
def started():
    def make_example(di):
        di.register_factory(B, PrintsSomething)
        di.register_singleton(A)
        di.register_singleton(
            lambda: C(di.get_optional(A), di.get_optional(PrintsSomething)), C
        )

    facade.start([facade.make_module(make_example)])
    yield
    facade.restart()


def test_register_dependencies():
    c = facade.resolve_optional(C)

    assert c is not None
    assert c.a is not None
    assert c.b is not None


def test_singleton():
    a = facade.resolve_optional(A)
    a2 = facade.resolve_optional(A)

    assert a is not None
    assert a is a2


def test_factory():
    b = facade.resolve_optional(PrintsSomething)
    b2 = facade.resolve_optional(PrintsSomething)

    assert isinstance(b, B)
    assert isinstance(b2, B)
    assert b is not b2


def test_resolve():
    b = facade.resolve(PrintsSomething)
    a = facade.resolve(A)

    assert b.print_something() == "Something"
    assert a.do_something() == "Doing something"


def test_reset():
    facade.restart()

    assert facade.resolve_optional(A) is None
    with pytest.raises(UnresolvedDependencyError, match="Dependency .*A could not be resolved"):
        facade.resolve(A)


def test_singleton_built_during_start_sees_earlier_registrations():
    assert facade.resolve(C).a is facade.resolve(A)


def test_resolution_in_multiple_threads():
    def resolve_in_thread(_):
        b = facade.resolve(PrintsSomething)
        a = facade.resolve(A)
        return b, a

    with ThreadPoolExecutor(max_workers=10) as executor:
        results = list(executor.map(resolve_in_thread, range(10)))

    assert len(results) == 10
    for b, a in results:
        assert isinstance(b, B)
        assert a is facade.resolve(A)


def test_start_adds_to_existing_registrations():
    facade.start([facade.make_module(lambda di: di.register_factory(dict), name="extra")])

    assert facade.resolve(dict) == {}
    assert facade.resolve_optional(A) is not None


def test_process_wide_registry_is_shared():
    registry = facade.get_registry()

    assert isinstance(registry, Registry)
    assert registry is facade.get_registry()
    assert registry.get(A) is facade.resolve(A)
