from typing import Annotated, Any, Callable, Optional

import pytest

from typelocator.domain import FactoryEntry, SingletonEntry, TypeKey
from typelocator.errors import DependencyError


class Database:
    pass


class Postgres(Database):
    pass


def test_equal_types_give_equal_keys():
    assert TypeKey.of(Database) == TypeKey.of(Database)
    assert TypeKey.of(Callable[[str], str]) == TypeKey.of(Callable[[str], str])
    assert hash(TypeKey.of(Database)) == hash(TypeKey.of(Database))


def test_different_types_give_different_keys():
    assert TypeKey.of(Database) != TypeKey.of(Postgres)
    assert TypeKey.of(Callable[[str], str]) != TypeKey.of(Callable[[int], str])


def test_values_are_rejected():
    with pytest.raises(DependencyError, match="is not a type"):
        TypeKey.of("Database")


def test_name_of_class_is_qualified():
    assert TypeKey.of(Database).name.endswith("test_domain.Database")


def test_name_of_generic_alias_is_its_repr():
    assert TypeKey.of(Callable[[str], str]).name == repr(Callable[[str], str])


def test_subclass_instances_are_accepted():
    assert TypeKey.of(Database).accepts(Postgres())
    assert not TypeKey.of(Postgres).accepts(Database())


def test_generic_alias_checks_origin():
    key = TypeKey.of(dict[str, int])
    assert key.accepts({})
    assert not key.accepts([])


def test_uncheckable_constructs_accept_anything():
    assert TypeKey.of(Any).accepts(object())
    assert TypeKey.of(Optional[Database]).accepts(None)


def test_singleton_entry_matches_its_key():
    key = TypeKey.of(Database)
    assert SingletonEntry(key, Database()).matches()
    assert not SingletonEntry(key, "database").matches()


def test_factory_entry_produces_new_instances():
    entry = FactoryEntry(TypeKey.of(Database), Database)
    assert entry.produce() is not entry.produce()


def test_annotated_checks_underlying_type():
    key = TypeKey.of(Annotated[Database, "primary"])
    assert key != TypeKey.of(Database)
    assert key.accepts(Postgres())
    assert not key.accepts("database")
