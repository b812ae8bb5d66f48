# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for binding type parameters to the arguments of a use site."""

from dataclasses import dataclass
from typing import Generic, TypeVar

import pytest

from openapi_reflect.introspection import ProjectionMap, describe

K = TypeVar("K")
V = TypeVar("V")
T = TypeVar("T")
U = TypeVar("U")


@dataclass
class Pair(Generic[K, V]):
    first: K
    second: V


@dataclass
class Box(Generic[T]):
    value: T


class Middle(Box[U]):
    pass


class Bottom(Middle[str]):
    pass


@dataclass
class Labelled(Generic[T]):
    label: T


@dataclass
class Tagged(Labelled[str], Generic[T]):
    tag: T


# ###############
# Helpers
# ###############


def _keys(projection: ProjectionMap) -> dict[str, str]:
    return {name: bound.key for name, bound in projection.items()}


def _qualified(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


# ###############
# Building Bindings
# ###############


def test_bindings_are_positional() -> None:
    """Parameters are zipped with the use-site arguments in order."""
    projection = ProjectionMap.for_type(describe(Pair[str, int]))
    assert _keys(projection) == {"K": "builtins.str", "V": "builtins.int"}
    assert len(projection) == 2


def test_non_generic_type_has_no_bindings() -> None:
    """A plain type binds nothing."""
    assert len(ProjectionMap.for_type(describe(int))) == 0


def test_unparameterized_generic_has_no_bindings() -> None:
    """A generic used without arguments leaves its parameters unbound."""
    assert _keys(ProjectionMap.for_type(describe(Box))) == {}


def test_own_bindings_exclude_base_classes() -> None:
    """for_type binds only the parameters the type itself declares."""
    assert _keys(ProjectionMap.for_type(describe(Bottom))) == {}
    assert _keys(ProjectionMap.for_type(describe(Tagged[int]))) == {"T": "builtins.int"}


def test_bindings_of_base_classes() -> None:
    """Bindings fixed by generic bases are followed through the hierarchy."""
    bottom = describe(Bottom)
    assert _keys(ProjectionMap.for_base(bottom, _qualified(Middle))) == {"U": "builtins.str"}
    assert _keys(ProjectionMap.for_base(bottom, _qualified(Box))) == {"T": "builtins.str"}


def test_base_bindings_ignore_reused_parameter_name() -> None:
    """A base class sees its own binding of T, not the subclass's."""
    tagged = describe(Tagged[int])
    assert _keys(ProjectionMap.for_base(tagged, _qualified(Labelled))) == {"T": "builtins.str"}
    assert _keys(ProjectionMap.for_base(tagged, _qualified(Tagged))) == {"T": "builtins.int"}


def test_unknown_base_falls_back_to_own_bindings() -> None:
    """A class outside the hierarchy yields the type's own bindings."""
    assert _keys(ProjectionMap.for_base(describe(Box[int]), "elsewhere.Other")) == {"T": "builtins.int"}


def test_ancestors_are_resolved_level_by_level() -> None:
    """Each supertype is specialised with the arguments of the class naming it."""
    ancestors = ProjectionMap().ancestors(describe(Bottom))
    assert [supertype.key for supertype, _ in ancestors] == [
        f"{_qualified(Middle)}[builtins.str]",
        f"{_qualified(Box)}[builtins.str]",
    ]


def test_repr() -> None:
    """The representation lists each binding."""
    assert repr(ProjectionMap.for_type(describe(Box[int]))) == "ProjectionMap(T=builtins.int)"


def test_map_is_immutable() -> None:
    """Bindings cannot be changed after construction."""
    projection = ProjectionMap.for_type(describe(Box[int]))
    with pytest.raises(TypeError):
        projection["T"] = describe(str)  # type: ignore[index]


def test_maps_are_independent() -> None:
    """Each map holds its own bindings."""
    ints = ProjectionMap.for_type(describe(Box[int]))
    strings = ProjectionMap.for_type(describe(Box[str]))
    assert ints["T"].key == "builtins.int"
    assert strings["T"].key == "builtins.str"


# ###############
# Resolution
# ###############


def test_resolve_parameter() -> None:
    """A bound parameter resolves to its argument."""
    projection = ProjectionMap.for_type(describe(Box[int]))
    assert projection.resolve(describe(T)).key == "builtins.int"


def test_resolve_keeps_use_site_nullability() -> None:
    """T | None stays nullable after substitution."""
    projection = ProjectionMap.for_type(describe(Box[int]))
    resolved = projection.resolve(describe(T | None))
    assert resolved.key == "builtins.int"
    assert resolved.nullable is True


def test_resolve_keeps_argument_nullability() -> None:
    """A nullable argument makes every use of its parameter nullable."""
    projection = ProjectionMap.for_type(describe(Box[int | None]))
    assert projection.resolve(describe(T)).nullable is True


def test_resolve_nested_arguments() -> None:
    """Parameters inside type arguments are substituted deeply."""
    projection = ProjectionMap.for_type(describe(Pair[str, bool]))
    resolved = projection.resolve(describe(dict[K, list[V]]))
    assert resolved.key == "builtins.dict[builtins.str, builtins.list[builtins.bool]]"


def test_resolve_unbound_returns_same_descriptor() -> None:
    """Types without bound parameters are returned unchanged."""
    projection = ProjectionMap.for_type(describe(Box[int]))
    unbound = describe(U)
    concrete = describe(list[str])
    assert projection.resolve(unbound) is unbound
    assert projection.resolve(concrete) is concrete
    assert ProjectionMap().resolve(unbound) is unbound
