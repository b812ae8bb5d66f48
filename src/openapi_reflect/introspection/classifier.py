# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Classification of type descriptors into the shapes a schema can take."""

from __future__ import annotations

import collections.abc
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from openapi_reflect.introspection.descriptor import TypeDescriptor
from openapi_reflect.introspection.errors import UnhandledTypeError

# ###############
# Public Interface
# ###############


class TypeKind(Enum):
    """Structural category of a type, in classification priority order."""

    COLLECTION = "collection"
    MAP = "map"
    ENUM = "enum"
    SCALAR = "scalar"
    VALUE_WRAPPER = "value-wrapper"
    OBJECT = "object"


class ScalarKind(Enum):
    """Schema type a scalar maps to."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


# Scalar table keyed by qualified class name. Matching by name keeps optional
# libraries (babel) out of the import graph.
DEFAULT_SCALARS: Mapping[str, ScalarKind] = MappingProxyType(
    {
        "builtins.str": ScalarKind.STRING,
        "uuid.UUID": ScalarKind.STRING,
        "babel.core.Locale": ScalarKind.STRING,
        "builtins.int": ScalarKind.NUMBER,
        "builtins.float": ScalarKind.NUMBER,
        "builtins.bool": ScalarKind.BOOLEAN,
    }
)


def classify(descriptor: TypeDescriptor, scalars: Mapping[str, ScalarKind] = DEFAULT_SCALARS) -> TypeKind:
    """Decide which structural category *descriptor* belongs to.

    Checks run in priority order: collection, map, enumeration, scalar,
    value wrapper, and finally composite object.

    Args:
        descriptor: The type to classify, after projection substitution.
        scalars: Scalar table to match against the type's lineage.

    Returns:
        The matching :class:`TypeKind`.

    Raises:
        UnhandledTypeError: If the type has no recognised shape, e.g. an
            unbound type parameter or a class without properties that is
            missing from the scalar table.
    """
    if is_collection(descriptor):
        return TypeKind.COLLECTION
    if descriptor.is_subtype_of(collections.abc.Mapping):
        return TypeKind.MAP
    if descriptor.enum_constants is not None:
        return TypeKind.ENUM
    if scalar_kind(descriptor, scalars) is not None:
        return TypeKind.SCALAR
    if descriptor.wrapped is not None:
        return TypeKind.VALUE_WRAPPER
    if descriptor.properties:
        return TypeKind.OBJECT
    raise UnhandledTypeError(descriptor.name)


def is_collection(descriptor: TypeDescriptor) -> bool:
    """Whether *descriptor* is a sequence or set (text and bytes excluded)."""
    if any(descriptor.is_subtype_of(t) for t in _TEXT_TYPES):
        return False
    return descriptor.is_subtype_of(collections.abc.Sequence) or descriptor.is_subtype_of(collections.abc.Set)


def scalar_kind(descriptor: TypeDescriptor, scalars: Mapping[str, ScalarKind] = DEFAULT_SCALARS) -> ScalarKind | None:
    """Return the scalar kind of the nearest class in the lineage found in *scalars*."""
    for name in descriptor.lineage:
        kind = scalars.get(name)
        if kind is not None:
            return kind
    return None


# ################
# Implementation
# ################

_TEXT_TYPES: tuple[type, ...] = (str, bytes, bytearray)
