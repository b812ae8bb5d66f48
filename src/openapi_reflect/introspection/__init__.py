# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Runtime type introspection: descriptors, projection, classification, schemas."""

from openapi_reflect.introspection.classifier import (
    DEFAULT_SCALARS,
    ScalarKind,
    TypeKind,
    classify,
    is_collection,
    scalar_kind,
)
from openapi_reflect.introspection.descriptor import (
    Deferred,
    PropertyDescriptor,
    PythonTypeDescriptor,
    TypeDescriptor,
    describe,
    value_class,
)
from openapi_reflect.introspection.errors import (
    CyclicTypeError,
    ErasedTypeArgumentError,
    IntrospectionError,
    InvalidRootTypeError,
    UnhandledTypeError,
)
from openapi_reflect.introspection.introspector import object_schema, type_schema
from openapi_reflect.introspection.options import IntrospectionOptions, MapStyle
from openapi_reflect.introspection.projection import ProjectionMap

__all__ = [
    # Descriptors
    "Deferred",
    "PropertyDescriptor",
    "PythonTypeDescriptor",
    "TypeDescriptor",
    "describe",
    "value_class",
    # Projection and classification
    "ProjectionMap",
    "DEFAULT_SCALARS",
    "ScalarKind",
    "TypeKind",
    "classify",
    "is_collection",
    "scalar_kind",
    # Introspection
    "IntrospectionOptions",
    "MapStyle",
    "object_schema",
    "type_schema",
    # Errors
    "IntrospectionError",
    "UnhandledTypeError",
    "InvalidRootTypeError",
    "CyclicTypeError",
    "ErasedTypeArgumentError",
]
