# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive construction of schema trees from types.

Each call to :func:`type_schema` or :func:`object_schema` works on its own
private state: the projection map of the root type, a cache of completed
object nodes, and the set of composite types currently being expanded. No
state survives the call, so concurrent calls need no synchronisation.
"""

from __future__ import annotations

import collections.abc
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, assert_never

from openapi_reflect.introspection.classifier import ScalarKind, TypeKind, classify, is_collection, scalar_kind
from openapi_reflect.introspection.descriptor import TypeDescriptor, describe
from openapi_reflect.introspection.errors import (
    CyclicTypeError,
    ErasedTypeArgumentError,
    InvalidRootTypeError,
    UnhandledTypeError,
)
from openapi_reflect.introspection.options import IntrospectionOptions, MapStyle
from openapi_reflect.introspection.projection import ProjectionMap
from openapi_reflect.model.types import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    Property,
    Schema,
    StringSchema,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def type_schema(annotation: Any, *, options: IntrospectionOptions | None = None) -> Schema:
    """Build the schema of any type.

    Args:
        annotation: A type annotation (``list[int]``, ``Box[str] | None``,
            a dataclass, ...) or a :class:`TypeDescriptor`.
        options: Introspection settings; defaults apply when omitted.

    Returns:
        The schema tree describing the shape of the type.

    Raises:
        UnhandledTypeError: If a type in the tree has no recognised shape.
        CyclicTypeError: If a composite type contains itself.
        ErasedTypeArgumentError: If a collection or map has no element types.
    """
    return _Introspection(describe(annotation), options or IntrospectionOptions()).type_schema()


def object_schema(name: str, annotation: Any, *, options: IntrospectionOptions | None = None) -> ObjectSchema:
    """Build the object schema of a composite type, titled *name*.

    Raises:
        InvalidRootTypeError: If the type is not a composite object (for
            example a collection, a map, an enumeration or a scalar).
        UnhandledTypeError: If a type in the tree has no recognised shape.
        CyclicTypeError: If a composite type contains itself.
        ErasedTypeArgumentError: If a collection or map has no element types.
    """
    return _Introspection(describe(annotation), options or IntrospectionOptions()).object_schema(name)


# ################
# Implementation
# ################


class _Introspection:
    """State of a single introspection call over one root type."""

    def __init__(self, root: TypeDescriptor, options: IntrospectionOptions) -> None:
        self._root = root
        self._options = options
        self._projection = ProjectionMap.for_type(root)
        self._cache: dict[tuple[str, bool, str], ObjectSchema] = {}
        self._expanding: set[str] = set()

    def type_schema(self) -> Schema:
        logger.debug("Building schema for %s with %r", self._root.key, self._projection)
        return self._build(self._root, self._projection)

    def object_schema(self, name: str) -> ObjectSchema:
        kind = classify(self._root, self._options.scalars)
        if kind is not TypeKind.OBJECT:
            raise InvalidRootTypeError(self._root.key, "Object")
        logger.debug("Building object schema %r for %s with %r", name, self._root.key, self._projection)
        return self._object(name, self._root, self._projection)

    def _build(self, descriptor: TypeDescriptor, projection: ProjectionMap) -> Schema:
        """Build the schema of *descriptor* as seen from *projection*'s scope."""
        resolved = projection.resolve(descriptor)
        kind = classify(resolved, self._options.scalars)
        if kind is TypeKind.COLLECTION:
            return self._array(resolved, projection)
        if kind is TypeKind.MAP:
            return self._map(resolved, projection)
        if kind is TypeKind.ENUM:
            return StringSchema(enum_values=resolved.enum_constants, nullable=resolved.nullable)
        if kind is TypeKind.SCALAR:
            return self._scalar(resolved)
        if kind is TypeKind.VALUE_WRAPPER:
            return self._unwrap(resolved)
        if kind is TypeKind.OBJECT:
            return self._object(resolved.name, resolved, self._scope(resolved))
        assert_never(kind)

    def _array(self, descriptor: TypeDescriptor, projection: ProjectionMap) -> ArraySchema:
        arguments = descriptor.type_arguments or self._erased_arguments(descriptor)
        element = projection.resolve(arguments[0])
        return ArraySchema(element=self._build(element, projection), nullable=descriptor.nullable)

    def _map(self, descriptor: TypeDescriptor, projection: ProjectionMap) -> ObjectSchema:
        arguments = descriptor.type_arguments
        if len(arguments) < 2:
            arguments = self._erased_arguments(descriptor)
        key, value = (projection.resolve(a) for a in arguments[:2])
        if self._options.map_style is MapStyle.KEY_VALUE:
            properties = (
                Property(name="key", type=self._build(key, projection)),
                Property(name="value", type=self._build(value, projection)),
            )
        else:
            properties = (Property(name=key.name, type=self._build(value, projection)),)
        return ObjectSchema(name="map", properties=properties, nullable=descriptor.nullable)

    def _scalar(self, descriptor: TypeDescriptor) -> Schema:
        kind = scalar_kind(descriptor, self._options.scalars)
        if kind is ScalarKind.STRING:
            return StringSchema(nullable=descriptor.nullable)
        if kind is ScalarKind.NUMBER:
            return NumberSchema(nullable=descriptor.nullable)
        if kind is ScalarKind.BOOLEAN:
            return BooleanSchema(nullable=descriptor.nullable)
        raise UnhandledTypeError(descriptor.name)

    def _unwrap(self, descriptor: TypeDescriptor) -> Schema:
        wrapped = descriptor.wrapped
        if wrapped is None:
            raise UnhandledTypeError(descriptor.name)
        scope = self._scope(descriptor)
        if descriptor.properties:
            scope = self._member_scope(descriptor, scope, descriptor.properties[0].owner)
        target = scope.resolve(wrapped)
        # A nullable use of the wrapper makes the wrapped value nullable.
        target = target.with_nullable(target.nullable or descriptor.nullable)
        logger.debug("Unwrapping %s to %s", descriptor.key, target.key)
        with self._expanding_type(descriptor):
            return self._build(target, scope)

    def _object(self, name: str, descriptor: TypeDescriptor, projection: ProjectionMap) -> ObjectSchema:
        cache_key = (descriptor.key, descriptor.nullable, name)
        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug("Reusing object schema of %s", descriptor.key)
            return cached

        with self._expanding_type(descriptor):
            logger.debug("Expanding %s as object %r", descriptor.key, name)
            properties: list[Property] = []
            for prop in descriptor.properties:
                if not prop.eager and not self._options.include_deferred:
                    logger.debug("Skipping deferred property %s.%s", descriptor.name, prop.name)
                    continue
                scope = self._member_scope(descriptor, projection, prop.owner)
                properties.append(Property(name=prop.name, type=self._build(prop.type, scope)))

        schema = ObjectSchema(
            name=name,
            properties=tuple(properties),
            qualified_name=descriptor.qualified_name,
            nullable=descriptor.nullable,
        )
        self._cache[cache_key] = schema
        return schema

    def _scope(self, descriptor: TypeDescriptor) -> ProjectionMap:
        """Projection map for the members of *descriptor*."""
        if descriptor is self._root:
            return self._projection
        return ProjectionMap.for_type(descriptor)

    def _member_scope(self, descriptor: TypeDescriptor, projection: ProjectionMap, owner: str | None) -> ProjectionMap:
        """Projection map for a member of *descriptor* declared on the class *owner*."""
        if owner is None or owner == descriptor.qualified_name:
            return projection
        logger.debug("Resolving members of %s declared on %s", descriptor.key, owner)
        return ProjectionMap.for_base(descriptor, owner)

    def _erased_arguments(self, descriptor: TypeDescriptor) -> tuple[TypeDescriptor, ...]:
        """Find the type arguments of a collection or map on its supertypes.

        Used when the type itself carries no arguments, as with
        ``class Tags(list[str])``. The nearest supertype of the same shape
        that has arguments wins, with its arguments resolved through the
        generic bases in between.
        """
        wanted_collection = is_collection(descriptor)
        for supertype, _ in self._scope(descriptor).ancestors(descriptor):
            if wanted_collection:
                same_shape = is_collection(supertype) and len(supertype.type_arguments) >= 1
            else:
                same_shape = supertype.is_subtype_of(collections.abc.Mapping) and len(supertype.type_arguments) >= 2
            if same_shape:
                logger.debug("Type arguments of %s taken from supertype %s", descriptor.key, supertype.key)
                return supertype.type_arguments
        raise ErasedTypeArgumentError(descriptor.name)

    @contextmanager
    def _expanding_type(self, descriptor: TypeDescriptor) -> Iterator[None]:
        if descriptor.key in self._expanding:
            raise CyclicTypeError(descriptor.name)
        self._expanding.add(descriptor.key)
        try:
            yield
        finally:
            self._expanding.discard(descriptor.key)
