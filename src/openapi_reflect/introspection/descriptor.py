# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type descriptors: the reflective view of a type that the introspector reads.

The introspector never inspects Python's typing machinery directly. It works
on :class:`TypeDescriptor` instances, which expose exactly what schema
generation needs from a type at a specific point of use:

- its simple and qualified name, and whether the use site is nullable,
- its declared type parameters and the actual arguments at the use site,
- its member properties in declaration order, each flagged eager or deferred,
- the constant names of an enumeration,
- its direct supertypes (for element types erased on a subclass),
- the value a single-field wrapper stands for.

:func:`describe` builds the implementation used throughout the package from
ordinary annotations: builtins and ``collections.abc`` generics, dataclasses,
pydantic models, ``TypedDict`` classes, enums, ``NewType`` and ``TypeVar``.
"""

from __future__ import annotations

import dataclasses
import enum
import inspect
import types
import typing
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Annotated, Any, ClassVar, Optional, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, RootModel

# ###############
# Public Interface
# ###############

_C = TypeVar("_C", bound=type)


class Deferred:
    """Marks a property whose value is assigned after construction.

    Use as ``Annotated[T, Deferred]``. Deferred properties are left out of
    generated schemas unless the introspection options ask for them.
    """


@dataclass(frozen=True)
class PropertyDescriptor:
    """A member property of a composite type.

    Attributes:
        name: Attribute name as declared on the type.
        type: Declared type of the property.
        eager: False when the value is not guaranteed to be set (deferred).
        owner: Qualified name of the class that declares the property, if known.
    """

    name: str
    type: TypeDescriptor
    eager: bool = True
    owner: str | None = None


class TypeDescriptor(ABC):
    """Reflective view of a type at a specific point of use."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Simple name of the type (``"Box"`` for ``Box[int]``)."""

    @property
    @abstractmethod
    def qualified_name(self) -> str | None:
        """Unique dotted name of the source type, if it has one."""

    @property
    @abstractmethod
    def nullable(self) -> bool:
        """Whether the use site admits ``None``."""

    @property
    @abstractmethod
    def key(self) -> str:
        """Textual identity, including type arguments but not nullability."""

    @property
    @abstractmethod
    def is_type_parameter(self) -> bool:
        """Whether this is an unbound generic placeholder such as ``T``."""

    @property
    @abstractmethod
    def type_parameters(self) -> tuple[str, ...]:
        """Names of the type parameters the type declares, in order."""

    @property
    @abstractmethod
    def type_arguments(self) -> tuple[TypeDescriptor, ...]:
        """Actual type arguments at this use site, in order."""

    @property
    @abstractmethod
    def properties(self) -> tuple[PropertyDescriptor, ...]:
        """Member properties in declaration order."""

    @property
    @abstractmethod
    def enum_constants(self) -> tuple[str, ...] | None:
        """Constant names of an enumeration, or None for other types."""

    @property
    @abstractmethod
    def supertypes(self) -> tuple[TypeDescriptor, ...]:
        """Direct supertypes as written on the class declaration."""

    @property
    @abstractmethod
    def lineage(self) -> tuple[str, ...]:
        """Qualified names of the type and its base classes, nearest first."""

    @property
    @abstractmethod
    def wrapped(self) -> TypeDescriptor | None:
        """The wrapped type when this is a single-field value wrapper."""

    @abstractmethod
    def is_subtype_of(self, abstraction: type) -> bool:
        """Whether the type is a (possibly virtual) subclass of *abstraction*."""

    @abstractmethod
    def with_nullable(self, nullable: bool) -> TypeDescriptor:
        """Return the same type with the given nullability."""

    @abstractmethod
    def specialize(self, arguments: Sequence[TypeDescriptor]) -> TypeDescriptor:
        """Return the same generic type applied to *arguments*."""


def describe(annotation: Any) -> TypeDescriptor:
    """Build a :class:`TypeDescriptor` for a type annotation.

    ``Optional``/``X | None`` becomes a nullable descriptor of ``X``, and
    ``Annotated`` metadata is kept so property markers such as
    :class:`Deferred` can be recognised. Descriptors are returned unchanged.
    """
    if isinstance(annotation, TypeDescriptor):
        return annotation
    normalized, nullable, metadata = _normalize(annotation)
    return PythonTypeDescriptor(normalized, nullable=nullable, metadata=metadata)


def value_class(cls: _C) -> _C:
    """Class decorator marking *cls* as a value wrapper.

    A value wrapper is a strong-typing idiom: a class with exactly one
    property. Schemas see straight through it to the wrapped property type.

    Raises:
        TypeError: If *cls* does not declare exactly one property.
    """
    count = len(_member_properties(cls))
    if count != 1:
        raise TypeError(f"value class {cls.__name__} must declare exactly one property, found {count}")
    setattr(cls, "__value_class__", True)
    return cls


@dataclass(frozen=True)
class PythonTypeDescriptor(TypeDescriptor):
    """Descriptor backed by a normalized Python type annotation."""

    annotation: Any
    nullable: bool = False
    metadata: tuple[Any, ...] = field(default=(), compare=False)

    @property
    def name(self) -> str:
        if isinstance(self.annotation, (TypeVar, typing.NewType)):
            return self.annotation.__name__
        cls = self._class
        if cls is not None:
            return cls.__name__
        return getattr(self.annotation, "__name__", None) or repr(self.annotation)

    @property
    def qualified_name(self) -> str | None:
        if isinstance(self.annotation, typing.NewType):
            return f"{self.annotation.__module__}.{self.annotation.__name__}"
        cls = self._class
        if cls is None:
            return None
        return _qualified_name(cls)

    @property
    def key(self) -> str:
        if self.is_type_parameter:
            return self.name
        base = self.qualified_name or self.name
        arguments = self.type_arguments
        if not arguments:
            return base
        return f"{base}[{', '.join(_argument_key(a) for a in arguments)}]"

    @property
    def is_type_parameter(self) -> bool:
        return isinstance(self.annotation, TypeVar)

    @property
    def type_parameters(self) -> tuple[str, ...]:
        cls = self._class
        if cls is None:
            return ()
        generic = getattr(cls, "__pydantic_generic_metadata__", None)
        parameters = (generic or {}).get("parameters") or getattr(cls, "__parameters__", ())
        return tuple(p.__name__ for p in parameters)

    @property
    def type_arguments(self) -> tuple[TypeDescriptor, ...]:
        generic = _pydantic_generic_metadata(self.annotation)
        arguments = generic["args"] if generic is not None else get_args(self.annotation)
        return tuple(describe(a) for a in arguments if a is not Ellipsis)

    @property
    def properties(self) -> tuple[PropertyDescriptor, ...]:
        cls = self._class
        if cls is None:
            return ()
        return tuple(_member_properties(cls))

    @property
    def enum_constants(self) -> tuple[str, ...] | None:
        cls = self._class
        if cls is None or not issubclass(cls, enum.Enum):
            return None
        return tuple(member.name for member in cls)

    @property
    def supertypes(self) -> tuple[TypeDescriptor, ...]:
        cls = self._class
        if cls is None:
            return ()
        bases = cls.__dict__.get("__orig_bases__", cls.__bases__)
        return tuple(describe(base) for base in bases if (get_origin(base) or base) not in _IGNORED_BASES)

    @property
    def lineage(self) -> tuple[str, ...]:
        cls = self._class
        if cls is None:
            return ()
        return tuple(_qualified_name(klass) for klass in cls.__mro__)

    @property
    def wrapped(self) -> TypeDescriptor | None:
        if isinstance(self.annotation, typing.NewType):
            return describe(self.annotation.__supertype__)
        cls = self._class
        if cls is None:
            return None
        if issubclass(cls, RootModel) or cls.__dict__.get("__value_class__", False):
            return _member_properties(cls)[0].type
        return None

    def is_subtype_of(self, abstraction: type) -> bool:
        cls = self._class
        if cls is None:
            return False
        if typing.is_typeddict(cls):
            # TypedDict classes describe records, not open mappings.
            return False
        try:
            return issubclass(cls, abstraction)
        except TypeError:
            return False

    def with_nullable(self, nullable: bool) -> TypeDescriptor:
        return dataclasses.replace(self, nullable=nullable)

    def specialize(self, arguments: Sequence[TypeDescriptor]) -> TypeDescriptor:
        origin = self._origin
        if not isinstance(origin, type) or not arguments:
            return self
        specialized = origin[tuple(_annotation_of(a) for a in arguments)]
        return PythonTypeDescriptor(specialized, nullable=self.nullable, metadata=self.metadata)

    @property
    def is_deferred(self) -> bool:
        """Whether the annotation carried the :class:`Deferred` marker."""
        return any(m is Deferred or isinstance(m, Deferred) for m in self.metadata)

    @property
    def _origin(self) -> Any:
        generic = _pydantic_generic_metadata(self.annotation)
        if generic is not None:
            return generic["origin"]
        return get_origin(self.annotation) or self.annotation

    @property
    def _class(self) -> type | None:
        origin = self._origin
        if origin in _UNION_FORMS:
            return None
        return origin if isinstance(origin, type) else None


# ################
# Implementation
# ################

# Special forms that only qualify a declaration and never change its type.
_QUALIFIERS: tuple[Any, ...] = tuple(
    form
    for form in (
        getattr(typing, "Required", None),
        getattr(typing, "NotRequired", None),
        getattr(typing, "ReadOnly", None),
        typing.Final,
    )
    if form is not None
)

_IGNORED_BASES: tuple[Any, ...] = (object, typing.Generic, typing.Protocol)

_UNION_FORMS: tuple[Any, ...] = (Union, types.UnionType)


def _normalize(annotation: Any) -> tuple[Any, bool, tuple[Any, ...]]:
    """Strip ``Annotated``, qualifiers and ``None`` from a union.

    Returns:
        The bare annotation, whether ``None`` was part of it, and the
        collected ``Annotated`` metadata.
    """
    nullable = False
    metadata: list[Any] = []
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            metadata.extend(annotation.__metadata__)
            annotation = annotation.__origin__
        elif origin in _QUALIFIERS:
            annotation = get_args(annotation)[0]
        elif origin in _UNION_FORMS and type(None) in get_args(annotation):
            nullable = True
            members = tuple(a for a in get_args(annotation) if a is not type(None))
            if len(members) > 1:
                annotation = Union[members]
                break
            annotation = members[0]
        else:
            break
    return annotation, nullable, tuple(metadata)


def _pydantic_generic_metadata(annotation: Any) -> dict[str, Any] | None:
    """Return origin and arguments of a specialised pydantic generic model."""
    if not (isinstance(annotation, type) and issubclass(annotation, BaseModel)):
        return None
    generic = getattr(annotation, "__pydantic_generic_metadata__", None)
    if not generic or generic.get("origin") is None:
        return None
    return generic


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _argument_key(argument: TypeDescriptor) -> str:
    return f"{argument.key}?" if argument.nullable else argument.key


def _annotation_of(descriptor: TypeDescriptor) -> Any:
    if not isinstance(descriptor, PythonTypeDescriptor):
        raise TypeError(f"cannot specialize with non-Python descriptor {descriptor.key}")
    if descriptor.nullable:
        return Optional[descriptor.annotation]
    return descriptor.annotation


def _member_properties(cls: type) -> list[PropertyDescriptor]:
    """Collect the member properties of *cls* in declaration order."""
    owners = _annotation_owners(cls)
    if typing.is_typeddict(cls):
        hints = typing.get_type_hints(cls, include_extras=True)
        required = getattr(cls, "__required_keys__", frozenset(hints))
        return [
            _property(name, hint, eager=name in required, owner=owners.get(name)) for name, hint in hints.items()
        ]

    if dataclasses.is_dataclass(cls):
        hints = typing.get_type_hints(cls, include_extras=True)
        return [
            _property(f.name, hints[f.name], eager=not _is_deferred_field(f), owner=owners.get(f.name))
            for f in dataclasses.fields(cls)
        ]

    if issubclass(cls, BaseModel):
        # model_fields already holds resolved annotations with Annotated
        # metadata moved into FieldInfo.metadata.
        return [
            _property(name, info.annotation, metadata=tuple(info.metadata), owner=owners.get(name))
            for name, info in cls.model_fields.items()
        ]

    names = _declared_attributes(cls)
    if not names:
        return []
    hints = typing.get_type_hints(cls, include_extras=True)
    return [_property(name, hints[name], owner=owners.get(name)) for name in names if not _is_class_var(hints[name])]


def _property(
    name: str,
    annotation: Any,
    *,
    eager: bool = True,
    metadata: tuple[Any, ...] = (),
    owner: str | None = None,
) -> PropertyDescriptor:
    descriptor = describe(annotation)
    if metadata and isinstance(descriptor, PythonTypeDescriptor):
        descriptor = dataclasses.replace(descriptor, metadata=descriptor.metadata + metadata)
    deferred = isinstance(descriptor, PythonTypeDescriptor) and descriptor.is_deferred
    return PropertyDescriptor(name=name, type=descriptor, eager=eager and not deferred, owner=owner)


def _annotation_owners(cls: type) -> dict[str, str]:
    """Map each annotated name to the nearest class in the MRO that declares it."""
    owners: dict[str, str] = {}
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name in inspect.get_annotations(klass):
            owners.setdefault(name, _qualified_name(klass))
    return owners


def _is_deferred_field(f: dataclasses.Field[Any]) -> bool:
    """A dataclass field nobody initializes: ``field(init=False)`` without default."""
    return not f.init and f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING


def _is_class_var(annotation: Any) -> bool:
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _declared_attributes(cls: type) -> list[str]:
    """Public annotated attributes of a plain class, base classes first."""
    names: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name in inspect.get_annotations(klass):
            if not name.startswith("_"):
                names.setdefault(name, None)
    return list(names)
