# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generic projection: binding type parameters to the arguments of a use site.

Introspecting ``Box[int]`` where ``Box`` declares ``value: T`` must describe
``value`` as an integer, not as the placeholder ``T``. A :class:`ProjectionMap`
holds those bindings (``{"T": int}``) and substitutes them into every type
met while descending into the members of the bound type. Members inherited
from a generic base class are resolved with that base's own bindings, since
two classes in one hierarchy may reuse the same parameter name.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from openapi_reflect.introspection.descriptor import TypeDescriptor

# ###############
# Public Interface
# ###############


class ProjectionMap(Mapping[str, TypeDescriptor]):
    """Immutable mapping from type-parameter name to its concrete type."""

    def __init__(self, bindings: Mapping[str, TypeDescriptor] | None = None) -> None:
        self._bindings: Mapping[str, TypeDescriptor] = MappingProxyType(dict(bindings or {}))

    @classmethod
    def for_type(cls, descriptor: TypeDescriptor) -> ProjectionMap:
        """Build the bindings that *descriptor* fixes for its own members.

        The declared type parameters are zipped positionally with the actual
        type arguments.

        Args:
            descriptor: The type at its point of use, with its own arguments
                already resolved.

        Returns:
            A new, independent :class:`ProjectionMap`.
        """
        return cls(dict(zip(descriptor.type_parameters, descriptor.type_arguments)))

    @classmethod
    def for_base(cls, descriptor: TypeDescriptor, base: str) -> ProjectionMap:
        """Build the bindings seen by members that *base* declares.

        Generic bases are followed level by level, each one resolved in the
        scope of the class that names it. With ``class Sub(Base[str],
        Generic[T])`` the members of ``Base`` see ``T`` bound to ``str``
        whatever ``Sub`` itself is applied to.

        Args:
            descriptor: The type at its point of use.
            base: Qualified name of the class declaring the members.

        Returns:
            The bindings of *base* as reached from *descriptor*, or those of
            *descriptor* itself when *base* is not one of its bases.
        """
        own = cls.for_type(descriptor)
        if base == descriptor.qualified_name:
            return own
        for supertype, bindings in own.ancestors(descriptor):
            if supertype.qualified_name == base:
                return bindings
        return own

    def ancestors(self, descriptor: TypeDescriptor) -> Iterator[tuple[TypeDescriptor, ProjectionMap]]:
        """Yield the supertypes of *descriptor*, nearest first, with their bindings.

        This map must be the scope of *descriptor*. Each supertype is
        resolved in the scope of the class that names it, so ``Box[U]``
        reached through ``Middle[str]`` is yielded as ``Box[str]``.
        """
        seen: set[str] = {descriptor.key}
        pending = [(supertype, self) for supertype in descriptor.supertypes]
        while pending:
            supertype, scope = pending.pop(0)
            resolved = scope.resolve(supertype)
            if resolved.key in seen:
                continue
            seen.add(resolved.key)
            bindings = ProjectionMap.for_type(resolved)
            yield resolved, bindings
            pending.extend((s, bindings) for s in resolved.supertypes)

    def resolve(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        """Substitute bound type parameters in *descriptor*.

        A bare parameter is replaced by its binding, keeping the use site's
        nullability (``T | None`` stays nullable). Parameters nested in type
        arguments are substituted too, so ``list[T]`` becomes ``list[int]``.
        Anything unbound is returned unchanged.
        """
        if descriptor.is_type_parameter:
            bound = self._bindings.get(descriptor.key)
            if bound is None:
                return descriptor
            return bound.with_nullable(bound.nullable or descriptor.nullable)

        arguments = descriptor.type_arguments
        if not arguments or not self._bindings:
            return descriptor
        resolved = tuple(self.resolve(a) for a in arguments)
        if all(r is a for r, a in zip(resolved, arguments)):
            return descriptor
        return descriptor.specialize(resolved)

    def __getitem__(self, name: str) -> TypeDescriptor:
        return self._bindings[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={bound.key}" for name, bound in self._bindings.items())
        return f"ProjectionMap({inner})"
