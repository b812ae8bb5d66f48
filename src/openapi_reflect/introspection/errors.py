# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised while building schemas from types."""

# ###############
# Public Interface
# ###############


class IntrospectionError(Exception):
    """Base class for failures that abort a single introspection call."""


class UnhandledTypeError(IntrospectionError):
    """Raised when a type matches no scalar mapping and has no structure to expand."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"unhandled type {type_name}")
        self.type_name = type_name


class InvalidRootTypeError(IntrospectionError):
    """Raised when an object schema is requested for a non-composite type."""

    def __init__(self, type_name: str, target: str) -> None:
        super().__init__(f"Invalid {type_name} to build {target}")
        self.type_name = type_name
        self.target = target


class CyclicTypeError(IntrospectionError):
    """Raised when a composite type contains itself, directly or indirectly."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"cyclic type {type_name} cannot be expanded")
        self.type_name = type_name


class ErasedTypeArgumentError(IntrospectionError):
    """Raised when a collection or map carries no resolvable type arguments."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"type arguments of {type_name} cannot be resolved")
        self.type_name = type_name
