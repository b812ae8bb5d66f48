# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema node representations produced by type introspection."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class Property(BaseModel):
    """A named member of an object schema."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: Schema


class ObjectSchema(BaseModel):
    """A composite type with an ordered list of properties."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["object"] = "object"
    name: str
    properties: tuple[Property, ...] = ()
    qualified_name: str | None = None
    nullable: bool = False


class ArraySchema(BaseModel):
    """A sequence or set of elements sharing one schema."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    element: Schema
    nullable: bool = False


class StringSchema(BaseModel):
    """Textual scalar; ``enum_values`` is set only for enumerations."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["string"] = "string"
    enum_values: tuple[str, ...] | None = None
    nullable: bool = False


class NumberSchema(BaseModel):
    """Integer or floating point scalar."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    nullable: bool = False


class BooleanSchema(BaseModel):
    """Boolean scalar."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["boolean"] = "boolean"
    nullable: bool = False


# A schema node: an object, an array, or one of the scalar variants.
# The `kind` field selects the variant when validating raw data.
Schema = Annotated[
    ObjectSchema | ArraySchema | StringSchema | NumberSchema | BooleanSchema,
    _Field(discriminator="kind"),
]


# Resolve forward references for models that use Schema.
Property.model_rebuild()
ObjectSchema.model_rebuild()
ArraySchema.model_rebuild()
