# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of schema trees as OpenAPI 3.0 schema objects.

Only non-default values are encoded: ``nullable`` appears when it is true and
``enum`` only for enumerations, so the output stays compact and stable.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from openapi_reflect.model.types import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    Property,
    Schema,
    StringSchema,
)

# ###############
# Public Interface
# ###############


def to_openapi(schema: Schema) -> dict[str, Any]:
    """Encode a schema tree as an OpenAPI schema object."""
    d: dict[str, Any]
    if isinstance(schema, ObjectSchema):
        d = {
            "type": "object",
            "title": schema.name,
            "properties": {p.name: to_openapi(p.type) for p in schema.properties},
        }
        if schema.qualified_name is not None:
            d["x-qualified-name"] = schema.qualified_name
    elif isinstance(schema, ArraySchema):
        d = {"type": "array", "items": to_openapi(schema.element)}
    elif isinstance(schema, StringSchema):
        d = {"type": "string"}
        if schema.enum_values is not None:
            d["enum"] = list(schema.enum_values)
    elif isinstance(schema, NumberSchema):
        d = {"type": "number"}
    elif isinstance(schema, BooleanSchema):
        d = {"type": "boolean"}
    else:
        raise TypeError(f"Unknown schema node: {type(schema).__name__}")
    if schema.nullable:
        d["nullable"] = True
    return d


def from_openapi(obj: dict[str, Any]) -> Schema:
    """Decode a schema tree from an OpenAPI schema object.

    Args:
        obj: A dictionary produced by :func:`to_openapi`.

    Returns:
        The reconstructed schema tree.

    Raises:
        ValueError: If a ``type`` value is missing or not recognised, or a
            schema object does not have the shape :func:`to_openapi` writes.
    """
    if not isinstance(obj, dict):
        raise ValueError(f"Schema object must be a JSON object, got {type(obj).__name__}")
    kind = obj.get("type")
    nullable = obj.get("nullable", False)
    if kind == "object":
        properties = obj.get("properties", {})
        if not isinstance(properties, dict):
            raise ValueError(f"'properties' must be a JSON object, got {type(properties).__name__}")
        return ObjectSchema(
            name=obj.get("title", ""),
            properties=tuple(Property(name=name, type=from_openapi(value)) for name, value in properties.items()),
            qualified_name=obj.get("x-qualified-name"),
            nullable=nullable,
        )
    if kind == "array":
        return ArraySchema(element=from_openapi(obj["items"]), nullable=nullable)
    if kind == "string":
        enum_values = obj.get("enum")
        if enum_values is not None and not isinstance(enum_values, list):
            raise ValueError(f"'enum' must be a JSON array, got {type(enum_values).__name__}")
        return StringSchema(
            enum_values=tuple(enum_values) if enum_values is not None else None,
            nullable=nullable,
        )
    if kind == "number":
        return NumberSchema(nullable=nullable)
    if kind == "boolean":
        return BooleanSchema(nullable=nullable)
    raise ValueError(f"Unknown schema type: {kind!r}")


def dumps(schema: Schema, *, indent: int | None = None) -> str:
    """Serialize a schema tree to an OpenAPI JSON string."""
    return json.dumps(to_openapi(schema), indent=indent)


def write_schema(schema: Schema, path: Path) -> None:
    """Write a schema tree to *path* as JSON, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps(schema, indent=2) + "\n", encoding="utf-8")


def read_schema(path: Path) -> Schema:
    """Read a schema tree written by :func:`write_schema`."""
    return from_openapi(json.loads(path.read_text(encoding="utf-8")))
