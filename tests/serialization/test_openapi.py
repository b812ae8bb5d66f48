# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for rendering schema trees as OpenAPI schema objects."""

import json
from pathlib import Path

import pytest

from openapi_reflect.model import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    Property,
    StringSchema,
)
from openapi_reflect.serialization import dumps, from_openapi, read_schema, to_openapi, write_schema

# ###############
# Helpers
# ###############


def _person() -> ObjectSchema:
    return ObjectSchema(
        name="Person",
        properties=(
            Property(name="name", type=StringSchema()),
            Property(name="age", type=NumberSchema(nullable=True)),
            Property(name="active", type=BooleanSchema()),
            Property(name="roles", type=ArraySchema(element=StringSchema(enum_values=("ADMIN", "USER")))),
        ),
        qualified_name="app.models.Person",
    )


# ###############
# Encoding
# ###############


def test_encode_object() -> None:
    """Objects encode their title, properties and qualified name."""
    assert to_openapi(_person()) == {
        "type": "object",
        "title": "Person",
        "properties": {
            "name": {"type": "string"},
            "age": {"type": "number", "nullable": True},
            "active": {"type": "boolean"},
            "roles": {"type": "array", "items": {"type": "string", "enum": ["ADMIN", "USER"]}},
        },
        "x-qualified-name": "app.models.Person",
    }


def test_map_object_has_no_qualified_name() -> None:
    """Map objects have no source type and omit the extension."""
    schema = ObjectSchema(name="map", properties=(Property(name="str", type=NumberSchema()),), nullable=True)
    assert to_openapi(schema) == {
        "type": "object",
        "title": "map",
        "properties": {"str": {"type": "number"}},
        "nullable": True,
    }


def test_dumps_is_json() -> None:
    """dumps produces JSON text of the encoded tree."""
    text = dumps(ArraySchema(element=BooleanSchema(), nullable=True), indent=2)
    assert json.loads(text) == {"type": "array", "items": {"type": "boolean"}, "nullable": True}
    assert "\n" in text
    assert "\n" not in dumps(NumberSchema())


# ###############
# Decoding
# ###############


def test_decode_restores_tree() -> None:
    """Decoding an encoded tree gives back an equal tree."""
    assert from_openapi(to_openapi(_person())) == _person()


def test_decode_unknown_type() -> None:
    """Unknown type values are rejected."""
    with pytest.raises(ValueError, match="Unknown schema type: 'integer'"):
        from_openapi({"type": "integer"})


def test_decode_missing_type() -> None:
    """A schema object without a type is rejected."""
    with pytest.raises(ValueError, match="Unknown schema type: None"):
        from_openapi({"title": "Person"})


@pytest.mark.parametrize(
    "obj, message",
    [
        ([], "Schema object must be a JSON object, got list"),
        ({"type": "object", "title": "Person", "properties": []}, "'properties' must be a JSON object"),
        ({"type": "array", "items": "string"}, "Schema object must be a JSON object, got str"),
        ({"type": "string", "enum": "ADMIN"}, "'enum' must be a JSON array"),
    ],
)
def test_decode_malformed_shape(obj: object, message: str) -> None:
    """Values of the wrong JSON shape are rejected."""
    with pytest.raises(ValueError, match=message):
        from_openapi(obj)  # type: ignore[arg-type]


# ###############
# Files
# ###############


def test_write_and_read(tmp_path: Path) -> None:
    """Written schema files can be read back, creating directories as needed."""
    path = tmp_path / "schemas" / "person.json"
    write_schema(_person(), path)
    assert path.read_text(encoding="utf-8").endswith("}\n")
    assert read_schema(path) == _person()
