# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests demonstrating how schema trees are constructed and compared."""

import pytest
from pydantic import TypeAdapter, ValidationError

from openapi_reflect.model import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    Property,
    Schema,
    StringSchema,
)


def test_scalar_defaults_are_not_nullable() -> None:
    """Scalar nodes default to non-nullable and carry no enum values."""
    assert StringSchema().nullable is False
    assert StringSchema().enum_values is None
    assert NumberSchema().nullable is False
    assert BooleanSchema().nullable is False


def test_enum_string_keeps_value_order() -> None:
    """Enumeration values keep their declaration order."""
    schema = StringSchema(enum_values=("PENDING", "SHIPPED", "DELIVERED"))
    assert schema.enum_values == ("PENDING", "SHIPPED", "DELIVERED")


def test_object_with_properties() -> None:
    """An object schema holds named properties in order."""
    person = ObjectSchema(
        name="Person",
        properties=(
            Property(name="name", type=StringSchema()),
            Property(name="age", type=NumberSchema()),
        ),
        qualified_name="app.models.Person",
    )
    assert [p.name for p in person.properties] == ["name", "age"]
    assert isinstance(person.properties[1].type, NumberSchema)
    assert person.qualified_name == "app.models.Person"
    assert person.nullable is False


def test_array_wraps_element() -> None:
    """An array schema wraps the schema of its element."""
    array = ArraySchema(element=NumberSchema(nullable=True), nullable=True)
    assert array.element == NumberSchema(nullable=True)
    assert array.nullable is True


def test_structural_equality() -> None:
    """Two independently built trees with the same shape are equal."""

    def build() -> ObjectSchema:
        return ObjectSchema(
            name="Order",
            properties=(Property(name="items", type=ArraySchema(element=StringSchema())),),
        )

    assert build() == build()
    assert build() != build().model_copy(update={"name": "Invoice"})


def test_nodes_are_immutable() -> None:
    """Schema nodes reject attribute assignment."""
    schema = NumberSchema()
    with pytest.raises(ValidationError):
        schema.nullable = True  # type: ignore[misc]


def test_list_input_is_stored_as_tuple() -> None:
    """Property sequences are stored as tuples so a tree cannot be mutated."""
    schema = ObjectSchema(name="Empty", properties=[])  # type: ignore[arg-type]
    assert schema.properties == ()


def test_discriminated_union_validation() -> None:
    """The kind field selects the node variant when validating raw data."""
    adapter = TypeAdapter(Schema)
    node = adapter.validate_python({"kind": "array", "element": {"kind": "boolean", "nullable": True}})
    assert node == ArraySchema(element=BooleanSchema(nullable=True))


def test_unknown_kind_is_rejected() -> None:
    """An unknown kind fails validation."""
    with pytest.raises(ValidationError):
        TypeAdapter(Schema).validate_python({"kind": "integer"})
