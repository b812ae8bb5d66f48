# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema type model produced by the introspector."""

from openapi_reflect.model.types import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    Property,
    Schema,
    StringSchema,
)

__all__ = [
    "ObjectSchema",
    "ArraySchema",
    "StringSchema",
    "NumberSchema",
    "BooleanSchema",
    "Property",
    "Schema",
]
