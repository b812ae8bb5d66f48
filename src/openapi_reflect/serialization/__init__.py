# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""OpenAPI JSON rendering of schema trees."""

from openapi_reflect.serialization.openapi import (
    dumps,
    from_openapi,
    read_schema,
    to_openapi,
    write_schema,
)

__all__ = [
    "to_openapi",
    "from_openapi",
    "dumps",
    "write_schema",
    "read_schema",
]
