# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Options that tune how types are turned into schemas."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from openapi_reflect.introspection.classifier import DEFAULT_SCALARS, ScalarKind

# ###############
# Public Interface
# ###############


class MapStyle(Enum):
    """How a mapping type is rendered as an object schema."""

    # Object("map", [Property(<key type name>, <value schema>)])
    LABEL = "label"
    # Object("map", [Property("key", <key schema>), Property("value", <value schema>)])
    KEY_VALUE = "key-value"


@dataclass(frozen=True)
class IntrospectionOptions:
    """Settings for one introspection call.

    Attributes:
        scalars: Scalar table, keyed by qualified class name.
        include_deferred: Emit deferred properties instead of skipping them.
        map_style: Rendering of mapping types.
    """

    scalars: Mapping[str, ScalarKind] = field(default_factory=lambda: DEFAULT_SCALARS)
    include_deferred: bool = False
    map_style: MapStyle = MapStyle.LABEL
