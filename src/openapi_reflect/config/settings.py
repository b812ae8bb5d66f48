# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML configuration file for introspection options."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import TypeVar

import yaml

from openapi_reflect.introspection.classifier import DEFAULT_SCALARS, ScalarKind
from openapi_reflect.introspection.options import IntrospectionOptions, MapStyle

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".openapi-reflect.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


def load_config(path: Path) -> IntrospectionOptions:
    """Load introspection options from a YAML configuration file.

    Args:
        path: Path to the ``.openapi-reflect.yaml`` file.

    Returns:
        The options described by the file. Scalar mappings from the file
        extend the built-in scalar table and take precedence over it.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


def find_config(directory: Path) -> Path | None:
    """Return the configuration file in *directory*, if there is one."""
    candidate = directory / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


# ################
# Implementation
# ################

_E = TypeVar("_E", bound=Enum)

_KNOWN_FIELDS = frozenset({"scalars", "include-deferred", "map-style"})


def _parse_config(text: str, source_label: str = "<string>") -> IntrospectionOptions:
    """Parse configuration YAML text into IntrospectionOptions.

    An empty document yields the default options.

    Raises:
        ConfigError: If the YAML is invalid or a field has the wrong shape.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_FIELDS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown field(s): {', '.join(unknown)}")

    scalars = dict(DEFAULT_SCALARS)
    if "scalars" in data:
        scalars.update(_parse_scalars(data["scalars"], source_label))

    include_deferred = data.get("include-deferred", False)
    if not isinstance(include_deferred, bool):
        raise ConfigError(f"{source_label}: 'include-deferred' must be true or false")

    map_style = _parse_choice(data.get("map-style", MapStyle.LABEL.value), MapStyle, "map-style", source_label)

    return IntrospectionOptions(
        scalars=MappingProxyType(scalars),
        include_deferred=include_deferred,
        map_style=map_style,
    )


def _parse_scalars(raw: object, source_label: str) -> dict[str, ScalarKind]:
    """Parse the ``scalars`` mapping of qualified class names to scalar kinds."""
    if not isinstance(raw, dict):
        raise ConfigError(f"{source_label}: 'scalars' must be a mapping")
    scalars: dict[str, ScalarKind] = {}
    for name, kind in raw.items():
        if not isinstance(name, str) or "." not in name:
            raise ConfigError(f"{source_label}: scalars key {name!r} must be a qualified class name")
        scalars[name] = _parse_choice(kind, ScalarKind, f"scalars.{name}", source_label)
    return scalars


def _parse_choice(value: object, choices: type[_E], key: str, source_label: str) -> _E:
    """Convert *value* to a member of the enum *choices*."""
    try:
        return choices(value)
    except (TypeError, ValueError):
        allowed = ", ".join(member.value for member in choices)
        raise ConfigError(f"{source_label}: '{key}' must be one of: {allowed}") from None
