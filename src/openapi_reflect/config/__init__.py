# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration file support for openapi-reflect."""

from openapi_reflect.config.settings import (
    CONFIG_FILE_NAME,
    ConfigError,
    find_config,
    load_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "find_config",
    "load_config",
]
