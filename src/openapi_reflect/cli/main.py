# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the openapi-reflect command-line interface."""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import Any

from yachalk import chalk

from openapi_reflect.config.settings import ConfigError, find_config, load_config
from openapi_reflect.introspection.errors import IntrospectionError
from openapi_reflect.introspection.introspector import object_schema, type_schema
from openapi_reflect.introspection.options import IntrospectionOptions
from openapi_reflect.model.types import Schema
from openapi_reflect.serialization.openapi import dumps, read_schema, write_schema

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the openapi-reflect CLI."""
    parser = argparse.ArgumentParser(
        prog="openapi-reflect",
        description="openapi-reflect - OpenAPI schemas from Python type annotations",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each introspection step to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # schema subcommand
    schema_parser = subparsers.add_parser(
        "schema",
        help="Print the OpenAPI schema of a type",
        description="Introspect a type and print its OpenAPI schema as JSON.",
    )
    _add_target_arguments(schema_parser)
    schema_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Indentation of the JSON output (default: 2)",
    )
    schema_parser.add_argument(
        "--output",
        help="Write the schema to this file instead of standard output",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check a published schema against the current type",
        description="Exit with an error when the schema of a type differs from a saved JSON schema.",
    )
    _add_target_arguments(check_parser)
    check_parser.add_argument(
        "file",
        help="Previously written JSON schema to compare against",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


class _TargetError(Exception):
    """Raised when a ``module:attribute`` target cannot be loaded."""


def _add_target_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "target",
        help="Type to introspect, as 'package.module:Attribute'",
    )
    parser.add_argument(
        "--object",
        metavar="NAME",
        help="Require an object type and title its schema NAME",
    )
    parser.add_argument(
        "--config",
        help="Configuration file (default: .openapi-reflect.yaml in the current directory, if present)",
    )
    parser.add_argument(
        "--app-dir",
        default=".",
        help="Directory to put on the import path before loading the target (default: current directory)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "schema":
        return _cmd_schema(args)
    if args.command == "check":
        return _cmd_check(args)
    return 0


def _cmd_schema(args: argparse.Namespace) -> int:
    """Handle the schema subcommand."""
    try:
        schema = _build_schema(args)
    except (ConfigError, IntrospectionError, _TargetError) as exc:
        _print_error(str(exc))
        return 1

    if args.output is None:
        print(dumps(schema, indent=args.indent))
        return 0

    output = Path(args.output)
    try:
        write_schema(schema, output)
    except OSError as exc:
        _print_error(f"cannot write '{output}': {exc}")
        return 1
    print(f"Schema written to '{output}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    path = Path(args.file)
    if not path.exists():
        _print_error(f"schema file '{path}' does not exist.")
        return 1

    try:
        expected = read_schema(path)
    except (OSError, ValueError, KeyError) as exc:
        _print_error(f"cannot read schema file '{path}': {exc}")
        return 1

    try:
        actual = _build_schema(args)
    except (ConfigError, IntrospectionError, _TargetError) as exc:
        _print_error(str(exc))
        return 1

    if actual != expected:
        _print_error(f"schema of '{args.target}' differs from '{path}'.")
        return 1

    print(chalk.green(f"Schema of '{args.target}' is up to date."))
    return 0


def _build_schema(args: argparse.Namespace) -> Schema:
    """Load options and the target type, then introspect it."""
    options = _load_options(args.config)
    target = _load_target(args.target, Path(args.app_dir))
    if args.object is not None:
        return object_schema(args.object, target, options=options)
    return type_schema(target, options=options)


def _load_options(config: str | None) -> IntrospectionOptions:
    """Read options from *config*, or from the working directory's config file."""
    if config is not None:
        return load_config(Path(config))
    found = find_config(Path.cwd())
    if found is None:
        return IntrospectionOptions()
    return load_config(found)


def _load_target(target: str, app_dir: Path) -> Any:
    """Import the object named by ``package.module:Attribute``."""
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise _TargetError(f"target '{target}' must have the form 'package.module:Attribute'")

    search_path = str(app_dir.resolve())
    if search_path not in sys.path:
        sys.path.insert(0, search_path)

    try:
        value: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise _TargetError(f"cannot import module '{module_name}': {exc}") from exc

    for part in attribute.split("."):
        try:
            value = getattr(value, part)
        except AttributeError:
            raise _TargetError(f"'{module_name}' has no attribute '{attribute}'") from None
    return value


def _print_error(message: str) -> None:
    print(chalk.red(f"Error: {message}"), file=sys.stderr)
