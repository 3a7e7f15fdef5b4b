# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the RouteDoc command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from routedoc.config import ConfigError, GeneratorConfig, load_config
from routedoc.generator.assembler import DocumentAssembler, GenerationResult
from routedoc.generator.serialize import serialize, write_document
from routedoc.model.loader import InputError, load_input

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the RouteDoc CLI."""
    parser = argparse.ArgumentParser(
        prog="routedoc",
        description="RouteDoc: OpenAPI documents from analysed routes and validation rules",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log per-route progress",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate an OpenAPI document",
        description="Assemble an OpenAPI document from an input bundle and write it as JSON or YAML.",
    )
    _add_common_arguments(generate_parser)
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file; '.yaml'/'.yml' selects YAML, anything else JSON (default: standard output)",
    )
    generate_parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default="json",
        help="Format used when writing to standard output (default: json)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check an input bundle for generation problems",
        description="Run the generator without writing output and report warnings and broken references.",
    )
    _add_common_arguments(check_parser)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", help="YAML or JSON file with routes and analyses")
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="YAML generator configuration file",
    )
    parser.add_argument(
        "--target-version",
        default=None,
        help="OpenAPI version to emit, overriding the configuration ('3.0.0' or '3.1.0')",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "check":
        return _cmd_check(args)
    return 0


def _run(args: argparse.Namespace) -> GenerationResult | None:
    """Load configuration and input, then generate. Prints the error and returns None on failure."""
    try:
        config = load_config(Path(args.config)) if args.config else GeneratorConfig()
        generation_input = load_input(Path(args.input))
    except (ConfigError, InputError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None
    if args.target_version is not None:
        config.target_version = args.target_version
    return DocumentAssembler(config).generate(generation_input)


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    result = _run(args)
    if result is None:
        return 1

    if args.output is None:
        sys.stdout.write(serialize(result.document, args.format))
        return 0

    output = Path(args.output)
    try:
        write_document(result.document, output)
    except OSError as exc:
        print(f"Error: cannot write '{output}': {exc}", file=sys.stderr)
        return 1
    print(f"Wrote {len(result.document.paths)} path(s) to '{output}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    result = _run(args)
    if result is None:
        return 1

    for name in result.broken_references:
        print(f"Error: schema '{name}' is referenced but never defined", file=sys.stderr)
    if result.broken_references:
        return 1

    if result.warnings:
        print(f"{len(result.warnings)} warning(s) found.")
    else:
        print("No issues found.")
    return 0
