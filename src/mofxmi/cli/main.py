# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the mofxmi command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from mofxmi.config import CONFIG_FILE_NAME, ParserConfig, ParserConfigError, load_parser_config, save_parser_config
from mofxmi.model.artifact import artifact_path, serialize, write_artifact
from mofxmi.parser import ParseOptions, XmiParseError, parse_file
from mofxmi.utils import configure_logging
from mofxmi.validation import validate

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the mofxmi CLI."""
    parser = argparse.ArgumentParser(
        prog="mofxmi",
        description="mofxmi - MOF/UML XMI metamodel parser",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Create a parser configuration file",
        description=f"Write a starter {CONFIG_FILE_NAME} to a directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to create the configuration in (default: current directory)",
    )

    # parse subcommand
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse an XMI document into a JSON artifact",
        description="Parse an XMI metamodel document and print or write its element model as JSON.",
    )
    parse_parser.add_argument("file", help="XMI or CMOF document to parse")
    _add_config_arguments(parse_parser)
    parse_parser.add_argument("--output", "-o", help="Write the artifact to this path instead of stdout")
    parse_parser.add_argument("--indent", type=int, default=None, help="Pretty-print the JSON with this indent")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check metamodel documents for consistency",
        description="Parse XMI documents and report unresolved references and inheritance cycles.",
    )
    check_parser.add_argument("files", nargs="+", help="XMI or CMOF documents to check")
    _add_config_arguments(check_parser)
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings (such as unresolved references) as failures",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_config_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--config",
        help=f"Parser configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )
    subparser.add_argument("--clean", action="store_true", help="Strip bookkeeping fields from elements")
    subparser.add_argument("--lenient", action="store_true", help="Recover from malformed markup")
    subparser.add_argument(
        "--prefix-namespace",
        action="append",
        default=[],
        metavar="RAW=PREFIX",
        help="Map a raw namespace or file prefix to a canonical prefix (repeatable)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "parse":
        return _cmd_parse(args)
    if args.command == "check":
        return _cmd_check(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME

    if config_file.exists():
        print(f"Error: configuration already exists at '{config_file}'.", file=sys.stderr)
        return 1

    config = ParserConfig(clean=True, strict=True, prefix_namespaces={}, output_directory="build")
    try:
        save_parser_config(config, config_file)
    except ParserConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Initialized parser configuration at '{config_file}'.")
    return 0


def _cmd_parse(args: argparse.Namespace) -> int:
    """Handle the parse subcommand."""
    source = Path(args.file).resolve()
    try:
        config, config_dir = _load_config(args)
        options = _parse_options(config, args)
    except (ParserConfigError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        model = parse_file(source, options)
    except OSError as exc:
        print(f"Error: cannot read '{source}': {exc}", file=sys.stderr)
        return 1
    except XmiParseError as exc:
        print(f"Error: parse error in '{source}': {exc}", file=sys.stderr)
        return 1

    output: Path | None = None
    if args.output:
        output = Path(args.output)
    elif config.output_directory is not None:
        output = artifact_path(source, config_dir / config.output_directory)

    if output is None:
        print(serialize(model, indent=args.indent))
        return 0

    try:
        write_artifact(model, output, indent=args.indent)
    except OSError as exc:
        print(f"Error: cannot write '{output}': {exc}", file=sys.stderr)
        return 1
    print(f"Wrote {len(model.elements_by_id)} element(s) to '{output}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    try:
        config, _ = _load_config(args)
        options = _parse_options(config, args)
    except (ParserConfigError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Checking {len(args.files)} metamodel document(s)...")
    has_errors = False
    has_warnings = False
    for name in args.files:
        source = Path(name).resolve()
        try:
            model = parse_file(source, options)
        except OSError as exc:
            print(f"Error: cannot read '{source}': {exc}", file=sys.stderr)
            has_errors = True
            continue
        except XmiParseError as exc:
            print(f"Error: parse error in '{source}': {exc}", file=sys.stderr)
            has_errors = True
            continue

        result = validate(model)
        for warning in result.warnings:
            print(f"Warning: {source.name}: {warning.message}")
            has_warnings = True
        for error in result.errors:
            print(f"Error: {source.name}: {error.message}", file=sys.stderr)
            has_errors = True

    if has_errors or (args.strict and has_warnings):
        return 1

    print("No issues found." if not has_warnings else "No errors found.")
    return 0


def _load_config(args: argparse.Namespace) -> tuple[ParserConfig, Path]:
    """Return the configuration to use and the directory it was loaded from."""
    if args.config:
        path = Path(args.config).resolve()
        return load_parser_config(path), path.parent
    default = Path.cwd() / CONFIG_FILE_NAME
    if default.exists():
        return load_parser_config(default), default.parent
    return ParserConfig(), Path.cwd()


def _parse_options(config: ParserConfig, args: argparse.Namespace) -> ParseOptions:
    """Apply command-line flags on top of the configured options.

    Raises:
        ValueError: If a ``--prefix-namespace`` value is not of the form ``RAW=PREFIX``.
    """
    prefix_namespaces = dict(config.prefix_namespaces) if config.prefix_namespaces is not None else None
    for mapping in args.prefix_namespace:
        raw, sep, prefix = mapping.partition("=")
        if not sep or not raw or not prefix:
            raise ValueError(f"invalid --prefix-namespace '{mapping}': expected RAW=PREFIX")
        prefix_namespaces = prefix_namespaces or {}
        prefix_namespaces[raw] = prefix
    return ParseOptions(
        clean=config.clean or args.clean,
        strict=config.strict and not args.lenient,
        prefix_namespaces=prefix_namespaces,
    )
