"""CLI entrypoints for myragen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Sequence

from .config import (
    CONFIG_FILENAME,
    NAMESPACE_KEY,
    XML_DIRECTORY_KEY,
    ConfigError,
    ConfigResolver,
    ProjectConfig,
    load_config,
)
from .logging import configure_logging
from .models import CandidateInput, GenerationResult
from .orchestrator import Orchestrator
from .output import write_units
from .scanner import ProjectScanner
from .selector import DocumentSelector

DEFAULT_OUTPUT_DIR = "Generated"


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_project_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .myragen.yml file (defaults to <path>/.myragen.yml).",
    )
    parser.add_argument(
        "--namespace",
        default=None,
        help="Namespace for generated classes (overrides every other source).",
    )
    parser.add_argument(
        "--xml-directory",
        default=None,
        help="Directory pattern that layout documents must contain.",
    )
    parser.add_argument(
        "-p",
        "--property",
        dest="properties",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Build property, e.g. -p MyraUIGenerator_namespace=MyGame.UI (repeatable).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="myragen",
        description="Generate typed C# accessors from Myra UI layout documents.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate accessor classes for every matching layout document.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_project_options(generate_parser)
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help=f"Directory for generated files (defaults to <path>/{DEFAULT_OUTPUT_DIR}).",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be generated without writing files.",
    )
    generate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with a failure status when any warning is reported.",
    )
    generate_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write every diagnostic, including informational ones, to this file.",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List the layout documents that would be processed.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_project_options(list_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP generation service (requires the service extra).",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def _parse_properties(values: Sequence[str]) -> Dict[str, str]:
    properties: Dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition("=")
        if not sep or not name.strip():
            raise ConfigError(f"Invalid build property '{raw}'; expected NAME=VALUE")
        properties[name.strip()] = value
    return properties


def _load_project(args: argparse.Namespace) -> tuple[ProjectConfig, List[CandidateInput]]:
    root = Path(args.path)
    config_path = Path(args.config) if args.config else root / CONFIG_FILENAME
    project = load_config(config_path)
    options = project.options.with_build_properties(_parse_properties(args.properties))
    project.options = options.with_global_options(
        {NAMESPACE_KEY: args.namespace, XML_DIRECTORY_KEY: args.xml_directory}
    )
    inputs = ProjectScanner().scan(root, project.exclude_paths)
    return project, inputs


def _exit_code(result: GenerationResult, *, strict: bool) -> int:
    if result.has_errors:
        return 1
    if strict and result.has_warnings:
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for myragen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = getattr(args, "log_file", None)
    configure_logging(verbose=bool(args.verbose), log_file=Path(log_file) if log_file else None)

    if args.command == "serve":
        from .service.app import run_service

        run_service(host=args.host, port=args.port)
        return

    try:
        project, inputs = _load_project(args)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"myragen: {exc}\n")

    if args.command == "list":
        try:
            config = ConfigResolver(project.options).resolve(inputs)
        except ConfigError as exc:
            parser.exit(1, f"myragen: {exc}\n")
        for document in DocumentSelector().select(inputs, config.directory_pattern):
            print(document.path)
        return

    result = Orchestrator(project.options).run(inputs)

    if args.output:
        output_dir = Path(args.output)
    else:
        output_dir = project.output_dir or Path(args.path) / DEFAULT_OUTPUT_DIR
    dry_run = bool(getattr(args, "dry_run", False))
    written = write_units(result.units, output_dir, dry_run=dry_run)

    summary = f"Generated {len(written)} file(s) in {_relativize(output_dir)}"
    if dry_run:
        summary += " (dry-run)"
    print(summary)

    code = _exit_code(result, strict=bool(getattr(args, "strict", False)))
    if code:
        parser.exit(code, "myragen generate reported problems; run with --verbose for details.\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
