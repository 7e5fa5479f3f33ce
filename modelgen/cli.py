"""
Command-line interface for model generation.

Reads a schema document, generates one Go file per table and runs gofmt
over the output directory.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import get_target
from .codegen.core import (
    ConfigError,
    FormatError,
    GenerationReport,
    GeneratorError,
    SECTION_NAMES,
    SchemaError,
    convert_introspection_output,
    generate_all,
    get_renderer,
    load_config,
    run_formatter,
    select_tables,
    validate_config,
)
from .codegen.languages.go import GoTypeMapper
from .logging_config import get_logger, setup_logging
from .utils import SchemaLoaderError, load_schema, load_schema_from_stream

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FORMAT_FAILED = 2


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="modelgen",
        description="Generate Go model structs from database table schemas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  modelgen schema.json --package models
  modelgen --url http://localhost:8000/schema.json --package models --tables user,books
  modelgen --stdin --package models --templates ./templates < schema.json
  modelgen --show-template struct
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Schema JSON file")
    input_group.add_argument("--url", help="URL to fetch the schema JSON from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the schema JSON from standard input"
    )

    gen_group = parser.add_argument_group("generation")
    gen_group.add_argument(
        "--package",
        "--pkg",
        dest="package_name",
        help="Go package name for the models (required unless set in --config)",
    )
    gen_group.add_argument(
        "--output-dir",
        metavar="DIR",
        help="Directory for generated files (default: the package name)",
    )
    gen_group.add_argument(
        "--tables", help='Only generate these tables, e.g. "user,books"'
    )
    gen_group.add_argument("--config", metavar="FILE", help="JSON configuration file")
    gen_group.add_argument(
        "--templates",
        metavar="DIR",
        dest="template_dir",
        help="Directory with header/struct/obj_api template overrides",
    )
    gen_group.add_argument(
        "--pk-policy",
        choices=["single", "strict", "last"],
        help="Handling of tables with several primary key columns",
    )
    gen_group.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first table that fails instead of collecting errors",
    )
    gen_group.add_argument(
        "--workers", type=int, help="Number of tables generated concurrently"
    )
    gen_group.add_argument(
        "--sql-types",
        action="store_true",
        help="Column data types are SQL types; map them to Go types",
    )
    gen_group.add_argument(
        "--no-format", action="store_true", help="Don't run gofmt on the output"
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--show-template",
        choices=SECTION_NAMES,
        metavar="SECTION",
        help=f"Print a built-in template and exit ({', '.join(SECTION_NAMES)})",
    )
    info_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )
    info_group.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose output (debug logging)"
    )
    info_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line interface.

    Returns:
        Exit code: 0 on success, 1 on generation errors, 2 when the
        formatter fails
    """
    args = create_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else args.log_level)

    try:
        if args.show_template:
            return _show_template(args.show_template)
        return _run_generation(args)
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return EXIT_ERROR
    except FormatError as e:
        console.print(f"[red]✗ Formatting failed:[/red] {e}")
        return EXIT_FORMAT_FAILED
    except GeneratorError as e:
        console.print(f"[red]✗ Generation failed:[/red] {e}")
        return EXIT_ERROR


def _show_template(section: str) -> int:
    """Print the built-in template of a section."""
    template = get_renderer("go").builtin_template(section)
    source = Path(template.filename).read_text(encoding="utf-8")
    console.print(
        Panel(
            Syntax(source, "jinja", theme="monokai"),
            title=f"📄 {section}",
            border_style="blue",
        )
    )
    return EXIT_OK


def _run_generation(args: argparse.Namespace) -> int:
    source, document = _load_input(args)
    db_name, db_schema = _convert(document, args)
    config = _build_config(args)

    for warning in validate_config(config):
        console.print(f"[yellow]⚠️  {warning}[/yellow]")

    console.print(f"📄 Loaded: {source} ({len(db_schema)} tables)")
    console.print(
        f"📦 Package: {config.package_identifier} → {config.destination}"
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(
            f"[green]Generating models into {config.destination}...", total=None
        )
        report = generate_all(db_name, db_schema, config)

    _print_report(report, verbose=args.verbose)

    if config.format_code and report.generated:
        command = config.format_command or get_target(config.language).format_command
        run_formatter(command, config.destination)
        console.print(f"[green]✓[/green] Formatted {config.destination}")

    return EXIT_OK if report.success else EXIT_ERROR


def _load_input(args: argparse.Namespace):
    """Load the schema document from the chosen input source."""
    try:
        if args.file:
            return load_schema(file_path=args.file)
        if args.url:
            return load_schema(url=args.url)
        if args.stdin:
            return load_schema_from_stream()
    except (SchemaLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e
    raise CLIError("Input source required (file, --url, or --stdin)")


def _convert(document, args: argparse.Namespace):
    """Turn the document into (db name, tables), applying --sql-types/--tables."""
    type_mapper = GoTypeMapper().map_type_name if args.sql_types else None
    try:
        db_name, db_schema = convert_introspection_output(document, type_mapper)
        if args.tables:
            db_schema = select_tables(db_schema, args.tables.split(","))
    except SchemaError as e:
        raise CLIError(f"Invalid schema: {e}") from e

    if not db_schema:
        raise CLIError("Schema contains no tables")
    return db_name, db_schema


def _build_config(args: argparse.Namespace):
    """Build configuration from the config file and CLI arguments."""
    if not args.package_name and not args.config:
        raise CLIError(
            "--package is required (or set package_name in a --config file)"
        )

    custom = {
        "package_name": args.package_name,
        "output_dir": args.output_dir,
        "template_dir": args.template_dir,
        "primary_key_policy": args.pk_policy,
        "workers": args.workers,
    }
    if args.fail_fast:
        custom["error_policy"] = "fail_fast"
    if args.no_format:
        custom["format_code"] = False

    try:
        return load_config(custom_config=custom, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _print_report(report: GenerationReport, verbose: bool = False) -> None:
    """Show generated files and failures."""
    table = Table(
        title=f"📊 Models for {report.db_name or 'schema'}",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Table", style="bold")
    table.add_column("Status")
    table.add_column("Output", style="dim")

    for table_name, path in report.generated.items():
        table.add_row(table_name, "[green]✓ generated[/green]", str(path))
    for error in report.errors:
        table.add_row(error.table_name, f"[red]✗ {error.phase}[/red]", error.message)

    if verbose or report.errors:
        console.print(table)

    if report.errors:
        console.print(
            f"[red]✗ {len(report.errors)} of {report.table_count} tables failed[/red]"
        )
    else:
        console.print(
            f"[green]✓[/green] Generated {len(report.generated)} model file(s)"
        )


if __name__ == "__main__":
    sys.exit(main())
