"""CLI module for schema dump and structural diff.

Provides commands to render a schema snapshot as DDL, compare two
snapshots, and list configured snapshot profiles.

Usage:
    sqlpulse profiles
    sqlpulse dump --source dev --output dev.sql
    sqlpulse dump --source live.json --format json --output dev.json
    sqlpulse diff --source dev --target prod
    sqlpulse diff --source dev.json --target prod.json --format full \
        --generate-migration --migration-file migrate.sql

Commands:
    diff      - Compare source and target schemas
    dump      - Export a schema as a DDL script or JSON snapshot
    profiles  - List snapshot profiles from sqlpulse.toml

``--source``/``--target`` accept either a snapshot file path or a profile
name from sqlpulse.toml.
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from sqlpulse.config.loader import ConfigurationError, load_config, resolve_snapshot
from sqlpulse.config.models import DiffOptions, SqlPulseConfig
from sqlpulse.diff.comparator import compare_schemas
from sqlpulse.diff.models import DiffKind, DiffResult
from sqlpulse.diff.report import (
    format_git_style,
    format_summary,
    generate_migration_script,
)
from sqlpulse.extract.base import ExtractionError, extract_side
from sqlpulse.extract.snapshot import SnapshotExtractor, save_snapshot
from sqlpulse.schema.ddl import count_objects, generate_ddl_export

console = Console()
err_console = Console(stderr=True)

_KIND_STYLES = {
    DiffKind.ADDED: "green",
    DiffKind.REMOVED: "red",
    DiffKind.MODIFIED: "yellow",
}

# --no-* flag dest -> DiffOptions field
_EXCLUDE_FLAGS = {
    "no_tables": "include_tables",
    "no_views": "include_views",
    "no_procedures": "include_procedures",
    "no_functions": "include_functions",
    "no_triggers": "include_triggers",
    "no_indexes": "include_indexes",
    "no_foreign_keys": "include_foreign_keys",
    "no_constraints": "include_constraints",
}


# ============================================================================
# Helpers
# ============================================================================


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


def _print_plain(text: str) -> None:
    """Print machine-readable text (SQL, JSON) without rich markup."""
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _load_config(args: argparse.Namespace) -> SqlPulseConfig:
    config_path = Path(args.config) if args.config else None
    return load_config(config_path)


def _build_options(base: DiffOptions, args: argparse.Namespace) -> DiffOptions:
    """Apply command-line overrides on top of the config file's options."""
    update: dict[str, object] = {}

    for flag, field in _EXCLUDE_FLAGS.items():
        if getattr(args, flag, False):
            update[field] = False

    if args.schema:
        update["schema_filter"] = tuple(args.schema)
    if args.table:
        update["table_filter"] = tuple(args.table)

    if getattr(args, "ignore_collation", False):
        update["ignore_collation"] = True
    if getattr(args, "strict_whitespace", False):
        update["ignore_whitespace"] = False

    return base.model_copy(update=update)


def _print_git_style(result: DiffResult) -> None:
    console.print(
        f"diff --sqlpulse a/{result.source_database} b/{result.target_database}",
        style="bold",
        markup=False,
        highlight=False,
    )
    console.print(f"--- a/{result.source_database}", markup=False, highlight=False)
    console.print(f"+++ b/{result.target_database}", markup=False, highlight=False)

    for category, diffs in result.grouped_by_category():
        console.print()
        console.print(f"@@ {category} @@", style="cyan", markup=False, highlight=False)
        for d in diffs:
            line = Text.assemble(
                (d.kind.marker, _KIND_STYLES[d.kind]),
                f" [{d.category}] {d.object_name}: {d.description}",
            )
            console.print(line, soft_wrap=True)


def _print_summary(result: DiffResult) -> None:
    summary = result.summary

    table = Table(
        title=f"Diff Summary: {result.source_database} -> {result.target_database}",
        show_header=False,
    )
    table.add_column("Key", style="dim")
    table.add_column("Value", justify="right")

    table.add_row("Total differences", str(summary.total_differences))
    table.add_row("[green]+ Added[/green] (in target only)", str(summary.added))
    table.add_row("[red]- Removed[/red] (in source only)", str(summary.removed))
    table.add_row("[yellow]~ Modified[/yellow]", str(summary.modified))
    console.print(table)

    if summary.by_category:
        cat_table = Table(title="By Category", show_header=True, header_style="bold")
        cat_table.add_column("Category")
        cat_table.add_column("Count", justify="right")
        for category, count in summary.by_category.items():
            cat_table.add_row(str(category), str(count))
        console.print(cat_table)


# ============================================================================
# Command implementations
# ============================================================================


def cmd_diff(args: argparse.Namespace) -> int:
    """Compare source and target schemas.

    Args:
        args: Parsed arguments with source, target, format, filter flags,
            migration and report options.

    Returns:
        0 on success (including identical schemas), 1 on failure.
    """
    try:
        config = _load_config(args)
        options = _build_options(config.diff, args)
        source_path = resolve_snapshot(config, args.source, "source")
        target_path = resolve_snapshot(config, args.target, "target")
    except (FileNotFoundError, ConfigurationError) as e:
        err_console.print(
            f"[bold red]x[/bold red] Configuration error: {escape(str(e))}", highlight=False
        )
        return 1

    dump_options = options.to_dump_options()
    try:
        err_console.print(f"Extracting source schema from {source_path}...", style="dim")
        source = extract_side("source", SnapshotExtractor(source_path), dump_options)
        err_console.print(f"Extracting target schema from {target_path}...", style="dim")
        target = extract_side("target", SnapshotExtractor(target_path), dump_options)
    except ExtractionError as e:
        err_console.print(f"[bold red]x[/bold red] {escape(str(e))}", highlight=False)
        return 1

    err_console.print("Comparing schemas...", style="dim")
    result = compare_schemas(source, target, options)

    if not result.has_differences:
        console.print("[bold green]v[/bold green] Schemas are identical")
        return 0

    if args.format in ("git", "full"):
        _print_git_style(result)
    if args.format == "full":
        console.print()
    if args.format in ("summary", "full"):
        _print_summary(result)

    if args.report_file:
        report = format_git_style(result)
        if args.format == "summary":
            report = format_summary(result)
        elif args.format == "full":
            report += "\n" + format_summary(result)
        Path(args.report_file).write_text(report, encoding="utf-8")
        err_console.print(
            f"[green]v[/green] Report written to {args.report_file}", highlight=False
        )

    if args.generate_migration:
        migration = generate_migration_script(result)
        if args.migration_file:
            Path(args.migration_file).write_text(migration, encoding="utf-8")
            err_console.print(
                f"[green]v[/green] Migration script written to {args.migration_file}",
                highlight=False,
            )
        else:
            console.print()
            _print_plain(migration)

    return 0


def cmd_dump(args: argparse.Namespace) -> int:
    """Export a schema as a DDL script or a JSON snapshot.

    Args:
        args: Parsed arguments with source, output, format and filter flags.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        config = _load_config(args)
        options = _build_options(config.diff, args).to_dump_options()
        options = options.model_copy(update={"output_format": args.format})
        source_path = resolve_snapshot(config, args.source, "source")
    except (FileNotFoundError, ConfigurationError) as e:
        err_console.print(
            f"[bold red]x[/bold red] Configuration error: {escape(str(e))}", highlight=False
        )
        return 1

    try:
        schema = extract_side("source", SnapshotExtractor(source_path), options)
    except ExtractionError as e:
        err_console.print(f"[bold red]x[/bold red] {escape(str(e))}", highlight=False)
        return 1

    if options.output_format == "json":
        if args.output:
            save_snapshot(schema, args.output)
        else:
            _print_plain(schema.model_dump_json(indent=2))
    else:
        ddl = generate_ddl_export(schema, options)
        if args.output:
            Path(args.output).write_text(ddl, encoding="utf-8")
        else:
            _print_plain(ddl)

    if args.output:
        err_console.print(f"[green]v[/green] Written to {args.output}", highlight=False)

    table = Table(title="Extraction Summary", show_header=False)
    table.add_column("Object", style="dim")
    table.add_column("Count", justify="right")
    for name, count in count_objects(schema).items():
        table.add_row(name, str(count))
    err_console.print(table)

    return 0


def cmd_profiles(args: argparse.Namespace) -> int:
    """List snapshot profiles from sqlpulse.toml.

    Returns:
        0 on success, 1 if the config file can't be read.
    """
    try:
        config = _load_config(args)
    except (FileNotFoundError, ConfigurationError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False)
        return 1

    if not config.profiles:
        console.print("[yellow]No profiles configured.[/yellow]")
        return 0

    table = Table(title="Snapshot Profiles", show_header=True, header_style="bold")
    table.add_column("Profile", style="bold cyan")
    table.add_column("Snapshot")
    table.add_column("Description")

    for name, profile in config.profiles.items():
        table.add_row(name, str(profile.snapshot), profile.description)

    console.print(table)
    return 0


# ============================================================================
# Main entry point
# ============================================================================


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    """Category toggles and name filters shared by dump and diff."""
    for flag in _EXCLUDE_FLAGS:
        label = flag.removeprefix("no_").replace("_", " ")
        parser.add_argument(
            f"--{flag.replace('_', '-')}",
            action="store_true",
            help=f"Exclude {label}",
        )
    parser.add_argument(
        "--schema",
        action="append",
        default=[],
        help="Only include this schema (repeatable)",
    )
    parser.add_argument(
        "--table",
        action="append",
        default=[],
        help="Only include this table (repeatable)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlpulse",
        description="Database schema dump and structural diff",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to sqlpulse.toml (default: ./sqlpulse.toml if present)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # diff command
    p_diff = subparsers.add_parser(
        "diff",
        help="Compare source and target schemas",
    )
    p_diff.add_argument(
        "--source",
        "-s",
        required=True,
        help="Source snapshot file or profile name",
    )
    p_diff.add_argument(
        "--target",
        "-t",
        default=None,
        help="Target snapshot file or profile name (required)",
    )
    p_diff.add_argument(
        "--format",
        choices=["git", "summary", "full"],
        default="git",
        help="Output format",
    )
    p_diff.add_argument(
        "--ignore-collation",
        action="store_true",
        help="Ignore collation differences",
    )
    p_diff.add_argument(
        "--strict-whitespace",
        action="store_true",
        help="Compare object definitions without normalizing whitespace",
    )
    p_diff.add_argument(
        "--generate-migration",
        action="store_true",
        help="Generate a migration SQL script",
    )
    p_diff.add_argument(
        "--migration-file",
        default=None,
        help="Output file for the migration script (default: stdout)",
    )
    p_diff.add_argument(
        "--report-file",
        default=None,
        help="Also write the plain-text report to this file",
    )
    _add_filter_arguments(p_diff)
    p_diff.set_defaults(func=cmd_diff)

    # dump command
    p_dump = subparsers.add_parser(
        "dump",
        help="Export a schema as DDL or a JSON snapshot",
    )
    p_dump.add_argument(
        "--source",
        "-s",
        required=True,
        help="Snapshot file or profile name",
    )
    p_dump.add_argument(
        "--output",
        "-o",
        default=None,
        help="Output file (default: stdout)",
    )
    p_dump.add_argument(
        "--format",
        choices=["sql", "json"],
        default="sql",
        help="Output format",
    )
    _add_filter_arguments(p_dump)
    p_dump.set_defaults(func=cmd_dump)

    # profiles command
    p_profiles = subparsers.add_parser(
        "profiles",
        help="List snapshot profiles",
    )
    p_profiles.set_defaults(func=cmd_profiles)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Parses command line arguments and dispatches to the command handler.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
