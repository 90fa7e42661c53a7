"""sqlpulse: structural schema dump and diff for relational databases.

Models a database's tables, columns, indexes, keys, constraints, views,
routines and triggers; renders them as DDL; and compares two schema
snapshots into a categorized difference set plus a migration script.

Usage:
    from sqlpulse import DatabaseSchema, DiffOptions, compare_schemas
    from sqlpulse import format_git_style, generate_migration_script
    from sqlpulse import SnapshotExtractor, load_config
"""

__version__ = "0.1.0"

# Schema model and rendering
from sqlpulse.schema.ddl import generate_ddl_export, render_sql
from sqlpulse.schema.models import DatabaseSchema

# Config
from sqlpulse.config.loader import ConfigurationError, load_config
from sqlpulse.config.models import DiffOptions, DumpOptions

# Diff
from sqlpulse.diff.comparator import SchemaComparator, compare_schemas
from sqlpulse.diff.models import DiffCategory, DiffKind, DiffResult, Difference
from sqlpulse.diff.report import (
    format_git_style,
    format_summary,
    generate_migration_script,
)

# Extraction
from sqlpulse.extract.base import ExtractionError, SchemaExtractor
from sqlpulse.extract.snapshot import SnapshotExtractor

__all__ = [
    # Schema
    "DatabaseSchema",
    "render_sql",
    "generate_ddl_export",
    # Config
    "load_config",
    "ConfigurationError",
    "DiffOptions",
    "DumpOptions",
    # Diff
    "compare_schemas",
    "SchemaComparator",
    "DiffCategory",
    "DiffKind",
    "DiffResult",
    "Difference",
    "format_git_style",
    "format_summary",
    "generate_migration_script",
    # Extraction
    "ExtractionError",
    "SchemaExtractor",
    "SnapshotExtractor",
]
