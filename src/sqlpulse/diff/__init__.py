"""Structural schema comparison and its text outputs.

Provides the comparator (``compare_schemas``, ``SchemaComparator``), the
result models (``DiffResult``, ``Difference``, ``DiffSummary``) and the
report/migration renderers.

Usage:
    from sqlpulse.diff import compare_schemas, format_git_style
    from sqlpulse.diff import generate_migration_script
"""

from sqlpulse.diff.comparator import SchemaComparator, compare_schemas
from sqlpulse.diff.models import (
    CATEGORY_ORDER,
    DiffCategory,
    DiffKind,
    DiffResult,
    DiffSummary,
    Difference,
)
from sqlpulse.diff.report import (
    format_git_style,
    format_summary,
    generate_migration_script,
)

__all__ = [
    "compare_schemas",
    "SchemaComparator",
    "CATEGORY_ORDER",
    "DiffCategory",
    "DiffKind",
    "DiffResult",
    "DiffSummary",
    "Difference",
    "format_git_style",
    "format_summary",
    "generate_migration_script",
]
