"""Text renderers for a DiffResult.

- ``format_git_style``: unified-diff style report grouped by category
- ``format_summary``: total, per-kind and per-category counts
- ``generate_migration_script``: ordered SQL script from migration fragments

All output is plain text; terminal colouring is the CLI's job.
"""

from sqlpulse.diff.models import DiffResult
from sqlpulse.schema.ddl import BANNER, BATCH_TERMINATOR

RULE = "-" * 50


def format_git_style(result: DiffResult) -> str:
    """Format differences as a unified-diff style report.

    Example:
        diff --sqlpulse a/dev b/prod
        --- a/dev
        +++ b/prod

        @@ TABLE @@
        - [TABLE] [dbo].[Audit]: Table [dbo].[Audit] missing in target
    """
    source = result.source_database
    target = result.target_database
    lines = [
        f"diff --sqlpulse a/{source} b/{target}",
        f"--- a/{source}",
        f"+++ b/{target}",
    ]

    for category, diffs in result.grouped_by_category():
        lines.append("")
        lines.append(f"@@ {category} @@")
        lines.extend(d.format_line() for d in diffs)

    return "\n".join(lines) + "\n"


def format_summary(result: DiffResult) -> str:
    """Format the difference counts of a result."""
    summary = result.summary
    lines = [
        RULE,
        f"Diff Summary: {result.source_database} -> {result.target_database}",
        RULE,
        f"  Total differences: {summary.total_differences}",
        f"  + Added:    {summary.added} (in target only)",
        f"  - Removed:  {summary.removed} (in source only)",
        f"  ~ Modified: {summary.modified}",
    ]

    if summary.by_category:
        lines.append("")
        lines.append("  By category:")
        for category, count in summary.by_category.items():
            lines.append(f"    {category + ':':<15} {count}")

    lines.append(RULE)
    return "\n".join(lines) + "\n"


def generate_migration_script(result: DiffResult) -> str:
    """Assemble a migration script from the differences' fragments.

    Fragments are emitted per category in the fixed category order, each
    preceded by its description and followed by a ``GO`` line.
    Differences without a fragment are skipped, and a category whose
    differences carry no fragments gets no banner.
    """
    lines = [
        BANNER,
        "-- Migration Script",
        f"-- From: {result.source_database}",
        f"-- To:   {result.target_database}",
        BANNER,
        "",
    ]

    for category, diffs in result.grouped_by_category():
        with_sql = [d for d in diffs if d.migration_sql]
        if not with_sql:
            continue

        lines.append(f"-- {category} Changes")
        lines.append("-- " + "-" * 40)
        lines.append("")

        for diff in with_sql:
            lines.append(f"-- {diff.description}")
            lines.append(diff.migration_sql)
            lines.append(BATCH_TERMINATOR)
            lines.append("")

    return "\n".join(lines) + "\n"
