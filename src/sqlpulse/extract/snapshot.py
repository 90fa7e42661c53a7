"""JSON snapshot files as a schema source.

A snapshot is a ``DatabaseSchema`` serialized with pydantic. Snapshots
are written by ``sqlpulse dump --format json`` and read back by
``SnapshotExtractor``, which applies the same category toggles and
name filters a live extraction would.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from sqlpulse.config.models import DumpOptions
from sqlpulse.extract.base import ExtractionError
from sqlpulse.schema.models import DatabaseSchema, Table

logger = logging.getLogger(__name__)


def _strip_table(table: Table, options: DumpOptions) -> Table:
    """Drop the table parts that the options exclude."""
    update = {}
    if not options.include_indexes:
        update["indexes"] = []
    if not options.include_foreign_keys:
        update["foreign_keys"] = []
    if not options.include_constraints:
        update["check_constraints"] = []
    return table.model_copy(update=update) if update else table


def apply_dump_options(schema: DatabaseSchema, options: DumpOptions) -> DatabaseSchema:
    """Return a copy of *schema* holding only what *options* select.

    Example:
        >>> filtered = apply_dump_options(schema, DumpOptions(include_views=False))
        >>> filtered.views
        []
    """

    def schema_ok(name: str) -> bool:
        return not options.schema_filter or name in options.schema_filter

    def table_ok(name: str) -> bool:
        return not options.table_filter or name in options.table_filter

    tables = []
    if options.include_tables:
        tables = [
            _strip_table(t, options)
            for t in schema.tables
            if schema_ok(t.schema_name) and table_ok(t.name)
        ]

    filtered = DatabaseSchema(
        database_name=schema.database_name,
        schemas=[s for s in schema.schemas if schema_ok(s.name)],
        tables=tables,
        views=[v for v in schema.views if schema_ok(v.schema_name)]
        if options.include_views
        else [],
        stored_procedures=[p for p in schema.stored_procedures if schema_ok(p.schema_name)]
        if options.include_procedures
        else [],
        functions=[f for f in schema.functions if schema_ok(f.schema_name)]
        if options.include_functions
        else [],
        triggers=[
            tr
            for tr in schema.triggers
            if schema_ok(tr.schema_name) and table_ok(tr.table_name)
        ]
        if options.include_triggers
        else [],
    )
    logger.debug(
        "Filtered %s: %d of %d table(s) kept",
        schema.database_name,
        len(filtered.tables),
        len(schema.tables),
    )
    return filtered


class SnapshotExtractor:
    """Reads a ``DatabaseSchema`` from a JSON snapshot file.

    Usage:
        extractor = SnapshotExtractor("snapshots/prod.json")
        schema = extractor.extract_schema(DumpOptions(include_views=False))
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def extract_schema(self, options: DumpOptions) -> DatabaseSchema:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ExtractionError(f"Cannot read snapshot {self.path}: {e}") from e

        try:
            schema = DatabaseSchema.model_validate_json(raw)
        except ValidationError as e:
            raise ExtractionError(f"Invalid snapshot {self.path}: {e}") from e

        logger.info(
            "Loaded snapshot %s (database %s, %d table(s))",
            self.path,
            schema.database_name,
            len(schema.tables),
        )
        return apply_dump_options(schema, options)


def save_snapshot(schema: DatabaseSchema, path: str | Path) -> Path:
    """Write *schema* to *path* as an indented JSON snapshot."""
    path = Path(path)
    path.write_text(schema.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Snapshot written to %s", path)
    return path
