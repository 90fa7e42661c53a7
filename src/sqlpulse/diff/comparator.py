"""Structural schema comparison.

Walks a source and a target ``DatabaseSchema`` and records every added,
removed and modified object as a ``Difference``. Pure logic -- no I/O,
no database connections, and neither input is modified.

Objects are matched by name (schema-qualified, or table-qualified for
table parts) using set operations. Each matched group is visited in
sorted key order so output is stable across runs.

Migration fragments always move the target toward the source: objects
missing from the target get their creation SQL, objects only in the
target get a DROP.

Usage:
    from sqlpulse.diff.comparator import compare_schemas
    from sqlpulse.config.models import DiffOptions

    result = compare_schemas(source, target, DiffOptions(ignore_collation=True))
    for diff in result.differences:
        print(diff.format_line())
"""

import logging
import re
from collections.abc import Callable, Iterable
from typing import TypeVar

from sqlpulse.config.models import DiffOptions
from sqlpulse.diff.models import DiffCategory, DiffKind, DiffResult, Difference
from sqlpulse.schema.ddl import (
    BATCH_TERMINATOR,
    render_check_constraint,
    render_column,
    render_column_type,
    render_foreign_key,
    render_index,
    render_nullability,
    render_primary_key_constraint,
    render_schema,
    render_table,
)
from sqlpulse.schema.models import (
    CheckConstraint,
    Column,
    DatabaseSchema,
    ForeignKey,
    Function,
    Index,
    IndexColumn,
    Schema,
    StoredProcedure,
    Table,
    Trigger,
    View,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_WHITESPACE = re.compile(r"\s+", re.ASCII)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _match(
    source: Iterable[T], target: Iterable[T], key: Callable[[T], str]
) -> tuple[list[T], list[T], list[tuple[T, T]]]:
    """Split two collections into removed, added and common items.

    Returns:
        ``(removed, added, common)`` where *removed* are source-only items,
        *added* are target-only items and *common* are ``(source, target)``
        pairs, each sorted by key.
    """
    source_map = {key(item): item for item in source}
    target_map = {key(item): item for item in target}

    removed = [source_map[k] for k in sorted(source_map.keys() - target_map.keys())]
    added = [target_map[k] for k in sorted(target_map.keys() - source_map.keys())]
    common = [
        (source_map[k], target_map[k])
        for k in sorted(source_map.keys() & target_map.keys())
    ]
    return removed, added, common


def normalize_whitespace(text: str) -> str:
    """Collapse runs of ASCII whitespace to one space and trim the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def index_columns_to_string(columns: list[IndexColumn]) -> str:
    """Render index columns to a comparable string.

    Key columns keep their declared order; included columns are sorted by
    name since their order carries no meaning.

    Example:
        >>> index_columns_to_string([
        ...     IndexColumn(name="B", is_included=True),
        ...     IndexColumn(name="A", position=1, is_descending=True),
        ... ])
        'A DESC, B (INCLUDE)'
    """
    key_cols = sorted((c for c in columns if not c.is_included), key=lambda c: c.position)
    include_cols = sorted((c for c in columns if c.is_included), key=lambda c: c.name)

    parts = [f"{c.name} DESC" if c.is_descending else c.name for c in key_cols]
    parts += [f"{c.name} (INCLUDE)" for c in include_cols]
    return ", ".join(parts)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _batches(*statements: str) -> str:
    """Join statements into one fragment separated by batch terminators."""
    return f"\n{BATCH_TERMINATOR}\n".join(statements)


# ------------------------------------------------------------------
# Comparator
# ------------------------------------------------------------------


class SchemaComparator:
    """Compares two database schemas.

    The comparator holds only its options, so one instance can be reused
    for any number of ``compare()`` calls.

    Example:
        >>> comparator = SchemaComparator(DiffOptions(ignore_collation=True))
        >>> result = comparator.compare(DatabaseSchema(), DatabaseSchema())
        >>> result.has_differences
        False
    """

    def __init__(self, options: DiffOptions | None = None):
        self.options = options if options is not None else DiffOptions()

    def compare(self, source: DatabaseSchema, target: DatabaseSchema) -> DiffResult:
        """Compare source and target and return every difference found."""
        opts = self.options
        diffs: list[Difference] = []

        self._compare_schemas(source.schemas, target.schemas, diffs)

        if opts.include_tables:
            self._compare_tables(source.tables, target.tables, diffs)

        if opts.include_views:
            self._compare_definitions(
                DiffCategory.VIEW, "View", "VIEW", source.views, target.views, diffs
            )

        if opts.include_procedures:
            self._compare_definitions(
                DiffCategory.PROCEDURE,
                "Procedure",
                "PROCEDURE",
                source.stored_procedures,
                target.stored_procedures,
                diffs,
            )

        if opts.include_functions:
            self._compare_definitions(
                DiffCategory.FUNCTION,
                "Function",
                "FUNCTION",
                source.functions,
                target.functions,
                diffs,
            )

        if opts.include_triggers:
            self._compare_triggers(source.triggers, target.triggers, diffs)

        result = DiffResult(
            source_database=source.database_name,
            target_database=target.database_name,
            differences=diffs,
        )
        summary = result.summary
        logger.debug(
            "Compared %s -> %s: %d difference(s) (+%d -%d ~%d)",
            result.source_database,
            result.target_database,
            summary.total_differences,
            summary.added,
            summary.removed,
            summary.modified,
        )
        return result

    # --------------------------------------------------------------
    # Filters
    # --------------------------------------------------------------

    def _in_scope(self, schema_name: str, table_name: str | None = None) -> bool:
        opts = self.options
        if opts.schema_filter and schema_name not in opts.schema_filter:
            return False
        if table_name is not None and opts.table_filter and table_name not in opts.table_filter:
            return False
        return True

    def definitions_equal(self, source: str, target: str) -> bool:
        """Compare free-text definitions, normalizing whitespace if enabled."""
        if self.options.ignore_whitespace:
            return normalize_whitespace(source) == normalize_whitespace(target)
        return source == target

    # --------------------------------------------------------------
    # Schemas
    # --------------------------------------------------------------

    def _compare_schemas(
        self, source: list[Schema], target: list[Schema], diffs: list[Difference]
    ) -> None:
        removed, added, common = _match(
            (s for s in source if self._in_scope(s.name)),
            (s for s in target if self._in_scope(s.name)),
            key=lambda s: s.name,
        )

        for schema in removed:
            diffs.append(
                Difference(
                    kind=DiffKind.REMOVED,
                    category=DiffCategory.SCHEMA,
                    object_name=f"[{schema.name}]",
                    description=f"Schema [{schema.name}] missing in target",
                    migration_sql=render_schema(schema) + ";",
                )
            )

        for schema in added:
            diffs.append(
                Difference(
                    kind=DiffKind.ADDED,
                    category=DiffCategory.SCHEMA,
                    object_name=f"[{schema.name}]",
                    description=f"Schema [{schema.name}] exists only in target",
                    migration_sql=f"DROP SCHEMA [{schema.name}];",
                )
            )

        for src, tgt in common:
            if src.owner != tgt.owner:
                diffs.append(
                    Difference(
                        kind=DiffKind.MODIFIED,
                        category=DiffCategory.SCHEMA,
                        object_name=f"[{src.name}]",
                        property_name="Owner",
                        source_value=src.owner,
                        target_value=tgt.owner,
                        description=f"Owner differs: {src.owner} vs {tgt.owner}",
                        migration_sql=(
                            f"ALTER AUTHORIZATION ON SCHEMA::[{src.name}] TO [{src.owner}];"
                            if src.owner
                            else None
                        ),
                    )
                )

    # --------------------------------------------------------------
    # Tables
    # --------------------------------------------------------------

    def _compare_tables(
        self, source: list[Table], target: list[Table], diffs: list[Difference]
    ) -> None:
        removed, added, common = _match(
            (t for t in source if self._in_scope(t.schema_name, t.name)),
            (t for t in target if self._in_scope(t.schema_name, t.name)),
            key=lambda t: t.qualified_name,
        )
        logger.debug(
            "Tables: %d removed, %d added, %d in both", len(removed), len(added), len(common)
        )

        for table in removed:
            diffs.append(
                Difference(
                    kind=DiffKind.REMOVED,
                    category=DiffCategory.TABLE,
                    object_name=table.qualified_name,
                    description=f"Table {table.qualified_name} missing in target",
                    migration_sql=self._table_creation_script(table),
                )
            )

        for table in added:
            diffs.append(
                Difference(
                    kind=DiffKind.ADDED,
                    category=DiffCategory.TABLE,
                    object_name=table.qualified_name,
                    description=f"Table {table.qualified_name} exists only in target",
                    migration_sql=f"DROP TABLE {table.qualified_name};",
                )
            )

        for src, tgt in common:
            self._compare_table_structure(src, tgt, diffs)

    def _table_creation_script(self, table: Table) -> str:
        """CREATE TABLE plus the table's indexes and constraints, as batches."""
        opts = self.options
        statements = [render_table(table)]
        if opts.include_indexes:
            statements += [render_index(i) for i in table.indexes if not i.is_primary_key]
        if opts.include_foreign_keys:
            statements += [render_foreign_key(fk) for fk in table.foreign_keys]
        if opts.include_constraints:
            statements += [render_check_constraint(cc) for cc in table.check_constraints]
        return _batches(*(f"{s};" for s in statements))

    def _compare_table_structure(
        self, source: Table, target: Table, diffs: list[Difference]
    ) -> None:
        table_name = source.qualified_name
        opts = self.options

        self._compare_columns(table_name, source.columns, target.columns, diffs)
        self._compare_primary_keys(table_name, source.primary_key, target.primary_key, diffs)

        if opts.include_indexes:
            self._compare_indexes(table_name, source.indexes, target.indexes, diffs)

        if opts.include_foreign_keys:
            self._compare_foreign_keys(
                table_name, source.foreign_keys, target.foreign_keys, diffs
            )

        if opts.include_constraints:
            self._compare_check_constraints(
                table_name, source.check_constraints, target.check_constraints, diffs
            )

    # --------------------------------------------------------------
    # Columns
    # --------------------------------------------------------------

    def _compare_columns(
        self,
        table_name: str,
        source: list[Column],
        target: list[Column],
        diffs: list[Difference],
    ) -> None:
        removed, added, common = _match(source, target, key=lambda c: c.name)

        for col in removed:
            diffs.append(
                Difference(
                    kind=DiffKind.REMOVED,
                    category=DiffCategory.COLUMN,
                    object_name=f"{table_name}.{col.name}",
                    description=f"Column [{col.name}] missing in target",
                    migration_sql=f"ALTER TABLE {table_name} ADD {render_column(col)};",
                )
            )

        for col in added:
            diffs.append(
                Difference(
                    kind=DiffKind.ADDED,
                    category=DiffCategory.COLUMN,
                    object_name=f"{table_name}.{col.name}",
                    description=f"Column [{col.name}] exists only in target",
                    migration_sql=f"ALTER TABLE {table_name} DROP COLUMN [{col.name}];",
                )
            )

        for src, tgt in common:
            self._compare_column_details(table_name, src, tgt, diffs)

    def _compare_column_details(
        self, table_name: str, source: Column, target: Column, diffs: list[Difference]
    ) -> None:
        """One Modified difference per differing column property.

        Type, length, precision/scale and nullability changes share one
        ALTER COLUMN fragment, attached to the first of them only.
        """
        col_name = f"{table_name}.{source.name}"

        alter_sql = None
        if not source.is_computed and not target.is_computed:
            alter_sql = (
                f"ALTER TABLE {table_name} ALTER COLUMN [{source.name}] "
                f"{render_column_type(source)} {render_nullability(source.is_nullable)};"
            )

        # (property, source value, target value, description, alterable)
        changes: list[tuple[str, str, str, str, bool]] = []

        if source.data_type != target.data_type:
            changes.append((
                "DataType",
                source.data_type,
                target.data_type,
                f"Data type differs: {source.data_type} vs {target.data_type}",
                True,
            ))

        if source.max_length != target.max_length:
            changes.append((
                "MaxLength",
                str(source.max_length),
                str(target.max_length),
                f"Max length differs: {source.max_length} vs {target.max_length}",
                True,
            ))

        if source.precision != target.precision or source.scale != target.scale:
            src_ps = f"({source.precision},{source.scale})"
            tgt_ps = f"({target.precision},{target.scale})"
            changes.append((
                "Precision/Scale",
                src_ps,
                tgt_ps,
                f"Precision/Scale differs: {src_ps} vs {tgt_ps}",
                True,
            ))

        if source.is_nullable != target.is_nullable:
            src_null = render_nullability(source.is_nullable)
            tgt_null = render_nullability(target.is_nullable)
            changes.append((
                "Nullability",
                src_null,
                tgt_null,
                f"Nullability differs: {src_null} vs {tgt_null}",
                True,
            ))

        if source.is_identity != target.is_identity:
            changes.append((
                "Identity",
                _flag(source.is_identity),
                _flag(target.is_identity),
                "Identity property differs",
                False,
            ))

        if not self.options.ignore_collation and source.collation != target.collation:
            changes.append((
                "Collation",
                source.collation,
                target.collation,
                f"Collation differs: {source.collation} vs {target.collation}",
                False,
            ))

        for prop, src_value, tgt_value, description, alterable in changes:
            migration = None
            if alterable and alter_sql:
                migration, alter_sql = alter_sql, None

            diffs.append(
                Difference(
                    kind=DiffKind.MODIFIED,
                    category=DiffCategory.COLUMN,
                    object_name=col_name,
                    property_name=prop,
                    source_value=src_value,
                    target_value=tgt_value,
                    description=description,
                    migration_sql=migration,
                )
            )

    # --------------------------------------------------------------
    # Primary keys and indexes
    # --------------------------------------------------------------

    def _compare_primary_keys(
        self,
        table_name: str,
        source: Index | None,
        target: Index | None,
        diffs: list[Difference],
    ) -> None:
        if source is None and target is None:
            return

        if source is None:
            diffs.append(
                Difference(
                    kind=DiffKind.ADDED,
                    category=DiffCategory.CONSTRAINT,
                    object_name=f"{table_name}.{target.name}",
                    description=f"Primary key [{target.name}] exists only in target",
                    migration_sql=f"ALTER TABLE {table_name} DROP CONSTRAINT [{target.name}];",
                )
            )
            return

        add_sql = f"ALTER TABLE {table_name} ADD {render_primary_key_constraint(source)};"

        if target is None:
            diffs.append(
                Difference(
                    kind=DiffKind.REMOVED,
                    category=DiffCategory.CONSTRAINT,
                    object_name=f"{table_name}.{source.name}",
                    description=f"Primary key [{source.name}] missing in target",
                    migration_sql=add_sql,
                )
            )
            return

        src_cols = index_columns_to_string(source.columns)
        tgt_cols = index_columns_to_string(target.columns)
        if src_cols != tgt_cols:
            diffs.append(
                Difference(
                    kind=DiffKind.MODIFIED,
                    category=DiffCategory.CONSTRAINT,
                    object_name=f"{table_name}.{source.name}",
                    property_name="Columns",
                    source_value=src_cols,
                    target_value=tgt_cols,
                    description=f"Primary key columns differ: [{src_cols}] vs [{tgt_cols}]",
                    migration_sql=_batches(
                        f"ALTER TABLE {table_name} DROP CONSTRAINT [{target.name}];",
                        add_sql,
                    ),
                )
            )

    def _compare_indexes(
        self,
        table_name: str,
        source: list[Index],
        target: list[Index],
        diffs: list[Difference],
    ) -> None:
        removed, added, common = _match(
            (i for i in source if not i.is_primary_key),
            (i for i in target if not i.is_primary_key),
            key=lambda i: i.name,
        )

        for index in removed:
            diffs.append(
                Difference(
                    kind=DiffKind.REMOVED,
                    category=DiffCategory.INDEX,
                    object_name=f"{table_name}.{index.name}",
                    description=f"Index [{index.name}] missing in target",
                    migration_sql=render_index(index) + ";",
                )
            )

        for index in added:
            diffs.append(
                Difference(
                    kind=DiffKind.ADDED,
                    category=DiffCategory.INDEX,
                    object_name=f"{table_name}.{index.name}",
                    description=f"Index [{index.name}] exists only in target",
                    migration_sql=f"DROP INDEX [{index.name}] ON {table_name};",
                )
            )

        for src, tgt in common:
            self._compare_index_details(table_name, src, tgt, diffs)

    def _compare_index_details(
        self, table_name: str, source: Index, target: Index, diffs: list[Difference]
    ) -> None:
        idx_name = f"{table_name}.{source.name}"
        src_cols = index_columns_to_string(source.columns)
        tgt_cols = index_columns_to_string(target.columns)

        changes: list[tuple[str, str, str, str]] = []
        if source.is_unique != target.is_unique:
            changes.append((
                "IsUnique",
                _flag(source.is_unique),
                _flag(target.is_unique),
                "Unique property differs",
            ))
        if source.is_clustered != target.is_clustered:
            changes.append((
                "IsClustered",
                _flag(source.is_clustered),
                _flag(target.is_clustered),
                "Clustered property differs",
            ))
        if src_cols != tgt_cols:
            changes.append((
                "Columns",
                src_cols,
                tgt_cols,
                f"Index columns differ: [{src_cols}] vs [{tgt_cols}]",
            ))

        # A single rebuild covers every property of the index. DROP_EXISTING
        # cannot turn a clustered index into a nonclustered one.
        if target.is_clustered and not source.is_clustered:
            rebuild_sql = _batches(
                f"DROP INDEX [{target.name}] ON {table_name};", render_index(source) + ";"
            )
        else:
            rebuild_sql = render_index(source) + " WITH (DROP_EXISTING = ON);"
        for prop, src_value, tgt_value, description in changes:
            diffs.append(
                Difference(
                    kind=DiffKind.MODIFIED,
                    category=DiffCategory.INDEX,
                    object_name=idx_name,
                    property_name=prop,
                    source_value=src_value,
                    target_value=tgt_value,
                    description=description,
                    migration_sql=rebuild_sql,
                )
            )
            rebuild_sql = None

    # --------------------------------------------------------------
    # Foreign keys and check constraints
    # --------------------------------------------------------------

    def _compare_foreign_keys(
        self,
        table_name: str,
        source: list[ForeignKey],
        target: list[ForeignKey],
        diffs: list[Difference],
    ) -> None:
        removed, added, common = _match(source, target, key=lambda fk: fk.name)

        for fk in removed:
            diffs.append(
                Difference(
                    kind=DiffKind.REMOVED,
                    category=DiffCategory.FOREIGN_KEY,
                    object_name=f"{table_name}.{fk.name}",
                    description=f"Foreign key [{fk.name}] missing in target",
                    migration_sql=render_foreign_key(fk) + ";",
                )
            )

        for fk in added:
            diffs.append(
                Difference(
                    kind=DiffKind.ADDED,
                    category=DiffCategory.FOREIGN_KEY,
                    object_name=f"{table_name}.{fk.name}",
                    description=f"Foreign key [{fk.name}] exists only in target",
                    migration_sql=f"ALTER TABLE {table_name} DROP CONSTRAINT [{fk.name}];",
                )
            )

        for src, tgt in common:
            src_sql = render_foreign_key(src)
            tgt_sql = render_foreign_key(tgt)
            if src_sql != tgt_sql:
                diffs.append(
                    Difference(
                        kind=DiffKind.MODIFIED,
                        category=DiffCategory.FOREIGN_KEY,
                        object_name=f"{table_name}.{src.name}",
                        property_name="Definition",
                        source_value=src_sql,
                        target_value=tgt_sql,
                        description="Foreign key definition differs",
                        migration_sql=_batches(
                            f"ALTER TABLE {table_name} DROP CONSTRAINT [{tgt.name}];",
                            src_sql + ";",
                        ),
                    )
                )

    def _compare_check_constraints(
        self,
        table_name: str,
        source: list[CheckConstraint],
        target: list[CheckConstraint],
        diffs: list[Difference],
    ) -> None:
        removed, added, common = _match(source, target, key=lambda cc: cc.name)

        for cc in removed:
            diffs.append(
                Difference(
                    kind=DiffKind.REMOVED,
                    category=DiffCategory.CONSTRAINT,
                    object_name=f"{table_name}.{cc.name}",
                    description=f"Check constraint [{cc.name}] missing in target",
                    migration_sql=render_check_constraint(cc) + ";",
                )
            )

        for cc in added:
            diffs.append(
                Difference(
                    kind=DiffKind.ADDED,
                    category=DiffCategory.CONSTRAINT,
                    object_name=f"{table_name}.{cc.name}",
                    description=f"Check constraint [{cc.name}] exists only in target",
                    migration_sql=f"ALTER TABLE {table_name} DROP CONSTRAINT [{cc.name}];",
                )
            )

        for src, tgt in common:
            object_name = f"{table_name}.{src.name}"

            if not self.definitions_equal(src.definition, tgt.definition):
                diffs.append(
                    Difference(
                        kind=DiffKind.MODIFIED,
                        category=DiffCategory.CONSTRAINT,
                        object_name=object_name,
                        property_name="Definition",
                        source_value=src.definition,
                        target_value=tgt.definition,
                        description="Check constraint definition differs",
                        migration_sql=_batches(
                            f"ALTER TABLE {table_name} DROP CONSTRAINT [{tgt.name}];",
                            render_check_constraint(src) + ";",
                        ),
                    )
                )

            if src.is_disabled != tgt.is_disabled:
                if src.is_disabled:
                    toggle_sql = f"ALTER TABLE {table_name} NOCHECK CONSTRAINT [{src.name}];"
                else:
                    toggle_sql = (
                        f"ALTER TABLE {table_name} WITH CHECK CHECK CONSTRAINT [{src.name}];"
                    )
                diffs.append(
                    Difference(
                        kind=DiffKind.MODIFIED,
                        category=DiffCategory.CONSTRAINT,
                        object_name=object_name,
                        property_name="IsDisabled",
                        source_value=_flag(src.is_disabled),
                        target_value=_flag(tgt.is_disabled),
                        description="Check constraint enabled state differs",
                        migration_sql=toggle_sql,
                    )
                )

    # --------------------------------------------------------------
    # Views, procedures, functions, triggers
    # --------------------------------------------------------------

    def _compare_definitions(
        self,
        category: DiffCategory,
        label: str,
        drop_keyword: str,
        source: list[View] | list[StoredProcedure] | list[Function] | list[Trigger],
        target: list[View] | list[StoredProcedure] | list[Function] | list[Trigger],
        diffs: list[Difference],
        drop_name: Callable[[object], str] | None = None,
    ) -> list[tuple[object, object]]:
        """Existence plus definition-equality comparison of free-text objects.

        Returns:
            The matched ``(source, target)`` pairs, for callers that compare
            further properties.
        """
        drop_name = drop_name or (lambda obj: obj.qualified_name)

        removed, added, common = _match(
            (o for o in source if self._in_scope(o.schema_name, getattr(o, "table_name", None))),
            (o for o in target if self._in_scope(o.schema_name, getattr(o, "table_name", None))),
            key=lambda o: o.qualified_name,
        )
        logger.debug(
            "%s: %d removed, %d added, %d in both",
            category,
            len(removed),
            len(added),
            len(common),
        )

        for obj in removed:
            diffs.append(
                Difference(
                    kind=DiffKind.REMOVED,
                    category=category,
                    object_name=obj.qualified_name,
                    description=f"{label} {obj.qualified_name} missing in target",
                    migration_sql=obj.definition or None,
                )
            )

        for obj in added:
            diffs.append(
                Difference(
                    kind=DiffKind.ADDED,
                    category=category,
                    object_name=obj.qualified_name,
                    description=f"{label} {obj.qualified_name} exists only in target",
                    migration_sql=f"DROP {drop_keyword} {drop_name(obj)};",
                )
            )

        for src, tgt in common:
            if not self.definitions_equal(src.definition, tgt.definition):
                migration = None
                if src.definition:
                    migration = _batches(
                        f"DROP {drop_keyword} {drop_name(tgt)};", src.definition
                    )
                diffs.append(
                    Difference(
                        kind=DiffKind.MODIFIED,
                        category=category,
                        object_name=src.qualified_name,
                        property_name="Definition",
                        description=f"{label} definition differs",
                        migration_sql=migration,
                    )
                )

        return common

    def _compare_triggers(
        self, source: list[Trigger], target: list[Trigger], diffs: list[Difference]
    ) -> None:
        # Trigger names are schema-scoped, not table-scoped
        def drop_name(trigger: Trigger) -> str:
            return f"[{trigger.schema_name}].[{trigger.name}]"

        common = self._compare_definitions(
            DiffCategory.TRIGGER,
            "Trigger",
            "TRIGGER",
            source,
            target,
            diffs,
            drop_name=drop_name,
        )

        for src, tgt in common:
            if src.is_disabled != tgt.is_disabled:
                action = "DISABLE" if src.is_disabled else "ENABLE"
                diffs.append(
                    Difference(
                        kind=DiffKind.MODIFIED,
                        category=DiffCategory.TRIGGER,
                        object_name=src.qualified_name,
                        property_name="IsDisabled",
                        source_value=_flag(src.is_disabled),
                        target_value=_flag(tgt.is_disabled),
                        description="Trigger enabled state differs",
                        migration_sql=(
                            f"{action} TRIGGER {drop_name(src)} "
                            f"ON [{src.schema_name}].[{src.table_name}];"
                        ),
                    )
                )


def compare_schemas(
    source: DatabaseSchema,
    target: DatabaseSchema,
    options: DiffOptions | None = None,
) -> DiffResult:
    """Compare two schemas with the given options.

    Args:
        source: Schema the target should be migrated toward.
        target: Schema being compared against the source.
        options: Comparison options (default: ``DiffOptions()``).

    Returns:
        ``DiffResult`` with differences in discovery order and a summary.

    Examples:
        >>> result = compare_schemas(DatabaseSchema(), DatabaseSchema())
        >>> result.summary.total_differences
        0
    """
    return SchemaComparator(options).compare(source, target)
