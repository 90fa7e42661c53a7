"""Canonical DDL rendering for schema models.

Pure functions -- no I/O, no database connections. Each schema entity
renders to the creation SQL a SQL Server would accept, without the
trailing ``;``/``GO`` batch terminator (callers add those).

Usage:
    from sqlpulse.schema.ddl import render_sql, generate_ddl_export

    sql = render_sql(table)          # CREATE TABLE [dbo].[Users] (...)
    script = generate_ddl_export(database_schema, DumpOptions())
"""

from datetime import datetime, timezone
from functools import singledispatch

from sqlpulse.config.models import DumpOptions
from sqlpulse.schema.models import (
    MAX_LENGTH,
    NO_ACTION,
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

_LENGTH_TYPES = {"VARCHAR", "NVARCHAR", "CHAR", "NCHAR", "VARBINARY", "BINARY"}
_DECIMAL_TYPES = {"DECIMAL", "NUMERIC"}
_TIME_TYPES = {"DATETIME2", "DATETIMEOFFSET", "TIME"}

BANNER = "-- " + "=" * 44
BATCH_TERMINATOR = "GO"
MISSING_DEFINITION = "-- (definition not available - possibly encrypted)"


# ------------------------------------------------------------------
# Columns
# ------------------------------------------------------------------


def render_column_type(column: Column) -> str:
    """Render a column's type with its length/precision/scale clause.

    Double-byte (N-prefixed) character types store byte length, so the
    declared character count is half of ``max_length``.

    Example:
        >>> render_column_type(Column(name="n", data_type="nvarchar", max_length=200))
        'nvarchar(100)'
    """
    data_type = column.data_type
    upper = data_type.upper()

    if upper in _LENGTH_TYPES:
        if column.max_length == MAX_LENGTH:
            return f"{data_type}(MAX)"
        if upper.startswith("N"):
            return f"{data_type}({column.max_length // 2})"
        return f"{data_type}({column.max_length})"

    if upper in _DECIMAL_TYPES:
        return f"{data_type}({column.precision},{column.scale})"

    if upper in _TIME_TYPES and column.scale > 0:
        return f"{data_type}({column.scale})"

    return data_type


def render_nullability(is_nullable: bool) -> str:
    return "NULL" if is_nullable else "NOT NULL"


def render_column(column: Column) -> str:
    """Render a column definition as used inside CREATE TABLE.

    Computed columns render only ``AS <expression>``.
    """
    if column.is_computed:
        return f"[{column.name}] AS {column.computed_definition}"

    parts = [f"[{column.name}]", render_column_type(column)]

    if column.is_identity:
        parts.append(f"IDENTITY({column.identity_seed},{column.identity_increment})")

    parts.append(render_nullability(column.is_nullable))

    if column.has_default and column.default_value:
        parts.append(f"DEFAULT {column.default_value}")

    return " ".join(parts)


# ------------------------------------------------------------------
# Indexes and constraints
# ------------------------------------------------------------------


def _render_index_column(column: IndexColumn) -> str:
    return f"[{column.name}] DESC" if column.is_descending else f"[{column.name}]"


def render_index(index: Index) -> str:
    """Render CREATE INDEX. Primary keys render as an empty string.

    Example:
        CREATE UNIQUE NONCLUSTERED INDEX [IX_Users_Email] ON [dbo].[Users] (
            [Email]
        ) INCLUDE (
            [Name]
        ) WHERE [Email] IS NOT NULL
    """
    if index.is_primary_key:
        return ""

    unique = "UNIQUE " if index.is_unique else ""
    clustered = "CLUSTERED" if index.is_clustered else "NONCLUSTERED"
    key_cols = [f"    {_render_index_column(c)}" for c in index.key_columns]
    include_cols = [f"    [{c.name}]" for c in index.included_columns]

    sql = (
        f"CREATE {unique}{clustered} INDEX [{index.name}] "
        f"ON [{index.schema_name}].[{index.table_name}] (\n"
        + ",\n".join(key_cols)
        + "\n)"
    )

    if include_cols:
        sql += " INCLUDE (\n" + ",\n".join(include_cols) + "\n)"

    if index.filter_definition:
        sql += f" WHERE {index.filter_definition}"

    return sql


def render_primary_key_constraint(primary_key: Index) -> str:
    """Render the ``CONSTRAINT [pk] PRIMARY KEY ...`` clause of a table."""
    clustered = "CLUSTERED" if primary_key.is_clustered else "NONCLUSTERED"
    cols = ", ".join(_render_index_column(c) for c in primary_key.key_columns)
    return f"CONSTRAINT [{primary_key.name}] PRIMARY KEY {clustered} ({cols})"


def _action_clause(keyword: str, action: str) -> str:
    if not action or action == NO_ACTION:
        return ""
    return f" ON {keyword} {action.replace('_', ' ')}"


def render_foreign_key(fk: ForeignKey) -> str:
    """Render ALTER TABLE ... ADD CONSTRAINT ... FOREIGN KEY."""
    cols = ",\n".join(f"    [{c.column_name}]" for c in fk.columns)
    ref_cols = ",\n".join(f"    [{c.referenced_column_name}]" for c in fk.columns)

    return (
        f"ALTER TABLE [{fk.schema_name}].[{fk.table_name}] "
        f"ADD CONSTRAINT [{fk.name}] FOREIGN KEY (\n{cols}\n) "
        f"REFERENCES [{fk.referenced_schema_name}].[{fk.referenced_table_name}] (\n"
        f"{ref_cols}\n)"
        + _action_clause("DELETE", fk.delete_action)
        + _action_clause("UPDATE", fk.update_action)
    )


def render_check_constraint(check: CheckConstraint) -> str:
    return (
        f"ALTER TABLE [{check.schema_name}].[{check.table_name}] "
        f"ADD CONSTRAINT [{check.name}] CHECK {check.definition}"
    )


# ------------------------------------------------------------------
# Tables and namespaces
# ------------------------------------------------------------------


def render_table(table: Table) -> str:
    """Render CREATE TABLE with columns in ordinal order and an inline PK."""
    definitions = [
        f"    {render_column(c)}"
        for c in sorted(table.columns, key=lambda c: c.ordinal_position)
    ]

    if table.primary_key is not None and table.primary_key.columns:
        definitions.append(f"    {render_primary_key_constraint(table.primary_key)}")

    return (
        f"CREATE TABLE {table.qualified_name} (\n"
        + ",\n".join(definitions)
        + "\n)"
    )


def render_schema(schema: Schema) -> str:
    if schema.owner:
        return f"CREATE SCHEMA [{schema.name}] AUTHORIZATION [{schema.owner}]"
    return f"CREATE SCHEMA [{schema.name}]"


# ------------------------------------------------------------------
# Polymorphic entry point
# ------------------------------------------------------------------


@singledispatch
def render_sql(obj: object) -> str:
    """Render any schema entity to its creation SQL."""
    raise TypeError(f"No DDL renderer for {type(obj).__name__}")


render_sql.register(Column, render_column)
render_sql.register(Index, render_index)
render_sql.register(ForeignKey, render_foreign_key)
render_sql.register(CheckConstraint, render_check_constraint)
render_sql.register(Table, render_table)
render_sql.register(Schema, render_schema)


@render_sql.register(View)
@render_sql.register(StoredProcedure)
@render_sql.register(Function)
@render_sql.register(Trigger)
def _render_definition(obj: View | StoredProcedure | Function | Trigger) -> str:
    # Free-text objects carry their own creation statement
    return obj.definition


# ------------------------------------------------------------------
# Full DDL export
# ------------------------------------------------------------------


def _section(title: str) -> list[str]:
    return [BANNER, f"-- {title}", BANNER, ""]


def _statement(sql: str) -> list[str]:
    return [f"{sql};", BATCH_TERMINATOR, ""]


def _definition_block(comment: str, definition: str) -> list[str]:
    if definition:
        return [comment, *_statement(definition)]
    return [comment, MISSING_DEFINITION, ""]


def generate_ddl_export(
    schema: DatabaseSchema,
    options: DumpOptions,
    generated_at: datetime | None = None,
) -> str:
    """Render a whole schema as one DDL script, section by section.

    Args:
        schema: Extracted database schema.
        options: Category toggles; disabled or empty sections are skipped.
        generated_at: Timestamp for the header (default: now, UTC).

    Returns:
        The script text, each statement followed by a ``GO`` batch line.
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)

    lines = [
        BANNER,
        "-- SQLPulse DDL Export",
        f"-- Database: {schema.database_name}",
        f"-- Generated: {generated_at.isoformat(timespec='seconds')}",
        BANNER,
        "",
    ]

    if schema.schemas:
        lines += _section("SCHEMAS")
        for s in schema.schemas:
            lines += _statement(render_schema(s))

    if options.include_tables and schema.tables:
        lines += _section("TABLES")
        for t in schema.tables:
            lines.append(f"-- Table: {t.qualified_name}")
            lines += _statement(render_table(t))

    indexes = [(t, i) for t in schema.tables for i in t.indexes if not i.is_primary_key]
    if options.include_indexes and indexes:
        lines += _section("INDEXES")
        for t, index in indexes:
            lines.append(f"-- Index: [{index.name}] on {t.qualified_name}")
            lines += _statement(render_index(index))

    foreign_keys = [fk for t in schema.tables for fk in t.foreign_keys]
    if options.include_foreign_keys and foreign_keys:
        lines += _section("FOREIGN KEYS")
        for fk in foreign_keys:
            lines.append(f"-- FK: [{fk.name}]")
            lines += _statement(render_foreign_key(fk))

    checks = [cc for t in schema.tables for cc in t.check_constraints]
    if options.include_constraints and checks:
        lines += _section("CHECK CONSTRAINTS")
        for cc in checks:
            lines.append(f"-- Check: [{cc.name}]")
            lines += _statement(render_check_constraint(cc))

    if options.include_views and schema.views:
        lines += _section("VIEWS")
        for v in schema.views:
            lines += _definition_block(f"-- View: {v.qualified_name}", v.definition)

    if options.include_procedures and schema.stored_procedures:
        lines += _section("STORED PROCEDURES")
        for p in schema.stored_procedures:
            lines += _definition_block(f"-- Procedure: {p.qualified_name}", p.definition)

    if options.include_functions and schema.functions:
        lines += _section("FUNCTIONS")
        for f in schema.functions:
            lines += _definition_block(
                f"-- Function: {f.qualified_name} ({f.func_type})", f.definition
            )

    if options.include_triggers and schema.triggers:
        lines += _section("TRIGGERS")
        for tr in schema.triggers:
            lines += _definition_block(
                f"-- Trigger: [{tr.name}] on [{tr.schema_name}].[{tr.table_name}]",
                tr.definition,
            )

    lines += [BANNER, "-- END OF DDL EXPORT", BANNER]
    return "\n".join(lines) + "\n"


def count_objects(schema: DatabaseSchema) -> dict[str, int]:
    """Count extracted objects per kind, for the dump summary."""
    return {
        "Schemas": len(schema.schemas),
        "Tables": len(schema.tables),
        "Indexes": sum(len(t.indexes) for t in schema.tables),
        "Foreign Keys": sum(len(t.foreign_keys) for t in schema.tables),
        "Check Constraints": sum(len(t.check_constraints) for t in schema.tables),
        "Views": len(schema.views),
        "Procedures": len(schema.stored_procedures),
        "Functions": len(schema.functions),
        "Triggers": len(schema.triggers),
    }
