"""Schema model and DDL rendering.

Provides the passive schema models (``DatabaseSchema`` and its parts) and
the DDL renderer (``render_sql``, ``generate_ddl_export``).

Usage:
    from sqlpulse.schema import DatabaseSchema, Table, Column
    from sqlpulse.schema import render_sql, generate_ddl_export
"""

from sqlpulse.schema.ddl import count_objects, generate_ddl_export, render_sql
from sqlpulse.schema.models import (
    CheckConstraint,
    Column,
    DatabaseSchema,
    ForeignKey,
    ForeignKeyColumn,
    Function,
    Index,
    IndexColumn,
    Schema,
    StoredProcedure,
    Table,
    Trigger,
    View,
)

__all__ = [
    "render_sql",
    "generate_ddl_export",
    "count_objects",
    "CheckConstraint",
    "Column",
    "DatabaseSchema",
    "ForeignKey",
    "ForeignKeyColumn",
    "Function",
    "Index",
    "IndexColumn",
    "Schema",
    "StoredProcedure",
    "Table",
    "Trigger",
    "View",
]
