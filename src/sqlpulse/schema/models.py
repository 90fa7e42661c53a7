"""Pydantic models for an extracted database schema.

This module contains the passive schema-domain models:
- Table parts: Column, IndexColumn, Index, ForeignKeyColumn, ForeignKey,
  CheckConstraint, Table
- Free-text objects: View, StoredProcedure, Function, Trigger
- Namespacing and the root aggregate: Schema, DatabaseSchema

All models are frozen. They are built once per extraction and handed to
the comparator as read-only input. Rendering to DDL lives in
sqlpulse.schema.ddl.
"""

from pydantic import BaseModel, ConfigDict, Field


# Sentinel max_length for VARCHAR(MAX) and friends
MAX_LENGTH = -1

# Referential action meaning "no action", not rendered in DDL
NO_ACTION = "NO_ACTION"


class _SchemaObject(BaseModel):
    model_config = ConfigDict(frozen=True)


# ============================================================================
# Table Parts
# ============================================================================


class Column(_SchemaObject):
    """Schema for a table column.

    Example:
        >>> col = Column(name="Email", data_type="varchar", max_length=100)
        >>> col.is_nullable
        True
    """

    name: str
    ordinal_position: int = 0
    data_type: str
    max_length: int = 0
    precision: int = 0
    scale: int = 0
    is_nullable: bool = True
    has_default: bool = False
    default_value: str = ""
    is_identity: bool = False
    identity_seed: int = 1
    identity_increment: int = 1
    is_computed: bool = False
    computed_definition: str = ""
    collation: str = ""


class IndexColumn(_SchemaObject):
    """A key or included column of an index."""

    name: str
    position: int = 0
    is_descending: bool = False
    is_included: bool = False


class Index(_SchemaObject):
    """Schema for an index (or a primary key, when is_primary_key is set)."""

    name: str
    schema_name: str = "dbo"
    table_name: str = ""
    is_primary_key: bool = False
    is_unique: bool = False
    is_clustered: bool = False
    is_disabled: bool = False
    filter_definition: str = ""
    columns: list[IndexColumn] = Field(default_factory=list)

    @property
    def key_columns(self) -> list[IndexColumn]:
        """Key columns in declaration order."""
        return sorted(
            (c for c in self.columns if not c.is_included), key=lambda c: c.position
        )

    @property
    def included_columns(self) -> list[IndexColumn]:
        """INCLUDE columns in declaration order."""
        return sorted(
            (c for c in self.columns if c.is_included), key=lambda c: c.position
        )


class ForeignKeyColumn(_SchemaObject):
    """One column-to-referenced-column pair of a foreign key."""

    column_name: str
    referenced_column_name: str


class ForeignKey(_SchemaObject):
    """Schema for a foreign key constraint."""

    name: str
    schema_name: str = "dbo"
    table_name: str = ""
    referenced_schema_name: str = "dbo"
    referenced_table_name: str
    delete_action: str = NO_ACTION  # NO_ACTION, CASCADE, SET_NULL, SET_DEFAULT
    update_action: str = NO_ACTION
    columns: list[ForeignKeyColumn] = Field(default_factory=list)


class CheckConstraint(_SchemaObject):
    """Schema for a check constraint."""

    name: str
    schema_name: str = "dbo"
    table_name: str = ""
    definition: str
    is_disabled: bool = False


class Table(_SchemaObject):
    """Schema for a table.

    The primary key is held only in ``primary_key``; ``indexes`` never
    contains an index with ``is_primary_key`` set.
    """

    schema_name: str = "dbo"
    name: str
    columns: list[Column] = Field(default_factory=list)
    primary_key: Index | None = None
    indexes: list[Index] = Field(default_factory=list)
    foreign_keys: list[ForeignKey] = Field(default_factory=list)
    check_constraints: list[CheckConstraint] = Field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        return f"[{self.schema_name}].[{self.name}]"


# ============================================================================
# Free-text Objects
# ============================================================================


class View(_SchemaObject):
    """Schema for a view. ``definition`` is the full CREATE VIEW text."""

    schema_name: str = "dbo"
    name: str
    definition: str = ""

    @property
    def qualified_name(self) -> str:
        return f"[{self.schema_name}].[{self.name}]"


class StoredProcedure(_SchemaObject):
    """Schema for a stored procedure."""

    schema_name: str = "dbo"
    name: str
    definition: str = ""

    @property
    def qualified_name(self) -> str:
        return f"[{self.schema_name}].[{self.name}]"


class Function(_SchemaObject):
    """Schema for a user-defined function."""

    schema_name: str = "dbo"
    name: str
    definition: str = ""
    func_type: str = "SCALAR"  # SCALAR, TABLE, INLINE

    @property
    def qualified_name(self) -> str:
        return f"[{self.schema_name}].[{self.name}]"


class Trigger(_SchemaObject):
    """Schema for a DML trigger, qualified by its owning table."""

    schema_name: str = "dbo"
    table_name: str
    name: str
    definition: str = ""
    is_disabled: bool = False

    @property
    def qualified_name(self) -> str:
        return f"[{self.schema_name}].[{self.table_name}].[{self.name}]"


# ============================================================================
# Root Aggregate
# ============================================================================


class Schema(_SchemaObject):
    """A database schema (namespace)."""

    name: str
    owner: str = ""


class DatabaseSchema(_SchemaObject):
    """Complete extracted database schema.

    Example:
        >>> db = DatabaseSchema(database_name="AppDb")
        >>> db.tables
        []
    """

    database_name: str = ""
    schemas: list[Schema] = Field(default_factory=list)
    tables: list[Table] = Field(default_factory=list)
    views: list[View] = Field(default_factory=list)
    stored_procedures: list[StoredProcedure] = Field(default_factory=list)
    functions: list[Function] = Field(default_factory=list)
    triggers: list[Trigger] = Field(default_factory=list)
