"""Tests for DDL rendering of schema models.

Verifies the canonical rendering rules: length/precision clauses,
identity and computed columns, index key/include/filter layout, foreign
key referential actions, inline primary keys, and the full DDL export.
"""

from datetime import datetime, timezone

import pytest

from sqlpulse.config.models import DumpOptions
from sqlpulse.schema.ddl import (
    BANNER,
    MISSING_DEFINITION,
    count_objects,
    generate_ddl_export,
    render_check_constraint,
    render_column,
    render_column_type,
    render_foreign_key,
    render_index,
    render_schema,
    render_sql,
    render_table,
)
from sqlpulse.schema.models import (
    MAX_LENGTH,
    Column,
    DatabaseSchema,
    ForeignKey,
    ForeignKeyColumn,
    Index,
    IndexColumn,
    Schema,
    View,
)


# ------------------------------------------------------------------
# Column types
# ------------------------------------------------------------------


class TestColumnType:
    """Length, precision and scale clauses."""

    def test_varchar_length(self) -> None:
        """VARCHAR renders its byte length."""
        col = Column(name="Email", data_type="varchar", max_length=100)
        assert render_column_type(col) == "varchar(100)"

    def test_unbounded_length_renders_max(self) -> None:
        """The -1 sentinel renders as (MAX), for single and double byte types."""
        assert (
            render_column_type(Column(name="a", data_type="varchar", max_length=MAX_LENGTH))
            == "varchar(MAX)"
        )
        assert (
            render_column_type(Column(name="b", data_type="nvarchar", max_length=MAX_LENGTH))
            == "nvarchar(MAX)"
        )
        assert (
            render_column_type(Column(name="c", data_type="varbinary", max_length=MAX_LENGTH))
            == "varbinary(MAX)"
        )

    def test_double_byte_types_halve_length(self) -> None:
        """NVARCHAR/NCHAR store bytes; the declared length is half."""
        assert render_column_type(Column(name="a", data_type="nvarchar", max_length=200)) == "nvarchar(100)"
        assert render_column_type(Column(name="b", data_type="NCHAR", max_length=20)) == "NCHAR(10)"

    def test_binary_length_is_not_halved(self) -> None:
        """BINARY is not a double-byte type even though it is length-typed."""
        assert render_column_type(Column(name="a", data_type="binary", max_length=16)) == "binary(16)"

    def test_decimal_precision_and_scale(self) -> None:
        """DECIMAL/NUMERIC render (precision,scale)."""
        assert (
            render_column_type(Column(name="a", data_type="decimal", precision=10, scale=2))
            == "decimal(10,2)"
        )
        assert (
            render_column_type(Column(name="b", data_type="numeric", precision=18, scale=0))
            == "numeric(18,0)"
        )

    @pytest.mark.parametrize("data_type", ["datetime2", "datetimeoffset", "time"])
    def test_time_types_render_scale_only_when_positive(self, data_type: str) -> None:
        """Time-family types append (scale) only for scale > 0."""
        assert render_column_type(Column(name="a", data_type=data_type, scale=3)) == f"{data_type}(3)"
        assert render_column_type(Column(name="a", data_type=data_type, scale=0)) == data_type

    def test_plain_types_have_no_clause(self) -> None:
        """Types without size metadata render bare."""
        assert render_column_type(Column(name="a", data_type="int", max_length=4)) == "int"


class TestRenderColumn:
    """Full column definitions."""

    def test_identity_comes_before_nullability(self) -> None:
        """IDENTITY(seed,increment) sits between type and NULL/NOT NULL."""
        col = Column(
            name="Id",
            data_type="bigint",
            is_nullable=False,
            is_identity=True,
            identity_seed=1000,
            identity_increment=5,
        )
        assert render_column(col) == "[Id] bigint IDENTITY(1000,5) NOT NULL"

    def test_nullable_column(self) -> None:
        col = Column(name="Name", data_type="nvarchar", max_length=200)
        assert render_column(col) == "[Name] nvarchar(100) NULL"

    def test_default_value(self) -> None:
        """DEFAULT is appended after nullability."""
        col = Column(
            name="Status",
            data_type="varchar",
            max_length=20,
            is_nullable=False,
            has_default=True,
            default_value="('active')",
        )
        assert render_column(col) == "[Status] varchar(20) NOT NULL DEFAULT ('active')"

    def test_default_flag_without_text_is_ignored(self) -> None:
        """has_default with empty text renders no DEFAULT clause."""
        col = Column(name="Flag", data_type="bit", has_default=True)
        assert render_column(col) == "[Flag] bit NULL"

    def test_computed_column_renders_only_expression(self) -> None:
        """Computed columns omit type, nullability and default."""
        col = Column(
            name="Total",
            data_type="decimal",
            precision=10,
            scale=2,
            is_nullable=False,
            has_default=True,
            default_value="((0))",
            is_computed=True,
            computed_definition="([Qty]*[Price])",
        )
        assert render_column(col) == "[Total] AS ([Qty]*[Price])"


# ------------------------------------------------------------------
# Indexes and constraints
# ------------------------------------------------------------------


class TestRenderIndex:
    """CREATE INDEX layout."""

    def test_unique_filtered_index_with_include(self, users_table) -> None:
        """Key columns, INCLUDE list and WHERE clause are separated."""
        expected = (
            "CREATE UNIQUE NONCLUSTERED INDEX [IX_Users_Email] ON [dbo].[Users] (\n"
            "    [Email]\n"
            ") INCLUDE (\n"
            "    [Name]\n"
            ") WHERE [Email] IS NOT NULL"
        )
        assert render_index(users_table.indexes[0]) == expected

    def test_descending_and_clustered(self) -> None:
        """DESC suffixes key columns; no INCLUDE or WHERE when absent."""
        index = Index(
            name="CX_Log",
            schema_name="audit",
            table_name="Log",
            is_clustered=True,
            columns=[
                IndexColumn(name="LoggedAt", position=1, is_descending=True),
                IndexColumn(name="Id", position=2),
            ],
        )
        expected = (
            "CREATE CLUSTERED INDEX [CX_Log] ON [audit].[Log] (\n"
            "    [LoggedAt] DESC,\n"
            "    [Id]\n"
            ")"
        )
        assert render_index(index) == expected

    def test_key_columns_follow_position(self) -> None:
        """Key columns render in position order, not list order."""
        index = Index(
            name="IX",
            table_name="T",
            columns=[IndexColumn(name="B", position=2), IndexColumn(name="A", position=1)],
        )
        assert render_index(index).index("[A]") < render_index(index).index("[B]")

    def test_primary_key_renders_empty(self, users_table) -> None:
        """Primary keys are rendered inline by the table, never standalone."""
        assert render_index(users_table.primary_key) == ""


class TestRenderForeignKey:
    """ALTER TABLE ... FOREIGN KEY rendering."""

    def test_cascade_delete(self, orders_table) -> None:
        expected = (
            "ALTER TABLE [dbo].[Orders] ADD CONSTRAINT [FK_Orders_Users] FOREIGN KEY (\n"
            "    [UserId]\n"
            ") REFERENCES [dbo].[Users] (\n"
            "    [Id]\n"
            ") ON DELETE CASCADE"
        )
        assert render_foreign_key(orders_table.foreign_keys[0]) == expected

    def test_no_action_is_omitted_and_underscores_become_spaces(self) -> None:
        """NO_ACTION is the default; SET_NULL renders as SET NULL."""
        fk = ForeignKey(
            name="FK_A_B",
            table_name="A",
            referenced_table_name="B",
            delete_action="NO_ACTION",
            update_action="SET_NULL",
            columns=[
                ForeignKeyColumn(column_name="B1", referenced_column_name="Id1"),
                ForeignKeyColumn(column_name="B2", referenced_column_name="Id2"),
            ],
        )
        sql = render_foreign_key(fk)
        assert "ON DELETE" not in sql
        assert sql.endswith(" ON UPDATE SET NULL")
        assert "    [B1],\n    [B2]\n" in sql
        assert "    [Id1],\n    [Id2]\n" in sql


class TestRenderCheckAndSchema:
    """Check constraints and CREATE SCHEMA."""

    def test_check_constraint(self, orders_table) -> None:
        assert render_check_constraint(orders_table.check_constraints[0]) == (
            "ALTER TABLE [dbo].[Orders] ADD CONSTRAINT [CK_Orders_Total] CHECK ([Total]>=(0))"
        )

    def test_schema_with_owner(self) -> None:
        assert render_schema(Schema(name="sales", owner="dbo")) == (
            "CREATE SCHEMA [sales] AUTHORIZATION [dbo]"
        )

    def test_schema_without_owner(self) -> None:
        assert render_schema(Schema(name="sales")) == "CREATE SCHEMA [sales]"


# ------------------------------------------------------------------
# Tables
# ------------------------------------------------------------------


class TestRenderTable:
    """CREATE TABLE with inline primary key."""

    def test_users_table(self, users_table) -> None:
        expected = (
            "CREATE TABLE [dbo].[Users] (\n"
            "    [Id] int IDENTITY(1,1) NOT NULL,\n"
            "    [Email] varchar(100) NOT NULL,\n"
            "    [Name] nvarchar(100) NULL,\n"
            "    CONSTRAINT [PK_Users] PRIMARY KEY CLUSTERED ([Id])\n"
            ")"
        )
        assert render_table(users_table) == expected

    def test_columns_render_in_ordinal_order(self, users_table) -> None:
        """Declaration order comes from ordinal_position."""
        shuffled = users_table.model_copy(update={"columns": list(reversed(users_table.columns))})
        assert render_table(shuffled) == render_table(users_table)

    def test_table_without_primary_key(self, users_table) -> None:
        table = users_table.model_copy(update={"primary_key": None})
        assert "PRIMARY KEY" not in render_table(table)
        assert render_table(table).endswith("[Name] nvarchar(100) NULL\n)")


class TestRenderSqlDispatch:
    """render_sql() dispatches on entity type."""

    def test_dispatches_to_table_renderer(self, users_table) -> None:
        assert render_sql(users_table) == render_table(users_table)

    def test_free_text_objects_render_their_definition(self, sample_schema) -> None:
        view = sample_schema.views[0]
        assert render_sql(view) == view.definition
        assert render_sql(sample_schema.triggers[0]) == sample_schema.triggers[0].definition

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(TypeError, match="No DDL renderer"):
            render_sql(42)


# ------------------------------------------------------------------
# DDL export
# ------------------------------------------------------------------


GENERATED_AT = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class TestGenerateDdlExport:
    """Full-schema DDL script."""

    def test_header_and_footer(self, sample_schema) -> None:
        ddl = generate_ddl_export(sample_schema, DumpOptions(), generated_at=GENERATED_AT)
        assert ddl.startswith(f"{BANNER}\n-- SQLPulse DDL Export\n")
        assert "-- Database: AppDb\n" in ddl
        assert "-- Generated: 2024-01-02T03:04:05+00:00\n" in ddl
        assert ddl.endswith(f"-- END OF DDL EXPORT\n{BANNER}\n")

    def test_sections_in_order(self, sample_schema) -> None:
        """Sections appear in dependency-friendly order."""
        ddl = generate_ddl_export(sample_schema, DumpOptions(), generated_at=GENERATED_AT)
        sections = [
            "-- SCHEMAS",
            "-- TABLES",
            "-- INDEXES",
            "-- FOREIGN KEYS",
            "-- CHECK CONSTRAINTS",
            "-- VIEWS",
            "-- STORED PROCEDURES",
            "-- FUNCTIONS",
            "-- TRIGGERS",
        ]
        positions = [ddl.index(s + "\n") for s in sections]
        assert positions == sorted(positions)

    def test_statements_end_with_batch_terminator(self, sample_schema, users_table) -> None:
        ddl = generate_ddl_export(sample_schema, DumpOptions(), generated_at=GENERATED_AT)
        assert f"-- Table: [dbo].[Users]\n{render_table(users_table)};\nGO\n" in ddl
        assert "-- Function: [sales].[fn_OrderTotal] (SCALAR)\n" in ddl
        assert "-- Trigger: [trg_Orders_Audit] on [dbo].[Orders]\n" in ddl

    def test_disabled_sections_are_skipped(self, sample_schema) -> None:
        options = DumpOptions(include_views=False, include_indexes=False)
        ddl = generate_ddl_export(sample_schema, options, generated_at=GENERATED_AT)
        assert "-- VIEWS" not in ddl
        assert "-- INDEXES" not in ddl
        assert "-- TABLES" in ddl

    def test_missing_definition_is_noted(self) -> None:
        """Encrypted objects have no definition text."""
        schema = DatabaseSchema(database_name="Db", views=[View(name="vSecret")])
        ddl = generate_ddl_export(schema, DumpOptions(), generated_at=GENERATED_AT)
        assert f"-- View: [dbo].[vSecret]\n{MISSING_DEFINITION}\n" in ddl


class TestCountObjects:
    """Extraction summary counts."""

    def test_counts(self, sample_schema) -> None:
        counts = count_objects(sample_schema)
        assert counts["Schemas"] == 2
        assert counts["Tables"] == 2
        assert counts["Indexes"] == 1
        assert counts["Foreign Keys"] == 1
        assert counts["Check Constraints"] == 1
        assert counts["Views"] == 1
        assert counts["Procedures"] == 1
        assert counts["Functions"] == 1
        assert counts["Triggers"] == 1
