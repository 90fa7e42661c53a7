"""Shared schema fixtures.

``sample_schema`` is a small but complete database: two schemas, two
tables with keys, indexes and a check constraint, plus one object of
every free-text kind.
"""

import pytest

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

COLLATION = "SQL_Latin1_General_CP1_CI_AS"


def replace_table(schema: DatabaseSchema, table: Table) -> DatabaseSchema:
    """Return *schema* with the same-named table swapped for *table*."""
    tables = [table if t.name == table.name else t for t in schema.tables]
    return schema.model_copy(update={"tables": tables})


def replace_column(table: Table, column: Column) -> Table:
    """Return *table* with the same-named column swapped for *column*."""
    columns = [column if c.name == column.name else c for c in table.columns]
    return table.model_copy(update={"columns": columns})


def get_table(schema: DatabaseSchema, name: str) -> Table:
    return next(t for t in schema.tables if t.name == name)


def get_column(table: Table, name: str) -> Column:
    return next(c for c in table.columns if c.name == name)


@pytest.fixture
def users_table() -> Table:
    return Table(
        schema_name="dbo",
        name="Users",
        columns=[
            Column(
                name="Id",
                ordinal_position=1,
                data_type="int",
                is_nullable=False,
                is_identity=True,
            ),
            Column(
                name="Email",
                ordinal_position=2,
                data_type="varchar",
                max_length=100,
                is_nullable=False,
                collation=COLLATION,
            ),
            Column(
                name="Name",
                ordinal_position=3,
                data_type="nvarchar",
                max_length=200,
                collation=COLLATION,
            ),
        ],
        primary_key=Index(
            name="PK_Users",
            schema_name="dbo",
            table_name="Users",
            is_primary_key=True,
            is_unique=True,
            is_clustered=True,
            columns=[IndexColumn(name="Id", position=1)],
        ),
        indexes=[
            Index(
                name="IX_Users_Email",
                schema_name="dbo",
                table_name="Users",
                is_unique=True,
                filter_definition="[Email] IS NOT NULL",
                columns=[
                    IndexColumn(name="Email", position=1),
                    IndexColumn(name="Name", position=0, is_included=True),
                ],
            )
        ],
    )


@pytest.fixture
def orders_table() -> Table:
    return Table(
        schema_name="dbo",
        name="Orders",
        columns=[
            Column(
                name="Id",
                ordinal_position=1,
                data_type="int",
                is_nullable=False,
                is_identity=True,
            ),
            Column(name="UserId", ordinal_position=2, data_type="int", is_nullable=False),
            Column(
                name="Total",
                ordinal_position=3,
                data_type="decimal",
                precision=10,
                scale=2,
                is_nullable=False,
                has_default=True,
                default_value="((0))",
            ),
        ],
        primary_key=Index(
            name="PK_Orders",
            schema_name="dbo",
            table_name="Orders",
            is_primary_key=True,
            is_unique=True,
            is_clustered=True,
            columns=[IndexColumn(name="Id", position=1)],
        ),
        foreign_keys=[
            ForeignKey(
                name="FK_Orders_Users",
                schema_name="dbo",
                table_name="Orders",
                referenced_schema_name="dbo",
                referenced_table_name="Users",
                delete_action="CASCADE",
                columns=[ForeignKeyColumn(column_name="UserId", referenced_column_name="Id")],
            )
        ],
        check_constraints=[
            CheckConstraint(
                name="CK_Orders_Total",
                schema_name="dbo",
                table_name="Orders",
                definition="([Total]>=(0))",
            )
        ],
    )


@pytest.fixture
def sample_schema(users_table: Table, orders_table: Table) -> DatabaseSchema:
    return DatabaseSchema(
        database_name="AppDb",
        schemas=[Schema(name="dbo", owner="dbo"), Schema(name="sales", owner="dbo")],
        tables=[users_table, orders_table],
        views=[
            View(
                schema_name="dbo",
                name="vActiveUsers",
                definition="CREATE VIEW [dbo].[vActiveUsers] AS\nSELECT Id, Email\nFROM dbo.Users",
            )
        ],
        stored_procedures=[
            StoredProcedure(
                schema_name="dbo",
                name="usp_GetUser",
                definition="CREATE PROCEDURE [dbo].[usp_GetUser] @Id int AS\nSELECT * FROM dbo.Users WHERE Id = @Id",
            )
        ],
        functions=[
            Function(
                schema_name="sales",
                name="fn_OrderTotal",
                func_type="SCALAR",
                definition="CREATE FUNCTION [sales].[fn_OrderTotal]() RETURNS int AS BEGIN RETURN 0 END",
            )
        ],
        triggers=[
            Trigger(
                schema_name="dbo",
                table_name="Orders",
                name="trg_Orders_Audit",
                definition="CREATE TRIGGER [dbo].[trg_Orders_Audit] ON [dbo].[Orders] AFTER INSERT AS SET NOCOUNT ON",
            )
        ],
    )
