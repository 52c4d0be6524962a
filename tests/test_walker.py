"""Tests for the schema walker."""

from conftest import FakeConnection, columns_by_table
from schemadict.core.models import BaseColumn
from schemadict.core.walker import (
    COLUMNS_SQL,
    TABLES_SQL,
    SchemaWalker,
    parse_length,
    parse_nullable,
    scan_type_for,
)


def test_list_tables(shop_conn: FakeConnection):
    """Should return table names in catalog order."""
    walker = SchemaWalker(shop_conn, "public")

    assert walker.list_tables() == ["customers", "orders"]
    assert shop_conn.executed == [(TABLES_SQL, ("public",))]


def test_list_columns(shop_conn: FakeConnection):
    """Should build base descriptors in ordinal order."""
    columns = SchemaWalker(shop_conn, "public").list_columns("customers")

    assert columns == [
        BaseColumn(name="id", db_type="INT4", nullable=False, scan_type="int", length=0),
        BaseColumn(name="email", db_type="VARCHAR", nullable=False, scan_type="str", length=255),
        BaseColumn(
            name="status",
            db_type="CUSTOMER_STATUS",
            nullable=True,
            scan_type="str",
            length=0,
        ),
    ]
    assert shop_conn.executed[-1] == (COLUMNS_SQL, ("public", "customers"))


def test_unreported_nullability_and_length_default():
    """Should treat unreported nullability as False and length as 0."""
    conn = FakeConnection(
        {COLUMNS_SQL: columns_by_table({"t": [("c", "text", None, None)]})}
    )

    (column,) = SchemaWalker(conn, "public").list_columns("t")
    assert column.nullable is False
    assert column.length == 0


def test_parse_helpers():
    assert parse_nullable("YES") is True
    assert parse_nullable("NO") is False
    assert parse_nullable(None) is False
    assert parse_length(None) == 0
    assert parse_length(64) == 64


def test_scan_types():
    assert scan_type_for("int8") == "int"
    assert scan_type_for("numeric") == "decimal.Decimal"
    assert scan_type_for("timestamptz") == "datetime.datetime"
    assert scan_type_for("_int4") == "list"
    assert scan_type_for("some_enum") == "str"


def test_walk_reads_every_table(shop_conn: FakeConnection):
    """Should pair each table with its columns."""
    result = SchemaWalker(shop_conn, "public").walk()

    assert [name for name, _ in result] == ["customers", "orders"]
    assert [len(columns) for _, columns in result] == [3, 2]
