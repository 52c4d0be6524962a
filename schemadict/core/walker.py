"""Enumerate tables and their columns from information_schema."""

from __future__ import annotations

import logging
from typing import Any, Optional

from psycopg import Connection

from schemadict.core.lookups import run_catalog_query
from schemadict.core.models import BaseColumn

logger = logging.getLogger(__name__)

TABLES_SQL = """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_schema = %s
      AND table_type = 'BASE TABLE'
    ORDER BY table_name
"""

COLUMNS_SQL = """
    SELECT
        column_name,
        udt_name,
        is_nullable,
        character_maximum_length
    FROM information_schema.columns
    WHERE table_schema = %s
      AND table_name = %s
    ORDER BY ordinal_position
"""

# Python types psycopg loads each PostgreSQL type into
SCAN_TYPES: dict[str, str] = {
    "bool": "bool",
    "int2": "int",
    "int4": "int",
    "int8": "int",
    "oid": "int",
    "float4": "float",
    "float8": "float",
    "numeric": "decimal.Decimal",
    "money": "str",
    "text": "str",
    "varchar": "str",
    "bpchar": "str",
    "char": "str",
    "name": "str",
    "citext": "str",
    "bytea": "bytes",
    "date": "datetime.date",
    "time": "datetime.time",
    "timetz": "datetime.time",
    "timestamp": "datetime.datetime",
    "timestamptz": "datetime.datetime",
    "interval": "datetime.timedelta",
    "uuid": "uuid.UUID",
    "json": "dict",
    "jsonb": "dict",
    "inet": "ipaddress.IPv4Address",
    "cidr": "ipaddress.IPv4Network",
}

# Types without a dedicated loader come back as text
DEFAULT_SCAN_TYPE = "str"


def scan_type_for(udt_name: str) -> str:
    """Python type name for a column's udt_name (arrays start with '_')."""
    if udt_name.startswith("_"):
        return "list"
    return SCAN_TYPES.get(udt_name, DEFAULT_SCAN_TYPE)


def parse_nullable(value: Any) -> bool:
    """is_nullable is 'YES' or 'NO'; anything unreported counts as not nullable."""
    if value is None:
        return False
    return str(value).upper() == "YES"


def parse_length(value: Optional[int]) -> int:
    """character_maximum_length, or 0 when unbounded or unreported."""
    if value is None:
        return 0
    return int(value)


class SchemaWalker:
    """Walk tables and columns of one schema in catalog order."""

    def __init__(self, conn: Connection, schema: str):
        self.conn = conn
        self.schema = schema

    def list_tables(self) -> list[str]:
        rows = run_catalog_query(self.conn, "tables", TABLES_SQL, (self.schema,))
        return [row[0] for row in rows]

    def list_columns(self, table_name: str) -> list[BaseColumn]:
        """Base descriptors for a table, in ordinal position order."""
        rows = run_catalog_query(
            self.conn, "columns", COLUMNS_SQL, (self.schema, table_name)
        )
        return [
            BaseColumn(
                name=column_name,
                db_type=udt_name.upper(),
                nullable=parse_nullable(is_nullable),
                scan_type=scan_type_for(udt_name),
                length=parse_length(max_length),
            )
            for column_name, udt_name, is_nullable, max_length in rows
        ]

    def walk(self) -> list[tuple[str, list[BaseColumn]]]:
        """
        Read every table's columns up front.

        Returns:
            (table name, columns) pairs in table-name order
        """
        tables = self.list_tables()
        result = [(table_name, self.list_columns(table_name)) for table_name in tables]
        logger.info(
            "Walked schema %s: %d tables, %d columns",
            self.schema,
            len(result),
            sum(len(columns) for _, columns in result),
        )
        return result
