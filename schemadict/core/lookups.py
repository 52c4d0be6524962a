"""
Constraint lookups read from the PostgreSQL catalog.

Each lookup runs one query for the whole schema and indexes the result by
column name (uniques also by table name). When the same key appears in more
than one row the first row wins; every query is ordered so this is stable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import psycopg
from psycopg import Connection

from schemadict.core.models import EnumType, ForeignKeyRule, UniqueIndex
from schemadict.exceptions import QueryError

logger = logging.getLogger(__name__)

PRIMARY_KEYS_SQL = """
    SELECT kcu.column_name
    FROM information_schema.table_constraints tc
    JOIN information_schema.key_column_usage kcu
      ON tc.constraint_name = kcu.constraint_name
      AND tc.table_schema = kcu.table_schema
    WHERE tc.constraint_type = 'PRIMARY KEY'
      AND tc.table_schema = %s
    ORDER BY tc.table_name, kcu.ordinal_position
"""

FOREIGN_KEYS_SQL = """
    SELECT
        kcu.column_name,
        ccu.table_name AS target_table,
        rc.delete_rule,
        rc.update_rule
    FROM information_schema.table_constraints tc
    JOIN information_schema.key_column_usage kcu
      ON tc.constraint_name = kcu.constraint_name
      AND tc.table_schema = kcu.table_schema
    JOIN information_schema.referential_constraints rc
      ON rc.constraint_name = tc.constraint_name
      AND rc.constraint_schema = tc.table_schema
    JOIN information_schema.constraint_column_usage ccu
      ON ccu.constraint_name = tc.constraint_name
      AND ccu.constraint_schema = tc.table_schema
    WHERE tc.constraint_type = 'FOREIGN KEY'
      AND tc.table_schema = %s
    ORDER BY tc.table_name, kcu.ordinal_position
"""

ENUMS_SQL = """
    SELECT
        c.column_name,
        t.typname AS enum_name,
        string_agg(e.enumlabel, ',' ORDER BY e.enumsortorder) AS enum_value
    FROM information_schema.columns c
    JOIN pg_type t ON t.typname = c.udt_name
    JOIN pg_namespace tn ON tn.oid = t.typnamespace AND tn.nspname = c.udt_schema
    JOIN pg_enum e ON e.enumtypid = t.oid
    WHERE c.table_schema = %s
    GROUP BY c.table_name, c.column_name, t.typname
    ORDER BY c.table_name, c.column_name
"""

UNIQUES_SQL = """
    SELECT
        a.attname AS column_name,
        t.relname AS table_name,
        pg_get_indexdef(i.indexrelid) AS definition
    FROM pg_index i
    JOIN pg_class t ON t.oid = i.indrelid
    JOIN pg_namespace n ON n.oid = t.relnamespace
    JOIN pg_attribute a ON a.attrelid = t.oid AND a.attnum = ANY(i.indkey)
    WHERE i.indisunique
      AND NOT i.indisprimary
      AND n.nspname = %s
    ORDER BY t.relname, a.attname, i.indexrelid
"""


def run_catalog_query(
    conn: Connection, lookup: str, query: Any, params: tuple = ()
) -> list[tuple]:
    """
    Execute a catalog query and return all rows.

    Raises:
        QueryError: If the driver reports any error
    """
    try:
        with conn.cursor() as cur:
            cur.execute(query, params)
            return cur.fetchall()
    except psycopg.Error as e:
        raise QueryError(lookup, str(e)) from e


@dataclass
class PrimaryKeys:
    """
    Column names flagged as primary key anywhere in the schema.

    Not table-qualified: a column named like a primary key in another table
    is reported as a primary key there too.
    """

    columns: set[str] = field(default_factory=set)

    @classmethod
    def load(cls, conn: Connection, schema: str) -> PrimaryKeys:
        rows = run_catalog_query(conn, "primary_keys", PRIMARY_KEYS_SQL, (schema,))
        return cls(columns={row[0] for row in rows})

    def exists(self, column_name: str) -> bool:
        return column_name in self.columns


@dataclass
class ForeignKeys:
    """Foreign key rules keyed by column name."""

    rules: dict[str, ForeignKeyRule] = field(default_factory=dict)

    @classmethod
    def load(cls, conn: Connection, schema: str) -> ForeignKeys:
        rows = run_catalog_query(conn, "foreign_keys", FOREIGN_KEYS_SQL, (schema,))
        rules: dict[str, ForeignKeyRule] = {}
        for column_name, target_table, delete_rule, update_rule in rows:
            rules.setdefault(
                column_name,
                ForeignKeyRule(
                    target_table=target_table,
                    delete_rule=delete_rule,
                    update_rule=update_rule,
                ),
            )
        return cls(rules=rules)

    def exists(self, column_name: str) -> bool:
        return column_name in self.rules

    def get(self, column_name: str) -> Optional[ForeignKeyRule]:
        return self.rules.get(column_name)


@dataclass
class Enums:
    """Enum types keyed by the column name they back."""

    types: dict[str, EnumType] = field(default_factory=dict)

    @classmethod
    def load(cls, conn: Connection, schema: str) -> Enums:
        rows = run_catalog_query(conn, "enums", ENUMS_SQL, (schema,))
        types: dict[str, EnumType] = {}
        for column_name, enum_name, enum_value in rows:
            types.setdefault(column_name, EnumType(enum_name=enum_name, value=enum_value))
        return cls(types=types)

    def exists(self, column_name: str) -> bool:
        return column_name in self.types

    def get(self, column_name: str) -> Optional[EnumType]:
        return self.types.get(column_name)


@dataclass
class Uniques:
    """Unique index definitions keyed by (column name, table name)."""

    indexes: dict[tuple[str, str], UniqueIndex] = field(default_factory=dict)

    @classmethod
    def load(cls, conn: Connection, schema: str) -> Uniques:
        rows = run_catalog_query(conn, "uniques", UNIQUES_SQL, (schema,))
        indexes: dict[tuple[str, str], UniqueIndex] = {}
        for column_name, table_name, definition in rows:
            indexes.setdefault((column_name, table_name), UniqueIndex(definition=definition))
        return cls(indexes=indexes)

    def exists(self, column_name: str, table_name: str) -> bool:
        return (column_name, table_name) in self.indexes

    def get(self, column_name: str, table_name: str) -> Optional[UniqueIndex]:
        return self.indexes.get((column_name, table_name))


@dataclass
class ConstraintLookups:
    """The four lookups consulted when enriching a column."""

    primary_keys: PrimaryKeys = field(default_factory=PrimaryKeys)
    foreign_keys: ForeignKeys = field(default_factory=ForeignKeys)
    enums: Enums = field(default_factory=Enums)
    uniques: Uniques = field(default_factory=Uniques)

    @classmethod
    def load(cls, conn: Connection, schema: str) -> ConstraintLookups:
        """
        Run all four catalog queries.

        Raises:
            QueryError: On the first query that fails; nothing is returned
        """
        lookups = cls(
            primary_keys=PrimaryKeys.load(conn, schema),
            foreign_keys=ForeignKeys.load(conn, schema),
            enums=Enums.load(conn, schema),
            uniques=Uniques.load(conn, schema),
        )
        logger.info(
            "Loaded constraints: %d primary keys, %d foreign keys, %d enums, %d unique columns",
            len(lookups.primary_keys.columns),
            len(lookups.foreign_keys.rules),
            len(lookups.enums.types),
            len(lookups.uniques.indexes),
        )
        return lookups
