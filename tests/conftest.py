"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import pytest

from schemadict.core.lookups import (
    ENUMS_SQL,
    FOREIGN_KEYS_SQL,
    PRIMARY_KEYS_SQL,
    UNIQUES_SQL,
)
from schemadict.core.models import DatabaseInfo
from schemadict.core.walker import COLUMNS_SQL, TABLES_SQL
from schemadict.storage import JsonStorage

CUSTOMERS_EMAIL_INDEX = (
    "CREATE UNIQUE INDEX customers_email_key ON public.customers USING btree (email)"
)


class FakeCursor:
    """Cursor that answers queries from FakeConnection.results."""

    def __init__(self, conn: FakeConnection):
        self.conn = conn
        self._rows: list[tuple] = []

    def __enter__(self) -> FakeCursor:
        return self

    def __exit__(self, *exc: Any) -> None:
        pass

    def execute(self, query: Any, params: tuple = ()) -> None:
        self.conn.executed.append((query, params))
        # Composed statements (SET search_path) are unhashable and return nothing
        result = self.conn.results.get(query, []) if isinstance(query, str) else []
        if isinstance(result, Exception):
            raise result
        if callable(result):
            result = result(params)
        self._rows = list(result)

    def fetchall(self) -> list[tuple]:
        return self._rows

    def fetchone(self) -> tuple | None:
        return self._rows[0] if self._rows else None


class FakeConnection:
    """
    Stand-in for psycopg.Connection.

    results maps a query object to rows, to a callable taking the params and
    returning rows, or to an exception to raise.
    """

    def __init__(self, results: dict[Any, Any] | None = None):
        self.results: dict[Any, Any] = results or {}
        self.executed: list[tuple[Any, tuple]] = []
        self.closed = False

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def close(self) -> None:
        self.closed = True

    def queries(self) -> list[Any]:
        return [query for query, _ in self.executed]


def columns_by_table(tables: dict[str, list[tuple]]) -> Callable[[tuple], list[tuple]]:
    """Answer COLUMNS_SQL by the table name parameter."""
    return lambda params: tables.get(params[1], [])


def shop_catalog() -> dict[Any, Any]:
    """
    Two tables, five columns.

    customers(id PK, email UNIQUE varchar(255), status customer_status enum)
    orders(id PK, customer_id FK -> customers)
    """
    return {
        TABLES_SQL: [("customers",), ("orders",)],
        COLUMNS_SQL: columns_by_table(
            {
                "customers": [
                    ("id", "int4", "NO", None),
                    ("email", "varchar", "NO", 255),
                    ("status", "customer_status", "YES", None),
                ],
                "orders": [
                    ("id", "int4", "NO", None),
                    ("customer_id", "int4", "NO", None),
                ],
            }
        ),
        PRIMARY_KEYS_SQL: [("id",), ("id",)],
        FOREIGN_KEYS_SQL: [("customer_id", "customers", "CASCADE", "NO ACTION")],
        ENUMS_SQL: [("status", "customer_status", "active,inactive,banned")],
        UNIQUES_SQL: [("email", "customers", CUSTOMERS_EMAIL_INDEX)],
    }


@pytest.fixture
def shop_conn() -> FakeConnection:
    return FakeConnection(shop_catalog())


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    return tmp_path / "schemadict.json"


@pytest.fixture
def storage(storage_path: Path) -> JsonStorage:
    return JsonStorage(storage_path)


@pytest.fixture
def database_info() -> DatabaseInfo:
    return DatabaseInfo(
        name="shop",
        user="app",
        host="localhost",
        port=5432,
        password="secret",
        driver="postgres",
    )


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config discovery and the error log inside tmp_path."""
    for name in ("USER", "PASSWORD", "HOST", "PORT", "NAME", "DRIVER", "SCHEMA_NAME"):
        monkeypatch.delenv(f"SCHEMADICT_DB_{name}", raising=False)
    monkeypatch.delenv("SCHEMADICT_ENRICH", raising=False)
    monkeypatch.setenv("SCHEMADICT_LOG_ERROR_LOG", str(tmp_path / "error.log"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI attached so later tests don't log to closed streams."""
    yield
    logger = logging.getLogger("schemadict")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
