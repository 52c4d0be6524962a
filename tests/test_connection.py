"""Tests for opening the database connection."""

import psycopg
import pytest
from psycopg import sql

from conftest import FakeConnection
from schemadict.config import DatabaseConfig
from schemadict.core import connection
from schemadict.exceptions import DatabaseConnectionError, UnsupportedDriverError


def make_config(**overrides) -> DatabaseConfig:
    values = dict(user="app", password="secret", host="localhost", name="shop")
    values.update(overrides)
    return DatabaseConfig(**values)


def test_connects_pings_and_sets_search_path(monkeypatch: pytest.MonkeyPatch):
    fake = FakeConnection()
    calls = []

    def fake_connect(dsn, **kwargs):
        calls.append((dsn, kwargs))
        return fake

    monkeypatch.setattr(psycopg, "connect", fake_connect)

    conn = connection.connect(make_config(schema_name="sales"))

    assert conn is fake
    assert calls == [
        (
            "user=app password=secret host=localhost port=5432 dbname=shop sslmode=disable",
            {"autocommit": True},
        )
    ]
    assert fake.queries()[0] == "SELECT 1"
    assert isinstance(fake.queries()[1], sql.Composed)


def test_empty_schema_leaves_search_path(monkeypatch: pytest.MonkeyPatch):
    fake = FakeConnection()
    monkeypatch.setattr(psycopg, "connect", lambda dsn, **kwargs: fake)

    connection.connect(make_config(schema_name=""))

    assert fake.queries() == ["SELECT 1"]


def test_unsupported_driver_fails_before_connecting(monkeypatch: pytest.MonkeyPatch):
    def fail(*args, **kwargs):
        raise AssertionError("should not connect")

    monkeypatch.setattr(psycopg, "connect", fail)

    with pytest.raises(UnsupportedDriverError) as exc_info:
        connection.connect(make_config(driver="mysql"))

    assert exc_info.value.driver == "mysql"


def test_connect_failure(monkeypatch: pytest.MonkeyPatch):
    def refuse(*args, **kwargs):
        raise psycopg.OperationalError("connection refused")

    monkeypatch.setattr(psycopg, "connect", refuse)

    with pytest.raises(DatabaseConnectionError, match="connection refused"):
        connection.connect(make_config())


def test_ping_failure_closes_connection(monkeypatch: pytest.MonkeyPatch):
    fake = FakeConnection({"SELECT 1": psycopg.OperationalError("server closed")})
    monkeypatch.setattr(psycopg, "connect", lambda dsn, **kwargs: fake)

    with pytest.raises(DatabaseConnectionError):
        connection.connect(make_config())

    assert fake.closed is True
