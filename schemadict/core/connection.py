"""Open and prepare the PostgreSQL connection used for introspection."""

import logging

import psycopg
from psycopg import Connection, sql

from schemadict.config import DatabaseConfig
from schemadict.exceptions import DatabaseConnectionError, UnsupportedDriverError

logger = logging.getLogger(__name__)

SUPPORTED_DRIVERS = frozenset({"postgres", "postgresql", "psycopg"})


def connect(config: DatabaseConfig) -> Connection:
    """
    Open, ping and configure a connection.

    Args:
        config: Database connection configuration

    Returns:
        Autocommit psycopg connection with search_path set

    Raises:
        UnsupportedDriverError: If the driver is not PostgreSQL
        DatabaseConnectionError: If connecting, pinging or SET search_path fails
    """
    if config.driver.lower() not in SUPPORTED_DRIVERS:
        raise UnsupportedDriverError(config.name, config.driver)

    try:
        conn = psycopg.connect(config.dsn(), autocommit=True)
    except psycopg.Error as e:
        raise DatabaseConnectionError(config.name, str(e)) from e

    try:
        ping(conn)
        if config.schema_name:
            set_search_path(conn, config.schema_name)
    except psycopg.Error as e:
        conn.close()
        raise DatabaseConnectionError(config.name, str(e)) from e

    logger.info("Connected to database %s on %s:%d", config.name, config.host, config.port)
    return conn


def ping(conn: Connection) -> None:
    with conn.cursor() as cur:
        cur.execute("SELECT 1")
        cur.fetchone()


def set_search_path(conn: Connection, schema: str) -> None:
    """Put schema first on the search path (quoted as an identifier)."""
    with conn.cursor() as cur:
        cur.execute(sql.SQL("SET search_path TO {}").format(sql.Identifier(schema)))
