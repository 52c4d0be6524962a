"""
Setup orchestrator.

Reads the schema and its constraints, merges them into column metadata and
persists the result, at most once per database name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from psycopg import Connection

from schemadict.core.lookups import ConstraintLookups
from schemadict.core.merger import merge_table
from schemadict.core.models import DatabaseInfo, Table
from schemadict.core.walker import SchemaWalker
from schemadict.exceptions import NoDatabaseMetaDataStoredError, RepositoryInUseError
from schemadict.storage.base import Repository

logger = logging.getLogger(__name__)


@dataclass
class SetupContext:
    """
    Everything one setup run needs, built once at startup.

    Attributes:
        conn: Open connection to the database being described
        repository: Store receiving the metadata
        database: Connection info recorded for the database
        schema: Schema to introspect
        enrich: Whether to consult the constraint lookups
    """

    conn: Connection
    repository: Repository
    database: DatabaseInfo
    schema: str = "public"
    enrich: bool = True


@dataclass
class SetupResult:
    """Outcome of a setup run."""

    skipped: bool
    tables: int = 0
    columns: int = 0


def setup_database_metadata(ctx: SetupContext) -> SetupResult:
    """
    Extract and store metadata unless this database was stored already.

    All catalog reads complete before the first write, so a failing query
    leaves the repository untouched. A failing write stops the run and keeps
    what was written before it.

    Args:
        ctx: Setup context

    Returns:
        SetupResult (skipped=True when metadata already existed)

    Raises:
        RepositoryInUseError: If the repository holds another database
        QueryError: If any catalog query fails
        PersistenceError: If the repository cannot be read or written
    """
    repository = ctx.repository
    if repository.is_database_metadata_added(ctx.database.name):
        logger.info("Metadata for database %s already stored, skipping", ctx.database.name)
        return SetupResult(skipped=True)
    _check_repository_free(repository, ctx.database.name)

    if ctx.enrich:
        lookups = ConstraintLookups.load(ctx.conn, ctx.schema)
    else:
        lookups = ConstraintLookups()
    schema_tables = SchemaWalker(ctx.conn, ctx.schema).walk()

    repository.add_database_info(ctx.database)

    result = SetupResult(skipped=False)
    for table_name, columns in schema_tables:
        for meta in merge_table(table_name, columns, lookups, ctx.enrich):
            repository.add_table(Table(name=table_name))
            repository.add_column_metadata(table_name, meta)
            logger.debug("Stored column %s.%s", table_name, meta.name)
            result.columns += 1
        if columns:
            result.tables += 1

    logger.info(
        "Stored metadata for database %s: %d tables, %d columns",
        ctx.database.name,
        result.tables,
        result.columns,
    )
    return result


def _check_repository_free(repository: Repository, database_name: str) -> None:
    """The repository holds one database; refuse to mix in another."""
    try:
        stored = repository.get_database_info()
    except NoDatabaseMetaDataStoredError:
        return
    if stored.name != database_name:
        raise RepositoryInUseError(stored.name, database_name)
