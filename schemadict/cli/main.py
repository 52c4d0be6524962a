"""CLI commands for schemadict."""

from __future__ import annotations

import functools
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import click

from schemadict.config import Config
from schemadict.core.connection import connect
from schemadict.core.setup import SetupContext, SetupResult, setup_database_metadata
from schemadict.exceptions import MissingConfigError, SchemaDictError
from schemadict.logs import configure_logging
from schemadict.storage import JsonStorage

logger = logging.getLogger(__name__)


def _fail(error: SchemaDictError) -> None:
    logger.error("%s", error)
    sys.exit(1)


def handle_errors(func: Callable) -> Callable:
    """Log any schemadict error to the error log and exit non-zero."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except SchemaDictError as e:
            _fail(e)

    return wrapper


def database_options(func: Callable) -> Callable:
    """Connection and storage flags shared by setup and serve."""
    options = [
        click.option("--db-user", help="Database user"),
        click.option("--db-password", help="Database password"),
        click.option("--db-host", help="Database host"),
        click.option("--db-port", type=int, help="Database port (default: 5432)"),
        click.option("--db-name", help="Database name"),
        click.option("--db-driver", help="Database driver (default: postgres)"),
        click.option("--db-schema", help="Schema for search_path (default: public)"),
        click.option("--storage", "storage_path", help="JSON repository file"),
        click.option(
            "--no-enrich",
            is_flag=True,
            help="Store base column attributes only (no keys, enums or uniques)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def apply_overrides(config: Config, **flags: Any) -> Config:
    """Overlay command line flags that were given onto the loaded config."""
    mapping = {
        "db_user": "user",
        "db_password": "password",
        "db_host": "host",
        "db_port": "port",
        "db_name": "name",
        "db_driver": "driver",
        "db_schema": "schema_name",
    }
    updates = {
        field: flags[flag] for flag, field in mapping.items() if flags.get(flag) is not None
    }
    if updates:
        config.database = config.database.model_copy(update=updates)
    if flags.get("storage_path"):
        config.storage = config.storage.model_copy(update={"path": flags["storage_path"]})
    if flags.get("server_port") is not None:
        config.server = config.server.model_copy(update={"port": flags["server_port"]})
    if flags.get("server_host"):
        config.server = config.server.model_copy(update={"host": flags["server_host"]})
    if flags.get("no_enrich"):
        config.enrich = False
    return config


def load_config(path: Optional[str]) -> Config:
    if path:
        return Config.from_toml(path)
    try:
        return Config.find_and_load()
    except FileNotFoundError:
        return Config()


def run_setup(config: Config) -> SetupResult:
    """
    Connect, extract and store metadata for the configured database.

    Raises:
        MissingConfigError: If required connection settings are empty
        SchemaDictError: On any connection, query or persistence failure
    """
    missing = config.database.missing_fields()
    if missing:
        raise MissingConfigError(missing)

    storage = JsonStorage(config.storage.path)
    conn = connect(config.database)
    try:
        click.echo(f"You connected to your database: {config.database.name}")
        ctx = SetupContext(
            conn=conn,
            repository=storage,
            database=config.database.to_database_info(),
            schema=config.database.schema_name or "public",
            enrich=config.enrich,
        )
        return setup_database_metadata(ctx)
    finally:
        conn.close()


def echo_result(result: SetupResult) -> None:
    if result.skipped:
        click.echo("Metadata already stored, nothing to do.")
    else:
        click.echo(f"Stored {result.tables} tables and {result.columns} columns.")


@click.group()
@click.version_option(package_name="schemadict")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to schemadict.toml (default: search upwards from cwd)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str]) -> None:
    """schemadict - store and document a database schema."""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    configure_logging(config.log)
    ctx.obj = config


@cli.command()
@database_options
@click.pass_obj
@handle_errors
def setup(config: Config, **flags: Any) -> None:
    """Extract schema metadata into the repository (once per database)."""
    config = apply_overrides(config, **flags)
    echo_result(run_setup(config))


@cli.command()
@database_options
@click.option("--server-port", type=int, help="Port used for http server (default: 8080)")
@click.option("--server-host", help="Interface to bind (default: 127.0.0.1)")
@click.pass_obj
@handle_errors
def serve(config: Config, **flags: Any) -> None:
    """Extract metadata if needed, then serve the web page."""
    import uvicorn

    from schemadict.web import create_app

    config = apply_overrides(config, **flags)
    echo_result(run_setup(config))

    logger.info("Serving on http://%s:%d", config.server.host, config.server.port)
    uvicorn.run(create_app(), host=config.server.host, port=config.server.port)


@cli.command()
@click.option("--storage", "storage_path", help="JSON repository file")
@click.pass_obj
@handle_errors
def tables(config: Config, storage_path: Optional[str]) -> None:
    """List stored tables."""
    storage = JsonStorage(storage_path or config.storage.path)
    info = storage.get_database_info()
    click.echo(f"Database: {info.name} ({info.driver}://{info.host}:{info.port})")
    for table in storage.get_tables():
        count = len(storage.get_columns(table.name))
        line = f"  {table.name} ({count} columns)"
        if table.description:
            line += f" - {table.description}"
        click.echo(line)


@cli.command("describe-table")
@click.argument("table")
@click.argument("description")
@click.option("--storage", "storage_path", help="JSON repository file")
@click.pass_obj
@handle_errors
def describe_table(
    config: Config, table: str, description: str, storage_path: Optional[str]
) -> None:
    """Set a table's description."""
    storage = JsonStorage(storage_path or config.storage.path)
    storage.update_table_description(table, description)
    click.echo(f"Updated description of {table}")


@cli.command("describe-column")
@click.argument("table")
@click.argument("column")
@click.argument("description")
@click.option("--storage", "storage_path", help="JSON repository file")
@click.pass_obj
@handle_errors
def describe_column(
    config: Config,
    table: str,
    column: str,
    description: str,
    storage_path: Optional[str],
) -> None:
    """Set a column's description."""
    storage = JsonStorage(storage_path or config.storage.path)
    storage.update_column_description(table, column, description)
    click.echo(f"Updated description of {table}.{column}")


@cli.command()
@click.option("--storage", "storage_path", help="JSON repository file")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
@handle_errors
def reset(config: Config, storage_path: Optional[str], yes: bool) -> None:
    """Remove everything from the repository."""
    path = Path(storage_path or config.storage.path)
    if not yes:
        click.confirm(f"Remove all metadata stored in {path}?", abort=True)
    JsonStorage(path).remove_everything()
    click.echo("Repository cleared.")


if __name__ == "__main__":
    cli()
