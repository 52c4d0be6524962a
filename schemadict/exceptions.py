"""Custom exceptions with helpful error messages."""


class SchemaDictError(Exception):
    """Base exception for schemadict errors."""

    pass


class DatabaseConnectionError(SchemaDictError):
    """Database could not be opened, pinged or configured."""

    def __init__(self, database: str, reason: str):
        self.database = database
        super().__init__(
            f"Could not connect to database '{database}': {reason}\n\n"
            f"Suggestions:\n"
            f"1. Check --db-host, --db-port and --db-name\n"
            f"2. Check the user and password\n"
            f"3. Ensure the server accepts connections without SSL (sslmode=disable)"
        )


class UnsupportedDriverError(DatabaseConnectionError):
    """Configured driver name is not supported."""

    def __init__(self, database: str, driver: str):
        self.driver = driver
        super().__init__(database, f"unsupported driver '{driver}' (use 'postgres')")


class QueryError(SchemaDictError):
    """A catalog query failed."""

    def __init__(self, lookup: str, reason: str):
        self.lookup = lookup
        super().__init__(f"Catalog query '{lookup}' failed: {reason}")


class NotFoundError(SchemaDictError):
    """Requested record is not stored in the repository."""

    pass


class NoDatabaseMetaDataStoredError(NotFoundError):
    """No database metadata has ever been stored."""

    def __init__(self) -> None:
        super().__init__(
            "There is no database metadata stored in repository.\n\n"
            "Suggestions:\n"
            "1. Run: schemadict setup --db-name <name> ...\n"
            "2. Check --storage points at the right file"
        )


class TableNotStoredError(NotFoundError):
    """Table is not stored in the repository."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(
            f"Table '{table}' is not stored in repository.\n\n"
            f"Suggestions:\n"
            f"1. Check table name spelling\n"
            f"2. Use 'schemadict tables' to see stored tables"
        )


class ColumnNotStoredError(NotFoundError):
    """Column is not stored in the repository."""

    def __init__(self, table: str, column: str):
        self.table = table
        self.column = column
        super().__init__(
            f"Column '{column}' of table '{table}' is not stored in repository."
        )


class PersistenceError(SchemaDictError):
    """Repository could not read or write its backing store."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Repository '{path}' failed: {reason}")


class RepositoryInUseError(SchemaDictError):
    """Repository already holds metadata for a different database."""

    def __init__(self, stored: str, requested: str):
        self.stored = stored
        self.requested = requested
        super().__init__(
            f"Repository already holds metadata for database '{stored}', "
            f"refusing to add '{requested}'.\n\n"
            f"Suggestions:\n"
            f"1. Use a separate repository: --storage {requested}.json\n"
            f"2. Or clear it first: schemadict reset"
        )


class MissingConfigError(SchemaDictError):
    """Required connection settings are empty."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        flags = ", ".join(f"--db-{name}" for name in fields)
        super().__init__(
            f"Missing required database settings: {', '.join(fields)}\n\n"
            f"Suggestions:\n"
            f"1. Pass {flags}\n"
            f"2. Or set them under [database] in schemadict.toml"
        )
