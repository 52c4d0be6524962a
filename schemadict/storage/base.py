"""Repository interface consumed by the setup pipeline and the CLI."""

from abc import ABC, abstractmethod

from schemadict.core.models import ColumnMetaData, DatabaseInfo, Table


class Repository(ABC):
    """
    Store for database info, tables and column metadata.

    Implementations must make add_table idempotent by name: setup calls it
    once per column of the table.
    """

    @abstractmethod
    def is_database_metadata_added(self, database_name: str) -> bool:
        """True once database info with this name has been stored."""

    @abstractmethod
    def add_database_info(self, info: DatabaseInfo) -> None:
        pass

    @abstractmethod
    def add_table(self, table: Table) -> None:
        """Insert a table; no-op if a table with that name exists."""

    @abstractmethod
    def add_column_metadata(self, table_name: str, column: ColumnMetaData) -> None:
        """
        Insert or replace a column of a stored table.

        Raises:
            TableNotStoredError: If the table was never added
        """

    @abstractmethod
    def remove_everything(self) -> None:
        pass

    @abstractmethod
    def get_tables(self) -> list[Table]:
        """Stored tables in insertion order."""

    @abstractmethod
    def get_table(self, table_name: str) -> Table:
        pass

    @abstractmethod
    def get_columns(self, table_name: str) -> list[ColumnMetaData]:
        pass

    @abstractmethod
    def get_database_info(self) -> DatabaseInfo:
        """
        Raises:
            NoDatabaseMetaDataStoredError: If nothing was stored yet
        """

    @abstractmethod
    def update_table_description(self, table_name: str, description: str) -> None:
        pass

    @abstractmethod
    def update_column_description(
        self, table_name: str, column_name: str, description: str
    ) -> None:
        pass
