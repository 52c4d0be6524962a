"""Repository backed by a single JSON document on disk."""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from schemadict.core.models import ColumnMetaData, DatabaseInfo, Table
from schemadict.exceptions import (
    ColumnNotStoredError,
    NoDatabaseMetaDataStoredError,
    PersistenceError,
    TableNotStoredError,
)
from schemadict.storage.base import Repository

logger = logging.getLogger(__name__)


def _empty_document() -> dict[str, Any]:
    return {"database": None, "tables": []}


class JsonStorage(Repository):
    """
    JSON document repository.

    Layout:
        {"database": {...} | null,
         "tables": [{"name", "description", "columns": [{...}, ...]}, ...]}

    The document is loaded once and rewritten atomically after every change.
    """

    def __init__(self, path: Path | str):
        """
        Open (or create on first write) the document at path.

        Raises:
            PersistenceError: If the file exists but cannot be read or decoded
        """
        self.path = Path(path)
        self._doc = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return _empty_document()
        try:
            with open(self.path, encoding="utf-8") as f:
                doc = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(str(self.path), str(e)) from e
        if not isinstance(doc, dict) or not isinstance(doc.get("tables"), list):
            raise PersistenceError(str(self.path), "not a schemadict document")
        doc.setdefault("database", None)
        return doc

    def _save(self, doc: dict[str, Any]) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(doc, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise PersistenceError(str(self.path), str(e)) from e

    def _draft(self) -> dict[str, Any]:
        """Working copy for a change; see _commit."""
        return copy.deepcopy(self._doc)

    def _commit(self, doc: dict[str, Any]) -> None:
        """Adopt doc in memory only once it is on disk."""
        self._save(doc)
        self._doc = doc

    def _find_table(self, doc: dict[str, Any], table_name: str) -> dict[str, Any] | None:
        for entry in doc["tables"]:
            if entry["name"] == table_name:
                return entry
        return None

    def _require_table(self, doc: dict[str, Any], table_name: str) -> dict[str, Any]:
        entry = self._find_table(doc, table_name)
        if entry is None:
            raise TableNotStoredError(table_name)
        return entry

    def is_database_metadata_added(self, database_name: str) -> bool:
        database = self._doc["database"]
        return database is not None and database.get("name") == database_name

    def add_database_info(self, info: DatabaseInfo) -> None:
        doc = self._draft()
        doc["database"] = info.to_dict()
        self._commit(doc)

    def add_table(self, table: Table) -> None:
        if self._find_table(self._doc, table.name) is not None:
            return
        doc = self._draft()
        entry = table.to_dict()
        entry["columns"] = []
        doc["tables"].append(entry)
        self._commit(doc)

    def add_column_metadata(self, table_name: str, column: ColumnMetaData) -> None:
        doc = self._draft()
        entry = self._require_table(doc, table_name)
        record = column.to_dict()
        for i, existing in enumerate(entry["columns"]):
            if existing["name"] == column.name:
                entry["columns"][i] = record
                break
        else:
            entry["columns"].append(record)
        self._commit(doc)

    def remove_everything(self) -> None:
        self._commit(_empty_document())
        logger.warning("Removed all stored metadata from %s", self.path)

    def get_tables(self) -> list[Table]:
        return [Table.from_dict(entry) for entry in self._doc["tables"]]

    def get_table(self, table_name: str) -> Table:
        return Table.from_dict(self._require_table(self._doc, table_name))

    def get_columns(self, table_name: str) -> list[ColumnMetaData]:
        entry = self._require_table(self._doc, table_name)
        return [ColumnMetaData.from_dict(record) for record in entry["columns"]]

    def get_database_info(self) -> DatabaseInfo:
        database = self._doc["database"]
        if database is None:
            raise NoDatabaseMetaDataStoredError()
        return DatabaseInfo.from_dict(database)

    def update_table_description(self, table_name: str, description: str) -> None:
        doc = self._draft()
        self._require_table(doc, table_name)["description"] = description
        self._commit(doc)

    def update_column_description(
        self, table_name: str, column_name: str, description: str
    ) -> None:
        doc = self._draft()
        entry = self._require_table(doc, table_name)
        for record in entry["columns"]:
            if record["name"] == column_name:
                record["description"] = description
                self._commit(doc)
                return
        raise ColumnNotStoredError(table_name, column_name)
