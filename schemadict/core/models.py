"""
Core data models for schemadict.

Defines the records extracted from the database catalog and stored in the
repository: database connection info, tables and per-column metadata.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any


@dataclass(frozen=True)
class DatabaseInfo:
    """
    Identifies one logical database connection.

    The password is stored in plaintext, like every other field.
    """

    name: str
    user: str
    host: str
    port: int
    password: str
    driver: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DatabaseInfo:
        return cls(**_known_fields(cls, data))


@dataclass
class Table:
    """A database table with its user-editable description."""

    name: str
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Table:
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class BaseColumn:
    """
    Column attributes read from the catalog, before enrichment.

    Attributes:
        name: Column name
        db_type: Native type name (e.g. VARCHAR, INT4)
        nullable: Whether column allows NULL (False when unreported)
        scan_type: Python type the driver loads values into
        length: Declared length (0 when unbounded or unreported)
    """

    name: str
    db_type: str
    nullable: bool
    scan_type: str
    length: int


@dataclass(frozen=True)
class ForeignKeyRule:
    """Foreign key target and referential actions for a column."""

    target_table: str
    delete_rule: str
    update_rule: str


@dataclass(frozen=True)
class EnumType:
    """
    Enum type backing a column.

    `value` holds the labels comma-joined, in declaration order.
    """

    enum_name: str
    value: str

    @property
    def values(self) -> list[str]:
        """Split labels without trimming whitespace."""
        return self.value.split(",")


@dataclass(frozen=True)
class UniqueIndex:
    """Unique index covering a column, as reported by pg_get_indexdef."""

    definition: str


@dataclass
class ColumnMetaData:
    """
    Consolidated metadata for one (table, column) pair.

    Table name plus column name is the natural key.
    """

    name: str
    table_name: str
    db_type: str = ""
    nullable: bool = False
    scan_type: str = ""
    length: int = 0
    description: str = ""
    is_primary_key: bool = False
    is_foreign_key: bool = False
    target_table_fk: str = ""
    delete_rule: str = ""
    update_rule: str = ""
    has_enum: bool = False
    enum_name: str = ""
    enum_values: list[str] = field(default_factory=list)
    is_unique: bool = False
    unique_index_definition: str = ""

    @classmethod
    def from_base(cls, table_name: str, base: BaseColumn) -> ColumnMetaData:
        """Start a record from the catalog's base descriptor."""
        return cls(
            name=base.name,
            table_name=table_name,
            db_type=base.db_type,
            nullable=base.nullable,
            scan_type=base.scan_type,
            length=base.length,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ColumnMetaData:
        return cls(**_known_fields(cls, data))


def _known_fields(cls: type, data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys a record class does not declare (forward compatibility)."""
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in data.items() if key in names}
