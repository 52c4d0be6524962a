"""Core functionality for schemadict."""

from schemadict.core.lookups import (
    ConstraintLookups,
    Enums,
    ForeignKeys,
    PrimaryKeys,
    Uniques,
)
from schemadict.core.merger import merge_column, merge_table
from schemadict.core.models import (
    BaseColumn,
    ColumnMetaData,
    DatabaseInfo,
    EnumType,
    ForeignKeyRule,
    Table,
    UniqueIndex,
)
from schemadict.core.setup import SetupContext, SetupResult, setup_database_metadata
from schemadict.core.walker import SchemaWalker

__all__ = [
    "BaseColumn",
    "ColumnMetaData",
    "ConstraintLookups",
    "DatabaseInfo",
    "EnumType",
    "Enums",
    "ForeignKeyRule",
    "ForeignKeys",
    "PrimaryKeys",
    "SchemaWalker",
    "SetupContext",
    "SetupResult",
    "Table",
    "UniqueIndex",
    "Uniques",
    "merge_column",
    "merge_table",
    "setup_database_metadata",
]
