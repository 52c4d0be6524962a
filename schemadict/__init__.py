"""
schemadict - Database schema dictionary.

This package provides tools for:
- Introspecting a PostgreSQL schema (tables, columns, keys, enums, unique indexes)
- Storing one consolidated metadata record per column in a JSON repository
- Documenting tables and columns with free-text descriptions
- Serving a minimal web page
"""

__version__ = "0.1.0"

from schemadict.core.models import ColumnMetaData, DatabaseInfo, Table
from schemadict.core.setup import SetupContext, setup_database_metadata
from schemadict.storage import JsonStorage, Repository

__all__ = [
    "ColumnMetaData",
    "DatabaseInfo",
    "JsonStorage",
    "Repository",
    "SetupContext",
    "Table",
    "__version__",
    "setup_database_metadata",
]
