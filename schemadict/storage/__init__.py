"""Repository implementations."""

from schemadict.storage.base import Repository
from schemadict.storage.json_storage import JsonStorage

__all__ = ["JsonStorage", "Repository"]
