from __future__ import annotations

from .action import Action
from .database import Database
from .document import Document, DocumentFilter
from .errors import FormatError, InstantStoreError, StorageError, TypeMismatchError
from .json_store import decode_list, decode_mapping, encode
from .records import KeyedRecord
from .settings import Settings, get_settings

__version__ = "1.5.0"

KeyedStore = Database
ListStore = Document
EditBuffer = Action

__all__ = [
    "Action",
    "Database",
    "Document",
    "DocumentFilter",
    "EditBuffer",
    "FormatError",
    "InstantStoreError",
    "KeyedRecord",
    "KeyedStore",
    "ListStore",
    "Settings",
    "StorageError",
    "TypeMismatchError",
    "decode_list",
    "decode_mapping",
    "encode",
    "get_settings",
]
