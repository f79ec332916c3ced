from __future__ import annotations

from .disk_store import DiskJsonDocumentStore
from .interfaces import KeyValueDocumentStore
from .key_path import MISSING, KeyPath
from .options import DEFAULT_OPTIONS, KeyValuesOptions
from .paths import DEFAULT_DIR_NAME, DEFAULT_FILE_NAME, resolve_file_path
from .settings import Settings, get_settings
from .store import KeyValues, KeyValuesError

__all__ = [
    "KeyValues",
    "KeyValuesError",
    "KeyValuesOptions",
    "DEFAULT_OPTIONS",
    "DEFAULT_DIR_NAME",
    "DEFAULT_FILE_NAME",
    "KeyPath",
    "MISSING",
    "KeyValueDocumentStore",
    "DiskJsonDocumentStore",
    "resolve_file_path",
    "Settings",
    "get_settings",
]
