# Core modules

from .config import Settings, get_settings
from .storage import KeyValueStore, MemoryKeyValueStore, FileKeyValueStore

__all__ = [
    "Settings",
    "get_settings",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "FileKeyValueStore",
]
