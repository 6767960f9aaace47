"""
mapfs - a path-addressed virtual filesystem on top of a flat key-value store.

Usage:
    from mapfs import MapStorage, MemoryMap

    storage = MapStorage(MemoryMap())
    storage.mkdir("/docs")
    storage.touch("/docs/readme.txt", "hi")
    storage.readtext("/docs/readme.txt")
"""

from mapfs.MapStorage import (
    MapStorage,
    MapFileType,
    StorageResult,
    StorageException,
    InvalidPathError,
)
from mapfs.SimpleMap import (
    SimpleMap,
    MemoryMap,
    JsonFileMap,
    SqlMap,
    MapStorageCompression,
    CompressedMap,
)
from mapfs.Config import StorageConfig, load_config, create_map, open_storage

__version__ = "0.1.0"

__all__ = [
    "MapStorage",
    "MapFileType",
    "StorageResult",
    "StorageException",
    "InvalidPathError",
    "SimpleMap",
    "MemoryMap",
    "JsonFileMap",
    "SqlMap",
    "MapStorageCompression",
    "CompressedMap",
    "StorageConfig",
    "load_config",
    "create_map",
    "open_storage",
]
