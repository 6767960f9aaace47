"""
SimpleMap - key-value backends for MapStorage.
"""

from .base import SimpleMap
from .memory import MemoryMap
from .json_file import JsonFileMap
from .sql import SqlMap
from .compression import MapStorageCompression, CompressedMap

__all__ = [
    "SimpleMap",
    "MemoryMap",
    "JsonFileMap",
    "SqlMap",
    "MapStorageCompression",
    "CompressedMap",
]
