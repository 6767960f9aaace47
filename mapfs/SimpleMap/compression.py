"""
Transparent value compression for any SimpleMap.

Keys pass through untouched; values are compressed on the way in and
restored on the way out, so MapStorage only ever sees plain entries.
"""

import base64
import binascii
import zlib
from enum import Enum
from typing import List

from mapfs.MapStorage.paths import StorageException

ZLIB_PREFIX = "ZLIB:"


class MapStorageCompression(str, Enum):
    """How values are stored in the backing map."""
    NONE = "none"
    ZLIB = "zlib"


def compress(value: str) -> str:
    packed = zlib.compress(value.encode("utf-8"))
    return ZLIB_PREFIX + base64.b64encode(packed).decode("ascii")


def decompress(stored: str) -> str:
    """
    Restore a value written by compress().

    Values without the prefix were written uncompressed and are returned
    as they are.
    """
    if not stored.startswith(ZLIB_PREFIX):
        return stored
    try:
        packed = base64.b64decode(stored[len(ZLIB_PREFIX):], validate=True)
        return zlib.decompress(packed).decode("utf-8")
    except (binascii.Error, zlib.error, UnicodeDecodeError) as e:
        raise StorageException(f"Corrupt compressed value: {e}") from e


class CompressedMap:
    """SimpleMap wrapper applying a MapStorageCompression to values."""

    def __init__(self, inner, compression: MapStorageCompression = MapStorageCompression.ZLIB):
        self.inner = inner
        self.compression = MapStorageCompression(compression)

    def contains(self, key: str) -> bool:
        return self.inner.contains(key)

    def get_string(self, key: str) -> str:
        return decompress(self.inner.get_string(key))

    def put_string(self, key: str, value: str) -> None:
        if self.compression == MapStorageCompression.ZLIB:
            value = compress(value)
        self.inner.put_string(key, value)

    def remove(self, key: str) -> None:
        self.inner.remove(key)

    def key_list(self) -> List[str]:
        return self.inner.key_list()

    def flush(self) -> None:
        self.inner.flush()
