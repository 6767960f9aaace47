"""
MapStorage entry codec.

Every entry is one string value: the type tag, eight colons, then the
payload. Binary payloads are base64 text behind a marker.
"""

import base64
import binascii
from typing import Tuple

from .models import MapFileType
from .paths import StorageException

EIGHT_COLONS = "::::::::"
BINARYFILE = "BINARYFILE"


def encode(file_type: MapFileType, payload: str = "") -> str:
    """Pack a type tag and payload into a single map value."""
    return file_type.value + EIGHT_COLONS + payload


def decode(raw: str) -> Tuple[MapFileType, str]:
    """
    Split a map value into its type tag and payload.

    Args:
        raw: Value read from the map

    Returns:
        Tuple of (file_type, payload)

    Raises:
        StorageException: If the value is not a valid entry
    """
    tag, delimiter, payload = raw.partition(EIGHT_COLONS)
    if not delimiter:
        raise StorageException(f"Entry has no type delimiter: {raw[:40]!r}")
    try:
        return MapFileType(tag), payload
    except ValueError:
        raise StorageException(f"Unknown entry type: {tag!r}") from None


def encode_binary(data: bytes) -> str:
    """Turn bytes into a binary file payload."""
    return BINARYFILE + base64.b64encode(data).decode("ascii")


def is_binary(payload: str) -> bool:
    """Check whether a payload carries the binary marker."""
    return payload.startswith(BINARYFILE)


def decode_binary(payload: str) -> bytes:
    """
    Turn a binary file payload back into bytes.

    Raises:
        StorageException: If the payload is not binary or not valid base64
    """
    if not is_binary(payload):
        raise StorageException("Payload is not binary")
    try:
        return base64.b64decode(payload[len(BINARYFILE):], validate=True)
    except binascii.Error as e:
        raise StorageException(f"Corrupt binary payload: {e}") from e
