"""
SimpleMap contract.

A flat, case-sensitive string -> string dictionary with an explicit
durability commit. MapStorage needs nothing else from a backend.
"""

from typing import List, Protocol, runtime_checkable


@runtime_checkable
class SimpleMap(Protocol):
    """Key-value map consumed by MapStorage."""

    def contains(self, key: str) -> bool:
        ...

    def get_string(self, key: str) -> str:
        """Value under key; never None when contains(key) is true."""
        ...

    def put_string(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        """Drop key; a missing key is ignored."""
        ...

    def key_list(self) -> List[str]:
        """All keys, in no particular order."""
        ...

    def flush(self) -> None:
        """Commit pending changes to durable storage."""
        ...
