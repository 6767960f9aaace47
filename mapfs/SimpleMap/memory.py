"""
In-memory SimpleMap.
"""

from typing import Dict, List, Optional


class MemoryMap:
    """SimpleMap held in a plain dict. flush() has nothing to commit."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def contains(self, key: str) -> bool:
        return key in self._data

    def get_string(self, key: str) -> str:
        return self._data[key]

    def put_string(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def key_list(self) -> List[str]:
        return list(self._data)

    def flush(self) -> None:
        pass

    def to_dict(self) -> Dict[str, str]:
        """Snapshot of the stored entries."""
        return dict(self._data)

    def __len__(self) -> int:
        return len(self._data)
