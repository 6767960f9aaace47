"""
SimpleMap persisted as a single JSON document.

Entries live in memory and reach the file only on flush().
"""

from pathlib import Path
from typing import Union

from mapfs.shared.gate import ConfigLoader, GateLogger
from mapfs.MapStorage.paths import StorageException

from .memory import MemoryMap

_log = GateLogger.get("SimpleMap")


class JsonFileMap(MemoryMap):
    """MemoryMap that loads from and flushes to a JSON file."""

    def __init__(self, path: Union[str, Path]):
        """
        Open the document at path, starting empty if it does not exist.

        Raises:
            StorageException: If the file exists but is not a JSON object
                of strings
        """
        self.path = Path(path)

        data = ConfigLoader.load(self.path, dict, create_default=True)
        if data is None:
            raise StorageException(f"Cannot load map from {self.path}")
        for key, value in data.items():
            if not isinstance(value, str):
                raise StorageException(f"Value for {key!r} in {self.path} is not a string")

        super().__init__(data)
        _log.info(f"Opened {self.path} ({len(data)} entries)")

    def flush(self) -> None:
        if not ConfigLoader.save(self.path, self._data):
            raise StorageException(f"Cannot write map to {self.path}")
        _log.debug(f"Flushed {len(self._data)} entries to {self.path}")
