"""
MapStorage - A path-addressed filesystem on top of a flat key-value map.

Provides:
- Files and directories keyed by absolute path
- A working directory for relative paths
- Text and binary file content packed into single string values
- Unified StorageResult reporting with the classic string/None/bool returns

Usage:
    from mapfs import MapStorage, MemoryMap

    storage = MapStorage(MemoryMap())

    storage.mkdir("/docs")                   # "" on success
    storage.touch("/docs/readme.txt", "hi")  # error message on failure
    storage.readtext("/docs/readme.txt")     # "hi", or None
    storage.ls("/docs")                      # ["/docs/readme.txt"]

The map is not locked. Callers sharing one store between threads must
serialize access to the whole MapStorage themselves.
"""

import logging
from typing import Callable, Dict, List, Optional

from mapfs.shared.gate import GateLogger

from .models import MapFileType, StorageResult
from .paths import (
    SLASH,
    StorageException,
    InvalidPathError,
    resolve,
    parent_of,
    depth as path_depth,
)
from . import operations as ops
from . import codec


_OPERATIONS: Dict[str, Callable[..., StorageResult]] = {
    "mkdir": ops.make_directory,
    "cd": ops.change_directory,
    "touch": ops.create_file,
    "rm": ops.remove_path,
    "cp": lambda smap, wd, source, target: ops.copy_or_move(smap, wd, source, target, move=False),
    "mv": lambda smap, wd, source, target: ops.copy_or_move(smap, wd, source, target, move=True),
    "readtext": ops.read_text,
    "readbin": ops.read_binary,
    "savetext": ops.save_text,
    "savebin": ops.save_binary,
    "ls": ops.list_directory,
}


class MapStorage:
    """
    Filesystem view over a SimpleMap.

    Owns the working directory; everything else lives in the map.
    """

    def __init__(self, simple_map, logger: Optional[logging.Logger] = None):
        """
        Wrap a map, creating the root directory if it is missing.

        Args:
            simple_map: Object implementing the SimpleMap contract
            logger: Where failures are reported (default: mapfs.MapStorage)
        """
        self._map = simple_map
        self._log = logger or GateLogger.get("MapStorage")
        self._working_directory = SLASH

        if not self._map.contains(SLASH):
            self.execute("mkdir", SLASH)

    # ==================== Unified results ====================

    def execute(self, operation: str, *args) -> StorageResult:
        """
        Run an operation and return its StorageResult.

        Failures are logged. A successful cd moves the working directory.

        Raises:
            ValueError: If the operation is unknown
        """
        func = _OPERATIONS.get(operation)
        if func is None:
            raise ValueError(f"Unknown operation: {operation}")

        result = func(self._map, self._working_directory, *args)

        if result.success:
            if operation == "cd":
                self._working_directory = result.data
            self._log.debug(f"{operation} {result.path}: {result.message or 'ok'}")
        else:
            self._log.error(result.error)
        return result

    @staticmethod
    def operations() -> List[str]:
        """Names accepted by execute()."""
        return list(_OPERATIONS)

    # ==================== Commands ====================

    def cd(self, path: str) -> str:
        return self.execute("cd", path).error or ""

    def mkdir(self, path: str) -> str:
        return self.execute("mkdir", path).error or ""

    def touch(self, path: str, content: str = "") -> str:
        return self.execute("touch", path, content).error or ""

    def cp(self, source: str, target: str) -> str:
        return self.execute("cp", source, target).error or ""

    def mv(self, source: str, target: str) -> str:
        return self.execute("mv", source, target).error or ""

    def savetext(self, name: str, text: str) -> str:
        return self.execute("savetext", name, text).error or ""

    def savebin(self, name: str, data: bytes) -> str:
        return self.execute("savebin", name, data).error or ""

    def rm(self, path: str) -> bool:
        return self.execute("rm", path).success

    def rmdir(self, path: str) -> bool:
        raise NotImplementedError("Removing directories is not supported")

    # ==================== Queries ====================

    def readtext(self, path: str) -> Optional[str]:
        result = self.execute("readtext", path)
        return result.data if result.success else None

    def readbin(self, path: str) -> Optional[bytes]:
        result = self.execute("readbin", path)
        return result.data if result.success else None

    def ls(self, path: Optional[str] = None) -> List[str]:
        """List the direct children of path (default: working directory)."""
        return self.execute("ls", path).data

    def pwd(self) -> str:
        return self._working_directory

    def depth(self, path: str) -> int:
        return path_depth(path, self._working_directory)

    def exists(self, path: str) -> bool:
        return ops.exists(self._map, self._working_directory, path)

    def isfile(self, path: str) -> bool:
        return ops.is_file(self._map, self._working_directory, path)

    def isdir(self, path: str) -> bool:
        return ops.is_directory(self._map, self._working_directory, path)

    def filetype(self, path: str) -> Optional[MapFileType]:
        return ops.file_type(self._map, resolve(path, self._working_directory))

    def debug(self) -> str:
        return ops.dump(self._map)

    def flush(self) -> None:
        self._map.flush()


__all__ = [
    "MapStorage",
    "MapFileType",
    "StorageResult",
    "StorageException",
    "InvalidPathError",
    "resolve",
    "parent_of",
    "codec",
]
