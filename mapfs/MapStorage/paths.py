"""
MapStorage path module.

Pure functions over path strings: absolutization against a working
directory, parent computation and depth. No map access happens here.
"""

from typing import Optional

SLASH = "/"
TWO_DOTS = ".."


class StorageException(Exception):
    """Raised when the store is used incorrectly or holds corrupt data."""
    pass


class InvalidPathError(StorageException):
    """Raised when a path is missing where one is required."""
    pass


def resolve(path: str, working_directory: str) -> str:
    """
    Convert a path to its absolute form.

    Absolute paths are kept as given, relative paths are appended to the
    working directory, and ".." means the parent of the working directory.
    Trailing slashes are dropped from everything but the root.

    Args:
        path: Absolute or relative path
        working_directory: Absolute path relative paths are based on

    Returns:
        Absolute path
    """
    if path == TWO_DOTS:
        return parent_of(working_directory)

    if path.startswith(SLASH):
        absolute = path
    elif working_directory == SLASH:
        absolute = SLASH + path
    else:
        absolute = working_directory + SLASH + path

    if absolute != SLASH:
        absolute = absolute.rstrip(SLASH) or SLASH
    return absolute


def parent_of(path: Optional[str]) -> str:
    """
    Get the parent of an absolute path.

    Args:
        path: Absolute path

    Returns:
        Parent path; the root is its own parent

    Raises:
        InvalidPathError: If path is None or blank
    """
    if path is None:
        raise InvalidPathError("Path is null")
    if not path.strip():
        raise InvalidPathError("Path is empty")

    if path == SLASH:
        return path

    segments = path.split(SLASH)
    if len(segments) == 2:
        return SLASH
    return path[: len(path) - 1 - len(segments[-1])]


def depth(path: str, working_directory: str = SLASH) -> int:
    """
    Count the segments of a path (root = 0).

    Args:
        path: Absolute or relative path
        working_directory: Base for relative paths

    Returns:
        Number of segments below the root
    """
    absolute = resolve(path, working_directory)
    if absolute == SLASH:
        return 0
    return len(absolute.split(SLASH)) - 1


def is_child_of(key: str, directory: str) -> bool:
    """Check whether key sits directly below directory."""
    prefix = directory if directory == SLASH else directory + SLASH
    return key.startswith(prefix) and depth(key) == depth(directory) + 1
