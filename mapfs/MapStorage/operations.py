"""
MapStorage file operations.

Each operation resolves its path arguments against the working directory,
checks its preconditions against the map, then performs at most two map
mutations. All of them report through StorageResult; none of them touch the
working directory itself.
"""

from typing import List, Optional

from . import codec
from .models import MapFileType, StorageResult
from .paths import SLASH, StorageException, resolve, parent_of, is_child_of

MISSING_ARGUMENT = "Missing argument"


def file_type(smap, absolute_path: str) -> Optional[MapFileType]:
    """Get the entry type stored at an absolute path, or None if absent."""
    if not smap.contains(absolute_path):
        return None
    entry_type, _ = codec.decode(smap.get_string(absolute_path))
    return entry_type


def exists(smap, working_directory: str, path: str) -> bool:
    return smap.contains(resolve(path, working_directory))


def is_directory(smap, working_directory: str, path: str) -> bool:
    return file_type(smap, resolve(path, working_directory)) == MapFileType.DIRECTORY


def is_file(smap, working_directory: str, path: str) -> bool:
    return file_type(smap, resolve(path, working_directory)) == MapFileType.FILE


def make_directory(smap, working_directory: str, path: str) -> StorageResult:
    """
    Create a directory.

    The root is the only directory created without a parent check.
    """
    if not path:
        return StorageResult.fail("mkdir", path, MISSING_ARGUMENT)

    absolute_path = resolve(path, working_directory)
    parent_path = parent_of(absolute_path)

    if absolute_path != SLASH:
        parent_type = file_type(smap, parent_path)
        if parent_type is None:
            return StorageResult.fail(
                "mkdir", absolute_path,
                f"Cannot create new directory, because parent path does not exist: {parent_path}"
            )
        if parent_type != MapFileType.DIRECTORY:
            return StorageResult.fail(
                "mkdir", absolute_path,
                f"Cannot create new directory, because parent path is not directory: {parent_path}"
            )

    if smap.contains(absolute_path):
        return StorageResult.fail(
            "mkdir", absolute_path,
            f"Cannot create new directory, because path already exists: {absolute_path}"
        )

    smap.put_string(absolute_path, codec.encode(MapFileType.DIRECTORY))
    return StorageResult.ok("mkdir", absolute_path, message="Created directory")


def change_directory(smap, working_directory: str, path: str) -> StorageResult:
    """
    Validate a cd target.

    Returns:
        StorageResult with the new working directory in data
    """
    absolute_path = resolve(path, working_directory)

    target_type = file_type(smap, absolute_path)
    if target_type is None:
        return StorageResult.fail("cd", absolute_path, f"Path does not exist: {absolute_path}")
    if target_type != MapFileType.DIRECTORY:
        return StorageResult.fail("cd", absolute_path, f"Path is not directory: {absolute_path}")

    return StorageResult.ok("cd", absolute_path, data=absolute_path)


def create_file(smap, working_directory: str, path: str, content: str = "") -> StorageResult:
    """Create a file holding content as its payload."""
    if not path:
        return StorageResult.fail("touch", path, MISSING_ARGUMENT)

    absolute_path = resolve(path, working_directory)
    parent_path = parent_of(absolute_path)

    parent_type = file_type(smap, parent_path)
    if parent_type is None:
        return StorageResult.fail(
            "touch", absolute_path,
            f"Cannot create new file, because parent path does not exist: {parent_path}"
        )
    if parent_type != MapFileType.DIRECTORY:
        return StorageResult.fail(
            "touch", absolute_path,
            f"Cannot create new file, because parent path is not directory: {parent_path}"
        )
    if smap.contains(absolute_path):
        return StorageResult.fail(
            "touch", absolute_path,
            f"Cannot create new file, because path already exists: {absolute_path}"
        )

    smap.put_string(absolute_path, codec.encode(MapFileType.FILE, content))
    return StorageResult.ok("touch", absolute_path, message=f"Created file ({len(content)} characters)")


def remove_path(smap, working_directory: str, path: str) -> StorageResult:
    """
    Remove exactly one entry.

    Descendants of a removed directory are left in place.
    """
    if not path:
        return StorageResult.fail("rm", path, MISSING_ARGUMENT)

    absolute_path = resolve(path, working_directory)

    if absolute_path == SLASH:
        return StorageResult.fail("rm", absolute_path, "Cannot remove the root directory")
    if not smap.contains(absolute_path):
        return StorageResult.fail(
            "rm", absolute_path,
            f"Cannot remove file, because it does not exist: {absolute_path}"
        )

    smap.remove(absolute_path)
    return StorageResult.ok("rm", absolute_path, message="Removed")


def copy_or_move(
    smap,
    working_directory: str,
    source: str,
    target: str,
    move: bool = False
) -> StorageResult:
    """
    Copy a file, or move it when move is set.

    An existing target file is overwritten; directories can be neither
    source nor target.
    """
    operation = "mv" if move else "cp"
    if not source or not target:
        return StorageResult.fail(operation, source or "", MISSING_ARGUMENT)

    source_path = resolve(source, working_directory)
    target_path = resolve(target, working_directory)
    target_parent = parent_of(target_path)

    source_type = file_type(smap, source_path)
    if source_type is None:
        return StorageResult.fail(operation, source_path, f"Source path does not exist: {source_path}")
    if source_type == MapFileType.DIRECTORY:
        return StorageResult.fail(operation, source_path, f"Source path is directory: {source_path}")

    parent_type = file_type(smap, target_parent)
    if parent_type is None:
        return StorageResult.fail(
            operation, target_path, f"Target parent path does not exist: {target_parent}"
        )
    if parent_type != MapFileType.DIRECTORY:
        return StorageResult.fail(
            operation, target_path, f"Target parent path is not directory: {target_parent}"
        )
    if file_type(smap, target_path) == MapFileType.DIRECTORY:
        return StorageResult.fail(operation, target_path, f"Target path is directory: {target_path}")

    if source_path == target_path:
        return StorageResult.ok(operation, target_path, message="Source and target are the same")

    smap.put_string(target_path, smap.get_string(source_path))
    if move:
        smap.remove(source_path)
    return StorageResult.ok(
        operation, target_path,
        message=f"{'Moved' if move else 'Copied'} {source_path} to {target_path}"
    )


def read_text(smap, working_directory: str, path: str) -> StorageResult:
    """Read the payload of a file."""
    absolute_path = resolve(path, working_directory)

    if not smap.contains(absolute_path):
        return StorageResult.fail("readtext", absolute_path, f"Path does not exist: {absolute_path}")

    entry_type, payload = codec.decode(smap.get_string(absolute_path))
    if entry_type == MapFileType.DIRECTORY:
        return StorageResult.fail("readtext", absolute_path, f"Path is directory: {absolute_path}")

    return StorageResult.ok("readtext", absolute_path, data=payload)


def read_binary(smap, working_directory: str, path: str) -> StorageResult:
    """Read the bytes of a file saved with savebin."""
    result = read_text(smap, working_directory, path)
    if not result.success:
        return result.model_copy(update={"operation": "readbin"})

    if not codec.is_binary(result.data):
        return StorageResult.fail("readbin", result.path, f"File is not binary: {result.path}")

    try:
        data = codec.decode_binary(result.data)
    except StorageException:
        return StorageResult.fail("readbin", result.path, f"File is not binary: {result.path}")

    return StorageResult.ok("readbin", result.path, data=data)


def save_text(smap, working_directory: str, name: str, text: str) -> StorageResult:
    result = create_file(smap, working_directory, name, text)
    return result.model_copy(update={"operation": "savetext"})


def save_binary(smap, working_directory: str, name: str, data: bytes) -> StorageResult:
    result = create_file(smap, working_directory, name, codec.encode_binary(data))
    return result.model_copy(update={"operation": "savebin"})


def list_directory(smap, working_directory: str, path: Optional[str] = None) -> StorageResult:
    """
    List the keys directly below a directory.

    The hierarchy is rebuilt from key prefixes and depth; a directory that
    does not exist simply has no children.
    """
    absolute_path = resolve(path, working_directory) if path else working_directory
    children: List[str] = sorted(
        key for key in smap.key_list() if is_child_of(key, absolute_path)
    )
    return StorageResult.ok(
        "ls", absolute_path, message=f"Listed {len(children)} items", data=children
    )


def dump(smap) -> str:
    """Render every entry as a key=value line."""
    return "".join(f"{key}={smap.get_string(key)}\n" for key in smap.key_list())
