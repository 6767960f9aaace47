"""
Tests for MapStorage, the filesystem view over a SimpleMap.
"""

import logging
from unittest.mock import MagicMock

import pytest

from mapfs.MapStorage import MapStorage, MapFileType, StorageResult
from mapfs.MapStorage.paths import StorageException
from mapfs.SimpleMap import MemoryMap


def make_mock_map(entries):
    """MagicMock map answering contains/get_string from a dict."""
    mock_map = MagicMock()
    mock_map.contains.side_effect = lambda key: key in entries
    mock_map.get_string.side_effect = lambda key: entries[key]
    mock_map.key_list.side_effect = lambda: list(entries)
    return mock_map


class TestConstruction:
    """Tests for opening a store."""

    def test_root_created(self, memory_map):
        storage = MapStorage(memory_map)

        assert memory_map.get_string("/") == "DIRECTORY::::::::"
        assert storage.isdir("/") is True
        assert storage.pwd() == "/"

    def test_existing_root_not_rewritten(self, caplog):
        mock_map = make_mock_map({"/": "DIRECTORY::::::::"})

        with caplog.at_level(logging.ERROR):
            MapStorage(mock_map)

        mock_map.put_string.assert_not_called()
        assert caplog.text == ""

    def test_injected_logger_receives_errors(self, memory_map):
        logger = MagicMock()
        storage = MapStorage(memory_map, logger=logger)

        storage.cd("/missing")

        logger.error.assert_called_once_with("Path does not exist: /missing")


class TestMkdir:
    """Tests for mkdir."""

    def test_mkdir_success_writes_entry(self):
        mock_map = make_mock_map({"/": "DIRECTORY::::::::"})
        storage = MapStorage(mock_map)

        result = storage.mkdir("/newDir")

        assert result == ""
        mock_map.put_string.assert_called_once_with("/newDir", "DIRECTORY::::::::")

    def test_mkdir_already_exists(self):
        mock_map = make_mock_map({"/": "DIRECTORY::::::::", "/newDir": "DIRECTORY::::::::"})
        storage = MapStorage(mock_map)

        result = storage.mkdir("/newDir")

        assert result == "Cannot create new directory, because path already exists: /newDir"
        mock_map.put_string.assert_not_called()

    def test_mkdir_then_isdir(self, storage):
        assert storage.mkdir("/docs") == ""

        assert storage.exists("/docs") is True
        assert storage.isdir("/docs") is True
        assert storage.isfile("/docs") is False

    def test_mkdir_existing_leaves_store_unchanged(self, storage, memory_map):
        storage.mkdir("/docs")
        before = memory_map.to_dict()

        result = storage.mkdir("/docs")

        assert "already exists" in result
        assert memory_map.to_dict() == before

    def test_mkdir_missing_argument(self, storage):
        assert storage.mkdir("") == "Missing argument"

    def test_mkdir_parent_missing(self, storage):
        result = storage.mkdir("/a/b")

        assert result == "Cannot create new directory, because parent path does not exist: /a"
        assert storage.exists("/a/b") is False

    def test_mkdir_parent_is_file(self, storage):
        storage.touch("/file.txt")

        result = storage.mkdir("/file.txt/sub")

        assert result == "Cannot create new directory, because parent path is not directory: /file.txt"

    def test_mkdir_relative(self, storage):
        storage.mkdir("/a")
        storage.cd("/a")

        assert storage.mkdir("b") == ""
        assert storage.isdir("/a/b") is True

    def test_mkdir_root_again(self, storage):
        assert storage.mkdir("/") == "Cannot create new directory, because path already exists: /"


class TestCd:
    """Tests for cd and pwd."""

    def test_cd_success(self, storage):
        storage.mkdir("/newDir")

        assert storage.cd("/newDir") == ""
        assert storage.pwd() == "/newDir"

    def test_cd_path_does_not_exist(self, storage):
        result = storage.cd("/nonExistent")

        assert result == "Path does not exist: /nonExistent"
        assert storage.pwd() == "/"

    def test_cd_not_directory(self, storage):
        storage.touch("/file.txt")

        result = storage.cd("/file.txt")

        assert result == "Path is not directory: /file.txt"
        assert storage.pwd() == "/"

    def test_cd_relative_and_parent(self, storage):
        storage.mkdir("/a")
        storage.mkdir("/a/b")

        storage.cd("a")
        storage.cd("b")
        assert storage.pwd() == "/a/b"

        storage.cd("..")
        assert storage.pwd() == "/a"

        storage.cd("..")
        storage.cd("..")
        assert storage.pwd() == "/"


class TestTouch:
    """Tests for touch."""

    def test_touch_writes_entry(self):
        mock_map = make_mock_map({"/": "DIRECTORY::::::::"})
        storage = MapStorage(mock_map)

        result = storage.touch("/newFile.txt", "Test content")

        assert result == ""
        mock_map.put_string.assert_called_once_with("/newFile.txt", "FILE::::::::Test content")

    def test_touch_file_already_exists(self):
        mock_map = make_mock_map({"/": "DIRECTORY::::::::", "/newFile.txt": "FILE::::::::x"})
        storage = MapStorage(mock_map)

        result = storage.touch("/newFile.txt", "Test content")

        assert result == "Cannot create new file, because path already exists: /newFile.txt"

    def test_touch_default_content_empty(self, storage):
        storage.touch("/empty.txt")

        assert storage.readtext("/empty.txt") == ""

    def test_touch_parent_missing(self, storage):
        result = storage.touch("/missing/file.txt")

        assert result == "Cannot create new file, because parent path does not exist: /missing"

    def test_touch_parent_is_file(self, storage):
        storage.touch("/a.txt")

        result = storage.touch("/a.txt/b.txt")

        assert result == "Cannot create new file, because parent path is not directory: /a.txt"

    def test_touch_missing_argument(self, storage):
        assert storage.touch("") == "Missing argument"


class TestRead:
    """Tests for readtext and readbin."""

    def test_readtext(self):
        mock_map = make_mock_map({"/": "DIRECTORY::::::::", "/file.txt": "FILE::::::::Hello World"})
        storage = MapStorage(mock_map)

        assert storage.readtext("/file.txt") == "Hello World"

    def test_readtext_missing_returns_none(self, storage, caplog):
        with caplog.at_level(logging.ERROR):
            content = storage.readtext("/file.txt")

        assert content is None
        assert "Path does not exist: /file.txt" in caplog.text

    def test_readtext_directory_returns_none(self, storage):
        storage.mkdir("/docs")

        assert storage.readtext("/docs") is None

    def test_readtext_relative(self, sample_storage):
        sample_storage.cd("/docs")

        assert sample_storage.readtext("readme.txt") == "Hello World"

    def test_text_with_delimiter_preserved(self, storage):
        storage.touch("/odd.txt", "a::::::::b")

        assert storage.readtext("/odd.txt") == "a::::::::b"

    @pytest.mark.parametrize("data", [b"", b"\x00\x01\x02", bytes(range(256)), b"\xff" * 100])
    def test_savebin_readbin(self, storage, data):
        assert storage.savebin("/blob.bin", data) == ""

        assert storage.readbin("/blob.bin") == data

    def test_readbin_text_file(self, storage, caplog):
        storage.savetext("/plain.txt", "hello")

        with caplog.at_level(logging.ERROR):
            assert storage.readbin("/plain.txt") is None

        assert "File is not binary: /plain.txt" in caplog.text

    def test_readbin_missing(self, storage):
        assert storage.readbin("/nothing.bin") is None

    def test_readbin_text_starting_with_marker(self, storage, caplog):
        storage.touch("/note.txt", "BINARYFILE is the marker word")

        with caplog.at_level(logging.ERROR):
            assert storage.readbin("/note.txt") is None

        assert "File is not binary: /note.txt" in caplog.text

    def test_readbin_corrupt_payload(self, memory_map, caplog):
        storage = MapStorage(memory_map)
        memory_map.put_string("/blob.bin", "FILE::::::::BINARYFILE***")

        with caplog.at_level(logging.ERROR):
            assert storage.readbin("/blob.bin") is None

        assert "File is not binary: /blob.bin" in caplog.text
        assert storage.readtext("/blob.bin") == "BINARYFILE***"

    def test_savetext_is_touch(self, storage):
        assert storage.savetext("/t.txt", "text") == ""
        assert storage.savetext("/t.txt", "again") == (
            "Cannot create new file, because path already exists: /t.txt"
        )
        assert storage.readtext("/t.txt") == "text"

    def test_corrupt_entry_raises(self, memory_map):
        storage = MapStorage(memory_map)
        memory_map.put_string("/bad", "GARBAGE")

        with pytest.raises(StorageException):
            storage.readtext("/bad")


class TestRm:
    """Tests for rm and rmdir."""

    def test_rm_file(self):
        mock_map = make_mock_map({"/": "DIRECTORY::::::::", "/file.txt": "FILE::::::::Hello World"})
        storage = MapStorage(mock_map)

        assert storage.rm("/file.txt") is True
        mock_map.remove.assert_called_once_with("/file.txt")

    def test_rm_file_does_not_exist(self):
        mock_map = make_mock_map({"/": "DIRECTORY::::::::"})
        storage = MapStorage(mock_map)

        assert storage.rm("/file.txt") is False
        mock_map.remove.assert_not_called()

    def test_rm_then_not_exists(self, sample_storage):
        assert sample_storage.rm("/notes.txt") is True
        assert sample_storage.exists("/notes.txt") is False

    def test_rm_directory_does_not_cascade(self, sample_storage):
        assert sample_storage.rm("/docs/archive") is True

        assert sample_storage.exists("/docs/archive") is False
        assert sample_storage.exists("/docs/archive/old.txt") is True

    def test_rm_root_refused(self, storage):
        assert storage.rm("/") is False
        assert storage.isdir("/") is True

    def test_rm_empty_path_keeps_working_directory(self, storage):
        storage.mkdir("/docs")
        storage.cd("/docs")

        assert storage.rm("") is False
        assert storage.pwd() == "/docs"
        assert storage.isdir("/docs") is True

    def test_rm_empty_path_result(self, storage):
        result = storage.execute("rm", "")

        assert result.success is False
        assert result.error == "Missing argument"

    def test_rmdir_not_supported(self, sample_storage):
        with pytest.raises(NotImplementedError):
            sample_storage.rmdir("/docs")


class TestCopyMove:
    """Tests for cp and mv."""

    def test_cp(self, sample_storage):
        assert sample_storage.cp("/notes.txt", "/docs/notes.txt") == ""

        assert sample_storage.readtext("/docs/notes.txt") == "Top level"
        assert sample_storage.exists("/notes.txt") is True

    def test_mv(self, sample_storage):
        assert sample_storage.mv("/notes.txt", "/docs/notes.txt") == ""

        assert sample_storage.readtext("/docs/notes.txt") == "Top level"
        assert sample_storage.exists("/notes.txt") is False

    def test_cp_keeps_binary_payload(self, storage):
        storage.savebin("/a.bin", b"\x00\xff")

        storage.cp("/a.bin", "/b.bin")

        assert storage.readbin("/b.bin") == b"\x00\xff"

    def test_cp_overwrites_target_file(self, sample_storage):
        assert sample_storage.cp("/notes.txt", "/docs/readme.txt") == ""

        assert sample_storage.readtext("/docs/readme.txt") == "Top level"

    def test_mv_onto_itself_keeps_file(self, sample_storage):
        assert sample_storage.mv("/notes.txt", "/notes.txt") == ""

        assert sample_storage.readtext("/notes.txt") == "Top level"

    def test_cp_source_missing(self, storage):
        assert storage.cp("/nope.txt", "/copy.txt") == "Source path does not exist: /nope.txt"

    def test_cp_source_directory(self, sample_storage):
        assert sample_storage.cp("/docs", "/docs2") == "Source path is directory: /docs"

    def test_mv_target_parent_missing(self, sample_storage):
        result = sample_storage.mv("/notes.txt", "/missing/notes.txt")

        assert result == "Target parent path does not exist: /missing"
        assert sample_storage.exists("/notes.txt") is True

    def test_mv_target_parent_is_file(self, sample_storage):
        result = sample_storage.mv("/notes.txt", "/docs/readme.txt/x")

        assert result == "Target parent path is not directory: /docs/readme.txt"

    def test_cp_target_is_directory(self, sample_storage):
        result = sample_storage.cp("/notes.txt", "/docs")

        assert result == "Target path is directory: /docs"
        assert sample_storage.isdir("/docs") is True

    def test_cp_missing_argument(self, storage):
        assert storage.cp("", "/x") == "Missing argument"


class TestListing:
    """Tests for ls, depth and debug."""

    def test_ls_mock_map(self):
        mock_map = make_mock_map({
            "/": "DIRECTORY::::::::",
            "/dir/file1": "FILE::::::::",
            "/dir/file2": "FILE::::::::",
            "/dir/subdir/file3": "FILE::::::::",
        })
        storage = MapStorage(mock_map)

        files = storage.ls("/dir")

        assert len(files) == 2
        assert "/dir/file1" in files
        assert "/dir/file2" in files

    def test_ls_argument_not_working_directory(self, sample_storage):
        """Listing uses the given directory even when cwd is elsewhere."""
        sample_storage.cd("/docs/archive")

        assert sample_storage.ls("/docs") == ["/docs/archive", "/docs/readme.txt"]

    def test_ls_default_working_directory(self, sample_storage):
        sample_storage.cd("/docs")

        assert sample_storage.ls() == ["/docs/archive", "/docs/readme.txt"]

    def test_ls_root(self, sample_storage):
        assert sample_storage.ls("/") == ["/docs", "/notes.txt"]

    def test_ls_relative(self, sample_storage):
        sample_storage.cd("/docs")

        assert sample_storage.ls("archive") == ["/docs/archive/old.txt"]

    def test_ls_missing_directory_empty(self, storage):
        assert storage.ls("/nothing") == []

    def test_depth(self, storage):
        assert storage.depth("/") == 0
        assert storage.depth("/dir") == 1
        assert storage.depth("/dir/subdir") == 2

    def test_depth_relative(self, storage):
        storage.mkdir("/a")
        storage.cd("/a")

        assert storage.depth("b") == 2
        assert storage.depth("..") == 0

    def test_debug(self, storage):
        storage.mkdir("/docs")
        storage.touch("/docs/a.txt", "x")

        assert storage.debug() == (
            "/=DIRECTORY::::::::\n"
            "/docs=DIRECTORY::::::::\n"
            "/docs/a.txt=FILE::::::::x\n"
        )

    def test_filetype(self, sample_storage):
        assert sample_storage.filetype("/docs") == MapFileType.DIRECTORY
        assert sample_storage.filetype("/notes.txt") == MapFileType.FILE
        assert sample_storage.filetype("/nothing") is None

    def test_flush_delegates(self):
        mock_map = make_mock_map({"/": "DIRECTORY::::::::"})
        storage = MapStorage(mock_map)

        storage.flush()

        mock_map.flush.assert_called_once()


class TestExecute:
    """Tests for the unified StorageResult interface."""

    def test_success_result(self, storage):
        result = storage.execute("mkdir", "/docs")

        assert isinstance(result, StorageResult)
        assert result.success is True
        assert result.operation == "mkdir"
        assert result.path == "/docs"
        assert result.error is None

    def test_failure_result(self, storage):
        result = storage.execute("cd", "/missing")

        assert not result
        assert result.error == "Path does not exist: /missing"

    def test_cd_result_moves_working_directory(self, storage):
        storage.mkdir("/docs")

        result = storage.execute("cd", "docs")

        assert result.data == "/docs"
        assert storage.pwd() == "/docs"

    def test_readbin_result_operation(self, storage):
        result = storage.execute("readbin", "/missing")

        assert result.operation == "readbin"
        assert result.success is False

    def test_unknown_operation(self, storage):
        with pytest.raises(ValueError, match="Unknown operation"):
            storage.execute("format", "/")

    def test_operations_listed(self):
        assert {"mkdir", "cd", "touch", "rm", "cp", "mv", "ls"} <= set(MapStorage.operations())


class TestScenario:
    """End-to-end walkthrough on a fresh store."""

    def test_docs_scenario(self):
        storage = MapStorage(MemoryMap())

        assert storage.mkdir("/docs") == ""
        assert storage.touch("/docs/readme.txt", "hi") == ""
        assert storage.readtext("/docs/readme.txt") == "hi"

        listing = storage.ls("/docs")
        assert "/docs/readme.txt" in listing
        assert all(storage.depth(key) == 2 for key in listing)

        assert storage.rm("/docs/readme.txt") is True
        assert storage.readtext("/docs/readme.txt") is None
