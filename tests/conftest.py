"""
Pytest configuration and fixtures for mapfs tests.
"""

import logging
import os
import sys
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from mapfs.MapStorage import MapStorage
from mapfs.SimpleMap import MemoryMap


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def memory_map() -> MemoryMap:
    """An empty in-memory map."""
    return MemoryMap()


@pytest.fixture
def storage(memory_map: MemoryMap) -> MapStorage:
    """A fresh filesystem containing only the root directory."""
    return MapStorage(memory_map)


@pytest.fixture
def sample_storage(storage: MapStorage) -> MapStorage:
    """A filesystem with a small tree of directories and files."""
    storage.mkdir("/docs")
    storage.mkdir("/docs/archive")
    storage.touch("/docs/readme.txt", "Hello World")
    storage.touch("/docs/archive/old.txt", "Old content")
    storage.touch("/notes.txt", "Top level")
    return storage


@pytest.fixture(autouse=True)
def reset_module_state():
    """Reset environment and logging state touched by configuration."""
    saved = {key: value for key, value in os.environ.items() if key.startswith("MAPFS_")}
    for key in saved:
        del os.environ[key]

    yield

    for key in [key for key in os.environ if key.startswith("MAPFS_")]:
        del os.environ[key]
    os.environ.update(saved)
    logging.getLogger("mapfs").setLevel(logging.INFO)
