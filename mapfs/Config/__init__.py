"""
mapfs Configuration.

Selects and opens the backing map. Each setting is resolved in order:
1. Environment variables (a .env file is loaded first)
2. JSON config file
3. Defaults
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

from mapfs.shared.gate import ConfigLoader, GateLogger
from mapfs.MapStorage import MapStorage
from mapfs.MapStorage.paths import StorageException
from mapfs.SimpleMap import (
    CompressedMap,
    JsonFileMap,
    MapStorageCompression,
    MemoryMap,
    SqlMap,
)
from mapfs.SimpleMap.sql import DEFAULT_TABLE

_log = GateLogger.get("Config")


class StorageBackend(str, Enum):
    """Which SimpleMap implementation backs the filesystem."""
    MEMORY = "memory"
    JSON = "json"
    SQL = "sql"


class StorageConfig(BaseModel):
    """Settings for opening a MapStorage."""
    backend: StorageBackend = Field(default=StorageBackend.MEMORY)
    json_path: str = Field(default="data/mapfs.json", description="Document used by the json backend")
    database_url: str = Field(default="sqlite:///data/mapfs.sqlite", description="URL used by the sql backend")
    table_name: str = Field(default=DEFAULT_TABLE)
    compression: MapStorageCompression = Field(default=MapStorageCompression.NONE)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level: {value}")
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")


# Setting -> environment variable
ENV_VARS: Dict[str, str] = {
    "backend": "MAPFS_BACKEND",
    "json_path": "MAPFS_JSON_PATH",
    "database_url": "MAPFS_DATABASE_URL",
    "table_name": "MAPFS_TABLE_NAME",
    "compression": "MAPFS_COMPRESSION",
    "log_level": "MAPFS_LOG_LEVEL",
}


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None,
) -> StorageConfig:
    """
    Build the effective configuration.

    Args:
        config_path: Optional JSON file with StorageConfig fields
        env_file: .env file to load (default: nearest .env from the cwd)

    Returns:
        Validated StorageConfig

    Raises:
        StorageException: If config_path exists but cannot be read
        pydantic.ValidationError: If a setting has an invalid value
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    values: Dict[str, Any] = {}
    if config_path is not None:
        data = ConfigLoader.load(config_path, dict, create_default=True)
        if data is None:
            raise StorageException(f"Cannot read config file: {config_path}")
        values.update({key: value for key, value in data.items() if key in ENV_VARS})

    for key, env_var in ENV_VARS.items():
        value = os.environ.get(env_var)
        if value:
            values[key] = value

    config = StorageConfig.model_validate(values)
    GateLogger.set_level(config.log_level)
    _log.debug(f"Loaded config: backend={config.backend.value}, compression={config.compression.value}")
    return config


def save_config(config: StorageConfig, config_path: Union[str, Path]) -> bool:
    """Write config to a JSON file that load_config() accepts."""
    return ConfigLoader.save(config_path, config)


def create_map(config: StorageConfig):
    """Instantiate the configured SimpleMap."""
    if config.backend == StorageBackend.JSON:
        simple_map = JsonFileMap(config.json_path)
    elif config.backend == StorageBackend.SQL:
        simple_map = SqlMap(config.database_url, config.table_name)
    else:
        simple_map = MemoryMap()

    if config.compression != MapStorageCompression.NONE:
        simple_map = CompressedMap(simple_map, config.compression)
    return simple_map


def open_storage(config: Optional[StorageConfig] = None) -> MapStorage:
    """Open a MapStorage on the configured map (default: load_config())."""
    config = config or load_config()
    _log.info(f"Opening {config.backend.value} storage")
    return MapStorage(create_map(config))


__all__ = [
    "StorageBackend",
    "StorageConfig",
    "ENV_VARS",
    "load_config",
    "save_config",
    "create_map",
    "open_storage",
]
