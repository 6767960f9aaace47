"""
Logging, failure absorption and JSON documents for mapfs.

Every mapfs component logs through GateLogger, so one switch on the "mapfs"
logger (or on "mapfs.<component>") controls its output. GateErrorHandler is
used only at the shell boundary, where a failing command must not end the
session. ConfigLoader reads and writes the JSON documents behind both the
config file and the JSON map backend.
"""

from __future__ import annotations

import json
import logging
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Optional, Type, TypeVar, Union

LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"

ConfigT = TypeVar("ConfigT")


class GateLogger:
    """Loggers named mapfs.<component>, all sharing one handler on the root."""

    ROOT = "mapfs"

    _configured = False

    @classmethod
    def _ensure_configured(cls):
        if cls._configured:
            return

        root_logger = logging.getLogger(cls.ROOT)
        if not root_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root_logger.addHandler(handler)
            root_logger.setLevel(logging.INFO)

        cls._configured = True

    @classmethod
    def get(cls, component: str) -> logging.Logger:
        cls._ensure_configured()
        return logging.getLogger(f"{cls.ROOT}.{component}")

    @classmethod
    def set_level(cls, level: Union[int, str], component: Optional[str] = None):
        """
        Change the level of one component, or of all of mapfs.

        Level names are accepted in any case ("debug", "WARNING").
        """
        if isinstance(level, str):
            level = level.upper()
        if component:
            cls.get(component).setLevel(level)
            return
        cls._ensure_configured()
        logging.getLogger(cls.ROOT).setLevel(level)


class GateErrorHandler:
    """Turns an exception into a log line plus a fallback value."""

    @staticmethod
    def handle(
        component: str,
        operation: str,
        exception: Exception,
        default_return: Any = None,
        log_level: int = logging.ERROR,
    ) -> Any:
        """
        Log `operation failed: <exception>` on the component's logger.

        A callable default_return is called with the exception and its result
        returned; anything else is returned as is.
        """
        GateLogger.get(component).log(log_level, f"{operation} failed: {exception}")
        if callable(default_return):
            return default_return(exception)
        return default_return

    @staticmethod
    def wrap(
        component: str,
        operation: str,
        default_return: Any = None,
        log_level: int = logging.ERROR,
        reraise: bool = False,
    ):
        """Decorator form of handle(); with reraise the exception still propagates."""
        def decorator(func: Callable) -> Callable:
            @wraps(func)
            def wrapper(*args, **kwargs):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if reraise:
                        GateErrorHandler.handle(component, operation, e, None, log_level)
                        raise
                    return GateErrorHandler.handle(
                        component, operation, e, default_return, log_level
                    )
            return wrapper
        return decorator


class ConfigLoader:
    """
    JSON documents read into models and written back.

    Both directions log failures on the "ConfigLoader" component and report
    them through the return value instead of raising.
    """

    @staticmethod
    def _build(model_class: Type[ConfigT], data: Any) -> ConfigT:
        if hasattr(model_class, "from_dict"):
            return model_class.from_dict(data)
        if hasattr(model_class, "model_validate"):
            return model_class.model_validate(data)
        return model_class(**data)

    @staticmethod
    def _document(obj: Any) -> Any:
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        if hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json")
        return dict(obj)

    @staticmethod
    def load(
        path: Union[str, Path],
        model_class: Type[ConfigT],
        create_default: bool = True,
    ) -> Optional[ConfigT]:
        """
        Read path into model_class (a pydantic model, a class with from_dict, or dict).

        A missing file gives model_class() when create_default is set and None
        otherwise. An unreadable or malformed file gives None.
        """
        path = Path(path)

        if not path.exists():
            return model_class() if create_default else None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return ConfigLoader._build(model_class, json.load(f))
        except (OSError, ValueError, TypeError) as e:
            GateLogger.get("ConfigLoader").error(f"Failed to load {path}: {e}")
            return None

    @staticmethod
    def save(
        path: Union[str, Path],
        config: Any,
        create_dirs: bool = True,
    ) -> bool:
        path = Path(path)

        try:
            if create_dirs:
                path.parent.mkdir(parents=True, exist_ok=True)
            document = ConfigLoader._document(config)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, default=str)
        except (OSError, TypeError, ValueError) as e:
            GateLogger.get("ConfigLoader").error(f"Failed to save {path}: {e}")
            return False

        return True


def get_logger(component: str) -> logging.Logger:
    return GateLogger.get(component)
