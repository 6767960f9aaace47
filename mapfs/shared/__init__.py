"""
Shared utilities for mapfs.

Provides access to common functionality used across components.
"""

from mapfs.shared.gate import (
    GateLogger,
    GateErrorHandler,
    ConfigLoader,
    get_logger,
)

__all__ = [
    "GateLogger",
    "GateErrorHandler",
    "ConfigLoader",
    "get_logger",
]
