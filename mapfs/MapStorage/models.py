"""
MapStorage Pydantic models.

Defines entry types and the result of a filesystem operation.
"""

from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class MapFileType(str, Enum):
    """Type tag stored at the front of every entry value."""
    DIRECTORY = "DIRECTORY"
    FILE = "FILE"


class StorageResult(BaseModel):
    """Result of a filesystem operation."""
    success: bool
    operation: str = Field(description="Operation type: mkdir/cd/touch/rm/cp/mv/readtext/...")
    path: str = ""
    message: str = ""
    data: Optional[Any] = None
    error: Optional[str] = None

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")

    @classmethod
    def ok(
        cls,
        operation: str,
        path: str = "",
        message: str = "",
        data: Any = None,
    ) -> "StorageResult":
        """Create a successful result."""
        return cls(success=True, operation=operation, path=path, message=message, data=data)

    @classmethod
    def fail(
        cls,
        operation: str,
        path: str,
        error: str,
    ) -> "StorageResult":
        """Create a failed result."""
        return cls(success=False, operation=operation, path=path, error=error)
