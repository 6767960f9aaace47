from __future__ import annotations

from dataclasses import dataclass

from mapfs.MapStorage import MapStorage


@dataclass(slots=True)
class CommandContext:
    storage: MapStorage
    exit_requested: bool = False


__all__ = ["CommandContext"]
