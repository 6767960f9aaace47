"""
Interactive line-oriented shell over a MapStorage.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional, Protocol, runtime_checkable

from rich.console import Console
from rich.text import Text

from mapfs.commands.context import CommandContext
from mapfs.commands.router import handle_command
from mapfs.MapStorage import MapStorage
from mapfs.shared.gate import GateLogger

_log = GateLogger.get("commands")


@runtime_checkable
class CommandLineScanner(Protocol):
    """Source of shell input lines."""

    def next_line(self) -> Optional[str]:
        """Next line, or None when input is exhausted."""
        ...


class ConsoleScanner:
    """Reads lines from the terminal, prompting with the working directory."""

    def __init__(self, console: Console, prompt: Callable[[], str]):
        self.console = console
        self.prompt = prompt

    def next_line(self) -> Optional[str]:
        try:
            return self.console.input(Text(self.prompt(), style="bold green"))
        except (EOFError, KeyboardInterrupt):
            return None


class LineScanner:
    """Feeds a fixed sequence of lines, e.g. a script or a test."""

    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)

    def next_line(self) -> Optional[str]:
        return next(self._lines, None)


def run_shell(storage: MapStorage, scanner: CommandLineScanner, console: Console) -> int:
    """
    Execute lines until exit or end of input, then flush the store.

    Returns:
        Number of commands executed
    """
    ctx = CommandContext(storage=storage)
    count = 0

    while not ctx.exit_requested:
        line = scanner.next_line()
        if line is None:
            break
        output = handle_command(line, ctx)
        count += 1
        if output:
            console.print(Text(output.rstrip("\n")))

    storage.flush()
    _log.info(f"Shell closed after {count} commands")
    return count


__all__ = ["CommandLineScanner", "ConsoleScanner", "LineScanner", "run_shell"]
