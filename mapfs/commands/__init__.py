from mapfs.commands.context import CommandContext
from mapfs.commands.router import handle_command, COMMAND_HELP
from mapfs.commands.shell import CommandLineScanner, ConsoleScanner, LineScanner, run_shell

__all__ = [
    "CommandContext",
    "handle_command",
    "COMMAND_HELP",
    "CommandLineScanner",
    "ConsoleScanner",
    "LineScanner",
    "run_shell",
]
