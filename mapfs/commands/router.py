from __future__ import annotations

import base64
import shlex
from typing import Callable, Dict, List

from mapfs.commands.context import CommandContext
from mapfs.MapStorage.operations import MISSING_ARGUMENT
from mapfs.shared.gate import GateErrorHandler

Handler = Callable[[CommandContext, List[str]], str]

COMMAND_HELP: Dict[str, str] = {
    "cd": "cd <path>                  change the working directory",
    "mkdir": "mkdir <path>               create a directory",
    "pwd": "pwd                        print the working directory",
    "depth": "depth [path]               number of segments below /",
    "ls": "ls [path]                  list direct children",
    "touch": "touch <path> [content...]  create a file",
    "savetext": "savetext <path> <text...>  create a file with text",
    "readtext": "readtext <path>            print a text file (alias: cat)",
    "readbin": "readbin <path>             print a binary file as base64",
    "rm": "rm <path>                  remove one entry",
    "cp": "cp <source> <target>       copy a file",
    "mv": "mv <source> <target>       move a file",
    "exists": "exists <path>              true/false",
    "isfile": "isfile <path>              true/false",
    "isdir": "isdir <path>               true/false",
    "debug": "debug                      dump every entry",
    "flush": "flush                      commit to durable storage",
    "rmdir": "rmdir <path>               not supported",
    "help": "help                       show this text",
    "exit": "exit                       leave the shell (alias: quit)",
}


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _run(ctx: CommandContext, operation: str, *args) -> str:
    """Run a MapStorage operation; failures come back as their message."""
    result = ctx.storage.execute(operation, *args)
    if not result.success:
        return result.error
    if operation == "readtext":
        return result.data
    if operation == "ls":
        return "\n".join(result.data)
    if operation == "readbin":
        return base64.b64encode(result.data).decode("ascii")
    return ""


def _path_command(operation: str) -> Handler:
    def handler(ctx: CommandContext, args: List[str]) -> str:
        if not args:
            return MISSING_ARGUMENT
        return _run(ctx, operation, args[0])
    return handler


def _pair_command(operation: str) -> Handler:
    def handler(ctx: CommandContext, args: List[str]) -> str:
        if len(args) < 2:
            return MISSING_ARGUMENT
        return _run(ctx, operation, args[0], args[1])
    return handler


def _content_command(operation: str) -> Handler:
    def handler(ctx: CommandContext, args: List[str]) -> str:
        if not args:
            return MISSING_ARGUMENT
        return _run(ctx, operation, args[0], " ".join(args[1:]))
    return handler


def _query_command(query: str) -> Handler:
    def handler(ctx: CommandContext, args: List[str]) -> str:
        if not args:
            return MISSING_ARGUMENT
        return _bool(getattr(ctx.storage, query)(args[0]))
    return handler


def _ls(ctx: CommandContext, args: List[str]) -> str:
    return _run(ctx, "ls", args[0] if args else None)


def _depth(ctx: CommandContext, args: List[str]) -> str:
    return str(ctx.storage.depth(args[0] if args else ctx.storage.pwd()))


def _flush(ctx: CommandContext, args: List[str]) -> str:
    ctx.storage.flush()
    return ""


def _rmdir(ctx: CommandContext, args: List[str]) -> str:
    if not args:
        return MISSING_ARGUMENT
    ctx.storage.rmdir(args[0])
    return ""


def _help(ctx: CommandContext, args: List[str]) -> str:
    return "\n".join(COMMAND_HELP.values())


def _exit(ctx: CommandContext, args: List[str]) -> str:
    ctx.exit_requested = True
    return ""


_HANDLERS: Dict[str, Handler] = {
    "cd": _path_command("cd"),
    "mkdir": _path_command("mkdir"),
    "pwd": lambda ctx, args: ctx.storage.pwd(),
    "depth": _depth,
    "ls": _ls,
    "touch": _content_command("touch"),
    "savetext": _content_command("savetext"),
    "readtext": _path_command("readtext"),
    "cat": _path_command("readtext"),
    "readbin": _path_command("readbin"),
    "rm": _path_command("rm"),
    "cp": _pair_command("cp"),
    "mv": _pair_command("mv"),
    "exists": _query_command("exists"),
    "isfile": _query_command("isfile"),
    "isdir": _query_command("isdir"),
    "debug": lambda ctx, args: ctx.storage.debug(),
    "flush": _flush,
    "rmdir": _rmdir,
    "help": _help,
    "exit": _exit,
    "quit": _exit,
}


@GateErrorHandler.wrap("commands", "command", default_return=lambda e: f"Error: {e}")
def handle_command(line: str, ctx: CommandContext) -> str:
    """
    Run one shell line against ctx.storage.

    Returns:
        Text to show the user; empty when a command succeeds silently
    """
    parts = shlex.split(line)
    if not parts:
        return ""

    name, args = parts[0].lower(), parts[1:]
    handler = _HANDLERS.get(name)
    if handler is None:
        return f"Unsupported command: {name}"
    return handler(ctx, args)


__all__ = ["handle_command", "COMMAND_HELP"]
