"""
mapfs interactive shell.

Usage:
    python -m mapfs [--config PATH] [--env-file PATH] [--backend memory|json|sql]
                    [--json-path PATH] [--database-url URL] [--compression none|zlib]
                    [--script FILE]

Settings not given on the command line come from the environment, the
.env file and the config file, in that order.
"""

import argparse
import sys
from pathlib import Path

from rich.console import Console

from mapfs.Config import StorageBackend, StorageConfig, load_config, open_storage
from mapfs.SimpleMap import MapStorageCompression
from mapfs.commands.shell import ConsoleScanner, LineScanner, run_shell


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mapfs",
        description="Filesystem shell over a key-value store",
    )
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("--env-file", help=".env file to load")
    parser.add_argument("--backend", choices=[b.value for b in StorageBackend])
    parser.add_argument("--json-path", help="Document used by the json backend")
    parser.add_argument("--database-url", help="SQLAlchemy URL used by the sql backend")
    parser.add_argument("--compression", choices=[c.value for c in MapStorageCompression])
    parser.add_argument("--script", help="Run commands from a file instead of the terminal")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config, args.env_file)
    overrides = {
        key: value
        for key, value in {
            "backend": args.backend,
            "json_path": args.json_path,
            "database_url": args.database_url,
            "compression": args.compression,
        }.items()
        if value is not None
    }
    if overrides:
        config = StorageConfig.model_validate({**config.model_dump(), **overrides})

    console = Console()
    storage = open_storage(config)

    if args.script:
        lines = Path(args.script).read_text(encoding="utf-8").splitlines()
        scanner = LineScanner(lines)
    else:
        scanner = ConsoleScanner(console, lambda: f"{storage.pwd()} $ ")

    run_shell(storage, scanner, console)
    return 0


if __name__ == "__main__":
    sys.exit(main())
