"""Command-line interface.

Provides `lookup` to credit a contributor and `notes` to list stored
contributor notes.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from .config import KudosConfig, load_config
from .logging import configure_logger
from .memory import open_store
from .tools import ContributorLookupTool, ToolRegistry


def _load(args: argparse.Namespace) -> KudosConfig:
    return load_config(Path(args.config).expanduser() if args.config else None)


async def _lookup(tool_args: dict[str, Any], config: KudosConfig) -> int:
    event_logger = configure_logger(config.log_dir, max_size_mb=config.log_max_size_mb)
    registry = ToolRegistry(event_logger=event_logger)
    registry.register(ContributorLookupTool.from_config(config, event_logger=event_logger))

    result = await registry.dispatch("contributor_lookup", tool_args)

    if result.output:
        print(result.output)
    else:
        print(f"Error: {result.error}", file=sys.stderr)

    return 0 if result.success else 1


def cmd_lookup(args: argparse.Namespace) -> int:
    """Look up a contributor and print the credit report."""
    config = _load(args)

    tool_args: dict[str, Any] = {"login": args.login}
    if args.issue is not None:
        tool_args["issue"] = args.issue

    return asyncio.run(_lookup(tool_args, config))


def cmd_notes(args: argparse.Namespace) -> int:
    """List contributor notes in the memory store."""
    config = _load(args)

    if not config.db_path.exists():
        print("No notes stored.")
        return 0

    store = open_store(config.db_path)
    try:
        notes = store.find_by_tag(args.tag) if args.tag else store.get_all()
    finally:
        store.close()

    if not notes:
        print("No notes stored.")
        return 0

    for note in notes:
        print(f"[{note.created_at}] {note.information}")
        print(f"    tags: {note.tags}")

    print(f"\nTotal: {len(notes)} note(s)")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the kudos CLI."""
    parser = argparse.ArgumentParser(
        prog="kudos",
        description="Credit GitHub contributors in changesets",
    )
    config_help = "Path to config.json (default: ~/.kudos/config.json)"
    parser.add_argument("-c", "--config", help=config_help)

    # Accept --config after the sub-command too; SUPPRESS keeps a value
    # given before the sub-command from being reset to None.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-c", "--config", default=argparse.SUPPRESS, help=config_help)

    subparsers = parser.add_subparsers(dest="command", help="Sub-command help")

    # lookup command
    lookup_parser = subparsers.add_parser(
        "lookup", parents=[common], help="Look up a contributor"
    )
    lookup_parser.add_argument("login", help="GitHub username")
    lookup_parser.add_argument(
        "-i", "--issue",
        type=int,
        help="Issue number the contributor reported",
    )

    # notes command
    notes_parser = subparsers.add_parser(
        "notes", parents=[common], help="List stored contributor notes"
    )
    notes_parser.add_argument("-t", "--tag", help="Only show notes with this tag")

    return parser


def run_cli(argv: list[str] | None = None) -> int:
    """Run the CLI with given arguments.

    Args:
        argv: Command-line arguments. Uses sys.argv[1:] if None.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "lookup": cmd_lookup,
        "notes": cmd_notes,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(run_cli())
