"""recordshelf CLI entry points.
This module exposes demo, query and book mutation commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from cli.demo_command import add_demo_command, run_demo_command
from cli.query_command import (
    add_book_commands,
    add_query_command,
    run_add_book_command,
    run_query_command,
    run_remove_books_command,
)
from core.config import ShelfConfig
from core.errors import ShelfQueryError
from core.logging_config import configure_logging
from store.shelf_sdk import ShelfClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="shelf", description="Query JSON and XML record files")
    parser.add_argument("--data-root", help="Override SHELF_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_demo_command(subparsers)
    add_query_command(subparsers)
    add_book_commands(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the recordshelf CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    client = _build_client(args.data_root)
    configure_logging(client.config.log_level)
    try:
        return asyncio.run(_dispatch(client, args))
    except ShelfQueryError as error:
        print(f"query_error={error}")
        return 2


async def _dispatch(client: ShelfClient, args: argparse.Namespace) -> int:
    """Route parsed args to the matching command handler."""
    if args.command == "demo":
        return await run_demo_command(client, args)
    if args.command == "query":
        return await run_query_command(client, args)
    if args.command == "add-book":
        return await run_add_book_command(client, args)
    return await run_remove_books_command(client, args)


def _build_client(data_root: str | None) -> ShelfClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    client = ShelfClient(ShelfConfig.from_env())
    if data_root:
        client = client.with_data_root(data_root)
    return client
