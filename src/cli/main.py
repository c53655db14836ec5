"""Booklake CLI entry points.
This module exposes ingestion, query, and serve commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from core.book_ids import parse_book_id
from core.config import BooklakeConfig
from core.errors import BooklakeInvalidIdError
from store.booklake_client import BooklakeClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="booklake", description="Booklake ingestion CLI")
    parser.add_argument("--staging-dir", help="Override BOOKLAKE_STAGING_PATH for this command")
    parser.add_argument(
        "--backend",
        choices=("local", "s3"),
        help="Override BOOKLAKE_BACKEND for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_ingest_command(subparsers)
    _add_ingest_random_command(subparsers)
    _add_status_command(subparsers)
    subparsers.add_parser("list", help="List ingested book ids")
    subparsers.add_parser("pending", help="List staged books not yet committed")
    _add_serve_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the booklake CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _build_config(args.staging_dir, args.backend)
    if args.command == "serve":
        return _run_serve_command(config, args)
    client = BooklakeClient(config)
    try:
        if args.command == "ingest":
            return _run_ingest_command(client, args)
        if args.command == "status":
            return _run_status_command(client, args)
    except BooklakeInvalidIdError as error:
        parser.error(str(error))
    if args.command == "ingest-random":
        return _run_ingest_random_command(client, args)
    if args.command == "list":
        return _print_ids(client.list_books())
    if args.command == "pending":
        return _print_ids(client.pending_books())
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(staging_dir: str | None, backend: str | None) -> BooklakeConfig:
    """Build config with optional command-line overrides.

    Args:
        staging_dir: Optional staging path override.
        backend: Optional backend override.

    Returns:
        Runtime configuration.
    """
    config = BooklakeConfig.from_env()
    if staging_dir:
        config = replace(config, staging_dir=Path(staging_dir).expanduser().resolve())
    if backend:
        config = replace(config, backend=backend)
    return config


def _run_ingest_command(client: BooklakeClient, args: argparse.Namespace) -> int:
    """Handle ingest command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    book_id = parse_book_id(args.book_id)
    timestamp = datetime.now()
    outcome = client.ingest(book_id, timestamp)
    if outcome.failed:
        print(f"{book_id}\tfailed\t{outcome.stage}")
        return 1
    print(client.receipt_for(book_id, timestamp).path)
    return 0


def _run_ingest_random_command(client: BooklakeClient, args: argparse.Namespace) -> int:
    book_id = client.ingest_random(
        exclude_existing=not args.include_existing,
        max_attempts=args.attempts,
    )
    if book_id is None:
        print("no book ingested")
        return 1
    print(book_id)
    return 0


def _run_status_command(client: BooklakeClient, args: argparse.Namespace) -> int:
    book_id = parse_book_id(args.book_id)
    print(f"{book_id}\t{'available' if client.exists(book_id) else 'not_found'}")
    return 0


def _run_serve_command(config: BooklakeConfig, args: argparse.Namespace) -> int:
    """Serve the HTTP control surface with uvicorn."""
    import uvicorn

    from api.app import create_app

    app = create_app(BooklakeClient(config))
    uvicorn.run(app, host=args.host, port=args.port or config.port)
    return 0


def _print_ids(book_ids: list[int]) -> int:
    for book_id in book_ids:
        print(book_id)
    return 0


def _add_ingest_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("ingest", help="Download one book and commit it")
    parser.add_argument("book_id", help="Positive integer book id")


def _add_ingest_random_command(subparsers: Any) -> None:
    parser = subparsers.add_parser(
        "ingest-random", help="Ingest a random book not yet in the datalake"
    )
    parser.add_argument(
        "--include-existing",
        action="store_true",
        help="Do not exclude ids already present in the datalake",
    )
    parser.add_argument(
        "--attempts", type=_positive_int, help="Override BOOKLAKE_MAX_RETRIES draw budget"
    )


def _add_status_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("status", help="Check whether a book is in the datalake")
    parser.add_argument("book_id", help="Positive integer book id")


def _add_serve_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("serve", help="Run the HTTP control surface")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    parser.add_argument("--port", type=_positive_int, help="Override BOOKLAKE_PORT")


def _positive_int(raw_value: str) -> int:
    """Argparse type accepting integers greater than zero."""
    try:
        value = int(raw_value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {raw_value!r}") from error
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {raw_value!r}")
    return value
