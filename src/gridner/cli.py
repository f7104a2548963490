"""Command-line interface for gridner."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import settings
from .history import ChangeLogStore, HistoryEntry
from .ops import MalformedRecord, NERChange, default_registry


def main(argv: Optional[list[str]] = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="gridner - Reversible named-entity recognition changes for grids"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate", help="Check that every entry of a change log can be loaded"
    )
    validate_parser.add_argument("logfile", type=Path, help="Change log file")

    # Show command
    show_parser = subparsers.add_parser("show", help="Summarize a change log")
    show_parser.add_argument("logfile", type=Path, help="Change log file")

    # History command
    history_parser = subparsers.add_parser(
        "history", help="List the stored history of a grid"
    )
    history_parser.add_argument("--grid-id", required=True, help="Grid identifier")
    history_parser.add_argument(
        "--db", type=Path, default=None, help="Database path (default: DATABASE_PATH)"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    if args.command == "validate":
        sys.exit(run_validate(args.logfile))
    elif args.command == "show":
        sys.exit(run_show(args.logfile))
    elif args.command == "history":
        sys.exit(asyncio.run(run_history(args.grid_id, args.db)))
    else:
        parser.print_help()
        sys.exit(1)


def _read_lines(logfile: Path) -> list[tuple[int, str]]:
    with open(logfile, encoding="utf-8") as f:
        return [
            (number, line.rstrip("\n"))
            for number, line in enumerate(f, start=1)
            if line.strip()
        ]


def run_validate(logfile: Path) -> int:
    """Load every entry of a change log and report the ones that fail."""
    try:
        lines = _read_lines(logfile)
    except OSError as e:
        print(f"Cannot read {logfile}: {e}")
        return 2

    failures = 0
    for number, line in lines:
        try:
            entry = HistoryEntry.from_line(line)
            default_registry.load(entry.change_type, entry.record)
        except MalformedRecord as e:
            failures += 1
            print(f"line {number}: {e}")

    print(f"{len(lines)} entries, {failures} malformed")
    return 1 if failures else 0


def run_show(logfile: Path) -> int:
    """Print a one-line summary per change log entry."""
    try:
        lines = _read_lines(logfile)
    except OSError as e:
        print(f"Cannot read {logfile}: {e}")
        return 2

    for number, line in lines:
        try:
            entry = HistoryEntry.from_line(line)
            change = default_registry.load(entry.change_type, entry.record)
        except MalformedRecord as e:
            print(f"line {number}: {e}")
            return 1
        print(_describe(entry, change))
    return 0


async def run_history(grid_id: str, db_path: Optional[Path] = None) -> int:
    """List the stored entries of a grid."""
    store = ChangeLogStore(db_path)
    await store.initialize()
    try:
        entries = await store.get_entries(grid_id)
    finally:
        await store.close()

    if not entries:
        print(f"No history for grid {grid_id}")
        return 0
    for entry in entries:
        print(_describe(entry))
    return 0


def _describe(entry: HistoryEntry, change=None) -> str:
    state = "applied" if entry.applied else "undone"
    summary = f"#{entry.seq} [{state}] {entry.change_type}: {entry.description}"
    if isinstance(change, NERChange):
        summary += (
            f" (columns {change.service_names} at {change.column_index}, "
            f"{len(change.extracted_terms)} rows, "
            f"{len(change.added_row_ids)} added)"
        )
    return summary


if __name__ == "__main__":
    main()
