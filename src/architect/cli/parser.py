"""Argument parser construction for Architect CLI."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from architect import __version__

DEFAULT_OUTPUT = Path("roadmap.json")


def _add_file_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", type=Path, help="Roadmap JSON file")


def _add_task_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("task_id", type=int, help="Task id")


def _add_subtask_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "subtask_id",
        help="Subtask id (numeric ids match numeric ids first, then text)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="architect",
        description="Architect - turn a goal into a staged, trackable roadmap",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a roadmap for a goal",
    )
    generate_parser.add_argument("goal", help="What you want to achieve")
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Output file path (default: {DEFAULT_OUTPUT})",
    )

    # Read-only commands
    show_parser = subparsers.add_parser("show", help="Print a roadmap")
    _add_file_arg(show_parser)

    stats_parser = subparsers.add_parser("stats", help="Print roadmap statistics")
    _add_file_arg(stats_parser)

    # Mutations
    toggle_parser = subparsers.add_parser(
        "toggle",
        help="Advance a task: Todo -> In Progress -> Done -> Todo",
    )
    _add_file_arg(toggle_parser)
    _add_task_arg(toggle_parser)

    toggle_sub_parser = subparsers.add_parser(
        "toggle-subtask",
        help="Flip a subtask between Todo and Done",
    )
    _add_file_arg(toggle_sub_parser)
    _add_task_arg(toggle_sub_parser)
    _add_subtask_arg(toggle_sub_parser)

    add_sub_parser = subparsers.add_parser(
        "add-subtask",
        help="Append a subtask to a task",
    )
    _add_file_arg(add_sub_parser)
    _add_task_arg(add_sub_parser)
    add_sub_parser.add_argument("title", help="Subtask title")

    delete_sub_parser = subparsers.add_parser(
        "delete-subtask",
        help="Remove a subtask from a task",
    )
    _add_file_arg(delete_sub_parser)
    _add_task_arg(delete_sub_parser)
    _add_subtask_arg(delete_sub_parser)

    delete_task_parser = subparsers.add_parser(
        "delete-task",
        help="Remove a task from its stage",
    )
    _add_file_arg(delete_task_parser)
    _add_task_arg(delete_task_parser)

    # TUI command
    tui_parser = subparsers.add_parser("tui", help="Open the interactive board")
    tui_parser.add_argument(
        "file",
        type=Path,
        nargs="?",
        default=DEFAULT_OUTPUT,
        help=f"Roadmap JSON file (default: {DEFAULT_OUTPUT})",
    )

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments from argv (or sys.argv when omitted)."""
    parser = build_parser()
    if argv is None:
        return parser.parse_args()
    return parser.parse_args(list(argv))
