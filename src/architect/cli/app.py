"""CLI orchestration and command routing."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence

from architect.cli.commands import (
    cmd_add_subtask,
    cmd_delete_subtask,
    cmd_delete_task,
    cmd_generate,
    cmd_show,
    cmd_stats,
    cmd_toggle,
    cmd_toggle_subtask,
    cmd_tui,
)
from architect.cli.parser import DEFAULT_OUTPUT, parse_args

logger = logging.getLogger(__name__)


def dispatch(args: argparse.Namespace) -> int:
    """Route parsed args to the correct command handler."""
    command_handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "generate": cmd_generate,
        "show": cmd_show,
        "stats": cmd_stats,
        "toggle": cmd_toggle,
        "toggle-subtask": cmd_toggle_subtask,
        "add-subtask": cmd_add_subtask,
        "delete-subtask": cmd_delete_subtask,
        "delete-task": cmd_delete_task,
        "tui": cmd_tui,
    }

    if args.command is None:
        args.file = DEFAULT_OUTPUT
        return cmd_tui(args)

    handler = command_handlers.get(args.command)
    if handler is None:
        return cmd_tui(args)

    return handler(args)


def run(
    argv: Sequence[str] | None = None,
    *,
    configure_logging: Callable[[], None] | None = None,
) -> int:
    """Parse args, apply shared CLI setup, and execute command."""
    args = parse_args(argv)

    if configure_logging is not None:
        configure_logging()

    logger.info("Command: %s", args.command or "tui")
    return dispatch(args)
