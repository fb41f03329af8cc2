"""CLI command handlers."""

from .edit import (
    cmd_add_subtask,
    cmd_delete_subtask,
    cmd_delete_task,
    cmd_toggle,
    cmd_toggle_subtask,
)
from .generate import cmd_generate
from .show import cmd_show, cmd_stats
from .tui import cmd_tui

__all__ = [
    "cmd_add_subtask",
    "cmd_delete_subtask",
    "cmd_delete_task",
    "cmd_generate",
    "cmd_show",
    "cmd_stats",
    "cmd_toggle",
    "cmd_toggle_subtask",
    "cmd_tui",
]
