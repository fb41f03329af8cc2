"""Commands that apply one store mutation and write the file back."""

from __future__ import annotations

import argparse
import re
import sys

from architect.cli.context import load_store_or_error, save_store
from architect.cli.render import render_summary, render_task
from architect.models import RoadmapStore, SubtaskId, Task

_INT_RE = re.compile(r"^-?\d+$")


def _load_task(
    args: argparse.Namespace,
) -> tuple[RoadmapStore, Task] | None:
    store = load_store_or_error(args.file)
    if store is None:
        return None
    task = store.find_task(args.task_id)
    if task is None:
        print(f"Error: Task {args.task_id} not found", file=sys.stderr)
        return None
    return store, task


def resolve_subtask_id(task: Task, raw: str) -> SubtaskId | None:
    """Match a command-line subtask id against the task's actual ids.

    An integer-looking argument tries the numeric id first, then the same
    text as a string id.
    """
    candidates: list[SubtaskId] = []
    if _INT_RE.match(raw.strip()):
        candidates.append(SubtaskId(int(raw.strip())))
    candidates.append(SubtaskId(raw))
    for candidate in candidates:
        if task.find_subtask(candidate) is not None:
            return candidate
    return None


def _subtask_or_error(task: Task, raw: str) -> SubtaskId | None:
    subtask_id = resolve_subtask_id(task, raw)
    if subtask_id is None:
        print(f"Error: Subtask {raw} not found in task {task.id}", file=sys.stderr)
    return subtask_id


def _finish(store: RoadmapStore, args: argparse.Namespace) -> int:
    if not save_store(store, args.file):
        return 1
    task = store.find_task(args.task_id)
    if task is not None:
        print("\n".join(render_task(task)))
    print(render_summary(store))
    return 0


def cmd_toggle(args: argparse.Namespace) -> int:
    """Advance a task to its next status."""
    loaded = _load_task(args)
    if loaded is None:
        return 1
    store, _ = loaded
    return _finish(store.toggle_task_status(args.task_id), args)


def cmd_toggle_subtask(args: argparse.Namespace) -> int:
    """Flip a subtask between Todo and Done."""
    loaded = _load_task(args)
    if loaded is None:
        return 1
    store, task = loaded
    subtask_id = _subtask_or_error(task, args.subtask_id)
    if subtask_id is None:
        return 1
    return _finish(store.toggle_subtask(args.task_id, subtask_id), args)


def cmd_add_subtask(args: argparse.Namespace) -> int:
    """Append a subtask to a task."""
    title = args.title.strip()
    if not title:
        print("Error: Subtask title must not be empty", file=sys.stderr)
        return 1
    loaded = _load_task(args)
    if loaded is None:
        return 1
    store, _ = loaded
    return _finish(store.add_subtask(args.task_id, title), args)


def cmd_delete_subtask(args: argparse.Namespace) -> int:
    """Remove a subtask from a task."""
    loaded = _load_task(args)
    if loaded is None:
        return 1
    store, task = loaded
    subtask_id = _subtask_or_error(task, args.subtask_id)
    if subtask_id is None:
        return 1
    return _finish(store.delete_subtask(args.task_id, subtask_id), args)


def cmd_delete_task(args: argparse.Namespace) -> int:
    """Remove a task from its stage."""
    loaded = _load_task(args)
    if loaded is None:
        return 1
    store, task = loaded
    updated = store.delete_task(args.task_id)
    if not save_store(updated, args.file):
        return 1
    print(f"Deleted task #{task.id} {task.title}")
    print(render_summary(updated))
    return 0
