"""Plain-text rendering of roadmaps for the CLI."""

from __future__ import annotations

from architect.models import (
    RoadmapStore,
    Subtask,
    SubtaskStatus,
    Task,
    TaskStatus,
)

TASK_MARKS = {
    TaskStatus.TODO: "[ ]",
    TaskStatus.IN_PROGRESS: "[~]",
    TaskStatus.DONE: "[x]",
}

SUBTASK_MARKS = {
    SubtaskStatus.TODO: "[ ]",
    SubtaskStatus.DONE: "[x]",
}


def render_task(task: Task) -> list[str]:
    """Lines for one task and its subtasks."""
    lines = [
        f"  {TASK_MARKS[task.status]} #{task.id} {task.title} "
        f"({task.priority.value})"
    ]
    if task.tags:
        lines.append(f"      tags: {', '.join(task.tags)}")
    lines.extend(render_subtask(sub) for sub in task.subtasks)
    return lines


def render_subtask(subtask: Subtask) -> str:
    return f"      {SUBTASK_MARKS[subtask.status]} {subtask.id}: {subtask.title}"


def render_summary(store: RoadmapStore) -> str:
    stats = store.get_statistics()
    line = f"Progress: {stats.percent}% ({stats.completed}/{stats.total} tasks done)"
    if store.is_complete:
        line += " - plan complete"
    return line


def render_roadmap(store: RoadmapStore) -> str:
    """Full roadmap: summary, then each stage with its tasks."""
    lines = [store.summary, "", render_summary(store)]
    for stage in store.stages:
        lines.append("")
        lines.append(f"== {stage.stage_name} ==")
        if not stage.tasks:
            lines.append("  (no tasks)")
        for task in stage.tasks:
            lines.extend(render_task(task))
    return "\n".join(lines)


def render_statistics(store: RoadmapStore) -> str:
    """Overall statistics followed by a per-stage breakdown."""
    stats = store.get_statistics()
    by_priority = stats.by_priority
    lines = [
        render_summary(store),
        f"Priority: High {by_priority.high}, Medium {by_priority.medium}, "
        f"Low {by_priority.low}",
        "",
        "Stages:",
    ]
    for stage in store.stage_statistics():
        lines.append(
            f"  {stage.stage_name}: {stage.completed}/{stage.total} done "
            f"(H {stage.by_priority.high} / M {stage.by_priority.medium} / "
            f"L {stage.by_priority.low})"
        )
    return "\n".join(lines)
