"""Roadmap tree widget: stages, tasks and subtasks with status icons."""

from dataclasses import dataclass
from typing import Any

from rich.text import Text
from textual.binding import Binding
from textual.widgets import Tree
from textual.widgets.tree import TreeNode

from architect.models import (
    Priority,
    RoadmapStore,
    Stage,
    Subtask,
    SubtaskId,
    SubtaskStatus,
    Task,
    TaskStatus,
)
from architect.tui.widgets.styles import ROADMAP_TREE_CSS

TASK_ICONS = {
    TaskStatus.TODO: ("○", "dim"),
    TaskStatus.IN_PROGRESS: ("◎", "bold cyan"),
    TaskStatus.DONE: ("◉", "green"),
}

SUBTASK_ICONS = {
    SubtaskStatus.TODO: ("□", "dim"),
    SubtaskStatus.DONE: ("■", "green"),
}

PRIORITY_STYLES = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "dim",
}


@dataclass(frozen=True, slots=True)
class NodeRef:
    """What a tree node points at. Stage nodes carry neither id."""

    task_id: int | None = None
    subtask_id: SubtaskId | None = None

    @property
    def is_task(self) -> bool:
        return self.task_id is not None and self.subtask_id is None

    @property
    def is_subtask(self) -> bool:
        return self.task_id is not None and self.subtask_id is not None


def _truncate(title: str, max_len: int) -> str:
    if max_len < 4 or len(title) <= max_len:
        return title
    return title[: max_len - 3] + "..."


def format_stage_label(stage: Stage) -> Text:
    """Stage name with its done/total task count."""
    done = sum(1 for t in stage.tasks if t.is_done)
    result = Text(stage.stage_name, style="bold")
    result.append(f" ({done}/{len(stage.tasks)})", style="dim")
    return result


def format_task_label(task: Task, width: int = 80) -> Text:
    """Format a task for display in the tree.

    Args:
        task: The task to format.
        width: Target width; long titles are truncated with an ellipsis.

    Returns:
        Rich Text with a colored status icon, title, priority and
        subtask progress.
    """
    icon, icon_style = TASK_ICONS[task.status]
    result = Text()
    result.append(icon, style=icon_style)
    result.append(" ")

    priority = f" [{task.priority.value}]"
    progress = ""
    if task.subtasks:
        done = sum(1 for s in task.subtasks if s.is_done)
        progress = f" ({done}/{len(task.subtasks)})"

    used = 2 + len(priority) + len(progress)
    title = _truncate(task.title, width - used)
    result.append(title, style="strike dim" if task.is_done else "")
    result.append(priority, style=PRIORITY_STYLES[task.priority])
    if progress:
        result.append(progress, style="dim")
    return result


def format_subtask_label(subtask: Subtask, width: int = 76) -> Text:
    icon, icon_style = SUBTASK_ICONS[subtask.status]
    result = Text()
    result.append(icon, style=icon_style)
    result.append(" ")
    result.append(
        _truncate(subtask.title, width - 2),
        style="strike dim" if subtask.is_done else "",
    )
    return result


class RoadmapTree(Tree[NodeRef]):
    """Tree widget for displaying a roadmap."""

    DEFAULT_CSS = ROADMAP_TREE_CSS

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        # Space toggles status instead of expanding the node
        Binding("space", "app.toggle", "Toggle", show=False),
    ]

    def __init__(self, **kwargs: Any) -> None:
        super().__init__("ROADMAP", **kwargs)
        self._store: RoadmapStore | None = None
        # Hide the root node - stages are the top level
        self.show_root = False

    def update_store(self, store: RoadmapStore) -> None:
        """Show a new snapshot, keeping the cursor on the same item."""
        selected = self.selected_ref
        self._store = store
        self._rebuild_tree()
        if selected is not None:
            self._restore_cursor(selected)

    @property
    def selected_ref(self) -> NodeRef | None:
        node = self.cursor_node
        return node.data if node is not None else None

    def _rebuild_tree(self) -> None:
        if self._store is None:
            return

        self.root.remove_children()
        for stage in self._store.stages:
            stage_node = self.root.add(
                format_stage_label(stage), data=NodeRef(), expand=True
            )
            for task in stage.tasks:
                ref = NodeRef(task_id=task.id)
                if task.subtasks:
                    task_node = stage_node.add(
                        format_task_label(task), data=ref, expand=True
                    )
                    for sub in task.subtasks:
                        task_node.add_leaf(
                            format_subtask_label(sub),
                            data=NodeRef(task_id=task.id, subtask_id=sub.id),
                        )
                else:
                    stage_node.add_leaf(format_task_label(task), data=ref)

        self.root.expand_all()

    def _restore_cursor(self, ref: NodeRef) -> None:
        fallback: TreeNode[NodeRef] | None = None

        def walk(node: TreeNode[NodeRef]) -> TreeNode[NodeRef] | None:
            nonlocal fallback
            for child in node.children:
                if child.data == ref:
                    return child
                if (
                    fallback is None
                    and child.data is not None
                    and child.data.is_task
                    and child.data.task_id == ref.task_id
                ):
                    fallback = child
                found = walk(child)
                if found is not None:
                    return found
            return None

        target = walk(self.root) or fallback
        if target is not None:
            self.move_cursor(target)

    def select_first(self) -> None:
        """Highlight the first stage in the tree."""
        if self.root.children:
            self.move_cursor(self.root.children[0])
