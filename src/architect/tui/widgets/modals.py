"""Modal screens for the roadmap board."""

from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from architect.models import RoadmapStore
from architect.tui.widgets.styles import (
    ADD_SUBTASK_MODAL_CSS,
    CONFIRM_DELETE_MODAL_CSS,
    MODAL_BASE_CSS,
    STATS_MODAL_CSS,
)


class RoadmapModalBase(ModalScreen[Any]):
    """Shared layout and escape handling for board modals."""

    DEFAULT_CSS = MODAL_BASE_CSS

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    def action_cancel(self) -> None:
        """Close without a result."""
        self.dismiss(None)


class ConfirmDeleteModal(RoadmapModalBase):
    """Confirmation modal for deleting a task."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
        Binding("enter", "confirm", "Confirm", show=True),
    ]

    DEFAULT_CSS = CONFIRM_DELETE_MODAL_CSS

    def __init__(self, task_id: int, task_title: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.task_id = task_id
        self.task_title = task_title

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Delete Task?", classes="modal-title")
            yield Static(f"#{self.task_id}: {self.task_title}", classes="task-info")
            with Horizontal(classes="modal-actions"):
                yield Button("Delete", id="btn-delete", variant="error")
                yield Button("Cancel", id="btn-cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-delete")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class AddSubtaskModal(RoadmapModalBase):
    """Ask for the title of a new subtask.

    Dismisses with the trimmed title, or None when cancelled or blank.
    """

    DEFAULT_CSS = ADD_SUBTASK_MODAL_CSS

    def __init__(self, task_title: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.task_title = task_title

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Add Subtask", classes="modal-title")
            yield Static(f"To: {self.task_title}", classes="modal-label")
            yield Input(placeholder="Subtask title", id="title-input")
            with Horizontal(classes="modal-actions"):
                yield Button("Add", id="btn-add", variant="primary")
                yield Button("Cancel", id="btn-cancel")

    def on_mount(self) -> None:
        self.query_one("#title-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-add":
            self._submit()
        else:
            self.dismiss(None)

    def _submit(self) -> None:
        title = self.query_one("#title-input", Input).value.strip()
        self.dismiss(title or None)


def format_statistics(store: RoadmapStore) -> str:
    """Statistics text shown in the stats modal."""
    stats = store.get_statistics()
    lines = [
        f"Progress: {stats.percent}%",
        f"Tasks done: {stats.completed}/{stats.total}",
        f"High: {stats.by_priority.high}   Medium: {stats.by_priority.medium}   "
        f"Low: {stats.by_priority.low}",
        "",
    ]
    for stage in store.stage_statistics():
        lines.append(f"{stage.stage_name}: {stage.completed}/{stage.total} done")
    return "\n".join(lines)


class StatsModal(RoadmapModalBase):
    """Read-only statistics for the current roadmap."""

    BINDINGS = [
        Binding("escape", "cancel", "Close", show=True),
        Binding("s", "cancel", "Close", show=False),
    ]

    DEFAULT_CSS = STATS_MODAL_CSS

    def __init__(self, store: RoadmapStore, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._store = store

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Statistics", classes="modal-title")
            yield Static(format_statistics(self._store), classes="stats-body")
            with Horizontal(classes="modal-actions"):
                yield Button("Close", id="btn-close")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)
