"""Main Architect TUI application."""

import logging
from pathlib import Path
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from architect.cli.context import save_store
from architect.config import settings
from architect.models import RoadmapStore
from architect.tui.widgets import (
    AddSubtaskModal,
    ConfirmDeleteModal,
    RoadmapTree,
    StatsModal,
)

logger = logging.getLogger(__name__)


def progress_subtitle(store: RoadmapStore, dirty: bool = False) -> str:
    """Header subtitle: weighted percent plus an unsaved marker."""
    stats = store.get_statistics()
    text = f"{stats.percent}% complete ({stats.completed}/{stats.total} tasks)"
    if store.is_complete:
        text += " - plan complete"
    if dirty:
        text += " *"
    return text


class ArchitectApp(App[None]):
    """Interactive board for one roadmap file."""

    TITLE = "Architect"

    BINDINGS = [
        Binding("space", "toggle", "Toggle"),
        Binding("a", "add_subtask", "Add Subtask"),
        Binding("x", "delete", "Delete"),
        Binding("s", "stats", "Stats"),
        Binding("ctrl+s", "save", "Save"),
        Binding("ctrl+d", "toggle_dark", "Toggle Dark Mode"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    CSS = """
    Screen {
        background: $surface;
    }

    #summary {
        padding: 1 2;
        color: $text-muted;
        height: auto;
    }
    """

    def __init__(self, store: RoadmapStore, path: Path, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.store = store
        self.path = path
        self.dirty = False
        # Track theme before toggling so we can restore it
        self._previous_theme: str | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(self.store.summary, id="summary")
        yield RoadmapTree(id="roadmap-tree")
        yield Footer()

    def on_mount(self) -> None:
        saved_theme = settings.theme
        logger.info("Loading saved theme: %s", saved_theme)
        self.theme = saved_theme
        tree = self.query_one(RoadmapTree)
        tree.update_store(self.store)
        tree.select_first()
        tree.focus()
        self._refresh_header()

    def watch_theme(self, new_theme: str) -> None:
        """Save theme whenever it changes (from any source)."""
        settings.theme = new_theme

    def set_store(self, store: RoadmapStore) -> None:
        """Replace the current snapshot and redraw."""
        if store == self.store:
            return
        self.store = store
        self.dirty = True
        self.query_one(RoadmapTree).update_store(store)
        self._refresh_header()

    def _refresh_header(self) -> None:
        self.sub_title = progress_subtitle(self.store, self.dirty)

    # --- Actions ---

    def action_toggle(self) -> None:
        """Toggle the task or subtask under the cursor."""
        ref = self.query_one(RoadmapTree).selected_ref
        if ref is None or ref.task_id is None:
            return
        if ref.subtask_id is not None:
            self.set_store(self.store.toggle_subtask(ref.task_id, ref.subtask_id))
        else:
            self.set_store(self.store.toggle_task_status(ref.task_id))

    def action_add_subtask(self) -> None:
        """Ask for a title and append a subtask to the current task."""
        ref = self.query_one(RoadmapTree).selected_ref
        if ref is None or ref.task_id is None:
            self.notify("Select a task first", severity="warning")
            return
        task = self.store.find_task(ref.task_id)
        if task is None:
            return
        task_id = task.id

        def handle(title: str | None) -> None:
            if title:
                self.set_store(self.store.add_subtask(task_id, title))

        self.push_screen(AddSubtaskModal(task.title), handle)

    def action_delete(self) -> None:
        """Delete the subtask or task under the cursor."""
        ref = self.query_one(RoadmapTree).selected_ref
        if ref is None or ref.task_id is None:
            return
        if ref.subtask_id is not None:
            self.set_store(self.store.delete_subtask(ref.task_id, ref.subtask_id))
            return

        task = self.store.find_task(ref.task_id)
        if task is None:
            return
        task_id = task.id

        def handle(confirmed: bool | None) -> None:
            if confirmed:
                self.set_store(self.store.delete_task(task_id))

        self.push_screen(ConfirmDeleteModal(task.id, task.title), handle)

    def action_stats(self) -> None:
        self.push_screen(StatsModal(self.store))

    def action_save(self) -> None:
        """Write the roadmap back to its file."""
        if save_store(self.store, self.path):
            self.dirty = False
            self._refresh_header()
            self.notify(f"Saved to {self.path}")
        else:
            self.notify(f"Could not save {self.path}", severity="error")

    def action_toggle_dark(self) -> None:
        """Toggle dark mode (saving handled by watch_theme).

        If toggling back, restores the previous theme instead of defaulting
        to textual-dark/textual-light.
        """
        if self._previous_theme is not None:
            restored = self._previous_theme
            self._previous_theme = None
            self.theme = restored
        else:
            self._previous_theme = self.theme
            self.theme = (
                "textual-dark" if self.theme == "textual-light" else "textual-light"
            )
