"""Widgets for the Architect TUI."""

from .modals import AddSubtaskModal, ConfirmDeleteModal, StatsModal
from .roadmap import NodeRef, RoadmapTree, format_task_label

__all__ = [
    "AddSubtaskModal",
    "ConfirmDeleteModal",
    "NodeRef",
    "RoadmapTree",
    "StatsModal",
    "format_task_label",
]
