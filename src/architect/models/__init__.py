"""Data models for Architect."""

from .roadmap import Roadmap, Stage
from .store import (
    PriorityBreakdown,
    RoadmapStatistics,
    RoadmapStore,
    StageStatistics,
)
from .task import (
    Priority,
    RoadmapShapeError,
    Subtask,
    SubtaskId,
    SubtaskStatus,
    Task,
    TaskStatus,
)

__all__ = [
    "Priority",
    "PriorityBreakdown",
    "Roadmap",
    "RoadmapShapeError",
    "RoadmapStatistics",
    "RoadmapStore",
    "Stage",
    "StageStatistics",
    "Subtask",
    "SubtaskId",
    "SubtaskStatus",
    "Task",
    "TaskStatus",
]
