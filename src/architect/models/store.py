"""RoadmapStore: the project state model.

The store owns one roadmap snapshot. Reads never change it and hand out
copies, so editing a returned stage or task never reaches the snapshot. Every
mutation deep-copies the roadmap, edits the copy, and returns a new store
wrapping it. Callers replace their reference with the returned store in a
single assignment; no history is kept.

Status rules applied by the mutations:

- ``toggle_task_status`` cycles Todo -> In Progress -> Done -> Todo. Reaching
  Done forces every subtask to Done.
- ``toggle_subtask`` flips one subtask. If the task has subtasks and all are
  now done, the task becomes Done; otherwise a Done task drops back to
  In Progress. Automatic transitions never return a task to Todo.
- ``add_subtask`` appends a Todo subtask and drops a Done task back to
  In Progress.
- ``delete_subtask`` and ``delete_task`` never re-evaluate status. Stages
  left empty by ``delete_task`` are kept.

Unknown task or subtask ids are silent no-ops: the presentation layer may
race a delete against a toggle, so the result is simply an unchanged copy.
"""

from __future__ import annotations

import copy
import json
import logging
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from architect.models.roadmap import Roadmap, Stage
from architect.models.task import (
    Priority,
    RoadmapShapeError,
    Subtask,
    SubtaskId,
    SubtaskStatus,
    Task,
    TaskStatus,
)

logger = logging.getLogger(__name__)

# Weights are expressed in half-units so the percentage is computed exactly:
# a task counts 2 half-units (weight 1), a subtask 1 half-unit (weight 0.5).
TASK_WEIGHT_HALVES = 2
SUBTASK_WEIGHT_HALVES = 1

MANUAL_SUBTASK_PREFIX = "manual-"


@dataclass(frozen=True, slots=True)
class PriorityBreakdown:
    """Counts of main tasks per priority."""

    high: int = 0
    medium: int = 0
    low: int = 0

    @property
    def total(self) -> int:
        return self.high + self.medium + self.low

    @classmethod
    def count(cls, tasks: list[Task]) -> "PriorityBreakdown":
        return cls(
            high=sum(1 for t in tasks if t.priority is Priority.HIGH),
            medium=sum(1 for t in tasks if t.priority is Priority.MEDIUM),
            low=sum(1 for t in tasks if t.priority is Priority.LOW),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            Priority.HIGH.value: self.high,
            Priority.MEDIUM.value: self.medium,
            Priority.LOW.value: self.low,
        }


@dataclass(frozen=True, slots=True)
class RoadmapStatistics:
    """Progress statistics derived from a roadmap snapshot."""

    total: int
    completed: int
    percent: int
    by_priority: PriorityBreakdown

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "completed": self.completed,
            "percent": self.percent,
            "byPriority": self.by_priority.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class StageStatistics:
    """Per-stage task counts."""

    stage_name: str
    total: int
    completed: int
    by_priority: PriorityBreakdown


def weighted_percent(tasks: list[Task]) -> int:
    """Weighted completion percentage, rounded half-up.

    Each task weighs 1 and each of its subtasks 0.5, in both the numerator
    (when done) and the denominator. Returns 0 when there are no tasks.
    """
    total_halves = 0
    done_halves = 0
    for task in tasks:
        total_halves += TASK_WEIGHT_HALVES + SUBTASK_WEIGHT_HALVES * len(task.subtasks)
        if task.is_done:
            done_halves += TASK_WEIGHT_HALVES
        done_subtasks = sum(1 for s in task.subtasks if s.is_done)
        done_halves += SUBTASK_WEIGHT_HALVES * done_subtasks
    if total_halves == 0:
        return 0
    # floor(100 * done / total + 0.5) in integer arithmetic
    return (200 * done_halves + total_halves) // (2 * total_halves)


class RoadmapStore:
    """Immutable-snapshot view model over a roadmap."""

    def __init__(self, roadmap: Roadmap | Mapping[str, Any]) -> None:
        """Wrap a roadmap.

        Args:
            roadmap: A ``Roadmap`` (deep-copied, never aliased) or a plain
                mapping in the roadmap shape (validated).

        Raises:
            RoadmapShapeError: If the value does not match the roadmap shape.
        """
        if isinstance(roadmap, Roadmap):
            self._roadmap = copy.deepcopy(roadmap)
        elif isinstance(roadmap, Mapping):
            self._roadmap = Roadmap.from_dict(dict(roadmap))
        else:
            raise RoadmapShapeError(
                [f"roadmap: expected Roadmap or mapping, got {type(roadmap).__name__}"]
            )

    @classmethod
    def _wrap(cls, roadmap: Roadmap) -> "RoadmapStore":
        """Adopt an already-private roadmap without copying it again."""
        store = cls.__new__(cls)
        store._roadmap = roadmap
        return store

    @classmethod
    def from_dict(cls, data: Any) -> "RoadmapStore":
        """Validate a plain payload and wrap it.

        Raises:
            RoadmapShapeError: If the payload does not match the roadmap shape.
        """
        return cls._wrap(Roadmap.from_dict(data))

    @classmethod
    def from_json(cls, text: str) -> "RoadmapStore":
        """Parse JSON text and wrap it.

        Raises:
            RoadmapShapeError: If the text is not JSON or not roadmap-shaped.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise RoadmapShapeError([f"invalid JSON: {e}"]) from e
        return cls.from_dict(data)

    # --- Reads ---

    @property
    def summary(self) -> str:
        return self._roadmap.project_summary

    @property
    def stages(self) -> tuple[Stage, ...]:
        """Stages in order, as copies; mutate through the store."""
        return tuple(copy.deepcopy(self._roadmap.stages))

    @property
    def all_tasks(self) -> list[Task]:
        """Copies of every task, in stage order then task order."""
        return copy.deepcopy(list(self._roadmap.iter_tasks()))

    @property
    def is_complete(self) -> bool:
        """True when there is at least one task and every task is done."""
        tasks = list(self._roadmap.iter_tasks())
        return bool(tasks) and all(t.is_done for t in tasks)

    def find_task(self, task_id: int) -> Task | None:
        """Copy of the first task with this id, scanning stages in order."""
        return copy.deepcopy(self._find_task(self._roadmap, task_id))

    def stage_of(self, task_id: int) -> Stage | None:
        """Copy of the stage holding the first task with this id."""
        for stage in self._roadmap.stages:
            if any(t.id == task_id for t in stage.tasks):
                return copy.deepcopy(stage)
        return None

    def get_statistics(self) -> RoadmapStatistics:
        """Compute task counts and the weighted completion percentage."""
        tasks = list(self._roadmap.iter_tasks())
        return RoadmapStatistics(
            total=len(tasks),
            completed=sum(1 for t in tasks if t.is_done),
            percent=weighted_percent(tasks),
            by_priority=PriorityBreakdown.count(tasks),
        )

    def stage_statistics(self) -> list[StageStatistics]:
        """Task counts for each stage, in stage order."""
        return [
            StageStatistics(
                stage_name=stage.stage_name,
                total=len(stage.tasks),
                completed=sum(1 for t in stage.tasks if t.is_done),
                by_priority=PriorityBreakdown.count(stage.tasks),
            )
            for stage in self._roadmap.stages
        ]

    def to_dict(self) -> dict[str, Any]:
        """Export the roadmap as a plain value in the roadmap shape."""
        return self._roadmap.to_dict()

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # --- Mutations ---

    def toggle_task_status(self, task_id: int) -> "RoadmapStore":
        """Advance a task one step through Todo -> In Progress -> Done."""

        def apply(task: Task) -> None:
            task.status = task.status.advance()
            if task.status is TaskStatus.DONE:
                for sub in task.subtasks:
                    sub.status = SubtaskStatus.DONE
            logger.debug("Task %s -> %s", task.id, task.status.value)

        return self._mutate_task(task_id, apply)

    def toggle_subtask(
        self, task_id: int, subtask_id: SubtaskId | int | str
    ) -> "RoadmapStore":
        """Flip a subtask between Todo and Done and resync the parent."""
        target = SubtaskId.of(subtask_id)

        def apply(task: Task) -> None:
            sub = task.find_subtask(target)
            if sub is None:
                logger.debug("Subtask %s not found in task %s", target, task.id)
                return
            sub.status = sub.status.flipped()
            if task.all_subtasks_done():
                task.status = TaskStatus.DONE
            elif task.status is TaskStatus.DONE:
                task.status = TaskStatus.IN_PROGRESS
            logger.debug(
                "Subtask %s/%s -> %s (task %s)",
                task.id,
                target,
                sub.status.value,
                task.status.value,
            )

        return self._mutate_task(task_id, apply)

    def add_subtask(self, task_id: int, title: str) -> "RoadmapStore":
        """Append a new Todo subtask; a Done parent drops to In Progress.

        The caller is responsible for rejecting blank titles.
        """

        def apply(task: Task) -> None:
            new_id = _new_subtask_id(task)
            task.subtasks.append(Subtask(id=new_id, title=title))
            if task.status is TaskStatus.DONE:
                task.status = TaskStatus.IN_PROGRESS
            logger.debug("Added subtask %s to task %s", new_id, task.id)

        return self._mutate_task(task_id, apply)

    def delete_subtask(
        self, task_id: int, subtask_id: SubtaskId | int | str
    ) -> "RoadmapStore":
        """Remove a subtask. The parent status is left as it is."""
        target = SubtaskId.of(subtask_id)

        def apply(task: Task) -> None:
            task.subtasks = [s for s in task.subtasks if s.id != target]

        return self._mutate_task(task_id, apply)

    def delete_task(self, task_id: int) -> "RoadmapStore":
        """Remove a task from its stage. Empty stages are kept."""
        roadmap = copy.deepcopy(self._roadmap)
        for stage in roadmap.stages:
            stage.tasks = [t for t in stage.tasks if t.id != task_id]
        return RoadmapStore._wrap(roadmap)

    # --- Internals ---

    @staticmethod
    def _find_task(roadmap: Roadmap, task_id: int) -> Task | None:
        for task in roadmap.iter_tasks():
            if task.id == task_id:
                return task
        return None

    def _mutate_task(
        self, task_id: int, apply: Callable[[Task], None]
    ) -> "RoadmapStore":
        roadmap = copy.deepcopy(self._roadmap)
        task = self._find_task(roadmap, task_id)
        if task is None:
            logger.debug("Task %s not found; mutation is a no-op", task_id)
        else:
            apply(task)
        return RoadmapStore._wrap(roadmap)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoadmapStore):
            return NotImplemented
        return self._roadmap == other._roadmap

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        stats = self.get_statistics()
        return (
            f"RoadmapStore(stages={len(self._roadmap.stages)}, "
            f"tasks={stats.total}, percent={stats.percent})"
        )


def _new_subtask_id(task: Task) -> SubtaskId:
    """Fresh ``manual-`` id not used by any current subtask of the task."""
    existing = {s.id for s in task.subtasks}
    while True:
        candidate = SubtaskId(f"{MANUAL_SUBTASK_PREFIX}{uuid.uuid4().hex[:8]}")
        if candidate not in existing:
            return candidate
