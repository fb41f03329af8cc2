"""Roadmap aggregate: a project summary plus ordered stages of tasks."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Self

from architect.models.task import RoadmapShapeError, Task


@dataclass(slots=True)
class Stage:
    """A named phase grouping an ordered sequence of tasks."""

    stage_name: str
    tasks: list[Task] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "stage_name": self.stage_name,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Any, where: str = "stage") -> Self:
        """Create from dictionary.

        Raises:
            RoadmapShapeError: If the dictionary does not describe a stage.
        """
        if not isinstance(data, dict):
            raise RoadmapShapeError([f"{where}: expected object"])
        errors: list[str] = []
        name = data.get("stage_name")
        if not isinstance(name, str):
            errors.append(f"{where}.stage_name: expected string")
        tasks: list[Task] = []
        raw_tasks = data.get("tasks")
        if not isinstance(raw_tasks, list):
            errors.append(f"{where}.tasks: expected list")
        else:
            for i, raw in enumerate(raw_tasks):
                try:
                    tasks.append(Task.from_dict(raw, f"{where}.tasks[{i}]"))
                except RoadmapShapeError as e:
                    errors.extend(e.errors)
        if errors:
            raise RoadmapShapeError(errors)
        return cls(stage_name=name, tasks=tasks)


@dataclass(slots=True)
class Roadmap:
    """The full generated plan."""

    project_summary: str
    stages: list[Stage] = field(default_factory=list)

    def iter_tasks(self) -> Iterator[Task]:
        """Yield every task in stage order, then task order."""
        for stage in self.stages:
            yield from stage.tasks

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "project_summary": self.project_summary,
            "stages": [s.to_dict() for s in self.stages],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        """Create from dictionary, validating the whole tree.

        Raises:
            RoadmapShapeError: With every problem found, if the payload does
                not match the roadmap shape.
        """
        if not isinstance(data, dict):
            raise RoadmapShapeError(
                [f"roadmap: expected object, got {type(data).__name__}"]
            )
        errors: list[str] = []
        summary = data.get("project_summary")
        if not isinstance(summary, str):
            errors.append("project_summary: expected string")
        stages: list[Stage] = []
        raw_stages = data.get("stages")
        if not isinstance(raw_stages, list):
            errors.append("stages: expected list")
        else:
            for i, raw in enumerate(raw_stages):
                try:
                    stages.append(Stage.from_dict(raw, f"stages[{i}]"))
                except RoadmapShapeError as e:
                    errors.extend(e.errors)
        if errors:
            raise RoadmapShapeError(errors)
        return cls(project_summary=summary, stages=stages)
