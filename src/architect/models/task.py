"""Task and subtask data models for a roadmap."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Self


class Priority(Enum):
    """Priority of a main task."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class TaskStatus(Enum):
    """Status of a main task."""

    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    def advance(self) -> "TaskStatus":
        """Next status in the Todo -> In Progress -> Done -> Todo cycle."""
        order = list(TaskStatus)
        return order[(order.index(self) + 1) % len(order)]


class SubtaskStatus(Enum):
    """Status of a subtask (checklist item)."""

    TODO = "Todo"
    DONE = "Done"

    def flipped(self) -> "SubtaskStatus":
        if self is SubtaskStatus.DONE:
            return SubtaskStatus.TODO
        return SubtaskStatus.DONE


class RoadmapShapeError(ValueError):
    """Payload does not match the roadmap shape.

    Attributes:
        errors: Every problem found, as human-readable strings.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors) if errors else "invalid roadmap shape")


@dataclass(frozen=True, slots=True)
class SubtaskId:
    """Subtask identifier: either a numeric token or a text token.

    Numeric and text ids never compare equal, so ``1`` and ``"1"`` are
    distinct subtasks.
    """

    value: int | str

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, int)

    @classmethod
    def of(cls, raw: "SubtaskId | int | str") -> "SubtaskId":
        """Wrap a raw id, rejecting anything that is not an int or str."""
        if isinstance(raw, SubtaskId):
            return raw
        if isinstance(raw, bool) or not isinstance(raw, (int, str)):
            raise TypeError(
                f"subtask id must be int or str, got {type(raw).__name__}"
            )
        return cls(raw)

    def __str__(self) -> str:
        return str(self.value)


def _enum_value(
    enum_cls: type[Enum], raw: Any, where: str, errors: list[str]
) -> Any:
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(repr(m.value) for m in enum_cls)
        errors.append(f"{where}: {raw!r} is not one of {allowed}")
        return None


def _require_str(data: dict[str, Any], key: str, where: str, errors: list[str]) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        errors.append(f"{where}.{key}: expected string")
        return ""
    return value


@dataclass(slots=True)
class Subtask:
    """An atomic checklist item under a task."""

    id: SubtaskId
    title: str
    status: SubtaskStatus = SubtaskStatus.TODO

    @property
    def is_done(self) -> bool:
        return self.status is SubtaskStatus.DONE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id.value,
            "title": self.title,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Any, where: str = "subtask") -> Self:
        """Create from dictionary.

        Raises:
            RoadmapShapeError: If the dictionary does not describe a subtask.
        """
        if not isinstance(data, dict):
            raise RoadmapShapeError([f"{where}: expected object"])
        errors: list[str] = []
        raw_id = data.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, (int, str)):
            errors.append(f"{where}.id: expected number or string")
        title = _require_str(data, "title", where, errors)
        if isinstance(data.get("title"), str) and not title.strip():
            errors.append(f"{where}.title: must not be empty")
        status = _enum_value(
            SubtaskStatus, data.get("status"), f"{where}.status", errors
        )
        if errors:
            raise RoadmapShapeError(errors)
        return cls(id=SubtaskId(raw_id), title=title, status=status)


@dataclass(slots=True)
class Task:
    """A unit of work inside a stage."""

    id: int
    title: str
    description: str = ""
    reasoning: str = ""
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    tags: list[str] = field(default_factory=list)
    subtasks: list[Subtask] = field(default_factory=list)

    @property
    def is_done(self) -> bool:
        return self.status is TaskStatus.DONE

    def find_subtask(self, subtask_id: SubtaskId) -> Subtask | None:
        """Get a subtask by ID."""
        for sub in self.subtasks:
            if sub.id == subtask_id:
                return sub
        return None

    def all_subtasks_done(self) -> bool:
        """True when the task has at least one subtask and all are done."""
        return bool(self.subtasks) and all(s.is_done for s in self.subtasks)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "reasoning": self.reasoning,
            "priority": self.priority.value,
            "status": self.status.value,
            "tags": list(self.tags),
            "subtasks": [s.to_dict() for s in self.subtasks],
        }

    @classmethod
    def from_dict(cls, data: Any, where: str = "task") -> Self:
        """Create from dictionary.

        Collects every problem in the task and its subtasks before raising.

        Raises:
            RoadmapShapeError: If the dictionary does not describe a task.
        """
        if not isinstance(data, dict):
            raise RoadmapShapeError([f"{where}: expected object"])
        errors: list[str] = []

        task_id = data.get("id")
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            errors.append(f"{where}.id: expected integer")
        title = _require_str(data, "title", where, errors)
        description = _require_str(data, "description", where, errors)
        reasoning = _require_str(data, "reasoning", where, errors)
        priority = _enum_value(
            Priority, data.get("priority"), f"{where}.priority", errors
        )
        status = _enum_value(TaskStatus, data.get("status"), f"{where}.status", errors)

        tags = data.get("tags")
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            errors.append(f"{where}.tags: expected list of strings")
            tags = []

        subtasks: list[Subtask] = []
        raw_subtasks = data.get("subtasks")
        if not isinstance(raw_subtasks, list):
            errors.append(f"{where}.subtasks: expected list")
        else:
            for i, raw in enumerate(raw_subtasks):
                try:
                    subtasks.append(Subtask.from_dict(raw, f"{where}.subtasks[{i}]"))
                except RoadmapShapeError as e:
                    errors.extend(e.errors)

        if errors:
            raise RoadmapShapeError(errors)
        return cls(
            id=task_id,
            title=title,
            description=description,
            reasoning=reasoning,
            priority=priority,
            status=status,
            tags=list(tags),
            subtasks=subtasks,
        )
