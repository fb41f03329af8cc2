from __future__ import annotations

import copy
from collections.abc import Iterator
from typing import Any

import pytest

from architect.config.settings import settings


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Prevent tests from persisting settings to disk."""
    original_data = copy.deepcopy(settings._data)

    def _noop_save() -> None:
        return None

    monkeypatch.setattr(settings, "_save", _noop_save)
    try:
        yield
    finally:
        settings._data = original_data


def make_task(
    task_id: int,
    status: str = "Todo",
    subtasks: list[dict[str, Any]] | None = None,
    priority: str = "Medium",
    title: str | None = None,
) -> dict[str, Any]:
    return {
        "id": task_id,
        "title": title or f"Task {task_id}",
        "description": "Do the thing",
        "reasoning": "It matters now",
        "priority": priority,
        "status": status,
        "tags": ["setup"],
        "subtasks": subtasks if subtasks is not None else [],
    }


def make_roadmap(*stages: tuple[str, list[dict[str, Any]]]) -> dict[str, Any]:
    return {
        "project_summary": "Launch a small web shop",
        "stages": [{"stage_name": name, "tasks": tasks} for name, tasks in stages],
    }


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    """Two stages, four tasks, mixed priorities and subtask id shapes."""
    return make_roadmap(
        (
            "Foundations",
            [
                make_task(
                    1,
                    priority="High",
                    subtasks=[
                        {"id": "1-sub-0", "title": "Pick a domain", "status": "Todo"},
                        {"id": "1-sub-1", "title": "Buy hosting", "status": "Todo"},
                    ],
                ),
                make_task(2, priority="Low"),
            ],
        ),
        (
            "Launch",
            [
                make_task(
                    3,
                    status="Done",
                    priority="High",
                    subtasks=[{"id": 7, "title": "Announce", "status": "Done"}],
                ),
                make_task(4),
            ],
        ),
    )
