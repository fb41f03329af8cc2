"""Tests for RoadmapStore: reads, statistics and status-syncing mutations."""

import copy
import json

import pytest

from architect.models import (
    Roadmap,
    RoadmapShapeError,
    RoadmapStore,
    SubtaskId,
    SubtaskStatus,
    TaskStatus,
)
from architect.models.store import weighted_percent
from conftest import make_roadmap, make_task


def _sub(sub_id, status: str = "Todo", title: str = "Step") -> dict:
    return {"id": sub_id, "title": title, "status": status}


def _single(task: dict) -> RoadmapStore:
    return RoadmapStore(make_roadmap(("Only", [task])))


class TestConstruction:
    def test_deep_copies_roadmap_input(self, sample_payload) -> None:
        roadmap = Roadmap.from_dict(sample_payload)
        store = RoadmapStore(roadmap)
        roadmap.stages[0].tasks[0].title = "Changed outside"
        assert store.find_task(1).title == "Task 1"

    def test_accepts_mapping(self, sample_payload) -> None:
        store = RoadmapStore(sample_payload)
        assert store.summary == "Launch a small web shop"
        assert [s.stage_name for s in store.stages] == ["Foundations", "Launch"]

    def test_rejects_malformed_payload(self) -> None:
        with pytest.raises(RoadmapShapeError):
            RoadmapStore({"project_summary": "x"})

    def test_rejects_other_types(self) -> None:
        with pytest.raises(RoadmapShapeError):
            RoadmapStore("not a roadmap")  # type: ignore[arg-type]

    def test_from_json_invalid(self) -> None:
        with pytest.raises(RoadmapShapeError) as exc:
            RoadmapStore.from_json("{not json")
        assert exc.value.errors[0].startswith("invalid JSON")


class TestReads:
    def test_all_tasks_order(self, sample_payload) -> None:
        store = RoadmapStore(sample_payload)
        assert [t.id for t in store.all_tasks] == [1, 2, 3, 4]

    def test_find_task_and_stage_of(self, sample_payload) -> None:
        store = RoadmapStore(sample_payload)
        assert store.find_task(3).title == "Task 3"
        assert store.stage_of(3).stage_name == "Launch"
        assert store.find_task(99) is None
        assert store.stage_of(99) is None

    def test_statistics(self, sample_payload) -> None:
        stats = RoadmapStore(sample_payload).get_statistics()
        assert stats.total == 4
        assert stats.completed == 1
        assert stats.by_priority.high == 2
        assert stats.by_priority.low == 1
        assert stats.by_priority.medium == 1
        assert stats.by_priority.total == stats.total
        # weights: 2 + 1 + 1.5 + 1 = 5.5; done: 1 + 0.5 = 1.5 -> 27.27
        assert stats.percent == 27

    def test_statistics_to_dict(self, sample_payload) -> None:
        data = RoadmapStore(sample_payload).get_statistics().to_dict()
        assert data["byPriority"] == {"High": 2, "Medium": 1, "Low": 1}

    def test_stage_statistics(self, sample_payload) -> None:
        per_stage = RoadmapStore(sample_payload).stage_statistics()
        assert [(s.stage_name, s.total, s.completed) for s in per_stage] == [
            ("Foundations", 2, 0),
            ("Launch", 2, 1),
        ]
        assert per_stage[1].by_priority.high == 1

    def test_returned_objects_are_detached(self, sample_payload) -> None:
        store = RoadmapStore(sample_payload)
        before_dict = store.to_dict()
        before_stats = store.get_statistics()

        store.all_tasks[0].status = TaskStatus.DONE
        store.stages[0].tasks.clear()
        store.find_task(1).subtasks.clear()
        store.stage_of(3).tasks[0].title = "Edited"

        assert store.to_dict() == before_dict
        assert store.get_statistics() == before_stats
        assert store.get_statistics().total == 4

    def test_empty_roadmap(self) -> None:
        store = RoadmapStore(make_roadmap())
        stats = store.get_statistics()
        assert (stats.total, stats.completed, stats.percent) == (0, 0, 0)
        assert not store.is_complete

    def test_is_complete(self) -> None:
        store = _single(make_task(1, status="Done"))
        assert store.is_complete
        assert not store.toggle_task_status(1).is_complete


class TestWeightedPercent:
    def test_worked_example_all_done(self) -> None:
        store = _single(make_task(1, "Done", [_sub("a", "Done"), _sub("b", "Done")]))
        assert store.get_statistics().percent == 100

    def test_worked_example_half_subtasks(self) -> None:
        store = _single(
            make_task(1, "In Progress", [_sub("a", "Done"), _sub("b", "Todo")])
        )
        assert store.get_statistics().percent == 25

    def test_rounds_half_up(self) -> None:
        # one of eight subtask-free tasks done: 12.5% rounds up to 13
        tasks = [make_task(i) for i in range(1, 9)]
        tasks[0]["status"] = "Done"
        assert _store_of(tasks).get_statistics().percent == 13

    def test_range(self, sample_payload) -> None:
        store = RoadmapStore(sample_payload)
        for task in store.all_tasks:
            while not store.find_task(task.id).is_done:
                store = store.toggle_task_status(task.id)
        assert store.get_statistics().percent == 100
        assert weighted_percent([]) == 0


def _store_of(tasks: list[dict]) -> RoadmapStore:
    return RoadmapStore(make_roadmap(("S", tasks)))


class TestScenarios:
    def test_a_task_cycle(self) -> None:
        store = _single(make_task(1))
        seen = []
        for _ in range(3):
            store = store.toggle_task_status(1)
            seen.append(store.find_task(1).status)
        assert seen == [TaskStatus.IN_PROGRESS, TaskStatus.DONE, TaskStatus.TODO]

    def test_b_last_subtask_completes_task(self) -> None:
        store = _single(make_task(1, subtasks=[_sub(1), _sub(2)]))
        store = store.toggle_subtask(1, 1)
        assert store.find_task(1).status is TaskStatus.TODO
        store = store.toggle_subtask(1, 2)
        assert store.find_task(1).status is TaskStatus.DONE

    def test_c_add_subtask_demotes_done(self) -> None:
        store = _single(make_task(1, "Done", [_sub("a", "Done"), _sub("b", "Done")]))
        store = store.add_subtask(1, "One more thing")
        task = store.find_task(1)
        assert task.status is TaskStatus.IN_PROGRESS
        assert len(task.subtasks) == 3
        assert task.subtasks[-1].title == "One more thing"
        assert task.subtasks[-1].status is SubtaskStatus.TODO

    def test_d_untoggle_subtask_demotes_done(self) -> None:
        store = _single(make_task(1, "Done", [_sub("a", "Done")]))
        store = store.toggle_subtask(1, "a")
        task = store.find_task(1)
        assert task.subtasks[0].status is SubtaskStatus.TODO
        assert task.status is TaskStatus.IN_PROGRESS

    def test_e_subtask_free_task_percent(self) -> None:
        store = _single(make_task(1))
        assert store.get_statistics().percent == 0
        store = store.toggle_task_status(1).toggle_task_status(1)
        assert store.find_task(1).status is TaskStatus.DONE
        assert store.get_statistics().percent == 100


class TestMutations:
    def test_done_cascades_to_subtasks(self) -> None:
        store = _single(make_task(1, "In Progress", [_sub("a"), _sub("b")]))
        store = store.toggle_task_status(1)
        assert all(s.is_done for s in store.find_task(1).subtasks)

    def test_leaving_done_keeps_subtasks(self) -> None:
        store = _single(make_task(1, "Done", [_sub("a", "Done")]))
        store = store.toggle_task_status(1)
        task = store.find_task(1)
        assert task.status is TaskStatus.TODO
        assert task.subtasks[0].is_done

    def test_subtask_toggle_never_returns_to_todo(self) -> None:
        store = _single(make_task(1, "In Progress", [_sub("a"), _sub("b")]))
        store = store.toggle_subtask(1, "a").toggle_subtask(1, "a")
        assert store.find_task(1).status is TaskStatus.IN_PROGRESS

    def test_numeric_and_text_subtask_ids_are_distinct(self) -> None:
        store = _single(make_task(1, subtasks=[_sub(1), _sub("1")]))
        store = store.toggle_subtask(1, "1")
        subs = store.find_task(1).subtasks
        assert [s.is_done for s in subs] == [False, True]

    def test_added_ids_are_fresh(self) -> None:
        store = _single(make_task(1, subtasks=[_sub("a")]))
        for i in range(5):
            store = store.add_subtask(1, f"Extra {i}")
        ids = [s.id for s in store.find_task(1).subtasks]
        assert len(set(ids)) == len(ids)
        assert all(str(i).startswith("manual-") for i in ids[1:])

    def test_delete_subtask_keeps_status(self) -> None:
        store = _single(make_task(1, "In Progress", [_sub("a", "Done"), _sub("b")]))
        store = store.delete_subtask(1, "b")
        task = store.find_task(1)
        assert [s.id for s in task.subtasks] == [SubtaskId("a")]
        assert task.status is TaskStatus.IN_PROGRESS

    def test_delete_task_keeps_empty_stage(self) -> None:
        store = _single(make_task(1))
        store = store.delete_task(1)
        assert len(store.stages) == 1
        assert store.stages[0].tasks == []

    def test_delete_task_idempotent(self, sample_payload) -> None:
        once = RoadmapStore(sample_payload).delete_task(2)
        twice = once.delete_task(2)
        assert twice == once
        assert twice is not once

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda s: s.toggle_task_status(99),
            lambda s: s.toggle_subtask(99, "a"),
            lambda s: s.toggle_subtask(1, "missing"),
            lambda s: s.add_subtask(99, "x"),
            lambda s: s.delete_subtask(1, "missing"),
            lambda s: s.delete_task(99),
        ],
    )
    def test_unknown_ids_are_noops(self, sample_payload, mutate) -> None:
        store = RoadmapStore(sample_payload)
        assert mutate(store) == store

    def test_mutation_does_not_touch_previous_snapshot(self, sample_payload) -> None:
        before = RoadmapStore(sample_payload)
        snapshot = copy.deepcopy(before.to_dict())
        before.toggle_task_status(1)
        before.add_subtask(1, "x")
        before.delete_task(2)
        assert before.to_dict() == snapshot


class TestExport:
    def test_round_trip(self, sample_payload) -> None:
        store = RoadmapStore(sample_payload).toggle_subtask(1, "1-sub-0")
        again = RoadmapStore(store.to_dict())
        assert again.get_statistics() == store.get_statistics()
        assert again.all_tasks == store.all_tasks

    def test_to_dict_matches_input(self, sample_payload) -> None:
        assert RoadmapStore(sample_payload).to_dict() == sample_payload

    def test_json_round_trip(self, sample_payload) -> None:
        store = RoadmapStore(sample_payload)
        text = store.to_json()
        assert json.loads(text) == sample_payload
        assert RoadmapStore.from_json(text) == store
