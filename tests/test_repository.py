"""Tests for JSON persistence of the task forest."""

import json
import logging
from datetime import date

from burndown.application import open_store
from burndown.domain.shared import Err, Ok
from burndown.domain.task import TaskNode
from burndown.infrastructure.storage import JsonFile, TaskRepository, forest_from_json


class TestTaskRepository:
    """Tests for TaskRepository load and save."""

    def test_round_trip(self, repository, sample_forest):
        assert repository.save(sample_forest) == Ok(None)
        assert repository.load() == Ok(sample_forest)

    def test_snapshot_layout(self, repository, sample_forest):
        """Dates are ISO strings and keys are camelCase under 'tasks'."""
        repository.save(sample_forest)
        data = json.loads(repository.path.read_text(encoding="utf-8"))

        assert list(data) == ["tasks"]
        release = data["tasks"][0]
        assert set(release) == {
            "id",
            "name",
            "estimate",
            "parentId",
            "dueOnDay",
            "completedOnDay",
            "children",
        }
        api = release["children"][0]["children"][0]
        assert api["dueOnDay"] == "2025-09-16"
        assert api["parentId"] == 2
        assert data["tasks"][1]["dueOnDay"] is None

    def test_missing_file_is_empty_forest(self, repository):
        assert not repository.exists()
        assert repository.load() == Ok([])

    def test_corrupt_file_is_error(self, repository):
        repository.path.write_text("{not json", encoding="utf-8")
        result = repository.load()
        assert isinstance(result, Err)
        assert "Invalid JSON" in result.error

    def test_save_creates_parent_directories(self, tmp_path):
        repository = TaskRepository(tmp_path / "nested" / "dir" / "tasks.json")
        assert repository.save([]) == Ok(None)
        assert repository.exists()

    def test_save_leaves_no_temp_file(self, repository, sample_forest):
        repository.save(sample_forest)
        assert [p.name for p in repository.path.parent.iterdir()] == ["tasks.json"]


class TestForestFromJson:
    """Tests for snapshot parsing."""

    def test_accepts_bare_list(self):
        result = forest_from_json([{"id": 1, "name": "a", "estimate": 2, "children": []}])
        assert result == Ok([TaskNode(id=1, name="a", estimate=2)])

    def test_missing_tasks_key(self):
        assert isinstance(forest_from_json({"items": []}), Err)

    def test_invalid_fields(self):
        result = forest_from_json({"tasks": [{"id": 1, "name": "a", "estimate": -1}]})
        assert isinstance(result, Err)

    def test_wrong_shape(self):
        assert isinstance(forest_from_json("tasks"), Err)

    def test_duplicate_ids(self):
        child = {"id": 1, "name": "child", "estimate": 1, "parentId": 1}
        result = forest_from_json({"tasks": [{"id": 1, "name": "a", "estimate": 1, "children": [child]}]})
        assert isinstance(result, Err)
        assert "Duplicate" in result.error

    def test_browser_timestamps_become_days(self):
        """Full timestamps written by a browser load as plain days."""
        result = forest_from_json(
            [
                {
                    "id": 1,
                    "name": "a",
                    "estimate": 1,
                    "parentId": None,
                    "dueOnDay": "2025-09-16T00:00:00.000Z",
                    "completedOnDay": "2025-09-15T13:45:10.000Z",
                    "children": [],
                }
            ]
        )
        (task,) = result.value
        assert task.due_on_day == date(2025, 9, 16)
        assert task.completed_on_day == date(2025, 9, 15)


class TestJsonFile:
    def test_read_missing(self, tmp_path):
        result = JsonFile(tmp_path / "nope.json").read()
        assert isinstance(result, Err)
        assert "No such file" in result.error

    def test_unserializable_data_keeps_old_content(self, tmp_path):
        document = JsonFile(tmp_path / "out.json")
        document.write({"tasks": []})

        result = document.write({"when": object()})

        assert isinstance(result, Err)
        assert document.read() == Ok({"tasks": []})
        assert not document.staging_path.exists()

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"name": "caf\xe9"}')
        assert isinstance(JsonFile(path).read(), Err)


class TestOpenStore:
    def test_corrupt_snapshot_starts_empty(self, repository, caplog):
        """A broken file is logged and replaced on the next change."""
        repository.path.write_text("[{]", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="burndown"):
            store = open_store(repository, clock=lambda: date(2025, 9, 17))

        assert store.get_forest() == []
        assert "Could not load tasks" in caplog.text

        store.add_leaf("fresh", 1, None, date(2025, 9, 17))
        loaded = repository.load()
        assert isinstance(loaded, Ok)
        assert [task.name for task in loaded.value] == ["fresh"]

    def test_corrupt_snapshot_is_kept_aside(self, repository, caplog):
        """One invalid node must not cost the user the rest of the file."""
        original = json.dumps({"tasks": [{"id": 1, "name": "old", "estimate": -1}]})
        repository.path.write_text(original, encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="burndown"):
            store = open_store(repository, clock=lambda: date(2025, 9, 17))
        store.add_leaf("fresh", 1, None, date(2025, 9, 17))

        (kept,) = repository.path.parent.glob("tasks.json.corrupt-*")
        assert kept.read_text(encoding="utf-8") == original
        assert str(kept) in caplog.text
        assert [task.name for task in repository.load().value] == ["fresh"]


class TestMoveAside:
    def test_never_overwrites_earlier_copies(self, tmp_path):
        document = JsonFile(tmp_path / "tasks.json")
        document.write({"tasks": "first"})
        first = document.move_aside("corrupt").value
        document.write({"tasks": "second"})
        second = document.move_aside("corrupt").value

        assert first != second
        assert not document.exists()
        assert JsonFile(first).read() == Ok({"tasks": "first"})
        assert JsonFile(second).read() == Ok({"tasks": "second"})

    def test_missing_file(self, tmp_path):
        assert isinstance(JsonFile(tmp_path / "gone.json").move_aside("corrupt"), Err)
