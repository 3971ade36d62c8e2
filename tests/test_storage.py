"""Tests for taskflow.storage — key-value backends and the persistence adapter."""

from __future__ import annotations

import json
from datetime import date

import pytest

from taskflow.storage import FileStorage, MemoryStorage, PersistenceAdapter, dump_tasks, parse_tasks
from taskflow.tasks.model import Priority
from taskflow.tasks.seed import SEED_TASKS

from .conftest import STORAGE_KEY


class BrokenStorage(MemoryStorage):
    """Storage whose reads and/or writes fail with OSError."""

    def __init__(self, *, fail_get: bool = False, fail_set: bool = False) -> None:
        super().__init__()
        self.fail_get = fail_get
        self.fail_set = fail_set

    def get_item(self, key: str) -> str | None:
        if self.fail_get:
            raise OSError("disk unreadable")
        return super().get_item(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_set:
            raise OSError("disk full")
        super().set_item(key, value)


# ═══════════════════════════════════════════════════════════════════
#  Load
# ═══════════════════════════════════════════════════════════════════


class TestLoad:

    def test_absent_key_yields_seed(self, storage):
        assert PersistenceAdapter(storage, STORAGE_KEY).load() == SEED_TASKS

    @pytest.mark.parametrize("raw", [
        "not json at all",
        "{\"id\": \"1\"}",
        "42",
        "null",
        "[{\"id\": \"1\"}]",
        "[{\"id\": \"1\", \"title\": \"x\", \"priority\": \"urgent\", \"stage\": \"todo\", "
        "\"createdAt\": \"2025-01-10T10:00:00Z\", \"updatedAt\": \"2025-01-10T10:00:00Z\"}]",
        "[\"just a string\"]",
    ])
    def test_malformed_value_yields_seed(self, storage, raw):
        storage.set_item(STORAGE_KEY, raw)
        assert PersistenceAdapter(storage, STORAGE_KEY).load() == SEED_TASKS

    def test_one_bad_record_discards_whole_payload(self, storage):
        good = json.loads(dump_tasks(SEED_TASKS[:1]))
        storage.set_item(STORAGE_KEY, json.dumps(good + [{"title": "no id"}]))
        assert PersistenceAdapter(storage, STORAGE_KEY).load() == SEED_TASKS

    def test_unreadable_storage_yields_seed(self):
        adapter = PersistenceAdapter(BrokenStorage(fail_get=True), STORAGE_KEY)
        assert adapter.load() == SEED_TASKS

    def test_undecodable_file_yields_seed(self, tmp_path):
        (tmp_path / f"{STORAGE_KEY}.json").write_bytes(b"\xff\xfe[garbage")
        assert PersistenceAdapter(FileStorage(tmp_path), STORAGE_KEY).load() == SEED_TASKS

    def test_bracketed_values_are_reported_verbatim(self, storage, capsys):
        record = json.loads(dump_tasks(SEED_TASKS[:1]))[0]
        record["priority"] = "[/x]"
        storage.set_item(STORAGE_KEY, json.dumps([record]))
        assert PersistenceAdapter(storage, STORAGE_KEY).load() == SEED_TASKS
        assert "[/x]" in capsys.readouterr().out

    def test_empty_list_is_valid(self, storage):
        storage.set_item(STORAGE_KEY, "[]")
        assert PersistenceAdapter(storage, STORAGE_KEY).load() == ()

    def test_custom_seed(self, storage, make_task):
        seed = (make_task("only"),)
        assert PersistenceAdapter(storage, STORAGE_KEY, seed=seed).load() == seed


# ═══════════════════════════════════════════════════════════════════
#  Save
# ═══════════════════════════════════════════════════════════════════


class TestSave:

    def test_round_trip(self, storage, make_task):
        tasks = (
            make_task("A", description="desc", due_date=date(2025, 5, 1), priority=Priority.HIGH),
            make_task("B", "done"),
        )
        adapter = PersistenceAdapter(storage, STORAGE_KEY)
        assert adapter.save(tasks) is True
        assert set(adapter.load()) == set(tasks)

    def test_record_format(self, storage, make_task):
        adapter = PersistenceAdapter(storage, STORAGE_KEY)
        adapter.save((make_task("A", due_date=date(2025, 5, 1)), make_task("B")))
        records = json.loads(storage.get_item(STORAGE_KEY))
        assert records[0] == {
            "id": "A",
            "title": "Task A",
            "priority": "medium",
            "stage": "todo",
            "dueDate": "2025-05-01",
            "createdAt": "2025-03-01T09:00:00.000Z",
            "updatedAt": "2025-03-01T09:00:00.000Z",
        }
        assert "dueDate" not in records[1]
        assert "description" not in records[1]

    def test_write_failure_is_recorded_not_raised(self, make_task):
        adapter = PersistenceAdapter(BrokenStorage(fail_set=True), STORAGE_KEY)
        assert adapter.save((make_task("A"),)) is False
        assert isinstance(adapter.last_error, OSError)

    def test_success_clears_last_error(self, make_task):
        broken = BrokenStorage(fail_set=True)
        adapter = PersistenceAdapter(broken, STORAGE_KEY)
        adapter.save((make_task("A"),))
        broken.fail_set = False
        assert adapter.save((make_task("A"),)) is True
        assert adapter.last_error is None


# ═══════════════════════════════════════════════════════════════════
#  Backends and parsing
# ═══════════════════════════════════════════════════════════════════


class TestFileStorage:

    def test_missing_key_is_none(self, tmp_path):
        assert FileStorage(tmp_path).get_item("nothing") is None

    def test_set_get_remove(self, tmp_path):
        fs = FileStorage(tmp_path / "nested")
        fs.set_item("k", "[1, 2]")
        assert fs.path_for("k").is_file()
        assert fs.get_item("k") == "[1, 2]"
        fs.remove_item("k")
        assert fs.get_item("k") is None

    def test_remove_missing_is_fine(self, tmp_path):
        FileStorage(tmp_path).remove_item("nothing")

    def test_no_temp_files_left_behind(self, tmp_path):
        fs = FileStorage(tmp_path)
        fs.set_item("k", "one")
        fs.set_item("k", "two")
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    def test_adapter_over_files(self, tmp_path, make_task):
        adapter = PersistenceAdapter(FileStorage(tmp_path), STORAGE_KEY)
        adapter.save((make_task("A"),))
        again = PersistenceAdapter(FileStorage(tmp_path), STORAGE_KEY)
        assert [t.id for t in again.load()] == ["A"]


class TestParseTasks:

    def test_non_list_raises_type_error(self):
        with pytest.raises(TypeError):
            parse_tasks("{}")

    def test_invalid_json_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_tasks("[")

    def test_accepts_offsets_and_naive_timestamps(self):
        raw = json.dumps([{
            "id": "1", "title": "t", "priority": "low", "stage": "todo",
            "createdAt": "2025-01-10T12:00:00+02:00",
            "updatedAt": "2025-01-10T10:00:00",
        }])
        (task,) = parse_tasks(raw)
        assert task.created_at == task.updated_at
