# tests/test_persistence.py

from __future__ import annotations

import json
from pathlib import Path

from eisenhower.storage.kv_store import SqliteKeyValueStore
from eisenhower.tasks.task_models import Quadrant
from eisenhower.tasks.task_persistence import TaskPersistence
from eisenhower.tasks.task_store import TaskStore

from .fakes import FailingKeyValueStore, FakeKeyValueStore


def test_add_writes_json_array_under_tasks_key(store: TaskStore, kv: FakeKeyValueStore) -> None:
    store.add("Prepare presentation", "urgentImportant")

    # Same text JSON.stringify produces for the record.
    expected = (
        '[{"text":"Prepare presentation","quadrant":"urgentImportant",'
        '"completed":false,"deadline":"","priority":""}]'
    )
    assert kv.set_calls == [("tasks", expected)]


def test_every_mutation_writes_current_state(store: TaskStore, kv: FakeKeyValueStore) -> None:
    task = store.add("Finish report", "urgentImportant")
    assert task is not None
    store.toggle_completed(task.id)
    store.move(task.id, "notUrgentImportant")

    assert len(kv.set_calls) == 3
    key, payload = kv.set_calls[-1]
    assert key == "tasks"
    assert json.loads(payload) == [
        {
            "text": "Finish report",
            "quadrant": "notUrgentImportant",
            "completed": True,
            "deadline": "",
            "priority": "",
        }
    ]


def test_reload_reconstructs_equivalent_collection(store: TaskStore, kv: FakeKeyValueStore) -> None:
    store.add("Prepare presentation", "urgentImportant", "2024-10-25", "high")
    t = store.add("Read a book", "notUrgentImportant")
    assert t is not None
    store.toggle_completed(t.id)

    reloaded = TaskStore(TaskPersistence(kv))

    assert [x.to_record() for x in reloaded.tasks] == [x.to_record() for x in store.tasks]


def test_non_ascii_text_is_stored_verbatim(store: TaskStore, kv: FakeKeyValueStore) -> None:
    store.add("Café ☕", "notUrgentNotImportant")
    assert "Café ☕" in kv.data["tasks"]


def test_load_absent_key_is_empty() -> None:
    assert TaskPersistence(FakeKeyValueStore()).load() == []


def test_load_malformed_json_is_empty() -> None:
    kv = FakeKeyValueStore(data={"tasks": "{not json"})
    assert TaskPersistence(kv).load() == []


def test_load_non_list_is_empty() -> None:
    kv = FakeKeyValueStore(data={"tasks": '{"text": "x"}'})
    assert TaskPersistence(kv).load() == []


def test_load_skips_malformed_entries() -> None:
    records = [
        {"text": "ok", "quadrant": "urgentImportant", "completed": False, "deadline": "", "priority": ""},
        {"text": "", "quadrant": "urgentImportant"},
        {"text": "bad quadrant", "quadrant": "later"},
        "not an object",
        {"text": "partial", "quadrant": "notUrgentNotImportant"},
    ]
    kv = FakeKeyValueStore(data={"tasks": json.dumps(records)})

    tasks = TaskPersistence(kv).load()

    assert [t.text for t in tasks] == ["ok", "partial"]
    assert tasks[1].quadrant is Quadrant.NOT_URGENT_NOT_IMPORTANT
    assert tasks[1].completed is False
    assert tasks[1].deadline == ""


def test_load_read_failure_is_empty() -> None:
    kv = FailingKeyValueStore()
    kv.fail_reads = True
    assert TaskPersistence(kv).load() == []


def test_custom_key() -> None:
    kv = FakeKeyValueStore()
    store = TaskStore(TaskPersistence(kv, key="matrix"))
    store.add("Task", "urgentImportant")
    assert list(kv.data) == ["matrix"]


def test_sqlite_kv_store_roundtrip(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "storage.sqlite3"
    kv = SqliteKeyValueStore(db)

    assert kv.get_item("tasks") is None
    kv.set_item("tasks", "[]")
    kv.set_item("tasks", '[{"a":1}]')
    assert kv.get_item("tasks") == '[{"a":1}]'

    # New instance sees the same data.
    assert SqliteKeyValueStore(db).get_item("tasks") == '[{"a":1}]'

    kv.remove_item("tasks")
    assert kv.get_item("tasks") is None

    kv.set_item("x", "1")
    kv.set_item("y", "2")
    kv.clear()
    assert kv.get_item("x") is None
    assert kv.get_item("y") is None


def test_store_survives_restart_on_sqlite(tmp_path: Path) -> None:
    db = tmp_path / "storage.sqlite3"
    store = TaskStore(TaskPersistence(SqliteKeyValueStore(db)))
    store.add("Plan 2024 strategy", "notUrgentImportant")

    again = TaskStore(TaskPersistence(SqliteKeyValueStore(db)))
    task = again.find_by_text("Plan 2024 strategy")
    assert task is not None
    assert task.quadrant is Quadrant.NOT_URGENT_IMPORTANT
