# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from eisenhower.cli.bootstrap import create_initial_state
from eisenhower.core.state import AppState
from eisenhower.tasks.task_persistence import TaskPersistence
from eisenhower.tasks.task_store import TaskStore

from .fakes import FakeKeyValueStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="eisenhower-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        storage_path=tmp_path / "data" / "storage.sqlite3",
        storage_key="tasks",
    )


@pytest.fixture()
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def store(kv: FakeKeyValueStore) -> TaskStore:
    return TaskStore(TaskPersistence(kv))


@pytest.fixture()
def state(settings: SimpleNamespace, kv: FakeKeyValueStore) -> AppState:
    """AppState wired to the in-memory key-value store."""
    return create_initial_state(settings=settings, kv=kv)
