# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from eisenhower.cli.bootstrap import create_initial_state
from eisenhower.config import Settings
from eisenhower.storage.kv_store import SqliteKeyValueStore


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("APP_NAME", "LOG_LEVEL", "DATA_DIR", "STORAGE_PATH", "STORAGE_KEY"):
        monkeypatch.delenv(f"EISENHOWER_{name}", raising=False)

    s = Settings.from_env()

    assert s.app_name == "eisenhower"
    assert s.log_level == "INFO"
    assert s.data_dir == Path(".local/eisenhower")
    assert s.storage_path == Path(".local/eisenhower/storage.sqlite3")
    assert s.storage_key == "tasks"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("EISENHOWER_APP_NAME", "matrix")
    monkeypatch.setenv("EISENHOWER_LOG_LEVEL", "debug")
    monkeypatch.setenv("EISENHOWER_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("EISENHOWER_STORAGE_PATH", raising=False)
    monkeypatch.setenv("EISENHOWER_STORAGE_KEY", "  ")

    s = Settings.from_env()

    assert s.app_name == "matrix"
    assert s.log_level == "DEBUG"
    assert s.storage_path == tmp_path / "storage.sqlite3"
    assert s.storage_key == "tasks"


def test_bootstrap_wires_sqlite_storage(settings) -> None:
    state = create_initial_state(settings=settings)
    state.task_store.add("Plan 2024 strategy", "notUrgentImportant")

    assert settings.storage_path.exists()
    raw = SqliteKeyValueStore(settings.storage_path).get_item("tasks")
    assert raw is not None and "Plan 2024 strategy" in raw

    reloaded = create_initial_state(settings=settings)
    assert reloaded.task_store.find_by_text("Plan 2024 strategy") is not None
