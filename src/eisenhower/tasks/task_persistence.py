# src/eisenhower/tasks/task_persistence.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from ..core.ports import KeyValueStore
from .task_models import Task

logger = logging.getLogger(__name__)

STORAGE_KEY = "tasks"


class TaskPersistence:
    """
    Write-through adapter between TaskStore and a KeyValueStore.

    The whole collection is stored as one JSON array under a fixed key.
    Encoding uses compact separators so the stored text matches what
    JSON.stringify produces for the same records.
    """

    def __init__(self, kv: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self._kv = kv
        self.key = key

    @staticmethod
    def encode(tasks: Iterable[Task]) -> str:
        return json.dumps(
            [t.to_record() for t in tasks],
            ensure_ascii=False,
            separators=(",", ":"),
        )

    def save(self, tasks: Iterable[Task]) -> None:
        """Serialize and write the full collection. Storage errors propagate."""
        payload = self.encode(tasks)
        self._kv.set_item(self.key, payload)

    def load(self) -> list[Task]:
        """Read the stored collection. Never raises; bad data loads as []."""
        try:
            raw = self._kv.get_item(self.key)
        except Exception:
            logger.exception("Failed to read key=%s from storage; starting empty.", self.key)
            return []

        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored key=%s is not valid JSON; starting empty.", self.key)
            return []

        if not isinstance(data, list):
            logger.warning("Stored key=%s is not a JSON array; starting empty.", self.key)
            return []

        out: list[Task] = []
        for i, item in enumerate(data):
            task = Task.from_record(item)
            if task is None:
                logger.debug("Skipping malformed task record #%d: %r", i, item)
                continue
            out.append(task)

        logger.info("Loaded %d tasks from key=%s", len(out), self.key)
        return out
