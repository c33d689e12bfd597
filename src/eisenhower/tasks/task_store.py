# src/eisenhower/tasks/task_store.py

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from .task_models import Priority, Quadrant, Task, new_task_id, normalize_deadline
from .task_persistence import TaskPersistence
from .task_views import (
    FilteredTasks,
    TaskFilter,
    in_quadrant,
    progress_percent,
    sort_by_priority,
    summary_counts,
)

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Ordered in-memory task collection with write-through persistence.

    Semantics:
    - insertion order is kept; sorting is a view and never reorders storage
    - every successful mutation writes the whole collection once
    - invalid input or an unknown task id is a no-op (no write, False/None)
    - if the write fails, the in-memory collection is left as it was
    """

    def __init__(self, persistence: TaskPersistence) -> None:
        self._persistence = persistence
        self._tasks: list[Task] = []
        for task in persistence.load():
            self._tasks.append(self._with_unique_id(task, self._tasks))
        logger.info("TaskStore ready key=%s total=%s", persistence.key, len(self._tasks))

    # ---- low-level helpers ----

    @staticmethod
    def _with_unique_id(task: Task, existing: list[Task]) -> Task:
        taken = {t.id for t in existing}
        while task.id in taken:
            task = replace(task, id=new_task_id())
        return task

    def _index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _commit(self, tasks: list[Task], action: str) -> bool:
        try:
            self._persistence.save(tasks)
        except Exception:
            logger.exception("Failed to persist tasks after %s; keeping previous state.", action)
            return False
        self._tasks = tasks
        return True

    def _replace_at(self, index: int, task: Task, action: str) -> bool:
        tasks = list(self._tasks)
        tasks[index] = task
        return self._commit(tasks, action)

    # ---- mutations ----

    def add(
        self,
        text: str,
        quadrant: Quadrant | str,
        deadline: str = "",
        priority: str = "",
    ) -> Task | None:
        if not isinstance(text, str) or not text.strip():
            logger.debug("add ignored: empty text")
            return None
        q = Quadrant.parse(quadrant)
        if q is None:
            logger.debug("add ignored: invalid quadrant %r", quadrant)
            return None
        d = normalize_deadline(deadline)
        if d is None:
            logger.debug("add ignored: invalid deadline %r", deadline)
            return None
        p = Priority.parse(priority)
        if p is None:
            logger.debug("add ignored: invalid priority %r", priority)
            return None

        task = self._with_unique_id(
            Task(text=text.strip(), quadrant=q, deadline=d, priority=p.value),
            self._tasks,
        )
        if not self._commit([*self._tasks, task], "add"):
            return None
        logger.debug("Task added id=%s quadrant=%s", task.id, q.value)
        return task

    def move(self, task_id: str, target_quadrant: Quadrant | str) -> bool:
        q = Quadrant.parse(target_quadrant)
        idx = self._index_of(task_id)
        if q is None or idx is None:
            return False
        ok = self._replace_at(idx, replace(self._tasks[idx], quadrant=q), "move")
        if ok:
            logger.debug("Task moved id=%s quadrant=%s", task_id, q.value)
        return ok

    def toggle_completed(self, task_id: str) -> bool:
        idx = self._index_of(task_id)
        if idx is None:
            return False
        task = self._tasks[idx]
        return self._replace_at(idx, replace(task, completed=not task.completed), "toggle")

    def edit(
        self,
        task_id: str,
        *,
        text: str | None = None,
        deadline: str | None = None,
        priority: str | None = None,
    ) -> bool:
        """Partial update of text/deadline/priority. Any invalid field rejects the edit."""
        idx = self._index_of(task_id)
        if idx is None:
            return False

        changes: dict[str, Any] = {}

        if text is not None:
            if not isinstance(text, str) or not text.strip():
                return False
            changes["text"] = text.strip()

        if deadline is not None:
            d = normalize_deadline(deadline)
            if d is None:
                return False
            changes["deadline"] = d

        if priority is not None:
            p = Priority.parse(priority)
            if p is None:
                return False
            changes["priority"] = p.value

        if not changes:
            return False

        ok = self._replace_at(idx, replace(self._tasks[idx], **changes), "edit")
        if ok:
            logger.debug("Task edited id=%s fields=%s", task_id, sorted(changes))
        return ok

    def set_deadline(self, task_id: str, deadline: str) -> bool:
        return self.edit(task_id, deadline=deadline)

    def set_priority(self, task_id: str, priority: str) -> bool:
        return self.edit(task_id, priority=priority)

    def delete(self, task_id: str) -> bool:
        idx = self._index_of(task_id)
        if idx is None:
            return False
        tasks = self._tasks[:idx] + self._tasks[idx + 1 :]
        ok = self._commit(tasks, "delete")
        if ok:
            logger.debug("Task deleted id=%s", task_id)
        return ok

    def reset_week(self) -> int:
        """
        Drop weekly tasks (those with a deadline); long-term tasks stay.

        Returns the number of removed tasks, or 0 if the write failed.
        """
        kept = [t for t in self._tasks if not t.has_deadline]
        removed = len(self._tasks) - len(kept)
        if not self._commit(kept, "reset_week"):
            return 0
        logger.info("Week reset: removed=%d kept=%d", removed, len(kept))
        return removed

    # ---- views ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Task | None:
        idx = self._index_of(task_id)
        return self._tasks[idx] if idx is not None else None

    def find_by_text(self, text: str) -> Task | None:
        for t in self._tasks:
            if t.text == text:
                return t
        return None

    def resolve(self, ref: str) -> Task | None:
        """Look a task up by id first, then by exact text."""
        if not ref:
            return None
        return self.get(ref) or self.find_by_text(ref)

    def tasks_in(self, quadrant: Quadrant | str) -> list[Task]:
        q = Quadrant.parse(quadrant)
        if q is None:
            return []
        return in_quadrant(self._tasks, q)

    def filter(self, predicate: TaskFilter) -> FilteredTasks:
        return FilteredTasks(lambda: tuple(self._tasks), predicate)

    def sort_by_priority(self, quadrant: Quadrant | str) -> list[Task]:
        return sort_by_priority(self.tasks_in(quadrant))

    def progress(self, quadrant: Quadrant | str) -> int:
        return progress_percent(self.tasks_in(quadrant))

    def summary(self) -> dict[Quadrant, int]:
        return summary_counts(self._tasks)
