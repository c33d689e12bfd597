# src/eisenhower/tasks/task_views.py

"""
Derived views over a task collection.

Everything here is a pure function of the tasks passed in:
no storage access, no mutation.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass

from .task_models import Quadrant, Task, normalize_deadline, priority_rank

URGENCY_VALUES = ("urgent", "notUrgent")
IMPORTANCE_VALUES = ("important", "notImportant")

INSIGHTS = {
    Quadrant.URGENT_IMPORTANT: "Do these tasks first: they are both urgent and important.",
    Quadrant.NOT_URGENT_IMPORTANT: "Schedule time for these tasks: they drive your long-term goals.",
    Quadrant.URGENT_NOT_IMPORTANT: "Delegate these tasks where you can.",
    Quadrant.NOT_URGENT_NOT_IMPORTANT: (
        "Try to eliminate or minimize these tasks: they are neither urgent nor important."
    ),
}


def _parse_choice(raw: str | None, choices: tuple[str, ...]) -> str | None:
    if not isinstance(raw, str) or not raw:
        return None
    key = raw.strip().replace("-", "").replace("_", "").lower()
    for c in choices:
        if c.lower() == key:
            return c
    return None


@dataclass(frozen=True, slots=True)
class TaskFilter:
    """
    Predicate over urgency half, importance half and deadline range.

    None means "don't care". Date bounds are inclusive; once a bound is
    set, tasks without a deadline no longer match.
    """

    urgency: str | None = None
    importance: str | None = None
    due_from: str | None = None
    due_to: str | None = None

    def __post_init__(self) -> None:
        # Unrecognized values become None ("don't care").
        object.__setattr__(self, "urgency", self.parse_urgency(self.urgency))
        object.__setattr__(self, "importance", self.parse_importance(self.importance))
        object.__setattr__(self, "due_from", self.parse_date(self.due_from))
        object.__setattr__(self, "due_to", self.parse_date(self.due_to))

    @staticmethod
    def parse_urgency(raw: str | None) -> str | None:
        return _parse_choice(raw, URGENCY_VALUES)

    @staticmethod
    def parse_importance(raw: str | None) -> str | None:
        return _parse_choice(raw, IMPORTANCE_VALUES)

    @staticmethod
    def parse_date(raw: str | None) -> str | None:
        if raw is None:
            return None
        d = normalize_deadline(raw)
        return d or None

    @property
    def is_empty(self) -> bool:
        return (
            self.urgency is None
            and self.importance is None
            and self.due_from is None
            and self.due_to is None
        )

    def matches(self, task: Task) -> bool:
        if self.urgency is not None and task.quadrant.urgent != (self.urgency == "urgent"):
            return False
        if self.importance is not None and task.quadrant.important != (
            self.importance == "important"
        ):
            return False
        if self.due_from is not None or self.due_to is not None:
            if not task.has_deadline:
                return False
            # ISO dates compare correctly as strings.
            if self.due_from is not None and task.deadline < self.due_from:
                return False
            if self.due_to is not None and task.deadline > self.due_to:
                return False
        return True

    def describe(self) -> str:
        if self.is_empty:
            return "none"
        parts: list[str] = []
        if self.urgency:
            parts.append(f"urgency={self.urgency}")
        if self.importance:
            parts.append(f"importance={self.importance}")
        if self.due_from or self.due_to:
            parts.append(f"due={self.due_from or '...'}..{self.due_to or '...'}")
        return ", ".join(parts)


class FilteredTasks:
    """
    Lazy view of the tasks matching a predicate.

    Iterating re-reads the source, so the view can be walked any number
    of times and always reflects the current collection.
    """

    def __init__(self, source: Callable[[], Sequence[Task]], predicate: TaskFilter) -> None:
        self._source = source
        self.predicate = predicate

    def __iter__(self) -> Iterator[Task]:
        for task in self._source():
            if self.predicate.matches(task):
                yield task

    def __repr__(self) -> str:
        return f"FilteredTasks({self.predicate.describe()})"


def in_quadrant(tasks: Iterable[Task], quadrant: Quadrant) -> list[Task]:
    return [t for t in tasks if t.quadrant is quadrant]


def sort_by_priority(tasks: Iterable[Task]) -> list[Task]:
    # sorted() is stable: equal priorities keep insertion order.
    return sorted(tasks, key=lambda t: priority_rank(t.priority), reverse=True)


def progress_percent(tasks: Iterable[Task]) -> int:
    items = list(tasks)
    if not items:
        return 0
    done = sum(1 for t in items if t.completed)
    return done * 100 // len(items)


def progress_label(percent: int) -> str:
    return f"{percent}%"


def summary_counts(tasks: Iterable[Task]) -> dict[Quadrant, int]:
    counts = {q: 0 for q in Quadrant}
    for t in tasks:
        counts[t.quadrant] += 1
    return counts


def insights(tasks: Iterable[Task]) -> list[str]:
    counts = summary_counts(tasks)
    return [INSIGHTS[q] for q in Quadrant if counts[q] > 0]
