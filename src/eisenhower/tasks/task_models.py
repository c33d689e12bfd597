# src/eisenhower/tasks/task_models.py

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import Any

_DEADLINE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class Quadrant(StrEnum):
    """
    Urgency x importance category of a task.

    Values are the persisted wire names; `label` is what the board shows.
    """

    URGENT_IMPORTANT = "urgentImportant"
    NOT_URGENT_IMPORTANT = "notUrgentImportant"
    URGENT_NOT_IMPORTANT = "urgentNotImportant"
    NOT_URGENT_NOT_IMPORTANT = "notUrgentNotImportant"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def urgent(self) -> bool:
        return self.value.startswith("urgent")

    @property
    def important(self) -> bool:
        return not self.value.endswith("NotImportant")

    @classmethod
    def parse(cls, raw: Any) -> Quadrant | None:
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str) or not raw.strip():
            return None
        key = raw.strip().lower()
        for q in cls:
            if q.value.lower() == key:
                return q
        return None


_LABELS = {
    Quadrant.URGENT_IMPORTANT: "Urgent & Important",
    Quadrant.NOT_URGENT_IMPORTANT: "Not Urgent & Important",
    Quadrant.URGENT_NOT_IMPORTANT: "Urgent & Not Important",
    Quadrant.NOT_URGENT_NOT_IMPORTANT: "Not Urgent & Not Important",
}


class Priority(StrEnum):
    UNSET = ""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def parse(cls, raw: Any) -> Priority | None:
        if raw is None:
            return None
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        key = raw.strip().lower()
        if key == "none":
            return cls.UNSET
        try:
            return cls(key)
        except ValueError:
            return None


_RANKS = {
    Priority.UNSET: 0,
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
}


def priority_rank(priority: str) -> int:
    p = Priority.parse(priority)
    return p.rank if p is not None else 0


def normalize_deadline(raw: Any) -> str | None:
    """
    Return a deadline in canonical form ("" or "YYYY-MM-DD"), or None if invalid.

    "none" clears the deadline.
    """
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    if value == "" or value.lower() == "none":
        return ""
    if not _DEADLINE_RE.match(value):
        return None
    try:
        date.fromisoformat(value)
    except ValueError:
        return None
    return value


def new_task_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass(slots=True)
class Task:
    text: str
    quadrant: Quadrant
    completed: bool = False
    deadline: str = ""
    priority: str = ""

    # In-memory identity only; never written to storage.
    id: str = field(default_factory=new_task_id)

    @property
    def has_deadline(self) -> bool:
        return self.deadline != ""

    def to_record(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "quadrant": self.quadrant.value,
            "completed": self.completed,
            "deadline": self.deadline,
            "priority": self.priority,
        }

    @classmethod
    def from_record(cls, obj: Any) -> Task | None:
        if not isinstance(obj, dict):
            return None

        text = obj.get("text")
        if not isinstance(text, str) or not text.strip():
            return None

        quadrant = Quadrant.parse(obj.get("quadrant"))
        if quadrant is None:
            return None

        completed = obj.get("completed", False)
        deadline = normalize_deadline(obj.get("deadline", ""))
        priority = Priority.parse(obj.get("priority", ""))

        return cls(
            text=text.strip(),
            quadrant=quadrant,
            completed=completed if isinstance(completed, bool) else False,
            deadline=deadline or "",
            priority=priority.value if priority is not None else "",
        )
