# src/eisenhower/core/render.py

"""Plain-text presentation of the board and its derived views."""

from __future__ import annotations

from ..tasks.task_models import Quadrant, Task
from ..tasks.task_store import TaskStore
from ..tasks.task_views import insights, progress_label, sort_by_priority
from .state import AppState


def render_task(task: Task) -> str:
    box = "[x]" if task.completed else "[ ]"
    line = f"  {box} {task.id}  {task.text}"
    extras: list[str] = []
    if task.deadline:
        extras.append(f"due {task.deadline}")
    if task.priority:
        extras.append(f"priority {task.priority}")
    if extras:
        line += f"  ({', '.join(extras)})"
    return line


def visible_tasks(state: AppState, quadrant: Quadrant) -> list[Task]:
    """Tasks of one quadrant as currently displayed (filter + optional priority sort)."""
    store = state.task_store
    shown = [t for t in store.filter(state.active_filter) if t.quadrant is quadrant]
    if quadrant in state.sorted_quadrants:
        shown = sort_by_priority(shown)
    return shown


def render_progress(store: TaskStore, quadrant: Quadrant) -> str:
    return f"{quadrant.label}: {progress_label(store.progress(quadrant))}"


def render_board(state: AppState) -> str:
    store = state.task_store
    lines: list[str] = []

    if not state.active_filter.is_empty:
        lines.append(f"Filter: {state.active_filter.describe()}")
        lines.append("")

    for q in Quadrant:
        heading = f"== {q.label} ({progress_label(store.progress(q))})"
        if q in state.sorted_quadrants:
            heading += " [sorted by priority]"
        lines.append(heading)
        shown = visible_tasks(state, q)
        if shown:
            lines.extend(render_task(t) for t in shown)
        else:
            lines.append("  (no tasks)")
        lines.append("")

    tips = insights(store.tasks)
    if tips:
        lines.append("Insights:")
        lines.extend(f"  - {tip}" for tip in tips)
    return "\n".join(lines).rstrip()


def render_summary(store: TaskStore) -> str:
    counts = store.summary()
    total = len(store)
    done = sum(1 for t in store.tasks if t.completed)
    lines = ["Summary:"]
    lines.extend(f"  {q.label}: {counts[q]}" for q in Quadrant)
    lines.append(f"  Total: {total} ({done} completed)")
    return "\n".join(lines)
