# src/eisenhower/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable

from ..core.render import render_board, render_progress, render_summary
from ..core.state import AppState
from ..tasks.task_models import Quadrant, Task
from ..tasks.task_views import TaskFilter, insights

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

QUADRANT_CHOICES = ", ".join(q.value for q in Quadrant)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _split_options(args: list[str], allowed: set[str]) -> tuple[list[str], dict[str, str]]:
    """Separate `key=value` options from positional words."""
    words: list[str] = []
    opts: dict[str, str] = {}
    for a in args:
        key, sep, value = a.partition("=")
        if sep and key.lower() in allowed:
            opts[key.lower()] = value
        else:
            words.append(a)
    return words, opts


def _resolve(state: AppState, ref: str) -> Task | None:
    return state.task_store.resolve(ref)


def _not_found(ref: str) -> str:
    return f"No task matches '{ref}'."


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_board(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <quadrant> <text...> [deadline=YYYY-MM-DD] [priority=low|medium|high]
    """
    words, opts = _split_options(args, {"deadline", "priority"})
    if len(words) < 2:
        return "Usage: /add <quadrant> <text> [deadline=YYYY-MM-DD] [priority=level]"

    quadrant = Quadrant.parse(words[0])
    if quadrant is None:
        return f"Unknown quadrant '{words[0]}'. Use one of: {QUADRANT_CHOICES}."

    task = state.task_store.add(
        " ".join(words[1:]),
        quadrant,
        deadline=opts.get("deadline", ""),
        priority=opts.get("priority", ""),
    )
    if task is None:
        return "Task not added (check text, deadline and priority)."
    return f"Added {task.id} '{task.text}' to {quadrant.label}."


def cmd_deadline(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /deadline <task> <YYYY-MM-DD|none>"
    task = _resolve(state, args[0])
    if task is None:
        return _not_found(args[0])
    if not state.task_store.set_deadline(task.id, args[1]):
        return f"Invalid deadline '{args[1]}'."
    return f"Deadline of '{task.text}' set to {args[1]}."


def cmd_priority(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /priority <task> <low|medium|high|none>"
    task = _resolve(state, args[0])
    if task is None:
        return _not_found(args[0])
    if not state.task_store.set_priority(task.id, args[1]):
        return f"Invalid priority '{args[1]}'."
    return f"Priority of '{task.text}' set to {args[1]}."


def cmd_move(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /move <task> <quadrant>"
    task = _resolve(state, args[0])
    if task is None:
        return _not_found(args[0])
    quadrant = Quadrant.parse(args[1])
    if quadrant is None:
        return f"Unknown quadrant '{args[1]}'. Use one of: {QUADRANT_CHOICES}."
    if not state.task_store.move(task.id, quadrant):
        return "Move failed."
    return f"Moved '{task.text}' to {quadrant.label}."


def cmd_drag(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /drag <task>"
    task = _resolve(state, args[0])
    if task is None:
        state.dragged_task_id = None
        return _not_found(args[0])
    state.dragged_task_id = task.id
    return f"Dragging '{task.text}'. Use /drop <quadrant>."


def cmd_drop(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /drop <quadrant>"
    task_id = state.dragged_task_id
    if task_id is None:
        return "Nothing is being dragged. Use /drag <task> first."
    quadrant = Quadrant.parse(args[0])
    if quadrant is None:
        return f"Unknown quadrant '{args[0]}'. Use one of: {QUADRANT_CHOICES}."

    state.dragged_task_id = None
    task = state.task_store.get(task_id)
    if task is None:
        return "Drop ignored: the dragged task no longer exists."
    if not state.task_store.move(task_id, quadrant):
        return "Move failed."
    return f"Moved '{task.text}' to {quadrant.label}."


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done <task>"
    task = _resolve(state, args[0])
    if task is None:
        return _not_found(args[0])
    if not state.task_store.toggle_completed(task.id):
        return "Toggle failed."
    now = state.task_store.get(task.id)
    mark = "completed" if now is not None and now.completed else "not completed"
    return f"'{task.text}' marked {mark}."


def cmd_delete(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /delete <task>"
    task = _resolve(state, args[0])
    if task is None:
        return _not_found(args[0])
    if not state.task_store.delete(task.id):
        return "Delete failed."
    if state.dragged_task_id == task.id:
        state.dragged_task_id = None
    return f"Deleted '{task.text}'."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <task> [text=...] [deadline=...] [priority=...]
    """
    words, opts = _split_options(args, {"text", "deadline", "priority"})
    if len(words) != 1 or not opts:
        return "Usage: /edit <task> [text=...] [deadline=YYYY-MM-DD] [priority=level]"
    task = _resolve(state, words[0])
    if task is None:
        return _not_found(words[0])
    ok = state.task_store.edit(
        task.id,
        text=opts.get("text"),
        deadline=opts.get("deadline"),
        priority=opts.get("priority"),
    )
    if not ok:
        return "Edit rejected (check text, deadline and priority)."
    return f"Updated {task.id}."


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter urgency <urgent|notUrgent>
    /filter importance <important|notImportant>
    /filter due <from|-> <to|->
    /filter clear
    """
    usage = (
        "Usage:\n"
        "  /filter urgency urgent|notUrgent\n"
        "  /filter importance important|notImportant\n"
        "  /filter due <from|-> <to|->\n"
        "  /filter clear"
    )
    if not args:
        return f"Active filter: {state.active_filter.describe()}\n{usage}"

    sub = args[0].lower()
    current = state.active_filter

    if sub == "clear":
        state.active_filter = TaskFilter()
        return "Filter cleared."

    if sub == "urgency" and len(args) == 2:
        value = TaskFilter.parse_urgency(args[1])
        if value is None:
            return usage
        state.active_filter = TaskFilter(value, current.importance, current.due_from, current.due_to)

    elif sub == "importance" and len(args) == 2:
        value = TaskFilter.parse_importance(args[1])
        if value is None:
            return usage
        state.active_filter = TaskFilter(current.urgency, value, current.due_from, current.due_to)

    elif sub == "due" and len(args) == 3:
        bounds: list[str | None] = []
        for raw in args[1:]:
            if raw == "-":
                bounds.append(None)
                continue
            d = TaskFilter.parse_date(raw)
            if d is None:
                return f"Invalid date '{raw}'."
            bounds.append(d)
        if bounds[0] is None and bounds[1] is None:
            return usage
        state.active_filter = TaskFilter(current.urgency, current.importance, bounds[0], bounds[1])

    else:
        return usage

    count = sum(1 for _ in state.task_store.filter(state.active_filter))
    return f"Filter: {state.active_filter.describe()} ({count} matching)."


def cmd_sort(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /sort <quadrant>"
    quadrant = Quadrant.parse(args[0])
    if quadrant is None:
        return f"Unknown quadrant '{args[0]}'. Use one of: {QUADRANT_CHOICES}."
    if quadrant in state.sorted_quadrants:
        state.sorted_quadrants.discard(quadrant)
        return f"{quadrant.label}: back to insertion order."
    state.sorted_quadrants.add(quadrant)
    return f"{quadrant.label}: sorted by priority."


def cmd_reset_week(state: AppState, args: list[str]) -> str:
    removed = state.task_store.reset_week()
    logger.debug("reset-week command removed=%d", removed)
    return f"Week reset: removed {removed} task(s) with deadlines."


def cmd_summary(state: AppState, args: list[str]) -> str:
    return render_summary(state.task_store)


def cmd_progress(state: AppState, args: list[str]) -> str:
    store = state.task_store
    if args:
        quadrant = Quadrant.parse(args[0])
        if quadrant is None:
            return f"Unknown quadrant '{args[0]}'. Use one of: {QUADRANT_CHOICES}."
        return render_progress(store, quadrant)
    return "\n".join(render_progress(store, q) for q in Quadrant)


def cmd_insights(state: AppState, args: list[str]) -> str:
    tips = insights(state.task_store.tasks)
    if not tips:
        return "No insights yet: add some tasks."
    return "\n".join(tips)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the matrix.", aliases=["ls", "board"])
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add <quadrant> <text> [deadline=YYYY-MM-DD] [priority=level].",
)
registry.register("deadline", cmd_deadline, help_text="Set a deadline: /deadline <task> <date|none>.")
registry.register("priority", cmd_priority, help_text="Set a priority: /priority <task> <level|none>.")
registry.register("move", cmd_move, help_text="Move a task: /move <task> <quadrant>.")
registry.register("drag", cmd_drag, help_text="Start dragging a task: /drag <task>.")
registry.register("drop", cmd_drop, help_text="Drop the dragged task: /drop <quadrant>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <task>.", aliases=["toggle"])
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <task>.", aliases=["rm"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <task> [text=..] [deadline=..] [priority=..].")
registry.register("filter", cmd_filter, help_text="Filter by urgency, importance or due date.")
registry.register("sort", cmd_sort, help_text="Toggle priority sort for a quadrant: /sort <quadrant>.")
registry.register("reset-week", cmd_reset_week, help_text="Remove all tasks with deadlines.")
registry.register("summary", cmd_summary, help_text="Task counts per quadrant.")
registry.register("progress", cmd_progress, help_text="Completion per quadrant: /progress [quadrant].")
registry.register("insights", cmd_insights, help_text="Time-management advice for the current tasks.")
