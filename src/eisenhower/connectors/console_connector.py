# src/eisenhower/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.render import render_board
from ..core.state import AppState

logger = logging.getLogger(__name__)

# Commands after which the board is redrawn.
_REDRAW_AFTER = {
    "add", "move", "drop", "done", "toggle", "delete", "rm", "edit",
    "deadline", "priority", "filter", "sort", "reset-week",
}


def _command_name(line: str) -> str:
    parts = line[1:].split(maxsplit=1)
    return parts[0].lower() if parts else ""


def run_console_loop(
    state: AppState,
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    logger.info("Console connector started (tasks=%d).", len(state.task_store))
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "eisenhower"))

    write(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")
    write(render_board(state))

    while True:
        try:
            user_input = read("\n> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            write("Commands start with '/'. Use /help to list them.")
            continue

        write(reply)
        if _command_name(user_input) in _REDRAW_AFTER:
            write("")
            write(render_board(state))

    logger.info("Console connector finished.")
