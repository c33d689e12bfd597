# src/eisenhower/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "eisenhower.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console thresholds by logger origin:
    - eisenhower.*: everything the handler level lets through
    - py.warnings: WARNING+, so deprecations still reach the user
    - anything else: ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "eisenhower" or record.name.startswith("eisenhower."):
            return True
        if record.name == "py.warnings":
            return record.levelno >= logging.WARNING
        return record.levelno >= logging.ERROR


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/eisenhower",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route logs to stderr (filtered, so it doesn't drown the board) and to
    `<log_dir>/eisenhower.log` (everything at file_level).

    Replaces any handlers already on the root logger. Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    console = _handler(logging.StreamHandler(sys.stderr), console_level)
    console.addFilter(_ConsoleNoiseFilter())

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(min(console_level, file_level))
    root.addHandler(console)
    root.addHandler(_handler(logging.FileHandler(str(log_file), encoding="utf-8"), file_level))

    logging.captureWarnings(True)
    return log_file
