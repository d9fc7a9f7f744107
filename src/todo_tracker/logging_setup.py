# src/todo_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

APP_LOGGER = "todo_tracker"
LOG_FILE_NAME = "todo.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    stderr shares the terminal with the ">>> " prompt, so only let through:
    - todo_tracker records at the handler's level (store/service/console)
    - ERROR+ from anything else, including warnings.warn() output
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == APP_LOGGER or record.name.startswith(APP_LOGGER + "."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path | None = ".local/todo",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Route all records through the root logger:
    - stderr at `console_level` (WARNING by default, so a save failure shows
      up next to the command that caused it)
    - <log_dir>/todo.log at `file_level`, holding every load/add/update/delete;
      pass log_dir=None (TODO_LOG_TO_FILE=false) to skip it

    Safe to call again: existing root handlers are replaced.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_dir / LOG_FILE_NAME), encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    logging.captureWarnings(True)
