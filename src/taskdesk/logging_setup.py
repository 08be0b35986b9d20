# src/taskdesk/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that would otherwise print one line per HTTP request.
HTTP_LOGGERS = ("httpx", "httpcore")


class ConsoleFilter(logging.Filter):
    """
    Console output shares the terminal with the REPL prompt, so:
    - taskdesk records pass, except request traces from taskdesk.api (WARNING+ only)
    - anything else (third-party, py.warnings) shows only at ERROR+
    """

    def __init__(self, app_prefix: str = "taskdesk", quiet_prefixes: Iterable[str] = ("taskdesk.api",)) -> None:
        super().__init__()
        self._app_prefix = app_prefix + "."
        self._quiet = tuple(p + "." if not p.endswith(".") else p for p in quiet_prefixes)

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name + "."
        if name.startswith(self._quiet):
            return record.levelno >= logging.WARNING
        if name.startswith(self._app_prefix):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskdesk",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> Path:
    """
    Route all logging to stderr (filtered) and to a rotating taskdesk.log.

    Replaces any handlers already on the root logger, so calling it twice is safe.
    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskdesk.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(ConsoleFilter())
    root.addHandler(console)

    file_handler = RotatingFileHandler(
        log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)

    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
