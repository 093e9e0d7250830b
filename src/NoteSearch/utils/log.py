"""NoteSearch logging utilities.

One package logger with a `mm-dd HH:MM:SS [LVL] message` format. Log output
goes to stderr so command results written to stdout stay machine-readable.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Final, TextIO


_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}

_FORMAT: Final[str] = "%(asctime)s [%(levelabbr)s] %(message)s"
_DATE_FORMAT: Final[str] = "%m-%d %H:%M:%S"


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("NoteSearch")


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
    stream: TextIO | None = None,
) -> Path | None:
    """Configure the NoteSearch logger.

    The console handler honors `level`. When a log file is written it always
    records DEBUG so a failed run can be inspected afterwards.

    Args:
        level: Logging level name (e.g., INFO, DEBUG).
        action: CLI action name, used for the log file path.
        log_to_file: Whether to mirror logs to `<log_dir>/<action>/`.
        log_dir: Base directory for log files.
        stream: Console stream; defaults to stderr.

    Returns:
        Path of the log file, or None when no file is written.
    """
    resolved_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    formatter = _AbbrevLevelFormatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    log.handlers.clear()

    console = logging.StreamHandler(stream or sys.stderr)
    console.setLevel(resolved_level)
    console.setFormatter(formatter)
    log.addHandler(console)

    log_path = None
    if log_to_file and action:
        action_dir = Path(log_dir or "log") / action
        action_dir.mkdir(parents=True, exist_ok=True)
        log_path = action_dir / f"{action}_{datetime.now().strftime('%m%d%H%M%S')}.log"
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)

    log.setLevel(min(logging.DEBUG, resolved_level) if log_path else resolved_level)
    log.propagate = False
    return log_path
