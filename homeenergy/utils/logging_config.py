"""
Logging setup for the command-line tool.

Library modules only create loggers with ``logging.getLogger(__name__)`` and
pass per-record context through ``extra=``::

    logger.warning("Unrecognized heating kind", extra={"end_use": "heating", "kind": "Geyser"})

The CLI calls :func:`setup_logging` once; level and file destination come
from :data:`homeenergy.core.config.settings` unless given explicitly.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from ..core.config import settings


# Keys lifted from `extra=` onto every formatted line
CONTEXT_KEYS = ("record_id", "end_use", "kind", "recommendation_id")


def _context(record: logging.LogRecord) -> dict:
    return {key: getattr(record, key) for key in CONTEXT_KEYS if hasattr(record, key)}


class ConsoleFormatter(logging.Formatter):
    """Single-line stderr format with trailing ``[key=value]`` context."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


class JsonLineFormatter(logging.Formatter):
    """One JSON object per line, for log files."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    level: Optional[str] = None,
    log_file: Union[str, Path, None] = None,
) -> None:
    """
    Replace the root logger's handlers.

    Args:
        level: Console level name; defaults to ``settings.log_level``. An
            unknown name falls back to INFO.
        log_file: Also write JSON lines here at DEBUG. When omitted, the
            settings file is used if ``settings.log_to_file`` is on.
    """
    console_level = _level(level or settings.log_level)
    if log_file is None and settings.log_to_file:
        log_file = settings.log_file

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(ConsoleFormatter())
    console.setLevel(console_level)
    root.addHandler(console)
    root.setLevel(console_level)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(JsonLineFormatter())
        file_handler.setLevel(logging.DEBUG)
        root.addHandler(file_handler)
        root.setLevel(logging.DEBUG)
