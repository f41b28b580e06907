"""
Logging utilities for odometer.

Provides unified structured logging:
- pretty console output via Rich, on stderr so stdout stays free for the report
- optional structured (JSON) file output when `--log-json PATH` is given
"""

import logging
import json
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "odometer"

_console = Console(stderr=True)


class JSONFormatter(logging.Formatter):
    """
    Formatter that serializes log records to JSON.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level":     record.levelname,
            "logger":    record.name,
            "message":   record.getMessage(),
        }
        return json.dumps(log_record)


def get_logger(name: str, level: int | str = logging.INFO) -> logging.Logger:
    """
    Return a configured logger for the given name.

    Console output is attached once, on the package root logger, so every
    `odometer.*` logger shares the same handlers.

    Parameters
    ----------
    name
        Logger name (typically __name__).
    level
        Log level (int or string), defaults to INFO.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        console_handler = RichHandler(console=_console, rich_tracebacks=True)
        console_handler.setLevel(level)
        root.addHandler(console_handler)
        root.setLevel(level)

    return logging.getLogger(name)


def add_json_file_handler(path: str | Path, level: int | str = logging.INFO) -> logging.Handler:
    """
    Attach a FileHandler writing JSON logs to `path` on the package root logger.

    Returns the handler so callers can detach it again.
    """
    file_handler = logging.FileHandler(Path(path), mode="a", encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(JSONFormatter())
    logging.getLogger(ROOT_LOGGER).addHandler(file_handler)
    return file_handler


def remove_handler(handler: logging.Handler) -> None:
    """
    Detach and close a handler added by `add_json_file_handler`.
    """
    logging.getLogger(ROOT_LOGGER).removeHandler(handler)
    handler.close()
