"""
Logging setup for Server-Backup.

Thin facade over the standard library: modules call get_logger(__name__),
the CLI calls log_manager.configure() once at startup.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ..constants import LOG_DATE_FORMAT, LOG_FORMAT

ROOT_LOGGER_NAME = "server_backup"


class LogManager:
    """Owns the handlers attached to the package's root logger."""

    def __init__(self) -> None:
        self._handlers: list[logging.Handler] = []
        self.level = logging.INFO

    def configure(self, level: str = "INFO", log_file: Optional[Path] = None) -> None:
        """
        (Re)configure package logging.

        Args:
            level: Level name (DEBUG, INFO, WARNING, ERROR)
            log_file: Optional file that receives plain-text log lines

        Raises:
            ValueError: If the level name is unknown
        """
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")

        root = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in self._handlers:
            root.removeHandler(handler)
            handler.close()
        self._handlers = []

        # stdout belongs to progress output and the final report
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s", datefmt=LOG_DATE_FORMAT))
        self._handlers.append(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            self._handlers.append(file_handler)

        for handler in self._handlers:
            root.addHandler(handler)
        root.setLevel(numeric)
        root.propagate = False
        self.level = numeric


log_manager = LogManager()


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package root logger."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
