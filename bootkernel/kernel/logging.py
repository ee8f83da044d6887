"""
Logging System - Centralized logging management.

Provides colored console logging and optional file logging with rotation.
Modules log through ``logging.getLogger(__name__)``; LogManager only owns
the handlers attached to the ``bootkernel`` logger.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import colorlog

ROOT_LOGGER = "bootkernel"

CONSOLE_FORMAT = (
    "%(log_color)s%(asctime)s | %(levelname)-8s | %(name)s%(reset)s | %(message)s"
)
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "bootkernel.log"


class LogManager:
    """
    Centralized logging configuration and management.

    Provides consistent formatting across all loggers with support for:
    - Colored console output
    - File logging with rotation
    """

    _instance: LogManager | None = None
    _initialized: bool = False

    def __new__(cls) -> LogManager:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if LogManager._initialized:
            return

        LogManager._initialized = True
        self._log_level = logging.INFO
        self._log_dir: Path | None = None
        self._console_handler: logging.Handler | None = None
        self._file_handler: logging.Handler | None = None
        self._setup_root_logger()

    def _setup_root_logger(self) -> None:
        """Configure the package logger with colored output."""
        console_formatter = colorlog.ColoredFormatter(
            CONSOLE_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(self._log_level)
        self._console_handler = console_handler

        root = logging.getLogger(ROOT_LOGGER)
        root.setLevel(logging.DEBUG)
        root.addHandler(console_handler)
        # 已有自己的处理器，不再向宿主应用的根日志器重复输出
        root.propagate = False

    def _setup_file_handler(self, log_dir: Path) -> None:
        """Attach (or move) the rotating file handler."""
        root = logging.getLogger(ROOT_LOGGER)
        if self._file_handler is not None:
            root.removeHandler(self._file_handler)
            self._file_handler.close()

        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        root.addHandler(file_handler)

        self._file_handler = file_handler
        self._log_dir = log_dir

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger with the given name."""
        return logging.getLogger(name)

    def set_level(self, level: int | str) -> None:
        """Set the console logging level."""
        if isinstance(level, str):
            level = getattr(logging, level.upper(), logging.INFO)

        self._log_level = level
        if self._console_handler is not None:
            self._console_handler.setLevel(level)

    @property
    def level(self) -> int:
        """Current console logging level."""
        return self._log_level

    @property
    def log_dir(self) -> Path | None:
        """Directory of the log file, if file logging is enabled."""
        return self._log_dir

    def configure_from_settings(self, settings: dict[str, Any]) -> None:
        """Configure logging from application settings."""
        if settings.get("level"):
            self.set_level(settings["level"])

        if settings.get("log_dir"):
            self._setup_file_handler(Path(settings["log_dir"]))


def get_log_manager() -> LogManager:
    """Get the log manager instance."""
    return LogManager()


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return get_log_manager().get_logger(name)


def configure_logging(settings: dict[str, Any]) -> LogManager:
    """Apply the ``logging`` section of the configuration."""
    manager = get_log_manager()
    manager.configure_from_settings(settings)
    return manager
