#!/usr/bin/env python3
"""Structured logging for MountFS.

Every module asks get_logger() for a named Logger at import time. A Logger
wraps a stdlib logger and renders keyword context as key=value pairs after
the message. Context pushed with add_context() applies to every record the
current thread emits inside the block, which is how a namespace lookup tags
the trail of mounts it falls back through.

configure_logging() is called once the configuration is known; it sets the
level of every registered logger and (re)installs one rotating log file
shared by all of them.

Example:
    >>> logger = get_logger("mountfs.namespace")
    >>> with logger.add_context(lookup="/assets/logo.png"):
    ...     logger.debug("Candidate failed, falling back", segment="assets")
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from mountfs.core.constants import Limits

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


class Logger:
    """Named logger that appends key=value context to each message."""

    # Context frames per thread, shared by all Logger instances
    _local = threading.local()

    def __init__(
        self,
        name: str = "mountfs",
        level: Union[LogLevel, str] = LogLevel.INFO,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name, dotted below "mountfs"
            level: Minimum log level to output
            handlers: Handlers to use instead of the default stderr handler
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.propagate = False
        self.set_level(level)

        if handlers is None:
            console = logging.StreamHandler()
            console.setFormatter(_formatter())
            handlers = [console]

        self.logger.handlers.clear()
        for handler in handlers:
            self.add_handler(handler)

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = Limits.LOG_FILE_MAX_BYTES,
        backup_count: int = Limits.LOG_FILE_BACKUP_COUNT,
    ) -> logging.handlers.RotatingFileHandler:
        """Create rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured rotating file handler
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(_formatter())
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)

    def remove_handler(self, handler: logging.Handler) -> None:
        self.logger.removeHandler(handler)

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level.

        Args:
            level: LogLevel or its name, case-insensitive

        Raises:
            KeyError: If level names no LogLevel
        """
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

    def _frames(self) -> List[Dict[str, Any]]:
        if not hasattr(self._local, "frames"):
            self._local.frames = []
        return self._local.frames

    @contextmanager
    def add_context(self, **kwargs: Any) -> Iterator[None]:
        """Attach kwargs to every record this thread logs inside the block."""
        frames = self._frames()
        frames.append(kwargs)
        try:
            yield
        finally:
            frames.pop()

    def _render(self, msg: str, context: Dict[str, Any]) -> str:
        merged: Dict[str, Any] = {}
        for frame in self._frames():
            merged.update(frame)
        merged.update(context)
        if not merged:
            return msg
        return f"{msg} | " + " ".join(f"{k}={v}" for k, v in merged.items())

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any]) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._render(msg, context))

    def debug(self, msg: str, **context: Any) -> None:
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context: Any) -> None:
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context: Any) -> None:
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context: Any) -> None:
        self._log(LogLevel.ERROR, msg, context)


_loggers: Dict[str, Logger] = {}
_loggers_lock = threading.Lock()
_file_handler: Optional[logging.Handler] = None


def get_logger(name: str = "mountfs") -> Logger:
    """Return the Logger registered under name, creating it on first use."""
    with _loggers_lock:
        logger = _loggers.get(name)
        if logger is None:
            logger = _loggers[name] = Logger(name=name)
        return logger


def configure_logging(level: Union[LogLevel, str] = LogLevel.INFO,
                      log_file: Optional[Union[str, Path]] = None) -> None:
    """Apply a level and an optional log file to every registered logger.

    A log file installed by an earlier call is detached from all loggers and
    closed first, so repeated calls never stack handlers.

    Args:
        level: Minimum log level
        log_file: Path for a rotating log file shared by all loggers
    """
    global _file_handler

    with _loggers_lock:
        loggers = list(_loggers.values())

        previous, _file_handler = _file_handler, None
        if log_file and loggers:
            _file_handler = loggers[0].create_file_handler(log_file)

        for logger in loggers:
            logger.set_level(level)
            if previous is not None:
                logger.remove_handler(previous)
            if _file_handler is not None:
                logger.add_handler(_file_handler)

    if previous is not None:
        previous.close()
