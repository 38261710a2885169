"""
Logging Infrastructure for mazegen

Console logs go to stderr so that a maze printed on stdout stays clean.
Records emitted for a generation attempt carry ``attempt`` and ``seed``
attributes, which the formatter renders as a trailing ``[attempt N, seed S]``
tag; any failed maze can be reproduced from that tag alone.
"""

from __future__ import annotations

import logging
import sys
import threading
import time
from pathlib import Path
from typing import Any, ClassVar

import colorlog

_FORMAT = "%(asctime)s - %(name)-20s - %(levelname)-8s - %(message)s%(attempt_tag)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

_LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


class MazeFormatter(logging.Formatter):
    """Formatter that tags attempt records with their seed, optionally coloured."""

    def __init__(self, use_colors: bool = False, include_location: bool = False):
        self.use_colors = use_colors
        self.include_location = include_location

        format_str = _FORMAT
        if self.include_location:
            format_str += " [%(filename)s:%(lineno)d]"

        self.colored_formatter = None
        if self.use_colors:
            self.colored_formatter = colorlog.ColoredFormatter(
                "%(log_color)s" + format_str, datefmt=_DATEFMT, log_colors=_LOG_COLORS
            )

        super().__init__(format_str, datefmt=_DATEFMT)

    def format(self, record):
        attempt = getattr(record, "attempt", None)
        seed = getattr(record, "seed", None)
        if attempt is not None and seed is not None:
            record.attempt_tag = f" [attempt {attempt}, seed {seed}]"
        else:
            record.attempt_tag = ""

        if self.colored_formatter is not None:
            return self.colored_formatter.format(record)
        return super().format(record)


class MazeLogger:
    """
    Central registry of mazegen loggers.

    Logger creation is guarded by a lock with a double check so that a logger
    is never set up twice with duplicate handlers. ``configure`` rebuilds the
    handlers of every registered logger.
    """

    _lock: ClassVar[threading.Lock] = threading.Lock()
    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _log_level = logging.WARNING
    _log_file: Path | None = None
    _use_colors = True
    _include_location = False

    @classmethod
    def configure(
        cls,
        level: str | int = "WARNING",
        log_file: str | Path | None = None,
        use_colors: bool = True,
        include_location: bool = False,
    ):
        """
        Configure global logging settings for mazegen.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Also write uncoloured records to this file
            use_colors: Colour console output
            include_location: Include file location in log messages
        """
        with cls._lock:
            cls._log_level = getattr(logging, level.upper()) if isinstance(level, str) else level
            cls._use_colors = use_colors
            cls._include_location = include_location

            cls._log_file = None
            if log_file is not None:
                cls._log_file = Path(log_file)
                cls._log_file.parent.mkdir(parents=True, exist_ok=True)

            for logger in cls._loggers.values():
                cls._setup_logger(logger)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if name in cls._loggers:
            return cls._loggers[name]

        with cls._lock:
            if name not in cls._loggers:
                logger = logging.getLogger(name)
                cls._setup_logger(logger)
                cls._loggers[name] = logger

        return cls._loggers[name]

    @classmethod
    def _setup_logger(cls, logger: logging.Logger):
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(cls._log_level)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(MazeFormatter(cls._use_colors, cls._include_location))
        logger.addHandler(console_handler)

        if cls._log_file is not None:
            file_handler = logging.FileHandler(cls._log_file)
            file_handler.setFormatter(MazeFormatter(use_colors=False, include_location=cls._include_location))
            logger.addHandler(file_handler)

        logger.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger for the current module.

    Args:
        name: Logger name (if None, uses "mazegen")
    """
    return MazeLogger.get_logger(name or "mazegen")


def configure_logging(**kwargs):
    """
    Configure global logging settings.

    Keyword Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of an additional log file
        use_colors: Use colored terminal output
        include_location: Include file location in messages
    """
    MazeLogger.configure(**kwargs)


def log_generation_start(logger: logging.Logger, algorithm: str, config: dict[str, Any]):
    logger.info(f"Generating {config.get('size')}x{config.get('size')} maze with {algorithm}")
    logger.debug(f"Generation configuration: {config}")


def log_attempt_result(
    logger: logging.Logger,
    attempt: int,
    seed: int,
    reachable: bool,
    failures: int,
    max_failures: int,
):
    """Log the outcome of a single generation attempt, tagged with its seed."""
    context = {"attempt": attempt, "seed": seed}
    if reachable:
        logger.info("Exit reachable, maze accepted", extra=context)
    else:
        logger.warning(f"Exit unreachable ({failures}/{max_failures} consecutive failures)", extra=context)


class LoggedOperation:
    """Context manager for logging timed operations."""

    def __init__(self, logger: logging.Logger, operation_name: str, log_level: int = logging.INFO):
        self.logger = logger
        self.operation_name = operation_name
        self.log_level = log_level
        self.start_time: float | None = None
        self.duration: float | None = None

    def __enter__(self):
        self.logger.log(self.log_level, f"Starting {self.operation_name}")
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - (self.start_time or 0.0)

        if exc_type is None:
            self.logger.log(self.log_level, f"Completed {self.operation_name} in {self.duration:.3f}s")
        else:
            self.logger.error(f"Failed {self.operation_name} after {self.duration:.3f}s: {exc_val}")

        return False
