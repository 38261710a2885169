"""Shared utilities: error hierarchy and logging."""

from __future__ import annotations

from .exceptions import (
    AllocationError,
    ConfigurationError,
    GenerationAborted,
    MazeGenerationError,
    UnreachableExitError,
    validate_parameter_value,
)
from .logging import LoggedOperation, MazeLogger, configure_logging, get_logger

__all__ = [
    "AllocationError",
    "ConfigurationError",
    "GenerationAborted",
    "LoggedOperation",
    "MazeGenerationError",
    "MazeLogger",
    "UnreachableExitError",
    "configure_logging",
    "get_logger",
    "validate_parameter_value",
]
