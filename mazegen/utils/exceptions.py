"""
Exception classes for mazegen with helpful error messages and user guidance.

Every error carries the component that raised it, an optional suggested action,
an error code and free-form diagnostic data, so that a failed generation run
can be understood from its message alone.
"""

from __future__ import annotations

from typing import Any


class MazeGenerationError(Exception):
    """
    Base exception for maze generation errors with context and suggestions.

    Provides structured error information including:
    - Clear error description
    - Component that raised the error
    - Suggested actions for resolution
    - Optional diagnostic data
    """

    def __init__(
        self,
        message: str,
        component: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.component = component or "mazegen"
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        full_message = f"[{self.component}] {message}"

        if self.suggested_action:
            full_message += f"\nSuggestion: {self.suggested_action}"

        if self.error_code:
            full_message += f"\nError Code: {self.error_code}"

        if self.diagnostic_data:
            full_message += "\nDiagnostic Information:"
            for key, value in self.diagnostic_data.items():
                full_message += f"\n   - {key}: {value}"

        super().__init__(full_message)


class ConfigurationError(MazeGenerationError):
    """Exception raised when a generation parameter is invalid."""

    def __init__(
        self,
        parameter_name: str,
        provided_value: Any,
        expected_type: type | None = None,
        valid_range: tuple | None = None,
        component: str | None = None,
        reason: str | None = None,
    ):
        diagnostic_data = {
            "parameter": parameter_name,
            "provided_value": str(provided_value),
            "provided_type": type(provided_value).__name__,
        }

        if expected_type:
            diagnostic_data["expected_type"] = expected_type.__name__

        if valid_range:
            diagnostic_data["valid_range"] = f"[{valid_range[0]}, {valid_range[1]}]"

        if reason:
            diagnostic_data["reason"] = reason

        suggested_action = _generate_configuration_suggestions(
            parameter_name, provided_value, expected_type, valid_range
        )

        super().__init__(
            message=f"Invalid configuration for parameter '{parameter_name}'",
            component=component,
            suggested_action=suggested_action,
            error_code="INVALID_CONFIGURATION",
            diagnostic_data=diagnostic_data,
        )
        self.parameter_name = parameter_name
        self.provided_value = provided_value


class AllocationError(MazeGenerationError):
    """
    Raised when the cell matrix for a grid cannot be allocated.

    Fatal: the attempt is terminated and no partial grid is kept.
    """

    def __init__(self, size: int, component: str | None = None):
        super().__init__(
            message=f"Failed to allocate a {size}x{size} maze grid",
            component=component or "Grid",
            suggested_action="Free memory or request a smaller maze size",
            error_code="ALLOCATION_FAILURE",
            diagnostic_data={"size": size, "cells": size * size},
        )
        self.size = size


class UnreachableExitError(MazeGenerationError):
    """Raised when validation finds no route from the entrance to the exit."""

    def __init__(
        self,
        entrance: tuple[int, int],
        exit_cell: tuple[int, int],
        seed: int,
        algorithm: str,
        attempt: int | None = None,
    ):
        diagnostic_data: dict[str, Any] = {
            "entrance": entrance,
            "exit": exit_cell,
            "seed": seed,
            "algorithm": algorithm,
        }
        if attempt is not None:
            diagnostic_data["attempt"] = attempt

        super().__init__(
            message="Maze validation failed: exit unreachable",
            component="RegenerationController",
            suggested_action="Regenerate with the next seed or change algorithm",
            error_code="UNREACHABLE_EXIT",
            diagnostic_data=diagnostic_data,
        )
        self.entrance = entrance
        self.exit_cell = exit_cell
        self.seed = seed
        self.algorithm = algorithm


class GenerationAborted(MazeGenerationError):
    """Operator chose to abort after repeated validation failures."""

    def __init__(self, seed: int, algorithm: str, failures: int, attempts: int):
        super().__init__(
            message=f"Generation aborted by operator after {failures} consecutive failures",
            component="RegenerationController",
            error_code="OPERATOR_ABORT",
            diagnostic_data={
                "last_seed": seed,
                "algorithm": algorithm,
                "consecutive_failures": failures,
                "total_attempts": attempts,
            },
        )
        self.seed = seed
        self.algorithm = algorithm
        self.failures = failures
        self.attempts = attempts


def _generate_configuration_suggestions(
    parameter_name: str,
    provided_value: Any,
    expected_type: type | None,
    valid_range: tuple | None,
) -> str:
    """Generate specific suggestions for configuration errors."""

    suggestions = []

    if expected_type and not isinstance(provided_value, expected_type):
        suggestions.append(f"Convert {parameter_name} to {expected_type.__name__}")

    if valid_range and isinstance(provided_value, (int, float)):
        if provided_value < valid_range[0]:
            suggestions.append(f"Increase {parameter_name} to at least {valid_range[0]}")
        elif provided_value > valid_range[1]:
            suggestions.append(f"Decrease {parameter_name} to at most {valid_range[1]}")

    if parameter_name == "size" and isinstance(provided_value, int) and provided_value % 2 == 0:
        suggestions.append("Maze size must be odd")

    return " | ".join(suggestions) if suggestions else f"Check {parameter_name} value and try again"


def validate_parameter_value(
    value: Any,
    parameter_name: str,
    expected_type: type | None = None,
    valid_range: tuple | None = None,
    component: str | None = None,
):
    """Validate parameter value and type."""
    # bool is an int subclass but never a valid size or seed
    if expected_type and (
        not isinstance(value, expected_type) or (expected_type is not bool and isinstance(value, bool))
    ):
        raise ConfigurationError(
            parameter_name=parameter_name,
            provided_value=value,
            expected_type=expected_type,
            component=component,
        )

    if valid_range and isinstance(value, (int, float)):
        if not (valid_range[0] <= value <= valid_range[1]):
            raise ConfigurationError(
                parameter_name=parameter_name,
                provided_value=value,
                valid_range=valid_range,
                component=component,
            )
