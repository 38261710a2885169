#!/usr/bin/env python3
"""
Unit tests for mazegen/utils/exceptions.py

Tests the exception hierarchy including:
- MazeGenerationError (base exception)
- ConfigurationError (invalid parameters)
- AllocationError (grid allocation failures)
- UnreachableExitError (validation failures)
- GenerationAborted (operator abort)
- Validation utilities
"""

import pytest

from mazegen.utils.exceptions import (
    AllocationError,
    ConfigurationError,
    GenerationAborted,
    MazeGenerationError,
    UnreachableExitError,
    validate_parameter_value,
)

# =============================================================================
# Test MazeGenerationError (Base Exception)
# =============================================================================


@pytest.mark.unit
def test_base_error_basic():
    """Test basic MazeGenerationError creation."""
    error = MazeGenerationError("Test error message", component="TestComponent")

    assert "[TestComponent] Test error message" in str(error)
    assert error.component == "TestComponent"


@pytest.mark.unit
def test_base_error_default_component():
    error = MazeGenerationError("Something failed")

    assert str(error) == "[mazegen] Something failed"
    assert error.diagnostic_data == {}


@pytest.mark.unit
def test_base_error_full_message():
    """Test that suggestion, code and diagnostics all appear in the message."""
    error = MazeGenerationError(
        "Error occurred",
        component="Grid",
        suggested_action="Use a smaller size",
        error_code="E42",
        diagnostic_data={"size": 51},
    )

    error_str = str(error)
    assert "Suggestion: Use a smaller size" in error_str
    assert "Error Code: E42" in error_str
    assert "Diagnostic Information:" in error_str
    assert "- size: 51" in error_str


@pytest.mark.unit
@pytest.mark.parametrize(
    "error",
    [
        ConfigurationError("size", 4),
        AllocationError(21),
        UnreachableExitError((1, 1), (19, 19), 7, "prim"),
        GenerationAborted(7, "prim", 5, 5),
    ],
)
def test_subclasses_share_base(error):
    assert isinstance(error, MazeGenerationError)


# =============================================================================
# Test ConfigurationError
# =============================================================================


@pytest.mark.unit
def test_configuration_error_attributes():
    error = ConfigurationError("size", 4, expected_type=int, valid_range=(5, 51), reason="too small")

    assert error.parameter_name == "size"
    assert error.provided_value == 4
    assert error.error_code == "INVALID_CONFIGURATION"
    assert error.diagnostic_data["valid_range"] == "[5, 51]"
    assert error.diagnostic_data["reason"] == "too small"
    assert "Increase size to at least 5" in str(error)


@pytest.mark.unit
def test_configuration_error_odd_size_suggestion():
    error = ConfigurationError("size", 20)

    assert "Maze size must be odd" in error.suggested_action


@pytest.mark.unit
def test_configuration_error_type_suggestion():
    error = ConfigurationError("seed", "abc", expected_type=int)

    assert "Convert seed to int" in error.suggested_action
    assert error.diagnostic_data["provided_type"] == "str"


@pytest.mark.unit
def test_configuration_error_generic_suggestion():
    error = ConfigurationError("algorithm", "eller")

    assert error.suggested_action == "Check algorithm value and try again"


# =============================================================================
# Test Generation Errors
# =============================================================================


@pytest.mark.unit
def test_allocation_error():
    error = AllocationError(51)

    assert error.size == 51
    assert error.component == "Grid"
    assert error.diagnostic_data["cells"] == 51 * 51
    assert "51x51" in str(error)


@pytest.mark.unit
def test_unreachable_exit_error():
    error = UnreachableExitError((1, 1), (5, 5), seed=9, algorithm="wilson", attempt=3)

    assert error.error_code == "UNREACHABLE_EXIT"
    assert error.exit_cell == (5, 5)
    assert error.seed == 9
    assert error.diagnostic_data["attempt"] == 3


@pytest.mark.unit
def test_generation_aborted():
    error = GenerationAborted(seed=12, algorithm="kruskal", failures=5, attempts=15)

    assert error.error_code == "OPERATOR_ABORT"
    assert error.attempts == 15
    assert "after 5 consecutive failures" in str(error)
    assert error.diagnostic_data["total_attempts"] == 15


# =============================================================================
# Test Validation Utilities
# =============================================================================


@pytest.mark.unit
def test_validate_parameter_value_passes():
    validate_parameter_value(21, "size", expected_type=int, valid_range=(5, 51))


@pytest.mark.unit
@pytest.mark.parametrize("value", [21.0, "21", None, True])
def test_validate_parameter_value_type(value):
    with pytest.raises(ConfigurationError):
        validate_parameter_value(value, "size", expected_type=int)


@pytest.mark.unit
def test_validate_parameter_value_accepts_bool_when_expected():
    validate_parameter_value(True, "place_bonuses", expected_type=bool)


@pytest.mark.unit
@pytest.mark.parametrize("value", [4, 52])
def test_validate_parameter_value_range(value):
    with pytest.raises(ConfigurationError) as exc_info:
        validate_parameter_value(value, "size", valid_range=(5, 51), component="Grid")

    assert exc_info.value.component == "Grid"
