"""
Pytest configuration and shared fixtures for the mazegen test suite.
"""

from __future__ import annotations

import random

import pytest

import numpy as np

from mazegen.core.grid import CellState, Grid

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (slower, cross-component)")
    config.addinivalue_line("markers", "slow: Slow tests (may take >10 seconds)")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)

        if "all_sizes" in item.name or "slow" in item.name:
            item.add_marker(pytest.mark.slow)


# =============================================================================
# Fixtures
# =============================================================================

_CHAR_STATES = {
    "#": CellState.WALL,
    " ": CellState.PATH,
    "E": CellState.EXIT,
    ".": CellState.BONUS,
}


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(12345)


@pytest.fixture
def make_grid():
    """
    Build a grid from text rows: ``#`` wall, space path, ``E`` exit, ``.`` bonus.
    """

    def _make(rows: list[str]) -> Grid:
        size = len(rows)
        cells = np.array([[_CHAR_STATES[ch] for ch in row] for row in rows], dtype=np.int8)
        return Grid(size, cells)

    return _make
