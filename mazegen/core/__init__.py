"""Core grid model."""

from __future__ import annotations

from .grid import (
    DEFAULT_SIZE,
    ENTRANCE,
    LATTICE_DIRECTIONS,
    MAX_SIZE,
    MIN_SIZE,
    CellState,
    Coordinate,
    Grid,
    is_logical_cell,
    is_wall_position,
    wall_between,
)

__all__ = [
    "DEFAULT_SIZE",
    "ENTRANCE",
    "LATTICE_DIRECTIONS",
    "MAX_SIZE",
    "MIN_SIZE",
    "CellState",
    "Coordinate",
    "Grid",
    "is_logical_cell",
    "is_wall_position",
    "wall_between",
]
