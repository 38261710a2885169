"""
Maze validation and analysis.

``is_exit_reachable`` is the gate every generated grid must pass before it is
handed out. The remaining helpers measure maze structure (carved walls,
connected components, perfect-maze check) for inspecting generated mazes.
"""

from __future__ import annotations

from collections import deque

import numpy as np
from scipy import ndimage

from mazegen.core.grid import ENTRANCE, CellState, Coordinate, Grid

# 4-connectivity structuring element for component labelling
_FOUR_CONNECTED = np.array([[0, 1, 0], [1, 1, 1], [0, 1, 0]], dtype=bool)

_STEPS: tuple[Coordinate, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def is_exit_reachable(grid: Grid, exit_cell: Coordinate, entrance: Coordinate = ENTRANCE) -> bool:
    """
    Breadth-first search from the entrance over non-wall cells.

    Never modifies the grid. Runs in O(N^2) time and space.

    Args:
        grid: Carved grid with the exit placed
        exit_cell: Target coordinate
        entrance: Start coordinate

    Returns:
        True if the exit can be reached from the entrance
    """
    entrance = (int(entrance[0]), int(entrance[1]))
    exit_cell = (int(exit_cell[0]), int(exit_cell[1]))
    if entrance == exit_cell:
        return True

    cells = grid.cells
    size = grid.size
    if cells[entrance] == CellState.WALL:
        return False

    visited = np.zeros((size, size), dtype=bool)
    visited[entrance] = True
    queue: deque[Coordinate] = deque([entrance])

    while queue:
        row, col = queue.popleft()
        if (row, col) == exit_cell:
            return True

        for dr, dc in _STEPS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < size and 0 <= nc < size and not visited[nr, nc] and cells[nr, nc] != CellState.WALL:
                visited[nr, nc] = True
                queue.append((nr, nc))

    return False


def count_carved_walls(grid: Grid) -> int:
    """Number of wall positions between logical cells that are open."""
    return sum(1 for row, col in grid.wall_positions() if not grid.is_wall(row, col))


def count_carved_cells(grid: Grid) -> int:
    """Number of logical cells that are open."""
    return sum(1 for row, col in grid.logical_cells() if not grid.is_wall(row, col))


def count_components(grid: Grid) -> int:
    """Number of 4-connected regions of non-wall cells."""
    passages = grid.to_numpy_array() == 0
    _, num_components = ndimage.label(passages, structure=_FOUR_CONNECTED)
    return int(num_components)


def verify_perfect_maze(grid: Grid) -> dict:
    """
    Verify that a maze is perfect (fully connected, no loops).

    A perfect maze must satisfy:
    1. Coverage: every logical cell is carved
    2. Connectivity: all carved cells form one region
    3. Acyclicity: exactly (n-1) carved walls for n logical cells

    Args:
        grid: Maze grid to verify

    Returns:
        Dictionary with verification results including:
        - is_perfect: Overall validity
        - is_connected: Single connected region covering every logical cell
        - is_no_loops: Acyclicity check
        - logical_cells: Number of logical cells
        - carved_cells: Number of carved logical cells
        - components: Number of connected regions
        - carved_walls: Number of open wall positions
        - expected_walls: Expected open walls for a perfect maze
    """
    logical_cells = grid.num_logical_cells
    carved_cells = count_carved_cells(grid)
    components = count_components(grid)
    carved_walls = count_carved_walls(grid)
    expected_walls = logical_cells - 1

    is_connected = components == 1 and carved_cells == logical_cells
    is_no_loops = carved_walls == expected_walls

    return {
        "is_perfect": is_connected and is_no_loops,
        "is_connected": is_connected,
        "is_no_loops": is_no_loops,
        "logical_cells": logical_cells,
        "carved_cells": carved_cells,
        "components": components,
        "carved_walls": carved_walls,
        "expected_walls": expected_walls,
    }
