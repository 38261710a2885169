"""
Post-carve feature placement: the exit and bonus cells.

The exit is placed as close as possible to the far corner of the maze. Bonus
cells are scattered on random path cells away from the entrance and exit.
"""

from __future__ import annotations

import random

from mazegen.core.grid import ENTRANCE, CellState, Coordinate, Grid
from mazegen.utils.logging import get_logger

logger = get_logger(__name__)

# Orthogonal neighbours tried around the far corner: up, left, down, right
EXIT_NEIGHBOR_ORDER: tuple[Coordinate, ...] = ((-1, 0), (0, -1), (1, 0), (0, 1))

# Last-resort exits near the entrance, tried in order
FALLBACK_EXITS: tuple[Coordinate, ...] = ((1, 3), (3, 1), ENTRANCE)

BONUS_ATTEMPTS_MULTIPLIER = 2


def find_exit(grid: Grid) -> Coordinate:
    """
    Choose the exit coordinate without modifying the grid.

    Search order:
    1. The far-corner logical cell (N-2, N-2)
    2. Its orthogonal neighbours, up, left, down, right
    3. A reverse row-major scan from the far corner back toward the entrance
    4. The fixed near-entrance fallbacks (1, 3), (3, 1), (1, 1)
    """
    corner = grid.size - 2
    if grid.is_path(corner, corner):
        return corner, corner

    for dr, dc in EXIT_NEIGHBOR_ORDER:
        row, col = corner + dr, corner + dc
        if grid.in_interior(row, col) and grid.is_path(row, col):
            return row, col

    for row in range(corner, 0, -1):
        for col in range(corner, 0, -1):
            if grid.is_path(row, col):
                logger.debug(f"Exit found by reverse scan at ({row}, {col})")
                return row, col

    logger.warning("Could not find a path cell for the exit, placing it near the entrance")
    for row, col in FALLBACK_EXITS[:-1]:
        if not grid.is_wall(row, col):
            return row, col
    return FALLBACK_EXITS[-1]


def place_exit(grid: Grid) -> Coordinate:
    """
    Place the exit and mark its cell EXIT.

    Returns:
        The exit coordinate
    """
    exit_cell = find_exit(grid)
    grid.set(*exit_cell, CellState.EXIT)
    return exit_cell


def default_bonus_count(size: int) -> int:
    return max(1, size // 2)


def place_bonuses(
    grid: Grid,
    rng: random.Random,
    exit_cell: Coordinate,
    count: int | None = None,
    entrance: Coordinate = ENTRANCE,
) -> int:
    """
    Scatter BONUS cells on random interior PATH cells.

    The entrance and the exit are never used. Sampling stops after
    ``size * size * BONUS_ATTEMPTS_MULTIPLIER`` draws so that sparse grids
    cannot loop forever.

    Args:
        grid: Carved grid with the exit already placed
        rng: Random source for this attempt
        exit_cell: Exit coordinate to avoid
        count: Number of bonuses wanted (default ``size // 2``, at least 1)
        entrance: Entrance coordinate to avoid

    Returns:
        Number of bonus cells actually placed
    """
    wanted = default_bonus_count(grid.size) if count is None else count
    max_attempts = grid.size * grid.size * BONUS_ATTEMPTS_MULTIPLIER

    placed = 0
    attempts = 0
    while placed < wanted and attempts < max_attempts:
        row = 1 + rng.randrange(grid.size - 2)
        col = 1 + rng.randrange(grid.size - 2)
        if grid.is_path(row, col) and (row, col) not in (exit_cell, entrance):
            grid.set(row, col, CellState.BONUS)
            placed += 1
        attempts += 1

    if placed < wanted:
        logger.warning(f"Could only place {placed} of {wanted} bonus cells after {max_attempts} attempts")
    return placed
