"""
Randomized Prim's algorithm.

Grows the maze outward from the start cell through a frontier of uncarved
cells that touch the carved region. Produces a spanning tree with shorter,
bushier branches than depth-first carving.
"""

from __future__ import annotations

import random

from mazegen.core.grid import ENTRANCE, Coordinate, Grid
from mazegen.utils.logging import get_logger

logger = get_logger(__name__)


class Frontier:
    """
    Unordered set of frontier cells with O(1) random removal.

    Cells are kept in a list for uniform sampling and mirrored in a set for
    membership checks; removal swaps the chosen cell with the last one.
    """

    def __init__(self):
        self._cells: list[Coordinate] = []
        self._members: set[Coordinate] = set()

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, cell: object) -> bool:
        return cell in self._members

    def add(self, cell: Coordinate) -> bool:
        """Add a cell unless already present. Returns True if it was added."""
        if cell in self._members:
            return False
        self._cells.append(cell)
        self._members.add(cell)
        return True

    def pop_random(self, rng: random.Random) -> Coordinate:
        idx = rng.randrange(len(self._cells))
        cell = self._cells[idx]
        self._cells[idx] = self._cells[-1]
        self._cells.pop()
        self._members.discard(cell)
        return cell


def carve_prim(grid: Grid, rng: random.Random, start: Coordinate = ENTRANCE) -> None:
    """
    Carve a perfect maze with randomized Prim's algorithm.

    Algorithm:
    1. Carve the start cell; its neighbours form the initial frontier
    2. While the frontier is non-empty:
       - Remove a uniformly random frontier cell
       - Pick one of its already carved neighbours uniformly
       - Carve the wall between them and the frontier cell itself
       - Add the cell's uncarved neighbours not yet in the frontier

    Args:
        grid: All-wall grid to carve in place
        rng: Random source for this attempt
        start: Logical cell where growth begins
    """
    frontier = Frontier()
    grid.carve(*start)
    for neighbor in grid.lattice_neighbors(*start):
        frontier.add(neighbor)

    carved = 1
    while frontier:
        current = frontier.pop_random(rng)

        in_maze = [n for n in grid.lattice_neighbors(*current) if grid.is_path(*n)]
        if not in_maze:
            continue

        connect_to = rng.choice(in_maze)
        grid.carve_between(current, connect_to)
        grid.carve(*current)
        carved += 1

        for neighbor in grid.lattice_neighbors(*current):
            if grid.is_wall(*neighbor):
                frontier.add(neighbor)

    logger.debug(f"Prim carved {carved} of {grid.num_logical_cells} cells")
