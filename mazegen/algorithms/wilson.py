"""
Wilson's algorithm using loop-erased random walks.

Produces a uniform spanning tree: every perfect maze on the lattice is equally
likely. The loop erasure is what makes the distribution uniform, it cannot be
skipped.
"""

from __future__ import annotations

import random
from collections.abc import Hashable, Iterable
from typing import Generic, TypeVar

from mazegen.core.grid import ENTRANCE, Coordinate, Grid
from mazegen.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=Hashable)


class LoopErasedWalk(Generic[T]):
    """
    Path of a random walk with cycles removed as they form.

    ``index`` maps each cell on the current path to its position, so a revisit
    is detected in O(1) and the loop is erased by truncating the path back to
    the first occurrence. Only cells touched by this walk are ever stored.
    """

    def __init__(self, start: T | None = None):
        self.path: list[T] = []
        self.index: dict[T, int] = {}
        if start is not None:
            self.step(start)

    def __len__(self) -> int:
        return len(self.path)

    def __contains__(self, cell: object) -> bool:
        return cell in self.index

    def step(self, cell: T) -> None:
        """Move the walk to ``cell``, erasing the loop if it was already on the path."""
        first = self.index.get(cell)
        if first is not None:
            for erased in self.path[first + 1 :]:
                del self.index[erased]
            del self.path[first + 1 :]
            return
        self.index[cell] = len(self.path)
        self.path.append(cell)

    @property
    def last(self) -> T:
        return self.path[-1]


def erase_loops(sequence: Iterable[T]) -> list[T]:
    """
    Apply loop erasure to a complete walk sequence.

    Example:
        >>> erase_loops(["A", "B", "C", "B", "D"])
        ['A', 'B', 'D']
    """
    walk: LoopErasedWalk[T] = LoopErasedWalk()
    for cell in sequence:
        walk.step(cell)
    return walk.path


def _random_uncarved_cell(grid: Grid, rng: random.Random) -> Coordinate:
    """Uniformly sample an uncarved logical cell by rejection."""
    cells_per_row = (grid.size - 1) // 2
    while True:
        row = 1 + 2 * rng.randrange(cells_per_row)
        col = 1 + 2 * rng.randrange(cells_per_row)
        if grid.is_wall(row, col):
            return row, col


def carve_wilson(grid: Grid, rng: random.Random, start: Coordinate = ENTRANCE) -> None:
    """
    Carve a uniform spanning tree with Wilson's algorithm.

    Algorithm:
    1. Only the start cell belongs to the maze
    2. While uncarved cells remain:
       - Start a walk at a uniformly random uncarved cell
       - Step to a uniformly random lattice neighbour until a carved cell is
         reached, erasing any loop the walk closes on itself
       - Carve every cell on the erased path, the walls between consecutive
         cells and the wall to the maze cell that ended the walk

    Characteristics:
    - Unbiased: all perfect mazes equally likely
    - More dead ends and junctions than depth-first carving
    - Slow start while the maze is small, fast finish

    Args:
        grid: All-wall grid to carve in place
        rng: Random source for this attempt
        start: Initial maze cell
    """
    grid.carve(*start)
    total_cells = grid.num_logical_cells
    visited_cells = 1
    walks = 0

    while visited_cells < total_cells:
        walk: LoopErasedWalk[Coordinate] = LoopErasedWalk(_random_uncarved_cell(grid, rng))
        current = walk.last

        while True:
            current = rng.choice(list(grid.lattice_neighbors(*current)))
            if grid.is_path(*current):
                break
            walk.step(current)

        previous: Coordinate | None = None
        for cell in walk.path:
            grid.carve(*cell)
            visited_cells += 1
            if previous is not None:
                grid.carve_between(previous, cell)
            previous = cell
        grid.carve_between(walk.last, current)
        walks += 1

    logger.debug(f"Wilson completed {walks} loop-erased walks over {total_cells} cells")
