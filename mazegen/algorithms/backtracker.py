"""
Recursive Backtracking (depth-first search) maze carving.

Two variants share one traversal:

- ``carve_backtracker`` produces a perfect maze (a spanning tree of the
  logical cells).
- ``carve_backtracker_loops`` additionally knocks through a wall to an
  already carved neighbour with a fixed probability, adding redundant routes.

The traversal keeps an explicit stack of frames instead of recursing, so the
depth is bounded by memory rather than the interpreter's recursion limit. Each
frame holds a cell and an iterator over its remaining shuffled directions,
which reproduces the visiting order of the recursive formulation exactly: a
cell resumes with its next direction only after the whole subtree below the
previous one has been carved.
"""

from __future__ import annotations

import random
from collections.abc import Iterator

from mazegen.core.grid import ENTRANCE, LATTICE_DIRECTIONS, Coordinate, Grid
from mazegen.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_LOOP_PROBABILITY = 0.15


def _shuffled_directions(rng: random.Random) -> Iterator[Coordinate]:
    directions = list(LATTICE_DIRECTIONS)
    rng.shuffle(directions)
    return iter(directions)


def _depth_first_carve(
    grid: Grid,
    rng: random.Random,
    start: Coordinate,
    loop_probability: float,
) -> int:
    """
    Shared depth-first traversal.

    Returns:
        Number of loop edges added (always 0 when loop_probability is 0)
    """
    grid.carve(*start)
    stack: list[tuple[Coordinate, Iterator[Coordinate]]] = [(start, _shuffled_directions(rng))]
    loops_added = 0

    while stack:
        (row, col), directions = stack[-1]
        step = next(directions, None)
        if step is None:
            stack.pop()
            continue

        nr, nc = row + step[0], col + step[1]
        if not grid.in_interior(nr, nc):
            continue

        wr, wc = row + step[0] // 2, col + step[1] // 2
        if grid.is_wall(nr, nc):
            grid.carve(wr, wc)
            grid.carve(nr, nc)
            stack.append(((nr, nc), _shuffled_directions(rng)))
        elif loop_probability > 0 and grid.is_wall(wr, wc) and rng.random() < loop_probability:
            grid.carve(wr, wc)
            loops_added += 1

    return loops_added


def carve_backtracker(grid: Grid, rng: random.Random, start: Coordinate = ENTRANCE) -> None:
    """
    Carve a perfect maze with randomized depth-first search.

    Algorithm:
    1. Carve the start cell
    2. Visit the four directions in a uniformly shuffled order
    3. If the cell two steps away is still a wall, carve the wall between
       and continue from that cell
    4. Backtrack when every direction of a cell has been tried

    Characteristics:
    - Long winding corridors, few junctions
    - Exactly (cells - 1) walls carved

    Args:
        grid: All-wall grid to carve in place
        rng: Random source for this attempt
        start: Logical cell where carving begins
    """
    _depth_first_carve(grid, rng, start, loop_probability=0.0)
    logger.debug(f"Backtracker carved {grid.num_logical_cells} cells")


def carve_backtracker_loops(
    grid: Grid,
    rng: random.Random,
    start: Coordinate = ENTRANCE,
    loop_probability: float = DEFAULT_LOOP_PROBABILITY,
) -> None:
    """
    Depth-first carve with loop injection.

    Identical to :func:`carve_backtracker`, except that when the neighbour in
    the current direction is already carved (reached through another branch)
    and the wall between the two cells is still intact, the wall is carved with
    probability ``loop_probability``. The result is an imperfect maze with
    (cells - 1) tree edges plus zero or more extra edges.

    Args:
        grid: All-wall grid to carve in place
        rng: Random source for this attempt
        start: Logical cell where carving begins
        loop_probability: Chance of opening each eligible extra wall
    """
    loops = _depth_first_carve(grid, rng, start, loop_probability=loop_probability)
    logger.debug(f"Backtracker with loops added {loops} extra passages (p={loop_probability})")
