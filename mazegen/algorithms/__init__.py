"""
Maze construction algorithms.

Five interchangeable strategies carve an all-wall :class:`~mazegen.core.Grid`
in place:

- Recursive Backtracking (DFS): long winding paths, perfect maze
- Recursive Backtracking with loops: DFS plus random extra passages
- Prim's: frontier growth, bushy branching, perfect maze
- Kruskal's: random edge union, perfect maze
- Wilson's: loop-erased random walks, uniform spanning tree

Every strategy guarantees the entrance is carved. None guarantees the exit
placed afterwards is reachable, so a generated grid is always validated.

Reference: Jamis Buck, "Mazes for Programmers" (2015)
"""

from __future__ import annotations

import random
from enum import Enum

from mazegen.core.grid import ENTRANCE, Coordinate, Grid

from .backtracker import DEFAULT_LOOP_PROBABILITY, carve_backtracker, carve_backtracker_loops
from .kruskal import DisjointSet, candidate_edges, carve_kruskal, cell_index
from .prim import Frontier, carve_prim
from .wilson import LoopErasedWalk, carve_wilson, erase_loops


class MazeAlgorithm(Enum):
    """Available maze construction algorithms."""

    BACKTRACKER = "backtracker"
    BACKTRACKER_LOOP = "backtracker_loop"
    PRIM = "prim"
    KRUSKAL = "kruskal"
    WILSON = "wilson"

    @property
    def is_perfect(self) -> bool:
        """Whether the algorithm always produces a spanning tree."""
        return self is not MazeAlgorithm.BACKTRACKER_LOOP

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: MazeAlgorithm | str) -> MazeAlgorithm:
        """Accept an enum member, its value or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown algorithm: {value!r} (expected one of {valid})")


_LABELS = {
    MazeAlgorithm.BACKTRACKER: "Recursive Backtracker",
    MazeAlgorithm.BACKTRACKER_LOOP: "Recursive Backtracker (loops)",
    MazeAlgorithm.PRIM: "Prim's",
    MazeAlgorithm.KRUSKAL: "Kruskal's",
    MazeAlgorithm.WILSON: "Wilson's",
}


def carve(
    grid: Grid,
    algorithm: MazeAlgorithm,
    rng: random.Random,
    start: Coordinate = ENTRANCE,
    loop_probability: float = DEFAULT_LOOP_PROBABILITY,
) -> None:
    """
    Carve ``grid`` in place with the chosen algorithm.

    This is the single dispatch point from an algorithm to its carving
    function. The start cell is carved afterwards regardless of algorithm.

    Args:
        grid: Fresh all-wall grid
        algorithm: Strategy to apply
        rng: Random source for this attempt
        start: Logical cell where carving begins
        loop_probability: Extra-passage chance, used by BACKTRACKER_LOOP only
    """
    if algorithm == MazeAlgorithm.BACKTRACKER:
        carve_backtracker(grid, rng, start)
    elif algorithm == MazeAlgorithm.BACKTRACKER_LOOP:
        carve_backtracker_loops(grid, rng, start, loop_probability=loop_probability)
    elif algorithm == MazeAlgorithm.PRIM:
        carve_prim(grid, rng, start)
    elif algorithm == MazeAlgorithm.KRUSKAL:
        carve_kruskal(grid, rng, start)
    elif algorithm == MazeAlgorithm.WILSON:
        carve_wilson(grid, rng, start)
    else:
        raise ValueError(f"Unknown algorithm: {algorithm}")

    grid.carve(*start)


__all__ = [
    "DEFAULT_LOOP_PROBABILITY",
    "DisjointSet",
    "Frontier",
    "LoopErasedWalk",
    "MazeAlgorithm",
    "candidate_edges",
    "carve",
    "carve_backtracker",
    "carve_backtracker_loops",
    "carve_kruskal",
    "carve_prim",
    "carve_wilson",
    "cell_index",
    "erase_loops",
]
