"""
Randomized Kruskal's algorithm.

Treats every wall between two logical cells as a candidate edge, shuffles the
edges and removes a wall whenever it joins two regions that are not yet
connected. Connectivity is tracked with a disjoint-set structure owned by a
single invocation.
"""

from __future__ import annotations

import random

from mazegen.core.grid import ENTRANCE, Coordinate, Grid
from mazegen.utils.logging import get_logger

logger = get_logger(__name__)

Edge = tuple[Coordinate, Coordinate]


class DisjointSet:
    """
    Disjoint-set forest over integer elements ``0 .. n-1``.

    ``find`` compresses paths; ``union`` attaches the second root under the
    first.
    """

    def __init__(self, n: int):
        self.parent = list(range(n))
        self.num_sets = n

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, i: int, j: int) -> bool:
        """
        Merge the sets containing i and j.

        Returns:
            True if two distinct sets were merged, False if already joined
        """
        root_i = self.find(i)
        root_j = self.find(j)
        if root_i == root_j:
            return False
        self.parent[root_j] = root_i
        self.num_sets -= 1
        return True

    def connected(self, i: int, j: int) -> bool:
        return self.find(i) == self.find(j)


def cell_index(cell: Coordinate, cells_per_row: int) -> int:
    """Map a logical cell (odd coordinates) to its disjoint-set element."""
    return (cell[0] // 2) * cells_per_row + (cell[1] // 2)


def candidate_edges(grid: Grid) -> list[Edge]:
    """Every right and below edge between logically adjacent cells, in row-major order."""
    edges: list[Edge] = []
    for row, col in grid.logical_cells():
        if grid.in_interior(row, col + 2):
            edges.append(((row, col), (row, col + 2)))
        if grid.in_interior(row + 2, col):
            edges.append(((row, col), (row + 2, col)))
    return edges


def carve_kruskal(grid: Grid, rng: random.Random, start: Coordinate = ENTRANCE) -> DisjointSet:
    """
    Carve a perfect maze with randomized Kruskal's algorithm.

    Algorithm:
    1. One singleton set per logical cell
    2. Enumerate every candidate wall edge and shuffle (Fisher-Yates)
    3. For each edge whose endpoints lie in different sets, union the sets
       and carve the wall and both endpoints
    4. Stop once (cells - 1) edges are carved

    Args:
        grid: All-wall grid to carve in place
        rng: Random source for this attempt
        start: Cell guaranteed to be carved even on a single-cell lattice

    Returns:
        The disjoint-set forest after carving, for inspection
    """
    cells_per_row = (grid.size - 1) // 2
    total_cells = grid.num_logical_cells
    sets = DisjointSet(total_cells)

    edges = candidate_edges(grid)
    rng.shuffle(edges)

    grid.carve(*start)

    edges_added = 0
    for a, b in edges:
        if edges_added >= total_cells - 1:
            break
        if sets.union(cell_index(a, cells_per_row), cell_index(b, cells_per_row)):
            grid.carve_between(a, b)
            grid.carve(*a)
            grid.carve(*b)
            edges_added += 1

    logger.debug(f"Kruskal carved {edges_added} of {len(edges)} candidate walls")
    return sets
