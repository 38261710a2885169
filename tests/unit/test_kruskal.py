"""
Unit tests for Kruskal's algorithm and its disjoint-set forest.
"""

import random

import pytest

from mazegen.algorithms import DisjointSet, candidate_edges, carve_kruskal, cell_index
from mazegen.core.grid import Grid
from mazegen.validation import count_components, verify_perfect_maze


class TestDisjointSet:
    """Test union-find operations."""

    def test_initial_singletons(self):
        sets = DisjointSet(5)

        assert len(sets) == 5
        assert sets.num_sets == 5
        assert all(sets.find(i) == i for i in range(5))

    def test_union_merges_and_reports(self):
        sets = DisjointSet(4)

        assert sets.union(0, 1)
        assert sets.union(2, 3)
        assert not sets.union(1, 0)
        assert sets.num_sets == 2
        assert sets.connected(0, 1)
        assert not sets.connected(1, 2)

    def test_second_root_attached_under_first(self):
        sets = DisjointSet(3)
        sets.union(2, 1)

        assert sets.parent[1] == 2
        assert sets.find(1) == 2

    def test_find_compresses_paths(self):
        sets = DisjointSet(4)
        sets.union(0, 1)
        sets.union(1, 2)  # root 0 <- root of 2
        sets.union(3, 0)  # chain 2 -> 0 -> 3
        assert sets.parent[0] == 3

        assert sets.find(2) == 3
        assert sets.parent[2] == 3

    def test_transitive_connection(self):
        sets = DisjointSet(6)
        for i in range(5):
            sets.union(i, i + 1)

        assert sets.num_sets == 1
        assert sets.connected(0, 5)


class TestKruskalHelpers:
    """Test lattice-to-set mapping and edge enumeration."""

    @pytest.mark.parametrize(
        ("cell", "expected"),
        [((1, 1), 0), ((1, 3), 1), ((1, 5), 2), ((3, 1), 3), ((5, 5), 8)],
    )
    def test_cell_index(self, cell, expected):
        assert cell_index(cell, cells_per_row=3) == expected

    @pytest.mark.parametrize("size", [5, 7, 9, 21, 51])
    def test_candidate_edge_count(self, size):
        k = (size - 1) // 2

        assert len(candidate_edges(Grid.create(size))) == 2 * k * (k - 1)

    def test_candidate_edges_for_smallest_grid(self):
        edges = candidate_edges(Grid.create(5))

        assert edges == [
            ((1, 1), (1, 3)),
            ((1, 1), (3, 1)),
            ((1, 3), (3, 3)),
            ((3, 1), (3, 3)),
        ]


class TestCarveKruskal:
    """Test the carving routine."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 42])
    def test_single_component(self, seed):
        grid = Grid.create(15)
        sets = carve_kruskal(grid, random.Random(seed))

        assert sets.num_sets == 1
        assert count_components(grid) == 1

    def test_perfect(self):
        grid = Grid.create(21)
        carve_kruskal(grid, random.Random(17))

        assert verify_perfect_maze(grid)["is_perfect"]

    def test_all_endpoints_connected(self):
        grid = Grid.create(11)
        sets = carve_kruskal(grid, random.Random(4))
        cells_per_row = (grid.size - 1) // 2

        first = cell_index((1, 1), cells_per_row)
        assert all(sets.connected(first, cell_index(c, cells_per_row)) for c in grid.logical_cells())
