"""
Grid model shared by every maze construction algorithm.

The grid is an N x N lattice with N odd. Logical maze cells ("rooms") sit at
odd coordinates (1, 3, ..., N-2); a position with exactly one even coordinate
lies between two logical cells and records whether the pair is connected.
Row 0, column 0 and row/column N-1 form the outer border and are never
carved.

Layout for N = 7 (``#`` wall, ``o`` logical cell, ``+`` wall position)::

    # # # # # # #
    # o + o + o #
    # + # + # + #
    # o + o + o #
    # + # + # + #
    # o + o + o #
    # # # # # # #
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import IntEnum
from typing import TYPE_CHECKING

import numpy as np

from mazegen.utils.exceptions import AllocationError, ConfigurationError, validate_parameter_value

if TYPE_CHECKING:
    from numpy.typing import NDArray

Coordinate = tuple[int, int]

MIN_SIZE = 5
MAX_SIZE = 51
DEFAULT_SIZE = 21

ENTRANCE: Coordinate = (1, 1)

# Two-step moves between logical cells: up, down, left, right
LATTICE_DIRECTIONS: tuple[Coordinate, ...] = ((-2, 0), (2, 0), (0, -2), (0, 2))


class CellState(IntEnum):
    """State of one lattice position. WALL = 1 and PATH = 0 match the binary wall layout."""

    PATH = 0
    WALL = 1
    EXIT = 2
    BONUS = 3


class Grid:
    """Square cell-state matrix for one generation attempt."""

    def __init__(self, size: int, cells: NDArray[np.int8]):
        """
        Wrap an existing cell matrix. Use :meth:`create` for a fresh all-wall grid.

        Args:
            size: Grid dimension N
            cells: N x N int8 array of CellState values
        """
        if cells.shape != (size, size):
            raise ConfigurationError(
                parameter_name="cells",
                provided_value=cells.shape,
                component="Grid",
                reason=f"expected shape ({size}, {size})",
            )
        self._size = size
        self._cells = cells

    @classmethod
    def create(cls, size: int) -> Grid:
        """
        Allocate an N x N grid with every position set to WALL.

        Args:
            size: Odd dimension in [MIN_SIZE, MAX_SIZE]

        Raises:
            ConfigurationError: If size is not an odd integer in range
            AllocationError: If the cell matrix cannot be allocated
        """
        validate_parameter_value(size, "size", expected_type=int, valid_range=(MIN_SIZE, MAX_SIZE), component="Grid")
        if size % 2 == 0:
            raise ConfigurationError(parameter_name="size", provided_value=size, component="Grid", reason="must be odd")

        try:
            cells = np.full((size, size), CellState.WALL, dtype=np.int8)
        except MemoryError:
            raise AllocationError(size) from None

        return cls(size, cells)

    @property
    def size(self) -> int:
        """Grid dimension N."""
        return self._size

    @property
    def cells(self) -> NDArray[np.int8]:
        """Read-only view of the raw cell matrix."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def num_logical_cells(self) -> int:
        half = (self._size - 1) // 2
        return half * half

    def get(self, row: int, col: int) -> CellState:
        return CellState(int(self._cells[row, col]))

    def set(self, row: int, col: int, state: CellState) -> None:
        self._cells[row, col] = state

    def is_wall(self, row: int, col: int) -> bool:
        return self._cells[row, col] == CellState.WALL

    def is_path(self, row: int, col: int) -> bool:
        return self._cells[row, col] == CellState.PATH

    def carve(self, row: int, col: int) -> None:
        """Turn a position into PATH."""
        self._cells[row, col] = CellState.PATH

    def carve_between(self, a: Coordinate, b: Coordinate) -> None:
        """Carve the wall position between two lattice-adjacent logical cells."""
        row, col = wall_between(a, b)
        self._cells[row, col] = CellState.PATH

    def in_interior(self, row: int, col: int) -> bool:
        """True for positions strictly inside the outer border."""
        return 0 < row < self._size - 1 and 0 < col < self._size - 1

    def lattice_neighbors(self, row: int, col: int) -> Iterator[Coordinate]:
        """
        Yield the logical cells two steps away from (row, col), in the fixed
        order up, down, left, right, skipping those outside the interior.
        """
        for dr, dc in LATTICE_DIRECTIONS:
            nr, nc = row + dr, col + dc
            if self.in_interior(nr, nc):
                yield nr, nc

    def logical_cells(self) -> list[Coordinate]:
        """All logical cells in row-major order."""
        return [(r, c) for r in range(1, self._size - 1, 2) for c in range(1, self._size - 1, 2)]

    def wall_positions(self) -> list[Coordinate]:
        """All interior wall positions (between two logical cells) in row-major order."""
        return [
            (r, c)
            for r in range(1, self._size - 1)
            for c in range(1, self._size - 1)
            if is_wall_position(r, c)
        ]

    def copy(self) -> Grid:
        return Grid(self._size, self._cells.copy())

    def to_numpy_array(self) -> NDArray[np.int32]:
        """
        Convert the grid to the binary layout used for analysis.

        Returns:
            Numpy array where 1 = wall, 0 = passage (PATH, EXIT and BONUS)
        """
        return (self._cells == CellState.WALL).astype(np.int32)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._size == other._size and bool(np.array_equal(self._cells, other._cells))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        carved = int(np.count_nonzero(self._cells != CellState.WALL))
        return f"Grid(size={self._size}, carved={carved})"


def is_logical_cell(row: int, col: int) -> bool:
    return row % 2 == 1 and col % 2 == 1


def is_wall_position(row: int, col: int) -> bool:
    return (row + col) % 2 == 1


def wall_between(a: Coordinate, b: Coordinate) -> Coordinate:
    """Wall position joining two logical cells that are two steps apart."""
    return (a[0] + b[0]) // 2, (a[1] + b[1]) // 2
